"""
Core Application - Infrastructure & Base Classes

This app contains infrastructure code shared by the domain apps:

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Model Mixins (import from core.model_mixins):
    - UUIDPrimaryKeyMixin: UUID as primary key

Services (import from core.services):
    - BaseService: Base class for service layer (logger, atomic)

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error codes
    - InvalidArgumentError, PermissionDeniedError, NotFoundError,
      ConflictError, ResourceExhaustedError, InternalError

Serializer mixins (core.serializer_mixins):
    - TimestampMixin: created_at/updated_at in model serializer output
    - RequestInputMixin: Parse request payloads, raising InvalidArgumentError

Exception handling (core.exception_handler):
    - api_exception_handler: DRF handler rendering application errors

Protocols (import from core.protocols):
    - ObjectStorage: Object store interface (write grants, refs, deletion)

Views (core.views):
    - health_check: Database connectivity probe

Validators (core.validators):
    - is_valid_coordinate: Latitude/longitude range check
"""
