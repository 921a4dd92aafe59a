"""
Serializer mixins providing reusable functionality for DRF serializers.

Available Mixins:
    TimestampMixin: Auto-include timestamp fields in serializer output
    RequestInputMixin: Parse request payloads into validated data or raise
                       InvalidArgumentError with the field errors

Usage:
    from core.serializer_mixins import RequestInputMixin

    class CreateRecordSerializer(RequestInputMixin, serializers.Serializer):
        description = serializers.CharField()

    data = CreateRecordSerializer.parse(request.data)

Note:
    - These are generic infrastructure patterns, not domain-specific
    - For model mixins, see core.model_mixins
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from typing import Any


class TimestampMixin:
    """
    Add timestamp fields to serializer output.

    Includes created_at and updated_at for models inheriting from
    core.models.BaseModel. Declared field lists need not repeat them.
    """

    def get_field_names(self, declared_fields: Any, info: Any) -> list[str]:
        fields = super().get_field_names(declared_fields, info)  # type: ignore[misc]
        model = self.Meta.model  # type: ignore[attr-defined]
        for name in ("created_at", "updated_at"):
            if hasattr(model, name) and name not in fields:
                fields = list(fields) + [name]
        return fields


class RequestInputMixin:
    """
    Validate request input the same way everywhere.

    Field errors are raised as InvalidArgumentError so that every error
    response shares the {"error", "error_code", "details"} shape.
    """

    @classmethod
    def parse(cls, data: Any, **kwargs: Any) -> dict[str, Any]:
        """
        Validate data and return the validated payload.

        Raises:
            InvalidArgumentError: With serializer errors in details
        """
        serializer = cls(data=data, **kwargs)  # type: ignore[call-arg]
        if not serializer.is_valid():
            raise InvalidArgumentError(
                "Invalid request payload",
                error_code="VALIDATION_ERROR",
                details={"fields": serializer.errors},
            )
        return serializer.validated_data
