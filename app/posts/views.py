"""
API views for records, asks and replies.

Each entity kind gets a viewset with create, retrieve, partial update and
delete. Records and asks add a map action; replies are listed per target.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.exceptions import InvalidArgumentError
from posts.filters import ReplyFilter
from posts.geo import BoundingBox, GeoQuery
from posts.models import Reply
from posts.serializers import (
    AskCreateSerializer,
    AskMapSerializer,
    AskSerializer,
    AskUpdateSerializer,
    EntityUpdateSerializer,
    MapQuerySerializer,
    RecordCreateSerializer,
    RecordMapImageSerializer,
    RecordSerializer,
    RecordUpdateSerializer,
    ReplyCreateSerializer,
    ReplySerializer,
    ReplyUpdateSerializer,
    to_specs,
)
from posts.services import AskService, RecordService, ReplyService

MAP_PARAMETERS = [
    OpenApiParameter(name, float, required=True)
    for name in ("min_lat", "max_lat", "min_lng", "max_lng")
]


class ContentEntityViewSet(viewsets.GenericViewSet):
    """
    Shared create/retrieve/partial_update/destroy for entity kinds.

    Subclasses set the serializers and the service class.
    """

    permission_classes = [IsAuthenticated]
    service_class = None
    create_serializer_class = None
    update_serializer_class = None
    lookup_url_kwarg = "entity_id"
    lookup_value_regex = "[0-9a-fA-F-]{36}"

    def get_service(self):
        return self.service_class()

    def get_queryset(self):
        return self.serializer_class.Meta.model.objects.prefetch_related("media")

    def create_fields(self, data: dict) -> dict:
        """Model field values for a new entity from validated input."""
        return {key: value for key, value in data.items() if key != "images"}

    def render(self, entity, status_code=status.HTTP_200_OK) -> Response:
        entity = self.get_service().get(entity.id)
        return Response(self.get_serializer(entity).data, status=status_code)

    def create(self, request):
        data = self.create_serializer_class.parse(request.data)
        entity = self.get_service().create(
            request.user,
            self.create_fields(data),
            to_specs(data.get("images", [])),
        )
        return self.render(entity, status.HTTP_201_CREATED)

    def retrieve(self, request, entity_id=None):
        entity = self.get_service().get(entity_id)
        return Response(self.get_serializer(entity).data)

    def partial_update(self, request, entity_id=None):
        data = self.update_serializer_class.parse(request.data)
        fields, target, expected_updated_at = EntityUpdateSerializer.split(data)
        entity = self.get_service().update(
            request.user,
            entity_id,
            fields,
            target=target,
            expected_updated_at=expected_updated_at,
        )
        return self.render(entity)

    def destroy(self, request, entity_id=None):
        self.get_service().delete(request.user, entity_id)
        return Response({"success": True}, status=status.HTTP_200_OK)

    def owned_response(self, request, key: str) -> Response:
        entities = self.get_service().list_owned(request.user)
        return Response({key: self.get_serializer(entities, many=True).data})

    def parse_bounds(self, request) -> BoundingBox:
        return BoundingBox(**MapQuerySerializer.parse(request.query_params))


@extend_schema(tags=["Posts - Records"])
class RecordViewSet(ContentEntityViewSet):
    serializer_class = RecordSerializer
    create_serializer_class = RecordCreateSerializer
    update_serializer_class = RecordUpdateSerializer
    service_class = RecordService

    @extend_schema(
        summary="Create record",
        description="Create a record from uploaded images. Every image needs a location.",
        request=RecordCreateSerializer,
        responses={201: RecordSerializer, 403: OpenApiResponse(description="Image not owned")},
    )
    def create(self, request):
        return super().create(request)

    @extend_schema(
        summary="Edit record",
        request=RecordUpdateSerializer,
        responses={200: RecordSerializer, 409: OpenApiResponse(description="Stale update")},
    )
    def partial_update(self, request, entity_id=None):
        return super().partial_update(request, entity_id)

    @extend_schema(
        summary="My records",
        description="Records owned by the caller, newest first.",
        responses={200: RecordSerializer(many=True)},
    )
    @action(detail=False, methods=["get"], url_path="mine")
    def mine(self, request):
        return self.owned_response(request, "records")

    @extend_schema(
        summary="Record images on the map",
        parameters=MAP_PARAMETERS,
        responses={200: RecordMapImageSerializer(many=True)},
    )
    @action(detail=False, methods=["get"], url_path="map")
    def map(self, request):
        images = GeoQuery().record_images_in_bounds(self.parse_bounds(request))
        return Response({"images": RecordMapImageSerializer(images, many=True).data})


@extend_schema(tags=["Posts - Asks"])
class AskViewSet(ContentEntityViewSet):
    serializer_class = AskSerializer
    create_serializer_class = AskCreateSerializer
    update_serializer_class = AskUpdateSerializer
    service_class = AskService

    def create_fields(self, data: dict) -> dict:
        fields = super().create_fields(data)
        center = fields.pop("center")
        fields["center_lat"] = center["lat"]
        fields["center_lng"] = center["lng"]
        return fields

    @extend_schema(
        summary="Create ask",
        request=AskCreateSerializer,
        responses={201: AskSerializer},
    )
    def create(self, request):
        return super().create(request)

    @extend_schema(
        summary="Edit ask",
        request=AskUpdateSerializer,
        responses={200: AskSerializer, 409: OpenApiResponse(description="Stale update")},
    )
    def partial_update(self, request, entity_id=None):
        return super().partial_update(request, entity_id)

    @extend_schema(
        summary="My asks",
        description="Asks owned by the caller, newest first.",
        responses={200: AskSerializer(many=True)},
    )
    @action(detail=False, methods=["get"], url_path="mine")
    def mine(self, request):
        return self.owned_response(request, "asks")

    @extend_schema(
        summary="Recent asks on the map",
        description="Asks centered in the viewport created within the last 48 hours.",
        parameters=MAP_PARAMETERS,
        responses={200: AskMapSerializer(many=True)},
    )
    @action(detail=False, methods=["get"], url_path="map")
    def map(self, request):
        asks = GeoQuery().asks_in_bounds(self.parse_bounds(request))
        return Response({"asks": AskMapSerializer(asks, many=True).data})


@extend_schema(tags=["Posts - Replies"])
class ReplyViewSet(ContentEntityViewSet):
    serializer_class = ReplySerializer
    create_serializer_class = ReplyCreateSerializer
    update_serializer_class = ReplyUpdateSerializer
    service_class = ReplyService
    filter_backends = [DjangoFilterBackend]
    filterset_class = ReplyFilter

    def get_queryset(self):
        return Reply.objects.prefetch_related("media").order_by("created_at")

    def create_fields(self, data: dict) -> dict:
        fields = {"content": data["content"]}
        fields.update(
            self.get_service().resolve_target(
                record_id=data.get("record_id"), ask_id=data.get("ask_id")
            )
        )
        return fields

    @extend_schema(
        summary="List replies",
        description="Replies of one record or ask, oldest first.",
        parameters=[
            OpenApiParameter("record_id", str, required=False),
            OpenApiParameter("ask_id", str, required=False),
        ],
        responses={200: ReplySerializer(many=True)},
    )
    def list(self, request):
        params = request.query_params
        if bool(params.get("record_id")) == bool(params.get("ask_id")):
            raise InvalidArgumentError("Provide exactly one of record_id or ask_id")

        queryset = self.filter_queryset(self.get_queryset())
        return Response({"replies": self.get_serializer(queryset, many=True).data})

    @extend_schema(
        summary="Create reply",
        request=ReplyCreateSerializer,
        responses={201: ReplySerializer},
    )
    def create(self, request):
        return super().create(request)

    @extend_schema(
        summary="Edit reply",
        request=ReplyUpdateSerializer,
        responses={200: ReplySerializer, 409: OpenApiResponse(description="Stale update")},
    )
    def partial_update(self, request, entity_id=None):
        return super().partial_update(request, entity_id)

