"""
API views for direct-to-storage image uploads.

Provides:
- UploadRequestView: Issue presigned upload URLs for a batch of images
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from media.serializers import (
    UploadCredentialSerializer,
    UploadCredentialsResponseSerializer,
    UploadRequestSerializer,
)
from media.services import CredentialIssuer
from media.storage import get_object_storage


class UploadRequestView(APIView):
    """
    Issue upload credentials.

    POST /api/v1/upload/request
        Returns presigned PUT URLs for the original and thumbnail of
        every requested image, plus the public URLs they will have.

    Authentication:
        Requires valid JWT token.

    Response:
        200 OK: Credentials keyed by client_key
        400 Bad Request: Empty batch, bad client keys, unsupported type
        429 Too Many Requests: Batch or file size limit exceeded
    """

    permission_classes = [IsAuthenticated]
    storage = None

    def __init__(self, storage=None, **kwargs):
        super().__init__(**kwargs)
        self.storage = storage or get_object_storage()

    def get_issuer(self) -> CredentialIssuer:
        return CredentialIssuer(self.storage)

    @extend_schema(
        operation_id="request_upload_credentials",
        summary="Request upload URLs",
        description=(
            "Issue short-lived presigned upload URLs for a batch of images. "
            "Each image gets an upload_id that is later used to attach it to "
            "a record, ask or reply."
        ),
        request=UploadRequestSerializer,
        responses={
            200: UploadCredentialsResponseSerializer,
            400: OpenApiResponse(description="Invalid request"),
            401: OpenApiResponse(description="Authentication required"),
            429: OpenApiResponse(description="Batch or file size limit exceeded"),
        },
        tags=["Media - Upload"],
    )
    def post(self, request):
        data = UploadRequestSerializer.parse(request.data)
        descriptors = UploadRequestSerializer.to_descriptors(data)

        credentials = self.get_issuer().issue(request.user, descriptors)

        return Response(
            {
                "upload_credentials": {
                    client_key: UploadCredentialSerializer(credential).data
                    for client_key, credential in credentials.items()
                }
            },
            status=status.HTTP_200_OK,
        )
