# apps/api/views.py

"""
API views for the overlay composition service.

This module provides views for:
- Listing the videos stored in the managed Cloudinary folder
- Composing a chroma-keyed overlay video
- Health checks
"""

import logging

from django.utils import timezone
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.compositions.services.cloudinary_storage import CloudinaryStorageService
from apps.compositions.services.orchestrator import CompositionOrchestrator

from .serializers import CompositionCreateSerializer
from .utils import outcome_response

logger = logging.getLogger(__name__)


def _serialize_asset(asset):
    return asset.to_dict()


def _serialize_assets(assets):
    return [asset.to_dict() for asset in assets]


class VideosView(APIView):
    """
    View for the composited videos.

    Provides endpoints for:
    - GET /videos - List uploaded videos
    - POST /videos - Compose a new overlay video
    """

    parser_classes = [JSONParser, FormParser, MultiPartParser]

    def get(self, request: Request) -> Response:
        """
        List the videos uploaded into the managed folder.

        Returns:
            Cloudinary's asset descriptors, unmodified and in order
        """
        orchestrator = CompositionOrchestrator.for_listing()
        outcome = orchestrator.list_assets()

        if outcome.ok:
            logger.info(f"Listed {len(outcome.value)} videos")

        return outcome_response(outcome, serialize=_serialize_assets)

    def post(self, request: Request) -> Response:
        """
        Compose a chroma-keyed overlay video.

        Request Body (optional, JSON or form):
            - chroma_key_color: Overrides the configured chroma-key colour

        Returns:
            The descriptor of the composited video
        """
        serializer = CompositionCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        orchestrator = CompositionOrchestrator.from_settings()
        composition_request = orchestrator.config.to_request(
            chroma_key_color=serializer.validated_data.get('chroma_key_color'),
        )

        logger.info(
            f"Composing overlay of {composition_request.foreground_path} onto "
            f"{composition_request.background_path} "
            f"(chroma key {composition_request.chroma_key_color})"
        )

        outcome = orchestrator.compose_overlay(composition_request)
        return outcome_response(outcome, serialize=_serialize_asset)


class HealthCheckView(APIView):
    """
    View for health check endpoint.

    Reports whether the Cloudinary account answers a ping.
    """

    def get(self, request: Request) -> Response:
        is_healthy, message = CloudinaryStorageService.check_connection()

        if not is_healthy:
            logger.error(f"Cloudinary health check failed: {message}")

        return Response(
            {
                "status": "healthy" if is_healthy else "degraded",
                "timestamp": timezone.now().isoformat(),
                "components": {
                    "cloudinary": {
                        "status": "healthy" if is_healthy else "unhealthy",
                        "message": message,
                    },
                },
            },
            status=status.HTTP_200_OK if is_healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        )
