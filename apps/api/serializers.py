# apps/api/serializers.py

"""
Serializers for the API layer.

This module validates the optional body of composition requests.
"""

import logging

from rest_framework import serializers

from apps.compositions.config import is_valid_chroma_key_color

logger = logging.getLogger(__name__)


class CompositionCreateSerializer(serializers.Serializer):
    """
    Serializer for composing a new overlay video.

    The body is optional. File locations always come from configuration;
    only the chroma-key colour may be overridden per request.
    """
    chroma_key_color = serializers.CharField(
        required=False,
        allow_blank=False,
        max_length=32,
        help_text="Colour made transparent in the foreground video (e.g. '#6adb47')",
    )

    def validate_chroma_key_color(self, value: str) -> str:
        if not is_valid_chroma_key_color(value):
            raise serializers.ValidationError(
                "Must be a '#RGB' or '#RRGGBB' hex value or a colour name."
            )
        return value
