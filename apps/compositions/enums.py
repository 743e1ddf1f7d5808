"""
Enumerations for the compositions app.
"""
from django.db import models


class CompositionStage(models.TextChoices):
    """Stages of the overlay composition, in execution order."""
    UPLOAD_FOREGROUND = 'upload_foreground', 'Upload foreground'
    BUILD_PIPELINE = 'build_pipeline', 'Build pipeline'
    UPLOAD_BACKGROUND = 'upload_background', 'Upload background'
    CLEANUP_FOREGROUND = 'cleanup_foreground', 'Cleanup foreground'


# Stage name reported by asset listings
LIST_ASSETS_STAGE = 'list_assets'
