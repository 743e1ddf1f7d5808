# apps/compositions/apps.py
import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class CompositionsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.compositions"
    verbose_name = "Compositions"

    def ready(self):
        """
        Configure the Cloudinary SDK from Django settings.

        When no cloud name is configured the SDK falls back to the
        CLOUDINARY_URL environment variable.
        """
        import cloudinary

        if settings.CLOUDINARY_CLOUD_NAME:
            cloudinary.config(
                cloud_name=settings.CLOUDINARY_CLOUD_NAME,
                api_key=settings.CLOUDINARY_API_KEY,
                api_secret=settings.CLOUDINARY_API_SECRET,
                secure=True,
            )
        else:
            logger.debug("CLOUDINARY_CLOUD_NAME not set, relying on CLOUDINARY_URL")
