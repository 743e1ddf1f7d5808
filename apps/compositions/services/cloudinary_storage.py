# apps/compositions/services/cloudinary_storage.py

"""
Cloudinary Storage Service for the composition workflow.

This module wraps the three Cloudinary capabilities the compositions need:
- Uploading a local video (optionally into the managed folder, optionally
  with an incoming transformation pipeline)
- Deleting uploaded videos by public id
- Listing the videos uploaded into the managed folder

Every failure is reported as an UpstreamError.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

import cloudinary
import cloudinary.api
import cloudinary.exceptions
import cloudinary.uploader
from django.conf import settings

from ..exceptions import UpstreamError

logger = logging.getLogger(__name__)


# Status codes for the SDK's Admin API exception classes
EXCEPTION_STATUS_CODES = {
    cloudinary.exceptions.BadRequest: 400,
    cloudinary.exceptions.AuthorizationRequired: 401,
    cloudinary.exceptions.NotAllowed: 403,
    cloudinary.exceptions.NotFound: 404,
    cloudinary.exceptions.AlreadyExists: 409,
    cloudinary.exceptions.RateLimited: 420,
    cloudinary.exceptions.GeneralError: 500,
}


def _status_code_for(error: Exception) -> Optional[int]:
    for exc_class, status_code in EXCEPTION_STATUS_CODES.items():
        if isinstance(error, exc_class):
            return status_code
    return getattr(error, 'http_code', None) or getattr(error, 'status_code', None)


@dataclass
class MediaAsset:
    """
    Descriptor of an asset stored in Cloudinary.

    ``payload`` is the descriptor exactly as Cloudinary returned it and is
    what API responses expose.
    """
    public_id: str
    source: Optional[str] = None
    in_folder: bool = False
    payload: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_upstream(
        cls,
        payload: Dict[str, Any],
        source: Optional[str] = None,
        in_folder: Optional[bool] = None,
    ) -> 'MediaAsset':
        if in_folder is None:
            in_folder = bool(payload.get('asset_folder') or payload.get('folder'))
        return cls(
            public_id=payload.get('public_id', ''),
            source=source or payload.get('secure_url'),
            in_folder=in_folder,
            payload=payload,
        )

    def to_dict(self) -> Dict[str, Any]:
        return self.payload


class CloudinaryStorageService:
    """
    Service class for the Cloudinary calls made by the compositions.

    All methods are static so the class itself can be handed to the
    orchestrator as its storage collaborator.
    """

    RESOURCE_TYPE = 'video'
    UPLOAD_TIMEOUT = 300  # 5 minutes
    API_TIMEOUT = 60

    @staticmethod
    def _get_folder() -> str:
        return settings.CLOUDINARY_STORAGE.get('FOLDER', 'chroma-key-overlays')

    @staticmethod
    def _get_upload_timeout() -> int:
        return settings.CLOUDINARY_STORAGE.get(
            'UPLOAD_TIMEOUT', CloudinaryStorageService.UPLOAD_TIMEOUT
        )

    @staticmethod
    def _get_api_timeout() -> int:
        return settings.CLOUDINARY_STORAGE.get(
            'API_TIMEOUT', CloudinaryStorageService.API_TIMEOUT
        )

    @staticmethod
    def upload(
        local_path: str,
        folder: bool = False,
        transformation: Optional[List[Dict[str, Any]]] = None,
    ) -> MediaAsset:
        """
        Upload a local video file.

        Args:
            local_path: Path of the file to upload
            folder: Group the asset under the managed folder
            transformation: Incoming transformation pipeline applied by
                Cloudinary before the asset is stored

        Returns:
            The uploaded asset descriptor
        """
        if not os.path.exists(local_path):
            raise UpstreamError(
                operation="upload",
                path=local_path,
                reason="Source file does not exist"
            )

        upload_options = {
            'resource_type': CloudinaryStorageService.RESOURCE_TYPE,
            'timeout': CloudinaryStorageService._get_upload_timeout(),
            'return_error': True,
        }
        if folder:
            upload_options['folder'] = CloudinaryStorageService._get_folder()
        if transformation:
            upload_options['transformation'] = transformation

        try:
            result = cloudinary.uploader.upload(local_path, **upload_options)
        except Exception as e:
            logger.error(f"Cloudinary upload failed for {local_path}: {e}")
            raise UpstreamError(
                operation="upload",
                path=local_path,
                reason=str(e),
                status_code=_status_code_for(e),
            ) from e

        if 'error' in result:
            error = result['error']
            logger.error(f"Cloudinary rejected upload of {local_path}: {error}")
            raise UpstreamError(
                operation="upload",
                path=local_path,
                reason=error.get('message', 'Upload rejected'),
                status_code=error.get('http_code'),
            )

        if not result.get('public_id'):
            logger.error(f"Cloudinary upload of {local_path} returned no public_id")
            raise UpstreamError(
                operation="upload",
                path=local_path,
                reason="Response carried no public_id",
            )

        logger.info(
            f"Uploaded file to Cloudinary: {result.get('public_id')} "
            f"(folder={folder}, steps={len(transformation or [])}, bytes={result.get('bytes', 0)})"
        )

        return MediaAsset.from_upstream(result, source=local_path, in_folder=folder)

    @staticmethod
    def delete(public_ids: Sequence[str]) -> Dict[str, str]:
        """
        Delete uploaded videos by public id.

        Returns:
            Mapping of public id to Cloudinary's deletion status
        """
        try:
            result = cloudinary.api.delete_resources(
                list(public_ids),
                resource_type=CloudinaryStorageService.RESOURCE_TYPE,
                invalidate=True,
                timeout=CloudinaryStorageService._get_api_timeout(),
            )
        except Exception as e:
            logger.error(f"Cloudinary delete failed for {list(public_ids)}: {e}")
            raise UpstreamError(
                operation="delete",
                path=", ".join(public_ids),
                reason=str(e),
                status_code=_status_code_for(e),
            ) from e

        deleted = result.get('deleted', {})
        not_deleted = [pid for pid in public_ids if deleted.get(pid) != 'deleted']

        if not_deleted:
            logger.warning(f"Cloudinary did not delete {not_deleted}, result: {deleted}")
        else:
            logger.info(f"Deleted files from Cloudinary: {list(public_ids)}")

        return deleted

    @staticmethod
    def list_assets() -> List[MediaAsset]:
        """List the videos uploaded into the managed folder, in Cloudinary's order."""
        folder = CloudinaryStorageService._get_folder()

        try:
            result = cloudinary.api.resources(
                type='upload',
                resource_type=CloudinaryStorageService.RESOURCE_TYPE,
                prefix=folder,
                timeout=CloudinaryStorageService._get_api_timeout(),
            )
        except Exception as e:
            logger.error(f"Cloudinary listing failed for folder {folder}: {e}")
            raise UpstreamError(
                operation="list",
                path=folder,
                reason=str(e),
                status_code=_status_code_for(e),
            ) from e

        return [MediaAsset.from_upstream(resource) for resource in result.get('resources', [])]

    @staticmethod
    def check_connection() -> Tuple[bool, str]:
        """
        Check if Cloudinary connection is working
        """
        if not (settings.CLOUDINARY_CLOUD_NAME or os.environ.get('CLOUDINARY_URL')):
            return False, "Cloudinary cloud name not configured"

        if settings.CLOUDINARY_CLOUD_NAME and not settings.CLOUDINARY_API_KEY:
            return False, "Cloudinary API key not configured"

        if settings.CLOUDINARY_CLOUD_NAME and not settings.CLOUDINARY_API_SECRET:
            return False, "Cloudinary API secret not configured"

        try:
            result = cloudinary.api.ping(timeout=CloudinaryStorageService._get_api_timeout())
            if result.get('status') == 'ok':
                return True, "Cloudinary connection OK"
            return False, f"Cloudinary ping returned: {result}"
        except cloudinary.exceptions.Error as e:
            return False, f"Cloudinary connection failed: {str(e)}"
        except Exception as e:
            return False, f"Cloudinary check failed: {str(e)}"
