"""
Report media uploads
Stores photos and voice notes in Firebase Storage.
"""

import logging
import time
from typing import Any, Optional

from firebase_admin import storage

from src.core.constants import AUDIO_UPLOAD_PREFIX, IMAGE_UPLOAD_PREFIX
from src.core.exceptions import MediaUploadError
from src.core.firebase import get_firebase_app

logger = logging.getLogger(__name__)


class MediaStorage:
    """
    Uploads report attachments.

    Objects are written under ``reports/{user_id}/`` for images and
    ``audio/{user_id}/`` for audio, named by upload time in milliseconds.
    """

    def __init__(self, bucket: Optional[Any] = None):
        """
        Initialize media storage.

        Args:
            bucket: Cloud Storage bucket; the firebase-admin default bucket is
                used when omitted
        """
        if bucket is None:
            bucket = storage.bucket(app=get_firebase_app())
        self.bucket = bucket

    @staticmethod
    def _object_name(prefix: str, user_id: str, extension: str) -> str:
        return f"{prefix}/{user_id}/{int(time.time() * 1000)}.{extension}"

    def _upload(self, data: bytes, path: str, content_type: str) -> str:
        blob = self.bucket.blob(path)
        blob.upload_from_string(data, content_type=content_type)
        blob.make_public()
        return blob.public_url

    def upload_image(self, data: bytes, user_id: str) -> str:
        """
        Upload a report photo.

        Returns:
            Public download URL

        Raises:
            MediaUploadError: If the upload fails
        """
        path = self._object_name(IMAGE_UPLOAD_PREFIX, user_id, "jpg")
        logger.info(f"Uploading image ({len(data)} bytes) to {path}")
        try:
            url = self._upload(data, path, "image/jpeg")
        except Exception as e:
            logger.error(f"Error uploading image: {e}")
            raise MediaUploadError(f"Image upload failed: {e}") from e
        return url

    def upload_audio(self, data: bytes, user_id: str) -> str:
        """Upload a voice note. Raises MediaUploadError on failure."""
        path = self._object_name(AUDIO_UPLOAD_PREFIX, user_id, "m4a")
        try:
            url = self._upload(data, path, "audio/mp4")
        except Exception as e:
            logger.error(f"Error uploading audio: {e}")
            raise MediaUploadError(f"Audio upload failed: {e}") from e
        return url
