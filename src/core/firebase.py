"""
CivicReport - Firebase Admin App
Lazily initializes the shared firebase-admin application.
"""

import logging
from typing import Optional

import firebase_admin
from firebase_admin import credentials

from src.core.config import settings

logger = logging.getLogger(__name__)


def get_firebase_app(
    credentials_path: Optional[str] = None,
    project_id: Optional[str] = None,
    storage_bucket: Optional[str] = None,
) -> firebase_admin.App:
    """
    Return the default firebase-admin app, initializing it on first use.

    Args:
        credentials_path: Service account JSON; application default
            credentials are used when omitted
        project_id: Firebase project ID
        storage_bucket: Default Cloud Storage bucket name

    Returns:
        The default firebase_admin.App
    """
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    credentials_path = credentials_path or settings.firebase_credentials_path
    options = {}
    if project_id or settings.firebase_project_id:
        options["projectId"] = project_id or settings.firebase_project_id
    if storage_bucket or settings.firebase_storage_bucket:
        options["storageBucket"] = storage_bucket or settings.firebase_storage_bucket

    if credentials_path:
        cred = credentials.Certificate(credentials_path)
    else:
        cred = credentials.ApplicationDefault()

    app = firebase_admin.initialize_app(cred, options or None)
    logger.info("Firebase app initialized")
    return app
