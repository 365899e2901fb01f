"""Firestore client bootstrap through the Firebase Admin SDK."""

import logging
from typing import Optional

import firebase_admin
from firebase_admin import credentials, firestore
from google.cloud.firestore import Client

from src.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


def get_firestore_client(settings: Optional[Settings] = None) -> Client:
    """
    Firestore client of the default Firebase app.

    The app is initialised on first use: with the service account file from settings when one is configured,
    with application default credentials otherwise.
    """
    settings = settings or get_settings()
    try:
        app = firebase_admin.get_app()
    except ValueError:
        if settings.firebase_credentials:
            cred = credentials.Certificate(settings.firebase_credentials)
        else:
            cred = credentials.ApplicationDefault()
        options = {"projectId": settings.firebase_project_id} if settings.firebase_project_id else None
        app = firebase_admin.initialize_app(cred, options)
        logger.info("Initialised Firebase app for project %s", app.project_id)
    return firestore.client(app)
