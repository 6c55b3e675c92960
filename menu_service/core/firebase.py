from __future__ import annotations

import firebase_admin
import structlog
from firebase_admin import credentials

from menu_service.core.config import settings

logger = structlog.get_logger(__name__)

_app: firebase_admin.App | None = None


def _build_credential() -> credentials.Base | None:
    if settings.firebase_credentials_path:
        return credentials.Certificate(settings.firebase_credentials_path)
    # None lets the SDK fall back to Application Default Credentials.
    return None


def init_firebase() -> firebase_admin.App:
    global _app
    if _app is None:
        try:
            _app = firebase_admin.get_app()
        except ValueError:
            options = None
            if settings.firebase_project_id:
                options = {"projectId": settings.firebase_project_id}
            _app = firebase_admin.initialize_app(_build_credential(), options)
            logger.info("firebase_initialized", project_id=settings.firebase_project_id)
    return _app


def get_firebase_app() -> firebase_admin.App:
    return init_firebase()


def close_firebase() -> None:
    global _app
    if _app is not None:
        firebase_admin.delete_app(_app)
        _app = None
