"""Shared dependency factories for FastAPI endpoints.

Settings and the admin token store live on ``app.state`` so that each app
instance built by ``create_app`` carries its own configuration.
"""

from pathlib import Path

from fastapi import Depends
from fastapi import HTTPException
from fastapi import Request
from fastapi.security import HTTPAuthorizationCredentials
from fastapi.security import HTTPBearer

from library_core.config.settings import LibrarySettings

from .services.admin_tokens import AdminTokenStore
from .services.library_service import LibraryService

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> LibrarySettings:
    """Get the settings the app was created with."""
    return request.app.state.settings


def get_token_store(request: Request) -> AdminTokenStore:
    """Get the app's admin token store."""
    return request.app.state.token_store


def get_library_service(settings: LibrarySettings = Depends(get_settings)) -> LibraryService:
    """Get library service.

    Returns:
        LibraryService rooted at the configured library folder
    """
    return LibraryService(
        Path(settings.data_path),
        library_folder=settings.library_folder,
        max_upload_bytes=settings.max_upload_bytes,
    )


def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str | None:
    return credentials.credentials if credentials else None


def require_admin(
    settings: LibrarySettings = Depends(get_settings),
    store: AdminTokenStore = Depends(get_token_store),
    token: str | None = Depends(get_bearer_token),
) -> None:
    """Reject the request unless it carries a valid admin token.

    Raises:
        403: Admin gate enabled and token missing, expired or unknown
    """
    if not settings.require_admin:
        return
    if not store.enabled:
        raise HTTPException(status_code=403, detail="Admin access is not configured")
    if not store.verify(token):
        raise HTTPException(status_code=403, detail="Admin access required")
