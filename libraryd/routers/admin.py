"""Admin login endpoints.

The password is checked on the server and exchanged for a bearer token that the
mutating endpoints require.
"""

import logging

from fastapi import APIRouter
from fastapi import Depends
from fastapi import HTTPException

from ..dependencies import get_bearer_token
from ..dependencies import get_token_store
from ..models.admin import LoginRequest
from ..models.admin import LoginResponse
from ..models.admin import LogoutResponse
from ..services.admin_tokens import AdminTokenStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.post("/login", response_model=LoginResponse)
def login(
    request: LoginRequest,
    store: AdminTokenStore = Depends(get_token_store),
) -> LoginResponse:
    """Exchange the admin password for a token.

    Raises:
        403: Wrong password, or no admin password configured
    """
    if not store.enabled:
        raise HTTPException(status_code=403, detail="Admin access is not configured")
    if not store.check_password(request.password):
        logger.warning("Rejected admin login with incorrect password")
        raise HTTPException(status_code=403, detail="Incorrect password")

    return LoginResponse(token=store.issue(), expires_in=store.ttl_seconds)


@router.post("/logout", response_model=LogoutResponse)
def logout(
    token: str | None = Depends(get_bearer_token),
    store: AdminTokenStore = Depends(get_token_store),
) -> LogoutResponse:
    """Revoke the caller's token. Unknown tokens are ignored."""
    store.revoke(token)
    return LogoutResponse()
