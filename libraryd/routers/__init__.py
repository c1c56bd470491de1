"""API routers for the libraryd daemon."""

from .admin import router as admin_router
from .files import router as files_router
from .status import router as status_router

__all__ = [
    "admin_router",
    "files_router",
    "status_router",
]
