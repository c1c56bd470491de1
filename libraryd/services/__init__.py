"""Services for the libraryd daemon."""

from .admin_tokens import AdminTokenStore
from .library_service import LibraryService

__all__ = [
    "AdminTokenStore",
    "LibraryService",
]
