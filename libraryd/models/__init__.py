"""API models for the libraryd daemon.

This module defines request and response models for the REST API.
"""

from library_core.models import DirectoryListing
from library_core.models import FileRecord
from library_core.models import FolderEntry

from .admin import LoginRequest
from .admin import LoginResponse
from .admin import LogoutResponse
from .files import ActionResponse
from .files import EditRequest
from .files import FolderListResponse
from .files import PathRequest
from .files import UploadResponse
from .responses import StatusResponse

__all__ = [
    "ActionResponse",
    "DirectoryListing",
    "EditRequest",
    "FileRecord",
    "FolderEntry",
    "FolderListResponse",
    "LoginRequest",
    "LoginResponse",
    "LogoutResponse",
    "PathRequest",
    "StatusResponse",
    "UploadResponse",
]
