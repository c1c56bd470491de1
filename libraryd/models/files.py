"""Request and response models for the file endpoints."""

from pydantic import BaseModel
from pydantic import Field

from library_core.models import FolderEntry


class EditRequest(BaseModel):
    """Request to overwrite a file.

    Both fields are optional at the schema level so that a missing value is
    reported as 400 by the service rather than 422 by request validation.
    """

    path: str | None = Field(None, description="File path relative to the base directory")
    content: str | None = Field(None, description="New file content, may be empty")


class PathRequest(BaseModel):
    """Request naming a single path (delete, folder create)."""

    path: str | None = Field(None, description="Path relative to the base directory")


class ActionResponse(BaseModel):
    """Result of a mutating operation."""

    success: bool = Field(True, description="Whether the operation succeeded")
    message: str = Field(..., description="Human-readable outcome")
    path: str = Field(..., description="Path the operation applied to")


class UploadResponse(ActionResponse):
    """Result of a file upload."""

    filename: str = Field(..., description="Stored file name")
    size: int = Field(..., description="Stored size in bytes")


class FolderListResponse(BaseModel):
    """Every folder in the library tree."""

    folders: list[FolderEntry] = Field(..., description="Folders in pre-order, root first")
