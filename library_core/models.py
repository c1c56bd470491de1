"""Shared data models for library_core.

These are returned by the daemon's service layer, serialized by its routers,
and parsed back by the HTTP client.

Contract:
- Inputs: Raw data for model construction
- Outputs: Validated model instances
- Side Effects: None (pure data structures)
"""

from pathlib import PurePosixPath
from typing import Literal

from pydantic import BaseModel
from pydantic import Field

FileKind = Literal["text", "markdown", "binary"]


class DirectoryListing(BaseModel):
    """One level of a directory.

    Contract:
    - folders: Names of child directories, sorted
    - files: Names of everything else, sorted
    """

    folders: list[str] = Field(default_factory=list, description="Child directory names")
    files: list[str] = Field(default_factory=list, description="Child file names")


class FileRecord(BaseModel):
    """A file read from the library.

    Binary files never carry content; clients fetch them through static serving
    at ``path``.
    """

    content: str | None = Field(None, description="Text content, null for binary files")
    kind: FileKind = Field(..., description="text, markdown or binary")
    path: str = Field(..., description="Path of the file relative to the base directory")


class FolderEntry(BaseModel):
    """A folder in the library tree, for upload-target selection."""

    name: str = Field(..., description="Folder name")
    path: str = Field(..., description="Path prefixed with the library folder")


class UploadResult(BaseModel):
    """Where an uploaded file landed."""

    path: str = Field(..., description="Path of the stored file")
    filename: str = Field(..., description="Stored file name")
    size: int = Field(..., description="Stored size in bytes")


BINARY_EXTENSIONS = frozenset({".pdf", ".jpg", ".jpeg", ".png", ".gif", ".mp4", ".mp3"})
EDITABLE_EXTENSIONS = frozenset({".txt", ".md", ".json", ".js", ".css", ".html", ".xml"})


def file_extension(path: str) -> str:
    """Lower-cased extension of a slash-separated path, including the dot."""
    return PurePosixPath(path).suffix.lower()


def is_editable(path: str) -> bool:
    return file_extension(path) in EDITABLE_EXTENSIONS
