"""Library file management service.

Every public method performs exactly one filesystem action under the library
root, after the shared containment check in ``resolve``.

Security-critical: all paths are resolved (symlinks and '..' collapsed) and then
compared by path segment against the resolved root, never by string prefix.
"""

import logging
import os
import shutil
import sys
import tempfile
from pathlib import Path
from pathlib import PurePosixPath
from typing import BinaryIO

from library_core.errors import AccessDeniedError
from library_core.errors import LibraryInternalError
from library_core.errors import NotFoundError
from library_core.errors import UnsupportedTypeError
from library_core.errors import ValidationError
from library_core.models import BINARY_EXTENSIONS
from library_core.models import EDITABLE_EXTENSIONS
from library_core.models import DirectoryListing
from library_core.models import FileRecord
from library_core.models import FolderEntry
from library_core.models import UploadResult
from library_core.models import file_extension

logger = logging.getLogger(__name__)

UPLOAD_CHUNK_SIZE = 1024 * 1024


def _ignore_missing(func, path, exc: BaseException) -> None:
    """rmtree error hook: children removed concurrently are not an error."""
    if isinstance(exc, FileNotFoundError):
        return
    raise exc


class LibraryService:
    """Service for browsing and editing files under the library root.

    Paths accepted by every method are relative to the base directory and
    include the library folder, e.g. ``LibraryFolder/notes/a.md``.
    """

    def __init__(
        self,
        base_path: Path,
        library_folder: str = "LibraryFolder",
        max_upload_bytes: int = 50 * 1024 * 1024,
    ) -> None:
        """Initialize with the base directory.

        Args:
            base_path: Directory containing the library folder
            library_folder: Name of the library root directory
            max_upload_bytes: Upload size cap
        """
        self.base = Path(base_path).resolve()
        self.library_folder = library_folder
        self.root = (self.base / library_folder).resolve()
        self.max_upload_bytes = max_upload_bytes

    def resolve(self, path: str | None, *, default_root: bool = False, required: str = "Path required") -> Path:
        """Validate and resolve a request path (security-critical).

        Args:
            path: Path relative to the base directory
            default_root: Resolve an empty path to the root instead of rejecting it
            required: Message used when an empty path is rejected

        Returns:
            Resolved absolute Path equal to or beneath the root

        Raises:
            ValidationError: Path is empty and no default applies
            AccessDeniedError: Resolved path escapes the root
        """
        if not path:
            if default_root:
                return self.root
            raise ValidationError(required)

        try:
            candidate = (self.base / path).resolve()
        except ValueError as e:
            # Embedded NUL bytes
            raise ValidationError(f"Invalid path: {e}") from e
        if candidate != self.root and self.root not in candidate.parents:
            logger.warning(f"Access denied for path outside library root: {path}")
            raise AccessDeniedError("Access denied")
        return candidate

    def list_directory(self, path: str | None = None) -> DirectoryListing:
        """List one directory level, folders and files sorted separately.

        Raises:
            AccessDeniedError: Path escapes the root
            NotFoundError: Path is missing or not a directory
        """
        target = self.resolve(path, default_root=True)
        if not target.is_dir():
            raise NotFoundError("Directory not found")

        folders: list[str] = []
        files: list[str] = []
        for item in target.iterdir():
            if item.is_dir():
                folders.append(item.name)
            else:
                files.append(item.name)

        return DirectoryListing(folders=sorted(folders), files=sorted(files))

    def read_file(self, path: str | None) -> FileRecord:
        """Read a file as text, or describe it as binary.

        Raises:
            ValidationError: No path given
            AccessDeniedError: Path escapes the root
            NotFoundError: Path is missing or not a regular file
            LibraryInternalError: Content is not valid UTF-8
        """
        target = self.resolve(path, required="File path required")
        if not target.is_file():
            raise NotFoundError("File not found")

        # Type comes from the file actually read, not from a symlink's name
        extension = file_extension(target.name)
        if extension in BINARY_EXTENSIONS:
            return FileRecord(content=None, kind="binary", path=path)

        try:
            with open(target, encoding="utf-8", newline="") as f:
                content = f.read()
        except UnicodeDecodeError as e:
            raise LibraryInternalError(f"Failed to read file: {e}") from e

        kind = "markdown" if extension == ".md" else "text"
        return FileRecord(content=content, kind=kind, path=path)

    def write_file(self, path: str | None, content: str | None) -> str:
        """Overwrite an existing editable file.

        The new content goes to a temporary file in the same directory which then
        replaces the target, so readers never observe a partial write.

        Returns:
            The path as given

        Raises:
            ValidationError: Path or content missing
            AccessDeniedError: Path escapes the root
            NotFoundError: File does not exist
            UnsupportedTypeError: Extension is not editable
        """
        if not path:
            raise ValidationError("File path required")
        if content is None:
            raise ValidationError("File content required")

        target = self.resolve(path)
        if not target.is_file():
            raise NotFoundError("File not found")
        if file_extension(target.name) not in EDITABLE_EXTENSIONS:
            raise UnsupportedTypeError("File type is not editable")

        fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(content)
            shutil.copymode(target, tmp_name)
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.info(f"Updated file: {path} ({len(content)} chars)")
        return path

    def delete(self, path: str | None) -> str:
        """Delete a file, or a directory recursively.

        Containment is checked on the resolved path, but removal acts on the
        path as named: a symlink is unlinked, never followed.

        Returns:
            The path as given

        Raises:
            ValidationError: No path given
            AccessDeniedError: Path escapes the root or is the root itself
            NotFoundError: Nothing exists at the path
        """
        target = self.resolve(path)
        if target == self.root:
            logger.warning(f"Refused to delete library root via path: {path}")
            raise AccessDeniedError(f"Cannot delete {self.library_folder} root")

        # Lexical '..' can disagree with the resolved path when it follows a symlink
        named = self.base / os.path.normpath(path)
        parent = named.parent.resolve()
        if parent != self.root and self.root not in parent.parents:
            logger.warning(f"Access denied for path outside library root: {path}")
            raise AccessDeniedError("Access denied")

        if named.is_symlink():
            named.unlink()
            logger.info(f"Deleted link: {path}")
            return path

        if not named.exists():
            raise NotFoundError("File or folder not found")

        if named.is_dir():
            if sys.version_info >= (3, 12):
                shutil.rmtree(named, onexc=_ignore_missing)
            else:
                shutil.rmtree(named, onerror=lambda func, p, exc_info: _ignore_missing(func, p, exc_info[1]))
            logger.info(f"Deleted folder: {path}")
        else:
            named.unlink()
            logger.info(f"Deleted file: {path}")

        return path

    def create_folder(self, path: str | None) -> str:
        """Create a folder (mkdir -p behavior, idempotent).

        Raises:
            ValidationError: No path given, or a file is in the way
            AccessDeniedError: Path escapes the root
        """
        target = self.resolve(path)
        try:
            target.mkdir(parents=True, exist_ok=True)
        except (FileExistsError, NotADirectoryError) as e:
            raise ValidationError(f"A file already exists at this path: {path}") from e

        logger.info(f"Created folder: {path}")
        return path

    def enumerate_folders(self) -> list[FolderEntry]:
        """Collect every folder in the tree, root first, in pre-order.

        Walks with an explicit stack. Symlinked directories are reported but not
        descended into.

        Returns:
            Folder entries with paths prefixed by the library folder
        """
        if not self.root.is_dir():
            return []

        folders: list[FolderEntry] = []
        stack: list[tuple[Path, str]] = [(self.root, self.library_folder)]
        while stack:
            directory, rel_path = stack.pop()
            folders.append(FolderEntry(name=rel_path.rsplit("/", 1)[-1], path=rel_path))

            if directory != self.root and directory.is_symlink():
                continue

            children = sorted((child for child in directory.iterdir() if child.is_dir()), key=lambda c: c.name)
            # Reversed so the smallest name is popped first
            for child in reversed(children):
                stack.append((child, f"{rel_path}/{child.name}"))

        return folders

    def save_upload(self, target: str | None, filename: str | None, stream: BinaryIO) -> UploadResult:
        """Store an uploaded file under a target folder, creating it if needed.

        Args:
            target: Destination folder path (default: the library root)
            filename: Original file name; only its final component is kept
            stream: Binary stream with the file content

        Returns:
            UploadResult describing the stored file

        Raises:
            ValidationError: No file name, oversize upload, or target is a file
            AccessDeniedError: Target escapes the root
        """
        name = PurePosixPath(filename.replace("\\", "/")).name if filename else ""
        if not name or name in (".", ".."):
            raise ValidationError("No file uploaded")

        target = (target or self.library_folder).rstrip("/") or self.library_folder
        directory = self.resolve(target)
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except (FileExistsError, NotADirectoryError) as e:
            raise ValidationError(f"Upload target is not a folder: {target}") from e

        fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=f".{name}.", suffix=".upload")
        size = 0
        try:
            with os.fdopen(fd, "wb") as out:
                while True:
                    chunk = stream.read(UPLOAD_CHUNK_SIZE)
                    if not chunk:
                        break
                    size += len(chunk)
                    if size > self.max_upload_bytes:
                        limit_mb = self.max_upload_bytes // (1024 * 1024)
                        raise ValidationError(f"File too large. Maximum size is {limit_mb}MB.")
                    out.write(chunk)
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, directory / name)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.info(f"Uploaded file: {target}/{name} ({size} bytes)")
        return UploadResult(path=f"{target}/{name}", filename=name, size=size)
