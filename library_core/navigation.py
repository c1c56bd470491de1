"""Navigation state for one library browsing session.

``NavigationSession`` is the explicit context object a UI (or the CLI) drives:
it tracks the current view and path, a back-navigation history stack, the admin
flag and the edit buffer for the open file. Nothing here is module-level state;
create one session per browser or CLI session.

Contract:
- Inputs: User actions (navigate, open, back, edit, delete, upload, login)
- Outputs: Updated session state (listing, file, error, history)
- Side Effects: Calls the libraryd API through a LibraryClient
"""

import logging
from dataclasses import dataclass
from enum import Enum

import httpx

from .client import LibraryClient
from .config.settings import LibrarySettings
from .errors import AdminRequiredError
from .errors import LibraryError
from .errors import UnsupportedTypeError
from .errors import ValidationError
from .models import DirectoryListing
from .models import FileRecord
from .models import FolderEntry
from .models import is_editable

logger = logging.getLogger(__name__)


class View(str, Enum):
    HOME = "home"
    LIBRARY = "library"
    UPLOAD = "upload"
    FILE = "file"


@dataclass(frozen=True)
class NavigationEntry:
    """A history stack frame.

    Attributes:
        kind: "folder", "file" or "home"
        path: Folder or file path including the library folder, None for home
        view: View that was showing
    """

    kind: str
    path: str | None
    view: View


HOME_ENTRY = NavigationEntry(kind="home", path=None, view=View.HOME)


class NavigationSession:
    """Navigation state machine: home -> library <-> file, library <-> upload.

    Forward transitions push the previous entry onto ``history``; ``go_back``
    pops and restores it without pushing. Failed loads leave the navigation in
    place and record the message in ``error``; failed edits and deletes raise.
    """

    def __init__(
        self,
        client: LibraryClient,
        library_folder: str = "LibraryFolder",
        max_history: int | None = 100,
    ) -> None:
        """Initialize a session at the home view.

        Args:
            client: API client for the libraryd server
            library_folder: Name of the library root
            max_history: History cap, oldest entries dropped first; None for unbounded
        """
        if max_history is not None and max_history < 1:
            raise ValueError(f"max_history must be positive or None: {max_history}")

        self.client = client
        self.library_folder = library_folder
        self.max_history = max_history

        self.current_path = library_folder
        self.view = View.HOME
        self.is_admin = False
        self.history: list[NavigationEntry] = []
        self.current = HOME_ENTRY

        self.listing: DirectoryListing | None = None
        self.file: FileRecord | None = None
        self.original_content: str | None = None
        self.editing = False
        self.draft: str | None = None
        self.error: str | None = None

    @classmethod
    def from_settings(cls, client: LibraryClient, settings: LibrarySettings) -> "NavigationSession":
        """Create a session using the configured library folder and history cap."""
        return cls(client, library_folder=settings.library_folder, max_history=settings.max_history)

    # --- Paths ---

    def relative(self, path: str | None) -> str:
        """Strip the library folder prefix: ``LibraryFolder/a/b`` -> ``a/b``."""
        if not path or path == self.library_folder:
            return ""
        prefix = f"{self.library_folder}/"
        return path[len(prefix) :] if path.startswith(prefix) else path

    def child_path(self, name: str) -> str:
        """Path of an entry in the current folder listing."""
        return f"{self.current_path}/{name}"

    def breadcrumb(self) -> list[tuple[str, str]]:
        """Breadcrumb trail for the current folder as (label, relative path) pairs."""
        trail = [("Library", "")]
        rel_path = self.relative(self.current_path)
        if not rel_path:
            return trail

        current = ""
        for part in rel_path.split("/"):
            current = f"{current}/{part}" if current else part
            trail.append((part, current))
        return trail

    @property
    def can_go_back(self) -> bool:
        return len(self.history) > 0

    def _push(self, entry: NavigationEntry) -> None:
        self.history.append(entry)
        if self.max_history is not None and len(self.history) > self.max_history:
            del self.history[0]

    def _clear_file(self) -> None:
        self.file = None
        self.editing = False
        self.draft = None

    # --- Views ---

    def show_home(self) -> None:
        self.view = View.HOME

    def show_library(self) -> DirectoryListing | None:
        return self.navigate_to("", add_to_history=False)

    def show_upload(self) -> list[FolderEntry]:
        """Switch to the upload view and return the possible upload targets.

        Raises:
            AdminRequiredError: Not logged in as admin
        """
        self._require_admin()
        self.view = View.UPLOAD
        return self.client.enumerate_folders()

    def navigate_to(self, rel_path: str, add_to_history: bool = True) -> DirectoryListing | None:
        """Show the folder at a path relative to the library root.

        Args:
            rel_path: Folder path without the library folder prefix ("" for the root)
            add_to_history: Push the current entry first (False for back navigation)

        Returns:
            The listing, or None if it failed to load (see ``error``)
        """
        if add_to_history:
            self._push(self.current)

        rel_path = rel_path.strip("/")
        self.current_path = f"{self.library_folder}/{rel_path}" if rel_path else self.library_folder
        self.current = NavigationEntry(kind="folder", path=self.current_path, view=View.LIBRARY)
        self.view = View.LIBRARY
        self._clear_file()
        self.listing = None
        self.error = None

        try:
            self.listing = self.client.list_directory(self.current_path)
        except (LibraryError, httpx.HTTPError) as e:
            logger.warning(f"Failed to load directory {self.current_path}: {e}")
            self.error = f"Error loading directory: {e}"
        return self.listing

    def open_file(self, path: str, add_to_history: bool = True) -> FileRecord | None:
        """Show a file.

        Args:
            path: File path including the library folder
            add_to_history: Push the current entry first (False for back navigation)

        Returns:
            The file record, or None if it failed to load (see ``error``)
        """
        if add_to_history:
            self._push(self.current)

        self.current = NavigationEntry(kind="file", path=path, view=View.FILE)
        self.view = View.FILE
        self._clear_file()
        self.error = None

        try:
            record = self.client.read_file(path)
        except (LibraryError, httpx.HTTPError) as e:
            logger.warning(f"Failed to load file {path}: {e}")
            self.error = f'Could not load file "{path.rsplit("/", 1)[-1]}": {e}'
            return None

        self.file = record
        self.original_content = record.content or ""
        return record

    def go_back(self) -> None:
        """Restore the previous entry without pushing; library root if history is empty."""
        if not self.history:
            self.navigate_to("", add_to_history=False)
            return

        entry = self.history.pop()
        if entry.kind == "file":
            self.open_file(entry.path, add_to_history=False)
        elif entry.kind == "folder":
            self.navigate_to(self.relative(entry.path), add_to_history=False)
        else:
            self.current = entry
            self.show_home()

    # --- Admin ---

    def login(self, password: str) -> bool:
        """Log in as admin through the server.

        Returns:
            True if the password was accepted
        """
        self.is_admin = self.client.login(password)
        self.error = None if self.is_admin else "Incorrect password. Please try again."
        return self.is_admin

    def logout(self) -> None:
        self.client.logout()
        self.is_admin = False
        if self.view == View.UPLOAD:
            self.show_home()

    def _require_admin(self) -> None:
        if not self.is_admin:
            raise AdminRequiredError("Admin login required")

    def _require_open_file(self) -> FileRecord:
        if self.view != View.FILE or self.file is None:
            raise ValidationError("No file selected")
        return self.file

    # --- Editing ---

    def begin_edit(self) -> str:
        """Enter edit mode with a draft of the displayed content.

        Returns:
            The initial draft

        Raises:
            AdminRequiredError: Not logged in as admin
            ValidationError: No file open
            UnsupportedTypeError: Open file is not editable
        """
        self._require_admin()
        record = self._require_open_file()
        if not is_editable(record.path):
            raise UnsupportedTypeError("File type is not editable")

        self.draft = self.original_content or ""
        self.editing = True
        return self.draft

    def save_edit(self, content: str | None = None) -> None:
        """Save the draft (or ``content``) and leave edit mode.

        State is unchanged if the server rejects the write.

        Raises:
            ValidationError: Not in edit mode
            LibraryError: Server rejected the write
        """
        if not self.editing or self.file is None:
            raise ValidationError("Not in edit mode")

        new_content = self.draft if content is None else content
        self.client.write_file(self.file.path, new_content or "")

        self.original_content = new_content or ""
        self.file = self.file.model_copy(update={"content": self.original_content})
        self.editing = False
        self.draft = None

    def cancel_edit(self) -> None:
        """Discard the draft; the displayed content is not re-fetched."""
        self.editing = False
        self.draft = None

    # --- Mutations ---

    def delete_current_file(self) -> None:
        """Delete the open file, clear history and show its parent folder.

        Raises:
            AdminRequiredError: Not logged in as admin
            ValidationError: No file open
            LibraryError: Server rejected the delete
        """
        self._require_admin()
        record = self._require_open_file()

        self.client.delete(record.path)
        logger.info(f"Deleted {record.path}, clearing navigation history")

        self.history.clear()
        parent = record.path.rsplit("/", 1)[0] if "/" in record.path else self.library_folder
        self.navigate_to(self.relative(parent), add_to_history=False)

    def upload(self, filename: str, content: bytes, target: str | None = None) -> dict:
        """Upload a file; refreshes the listing if the library view is showing.

        Raises:
            AdminRequiredError: Not logged in as admin
            LibraryError: Server rejected the upload
        """
        self._require_admin()
        result = self.client.upload(filename, content, target)

        if self.view == View.LIBRARY:
            try:
                self.listing = self.client.list_directory(self.current_path)
            except (LibraryError, httpx.HTTPError) as e:
                self.error = f"Error loading directory: {e}"
        return result
