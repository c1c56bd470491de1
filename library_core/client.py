"""HTTP client for the libraryd API.

Wraps an ``httpx.Client`` and turns error responses back into the library
error taxonomy, so callers handle the same exceptions the service raises.

Contract:
- Inputs: Paths relative to the base directory (``LibraryFolder/...``)
- Outputs: DirectoryListing, FileRecord, FolderEntry and plain dict results
- Side Effects: Network calls; the admin token is kept on the client headers
"""

import logging
from typing import Any
from typing import BinaryIO

import httpx

from .errors import LibraryError
from .errors import error_for_status
from .models import DirectoryListing
from .models import FileRecord
from .models import FolderEntry

logger = logging.getLogger(__name__)


class LibraryClient:
    """Client for one libraryd server.

    Example:
        >>> client = LibraryClient("http://127.0.0.1:3000")
        >>> listing = client.list_directory("LibraryFolder")
    """

    def __init__(self, base_url: str | None = None, http: httpx.Client | None = None, timeout: float = 30.0) -> None:
        """Initialize with a base URL or an existing httpx client.

        Args:
            base_url: Server URL, used when no client is passed
            http: Preconfigured httpx client (e.g. a FastAPI TestClient)
            timeout: Request timeout for a client created here
        """
        if http is None:
            if base_url is None:
                raise ValueError("Either base_url or http must be given")
            http = httpx.Client(base_url=base_url, timeout=timeout)
        self.http = http

    @property
    def is_authenticated(self) -> bool:
        return "Authorization" in self.http.headers

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "LibraryClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _check(self, response: httpx.Response) -> Any:
        if response.is_success:
            return response.json()

        try:
            body = response.json()
        except ValueError:
            body = {}
        detail = body.get("detail") if isinstance(body, dict) else None
        if not isinstance(detail, str):
            detail = response.reason_phrase or f"HTTP error {response.status_code}"
        logger.debug(f"{response.request.method} {response.request.url} failed: {response.status_code} {detail}")
        raise error_for_status(response.status_code, detail)

    def list_directory(self, path: str = "") -> DirectoryListing:
        data = self._check(self.http.get("/api/list", params={"path": path}))
        return DirectoryListing.model_validate(data)

    def read_file(self, path: str) -> FileRecord:
        data = self._check(self.http.get("/api/file", params={"path": path}))
        data.setdefault("path", path)
        return FileRecord.model_validate(data)

    def write_file(self, path: str, content: str) -> dict[str, Any]:
        return self._check(self.http.post("/api/edit", json={"path": path, "content": content}))

    def delete(self, path: str) -> dict[str, Any]:
        return self._check(self.http.post("/api/delete", json={"path": path}))

    def create_folder(self, path: str) -> dict[str, Any]:
        return self._check(self.http.post("/api/folders", json={"path": path}))

    def enumerate_folders(self) -> list[FolderEntry]:
        data = self._check(self.http.get("/api/folders"))
        return [FolderEntry.model_validate(folder) for folder in data["folders"]]

    def upload(self, filename: str, content: bytes | BinaryIO, target: str | None = None) -> dict[str, Any]:
        """Upload a file.

        Args:
            filename: Name to store the file under
            content: File bytes or a binary stream
            target: Destination folder (default: the library root)

        Returns:
            Upload result with path, filename and size
        """
        form = {"path": target} if target else None
        return self._check(self.http.post("/api/upload", files={"file": (filename, content)}, data=form))

    def login(self, password: str) -> bool:
        """Log in as admin; on success later requests carry the token.

        Returns:
            True if the password was accepted

        Raises:
            LibraryError: Server errors other than a rejected password
        """
        try:
            data = self._check(self.http.post("/api/admin/login", json={"password": password}))
        except LibraryError as e:
            if e.status_code == 403:
                logger.info(f"Admin login rejected: {e}")
                return False
            raise
        self.http.headers["Authorization"] = f"Bearer {data['token']}"
        return True

    def logout(self) -> None:
        if not self.is_authenticated:
            return
        try:
            self._check(self.http.post("/api/admin/logout"))
        finally:
            del self.http.headers["Authorization"]
