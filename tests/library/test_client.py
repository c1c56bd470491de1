"""Tests for LibraryClient error mapping and request shapes."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from library_core.client import LibraryClient
from library_core.errors import AccessDeniedError
from library_core.errors import LibraryInternalError
from library_core.errors import NotFoundError
from library_core.errors import UnsupportedTypeError
from library_core.errors import ValidationError
from library_core.errors import error_for_status


@pytest.fixture
def api(client: TestClient) -> LibraryClient:
    return LibraryClient(http=client)


@pytest.mark.unit
class TestErrorForStatus:
    @pytest.mark.parametrize(
        ("status", "message", "expected"),
        [
            (400, "File path required", ValidationError),
            (400, "File type is not editable", UnsupportedTypeError),
            (403, "Access denied", AccessDeniedError),
            (404, "File not found", NotFoundError),
            (500, "Failed to read file: boom", LibraryInternalError),
            (502, "Bad Gateway", LibraryInternalError),
        ],
    )
    def test_mapping(self, status: int, message: str, expected: type) -> None:
        error = error_for_status(status, message)
        assert type(error) is expected
        assert str(error) == message

    def test_requires_url_or_client(self) -> None:
        with pytest.raises(ValueError):
            LibraryClient()


@pytest.mark.integration
class TestLibraryClient:
    def test_list_and_read(self, api: LibraryClient, library_root: Path) -> None:
        (library_root / "sub").mkdir()
        (library_root / "a.md").write_text("# A")

        listing = api.list_directory("LibraryFolder")
        record = api.read_file("LibraryFolder/a.md")

        assert listing.folders == ["sub"]
        assert listing.files == ["a.md"]
        assert record.kind == "markdown"
        assert record.content == "# A"

    def test_not_found_raised(self, api: LibraryClient) -> None:
        with pytest.raises(NotFoundError, match="File not found"):
            api.read_file("LibraryFolder/none.txt")

    def test_access_denied_raised(self, api: LibraryClient) -> None:
        with pytest.raises(AccessDeniedError):
            api.list_directory("LibraryFolder/../..")

    def test_login_and_mutate(self, api: LibraryClient, library_root: Path, admin_password: str) -> None:
        (library_root / "x.exe").write_bytes(b"MZ")
        (library_root / "a.txt").write_text("a")

        assert not api.is_authenticated
        assert api.login(admin_password)
        assert api.is_authenticated

        with pytest.raises(UnsupportedTypeError):
            api.write_file("LibraryFolder/x.exe", "hi")

        assert api.write_file("LibraryFolder/a.txt", "b")["success"] is True
        assert api.create_folder("LibraryFolder/new")["path"] == "LibraryFolder/new"
        assert api.upload("u.txt", b"upload", target="LibraryFolder/new")["size"] == 6
        assert [f.path for f in api.enumerate_folders()] == ["LibraryFolder", "LibraryFolder/new"]
        assert api.delete("LibraryFolder/new")["success"] is True
        assert not (library_root / "new").exists()

    def test_wrong_password(self, api: LibraryClient) -> None:
        assert api.login("wrong") is False
        assert not api.is_authenticated

    def test_logout_drops_token(self, api: LibraryClient, admin_password: str) -> None:
        api.login(admin_password)
        api.logout()
        assert not api.is_authenticated

    def test_mutation_without_login(self, api: LibraryClient, library_root: Path) -> None:
        (library_root / "a.txt").write_text("a")
        with pytest.raises(AccessDeniedError, match="Admin access required"):
            api.delete("LibraryFolder/a.txt")
