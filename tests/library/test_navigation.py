"""
Tests for NavigationSession against a live app.

The FastAPI TestClient is an httpx.Client, so it plugs straight into
LibraryClient and every transition goes through the real endpoints.
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from library_core.client import LibraryClient
from library_core.config.settings import LibrarySettings
from library_core.errors import AdminRequiredError
from library_core.errors import NotFoundError
from library_core.errors import UnsupportedTypeError
from library_core.errors import ValidationError
from library_core.navigation import NavigationEntry
from library_core.navigation import NavigationSession
from library_core.navigation import View


@pytest.fixture
def tree(library_root: Path) -> Path:
    (library_root / "docs" / "deep").mkdir(parents=True)
    (library_root / "docs" / "a.txt").write_text("alpha")
    (library_root / "docs" / "b.md").write_text("# Beta")
    (library_root / "docs" / "paper.pdf").write_bytes(b"%PDF")
    (library_root / "top.txt").write_text("top")
    return library_root


@pytest.fixture
def session(client: TestClient, tree: Path) -> NavigationSession:
    return NavigationSession(LibraryClient(http=client))


@pytest.fixture
def admin_session(session: NavigationSession, admin_password: str) -> NavigationSession:
    assert session.login(admin_password)
    return session


@pytest.mark.integration
class TestBrowsing:
    def test_starts_at_home(self, session: NavigationSession) -> None:
        assert session.view == View.HOME
        assert session.current_path == "LibraryFolder"
        assert not session.can_go_back

    def test_show_library_does_not_push(self, session: NavigationSession) -> None:
        listing = session.show_library()

        assert session.view == View.LIBRARY
        assert listing.folders == ["docs"]
        assert listing.files == ["top.txt"]
        assert session.history == []

    def test_navigate_pushes_previous_state(self, session: NavigationSession) -> None:
        session.show_library()
        session.navigate_to("docs")

        assert session.current_path == "LibraryFolder/docs"
        assert session.history == [NavigationEntry(kind="folder", path="LibraryFolder", view=View.LIBRARY)]
        assert session.listing.files == ["a.txt", "b.md", "paper.pdf"]

    def test_open_file_then_back_restores_folder(self, session: NavigationSession) -> None:
        session.show_library()
        session.navigate_to("docs")
        session.open_file(session.child_path("a.txt"))
        assert session.view == View.FILE
        assert session.file.content == "alpha"
        assert len(session.history) == 2

        session.go_back()

        assert session.view == View.LIBRARY
        assert session.current_path == "LibraryFolder/docs"
        assert session.listing.files == ["a.txt", "b.md", "paper.pdf"]
        assert len(session.history) == 1

    def test_back_across_files(self, session: NavigationSession) -> None:
        session.show_library()
        session.open_file("LibraryFolder/docs/a.txt")
        session.open_file("LibraryFolder/docs/b.md")

        session.go_back()

        assert session.view == View.FILE
        assert session.current == NavigationEntry(kind="file", path="LibraryFolder/docs/a.txt", view=View.FILE)
        assert session.file.content == "alpha"

    def test_back_to_home(self, session: NavigationSession) -> None:
        session.navigate_to("docs")

        session.go_back()

        assert session.view == View.HOME
        assert session.history == []

    def test_back_with_empty_history_goes_to_root(self, session: NavigationSession) -> None:
        session.show_library()
        session.navigate_to("docs", add_to_history=False)

        session.go_back()

        assert session.current_path == "LibraryFolder"
        assert session.view == View.LIBRARY

    def test_binary_file(self, session: NavigationSession) -> None:
        record = session.open_file("LibraryFolder/docs/paper.pdf")

        assert record.kind == "binary"
        assert record.content is None
        assert session.original_content == ""

    def test_breadcrumb(self, session: NavigationSession) -> None:
        session.navigate_to("docs/deep")

        assert session.breadcrumb() == [("Library", ""), ("docs", "docs"), ("deep", "docs/deep")]

    def test_breadcrumb_at_root(self, session: NavigationSession) -> None:
        session.show_library()
        assert session.breadcrumb() == [("Library", "")]

    def test_failed_listing_sets_error(self, session: NavigationSession) -> None:
        result = session.navigate_to("missing")

        assert result is None
        assert session.listing is None
        assert session.current_path == "LibraryFolder/missing"
        assert "Directory not found" in session.error

    def test_failed_file_sets_error(self, session: NavigationSession) -> None:
        assert session.open_file("LibraryFolder/ghost.txt") is None
        assert session.file is None
        assert 'Could not load file "ghost.txt"' in session.error

    def test_history_cap_drops_oldest(self, client: TestClient, tree: Path) -> None:
        session = NavigationSession(LibraryClient(http=client), max_history=2)
        session.show_library()
        session.navigate_to("docs")
        session.navigate_to("docs/deep")
        session.navigate_to("")

        assert [entry.path for entry in session.history] == ["LibraryFolder/docs", "LibraryFolder/docs/deep"]

    def test_unbounded_history(self, client: TestClient, tree: Path) -> None:
        session = NavigationSession(LibraryClient(http=client), max_history=None)
        for _ in range(150):
            session.navigate_to("docs")
        assert len(session.history) == 150

    def test_invalid_history_cap(self, client: TestClient) -> None:
        with pytest.raises(ValueError):
            NavigationSession(LibraryClient(http=client), max_history=0)

    def test_from_settings_uses_configured_cap(self, client: TestClient, tree: Path, settings: LibrarySettings) -> None:
        configured = settings.model_copy(update={"max_history": 2})
        session = NavigationSession.from_settings(LibraryClient(http=client), configured)
        for _ in range(5):
            session.navigate_to("docs")

        assert session.max_history == 2
        assert session.library_folder == "LibraryFolder"
        assert len(session.history) == 2


@pytest.mark.integration
class TestAdminFlows:
    def test_upload_view_needs_admin(self, session: NavigationSession) -> None:
        with pytest.raises(AdminRequiredError):
            session.show_upload()
        assert session.view == View.HOME

    def test_wrong_password(self, session: NavigationSession) -> None:
        assert session.login("nope") is False
        assert not session.is_admin
        assert session.error == "Incorrect password. Please try again."

    def test_upload_view_lists_folders(self, admin_session: NavigationSession) -> None:
        folders = admin_session.show_upload()

        assert admin_session.view == View.UPLOAD
        assert [f.path for f in folders] == ["LibraryFolder", "LibraryFolder/docs", "LibraryFolder/docs/deep"]

    def test_logout_leaves_upload_view(self, admin_session: NavigationSession) -> None:
        admin_session.show_upload()
        admin_session.logout()

        assert not admin_session.is_admin
        assert admin_session.view == View.HOME

    def test_edit_and_save(self, admin_session: NavigationSession, tree: Path) -> None:
        admin_session.open_file("LibraryFolder/docs/b.md")

        draft = admin_session.begin_edit()
        assert draft == "# Beta"
        assert admin_session.editing

        admin_session.save_edit("# Beta v2")

        assert not admin_session.editing
        assert admin_session.original_content == "# Beta v2"
        assert admin_session.file.content == "# Beta v2"
        assert (tree / "docs" / "b.md").read_text() == "# Beta v2"

    def test_cancel_edit_restores_display(self, admin_session: NavigationSession, tree: Path) -> None:
        admin_session.open_file("LibraryFolder/docs/a.txt")
        admin_session.begin_edit()
        admin_session.draft = "scribbles"

        admin_session.cancel_edit()

        assert not admin_session.editing
        assert admin_session.draft is None
        assert admin_session.file.content == "alpha"
        assert (tree / "docs" / "a.txt").read_text() == "alpha"

    def test_failed_save_keeps_state(self, admin_session: NavigationSession, tree: Path) -> None:
        admin_session.open_file("LibraryFolder/docs/a.txt")
        admin_session.begin_edit()
        (tree / "docs" / "a.txt").unlink()

        with pytest.raises(NotFoundError):
            admin_session.save_edit("new text")

        assert admin_session.editing
        assert admin_session.draft == "alpha"
        assert admin_session.original_content == "alpha"

    def test_edit_binary_rejected(self, admin_session: NavigationSession) -> None:
        admin_session.open_file("LibraryFolder/docs/paper.pdf")

        with pytest.raises(UnsupportedTypeError):
            admin_session.begin_edit()

    def test_edit_needs_open_file(self, admin_session: NavigationSession) -> None:
        admin_session.show_library()

        with pytest.raises(ValidationError):
            admin_session.begin_edit()

    def test_delete_clears_history_and_shows_parent(self, admin_session: NavigationSession, tree: Path) -> None:
        admin_session.show_library()
        admin_session.navigate_to("docs")
        admin_session.open_file(admin_session.child_path("a.txt"))

        admin_session.delete_current_file()

        assert not (tree / "docs" / "a.txt").exists()
        assert admin_session.history == []
        assert admin_session.view == View.LIBRARY
        assert admin_session.current_path == "LibraryFolder/docs"
        assert admin_session.listing.files == ["b.md", "paper.pdf"]

    def test_delete_top_level_file_shows_root(self, admin_session: NavigationSession) -> None:
        admin_session.open_file("LibraryFolder/top.txt")

        admin_session.delete_current_file()

        assert admin_session.current_path == "LibraryFolder"

    def test_delete_needs_admin(self, session: NavigationSession, tree: Path) -> None:
        session.open_file("LibraryFolder/top.txt")

        with pytest.raises(AdminRequiredError):
            session.delete_current_file()
        assert (tree / "top.txt").exists()

    def test_upload_refreshes_library(self, admin_session: NavigationSession, tree: Path) -> None:
        admin_session.navigate_to("docs")

        result = admin_session.upload("new.txt", b"fresh", target="LibraryFolder/docs")

        assert result["path"] == "LibraryFolder/docs/new.txt"
        assert "new.txt" in admin_session.listing.files
