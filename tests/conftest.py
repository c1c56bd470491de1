"""
Shared pytest fixtures for the VIM Library test suite.

Provides fixtures for:
- An isolated base directory holding LibraryFolder
- Settings and an app built from them
- A FastAPI test client and admin auth headers
"""

from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from library_core.config.settings import LibrarySettings
from libraryd.main import create_app
from libraryd.services.library_service import LibraryService

ADMIN_PASSWORD = "correct horse battery staple"


@pytest.fixture(autouse=True)
def mock_storage_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point VIMLIB_HOME at a temp directory and clear other overrides."""
    home = tmp_path / "vimlib_home"
    monkeypatch.setenv("VIMLIB_HOME", str(home))
    for var in ("VIMLIB_CONFIG_DIR", "VIMLIB_ADMIN_PASSWORD", "VIMLIB_DATA_PATH", "VIMLIB_PORT", "VIMLIB_URL"):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    """Base directory containing an empty LibraryFolder."""
    base = tmp_path / "site"
    (base / "LibraryFolder").mkdir(parents=True)
    return base


@pytest.fixture
def library_root(base_dir: Path) -> Path:
    return base_dir / "LibraryFolder"


@pytest.fixture
def settings(base_dir: Path) -> LibrarySettings:
    return LibrarySettings(data_path=str(base_dir), admin_password=ADMIN_PASSWORD, max_upload_mb=1)


@pytest.fixture
def service(base_dir: Path) -> LibraryService:
    return LibraryService(base_dir, max_upload_bytes=1024)


@pytest.fixture
def client(settings: LibrarySettings) -> Generator[TestClient, None, None]:
    """FastAPI test client for an app built from the test settings."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def admin_password() -> str:
    return ADMIN_PASSWORD


@pytest.fixture
def admin_headers(client: TestClient) -> dict[str, str]:
    response = client.post("/api/admin/login", json={"password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
