from __future__ import annotations

from datetime import datetime
from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

ADMIN_TOKEN = "test-admin-token"
FIXED_NOW = datetime(2025, 1, 2, 3, 4, 5)


@pytest.fixture
def sandbox_project(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Redirect the project root to a temp directory so tests never touch a real products.json.
    """
    import persistence.paths as paths

    monkeypatch.setattr(paths, "project_root", lambda: tmp_path)
    for name in ("CATALOG_DATA_FILE", "CATALOG_BACKUP_DIR", "ADMIN_TOKEN", "REQUIRE_IF_MATCH", "CORS_ALLOW_ORIGINS"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


@pytest.fixture
def settings(sandbox_project: Path):
    from settings import Settings

    return Settings(
        data_file=sandbox_project / "products.json",
        backup_dir=sandbox_project / "backups",
        admin_token=ADMIN_TOKEN,
        require_if_match=False,
        debug_log_requests=True,
        cors_allow_origins=(),
    )


@pytest.fixture
def store(settings):
    from persistence import CatalogStore, DiskBackupArchiver, DiskCatalogDocumentStore

    return CatalogStore(
        DiskCatalogDocumentStore(settings.data_file),
        DiskBackupArchiver(settings.backup_dir, clock=lambda: FIXED_NOW),
    )


@pytest.fixture
def client(settings):
    from fastapi.testclient import TestClient

    import app as app_module

    return TestClient(app_module.create_app(settings))
