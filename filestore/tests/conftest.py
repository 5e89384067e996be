"""Shared fixtures for the file store test suite.

Each test gets its own temporary store root, so nothing leaks between tests.
"""

import shutil
import tempfile
from pathlib import Path

import pytest

from filestore.main import app
from filestore.services.storage_service import get_store
from filestore.storage.file_store import FileStore

PREFIX = "http://host.com/uploads/"


@pytest.fixture
def store_dir():
    """Create and tear down a temporary directory for store tests."""
    d = tempfile.mkdtemp(prefix="filestore_")
    yield Path(d)
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def store_root(store_dir: Path) -> Path:
    return store_dir / "store"


@pytest.fixture
def store(store_root: Path) -> FileStore:
    """Yield a fresh FileStore with the public prefix used across the suite."""
    return FileStore(str(store_root), prefix=PREFIX)


@pytest.fixture
async def client(store: FileStore):
    """httpx AsyncClient wired to the FastAPI app with the test store injected."""
    import httpx

    app.dependency_overrides[get_store] = lambda: store

    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
