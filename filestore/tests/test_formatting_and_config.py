"""Tests for display helpers, settings validation and exception types."""

import pytest
from fastapi import HTTPException

from filestore.config import Settings, validate_settings
from filestore.core.exceptions import (
    FileNotFoundHTTPError,
    FileStoreError,
    InvalidIdentifierError,
    InvalidIdentifierHTTPError,
    StoredFileNotFoundError,
)
from filestore.core.formatting import guess_mime, human_size
from filestore.services import storage_service


# ============================================================================
# human_size / guess_mime
# ============================================================================

class TestHumanSize:

    @pytest.mark.parametrize("num_bytes, expected", [
        (0, "0 B"),
        (24, "24 B"),
        (1023, "1023 B"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (1024 * 1024, "1 MB"),
        (1024 * 1024 - 1, "1 MB"),
        (5 * 1024 ** 3 + 300 * 1024 ** 2, "5.29 GB"),
    ])
    def test_formats(self, num_bytes, expected):
        assert human_size(num_bytes) == expected

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            human_size(-1)


class TestGuessMime:

    @pytest.mark.parametrize("name, expected", [
        ("some:uniq:id:to-this-file.txt", "text/plain"),
        ("5c2293360e41ffc8d1b33b442f75dc0b328f4146.json", "application/json"),
        ("photo.PNG", "image/png"),
        ("dir.with.dots/file.pdf", "application/pdf"),
    ])
    def test_known_extensions(self, name, expected):
        assert guess_mime(name) == expected

    def test_no_extension(self):
        assert guess_mime("README") is None

    def test_unknown_extension(self):
        assert guess_mime("data.zzqqx") is None


# ============================================================================
# Settings
# ============================================================================

class TestSettings:

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("FILESTORE_CONTENT_STORE_PATH", "/var/lib/filestore")
        monkeypatch.setenv("FILESTORE_PUBLIC_PREFIX", "https://cdn.example.com/u/")
        monkeypatch.setenv("FILESTORE_CHUNK_SIZE", "4096")

        cfg = Settings()
        assert cfg.content_store_path == "/var/lib/filestore"
        assert cfg.public_prefix == "https://cdn.example.com/u/"
        assert cfg.chunk_size == 4096

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("FILESTORE_PUBLIC_PREFIX", raising=False)
        cfg = Settings(_env_file=None)
        assert cfg.public_prefix == ""
        assert cfg.chunk_size == 64 * 1024

    def test_non_positive_chunk_size_rejected(self):
        with pytest.raises(RuntimeError, match="CHUNK_SIZE"):
            validate_settings(Settings(_env_file=None, chunk_size=0))

    def test_wildcard_cors_rejected_in_production(self):
        cfg = Settings(_env_file=None, environment="production", cors_origins="*")
        with pytest.raises(RuntimeError, match="CORS"):
            validate_settings(cfg)

    def test_wildcard_cors_allowed_in_development(self):
        validate_settings(Settings(_env_file=None, environment="development", cors_origins="*"))

    def test_get_store_uses_settings(self, monkeypatch, store_dir):
        monkeypatch.setattr(storage_service.settings, "content_store_path", str(store_dir))
        monkeypatch.setattr(storage_service.settings, "public_prefix", "/files/")
        storage_service.reset_store()
        try:
            store = storage_service.get_store()
            assert str(store.path) == str(store_dir)
            assert store.prefix == "/files/"
            assert storage_service.get_store() is store
        finally:
            storage_service.reset_store()


# ============================================================================
# Exceptions
# ============================================================================

class TestExceptions:

    def test_not_found_carries_path(self):
        err = StoredFileNotFoundError("/srv/store/5c/22/x.txt")
        assert err.path == "/srv/store/5c/22/x.txt"
        assert "/srv/store/5c/22/x.txt" in str(err)
        assert "does not exist" in str(err)
        assert isinstance(err, FileStoreError)
        assert isinstance(err, FileNotFoundError)

    def test_invalid_identifier_is_value_error(self):
        err = InvalidIdentifierError("")
        assert isinstance(err, ValueError)
        assert isinstance(err, FileStoreError)

    def test_http_not_found_is_404(self):
        err = FileNotFoundHTTPError("report.pdf")
        assert isinstance(err, HTTPException)
        assert err.status_code == 404
        assert "report.pdf" in err.detail

    def test_http_invalid_identifier_is_400(self):
        assert InvalidIdentifierHTTPError("").status_code == 400
