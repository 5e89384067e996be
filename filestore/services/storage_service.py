from filestore.config import settings
from filestore.storage.file_store import FileStore

# Singleton store instance
_store = None


def get_store() -> FileStore:
    """Get or create the global file store built from settings."""
    global _store
    if _store is None:
        _store = FileStore(
            settings.content_store_path,
            prefix=settings.public_prefix,
            chunk_size=settings.chunk_size,
        )
    return _store


def reset_store() -> None:
    """Drop the cached store so the next get_store() re-reads settings."""
    global _store
    _store = None
