import logging
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Environment
    environment: str = "development"  # development | test | production

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Content storage: root of the sharded file tree
    content_store_path: str = "./data/content_store"

    # Prepended verbatim to public long/short paths, e.g. "https://cdn.example.com/uploads/"
    public_prefix: str = ""

    # Stream copy chunk size in bytes
    chunk_size: int = 64 * 1024

    # CORS
    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    # Logging
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "FILESTORE_",
        "extra": "ignore",
    }


settings = Settings()

_logger = logging.getLogger("filestore.config")


def validate_settings(cfg: Settings) -> None:
    is_prod = cfg.environment.lower() in {"production", "prod"}

    if cfg.chunk_size <= 0:
        raise RuntimeError(
            "FATAL: FILESTORE_CHUNK_SIZE must be a positive number of bytes."
        )

    if is_prod and not Path(cfg.content_store_path).is_absolute():
        _logger.warning(
            "FILESTORE_CONTENT_STORE_PATH is relative (%s). "
            "Use an absolute path in production so the store does not move with the working directory.",
            cfg.content_store_path,
        )

    if cfg.cors_origins == "*":
        if is_prod:
            raise RuntimeError(
                "FATAL: FILESTORE_CORS_ORIGINS cannot be '*' in production. "
                "Set explicit trusted origins via the FILESTORE_CORS_ORIGINS environment variable."
            )
        _logger.warning(
            "FILESTORE_CORS_ORIGINS is set to '*' (allow all). "
            "Configure specific origins for production."
        )


validate_settings(settings)
