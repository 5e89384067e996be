"""Async filesystem primitives used by the file store.

Blocking metadata calls run in the default executor via asyncio.to_thread();
byte streams go through aiofiles so a copy never holds a whole file in memory.
"""

import asyncio
import os
import shutil
from pathlib import Path
from typing import AsyncIterator

import aiofiles

DEFAULT_CHUNK_SIZE = 64 * 1024


def _ensure_dir_sync(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def _remove_sync(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink(missing_ok=True)


async def ensure_dir(path: str | Path) -> Path:
    """Create *path* and any missing parents; no-op when it already exists."""
    return await asyncio.to_thread(_ensure_dir_sync, Path(path))


async def exists(path: str | Path) -> bool:
    return await asyncio.to_thread(os.path.exists, path)


async def is_readable(path: str | Path) -> bool:
    return await asyncio.to_thread(os.access, path, os.R_OK)


async def stat(path: str | Path) -> os.stat_result:
    """Stat *path*; raises FileNotFoundError when absent."""
    return await asyncio.to_thread(os.stat, path)


async def remove(path: str | Path) -> None:
    """Delete a file or a whole directory tree. Missing paths are ignored."""
    await asyncio.to_thread(_remove_sync, Path(path))


def open_write(path: str | Path):
    return aiofiles.open(path, "wb")


async def read_chunks(path: str | Path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> AsyncIterator[bytes]:
    async with aiofiles.open(path, "rb") as f:
        while True:
            chunk = await f.read(chunk_size)
            if not chunk:
                break
            yield chunk
