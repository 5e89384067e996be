"""Sharded file storage keyed by caller-supplied identifiers.

Identifiers are mapped to paths by `filestore.storage.paths.resolve`; this
module runs the filesystem side of save/get/remove/inspect against those
paths. Content is streamed in chunks, never buffered whole.
"""

import asyncio
import inspect
import logging
import os
from pathlib import Path
from typing import Any, AsyncIterator

from filestore.core.exceptions import StoredFileNotFoundError
from filestore.core.formatting import guess_mime, human_size
from filestore.schemas.file import FileInfo, StoredFile
from filestore.storage import fs
from filestore.storage.paths import PathSet, resolve

logger = logging.getLogger(__name__)

_END = object()


async def _iter_source(stream: Any, chunk_size: int) -> AsyncIterator[bytes]:
    """Yield byte chunks from a file-like object or a (sync or async) iterable."""
    if isinstance(stream, (bytes, bytearray, memoryview)):
        yield bytes(stream)
        return

    read = getattr(stream, "read", None)
    if read is not None:
        while True:
            if inspect.iscoroutinefunction(read):
                chunk = await read(chunk_size)
            else:
                chunk = await asyncio.to_thread(read, chunk_size)
            if not chunk:
                return
            yield chunk
    elif hasattr(stream, "__aiter__"):
        async for chunk in stream:
            yield chunk
    else:
        # sync iterators may block (sockets, pipes), so pull them off the loop
        it = iter(stream)
        while True:
            chunk = await asyncio.to_thread(next, it, _END)
            if chunk is _END:
                return
            yield chunk


async def _write_to_sink(sink: Any, chunk: bytes) -> None:
    result = sink.write(chunk)
    if inspect.isawaitable(result):
        await result
    drain = getattr(sink, "drain", None)
    if drain is not None and inspect.iscoroutinefunction(drain):
        await drain()


class FilePipe:
    """Read/write adapter for a single identifier.

    ``read(stream)`` stores the stream, ``write(sink)`` copies the stored
    content into the sink.
    """

    def __init__(self, store: "FileStore", identifier: str):
        self._store = store
        self._identifier = identifier

    async def read(self, from_stream: Any) -> StoredFile:
        return await self._store.save(self._identifier, from_stream)

    async def write(self, to_stream: Any) -> None:
        await self._store.pipe_to_stream(self._identifier, to_stream)


class FileStore:
    """Content storage rooted at `path`, addressed by arbitrary identifiers.

    Files land under a sharded tree:
        path/5c/22/93/36/0e/41/5c2293360e41ffc8d1b33b442f75dc0b328f4146.txt

    Public paths are the relative location with `prefix` prepended; the short
    form drops the shard directories and can be fed back in as an identifier.
    """

    def __init__(self, path: str | Path, prefix: str = "", chunk_size: int = fs.DEFAULT_CHUNK_SIZE):
        self._path = Path(path)
        self._prefix = prefix
        self._chunk_size = chunk_size

    @property
    def path(self) -> Path:
        return self._path

    @property
    def prefix(self) -> str:
        return self._prefix

    def resolve(self, identifier: str) -> PathSet:
        return resolve(identifier, self._path, self._prefix)

    async def get_path(self) -> Path:
        """Return the storage root, creating it if needed."""
        return await fs.ensure_dir(self._path)

    async def save(self, identifier: str, stream: Any) -> StoredFile:
        """Write *stream* to the location derived from *identifier*.

        Overwrites any previous content for the same identifier. A failure
        mid-copy leaves whatever was written so far in place.
        """
        await self.get_path()
        paths = self.resolve(identifier)
        await fs.ensure_dir(paths.shard_root_path)

        written = 0
        async with fs.open_write(paths.absolute_storage_path) as out:
            async for chunk in _iter_source(stream, self._chunk_size):
                if not chunk:
                    continue
                await out.write(chunk)
                written += len(chunk)

        logger.info("Stored %s at %s (%d bytes)", identifier, paths.shard_relative_path, written)
        return StoredFile(
            id=identifier,
            path=paths.public_long_path,
            short_path=paths.public_short_path,
        )

    async def get(self, identifier: str) -> AsyncIterator[bytes]:
        """Return an async iterator over the stored content.

        Raises StoredFileNotFoundError when nothing readable is stored for
        *identifier*.
        """
        paths = self.resolve(identifier)
        if not await fs.is_readable(paths.absolute_storage_path):
            raise StoredFileNotFoundError(paths.absolute_storage_path)
        return fs.read_chunks(paths.absolute_storage_path, self._chunk_size)

    async def exists(self, identifier: str) -> bool:
        return await fs.is_readable(self.resolve(identifier).absolute_storage_path)

    def pipe(self, identifier: str) -> FilePipe:
        return FilePipe(self, identifier)

    async def pipe_to_stream(self, identifier: str, to_stream: Any) -> None:
        """Copy stored content for *identifier* into *to_stream*."""
        chunks = await self.get(identifier)
        async for chunk in chunks:
            await _write_to_sink(to_stream, chunk)

    async def remove(self, identifier: str) -> None:
        """Delete stored content. Removing something that was never stored is a no-op."""
        paths = self.resolve(identifier)
        await fs.remove(paths.absolute_storage_path)
        logger.info("Removed %s (%s)", identifier, paths.shard_relative_path)

    async def destroy(self) -> None:
        """Delete the whole store, every shard included."""
        root = await self.get_path()
        await fs.remove(root)
        logger.info("Destroyed file store at %s", root)

    async def get_info(self, identifier: str) -> FileInfo:
        """Describe the file stored for *identifier*.

        Never fails for a missing file: `mime`, `size` and `human_size` are
        left as None instead.
        """
        paths = self.resolve(identifier)
        info = FileInfo(
            id=identifier,
            local_path=paths.shard_relative_path,
            client_path=paths.public_long_path,
            short_client_path=paths.public_short_path,
        )

        st = await self._probe(paths.absolute_storage_path)
        if st is not None:
            info.size = st.st_size
            info.human_size = human_size(st.st_size)
            info.mime = guess_mime(paths.content_digest)
        return info

    async def _probe(self, path: Path) -> os.stat_result | None:
        if not await fs.is_readable(path):
            if await fs.exists(path):
                logger.warning("File exists but is not readable: %s", path)
            else:
                logger.debug("No file at %s", path)
            return None
        try:
            return await fs.stat(path)
        except FileNotFoundError:
            # removed between the access check and the stat
            logger.debug("File vanished before stat: %s", path)
            return None
        except OSError as exc:
            logger.warning("Could not stat %s: %s", path, exc)
            return None
