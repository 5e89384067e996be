"""Identifier to on-disk path derivation.

Every stored file lives under a sharded directory tree derived from its
content digest:

    root/5c/22/93/36/0e/41/5c2293360e41ffc8d1b33b442f75dc0b328f4146.txt

The first `SHARD_DEPTH` segments of `SHARD_WIDTH` hex characters each become
subdirectories, so no single directory ends up holding too many files.
Everything here is pure; nothing touches the filesystem.
"""

import enum
import hashlib
import posixpath
import re
from dataclasses import dataclass
from pathlib import Path

from filestore.core.exceptions import InvalidIdentifierError

SHARD_DEPTH = 6
SHARD_WIDTH = 2

# 40 hex chars plus an optional short extension, matched at the end of the
# identifier so a full public short path (prefix included) is recognised too.
_CANONICAL_RE = re.compile(r"([a-f0-9]{40})(\.\w{1,20})?\Z", re.ASCII)


class IdentifierKind(enum.Enum):
    RAW = "raw"
    CANONICAL = "canonical"


@dataclass(frozen=True)
class ClassifiedIdentifier:
    kind: IdentifierKind
    digest: str
    extension: str

    @property
    def content_digest(self) -> str:
        return self.digest + self.extension


@dataclass(frozen=True)
class PathSet:
    identifier: str
    content_digest: str
    extension: str
    shard_segments: str
    shard_relative_path: str
    absolute_storage_path: Path
    shard_root_path: Path
    public_long_path: str
    public_short_path: str


def classify_identifier(identifier: str) -> ClassifiedIdentifier:
    """Split *identifier* into digest and extension, hashing it only if needed.

    Identifiers that already end in a digest (optionally with an extension)
    are trusted as-is and never re-hashed.
    """
    if not identifier:
        raise InvalidIdentifierError(identifier)

    match = _CANONICAL_RE.search(identifier)
    if match:
        return ClassifiedIdentifier(
            kind=IdentifierKind.CANONICAL,
            digest=match.group(1),
            extension=match.group(2) or "",
        )

    return ClassifiedIdentifier(
        kind=IdentifierKind.RAW,
        digest=hashlib.sha1(identifier.encode("utf-8", "surrogatepass")).hexdigest(),
        extension=posixpath.splitext(identifier)[1],
    )


def shard_segments(digest: str) -> str:
    """Split the leading hex characters of *digest* into nested directory names."""
    parts = [
        digest[i * SHARD_WIDTH : (i + 1) * SHARD_WIDTH]
        for i in range(SHARD_DEPTH)
    ]
    return "/".join(parts)


def resolve(identifier: str, storage_root: str | Path, public_prefix: str = "") -> PathSet:
    classified = classify_identifier(identifier)
    content_digest = classified.content_digest
    segments = shard_segments(classified.digest)
    relative = f"{segments}/{content_digest}"
    root = Path(storage_root)

    return PathSet(
        identifier=identifier,
        content_digest=content_digest,
        extension=classified.extension,
        shard_segments=segments,
        shard_relative_path=relative,
        absolute_storage_path=root / relative,
        shard_root_path=root / segments,
        public_long_path=public_prefix + relative,
        public_short_path=public_prefix + content_digest,
    )
