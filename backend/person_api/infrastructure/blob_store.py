"""Filesystem Blob Store — aiofiles implementation of the BlobStore protocol.

Invariants:
    - write() fully replaces any previous blob with the same name, or fails
      leaving the previous blob intact (temp file + atomic rename)
    - Filenames are flat: path separators and parent references rejected
    - Root directory created on demand

Design Decisions:
    - aiofiles over blocking open(): writes suspend instead of stalling the loop
"""

import logging
import os
import uuid
from pathlib import Path

import aiofiles
import aiofiles.os

logger = logging.getLogger(__name__)


class FilesystemBlobStore:
    """Stores blobs as files under a single root directory."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def path_for(self, filename: str) -> Path:
        if not filename or os.sep in filename or "/" in filename or filename in (".", ".."):
            raise ValueError(f"Invalid blob filename: {filename!r}")
        return self.root / filename

    async def write(self, filename: str, content: bytes) -> str:
        """Write content atomically; return the final path."""
        target = self.path_for(filename)
        await aiofiles.os.makedirs(self.root, exist_ok=True)
        tmp = self.root / f".{filename}.{uuid.uuid4().hex}.tmp"
        try:
            async with aiofiles.open(tmp, mode="wb") as f:
                await f.write(content)
                await f.flush()
            await aiofiles.os.replace(tmp, target)
        except OSError:
            if await aiofiles.os.path.exists(tmp):
                await aiofiles.os.remove(tmp)
            logger.error(f"Blob write failed for {filename}", exc_info=True)
            raise
        return str(target)
