"""Blob storage for uploaded asset files."""

from __future__ import annotations

import logging
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Protocol

logger = logging.getLogger(__name__)

__all__ = ["BlobStorage", "LocalBlobStorage", "StoredBlob"]


@dataclass(frozen=True)
class StoredBlob:
    """Location of a stored file."""

    name: str
    path: str


class BlobStorage(Protocol):
    """Anything that can persist an uploaded stream and report where it went."""

    def save(self, filename: str, stream: BinaryIO) -> StoredBlob: ...


class LocalBlobStorage:
    """Store blobs in a directory on the local filesystem.

    Files are named ``<epoch-ms>-<basename>``. An existing file is never
    overwritten: on a clash the timestamp is bumped until the name is free.
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def save(self, filename: str, stream: BinaryIO) -> StoredBlob:
        """Copy ``stream`` into the storage directory.

        Raises:
            OSError: If the directory cannot be created or the file written.
        """
        self.directory.mkdir(parents=True, exist_ok=True)
        basename = Path(filename).name or "upload"
        stamp = int(time.time() * 1000)
        while True:
            target = self.directory / f"{stamp}-{basename}"
            try:
                out = target.open("xb")
            except FileExistsError:
                stamp += 1
                continue
            break
        with out:
            shutil.copyfileobj(stream, out)
        logger.debug("Stored upload %s at %s", basename, target)
        return StoredBlob(name=filename, path=target.as_posix())
