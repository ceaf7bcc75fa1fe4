"""Zip archive of chunk images, streamed from a temporary file."""

import logging
import os
import tempfile
import zipfile
from collections.abc import AsyncIterator
from pathlib import Path

from quire.application.dto.chunk_dto import ChunkWithImage

logger = logging.getLogger(__name__)

READ_SIZE = 64 * 1024


class TempFileStream:
    """Async byte stream over a temporary file that is deleted once closed.

    Falcon awaits ``close()`` after the response is sent or the client
    disconnects; iteration also removes the file when it ends or fails.
    """

    def __init__(self, path: Path, read_size: int = READ_SIZE) -> None:
        self.path = path
        self._read_size = read_size
        self._closed = False

    def __aiter__(self) -> AsyncIterator[bytes]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[bytes]:
        try:
            with open(self.path, "rb") as fh:
                while data := fh.read(self._read_size):
                    yield data
        finally:
            await self.close()

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            os.unlink(self.path)
            logger.debug("Removed temporary archive %s", self.path)
        except FileNotFoundError:
            pass


def archive_name(entry: ChunkWithImage) -> str:
    """Name inside the zip: chunk order first so files sort in reading order."""
    return f"{entry.chunk.order:04d}_{entry.image.filename}"


def build_image_archive(
    entries: list[ChunkWithImage],
    images_dir: Path,
    tmp_dir: str | None = None,
) -> TempFileStream:
    """Write images of entries into a temporary zip and return a stream over it.

    Missing files are logged and left out. The temporary file is removed if
    writing fails.
    """
    fd, name = tempfile.mkstemp(prefix="quire-images-", suffix=".zip", dir=tmp_dir)
    path = Path(name)
    try:
        with os.fdopen(fd, "wb") as fh, zipfile.ZipFile(fh, "w", zipfile.ZIP_STORED) as zf:
            for entry in entries:
                if entry.image is None:
                    continue
                source = images_dir / entry.image.filename
                if not source.is_file():
                    logger.warning("Image %s for chunk %s not found, skipping", source, entry.chunk.id)
                    continue
                zf.write(source, arcname=archive_name(entry))
    except BaseException:
        path.unlink(missing_ok=True)
        raise
    return TempFileStream(path)
