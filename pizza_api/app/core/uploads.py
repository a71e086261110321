"""
Storage for uploaded ingredient images.

Files are addressed by name inside a single directory which the
application also serves as static assets.  Writes go to a temporary
file first and are moved into place, so a reader never sees a half
written image under its final name.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Union

from .errors import StorageError

logger = logging.getLogger(__name__)


class UploadStorage:
    """Directory of uploaded files addressed by file name."""

    def __init__(self, directory: Union[str, Path]) -> None:
        self.directory = Path(directory)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create upload directory {self.directory}: {exc}") from exc

    def path_for(self, file_name: str) -> Path:
        # Names are derived from validated slugs and extensions, but never
        # let one escape the upload directory.
        if not file_name or Path(file_name).name != file_name:
            raise ValueError(f"Invalid upload file name: {file_name!r}")
        return self.directory / file_name

    def exists(self, file_name: str) -> bool:
        return self.path_for(file_name).is_file()

    def save(self, file_name: str, content: bytes) -> Path:
        """Write ``content`` under ``file_name``, replacing any existing file."""
        target = self.path_for(file_name)
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{file_name}.", dir=str(self.directory))
            with os.fdopen(fd, "wb") as fh:
                fh.write(content)
            os.replace(tmp_name, target)
        except OSError as exc:
            logger.error("Failed to store upload %s: %s", target, exc)
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Cannot store upload {file_name}: {exc}") from exc
        logger.info("Stored upload %s (%d bytes)", file_name, len(content))
        return target

    def remove(self, file_name: str) -> bool:
        """Delete ``file_name`` if present.  Returns whether a file was removed."""
        target = self.path_for(file_name)
        try:
            target.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            logger.error("Failed to remove upload %s: %s", target, exc)
            raise StorageError(f"Cannot remove upload {file_name}: {exc}") from exc
        logger.info("Removed upload %s", file_name)
        return True
