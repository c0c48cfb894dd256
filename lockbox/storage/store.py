"""
Upload store.

Keeps uploaded files in a single flat directory. Each upload is saved as
``<upload time in ms><original extension>``; no other metadata is kept.

With ``strict_unique_names`` off, two uploads landing in the same
millisecond get the same name and the later one overwrites the earlier.
With it on, names are issued under a lock, the millisecond value is bumped
past the last issued name and any file already on disk, and files are
created exclusively.
"""

import logging
import os
import shutil
import threading
import time
from pathlib import Path
from typing import BinaryIO, Callable, Optional, Union

from lockbox.errors import NoFileUploaded, StorageError, StoredFileNotFound

logger = logging.getLogger(__name__)


def extension_of(original_name: str) -> str:
    """Return the extension of the base name, including the dot, or ''."""
    base = os.path.basename(original_name.replace("\\", "/"))
    return os.path.splitext(base)[1]


def current_millis() -> int:
    return time.time_ns() // 1_000_000


class UploadStore:
    """Reads and writes stored files in the upload directory."""

    def __init__(
        self,
        directory: Union[str, Path],
        strict_unique_names: bool = False,
        clock: Callable[[], int] = current_millis,
    ):
        self.directory = Path(directory)
        self.strict_unique_names = strict_unique_names
        self._clock = clock
        self._lock = threading.Lock()
        self._last_millis = 0

    def ensure_directory(self) -> None:
        """Create the upload directory if it does not exist."""
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create upload directory {self.directory}: {e}") from e

    def generate_name(self, original_name: str) -> str:
        """
        Build the stored name for an upload.

        Args:
            original_name: File name as sent by the client

        Returns:
            ``<millis><extension>``
        """
        ext = extension_of(original_name)
        if not self.strict_unique_names:
            return f"{self._clock()}{ext}"

        with self._lock:
            millis = max(self._clock(), self._last_millis + 1)
            while (self.directory / f"{millis}{ext}").exists():
                millis += 1
            self._last_millis = millis
            return f"{millis}{ext}"

    def store(self, stream: Optional[BinaryIO], original_name: Optional[str]) -> str:
        """
        Save an uploaded file.

        Args:
            stream: Readable binary stream with the file content
            original_name: File name as sent by the client

        Returns:
            Name the file was stored under

        Raises:
            NoFileUploaded: If no payload was given
            StorageError: If the file could not be written
        """
        if stream is None or not original_name:
            raise NoFileUploaded("No file uploaded.")

        self.ensure_directory()

        while True:
            stored_name = self.generate_name(original_name)
            path = self.directory / stored_name
            mode = "xb" if self.strict_unique_names else "wb"
            try:
                with open(path, mode) as f:
                    shutil.copyfileobj(stream, f)
            except FileExistsError:
                # another writer created the name after it was issued
                continue
            except OSError as e:
                self._discard(path)
                raise StorageError(f"Cannot write {stored_name}: {e}") from e
            except Exception:
                self._discard(path)
                raise
            break

        logger.info(f"Stored upload {original_name!r} as {stored_name}")
        return stored_name

    def _discard(self, path: Path) -> None:
        """Remove a partially written file."""
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.error(f"Error removing partial upload {path}: {str(e)}")

    def _resolve(self, stored_name: str) -> Path:
        root = self.directory.resolve()
        path = (root / stored_name).resolve()
        if path.parent != root:
            raise StoredFileNotFound(stored_name)
        return path

    def retrieve(self, stored_name: str) -> Path:
        """
        Locate a stored file.

        Args:
            stored_name: Name returned by ``store``

        Returns:
            Path of the file inside the upload directory

        Raises:
            StoredFileNotFound: If the name is outside the directory or absent
        """
        path = self._resolve(stored_name)
        if not path.is_file():
            raise StoredFileNotFound(stored_name)
        return path

    def delete(self, stored_name: str) -> None:
        """
        Remove a stored file.

        Raises:
            StoredFileNotFound: If no such file exists
            StorageError: On any other filesystem failure
        """
        path = self._resolve(stored_name)
        try:
            os.remove(path)
        except (FileNotFoundError, IsADirectoryError) as e:
            raise StoredFileNotFound(stored_name) from e
        except OSError as e:
            raise StorageError(f"Cannot delete {stored_name}: {e}") from e

        logger.info(f"Deleted stored file {stored_name}")
