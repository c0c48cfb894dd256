"""
File catalog: the directory listing of the upload store.
"""

import logging
import os
from typing import List

from lockbox.errors import StorageError
from lockbox.storage.store import UploadStore

logger = logging.getLogger(__name__)


class FileCatalog:
    """Enumerates stored files. Nothing is cached between calls."""

    def __init__(self, store: UploadStore):
        self.store = store

    def list_all(self) -> List[str]:
        """
        List every stored file name.

        Order is whatever the filesystem returns.

        Raises:
            StorageError: If the upload directory cannot be read
        """
        directory = self.store.directory
        try:
            names = os.listdir(directory)
            return [name for name in names if os.path.isfile(os.path.join(directory, name))]
        except OSError as e:
            logger.error(f"Error scanning {directory}: {str(e)}")
            raise StorageError(f"Cannot list {directory}: {e}") from e
