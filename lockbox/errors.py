"""
Exceptions raised by the Lockbox core.

Route handlers translate these into the fixed plain-text responses the
HTTP layer exposes.
"""


class LockboxError(Exception):
    """Base class for all Lockbox errors."""


class NoFileUploaded(LockboxError):
    """The request carried no file payload."""


class StorageError(LockboxError):
    """The upload directory could not be read or written."""


class StoredFileNotFound(StorageError):
    """No stored file exists under the requested name."""

    def __init__(self, name: str):
        super().__init__(f"Stored file {name!r} not found")
        self.name = name
