"""
File Storage Repository Interface

Abstract interface for physical storage of uploaded files.
This keeps the domain layer independent of the on-disk layout so the
upload rules can be tested against an in-memory double.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import BinaryIO, List, Optional


class IFileStorageRepository(ABC):
    """
    Interface for the append-only upload store.

    Contract Guarantees:
    - Names are flat (no directories); invalid names behave like missing files
    - save_new() never replaces an existing file
    - Content is visible under its name only once it is completely written
    - get() and exists() never raise for unknown names
    """

    @abstractmethod
    def save_new(self, name: str, content: BinaryIO,
                 max_bytes: Optional[int] = None) -> int:
        """
        Write content under a name that must not exist yet.

        Args:
            name: Storage name of the new file
            content: Binary stream positioned at the start of the data
            max_bytes: Abort when the stream is longer than this

        Returns:
            Number of bytes written

        Raises:
            FileTooLargeError: If content exceeds max_bytes (nothing is published)
            StorageError: If the name is taken or the write fails
            ValueError: If the name is invalid
        """
        pass  # pragma: no cover

    @abstractmethod
    def get(self, name: str) -> Optional[BinaryIO]:
        """
        Retrieve stored content.

        Returns:
            Binary stream positioned at the start, or None if not found
        """
        pass  # pragma: no cover

    @abstractmethod
    def exists(self, name: str) -> bool:
        pass  # pragma: no cover

    @abstractmethod
    def delete(self, name: str) -> bool:
        """
        Delete a stored file.

        Idempotent: deleting a missing file returns True.
        """
        pass  # pragma: no cover

    @abstractmethod
    def list_names(self) -> List[str]:
        """Names of all published files, sorted."""
        pass  # pragma: no cover

    @abstractmethod
    def purge_staging(self, older_than: datetime) -> int:
        """
        Remove abandoned partial writes last modified before older_than.

        Returns:
            Number of staging files removed
        """
        pass  # pragma: no cover
