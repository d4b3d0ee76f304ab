"""
File Storage Services

Domain service for accepting, serving and housekeeping uploaded files.
"""

import logging
import mimetypes
from datetime import datetime
from typing import BinaryIO, Iterable, List, Optional, Tuple

from ..errors import (
    FileTooLargeError,
    MissingFileError,
    StorageError,
    StoredFileNotFoundError,
    UnsupportedMediaTypeError,
)
from .entities import StoredFile
from .storage_repository import IFileStorageRepository
from .value_objects import InvalidStorageNameError, StorageName

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024
MAX_NAME_ATTEMPTS = 3


class UploadManager:
    """
    Domain service for the upload relay.

    Validates incoming files, assigns storage names and delegates the
    physical write to the storage repository.
    """

    def __init__(
        self,
        storage_repository: IFileStorageRepository,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
        allowed_media_types: Iterable[str] = (PDF_MEDIA_TYPE,),
    ):
        """
        Initialize UploadManager.

        Args:
            storage_repository: Repository for physical file storage
            max_upload_bytes: Largest accepted file in bytes
            allowed_media_types: Declared media types accepted for upload
        """
        self.storage_repo = storage_repository
        self.max_upload_bytes = max_upload_bytes
        self.allowed_media_types = frozenset(allowed_media_types)

    def check_media_type(self, media_type: Optional[str]) -> None:
        """
        Raises:
            UnsupportedMediaTypeError: If media_type is not allow-listed
        """
        if not media_type or media_type not in self.allowed_media_types:
            raise UnsupportedMediaTypeError(
                f"Media type {media_type!r} is not accepted"
            )

    def store(
        self,
        original_filename: Optional[str],
        media_type: Optional[str],
        content: BinaryIO,
        declared_size: Optional[int] = None,
    ) -> StoredFile:
        """
        Accept an uploaded file and persist it under a new storage name.

        All validation happens before the first byte is written.

        Args:
            original_filename: Filename supplied by the client
            media_type: Declared media type of the file part
            content: Binary stream of the file data
            declared_size: Size announced by the client, if any

        Returns:
            StoredFile describing the persisted file

        Raises:
            MissingFileError: If no filename was supplied
            UnsupportedMediaTypeError: If the media type is not allowed
            FileTooLargeError: If the file exceeds max_upload_bytes
            StorageError: If the file could not be written
        """
        if not original_filename:
            raise MissingFileError("Upload has no filename")

        self.check_media_type(media_type)

        if declared_size is not None and declared_size > self.max_upload_bytes:
            raise FileTooLargeError(
                f"Declared size {declared_size} exceeds limit {self.max_upload_bytes}"
            )

        storage_name = self._new_storage_name(original_filename)
        size = self.storage_repo.save_new(
            str(storage_name), content, max_bytes=self.max_upload_bytes
        )

        stored = StoredFile.create(original_filename, storage_name, media_type, size)
        logger.info(f"Stored upload: {stored.to_dict()}")
        return stored

    def _new_storage_name(self, original_filename: str) -> StorageName:
        for _ in range(MAX_NAME_ATTEMPTS):
            candidate = StorageName.generate(original_filename)
            if not self.storage_repo.exists(str(candidate)):
                return candidate
            logger.warning(f"Storage name collision on {candidate}, regenerating")

        raise StorageError("Could not allocate a unique storage name")

    def open(self, name: str) -> Tuple[BinaryIO, str]:
        """
        Open a stored file for reading.

        Args:
            name: Storage name as it appears in the retrieval URL

        Returns:
            Tuple of (binary stream, media type inferred from the extension)

        Raises:
            StoredFileNotFoundError: If no file is stored under name
        """
        content = self.storage_repo.get(name)
        if content is None:
            raise StoredFileNotFoundError(f"No stored file named {name!r}")

        media_type, _ = mimetypes.guess_type(name)
        return content, media_type or "application/octet-stream"

    def purge_older_than(self, cutoff: datetime, dry_run: bool = False) -> List[str]:
        """
        Remove stored files created before cutoff.

        Files whose names do not parse as storage names are left alone.

        Args:
            cutoff: Timezone-aware datetime; older files are removed
            dry_run: Only report what would be removed

        Returns:
            Names of the removed (or, in dry-run mode, matching) files
        """
        removed = []
        for name in self.storage_repo.list_names():
            try:
                storage_name = StorageName(name)
            except InvalidStorageNameError:
                logger.debug(f"Skipping foreign file {name!r}")
                continue

            if storage_name.created_at >= cutoff:
                continue

            if not dry_run:
                self.storage_repo.delete(name)
                logger.info(f"Purged {name}")
            removed.append(name)

        if not dry_run:
            staged = self.storage_repo.purge_staging(cutoff)
            if staged:
                logger.info(f"Purged {staged} abandoned staging files")

        return removed
