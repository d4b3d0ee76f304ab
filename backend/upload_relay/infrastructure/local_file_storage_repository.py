"""
Local File Storage Repository Implementation

Concrete implementation of IFileStorageRepository on the local filesystem.
Uploads are first written to a hidden staging directory and then published
with a hard link, which fails instead of replacing an existing file.

The upload directory must live on a filesystem that supports hard links.
On volumes without them (FAT, some container bind mounts) os.link raises
and every upload is reported as a storage error.
"""

import logging
import os
import uuid
from datetime import datetime
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, List, Optional

from upload_relay.domain.errors import FileTooLargeError, StorageError
from upload_relay.domain.file_storage.storage_repository import IFileStorageRepository

logger = logging.getLogger(__name__)

STAGING_DIRNAME = ".staging"
CHUNK_SIZE = 64 * 1024


class LocalFileStorageRepository(IFileStorageRepository):
    """
    Local filesystem implementation of IFileStorageRepository.

    Thread Safety:
        Concurrent saves write to distinct staging files and publish with
        os.link, so no locking is required. Reads never observe partial data.

    Attributes:
        base_path: Upload directory served under /uploads
        staging_path: Hidden directory holding in-progress writes
    """

    def __init__(self, base_path: str = "uploads"):
        """
        Initialize the local file storage repository.

        Args:
            base_path: Upload directory (created if missing)
        """
        self.base_path = Path(base_path)
        self.staging_path = self.base_path / STAGING_DIRNAME
        self._ensure_directories()

    def _ensure_directories(self) -> None:
        """
        Raises:
            PermissionError: If insufficient permissions to create directory
            OSError: If directory creation fails for other reasons
        """
        try:
            self.staging_path.mkdir(parents=True, exist_ok=True)
        except PermissionError as e:
            raise PermissionError(
                f"Insufficient permissions to create storage directory: {self.base_path}"
            ) from e
        except OSError as e:
            raise OSError(
                f"Failed to create storage directory: {self.base_path}"
            ) from e

    def _resolve(self, name: str) -> Optional[Path]:
        """
        Map a storage name to its path, or None if the name is not servable.

        Names must be a single visible path component.
        """
        if not name or not name.strip():
            return None
        if name.startswith(".") or "\x00" in name:
            return None
        if "/" in name or "\\" in name or Path(name).name != name:
            return None
        return self.base_path / name

    # IFileStorageRepository interface methods

    def save_new(self, name: str, content: BinaryIO,
                 max_bytes: Optional[int] = None) -> int:
        full_path = self._resolve(name)
        if full_path is None:
            raise ValueError(f"Invalid storage name: {name!r}")

        staging_file = self.staging_path / f"{uuid.uuid4().hex}.part"
        written = 0
        try:
            with open(staging_file, "xb") as f:
                while True:
                    chunk = content.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if max_bytes is not None and written > max_bytes:
                        raise FileTooLargeError(
                            f"Upload exceeds limit of {max_bytes} bytes"
                        )
                    f.write(chunk)
                f.flush()
                os.fsync(f.fileno())

            os.link(staging_file, full_path)
        except FileTooLargeError:
            raise
        except FileExistsError as e:
            raise StorageError(f"Storage name already taken: {name}", e) from e
        except OSError as e:
            logger.error(f"Failed to save {name}: {e}")
            raise StorageError(f"Failed to save file: {e}", e) from e
        finally:
            try:
                staging_file.unlink()
            except FileNotFoundError:
                pass

        return written

    def get(self, name: str) -> Optional[BinaryIO]:
        full_path = self._resolve(name)
        if full_path is None:
            return None

        try:
            if not full_path.is_file():
                return None

            # Size is bounded by the upload limit
            with open(full_path, "rb") as f:
                content = BytesIO(f.read())

            content.seek(0)
            return content
        except OSError:
            return None

    def exists(self, name: str) -> bool:
        full_path = self._resolve(name)
        if full_path is None:
            return False

        try:
            return full_path.is_file()
        except OSError:
            return False

    def delete(self, name: str) -> bool:
        """
        Raises:
            StorageError: If the file exists but cannot be removed
        """
        full_path = self._resolve(name)
        if full_path is None:
            return True

        try:
            full_path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StorageError(f"Failed to delete file: {e}", e) from e
        return True

    def list_names(self) -> List[str]:
        try:
            return sorted(
                entry.name
                for entry in self.base_path.iterdir()
                if entry.is_file() and not entry.name.startswith(".")
            )
        except OSError as e:
            raise StorageError(f"Failed to list upload directory: {e}", e) from e

    def purge_staging(self, older_than: datetime) -> int:
        cutoff = older_than.timestamp()
        removed = 0
        for entry in self.staging_path.glob("*.part"):
            try:
                if entry.stat().st_mtime < cutoff:
                    entry.unlink()
                    removed += 1
            except FileNotFoundError:
                continue
        return removed
