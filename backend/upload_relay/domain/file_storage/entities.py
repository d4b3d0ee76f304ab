"""
File Storage Entities

Domain entities for uploaded file management.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict
from urllib.parse import quote

from .value_objects import StorageName


UPLOADS_URL_PATH = "/uploads"


@dataclass
class StoredFile:
    """
    Entity representing a file accepted by the relay.

    Stored files are never mutated after creation; the storage name is the
    identity and the only thing a caller needs to retrieve the content.
    """
    original_filename: str
    storage_name: str
    media_type: str
    size: int
    created_at: datetime

    @classmethod
    def create(cls, original_filename: str, storage_name: StorageName,
               media_type: str, size: int) -> "StoredFile":
        """
        Factory method to create a stored file entry.

        The creation time is taken from the storage name so both always agree.
        """
        return cls(
            original_filename=original_filename,
            storage_name=str(storage_name),
            media_type=media_type,
            size=size,
            created_at=storage_name.created_at,
        )

    def url_path(self) -> str:
        """Path under which the file is served, with the name URL-encoded."""
        return f"{UPLOADS_URL_PATH}/{quote(self.storage_name, safe='')}"

    def build_url(self, base_url: str) -> str:
        """
        Generate the fully-qualified retrieval URL.

        Args:
            base_url: Scheme and host of the service, e.g. ``http://localhost:3001/``

        Returns:
            Absolute URL for the stored file
        """
        return f"{base_url.rstrip('/')}{self.url_path()}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original_filename": self.original_filename,
            "storage_name": self.storage_name,
            "media_type": self.media_type,
            "size": self.size,
            "created_at": self.created_at.isoformat(),
        }
