"""
File Storage Domain

Handles naming, validation and retrieval of uploaded files.
"""

from .entities import StoredFile
from .services import PDF_MEDIA_TYPE, UploadManager
from .storage_repository import IFileStorageRepository
from .value_objects import InvalidStorageNameError, StorageName, sanitize_filename

__all__ = [
    "StoredFile",
    "StorageName",
    "UploadManager",
    "IFileStorageRepository",
    "InvalidStorageNameError",
    "PDF_MEDIA_TYPE",
    "sanitize_filename",
]
