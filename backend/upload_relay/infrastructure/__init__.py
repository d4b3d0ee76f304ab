"""
Infrastructure Layer

Concrete adapters for the domain's repository interfaces.
"""

from .local_file_storage_repository import LocalFileStorageRepository

__all__ = ["LocalFileStorageRepository"]
