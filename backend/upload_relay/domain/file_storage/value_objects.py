"""
File Storage Value Objects

Immutable value objects and pure helpers for naming stored uploads.
"""

import os
import re
import secrets
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional


# Whitespace, path separators and control characters
_UNSAFE_CHARACTERS = re.compile(r"[\s/\\:\x00-\x1f\x7f]")
_STORAGE_NAME_PATTERN = re.compile(r"^(\d+)-(\d+)-(.+)$", re.DOTALL)

SAFE_SUBSTITUTE = "-"
DEFAULT_FILENAME = "upload.pdf"
RANDOM_UPPER_BOUND = 10**9
MAX_STORAGE_NAME_BYTES = 255
MAX_EXTENSION_LENGTH = 16


class InvalidStorageNameError(ValueError):
    """Raised when a storage name is malformed."""
    pass


def sanitize_filename(original: str) -> str:
    """
    Make an untrusted filename safe to embed in a storage name.

    Every whitespace, path-separator or control character is replaced by
    SAFE_SUBSTITUTE. The result is deterministic for the same input.

    Example:
        >>> sanitize_filename("Invoice 01:30.pdf")
        'Invoice-01-30.pdf'
    """
    return _UNSAFE_CHARACTERS.sub(SAFE_SUBSTITUTE, original)


def _truncate_utf8(value: str, max_bytes: int) -> str:
    encoded = value.encode("utf-8")
    if len(encoded) <= max_bytes:
        return value
    return encoded[:max(max_bytes, 0)].decode("utf-8", errors="ignore")


def _fit_filename(filename: str, max_bytes: int) -> str:
    """Shorten filename to max_bytes, keeping a short extension intact."""
    if len(filename.encode("utf-8")) <= max_bytes:
        return filename

    stem, ext = os.path.splitext(filename)
    if not ext or len(ext) > MAX_EXTENSION_LENGTH:
        return _truncate_utf8(filename, max_bytes)

    ext_bytes = len(ext.encode("utf-8"))
    return _truncate_utf8(stem, max_bytes - ext_bytes) + ext


@dataclass(frozen=True)
class StorageName:
    """
    Value object for the on-disk name of a stored upload.

    Format: ``{epoch-millis}-{random-int}-{sanitized-original-name}``.
    Uniqueness is best-effort: two uploads collide only if they share the
    same millisecond, random integer and original name.
    """
    value: str

    def __post_init__(self):
        if not self._is_valid():
            raise InvalidStorageNameError(f"Invalid storage name: {self.value!r}")

    def _is_valid(self) -> bool:
        if not self.value or not isinstance(self.value, str):
            return False

        if len(self.value.encode("utf-8")) > MAX_STORAGE_NAME_BYTES:
            return False

        if _UNSAFE_CHARACTERS.search(self.value):
            return False

        return _STORAGE_NAME_PATTERN.match(self.value) is not None

    @classmethod
    def generate(
        cls,
        original_filename: str,
        timestamp_ms: Optional[int] = None,
        random_int: Optional[int] = None,
    ) -> "StorageName":
        """
        Build a fresh storage name for an uploaded file.

        Args:
            original_filename: User-supplied filename (untrusted)
            timestamp_ms: Creation time in epoch milliseconds (default: now)
            random_int: Random component (default: secrets.randbelow)

        Returns:
            New StorageName instance
        """
        if timestamp_ms is None:
            timestamp_ms = int(time.time() * 1000)
        if random_int is None:
            random_int = secrets.randbelow(RANDOM_UPPER_BOUND + 1)

        prefix = f"{timestamp_ms}-{random_int}-"
        available = MAX_STORAGE_NAME_BYTES - len(prefix)
        safe_name = _fit_filename(sanitize_filename(original_filename), available)
        if not safe_name:
            safe_name = DEFAULT_FILENAME

        return cls(prefix + safe_name)

    @property
    def timestamp_ms(self) -> int:
        return int(_STORAGE_NAME_PATTERN.match(self.value).group(1))

    @property
    def created_at(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp_ms / 1000, tz=timezone.utc)

    def __str__(self) -> str:
        return self.value
