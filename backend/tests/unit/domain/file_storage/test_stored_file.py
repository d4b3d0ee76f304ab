"""
Unit tests for the StoredFile entity.
"""

from datetime import datetime, timezone

from upload_relay.domain.file_storage.entities import StoredFile
from upload_relay.domain.file_storage.value_objects import StorageName


def _stored(name: str) -> StoredFile:
    return StoredFile.create(
        original_filename="Invoice 01:30.pdf",
        storage_name=StorageName(name),
        media_type="application/pdf",
        size=2048,
    )


def test_create_takes_creation_time_from_storage_name():
    stored = _stored("1718000000000-5-Invoice-01-30.pdf")

    assert stored.storage_name == "1718000000000-5-Invoice-01-30.pdf"
    assert stored.created_at == datetime.fromtimestamp(1718000000, tz=timezone.utc)
    assert stored.size == 2048


def test_build_url_joins_base_and_uploads_path():
    stored = _stored("1718000000000-5-Invoice-01-30.pdf")

    assert (
        stored.build_url("http://localhost:3001/")
        == "http://localhost:3001/uploads/1718000000000-5-Invoice-01-30.pdf"
    )
    assert (
        stored.build_url("https://files.example.com")
        == "https://files.example.com/uploads/1718000000000-5-Invoice-01-30.pdf"
    )


def test_url_path_percent_encodes_reserved_characters():
    stored = _stored("1-2-order#5?v=1&x.pdf")

    assert stored.url_path() == "/uploads/1-2-order%235%3Fv%3D1%26x.pdf"


def test_url_path_encodes_non_ascii_names():
    stored = _stored("1-2-résumé.pdf")

    assert stored.url_path() == "/uploads/1-2-r%C3%A9sum%C3%A9.pdf"


def test_to_dict():
    data = _stored("1718000000000-5-cart.pdf").to_dict()

    assert data["storage_name"] == "1718000000000-5-cart.pdf"
    assert data["original_filename"] == "Invoice 01:30.pdf"
    assert data["media_type"] == "application/pdf"
    assert data["created_at"].startswith("2024-06-10T")
