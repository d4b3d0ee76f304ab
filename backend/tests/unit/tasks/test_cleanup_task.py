"""
Unit tests for the upload cleanup task and its CLI command.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

from upload_relay.tasks.cleanup_task import cleanup_old_uploads


def _storage_name(days_ago: int, suffix: str) -> str:
    created = datetime.now(timezone.utc) - timedelta(days=days_ago)
    return f"{int(created.timestamp() * 1000)}-1-{suffix}.pdf"


def test_cleanup_delegates_to_upload_manager():
    manager = Mock()
    manager.purge_older_than.return_value = ["1-1-old.pdf"]

    stats = cleanup_old_uploads(manager, older_than_days=7)

    cutoff, = manager.purge_older_than.call_args.args
    assert manager.purge_older_than.call_args.kwargs == {"dry_run": False}
    expected = datetime.now(timezone.utc) - timedelta(days=7)
    assert abs((cutoff - expected).total_seconds()) < 5
    assert stats["removed"] == ["1-1-old.pdf"]
    assert stats["dry_run"] is False


def test_purge_command_removes_old_files(flask_app, upload_dir):
    old = _storage_name(40, "old")
    recent = _storage_name(1, "recent")
    (upload_dir / old).write_bytes(b"%PDF old")
    (upload_dir / recent).write_bytes(b"%PDF recent")

    runner = flask_app.test_cli_runner()
    result = runner.invoke(args=["purge-uploads", "--older-than-days", "30"])

    assert result.exit_code == 0
    assert old in result.output
    assert "Removed 1 file(s)" in result.output
    assert not (upload_dir / old).exists()
    assert (upload_dir / recent).exists()


def test_purge_command_dry_run_keeps_files(flask_app, upload_dir):
    old = _storage_name(40, "old")
    (upload_dir / old).write_bytes(b"%PDF old")

    runner = flask_app.test_cli_runner()
    result = runner.invoke(args=["purge-uploads", "--older-than-days", "30", "--dry-run"])

    assert result.exit_code == 0
    assert "Would remove 1 file(s)" in result.output
    assert (upload_dir / old).exists()


def test_purge_command_requires_age(flask_app):
    runner = flask_app.test_cli_runner()
    result = runner.invoke(args=["purge-uploads"])

    assert result.exit_code != 0
