"""
Cleanup Task

Manual housekeeping for the upload directory. Stored files are never
expired automatically; an operator runs this command when disk space
needs reclaiming:

    flask --app upload_relay.app_factory purge-uploads --older-than-days 30
"""

import logging
from datetime import datetime, timedelta, timezone

import click
from flask import current_app
from flask.cli import with_appcontext

logger = logging.getLogger(__name__)


def cleanup_old_uploads(upload_manager, older_than_days: int, dry_run: bool = False) -> dict:
    """
    Remove uploads created more than older_than_days ago.

    Thin wrapper that delegates to UploadManager.purge_older_than().

    Returns:
        dict: Cleanup statistics with the cutoff and removed names
    """
    cutoff = datetime.now(timezone.utc) - timedelta(days=older_than_days)
    logger.info(f"Starting upload cleanup (cutoff {cutoff.isoformat()}, dry_run={dry_run})")

    removed = upload_manager.purge_older_than(cutoff, dry_run=dry_run)

    logger.info(f"Upload cleanup finished: {len(removed)} files")
    return {
        "cutoff": cutoff.isoformat(),
        "removed": removed,
        "dry_run": dry_run,
    }


@click.command("purge-uploads")
@click.option(
    "--older-than-days",
    type=click.IntRange(min=0),
    required=True,
    help="Remove files uploaded more than this many days ago.",
)
@click.option("--dry-run", is_flag=True, help="List matching files without deleting them.")
@with_appcontext
def purge_uploads_command(older_than_days, dry_run):
    """Delete old uploads from the upload directory."""
    stats = cleanup_old_uploads(current_app.upload_manager, older_than_days, dry_run)

    for name in stats["removed"]:
        click.echo(name)

    verb = "Would remove" if dry_run else "Removed"
    click.echo(f"{verb} {len(stats['removed'])} file(s) older than {stats['cutoff']}")
