"""
Operator tasks exposed as Flask CLI commands.
"""

from flask import Flask

from .cleanup_task import cleanup_old_uploads, purge_uploads_command


def register_commands(app: Flask) -> None:
    app.cli.add_command(purge_uploads_command)


__all__ = ["cleanup_old_uploads", "purge_uploads_command", "register_commands"]
