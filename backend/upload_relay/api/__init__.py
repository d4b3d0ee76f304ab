"""
Upload Relay REST API

Flask-RESTX API with Swagger documentation at /docs. The API root serves
the plain-text status banner used as the service health check.
"""

from flask import Response
from flask_restx import Api
from werkzeug.exceptions import HTTPException

from upload_relay.domain.errors import ErrorCategory, create_error_response

SERVICE_BANNER = "Upload relay service is running. Use POST /upload to send a file."


class RelayApi(Api):
    """Api whose root endpoint answers with the service banner."""

    def render_root(self):
        return Response(SERVICE_BANNER, mimetype="text/plain")


def create_api() -> RelayApi:
    """
    Build a fresh API instance with all namespaces registered.

    A new instance per application keeps test apps independent of each other.
    """
    api = RelayApi(
        version="1.0",
        title="Upload Relay API",
        description="Accepts PDF uploads and serves them back from /uploads",
        doc="/docs",
    )

    # Import namespaces lazily to avoid circular imports
    from .namespaces import files_ns, upload_ns

    api.add_namespace(upload_ns, path="/upload")
    api.add_namespace(files_ns, path="/uploads")

    @api.errorhandler(Exception)
    def handle_unexpected_error(error):
        """Turn anything raised by a resource into a JSON error body."""
        if isinstance(error, HTTPException):
            return {"error": error.description, "code": error.name}, error.code
        # Flask-RESTX logs the traceback for 5xx responses
        return create_error_response(ErrorCategory.SYSTEM_ERROR, str(error))

    return api
