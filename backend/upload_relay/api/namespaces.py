"""
API Namespaces - Upload and retrieval endpoints
"""

from flask import current_app, request, send_file
from flask_restx import Namespace, Resource, reqparse
from werkzeug.datastructures import FileStorage
from werkzeug.exceptions import RequestEntityTooLarge

from upload_relay.domain.errors import (
    ApplicationError,
    DomainError,
    ErrorCategory,
    StoredFileNotFoundError,
    create_error_response,
)

from .models import error_response, upload_response

UPLOAD_FIELD = "file"

# Documentation only; the handler reads request.files itself so that
# missing parts and oversized bodies map onto our own error bodies.
upload_parser = reqparse.RequestParser()
upload_parser.add_argument(
    UPLOAD_FIELD,
    location="files",
    type=FileStorage,
    required=True,
    help="PDF document to relay",
)


def _public_base_url() -> str:
    configured = current_app.relay_config.public_base_url
    return configured or request.host_url


def _domain_error_response(error: DomainError):
    app_error = ApplicationError.from_domain_error(error)
    if app_error.http_status_code >= 500:
        current_app.logger.exception(f"Upload failed: {error}")
    else:
        current_app.logger.warning(f"Upload rejected: {error}")
    return app_error.to_dict(), app_error.http_status_code


# =============================================================================
# Upload Namespace - Accepts a single PDF
# =============================================================================

upload_ns = Namespace("upload", description="File upload operations")
upload_ns.add_model(upload_response.name, upload_response)
upload_ns.add_model(error_response.name, error_response)


@upload_ns.route("")
class Upload(Resource):
    """Relay a PDF and return its retrieval URL"""

    @upload_ns.doc("upload_file")
    @upload_ns.expect(upload_parser)
    @upload_ns.response(200, "Success", upload_response)
    @upload_ns.response(400, "Bad Request", error_response)
    @upload_ns.response(413, "Payload Too Large", error_response)
    @upload_ns.response(500, "Internal Server Error", error_response)
    def post(self):
        """
        Upload a PDF

        Accepts a multipart form with a single `file` field declared as
        application/pdf. The file is stored under a new unique name and the
        absolute URL to fetch it is returned.
        """
        try:
            upload = request.files.get(UPLOAD_FIELD)
        except RequestEntityTooLarge:
            current_app.logger.warning(
                f"Upload rejected: body of {request.content_length} bytes over limit"
            )
            return create_error_response(
                ErrorCategory.FILE_TOO_LARGE,
                f"Request body exceeds {current_app.config['MAX_CONTENT_LENGTH']} bytes",
            )

        if upload is None or not upload.filename:
            current_app.logger.warning("Upload rejected: no file part in request")
            return create_error_response(
                ErrorCategory.MISSING_FILE,
                f"Missing '{UPLOAD_FIELD}' in multipart body",
            )

        try:
            stored = current_app.upload_manager.store(
                upload.filename,
                upload.mimetype,
                upload.stream,
                declared_size=upload.content_length or None,
            )
        except DomainError as e:
            return _domain_error_response(e)

        return {"url": stored.build_url(_public_base_url())}, 200


# =============================================================================
# Uploads Namespace - Serves stored files back
# =============================================================================

files_ns = Namespace("uploads", description="Stored file retrieval")
files_ns.add_model(error_response.name, error_response)


@files_ns.route("/<path:name>")
@files_ns.param("name", "Storage name returned by the upload endpoint")
class StoredFileContent(Resource):
    """Stored file content"""

    @files_ns.doc("get_stored_file")
    @files_ns.response(200, "File content")
    @files_ns.response(404, "File Not Found", error_response)
    def get(self, name):
        """
        Download a stored file

        Returns the exact bytes that were uploaded, with the content type
        inferred from the file extension.
        """
        try:
            content, media_type = current_app.upload_manager.open(name)
        except StoredFileNotFoundError:
            return create_error_response(
                ErrorCategory.FILE_NOT_FOUND,
                f"No stored file named {name}",
            )

        return send_file(content, mimetype=media_type, download_name=name)
