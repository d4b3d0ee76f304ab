"""
API Models for response documentation
"""

from flask_restx import Model, fields

# =============================================================================
# Response Models
# =============================================================================

upload_response = Model(
    "UploadResponse",
    {
        "url": fields.String(
            required=True,
            description="Absolute URL the uploaded file can be retrieved from",
            example="http://localhost:3001/uploads/1718000000000-123456789-Invoice-01-30.pdf",
        )
    },
)

error_response = Model(
    "ErrorResponse",
    {
        "error": fields.String(
            required=True,
            description="Human-readable error message",
            example="Only PDF files are allowed",
        ),
        "code": fields.String(
            description="Error category",
            example="unsupported_media_type",
        ),
    },
)
