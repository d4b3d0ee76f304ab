"""
Application Factory

Creates and configures the Flask application for the upload relay.
Configuration is passed in explicitly so tests can point the service at a
temporary directory and a small size limit.
"""

import logging
from typing import Optional

from flask import Flask
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from upload_relay.api import create_api
from upload_relay.config import RelayConfig
from upload_relay.domain.file_storage import UploadManager
from upload_relay.infrastructure import LocalFileStorageRepository
from upload_relay.tasks import register_commands

logger = logging.getLogger(__name__)

# Room for multipart boundaries and part headers on top of the file itself
MULTIPART_OVERHEAD_BYTES = 64 * 1024


def create_app(config: Optional[RelayConfig] = None) -> Flask:
    """
    Create and configure Flask application.

    Args:
        config: Relay configuration, read from the environment if None

    Returns:
        Configured Flask application
    """
    if config is None:
        config = RelayConfig.from_env()

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = config.max_upload_bytes + MULTIPART_OVERHEAD_BYTES
    app.config["ERROR_INCLUDE_MESSAGE"] = False
    app.config["RESTX_MASK_SWAGGER"] = False

    if config.trust_proxy:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_proto=1, x_host=1)

    # The checkout page uploads from file:// and other origins
    CORS(
        app,
        resources={
            r"/*": {
                "origins": config.cors_origins,
                "methods": ["GET", "POST", "OPTIONS"],
                "allow_headers": ["Content-Type"],
                "max_age": 3600,
            }
        },
    )

    _initialize_services(app, config)

    _register_api(app)

    register_commands(app)

    return app


def _initialize_services(app: Flask, config: RelayConfig) -> None:
    """
    Build the storage repository and upload manager and attach them to the app.

    Args:
        app: Flask application
        config: Relay configuration

    Raises:
        OSError: If the upload directory cannot be created
    """
    storage_repository = LocalFileStorageRepository(str(config.upload_dir))
    upload_manager = UploadManager(
        storage_repository,
        max_upload_bytes=config.max_upload_bytes,
    )

    app.relay_config = config
    app.storage_repository = storage_repository
    app.upload_manager = upload_manager

    logger.info(
        f"Upload directory {config.upload_dir} "
        f"(limit {config.max_upload_bytes} bytes)"
    )


def _register_api(app: Flask) -> None:
    """
    Register the REST API, including the root banner and Swagger UI.

    Args:
        app: Flask application
    """
    api = create_api()
    api.init_app(app)
