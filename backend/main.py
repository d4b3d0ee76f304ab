"""
main.py

Entry point for the upload relay service.

Accepts PDF uploads on POST /upload, stores them in ./uploads next to this
file (override with UPLOAD_DIR) and serves them back from /uploads/<name>.

Environment:
  - PORT (default 3001), HOST, UPLOAD_DIR, MAX_UPLOAD_BYTES,
    REQUEST_TIMEOUT, CORS_ORIGINS, PUBLIC_BASE_URL, TRUST_PROXY, LOG_LEVEL
"""

import logging
from pathlib import Path

from werkzeug.serving import WSGIRequestHandler

from upload_relay.app_factory import create_app
from upload_relay.config import RelayConfig, configure_logging

logger = logging.getLogger("upload_relay")


def build_request_handler(timeout: float) -> type:
    """
    Request handler class whose connections time out after `timeout` seconds.

    Bounds how long a slow client can hold a worker thread mid-upload.
    """
    return type(
        "TimeoutRequestHandler",
        (WSGIRequestHandler,),
        {"timeout": timeout},
    )


def main() -> None:
    config = RelayConfig.from_env(base_dir=Path(__file__).resolve().parent)
    configure_logging(config.log_level)

    app = create_app(config)

    logger.info(f"Upload relay listening on port {config.port}")
    app.run(
        host=config.host,
        port=config.port,
        threaded=True,
        request_handler=build_request_handler(config.request_timeout),
    )


if __name__ == "__main__":
    main()
