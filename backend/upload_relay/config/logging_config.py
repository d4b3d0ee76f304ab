import logging
import sys


def configure_logging(level: str = "INFO") -> None:
    """
    Configure the root logger for the service.

    Call once at startup, before the application is created.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - [%(levelname)s] - %(message)s",
        stream=sys.stdout,
    )
    # Per-request access lines are noise next to our own upload logs
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
