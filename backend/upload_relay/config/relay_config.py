"""
Relay Configuration

Explicit configuration object for the upload relay. Everything the service
needs at startup lives here and is handed to create_app(); nothing is read
from the environment after construction.
"""

import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional

DEFAULT_PORT = 3001
DEFAULT_HOST = "0.0.0.0"
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024
DEFAULT_REQUEST_TIMEOUT = 30.0
UPLOAD_DIRNAME = "uploads"


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_positive_int(name: str, value: str) -> int:
    try:
        parsed = int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None
    if parsed <= 0:
        raise ValueError(f"{name} must be positive, got {parsed}")
    return parsed


@dataclass
class RelayConfig:
    """Upload relay configuration."""

    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    upload_dir: Path = field(default_factory=lambda: Path(UPLOAD_DIRNAME))
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    public_base_url: Optional[str] = None
    trust_proxy: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        base_dir: Optional[Path] = None,
    ) -> "RelayConfig":
        """
        Build configuration from environment variables.

        Args:
            environ: Mapping to read from (default: os.environ)
            base_dir: Directory the default ``uploads/`` folder sits in
                      (default: current working directory)

        Returns:
            RelayConfig instance

        Raises:
            ValueError: If a numeric variable is malformed or not positive
        """
        env = os.environ if environ is None else environ

        upload_dir = env.get("UPLOAD_DIR")
        if upload_dir:
            upload_path = Path(upload_dir)
        else:
            upload_path = (base_dir or Path.cwd()) / UPLOAD_DIRNAME

        timeout = env.get("REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT))
        try:
            request_timeout = float(timeout)
        except ValueError:
            raise ValueError(f"REQUEST_TIMEOUT must be a number, got {timeout!r}") from None
        if not math.isfinite(request_timeout) or request_timeout <= 0:
            raise ValueError(f"REQUEST_TIMEOUT must be positive, got {timeout!r}")

        origins = env.get("CORS_ORIGINS", "*")

        return cls(
            port=_parse_positive_int("PORT", env.get("PORT", str(DEFAULT_PORT))),
            host=env.get("HOST", DEFAULT_HOST),
            upload_dir=upload_path,
            max_upload_bytes=_parse_positive_int(
                "MAX_UPLOAD_BYTES",
                env.get("MAX_UPLOAD_BYTES", str(DEFAULT_MAX_UPLOAD_BYTES)),
            ),
            request_timeout=request_timeout,
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            public_base_url=env.get("PUBLIC_BASE_URL") or None,
            trust_proxy=_parse_bool(env.get("TRUST_PROXY", "false")),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )
