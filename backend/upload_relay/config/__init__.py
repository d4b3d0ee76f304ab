from .logging_config import configure_logging
from .relay_config import RelayConfig

__all__ = ["RelayConfig", "configure_logging"]
