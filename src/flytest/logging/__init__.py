"""flytest Logging — logging port and structlog adapter."""

from flytest.logging.port import LoggingPort
from flytest.logging.structlog_adapter import StructlogAdapter

__all__ = ["LoggingPort", "StructlogAdapter"]
