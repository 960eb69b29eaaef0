from .config import ClientConfig
from .logger import LoggingConfig, configure_logging, get_logger
from .transport import Connection, connect_tcp

__all__ = [
    "ClientConfig",
    "LoggingConfig",
    "configure_logging",
    "get_logger",
    "Connection",
    "connect_tcp",
]
