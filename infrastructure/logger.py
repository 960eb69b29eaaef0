# infrastructure/logger.py
from __future__ import annotations

import logging
import logging.config
from dataclasses import dataclass
from typing import Optional, Dict, Any
from pathlib import Path

@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"
    log_file: Optional[str] = None
    # Wire traffic (<< / >> lines) is logged at DEBUG by the protocol layer.
    wire_level: str = "WARNING"


def build_dict_config(cfg: LoggingConfig) -> Dict[str, Any]:
    handlers: Dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": cfg.level,
            "formatter": "standard",
            "stream": "ext://sys.stdout",
        }
    }

    root_handlers = ["console"]

    if cfg.log_file:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": cfg.level,
            "formatter": "standard",
            "filename": cfg.log_file,
            "maxBytes": 1_000_000,
            "backupCount": 3,
            "encoding": "utf-8",
        }
        root_handlers.append("file")

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            }
        },
        "handlers": handlers,
        "root": {
            "level": cfg.level,
            "handlers": root_handlers,
        },
        "loggers": {
            "protocol.card_reader": {"level": cfg.wire_level},
        },
    }


def configure_logging(cfg: LoggingConfig) -> None:
    """
    Configure logging once from the entrypoint (main.py / cli_play.py / gui_play.py).
    The protocol and session layers only ever call get_logger().
    """
    if cfg.log_file:
        Path(cfg.log_file).parent.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(build_dict_config(cfg))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
