# core/logger.py
import logging
import os
import sys
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# HTTP client chatter only shows up when the storefront itself runs at DEBUG.
CHATTY_LOGGERS = ("urllib3", "requests")

_configured = False


def _flag(name: str, default: bool) -> bool:
    return os.getenv(name, "true" if default else "false").strip().lower() == "true"


def _level(name: str | None) -> int:
    return getattr(logging, (name or "").upper(), logging.WARNING)


def _file_handler(path: str) -> logging.Handler:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    return RotatingFileHandler(
        path,
        maxBytes=int(os.getenv("LOG_MAX_BYTES", str(2 * 1024 * 1024))),
        backupCount=int(os.getenv("LOG_BACKUPS", "3")),
        encoding="utf-8",
    )


def set_level(level: str) -> None:
    """Change the storefront's log level after setup, e.g. from --log-level."""
    setup_logging()
    numeric = _level(level)
    root = logging.getLogger()
    root.setLevel(numeric)
    for handler in root.handlers:
        handler.setLevel(numeric)
    for name in CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(
            logging.DEBUG if numeric <= logging.DEBUG else logging.WARNING
        )


def setup_logging():
    """
    Configure the root logger once, from the environment:
    LOG_LEVEL, LOG_TO_STDERR, LOG_TO_FILE, LOG_FILE, LOG_MAX_BYTES, LOG_BACKUPS.
    Console output goes to stderr; stdout is reserved for command output.
    """
    global _configured
    if _configured:
        return
    _configured = True

    root = logging.getLogger()
    root.setLevel(_level(os.getenv("LOG_LEVEL", "WARNING")))
    if root.handlers:
        # someone else (a test runner, an embedding app) owns the handlers
        return

    formatter = logging.Formatter(LOG_FORMAT)
    handlers = []
    if _flag("LOG_TO_STDERR", True):
        handlers.append(logging.StreamHandler(sys.stderr))
    if _flag("LOG_TO_FILE", False):
        log_file = os.getenv("LOG_FILE", "./data/storefront.log")
        try:
            handlers.append(_file_handler(log_file))
        except OSError as e:
            root.warning("Failed to initialize file logging at %s: %s", log_file, e)

    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    set_level(os.getenv("LOG_LEVEL", "WARNING"))


def get_logger(name: str | None = None) -> logging.Logger:
    setup_logging()
    return logging.getLogger(name)
