import logging
import os
from collections import OrderedDict
from logging import Logger
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterable, Optional

import structlog

from vocabdeck.core.config import get_settings
from vocabdeck.core.utils import ifnone

ROOT_LOGGER_NAME = "vocabdeck"

# Keys rendered first in structured output; anything else follows alphabetically.
STRUCTLOG_KEY_ORDER = ["timestamp", "level", "logger", "event", "account_id", "request_id", "duration_ms"]


def default_formatter(fmt: Optional[str] = None) -> logging.Formatter:
    """Returns a logging formatter with a default format if none is specified."""
    return logging.Formatter(fmt or "[%(asctime)s] %(levelname)s: %(name)s: %(message)s")


def _log_file_path(name: str, log_dir: Optional[str | Path]) -> Path:
    """The package logger writes ``vocabdeck.log``; every child logger gets its own file under ``modules/``."""
    base = Path(ifnone(log_dir, get_settings().VOCABDECK_DIR_PATHS.LOGGER_DIR)).expanduser()
    if name == ROOT_LOGGER_NAME:
        return base / f"{name}.log"
    return base / "modules" / f"{name}.log"


def _configure_structlog(json_output: bool) -> None:
    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _enforce_key_order_processor(STRUCTLOG_KEY_ORDER),
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    *,
    log_dir: Optional[str | Path] = None,
    logger_level: int = logging.DEBUG,
    stream_level: Optional[int] = None,
    add_stream_handler: bool = True,
    file_level: int = logging.DEBUG,
    file_mode: str = "a",
    add_file_handler: bool = True,
    propagate: bool = False,
    max_bytes: int = 10 * 1024 * 1024,  # 10 MB
    backup_count: int = 5,
    use_structlog: Optional[bool] = None,
    structlog_json: bool = True,
) -> Logger | structlog.stdlib.BoundLogger:
    """(Re)configure a VocabDeck logger.

    Any handlers already attached to the logger are replaced. The console handler defaults to
    ``VOCABDECK_LOGGER.STREAM_LEVEL`` so that a running server stays quiet unless asked otherwise, while the rotating
    file under ``VOCABDECK_DIR_PATHS.LOGGER_DIR`` records everything from ``file_level`` up.

    Args:
        name: Logger name, defaults to "vocabdeck".
        log_dir: Directory for the log file. Defaults to ``VOCABDECK_DIR_PATHS.LOGGER_DIR``.
        logger_level: Overall logger level.
        stream_level: Console handler level. Defaults to ``VOCABDECK_LOGGER.STREAM_LEVEL``.
        add_stream_handler: Whether to log to the console.
        file_level: File handler level.
        file_mode: Mode for the file handler, default is 'a' (append).
        add_file_handler: Whether to log to a rotating file.
        propagate: Whether records also go to ancestor loggers.
        max_bytes: Maximum size in bytes before the log file is rotated.
        backup_count: Number of rotated files to retain.
        use_structlog: Return a structlog logger. Defaults to ``VOCABDECK_LOGGER.USE_STRUCTLOG``.
        structlog_json: Render structlog events as JSON; otherwise use the console renderer.

    Returns:
        The configured stdlib logger, or a structlog logger wrapping it.
    """
    logger_settings = get_settings().VOCABDECK_LOGGER
    use_structlog = ifnone(use_structlog, logger_settings.USE_STRUCTLOG)
    stream_level = ifnone(stream_level, logging.getLevelName(logger_settings.STREAM_LEVEL.upper()))
    formatter = logging.Formatter("%(message)s") if use_structlog else default_formatter()

    handlers: list[logging.Handler] = []
    if add_stream_handler:
        handlers.append(logging.StreamHandler())
        handlers[-1].setLevel(stream_level)
    if add_file_handler:
        log_file = _log_file_path(name, log_dir)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(os.fspath(log_file), mode=file_mode, maxBytes=max_bytes, backupCount=backup_count)
        )
        handlers[-1].setLevel(file_level)

    logger = logging.getLogger(name)
    logger.handlers.clear()
    logger.setLevel(logger_level)
    logger.propagate = propagate
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if not use_structlog:
        return logger
    _configure_structlog(structlog_json)
    return structlog.get_logger(name)


def _enforce_key_order_processor(key_order: Iterable[str]):
    key_order = list(key_order)

    def _processor(_logger, _method_name, event_dict):
        ordered = OrderedDict((key, event_dict.pop(key)) for key in key_order if key in event_dict)
        ordered.update(sorted(event_dict.items()))
        return ordered

    return _processor


def get_logger(
    name: Optional[str] = ROOT_LOGGER_NAME, use_structlog: Optional[bool] = None, **kwargs
) -> logging.Logger | structlog.stdlib.BoundLogger:
    """Return a logger in the ``vocabdeck`` hierarchy.

    Names are prefixed with ``vocabdeck.`` unless they already start with it. Child loggers propagate to the package
    logger, which owns the console handler, so by default they only add a file handler of their own.

    Example:
        .. code-block:: python

            from vocabdeck.core import get_logger

            logger = get_logger("store.document_store")
            logger.info("Saved document.")  # logged as vocabdeck.store.document_store
    """
    name = name or ROOT_LOGGER_NAME
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    kwargs.setdefault("propagate", True)
    if kwargs["propagate"]:
        kwargs.setdefault("add_stream_handler", False)
    return setup_logger(name, use_structlog=use_structlog, **kwargs)
