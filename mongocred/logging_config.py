"""Log output for the ``mongocred`` package logger.

The format and level come from :class:`mongocred.config.Settings`
(``log_format`` and ``log_level``); this module does not read the
environment itself. Secrets never reach a logger. Records carry the
credential's mechanism, source and username, plus the authenticator
class name once one is selected.
"""

from __future__ import annotations

import logging
import traceback
from typing import Any

from pythonjsonlogger.json import JsonFormatter

PACKAGE_LOGGER = "mongocred"
TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class CredentialJsonFormatter(JsonFormatter):
    """One JSON object per line.

    ``levelname`` and ``name`` are written as ``level`` and ``logger``.
    Credential extras that are ``None`` (an X.509 principal without a
    username, the default mechanism) are left out, and an exception is
    written as a ``traceback`` list of lines.
    """

    credential_fields = ("mechanism", "source", "username", "authenticator")

    def __init__(self) -> None:
        super().__init__(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
            rename_fields={"levelname": "level", "name": "logger"},
        )

    def add_fields(
        self,
        log_data: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_data, record, message_dict)
        log_data.pop("exc_info", None)
        if record.exc_info and record.exc_info[1] is not None:
            log_data["traceback"] = traceback.format_exception(*record.exc_info)
        for key in self.credential_fields:
            if key in log_data and log_data[key] is None:
                del log_data[key]


def _level_number(log_level: str | int) -> int:
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelNamesMapping().get(log_level.upper())
    if level is None:
        msg = f"Unknown log level '{log_level}'"
        raise ValueError(msg)
    return level


def setup_logging(log_format: str = "text", log_level: str | int = "INFO") -> None:
    """Install a single stream handler on the ``mongocred`` logger.

    Pass ``settings.log_format`` and ``settings.log_level``. Calling this
    again replaces the handler. The root logger is never touched.

    Raises:
        ValueError: unknown format or level name.
    """
    if log_format.lower() == "json":
        formatter: logging.Formatter = CredentialJsonFormatter()
    elif log_format.lower() == "text":
        formatter = logging.Formatter(TEXT_FORMAT)
    else:
        msg = f"Log format must be 'text' or 'json', got '{log_format}'"
        raise ValueError(msg)
    level = _level_number(log_level)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(formatter)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.addHandler(handler)
