# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from sharepoint_client.core import spc_constant as con

_logger = logging.getLogger(con.LOGGER_NAME)
_logger.addHandler(logging.NullHandler())

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if name is None:
        return _logger
    return _logger.getChild(name)


def configure_logging(debug: bool = False, log_file: Optional[str] = None) -> None:
    """Attach stderr (and optionally rotating file) handlers to the package logger.

    Calling it again replaces the handlers installed by a previous call.
    """
    reset_logging()

    stream_level = logging.DEBUG if debug else logging.WARNING
    # The file handler always records debug output
    _logger.setLevel(logging.DEBUG if log_file else stream_level)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(logging.Formatter(_FORMAT))
    stream_handler.setLevel(stream_level)
    stream_handler._spc_managed = True
    _logger.addHandler(stream_handler)

    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=con.LOG_FILE_MAX_BYTES,
            backupCount=con.LOG_FILE_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(_FORMAT))
        file_handler.setLevel(logging.DEBUG)
        file_handler._spc_managed = True
        _logger.addHandler(file_handler)


def log_debug(message: str) -> None:
    _logger.debug(message)


def log_info(message: str) -> None:
    _logger.info(message)


def log_warning(message: str) -> None:
    _logger.warning(message)


def log_error(message: str) -> None:
    _logger.error(message)


def mask_secret(value: Optional[str]) -> str:
    """Keep the first and last four characters of a secret, star the rest."""
    if not value:
        return ""
    if len(value) <= 8:
        return "*" * len(value)
    return value[:4] + "*" * (len(value) - 8) + value[-4:]


def reset_logging() -> None:
    """Remove the handlers installed by ``configure_logging``."""
    for handler in list(_logger.handlers):
        if getattr(handler, "_spc_managed", False):
            _logger.removeHandler(handler)
            handler.close()
    _logger.setLevel(logging.NOTSET)
