"""Shared runtime resources and their orderly shutdown."""

from __future__ import annotations

import errno
import logging
import threading
from dataclasses import dataclass
from typing import Any, Optional, Union

from besart.config import Config

_IGNORED_FLUSH_ERRNOS = {errno.ENOTTY, errno.EINVAL}


def _base_logger(logger: Union[logging.Logger, logging.LoggerAdapter]) -> logging.Logger:
    while isinstance(logger, logging.LoggerAdapter):
        logger = logger.logger
    return logger


@dataclass
class Dependency:
    """The logger, database engine, configuration and web server of a running service.

    ``server`` is any object with a ``shutdown()`` method; ``db`` needs ``dispose()``.
    """

    logger: Union[logging.Logger, logging.LoggerAdapter]
    db: Any
    config: Config
    server: Optional[Any] = None

    def graceful_shutdown(self, stop_event: threading.Event) -> int:
        """Wait for ``stop_event``, then close everything; return an exit code.

        The code is 0 when every step succeeded and 1 otherwise.
        """
        stop_event.wait()
        code = 0
        log = self.logger

        log.info("Gracefully shutting down web server...")
        try:
            if self.server is not None:
                self.server.shutdown()
        except Exception as exc:
            log.error("failed to close server", extra={"error": str(exc)})
            code = 1
        else:
            log.info("web server shutted down")

        log.info("Gracefully shutting down db connection...")
        try:
            self.db.dispose()
        except Exception as exc:
            log.error("failed to close database connection", extra={"error": str(exc)})
            code = 1
        else:
            log.info("success to close database connection")

        try:
            for handler in _base_logger(log).handlers:
                handler.flush()
        except Exception as exc:
            if isinstance(exc, OSError) and exc.errno in _IGNORED_FLUSH_ERRNOS:
                log.info("success to flush log")
            else:
                log.error("failed to flush log", extra={"error": str(exc)})
                code = 1
        else:
            log.info("success to flush log")

        log.info("shutted down", extra={"code": code})
        return code