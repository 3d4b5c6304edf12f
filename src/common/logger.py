"""
Centralized logging configuration for the report renderer.

Provides context-prefixed logging with pass_id and template tagging so that
the log lines of one pagination pass can be followed through a busy service.
Debug-level output is enabled per logger when a request asks for debug=true.
"""

import logging
import sys
from typing import Optional


class PaginationLogger:
    """
    Contextual logger for pagination passes.

    Adds pass_id and template name to all log messages.
    """

    def __init__(
        self,
        name: str,
        pass_id: Optional[str] = None,
        template: Optional[str] = None,
        debug_mode: bool = False,
    ):
        """
        Initialize pagination logger.

        Args:
            name: Logger name (usually __name__)
            pass_id: Optional pass identifier for correlation
            template: Optional template name being rendered
            debug_mode: If True, enables DEBUG level for this logger
        """
        self.logger = logging.getLogger(name)
        self.pass_id = pass_id
        self.template = template

        if debug_mode:
            self.logger.setLevel(logging.DEBUG)

    def _format_message(self, message: str) -> str:
        """Add contextual prefix to message."""
        prefix_parts = []
        if self.pass_id:
            prefix_parts.append(f"[pass:{self.pass_id[:8]}]")
        if self.template:
            prefix_parts.append(f"[{self.template}]")

        if prefix_parts:
            return f"{' '.join(prefix_parts)} {message}"
        return message

    def debug(self, message: str, **kwargs):
        self.logger.debug(self._format_message(message), **kwargs)

    def info(self, message: str, **kwargs):
        self.logger.info(self._format_message(message), **kwargs)

    def warning(self, message: str, **kwargs):
        self.logger.warning(self._format_message(message), **kwargs)

    def error(self, message: str, **kwargs):
        self.logger.error(self._format_message(message), **kwargs)


def setup_logging(level: str = "INFO", format: str = "simple") -> None:
    """
    Configure global logging settings.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format: Log format ("simple" or "json")
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    # Remove existing handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)

    if format == "json":
        # JSON lines for log aggregators
        formatter = logging.Formatter(
            '{"time": "%(asctime)s", "level": "%(levelname)s", "name": "%(name)s", "message": "%(message)s"}'
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)


def get_logger(
    name: str,
    pass_id: Optional[str] = None,
    template: Optional[str] = None,
    debug_mode: bool = False,
) -> PaginationLogger:
    """
    Get a pagination logger instance.

    Args:
        name: Logger name (usually __name__)
        pass_id: Optional pass identifier
        template: Optional template name
        debug_mode: If True, enables DEBUG level

    Returns:
        PaginationLogger instance
    """
    return PaginationLogger(name, pass_id, template, debug_mode)
