from __future__ import annotations

import logging
import sys
from typing import Any, Dict, Optional, Union

from generic_model.Config import logging as log_config

LogContext = Dict[str, Union[str, int, float, bool, None]]


class LaravelStyleLogger:
    """Laravel-style logger implementation."""

    def __init__(self, name: str = __name__, channel: Optional[str] = None) -> None:
        self.name = name
        self.channel = channel or log_config.default
        self.logger = logging.getLogger(name)

        if not self.logger.handlers:
            self._setup_default_handler()

    def _setup_default_handler(self) -> None:
        """Set up the handler described by the configured channel."""
        channel: Dict[str, Any] = log_config.channels.get(self.channel, {})

        if channel.get('driver') == 'null':
            self.logger.addHandler(logging.NullHandler())
        else:
            handler = logging.StreamHandler(sys.stderr)
            formatter = logging.Formatter(
                channel.get('format', '[%(asctime)s] %(levelname)s in %(name)s: %(message)s'),
                datefmt=channel.get('date_format', '%Y-%m-%d %H:%M:%S')
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

        level = str(channel.get('level', log_config.level)).upper()
        self.logger.setLevel(getattr(logging, level, logging.WARNING))

    def debug(self, message: str, context: Optional[LogContext] = None) -> None:
        """Log debug message."""
        self.logger.debug(self._format_message(message, context))

    def info(self, message: str, context: Optional[LogContext] = None) -> None:
        """Log info message."""
        self.logger.info(self._format_message(message, context))

    def warning(self, message: str, context: Optional[LogContext] = None) -> None:
        """Log warning message."""
        self.logger.warning(self._format_message(message, context))

    def error(self, message: str, context: Optional[LogContext] = None) -> None:
        """Log error message."""
        self.logger.error(self._format_message(message, context))

    def _format_message(self, message: str, context: Optional[LogContext] = None) -> str:
        """Format message with context."""
        if context:
            context_str = " | ".join(f"{k}={v}" for k, v in context.items())
            return f"{message} | {context_str}"
        return message


def get_logger(name: Optional[str] = None) -> LaravelStyleLogger:
    """Get a Laravel-style logger instance."""
    if name is None:
        name = __name__
    return LaravelStyleLogger(name)
