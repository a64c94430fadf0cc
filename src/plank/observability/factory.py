"""Observability – SystemLogFactory.

Configures structlog so entries mirrored by
:class:`~plank.core.sinks.SystemLogSink` reach the stdlib root handler as
JSON (or console-rendered) lines.
"""
from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog


class SystemLogFactory:
    """Configure structlog for the system mirror."""

    @staticmethod
    def configure(
        level: int = logging.DEBUG,
        json_output: bool = True,
        stream: TextIO | None = None,
    ) -> logging.Handler:
        """Route structlog through :mod:`logging` and install one root handler.

        Parameters
        ----------
        level:
            Root logger level.  Mirrored ``VERBOSE`` entries arrive at
            ``DEBUG``, so the default lets everything through.
        json_output:
            Render with ``JSONRenderer``; ``ConsoleRenderer`` otherwise.
        stream:
            Handler stream, ``sys.stderr`` by default.

        Returns
        -------
        logging.Handler
            The installed handler, so callers can remove it again.
        """
        shared_processors: list[Any] = [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
        ]
        structlog.configure(
            processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=False,
        )
        renderer: Any = (
            structlog.processors.JSONRenderer()
            if json_output
            else structlog.dev.ConsoleRenderer(colors=False)
        )
        formatter = structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(formatter)
        root = logging.getLogger()
        root.handlers.clear()
        root.addHandler(handler)
        root.setLevel(level)
        return handler

    @staticmethod
    def reset() -> None:
        """Restore structlog's default configuration."""
        structlog.reset_defaults()


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger, e.g. to hand to ``SystemLogSink``.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["SystemLogFactory", "get_logger"]
