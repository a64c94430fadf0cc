"""Observability – structlog configuration for the system log mirror."""

from plank.observability.factory import SystemLogFactory, get_logger

__all__ = ["SystemLogFactory", "get_logger"]
