"""Observability helpers."""

from .logging import JsonFormatter, configure_logging
from .queries import add_query_logger

__all__ = ["JsonFormatter", "configure_logging", "add_query_logger"]
