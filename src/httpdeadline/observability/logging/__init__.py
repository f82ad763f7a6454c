"""Observability – structlog configuration and helpers."""
from httpdeadline.observability.logging.factory import JsonLoggerFactory
from httpdeadline.observability.logging.processors import DeadlineProcessor, get_logger

__all__ = ["DeadlineProcessor", "JsonLoggerFactory", "get_logger"]
