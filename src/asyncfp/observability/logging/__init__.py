"""Observability – structured logging helpers."""
from asyncfp.observability.logging.factory import JsonLoggerFactory
from asyncfp.observability.logging.processors import get_logger

__all__ = ["JsonLoggerFactory", "get_logger"]
