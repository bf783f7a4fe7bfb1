"""Observability – structlog-based logging for the step engines."""
