"""structlog configuration for the service entry point."""

import logging

import structlog


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog with console output at the given level."""
    log_level = getattr(logging, level.upper(), logging.INFO)
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )
