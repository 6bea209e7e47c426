"""
Structured logging configuration using structlog.
Outputs JSON in production, pretty-printed in development.

Every line carries the service name, the environment and the admission
strategy in use, so lines from several API processes can be told apart when
chasing a contested registration. Request context (request id, method, path)
is merged from contextvars. Credentials never reach the output.
"""

import logging
import sys
from typing import Any

import structlog
from campus_events.core.config import get_settings

SENSITIVE_KEYS = frozenset({"password", "password_hash", "access_token", "token", "authorization", "secret_key"})
REDACTED = "[redacted]"


def add_service_context(settings):
    """Processor factory stamping deployment fields onto every event."""
    context = {
        "service": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
        "admission_strategy": settings.ADMISSION_STRATEGY,
    }

    def processor(logger: Any, method_name: str, event_dict: dict) -> dict:
        for key, value in context.items():
            event_dict.setdefault(key, value)
        return event_dict

    return processor


def redact_credentials(logger: Any, method_name: str, event_dict: dict) -> dict:
    for key in SENSITIVE_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def setup_logging() -> None:
    settings = get_settings()

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        add_service_context(settings),
        redact_credentials,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.ENVIRONMENT == "production":
        # JSON output for production (machine-parseable)
        shared_processors.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ]
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    # Replace handlers so repeated startups (tests, reloads) don't duplicate lines
    root_logger.handlers = [handler]
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    # Admission and emitter lines matter more than per-statement SQL or access logs
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
