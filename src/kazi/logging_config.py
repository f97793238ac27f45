"""structlog setup.

Learn: Every module does `logger = structlog.get_logger()` and logs
dotted event names with keyword context (`logger.info("jobs.created",
job_id=...)`). The request middleware binds request_id into contextvars,
so merge_contextvars puts it on every line logged during that request.
"""

import logging

import structlog

from kazi.config import Settings


def configure_logging(settings: Settings) -> None:
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.INFO

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if settings.log_json:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        # ConsoleRenderer formats exc_info itself.
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )


def mask_phone(phone: str) -> str:
    """Shorten a phone number for log lines: first 6 digits then '...'."""
    if not phone:
        return ""
    return f"{phone[:6]}..."
