from __future__ import annotations

import logging
import sys

import structlog

# Keys every request binds through structlog.contextvars; rendered as null when unbound.
CONTEXT_KEYS = ("request_id", "caller_uid")


def _default_context(_: logging.Logger, __: str, event_dict: dict) -> dict:
    for key in CONTEXT_KEYS:
        event_dict.setdefault(key, None)
    return event_dict


def configure_logging(level: str = "INFO") -> None:
    resolved_level = logging.getLevelName(level.upper())
    if not isinstance(resolved_level, int):
        resolved_level = logging.INFO
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=resolved_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            _default_context,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.EventRenamer("message"),
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(resolved_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
