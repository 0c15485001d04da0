"""Structured logging setup for urltrace.

structlog events are routed through the standard :mod:`logging` module so
that library loggers (httpx, httpcore) and our own events share one handler,
one level and one rendering. Every rendered line carries the ``[URL Tracer]``
tag.
"""

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.typing import EventDict, Processor, WrappedLogger


TRACE_TAG = "[URL Tracer]"
TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S"

# Library loggers that would otherwise repeat every request we already log
NOISY_LOGGERS = ("httpx", "httpcore")


def add_trace_tag(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Prefix the event message with the fixed trace tag."""
    event = event_dict.get("event")
    if isinstance(event, str) and not event.startswith(TRACE_TAG):
        event_dict["event"] = f"{TRACE_TAG} {event}"
    return event_dict


# Keys a plain line keeps; structured fields are only rendered as JSON
PLAIN_KEYS = frozenset(
    {"event", "level", "timestamp", "exc_info", "exception", "stack", "stack_info"}
)


def drop_event_fields(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Reduce an event to its message, level, time and traceback."""
    return {key: value for key, value in event_dict.items() if key in PLAIN_KEYS}


def _shared_processors(show_time: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        add_trace_tag,
    ]
    if show_time:
        processors.append(
            structlog.processors.TimeStamper(fmt=TIMESTAMP_FORMAT, utc=False)
        )
    processors.append(structlog.processors.StackInfoRenderer())
    return processors


def setup_logging(
    json_logs: bool = False,
    log_level_name: str = "INFO",
    show_time: bool = True,
    colors: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Configure structlog and the root logger.

    Args:
        json_logs: Render one JSON object per line instead of key/value text
        log_level_name: Minimum level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        show_time: Whether to add a timestamp to every line
        colors: Colorize plain output (ignored for JSON)
        stream: Destination stream, stderr by default
    """
    level = getattr(logging, log_level_name.upper())
    shared_processors = _shared_processors(show_time)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        # Tests swap the processor chain with structlog.testing.capture_logs
        cache_logger_on_first_use=False,
    )

    renderer: Processor
    if json_logs:
        renderer = structlog.processors.JSONRenderer()
        final_processors: list[Processor] = [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ]
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=colors)
        final_processors = [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            drop_event_fields,
            renderer,
        ]

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=final_processors,
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(level)

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(max(level, logging.WARNING))


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Get a structlog logger instance.

    Args:
        name: Logger name (typically __name__)
        **initial_values: Key/value pairs bound to every event of the logger

    Returns:
        Bound structlog logger
    """
    return structlog.get_logger(name, **initial_values)
