"""
Centralized logging configuration for the early start app.

All components log through structlog on top of the standard library
logging module. The landing page bootstrap (earlystart_app.page.create_landing_page)
calls configure_logging() with the logging section of the app config;
embedding hosts that build LandingPage themselves call it directly. Loggers
obtained before that stay lazy and pick up the configuration on first use.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger

DIAGNOSTIC_LOGGER_NAME = "earlystart.diagnostics"


def _build_processors(
    format_json: bool,
    include_timestamp: bool,
    include_caller: bool,
    extra_processors: Optional[list]
) -> list:
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    # Renderer goes last
    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    return processors


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the whole app.

    Safe to call more than once; the last call wins for both the stdlib
    root level and the structlog processor chain.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: Emit one JSON object per line instead of console output
        include_timestamp: Add an ISO UTC timestamp to every event
        include_caller: Add filename and line number to every event
        extra_processors: Processors inserted just before the renderer
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown logging level: {level}")

    logging.basicConfig(stream=sys.stdout, format="%(message)s")
    # basicConfig is a no-op once handlers exist, so set the level directly
    logging.getLogger().setLevel(log_level)

    structlog.configure(
        processors=_build_processors(format_json, include_timestamp, include_caller, extra_processors),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_state_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for signup flow transitions.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger bound with the signup subsystem context
    """
    return structlog.get_logger(name, subsystem="signup")


def get_diagnostic_logger() -> FilteringBoundLogger:
    """
    Get the logger used for development-only diagnostics.

    Out-of-band values such as one-time codes echoed by a development backend
    are written here and nowhere else.
    """
    return structlog.get_logger(DIAGNOSTIC_LOGGER_NAME, subsystem="diagnostics")


def log_state_transition(
    logger: FilteringBoundLogger,
    flow: str,
    from_state: str,
    to_state: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a state transition with standardized format.

    Args:
        logger: Structlog logger instance
        flow: Name of the flow or controller transitioning
        from_state: Current state
        to_state: Target state
        trigger: What triggered the transition
        context: Additional context data
    """
    bound_logger = logger.bind(
        flow=flow,
        from_state=from_state,
        to_state=to_state,
        trigger=trigger,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("State transition")
