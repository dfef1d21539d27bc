"""structlog setup driven by EngineSettings."""

import logging
from typing import Optional

import structlog

from .config import EngineSettings, get_settings


def configure_logging(settings: Optional[EngineSettings] = None) -> None:
    """Configure structlog for the engine's calculation events.

    Production always renders JSON lines. Debug level adds the emitting
    module, function and line to each event.

    Args:
        settings: Engine settings (default: loaded from the environment)
    """
    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if settings.is_debug:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                {
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                }
            )
        )

    if settings.log_json or settings.is_production:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )
