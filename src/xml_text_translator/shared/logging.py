"""Structured logging utilities for text translation.

Translation passes, command-line runs and benchmarks log through
``CorrelationLogger`` so their records share a component name and an optional
correlation ID that can be filtered on.
"""

import logging
from typing import Any, MutableMapping, Optional, Tuple

LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class CorrelationLogger(logging.LoggerAdapter):
    """Logger adapter that stamps records with component and correlation ID.

    Caller ``extra`` dictionaries are merged over the stamped fields, so a call
    site can still attach its own structured data.
    """

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None
    ) -> None:
        """Initialize correlation logger.

        Args:
            name: Logger name (typically __name__)
            correlation_id: Optional correlation ID shared by related records
            component: Component name; defaults to the last part of ``name``
        """
        super().__init__(
            logging.getLogger(name),
            {
                "component": component or name.rsplit(".", 1)[-1],
                "correlation_id": correlation_id,
            },
        )

    @property
    def component(self) -> str:
        return self.extra["component"]

    @property
    def correlation_id(self) -> Optional[str]:
        return self.extra["correlation_id"]

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        merged = dict(self.extra)
        merged.update(kwargs.get("extra") or {})
        kwargs["extra"] = merged
        return msg, kwargs


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None
) -> CorrelationLogger:
    """Get a correlation-aware logger instance."""
    return CorrelationLogger(name, correlation_id, component)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for command-line use.

    Args:
        level: One of the standard level names

    Raises:
        ValueError: If the level name is unknown
    """
    if level not in LEVEL_NAMES:
        raise ValueError(f"logging level must be one of {list(LEVEL_NAMES)}")
    logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT)
