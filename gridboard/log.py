"""
structlog setup.

Records are routed through stdlib logging, so library use stays silent
until the host application configures handlers; ``configure_logging`` is
the CLI's way of doing that.
"""

import logging
import sys

import structlog


def configure_structlog() -> None:
    """Send structlog records to stdlib loggers without touching their handlers."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(debug: bool = False) -> None:
    """Route structlog through stdlib logging on stderr.

    Args:
        debug: Emit debug records when True, otherwise warnings and above.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=logging.DEBUG if debug else logging.WARNING,
        force=True,
    )
    configure_structlog()
