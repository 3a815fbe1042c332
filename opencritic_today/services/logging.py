"""Logging configuration for the OpenCritic release checker.

structlog events and plain stdlib records (httpx, asyncio) run through the
same processor chain and are rendered per handler: the stderr console gets
readable lines in development and JSON in production, log files always get
JSON. stdout is left to the release table.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

APP_LOG = "app.log"
ERROR_LOG = "error.log"

# Libraries that log each request at INFO
NOISY_LOGGERS = ("httpx", "httpcore")


class LoggingService:
    """Configures structlog on top of the stdlib root logger."""

    def __init__(
        self,
        log_level: str = "WARNING",
        log_dir: Path | None = None,
        tui_mode: bool = False,
        environment: str | None = None,
    ) -> None:
        """Initialize the logging service.

        Args:
            log_level: The minimum log level to capture
            log_dir: Directory for ``app.log`` and ``error.log`` (None for console only)
            tui_mode: If True, disable console logging so the full-screen view stays intact
            environment: ``development`` or ``production``; defaults to ``$ENVIRONMENT``
        """
        self.log_level = log_level.upper()
        self.log_dir = log_dir
        self.tui_mode = tui_mode
        self.environment = environment or os.getenv("ENVIRONMENT", "development")

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def numeric_level(self) -> int:
        return getattr(logging, self.log_level, logging.WARNING)

    def configure(self) -> None:
        """Install handlers on the root logger and configure structlog."""
        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
            handler.close()
        root_logger.setLevel(self.numeric_level)

        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(max(self.numeric_level, logging.WARNING))

        if not self.tui_mode:
            console_renderer: Any = (
                structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
                if self.is_development
                else structlog.processors.JSONRenderer()
            )
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(self._formatter(console_renderer))
            root_logger.addHandler(console_handler)

        if self.log_dir:
            self._add_file_handlers(root_logger)

        structlog.configure(
            processors=[structlog.stdlib.filter_by_level]
            + self._shared_processors()
            + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    def _add_file_handlers(self, root_logger: logging.Logger) -> None:
        assert self.log_dir is not None
        self.log_dir.mkdir(parents=True, exist_ok=True)
        json_formatter = self._formatter(structlog.processors.JSONRenderer())

        app_handler = logging.handlers.RotatingFileHandler(
            filename=self.log_dir / APP_LOG,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        app_handler.setFormatter(json_formatter)
        root_logger.addHandler(app_handler)

        error_handler = logging.handlers.RotatingFileHandler(
            filename=self.log_dir / ERROR_LOG,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(json_formatter)
        root_logger.addHandler(error_handler)

    def _formatter(self, renderer: Any) -> structlog.stdlib.ProcessorFormatter:
        processors: list[Any] = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
        if isinstance(renderer, structlog.processors.JSONRenderer):
            processors.append(structlog.processors.format_exc_info)
        processors.append(renderer)
        return structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=self._shared_processors(),
            processors=processors,
        )

    @staticmethod
    def _shared_processors() -> list[Any]:
        return [
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
        ]


def setup_logging(
    log_level: str = "WARNING",
    log_dir: Path | None = None,
    environment: str | None = None,
    tui_mode: bool = False,
) -> LoggingService:
    """Configure application logging and return the service that did it."""
    service = LoggingService(
        log_level=log_level,
        log_dir=log_dir,
        tui_mode=tui_mode,
        environment=environment,
    )
    service.configure()
    return service
