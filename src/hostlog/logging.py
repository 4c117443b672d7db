"""Structured logging configuration using structlog.

Two ways to wire the enrichment pipeline into structlog:

``configure_logging()`` — process-wide.  Call once at CLI startup; every
``get_logger()`` logger then carries the host properties and a ``run_id``.

``LoggerConfiguration`` — explicitly owned.  Hosts that load several
add-ins, and tests, build one object per logger and close it on shutdown
instead of touching structlog's global state.

Processor pipeline (applied in order to every log event):

  1. merge_contextvars   — pulls run_id (and any other bound vars) into the event
                           (process-wide only; owned loggers stay isolated)
  2. add_log_level       — adds  level="info" / "error" / …
  3. TimeStamper         — adds  timestamp="2026-03-01T02:41:55Z"
  4. EnrichmentPipeline  — adds  HostPath, HostVersion, HostVersionName, HostBitness
                           (only where the event does not already carry them)
  5. JSONRenderer        — renders as a single JSON line  (format=json)
     ConsoleRenderer     — renders as coloured key=value  (format=text)

Typical usage:

    from hostlog.logging import configure_logging, get_logger

    run_id = configure_logging()         # call once, at startup
    log = get_logger(__name__)
    log.info("add-in loaded", workbook_count=3)
    # → {"event": "add-in loaded", "workbook_count": 3, "run_id": "a3f7b29c",
    #    "level": "info", "timestamp": "…", "HostPath": "…",
    #    "HostVersionName": "Host 2016 64-bit", "HostBitness": "64-bit"}
"""

import logging as _stdlib
import sys
import uuid
from typing import Any, TextIO

import structlog

from hostlog.config import Settings, get_settings
from hostlog.errors import InvalidArgumentError
from hostlog.pipeline import EnrichmentBuilder, EnrichmentPipeline


def _level_int(level: str) -> int:
    return getattr(_stdlib, level, _stdlib.INFO)


def _renderer(settings: Settings) -> Any:
    if settings.logging.format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def _shared_processors(pipeline: EnrichmentPipeline) -> list[Any]:
    return [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        pipeline,
    ]


def configure_logging(
    settings: Settings | None = None,
    pipeline: EnrichmentPipeline | None = None,
) -> str:
    """Configure structlog for this process and return the run_id.

    Calling again reconfigures the pipeline and binds a fresh run_id.

    Args:
        settings: Pre-loaded settings; loads from ``get_settings()`` if None.
        pipeline: Enrichment pipeline to install; built from
                  ``settings.enrich`` if None.

    Returns:
        run_id — 8-character hex string present on every log event this run.
    """
    if settings is None:
        settings = get_settings()
    if pipeline is None:
        pipeline = EnrichmentBuilder.from_settings(settings).build()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            *_shared_processors(pipeline),
            _renderer(settings),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_level_int(settings.logging.level)),
        context_class=dict,
        # Logs go to stderr; stdout is reserved for command output.
        # Caching would pin sys.stderr at first use, which breaks CLI test
        # runners that redirect stderr per invocation.
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    run_id = uuid.uuid4().hex[:8]
    structlog.contextvars.bind_contextvars(run_id=run_id)

    return run_id


def get_logger(name: str = "hostlog") -> structlog.BoundLogger:
    """Return a structlog logger.

    Pass ``__name__`` to associate the logger with the calling module::

        log = get_logger(__name__)
        log.info("enrichers registered")
    """
    return structlog.get_logger(name)


class LoggerConfiguration:
    """An explicitly owned logger setup: init at startup, flush at shutdown.

    Args:
        settings: Resolved settings; ``get_settings()`` if None.
        pipeline: Enrichment pipeline; built from ``settings.enrich`` if None.
        output:   Object receiving rendered events (anything with structlog's
                  ``msg``/level methods, e.g. ``LogDisplay``).  Defaults to
                  a ``PrintLogger`` on ``stream``.
        renderer: Final processor; defaults to the renderer selected by
                  ``settings.logging.format``.
        stream:   Stream for the default output; ``sys.stderr`` if None.
        minimum_level: Level name overriding ``settings.logging.level``.

    Context variables bound with ``structlog.contextvars`` are not merged:
    an owned logger only carries what its call sites and enrichers add.

    Raises:
        InvalidArgumentError: ``minimum_level`` is not a known level name.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        pipeline: EnrichmentPipeline | None = None,
        output: Any = None,
        renderer: Any = None,
        stream: TextIO | None = None,
        minimum_level: str | None = None,
    ) -> None:
        self.settings = settings if settings is not None else get_settings()
        level = (minimum_level or self.settings.logging.level).upper()
        if not isinstance(getattr(_stdlib, level, None), int):
            raise InvalidArgumentError(f"unknown log level: {minimum_level!r}")
        self.minimum_level = level
        self.pipeline = (
            pipeline
            if pipeline is not None
            else EnrichmentBuilder.from_settings(self.settings).build()
        )
        self._stream = stream if stream is not None else sys.stderr
        self.output = output if output is not None else structlog.PrintLogger(file=self._stream)
        self._renderer = renderer if renderer is not None else _renderer(self.settings)
        self._closed = False

    @property
    def processors(self) -> list[Any]:
        return [
            *_shared_processors(self.pipeline),
            structlog.processors.format_exc_info,
            self._renderer,
        ]

    @property
    def closed(self) -> bool:
        return self._closed

    def create_logger(self, **initial_values: Any) -> Any:
        """Return a bound logger that runs this configuration's processors.

        Raises:
            RuntimeError: ``close_and_flush()`` has already been called.
        """
        if self._closed:
            raise RuntimeError("logger configuration is closed")
        return structlog.wrap_logger(
            self.output,
            processors=self.processors,
            wrapper_class=structlog.make_filtering_bound_logger(_level_int(self.minimum_level)),
            context_class=dict,
            **initial_values,
        )

    def close_and_flush(self) -> None:
        """Flush pending output and refuse further loggers.  Idempotent."""
        if self._closed:
            return
        self._closed = True
        flush = getattr(self.output, "flush", None)
        if callable(flush):
            flush()
        else:
            self._stream.flush()
