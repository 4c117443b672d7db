"""Sample host add-in: wires up an enriched logger and an in-app log display.

Lifecycle, as called by the host application:

  auto_open()          build the logger with all four host enrichers, log a
                       greeting and show the display
  auto_close()         nothing to do
  on_disconnection()   log a farewell, then close and flush the logger

Every event written to the display carries the host properties, so the
first line of each entry reads like::

    {"HostPath": "…", "HostVersion": 16.0, "HostVersionName": "Host 2016 64-bit", "HostBitness": "64-bit"}
"""

from __future__ import annotations

from typing import Any

from hostlog.config import Settings, get_settings
from hostlog.host import HostEnvironment, ProcessHost
from hostlog.logging import LoggerConfiguration
from hostlog.pipeline import EnrichmentBuilder
from hostlog.viewer import LogDisplay, TemplateRenderer


class AddIn:
    """A host add-in that logs to its own ``LogDisplay``.

    Args:
        settings: Resolved settings; ``get_settings()`` if None.
        host:     Host facts; ``ProcessHost(settings.host)`` if None.
        display:  Display to write to; built from ``settings.display`` if None.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        host: HostEnvironment | None = None,
        display: LogDisplay | None = None,
    ) -> None:
        self.settings = settings if settings is not None else get_settings()
        self.host = host if host is not None else ProcessHost(self.settings.host)
        self.display = display if display is not None else LogDisplay.from_settings(self.settings.display)
        self.configuration: LoggerConfiguration | None = None
        self.log: Any = None

    @property
    def name(self) -> str:
        return self.settings.addin.name

    def auto_open(self) -> None:
        pipeline = (
            EnrichmentBuilder(self.host)
            .with_host_path()
            .with_host_version()
            .with_host_version_name(self.settings.enrich.include_bitness, label=self.settings.host.name)
            .with_host_bitness()
            .build()
        )
        self.configuration = LoggerConfiguration(
            self.settings,
            pipeline=pipeline,
            output=self.display,
            renderer=TemplateRenderer(self.settings.display.template),
            # The display shows everything, whatever the process-wide level.
            minimum_level="DEBUG",
        )
        self.log = self.configuration.create_logger()
        self.log.info("Hello from %s! :)", self.name, AddInName=self.name)
        self.display.show()

    def auto_close(self) -> None:
        pass

    def on_disconnection(self) -> None:
        if self.configuration is None:
            return
        self.log.info("Goodbye from %s! :)", self.name, AddInName=self.name)
        self.configuration.close_and_flush()
