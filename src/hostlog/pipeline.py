"""Enrichment pipeline — ordered enrichers, a fluent builder, a structlog processor.

Build once at logger-configuration time, then hand the pipeline to structlog
as one processor::

    pipeline = (
        EnrichmentBuilder(host)
        .with_host_path()
        .with_host_bitness()
        .with_enricher(MyEnricher())
        .build()
    )
    structlog.configure(processors=[..., pipeline, JSONRenderer()])

Enrichers run in registration order on every event.  Because each one only
adds a property when the name is absent, the first enricher registered for
a given name wins.

Registration fails fast: ``None`` or an object without an ``enrich`` method
raises ``InvalidArgumentError`` from ``with_enricher`` itself, not later on
the first log call.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

from hostlog.config import EnricherName, Settings
from hostlog.enrichers import (
    Enricher,
    HostBitnessEnricher,
    HostPathEnricher,
    HostVersionEnricher,
    HostVersionNameEnricher,
)
from hostlog.errors import InvalidArgumentError, UnavailableError
from hostlog.events import DefaultPropertyFactory, LogEvent, PropertyFactory
from hostlog.host import HostEnvironment, ProcessHost


class EnrichmentPipeline:
    """Immutable, ordered sequence of enrichers.

    Callable with structlog's processor signature, so it can be dropped
    straight into a processor chain.
    """

    def __init__(
        self,
        enrichers: tuple[Enricher, ...] = (),
        factory: PropertyFactory | None = None,
    ) -> None:
        self._enrichers = tuple(enrichers)
        self._factory = factory if factory is not None else DefaultPropertyFactory()

    @property
    def enrichers(self) -> tuple[Enricher, ...]:
        return self._enrichers

    def enrich(self, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
        """Run every enricher over *event_dict* in place and return it."""
        event = LogEvent(event_dict)
        for enricher in self._enrichers:
            try:
                enricher.enrich(event, self._factory)
            except UnavailableError:
                # A host fact is missing; leave that property off this event.
                continue
        return event_dict

    def __call__(
        self, logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
    ) -> MutableMapping[str, Any]:
        return self.enrich(event_dict)

    def __len__(self) -> int:
        return len(self._enrichers)

    def __repr__(self) -> str:
        names = ", ".join(type(e).__name__ for e in self._enrichers)
        return f"EnrichmentPipeline([{names}])"


class EnrichmentBuilder:
    """Fluent registry of enrichers.

    Every ``with_*`` method registers one enricher and returns the builder
    so calls chain.  The host-specific methods share the builder's
    ``HostEnvironment``.

    Args:
        host:    Host facts for the built-in enrichers; defaults to
                 ``ProcessHost()``.
        factory: Property factory handed to every enricher.
    """

    def __init__(
        self,
        host: HostEnvironment | None = None,
        *,
        factory: PropertyFactory | None = None,
    ) -> None:
        self._host = host if host is not None else ProcessHost()
        self._factory = factory
        self._enrichers: list[Enricher] = []

    @classmethod
    def from_settings(
        cls, settings: Settings, host: HostEnvironment | None = None
    ) -> EnrichmentBuilder:
        """Register the host enrichers named in ``settings.enrich.enabled``, in order."""
        builder = cls(host if host is not None else ProcessHost(settings.host))
        for name in settings.enrich.enabled:
            builder.with_named(
                name,
                include_bitness=settings.enrich.include_bitness,
                label=settings.host.name,
            )
        return builder

    def with_enricher(self, enricher: Enricher | None) -> EnrichmentBuilder:
        """Register a user-defined enricher."""
        if enricher is None:
            raise InvalidArgumentError("enricher must not be None")
        if not callable(getattr(enricher, "enrich", None)):
            raise InvalidArgumentError(
                f"{type(enricher).__name__} has no enrich(event, factory) method"
            )
        self._enrichers.append(enricher)
        return self

    def with_host_path(self) -> EnrichmentBuilder:
        return self.with_enricher(HostPathEnricher(self._host))

    def with_host_version(self) -> EnrichmentBuilder:
        return self.with_enricher(HostVersionEnricher(self._host))

    def with_host_version_name(
        self, include_bitness: bool = True, *, label: str = "Host"
    ) -> EnrichmentBuilder:
        return self.with_enricher(
            HostVersionNameEnricher(self._host, include_bitness=include_bitness, name=label)
        )

    def with_host_bitness(self) -> EnrichmentBuilder:
        return self.with_enricher(HostBitnessEnricher(self._host))

    def with_named(
        self, name: EnricherName, *, include_bitness: bool = True, label: str = "Host"
    ) -> EnrichmentBuilder:
        """Register a built-in host enricher by its settings name."""
        if name == "path":
            return self.with_host_path()
        if name == "version":
            return self.with_host_version()
        if name == "version_name":
            return self.with_host_version_name(include_bitness, label=label)
        if name == "bitness":
            return self.with_host_bitness()
        raise InvalidArgumentError(f"unknown enricher name: {name!r}")

    def build(self) -> EnrichmentPipeline:
        """Freeze the registered enrichers into an ``EnrichmentPipeline``."""
        return EnrichmentPipeline(tuple(self._enrichers), self._factory)
