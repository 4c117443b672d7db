"""Typed errors raised by hostlog.

Error hierarchy:

    HostlogError
    ├── InvalidArgumentError  — a registration or configuration input is absent
    │                           or malformed (also a ValueError)
    └── UnavailableError      — a host fact cannot be read right now
                                (also a LookupError)

``InvalidArgumentError`` is raised straight to whoever is setting up the
logger so that mistakes show up at startup.  ``UnavailableError`` never
escapes the enrichment pipeline: the affected property is simply left off
the event.
"""


class HostlogError(Exception):
    """Base class for all hostlog errors."""


class InvalidArgumentError(HostlogError, ValueError):
    """An enricher, property or setting passed to hostlog is absent or invalid."""


class UnavailableError(HostlogError, LookupError):
    """A host environment fact cannot be read at enrichment time.

    Typically the host has not reported its version yet.  Enrichers treat
    this as "omit the property", never as fatal.
    """
