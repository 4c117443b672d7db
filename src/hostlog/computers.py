"""Property computers — pure functions from host facts to one property value.

Each computer reads the ``HostEnvironment`` and returns a single value.  They
are deterministic within a process: bitness and version never change while
the host is running, which is what lets the enrichers cache the result.

A computer raises ``UnavailableError`` (via the host) when the fact it needs
has not been reported; it never returns a placeholder.
"""

from __future__ import annotations

import math

from hostlog.errors import UnavailableError
from hostlog.host import HostEnvironment

BITNESS_64 = "64-bit"
BITNESS_32 = "32-bit"

# Host major version → release year.  13 was never shipped.
VERSION_YEARS: dict[int, str] = {
    17: "2019",
    16: "2016",
    15: "2013",
    14: "2010",
    12: "2007",
    11: "2003",
}

_OLDEST_KNOWN = 11


def bitness(host: HostEnvironment) -> str:
    """Return ``"64-bit"`` or ``"32-bit"`` for the running process."""
    return BITNESS_64 if host.is_64bit_process() else BITNESS_32


def version_label(version: int, *, name: str = "Host") -> str:
    """Map a host major version to its release label.

    Known versions map through ``VERSION_YEARS``; anything older than the
    oldest known version is ``"<name> < 2003"`` and every other unknown
    version is ``"<name> > 2019"``.

    >>> version_label(16)
    'Host 2016'
    >>> version_label(9, name="Excel")
    'Excel < 2003'
    """
    year = VERSION_YEARS.get(version)
    if year is not None:
        return f"{name} {year}"
    if version < _OLDEST_KNOWN:
        return f"{name} < {VERSION_YEARS[_OLDEST_KNOWN]}"
    return f"{name} > {VERSION_YEARS[max(VERSION_YEARS)]}"


def version_name(host: HostEnvironment, *, include_bitness: bool = True, name: str = "Host") -> str:
    """Return the human-readable host version, e.g. ``"Host 2016 64-bit"``.

    The reported version is rounded to the nearest major version (ties to
    even), so 16.9 reads as 17.  A non-finite version is unavailable.
    """
    version = host.version()
    if not math.isfinite(version):
        raise UnavailableError(f"host reported a non-finite version: {version!r}")
    label = version_label(round(version), name=name)
    return f"{label} {bitness(host)}" if include_bitness else label


def host_version(host: HostEnvironment) -> float:
    return host.version()


def host_path(host: HostEnvironment) -> str:
    return host.path()
