"""Host environment boundary — the read-only facts the enrichers capture.

Three ambient facts are exposed, each without arguments:

  is_64bit_process()  — process architecture; never unavailable
  version()           — the host application's numeric version (e.g. 16.0)
  path()              — where the host application / add-in lives on disk

``ProcessHost`` reads them from the running interpreter and the resolved
settings.  ``StaticHost`` is a frozen value object for tests and for hosts
that already know their facts at construction time.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Protocol

from hostlog.config import HostSettings
from hostlog.errors import UnavailableError


class HostEnvironment(Protocol):
    def is_64bit_process(self) -> bool: ...

    def version(self) -> float: ...

    def path(self) -> str: ...


def is_64bit_process() -> bool:
    """Return True when the current interpreter is a 64-bit process."""
    return sys.maxsize > 2**32


class ProcessHost:
    """Host facts derived from the current process and ``HostSettings``.

    Args:
        settings: The ``host`` section of the resolved settings.  Defaults
                  to an empty ``HostSettings`` (no version reported).
    """

    def __init__(self, settings: HostSettings | None = None) -> None:
        self._settings = settings if settings is not None else HostSettings()

    def is_64bit_process(self) -> bool:
        if self._settings.force_bitness is not None:
            return self._settings.force_bitness == "64-bit"
        return is_64bit_process()

    def version(self) -> float:
        """Return the reported host version; raise ``UnavailableError`` if none."""
        if self._settings.version is None:
            raise UnavailableError("host version has not been reported")
        return self._settings.version

    def path(self) -> str:
        """Return the configured host path, or the interpreter path as a fallback."""
        if self._settings.path is not None:
            return str(self._settings.path)
        # sys.executable is empty or None when embedded without a launcher.
        if not sys.executable:
            raise UnavailableError("host path cannot be determined")
        return sys.executable


@dataclass(frozen=True)
class StaticHost:
    """Host facts fixed at construction time.

    ``version_number=None`` or ``install_path=None`` behave like a host that
    has not reported that fact yet.
    """

    is_64bit: bool = True
    version_number: float | None = None
    install_path: str | None = None

    def is_64bit_process(self) -> bool:
        return self.is_64bit

    def version(self) -> float:
        if self.version_number is None:
            raise UnavailableError("host version has not been reported")
        return self.version_number

    def path(self) -> str:
        if self.install_path is None:
            raise UnavailableError("host path has not been reported")
        return self.install_path
