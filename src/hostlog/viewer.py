"""In-app log display — a bounded, in-memory log window for add-ins.

``LogDisplay`` is a structlog-compatible logger: structlog hands it the
fully rendered string of every event and it keeps the most recent
``max_entries`` of them.  ``TemplateRenderer`` is the final processor that
produces that string from an output template:

  {Properties}  JSON object of every property that is not one of the fields
                below (this is where the host enrichers show up)
  {Level}       three-letter level: VRB DBG INF WRN ERR FTL
  {Message}     the event message
  {Timestamp}   the ISO timestamp added by TimeStamper, if any
  {Exception}   formatted traceback, empty when there is none
  {NewLine}     a line break

Rendered with the default template, an event looks like::

    {"HostPath": "/opt/host/bin/host", "HostBitness": "64-bit"}
    [INF] Hello from hostlog-sample! :)
"""

from __future__ import annotations

import json
from collections import deque
from collections.abc import MutableMapping
from enum import Enum
from typing import Any

from hostlog.config import DEFAULT_TEMPLATE, DisplaySettings

LEVEL_ABBREVIATIONS: dict[str, str] = {
    "notset": "VRB",
    "debug": "DBG",
    "info": "INF",
    "warn": "WRN",
    "warning": "WRN",
    "error": "ERR",
    "exception": "ERR",
    "critical": "FTL",
    "fatal": "FTL",
}

# Keys rendered by their own placeholder rather than inside {Properties}.
_RESERVED_KEYS = frozenset({"event", "level", "timestamp", "exception", "exc_info"})


class DisplayOrder(str, Enum):
    NEWEST_FIRST = "newest_first"
    OLDEST_FIRST = "oldest_first"


class TemplateRenderer:
    """Render an event dict into a display string using an output template.

    Args:
        template: Format string using the placeholders listed in the module
                  docstring.  Unknown placeholders raise ``KeyError`` at
                  render time.
    """

    def __init__(self, template: str = DEFAULT_TEMPLATE) -> None:
        self.template = template

    def __call__(self, logger: Any, method_name: str, event_dict: MutableMapping[str, Any]) -> str:
        level = str(event_dict.get("level", method_name)).lower()
        properties = {k: v for k, v in event_dict.items() if k not in _RESERVED_KEYS}
        rendered = self.template.format(
            Properties=json.dumps(properties, default=str),
            Level=LEVEL_ABBREVIATIONS.get(level, level[:3].upper()),
            Message=event_dict.get("event", ""),
            Timestamp=event_dict.get("timestamp", ""),
            Exception=event_dict.get("exception", ""),
            NewLine="\n",
        )
        return rendered.rstrip()


class LogDisplay:
    """Bounded in-memory log window.

    Args:
        order:       Order in which ``entries()`` returns messages.
        max_entries: Oldest entries are dropped beyond this count.
    """

    def __init__(
        self,
        order: DisplayOrder = DisplayOrder.NEWEST_FIRST,
        max_entries: int = 1000,
    ) -> None:
        if max_entries <= 0:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        self.order = DisplayOrder(order)
        self._entries: deque[str] = deque(maxlen=max_entries)
        self.visible = False

    @classmethod
    def from_settings(cls, settings: DisplaySettings) -> LogDisplay:
        return cls(order=DisplayOrder(settings.order), max_entries=settings.max_entries)

    def msg(self, message: str) -> None:
        self._entries.append(message)

    # structlog calls the method named after the log level.
    log = debug = info = warn = warning = msg
    fatal = failure = err = error = critical = exception = msg

    def entries(self) -> list[str]:
        if self.order is DisplayOrder.NEWEST_FIRST:
            return list(reversed(self._entries))
        return list(self._entries)

    def render(self) -> str:
        return "\n".join(self.entries())

    def show(self) -> None:
        self.visible = True

    def hide(self) -> None:
        self.visible = False

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        # structlog replaces a falsy logger with its default factory.
        return True
