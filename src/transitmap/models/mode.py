"""Transit mode enum."""

from __future__ import annotations

import enum
from typing import Any


class TransitMode(enum.IntEnum):
    """Transit category selectable on the map.

    Values are the provider's route ``type`` codes, so a mode can be sent
    directly as ``filter[type]``.
    """

    LIGHT_RAIL = 0
    HEAVY_RAIL = 1
    COMMUTER_RAIL = 2
    BUS = 3

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, value: Any) -> TransitMode | None:
        """Coerce selector input into a mode.

        Accepts a member, its integer value, a numeric string (``"2"``) or a
        member name (``"bus"``). ``None`` and ``""`` mean "no mode".
        """
        if value is None or isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            if text.lstrip("-").isdigit():
                return cls(int(text))
            try:
                return cls[text.upper()]
            except KeyError:
                raise ValueError(f"unknown transit mode {value!r}") from None
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value)
        raise ValueError(f"unknown transit mode {value!r}")


_LABELS: dict[TransitMode, str] = {
    TransitMode.LIGHT_RAIL: "Subway Light Rail",
    TransitMode.HEAVY_RAIL: "Subway Heavy Rail",
    TransitMode.COMMUTER_RAIL: "Commuter Rail",
    TransitMode.BUS: "Bus",
}
