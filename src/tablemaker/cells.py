"""Per-type coercion of a single cell value.

Only ``color``, ``date`` and ``time`` cells are rewritten; every other type
passes through untouched.  Coercion is lossy by design: input that cannot be
interpreted becomes ``None`` and a warning is logged, nothing is raised.
"""

import logging
import re
from datetime import date, datetime, time, tzinfo
from functools import lru_cache
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from tablemaker import config
from tablemaker.schema import CellType

logger = logging.getLogger(__name__)

# Canonical color form: '#' followed by six lower-case hex digits
HEX_COLOR_RE = re.compile(r"^#[0-9a-f]{6}$")

# 12-hour clock strings posted by the time picker, e.g. "2:30 PM"
_TWELVE_HOUR_FORMATS = ("%I:%M %p", "%I:%M:%S %p", "%I:%M%p")

_DATETIME = TypeAdapter(datetime)
_TIME = TypeAdapter(time)


# ─── Color ────────────────────────────────────────────────────────────────────


class ColorData(BaseModel):
    """A validated ``#rrggbb`` color.  ``str(color)`` is the hex string."""

    model_config = ConfigDict(frozen=True)

    hex: str = Field(pattern=HEX_COLOR_RE.pattern)

    def __str__(self) -> str:
        return self.hex

    @property
    def rgb(self) -> tuple[int, int, int]:
        """The (red, green, blue) components as 0-255 integers."""
        return int(self.hex[1:3], 16), int(self.hex[3:5], 16), int(self.hex[5:7], 16)


def normalize_color(value: Any) -> ColorData | str | None:
    """Canonicalise a color cell to '#rrggbb'.

    '#ABC' -> '#aabbcc', 'fff' -> '#ffffff'.  Empty values and a bare '#'
    become None, as does anything that is not hex once canonicalised.
    """
    if isinstance(value, ColorData):
        return value
    if not value or value == "#":
        return None
    if not isinstance(value, str):
        logger.warning("Dropping non-string color cell value %r", value)
        return None

    value = value.strip().lower()
    if not value.startswith("#"):
        value = "#" + value

    # Expand 3-digit shorthand: #abc -> #aabbcc
    if len(value) == 4:
        value = "#" + "".join(ch * 2 for ch in value[1:])

    try:
        return str(ColorData(hex=value))
    except ValidationError:
        logger.warning("Dropping unparsable color cell value %r", value)
        return None


# ─── Date / Time ──────────────────────────────────────────────────────────────


@lru_cache(maxsize=None)
def _zone(name: str) -> tzinfo:
    return ZoneInfo(name)


def _parse_clock(text: str) -> time | None:
    """Parse a bare time of day in 24-hour ISO form or 12-hour 'h:mm AM' form."""
    try:
        return _TIME.validate_python(text)
    except ValidationError:
        pass
    for fmt in _TWELVE_HOUR_FORMATS:
        try:
            return datetime.strptime(text.upper(), fmt).time()
        except ValueError:
            continue
    return None


def _from_picker(value: dict, zone: tzinfo) -> datetime | time | None:
    """Combine the date/time picker shape {'date': ..., 'time': ..., 'timezone': ...}."""
    if value.get("timezone"):
        zone = _zone(value["timezone"])
    date_part = str(value.get("date") or "").strip()
    time_part = str(value.get("time") or "").strip()

    clock = _parse_clock(time_part) if time_part else None
    if time_part and clock is None:
        return None
    if not date_part:
        return clock

    try:
        day = _DATETIME.validate_python(date_part)
    except ValidationError:
        return None
    if clock is not None:
        day = day.replace(hour=clock.hour, minute=clock.minute, second=clock.second, microsecond=0)
    return day if day.tzinfo else day.replace(tzinfo=zone)


def _to_temporal(value: Any, cell_type: CellType, zone: tzinfo) -> datetime | time | None:
    """Interpret a raw date/time cell as an aware datetime, or a time for time cells."""
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=zone)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=zone)
    if isinstance(value, time):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=zone)
    if isinstance(value, dict):
        return _from_picker(value, zone)
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    try:
        parsed = _DATETIME.validate_python(text)
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=zone)
    except ValidationError:
        pass
    if cell_type == CellType.TIME:
        return _parse_clock(text)
    return None


def to_iso8601(value: Any, cell_type: CellType = CellType.DATE, timezone: str | None = None) -> str | None:
    """Return the ISO-8601 form of a date/time cell, or None if it cannot be parsed.

    Naive values are placed in ``timezone`` (default ``config.TIMEZONE``).
    A bare time of day in a time cell yields an ISO time such as '14:30:00'.
    """
    if value is None or value == "":
        return None
    try:
        zone = _zone(timezone or config.TIMEZONE)
        parsed = _to_temporal(value, cell_type, zone)
    except (ValueError, OverflowError, OSError, ZoneInfoNotFoundError) as exc:
        logger.warning("Dropping unparsable %s cell value %r: %s", cell_type.value, value, exc)
        return None
    if parsed is None:
        logger.warning("Dropping unparsable %s cell value %r", cell_type.value, value)
        return None
    return parsed.isoformat(timespec="seconds")


# ─── Dispatch ─────────────────────────────────────────────────────────────────


def normalize_cell_value(cell_type: CellType | str, value: Any, timezone: str | None = None) -> Any:
    """Coerce one cell according to its column type.

    color       -> '#rrggbb' string (ColorData passes through), or None
    date / time -> ISO-8601 string, or None
    other types -> unchanged
    """
    try:
        cell_type = CellType(cell_type)
    except ValueError:
        return value

    if cell_type == CellType.COLOR:
        return normalize_color(value)
    if cell_type in (CellType.DATE, CellType.TIME):
        return to_iso8601(value, cell_type, timezone)
    return value
