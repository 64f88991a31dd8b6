"""Calendar helpers: current time, JSON encoding and friendly formatting."""

from __future__ import annotations

from datetime import datetime

_FIELDS = ("year", "month", "day", "hour", "minute", "second")
_SECONDS_PER_DAY = 60 * 60 * 24


def now() -> datetime:
    """Return the current local time, truncated to whole seconds."""
    return datetime.now().replace(microsecond=0)


def to_json(moment: datetime) -> dict:
    """Encode a moment as ``{"time": {"year": ..., ..., "second": ...}}``."""
    return {"time": {name: getattr(moment, name) for name in _FIELDS}}


def from_json(data: dict) -> datetime:
    """Decode a moment written by :func:`to_json`."""
    parts = data["time"]
    return datetime(*(int(parts[name]) for name in _FIELDS))


def format_moment(moment: datetime, reference: datetime | None = None) -> str:
    """Render a moment relative to ``reference`` (defaults to now).

    Moments from the start of the reference day onwards read "Today, ...",
    those less than seven whole days old show the weekday, and older ones
    show the full date.
    """
    if reference is None:
        reference = now()
    start_of_day = reference.replace(hour=0, minute=0, second=0, microsecond=0)
    if moment >= start_of_day:
        pattern = "Today, %I:%M %p"
    else:
        days = int((reference - moment).total_seconds() / _SECONDS_PER_DAY)
        pattern = "%A, %I:%M %p" if days < 7 else "%B %d, %Y, %I:%M %p"
    return moment.strftime(pattern)