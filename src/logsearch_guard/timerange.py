"""Turn user-supplied time expressions into a concrete search window.

Accepted tokens:
    now                     the evaluation instant
    -15m, -2h, -3d, -1w     relative offsets into the past (s/m/h/d/w)
    2025-01-10T00:00:00Z    anything pendulum can parse as a date-time

Nothing here raises.  A token that can't be understood resolves to None
and the search backend decides what to do with a half-open window.
"""

from __future__ import annotations
import logging
import re

import pendulum
from pendulum import DateTime

from .types import ResolvedTimeRange

logger = logging.getLogger(__name__)

_RELATIVE = re.compile(r"^-([0-9]+)([smhdw])$", re.IGNORECASE)

_UNITS = {
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
    "w": "weeks",
}


def _clock(now: DateTime | None) -> DateTime:
    if now is not None:
        # Parsed tokens are always aware, so the clock has to be too
        return now if now.tzinfo is not None else pendulum.instance(now, tz="UTC")
    # Resolved times are rendered with second precision
    return pendulum.now().replace(microsecond=0)


def _relative_offset(token: str) -> dict[str, int] | None:
    m = _RELATIVE.match(token)
    if m is None:
        return None
    return {_UNITS[m.group(2).lower()]: int(m.group(1))}


def _shift_back(now: DateTime, offset: dict[str, int]) -> DateTime | None:
    try:
        return now.subtract(**offset)
    except (OverflowError, ValueError):
        logger.debug("relative offset %r out of range", offset)
        return None


def parse_time_token(token: str | None, now: DateTime) -> DateTime | None:
    """Resolve a single token against `now`.  Returns None if invalid."""
    if not token:
        return None
    if token.lower() == "now":
        return now

    offset = _relative_offset(token)
    if offset is not None:
        return _shift_back(now, offset)

    try:
        parsed = pendulum.parse(token, strict=False, tz=now.timezone or "UTC")
    except (ValueError, OverflowError, TypeError):
        logger.debug("unparseable time token %r", token)
        return None
    # Durations, intervals and bare times aren't points in time
    if not isinstance(parsed, DateTime):
        logger.debug("time token %r is not a date-time", token)
        return None
    return parsed


def resolve_time_range(
    from_: str | None = None,
    to: str | None = None,
    *,
    now: DateTime | None = None,
) -> ResolvedTimeRange:
    """Resolve a (from, to) pair of tokens into an ordered window.

    - `from_` given and `to` omitted: the window runs up to now.
    - only a relative `to` given (e.g. to="-2h"): read as the last two
      hours, i.e. from now-2h to now.
    - both resolved but backwards: swapped.
    - anything unresolved stays None.
    """
    now = _clock(now)
    start = parse_time_token(from_, now)
    end = parse_time_token(to, now)

    if start is not None and not to:
        end = now

    if not from_ and to:
        offset = _relative_offset(to)
        if offset is not None:
            end = now
            start = _shift_back(now, offset)

    if start is not None and end is not None and start > end:
        start, end = end, start

    return ResolvedTimeRange(from_=start, to=end)
