"""Core types."""

from __future__ import annotations
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from pendulum import DateTime


@dataclass(frozen=True, slots=True)
class ResolvedTimeRange:
    """A search window.  Either end may be unresolved (None)."""
    from_: DateTime | None = None
    to: DateTime | None = None

    def as_dict(self) -> dict[str, str | None]:
        return {
            "from": self.from_.isoformat() if self.from_ is not None else None,
            "to": self.to.isoformat() if self.to is not None else None,
        }


_FALSY = frozenset({"0", "false", "no", "off"})
_TRUTHY = frozenset({"1", "true", "yes", "on"})


class MaskingToggle(str, Enum):
    """State of the masking switch, derived from one config value."""
    ENABLED = "enabled"
    DISABLED = "disabled"
    UNRECOGNIZED = "unrecognized"   # masks, same as ENABLED

    @classmethod
    def from_setting(cls, value: Any) -> MaskingToggle:
        if value is None or value == "":
            return cls.ENABLED
        if isinstance(value, bool):
            return cls.ENABLED if value else cls.DISABLED
        normalized = str(value).strip().lower()
        if normalized in _FALSY:
            return cls.DISABLED
        if normalized in _TRUTHY:
            return cls.ENABLED
        return cls.UNRECOGNIZED

    @property
    def masks(self) -> bool:
        return self is not MaskingToggle.DISABLED


@dataclass(frozen=True, slots=True)
class PatternCategory:
    """One kind of PII and how to find it."""
    name: str                                   # e.g. "EMAIL", "PHONE"
    patterns: tuple[re.Pattern, ...]
    placeholder: str                            # e.g. "[EMAIL REDACTED]"
    guard: Callable[[re.Match], bool] | None = None  # False → leave match alone
    until_stable: bool = False                  # re-run patterns to a fixed point
