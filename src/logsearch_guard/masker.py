"""PatternMasker: the main masking API.

Usage:
    from logsearch_guard import PatternMasker

    masker = PatternMasker()           # reads MASK_SENSITIVE_INFO on each call
    masker.mask("Mail test.user@example.com or call 833-376-1995")
    # "Mail [EMAIL REDACTED] or call [PHONE REDACTED]"

    # Explicit settings source instead of the process environment
    masker = PatternMasker(source={"MASK_SENSITIVE_INFO": "off"}.get)
"""

from __future__ import annotations
import logging
import os
import re
from dataclasses import dataclass, field
from typing import Any, Callable

from .patterns import CATEGORIES
from .types import MaskingToggle, PatternCategory

logger = logging.getLogger(__name__)

DEFAULT_TOGGLE_KEY = "MASK_SENSITIVE_INFO"
DEFAULT_MAX_PASSES = 10


@dataclass
class MaskerConfig:
    """Configuration for the PatternMasker."""
    toggle_key: str = DEFAULT_TOGGLE_KEY
    # Upper bound on phone re-scans; convergence normally takes 1-2 passes
    max_passes: int = DEFAULT_MAX_PASSES
    categories: tuple[PatternCategory, ...] = CATEGORIES
    # Category names to never apply (e.g. {"ADDRESS"})
    skip_categories: set[str] = field(default_factory=set)
    # Allow-list: matched values that should NEVER be replaced
    allow_list: set[str] = field(default_factory=set)

    def __post_init__(self) -> None:
        # A zero cap would silently skip the phone category
        if self.max_passes < 1:
            raise ValueError(f"max_passes must be at least 1, got {self.max_passes}")


def is_masking_enabled(value: Any) -> bool:
    """Evaluate one raw toggle value.  Unknown values mask."""
    return MaskingToggle.from_setting(value).masks


class PatternMasker:
    """Replaces PII in text with per-category placeholders.

    Categories run in table order (email, card, phone, address, SSN).
    Phone patterns overlap, so that category is re-run until a pass
    changes nothing, or `max_passes` is reached.
    """

    def __init__(
        self,
        config: MaskerConfig | None = None,
        *,
        source: Callable[[str], Any] | None = None,
    ) -> None:
        self.config = config or MaskerConfig()
        self._source = source or os.environ.get

    def toggle(self) -> MaskingToggle:
        """Current toggle state, read from the settings source."""
        return MaskingToggle.from_setting(self._source(self.config.toggle_key))

    def mask(self, text: Any) -> Any:
        """Mask PII in text.  Non-string input is returned as-is."""
        if not isinstance(text, str):
            return text
        # Read once; a toggle flip mid-call doesn't change this call
        if not self.toggle().masks:
            return text

        masked = text
        for category in self.config.categories:
            if category.name in self.config.skip_categories:
                continue
            if category.until_stable:
                masked = self._apply_until_stable(category, masked)
            else:
                masked = self._apply(category, masked)
        return masked

    def _apply(self, category: PatternCategory, text: str) -> str:
        """One pass of every pattern in the category, in order."""
        replaced = 0

        def _replace(m: re.Match) -> str:
            nonlocal replaced
            value = m.group()
            if value in self.config.allow_list:
                return value
            if category.guard is not None and not category.guard(m):
                return value
            replaced += 1
            return category.placeholder

        for pattern in category.patterns:
            text = pattern.sub(_replace, text)
        if replaced:
            logger.debug("masked %d %s match(es)", replaced, category.name)
        return text

    def _apply_until_stable(self, category: PatternCategory, text: str) -> str:
        for _ in range(self.config.max_passes):
            updated = self._apply(category, text)
            if updated == text:
                return updated
            text = updated
        logger.warning(
            "%s masking still changing after %d passes; returning last pass",
            category.name, self.config.max_passes,
        )
        return text


_default_masker = PatternMasker()


def mask_sensitive_info(text: Any) -> Any:
    """Mask text with the default masker (toggle from the environment)."""
    return _default_masker.mask(text)
