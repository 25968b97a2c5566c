"""Search tool handler: resolve the window, run the search, mask the output.

The search backend itself is injected.  Anything callable as
``search(query, time_range)`` works:

    def search(query: str, time_range: ResolvedTimeRange) -> Any:
        ...  # HTTP calls, job polling, etc.

    tool = SearchTool(search)
    tool("_sourceCategory=prod error", from_="-15m")
    # {"content": [{"type": "text", "text": "...masked JSON..."}]}
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from .masker import PatternMasker
from .timerange import resolve_time_range
from .types import ResolvedTimeRange

logger = logging.getLogger(__name__)

TOOL_NAME = "search_logs"
TOOL_DESCRIPTION = (
    "Execute a log search for the given query. Times can be absolute "
    "(ISO 8601) or relative like -15m, -2h, -3d, -1w; use \"now\" as current "
    "time. If only from is relative, to defaults to now."
)

CIRCULAR_MARKER = "[Circular Reference]"

SearchFn = Callable[[str, ResolvedTimeRange], Any]


def _decycle(value: Any, ancestors: set[int]) -> Any:
    """Copy containers, replacing back-references with CIRCULAR_MARKER."""
    if not isinstance(value, (dict, list, tuple, set, frozenset)):
        return value
    if id(value) in ancestors:
        return CIRCULAR_MARKER
    ancestors.add(id(value))
    try:
        if isinstance(value, dict):
            return {str(k): _decycle(v, ancestors) for k, v in value.items()}
        return [_decycle(v, ancestors) for v in value]
    finally:
        ancestors.discard(id(value))


def safe_stringify(obj: Any) -> str:
    """JSON-encode a search result that may reference itself."""
    return json.dumps(_decycle(obj, set()), indent=2, ensure_ascii=False, default=str)


def _text_content(text: str) -> dict[str, Any]:
    return {"content": [{"type": "text", "text": text}]}


@dataclass
class SearchTool:
    """Tool-call handler wrapping an injected search backend."""

    search: SearchFn
    masker: PatternMasker = field(default_factory=PatternMasker)

    def __call__(
        self,
        query: str,
        from_: str | None = None,
        to: str | None = None,
    ) -> dict[str, Any]:
        cleaned = query.replace("\n", "")
        time_range = resolve_time_range(from_, to)
        logger.debug("searching %r over %s", cleaned, time_range.as_dict())
        try:
            results = self.search(cleaned, time_range)
            text = safe_stringify(results)
        except Exception as e:
            logger.exception("log search failed")
            payload = _text_content(self.masker.mask(f"Error: {e}"))
            payload["is_error"] = True
            return payload
        return _text_content(self.masker.mask(text))
