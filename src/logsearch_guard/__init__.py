"""logsearch-guard: time-window resolution and PII masking for log search tools."""

from .timerange import parse_time_token, resolve_time_range
from .masker import PatternMasker, MaskerConfig, is_masking_enabled, mask_sensitive_info
from .patterns import CATEGORIES
from .search import SearchTool, safe_stringify
from .config import create_masker, load_config, load_from_yaml
from .types import ResolvedTimeRange, MaskingToggle, PatternCategory

__all__ = [
    "parse_time_token", "resolve_time_range",
    "PatternMasker", "MaskerConfig", "is_masking_enabled", "mask_sensitive_info",
    "CATEGORIES",
    "SearchTool", "safe_stringify",
    "create_masker", "load_config", "load_from_yaml",
    "ResolvedTimeRange", "MaskingToggle", "PatternCategory",
]
__version__ = "0.1.0"
