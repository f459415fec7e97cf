"""Category presets and scan rule assembly."""

from .builder import RuleError, build_scan_rule, parse_extension_list, parse_size
from .presets import (
    CATEGORY_PRESETS,
    SYSTEM_DIRECTORIES,
    TEMP_CACHE_DIRECTORIES,
    CategoryPreset,
    default_categories,
    find_preset,
)

__all__ = [
    "CATEGORY_PRESETS",
    "SYSTEM_DIRECTORIES",
    "TEMP_CACHE_DIRECTORIES",
    "CategoryPreset",
    "RuleError",
    "build_scan_rule",
    "default_categories",
    "find_preset",
    "parse_extension_list",
    "parse_size",
]
