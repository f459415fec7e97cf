"""Assembly of a ScanRule from user-facing selections."""

import re
from collections.abc import Iterable, Mapping

from fileark.models import CUSTOM_CATEGORY, ScanRule
from fileark.rules.presets import (
    SYSTEM_DIRECTORIES,
    TEMP_CACHE_DIRECTORIES,
    CategoryPreset,
)

_SIZE_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([kmg]?i?b?)?\s*$", re.IGNORECASE)

_SIZE_UNITS = {
    "": 1,
    "b": 1,
    "k": 1024,
    "kb": 1024,
    "kib": 1024,
    "m": 1024**2,
    "mb": 1024**2,
    "mib": 1024**2,
    "g": 1024**3,
    "gb": 1024**3,
    "gib": 1024**3,
}


class RuleError(ValueError):
    """Raised when user-supplied rule input cannot be interpreted."""


def parse_extension_list(text: str) -> list[str]:
    """Split a comma separated extension list into normalized extensions.

    >>> parse_extension_list(" .PSD, ai,, ")
    ['psd', 'ai']
    """
    extensions = []
    for part in text.split(","):
        ext = part.strip().lstrip(".").lower()
        if ext:
            extensions.append(ext)
    return extensions


def parse_size(text: str) -> int:
    """Parse a human size such as ``50KB`` or ``1.5 MB`` into bytes (binary units)."""
    match = _SIZE_PATTERN.match(text)
    if not match:
        raise RuleError(f"Invalid size: {text!r}")

    number, unit = match.groups()
    multiplier = _SIZE_UNITS.get((unit or "").lower())
    if multiplier is None:
        raise RuleError(f"Unknown size unit in {text!r}")

    return int(float(number) * multiplier)


def build_scan_rule(
    categories: Iterable[CategoryPreset],
    *,
    min_sizes: Mapping[str, int] | None = None,
    custom_extensions: Iterable[str] = (),
    exclude_temp_cache: bool = True,
    exclude_system: bool = True,
    extra_excludes: Iterable[str] = (),
    excluded_extensions: Iterable[str] = (),
) -> ScanRule:
    """Build a ScanRule from selected category presets.

    Args:
        categories: Presets to include.
        min_sizes: Per-category minimum size overrides, keyed by category
            name (case-insensitive). Presets fall back to their default.
        custom_extensions: Extra extensions routed to the Custom category
            with no size threshold.
        exclude_temp_cache: Skip temp and cache folders.
        exclude_system: Skip OS and tooling folders.
        extra_excludes: Additional directory names to skip.
        excluded_extensions: Preset extensions to leave out, e.g. ``gif``
            while still collecting the rest of Images.

    Returns:
        An immutable ScanRule.
    """
    overrides = {name.lower(): size for name, size in (min_sizes or {}).items()}
    skipped = {ext.strip().lstrip(".").lower() for ext in excluded_extensions}

    extensions: set[str] = set()
    min_size_by_extension: dict[str, int] = {}
    category_by_extension: dict[str, str] = {}

    for preset in categories:
        min_size = overrides.get(preset.name.lower(), preset.default_min_size)
        for ext in preset.extensions:
            if ext in skipped:
                continue
            extensions.add(ext)
            min_size_by_extension[ext] = min_size
            category_by_extension[ext] = preset.name

    # Later entries win, so a custom extension moves out of its preset
    for raw in custom_extensions:
        ext = raw.strip().lstrip(".").lower()
        if not ext:
            continue
        extensions.add(ext)
        min_size_by_extension[ext] = 0
        category_by_extension[ext] = CUSTOM_CATEGORY

    if not extensions:
        raise RuleError("Select at least one file type.")

    excluded: set[str] = set()
    if exclude_temp_cache:
        excluded.update(TEMP_CACHE_DIRECTORIES)
    if exclude_system:
        excluded.update(SYSTEM_DIRECTORIES)
    excluded.update(name.strip() for name in extra_excludes if name.strip())

    return ScanRule(
        extensions=frozenset(extensions),
        min_size_by_extension=min_size_by_extension,
        category_by_extension=category_by_extension,
        excluded_directory_names=frozenset(excluded),
    )
