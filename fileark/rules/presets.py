"""Built-in file categories and directory exclusion lists."""

from dataclasses import dataclass

KB = 1024
MB = 1024 * KB


@dataclass(frozen=True)
class CategoryPreset:
    """A named group of extensions sharing a destination folder."""

    name: str
    extensions: tuple[str, ...]
    default_min_size: int
    enabled_by_default: bool


CATEGORY_PRESETS: tuple[CategoryPreset, ...] = (
    CategoryPreset(
        name="Images",
        extensions=(
            "jpg", "jpeg", "png", "gif", "tiff", "tif", "webp", "heic",
            "heif", "raw", "cr2", "cr3", "nef", "arw", "dng", "orf",
        ),
        default_min_size=50 * KB,
        enabled_by_default=True,
    ),
    CategoryPreset(
        name="Vector",
        extensions=("ai", "eps", "svg", "pdf"),
        default_min_size=1 * KB,
        enabled_by_default=True,
    ),
    CategoryPreset(
        name="Design",
        extensions=(
            "psd", "psb", "indd", "indt", "xd", "fig", "sketch", "afdesign", "afphoto",
        ),
        default_min_size=10 * KB,
        enabled_by_default=True,
    ),
    CategoryPreset(
        name="3D",
        extensions=(
            "blend", "c4d", "ma", "mb", "3ds", "skp", "obj", "fbx", "dae", "stl", "gltf", "glb",
        ),
        default_min_size=100 * KB,
        enabled_by_default=True,
    ),
    CategoryPreset(
        name="Video",
        extensions=("mp4", "mov", "avi", "mkv", "wmv", "prproj", "aep", "drp"),
        default_min_size=1 * MB,
        enabled_by_default=False,
    ),
    CategoryPreset(
        name="Audio",
        extensions=("mp3", "wav", "aiff", "flac", "ogg", "m4a", "aac"),
        default_min_size=50 * KB,
        enabled_by_default=False,
    ),
    CategoryPreset(
        name="Documents",
        extensions=("doc", "docx", "xls", "xlsx", "ppt", "pptx", "txt", "md", "rtf"),
        default_min_size=1 * KB,
        enabled_by_default=False,
    ),
)

# Scratch folders that rarely hold anything worth keeping
TEMP_CACHE_DIRECTORIES: frozenset[str] = frozenset(
    {
        "Temp",
        "tmp",
        "Cache",
        "Caches",
        ".cache",
    }
)

# OS, application and tooling folders
SYSTEM_DIRECTORIES: frozenset[str] = frozenset(
    {
        "Windows",
        "Program Files",
        "Program Files (x86)",
        "AppData",
        "$RECYCLE.BIN",
        "System Volume Information",
        "node_modules",
        ".git",
        ".Trash",
        "Library",
    }
)


def find_preset(name: str) -> CategoryPreset | None:
    """Look up a preset by name, ignoring case."""
    wanted = name.lower()
    for preset in CATEGORY_PRESETS:
        if preset.name.lower() == wanted:
            return preset
    return None


def default_categories() -> list[CategoryPreset]:
    return [preset for preset in CATEGORY_PRESETS if preset.enabled_by_default]
