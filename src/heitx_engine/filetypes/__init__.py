"""Language profiles resolved from filenames."""

from .models import FileType, HighlightingOptions
from .registry import FileTypeConflictError, FileTypeRegistry, FrozenRegistryError
from .defaults import DEFAULT_FILE_TYPES, default_registry, load_default_filetypes

__all__ = [
    "DEFAULT_FILE_TYPES",
    "FileType",
    "FileTypeConflictError",
    "FileTypeRegistry",
    "FrozenRegistryError",
    "HighlightingOptions",
    "default_registry",
    "load_default_filetypes",
]
