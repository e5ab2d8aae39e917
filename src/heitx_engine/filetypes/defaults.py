"""Built-in language profiles."""

from __future__ import annotations

from functools import lru_cache
from typing import Iterable, Optional

from .models import FileType, HighlightingOptions
from .registry import FileTypeRegistry

# fmt: off
RUST_PRIMARY_KEYWORDS = (
    "as", "break", "const", "continue", "crate", "else", "enum", "extern",
    "false", "fn", "for", "if", "impl", "in", "let", "loop", "match", "mod",
    "move", "mut", "pub", "ref", "return", "self", "Self", "static", "struct",
    "super", "trait", "true", "type", "unsafe", "use", "where", "while",
    "dyn", "abstract", "become", "box", "do", "final", "macro", "override",
    "priv", "typeof", "unsized", "virtual", "yield", "async", "await", "try",
)

RUST_SECONDARY_KEYWORDS = (
    "bool", "char", "i8", "i16", "i32", "i64", "isize",
    "u8", "u16", "u32", "u64", "usize", "f32", "f64",
)

JAVA_PRIMARY_KEYWORDS = (
    "void", "null", "true", "false", "enum", "public", "protected", "default",
    "private", "class", "interface", "abstract", "implements", "extends",
    "new", "import", "package", "if", "else", "while", "for", "switch",
    "case", "do", "break", "continue", "return", "instanceof", "static",
    "final", "super", "this", "native", "synchronized", "volatile", "const",
)

JAVA_SECONDARY_KEYWORDS = (
    "byte", "boolean", "char", "short", "int", "float", "long", "double",
    "Object",
)

C_PRIMARY_KEYWORDS = (
    "switch", "if", "while", "for", "break", "continue", "return", "else",
    "struct", "union", "typedef", "static", "enum", "case", "default",
    "sizeof", "const", "goto", "do", "extern", "register", "volatile",
)

C_SECONDARY_KEYWORDS = (
    "int", "long", "double", "float", "char", "unsigned", "signed", "void",
    "short", "size_t",
)
# fmt: on


def _c_like(primary: tuple[str, ...], secondary: tuple[str, ...]) -> HighlightingOptions:
    return HighlightingOptions(
        numbers=True,
        strings=True,
        characters=True,
        comments=True,
        multiline_comments=True,
        primary_keywords=primary,
        secondary_keywords=secondary,
    )


DEFAULT_FILE_TYPES: tuple[FileType, ...] = (
    FileType(
        name="Rust",
        options=_c_like(RUST_PRIMARY_KEYWORDS, RUST_SECONDARY_KEYWORDS),
        extensions=(".rs",),
    ),
    FileType(
        name="Java",
        options=_c_like(JAVA_PRIMARY_KEYWORDS, JAVA_SECONDARY_KEYWORDS),
        extensions=(".java",),
    ),
    FileType(
        name="C",
        options=_c_like(C_PRIMARY_KEYWORDS, C_SECONDARY_KEYWORDS),
        extensions=(".c", ".h"),
    ),
)


def load_default_filetypes(
    registry: FileTypeRegistry,
    *,
    include: Optional[Iterable[str]] = None,
    replace: bool = False,
) -> FileTypeRegistry:
    """Register the built-in profiles, optionally only those named in ``include``."""

    wanted = set(include) if include is not None else None
    for file_type in DEFAULT_FILE_TYPES:
        if wanted is not None and file_type.name not in wanted:
            continue
        registry.register(file_type, replace=replace)
    return registry


@lru_cache(maxsize=None)
def default_registry() -> FileTypeRegistry:
    """Shared, frozen registry seeded with the built-in profiles.

    Callers that need extra profiles load the defaults into their own
    ``FileTypeRegistry`` and pass that to ``Document``.
    """

    return load_default_filetypes(FileTypeRegistry()).freeze()


__all__ = [
    "DEFAULT_FILE_TYPES",
    "load_default_filetypes",
    "default_registry",
]
