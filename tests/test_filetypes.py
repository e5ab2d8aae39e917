import pytest

from heitx_engine.filetypes import (
    FileType,
    FileTypeConflictError,
    FileTypeRegistry,
    FrozenRegistryError,
    HighlightingOptions,
    default_registry,
    load_default_filetypes,
)


def make_file_type(name: str = "Toy", *extensions: str) -> FileType:
    return FileType(
        name=name,
        options=HighlightingOptions(numbers=True, primary_keywords=("let",)),
        extensions=extensions or (".toy",),
    )


def test_default_registry_resolves_builtin_profiles() -> None:
    registry = default_registry()
    assert registry.resolve("src/main.rs").name == "Rust"
    assert registry.resolve("Main.java").name == "Java"
    assert registry.resolve("lib.h").name == "C"


def test_unknown_suffix_falls_back_to_disabled_profile() -> None:
    fallback = default_registry().resolve("README.md")
    assert fallback.name == "No filetype"
    assert fallback.options == HighlightingOptions()
    assert fallback.options.primary_keywords == ()
    assert default_registry().resolve(None) is fallback


def test_register_duplicate_name_conflicts() -> None:
    registry = FileTypeRegistry()
    registry.register(make_file_type())

    with pytest.raises(FileTypeConflictError):
        registry.register(make_file_type())


def test_register_with_replace() -> None:
    registry = FileTypeRegistry()
    registry.register(make_file_type("Toy", ".toy"))
    registry.register(make_file_type("Toy", ".ty"), replace=True)

    assert len(registry) == 1
    assert registry.resolve("a.ty").name == "Toy"
    assert registry.resolve("a.toy").name == "No filetype"


def test_unregister_and_get() -> None:
    registry = FileTypeRegistry()
    toy = registry.register(make_file_type())

    assert registry.get("Toy") is toy
    assert registry.unregister("Toy") is toy
    with pytest.raises(KeyError):
        registry.get("Toy")


def test_first_registered_match_wins() -> None:
    registry = FileTypeRegistry()
    registry.register(make_file_type("First", ".x"))
    registry.register(make_file_type("Second", ".x"))
    assert registry.resolve("a.x").name == "First"


def test_load_default_filetypes_include_filter() -> None:
    registry = load_default_filetypes(FileTypeRegistry(), include=("Java",))
    assert [file_type.name for file_type in registry] == ["Java"]


def test_extensions_are_normalized() -> None:
    assert make_file_type("Toy", "toy", " ", ".toy").extensions == (".toy",)


def test_keyword_lists_keep_order_and_drop_duplicates() -> None:
    options = HighlightingOptions(primary_keywords=("if", "else", "if", ""))
    assert options.primary_keywords == ("if", "else")


def test_java_profile_keywords() -> None:
    java = default_registry().get("Java").options
    assert "implements" in java.primary_keywords
    assert java.primary_keywords.count("default") == 1
    assert java.secondary_keywords[-1] == "Object"


def test_file_type_requires_name() -> None:
    with pytest.raises(ValueError):
        FileType(name="")


def test_default_registry_is_frozen() -> None:
    registry = default_registry()
    assert registry.frozen
    with pytest.raises(FrozenRegistryError):
        registry.register(make_file_type())
    with pytest.raises(FrozenRegistryError):
        registry.unregister("Rust")
    assert [file_type.name for file_type in registry] == ["Rust", "Java", "C"]
    assert registry.resolve("x.toy").name == "No filetype"


def test_defaults_can_seed_a_private_registry() -> None:
    registry = load_default_filetypes(FileTypeRegistry())
    registry.register(make_file_type())
    assert not registry.frozen
    assert registry.resolve("x.toy").name == "Toy"
    assert default_registry().resolve("x.toy").name == "No filetype"
