from pathlib import Path

import pytest

from heitx_engine.buffer import (
    Document,
    DocumentIOError,
    Position,
    SearchDirection,
    open_document,
    save_document,
)
from heitx_engine.filetypes import FileTypeRegistry
from heitx_engine.highlight import Label


def texts(document: Document) -> list[str]:
    return [line.as_text() for line in document]


def at(column: int, line: int) -> Position:
    return Position(column=column, line=line)


def test_from_text_splits_on_newlines() -> None:
    assert texts(Document.from_text("a\nb\n")) == ["a", "b"]
    assert texts(Document.from_text("a\nb")) == ["a", "b"]
    assert texts(Document.from_text("a\n\n")) == ["a", ""]
    assert Document.from_text("").is_empty()


def test_from_text_keeps_carriage_returns() -> None:
    document = Document.from_text("a\r\nb\r\n")
    assert texts(document) == ["a\r", "b\r"]
    assert len(document.row(0)) == 2


def test_query_surface() -> None:
    document = Document.from_text("one\ntwo\n")
    assert document.line_count == len(document) == 2
    assert document.row(1).as_text() == "two"
    assert document.row(2) is None
    assert document.row(-1) is None
    assert not document.is_dirty


def test_insert_character_marks_dirty() -> None:
    document = Document.from_text("ac")
    document.insert(at(1, 0), "b")
    assert texts(document) == ["abc"]
    assert document.is_dirty


def test_insert_on_line_after_last_creates_line() -> None:
    document = Document.from_text("a")
    document.insert(at(5, 1), "z")
    assert texts(document) == ["a", "z"]


def test_insert_past_document_end_is_noop() -> None:
    document = Document.from_text("a")
    document.insert(at(0, 2), "z")
    assert texts(document) == ["a"]
    assert not document.is_dirty


def test_insert_empty_string_leaves_document_clean() -> None:
    document = Document.from_text("ab")
    document.insert(at(1, 0), "")
    document.insert(at(0, 1), "")
    assert texts(document) == ["ab"]
    assert len(document.row(0)) == 2
    assert document.line_count == 1
    assert not document.is_dirty


def test_insert_multiple_characters_is_rejected() -> None:
    document = Document.from_text("ab")
    with pytest.raises(ValueError):
        document.insert(at(1, 0), "xy")
    with pytest.raises(ValueError):
        document.insert(at(0, 1), "xy")
    assert texts(document) == ["ab"]
    assert not document.is_dirty


def test_insert_newline_splits_line() -> None:
    document = Document.from_text("hello\nworld")
    document.insert(at(2, 0), "\n")
    assert texts(document) == ["he", "llo", "world"]
    assert document.is_dirty


def test_insert_newline_at_end_appends_empty_line() -> None:
    document = Document.from_text("a")
    document.insert_newline(at(0, 1))
    assert texts(document) == ["a", ""]
    document.insert_newline(at(0, 5))
    assert texts(document) == ["a", ""]


def test_delete_single_cluster() -> None:
    document = Document.from_text("日本語")
    document.delete(at(1, 0))
    assert texts(document) == ["日語"]


def test_delete_at_end_of_line_merges_next_line() -> None:
    document = Document.from_text("ab\ncde\nf")
    document.delete(at(2, 0))
    assert texts(document) == ["abcde", "f"]
    assert document.line_count == 2
    assert len(document.row(0)) == 5


def test_delete_at_end_of_last_line_is_noop() -> None:
    document = Document.from_text("ab\ncd")
    document.delete(at(2, 1))
    assert texts(document) == ["ab", "cd"]
    assert not document.is_dirty


def test_delete_out_of_range_line_is_noop() -> None:
    document = Document.from_text("ab")
    document.delete(at(0, 1))
    document.delete(at(0, 7))
    document.delete(at(5, 0))
    document.delete(at(-1, 0))
    assert texts(document) == ["ab"]
    assert not document.is_dirty


def test_search_forward_checks_rest_of_start_line_first() -> None:
    document = Document.from_text("foo bar foo\nfoo")
    assert document.search("foo", at(1, 0)) == at(8, 0)
    assert document.search("foo", at(9, 0)) == at(0, 1)
    assert document.search("baz", at(0, 0)) is None


def test_search_backward() -> None:
    document = Document.from_text("foo bar foo\nfoo")
    assert document.search("foo", at(0, 0), SearchDirection.BACKWARD) is None
    assert document.search("foo", at(3, 1), SearchDirection.BACKWARD) == at(0, 1)
    assert document.search("foo", at(0, 1), SearchDirection.BACKWARD) == at(8, 0)


def test_search_rejects_empty_query_and_bad_start() -> None:
    document = Document.from_text("foo")
    assert document.search("", at(0, 0)) is None
    assert document.search("", at(0, 0), SearchDirection.BACKWARD) is None
    assert document.search("foo", at(0, 1)) is None


def test_highlight_threads_block_comment_state() -> None:
    document = Document.from_text("/* a\nb */ c\nd\n", filename="main.rs")
    document.highlight()
    assert document.row(0).labels == (Label.BLOCK_COMMENT,) * 4
    assert document.row(1).labels == (Label.BLOCK_COMMENT,) * 4 + (Label.NONE,) * 2
    assert document.row(2).labels == (Label.NONE,)


def test_highlight_bound_leaves_later_lines_untouched() -> None:
    document = Document.from_text("1\n2\n3", filename="main.rs")
    document.highlight(until=0)
    assert document.row(0).labels == (Label.NUMBER,)
    assert document.row(1).labels == ()
    document.highlight(until=99)
    assert document.row(2).labels == (Label.NUMBER,)


@pytest.mark.parametrize("until", [-1, -3])
def test_highlight_negative_bound_relabels_nothing(until: int) -> None:
    document = Document.from_text("1\n2\n3\n4\n5\n", filename="a.rs")
    document.highlight(until=until)
    assert [line.labels for line in document] == [()] * 5


def test_explicit_empty_registry_is_used() -> None:
    document = Document.from_text("fn", filename="main.rs", registry=FileTypeRegistry())
    assert document.file_type_name == "No filetype"


def test_highlight_overlays_search_word() -> None:
    document = Document.from_text("let x = 1;\nx\n", filename="main.rs")
    document.highlight(word="x")
    assert document.row(0).labels[4] is Label.MATCH
    assert document.row(1).labels == (Label.MATCH,)


def test_unknown_extension_highlights_nothing() -> None:
    document = Document.from_text("fn 1 // x", filename="notes.txt")
    document.highlight()
    assert document.file_type_name == "No filetype"
    assert set(document.row(0).labels) == {Label.NONE}


def test_open_resolves_file_type(tmp_path: Path) -> None:
    path = tmp_path / "main.rs"
    path.write_text("fn main() {\n}\n", encoding="utf-8")

    document = open_document(path)

    assert document.file_type_name == "Rust"
    assert texts(document) == ["fn main() {", "}"]
    assert document.filename == str(path)
    assert not document.is_dirty


def test_open_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(DocumentIOError) as excinfo:
        Document.open(tmp_path / "missing.rs")
    assert excinfo.value.path == str(tmp_path / "missing.rs")


def test_open_rejects_non_utf8(tmp_path: Path) -> None:
    path = tmp_path / "latin1.txt"
    path.write_bytes(b"caf\xe9\n")
    with pytest.raises(DocumentIOError):
        Document.open(path)


def test_open_or_empty_falls_back_to_empty_buffer(tmp_path: Path) -> None:
    path = tmp_path / "new.java"
    document = Document.open_or_empty(path)
    assert document.is_empty()
    assert document.filename == str(path)
    assert document.file_type_name == "Java"


def test_save_writes_trailing_newline_and_clears_dirty(tmp_path: Path) -> None:
    path = tmp_path / "out.txt"
    document = Document.from_text("a\nb", filename=str(path))
    document.insert(at(1, 1), "c")

    save_document(document)

    assert path.read_bytes() == b"a\nbc\n"
    assert not document.is_dirty


def test_save_preserves_carriage_returns(tmp_path: Path) -> None:
    path = tmp_path / "dos.txt"
    path.write_bytes(b"a\r\nb\r\n")
    document = Document.open(path)
    document.save()
    assert path.read_bytes() == b"a\r\nb\r\n"


def test_save_as_re_resolves_file_type(tmp_path: Path) -> None:
    document = Document.from_text("int x;\n", filename=str(tmp_path / "a.txt"))
    assert document.file_type_name == "No filetype"

    document.save_as(tmp_path / "A.java")

    assert document.file_type_name == "Java"
    assert document.filename == str(tmp_path / "A.java")


def test_failed_save_leaves_state_unchanged(tmp_path: Path) -> None:
    original = str(tmp_path / "a.rs")
    document = Document.from_text("x\n", filename=original)
    document.insert(at(0, 0), "y")

    with pytest.raises(DocumentIOError):
        document.save_as(tmp_path)  # a directory cannot be written as a file

    assert document.is_dirty
    assert document.filename == original
    assert document.file_type_name == "Rust"
    assert texts(document) == ["yx"]


def test_save_without_filename_raises() -> None:
    document = Document.from_text("x")
    with pytest.raises(DocumentIOError):
        document.save()


def test_as_text_matches_disk_format() -> None:
    assert Document.from_text("a\nb").as_text() == "a\nb\n"
    assert Document().as_text() == ""
