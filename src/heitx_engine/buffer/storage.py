"""File I/O boundary for documents: UTF-8 text, ``\\n`` separated."""

from __future__ import annotations

import os
from typing import Iterable, Union

PathLike = Union[str, "os.PathLike[str]"]


class DocumentIOError(RuntimeError):
    """Raised when a document cannot be read from or written to disk."""

    def __init__(self, message: str, *, path: PathLike | None = None) -> None:
        super().__init__(message)
        self.path = os.fspath(path) if path is not None else None


def read_text(path: PathLike) -> str:
    # newline="" keeps "\r\n" intact; only "\n" separates lines.
    try:
        with open(path, encoding="utf-8", newline="") as handle:
            return handle.read()
    except UnicodeDecodeError as exc:
        raise DocumentIOError(f"not utf-8: {os.fspath(path)!r}", path=path) from exc
    except OSError as exc:
        raise DocumentIOError(
            f"cannot read {os.fspath(path)!r}: {exc.strerror or exc}", path=path
        ) from exc


def write_lines(path: PathLike, lines: Iterable[str]) -> int:
    """Write each line followed by ``\\n``; returns the number of bytes written."""

    payload = "".join(f"{line}\n" for line in lines).encode("utf-8")
    try:
        with open(path, "wb") as handle:
            handle.write(payload)
    except OSError as exc:
        raise DocumentIOError(
            f"cannot write {os.fspath(path)!r}: {exc.strerror or exc}", path=path
        ) from exc
    return len(payload)


__all__ = ["DocumentIOError", "PathLike", "read_text", "write_lines"]
