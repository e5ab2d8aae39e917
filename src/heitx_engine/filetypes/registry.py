"""Registry mapping filenames to language profiles."""

from __future__ import annotations

from typing import Dict, Iterator, Optional

from heitx_engine.runtime.telemetry import record_event

from .models import FileType


class FileTypeConflictError(RuntimeError):
    """Raised when a profile name is registered twice without ``replace``."""

    def __init__(self, file_type: FileType) -> None:
        super().__init__(f"File type '{file_type.name}' is already registered")
        self.file_type = file_type


class FrozenRegistryError(RuntimeError):
    """Raised when a frozen registry is asked to change."""


class FileTypeRegistry:
    """Ordered collection of profiles; the first suffix match wins."""

    def __init__(self, *, fallback: Optional[FileType] = None) -> None:
        self._file_types: Dict[str, FileType] = {}
        self._fallback = fallback or FileType.default()
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "FileTypeRegistry":
        """Reject further register/unregister calls; returns ``self``."""

        self._frozen = True
        return self

    def _check_mutable(self) -> None:
        if self._frozen:
            raise FrozenRegistryError(
                "registry is frozen; build a FileTypeRegistry to customise profiles"
            )

    def register(self, file_type: FileType, *, replace: bool = False) -> FileType:
        self._check_mutable()
        if file_type.name in self._file_types and not replace:
            raise FileTypeConflictError(file_type)
        self._file_types[file_type.name] = file_type
        return file_type

    def unregister(self, name: str) -> FileType:
        self._check_mutable()
        try:
            return self._file_types.pop(name)
        except KeyError as exc:
            raise KeyError(f"File type '{name}' is not registered") from exc

    def get(self, name: str) -> FileType:
        try:
            return self._file_types[name]
        except KeyError as exc:
            raise KeyError(f"File type '{name}' is not registered") from exc

    def resolve(self, filename: Optional[str]) -> FileType:
        """Return the profile for ``filename``, or the fallback profile."""

        if filename:
            for file_type in self._file_types.values():
                if file_type.matches(filename):
                    return file_type
        record_event(
            "filetypes.fallback",
            level="debug",
            data={"filename": filename or ""},
        )
        return self._fallback

    def __iter__(self) -> Iterator[FileType]:
        return iter(tuple(self._file_types.values()))

    def __len__(self) -> int:
        return len(self._file_types)


__all__ = ["FileTypeConflictError", "FileTypeRegistry", "FrozenRegistryError"]
