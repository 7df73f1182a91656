"""Shared fixtures for building ``.env*`` cascades on disk or in memory."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping


@dataclass
class DotenvSandbox:
    """A temporary project directory plus an isolated variable store."""

    root: Path
    store: dict[str, str] = field(default_factory=dict)

    def write(self, name: str, content: str, *, encoding: str = "utf-8") -> Path:
        """Write *content* to ``root / name`` creating parent directories."""

        target = self.root / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding=encoding)
        return target

    def path(self, name: str) -> str:
        """Absolute path string of ``root / name`` as the resolver reports it."""

        return str((self.root / name).absolute())


def create_dotenv_sandbox(
    tmp_path: Path,
    files: Mapping[str, str] | None = None,
    *,
    store: Mapping[str, str] | None = None,
) -> DotenvSandbox:
    """Create a sandbox under *tmp_path* populated with *files*."""

    root = tmp_path / "project"
    root.mkdir(parents=True, exist_ok=True)
    sandbox = DotenvSandbox(root=root, store=dict(store or {}))
    for name, content in (files or {}).items():
        sandbox.write(name, content)
    return sandbox


class MemoryFileSystem:
    """In-memory :class:`~lib_dotenv_flow.application.ports.FileSystem` fake.

    ``unreadable`` paths exist but raise :class:`PermissionError` on read.
    """

    def __init__(self, files: Mapping[str, str] | None = None, *, unreadable: tuple[str, ...] = ()) -> None:
        self.files = dict(files or {})
        self.unreadable = set(unreadable)
        self.reads: list[str] = []

    def exists(self, path: str) -> bool:
        return path in self.files or path in self.unreadable

    def read_text(self, path: str, encoding: str) -> str:
        self.reads.append(path)
        if path in self.unreadable:
            raise PermissionError(13, "Permission denied", path)
        try:
            return self.files[path]
        except KeyError:
            raise FileNotFoundError(2, "No such file or directory", path) from None
