"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts that adapters must satisfy so the composition
root can orchestrate the cascade without depending on concrete
implementations.

Contents
--------
* :class:`FileSystem` – existence checks and whole-file text reads.
* :class:`VariableStore` – the mutable external key/value store (by default the
  process environment).
* :class:`Decoder` – ``KEY=VALUE`` text decoding.

System Role
-----------
These protocols enforce Dependency Inversion. Tests swap the store for a plain
dictionary and the filesystem for an in-memory fake without touching process
state.
"""

from __future__ import annotations

from typing import Mapping, Protocol, runtime_checkable


@runtime_checkable
class FileSystem(Protocol):
    """Answer existence questions and read files as text.

    Why
    ----
    The cascade resolver pre-filters by existence, so read failures reported by
    :meth:`read_text` are genuine I/O problems rather than missing files.
    """

    def exists(self, path: str) -> bool:
        """Return ``True`` when *path* exists."""

    def read_text(self, path: str, encoding: str) -> str:
        """Return the full contents of *path*; raise ``OSError`` on failure."""


@runtime_checkable
class VariableStore(Protocol):
    """Mutable, shared key/value store receiving the merged variables.

    Why
    ----
    Pre-existing keys are authoritative. The library never assumes exclusive
    ownership of the store.
    """

    def has(self, key: str) -> bool:
        """Return ``True`` when *key* is defined."""

    def get(self, key: str) -> str | None:
        """Return the value of *key* or ``None``."""

    def set(self, key: str, value: str) -> None:
        """Define *key*."""

    def delete(self, key: str) -> None:
        """Remove *key* if present."""


@runtime_checkable
class Decoder(Protocol):
    """Decode dotenv text into a flat ``{name: value}`` mapping."""

    def decode(self, text: str) -> Mapping[str, str]:
        """Return the variables defined in *text*."""
