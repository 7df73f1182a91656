"""Local filesystem adapter.

Implements :class:`lib_dotenv_flow.application.ports.FileSystem` on top of
:mod:`pathlib`. Reads are synchronous and whole-file; no caching happens
between calls.
"""

from __future__ import annotations

from pathlib import Path


class LocalFileSystem:
    """Read ``.env*`` files from the local disk."""

    def exists(self, path: str) -> bool:
        """Return ``True`` when *path* exists (files and directories alike).

        >>> LocalFileSystem().exists('/')
        True
        """

        return Path(path).exists()

    def read_text(self, path: str, encoding: str) -> str:
        """Return the decoded contents of *path*.

        Raises
        ------
        OSError
            Permission problems, directories, files removed after the
            existence check.
        UnicodeDecodeError
            Bytes not valid in *encoding*.
        LookupError
            Unknown *encoding* name.
        """

        return Path(path).read_text(encoding=encoding)
