"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by adapters, the composition root, and
consuming applications. The hierarchy lives in the domain layer so outer
layers may depend on it without the reverse being true.

Contents
--------
* :class:`DotenvFlowError` – umbrella base class for all library failures.
* :class:`NoFilesFound` – the cascade resolved to zero existing files.
* :class:`FileAccessError` – a listed file exists but could not be read.
* :class:`PatternMisuse` – a naming pattern with unbalanced brackets.

System Role
-----------
:func:`lib_dotenv_flow.parse` and :func:`lib_dotenv_flow.unload` raise these
exceptions; :func:`lib_dotenv_flow.load` and :func:`lib_dotenv_flow.config`
capture :class:`NoFilesFound` and :class:`FileAccessError` into a
:class:`~lib_dotenv_flow.domain.result.LoadResult` instead. :class:`PatternMisuse`
always propagates because it signals a caller bug.
"""

from __future__ import annotations

from os import PathLike


class DotenvFlowError(Exception):
    """Base type for all exceptions emitted by ``lib_dotenv_flow``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class NoFilesFound(DotenvFlowError):
    """Raised (or returned) when no candidate ``.env*`` file exists on disk.

    Why
    ----
    Loading zero variables is recoverable, yet silent misconfiguration should
    stay visible to the caller.
    """


class FileAccessError(DotenvFlowError):
    """Signals that an existing file could not be read or decoded to text.

    What
    ----
    Wraps the underlying :class:`OSError`, :class:`UnicodeDecodeError` or
    :class:`LookupError` (unknown encoding) and remembers the offending
    :attr:`path`. The original exception is kept as ``__cause__``.
    """

    def __init__(self, message: str, *, path: str | PathLike[str] | None = None) -> None:
        super().__init__(message)
        self.path = None if path is None else str(path)


class PatternMisuse(DotenvFlowError, ValueError):
    """Raised for malformed naming patterns (unbalanced or nested brackets).

    Typical Sources
    ---------------
    :func:`lib_dotenv_flow.domain.pattern.compose_filename` and its siblings.
    Treated as a programming error, never captured into a result.
    """
