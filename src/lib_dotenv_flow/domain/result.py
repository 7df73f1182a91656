"""Tagged outcome returned by :func:`lib_dotenv_flow.load` and :func:`lib_dotenv_flow.config`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True)
class LoadResult:
    """Either the parsed variable map or the error that prevented loading.

    Why
    ----
    Expected failures (no files, unreadable files) are part of normal startup
    and must not surface as exceptions from the loader entry points.

    Attributes
    ----------
    parsed:
        Overwrite-merged ``{name: value}`` map of every file read, including
        keys that were not applied to the store.
    error:
        The :class:`~lib_dotenv_flow.domain.errors.DotenvFlowError` captured
        instead of a map.
    skipped:
        Names that were already defined in the store and left untouched.
    files:
        Absolute paths read, lowest priority first.

    Examples
    --------
    >>> LoadResult(parsed={'A': '1'}).ok
    True
    >>> LoadResult(parsed={'A': '1'}, error=RuntimeError('boom'))
    Traceback (most recent call last):
    ...
    ValueError: LoadResult carries either parsed or error, not both
    """

    parsed: Mapping[str, str] | None = None
    error: Exception | None = None
    skipped: tuple[str, ...] = ()
    files: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if (self.parsed is None) == (self.error is None):
            raise ValueError("LoadResult carries either parsed or error, not both")

    @property
    def ok(self) -> bool:
        """``True`` when the result holds a parsed map."""

        return self.error is None
