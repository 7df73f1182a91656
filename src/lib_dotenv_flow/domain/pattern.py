"""Naming-pattern compiler for ``.env*`` filenames.

Purpose
-------
Turn a naming convention such as ``.env[.node_env][.local]`` into the concrete
filename of each cascade layer. A pattern carries at most two optional bracket
groups: one around the ``local`` marker and one around the ``node_env`` marker.
Each group is either kept (brackets stripped) or dropped as a whole.

Contents
--------
* :data:`DEFAULT_PATTERN` / :data:`DEFAULTS_FILENAME` – the reserved pattern and
  its legacy defaults layer.
* :func:`compose_filename` – render the filename for one layer.
* :func:`supports_local` / :func:`supports_node_env` – capability flags.
* :func:`describe_pattern` – pattern text with the environment name filled in,
  used in diagnostics.

System Role
-----------
Pure functions consumed by :mod:`lib_dotenv_flow.application.cascade` and by the
composition root when it reports an empty cascade.
"""

from __future__ import annotations

from typing import Callable, Final, Iterator, NamedTuple

from .errors import PatternMisuse

DEFAULT_PATTERN: Final[str] = ".env[.node_env][.local]"
DEFAULTS_FILENAME: Final[str] = ".env.defaults"

LOCAL: Final[str] = "local"
NODE_ENV: Final[str] = "node_env"


class _Group(NamedTuple):
    """A bracketed span ``[prefix<marker>suffix]`` located at ``start:end``."""

    start: int
    end: int
    prefix: str
    marker: str
    suffix: str


def compose_filename(pattern: str, *, local: bool = False, node_env: str | None = None) -> str:
    """Return the filename described by *pattern* for the requested layer.

    Why
    ----
    Every cascade layer is the same pattern with a different subset of the
    optional groups switched on.

    What
    ----
    The ``local`` group keeps its inner text when *local* is true and vanishes
    otherwise. The ``node_env`` group keeps its inner text with the marker
    replaced by *node_env* when a non-empty name is given and vanishes
    otherwise. Brackets that do not wrap a placeholder are left untouched.

    Raises
    ------
    PatternMisuse
        When the pattern contains unbalanced or nested brackets.

    Examples
    --------
    >>> compose_filename(DEFAULT_PATTERN)
    '.env'
    >>> compose_filename(DEFAULT_PATTERN, local=True)
    '.env.local'
    >>> compose_filename(DEFAULT_PATTERN, node_env='production', local=True)
    '.env.production.local'
    >>> compose_filename('config/[local/]env[-node_env]', node_env='test')
    'config/env-test'
    >>> compose_filename('.env', local=True, node_env='development')
    '.env'
    """

    filename = _substitute(pattern, LOCAL, lambda group: group.prefix + group.marker + group.suffix if local else "")
    return _substitute(
        filename,
        NODE_ENV,
        lambda group: group.prefix + node_env + group.suffix if node_env else "",
    )


def supports_local(pattern: str) -> bool:
    """Return ``True`` when *pattern* carries a ``[local]`` group.

    >>> supports_local('.env[.local]'), supports_local('.env[.node_env]')
    (True, False)
    """

    return any(group.marker == LOCAL for group in _iter_groups(pattern))


def supports_node_env(pattern: str) -> bool:
    """Return ``True`` when *pattern* carries a ``[node_env]`` group.

    >>> supports_node_env(DEFAULT_PATTERN), supports_node_env('.env')
    (True, False)
    """

    return any(group.marker == NODE_ENV for group in _iter_groups(pattern))


def describe_pattern(pattern: str, node_env: str | None) -> str:
    """Return *pattern* with the ``node_env`` marker replaced but brackets kept.

    Examples
    --------
    >>> describe_pattern(DEFAULT_PATTERN, 'development')
    '.env[.development][.local]'
    >>> describe_pattern(DEFAULT_PATTERN, None)
    '.env[.node_env][.local]'
    """

    if not node_env:
        return pattern
    return _substitute(pattern, NODE_ENV, lambda group: f"[{group.prefix}{node_env}{group.suffix}]")


def _substitute(pattern: str, marker: str, render: Callable[[_Group], str]) -> str:
    """Replace every bracket group carrying *marker* with ``render(group)``."""

    pieces: list[str] = []
    cursor = 0
    for group in _iter_groups(pattern):
        if group.marker != marker:
            continue
        pieces.append(pattern[cursor : group.start])
        pieces.append(render(group))
        cursor = group.end
    pieces.append(pattern[cursor:])
    return "".join(pieces)


def _iter_groups(pattern: str) -> Iterator[_Group]:
    """Yield placeholder groups in *pattern*, validating bracket balance."""

    opened: int | None = None
    for index, char in enumerate(pattern):
        if char == "[":
            if opened is not None:
                raise PatternMisuse(f"Nested '[' at position {index} in pattern {pattern!r}")
            opened = index
        elif char == "]":
            if opened is None:
                raise PatternMisuse(f"Unmatched ']' at position {index} in pattern {pattern!r}")
            group = _classify(pattern, opened, index + 1)
            opened = None
            if group is not None:
                yield group
    if opened is not None:
        raise PatternMisuse(f"Unclosed '[' at position {opened} in pattern {pattern!r}")


def _classify(pattern: str, start: int, end: int) -> _Group | None:
    """Split the bracket span into ``prefix``/marker/``suffix`` when it wraps a placeholder.

    The marker must be surrounded by non-word characters only, so ``[.local]``
    and ``[-node_env/]`` qualify while ``[.locale]`` does not.
    """

    inner = pattern[start + 1 : end - 1]
    head = 0
    while head < len(inner) and not _is_word(inner[head]):
        head += 1
    tail = len(inner)
    while tail > head and not _is_word(inner[tail - 1]):
        tail -= 1
    marker = inner[head:tail]
    if marker not in (LOCAL, NODE_ENV):
        return None
    return _Group(start, end, inner[:head], marker, inner[tail:])


def _is_word(char: str) -> bool:
    return char.isalnum() or char == "_"
