"""Explicit configuration record for :func:`lib_dotenv_flow.config`.

Purpose
-------
Replace loosely typed option bags with a frozen dataclass that enumerates every
recognised field and its default. Outer adapters (environment variables, CLI
flags, direct calls) build a :class:`ConfigOptions` and hand it to the
composition root.

Contents
--------
* :class:`ConfigOptions` – the record plus :meth:`ConfigOptions.from_mapping`.
* :func:`options_from_env` – environment-variable to option mapping.
* :data:`ENV_OPTIONS_MAP` – the recognised environment variable names.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Final, Mapping, Sequence

from .pattern import DEFAULT_PATTERN

DEFAULT_ENCODING: Final[str] = "utf-8"

ENV_OPTIONS_MAP: Final[dict[str, str]] = {
    "NODE_ENV": "node_env",
    "DEFAULT_NODE_ENV": "default_node_env",
    "DOTENV_FLOW_PATH": "path",
    "DOTENV_FLOW_ENCODING": "encoding",
    "DOTENV_FLOW_PURGE_DOTENV": "purge_dotenv",
}

_TRUE_WORDS: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS: Final[frozenset[str]] = frozenset({"", "0", "false", "no", "off"})
_BOOL_FIELDS: Final[frozenset[str]] = frozenset({"purge_dotenv", "silent"})


@dataclass(frozen=True)
class ConfigOptions:
    """Every option understood by :func:`lib_dotenv_flow.config`.

    Attributes
    ----------
    node_env:
        Environment name (``development``, ``test``, ...). Wins over the
        store's own ``NODE_ENV``.
    default_node_env:
        Fallback used when neither ``node_env`` nor the store define one.
    path:
        Directory holding the ``.env*`` files; ``None`` means the current
        working directory at call time.
    pattern:
        Naming convention, see :mod:`lib_dotenv_flow.domain.pattern`.
    files:
        Explicit ordered list of files (relative to ``path``) that replaces the
        pattern-driven cascade.
    encoding:
        Text encoding used to read the files.
    purge_dotenv:
        Unload a previously loaded ``.env`` before applying the cascade.
    silent:
        Suppress warnings; errors are still returned.
    """

    node_env: str | None = None
    default_node_env: str | None = None
    path: str | None = None
    pattern: str = DEFAULT_PATTERN
    files: tuple[str, ...] | None = None
    encoding: str = DEFAULT_ENCODING
    purge_dotenv: bool = False
    silent: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.files, (str, os.PathLike)):
            object.__setattr__(self, "files", (os.fspath(self.files),))
        elif self.files is not None and not isinstance(self.files, tuple):
            object.__setattr__(self, "files", tuple(str(item) for item in self.files))
        if self.path is not None and not isinstance(self.path, str):
            object.__setattr__(self, "path", os.fspath(self.path))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "ConfigOptions":
        """Build options from a loose mapping, ignoring unknown keys.

        Textual booleans (``"true"``, ``"0"``, ...) and comma separated
        ``files`` strings are coerced; ``None`` values keep the default.

        Examples
        --------
        >>> opts = ConfigOptions.from_mapping({'node_env': 'test', 'purge_dotenv': 'true', 'debug': '1'})
        >>> opts.node_env, opts.purge_dotenv
        ('test', True)
        >>> ConfigOptions.from_mapping({'files': '.env, .env.extra'}).files
        ('.env', '.env.extra')
        """

        known = {field.name for field in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in mapping.items():
            if key not in known or value is None:
                continue
            if key in _BOOL_FIELDS:
                value = _coerce_bool(key, value)
            elif key == "files":
                value = _coerce_files(value)
            values[key] = value
        return cls(**values)

    def merged(self, **changes: Any) -> "ConfigOptions":
        """Return a copy with every non-``None`` entry of *changes* applied.

        >>> ConfigOptions(node_env='test').merged(node_env=None, silent=True).node_env
        'test'
        """

        return replace(self, **{key: value for key, value in changes.items() if value is not None})


def options_from_env(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Collect :class:`ConfigOptions` fields defined through environment variables.

    Examples
    --------
    >>> options_from_env({'NODE_ENV': 'production', 'DOTENV_FLOW_PATH': '/srv/app', 'HOME': '/root'})
    {'node_env': 'production', 'path': '/srv/app'}
    """

    source = os.environ if environ is None else environ
    return {option: source[name] for name, option in ENV_OPTIONS_MAP.items() if name in source}


def _coerce_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in _TRUE_WORDS:
        return True
    if lowered in _FALSE_WORDS:
        return False
    raise ValueError(f"Option {key!r} expects a boolean, got {value!r}")


def _coerce_files(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return tuple(item.strip() for item in value.split(",") if item.strip())
    if isinstance(value, Sequence):
        return tuple(str(item) for item in value)
    raise ValueError(f"Option 'files' expects a list of filenames, got {value!r}")
