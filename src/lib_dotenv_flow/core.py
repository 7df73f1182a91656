"""Composition root for ``lib_dotenv_flow``.

Purpose
-------
Provide the entry points that orchestrate cascade resolution, file parsing,
and the merge into the external variable store.

Contents
--------
* :func:`parse` – read and overwrite-merge one or more files; raises.
* :func:`load` – parse, then safe-merge into the store; returns a result.
* :func:`unload` – remove values a file previously contributed; raises.
* :func:`config` – the full startup pipeline driven by :class:`ConfigOptions`.

System Role
-----------
This module connects the adapters (filesystem, decoder, store) with the
domain rules while emitting structured observability signals. ``parse`` and
``unload`` propagate :class:`FileAccessError`; ``load`` and ``config`` capture
it in a :class:`LoadResult`. That split is part of the public contract.
"""

from __future__ import annotations

import os
from collections.abc import MutableMapping
from typing import Final, Sequence, Union

from .adapters.dotenv.default import DotEnvDecoder
from .adapters.filesystem.local import LocalFileSystem
from .adapters.store.environ import resolve_store
from .application.cascade import list_files
from .application.merge import overwrite_merge, safe_merge, unmerge
from .application.ports import Decoder, FileSystem, VariableStore
from .domain.errors import DotenvFlowError, FileAccessError, NoFilesFound, PatternMisuse
from .domain.options import DEFAULT_ENCODING, ConfigOptions
from .domain.pattern import describe_pattern
from .domain.result import LoadResult
from .observability import log_debug, log_error, log_info, log_warning, make_event

Filenames = Union[str, os.PathLike, Sequence[Union[str, os.PathLike]]]
Store = Union[VariableStore, MutableMapping[str, str], None]

ENV_INDICATOR: Final[str] = "NODE_ENV"
PURGE_FILENAME: Final[str] = ".env"


def parse(
    filenames: Filenames,
    *,
    encoding: str = DEFAULT_ENCODING,
    filesystem: FileSystem | None = None,
    decoder: Decoder | None = None,
) -> dict[str, str]:
    """Parse one file, or several files merged in the given order.

    Why
    ----
    Callers sometimes need the variables as a mapping without touching the
    process environment.

    Parameters
    ----------
    filenames:
        A path or an ordered sequence of paths; later files overwrite keys
        from earlier ones.
    encoding:
        Text encoding of the files.

    Raises
    ------
    FileAccessError
        On the first file that cannot be read; nothing is returned for the
        files parsed before it.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> from pathlib import Path
    >>> tmp = TemporaryDirectory()
    >>> first, second = Path(tmp.name, '.env'), Path(tmp.name, '.env.local')
    >>> _ = first.write_text('A=1\\nB=1\\n', encoding='utf-8')
    >>> _ = second.write_text('A=2\\n', encoding='utf-8')
    >>> parse([first, second])
    {'A': '2', 'B': '1'}
    >>> tmp.cleanup()
    """

    fs = filesystem or LocalFileSystem()
    dec = decoder or DotEnvDecoder()
    return overwrite_merge(_parse_file(path, encoding, fs, dec) for path in _as_list(filenames))


def load(
    filenames: Filenames,
    *,
    encoding: str = DEFAULT_ENCODING,
    silent: bool = False,
    store: Store = None,
    filesystem: FileSystem | None = None,
    decoder: Decoder | None = None,
) -> LoadResult:
    """Parse *filenames* and assign the variables that the store lacks.

    Why
    ----
    Variables predefined by the shell must win over file-provided values.

    What
    ----
    Parses via :func:`parse`. When parsing fails the store is left untouched
    and ``LoadResult.error`` carries the :class:`FileAccessError`. Otherwise
    every key absent from the store is set, present keys are skipped (and
    reported as warnings unless *silent*), and ``LoadResult.parsed`` holds the
    full parsed map.

    Parameters
    ----------
    store:
        Target store; ``None`` selects :data:`os.environ`, a plain mapping is
        wrapped automatically.
    """

    paths = _as_list(filenames)
    try:
        parsed = parse(paths, encoding=encoding, filesystem=filesystem, decoder=decoder)
    except FileAccessError as exc:
        return LoadResult(error=exc)

    target = resolve_store(store)
    skipped = safe_merge(parsed, target)
    if not silent:
        for key in skipped:
            log_warning("variable_predefined", **make_event("store", None, {"key": key}))
    log_info(
        "variables_loaded",
        **make_event("store", None, {"files": paths, "applied": len(parsed) - len(skipped), "skipped": skipped}),
    )
    return LoadResult(parsed=parsed, skipped=tuple(skipped), files=tuple(paths))


def unload(
    filenames: Filenames,
    *,
    encoding: str = DEFAULT_ENCODING,
    store: Store = None,
    filesystem: FileSystem | None = None,
    decoder: Decoder | None = None,
) -> None:
    """Remove variables that *filenames* define with exactly the same value.

    Why
    ----
    Another component may have loaded the lowest-priority ``.env`` before the
    cascade runs, making its values look shell-defined. Removing only exact
    matches restores the cascade's precedence without destroying values that
    were changed since.

    Raises
    ------
    FileAccessError
        Read failures propagate; nothing is removed in that case.
    """

    paths = _as_list(filenames)
    parsed = parse(paths, encoding=encoding, filesystem=filesystem, decoder=decoder)
    removed = unmerge(parsed, resolve_store(store))
    log_debug("variables_unloaded", **make_event("store", None, {"files": paths, "removed": removed}))


def config(
    options: ConfigOptions | None = None,
    *,
    store: Store = None,
    filesystem: FileSystem | None = None,
    decoder: Decoder | None = None,
) -> LoadResult:
    """Resolve the ``.env*`` cascade for the current environment and load it.

    Why
    ----
    This is the startup-time entry point: one call decides which files apply,
    reads them, and fills the store without overriding predefined variables.

    What
    ----
    1. The environment name is ``options.node_env``, else the store's
       ``NODE_ENV``, else ``options.default_node_env``, else none.
    2. With ``purge_dotenv`` the ``.env`` of the working directory is unloaded
       first; a read failure there is returned immediately.
    3. ``options.files`` (relative to the working directory) replaces the
       pattern-driven cascade when given.
    4. An empty list yields a :class:`NoFilesFound` error naming the directory
       and the pattern; the store is left untouched.
    5. Otherwise the files go through :func:`load`.

    Raises
    ------
    PatternMisuse
        For malformed patterns; every other expected failure is returned in
        :attr:`LoadResult.error`.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> from pathlib import Path
    >>> tmp = TemporaryDirectory()
    >>> _ = Path(tmp.name, '.env').write_text('GREETING=hello\\n', encoding='utf-8')
    >>> env: dict[str, str] = {}
    >>> config(ConfigOptions(path=tmp.name), store=env).parsed
    {'GREETING': 'hello'}
    >>> env
    {'GREETING': 'hello'}
    >>> tmp.cleanup()
    """

    opts = options or ConfigOptions()
    target = resolve_store(store)
    fs = filesystem or LocalFileSystem()
    base_dir = os.path.abspath(opts.path) if opts.path is not None else os.getcwd()
    node_env = _effective_node_env(opts, target)

    try:
        if opts.purge_dotenv:
            _purge_dotenv(base_dir, opts.encoding, target, fs, decoder)
        filenames = _resolve_filenames(opts, base_dir, node_env, fs)
        if not filenames:
            error = NoFilesFound(
                f'no ".env*" files matching pattern "{describe_pattern(opts.pattern, node_env)}" in "{base_dir}" dir'
            )
            if not opts.silent:
                log_warning("no_files_found", **make_event("cascade", base_dir, {"error": str(error)}))
            return LoadResult(error=error)
        result = load(
            filenames,
            encoding=opts.encoding,
            silent=opts.silent,
            store=target,
            filesystem=fs,
            decoder=decoder,
        )
    except PatternMisuse:
        raise
    except DotenvFlowError as exc:
        return LoadResult(error=exc)
    return result


def _effective_node_env(options: ConfigOptions, store: VariableStore) -> str | None:
    """Apply the fixed precedence: option, store indicator, default, none."""

    for candidate in (options.node_env, store.get(ENV_INDICATOR), options.default_node_env):
        if candidate:
            return candidate
    return None


def _purge_dotenv(
    base_dir: str,
    encoding: str,
    store: VariableStore,
    filesystem: FileSystem,
    decoder: Decoder | None,
) -> None:
    dotenv_file = os.path.join(base_dir, PURGE_FILENAME)
    if not filesystem.exists(dotenv_file):
        return
    unload(dotenv_file, encoding=encoding, store=store, filesystem=filesystem, decoder=decoder)
    log_debug("dotenv_purged", **make_event("purge", dotenv_file))


def _resolve_filenames(
    options: ConfigOptions,
    base_dir: str,
    node_env: str | None,
    filesystem: FileSystem,
) -> list[str]:
    if options.files is not None:
        return [os.path.abspath(os.path.join(base_dir, filename)) for filename in options.files]
    return list_files(base_dir, options.pattern, node_env, filesystem=filesystem)


def _parse_file(path: str, encoding: str, filesystem: FileSystem, decoder: Decoder) -> dict[str, str]:
    """Read and decode one file, translating read failures into :class:`FileAccessError`."""

    try:
        text = filesystem.read_text(path, encoding)
    except (OSError, UnicodeDecodeError, LookupError) as exc:
        log_error("file_access_failed", **make_event("parse", path, {"error": str(exc)}))
        raise FileAccessError(f"Cannot read {path}: {exc}", path=path) from exc
    parsed = dict(decoder.decode(text))
    log_debug("layer_parsed", **make_event("parse", path, {"keys": sorted(parsed)}))
    return parsed


def _as_list(filenames: Filenames) -> list[str]:
    """Normalise a single path or a sequence of paths to a list of strings."""

    if isinstance(filenames, (str, os.PathLike)):
        return [os.fspath(filenames)]
    return [os.fspath(filename) for filename in filenames]


__all__ = [
    "ENV_INDICATOR",
    "Filenames",
    "config",
    "list_files",
    "load",
    "parse",
    "unload",
]
