"""File cascade resolver.

Purpose
-------
Produce the ordered list of existing ``.env*`` files for a directory, an
environment name, and a naming pattern. The list is sorted by ascending merge
priority: later files override earlier ones.

Contents
--------
* :data:`LAYERS` – the fixed layer taxonomy, lowest priority first.
* :func:`list_files` – the resolver itself.
* :func:`candidate_filenames` – the layer-to-filename plan before the
  existence filter.

System Role
-----------
Consumed by :func:`lib_dotenv_flow.config`. Ordering is derived solely from
:data:`LAYERS`, never from filesystem iteration order.
"""

from __future__ import annotations

import os
from typing import Final

from ..adapters.filesystem.local import LocalFileSystem
from ..domain.pattern import (
    DEFAULT_PATTERN,
    DEFAULTS_FILENAME,
    compose_filename,
    supports_local,
    supports_node_env,
)
from ..observability import log_debug, make_event
from .ports import FileSystem

TEST_NODE_ENV: Final[str] = "test"

LAYERS: Final[tuple[str, ...]] = ("defaults", "base", "local", "env", "env-local")


def candidate_filenames(pattern: str = DEFAULT_PATTERN, node_env: str | None = None) -> dict[str, str]:
    """Return ``{layer: filename}`` for every layer the inputs enable.

    The ``local`` layer is left out for the ``test`` environment so test runs
    do not depend on uncommitted developer overrides. The ``env-local`` layer
    stays.

    Examples
    --------
    >>> candidate_filenames(node_env='test')
    {'defaults': '.env.defaults', 'base': '.env', 'env': '.env.test', 'env-local': '.env.test.local'}
    >>> candidate_filenames('.env[.local]', 'production')
    {'base': '.env', 'local': '.env.local'}
    """

    include_locals = supports_local(pattern)
    filenames: dict[str, str] = {}
    if pattern == DEFAULT_PATTERN:
        filenames["defaults"] = DEFAULTS_FILENAME
    filenames["base"] = compose_filename(pattern)
    if include_locals and node_env != TEST_NODE_ENV:
        filenames["local"] = compose_filename(pattern, local=True)
    if node_env and supports_node_env(pattern):
        filenames["env"] = compose_filename(pattern, node_env=node_env)
        if include_locals:
            filenames["env-local"] = compose_filename(pattern, node_env=node_env, local=True)
    return filenames


def list_files(
    path: str | os.PathLike[str] | None = None,
    pattern: str = DEFAULT_PATTERN,
    node_env: str | None = None,
    *,
    filesystem: FileSystem | None = None,
) -> list[str]:
    """Return existing cascade files as absolute paths, lowest priority first.

    Parameters
    ----------
    path:
        Working directory; defaults to :func:`os.getcwd`.
    pattern:
        Naming convention, see :mod:`lib_dotenv_flow.domain.pattern`.
    node_env:
        Environment name; ``None`` or ``""`` disables the environment layers.
    filesystem:
        Port used for existence checks; defaults to :class:`LocalFileSystem`.

    Returns
    -------
    list[str]
        Possibly empty. Missing files are never an error here.
    """

    fs = filesystem or LocalFileSystem()
    base_dir = os.fspath(path) if path is not None else os.getcwd()
    listed: list[str] = []
    planned = candidate_filenames(pattern, node_env)
    for layer in LAYERS:
        filename = planned.get(layer)
        if not filename:
            continue
        absolute = os.path.abspath(os.path.join(base_dir, filename))
        if fs.exists(absolute):
            listed.append(absolute)
    log_debug(
        "cascade_resolved",
        **make_event("cascade", base_dir, {"pattern": pattern, "node_env": node_env, "files": listed}),
    )
    return listed
