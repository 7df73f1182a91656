"""Merge rules between parsed layers and the external variable store.

Purpose
-------
Keep the two merge strategies side by side so their difference stays visible:

* :func:`overwrite_merge` – between files, the later file wins.
* :func:`safe_merge` – into the store, the store's existing value wins.
* :func:`unmerge` – undo a previous merge for values that are still unchanged.

System Role
-----------
Pure with respect to I/O: callers hand in already parsed mappings and a
:class:`~lib_dotenv_flow.application.ports.VariableStore`.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from .ports import VariableStore


def overwrite_merge(layers: Iterable[Mapping[str, str]]) -> dict[str, str]:
    """Merge *layers* left to right; later layers overwrite same-named keys.

    Examples
    --------
    >>> overwrite_merge([{'A': '1', 'B': '1'}, {'A': '2'}])
    {'A': '2', 'B': '1'}
    """

    merged: dict[str, str] = {}
    for layer in layers:
        merged.update(layer)
    return merged


def safe_merge(parsed: Mapping[str, str], store: VariableStore) -> list[str]:
    """Apply *parsed* to *store* without overwriting; return the skipped keys.

    Why
    ----
    Variables predefined by the shell or the orchestrator always take
    priority over file-provided values.
    """

    skipped: list[str] = []
    for key, value in parsed.items():
        if store.has(key):
            skipped.append(key)
            continue
        store.set(key, value)
    return skipped


def unmerge(parsed: Mapping[str, str], store: VariableStore) -> list[str]:
    """Remove keys whose store value still equals *parsed*; return the removed keys.

    Values that something else has since changed are left in place.
    """

    removed: list[str] = []
    for key, value in parsed.items():
        if store.has(key) and store.get(key) == value:
            store.delete(key)
            removed.append(key)
    return removed
