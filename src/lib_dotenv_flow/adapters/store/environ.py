"""Environment-variable store adapter.

Purpose
-------
Implement :class:`lib_dotenv_flow.application.ports.VariableStore` over any
``MutableMapping[str, str]``. The default target is :data:`os.environ`; tests
pass a plain dictionary instead.
"""

from __future__ import annotations

import os
from collections.abc import MutableMapping

from ...application.ports import VariableStore


class EnvironStore:
    """Expose a string mapping through the ``has/get/set/delete`` store contract."""

    def __init__(self, environ: MutableMapping[str, str] | None = None) -> None:
        """Initialise the store with a specific ``environ`` mapping for testability.

        Parameters
        ----------
        environ:
            Mapping to mutate. Defaults to :data:`os.environ`.
        """

        self._environ = os.environ if environ is None else environ

    @property
    def environ(self) -> MutableMapping[str, str]:
        """The wrapped mapping."""

        return self._environ

    def has(self, key: str) -> bool:
        """Return ``True`` when *key* is defined.

        >>> EnvironStore({'A': ''}).has('A')
        True
        """

        return key in self._environ

    def get(self, key: str) -> str | None:
        return self._environ.get(key)

    def set(self, key: str, value: str) -> None:
        self._environ[key] = value

    def delete(self, key: str) -> None:
        self._environ.pop(key, None)


def resolve_store(store: VariableStore | MutableMapping[str, str] | None) -> VariableStore:
    """Return a :class:`VariableStore` for *store*.

    ``None`` selects the process environment; a plain mapping is wrapped in an
    :class:`EnvironStore`; anything else is assumed to satisfy the port.

    >>> resolve_store({'A': '1'}).get('A')
    '1'
    """

    if store is None:
        return EnvironStore()
    if isinstance(store, MutableMapping):
        return EnvironStore(store)
    return store
