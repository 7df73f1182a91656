"""`.env` decoder adapter.

Purpose
-------
Implement the :class:`lib_dotenv_flow.application.ports.Decoder` protocol by
delegating the ``KEY=VALUE`` grammar (quoting, ``#`` comments, ``export``
prefixes, multi-line quoted values) to :mod:`dotenv` from ``python-dotenv``.

Contents
--------
* :class:`DotEnvDecoder` – stateless decoder used by the composition root.

System Role
-----------
Values are returned verbatim: variable interpolation is disabled and no type
coercion happens. Keys declared without ``=`` carry no value and are dropped.
"""

from __future__ import annotations

from io import StringIO

from dotenv import dotenv_values

from ...observability import log_debug


class DotEnvDecoder:
    """Decode dotenv text into a flat ``{name: value}`` dictionary.

    Examples
    --------
    >>> DotEnvDecoder().decode('A=1\\n# comment\\nB="two words"\\nexport C=3\\n')
    {'A': '1', 'B': 'two words', 'C': '3'}
    """

    def decode(self, text: str) -> dict[str, str]:
        """Return the variables defined in *text* in declaration order.

        A later declaration of the same key wins, matching the overwrite rule
        applied between files.
        """

        values = dotenv_values(stream=StringIO(text), interpolate=False)
        decoded = {key: value for key, value in values.items() if value is not None}
        dropped = sorted(key for key, value in values.items() if value is None)
        if dropped:
            log_debug("dotenv_keys_without_value", layer="decoder", path=None, keys=dropped)
        return decoded
