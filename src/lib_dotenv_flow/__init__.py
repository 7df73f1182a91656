"""Public package surface for the ``.env*`` cascade loader.

``lib_dotenv_flow`` resolves which ``.env*`` files apply to an environment,
parses them, and merges them into the process environment without overwriting
variables that are already defined. The stable entry points are
:func:`config`, :func:`list_files`, :func:`parse`, :func:`load`, and
:func:`unload`.
"""

from __future__ import annotations

from .adapters.dotenv.default import DotEnvDecoder
from .adapters.filesystem.local import LocalFileSystem
from .adapters.store.environ import EnvironStore
from .application.cascade import list_files
from .core import config, load, parse, unload
from .domain.errors import DotenvFlowError, FileAccessError, NoFilesFound, PatternMisuse
from .domain.options import ConfigOptions, options_from_env
from .domain.pattern import DEFAULT_PATTERN, compose_filename
from .domain.result import LoadResult
from .observability import get_logger

__all__ = [
    "DEFAULT_PATTERN",
    "ConfigOptions",
    "DotEnvDecoder",
    "DotenvFlowError",
    "EnvironStore",
    "FileAccessError",
    "LoadResult",
    "LocalFileSystem",
    "NoFilesFound",
    "PatternMisuse",
    "compose_filename",
    "config",
    "get_logger",
    "list_files",
    "load",
    "options_from_env",
    "parse",
    "unload",
]
