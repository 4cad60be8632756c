"""inistore: INI configuration reader with sections, variables and sub-sections.

Typical use:

    from inistore import load_config_file

    store = load_config_file("conf/app.conf", "conf/local.conf")
    port = store.must_int("server", "port", 8080)
"""

from __future__ import annotations

from inistore.core.errors import (
    BlankSectionNameError,
    ConfigLookupError,
    ConfigParseError,
    CouldNotParseError,
    InistoreError,
    InvalidEncodingError,
    KeyNotFoundError,
    NotInitializedError,
    SectionNotFoundError,
)
from inistore.core.options import StoreOptions
from inistore.core.store import DEFAULT_SECTION, ConfigStore
from inistore.reader import IniReader, load_config_file, load_stream, load_string

__all__ = [
    "DEFAULT_SECTION",
    "BlankSectionNameError",
    "ConfigLookupError",
    "ConfigParseError",
    "ConfigStore",
    "CouldNotParseError",
    "IniReader",
    "InistoreError",
    "InvalidEncodingError",
    "KeyNotFoundError",
    "NotInitializedError",
    "SectionNotFoundError",
    "StoreOptions",
    "__version__",
    "load_config_file",
    "load_stream",
    "load_string",
]
__version__ = "0.1.0"
