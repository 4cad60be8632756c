"""
Opt-in process-wide store with package-level typed accessors.

Nothing is loaded at import time. An application calls :func:`init` once at
startup; every accessor before that raises :class:`NotInitializedError`.
Load failures from :func:`init` propagate to the caller.

Usage
-----
>>> from inistore import default
>>> default.init("conf/app.conf")            # doctest: +SKIP
>>> default.must_int("server", "port", 8080)  # doctest: +SKIP
"""

from __future__ import annotations

import threading

from inistore.core.errors import NotInitializedError
from inistore.core.options import StoreOptions
from inistore.core.settings import get_logger, load_settings
from inistore.core.store import ConfigStore
from inistore.reader import StrPath, load_config_file

logger = get_logger("inistore.default")

_store: ConfigStore | None = None
_init_lock = threading.Lock()


def init(*paths: StrPath, options: StoreOptions | None = None) -> ConfigStore:
    """
    Load ``paths`` (or ``settings.default_config_path``) as the default store.

    The previous default store, if any, is only replaced when loading succeeds.
    """
    global _store
    if not paths:
        paths = (load_settings().default_config_path,)
    store = load_config_file(*paths, options=options)
    with _init_lock:
        _store = store
    logger.info("default configuration loaded from %s", ", ".join(store.file_names))
    return store


def reset() -> None:
    """Forget the default store (mainly for tests)."""
    global _store
    with _init_lock:
        _store = None


def get_store() -> ConfigStore:
    """Return the default store or raise :class:`NotInitializedError`."""
    store = _store
    if store is None:
        raise NotInitializedError("default configuration not initialized; call inistore.default.init()")
    return store


def value(section: str, key: str) -> str:
    return get_store().value(section, key)


def bool_value(section: str, key: str) -> bool:
    return get_store().bool_value(section, key)


def int_value(section: str, key: str) -> int:
    return get_store().int_value(section, key)


def int64_value(section: str, key: str) -> int:
    return get_store().int64_value(section, key)


def float64_value(section: str, key: str) -> float:
    return get_store().float64_value(section, key)


def must_value(section: str, key: str, default: str | None = None) -> str:
    return get_store().must_value(section, key, default)


def must_bool(section: str, key: str, default: bool | None = None) -> bool:
    return get_store().must_bool(section, key, default)


def must_int(section: str, key: str, default: int | None = None) -> int:
    return get_store().must_int(section, key, default)


def must_int64(section: str, key: str, default: int | None = None) -> int:
    return get_store().must_int64(section, key, default)


def must_float64(section: str, key: str, default: float | None = None) -> float:
    return get_store().must_float64(section, key, default)


__all__ = [
    "bool_value",
    "float64_value",
    "get_store",
    "init",
    "int64_value",
    "int_value",
    "must_bool",
    "must_float64",
    "must_int",
    "must_int64",
    "must_value",
    "reset",
    "value",
]
