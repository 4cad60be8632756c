"""
In-memory configuration store with section/key resolution.

The store keeps parsed INI content as ordered sections of ordered keys, plus
the comment blocks attached to sections and keys. Values are kept verbatim;
interpretation happens at read time:

- a blank section name always means the ``DEFAULT`` section;
- a key missing from a dotted section (``a.b.c``) is retried on its parent
  (``a.b``, then ``a``);
- ``%(name)s`` placeholders are expanded, looking ``name`` up in ``DEFAULT``
  first and in the value's own section second.

Expansion is bounded by :data:`MAX_SUBSTITUTION_DEPTH` substitutions per
lookup, shared across nested references, so circular references terminate
and leave the unresolved placeholder in place.

Locking
-------
When ``options.concurrency_safe`` is set, public readers take the shared side
of a :class:`~inistore.core.locking.ReadWriteLock` and mutators take the
exclusive side, once per call. Underscore helpers never lock and are the
only thing called while a lock is held.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import TypeVar

from .convert import parse_bool, parse_float64, parse_int, parse_int64
from .errors import ConfigLookupError, KeyNotFoundError, SectionNotFoundError
from .locking import ReadWriteLock, maybe_read, maybe_write
from .options import StoreOptions
from .result import Err, Ok, Result, catching
from .settings import get_logger

T = TypeVar("T")

DEFAULT_SECTION = "DEFAULT"
MAX_SUBSTITUTION_DEPTH = 200
"""Substitutions allowed per lookup, shared by nested references.

A long reference chain that is not circular is cut off at this total too.
"""
LINE_BREAK = "\n"
# Written by the reader for a bare ``[section]`` header so the section exists.
SENTINEL_KEY = " "
SENTINEL_VALUE = " "

_VAR_PATTERN = re.compile(r"%\(([^)]+)\)s")

logger = get_logger("inistore.store")


def _normalize_section(section: str) -> str:
    return section or DEFAULT_SECTION


def _normalize_comment(comments: str) -> str:
    if comments[0] not in "#;":
        return "; " + comments
    return comments


class _Budget:
    """Substitutions left for one top-level lookup."""

    __slots__ = ("remaining",)

    def __init__(self, remaining: int) -> None:
        self.remaining = remaining


class ConfigStore:
    """
    Ordered sections of ordered key/value strings with comment blocks.

    Attributes
    ----------
    options : StoreOptions
        Behaviour switches; fixed for the lifetime of the store.
    file_names : list[str]
        Files parsed into this store, in load order.
    """

    def __init__(self, options: StoreOptions | None = None) -> None:
        self.options: StoreOptions = options if options is not None else StoreOptions.from_settings()
        self.file_names: list[str] = []
        # dicts keep insertion order: section order and per-section key order
        self._data: dict[str, dict[str, str]] = {}
        self._section_comments: dict[str, str] = {}
        self._key_comments: dict[str, dict[str, str]] = {}
        self._lock: ReadWriteLock | None = ReadWriteLock() if self.options.concurrency_safe else None

    def __repr__(self) -> str:
        return f"ConfigStore(sections={len(self._data)}, files={self.file_names!r})"

    # ------------------------------- Mutation -------------------------------

    def set_value(self, section: str, key: str, value: str) -> bool:
        """
        Insert or overwrite ``key`` in ``section``, creating the section.

        Returns
        -------
        bool
            ``True`` if the key was newly inserted, ``False`` if an existing
            value was overwritten or ``key`` is empty (nothing is stored).
        """
        section = _normalize_section(section)
        if not key:
            return False
        with maybe_write(self._lock):
            values = self._data.setdefault(section, {})
            inserted = key not in values
            values[key] = value
            return inserted

    def set_section_comments(self, section: str, comments: str) -> bool:
        """
        Attach ``comments`` to ``section``; an empty string removes them.

        Returns ``True`` if the comments were inserted or removed (removing
        absent comments counts as removed), ``False`` if overwritten.
        """
        section = _normalize_section(section)
        with maybe_write(self._lock):
            if not comments:
                self._section_comments.pop(section, None)
                return True
            existed = section in self._section_comments
            self._section_comments[section] = _normalize_comment(comments)
            return not existed

    def set_key_comments(self, section: str, key: str, comments: str) -> bool:
        """Attach ``comments`` to ``key``; same contract as :meth:`set_section_comments`."""
        section = _normalize_section(section)
        with maybe_write(self._lock):
            if not comments:
                per_key = self._key_comments.get(section)
                if per_key is not None:
                    per_key.pop(key, None)
                return True
            per_key = self._key_comments.setdefault(section, {})
            existed = key in per_key
            per_key[key] = _normalize_comment(comments)
            return not existed

    def delete_key(self, section: str, key: str) -> bool:
        """Remove ``key`` (and its comments); return whether it existed."""
        section = _normalize_section(section)
        with maybe_write(self._lock):
            values = self._data.get(section)
            if values is None or key not in values:
                return False
            del values[key]
            self._key_comments.get(section, {}).pop(key, None)
            return True

    def delete_section(self, section: str) -> bool:
        """Remove ``section`` with all its keys and comments."""
        section = _normalize_section(section)
        with maybe_write(self._lock):
            if section not in self._data:
                return False
            del self._data[section]
            self._section_comments.pop(section, None)
            self._key_comments.pop(section, None)
            return True

    def append_files(self, *paths: str) -> None:
        """Parse ``paths`` in order into this store, recording them in `file_names`."""
        from inistore.reader import IniReader

        reader = IniReader(self)
        for path in paths:
            reader.parse_file(path)

    # ------------------------------- Lookup ---------------------------------

    def get_value(self, section: str, key: str) -> str:
        """
        Return the fully resolved value of ``key`` in ``section``.

        Raises
        ------
        SectionNotFoundError
            The section (or, after sub-section fallback, a parent) is absent.
        KeyNotFoundError
            No section on the fallback chain defines ``key``.
        """
        with maybe_read(self._lock):
            budget = _Budget(MAX_SUBSTITUTION_DEPTH)
            value = self._resolve(section, key, budget)
        if budget.remaining <= 0 and _VAR_PATTERN.search(value):
            logger.warning(
                "substitution limit (%d) reached for [%s] %s; leaving placeholders",
                MAX_SUBSTITUTION_DEPTH,
                _normalize_section(section),
                key,
            )
        return value

    def lookup(self, section: str, key: str) -> Result[str, Exception]:
        """Non-raising :meth:`get_value`: ``Ok(value)`` or ``Err(ConfigLookupError)``."""
        try:
            return Ok(self.get_value(section, key))
        except ConfigLookupError as exc:
            return Err(exc)

    def _find(self, section: str, key: str) -> tuple[str, str]:
        """Locate ``key`` following the sub-section chain; return (section, raw value)."""
        section = _normalize_section(section)
        while True:
            values = self._data.get(section)
            if values is None:
                raise SectionNotFoundError(section)
            if key in values:
                return section, values[key]
            cut = section.rfind(".")
            if cut < 0:
                raise KeyNotFoundError(key)
            section = _normalize_section(section[:cut])

    def _resolve(self, section: str, key: str, budget: _Budget) -> str:
        section, value = self._find(section, key)
        while budget.remaining > 0:
            match = _VAR_PATTERN.search(value)
            if match is None:
                break
            budget.remaining -= 1
            placeholder, name = match.group(0), match.group(1)
            try:
                replacement = self._resolve(DEFAULT_SECTION, name, budget)
            except ConfigLookupError:
                replacement = ""
                if section != DEFAULT_SECTION:
                    replacement = self._data[section].get(name, "")
            value = value.replace(placeholder, replacement)
        return value

    # ----------------------------- Introspection ----------------------------

    def section_list(self) -> list[str]:
        """Return section names in first-seen order."""
        with maybe_read(self._lock):
            return list(self._data)

    def has_section(self, section: str) -> bool:
        with maybe_read(self._lock):
            return _normalize_section(section) in self._data

    def key_list(self, section: str) -> list[str]:
        """Return the keys of ``section`` in first-set order (sentinel hidden)."""
        section = _normalize_section(section)
        with maybe_read(self._lock):
            values = self._data.get(section)
            if values is None:
                raise SectionNotFoundError(section)
            return [k for k in values if k != SENTINEL_KEY]

    def get_section(self, section: str) -> dict[str, str]:
        """Return ``{key: resolved value}`` for every key of ``section``."""
        section = _normalize_section(section)
        with maybe_read(self._lock):
            values = self._data.get(section)
            if values is None:
                raise SectionNotFoundError(section)
            return {
                k: self._resolve(section, k, _Budget(MAX_SUBSTITUTION_DEPTH))
                for k in values
                if k != SENTINEL_KEY
            }

    def get_section_comments(self, section: str) -> str:
        with maybe_read(self._lock):
            return self._section_comments.get(_normalize_section(section), "")

    def get_key_comments(self, section: str, key: str) -> str:
        with maybe_read(self._lock):
            return self._key_comments.get(_normalize_section(section), {}).get(key, "")

    # ---------------------------- Typed accessors ---------------------------
    # Raising variants propagate lookup errors and conversion ValueErrors.

    def value(self, section: str, key: str) -> str:
        return self.get_value(section, key)

    def bool_value(self, section: str, key: str) -> bool:
        return parse_bool(self.get_value(section, key))

    def int_value(self, section: str, key: str) -> int:
        return parse_int(self.get_value(section, key))

    def int64_value(self, section: str, key: str) -> int:
        return parse_int64(self.get_value(section, key))

    def float64_value(self, section: str, key: str) -> float:
        return parse_float64(self.get_value(section, key))

    # "must" variants never raise: failures yield ``default`` or a zero value.

    def must_value(self, section: str, key: str, default: str | None = None) -> str:
        """Return the value; ``default`` (when given) on error *or* empty value."""
        found = self.lookup(section, key)
        if default is not None and (found.is_err() or not found.get_or("")):
            return default
        return found.get_or("")

    def must_bool(self, section: str, key: str, default: bool | None = None) -> bool:
        return self._must(section, key, parse_bool, False if default is None else default)

    def must_int(self, section: str, key: str, default: int | None = None) -> int:
        return self._must(section, key, parse_int, 0 if default is None else default)

    def must_int64(self, section: str, key: str, default: int | None = None) -> int:
        return self._must(section, key, parse_int64, 0 if default is None else default)

    def must_float64(self, section: str, key: str, default: float | None = None) -> float:
        return self._must(section, key, parse_float64, 0.0 if default is None else default)

    def _must(self, section: str, key: str, parse: Callable[[str], T], fallback: T) -> T:
        return self.lookup(section, key).flat_map(catching(parse, ValueError)).get_or(fallback)


__all__ = [
    "DEFAULT_SECTION",
    "LINE_BREAK",
    "MAX_SUBSTITUTION_DEPTH",
    "SENTINEL_KEY",
    "SENTINEL_VALUE",
    "ConfigStore",
]
