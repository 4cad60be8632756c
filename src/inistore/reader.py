"""
INI reader: turns raw text into section/key/value/comment writes on a store.

Line grammar (each line is trimmed first)
-----------------------------------------
- empty line                  → ignored
- ``#...`` / ``;...``         → buffered comment, attached to the next
                                section header or key
- ``[name]``                  → new current section (created even when empty);
                                resets the auto-increment counter
- ``key = value`` / ``key: value``
                              → a value in the current section

Keys may be wrapped in ``"``, ``\"\"\"`` or backticks to keep surrounding
whitespace and embed delimiters. Values may be wrapped in backticks or
``\"\"\"`` (the *last* closing marker wins). A key written as ``-`` becomes
``#1``, ``#2``, ... within the current section.

Several sources can be parsed into the same store one after another; later
sources overwrite values with the same (section, key).

Usage
-----
>>> store = load_string("[app]\\nname = demo\\n")
>>> store.get_value("app", "name")
'demo'
"""

from __future__ import annotations

import codecs
import io
import itertools
import os
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import IO

from inistore.core.errors import (
    BlankSectionNameError,
    ConfigParseError,
    CouldNotParseError,
    InvalidEncodingError,
)
from inistore.core.options import StoreOptions
from inistore.core.settings import get_logger
from inistore.core.store import LINE_BREAK, SENTINEL_KEY, SENTINEL_VALUE, ConfigStore

StrPath = str | os.PathLike[str]

_DELIMITER = re.compile(r"[=:]")
_KEY_QUOTES = ('"""', '"', "`")

logger = get_logger("inistore.reader")


@dataclass
class _PassState:
    """Mutable state of one parse pass; never shared between passes."""

    source: str | None
    section: str | None = None
    comments: str = ""
    counter: int = 1
    lines: int = 0

    def take_comments(self) -> str:
        comments, self.comments = self.comments, ""
        return comments


def _iter_lines(stream: Iterable[bytes] | Iterable[str]) -> Iterator[str]:
    """Yield text lines from a binary or text stream, dropping a leading BOM."""
    lines = iter(stream)
    first = next(lines, None)
    if first is None:
        return
    if isinstance(first, bytes):
        if first.startswith(codecs.BOM_UTF8):
            logger.debug("skipping UTF-8 byte-order mark")
        # utf-8-sig drops the BOM when present and is plain UTF-8 otherwise
        yield from codecs.iterdecode(itertools.chain([first], lines), "utf-8-sig")  # type: ignore[arg-type]
        return
    if first.startswith("\ufeff"):
        logger.debug("skipping byte-order mark")
        first = first[1:]
    yield first
    yield from lines  # type: ignore[misc]


def split_key_value(line: str, source: str | None = None) -> tuple[str, str]:
    """
    Split a trimmed ``key=value`` line into its key and value.

    Raises
    ------
    CouldNotParseError
        Unterminated key/value quoting, a missing ``=``/``:`` delimiter, or
        an empty key.
    """
    quote = next((q for q in _KEY_QUOTES if line.startswith(q)), "")
    if quote:
        end = line.find(quote, len(quote))
        if end < 0:
            raise CouldNotParseError(line, source)
        # Whitespace inside the quotes is significant.
        key = line[len(quote) : end]
        delim = _DELIMITER.search(line, end + len(quote))
        if delim is None or not key:
            raise CouldNotParseError(line, source)
        cut = delim.start()
    else:
        delim = _DELIMITER.search(line)
        if delim is None or delim.start() == 0:
            raise CouldNotParseError(line, source)
        cut = delim.start()
        key = line[:cut].strip()

    rest = line[cut + 1 :].strip()
    if len(rest) >= 2 and rest.startswith("`"):
        quote = "`"
    elif len(rest) >= 6 and rest.startswith('"""'):
        quote = '"""'
    else:
        return key, rest

    end = rest.rfind(quote, len(quote))
    if end < 0:
        raise CouldNotParseError(line, source)
    return key, rest[len(quote) : end]


class IniReader:
    """
    Line-oriented INI tokenizer that writes into a :class:`ConfigStore`.

    A reader is bound to one store; every ``parse*`` call is a separate pass
    with its own current section, comment buffer and auto-increment counter.
    """

    def __init__(self, store: ConfigStore | None = None) -> None:
        self.store: ConfigStore = store if store is not None else ConfigStore()

    # ------------------------------- Entry points ---------------------------

    def parse(
        self,
        stream: IO[bytes] | IO[str] | Iterable[str],
        *,
        source: str | None = None,
    ) -> ConfigStore:
        """
        Parse ``stream`` into the bound store and return the store.

        ``stream`` may yield ``bytes`` (decoded as UTF-8) or ``str`` lines.
        ``source`` names the stream in error messages.

        Raises
        ------
        BlankSectionNameError
            A key/value line appeared with no (non-blank) section active.
        CouldNotParseError
            A line could not be split into key and value.
        InvalidEncodingError
            A byte stream is not valid UTF-8.
        """
        state = _PassState(source=source)
        try:
            for raw in _iter_lines(stream):
                state.lines += 1
                self._feed(raw.strip(), state)
        except ConfigParseError as exc:
            logger.warning("parse failed at line %d: %s", state.lines, exc)
            raise
        except UnicodeDecodeError as exc:
            # The failing line was never yielded, so it is one past the count.
            error = InvalidEncodingError(state.lines + 1, exc.reason, source)
            logger.warning("parse failed: %s", error)
            raise error from exc
        logger.debug("parsed %d lines from %s", state.lines, source or "<stream>")
        return self.store

    def parse_file(self, path: StrPath) -> ConfigStore:
        """Open ``path`` and parse it; ``OSError`` propagates unchanged."""
        name = os.fspath(path)
        logger.debug("loading %s", name)
        with open(name, "rb") as fh:
            self.parse(fh, source=name)
        self.store.file_names.append(name)
        return self.store

    def parse_string(self, text: str, *, source: str | None = None) -> ConfigStore:
        """Parse INI ``text`` held in memory."""
        return self.parse(io.StringIO(text), source=source)

    # ------------------------------- State machine --------------------------

    def _feed(self, line: str, state: _PassState) -> None:
        if not line:
            return

        if line[0] in "#;":
            state.comments = line if not state.comments else state.comments + LINE_BREAK + line
            return

        if line[0] == "[" and line[-1] == "]":
            state.section = line[1:-1].strip()
            logger.debug("section [%s]", state.section)
            comments = state.take_comments()
            if comments:
                self.store.set_section_comments(state.section, comments)
            self.store.set_value(state.section, SENTINEL_KEY, SENTINEL_VALUE)
            state.counter = 1
            return

        if not state.section:
            raise BlankSectionNameError(line, state.source)

        key, value = split_key_value(line, state.source)
        if key == "-":
            key = f"#{state.counter}"
            state.counter += 1

        self.store.set_value(state.section, key, value)
        comments = state.take_comments()
        if comments:
            self.store.set_key_comments(state.section, key, comments)


# --------------------------------------------------------------------------- #
# Loading helpers
# --------------------------------------------------------------------------- #


def load_config_file(
    file_name: StrPath,
    *more_files: StrPath,
    options: StoreOptions | None = None,
) -> ConfigStore:
    """
    Load one or more files, in order, into a new store.

    The first failure (unreadable file or malformed line) aborts the load;
    the partially filled store is discarded.
    """
    store = ConfigStore(options)
    reader = IniReader(store)
    for path in (file_name, *more_files):
        reader.parse_file(path)
    return store


def load_stream(
    stream: IO[bytes] | IO[str] | Iterable[str],
    store: ConfigStore | None = None,
    *,
    source: str | None = None,
) -> ConfigStore:
    """Parse a readable stream into ``store`` (a new one when omitted)."""
    return IniReader(store).parse(stream, source=source)


def load_string(text: str, store: ConfigStore | None = None) -> ConfigStore:
    """Parse INI ``text`` into ``store`` (a new one when omitted)."""
    return IniReader(store).parse_string(text)


__all__ = [
    "IniReader",
    "load_config_file",
    "load_stream",
    "load_string",
    "split_key_value",
]
