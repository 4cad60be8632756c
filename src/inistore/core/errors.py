"""Exception taxonomy for configuration lookup and parsing.

Two families are exposed:

- **Lookup errors** (:class:`ConfigLookupError`) are raised while resolving a
  value from a :class:`~inistore.core.store.ConfigStore`. They subclass the
  builtin :class:`LookupError` so callers may catch them generically.
- **Parse errors** (:class:`ConfigParseError`) are raised by the INI reader
  and abort the whole load. They subclass :class:`ValueError`.

Type conversion failures are *not* wrapped: the builtin ``ValueError`` from
the conversion helpers propagates unchanged.
"""

from __future__ import annotations


class InistoreError(Exception):
    """Base class for every error raised by this package."""


# ----- Lookup errors ---------------------------------------------------------
class ConfigLookupError(InistoreError, LookupError):
    """A section or key could not be resolved."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(self._message())

    def _message(self) -> str:  # pragma: no cover - overridden
        return "invalid get error"


class SectionNotFoundError(ConfigLookupError):
    """The requested section does not exist in the store."""

    def _message(self) -> str:
        return f"section '{self.name}' not found"


class KeyNotFoundError(ConfigLookupError):
    """The key exists neither in the section nor in any parent sub-section."""

    def _message(self) -> str:
        return f"key '{self.name}' not found"


# ----- Parse errors ----------------------------------------------------------
class ConfigParseError(InistoreError, ValueError):
    """A line of INI text could not be turned into a section or key/value.

    Attributes
    ----------
    line : str
        The offending (trimmed) line content.
    source : str | None
        File path the line came from, or ``None`` for anonymous streams.
    """

    def __init__(self, line: str, source: str | None = None) -> None:
        self.line = line
        self.source = source
        super().__init__(str(self))

    def _message(self) -> str:  # pragma: no cover - overridden
        return "invalid read error"

    def __str__(self) -> str:
        msg = self._message()
        if self.source:
            msg += f" (in {self.source})"
        return msg


class BlankSectionNameError(ConfigParseError):
    """A key/value line appeared while no (non-blank) section was active."""

    def _message(self) -> str:
        return f"empty section name not allowed: {self.line}"


class CouldNotParseError(ConfigParseError):
    """Malformed quoting or a missing ``=``/``:`` delimiter."""

    def _message(self) -> str:
        return f"could not parse line: {self.line}"


class InvalidEncodingError(ConfigParseError):
    """The source is not valid UTF-8; ``lineno`` is the 1-based line that failed."""

    def __init__(self, lineno: int, reason: str, source: str | None = None) -> None:
        self.lineno = lineno
        self.reason = reason
        super().__init__("", source)

    def _message(self) -> str:
        return f"invalid UTF-8 on line {self.lineno}: {self.reason}"


# ----- Default store ---------------------------------------------------------
class NotInitializedError(InistoreError, RuntimeError):
    """The convenience default store was used before ``init()``."""


__all__ = [
    "BlankSectionNameError",
    "ConfigLookupError",
    "ConfigParseError",
    "CouldNotParseError",
    "InistoreError",
    "InvalidEncodingError",
    "KeyNotFoundError",
    "NotInitializedError",
    "SectionNotFoundError",
]
