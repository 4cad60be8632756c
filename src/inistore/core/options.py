"""Options accepted by :class:`~inistore.core.store.ConfigStore`.

The recognized options are enumerated by this model; anything else is
rejected by validation rather than silently ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .settings import load_settings


class StoreOptions(BaseModel):
    """Per-store behaviour switches."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    concurrency_safe: bool = Field(
        default=True,
        description="Guard every operation with a shared/exclusive lock.",
    )

    @classmethod
    def from_settings(cls) -> StoreOptions:
        """Build options from the process-level :class:`Settings`."""
        return cls(concurrency_safe=load_settings().concurrency_safe)


__all__ = ["StoreOptions"]
