"""Core package for inistore: store, errors, options, settings and helpers.

Downstream code usually imports from the top-level package instead:
    from inistore import ConfigStore, load_config_file
"""

from __future__ import annotations

__all__ = ["__doc__"]
