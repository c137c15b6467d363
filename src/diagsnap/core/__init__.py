"""Core contracts, selector parsing, results, errors and settings.

Import from the submodules directly, e.g.:
    from diagsnap.core.settings import settings, load_settings, Settings, get_logger
"""

from __future__ import annotations

__all__ = ["__doc__"]
