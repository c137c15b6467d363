"""Build metadata of the running program.

The Python counterpart of "build info embedded in the binary" is the metadata
of the installed distribution the program was started from. It is only
available when that distribution is actually installed; scripts run from a
checkout, REPL sessions and frozen apps usually have none, and
:func:`read_build_info` returns ``None`` for them.
"""

from __future__ import annotations

import logging
import platform
import sys
from importlib import metadata

from ..core.contracts.snapshot import BuildSnapshot

logger = logging.getLogger(__name__)


def main_distribution() -> str | None:
    """Guess the distribution providing the ``__main__`` module's package.

    Works for ``python -m package`` and console-script entry points; returns
    ``None`` for plain scripts and interactive sessions.
    """
    main = sys.modules.get("__main__")
    package = getattr(main, "__package__", None) or ""
    top_level = package.partition(".")[0]
    if not top_level:
        return None
    candidates = metadata.packages_distributions().get(top_level, [])
    return candidates[0] if candidates else None


def read_build_info(distribution: str | None = None) -> BuildSnapshot | None:
    """Return build metadata for ``distribution`` (or the main one), if installed."""
    name = distribution or main_distribution()
    if not name:
        return None
    try:
        dist = metadata.distribution(name)
    except metadata.PackageNotFoundError:
        logger.debug("No installed distribution named %r; build info omitted", name)
        return None

    return BuildSnapshot(
        distribution=dist.metadata["Name"] or name,
        version=dist.version,
        requires=tuple(dist.requires or ()),
        python_implementation=platform.python_implementation(),
        python_version=platform.python_version(),
        executable=sys.executable,
        platform=platform.platform(),
    )


__all__ = ["main_distribution", "read_build_info"]
