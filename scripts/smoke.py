# scripts/smoke.py
"""
Smoke script: print one full diagnostic dump of this interpreter.

Usage
-----
    $ python scripts/smoke.py            # ALL groups
    $ python scripts/smoke.py MEM,GC     # any selector text
"""

import gc
import logging
import sys

from diagsnap import DebugOptions, print_debug, print_debug_with_log
from diagsnap.core.settings import get_logger


def main() -> None:
    """Force a collection so the pause history is not empty, then dump twice."""
    level = sys.argv[1] if len(sys.argv) > 1 else "ALL"
    options = DebugOptions(enabled=True, level=level)
    gc.collect()

    result = print_debug("smoke: console dump", options)
    if result.is_err():
        print(f"❌ {result.unwrap_err()}")
        sys.exit(1)

    logger = get_logger("diagsnap.smoke")
    logger.setLevel(logging.INFO)
    result = print_debug_with_log("smoke: logger dump", options, logger)
    if result.is_err():
        print(f"❌ {result.unwrap_err()}")
        sys.exit(1)
    print("✅ Smoke dump complete")


if __name__ == "__main__":
    main()
