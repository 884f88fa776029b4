"""Unittest entry point for the exactlp test suite.

Usage:
    python -m tests
    python -m tests -v      # debug logging from exactlp
"""

from __future__ import annotations

import logging
import sys
import unittest
from pathlib import Path


def main() -> None:
    if "-v" in sys.argv[1:]:
        logging.basicConfig(level=logging.DEBUG)
    loader = unittest.TestLoader()
    suite = loader.discover(
        start_dir=str(Path(__file__).parent),
        top_level_dir=str(Path(__file__).parent.parent),
    )
    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)
    raise SystemExit(0 if result.wasSuccessful() else 1)


if __name__ == "__main__":
    main()
