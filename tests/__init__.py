"""
Shared fixtures for the exactlp suites.

Importing this package puts ``src/`` on ``sys.path`` so a checkout runs
with ``python -m tests`` before it is installed, and warns when a backend
the solver tests need is not importable.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

_SRC = Path(__file__).resolve().parents[1] / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

# Imported by the OrToolsSolver tests.
EXTERNAL_TEST_REQUIREMENTS = [
    "ortools",
]


def _missing_requirements(packages: list[str]) -> list[str]:
    missing: list[str] = []
    for name in packages:
        try:
            importlib.import_module(name)
        except ImportError:
            missing.append(name)
    return missing


_missing = _missing_requirements(EXTERNAL_TEST_REQUIREMENTS)
if _missing:
    # The affected suites still load and report the ImportError themselves.
    pkgs = " ".join(_missing)
    print(
        f"exactlp tests: solver backend not installed ({pkgs}); "
        f"run `pip install {pkgs}`",
        file=sys.stderr,
    )


def build_reference_model(field="rational"):
    """maximize 2x + 5y s.t. x + 4y <= 24, 3x + y <= 21, x + y <= 9."""
    from exactlp import Model

    m = Model(field, "reference")
    x = m.add_var().name("x").lb(0).build()
    y = m.add_var().name("y").lb(0).build()
    m.maximize()
    m.set_objective(2 * x + 5 * y)
    m.add_constraint(x + 4 * y <= 24)
    m.add_constraint(3 * x + y <= 21)
    m.add_constraint(x + y <= 9)
    return m, x, y
