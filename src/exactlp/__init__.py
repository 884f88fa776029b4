"""
exactlp: an algebraic modeling layer for LP/MILP with exact coefficients.

Public API:
- Model: variables, constraints, objective and the LP writer
- Variable, Expression, Constraint: the linear algebra
- Solution: values read back from a solver
- RATIONAL, RATIONAL32, RATIONAL64, FLOAT: numeric fields
- ScipSolver, OrToolsSolver: solver backends

Notes:
- Solving is delegated to an external solver; this package only writes the
  problem and reads the result.
"""

from __future__ import annotations

from importlib.metadata import version, PackageNotFoundError

__version__: str
try:
    # Package name should match the installed distribution
    __version__ = version("exactlp")
except PackageNotFoundError:
    __version__ = "0.0.0"


from .constraint import Constraint, Relation  # noqa: E402
from .errors import ExactLPError, ExpressionTypeError, SolverError  # noqa: E402
from .expression import Expression  # noqa: E402
from .model import Direction, Model, VariableBuilder, VarType  # noqa: E402
from .numeric import (  # noqa: E402
    FLOAT,
    RATIONAL,
    RATIONAL32,
    RATIONAL64,
    NumericField,
    Rational32,
    Rational64,
    get_field,
)
from .solution import Solution, parse_solution  # noqa: E402
from .solvers import (  # noqa: E402
    OrToolsSolver,
    ScipSolver,
    Solver,
    SolverSettings,
)
from .variable import Variable  # noqa: E402


__all__ = [
    "Constraint",
    "Direction",
    "ExactLPError",
    "Expression",
    "ExpressionTypeError",
    "FLOAT",
    "Model",
    "NumericField",
    "OrToolsSolver",
    "RATIONAL",
    "RATIONAL32",
    "RATIONAL64",
    "Rational32",
    "Rational64",
    "Relation",
    "ScipSolver",
    "Solution",
    "Solver",
    "SolverError",
    "SolverSettings",
    "VarType",
    "Variable",
    "VariableBuilder",
    "get_field",
    "parse_solution",
    "__version__",
]
