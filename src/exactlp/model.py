"""
The Model: variables, constraints, objective and the LP writer.

Example::

    m = Model("rational")
    x = m.add_var().name("x").lb(0).build()
    y = m.add_var().name("y").lb(0).build()
    m.maximize()
    m.set_objective(2 * x + 5 * y)
    m.add_constraint(x + 4 * y <= 24)
    m.add_constraint(3 * x + y <= 21)
    m.add_constraint(x + y <= 9)
    solution = m.solve()
    solution.get_value(x)   # Fraction(4, 1)
"""

from __future__ import annotations

import enum
import io
import logging
from dataclasses import dataclass, replace
from typing import Optional

from .errors import ExactLPError
from .expression import Expression
from .numeric import get_field
from .solution import parse_solution
from .variable import Variable

logger = logging.getLogger(__name__)


class VarType(enum.Enum):
    CONTINUOUS = "continuous"
    INTEGER = "integer"
    BINARY = "binary"


class Direction(enum.Enum):
    MINIMIZE = "Minimize"
    MAXIMIZE = "Maximize"


@dataclass
class VariableRecord:
    """Per-variable metadata kept by the model, indexed by variable id."""

    kind: VarType = VarType.CONTINUOUS
    name: Optional[str] = None
    lb: object = None
    ub: object = None


class VariableBuilder:
    """
    Collects a variable's metadata; nothing is added to the model and no id
    is assigned until ``build()``. A builder is spent once built.
    """

    def __init__(self, model):
        self._model = model
        self._record = VariableRecord()

    def _pending(self):
        if self._record is None:
            raise ExactLPError("Variable builder was already built")
        return self._record

    def continuous(self):
        self._pending().kind = VarType.CONTINUOUS
        return self

    def integer(self):
        self._pending().kind = VarType.INTEGER
        return self

    def binary(self):
        self._pending().kind = VarType.BINARY
        return self

    def name(self, name):
        self._pending().name = str(name)
        return self

    def lb(self, value):
        self._pending().lb = self._model.field.coerce(value)
        return self

    def ub(self, value):
        self._pending().ub = self._model.field.coerce(value)
        return self

    def build(self) -> Variable:
        record = self._pending()
        self._record = None
        return self._model._commit(replace(record))


class Model:
    """
    A linear or mixed-integer program over one numeric field.

    The model only grows: variables and constraints are appended and never
    removed. ``export`` renders it in LP format, normalizing each constraint
    on the way out without touching the stored one.
    """

    def __init__(self, field="rational", name=""):
        self.field = get_field(field)
        self.name = name
        self.direction = Direction.MINIMIZE
        self.objective = Expression(field=self.field)
        self._variables = []  # VariableRecord, indexed by id
        self._names = set()
        self._constraints = []
        self._commands = []

    # --- Building ---
    def add_var(self) -> VariableBuilder:
        """
        Start declaring a variable. Chain the builder and finish with
        ``build()``::

            z = m.add_var().integer().name("z").lb(0).ub(10).build()
        """
        return VariableBuilder(self)

    def _commit(self, record):
        var = Variable(len(self._variables), record.name, self.field)
        if var.display_name in self._names:
            logger.warning(
                "Variable name '%s' is used twice; solver values for it "
                "cannot be told apart", var.display_name
            )
        self._names.add(var.display_name)
        self._variables.append(record)
        return var

    def add_constraint(self, constraint):
        self._constraints.append(constraint)
        return constraint

    def set_objective(self, expr):
        self.objective = Expression.of(expr, self.field)

    def maximize(self):
        self.direction = Direction.MAXIMIZE

    def minimize(self):
        self.direction = Direction.MINIMIZE

    def add_command(self, command):
        """Add a directive passed verbatim to the solver backend."""
        self._commands.append(str(command))

    # --- Inspection ---
    @property
    def constraints(self):
        return tuple(self._constraints)

    @property
    def commands(self):
        return tuple(self._commands)

    def iter_variables(self):
        """Yield ``(Variable, VariableRecord)`` pairs in declaration order."""
        for index, record in enumerate(self._variables):
            yield Variable(index, record.name, self.field), record

    def variables(self):
        return [var for var, _ in self.iter_variables()]

    def get_var(self, name):
        """Look a variable up by display name."""
        for var in self.variables():
            if var.display_name == name:
                return var
        raise KeyError(name)

    # --- LP format ---
    def export(self, fh):
        """Write the model in LP format to a text stream."""
        render = self.field.render
        fh.write(f"{self.direction.value}\n")
        objective = Expression(
            [term for term in self.objective.terms if term[1] is not None],
            self.field,
        )
        fh.write(f" obj: {objective}\n")

        fh.write("Subject To\n")
        for index, constraint in enumerate(self._constraints):
            fh.write(f" c{index}: {constraint.normalize()}\n")

        fh.write("Bounds\n")
        integers = []
        binaries = []
        for var, record in self.iter_variables():
            name = var.display_name
            if record.lb is not None and record.ub is not None:
                fh.write(f" {render(record.lb)} <= {name} <= {render(record.ub)}\n")
            elif record.lb is not None:
                fh.write(f" {render(record.lb)} <= {name} <= +inf\n")
            elif record.ub is not None:
                fh.write(f" -inf <= {name} <= {render(record.ub)}\n")
            else:
                fh.write(f" {name} free\n")
            if record.kind is VarType.INTEGER:
                integers.append(name)
            elif record.kind is VarType.BINARY:
                binaries.append(name)

        fh.write("General\n")
        for name in integers:
            fh.write(f" {name}\n")
        fh.write("Binary\n")
        for name in binaries:
            fh.write(f" {name}\n")
        fh.write("End\n")

        logger.debug(
            "Exported %d variables and %d constraints",
            len(self._variables), len(self._constraints),
        )

    def export_text(self) -> str:
        buffer = io.StringIO()
        self.export(buffer)
        return buffer.getvalue()

    # --- Results ---
    def read_solution(self, fh):
        """Read a solver result file written in this model's field dialect."""
        return parse_solution(fh, self.field)

    def parse_solution(self, text):
        return parse_solution(text, self.field)

    def solve(self, solver=None, settings=None):
        """
        Export the model, run it through a solver backend and read the
        result back. Defaults to SCIP (see ``exactlp.solvers``).
        """
        from .solvers import solve
        return solve(self, solver, settings)

    def __repr__(self):
        return (
            f"<Model {self.name!r} field={self.field.name} "
            f"vars={len(self._variables)} constrs={len(self._constraints)}>"
        )
