"""
Solver backends.

A backend receives the exported problem file and must leave a result file
in the SCIP solution format, which the model's numeric field then reads
back. Two backends are provided:

- ``ScipSolver`` runs the ``scip`` executable, in exact mode for exact
  fields.
- ``OrToolsSolver`` solves in-process with Google OR-Tools and writes the
  same result format.

To use OR-Tools you must have it installed: 'pip install ortools'
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import tempfile
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from ortools.linear_solver import pywraplp

from .constraint import Relation
from .errors import SolverError
from .model import Direction, VarType

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class SolverSettings:
    """
    Settings for running a backend.

    Environment overrides (see ``from_env``):
        EXACTLP_SCIP: path to the scip executable
        EXACTLP_POLL_ATTEMPTS: how many times to look for the result file
        EXACTLP_POLL_INTERVAL: seconds between looks
        EXACTLP_KEEP_FILES: keep the problem and result files for debugging
    """

    scip_path: str = "scip"
    poll_attempts: int = 10
    poll_interval: float = 0.1
    keep_files: bool = False

    @classmethod
    def from_env(cls, environ=None) -> "SolverSettings":
        environ = os.environ if environ is None else environ
        settings = cls()
        if "EXACTLP_SCIP" in environ:
            settings.scip_path = environ["EXACTLP_SCIP"]
        if "EXACTLP_POLL_ATTEMPTS" in environ:
            settings.poll_attempts = int(environ["EXACTLP_POLL_ATTEMPTS"])
        if "EXACTLP_POLL_INTERVAL" in environ:
            settings.poll_interval = float(environ["EXACTLP_POLL_INTERVAL"])
        if "EXACTLP_KEEP_FILES" in environ:
            settings.keep_files = (
                environ["EXACTLP_KEEP_FILES"].strip().lower() in _TRUE_VALUES
            )
        return settings


class Solver(ABC):
    """
    Abstract interface for solver backends.
    """

    name = ""

    @abstractmethod
    def run(self, model, problem_path, solution_path, settings):
        """
        Solve the problem at ``problem_path`` and write the result to
        ``solution_path``.
        """


class ScipSolver(Solver):
    """
    Runs the SCIP command line with one ``-c`` argument per command.

    Model directives added with ``Model.add_command`` are passed between the
    exact-mode switch and the ``read`` command.
    """

    name = "scip"

    def __init__(self, executable=None):
        self.executable = executable

    def command(self, model, problem_path, solution_path, settings):
        args = [self.executable or settings.scip_path]
        if model.field.exact:
            args += ["-c", "set exact enabled TRUE"]
        for directive in model.commands:
            args += ["-c", directive]
        args += [
            "-c", f"read {problem_path}",
            "-c", "optimize",
            "-c", f"write solution {solution_path}",
            "-c", "quit",
        ]
        return args

    def run(self, model, problem_path, solution_path, settings):
        args = self.command(model, problem_path, solution_path, settings)
        logger.info("Running %s", shlex.join(args))
        try:
            completed = subprocess.run(args, check=False)
        except FileNotFoundError as exc:
            raise SolverError(f"SCIP executable not found: {args[0]}") from exc
        if completed.returncode != 0:
            logger.warning("SCIP exited with status %d", completed.returncode)


def _float_coefficients(expr, field):
    # OR-Tools sets one coefficient per variable, so repeated terms are
    # summed here. Constant terms are dropped.
    coefficients = {}
    for coeff, var in expr.terms:
        if var is not None:
            coefficients[var] = (
                coefficients.get(var, 0.0) + field.to_float(coeff)
            )
    return coefficients


def _handle(handles, var, where):
    try:
        return handles[var]
    except KeyError:
        raise SolverError(
            f"Variable {var.display_name} (id {var.id}) in {where} is not "
            f"declared in this model"
        ) from None


class OrToolsSolver(Solver):
    """
    Solves in-process with an OR-Tools ``pywraplp`` solver.

    Values come back as floats and are converted into the model's field
    (rationals are recovered with ``limit_denominator``). Variables at zero
    are left out of the result file, as SCIP does.
    """

    name = "ortools"

    def __init__(self, solver_id="CBC"):
        # 'CBC' (COIN-OR Branch and Cut) handles MILPs; 'SCIP' and 'GLOP'
        # are other choices.
        self.solver_id = solver_id

    def run(self, model, problem_path, solution_path, settings):
        solver = pywraplp.Solver.CreateSolver(self.solver_id)
        if not solver:
            raise SolverError(
                f"Could not create {self.solver_id} solver instance"
            )

        field = model.field
        infinity = solver.infinity()
        handles = {}
        for var, record in model.iter_variables():
            lb = -infinity if record.lb is None else field.to_float(record.lb)
            ub = infinity if record.ub is None else field.to_float(record.ub)
            if record.kind is VarType.CONTINUOUS:
                handles[var] = solver.NumVar(lb, ub, var.display_name)
            else:
                if record.kind is VarType.BINARY:
                    lb, ub = max(lb, 0.0), min(ub, 1.0)
                handles[var] = solver.IntVar(lb, ub, var.display_name)

        for index, constraint in enumerate(model.constraints):
            normalized = constraint.normalize()
            rhs = field.to_float(normalized.rhs.terms[0][0])
            if normalized.relation is Relation.LE:
                lo, hi = -infinity, rhs
            elif normalized.relation is Relation.GE:
                lo, hi = rhs, infinity
            else:
                lo, hi = rhs, rhs
            row = solver.Constraint(lo, hi, f"c{index}")
            for var, coeff in _float_coefficients(
                normalized.lhs, field
            ).items():
                row.SetCoefficient(_handle(handles, var, f"c{index}"), coeff)

        objective = solver.Objective()
        objective_coefficients = _float_coefficients(model.objective, field)
        for var, coeff in objective_coefficients.items():
            objective.SetCoefficient(_handle(handles, var, "obj"), coeff)
        if model.direction is Direction.MAXIMIZE:
            objective.SetMaximization()
        else:
            objective.SetMinimization()

        logger.info("Starting optimization with %s", solver.SolverVersion())
        status = solver.Solve()

        with open(solution_path, "w", encoding="utf-8") as fh:
            if status not in (pywraplp.Solver.OPTIMAL, pywraplp.Solver.FEASIBLE):
                logger.warning(
                    "%s found no solution (status %d)", self.solver_id, status
                )
                fh.write("no solution available\n")
                return

            if status == pywraplp.Solver.OPTIMAL:
                fh.write("solution status: optimal solution found\n")
            else:
                fh.write("solution status: feasible solution found\n")
            fh.write(f"objective value: {objective.Value()!r}\n")
            zero = field.zero()
            for var, _ in model.iter_variables():
                value = field.from_float(handles[var].solution_value())
                if value == zero:
                    continue
                coeff = field.from_float(objective_coefficients.get(var, 0.0))
                fh.write(field.render_result(var.display_name, value, coeff))
                fh.write("\n")


def wait_for_file(path, attempts, interval):
    """
    Wait for a solver to finish writing ``path``; raise SolverError when it
    is still missing after ``attempts`` checks.
    """
    attempt = 0
    while not path.exists() and attempt < attempts:
        time.sleep(interval)
        attempt += 1
    if not path.exists():
        raise SolverError(
            f"No result file {path} after {attempts} attempts"
        )


def _solve_in(model, solver, settings, workdir):
    problem_path = workdir / "formulation.lp"
    solution_path = workdir / "solution.sol"
    with open(problem_path, "w", encoding="utf-8") as fh:
        model.export(fh)

    solver.run(model, problem_path, solution_path, settings)
    wait_for_file(solution_path, settings.poll_attempts, settings.poll_interval)

    with open(solution_path, encoding="utf-8") as fh:
        solution = model.read_solution(fh)
    logger.info(
        "%s reported %d values (%d unmatched lines)",
        solver.name, len(solution), solution.unmatched,
    )
    return solution


def solve(model, solver=None, settings=None):
    """
    Export ``model`` to a temporary directory, run ``solver`` (SCIP by
    default) and read its result back as a Solution.
    """
    if settings is None:
        settings = SolverSettings.from_env()
    if solver is None:
        solver = ScipSolver()

    if settings.keep_files:
        workdir = Path(tempfile.mkdtemp(prefix="exactlp-"))
        logger.info("Keeping solver files in %s", workdir)
        return _solve_in(model, solver, settings, workdir)

    with tempfile.TemporaryDirectory(prefix="exactlp-") as tmp:
        return _solve_in(model, solver, settings, Path(tmp))
