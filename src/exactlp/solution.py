"""
Reading solver result files.

A result file is line oriented. Each line matching the field's result
grammar contributes one ``name -> value`` pair; every other line (status
banners, objective summaries, blank lines) is skipped.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from .expression import Expression
from .numeric import NumericField

logger = logging.getLogger(__name__)


class Solution(Mapping):
    """
    An immutable snapshot of the values reported by a solver, keyed by
    variable display name.

    ``unmatched`` counts the non-empty lines that did not follow the result
    grammar. A large count next to an empty solution usually means the
    solver wrote a format this field does not read.
    """

    def __init__(self, values, field: NumericField, unmatched: int = 0):
        self._values = MappingProxyType(dict(values))
        self.field = field
        self.unmatched = unmatched

    def __getitem__(self, name):
        return self._values[name]

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def get_value(self, expr):
        """
        Evaluate a Variable, Expression or scalar under this solution.

        Variables the solver did not report count as zero, so a variable
        left out of a sparse result file reads the same as one reported at
        zero.
        """
        field = self.field
        total = field.zero()
        for coeff, var in Expression.of(expr, field).terms:
            if var is None:
                value = field.one()
            else:
                value = self._values.get(var.display_name, field.zero())
            total = total + value * coeff
        return total

    def __repr__(self):
        return f"<Solution {len(self)} values, field={self.field.name}>"


def parse_solution(source, field: NumericField) -> Solution:
    """
    Build a Solution from result text.

    ``source`` is either a string or an iterable of lines, such as an open
    file.
    """
    if isinstance(source, str):
        source = source.splitlines()

    values = {}
    unmatched = 0
    for line in source:
        line = line.rstrip("\r\n")
        result = field.match_result(line)
        if result is None:
            if line.strip():
                unmatched += 1
                logger.debug("Skipping result line %r", line)
            continue
        name, value = result
        values[name] = value

    logger.debug(
        "Read %d values (%d unmatched lines)", len(values), unmatched
    )
    return Solution(values, field, unmatched)
