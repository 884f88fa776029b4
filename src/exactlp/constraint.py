"""
Linear constraints and their normal form.
"""

from __future__ import annotations

import enum


class Relation(enum.Enum):
    LE = "<="
    EQ = "="
    GE = ">="

    @property
    def token(self) -> str:
        return self.value


class Constraint:
    """
    Two expressions joined by a relation.

    Built by ``Expression.le``/``eq``/``ge`` (or ``<=``/``>=``). Stored
    constraints are not normalized; ``normalize()`` returns the form the LP
    writer needs.
    """

    __slots__ = ("lhs", "relation", "rhs")

    def __init__(self, lhs, relation: Relation, rhs):
        self.lhs = lhs
        self.relation = relation
        self.rhs = rhs

    @property
    def field(self):
        return self.lhs.field

    def normalize(self) -> "Constraint":
        """
        Move everything to the left, then split it again: the variable terms
        stay on the left in their original order (duplicates are kept), the
        constant terms are summed left to right and moved to the right with
        their sign flipped.
        """
        from .expression import Expression

        delta = self.lhs - self.rhs
        kept = []
        constant = delta.field.zero()
        for coeff, var in delta.terms:
            if var is None:
                constant = constant + coeff
            else:
                kept.append((coeff, var))
        return Constraint(
            Expression(kept, delta.field),
            self.relation,
            Expression([(delta.field.zero() - constant, None)], delta.field),
        )

    def __str__(self):
        return f"{self.lhs} {self.relation.token} {self.rhs}"

    def __repr__(self):
        return f"<Constraint {self}>"
