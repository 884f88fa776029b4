"""
Sparse linear expressions.

An Expression is an ordered list of ``(coefficient, variable)`` terms where
a ``None`` variable marks a constant term. Operators never merge terms:
``a + b`` is the terms of ``a`` followed by the terms of ``b``. Duplicate
variables and multiple constants are only folded when a constraint is
normalized.
"""

from __future__ import annotations

from .constraint import Constraint, Relation
from .errors import ExpressionTypeError
from .numeric import RATIONAL
from .variable import Variable


class Expression:
    """
    A linear combination of variables plus constant terms, over one
    numeric field.
    """

    __slots__ = ("terms", "field")

    def __init__(self, terms=(), field=RATIONAL):
        self.terms = list(terms)
        self.field = field

    @classmethod
    def constant(cls, value, field=RATIONAL):
        """A single constant term."""
        return cls([(field.coerce(value), None)], field)

    @classmethod
    def of(cls, value, field=RATIONAL):
        """Promote an Expression, a Variable or a scalar to an Expression."""
        if isinstance(value, Expression):
            return value
        if isinstance(value, Variable):
            return value.to_expression()
        return cls.constant(value, field)

    def _promote(self, other):
        other = Expression.of(other, self.field)
        if other.field is not self.field:
            raise ExpressionTypeError(
                f"Cannot combine {self.field.name} and {other.field.name} "
                f"expressions"
            )
        return other

    def _scalar(self, value):
        if isinstance(value, (Expression, Variable)):
            raise ExpressionTypeError(
                "Can only multiply an expression by a constant (no quadratic)"
            )
        return self.field.coerce(value)

    def variables(self):
        """The variables referenced by this expression, in term order."""
        return [var for _, var in self.terms if var is not None]

    def __len__(self):
        return len(self.terms)

    def __iter__(self):
        return iter(self.terms)

    # --- Algebra ---
    def __add__(self, other):
        other = self._promote(other)
        return Expression(self.terms + other.terms, self.field)

    def __radd__(self, other):
        # other + self: other's terms come first
        return self._promote(other) + self

    def __sub__(self, other):
        return self + (-self._promote(other))

    def __rsub__(self, other):
        return self._promote(other) + (-self)

    def __mul__(self, other):
        scalar = self._scalar(other)
        return Expression(
            [(scalar * coeff, var) for coeff, var in self.terms], self.field
        )

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        return self * (self.field.one() / self._scalar(other))

    def __neg__(self):
        return self * (self.field.zero() - self.field.one())

    # --- Constraints ---
    def le(self, other):
        return Constraint(self, Relation.LE, self._promote(other))

    def eq(self, other):
        return Constraint(self, Relation.EQ, self._promote(other))

    def ge(self, other):
        return Constraint(self, Relation.GE, self._promote(other))

    def __le__(self, other):
        return self.le(other)

    def __ge__(self, other):
        return self.ge(other)

    def __str__(self):
        field = self.field
        parts = []
        for index, (coeff, var) in enumerate(self.terms):
            if index == 0:
                parts.append(field.render(coeff))
            elif field.is_negative(coeff):
                parts.append(f" - {field.render(-coeff)}")
            else:
                parts.append(f" + {field.render(abs(coeff))}")
            if var is not None:
                parts.append(f" {var.display_name}")
        return "".join(parts)

    def __repr__(self):
        return f"<Expression {self}>"
