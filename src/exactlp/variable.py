"""
Variable handles.
"""

from __future__ import annotations

from typing import Optional

from .numeric import RATIONAL, NumericField


class Variable:
    """
    A lightweight reference to a variable owned by a Model.

    A Variable holds no numeric state: bounds and integrality live in the
    owning model's variable table, indexed by ``id``. Handles compare by
    ``(id, name)`` and may be copied and stored freely.

    All arithmetic promotes the variable to an Expression first.
    """

    __slots__ = ("_id", "_name", "_field")

    def __init__(
        self,
        id: int,
        name: Optional[str] = None,
        field: NumericField = RATIONAL,
    ):
        self._id = id
        self._name = name
        self._field = field

    @property
    def id(self) -> int:
        return self._id

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def field(self) -> NumericField:
        return self._field

    @property
    def display_name(self) -> str:
        if self._name is not None:
            return self._name
        return f"v{self._id}"

    def to_expression(self):
        from .expression import Expression
        return Expression([(self._field.one(), self)], self._field)

    def __str__(self):
        return self.display_name

    def __repr__(self):
        return f"<Variable {self.display_name}>"

    def __eq__(self, other):
        if not isinstance(other, Variable):
            return NotImplemented
        return (self._id, self._name) == (other._id, other._name)

    def __hash__(self):
        return hash((self._id, self._name))

    # --- Algebra, delegated to Expression ---
    def __add__(self, other):
        return self.to_expression() + other

    def __radd__(self, other):
        return self.to_expression().__radd__(other)

    def __sub__(self, other):
        return self.to_expression() - other

    def __rsub__(self, other):
        return self.to_expression().__rsub__(other)

    def __mul__(self, other):
        return self.to_expression() * other

    def __rmul__(self, other):
        return self.to_expression().__rmul__(other)

    def __truediv__(self, other):
        return self.to_expression() / other

    def __neg__(self):
        return -self.to_expression()

    # --- Constraints ---
    def le(self, other):
        return self.to_expression().le(other)

    def eq(self, other):
        return self.to_expression().eq(other)

    def ge(self, other):
        return self.to_expression().ge(other)

    def __le__(self, other):
        return self.le(other)

    def __ge__(self, other):
        return self.ge(other)
