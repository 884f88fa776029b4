"""
Numeric fields for coefficients and bounds.

Values are plain Python numbers and combine with the usual operators; a
field object supplies what the operators cannot: the identities, coercion of
caller scalars, the sign test used by rendering, and the text forms used by
the problem writer and the result reader.

Three fields are provided:

- ``RATIONAL``: arbitrary precision, ``fractions.Fraction``
- ``RATIONAL32`` / ``RATIONAL64``: fixed-width rationals that raise
  ``OverflowError`` instead of growing
- ``FLOAT``: ``float``
"""

from __future__ import annotations

import numbers
import re
from abc import ABC, abstractmethod
from decimal import Decimal
from fractions import Fraction

from .errors import ExactLPError, ExpressionTypeError


def _bounded(operator):
    def method(self, *args):
        result = operator(self, *args)
        if isinstance(result, Fraction):
            return type(self)(result)
        return result

    method.__name__ = operator.__name__
    return method


class BoundedFraction(Fraction):
    """
    A Fraction whose numerator and denominator must fit in ``bits`` bits.

    Every arithmetic result is re-checked, so an overflow is reported at the
    operation that caused it rather than at export time.
    """

    __slots__ = ()
    bits = 64

    def __new__(cls, numerator=0, denominator=None):
        self = super().__new__(cls, numerator, denominator)
        limit = 1 << (cls.bits - 1)
        if not -limit <= self.numerator < limit or self.denominator >= limit:
            raise OverflowError(
                f"{self.numerator}/{self.denominator} does not fit in "
                f"{cls.__name__}"
            )
        return self

    __add__ = _bounded(Fraction.__add__)
    __radd__ = _bounded(Fraction.__radd__)
    __sub__ = _bounded(Fraction.__sub__)
    __rsub__ = _bounded(Fraction.__rsub__)
    __mul__ = _bounded(Fraction.__mul__)
    __rmul__ = _bounded(Fraction.__rmul__)
    __truediv__ = _bounded(Fraction.__truediv__)
    __rtruediv__ = _bounded(Fraction.__rtruediv__)
    __neg__ = _bounded(Fraction.__neg__)
    __pos__ = _bounded(Fraction.__pos__)
    __abs__ = _bounded(Fraction.__abs__)


class Rational32(BoundedFraction):
    __slots__ = ()
    bits = 32


class Rational64(BoundedFraction):
    __slots__ = ()
    bits = 64


class NumericField(ABC):
    """
    The operations every coefficient type must support beyond Python's
    arithmetic operators.

    ``result_pattern`` is matched against each line of a solver result file
    and must define the groups ``id`` and ``number``.
    """

    name = ""
    exact = True
    result_pattern: re.Pattern

    @abstractmethod
    def coerce(self, value):
        """Convert a caller supplied real number into a field value."""

    @abstractmethod
    def from_float(self, number: float):
        """Convert a floating point solver value into a field value."""

    def zero(self):
        return self.coerce(0)

    def one(self):
        return self.coerce(1)

    def is_negative(self, value) -> bool:
        return value < self.zero()

    def render(self, value) -> str:
        return str(value)

    @abstractmethod
    def parse(self, text: str):
        """Convert a number token from a result file into a field value."""

    def to_float(self, value) -> float:
        return float(value)

    def render_result(self, name: str, value, objective) -> str:
        """Render one line in the solver result dialect read by this field."""
        return (
            f"{name:<40} {self.render(value):>20} "
            f"\t(obj:{self.render(objective)})"
        )

    def match_result(self, line: str):
        """
        Return ``(name, value)`` for a result line, or None when the line
        does not follow the result grammar.
        """
        match = self.result_pattern.match(line)
        if match is None:
            return None
        return match.group("id"), self.parse(match.group("number"))

    def _check_real(self, value):
        if isinstance(value, bool) or not isinstance(
            value, (numbers.Real, Decimal)
        ):
            raise ExpressionTypeError(
                f"Cannot use {type(value).__name__} as a {self.name} scalar"
            )

    def __repr__(self):
        return f"<NumericField {self.name}>"


class RationalField(NumericField):
    """Arbitrary precision rationals rendered as ``n`` or ``n/d``."""

    name = "rational"
    exact = True
    result_pattern = re.compile(
        r"^(?P<id>\w+)\s+(?P<number>[-+]?\d+(?:/\d+)?)(?=\s|$)"
    )
    value_type = Fraction

    def __init__(self, max_denominator=10**6):
        # Used only when reading values back from a floating point solver.
        self.max_denominator = max_denominator

    def coerce(self, value):
        if type(value) is self.value_type:
            return value
        self._check_real(value)
        return self.value_type(value)

    def parse(self, text):
        return self.value_type(text.strip())

    def from_float(self, number):
        return self.value_type(
            Fraction(number).limit_denominator(self.max_denominator)
        )


class FixedRationalField(RationalField):
    """Rationals bounded to a fixed bit width."""

    def __init__(self, value_type=Rational64, max_denominator=10**6):
        super().__init__(max_denominator)
        self.value_type = value_type
        self.name = f"rational{value_type.bits}"


class FloatField(NumericField):
    """
    Double precision floats.

    Rendering writes the exact decimal expansion of the binary value, so
    nothing is lost between the model and the problem file.
    """

    name = "float"
    exact = False
    result_pattern = re.compile(r"^(?P<id>\w+)\s+(?P<number>.+)\(obj:")

    def coerce(self, value):
        if isinstance(value, float):
            return value
        self._check_real(value)
        return float(value)

    def render(self, value):
        return format(Decimal(value), "f")

    def parse(self, text):
        return float(text.strip())

    def from_float(self, number):
        return float(number)

    def render_result(self, name, value, objective):
        return f"{name:<40} {value!r:>20} \t(obj:{objective!r})"


RATIONAL = RationalField()
RATIONAL32 = FixedRationalField(Rational32)
RATIONAL64 = FixedRationalField(Rational64)
FLOAT = FloatField()

FIELDS = {
    field.name: field for field in (RATIONAL, RATIONAL32, RATIONAL64, FLOAT)
}


def get_field(field) -> NumericField:
    """Resolve a field given by name, or return a field instance unchanged."""
    if isinstance(field, NumericField):
        return field
    try:
        return FIELDS[field]
    except KeyError:
        raise ExactLPError(f"Unknown numeric field {field!r}") from None
