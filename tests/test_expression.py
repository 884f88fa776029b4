import unittest
from fractions import Fraction

from exactlp import (
    FLOAT,
    Expression,
    ExpressionTypeError,
    Model,
    Rational32,
    Variable,
)


def build_vars():
    m = Model("rational", "expr")
    x = m.add_var().name("x").build()
    y = m.add_var().name("y").build()
    z = m.add_var().name("z").build()
    return m, x, y, z


class TestVariable(unittest.TestCase):
    def test_ids_follow_creation_order(self):
        m, x, y, z = build_vars()
        self.assertEqual([x.id, y.id, z.id], [0, 1, 2])
        self.assertEqual(x.display_name, "x")

    def test_display_name_fallback(self):
        m = Model()
        for _ in range(3):
            m.add_var().build()
        v = m.add_var().build()
        self.assertEqual(v.id, 3)
        self.assertIsNone(v.name)
        self.assertEqual(v.display_name, "v3")
        self.assertEqual(str(v), "v3")
        self.assertEqual(str(2 * v), "2 v3")

    def test_value_semantics(self):
        self.assertEqual(Variable(1, "a"), Variable(1, "a"))
        self.assertNotEqual(Variable(1, "a"), Variable(2, "a"))
        self.assertEqual(len({Variable(1, "a"), Variable(1, "a")}), 1)

    def test_promotes_to_unit_term(self):
        m, x, y, z = build_vars()
        self.assertEqual(x.to_expression().terms, [(Fraction(1), x)])

    def test_operators_return_expressions(self):
        m, x, y, z = build_vars()
        for expr in (x + y, x - 1, 2 * x, x * 2, x / 2, -x, 1 - x, 3 + x):
            self.assertIsInstance(expr, Expression)

    def test_negation_negates(self):
        m, x, y, z = build_vars()
        self.assertEqual((-x).terms, [(Fraction(-1), x)])


class TestExpressionAlgebra(unittest.TestCase):
    def test_addition_concatenates(self):
        m, x, y, z = build_vars()
        e1 = 2 * x + 3
        e2 = y - 1 + x
        self.assertEqual((e1 + e2).terms, e1.terms + e2.terms)
        self.assertEqual((e2 + e1).terms, e2.terms + e1.terms)

    def test_no_merging(self):
        m, x, y, z = build_vars()
        expr = x + x + 1 + 2
        self.assertEqual(
            expr.terms,
            [
                (Fraction(1), x),
                (Fraction(1), x),
                (Fraction(1), None),
                (Fraction(2), None),
            ],
        )
        self.assertEqual(len(expr), 4)
        self.assertEqual(expr.variables(), [x, x])

    def test_operands_are_not_modified(self):
        m, x, y, z = build_vars()
        e1 = x + 1
        before = list(e1.terms)
        e1 + y
        e1 * 3
        -e1
        self.assertEqual(e1.terms, before)

    def test_reflected_addition_keeps_left_operand_first(self):
        m, x, y, z = build_vars()
        self.assertEqual(
            (5 + x).terms, [(Fraction(5), None), (Fraction(1), x)]
        )

    def test_subtraction(self):
        m, x, y, z = build_vars()
        self.assertEqual(
            (x - y).terms, [(Fraction(1), x), (Fraction(-1), y)]
        )
        self.assertEqual(
            (3 - x).terms, [(Fraction(3), None), (Fraction(-1), x)]
        )

    def test_double_negation(self):
        m, x, y, z = build_vars()
        expr = 2 * x - Fraction(1, 3) * y + 7
        self.assertEqual((-(-expr)).terms, expr.terms)

    def test_scaling(self):
        m, x, y, z = build_vars()
        expr = (2 * x + 3) * Fraction(1, 2)
        self.assertEqual(
            expr.terms, [(Fraction(1), x), (Fraction(3, 2), None)]
        )

    def test_fixed_width_scalars_join_the_model_field(self):
        m, x, y, z = build_vars()
        expr = x * Rational32(2**30) * 4
        [(coeff, var)] = expr.terms
        self.assertIs(type(coeff), Fraction)
        self.assertEqual(coeff, 2**32)
        self.assertEqual(var, x)

    def test_divide_then_scale_is_identity(self):
        m, x, y, z = build_vars()
        expr = 2 * x - 5 * y + Fraction(7, 3)
        for s in (Fraction(3, 7), Fraction(-2), 11):
            self.assertEqual(((expr / s) * s).terms, expr.terms)

    def test_division_by_zero(self):
        m, x, y, z = build_vars()
        with self.assertRaises(ZeroDivisionError):
            (x + 1) / 0

    def test_nonlinear_products_rejected(self):
        m, x, y, z = build_vars()
        with self.assertRaises(ExpressionTypeError):
            x * y
        with self.assertRaises(ExpressionTypeError):
            (x + 1) * (y + 1)
        with self.assertRaises(ExpressionTypeError):
            x * "2"

    def test_fields_do_not_mix(self):
        m, x, y, z = build_vars()
        f = Model(FLOAT)
        w = f.add_var().name("w").build()
        with self.assertRaises(ExpressionTypeError):
            x + w

    def test_constant_expression(self):
        expr = Expression.constant(4)
        self.assertEqual(expr.terms, [(Fraction(4), None)])
        self.assertEqual(Expression().terms, [])


class TestExpressionRendering(unittest.TestCase):
    def test_signs(self):
        m, x, y, z = build_vars()
        self.assertEqual(str(2 * x + 3 * y - 5), "2 x + 3 y - 5")
        self.assertEqual(str(-2 * x + y), "-2 x + 1 y")
        self.assertEqual(str(x - 2 * y + 0 * z), "1 x - 2 y + 0 z")

    def test_fractions(self):
        m, x, y, z = build_vars()
        self.assertEqual(str(x / 3 - Fraction(5, 2)), "1/3 x - 5/2")

    def test_leading_constant(self):
        m, x, y, z = build_vars()
        self.assertEqual(str(-4 + x), "-4 + 1 x")

    def test_empty(self):
        self.assertEqual(str(Expression()), "")

    def test_float_field(self):
        m = Model("float")
        x = m.add_var().name("x").build()
        self.assertEqual(str(0.5 * x + 2), "0.5 x + 2")
        self.assertEqual(str(x - 0.25), "1 x - 0.25")

    def test_float_negative_zero_renders_as_zero(self):
        m = Model("float")
        x = m.add_var().name("x").build()
        y = m.add_var().name("y").build()
        self.assertEqual(str(x + -0.0 * y), "1 x + 0 y")
        self.assertEqual(str(Expression([(1.0, x), (-0.0, None)], FLOAT)), "1 x + 0")


if __name__ == "__main__":
    unittest.main()
