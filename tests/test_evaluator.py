import unittest

from btcalc.evaluator import (
    Assignment, EvaluationError, Evaluator, ExpressionStatement, GeneralExpr, IntegerLiteral,
    TernaryLiteral, UndefinedVariableError, UnknownNodeError, build_statement,
)
from btcalc.expr_parser import parse_program
from ternary.number import Number8, TernaryZeroDivisionError, number_type


class TestEvaluator(unittest.TestCase):
    def _run(self, code, width=8):
        """Helper method to parse and evaluate code, returning plain integers."""
        return [v.to_int() for v in Evaluator(width).run(parse_program(code))]

    def test_build_statement(self):
        stmt = build_statement(parse_program("x = t'+0--' * 3")[0])
        self.assertEqual(stmt, Assignment(
            'x', GeneralExpr(TernaryLiteral('+0--'), '*', IntegerLiteral(3)), 0))
        stmt = build_statement(parse_program("7")[0])
        self.assertEqual(stmt, ExpressionStatement(IntegerLiteral(7), 0))

    def test_unknown_node(self):
        with self.assertRaises(UnknownNodeError):
            build_statement({'type': 'while_expr'})

    def test_demo_computations(self):
        code = """
        a = t'+0--'
        b = t'++-0'
        a + b
        a - b
        a * b
        """
        results = Evaluator().run(parse_program(code))
        self.assertEqual(results, [Number8("+-0+-"), Number8("-0-"), Number8("+00+0+0")])

    def test_arithmetic(self):
        self.assertEqual(self._run("1 + 2 * 3"), [7])
        self.assertEqual(self._run("(1 + 2) * 3"), [9])
        self.assertEqual(self._run("10 - 4 - 3"), [3])
        self.assertEqual(self._run("-5 + 2"), [-3])
        self.assertEqual(self._run("t'+' << 2"), [9])

    def test_division_truncates(self):
        self.assertEqual(self._run("59 / 12; -59 / 12; 59 / -12; -59 / -12"), [4, -4, -4, 4])
        self.assertEqual(self._run("59 % 12; -59 % 12"), [11, -11])

    def test_comparisons(self):
        self.assertEqual(self._run("3 < 5; 3 > 5; 4 == 4; 4 != 4; t'-' <= 0; 0 >= t'+'"), [1, 0, 1, 0, 1, 0])

    def test_variables(self):
        self.assertEqual(self._run("x = 5\ny = x * x\ny - x"), [20])

    def test_variables_are_copied(self):
        evaluator = Evaluator()
        evaluator.run(parse_program("x = 5; y = x; y = y + 1"))
        self.assertEqual(evaluator.variables['x'].to_int(), 5)
        self.assertEqual(evaluator.variables['y'].to_int(), 6)

    def test_width_controls_wraparound(self):
        self.assertEqual(self._run("3280 + 1"), [-3280])
        self.assertEqual(self._run("3280 + 1", width=9), [3281])
        self.assertIs(Evaluator(9).number, number_type(9))

    def test_undefined_variable(self):
        with self.assertRaises(UndefinedVariableError) as ctx:
            self._run("a = 1\nb + a")
        self.assertEqual(ctx.exception.var_name, 'b')
        self.assertEqual(ctx.exception.line, 1)
        self.assertIn("line 2", str(ctx.exception))

    def test_division_by_zero(self):
        with self.assertRaises(EvaluationError) as ctx:
            self._run("5 / 0")
        self.assertIsInstance(ctx.exception.__cause__, TernaryZeroDivisionError)
        self.assertIn("Attempt to divide by zero", str(ctx.exception))
        with self.assertRaises(EvaluationError):
            self._run("5 % (3 - 3)")

    def test_negative_shift(self):
        with self.assertRaises(EvaluationError):
            self._run("1 << -1")


if __name__ == '__main__':
    unittest.main()
