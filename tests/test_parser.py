import unittest
from pyparsing import ParseException

from btcalc.expr_parser import Parser, parse_program


class TestParser(unittest.TestCase):
    def test_ternary_literal(self):
        result = parse_program("t'+0--'")
        self.assertEqual(result, [{
            'type': 'expression',
            'value': {'type': 'ternary', 'value': '+0--'},
            'line': 0,
        }])

    def test_assignment(self):
        result = parse_program("x = t'+0--' * 3")
        self.assertEqual(len(result), 1)
        stmt = result[0]
        self.assertEqual(stmt['type'], 'assignment')
        self.assertEqual(stmt['identifier'], 'x')
        self.assertEqual(stmt['value'], {
            'type': 'gen_expr',
            'left': {'type': 'ternary', 'value': '+0--'},
            'op': '*',
            'right': {'type': 'integer', 'value': 3},
        })

    def test_precedence(self):
        """Multiplication binds tighter than addition, which binds tighter than shifts"""
        expr = parse_program("1 + 2 * 3 << 1")[0]['value']
        self.assertEqual(expr['op'], '<<')
        self.assertEqual(expr['left']['op'], '+')
        self.assertEqual(expr['left']['right']['op'], '*')

    def test_left_associativity(self):
        expr = parse_program("10 - 4 - 3")[0]['value']
        self.assertEqual(expr['op'], '-')
        self.assertEqual(expr['left']['op'], '-')
        self.assertEqual(expr['left']['left'], {'type': 'integer', 'value': 10})
        self.assertEqual(expr['right'], {'type': 'integer', 'value': 3})

    def test_parentheses(self):
        expr = parse_program("(1 + 2) * 3")[0]['value']
        self.assertEqual(expr['op'], '*')
        self.assertEqual(expr['left']['op'], '+')

    def test_unary_minus(self):
        expr = parse_program("-x")[0]['value']
        self.assertEqual(expr, {'type': 'un_expr', 'op': '-', 'inner': {'type': 'identifier', 'value': 'x'}})
        expr = parse_program("--x")[0]['value']
        self.assertEqual(expr['inner']['type'], 'un_expr')
        expr = parse_program("5 - -3")[0]['value']
        self.assertEqual(expr['op'], '-')
        self.assertEqual(expr['right']['type'], 'un_expr')

    def test_comparison_is_not_assignment(self):
        stmt = parse_program("x == 1")[0]
        self.assertEqual(stmt['type'], 'expression')
        self.assertEqual(stmt['value']['op'], '==')

    def test_comparison_operators(self):
        for op in ("==", "!=", "<", "<=", ">", ">="):
            expr = parse_program(f"a {op} b")[0]['value']
            self.assertEqual(expr['op'], op)

    def test_shift_is_not_comparison(self):
        expr = parse_program("a << 2 < b")[0]['value']
        self.assertEqual(expr['op'], '<')
        self.assertEqual(expr['left']['op'], '<<')

    def test_multiple_statements_and_lines(self):
        code = """
        a = 5; b = t'+-'
        # a comment line
        a * b  # trailing comment
        """
        result = parse_program(code)
        self.assertEqual([s['type'] for s in result], ['assignment', 'assignment', 'expression'])
        self.assertEqual([s['line'] for s in result], [1, 1, 3])

    def test_empty_ternary_literal(self):
        result = parse_program("t''")
        self.assertEqual(result[0]['value'], {'type': 'ternary', 'value': ''})

    def test_identifier_starting_with_t(self):
        expr = parse_program("total + t")[0]['value']
        self.assertEqual(expr['left'], {'type': 'identifier', 'value': 'total'})
        self.assertEqual(expr['right'], {'type': 'identifier', 'value': 't'})

    def test_parser_is_reusable(self):
        parser = Parser()
        self.assertEqual(len(parser.parse_program("1")), 1)
        self.assertEqual(len(parser.parse_program("1; 2")), 2)

    def test_invalid_syntax(self):
        for code in ("x = ", "1 +", "t'+2'", "(1 + 2", "= 3", "x = = 1"):
            with self.assertRaises(ParseException, msg=code):
                parse_program(code)


if __name__ == '__main__':
    unittest.main()
