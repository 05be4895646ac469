PRECEDENCE = {
    '==': 1, '!=': 1, '<': 1, '<=': 1, '>': 1, '>=': 1,
    '<<': 2,
    '+': 3, '-': 3,
    '*': 4, '/': 4, '%': 4,
}
UNARY_PRECEDENCE = 5


class Formatter:
    def __init__(self, spaces_around_operators=True):
        self.spaces_around_operators = spaces_around_operators

    def _precedence(self, expr):
        if expr['type'] == 'gen_expr':
            return PRECEDENCE[expr['op']]
        elif expr['type'] == 'un_expr':
            return UNARY_PRECEDENCE
        return UNARY_PRECEDENCE + 1

    def _wrap(self, expr, min_precedence):
        text = self.format_expression(expr)
        if self._precedence(expr) < min_precedence:
            return f"({text})"
        return text

    def format_expression(self, expr):
        """Format an expression, adding parentheses only where precedence needs them"""
        expr_type = expr['type']

        if expr_type == 'identifier':
            return expr['value']
        elif expr_type == 'integer':
            return str(expr['value'])
        elif expr_type == 'ternary':
            return f"t'{expr['value']}'"
        elif expr_type == 'gen_expr':
            precedence = PRECEDENCE[expr['op']]
            # Operators are left-associative, so an equal-precedence right operand keeps its parentheses.
            left = self._wrap(expr['left'], precedence)
            right = self._wrap(expr['right'], precedence + 1)
            if self.spaces_around_operators:
                return f"{left} {expr['op']} {right}"
            return f"{left}{expr['op']}{right}"
        elif expr_type == 'un_expr':
            return f"{expr['op']}{self._wrap(expr['inner'], UNARY_PRECEDENCE)}"
        else:
            raise ValueError(f"Unknown expression type: {expr_type}")

    def format_statement(self, stmt):
        stmt_type = stmt['type']

        if stmt_type == 'assignment':
            return f"{stmt['identifier']} = {self.format_expression(stmt['value'])}"
        elif stmt_type == 'expression':
            return self.format_expression(stmt['value'])
        else:
            raise ValueError(f"Unknown statement type: {stmt_type}")

    def format(self, parsed_text: list) -> str:
        """Format a list of parsed statements, one per line"""
        return ''.join(self.format_statement(stmt) + '\n' for stmt in parsed_text)
