from dataclasses import dataclass
from typing import Dict, List, Optional, Type, Union

from ternary.number import AbstractNumber, TernaryZeroDivisionError, number_type


# Expression classes
@dataclass
class TernaryLiteral:
    """Represents a balanced ternary literal such as t'+0--'."""
    digits: str


@dataclass
class IntegerLiteral:
    """Represents a decimal integer literal."""
    value: int


@dataclass
class IdentifierExpr:
    """Represents an identifier expression."""
    name: str


@dataclass
class GeneralExpr:
    """Represents a binary operation."""
    left: 'Expression'
    op: str
    right: 'Expression'


@dataclass
class UnaryExpr:
    """Represents a unary expression."""
    op: str  # currently "-"
    operand: 'Expression'


Expression = Union[TernaryLiteral, IntegerLiteral, IdentifierExpr, GeneralExpr, UnaryExpr]


# Statement classes
@dataclass
class Assignment:
    target: str
    value: Expression
    line: Optional[int] = None


@dataclass
class ExpressionStatement:
    value: Expression
    line: Optional[int] = None


Statement = Union[Assignment, ExpressionStatement]


class EvaluationError(Exception):
    """Base class for evaluation errors."""
    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        super().__init__(message + (f" (line {line + 1})" if line is not None else ""))


class UndefinedVariableError(EvaluationError):
    """Raised when a variable is used before it is assigned."""
    def __init__(self, var_name: str, line: Optional[int] = None):
        self.var_name = var_name
        super().__init__(f"Undefined variable: {var_name}", line)


class UnknownNodeError(EvaluationError):
    """Raised when the parsed tree holds a node the evaluator does not know."""
    def __init__(self, node_type: str):
        self.node_type = node_type
        super().__init__(f"Unknown node type: {node_type}")


def build_expression(node: Dict) -> Expression:
    node_type = node.get('type')
    if node_type == 'ternary':
        return TernaryLiteral(node['value'])
    elif node_type == 'integer':
        return IntegerLiteral(node['value'])
    elif node_type == 'identifier':
        return IdentifierExpr(node['value'])
    elif node_type == 'gen_expr':
        return GeneralExpr(build_expression(node['left']), node['op'], build_expression(node['right']))
    elif node_type == 'un_expr':
        return UnaryExpr(node['op'], build_expression(node['inner']))
    raise UnknownNodeError(str(node_type))


def build_statement(node: Dict) -> Statement:
    node_type = node.get('type')
    if node_type == 'assignment':
        return Assignment(node['identifier'], build_expression(node['value']), node.get('line'))
    elif node_type == 'expression':
        return ExpressionStatement(build_expression(node['value']), node.get('line'))
    raise UnknownNodeError(str(node_type))


class Evaluator:
    """Evaluates parsed statements over numbers of one fixed width."""

    def __init__(self, width: int = 8):
        self.number: Type[AbstractNumber] = number_type(width)
        self.variables: Dict[str, AbstractNumber] = {}

    def _truth(self, value: bool) -> AbstractNumber:
        return self.number.one() if value else self.number.zero()

    def evaluate_expression(self, expr: Expression, line: Optional[int] = None) -> AbstractNumber:
        if isinstance(expr, TernaryLiteral):
            return self.number(expr.digits)
        elif isinstance(expr, IntegerLiteral):
            return self.number.from_int(expr.value)
        elif isinstance(expr, IdentifierExpr):
            if expr.name not in self.variables:
                raise UndefinedVariableError(expr.name, line)
            return self.variables[expr.name].copy()
        elif isinstance(expr, UnaryExpr):
            return -self.evaluate_expression(expr.operand, line)

        left = self.evaluate_expression(expr.left, line)
        if expr.op == '<<':
            # The shift count is the plain value of the right operand.
            positions = self.evaluate_expression(expr.right, line).to_int()
            if positions < 0:
                raise EvaluationError(f"Negative shift count: {positions}", line)
            return left << positions
        right = self.evaluate_expression(expr.right, line)
        if expr.op == '+':
            return left + right
        elif expr.op == '-':
            return left - right
        elif expr.op == '*':
            return left * right
        elif expr.op in ('/', '%'):
            try:
                return left / right if expr.op == '/' else left % right
            except TernaryZeroDivisionError as e:
                raise EvaluationError(str(e), line) from e
        elif expr.op == '==':
            return self._truth(left == right)
        elif expr.op == '!=':
            return self._truth(left != right)
        elif expr.op == '<':
            return self._truth(left < right)
        elif expr.op == '<=':
            return self._truth(left <= right)
        elif expr.op == '>':
            return self._truth(left > right)
        elif expr.op == '>=':
            return self._truth(left >= right)
        raise EvaluationError(f"Unsupported operator: {expr.op}", line)

    def execute(self, statement: Statement) -> Optional[AbstractNumber]:
        """Runs one statement. Expression statements return their value, assignments return None."""
        value = self.evaluate_expression(statement.value, statement.line)
        if isinstance(statement, Assignment):
            self.variables[statement.target] = value
            return None
        return value

    def run(self, parsed_program: List[Dict]) -> List[AbstractNumber]:
        results = []
        for node in parsed_program:
            value = self.execute(build_statement(node))
            if value is not None:
                results.append(value)
        return results
