import string

from pyparsing import (
    DelimitedList, Empty, Literal, OpAssoc, ParserElement, Regex, Suppress, Word, infix_notation, one_of,
)

EQ = Suppress(Literal('=') + ~Literal('='))


class Parser:
    def __init__(self):
        self.statements = self._build()

    @staticmethod
    def leaf(kind, convert):
        """Parse action wrapping a single token into a {type, value} node."""
        return lambda tokens: {'type': kind, 'value': convert(tokens[0])}

    def make_ternary(self, tokens):
        return {'type': 'ternary', 'value': tokens['digits']}

    def enrich_binary_expr(self, tokens):
        token_list = list(tokens[0])

        # Operators of one precedence level come as a flat chain; fold it to the left.
        result = token_list[0]
        for i in range(1, len(token_list), 2):
            result = {
                'type': 'gen_expr',
                'left': result,
                'op': str(token_list[i]),
                'right': token_list[i + 1]
            }
        return result

    def enrich_negation(self, tokens):
        sign, operand = tokens[0]
        return {'type': 'un_expr', 'op': str(sign), 'inner': operand}

    def enrich_assignment(self, tokens):
        return {
            'type': 'assignment',
            'identifier': tokens[0]['value'],
            'value': tokens[1]
        }

    def enrich_expression(self, tokens):
        return {
            'type': 'expression',
            'value': tokens[0]
        }

    def _build(self) -> ParserElement:
        ternary = Regex(r"t'(?P<digits>[-+0]*)'")
        ternary.set_parse_action(self.make_ternary)
        integer = Regex(r'\d+')
        integer.set_parse_action(self.leaf('integer', int))
        identifier = Word(string.ascii_letters + '_', string.ascii_letters + string.digits + '_')
        identifier.set_parse_action(self.leaf('identifier', str))
        atom = ternary | integer | identifier
        expr = infix_notation(atom, [
            (Literal('-'), 1, OpAssoc.RIGHT, self.enrich_negation),
            (one_of("* / %"), 2, OpAssoc.LEFT, self.enrich_binary_expr),
            (one_of("+ -"), 2, OpAssoc.LEFT, self.enrich_binary_expr),
            (Literal('<<'), 2, OpAssoc.LEFT, self.enrich_binary_expr),
            (one_of("== != <= >= < >"), 2, OpAssoc.LEFT, self.enrich_binary_expr),
        ])
        assignment = identifier + EQ + expr
        assignment.set_parse_action(self.enrich_assignment)
        expression = Empty() + expr
        expression.set_parse_action(self.enrich_expression)
        statement = assignment | expression
        return DelimitedList(statement, delim=";")

    def parse_line(self, line: str) -> list:
        return list(self.statements.parse_string(line, parse_all=True))

    def parse_program(self, text: str) -> list:
        result = []
        for line_no, line in enumerate(text.split('\n')):
            line = line.split('#', 1)[0]
            if not line.strip():
                continue
            for statement in self.parse_line(line):
                statement['line'] = line_no
                result.append(statement)
        return result


def parse_program(text: str) -> list:
    """Convenience function to parse a program."""
    return Parser().parse_program(text)
