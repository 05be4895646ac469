from typing import List

from pyparsing import ParseException

from btcalc.evaluator import EvaluationError, Evaluator
from btcalc.expr_parser import parse_program
from btcalc.formatter import Formatter
from ternary.number import number_type


def demo(width: int):
    num_type = number_type(width)
    mynum = num_type("+0--")
    mynum2 = num_type("++-0")

    print(mynum)
    print(mynum2)

    print(mynum + mynum2)
    print(mynum - mynum2)
    print(mynum * mynum2)


def report_errors(errors: List[Exception]):
    print("Found errors:")
    for err in errors:
        print("-", err)


def evaluate(statements: List[str], width: int) -> bool:
    try:
        parsed = parse_program('\n'.join(statements))
        results = Evaluator(width).run(parsed)
    except (ParseException, EvaluationError) as e:
        report_errors([e])
        return False
    for value in results:
        print(value)
    return True


def convert(value: str, source: str, width: int) -> bool:
    num_type = number_type(width)
    if source == 'ternary':
        print(num_type(value))
        return True
    try:
        number = num_type.from_int(int(value))
    except ValueError:
        report_errors([ValueError(f"Not a decimal integer: {value}")])
        return False
    print(number)
    return True


def format_statements(statements: List[str]) -> bool:
    try:
        parsed = parse_program('\n'.join(statements))
    except ParseException as e:
        report_errors([e])
        return False
    print(Formatter().format(parsed), end='')
    return True


def repl(width: int):
    evaluator = Evaluator(width)
    while True:
        try:
            line = input("> ")
        except EOFError:
            print()
            break
        if not line.strip():
            continue
        try:
            for value in evaluator.run(parse_program(line)):
                print(value)
        except (ParseException, EvaluationError) as e:
            print(f"Exception: {e}")


def main():
    import argparse

    arg_parser = argparse.ArgumentParser(description="Balanced ternary calculator")
    arg_parser.add_argument("--width", type=int, default=8, help="Number of trits per number (default: 8)")
    subparsers = arg_parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("demo", help="Print a few example computations")

    eval_parser = subparsers.add_parser("eval", help="Evaluate statements and print every expression value")
    eval_parser.add_argument("statements", nargs="+", help="Statements such as \"x = t'+0--'\" or \"x * 3\"")

    convert_parser = subparsers.add_parser(
        "convert", help="Convert between decimal and balanced ternary (put '--' before values starting with '--')"
    )
    convert_parser.add_argument("value", help="Value to convert")
    convert_parser.add_argument(
        "--from", dest="source", choices=["decimal", "ternary"], default="decimal", help="Encoding of the value"
    )

    format_parser = subparsers.add_parser("format", help="Print statements in canonical form")
    format_parser.add_argument("statements", nargs="+", help="Statements to format")

    subparsers.add_parser("repl", help="Read statements from stdin and evaluate them")

    args = arg_parser.parse_args()
    if args.width <= 0:
        arg_parser.error("--width must be positive")

    success = True
    if args.command == "demo":
        demo(args.width)
    elif args.command == "eval":
        success = evaluate(args.statements, args.width)
    elif args.command == "convert":
        success = convert(args.value, args.source, args.width)
    elif args.command == "format":
        success = format_statements(args.statements)
    elif args.command == "repl":
        repl(args.width)

    if not success:
        raise SystemExit(1)


if __name__ == '__main__':
    main()
