from __future__ import annotations
from typing import Callable, Dict, Optional, TextIO

import sys

from number import DEFAULT_BASE, DigitNumber, DomainError, check_base, require_same_base
from parsing import MalformedLiteral, parse_literal
from arithmetic import number_mul
from rational import exact_add, from_number, rational_div, rational_mul, rational_to_number
from formats import format_number

EXIT_COMMAND = "exit"


class UsageError(ValueError):
    pass


def _sub(a: DigitNumber, b: DigitNumber) -> DigitNumber:
    return exact_add(a, b.negated())

def _mul(a: DigitNumber, b: DigitNumber) -> DigitNumber:
    if a.is_terminating and b.is_terminating:
        return number_mul(a, b)
    require_same_base((a, b))
    return rational_to_number(rational_mul(from_number(a), from_number(b)))

def _div(a: DigitNumber, b: DigitNumber) -> DigitNumber:
    require_same_base((a, b))
    return rational_to_number(rational_div(from_number(a), from_number(b)))

OPERATORS: Dict[str, Callable[[DigitNumber, DigitNumber], DigitNumber]] = {
    "+": exact_add,
    "-": _sub,
    "*": _mul,
    "/": _div,
}


def evaluate(line: str, default_base: int = DEFAULT_BASE) -> Optional[str]:
    """
    One shell line -> output text. Either "<op> <literal> <literal>" with op in
    + - * /, or a single literal, which is echoed in normalized form.
    Returns None for a blank line. Errors propagate to the caller.
    """
    tokens = line.split()
    if not tokens:
        return None
    if tokens[0] in OPERATORS:
        if len(tokens) != 3:
            raise UsageError(f"'{tokens[0]}' takes exactly two operands")
        a = parse_literal(tokens[1], default_base)
        b = parse_literal(tokens[2], default_base)
        return format_number(OPERATORS[tokens[0]](a, b))
    if len(tokens) != 1:
        raise UsageError(f"unexpected input {line.strip()!r}")
    return format_number(parse_literal(tokens[0], default_base))

def run(stream: TextIO, default_base: int = DEFAULT_BASE, out: Optional[TextIO] = None) -> None:
    for line in stream:
        if line.strip() == EXIT_COMMAND:
            break
        try:
            result = evaluate(line, default_base)
        except (MalformedLiteral, DomainError, UsageError) as e:
            print(f"Error: {e}", file=out)
            continue
        if result is not None:
            print(result, file=out)

def main(argv=None) -> int:
    argv = sys.argv if argv is None else argv
    if len(argv) > 2:
        print(f"Usage: {argv[0]} [default_base]")
        return 1
    default_base = DEFAULT_BASE
    if len(argv) == 2:
        try:
            default_base = check_base(int(argv[1]))
        except ValueError:
            print(f"Error: <default_base> must be an integer in [2, 36], got {argv[1]!r}")
            return 1
    run(sys.stdin, default_base)
    return 0

if __name__ == "__main__":
    sys.exit(main())
