from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from number import DEFAULT_BASE, DigitNumber, DomainError, check_base, glyph_to_value, normalize

BASE_SEPARATOR = "#"


class MalformedLiteral(ValueError):
    def __init__(self, reason: str, position: int):
        super().__init__(f"{reason} at position {position}")
        self.reason = reason
        self.position = position


class ScanState(Enum):
    START = "start"
    SIGN = "sign"
    INTEGER = "integer"
    POINT = "point"
    FRACTION = "fraction"
    REPEAT_OPEN = "repeat_open"
    REPEATING = "repeating"
    CLOSED = "closed"

ACCEPTING_STATES = frozenset({ScanState.INTEGER, ScanState.FRACTION, ScanState.CLOSED})

_END_OF_INPUT_ERRORS = {
    ScanState.START: "empty literal",
    ScanState.SIGN: "sign without digits",
    ScanState.POINT: "radix point without digits after it",
    ScanState.REPEAT_OPEN: "unclosed repeating block",
    ScanState.REPEATING: "unclosed repeating block",
}


@dataclass
class DigitPlan:
    """Validated layout of a literal: digit values plus where the point and the repeating block fall."""
    digits: List[int] = field(default_factory=list)
    is_negative: bool = False
    decimal_length: int = 0
    repeating_length: int = 0


def step(state: ScanState, ch: str, position: int, base: int, plan: DigitPlan) -> ScanState:
    """
    Consume one character. Returns the next state, or raises MalformedLiteral
    naming the rule `ch` breaks.
    """
    if state is ScanState.CLOSED:
        raise MalformedLiteral(f"unexpected {ch!r} after closing ')'", position)

    if ch == "-":
        if state is ScanState.START:
            plan.is_negative = True
            return ScanState.SIGN
        if state is ScanState.SIGN:
            raise MalformedLiteral("duplicate '-'", position)
        raise MalformedLiteral("'-' is only allowed as the first character", position)

    if ch == ".":
        if state is ScanState.INTEGER:
            return ScanState.POINT
        if state in (ScanState.START, ScanState.SIGN):
            raise MalformedLiteral("radix point before any digit", position)
        raise MalformedLiteral("more than one radix point", position)

    if ch == "(":
        if state in (ScanState.POINT, ScanState.FRACTION):
            return ScanState.REPEAT_OPEN
        if state in (ScanState.REPEAT_OPEN, ScanState.REPEATING):
            raise MalformedLiteral("nested '('", position)
        raise MalformedLiteral("repeating block before the radix point", position)

    if ch == ")":
        if state is ScanState.REPEATING:
            return ScanState.CLOSED
        if state is ScanState.REPEAT_OPEN:
            raise MalformedLiteral("empty repeating block", position)
        raise MalformedLiteral("')' without matching '('", position)

    value = glyph_to_value(ch)
    if value is None:
        raise MalformedLiteral(f"invalid character {ch!r}", position)
    if value >= base:
        raise MalformedLiteral(f"digit {ch!r} out of range for base {base}", position)

    plan.digits.append(value)
    if state in (ScanState.START, ScanState.SIGN, ScanState.INTEGER):
        return ScanState.INTEGER
    plan.decimal_length += 1
    if state in (ScanState.POINT, ScanState.FRACTION):
        return ScanState.FRACTION
    plan.repeating_length += 1
    return ScanState.REPEATING

def finish(state: ScanState, position: int) -> None:
    if state not in ACCEPTING_STATES:
        raise MalformedLiteral(_END_OF_INPUT_ERRORS[state], position)

def scan(text: str, base: int, offset: int = 0) -> DigitPlan:
    plan = DigitPlan()
    state = ScanState.START
    for i, ch in enumerate(text):
        state = step(state, ch, offset + i, base, plan)
    finish(state, offset + len(text))
    return plan


def parse(text: str, base: int = DEFAULT_BASE) -> DigitNumber:
    """
    Parse a number body such as "-1A.3(45)" in `base` (no "base#" prefix).
    The result is normalized. Raises MalformedLiteral on any structural problem.
    """
    base = check_base(base)
    plan = scan(text, base)
    return normalize(DigitNumber(base, plan.digits, plan.is_negative,
                                 plan.decimal_length, plan.repeating_length))

def split_base_prefix(text: str, default_base: int = DEFAULT_BASE) -> Tuple[int, str, int]:
    """Returns (base, body, offset of body in text) for a literal with an optional "base#" prefix."""
    if BASE_SEPARATOR not in text:
        return check_base(default_base), text, 0
    prefix, body = text.split(BASE_SEPARATOR, 1)
    if not prefix or any(c not in "0123456789" for c in prefix):
        raise MalformedLiteral(f"invalid base prefix {prefix!r}", 0)
    try:
        base = check_base(int(prefix))
    except DomainError as e:
        raise MalformedLiteral(str(e), 0) from e
    return base, body, len(prefix) + 1

def parse_literal(text: str, default_base: int = DEFAULT_BASE) -> DigitNumber:
    """Parse a full literal, e.g. "16#-1A.3(45)"; `default_base` applies when there is no prefix."""
    base, body, offset = split_base_prefix(text, default_base)
    plan = scan(body, base, offset)
    return normalize(DigitNumber(base, plan.digits, plan.is_negative,
                                 plan.decimal_length, plan.repeating_length))

def try_parse(text: str, base: int = DEFAULT_BASE) -> Tuple[Optional[DigitNumber], Optional[MalformedLiteral]]:
    try:
        return parse(text, base), None
    except MalformedLiteral as e:
        return None, e
