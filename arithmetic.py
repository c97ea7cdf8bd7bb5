from __future__ import annotations
from typing import Optional, Tuple

import numpy as np

from number import DIGIT_DTYPE, DigitNumber, DomainError, normalize, require_same_base, require_terminating
from bigint import add_abs, compare_digits, mul_abs, sub_abs


def _scaled(x: DigitNumber, decimal_length: int) -> DigitNumber:
    """|x| * base**decimal_length as an integer; decimal_length >= x.decimal_length."""
    pad = np.zeros(decimal_length - x.decimal_length, dtype=DIGIT_DTYPE)
    return DigitNumber(x.base, np.concatenate([x.digits, pad]))

def _aligned(a: DigitNumber, b: DigitNumber) -> Tuple[DigitNumber, DigitNumber, int]:
    require_terminating(a, "decimal arithmetic")
    require_terminating(b, "decimal arithmetic")
    require_same_base((a, b))
    dec = max(a.decimal_length, b.decimal_length)
    return _scaled(a, dec), _scaled(b, dec), dec

def _with_point(n: DigitNumber, decimal_length: int, negative: bool) -> DigitNumber:
    """Put the radix point back `decimal_length` digits from the end of integer `n`."""
    digits = n.digits
    if len(digits) <= decimal_length:
        pad = np.zeros(decimal_length + 1 - len(digits), dtype=DIGIT_DTYPE)
        digits = np.concatenate([pad, digits])
    return normalize(DigitNumber(n.base, digits, negative, decimal_length))


def compare_abs(a: DigitNumber, b: DigitNumber) -> int:
    """Compare |a| and |b| (-1, 0, 1), padding the shorter fraction with zeros."""
    x, y, _ = _aligned(a, b)
    return compare_digits(x.digits, y.digits)

def add_same_sign(a: DigitNumber, b: DigitNumber) -> DigitNumber:
    """a + b for operands of the same sign; the result keeps that sign."""
    x, y, dec = _aligned(a, b)
    return _with_point(add_abs(x, y), dec, a.is_negative)

def sub_same_sign_abs(a: DigitNumber, b: DigitNumber, negative: bool) -> DigitNumber:
    """|a| - |b| carrying sign `negative`; needs |a| >= |b|."""
    x, y, dec = _aligned(a, b)
    return _with_point(sub_abs(x, y), dec, negative)


def number_add(a: Optional[DigitNumber], b: Optional[DigitNumber]) -> DigitNumber:
    """
    Signed sum of two terminating numbers in the same base.

    Raises:
        DomainError: if an operand is missing, the bases differ, or an operand
            has a repeating block (use rational.exact_add for those)
    """
    if a is None or b is None:
        raise DomainError("number_add got a missing operand")
    if a.base != b.base:
        raise DomainError(f"number_add needs operands in one base, got {a.base} and {b.base}")
    require_terminating(a, "number_add")
    require_terminating(b, "number_add")

    if a.is_negative == b.is_negative:
        return add_same_sign(a, b)
    c = compare_abs(a, b)
    if c == 0:
        return DigitNumber.zero(a.base)
    if c > 0:
        return sub_same_sign_abs(a, b, a.is_negative)
    return sub_same_sign_abs(b, a, b.is_negative)

def number_negate(a: DigitNumber) -> DigitNumber:
    return a.negated()

def number_sub(a: DigitNumber, b: DigitNumber) -> DigitNumber:
    if b is None:
        raise DomainError("number_sub got a missing operand")
    return number_add(a, b.negated())

def number_mul(a: DigitNumber, b: DigitNumber) -> DigitNumber:
    """Product of two terminating numbers; fraction lengths add up."""
    require_terminating(a, "number_mul")
    require_terminating(b, "number_mul")
    require_same_base((a, b))
    product = mul_abs(DigitNumber(a.base, a.digits), DigitNumber(b.base, b.digits))
    return _with_point(product, a.decimal_length + b.decimal_length, a.is_negative != b.is_negative)
