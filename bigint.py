"""
Unsigned digit-sequence arithmetic on integer DigitNumbers.

Every operand must be an integer (no radix point, no repeating block) and all
operands of one call must share a base. Signs are ignored: these functions work
on magnitudes, and callers decide what sign the result carries.
"""
from __future__ import annotations
from typing import List, Tuple

import numpy as np

from number import DigitNumber, DomainError, DivisionByZero, normalize, require_same_base


def _require_integers(*numbers: DigitNumber) -> int:
    for n in numbers:
        if not n.is_integer:
            raise DomainError("integer kernel needs operands without a radix point")
    return require_same_base(numbers)

def _strip(digits: np.ndarray) -> np.ndarray:
    nz = np.flatnonzero(digits)
    return digits[nz[0]:] if nz.size else digits[len(digits) - 1:]

def _aligned_lsb(a: np.ndarray, b: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Both digit runs, least significant first, zero-padded to a common length."""
    n = max(len(a), len(b))
    x = np.zeros(n, dtype=np.int64)
    y = np.zeros(n, dtype=np.int64)
    x[:len(a)] = a[::-1]
    y[:len(b)] = b[::-1]
    return x, y

def _carry(columns: np.ndarray, base: int) -> Tuple[List[int], int]:
    """
    Resolve column totals (least significant first) into digits in [0, base).
    Negative columns borrow; the final carry is returned (negative means the
    subtrahend was larger).
    """
    out: List[int] = []
    carry = 0
    for c in columns.tolist():
        carry, d = divmod(c + carry, base)
        out.append(d)
    return out, carry

def _spill(out: List[int], carry: int, base: int) -> List[int]:
    while carry:
        carry, d = divmod(carry, base)
        out.append(d)
    return out

def _from_lsb(base: int, digits_lsb: List[int], negative: bool = False) -> DigitNumber:
    return normalize(DigitNumber(base, digits_lsb[::-1], is_negative=negative))


def compare_digits(a: np.ndarray, b: np.ndarray) -> int:
    """Compare two integer digit runs (most significant first) as magnitudes: -1, 0 or 1."""
    a = _strip(a)
    b = _strip(b)
    if len(a) != len(b):
        return -1 if len(a) < len(b) else 1
    diff = np.flatnonzero(a != b)
    if diff.size == 0:
        return 0
    i = diff[0]
    return -1 if a[i] < b[i] else 1

def compare_integers(a: DigitNumber, b: DigitNumber) -> int:
    _require_integers(a, b)
    return compare_digits(a.digits, b.digits)


def add_abs(a: DigitNumber, b: DigitNumber) -> DigitNumber:
    base = _require_integers(a, b)
    x, y = _aligned_lsb(a.digits, b.digits)
    out, carry = _carry(x + y, base)
    return _from_lsb(base, _spill(out, carry, base))

def sub_abs(a: DigitNumber, b: DigitNumber, negative: bool = False) -> DigitNumber:
    """|a| - |b| with the sign `negative` stamped on a non-zero result. Needs |a| >= |b|."""
    base = _require_integers(a, b)
    x, y = _aligned_lsb(a.digits, b.digits)
    out, borrow = _carry(x - y, base)
    if borrow:
        raise DomainError("sub_abs needs |a| >= |b|")
    return _from_lsb(base, out, negative)

def mul_digit(a: DigitNumber, d: int) -> DigitNumber:
    """|a| times a single digit value 0 <= d < base."""
    base = _require_integers(a)
    if not 0 <= d < base:
        raise DomainError(f"{d} is not a digit of base {base}")
    if d == 0 or a.is_zero:
        return DigitNumber.zero(base)
    out, carry = _carry(a.digits[::-1].astype(np.int64) * d, base)
    return _from_lsb(base, _spill(out, carry, base))

def mul_abs(a: DigitNumber, b: DigitNumber) -> DigitNumber:
    base = _require_integers(a, b)
    if a.is_zero or b.is_zero:
        return DigitNumber.zero(base)
    # convolving the digit runs sums every digit product into its column
    columns = np.convolve(a.digits.astype(np.int64), b.digits.astype(np.int64))
    out, carry = _carry(columns[::-1], base)
    return _from_lsb(base, _spill(out, carry, base))


def _bring_down(remainder: DigitNumber, digit: int) -> DigitNumber:
    return normalize(DigitNumber(remainder.base, np.append(remainder.digits, digit)))

def _quotient_digit(remainder: DigitNumber, divisor: DigitNumber) -> Tuple[int, DigitNumber]:
    """Largest d in [0, base) with d*divisor <= remainder, by binary search; returns (d, d*divisor)."""
    lo, hi = 0, divisor.base - 1
    while lo < hi:
        mid = (lo + hi + 1) // 2
        if compare_digits(mul_digit(divisor, mid).digits, remainder.digits) <= 0:
            lo = mid
        else:
            hi = mid - 1
    return lo, mul_digit(divisor, lo)

def divmod_abs(numerator: DigitNumber, denominator: DigitNumber) -> Tuple[DigitNumber, DigitNumber]:
    """
    Long division of |numerator| by |denominator|: returns (quotient, remainder)
    with quotient*denominator + remainder == numerator and remainder < denominator.

    Raises:
        DivisionByZero: if the denominator is zero
    """
    base = _require_integers(numerator, denominator)
    if denominator.is_zero:
        raise DivisionByZero("division by zero in divmod_abs")
    divisor = denominator.magnitude()
    if compare_digits(numerator.digits, divisor.digits) < 0:
        return DigitNumber.zero(base), numerator.magnitude()

    quotient: List[int] = []
    remainder = DigitNumber.zero(base)
    for digit in numerator.digits.tolist():
        remainder = _bring_down(remainder, digit)
        d, product = _quotient_digit(remainder, divisor)
        if d:
            remainder = sub_abs(remainder, product)
        quotient.append(d)
    return normalize(DigitNumber(base, quotient)), remainder

def gcd_abs(a: DigitNumber, b: DigitNumber) -> DigitNumber:
    """Euclid on magnitudes; gcd(0, x) = x."""
    _require_integers(a, b)
    a, b = a.magnitude(), b.magnitude()
    while not b.is_zero:
        _, r = divmod_abs(a, b)
        a, b = b, r
    return a

def radix_power(base: int, exponent: int) -> DigitNumber:
    """base**exponent, by repeated multiplication with the base value "10"."""
    if exponent < 0:
        raise DomainError(f"radix_power needs a non-negative exponent, got {exponent}")
    radix = DigitNumber(base, [1, 0])
    out = DigitNumber.one(base)
    for _ in range(exponent):
        out = mul_abs(out, radix)
    return out
