"""
Exact numerator/denominator view of DigitNumbers.

A Rational holds two integer DigitNumbers in one base; the numerator carries
the sign and the denominator is positive. Terminating and repeating numbers
both map to a Rational exactly, and rational_to_number maps back, so
arithmetic on repeating numbers goes through here.
"""
from __future__ import annotations
from dataclasses import dataclass
from fractions import Fraction
from typing import Dict, List

import numpy as np

from number import (DEFAULT_BASE, DigitNumber, DivisionByZero, DomainError,
                    normalize, require_same_base)
from bigint import divmod_abs, gcd_abs, mul_abs, radix_power, sub_abs
from arithmetic import number_add
from formats import format_number

Q = Fraction  # native rational, for interop and reference checks


@dataclass(eq=False)
class Rational:
    numerator: DigitNumber
    denominator: DigitNumber

    def __post_init__(self):
        if not (self.numerator.is_integer and self.denominator.is_integer):
            raise DomainError("a rational needs integer numerator and denominator")
        require_same_base((self.numerator, self.denominator))
        if self.denominator.is_zero:
            raise DivisionByZero("rational with zero denominator")
        if self.denominator.is_negative:
            raise DomainError("a rational's denominator must be positive; the sign goes on the numerator")

    @property
    def base(self) -> int:
        return self.numerator.base

    @property
    def is_negative(self) -> bool:
        return self.numerator.is_negative

    @property
    def is_zero(self) -> bool:
        return self.numerator.is_zero

    def to_fraction(self) -> Q:
        return Q(self.numerator.to_int(), self.denominator.to_int())

    @classmethod
    def from_fraction(cls, q: Q, base: int = DEFAULT_BASE) -> Rational:
        q = Q(q)
        return cls(DigitNumber.from_int(q.numerator, base), DigitNumber.from_int(q.denominator, base))

    def __eq__(self, other):
        if not isinstance(other, Rational):
            return NotImplemented
        return self.numerator == other.numerator and self.denominator == other.denominator

    __hash__ = None


def _integer(x: DigitNumber, negative: bool = False) -> DigitNumber:
    """The digit string of `x` read as an integer, radix point ignored."""
    return normalize(DigitNumber(x.base, x.digits, negative))

def _digits_as_integer(base: int, digits: np.ndarray) -> DigitNumber:
    if len(digits) == 0:
        return DigitNumber.zero(base)
    return normalize(DigitNumber(base, digits))


def make_from_ints(num: DigitNumber, den: DigitNumber) -> Rational:
    """
    Pair two integers into a Rational (not yet reduced). A negative
    denominator moves its sign onto the numerator.

    Raises:
        DivisionByZero: if `den` is zero
        DomainError: on non-integer operands or mismatched bases
    """
    num = num.copy()
    den = den.copy()
    if den.is_negative and not den.is_zero:
        den.is_negative = False
        num = num.negated()
    return Rational(num, den)

def normalize_rational(r: Rational) -> Rational:
    """Reduce `r` in place by gcd(|num|, den); zero becomes 0/1."""
    base = r.base
    if r.numerator.is_zero:
        r.numerator = DigitNumber.zero(base)
        r.denominator = DigitNumber.one(base)
        return r
    negative = r.numerator.is_negative != r.denominator.is_negative
    g = gcd_abs(r.numerator, r.denominator)
    num, rem_num = divmod_abs(r.numerator, g)
    den, rem_den = divmod_abs(r.denominator, g)
    assert rem_num.is_zero and rem_den.is_zero
    num.is_negative = negative
    r.numerator = num
    r.denominator = den
    return r

def make_rational(num: DigitNumber, den: DigitNumber) -> Rational:
    return normalize_rational(make_from_ints(num, den))


def rational_add(a: Rational, b: Rational) -> Rational:
    """a/b + c/d = (a*d + c*b) / (b*d)"""
    require_same_base((a.numerator, b.numerator))
    den = mul_abs(a.denominator, b.denominator)
    n1 = mul_abs(a.numerator, b.denominator)
    n1.is_negative = a.numerator.is_negative and not n1.is_zero
    n2 = mul_abs(b.numerator, a.denominator)
    n2.is_negative = b.numerator.is_negative and not n2.is_zero
    return make_rational(number_add(n1, n2), den)

def rational_negate(a: Rational) -> Rational:
    return Rational(a.numerator.negated(), a.denominator.copy())

def rational_sub(a: Rational, b: Rational) -> Rational:
    return rational_add(a, rational_negate(b))

def rational_mul(a: Rational, b: Rational) -> Rational:
    require_same_base((a.numerator, b.numerator))
    num = mul_abs(a.numerator, b.numerator)
    num.is_negative = (a.is_negative != b.is_negative) and not num.is_zero
    return make_rational(num, mul_abs(a.denominator, b.denominator))

def rational_div(a: Rational, b: Rational) -> Rational:
    if b.is_zero:
        raise DivisionByZero("rational division by zero")
    reciprocal = Rational(b.denominator.copy(), b.numerator.magnitude())
    reciprocal.numerator.is_negative = b.is_negative
    return rational_mul(a, reciprocal)


def from_terminating_number(x: DigitNumber) -> Rational:
    """digits / base**decimal_length, reduced."""
    if not x.is_terminating:
        raise DomainError("from_terminating_number got a repeating number")
    return make_rational(_integer(x, x.is_negative), radix_power(x.base, x.decimal_length))

def from_repeating_number(x: DigitNumber) -> Rational:
    """
    For x = I.Y(Z) in base b, with N the integer reading of IYZ and M that of IY:

        x = (N - M) / (b**|Y| * (b**|Z| - 1))

    The sign of x goes on the numerator.
    """
    if x.is_terminating:
        raise DomainError("from_repeating_number got a terminating number")
    base = x.base
    prefix_length = x.integer_length + x.nonrepeating_length
    m = _digits_as_integer(base, x.digits[:prefix_length])
    n = _integer(x)
    numerator = sub_abs(n, m, x.is_negative)
    period = sub_abs(radix_power(base, x.repeating_length), DigitNumber.one(base))
    denominator = mul_abs(radix_power(base, x.nonrepeating_length), period)
    return make_rational(numerator, denominator)

def from_number(x: DigitNumber) -> Rational:
    if x.is_terminating:
        return from_terminating_number(x)
    return from_repeating_number(x)


def rational_to_number(r: Rational) -> DigitNumber:
    """
    Exact expansion of num/den in the rational's base, by long division.
    Fraction digits come one radix place at a time; the first remainder seen
    twice marks the start of the repeating block.
    """
    base = r.base
    if r.denominator.is_zero:
        raise DivisionByZero("rational with zero denominator")
    radix = DigitNumber(base, [1, 0])
    whole, rem = divmod_abs(r.numerator, r.denominator)

    fraction: List[int] = []
    seen: Dict[bytes, int] = {}
    while not rem.is_zero:
        key = rem.digits.tobytes()
        if key in seen:
            break
        seen[key] = len(fraction)
        d, rem = divmod_abs(mul_abs(rem, radix), r.denominator)
        fraction.append(int(d.digits[-1]))

    repeating = 0 if rem.is_zero else len(fraction) - seen[rem.digits.tobytes()]
    digits = np.concatenate([whole.digits, np.array(fraction, dtype=whole.digits.dtype)])
    return normalize(DigitNumber(base, digits, r.is_negative, len(fraction), repeating))


def exact_add(a: DigitNumber, b: DigitNumber) -> DigitNumber:
    """Same-base sum that also accepts repeating operands."""
    if a is None or b is None:
        raise DomainError("exact_add got a missing operand")
    require_same_base((a, b))
    if a.is_terminating and b.is_terminating:
        return number_add(a, b)
    return rational_to_number(rational_add(from_number(a), from_number(b)))

def qstr(q: Q, base: int = DEFAULT_BASE) -> str:
    """
    Exact expansion of a Fraction in `base`, e.g. qstr(Q(1, 3)) == "0.(3)",
    qstr(Q(1, 2), 3) == "3#0.(1)".
    """
    return format_number(rational_to_number(Rational.from_fraction(q, base)))
