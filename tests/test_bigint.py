import math
import random

import pytest

from number import DigitNumber, DivisionByZero, DomainError
from parsing import parse
from bigint import (
    add_abs,
    compare_digits,
    compare_integers,
    divmod_abs,
    gcd_abs,
    mul_abs,
    mul_digit,
    radix_power,
    sub_abs,
)

BASES = [2, 3, 7, 10, 16, 36]


def num(value: int, base: int = 10) -> DigitNumber:
    return DigitNumber.from_int(value, base)


def random_pairs(seed: int, count: int = 15, bits: int = 48):
    rng = random.Random(seed)
    for _ in range(count):
        base = rng.choice(BASES)
        a = rng.getrandbits(rng.randint(1, bits))
        b = rng.getrandbits(rng.randint(1, bits))
        yield base, a, b


class TestCompare:

    @pytest.mark.parametrize("a,b,expected", [(5, 7, -1), (7, 5, 1), (42, 42, 0), (100, 99, 1), (0, 0, 0)])
    def test_compare_integers(self, a, b, expected):
        assert compare_integers(num(a), num(b)) == expected

    def test_leading_zeros_ignored(self):
        assert compare_digits(DigitNumber(10, [0, 0, 5]).digits, DigitNumber(10, [5]).digits) == 0

    def test_rejects_fractions(self):
        with pytest.raises(DomainError):
            compare_integers(parse("1.5"), num(1))


class TestAddSub:

    def test_add_carry_chain(self):
        assert add_abs(num(999), num(1)).digits.tolist() == [1, 0, 0, 0]

    def test_add_binary(self):
        assert add_abs(num(0b1011, 2), num(0b1, 2)).to_int() == 12

    def test_add_ignores_sign(self):
        assert add_abs(num(-3), num(4)).to_int() == 7

    def test_add_length_bound(self):
        for base, a, b in random_pairs(1):
            s = add_abs(num(a, base), num(b, base))
            assert s.length <= max(num(a, base).length, num(b, base).length) + 1

    def test_sub_borrow_chain(self):
        assert sub_abs(num(1000), num(1)).digits.tolist() == [9, 9, 9]

    def test_sub_stamps_sign(self):
        r = sub_abs(num(10), num(3), negative=True)
        assert r.to_int() == -7

    def test_sub_zero_result_not_negative(self):
        r = sub_abs(num(5), num(5), negative=True)
        assert r == DigitNumber.zero(10)

    def test_sub_requires_larger_first(self):
        with pytest.raises(DomainError):
            sub_abs(num(3), num(10))

    def test_mismatched_bases(self):
        with pytest.raises(DomainError):
            add_abs(num(3, 10), num(3, 16))

    def test_against_native_ints(self):
        for base, a, b in random_pairs(2):
            assert add_abs(num(a, base), num(b, base)).to_int() == a + b
            hi, lo = max(a, b), min(a, b)
            assert sub_abs(num(hi, base), num(lo, base)).to_int() == hi - lo


class TestMul:

    def test_small(self):
        assert mul_abs(num(12), num(34)).to_int() == 408

    def test_zero_fast_path(self):
        assert mul_abs(num(0), num(12345)) == DigitNumber.zero(10)
        assert mul_abs(num(12345), num(0)) == DigitNumber.zero(10)

    def test_max_digits_base36(self):
        a = num(36 ** 20 - 1, 36)
        assert mul_abs(a, a).to_int() == (36 ** 20 - 1) ** 2

    def test_against_native_ints(self):
        for base, a, b in random_pairs(3):
            assert mul_abs(num(a, base), num(b, base)).to_int() == a * b

    def test_mul_digit(self):
        assert mul_digit(num(0xFF, 16), 15).to_int() == 0xFF * 15
        assert mul_digit(num(123), 0) == DigitNumber.zero(10)

    def test_mul_digit_range(self):
        with pytest.raises(DomainError):
            mul_digit(num(1, 2), 2)


class TestDivmod:

    def test_hundred_by_seven(self):
        q, r = divmod_abs(parse("100", 10), parse("7", 10))
        assert q.to_int() == 14
        assert r.to_int() == 2

    def test_numerator_smaller(self):
        q, r = divmod_abs(num(3), num(7))
        assert q == DigitNumber.zero(10)
        assert r.to_int() == 3

    def test_remainder_is_a_copy(self):
        a = num(3)
        _, r = divmod_abs(a, num(7))
        r.digits[0] = 1
        assert a.to_int() == 3

    def test_exact(self):
        q, r = divmod_abs(num(144), num(12))
        assert q.to_int() == 12
        assert r.is_zero

    def test_division_by_zero(self):
        with pytest.raises(DivisionByZero):
            divmod_abs(num(5), num(0))

    def test_ignores_signs(self):
        q, r = divmod_abs(num(-17), num(5))
        assert (q.to_int(), r.to_int()) == (3, 2)

    def test_reconstruction_property(self):
        for base, a, b in random_pairs(4):
            if b == 0:
                continue
            na, nb = num(a, base), num(b, base)
            q, r = divmod_abs(na, nb)
            assert add_abs(mul_abs(q, nb), r) == na
            assert compare_integers(r, nb) < 0
            assert (q.to_int(), r.to_int()) == divmod(a, b)


class TestGcd:

    def test_small(self):
        assert gcd_abs(num(12), num(18)).to_int() == 6

    def test_zero(self):
        assert gcd_abs(num(0), num(9)).to_int() == 9
        assert gcd_abs(num(9), num(0)).to_int() == 9

    def test_coprime(self):
        assert gcd_abs(num(35), num(64)).to_int() == 1

    def test_against_math_gcd(self):
        for base, a, b in random_pairs(5, count=12, bits=32):
            g = gcd_abs(num(a, base), num(b, base))
            assert g.to_int() == math.gcd(a, b)

    def test_divides_both(self):
        a, b = num(2 * 3 * 5 * 7 * 11, 7), num(3 * 7 * 13, 7)
        g = gcd_abs(a, b)
        assert divmod_abs(a, g)[1].is_zero
        assert divmod_abs(b, g)[1].is_zero


class TestRadixPower:

    @pytest.mark.parametrize("base", BASES)
    def test_digits(self, base):
        assert radix_power(base, 4).digits.tolist() == [1, 0, 0, 0, 0]

    def test_zero_exponent(self):
        assert radix_power(16, 0) == DigitNumber.one(16)

    def test_negative_exponent(self):
        with pytest.raises(DomainError):
            radix_power(10, -1)
