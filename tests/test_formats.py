import random

import pytest

from number import DigitNumber
from parsing import parse_literal
from rational import make_rational
from formats import base_prefix, format_number, format_rational


class TestFormatNumber:

    @pytest.mark.parametrize("text", [
        "123", "-456", "12.34", "-9.8", "1.(3)", "16#1A.3(45)", "2#1011.01",
        "36#Z9A", "0", "0.(3)", "8#-7.0(12)",
    ])
    def test_canonical_literals_round_trip(self, text):
        assert format_number(parse_literal(text)) == text

    @pytest.mark.parametrize("text,canonical", [
        ("007.500", "7.5"),
        ("-0", "0"),
        ("16#ff", "16#FF"),
        ("10#12", "12"),
        ("3.(0)", "3"),
        ("00.0(3)", "0.0(3)"),
    ])
    def test_normalized_rendering(self, text, canonical):
        assert format_number(parse_literal(text)) == canonical

    def test_round_trip_random(self):
        rng = random.Random(3)
        for _ in range(20):
            base = rng.randint(2, 36)
            glyphs = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"[:base]
            body = "".join(rng.choice(glyphs) for _ in range(rng.randint(1, 4)))
            if rng.random() < 0.5:
                body += "." + "".join(rng.choice(glyphs) for _ in range(rng.randint(0, 3)))
                body += "(" + "".join(rng.choice(glyphs) for _ in range(rng.randint(1, 3))) + ")"
            n = parse_literal(f"{base}#{body}")
            assert parse_literal(format_number(n)) == n

    def test_pure_fraction_layout_gets_integer_zero(self):
        assert format_number(DigitNumber(10, [5], decimal_length=1)) == "0.5"

    def test_base_prefix(self):
        assert base_prefix(10) == ""
        assert base_prefix(2) == "2#"


class TestFormatRational:

    def test_decimal(self):
        r = make_rational(DigitNumber.from_int(-2, 10), DigitNumber.from_int(6, 10))
        assert format_rational(r) == "-1/3"

    def test_hex(self):
        r = make_rational(DigitNumber.from_int(255, 16), DigitNumber.from_int(16, 16))
        assert format_rational(r) == "16#FF/10"
