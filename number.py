from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Optional

import numpy as np

MIN_BASE = 2
MAX_BASE = 36
DEFAULT_BASE = 10

GLYPHS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
DIGIT_DTYPE = np.uint8


class DomainError(ValueError):
    pass

class DivisionByZero(DomainError, ZeroDivisionError):
    pass

class AllocationFailure(MemoryError):
    pass


def glyph_to_value(ch: str) -> Optional[int]:
    """Digit value of a single glyph (case-insensitive), or None if `ch` is not a glyph."""
    if "0" <= ch <= "9":
        return ord(ch) - ord("0")
    if "A" <= ch <= "Z":
        return ord(ch) - ord("A") + 10
    if "a" <= ch <= "z":
        return ord(ch) - ord("a") + 10
    return None

def value_to_glyph(value: int) -> str:
    if 0 <= value < len(GLYPHS):
        return GLYPHS[value]
    raise ValueError(f"digit value {value} has no glyph (expected 0..{len(GLYPHS) - 1})")

def check_base(base: int) -> int:
    if isinstance(base, bool) or not isinstance(base, (int, np.integer)):
        raise TypeError(f"base must be an integer, got {base!r}")
    if not MIN_BASE <= base <= MAX_BASE:
        raise DomainError(f"base {base} out of range [{MIN_BASE}, {MAX_BASE}]")
    return int(base)

def alloc_digits(values, base: int) -> np.ndarray:
    """
    Copy `values` into a fresh uint8 digit buffer, checking every digit against `base`.
    Raises AllocationFailure if numpy cannot provide the buffer.
    """
    try:
        wide = np.array(values, dtype=np.int64)
        if wide.ndim != 1:
            raise DomainError(f"digits must be a flat sequence, got shape {wide.shape}")
        if wide.size and (wide.min() < 0 or wide.max() >= base):
            raise DomainError(f"digit values must lie in [0, {base}) for base {base}")
        return wide.astype(DIGIT_DTYPE)
    except MemoryError as e:
        raise AllocationFailure("could not allocate a digit buffer") from e


@dataclass(eq=False)
class DigitNumber:
    """
    Signed number in base 2..36, stored as digit values, most significant first.

    The last `decimal_length` digits sit after the radix point; the last
    `repeating_length` of those repeat forever. So with base 16 the literal
    "1A.3(45)" is digits [1, 10, 3, 4, 5], decimal_length 3, repeating_length 2.
    """
    base: int
    digits: np.ndarray
    is_negative: bool = False
    decimal_length: int = 0
    repeating_length: int = 0

    def __post_init__(self):
        self.base = check_base(self.base)
        self.digits = alloc_digits(self.digits, self.base)
        self.is_negative = bool(self.is_negative)
        self.decimal_length = int(self.decimal_length)
        self.repeating_length = int(self.repeating_length)
        if len(self.digits) == 0:
            raise DomainError("a number needs at least one digit")
        if not 0 <= self.repeating_length <= self.decimal_length <= len(self.digits):
            raise DomainError(
                f"need 0 <= repeating_length ({self.repeating_length}) <= decimal_length "
                f"({self.decimal_length}) <= length ({len(self.digits)})"
            )

    @classmethod
    def zero(cls, base: int) -> DigitNumber:
        return cls(base, [0])

    @classmethod
    def one(cls, base: int) -> DigitNumber:
        return cls(base, [1])

    @classmethod
    def from_int(cls, value: int, base: int) -> DigitNumber:
        base = check_base(base)
        magnitude = abs(value)
        out: List[int] = []
        while True:
            magnitude, d = divmod(magnitude, base)
            out.append(d)
            if magnitude == 0:
                break
        return normalize(cls(base, out[::-1], is_negative=value < 0))

    @property
    def length(self) -> int:
        return len(self.digits)

    @property
    def integer_length(self) -> int:
        return len(self.digits) - self.decimal_length

    @property
    def nonrepeating_length(self) -> int:
        return self.decimal_length - self.repeating_length

    @property
    def integer_digits(self) -> np.ndarray:
        return self.digits[:self.integer_length]

    @property
    def nonrepeating_digits(self) -> np.ndarray:
        return self.digits[self.integer_length:len(self.digits) - self.repeating_length]

    @property
    def repeating_digits(self) -> np.ndarray:
        return self.digits[len(self.digits) - self.repeating_length:]

    @property
    def is_zero(self) -> bool:
        return not self.digits.any()

    @property
    def is_integer(self) -> bool:
        return self.decimal_length == 0

    @property
    def is_terminating(self) -> bool:
        return self.repeating_length == 0

    def copy(self) -> DigitNumber:
        return DigitNumber(self.base, self.digits, self.is_negative,
                           self.decimal_length, self.repeating_length)

    def magnitude(self) -> DigitNumber:
        out = self.copy()
        out.is_negative = False
        return out

    def negated(self) -> DigitNumber:
        out = self.copy()
        out.is_negative = not self.is_negative and not self.is_zero
        return out

    def to_int(self) -> int:
        """Native int of an integer number (no radix point)."""
        if not self.is_integer:
            raise DomainError("to_int needs an integer number")
        value = 0
        for d in self.digits.tolist():
            value = value * self.base + d
        return -value if self.is_negative else value

    def __eq__(self, other):
        if not isinstance(other, DigitNumber):
            return NotImplemented
        return (self.base == other.base
                and self.is_negative == other.is_negative
                and self.decimal_length == other.decimal_length
                and self.repeating_length == other.repeating_length
                and np.array_equal(self.digits, other.digits))

    __hash__ = None


def require_terminating(x: DigitNumber, operation: str) -> None:
    if not x.is_terminating:
        raise DomainError(
            f"{operation} needs terminating operands; convert repeating numbers through the rational bridge"
        )

def require_same_base(numbers: Iterable[DigitNumber]) -> int:
    bases = {n.base for n in numbers}
    if len(bases) != 1:
        raise DomainError(f"operands must share a base, got bases {sorted(bases)}")
    return bases.pop()


def normalize(n: DigitNumber) -> DigitNumber:
    """
    Canonicalize `n` in place and return it:
      1. a repeating block made only of zeros is dropped,
      2. leading zeros of the integer part go, keeping a single 0,
      3. without a repeating block, trailing fraction zeros go (and the point with them),
      4. zero becomes digits [0], no point, non-negative.
    A repeating block with any non-zero digit is left exactly as it is.
    """
    digits = n.digits
    dec = n.decimal_length
    rep = n.repeating_length

    if rep and not digits[len(digits) - rep:].any():
        digits = digits[:len(digits) - rep]
        dec -= rep
        rep = 0

    int_len = len(digits) - dec
    if int_len == 0:
        digits = np.concatenate([np.zeros(1, dtype=DIGIT_DTYPE), digits])
        int_len = 1
    lead = 0
    while lead < int_len - 1 and digits[lead] == 0:
        lead += 1
    digits = digits[lead:]

    if dec and not rep:
        trail = 0
        while trail < dec and digits[len(digits) - 1 - trail] == 0:
            trail += 1
        digits = digits[:len(digits) - trail]
        dec -= trail

    if not digits.any():
        digits = np.zeros(1, dtype=DIGIT_DTYPE)
        dec = rep = 0
        n.is_negative = False

    # lengths count from the end, so dropping leading zeros leaves them valid
    n.digits = digits.copy()
    n.decimal_length = dec
    n.repeating_length = rep
    return n
