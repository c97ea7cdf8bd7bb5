from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

from number import DEFAULT_BASE, GLYPHS, DigitNumber

if TYPE_CHECKING:
    from rational import Rational

_GLYPH_TABLE = np.array(list(GLYPHS))

def _glyphs(digits: np.ndarray) -> str:
    return "".join(_GLYPH_TABLE[digits].tolist())

def base_prefix(base: int) -> str:
    return "" if base == DEFAULT_BASE else f"{base}#"

def format_number(n: DigitNumber) -> str:
    """
    Render `n` in literal notation: [base#][-]int[.frac[(rep)]].
    The "base#" prefix only appears for bases other than 10.
    """
    out = [base_prefix(n.base)]
    if n.is_negative:
        out.append("-")
    out.append(_glyphs(n.integer_digits) or "0")
    if n.decimal_length:
        out.append(".")
        out.append(_glyphs(n.nonrepeating_digits))
        if n.repeating_length:
            out.append(f"({_glyphs(n.repeating_digits)})")
    return "".join(out)

def format_rational(r: Rational) -> str:
    sign = "-" if r.is_negative else ""
    return f"{base_prefix(r.base)}{sign}{_glyphs(r.numerator.digits)}/{_glyphs(r.denominator.digits)}"
