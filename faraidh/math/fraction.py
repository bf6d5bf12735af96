# faraidh/math/fraction.py
"""Aritmetika pecahan eksak untuk bagian waris.

Semua perbandingan total terhadap 1 dilakukan lewat penyebut bersama
(asal masalah), tidak pernah lewat float.
"""

from __future__ import annotations

import math
from fractions import Fraction
from typing import Dict, Iterable, List, Optional, Tuple

from errors import DivisionByZeroError

ZERO = Fraction(0)
ONE = Fraction(1)

# Furudh muqaddarah (bagian yang disebut Al-Qur'an)
FURUDH_NAMES: Dict[Fraction, str] = {
    Fraction(1, 2): "النصف",
    Fraction(1, 4): "الربع",
    Fraction(1, 8): "الثمن",
    Fraction(2, 3): "الثلثان",
    Fraction(1, 3): "الثلث",
    Fraction(1, 6): "السدس",
}


def frac(numerator: int, denominator: int = 1) -> Fraction:
    """Bangun pecahan tereduksi dengan penyebut positif."""
    if denominator == 0:
        raise DivisionByZeroError(f"Penyebut nol pada pecahan {numerator}/0")
    return Fraction(numerator, denominator)


def divide(a: Fraction, b: Fraction) -> Fraction:
    if b == 0:
        raise DivisionByZeroError(f"Pembagian {a} dengan nol")
    return a / b


def compare(a: Fraction, b: Fraction) -> int:
    """-1, 0, atau 1 via perkalian silang (penyebut selalu positif)."""
    left = a.numerator * b.denominator
    right = b.numerator * a.denominator
    return (left > right) - (left < right)


def to_decimal(value: Fraction, places: int = 6) -> float:
    return round(value.numerator / value.denominator, places)


def fraction_str(value: Fraction) -> str:
    return f"{value.numerator}/{value.denominator}"


def arabic_name(value: Fraction) -> Optional[str]:
    return FURUDH_NAMES.get(value)


def asal_masalah(fractions: Iterable[Fraction]) -> int:
    """KPK semua penyebut pecahan bukan nol (1 bila kosong)."""
    asal = 1
    for f in fractions:
        if f:
            asal = math.lcm(asal, f.denominator)
    return asal


def to_common_denominator(fractions: Iterable[Fraction]) -> Tuple[int, List[int]]:
    """Nyatakan setiap pecahan sebagai pembilang atas asal masalah."""
    items = list(fractions)
    asal = asal_masalah(items)
    return asal, [f.numerator * (asal // f.denominator) for f in items]


def sum_exact(fractions: Iterable[Fraction]) -> Fraction:
    asal, numerators = to_common_denominator(fractions)
    return frac(sum(numerators), asal)


def compare_to_one(fractions: Iterable[Fraction]) -> int:
    """Bandingkan jumlah pecahan dengan 1 memakai pembilang atas asal masalah."""
    asal, numerators = to_common_denominator(fractions)
    total = sum(numerators)
    return (total > asal) - (total < asal)
