# faraidh/rules/aul.py

from __future__ import annotations

from fractions import Fraction
from typing import List, NamedTuple

from schemas import FurudhItem
from faraidh.math.fraction import divide, to_common_denominator

# AUL yang sah menurut kitab (untuk catatan; perhitungan tidak bergantung padanya)
VALID_AUL = {
    6: {7, 8, 9, 10},
    12: {13, 15, 17},
    24: {27},
}


class AulResult(NamedTuple):
    ashl_awal: int
    ashl_akhir: int
    ratio: Fraction          # ashl_akhir / ashl_awal


def apply_aul(items: List[FurudhItem]) -> AulResult:
    """
    Naikkan AM menjadi jumlah saham; setiap fardh dikali 1/jumlah furudh.
    Sisa untuk 'ashobah otomatis habis.
    """
    ashl_awal, numerators = to_common_denominator(item.share for item in items)
    ashl_akhir = sum(numerators)
    total = Fraction(ashl_akhir, ashl_awal)

    for item in items:
        item.share = divide(item.share, total)

    return AulResult(ashl_awal=ashl_awal, ashl_akhir=ashl_akhir, ratio=total)


def is_classical_aul(result: AulResult) -> bool:
    return result.ashl_akhir in VALID_AUL.get(result.ashl_awal, set())
