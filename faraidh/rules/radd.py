# faraidh/rules/radd.py

from __future__ import annotations

from fractions import Fraction
from typing import List, NamedTuple

from schemas import FurudhItem, InheritancePolicy
from faraidh.math.fraction import ONE, divide, sum_exact
from faraidh.rules.flags import SPOUSES


class RaddResult(NamedTuple):
    remainder: Fraction       # sisa yang dikembalikan
    includes_spouse: bool


def apply_radd(items: List[FurudhItem], policy: InheritancePolicy) -> RaddResult:
    """
    Kembalikan sisa harta kepada ashabul furudh secara proporsional.

    Pasangan (suami/istri) tidak ikut radd selama ada ashabul furudh nasabiyah,
    kecuali `policy.radd_includes_spouse`. Bila yang tersisa hanya pasangan,
    sisa tetap dikembalikan kepadanya agar jumlah bagian = 1.
    """
    holders = [item for item in items if item.share > 0]
    total = sum_exact(item.share for item in holders)
    remainder = ONE - total

    spouses = [item for item in holders if item.heir_type in SPOUSES]
    blood = [item for item in holders if item.heir_type not in SPOUSES]

    if policy.radd_includes_spouse or not blood:
        for item in holders:
            item.share = divide(item.share, total)
        return RaddResult(remainder=remainder, includes_spouse=bool(spouses))

    spouse_total = sum_exact(item.share for item in spouses)
    blood_total = total - spouse_total
    scale = divide(ONE - spouse_total, blood_total)
    for item in blood:
        item.share = item.share * scale
    return RaddResult(remainder=remainder, includes_spouse=False)
