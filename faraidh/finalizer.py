# faraidh/finalizer.py
"""Konversi pecahan akhir menjadi nominal uang dengan jaminan kekekalan jumlah."""

from __future__ import annotations

import math
from fractions import Fraction
from typing import Dict, List, Tuple

from schemas import FractionValue, HeirType, Verification, HEIR_ORDER
from faraidh.math.fraction import sum_exact


def allocate_amounts(portions: List[Tuple[HeirType, Fraction]], net_estate: int) -> Dict[HeirType, int]:
    """
    totalValue = floor(pecahan x tirkah), lalu sisa satuan dibagikan satu per satu
    kepada sisa pecahan terbesar (seri: pecahan terbesar, lalu urutan HeirType).
    """
    amounts: Dict[HeirType, int] = {}
    leftovers = []
    for heir_type, share in portions:
        exact = share * net_estate
        base = math.floor(exact)
        amounts[heir_type] = base
        leftovers.append((exact - base, share, heir_type))

    residual = net_estate - sum(amounts.values())
    leftovers.sort(key=lambda r: (-r[0], -r[1], HEIR_ORDER[r[2]]))
    for _, _, heir_type in leftovers[:max(residual, 0)]:
        amounts[heir_type] += 1
    return amounts


def per_person(total_value: int, count: int) -> float:
    return round(total_value / count, 2)


def verify(portions: List[Tuple[HeirType, Fraction]], amounts: Dict[HeirType, int], net_estate: int) -> Verification:
    fraction_sum = sum_exact(share for _, share in portions)
    sum_of_shares = sum(amounts.values())
    return Verification(
        is_valid=fraction_sum == 1 and sum_of_shares == net_estate,
        fraction_sum=FractionValue.of(fraction_sum),
        sum_of_shares=sum_of_shares,
        net_estate=net_estate,
        difference=net_estate - sum_of_shares,
    )
