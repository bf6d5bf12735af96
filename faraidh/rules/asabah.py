# faraidh/rules/asabah.py
"""Pembagian sisa harta kepada 'ashobah menurut urutan kedekatan (jihah & darajah)."""

from __future__ import annotations

from fractions import Fraction
from typing import Dict, FrozenSet, List

from schemas import FurudhItem, Gender, HeirType, HEIR_META
from faraidh.math.fraction import frac

H = HeirType

# Tingkat prioritas: nilai kecil = lebih dekat. Saudari bil ghair/ma'al ghair
# menempati tingkat saudara laki-lakinya.
ASABAH_TIERS: Dict[HeirType, int] = {
    H.SON: 0, H.DAUGHTER: 0,
    H.GRANDSON_SON: 1, H.GRANDDAUGHTER_SON: 1,
    H.FATHER: 2,
    H.GRANDFATHER_PATERNAL: 3,
    H.BROTHER_FULL: 4, H.SISTER_FULL: 4,
    H.BROTHER_PATERNAL: 5, H.SISTER_PATERNAL: 5,
    H.NEPHEW_FULL: 6,
    H.NEPHEW_PATERNAL: 7,
    H.UNCLE_FULL: 8,
    H.UNCLE_PATERNAL: 9,
    H.COUSIN_FULL: 10,
    H.COUSIN_PATERNAL: 11,
    H.MANUMITTER_MALE: 12, H.MANUMITTER_FEMALE: 12,
}

# Ahli waris yang tidak pernah menjadi 'ashobah
NON_RESIDUARY: FrozenSet[HeirType] = frozenset({
    H.HUSBAND, H.WIFE, H.MOTHER,
    H.GRANDMOTHER_MATERNAL, H.GRANDMOTHER_PATERNAL,
    H.BROTHER_UTERINE, H.SISTER_UTERINE,
})


def _weight(heir_type: HeirType) -> int:
    """Laki-laki 2 bagian, perempuan 1 bagian (lidz-dzakari mitslu hadzdzil untsayain)."""
    return 2 if HEIR_META[heir_type].gender is Gender.MALE else 1


def distribute_asabah(items: List[FurudhItem], remainder: Fraction) -> List[FurudhItem]:
    """
    Berikan `remainder` kepada tingkat 'ashobah terdekat; dalam satu tingkat dibagi
    per kepala dengan bobot 2:1. Mengembalikan item penerima (kosong = tidak ada
    'ashobah, sisa harus di-radd).
    """
    residuary = [item for item in items if item.is_residuary]
    if not residuary:
        return []

    top = min(ASABAH_TIERS[item.heir_type] for item in residuary)
    recipients = [item for item in residuary if ASABAH_TIERS[item.heir_type] == top]
    heads = sum(item.count * _weight(item.heir_type) for item in recipients)

    for item in recipients:
        item.asabah_share = remainder * frac(item.count * _weight(item.heir_type), heads)

    for item in residuary:
        if ASABAH_TIERS[item.heir_type] != top:
            item.reason += "; tidak mendapat sisa karena ada 'ashobah yang lebih dekat"

    return recipients
