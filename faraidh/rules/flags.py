# faraidh/rules/flags.py

from __future__ import annotations

from typing import Dict, Iterable, List

from errors import (
    DuplicateHeirTypeError,
    InvalidHeirCountError,
    InvalidHeirTypeForGenderError,
    NoEligibleHeirsError,
)
from schemas import DerivedFlags, Deceased, Gender, HeirInput, HeirType, InheritancePolicy, HEIR_META

H = HeirType

MAX_WIVES = 4

# =========================
# Kelompok ahli waris
# =========================
SPOUSES = frozenset({H.HUSBAND, H.WIFE})
MALE_DESCENDANTS = frozenset({H.SON, H.GRANDSON_SON})
DESCENDANTS = frozenset({H.SON, H.DAUGHTER, H.GRANDSON_SON, H.GRANDDAUGHTER_SON})
FEMALE_DESCENDANTS = frozenset({H.DAUGHTER, H.GRANDDAUGHTER_SON})
GRANDMOTHERS = frozenset({H.GRANDMOTHER_MATERNAL, H.GRANDMOTHER_PATERNAL})
FULL_SIBLINGS = frozenset({H.BROTHER_FULL, H.SISTER_FULL})
PATERNAL_SIBLINGS = frozenset({H.BROTHER_PATERNAL, H.SISTER_PATERNAL})
UTERINE_SIBLINGS = frozenset({H.BROTHER_UTERINE, H.SISTER_UTERINE})
SIBLINGS = FULL_SIBLINGS | PATERNAL_SIBLINGS | UTERINE_SIBLINGS
# Urutan kedekatan 'ashabah jauh: yang lebih dekat menghalangi yang sesudahnya
EXTENDED_AGNATES = (
    H.NEPHEW_FULL, H.NEPHEW_PATERNAL,
    H.UNCLE_FULL, H.UNCLE_PATERNAL,
    H.COUSIN_FULL, H.COUSIN_PATERNAL,
)
MANUMITTERS = frozenset({H.MANUMITTER_MALE, H.MANUMITTER_FEMALE})


def count_of(counts: Dict[HeirType, int], types: Iterable[HeirType]) -> int:
    return sum(counts.get(t, 0) for t in types)


# =========================
# Validasi input ahli waris
# =========================
def validate_heirs(heirs: List[HeirInput], deceased: Deceased) -> None:
    if not heirs:
        raise NoEligibleHeirsError("Daftar ahli waris kosong")

    seen = set()
    for heir in heirs:
        name = HEIR_META[heir.type].name_id
        if heir.count < 1:
            raise InvalidHeirCountError(
                f"Jumlah {name} harus minimal 1 (diterima {heir.count})", heir_type=heir.type
            )
        if heir.type in seen:
            raise DuplicateHeirTypeError(
                f"{name} muncul lebih dari sekali; gunakan field count", heir_type=heir.type
            )
        seen.add(heir.type)

        if heir.type is H.HUSBAND:
            if deceased.gender is Gender.MALE:
                raise InvalidHeirTypeForGenderError("Pewaris laki-laki tidak dapat meninggalkan suami")
            if heir.count > 1:
                raise InvalidHeirCountError("Suami hanya boleh satu", heir_type=heir.type)
        elif heir.type is H.WIFE:
            if deceased.gender is Gender.FEMALE:
                raise InvalidHeirTypeForGenderError("Pewaris perempuan tidak dapat meninggalkan istri")
            if heir.count > MAX_WIVES:
                raise InvalidHeirCountError(
                    f"Istri maksimal {MAX_WIVES} (diterima {heir.count})", heir_type=heir.type
                )


# =========================
# Flag struktural
# =========================
def derive_flags(heirs: List[HeirInput], deceased: Deceased, policy: InheritancePolicy) -> DerivedFlags:
    """
    Flag struktural dari daftar ahli waris dan jenis kelamin pewaris.
    Flag dihitung dari SEMUA ahli waris yang dikirim (termasuk yang nanti mahjub),
    misalnya dua saudara yang terhalang ayah tetap menurunkan ibu ke 1/6.
    """
    counts: Dict[HeirType, int] = {h.type: h.count for h in heirs}
    q = lambda t: counts.get(t, 0)

    has_male_descendant = count_of(counts, MALE_DESCENDANTS) > 0
    has_descendant = count_of(counts, DESCENDANTS) > 0

    if policy.mother_sibling_rule == "EXCLUDE_UTERINE":
        sibling_count = count_of(counts, FULL_SIBLINGS | PATERNAL_SIBLINGS)
    else:
        sibling_count = count_of(counts, SIBLINGS)

    return DerivedFlags(
        counts=counts,
        deceased_gender=deceased.gender,
        has_son=q(H.SON) > 0,
        has_daughter=q(H.DAUGHTER) > 0,
        has_grandson=q(H.GRANDSON_SON) > 0,
        has_granddaughter=q(H.GRANDDAUGHTER_SON) > 0,
        has_child=q(H.SON) + q(H.DAUGHTER) > 0,
        has_descendant=has_descendant,
        has_male_descendant=has_male_descendant,
        has_female_descendant_only=has_descendant and not has_male_descendant,
        has_father=q(H.FATHER) > 0,
        has_mother=q(H.MOTHER) > 0,
        has_grandfather=q(H.GRANDFATHER_PATERNAL) > 0,
        has_grandmother=count_of(counts, GRANDMOTHERS) > 0,
        has_spouse=count_of(counts, SPOUSES) > 0,
        has_full_siblings=count_of(counts, FULL_SIBLINGS) > 0,
        has_paternal_siblings=count_of(counts, PATERNAL_SIBLINGS) > 0,
        has_uterine_siblings=count_of(counts, UTERINE_SIBLINGS) > 0,
        sibling_count=sibling_count,
        has_multiple_siblings=sibling_count >= 2,
    )
