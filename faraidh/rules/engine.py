# faraidh/rules/engine.py

from __future__ import annotations

from fractions import Fraction
from typing import Callable, Dict, List, Optional

from schemas import AsabahType, DerivedFlags, FurudhItem, HeirType, InheritancePolicy, ShareCategory
from faraidh.math.fraction import frac, sum_exact
from faraidh.rules.flags import FEMALE_DESCENDANTS, GRANDMOTHERS, UTERINE_SIBLINGS, count_of

H = HeirType

Active = Dict[HeirType, int]
FurudhRule = Callable[[Active, DerivedFlags, InheritancePolicy], FurudhItem]

HALF = frac(1, 2)
QUARTER = frac(1, 4)
EIGHTH = frac(1, 8)
TWO_THIRDS = frac(2, 3)
THIRD = frac(1, 3)
SIXTH = frac(1, 6)


# =========================
# Helper buat FurudhItem
# =========================
def _fi(heir_type: HeirType, quantity: int, share: Fraction, reason: str) -> FurudhItem:
    return FurudhItem(
        heir_type=heir_type,
        count=quantity,
        category=ShareCategory.FURUDH,
        share=share,
        original_share=share,
        reason=reason,
    )


def _asabah(heir_type: HeirType, quantity: int, reason: str,
            asabah_type: AsabahType = AsabahType.BI_NAFS) -> FurudhItem:
    return FurudhItem(
        heir_type=heir_type,
        count=quantity,
        category=ShareCategory.ASABAH,
        asabah_type=asabah_type,
        reason=reason,
    )


def _fi_asabah(heir_type: HeirType, quantity: int, share: Fraction, reason: str) -> FurudhItem:
    return FurudhItem(
        heir_type=heir_type,
        count=quantity,
        category=ShareCategory.FURUDH_AND_ASABAH,
        asabah_type=AsabahType.BI_NAFS,
        share=share,
        original_share=share,
        reason=reason,
    )


# =========================
# Pasangan
# =========================
def _husband(q: Active, flags: DerivedFlags, policy: InheritancePolicy) -> FurudhItem:
    if flags.has_descendant:
        return _fi(H.HUSBAND, q[H.HUSBAND], QUARTER, "Suami mendapat 1/4 karena pewaris punya anak/cucu")
    return _fi(H.HUSBAND, q[H.HUSBAND], HALF, "Suami mendapat 1/2 karena pewaris tidak punya anak/cucu")


def _wife(q: Active, flags: DerivedFlags, policy: InheritancePolicy) -> FurudhItem:
    # 1/4 atau 1/8 dibagi rata di antara semua istri
    if flags.has_descendant:
        return _fi(H.WIFE, q[H.WIFE], EIGHTH, "Istri mendapat 1/8 karena pewaris punya anak/cucu")
    return _fi(H.WIFE, q[H.WIFE], QUARTER, "Istri mendapat 1/4 karena pewaris tidak punya anak/cucu")


# =========================
# Ushul (ayah, ibu, kakek, nenek)
# =========================
def _father_like(heir_type: HeirType, label: str) -> FurudhRule:
    def rule(q: Active, flags: DerivedFlags, policy: InheritancePolicy) -> FurudhItem:
        if flags.has_male_descendant:
            return _fi(heir_type, q[heir_type], SIXTH, f"{label} mendapat 1/6 karena ada keturunan laki-laki")
        if flags.has_descendant:
            return _fi_asabah(heir_type, q[heir_type], SIXTH,
                              f"{label} mendapat 1/6 + sisa ('ashobah) karena hanya ada keturunan perempuan")
        return _asabah(heir_type, q[heir_type], f"{label} menjadi 'ashobah bin nafsi karena tidak ada keturunan")
    return rule


def _mother(q: Active, flags: DerivedFlags, policy: InheritancePolicy) -> FurudhItem:
    if flags.has_descendant:
        return _fi(H.MOTHER, q[H.MOTHER], SIXTH, "Ibu mendapat 1/6 karena pewaris punya anak/cucu")
    if flags.has_multiple_siblings:
        return _fi(H.MOTHER, q[H.MOTHER], SIXTH, "Ibu mendapat 1/6 karena pewaris punya dua saudara atau lebih")
    return _fi(H.MOTHER, q[H.MOTHER], THIRD, "Ibu mendapat 1/3 karena tidak ada anak/cucu dan saudara kurang dari dua")


def _grandmother(heir_type: HeirType) -> FurudhRule:
    def rule(q: Active, flags: DerivedFlags, policy: InheritancePolicy) -> FurudhItem:
        total = count_of(q, GRANDMOTHERS)
        share = SIXTH * frac(q[heir_type], total)
        if total > q[heir_type]:
            reason = "Nenek-nenek berserikat dalam 1/6"
        else:
            reason = "Nenek mendapat 1/6"
        return _fi(heir_type, q[heir_type], share, reason)
    return rule


# =========================
# Furu' (anak & cucu)
# =========================
def _son(q: Active, flags: DerivedFlags, policy: InheritancePolicy) -> FurudhItem:
    return _asabah(H.SON, q[H.SON], "Anak laki-laki menjadi 'ashobah bin nafsi")


def _daughter(q: Active, flags: DerivedFlags, policy: InheritancePolicy) -> FurudhItem:
    n = q[H.DAUGHTER]
    if q.get(H.SON):
        return _asabah(H.DAUGHTER, n, "Anak perempuan menjadi 'ashobah bil ghair bersama anak laki-laki",
                       AsabahType.BIL_GHAYR)
    if n == 1:
        return _fi(H.DAUGHTER, n, HALF, "Anak perempuan tunggal mendapat 1/2")
    return _fi(H.DAUGHTER, n, TWO_THIRDS, "Dua anak perempuan atau lebih berserikat dalam 2/3")


def _grandson(q: Active, flags: DerivedFlags, policy: InheritancePolicy) -> FurudhItem:
    return _asabah(H.GRANDSON_SON, q[H.GRANDSON_SON], "Cucu laki-laki menjadi 'ashobah bin nafsi")


def _granddaughter(q: Active, flags: DerivedFlags, policy: InheritancePolicy) -> FurudhItem:
    n = q[H.GRANDDAUGHTER_SON]
    if q.get(H.GRANDSON_SON):
        return _asabah(H.GRANDDAUGHTER_SON, n,
                       "Cucu perempuan menjadi 'ashobah bil ghair bersama cucu laki-laki", AsabahType.BIL_GHAYR)
    if q.get(H.DAUGHTER) == 1:
        return _fi(H.GRANDDAUGHTER_SON, n, SIXTH,
                   "Cucu perempuan mendapat 1/6 sebagai penyempurna 2/3 (takmilah) bersama satu anak perempuan")
    if n == 1:
        return _fi(H.GRANDDAUGHTER_SON, n, HALF, "Cucu perempuan tunggal mendapat 1/2")
    return _fi(H.GRANDDAUGHTER_SON, n, TWO_THIRDS, "Dua cucu perempuan atau lebih berserikat dalam 2/3")


# =========================
# Hawasyi (saudara)
# =========================
def _brother(heir_type: HeirType, label: str) -> FurudhRule:
    def rule(q: Active, flags: DerivedFlags, policy: InheritancePolicy) -> FurudhItem:
        return _asabah(heir_type, q[heir_type], f"{label} menjadi 'ashobah bin nafsi")
    return rule


def _sister_full(q: Active, flags: DerivedFlags, policy: InheritancePolicy) -> FurudhItem:
    n = q[H.SISTER_FULL]
    if q.get(H.BROTHER_FULL):
        return _asabah(H.SISTER_FULL, n, "Saudari kandung menjadi 'ashobah bil ghair bersama saudara kandung",
                       AsabahType.BIL_GHAYR)
    if count_of(q, FEMALE_DESCENDANTS):
        return _asabah(H.SISTER_FULL, n, "Saudari kandung menjadi 'ashobah ma'al ghair bersama anak/cucu perempuan",
                       AsabahType.MAAL_GHAYR)
    if n == 1:
        return _fi(H.SISTER_FULL, n, HALF, "Saudari kandung tunggal mendapat 1/2")
    return _fi(H.SISTER_FULL, n, TWO_THIRDS, "Dua saudari kandung atau lebih berserikat dalam 2/3")


def _sister_paternal(q: Active, flags: DerivedFlags, policy: InheritancePolicy) -> FurudhItem:
    n = q[H.SISTER_PATERNAL]
    if q.get(H.BROTHER_PATERNAL):
        return _asabah(H.SISTER_PATERNAL, n, "Saudari seayah menjadi 'ashobah bil ghair bersama saudara seayah",
                       AsabahType.BIL_GHAYR)
    if count_of(q, FEMALE_DESCENDANTS):
        return _asabah(H.SISTER_PATERNAL, n, "Saudari seayah menjadi 'ashobah ma'al ghair bersama anak/cucu perempuan",
                       AsabahType.MAAL_GHAYR)
    if q.get(H.SISTER_FULL) == 1:
        return _fi(H.SISTER_PATERNAL, n, SIXTH,
                   "Saudari seayah mendapat 1/6 sebagai penyempurna 2/3 (takmilah) bersama satu saudari kandung")
    if n == 1:
        return _fi(H.SISTER_PATERNAL, n, HALF, "Saudari seayah tunggal mendapat 1/2")
    return _fi(H.SISTER_PATERNAL, n, TWO_THIRDS, "Dua saudari seayah atau lebih berserikat dalam 2/3")


def _uterine(heir_type: HeirType) -> FurudhRule:
    def rule(q: Active, flags: DerivedFlags, policy: InheritancePolicy) -> FurudhItem:
        total = count_of(q, UTERINE_SIBLINGS)
        if total == 1:
            return _fi(heir_type, 1, SIXTH, "Saudara seibu tunggal mendapat 1/6")
        # laki-laki dan perempuan sama rata di dalam 1/3
        return _fi(heir_type, q[heir_type], THIRD * frac(q[heir_type], total),
                   "Saudara seibu (dua orang atau lebih) berserikat sama rata dalam 1/3")
    return rule


def _agnate(heir_type: HeirType, label: str, asabah_type: AsabahType = AsabahType.BI_NAFS) -> FurudhRule:
    def rule(q: Active, flags: DerivedFlags, policy: InheritancePolicy) -> FurudhItem:
        return _asabah(heir_type, q[heir_type], f"{label} menjadi 'ashobah", asabah_type)
    return rule


# =========================
# Tabel furudh (lengkap untuk seluruh HeirType)
# =========================
FURUDH_RULES: Dict[HeirType, FurudhRule] = {
    H.HUSBAND: _husband,
    H.WIFE: _wife,
    H.FATHER: _father_like(H.FATHER, "Ayah"),
    H.MOTHER: _mother,
    H.GRANDFATHER_PATERNAL: _father_like(H.GRANDFATHER_PATERNAL, "Kakek"),
    H.GRANDMOTHER_MATERNAL: _grandmother(H.GRANDMOTHER_MATERNAL),
    H.GRANDMOTHER_PATERNAL: _grandmother(H.GRANDMOTHER_PATERNAL),
    H.SON: _son,
    H.DAUGHTER: _daughter,
    H.GRANDSON_SON: _grandson,
    H.GRANDDAUGHTER_SON: _granddaughter,
    H.BROTHER_FULL: _brother(H.BROTHER_FULL, "Saudara laki-laki kandung"),
    H.SISTER_FULL: _sister_full,
    H.BROTHER_PATERNAL: _brother(H.BROTHER_PATERNAL, "Saudara laki-laki seayah"),
    H.SISTER_PATERNAL: _sister_paternal,
    H.BROTHER_UTERINE: _uterine(H.BROTHER_UTERINE),
    H.SISTER_UTERINE: _uterine(H.SISTER_UTERINE),
    H.NEPHEW_FULL: _agnate(H.NEPHEW_FULL, "Keponakan laki-laki (sdr lk kandung)"),
    H.NEPHEW_PATERNAL: _agnate(H.NEPHEW_PATERNAL, "Keponakan laki-laki (sdr lk seayah)"),
    H.UNCLE_FULL: _agnate(H.UNCLE_FULL, "Paman kandung"),
    H.UNCLE_PATERNAL: _agnate(H.UNCLE_PATERNAL, "Paman seayah"),
    H.COUSIN_FULL: _agnate(H.COUSIN_FULL, "Sepupu laki-laki (paman kandung)"),
    H.COUSIN_PATERNAL: _agnate(H.COUSIN_PATERNAL, "Sepupu laki-laki (paman seayah)"),
    H.MANUMITTER_MALE: _agnate(H.MANUMITTER_MALE, "Pria pembebas budak", AsabahType.BI_SABAB),
    H.MANUMITTER_FEMALE: _agnate(H.MANUMITTER_FEMALE, "Wanita pembebas budak", AsabahType.BI_SABAB),
}


def fixed_share(heir_type: HeirType, q: Active, flags: DerivedFlags, policy: InheritancePolicy) -> Fraction:
    """Bagian fardh generik satu ahli waris (0 bila murni 'ashobah atau tidak aktif)."""
    if not q.get(heir_type):
        return Fraction(0)
    return FURUDH_RULES[heir_type](q, flags, policy).share


# =========================
# Mesin penentu furudh
# =========================
def determine_furudh(
    active: Active,
    flags: DerivedFlags,
    policy: InheritancePolicy,
    overrides: Optional[Dict[HeirType, FurudhItem]] = None,
) -> List[FurudhItem]:
    """
    Menghasilkan daftar FurudhItem (furudh & 'ashobah) untuk ahli waris aktif.
    Ahli waris yang diatur kasus khusus memakai item dari `overrides`.
    """
    overrides = overrides or {}
    items: List[FurudhItem] = []
    for heir_type in active:
        if heir_type in overrides:
            items.append(overrides[heir_type])
        else:
            items.append(FURUDH_RULES[heir_type](active, flags, policy))
    return items


def furudh_total(items: List[FurudhItem]) -> Fraction:
    return sum_exact(item.share for item in items)
