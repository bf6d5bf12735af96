# faraidh/special/jadd_ikhwah.py
"""Jadd ma'al ikhwah: kakek bersama saudara kandung/seayah (mazhab Zaid bin Tsabit)."""

from fractions import Fraction
from typing import Dict, List, Tuple

from schemas import AsabahType, DerivedFlags, FurudhItem, Gender, HeirType, InheritancePolicy, ShareCategory, HEIR_META
from faraidh.math.fraction import ONE, ZERO, frac, sum_exact
from faraidh.rules.engine import fixed_share
from faraidh.rules.flags import FULL_SIBLINGS, PATERNAL_SIBLINGS, count_of
from faraidh.special.al_add import counted_heads, is_al_add, split_sibling_portion

H = HeirType
JADD_SIDE = FULL_SIBLINGS | PATERNAL_SIBLINGS | {H.GRANDFATHER_PATERNAL}


def is_jadd_ikhwah(q: Dict[HeirType, int], flags: DerivedFlags, policy: InheritancePolicy) -> bool:
    return (
        policy.grandfather_mode == "COMPETE_WITH_SIBLINGS"
        and bool(q.get(H.GRANDFATHER_PATERNAL))
        and count_of(q, FULL_SIBLINGS | PATERNAL_SIBLINGS) > 0
        and not q.get(H.FATHER)
        and not flags.has_descendant
    )


def compute_choice_for_jadd(remainder: Fraction, heads: int, has_furudh: bool) -> Tuple[str, Fraction, Dict[str, Fraction]]:
    """
    Pilih bagian terbaik untuk Jadd.
      remainder  : sisa harta setelah ashabul furudh lain
      heads      : jumlah kepala saudara (laki-laki 2, perempuan 1) tanpa Jadd
      has_furudh : ada ashabul furudh lain (suami/istri, ibu, nenek)
    Return: (mode, bagian Jadd, semua opsi). Muqasamah didahulukan bila sama besar.
    """
    options: Dict[str, Fraction] = {"muqasamah": remainder * frac(2, heads + 2)}
    if has_furudh:
        options["tsulutsul_baqi"] = remainder * frac(1, 3)
        options["sudus"] = frac(1, 6)
    else:
        options["tsuluts"] = frac(1, 3)

    mode = "muqasamah"
    for name, value in options.items():
        if value > options[mode]:
            mode = name
    return mode, options[mode], options


def apply_jadd_ikhwah(q: Dict[HeirType, int], flags: DerivedFlags,
                      policy: InheritancePolicy) -> Dict[HeirType, FurudhItem]:
    others: List[HeirType] = [t for t in q if t not in JADD_SIDE]
    furudh_others = sum_exact(fixed_share(t, q, flags, policy) for t in others)
    remainder = ONE - furudh_others

    heads = counted_heads(flags.counts)
    mode, jadd_share, options = compute_choice_for_jadd(remainder, heads, furudh_others > 0)
    sibling_shares = split_sibling_portion(remainder - jadd_share, q)

    labels = {
        "muqasamah": "muqasamah (dihitung seperti seorang saudara laki-laki)",
        "tsulutsul_baqi": "1/3 dari sisa",
        "sudus": "1/6 dari seluruh harta",
        "tsuluts": "1/3 dari seluruh harta",
    }
    compared = ", ".join(f"{k} {v.numerator}/{v.denominator}" for k, v in options.items())
    overrides: Dict[HeirType, FurudhItem] = {
        H.GRANDFATHER_PATERNAL: FurudhItem(
            heir_type=H.GRANDFATHER_PATERNAL,
            count=q[H.GRANDFATHER_PATERNAL],
            category=ShareCategory.ASABAH if mode == "muqasamah" else ShareCategory.FURUDH,
            asabah_type=AsabahType.BI_NAFS if mode == "muqasamah" else None,
            share=jadd_share,
            original_share=jadd_share,
            reason=f"Jadd ma'al ikhwah: Jadd memilih {labels[mode]} sebagai yang terbaik ({compared})",
        )
    }

    add_note = " (al-'Add: saudara seayah ikut dihitung)" if is_al_add(flags.counts) else ""
    for heir_type in q:
        if heir_type not in FULL_SIBLINGS | PATERNAL_SIBLINGS:
            continue
        share = sibling_shares.get(heir_type, ZERO)
        male = HEIR_META[heir_type].gender is Gender.MALE
        overrides[heir_type] = FurudhItem(
            heir_type=heir_type,
            count=q[heir_type],
            category=ShareCategory.ASABAH,
            asabah_type=AsabahType.BI_NAFS if male else AsabahType.BIL_GHAYR,
            share=share,
            original_share=share,
            reason=f"Jadd ma'al ikhwah: {HEIR_META[heir_type].name_id} berbagi sisa bersama Jadd{add_note}",
        )
    return overrides
