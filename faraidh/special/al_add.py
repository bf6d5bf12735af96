# faraidh/special/al_add.py
from fractions import Fraction
from typing import Dict

from schemas import Gender, HeirType, HEIR_META
from faraidh.math.fraction import ZERO, frac
from faraidh.rules.flags import FULL_SIBLINGS, PATERNAL_SIBLINGS

H = HeirType


def _heads(counts: Dict[HeirType, int], types) -> int:
    # laki-laki dihitung dua kepala
    return sum(
        counts.get(t, 0) * (2 if HEIR_META[t].gender is Gender.MALE else 1)
        for t in types
    )


def is_al_add(counts: Dict[HeirType, int]) -> bool:
    """Ada saudara kandung dan saudara seayah sekaligus (dihitung dari semua ahli waris)."""
    has_kandung = any(counts.get(t) for t in FULL_SIBLINGS)
    has_seayah = any(counts.get(t) for t in PATERNAL_SIBLINGS)
    return has_kandung and has_seayah


def counted_heads(counts: Dict[HeirType, int]) -> int:
    """Jumlah kepala saudara yang diperhitungkan melawan Jadd (termasuk saudara seayah pada al-'Add)."""
    return _heads(counts, FULL_SIBLINGS | PATERNAL_SIBLINGS)


def _split(portion: Fraction, q: Dict[HeirType, int], types) -> Dict[HeirType, Fraction]:
    present = [t for t in q if t in types]
    heads = _heads(q, present)
    if not heads:
        return {}
    return {t: portion * frac(_heads(q, [t]), heads) for t in present}


def split_sibling_portion(portion: Fraction, q: Dict[HeirType, int]) -> Dict[HeirType, Fraction]:
    """
    Bagikan bagian rombongan saudara setelah Jadd mengambil haknya.

    - ada saudara laki-laki kandung: seluruhnya untuk saudara kandung (2:1),
      saudara seayah hanya ikut dihitung (al-'Add);
    - hanya saudari kandung: ia mengambil sampai 1/2 (atau 2/3 bila dua atau lebih),
      kelebihannya untuk saudara seayah yang tidak mahjub;
    - tanpa saudara kandung: dibagi di antara saudara seayah (2:1).
    """
    if q.get(H.BROTHER_FULL):
        return _split(portion, q, FULL_SIBLINGS)

    sisters = q.get(H.SISTER_FULL, 0)
    if sisters:
        cap = frac(1, 2) if sisters == 1 else frac(2, 3)
        taken = min(portion, cap)
        leftover = portion - taken
        paternal = _split(leftover, q, PATERNAL_SIBLINGS) if leftover > 0 else {}
        if leftover > 0 and not paternal:
            taken = portion
        shares = {H.SISTER_FULL: taken}
        for t in q:
            if t in PATERNAL_SIBLINGS:
                shares[t] = paternal.get(t, ZERO)
        return shares

    return _split(portion, q, PATERNAL_SIBLINGS)
