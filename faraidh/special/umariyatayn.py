# faraidh/special/umariyatayn.py
from typing import Dict

from schemas import DerivedFlags, FurudhItem, HeirType, InheritancePolicy, ShareCategory
from faraidh.math.fraction import ONE, frac
from faraidh.rules.engine import fixed_share

H = HeirType


def is_umariyatayn(q: Dict[HeirType, int], flags: DerivedFlags, policy: InheritancePolicy) -> bool:
    # syarat: suami/istri + ayah + ibu; tanpa keturunan; saudara kurang dari dua
    has_spouse = bool(q.get(H.HUSBAND) or q.get(H.WIFE))
    return (
        has_spouse
        and bool(q.get(H.FATHER))
        and bool(q.get(H.MOTHER))
        and not flags.has_descendant
        and not flags.has_multiple_siblings
    )


def apply_umariyatayn(q: Dict[HeirType, int], flags: DerivedFlags,
                      policy: InheritancePolicy) -> Dict[HeirType, FurudhItem]:
    """Ibu mendapat 1/3 dari sisa setelah bagian suami/istri (tsulutsul baqi)."""
    spouse = H.HUSBAND if q.get(H.HUSBAND) else H.WIFE
    spouse_share = fixed_share(spouse, q, flags, policy)
    mother_share = (ONE - spouse_share) * frac(1, 3)
    return {
        H.MOTHER: FurudhItem(
            heir_type=H.MOTHER,
            count=q[H.MOTHER],
            category=ShareCategory.FURUDH,
            share=mother_share,
            original_share=mother_share,
            reason=(
                f"Umariyatayn: Ibu mendapat 1/3 sisa setelah bagian {'suami' if spouse is H.HUSBAND else 'istri'} "
                f"({spouse_share.numerator}/{spouse_share.denominator}), yaitu "
                f"{mother_share.numerator}/{mother_share.denominator} dari seluruh harta"
            ),
        )
    }
