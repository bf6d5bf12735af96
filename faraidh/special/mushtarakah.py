# faraidh/special/mushtarakah.py
from typing import Dict

from schemas import DerivedFlags, FurudhItem, HeirType, InheritancePolicy, ShareCategory, HEIR_META
from faraidh.math.fraction import frac
from faraidh.rules.flags import FULL_SIBLINGS, GRANDMOTHERS, UTERINE_SIBLINGS, count_of

H = HeirType


def is_mushtarakah(q: Dict[HeirType, int], flags: DerivedFlags, policy: InheritancePolicy) -> bool:
    """
    Himariyyah: suami, ibu/nenek, dua saudara seibu atau lebih, dan saudara
    laki-laki kandung; furudh menghabiskan harta sehingga 'ashobah kandung tidak
    mendapat apa-apa. Hanya berlaku bila kebijakan mengikuti putusan Umar.
    """
    return (
        policy.mushtarakah_policy == "UMAR"
        and bool(q.get(H.HUSBAND))
        and (bool(q.get(H.MOTHER)) or count_of(q, GRANDMOTHERS) > 0)
        and count_of(q, UTERINE_SIBLINGS) >= 2
        and bool(q.get(H.BROTHER_FULL))
        and not flags.has_descendant
        and not q.get(H.FATHER)
        and not q.get(H.GRANDFATHER_PATERNAL)
    )


def apply_mushtarakah(q: Dict[HeirType, int], flags: DerivedFlags,
                      policy: InheritancePolicy) -> Dict[HeirType, FurudhItem]:
    """Saudara kandung digabung dengan saudara seibu; 1/3 dibagi rata per kepala tanpa 2:1."""
    participants = [t for t in q if t in UTERINE_SIBLINGS | FULL_SIBLINGS]
    heads = sum(q[t] for t in participants)
    overrides: Dict[HeirType, FurudhItem] = {}
    for heir_type in participants:
        share = frac(1, 3) * frac(q[heir_type], heads)
        overrides[heir_type] = FurudhItem(
            heir_type=heir_type,
            count=q[heir_type],
            category=ShareCategory.FURUDH,
            share=share,
            original_share=share,
            reason=(
                f"Musytarakah: {HEIR_META[heir_type].name_id} berserikat dalam 1/3 bersama "
                f"saudara seibu, dibagi rata {heads} kepala"
            ),
        )
    return overrides
