# faraidh/special/akdariyyah.py
from typing import Dict, List

from schemas import DerivedFlags, FurudhItem, HeirType, InheritancePolicy, ShareCategory
from faraidh.math.fraction import frac
from faraidh.rules.flags import FULL_SIBLINGS, PATERNAL_SIBLINGS, count_of

H = HeirType
SISTERS = (H.SISTER_FULL, H.SISTER_PATERNAL)


def _the_sister(q: Dict[HeirType, int]) -> HeirType:
    return next(t for t in SISTERS if q.get(t))


def is_akdariyyah(q: Dict[HeirType, int], flags: DerivedFlags, policy: InheritancePolicy) -> bool:
    # syarat: zawj, umm (1/3), jadd, tepat satu ukht (kandung/seayah); tanpa keturunan & ayah
    one_sister = (
        count_of(q, FULL_SIBLINGS | PATERNAL_SIBLINGS) == 1
        and any(q.get(t) == 1 for t in SISTERS)
    )
    return (
        policy.grandfather_mode == "COMPETE_WITH_SIBLINGS"
        and bool(q.get(H.HUSBAND))
        and bool(q.get(H.MOTHER))
        and bool(q.get(H.GRANDFATHER_PATERNAL))
        and one_sister
        and not flags.has_descendant
        and not flags.has_multiple_siblings
        and not q.get(H.FATHER)
    )


def apply_akdariyyah(q: Dict[HeirType, int], flags: DerivedFlags,
                     policy: InheritancePolicy) -> Dict[HeirType, FurudhItem]:
    """
    Langkah pertama: Jadd 1/6 dan Ukht 1/2 sebagai fardh sehingga masalah di-aul
    dari 6 ke 9. Penggabungan bagian keduanya dilakukan di `regroup_akdariyyah`.
    """
    sister = _the_sister(q)
    return {
        H.GRANDFATHER_PATERNAL: FurudhItem(
            heir_type=H.GRANDFATHER_PATERNAL, count=q[H.GRANDFATHER_PATERNAL],
            category=ShareCategory.FURUDH, share=frac(1, 6), original_share=frac(1, 6),
            reason="Akdariyyah: Jadd 1/6",
        ),
        sister: FurudhItem(
            heir_type=sister, count=1,
            category=ShareCategory.FURUDH, share=frac(1, 2), original_share=frac(1, 2),
            reason="Akdariyyah: Ukht 1/2 (di-fardh-kan agar tidak gugur)",
        ),
    }


def regroup_akdariyyah(items: List[FurudhItem]) -> None:
    """Setelah aul: bagian Jadd + Ukht digabung lalu dibagi muqasamah 2:1."""
    jadd = next(i for i in items if i.heir_type is H.GRANDFATHER_PATERNAL)
    ukht = next(i for i in items if i.heir_type in SISTERS)
    pooled = jadd.share + ukht.share
    jadd.share = pooled * frac(2, 3)
    ukht.share = pooled * frac(1, 3)
    jadd.reason += "; setelah aul bagian Jadd dan Ukht digabung lalu dibagi 2:1 (muqasamah)"
    ukht.reason += "; setelah aul bagian Jadd dan Ukht digabung lalu dibagi 2:1 (muqasamah)"
