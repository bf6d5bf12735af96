# faraidh/rules/hijab.py
"""Hijab hirman: ahli waris yang lebih jauh gugur oleh yang lebih dekat.

Aturan dievaluasi berurutan (penghalang yang lebih kuat lebih dulu). Hanya
ahli waris yang belum mahjub yang dapat menghalangi.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, FrozenSet, List, NamedTuple, Tuple

from schemas import HeirType, InheritancePolicy, HEIR_META, HEIR_ORDER
from faraidh.rules.flags import (
    DESCENDANTS,
    EXTENDED_AGNATES,
    FEMALE_DESCENDANTS,
    FULL_SIBLINGS,
    GRANDMOTHERS,
    MALE_DESCENDANTS,
    MANUMITTERS,
    PATERNAL_SIBLINGS,
    SIBLINGS,
    UTERINE_SIBLINGS,
)

logger = logging.getLogger(__name__)

H = HeirType

Active = Dict[HeirType, int]


class HijabRule(NamedTuple):
    code: str
    description: str
    # mengembalikan daftar penghalang yang aktif (kosong = aturan tidak berlaku)
    blockers: Callable[[Active, InheritancePolicy], List[HeirType]]
    targets: Callable[[InheritancePolicy], FrozenSet[HeirType]]


class HijabDecision(NamedTuple):
    blocked_by: List[HeirType]
    rule: str
    reason: str


def _present(active: Active, *types: HeirType) -> List[HeirType]:
    return [t for t in types if active.get(t, 0) > 0]


def _fixed(types) -> Callable[[InheritancePolicy], FrozenSet[HeirType]]:
    targets = frozenset(types)
    return lambda policy: targets


AFTER_FULL_BROTHER = PATERNAL_SIBLINGS | frozenset(EXTENDED_AGNATES) | MANUMITTERS
AFTER_PATERNAL_BROTHER = frozenset(EXTENDED_AGNATES) | MANUMITTERS


def _grandfather_targets(policy: InheritancePolicy) -> FrozenSet[HeirType]:
    targets = UTERINE_SIBLINGS | frozenset(EXTENDED_AGNATES) | MANUMITTERS
    if policy.grandfather_mode == "LIKE_FATHER":
        targets = targets | FULL_SIBLINGS | PATERNAL_SIBLINGS
    return targets


def _two_daughters_without_grandson(active: Active, policy: InheritancePolicy) -> List[HeirType]:
    if active.get(H.DAUGHTER, 0) >= 2 and not active.get(H.GRANDSON_SON, 0):
        return [H.DAUGHTER]
    return []


def _two_full_sisters_without_paternal_brother(active: Active, policy: InheritancePolicy) -> List[HeirType]:
    if active.get(H.SISTER_FULL, 0) >= 2 and not active.get(H.BROTHER_PATERNAL, 0):
        return [H.SISTER_FULL]
    return []


def _sister_maal_ghayr(sister: HeirType, brother: HeirType):
    """Saudari yang menjadi 'ashobah bersama anak/cucu perempuan berkedudukan seperti saudaranya."""
    def blockers(active: Active, policy: InheritancePolicy) -> List[HeirType]:
        if active.get(sister, 0) and not active.get(brother, 0):
            daughters = _present(active, *FEMALE_DESCENDANTS)
            if daughters:
                return [sister] + daughters
        return []
    return blockers


def _agnate_tier(index: int) -> HijabRule:
    closer = EXTENDED_AGNATES[index]
    farther = EXTENDED_AGNATES[index + 1:]
    return HijabRule(
        code=f"H13.{index + 1}",
        description=f"{HEIR_META[closer].name_id} menghalangi 'ashabah yang lebih jauh",
        blockers=lambda active, policy: _present(active, closer),
        targets=_fixed(frozenset(farther) | MANUMITTERS),
    )


HIJAB_RULES: Tuple[HijabRule, ...] = (
    HijabRule(
        "H01", "Anak laki-laki menghalangi cucu dari anak laki-laki",
        lambda a, p: _present(a, H.SON),
        _fixed({H.GRANDSON_SON, H.GRANDDAUGHTER_SON}),
    ),
    HijabRule(
        "H02", "Keturunan laki-laki menghalangi seluruh saudara dan 'ashabah jauh",
        lambda a, p: _present(a, *sorted(MALE_DESCENDANTS, key=HEIR_ORDER.get)),
        _fixed(SIBLINGS | frozenset(EXTENDED_AGNATES) | MANUMITTERS),
    ),
    HijabRule(
        "H03", "Ayah menghalangi kakek, nenek dari ayah, seluruh saudara dan 'ashabah jauh",
        lambda a, p: _present(a, H.FATHER),
        _fixed({H.GRANDFATHER_PATERNAL, H.GRANDMOTHER_PATERNAL} | SIBLINGS
               | frozenset(EXTENDED_AGNATES) | MANUMITTERS),
    ),
    HijabRule(
        "H04", "Ibu menghalangi semua nenek",
        lambda a, p: _present(a, H.MOTHER),
        _fixed(GRANDMOTHERS),
    ),
    HijabRule(
        "H05", "Keturunan (laki-laki maupun perempuan) menghalangi saudara seibu",
        lambda a, p: _present(a, *sorted(DESCENDANTS, key=HEIR_ORDER.get)),
        _fixed(UTERINE_SIBLINGS),
    ),
    HijabRule(
        "H06", "Kakek menghalangi saudara seibu dan 'ashabah jauh",
        lambda a, p: _present(a, H.GRANDFATHER_PATERNAL),
        _grandfather_targets,
    ),
    HijabRule(
        "H07", "Dua anak perempuan atau lebih menghalangi cucu perempuan (tanpa cucu laki-laki)",
        _two_daughters_without_grandson,
        _fixed({H.GRANDDAUGHTER_SON}),
    ),
    HijabRule(
        "H08", "Saudara laki-laki kandung menghalangi saudara seayah dan 'ashabah jauh",
        lambda a, p: _present(a, H.BROTHER_FULL),
        _fixed(AFTER_FULL_BROTHER),
    ),
    HijabRule(
        "H09", "Saudari kandung ma'al ghayr menghalangi saudara seayah dan 'ashabah jauh",
        _sister_maal_ghayr(H.SISTER_FULL, H.BROTHER_FULL),
        _fixed(AFTER_FULL_BROTHER),
    ),
    HijabRule(
        "H10", "Dua saudari kandung atau lebih menghalangi saudari seayah (tanpa saudara seayah)",
        _two_full_sisters_without_paternal_brother,
        _fixed({H.SISTER_PATERNAL}),
    ),
    HijabRule(
        "H11", "Saudara laki-laki seayah menghalangi 'ashabah jauh",
        lambda a, p: _present(a, H.BROTHER_PATERNAL),
        _fixed(AFTER_PATERNAL_BROTHER),
    ),
    HijabRule(
        "H12", "Saudari seayah ma'al ghayr menghalangi 'ashabah jauh",
        _sister_maal_ghayr(H.SISTER_PATERNAL, H.BROTHER_PATERNAL),
        _fixed(AFTER_PATERNAL_BROTHER),
    ),
) + tuple(_agnate_tier(i) for i in range(len(EXTENDED_AGNATES)))


def apply_hijab(
    counts: Dict[HeirType, int],
    policy: InheritancePolicy,
    rules: Tuple[HijabRule, ...] = HIJAB_RULES,
) -> Tuple[Active, Dict[HeirType, HijabDecision]]:
    """
    Kembalikan (ahli waris aktif, keputusan hijab per ahli waris mahjub).
    Ahli waris aktif diurutkan sesuai urutan HeirType.
    """
    active: Active = {t: counts[t] for t in sorted(counts, key=HEIR_ORDER.get)}
    blocked: Dict[HeirType, HijabDecision] = {}

    for rule in rules:
        blockers = rule.blockers(active, policy)
        if not blockers:
            continue
        for target in sorted(rule.targets(policy), key=HEIR_ORDER.get):
            if target in active and target not in blockers:
                names = ", ".join(HEIR_META[b].name_id for b in blockers)
                blocked[target] = HijabDecision(
                    blocked_by=blockers,
                    rule=rule.code,
                    reason=f"Mahjub (terhalang) oleh {names}. {rule.description}.",
                )
                del active[target]
                logger.debug("Hijab %s: %s terhalang oleh %s", rule.code, target.value, names)

    return active, blocked
