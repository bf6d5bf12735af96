# faraidh/special/router.py
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple

from schemas import DerivedFlags, FurudhItem, HeirType, InheritancePolicy

from .akdariyyah import apply_akdariyyah, is_akdariyyah, regroup_akdariyyah
from .jadd_ikhwah import apply_jadd_ikhwah, is_jadd_ikhwah
from .mushtarakah import apply_mushtarakah, is_mushtarakah
from .named_cases import (
    is_completion_two_thirds,
    is_kalalah_uterine,
    is_multiple_grandmothers,
    is_sisters_maal_ghayr,
    no_override,
)
from .umariyatayn import apply_umariyatayn, is_umariyatayn

Active = Dict[HeirType, int]


class SpecialCase(NamedTuple):
    code: str
    name: str
    arabic_name: str
    matches: Callable[[Active, DerivedFlags, InheritancePolicy], bool]
    override: Callable[[Active, DerivedFlags, InheritancePolicy], Dict[HeirType, FurudhItem]]
    # dijalankan setelah aul/radd (mis. penggabungan bagian pada Akdariyyah)
    after_adjust: Optional[Callable[[List[FurudhItem]], None]] = None


UMARIYATAYN = SpecialCase(
    "UMARIYATAYN", "Umariyatayn (Gharrawain)", "العمريتان",
    is_umariyatayn, apply_umariyatayn,
)
MUSHTARAKAH = SpecialCase(
    "MUSHTARAKAH", "Musytarakah (Himariyyah)", "المشتركة",
    is_mushtarakah, apply_mushtarakah,
)
AKDARIYYAH = SpecialCase(
    "AKDARIYYAH", "Akdariyyah", "الأكدرية",
    is_akdariyyah, apply_akdariyyah, regroup_akdariyyah,
)
JADD_IKHWAH = SpecialCase(
    "JADD_MAAL_IKHWAH", "Jadd ma'al Ikhwah", "الجد مع الإخوة",
    is_jadd_ikhwah, apply_jadd_ikhwah,
)

# Kasus bernama tanpa override: hanya dilaporkan
SISTERS_MAAL_GHAYR = SpecialCase(
    "SISTERS_MAAL_GHAYR", "Saudari 'Ashobah ma'al Ghair", "الأخوات مع البنات عصبة",
    is_sisters_maal_ghayr, no_override,
)
COMPLETION_TWO_THIRDS = SpecialCase(
    "COMPLETION_TWO_THIRDS", "Takmilah lits-Tsulutsain", "تكملة الثلثين",
    is_completion_two_thirds, no_override,
)
KALALAH_UTERINE = SpecialCase(
    "KALALAH_UTERINE", "Kalalah (Saudara Seibu)", "الكلالة",
    is_kalalah_uterine, no_override,
)
MULTIPLE_GRANDMOTHERS = SpecialCase(
    "MULTIPLE_GRANDMOTHERS", "Beberapa Nenek Berbagi 1/6", "اشتراك الجدات في السدس",
    is_multiple_grandmothers, no_override,
)

# Urutan = prioritas; kasus paling spesifik lebih dulu (Akdariyyah sebelum Jadd ma'al Ikhwah)
SPECIAL_CASES: Tuple[SpecialCase, ...] = (
    UMARIYATAYN, MUSHTARAKAH, AKDARIYYAH, JADD_IKHWAH,
    SISTERS_MAAL_GHAYR, COMPLETION_TWO_THIRDS, KALALAH_UTERINE, MULTIPLE_GRANDMOTHERS,
)


def match_special_cases(
    active: Active,
    flags: DerivedFlags,
    policy: InheritancePolicy,
    cases: Tuple[SpecialCase, ...] = SPECIAL_CASES,
) -> List[SpecialCase]:
    """Semua kasus yang cocok, sesuai urutan prioritas."""
    return [case for case in cases if case.matches(active, flags, policy)]


def apply_special_cases(
    active: Active,
    flags: DerivedFlags,
    policy: InheritancePolicy,
    cases: Tuple[SpecialCase, ...] = SPECIAL_CASES,
) -> Tuple[Optional[SpecialCase], Dict[HeirType, FurudhItem], List[SpecialCase]]:
    """
    Kembalikan (kasus terpilih, override furudh, semua kasus yang cocok).
    Hanya kasus pertama yang diterapkan.
    """
    matched = match_special_cases(active, flags, policy, cases)
    if not matched:
        return None, {}, []
    chosen = matched[0]
    return chosen, chosen.override(active, flags, policy), matched
