# faraidh/special/named_cases.py
"""
Kasus bernama yang bagiannya sudah tercakup tabel furudh/hijab umum.
Kasus ini hanya dilaporkan (summary + jejak), tanpa mengubah bagian.
Semua syarat dibaca dari ahli waris aktif (setelah hijab).
"""

from typing import Dict

from schemas import DerivedFlags, FurudhItem, HeirType, InheritancePolicy
from faraidh.rules.flags import GRANDMOTHERS, UTERINE_SIBLINGS, count_of

H = HeirType


def is_sisters_maal_ghayr(q: Dict[HeirType, int], flags: DerivedFlags, policy: InheritancePolicy) -> bool:
    # anak perempuan + saudari kandung/seayah, tanpa anak laki-laki, ayah, atau saudara laki-laki
    return (
        bool(q.get(H.DAUGHTER))
        and not q.get(H.SON)
        and bool(q.get(H.SISTER_FULL) or q.get(H.SISTER_PATERNAL))
        and not q.get(H.BROTHER_FULL)
        and not q.get(H.BROTHER_PATERNAL)
        and not q.get(H.FATHER)
    )


def is_completion_two_thirds(q: Dict[HeirType, int], flags: DerivedFlags, policy: InheritancePolicy) -> bool:
    # tepat satu anak perempuan + cucu perempuan tanpa cucu laki-laki: takmilah lits-tsulutsain
    return (
        q.get(H.DAUGHTER, 0) == 1
        and q.get(H.GRANDDAUGHTER_SON, 0) >= 1
        and not q.get(H.SON)
        and not q.get(H.GRANDSON_SON)
    )


def is_kalalah_uterine(q: Dict[HeirType, int], flags: DerivedFlags, policy: InheritancePolicy) -> bool:
    return not flags.has_descendant and not q.get(H.FATHER) and count_of(q, UTERINE_SIBLINGS) > 0


def is_multiple_grandmothers(q: Dict[HeirType, int], flags: DerivedFlags, policy: InheritancePolicy) -> bool:
    return count_of(q, GRANDMOTHERS) >= 2


def no_override(q: Dict[HeirType, int], flags: DerivedFlags,
                policy: InheritancePolicy) -> Dict[HeirType, FurudhItem]:
    return {}
