# faraidh/math/inkisar.py

import math
from fractions import Fraction
from typing import Dict, List, Tuple

from schemas import ComparisonItem, HeirType, HEIR_META
from faraidh.math.ashl import bandingkan


def _relation(a: int, b: int) -> str:
    """Hubungan dua bilangan (mumatsalah/mudakholah/muwafaqoh/mubayanah), sama dengan perbandingan penyebut."""
    return bandingkan(a, b).relation


def _single_group_factor(ruus: int, saham_kelompok: int) -> Tuple[int, str]:
    """
    Faktor pengali untuk 1 kelompok agar saham_kelompok habis dibagi ruus.
      - mubayanah : faktor = ruus
      - muwafaqoh : faktor = ruus / gcd
      - mudakholah: saham | ruus -> ruus / saham; ruus | saham -> 1
      - mumatsalah: 1
    """
    rel = _relation(ruus, saham_kelompok)
    if rel == "mubayanah":
        return ruus, rel
    if rel == "mumatsalah":
        return 1, rel
    if rel == "mudakholah":
        if ruus % saham_kelompok == 0:
            return ruus // saham_kelompok, rel
        return 1, rel
    return ruus // math.gcd(ruus, saham_kelompok), rel


def compute_inkisar_multiplier(
    groups: List[Tuple[str, int, int]]
) -> Tuple[int, List[ComparisonItem], List[str]]:
    """
    Hitung faktor tashih inkisar untuk 1 atau banyak kelompok.
    groups = list of (nama_kelompok, ruus, saham_kelompok); kelompok dengan
    ruus 1 atau saham 0 tidak pernah inkisar dan dilewati.

    Pengali akhir = KPK dari faktor tiap kelompok (faktor yang sama/masuk
    ke faktor lain tidak dikalikan dua kali).
    """
    notes: List[str] = []
    comps: List[ComparisonItem] = []
    multiplier = 1

    for nama, ruus, saham_k in groups:
        if ruus <= 1 or saham_k == 0:
            continue
        factor, rel = _single_group_factor(ruus, saham_k)
        comps.append(ComparisonItem(a=ruus, b=saham_k, relation=rel))
        if factor > 1:
            notes.append(f"Kelompok {nama}: {ruus} orang : saham {saham_k} -> {rel}, faktor {factor}")
            multiplier = math.lcm(multiplier, factor)

    if multiplier == 1:
        notes.append("Tidak ada inkisar (semua kelompok sudah terbagi rata).")
    else:
        notes.append(f"Tashih inkisar: Asl dan seluruh saham dikalikan {multiplier}.")

    return multiplier, comps, notes


def compute_saham(
    portions: List[Tuple[HeirType, int, Fraction]],
    base: int = 1,
) -> Tuple[int, int, Dict[HeirType, int], List[ComparisonItem], List[str]]:
    """
    Dari pecahan akhir tiap kelompok ahli waris, hitung:
      (ashl_akhir, tashih, saham per kelompok atas tashih, comparisons, notes)
    `base` = AM hasil aul (bila ada); AM akhir minimal kelipatannya.
    """
    ashl_akhir = base
    for _, _, share in portions:
        if share:
            ashl_akhir = math.lcm(ashl_akhir, share.denominator)

    saham_awal = {
        heir_type: share.numerator * (ashl_akhir // share.denominator)
        for heir_type, _, share in portions
    }
    groups = [
        (HEIR_META[heir_type].name_id, count, saham_awal[heir_type])
        for heir_type, count, _ in portions
    ]
    multiplier, comps, notes = compute_inkisar_multiplier(groups)
    saham = {heir_type: s * multiplier for heir_type, s in saham_awal.items()}
    return ashl_akhir, ashl_akhir * multiplier, saham, comps, notes
