# faraidh/math/ashl.py

from typing import List
import math

from schemas import ComparisonItem, AshlInfo


def bandingkan(a: int, b: int) -> ComparisonItem:
    """
    Bandingkan dua penyebut furudh untuk menentukan:
    - Mumatsalah (sama)
    - Mudakholah (salah satu masuk ke lainnya)
    - Muwafaqoh (ada faktor persekutuan)
    - Mubayanah (berbeda total)
    """
    if a == b:
        relation = "mumatsalah"
    elif a % b == 0 or b % a == 0:
        relation = "mudakholah"
    elif math.gcd(a, b) > 1:
        relation = "muwafaqoh"
    else:
        relation = "mubayanah"

    return ComparisonItem(a=a, b=b, relation=relation, lcm=math.lcm(a, b))


def compute_ashl(denominators: List[int]) -> AshlInfo:
    """
    Menentukan Aslul Mas'alah dari daftar penyebut furudh.
    Langkah:
    1. Ambil penyebut unik (urut naik)
    2. Bandingkan dua-dua untuk tentukan jenis hubungan
    3. Cari KPK (lcm) sebagai Aslul Mas'alah
    """
    unique = sorted(set(d for d in denominators if d > 1))
    if not unique:
        # Hanya ashobah: seluruh harta = 1 bagian
        return AshlInfo(ashl_awal=1, ashl_akhir=1, tashih=1, comparisons=[], total_saham=1, status="adil")

    comparisons: List[ComparisonItem] = []
    for i in range(len(unique)):
        for j in range(i + 1, len(unique)):
            comparisons.append(bandingkan(unique[i], unique[j]))

    ashl_awal = math.lcm(*unique)

    # AM akhir & tashih diisi calculator setelah aul/radd/inkisar
    return AshlInfo(
        ashl_awal=ashl_awal,
        ashl_akhir=ashl_awal,
        tashih=ashl_awal,
        comparisons=comparisons,
        total_saham=ashl_awal,
        status="adil",
    )
