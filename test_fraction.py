# Di dalam file: test_fraction.py

from fractions import Fraction

import pytest

from errors import DivisionByZeroError
from faraidh.math.ashl import bandingkan, compute_ashl
from faraidh.math.fraction import (
    arabic_name,
    asal_masalah,
    compare,
    compare_to_one,
    divide,
    frac,
    sum_exact,
    to_common_denominator,
    to_decimal,
)


class TestPecahan:

    def test_tereduksi_dan_penyebut_positif(self):
        value = frac(2, -4)
        assert value == Fraction(-1, 2)
        assert value.denominator == 2

    def test_penyebut_nol(self):
        with pytest.raises(DivisionByZeroError) as exc:
            frac(1, 0)
        assert exc.value.code == "DivisionByZero"
        with pytest.raises(ZeroDivisionError):
            divide(frac(1, 2), Fraction(0))

    def test_perbandingan(self):
        assert compare(frac(1, 3), frac(2, 6)) == 0
        assert compare(frac(1, 2), frac(1, 3)) == 1
        assert compare(frac(1, 8), frac(1, 6)) == -1

    def test_asal_masalah(self):
        assert asal_masalah([frac(1, 2), frac(1, 3), frac(1, 4)]) == 12
        assert asal_masalah([]) == 1
        assert to_common_denominator([frac(1, 8), frac(2, 3)]) == (24, [3, 16])

    def test_jumlah_dan_banding_satu(self):
        assert sum_exact([frac(1, 2), frac(1, 6), frac(1, 3)]) == 1
        assert compare_to_one([frac(1, 2), frac(1, 6), frac(1, 3)]) == 0
        assert compare_to_one([frac(1, 2), frac(2, 3)]) == 1
        assert compare_to_one([frac(1, 8)]) == -1

    def test_nama_arab_dan_desimal(self):
        assert arabic_name(frac(1, 6)) == "السدس"
        assert arabic_name(frac(5, 12)) is None
        assert to_decimal(frac(1, 3), 4) == 0.3333


class TestAshl:

    def test_hubungan_penyebut(self):
        assert bandingkan(6, 6).relation == "mumatsalah"
        assert bandingkan(3, 6).relation == "mudakholah"
        assert bandingkan(4, 6).relation == "muwafaqoh"
        assert bandingkan(3, 8).relation == "mubayanah"
        assert bandingkan(3, 8).lcm == 24

    def test_ashl_dari_penyebut(self):
        info = compute_ashl([8, 6, 6, 3])
        assert info.ashl_awal == 24
        assert len(info.comparisons) == 3

    def test_ashl_hanya_ashobah(self):
        info = compute_ashl([1])
        assert info.ashl_awal == 1
        assert info.comparisons == []
