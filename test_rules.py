# Di dalam file: test_rules.py
"""Tes tabel aturan: kelengkapan, urutan hijab, dan alokasi nominal."""

from fractions import Fraction

from faraidh.finalizer import allocate_amounts, verify
from faraidh.rules.asabah import ASABAH_TIERS, NON_RESIDUARY
from faraidh.rules.engine import FURUDH_RULES
from faraidh.rules.flags import derive_flags
from faraidh.rules.hijab import apply_hijab
from faraidh.special.jadd_ikhwah import compute_choice_for_jadd
from schemas import Deceased, Gender, HeirInput, HeirType as H, InheritancePolicy, HEIR_META, HEIR_ORDER


def flags_for(*heirs, policy=None, gender="male"):
    return derive_flags([HeirInput(type=t, count=c) for t, c in heirs], Deceased(gender=gender),
                        policy or InheritancePolicy())


class TestKelengkapanTabel:

    def test_tabel_furudh_mencakup_semua_jenis(self):
        assert set(FURUDH_RULES) == set(H)

    def test_metadata_dan_urutan_lengkap(self):
        assert set(HEIR_META) == set(H)
        assert sorted(HEIR_ORDER.values()) == list(range(len(H)))

    def test_setiap_jenis_punya_kedudukan_ashobah(self):
        assert set(ASABAH_TIERS) | NON_RESIDUARY == set(H)
        assert not set(ASABAH_TIERS) & NON_RESIDUARY


class TestFlag:

    def test_flag_keturunan(self):
        flags = flags_for((H.DAUGHTER, 2), (H.GRANDDAUGHTER_SON, 1))
        assert flags.has_descendant
        assert flags.has_female_descendant_only
        assert not flags.has_male_descendant

    def test_jumlah_saudara(self):
        flags = flags_for((H.BROTHER_FULL, 1), (H.SISTER_UTERINE, 1))
        assert flags.sibling_count == 2
        assert flags.has_multiple_siblings
        flags = flags_for((H.BROTHER_FULL, 1), (H.SISTER_UTERINE, 1),
                          policy=InheritancePolicy(mother_sibling_rule="EXCLUDE_UTERINE"))
        assert flags.sibling_count == 1
        assert not flags.has_multiple_siblings

    def test_jenis_kelamin_pewaris_tercatat(self):
        assert flags_for((H.HUSBAND, 1), gender="female").deceased_gender is Gender.FEMALE
        assert flags_for((H.WIFE, 1)).deceased_gender is Gender.MALE


class TestHijab:

    def test_urutan_ahli_waris_aktif(self):
        counts = {H.UNCLE_FULL: 1, H.WIFE: 2, H.DAUGHTER: 1}
        active, blocked = apply_hijab(counts, InheritancePolicy())
        assert list(active) == [H.WIFE, H.DAUGHTER, H.UNCLE_FULL]
        assert blocked == {}

    def test_kode_aturan_tercatat(self):
        counts = {H.SON: 1, H.GRANDSON_SON: 1, H.BROTHER_FULL: 1}
        active, blocked = apply_hijab(counts, InheritancePolicy())
        assert list(active) == [H.SON]
        assert blocked[H.GRANDSON_SON].rule == "H01"
        assert blocked[H.BROTHER_FULL].rule == "H02"


class TestPilihanJadd:

    def test_muqasamah_menang_bila_seri(self):
        mode, share, _ = compute_choice_for_jadd(Fraction(1), 4, has_furudh=False)
        assert mode == "muqasamah"
        assert share == Fraction(1, 3)

    def test_sepertiga_sisa(self):
        mode, share, _ = compute_choice_for_jadd(Fraction(1, 2), 8, has_furudh=True)
        assert mode == "tsulutsul_baqi"
        assert share == Fraction(1, 6)

    def test_seperenam(self):
        mode, share, _ = compute_choice_for_jadd(Fraction(1, 4), 2, has_furudh=True)
        assert mode == "sudus"
        assert share == Fraction(1, 6)


class TestAlokasiNominal:

    def test_sisa_satuan_ke_urutan_jenis(self):
        third = Fraction(1, 3)
        portions = [(H.MOTHER, third), (H.FATHER, third), (H.SON, third)]
        amounts = allocate_amounts(portions, 100)
        assert amounts == {H.FATHER: 34, H.MOTHER: 33, H.SON: 33}
        assert verify(portions, amounts, 100).is_valid

    def test_sisa_terbesar_didahulukan(self):
        portions = [(H.WIFE, Fraction(1, 8)), (H.SON, Fraction(7, 8))]
        amounts = allocate_amounts(portions, 10)
        # 1.25 dan 8.75 -> anak laki-laki mendapat satuan sisa
        assert amounts == {H.WIFE: 1, H.SON: 9}

    def test_verifikasi_gagal(self):
        portions = [(H.WIFE, Fraction(1, 8))]
        result = verify(portions, {H.WIFE: 1}, 10)
        assert not result.is_valid
        assert result.difference == 9
