# Di dalam file: test_estate.py

import json

import pytest

from config import Settings, default_policy
from errors import InvalidEstateValueError, NegativeNetEstateError
from faraidh.estate import resolve_net_estate, validate_estate
from faraidh.rules.loader import load_policy
from schemas import EstateInput, InheritancePolicy


def resolve(policy=None, **fields):
    estate = EstateInput(**fields)
    validate_estate(estate)
    return resolve_net_estate(estate, policy or InheritancePolicy())


class TestTirkah:

    def test_tanpa_potongan(self):
        result = resolve(gross_value=1_000_000)
        assert result.net_estate == 1_000_000
        assert result.currency == "IDR"
        assert not result.deductions.wasiyyah_capped

    def test_wasiat_dibatasi_sepertiga(self):
        result = resolve(gross_value=1_000_000_000, funeral_costs=10_000_000, debts=50_000_000,
                         wasiyyah=400_000_000)
        assert result.deductions.wasiyyah == 313_333_333
        assert result.deductions.wasiyyah_requested == 400_000_000
        assert result.deductions.wasiyyah_capped
        assert result.net_estate == 626_666_667

    def test_wasiat_disetujui_ahli_waris(self):
        result = resolve(gross_value=1_000_000_000, funeral_costs=10_000_000, debts=50_000_000,
                         wasiyyah=400_000_000, wasiyyah_approved_by_heirs=True)
        assert result.deductions.wasiyyah == 400_000_000
        assert result.net_estate == 540_000_000

    def test_wasiat_tidak_melebihi_sisa_harta(self):
        result = resolve(gross_value=100, debts=40, wasiyyah=500, wasiyyah_approved_by_heirs=True)
        assert result.deductions.wasiyyah == 60
        assert result.net_estate == 0

    def test_batas_wasiat_dari_policy(self):
        result = resolve(policy=InheritancePolicy(max_bequest_fraction="1/4"), gross_value=1000, wasiyyah=900)
        assert result.deductions.wasiyyah == 250
        assert result.net_estate == 750

    def test_harta_nol(self):
        assert resolve(gross_value=0).net_estate == 0

    def test_nilai_negatif(self):
        with pytest.raises(InvalidEstateValueError):
            resolve(gross_value=-1)
        with pytest.raises(InvalidEstateValueError) as exc:
            resolve(gross_value=100, wasiyyah=-5)
        assert exc.value.details == {"field": "wasiyyah"}

    def test_utang_melebihi_harta(self):
        with pytest.raises(NegativeNetEstateError):
            resolve(gross_value=100, debts=80, funeral_costs=30)


class TestKonfigurasi:

    def test_policy_dari_settings(self):
        policy = default_policy(Settings(radd_includes_spouse=True, max_bequest_fraction="2/6"))
        assert policy.radd_includes_spouse
        assert policy.max_bequest_fraction == "1/3"

    def test_policy_dari_file(self, tmp_path):
        path = tmp_path / "policy.json"
        path.write_text(json.dumps({"grandfather_mode": "LIKE_FATHER", "mushtarakah_policy": "STANDARD"}))
        assert load_policy(str(path)) == InheritancePolicy(grandfather_mode="LIKE_FATHER",
                                                           mushtarakah_policy="STANDARD")
        policy = default_policy(Settings(policy_file=str(path)))
        assert policy.grandfather_mode == "LIKE_FATHER"

    def test_batas_wasiat_tidak_valid(self):
        with pytest.raises(ValueError):
            InheritancePolicy(max_bequest_fraction="3/2")
