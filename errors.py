# errors.py
"""Taksonomi error mesin faraidh.

Setiap error membawa `code` yang stabil (dipakai klien/API) dan `message`
yang bisa dibaca manusia. Validasi berhenti pada kegagalan pertama.
"""

from typing import Any, Dict


class FaraidhError(Exception):
    """Base exception untuk seluruh kegagalan perhitungan."""

    code = "FaraidhError"
    status_code = 400

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, str]:
        return {"code": self.code, "message": self.message}


class InvalidEstateValueError(FaraidhError):
    """Nilai harta (gross/debts/funeral/wasiyyah) negatif."""

    code = "InvalidEstateValue"


class NegativeNetEstateError(FaraidhError):
    """Utang + biaya jenazah melebihi harta kotor."""

    code = "NegativeNetEstate"


class InvalidHeirCountError(FaraidhError):
    """Jumlah ahli waris di luar batas (count < 1, istri > 4, suami > 1)."""

    code = "InvalidHeirCount"


class DuplicateHeirTypeError(FaraidhError):
    code = "DuplicateHeirType"


class InvalidHeirTypeForGenderError(FaraidhError):
    """Jenis pasangan tidak cocok dengan jenis kelamin pewaris."""

    code = "InvalidHeirTypeForGender"


class NoEligibleHeirsError(FaraidhError):
    """Daftar ahli waris kosong atau semuanya mahjub."""

    code = "NoEligibleHeirs"


class DivisionByZeroError(FaraidhError, ZeroDivisionError):
    """Pelanggaran invarian pecahan internal; bukan kesalahan input."""

    code = "DivisionByZero"
    status_code = 500
