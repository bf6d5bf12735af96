# Di dalam file: schemas.py

from __future__ import annotations

from enum import Enum
from fractions import Fraction
from typing import Dict, List, Literal, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# --- Enum dasar ---
class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class HeirGroup(str, Enum):
    SPOUSE = "spouse"
    ASCENDANT = "ascendant"
    DESCENDANT = "descendant"
    SIBLING = "sibling"
    EXTENDED = "extended"      # keponakan, paman, sepupu
    WALA = "wala"              # pembebas budak


class HeirType(str, Enum):
    HUSBAND = "HUSBAND"
    WIFE = "WIFE"
    FATHER = "FATHER"
    MOTHER = "MOTHER"
    GRANDFATHER_PATERNAL = "GRANDFATHER_PATERNAL"
    GRANDMOTHER_MATERNAL = "GRANDMOTHER_MATERNAL"
    GRANDMOTHER_PATERNAL = "GRANDMOTHER_PATERNAL"
    SON = "SON"
    DAUGHTER = "DAUGHTER"
    GRANDSON_SON = "GRANDSON_SON"
    GRANDDAUGHTER_SON = "GRANDDAUGHTER_SON"
    BROTHER_FULL = "BROTHER_FULL"
    SISTER_FULL = "SISTER_FULL"
    BROTHER_PATERNAL = "BROTHER_PATERNAL"
    SISTER_PATERNAL = "SISTER_PATERNAL"
    BROTHER_UTERINE = "BROTHER_UTERINE"
    SISTER_UTERINE = "SISTER_UTERINE"
    NEPHEW_FULL = "NEPHEW_FULL"
    NEPHEW_PATERNAL = "NEPHEW_PATERNAL"
    UNCLE_FULL = "UNCLE_FULL"
    UNCLE_PATERNAL = "UNCLE_PATERNAL"
    COUSIN_FULL = "COUSIN_FULL"
    COUSIN_PATERNAL = "COUSIN_PATERNAL"
    MANUMITTER_MALE = "MANUMITTER_MALE"
    MANUMITTER_FEMALE = "MANUMITTER_FEMALE"


class HeirMeta(NamedTuple):
    name_id: str      # Nama dalam bahasa Indonesia
    name_ar: str      # Nama dalam bahasa Arab
    gender: Gender
    group: HeirGroup


M, F = Gender.MALE, Gender.FEMALE

HEIR_META: Dict[HeirType, HeirMeta] = {
    HeirType.HUSBAND: HeirMeta("Suami", "زوج", M, HeirGroup.SPOUSE),
    HeirType.WIFE: HeirMeta("Istri", "زوجة", F, HeirGroup.SPOUSE),
    HeirType.FATHER: HeirMeta("Ayah", "أب", M, HeirGroup.ASCENDANT),
    HeirType.MOTHER: HeirMeta("Ibu", "أم", F, HeirGroup.ASCENDANT),
    HeirType.GRANDFATHER_PATERNAL: HeirMeta("Kakek", "جد", M, HeirGroup.ASCENDANT),
    HeirType.GRANDMOTHER_MATERNAL: HeirMeta("Nenek dari Ibu", "جدة لأم", F, HeirGroup.ASCENDANT),
    HeirType.GRANDMOTHER_PATERNAL: HeirMeta("Nenek dari Ayah", "جدة لأب", F, HeirGroup.ASCENDANT),
    HeirType.SON: HeirMeta("Anak Laki-laki", "ابن", M, HeirGroup.DESCENDANT),
    HeirType.DAUGHTER: HeirMeta("Anak Perempuan", "بنت", F, HeirGroup.DESCENDANT),
    HeirType.GRANDSON_SON: HeirMeta("Cucu Laki-laki", "ابن الابن", M, HeirGroup.DESCENDANT),
    HeirType.GRANDDAUGHTER_SON: HeirMeta("Cucu Perempuan", "بنت الابن", F, HeirGroup.DESCENDANT),
    HeirType.BROTHER_FULL: HeirMeta("Saudara Laki-laki Kandung", "أخ شقيق", M, HeirGroup.SIBLING),
    HeirType.SISTER_FULL: HeirMeta("Saudari Kandung", "أخت شقيقة", F, HeirGroup.SIBLING),
    HeirType.BROTHER_PATERNAL: HeirMeta("Saudara Laki-laki Seayah", "أخ لأب", M, HeirGroup.SIBLING),
    HeirType.SISTER_PATERNAL: HeirMeta("Saudari Seayah", "أخت لأب", F, HeirGroup.SIBLING),
    HeirType.BROTHER_UTERINE: HeirMeta("Saudara Laki-laki Seibu", "أخ لأم", M, HeirGroup.SIBLING),
    HeirType.SISTER_UTERINE: HeirMeta("Saudari Seibu", "أخت لأم", F, HeirGroup.SIBLING),
    HeirType.NEPHEW_FULL: HeirMeta("Keponakan Laki-laki (dari sdr lk kandung)", "ابن الأخ الشقيق", M, HeirGroup.EXTENDED),
    HeirType.NEPHEW_PATERNAL: HeirMeta("Keponakan Laki-laki (dari sdr lk seayah)", "ابن الأخ لأب", M, HeirGroup.EXTENDED),
    HeirType.UNCLE_FULL: HeirMeta("Paman Kandung", "عم شقيق", M, HeirGroup.EXTENDED),
    HeirType.UNCLE_PATERNAL: HeirMeta("Paman Seayah", "عم لأب", M, HeirGroup.EXTENDED),
    HeirType.COUSIN_FULL: HeirMeta("Sepupu Laki-laki (dari paman kandung)", "ابن العم الشقيق", M, HeirGroup.EXTENDED),
    HeirType.COUSIN_PATERNAL: HeirMeta("Sepupu Laki-laki (dari paman seayah)", "ابن العم لأب", M, HeirGroup.EXTENDED),
    HeirType.MANUMITTER_MALE: HeirMeta("Pria Pembebas Budak", "معتق", M, HeirGroup.WALA),
    HeirType.MANUMITTER_FEMALE: HeirMeta("Wanita Pembebas Budak", "معتقة", F, HeirGroup.WALA),
}

# Urutan stabil untuk output & tie-break
HEIR_ORDER: Dict[HeirType, int] = {t: i for i, t in enumerate(HeirType)}


class ShareCategory(str, Enum):
    FURUDH = "furudh"
    ASABAH = "asabah"
    FURUDH_AND_ASABAH = "furudh_and_asabah"
    BLOCKED = "blocked"


class AsabahType(str, Enum):
    BI_NAFS = "bi_nafs"          # ashobah dengan dirinya sendiri
    BIL_GHAYR = "bil_ghayr"      # ashobah karena saudara laki-lakinya
    MAAL_GHAYR = "maal_ghayr"    # saudari bersama anak perempuan
    BI_SABAB = "bi_sabab"        # wala'


class Phase(str, Enum):
    VALIDATION = "VALIDATION"
    ESTATE = "ESTATE"
    FLAGS = "FLAGS"
    HIJAB = "HIJAB"
    SPECIAL_CASE = "SPECIAL_CASE"
    FURUDH = "FURUDH"
    AUL = "AUL"
    ASABAH = "ASABAH"
    RADD = "RADD"
    DISTRIBUTION = "DISTRIBUTION"
    VERIFICATION = "VERIFICATION"


# --- Skema Ahli Waris (katalog) ---
class Heir(BaseModel):
    type: HeirType
    name_id: str
    name_ar: str
    gender: Gender
    group: HeirGroup

    @classmethod
    def of(cls, heir_type: HeirType) -> "Heir":
        meta = HEIR_META[heir_type]
        return cls(type=heir_type, name_id=meta.name_id, name_ar=meta.name_ar,
                   gender=meta.gender, group=meta.group)


# --- Skema Input ---
class HeirInput(BaseModel):
    type: HeirType
    count: int = 1      # divalidasi di faraidh.rules.flags, bukan di sini


class Deceased(BaseModel):
    gender: Gender


class EstateInput(BaseModel):
    gross_value: int
    debts: int = 0
    funeral_costs: int = 0
    wasiyyah: int = 0
    wasiyyah_approved_by_heirs: bool = False
    currency: str = "IDR"


class InheritancePolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_bequest_fraction: str = "1/3"
    radd_includes_spouse: bool = False
    grandfather_mode: Literal["COMPETE_WITH_SIBLINGS", "LIKE_FATHER"] = "COMPETE_WITH_SIBLINGS"
    mother_sibling_rule: Literal["COUNT_ALL", "EXCLUDE_UTERINE"] = "COUNT_ALL"
    mushtarakah_policy: Literal["UMAR", "STANDARD"] = "UMAR"

    @field_validator("max_bequest_fraction")
    @classmethod
    def _check_bequest_fraction(cls, value: str) -> str:
        cap = Fraction(value)
        if cap < 0 or cap > 1:
            raise ValueError("max_bequest_fraction harus di antara 0 dan 1")
        return f"{cap.numerator}/{cap.denominator}"

    @property
    def bequest_cap(self) -> Fraction:
        return Fraction(self.max_bequest_fraction)


class CalculationOptions(BaseModel):
    include_trace: bool = True
    policy: Optional[InheritancePolicy] = None


class CalculationInput(BaseModel):
    estate: EstateInput
    heirs: List[HeirInput]
    deceased: Deceased


class CalculationRequest(CalculationInput):
    """Body untuk endpoint /calculate: input + opsi."""
    options: CalculationOptions = Field(default_factory=CalculationOptions)


# --- Pecahan (output) ---
class FractionValue(BaseModel):
    numerator: int
    denominator: int

    @classmethod
    def of(cls, value: Fraction) -> "FractionValue":
        return cls(numerator=value.numerator, denominator=value.denominator)

    def as_fraction(self) -> Fraction:
        return Fraction(self.numerator, self.denominator)

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"


# --- Flag struktural (hasil faraidh.rules.flags) ---
class DerivedFlags(BaseModel):
    model_config = ConfigDict(frozen=True)

    counts: Dict[HeirType, int]
    deceased_gender: Gender
    has_son: bool
    has_daughter: bool
    has_grandson: bool
    has_granddaughter: bool
    has_child: bool
    has_descendant: bool
    has_male_descendant: bool
    has_female_descendant_only: bool
    has_father: bool
    has_mother: bool
    has_grandfather: bool
    has_grandmother: bool
    has_spouse: bool
    has_full_siblings: bool
    has_paternal_siblings: bool
    has_uterine_siblings: bool
    sibling_count: int                  # dipakai untuk pengurangan bagian ibu
    has_multiple_siblings: bool

    def count(self, heir_type: HeirType) -> int:
        return self.counts.get(heir_type, 0)


# --- Item kerja internal (furudh / ashobah) ---
class FurudhItem(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    heir_type: HeirType
    count: int = 1
    category: ShareCategory
    asabah_type: Optional[AsabahType] = None
    share: Fraction = Fraction(0)           # bagian fardh (ikut aul/radd)
    asabah_share: Fraction = Fraction(0)    # sisa ashobah
    original_share: Fraction = Fraction(0)  # fardh sebelum aul/radd
    reason: str = ""

    @property
    def total(self) -> Fraction:
        return self.share + self.asabah_share

    @property
    def is_residuary(self) -> bool:
        return self.category in (ShareCategory.ASABAH, ShareCategory.FURUDH_AND_ASABAH)


# --- Skema untuk Perbandingan Pecahan Furudh ---
class ComparisonItem(BaseModel):
    a: int                   # penyebut/bilangan pertama
    b: int                   # penyebut/bilangan kedua
    relation: str            # mumatsalah, mudakholah, muwafaqoh, mubayanah
    lcm: Optional[int] = None


# --- Skema untuk Aslul Mas'alah ---
class AshlInfo(BaseModel):
    ashl_awal: int                     # AM sebelum aul/radd
    ashl_akhir: int                    # AM setelah aul/radd
    tashih: int                        # AM setelah tashih inkisar
    comparisons: List[ComparisonItem]
    total_saham: int
    status: str                        # "adil", "aul", "radd"


# --- Skema untuk Jejak Perhitungan (Trace) ---
class TraceStep(BaseModel):
    phase: Phase
    description: str
    arabic_term: Optional[str] = None
    data: Optional[dict] = None


# --- Skema Output ---
class HeirShare(BaseModel):
    heir_type: HeirType
    count: int
    category: ShareCategory
    asabah_type: Optional[AsabahType] = None
    original_fraction: Optional[FractionValue] = None
    fraction: FractionValue
    saham: int = 0
    total_value: int
    per_person_value: float
    is_blocked: bool
    blocked_by: List[HeirType] = []
    reason: str


class InheritanceSummary(BaseModel):
    aul_applied: bool
    radd_applied: bool
    special_case: Optional[str] = None
    special_case_name: Optional[str] = None
    special_case_arabic: Optional[str] = None
    furudh_total: FractionValue
    aul_ratio: Optional[FractionValue] = None
    radd_remainder: Optional[FractionValue] = None
    total_heirs: int
    blocked_heirs: int


class Verification(BaseModel):
    is_valid: bool
    fraction_sum: FractionValue
    sum_of_shares: int
    net_estate: int
    difference: int


class EstateDeductions(BaseModel):
    funeral_costs: int
    debts: int
    wasiyyah: int
    wasiyyah_requested: int
    wasiyyah_capped: bool


class EstateResult(BaseModel):
    gross_value: int
    deductions: EstateDeductions
    net_estate: int
    currency: str


class CalculationMeta(BaseModel):
    estate: EstateResult
    policy: InheritancePolicy
    flags: DerivedFlags
    ashl: AshlInfo


class CalculationResult(BaseModel):
    net_estate: int
    shares: List[HeirShare]
    summary: InheritanceSummary
    verification: Verification
    trace: Optional[List[TraceStep]] = None
    meta: CalculationMeta


class ErrorResponse(BaseModel):
    code: str
    message: str
