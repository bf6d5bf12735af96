# calculator.py

from __future__ import annotations

import logging
from fractions import Fraction
from typing import Dict, List, Optional, Tuple

from config import default_policy
from errors import NoEligibleHeirsError
from schemas import (
    AshlInfo,
    CalculationInput,
    CalculationMeta,
    CalculationOptions,
    CalculationResult,
    FractionValue,
    FurudhItem,
    HeirShare,
    HeirType,
    InheritanceSummary,
    Phase,
    ShareCategory,
    TraceStep,
    HEIR_META,
    HEIR_ORDER,
)
from faraidh.estate import resolve_net_estate, validate_estate
from faraidh.finalizer import allocate_amounts, per_person, verify
from faraidh.math.ashl import compute_ashl
from faraidh.math.fraction import ONE, arabic_name, compare_to_one, fraction_str
from faraidh.math.inkisar import compute_saham
from faraidh.rules.asabah import distribute_asabah
from faraidh.rules.aul import apply_aul, is_classical_aul
from faraidh.rules.engine import determine_furudh, furudh_total
from faraidh.rules.flags import derive_flags, validate_heirs
from faraidh.rules.hijab import HijabDecision, apply_hijab
from faraidh.rules.radd import apply_radd
from faraidh.special.router import SPECIAL_CASES, SpecialCase, apply_special_cases

logger = logging.getLogger(__name__)


def _step(trace: List[TraceStep], phase: Phase, description: str,
          arabic_term: Optional[str] = None, data: Optional[dict] = None) -> None:
    trace.append(TraceStep(phase=phase, description=description, arabic_term=arabic_term, data=data))
    logger.debug("[%s] %s", phase.value, description)


def _name(heir_type: HeirType) -> str:
    return HEIR_META[heir_type].name_id


# --------------------------
# Penyusunan output
# --------------------------
def _build_shares(
    items: List[FurudhItem],
    blocked: Dict[HeirType, HijabDecision],
    counts: Dict[HeirType, int],
    amounts: Dict[HeirType, int],
    saham: Dict[HeirType, int],
) -> List[HeirShare]:
    by_type = {item.heir_type: item for item in items}
    shares: List[HeirShare] = []
    for heir_type in sorted(counts, key=HEIR_ORDER.get):
        count = counts[heir_type]
        if heir_type in blocked:
            decision = blocked[heir_type]
            shares.append(HeirShare(
                heir_type=heir_type,
                count=count,
                category=ShareCategory.BLOCKED,
                fraction=FractionValue(numerator=0, denominator=1),
                total_value=0,
                per_person_value=0.0,
                is_blocked=True,
                blocked_by=decision.blocked_by,
                reason=decision.reason,
            ))
            continue

        item = by_type[heir_type]
        total_value = amounts[heir_type]
        shares.append(HeirShare(
            heir_type=heir_type,
            count=count,
            category=item.category,
            asabah_type=item.asabah_type,
            original_fraction=FractionValue.of(item.original_share) if item.original_share else None,
            fraction=FractionValue.of(item.total),
            saham=saham.get(heir_type, 0),
            total_value=total_value,
            per_person_value=per_person(total_value, count),
            is_blocked=False,
            reason=item.reason,
        ))
    return shares


# --------------------------
# Fungsi utama
# --------------------------
def calculate_inheritance(
    calculation_input: CalculationInput,
    options: Optional[CalculationOptions] = None,
    special_cases: Tuple[SpecialCase, ...] = SPECIAL_CASES,
) -> CalculationResult:
    """
    Pipeline faraidh:
    validasi -> flag -> tirkah bersih -> hijab -> kasus khusus -> furudh
    -> aul | ('ashobah lalu radd) -> nominal & verifikasi.

    Tidak ada state bersama; setiap pemanggilan membuat objeknya sendiri.
    """
    options = options or CalculationOptions()
    policy = options.policy or default_policy()
    trace: List[TraceStep] = []

    # 1) Validasi (sekali di depan, berhenti pada kegagalan pertama)
    validate_estate(calculation_input.estate)
    validate_heirs(calculation_input.heirs, calculation_input.deceased)
    _step(trace, Phase.VALIDATION,
          f"Input valid: {len(calculation_input.heirs)} jenis ahli waris, "
          f"pewaris {calculation_input.deceased.gender.value}")

    # 2) Flag struktural
    flags = derive_flags(calculation_input.heirs, calculation_input.deceased, policy)
    _step(trace, Phase.FLAGS, "Flag struktural ahli waris dihitung",
          data=flags.model_dump(mode="json", exclude={"counts"}))

    # 3) Tirkah bersih
    estate = resolve_net_estate(calculation_input.estate, policy)
    net_estate = estate.net_estate
    _step(trace, Phase.ESTATE,
          f"Tirkah bersih {net_estate:,} = {estate.gross_value:,} - biaya jenazah "
          f"{estate.deductions.funeral_costs:,} - utang {estate.deductions.debts:,} - wasiat "
          f"{estate.deductions.wasiyyah:,}",
          arabic_term="التركة",
          data=estate.deductions.model_dump())

    # 4) Hijab
    active, blocked = apply_hijab(flags.counts, policy)
    for heir_type, decision in blocked.items():
        _step(trace, Phase.HIJAB, f"{_name(heir_type)}: {decision.reason}", arabic_term="حجب حرمان",
              data={"rule": decision.rule, "blocked_by": [b.value for b in decision.blocked_by]})
    if not active:
        raise NoEligibleHeirsError("Semua ahli waris terhalang (mahjub)")

    # 5) Kasus khusus
    case, overrides, matched = apply_special_cases(active, flags, policy, special_cases)
    if case:
        _step(trace, Phase.SPECIAL_CASE, f"Kasus khusus terdeteksi: {case.name}", arabic_term=case.arabic_name,
              data={"code": case.code, "matched": [c.code for c in matched],
                    "affected": [t.value for t in overrides]})

    # 6) Furudh
    items = determine_furudh(active, flags, policy, overrides)
    total = furudh_total(items)
    ashl = compute_ashl([item.share.denominator for item in items if item.share])
    for item in items:
        if item.share:
            _step(trace, Phase.FURUDH, f"{_name(item.heir_type)}: {fraction_str(item.share)}. {item.reason}",
                  arabic_term=arabic_name(item.original_share))
    _step(trace, Phase.FURUDH,
          f"Jumlah furudh {fraction_str(total)}, Aslul Mas'alah {ashl.ashl_awal}",
          arabic_term="أصل المسألة",
          data={"furudh_total": fraction_str(total), "ashl": ashl.ashl_awal,
                "comparisons": [c.model_dump() for c in ashl.comparisons]})

    # 7) Aul / 'ashobah / radd
    aul_result = None
    radd_result = None
    position = compare_to_one(item.share for item in items)
    if position > 0:
        aul_result = apply_aul(items)
        _step(trace, Phase.AUL,
              f"Furudh melebihi harta: AM {aul_result.ashl_awal} di-aul menjadi {aul_result.ashl_akhir}",
              arabic_term="العول",
              data={"ratio": fraction_str(aul_result.ratio), "classical": is_classical_aul(aul_result)})
    elif position < 0:
        remainder = ONE - total
        recipients = distribute_asabah(items, remainder)
        if recipients:
            names = ", ".join(_name(r.heir_type) for r in recipients)
            _step(trace, Phase.ASABAH, f"Sisa {fraction_str(remainder)} diberikan kepada 'ashobah: {names}",
                  arabic_term="العصبة",
                  data={r.heir_type.value: fraction_str(r.asabah_share) for r in recipients})
        else:
            radd_result = apply_radd(items, policy)
            _step(trace, Phase.RADD,
                  f"Tidak ada 'ashobah: sisa {fraction_str(remainder)} dikembalikan kepada ashabul furudh"
                  + ("" if radd_result.includes_spouse else " (tanpa suami/istri)"),
                  arabic_term="الرد",
                  data={item.heir_type.value: fraction_str(item.share) for item in items if item.share})
    else:
        for item in items:
            if item.is_residuary and not item.total:
                item.reason += "; sisa harta habis oleh ashabul furudh"

    if case and case.after_adjust:
        case.after_adjust(items)
        _step(trace, Phase.SPECIAL_CASE, f"Penyesuaian akhir {case.name}", arabic_term=case.arabic_name,
              data={item.heir_type.value: fraction_str(item.total) for item in items})

    # 8) Nominal & verifikasi
    portions: List[Tuple[HeirType, Fraction]] = [(item.heir_type, item.total) for item in items]
    amounts = allocate_amounts(portions, net_estate)
    verification = verify(portions, amounts, net_estate)

    base = aul_result.ashl_akhir if aul_result else 1
    ashl_akhir, tashih, saham, _, inkisar_notes = compute_saham(
        [(item.heir_type, item.count, item.total) for item in items], base=base
    )
    ashl = ashl.model_copy(update={
        "ashl_akhir": ashl_akhir,
        "tashih": tashih,
        "total_saham": sum(saham.values()),
        "status": "aul" if aul_result else ("radd" if radd_result else "adil"),
    })
    _step(trace, Phase.DISTRIBUTION,
          f"Pembagian nominal dari tirkah {net_estate:,}; tashih {tashih}. " + " ".join(inkisar_notes),
          arabic_term="التصحيح",
          data={t.value: amounts[t] for t, _ in portions})
    _step(trace, Phase.VERIFICATION,
          f"Jumlah pecahan {verification.fraction_sum}, jumlah nominal {verification.sum_of_shares:,}",
          data={"is_valid": verification.is_valid, "difference": verification.difference})

    if not verification.is_valid:
        logger.warning("Verifikasi gagal", extra={"fraction_sum": str(verification.fraction_sum),
                                                  "difference": verification.difference})

    shares = _build_shares(items, blocked, flags.counts, amounts, saham)
    summary = InheritanceSummary(
        aul_applied=aul_result is not None,
        radd_applied=radd_result is not None,
        special_case=case.code if case else None,
        special_case_name=case.name if case else None,
        special_case_arabic=case.arabic_name if case else None,
        furudh_total=FractionValue.of(total),
        aul_ratio=FractionValue.of(aul_result.ratio) if aul_result else None,
        radd_remainder=FractionValue.of(radd_result.remainder) if radd_result else None,
        total_heirs=len(shares),
        blocked_heirs=len(blocked),
    )

    logger.info(
        "Perhitungan faraidh selesai",
        extra={
            "heir_types": [s.heir_type.value for s in shares],
            "net_estate": net_estate,
            "aul_applied": summary.aul_applied,
            "radd_applied": summary.radd_applied,
            "special_case": summary.special_case,
        },
    )

    return CalculationResult(
        net_estate=net_estate,
        shares=shares,
        summary=summary,
        verification=verification,
        trace=trace if options.include_trace else None,
        meta=CalculationMeta(estate=estate, policy=policy, flags=flags, ashl=ashl),
    )
