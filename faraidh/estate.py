# faraidh/estate.py
"""Menghitung tirkah bersih: harta kotor dikurangi biaya jenazah, utang, lalu wasiat."""

from __future__ import annotations

import logging
import math

from errors import InvalidEstateValueError, NegativeNetEstateError
from schemas import EstateDeductions, EstateInput, EstateResult, InheritancePolicy

logger = logging.getLogger(__name__)

_MONEY_FIELDS = ("gross_value", "debts", "funeral_costs", "wasiyyah")


def validate_estate(estate: EstateInput) -> None:
    for field in _MONEY_FIELDS:
        value = getattr(estate, field)
        if value < 0:
            raise InvalidEstateValueError(
                f"Nilai '{field}' tidak boleh negatif (diterima {value})", field=field
            )
    if estate.debts + estate.funeral_costs > estate.gross_value:
        raise NegativeNetEstateError(
            f"Utang ({estate.debts}) + biaya jenazah ({estate.funeral_costs}) "
            f"melebihi harta kotor ({estate.gross_value})"
        )


def cap_wasiyyah(estate: EstateInput, remaining: int, policy: InheritancePolicy) -> int:
    """Wasiat dibatasi `max_bequest_fraction` dari sisa harta, kecuali disetujui ahli waris."""
    if estate.wasiyyah_approved_by_heirs:
        return min(estate.wasiyyah, remaining)
    limit = math.floor(policy.bequest_cap * remaining)
    return min(estate.wasiyyah, limit)


def resolve_net_estate(estate: EstateInput, policy: InheritancePolicy) -> EstateResult:
    """Asumsi: `validate_estate` sudah dijalankan."""
    remaining = estate.gross_value - estate.funeral_costs - estate.debts
    wasiyyah = cap_wasiyyah(estate, remaining, policy)
    net_estate = remaining - wasiyyah

    if wasiyyah < estate.wasiyyah:
        logger.debug(
            "Wasiat dibatasi",
            extra={"requested": estate.wasiyyah, "allowed": wasiyyah, "cap": policy.max_bequest_fraction},
        )

    return EstateResult(
        gross_value=estate.gross_value,
        deductions=EstateDeductions(
            funeral_costs=estate.funeral_costs,
            debts=estate.debts,
            wasiyyah=wasiyyah,
            wasiyyah_requested=estate.wasiyyah,
            wasiyyah_capped=wasiyyah < estate.wasiyyah,
        ),
        net_estate=net_estate,
        currency=estate.currency,
    )
