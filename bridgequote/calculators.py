from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Tuple

import pandas as pd

from bridgequote import presets
from bridgequote.exceptions import ManualUnderwritingRequired, PricingError
from bridgequote.models import DrawScheduleKind, FeeBreakdown, InvestorTier, ProgramKind

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def round_half_up(value: Decimal, places: Decimal = CENTS) -> Decimal:
    return value.quantize(places, rounding=ROUND_HALF_UP)


def tier_of(total_experience: int) -> InvestorTier:
    """Classify an investor by completed projects (owned plus sold).

    Each tier starts at its threshold and runs up to the next one, so every
    non-negative count lands in exactly one tier.
    """

    for threshold, tier in presets.TIER_THRESHOLDS:
        if total_experience >= threshold:
            return InvestorTier(tier)
    return InvestorTier.BRONZE


def credit_adjustment(fico_score: int) -> Decimal:
    """Rate adjustment in percentage points for a credit score."""
    for floor, adjustment in presets.CREDIT_ADJUSTMENTS:
        if fico_score >= floor:
            return adjustment
    return presets.SUBPRIME_ADJUSTMENT


def rate_of(tier, fico_score: int) -> Decimal:
    """Note rate in percent: tier base rate plus the credit adjustment.

    The result is rounded half-up to two decimals.  Any tier and score
    produce a rate; eligibility floors are enforced by validation, not here.
    """

    base = presets.BASE_RATES[InvestorTier(tier).value]
    return round_half_up(base + credit_adjustment(fico_score))


def ltv_of(number_of_units: int) -> Decimal:
    """Maximum loan-to-value for a unit count.

    Properties above the last band are not priced from the rate card and
    raise :class:`ManualUnderwritingRequired` instead of returning an LTV.
    """

    for max_units, ltv in presets.LTV_BANDS:
        if number_of_units <= max_units:
            return ltv
    raise ManualUnderwritingRequired(number_of_units)


def allowed_terms(program) -> Tuple[int, ...]:
    return presets.PROGRAM_TERMS[ProgramKind(program).value]


def effective_rehab_budget(program, rehab_budget: Decimal) -> Decimal:
    # Rehab dollars only count under a rehab program.
    return rehab_budget if ProgramKind(program).has_rehab else Decimal(0)


def is_construction(program, purchase_price: Decimal, rehab_budget: Decimal) -> bool:
    """Rehab above half the purchase price is treated as ground-up construction."""
    rehab = effective_rehab_budget(program, rehab_budget)
    return rehab > purchase_price * presets.CONSTRUCTION_REHAB_RATIO


def resolve_term(program, requested_term: int, construction: bool = False) -> int:
    """Return the loan term in months for a program.

    Construction loans always run the construction term.  Otherwise the
    requested term must be one the program offers.
    """

    if construction:
        return presets.CONSTRUCTION_TERM_MONTHS
    if requested_term not in allowed_terms(program):
        raise PricingError(
            f"{requested_term}-month term is not available for {ProgramKind(program).label}"
        )
    return requested_term


def loan_sizing(program, purchase_price: Decimal, ltv: Decimal, rehab_budget: Decimal, arv: Decimal) -> dict:
    """Size the loan against purchase price and, for rehab loans, ARV.

    ``rehab_budget`` and ``arv`` are the program-effective values: zero rehab
    and ARV equal to price when the program carries no rehab.
    """

    max_loan_base = purchase_price * ltv
    if ProgramKind(program).has_rehab:
        arv_cap = arv * presets.ARV_ADVANCE_PCT
    else:
        arv_cap = max_loan_base
    return {
        "arv_cap": arv_cap,
        "max_loan_base": max_loan_base,
        "loan_amount": min(max_loan_base + rehab_budget, arv_cap),
        "initial_advance": purchase_price * ltv,
        "down_payment": purchase_price * (1 - ltv),
    }


def closing_fees(
    loan_amount: Decimal,
    purchase_price: Decimal,
    annual_property_taxes: Decimal,
    annual_insurance: Decimal,
) -> FeeBreakdown:
    """Itemized closing costs.

    Taxes and insurance use the borrower's figures when provided and fall
    back to a percentage-of-price tax estimate and a flat insurance estimate.
    """

    if annual_property_taxes > 0:
        tax_estimate = annual_property_taxes
    else:
        tax_estimate = purchase_price * presets.TAX_ESTIMATE_RATE
    if annual_insurance > 0:
        insurance_estimate = annual_insurance
    else:
        insurance_estimate = presets.DEFAULT_INSURANCE_ESTIMATE
    return FeeBreakdown(
        origination_fee=loan_amount * presets.ORIGINATION_POINTS,
        underwriting_fee=presets.UNDERWRITING_FEE,
        doc_prep_fee=presets.DOC_PREP_FEE,
        title_estimate=purchase_price * presets.TITLE_RATE + presets.TITLE_BASE_FEE,
        tax_estimate=tax_estimate,
        insurance_estimate=insurance_estimate,
        closing_fee=presets.CLOSING_FEE,
    )


def payment_holdback(initial_advance: Decimal, rehab_budget: Decimal, rate_pct: Decimal) -> Decimal:
    """One year of interest on the fully drawn loan, held back at closing."""
    return (initial_advance + rehab_budget) * (rate_pct / 100)


def monthly_escrow(annual_property_taxes: Decimal, annual_insurance: Decimal) -> Decimal:
    # Unrounded; callers round for display.
    return (annual_property_taxes + annual_insurance) / 12


def monthly_payment(loan_amount: Decimal, rate_pct: Decimal, term_months: int) -> Decimal:
    """Fully amortizing monthly payment, or zero for interest-only terms.

    Bridge terms (24 months or less) are Dutch interest-only loans with no
    scheduled payment.
    """

    if term_months <= presets.INTEREST_ONLY_MAX_TERM:
        return Decimal(0)
    r = rate_pct / 100 / 12
    n = term_months
    if r == 0:
        return round_half_up(loan_amount / n)
    growth = (1 + r) ** n
    return round_half_up(loan_amount * r * growth / (growth - 1))


def repayment_type(term_months: int) -> str:
    return "Dutch" if term_months <= presets.INTEREST_ONLY_MAX_TERM else "Amortizing"


def draw_schedule_for(tier) -> DrawScheduleKind:
    if InvestorTier(tier).value in presets.ADVANCED_DRAW_TIERS:
        return DrawScheduleKind.ADVANCED
    return DrawScheduleKind.REIMBURSEMENT


def rate_sheet() -> pd.DataFrame:
    """Rate card as a tier by credit-band table of note rates."""

    rows = {}
    for tier in InvestorTier:
        rows[tier.value] = {
            band: float(rate_of(tier, score)) for band, score in presets.CREDIT_BANDS.items()
        }
    sheet = pd.DataFrame.from_dict(rows, orient="index")
    sheet.index.name = "Tier"
    logger.debug("Built rate sheet with %d tiers", len(sheet))
    return sheet
