"""Quote assembly on top of the rate card formulas and underwriting rules."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional, Tuple

from bridgequote.calculators import (
    closing_fees,
    draw_schedule_for,
    effective_rehab_budget,
    is_construction,
    loan_sizing,
    ltv_of,
    monthly_escrow,
    monthly_payment,
    payment_holdback,
    rate_of,
    repayment_type,
    resolve_term,
    tier_of,
)
from bridgequote.exceptions import InvalidApplicationError
from bridgequote.models import (
    BorrowerProfile,
    FinancialProfile,
    LoanApplication,
    ProgramSelection,
    PropertyProfile,
    Quote,
)
from bridgequote.rules import ValidationResult, validate

logger = logging.getLogger(__name__)


def quote(
    borrower: BorrowerProfile,
    prop: PropertyProfile,
    financial: FinancialProfile,
    program: ProgramSelection,
    term: Optional[int] = None,
    validation: Optional[ValidationResult] = None,
) -> Quote:
    """Price a validated application.

    ``term`` overrides the program's selected term when given.  Raises
    ``ManualUnderwritingRequired`` for properties outside the LTV bands and
    ``InvalidApplicationError`` when the application does not pass
    :func:`validate`; an invalid application never yields a quote.

    ``validation`` is a result already computed for these inputs and skips
    the second rule pass.  It is ignored when ``term`` is given.
    """

    ltv = ltv_of(prop.number_of_units)
    if term is not None:
        program = program.model_copy(update={"term_months": term})
        validation = None
    if validation is None:
        validation = validate(borrower, prop, financial, program)
    if not validation.is_valid:
        raise InvalidApplicationError(validation.errors)

    kind = program.program_kind
    tier = tier_of(borrower.total_experience)
    rate = rate_of(tier, borrower.fico_score)

    rehab = effective_rehab_budget(kind, prop.rehab_budget)
    arv = prop.after_repair_value if kind.has_rehab else prop.purchase_price
    sizing = loan_sizing(kind, prop.purchase_price, ltv, rehab, arv)
    loan_amount = sizing["loan_amount"]

    fees = closing_fees(
        loan_amount,
        prop.purchase_price,
        financial.annual_property_taxes,
        financial.annual_insurance,
    )

    construction = is_construction(kind, prop.purchase_price, prop.rehab_budget)
    term_months = resolve_term(kind, program.term_months, construction)

    earnest_money = prop.earnest_money_deposit if prop.is_purchase_transaction else Decimal(0)
    total_cash = sizing["down_payment"] + fees.total_closing_costs + earnest_money

    logger.debug(
        "Quoted %s: tier=%s rate=%s ltv=%s loan=%s term=%s",
        kind.value,
        tier.value,
        rate,
        ltv,
        loan_amount,
        term_months,
    )
    return Quote(
        program_kind=kind,
        purchase_price=prop.purchase_price,
        rehab_budget=prop.rehab_budget,
        financed_rehab_budget=rehab,
        arv=arv,
        credit_score=borrower.fico_score,
        investor_tier=tier,
        interest_rate=rate,
        loan_to_value=ltv,
        loan_amount=loan_amount,
        initial_advance=sizing["initial_advance"],
        down_payment=sizing["down_payment"],
        arv_cap=sizing["arv_cap"],
        payment_holdback=payment_holdback(sizing["initial_advance"], rehab, rate),
        monthly_escrow=monthly_escrow(financial.annual_property_taxes, financial.annual_insurance),
        monthly_payment=monthly_payment(loan_amount, rate, term_months),
        term_months=term_months,
        repayment_type=repayment_type(term_months),
        is_construction=construction,
        draw_schedule_kind=draw_schedule_for(tier),
        earnest_money_deposit=earnest_money,
        fees=fees,
        total_cash_from_borrower=total_cash,
        liquidity_required=total_cash,
    )


def price_application(application: LoanApplication) -> Tuple[ValidationResult, Optional[Quote]]:
    """Validate an application and quote it only when every rule passes."""

    result = validate(
        application.borrower,
        application.property,
        application.financial,
        application.program,
    )
    if not result.is_valid:
        return result, None
    return result, quote(
        application.borrower,
        application.property,
        application.financial,
        application.program,
        validation=result,
    )
