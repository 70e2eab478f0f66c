from __future__ import annotations

import logging
from typing import Any, Dict, List

from pydantic import BaseModel, Field, computed_field

from bridgequote import presets
from bridgequote.calculators import allowed_terms, effective_rehab_budget, is_construction, tier_of
from bridgequote.models import BorrowerProfile, FinancialProfile, ProgramSelection, PropertyProfile

logger = logging.getLogger(__name__)


class RuleResult(BaseModel):
    code: str
    message: str
    context: Dict[str, Any] = Field(default_factory=dict)


class ValidationResult(BaseModel):
    findings: List[RuleResult] = Field(default_factory=list)

    @computed_field
    @property
    def errors(self) -> List[str]:
        return [f.message for f in self.findings]

    @computed_field
    @property
    def is_valid(self) -> bool:
        return not self.findings


def validate(
    borrower: BorrowerProfile,
    prop: PropertyProfile,
    financial: FinancialProfile,
    program: ProgramSelection,
) -> ValidationResult:
    """Check an application against the underwriting rules.

    Every failing rule is reported, in rule order, so the borrower sees all
    problems at once.  The one exception is zero liquid cash, which rejects
    the application on its own without detailing anything else.
    """

    res: List[RuleResult] = []

    if financial.liquid_cash_available == 0:
        logger.info("Application rejected: no liquid cash available")
        return ValidationResult(
            findings=[RuleResult(code="NO_LIQUID_CASH", message="Liquid cash required")]
        )

    if borrower.fico_score < presets.MIN_FICO:
        res.append(
            RuleResult(
                code="FICO_BELOW_MIN",
                message=f"Minimum credit score of {presets.MIN_FICO} required",
                context={"fico_score": borrower.fico_score},
            )
        )

    if prop.number_of_units >= presets.MANUAL_UNDERWRITING_UNITS:
        res.append(
            RuleResult(
                code="UNITS_MANUAL_REVIEW",
                message="12+ units require manual underwriting referral",
                context={"units": prop.number_of_units},
            )
        )

    if not presets.MIN_PURCHASE_PRICE <= prop.purchase_price <= presets.MAX_PURCHASE_PRICE:
        res.append(
            RuleResult(
                code="PRICE_OUT_OF_RANGE",
                message="Loan amount must be between $100,000 and $3,000,000",
                context={"purchase_price": str(prop.purchase_price)},
            )
        )

    if not prop.city.strip():
        res.append(RuleResult(code="CITY_REQUIRED", message="City is required"))
    if not prop.zip_code.strip():
        res.append(RuleResult(code="ZIP_REQUIRED", message="Zip code is required"))

    kind = program.program_kind
    if kind.has_rehab:
        if prop.rehab_budget <= 0:
            res.append(
                RuleResult(
                    code="REHAB_BUDGET_REQUIRED",
                    message="Rehab budget is required for rehab programs",
                )
            )
        if prop.after_repair_value <= 0:
            res.append(
                RuleResult(
                    code="ARV_REQUIRED",
                    message="After repair value (ARV) is required for rehab programs",
                )
            )
        if (
            prop.rehab_budget > 0
            and prop.after_repair_value > 0
            and prop.after_repair_value <= prop.purchase_price + prop.rehab_budget
        ):
            res.append(
                RuleResult(
                    code="ARV_TOO_LOW",
                    message="ARV must exceed purchase price plus rehab cost",
                    context={
                        "arv": str(prop.after_repair_value),
                        "cost_basis": str(prop.purchase_price + prop.rehab_budget),
                    },
                )
            )

    if is_construction(kind, prop.purchase_price, prop.rehab_budget):
        if borrower.fico_score < presets.CONSTRUCTION_MIN_FICO:
            res.append(
                RuleResult(
                    code="CONSTRUCTION_FICO",
                    message=(
                        "Ground-up construction requires minimum credit score of "
                        f"{presets.CONSTRUCTION_MIN_FICO}"
                    ),
                    context={"rehab_budget": str(effective_rehab_budget(kind, prop.rehab_budget))},
                )
            )
        tier = tier_of(borrower.total_experience)
        if tier.value not in presets.CONSTRUCTION_TIERS:
            res.append(
                RuleResult(
                    code="CONSTRUCTION_TIER",
                    message="Construction financing requires Gold or Platinum tier",
                    context={"tier": tier.value},
                )
            )

    if prop.is_purchase_transaction and prop.earnest_money_deposit <= 0:
        res.append(
            RuleResult(
                code="EMD_REQUIRED",
                message="Earnest money deposit is required for purchase transactions",
            )
        )

    if not kind.has_rehab and financial.is_income_qualified_loan and financial.monthly_rental_income <= 0:
        res.append(
            RuleResult(
                code="RENTAL_INCOME_REQUIRED",
                message="Monthly rental income is required for income-qualified (DSCR) loans",
            )
        )

    if financial.annual_property_taxes <= 0:
        res.append(RuleResult(code="TAXES_REQUIRED", message="Annual property taxes are required"))
    if financial.annual_insurance <= 0:
        res.append(RuleResult(code="INSURANCE_REQUIRED", message="Annual insurance is required"))

    if program.term_months not in allowed_terms(kind):
        res.append(
            RuleResult(
                code="TERM_NOT_AVAILABLE",
                message=f"{program.term_months}-month term is not available for {kind.label}",
                context={"allowed_terms": list(allowed_terms(kind))},
            )
        )

    if res:
        logger.info("Application failed %d underwriting rule(s): %s", len(res), [r.code for r in res])
    return ValidationResult(findings=res)
