from __future__ import annotations

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, computed_field
from pydantic.alias_generators import to_camel

from bridgequote.presets import PROGRAM_LABELS


class InvestorTier(str, Enum):
    BRONZE = "Bronze"
    SILVER = "Silver"
    GOLD = "Gold"
    PLATINUM = "Platinum"


class ProgramKind(str, Enum):
    PURCHASE_WITH_REHAB = "purchaseWithRehab"
    PURCHASE_WITHOUT_REHAB = "purchaseWithoutRehab"
    REFINANCE_WITH_REHAB = "refinanceWithRehab"
    REFINANCE_WITHOUT_REHAB = "refinanceWithoutRehab"

    @property
    def has_rehab(self) -> bool:
        return self in (ProgramKind.PURCHASE_WITH_REHAB, ProgramKind.REFINANCE_WITH_REHAB)

    @property
    def is_purchase(self) -> bool:
        return self in (ProgramKind.PURCHASE_WITH_REHAB, ProgramKind.PURCHASE_WITHOUT_REHAB)

    @property
    def label(self) -> str:
        return PROGRAM_LABELS[self.value]


class DrawScheduleKind(str, Enum):
    REIMBURSEMENT = "Reimbursement"
    ADVANCED = "Advanced"


class _FormModel(BaseModel):
    """Input model that accepts the web form's camelCase keys as well."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BorrowerProfile(_FormModel):
    guarantor_full_name: str = ""
    guarantor_email: str = ""
    phone_number: str = ""
    entity_name: str = ""
    properties_owned: int = 0
    properties_sold: int = 0
    fico_score: int = 0

    @property
    def total_experience(self) -> int:
        return self.properties_owned + self.properties_sold


class PropertyProfile(_FormModel):
    subject_property_address: str = ""
    property_type: str = ""
    number_of_units: int = 1
    purchase_price: Decimal = Decimal(0)
    as_is_value: Decimal = Decimal(0)
    rehab_budget: Decimal = Decimal(0)
    after_repair_value: Decimal = Decimal(0)
    is_purchase_transaction: bool = True
    earnest_money_deposit: Decimal = Decimal(0)
    city: str = ""
    zip_code: str = ""


class FinancialProfile(_FormModel):
    liquid_cash_available: Decimal = Decimal(0)
    annual_property_taxes: Decimal = Decimal(0)
    annual_insurance: Decimal = Decimal(0)
    annual_flood_insurance: Decimal = Decimal(0)
    annual_hoa: Decimal = Decimal(0)
    monthly_rental_income: Decimal = Decimal(0)
    is_income_qualified_loan: bool = False


class ProgramSelection(_FormModel):
    program_kind: ProgramKind
    term_months: int = 12


class LoanApplication(BaseModel):
    borrower: BorrowerProfile
    property: PropertyProfile
    financial: FinancialProfile
    program: ProgramSelection


class FeeBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    origination_fee: Decimal
    underwriting_fee: Decimal
    doc_prep_fee: Decimal
    title_estimate: Decimal
    tax_estimate: Decimal
    insurance_estimate: Decimal
    closing_fee: Decimal

    @computed_field
    @property
    def total_closing_costs(self) -> Decimal:
        return (
            self.origination_fee
            + self.underwriting_fee
            + self.doc_prep_fee
            + self.title_estimate
            + self.tax_estimate
            + self.insurance_estimate
            + self.closing_fee
        )


class Quote(BaseModel):
    model_config = ConfigDict(frozen=True)

    program_kind: ProgramKind
    purchase_price: Decimal
    rehab_budget: Decimal
    financed_rehab_budget: Decimal
    arv: Decimal
    credit_score: int
    investor_tier: InvestorTier
    interest_rate: Decimal
    loan_to_value: Decimal
    loan_amount: Decimal
    initial_advance: Decimal
    down_payment: Decimal
    arv_cap: Decimal
    payment_holdback: Decimal
    monthly_escrow: Decimal
    monthly_payment: Decimal
    term_months: int
    repayment_type: str
    is_construction: bool
    draw_schedule_kind: DrawScheduleKind
    earnest_money_deposit: Decimal
    fees: FeeBreakdown
    total_cash_from_borrower: Decimal
    liquidity_required: Decimal
