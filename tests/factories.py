from decimal import Decimal

import httpx

from bridgequote.config import Settings
from bridgequote.integrations import CensusAreaLookup
from bridgequote.models import (
    BorrowerProfile,
    FinancialProfile,
    LoanApplication,
    ProgramKind,
    ProgramSelection,
    PropertyProfile,
)


def make_borrower(**overrides) -> BorrowerProfile:
    data = dict(
        guarantor_full_name="Jordan Lee",
        guarantor_email="jordan@example.com",
        properties_owned=3,
        properties_sold=2,
        fico_score=720,
    )
    data.update(overrides)
    return BorrowerProfile(**data)


def make_property(**overrides) -> PropertyProfile:
    data = dict(
        number_of_units=1,
        purchase_price=Decimal("200000"),
        as_is_value=Decimal("200000"),
        rehab_budget=Decimal("50000"),
        after_repair_value=Decimal("300000"),
        is_purchase_transaction=True,
        earnest_money_deposit=Decimal("5000"),
        city="Austin",
        zip_code="78701",
    )
    data.update(overrides)
    return PropertyProfile(**data)


def make_financial(**overrides) -> FinancialProfile:
    data = dict(
        liquid_cash_available=Decimal("100000"),
        annual_property_taxes=Decimal("3000"),
        annual_insurance=Decimal("1200"),
    )
    data.update(overrides)
    return FinancialProfile(**data)


def make_program(kind=ProgramKind.PURCHASE_WITH_REHAB, term_months=12) -> ProgramSelection:
    return ProgramSelection(program_kind=kind, term_months=term_months)


def make_application(**sections) -> LoanApplication:
    return LoanApplication(
        borrower=sections.get("borrower") or make_borrower(),
        property=sections.get("property") or make_property(),
        financial=sections.get("financial") or make_financial(),
        program=sections.get("program") or make_program(),
    )


def dscr_purchase():
    """Bronze investor buying a two-unit rental on a 30-year DSCR loan."""
    return (
        make_borrower(properties_owned=0, properties_sold=0, fico_score=700),
        make_property(
            number_of_units=2,
            purchase_price=Decimal("250000"),
            rehab_budget=Decimal("0"),
            after_repair_value=Decimal("0"),
            earnest_money_deposit=Decimal("2500"),
        ),
        make_financial(
            liquid_cash_available=Decimal("60000"),
            monthly_rental_income=Decimal("2500"),
            is_income_qualified_loan=True,
        ),
        make_program(ProgramKind.PURCHASE_WITHOUT_REHAB, 360),
    )


CENSUS_POPULATIONS = {"10001": 21102 * 2, "59718": 5000}


def census_transport(calls, status=200):
    """Mock Census endpoint that records every request into ``calls``."""

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if status != 200:
            return httpx.Response(status)
        zcta = request.url.params["for"].split(":")[-1]
        if zcta not in CENSUS_POPULATIONS:
            return httpx.Response(404)
        return httpx.Response(
            200,
            json=[["B01003_001E", "zip code tabulation area"], [str(CENSUS_POPULATIONS[zcta]), zcta]],
        )

    return httpx.MockTransport(handler)


def make_lookup(calls, status=200, **settings) -> CensusAreaLookup:
    return CensusAreaLookup(settings=Settings(**settings), transport=census_transport(calls, status))
