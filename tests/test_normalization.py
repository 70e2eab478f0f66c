from decimal import Decimal

import pytest

from bridgequote.models import ProgramKind
from bridgequote.utils import (
    normalize_application,
    normalize_borrower,
    normalize_financial,
    normalize_program,
    normalize_property,
    term_months_for,
    to_int,
    to_number,
)


@pytest.mark.parametrize(
    "raw",
    [None, "", "   ", "abc", "12abc", float("nan"), float("inf"), "NaN", "-Infinity", "1e1000000", "1e999999999", "-1e30", "1e-999999"],
)
def test_to_number_defaults_to_zero(raw):
    assert to_number(raw) == Decimal(0)


def test_to_number_parses_numbers_and_strings():
    assert to_number("250000") == Decimal("250000")
    assert to_number(" 12.5 ") == Decimal("12.5")
    assert to_number(0.1) == Decimal("0.1")
    assert to_number(42) == Decimal(42)
    assert to_number(Decimal("3.25")) == Decimal("3.25")


def test_to_number_is_idempotent():
    for raw in ["", "abc", "1e3", 7.25, None, "-4"]:
        once = to_number(raw)
        assert to_number(once) == once


def test_to_int_truncates():
    assert to_int("720.9") == 720
    assert to_int("") == 0
    assert to_int(None, default=1) == 1


def test_term_selection_keys():
    assert term_months_for("longTerm") == 360
    assert term_months_for("shortTerm") == 12
    assert term_months_for("shortTerm24") == 24
    assert term_months_for("24") == 24
    assert term_months_for(360) == 360


def test_normalize_camel_case_form_strings():
    borrower = normalize_borrower(
        {"guarantorFullName": "Sam Ortiz", "propertiesOwned": "3", "propertiesSold": "", "ficoScore": "715"}
    )
    assert borrower.guarantor_full_name == "Sam Ortiz"
    assert borrower.properties_owned == 3
    assert borrower.properties_sold == 0
    assert borrower.total_experience == 3
    assert borrower.fico_score == 715


def test_normalize_property_passes_strings_and_booleans_through():
    prop = normalize_property(
        {
            "numberOfUnits": "2",
            "purchasePrice": "250000.50",
            "rehabBudget": "n/a",
            "isPurchaseTransaction": False,
            "city": "Dallas",
            "zipCode": 75201,
        }
    )
    assert prop.number_of_units == 2
    assert prop.purchase_price == Decimal("250000.50")
    assert prop.rehab_budget == 0
    assert prop.is_purchase_transaction is False
    assert prop.city == "Dallas"
    assert prop.zip_code == "75201"


def test_missing_fields_use_model_defaults():
    fin = normalize_financial({})
    assert fin.liquid_cash_available == 0
    assert fin.is_income_qualified_loan is False
    assert normalize_property(None).number_of_units == 1


def test_normalize_program():
    program = normalize_program({"programKind": "purchaseWithoutRehab", "term": "longTerm"})
    assert program.program_kind == ProgramKind.PURCHASE_WITHOUT_REHAB
    assert program.term_months == 360
    assert normalize_program({"program_kind": "refinanceWithRehab"}).term_months == 12


def test_normalize_application_sections():
    app = normalize_application(
        {
            "borrower": {"fico_score": "700"},
            "property": {"purchase_price": "300000", "city": "Tulsa"},
            "financial": {"liquid_cash_available": "50,000"},
            "program": {"program_kind": "purchaseWithRehab", "term_months": "12"},
        }
    )
    assert app.borrower.fico_score == 700
    assert app.property.purchase_price == Decimal("300000")
    # Thousands separators do not parse and count as missing.
    assert app.financial.liquid_cash_available == 0
    assert app.program.program_kind.has_rehab


def test_small_and_large_amounts_within_range_survive():
    assert to_number("2999999.99") == Decimal("2999999.99")
    assert to_number("0.0001") == Decimal("0.0001")
    assert to_number("0E-50") == 0
