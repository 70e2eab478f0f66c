import asyncio

import streamlit as st

from bridgequote.integrations import CensusAreaLookup, is_valid_zip
from bridgequote.models import ProgramKind
from bridgequote.presets import PROGRAM_TERMS, TERM_LABELS


def _money(label: str, data: dict, field: str, help=None) -> float:
    return st.number_input(
        label, min_value=0.0, step=1000.0, value=float(data.get(field, 0.0) or 0.0), help=help
    )


def render_borrower_form():
    """Guarantor identity and experience inputs."""
    st.session_state.setdefault("borrower", {})
    b = st.session_state.borrower
    b["guarantor_full_name"] = st.text_input("Guarantor Full Name", value=b.get("guarantor_full_name", ""))
    b["guarantor_email"] = st.text_input("Guarantor Email", value=b.get("guarantor_email", ""))
    b["phone_number"] = st.text_input("Phone Number", value=b.get("phone_number", ""))
    b["entity_name"] = st.text_input("Entity Name", value=b.get("entity_name", ""))
    c1, c2, c3 = st.columns(3)
    b["properties_owned"] = c1.number_input(
        "Properties Owned", min_value=0, step=1, value=int(b.get("properties_owned", 0))
    )
    b["properties_sold"] = c2.number_input(
        "Properties Sold (last 36 months)", min_value=0, step=1, value=int(b.get("properties_sold", 0))
    )
    b["fico_score"] = c3.number_input(
        "FICO Score", min_value=300, max_value=850, step=1, value=int(b.get("fico_score", 700))
    )
    return b


def render_property_form():
    st.session_state.setdefault("property", {})
    p = st.session_state.property
    p["subject_property_address"] = st.text_input(
        "Subject Property Address", value=p.get("subject_property_address", "")
    )
    c1, c2 = st.columns(2)
    p["city"] = c1.text_input("City", value=p.get("city", ""))
    p["zip_code"] = c2.text_input("Zip Code", value=p.get("zip_code", ""))
    p["property_type"] = st.text_input("Property Type", value=p.get("property_type", ""))
    p["number_of_units"] = st.number_input(
        "Number of Units", min_value=1, step=1, value=int(p.get("number_of_units", 1))
    )
    p["purchase_price"] = _money("Purchase Price / Current Value", p, "purchase_price")
    p["as_is_value"] = _money("As-Is Value", p, "as_is_value")
    p["rehab_budget"] = _money("Rehab Budget", p, "rehab_budget", help="Leave at 0 for no-rehab programs")
    p["after_repair_value"] = _money("After Repair Value (ARV)", p, "after_repair_value")
    p["earnest_money_deposit"] = _money(
        "Earnest Money Deposit", p, "earnest_money_deposit", help="Required for purchases"
    )
    return p


@st.cache_resource
def shared_area_lookup() -> CensusAreaLookup:
    """One lookup per process so its cache outlives reruns and sessions."""
    return CensusAreaLookup()


def render_area_lookup(lookup=None):
    """Informational urban/rural badge for the subject property zip."""
    zip_code = st.session_state.get("property", {}).get("zip_code", "")
    if not st.button("Check Area", disabled=not is_valid_zip(zip_code)):
        return None
    lookup = lookup or st.session_state.get("area_lookup") or shared_area_lookup()
    result = asyncio.run(lookup.classify(zip_code))
    if result.found:
        st.caption(f"Area: {result.classification.area_type.value.title()}")
    else:
        st.warning(result.error)
    return result


def render_financial_form():
    st.session_state.setdefault("financial", {})
    f = st.session_state.financial
    f["liquid_cash_available"] = _money("Liquid Cash Available", f, "liquid_cash_available")
    f["annual_property_taxes"] = _money("Annual Property Taxes", f, "annual_property_taxes")
    f["annual_insurance"] = _money("Annual Insurance", f, "annual_insurance")
    f["annual_flood_insurance"] = _money("Annual Flood Insurance", f, "annual_flood_insurance")
    f["annual_hoa"] = _money("Annual HOA", f, "annual_hoa")
    f["is_income_qualified_loan"] = st.checkbox(
        "Income-qualified (DSCR) loan", value=bool(f.get("is_income_qualified_loan", False))
    )
    f["monthly_rental_income"] = _money("Monthly Rental Income", f, "monthly_rental_income")
    return f


def render_program_form():
    """Program and term selection; terms are limited to what the program offers."""
    st.session_state.setdefault("program", {})
    prog = st.session_state.program
    kinds = list(ProgramKind)
    current = prog.get("program_kind", ProgramKind.PURCHASE_WITH_REHAB.value)
    kind = st.radio(
        "Loan Program",
        kinds,
        index=kinds.index(ProgramKind(current)),
        format_func=lambda k: k.label,
    )
    terms = list(PROGRAM_TERMS[kind.value])
    term = int(prog.get("term_months", terms[0]))
    term = st.radio(
        "Term",
        terms,
        index=terms.index(term) if term in terms else 0,
        format_func=lambda m: TERM_LABELS[m],
    )
    prog["program_kind"] = kind.value
    prog["term_months"] = term
    return prog
