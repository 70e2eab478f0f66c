import logging

import streamlit as st

from bridgequote import __version__
from bridgequote.calculators import rate_sheet
from bridgequote.engine import price_application
from bridgequote.exceptions import PricingError
from bridgequote.logging_config import setup_logging
from bridgequote.presets import DISCLAIMER
from bridgequote.utils import normalize_application
from ui.forms import (
    render_area_lookup,
    render_borrower_form,
    render_financial_form,
    render_program_form,
    render_property_form,
)
from ui.quote import render_quote_panel

logger = logging.getLogger("app")

QUOTE_FAILURE_MESSAGE = "Unable to generate quote. Please check your inputs."

TIER_NOTES = [
    "Bronze (0-1 projects): 660+ FICO",
    "Silver (2-4 projects): 660+ FICO",
    "Gold (5-9 projects): construction available",
    "Platinum (10+ projects): best rates, construction available",
]


def generate_quote():
    """Normalize the wizard state, validate it and store the result."""
    program = dict(st.session_state.get("program", {}))
    if not program.get("program_kind"):
        st.session_state["quote"] = None
        st.session_state["quote_errors"] = ["Please select a loan program"]
        return None
    raw = {
        "borrower": st.session_state.get("borrower", {}),
        "property": dict(st.session_state.get("property", {})),
        "financial": st.session_state.get("financial", {}),
        "program": program,
    }
    # The transaction type follows the selected program.
    raw["property"]["is_purchase_transaction"] = program["program_kind"].startswith("purchase")
    try:
        application = normalize_application(raw)
        result, quote = price_application(application)
    except PricingError:
        logger.exception("Quote generation failed")
        st.session_state["quote"] = None
        st.session_state["quote_errors"] = [QUOTE_FAILURE_MESSAGE]
        return None
    st.session_state["quote_errors"] = result.errors
    st.session_state["quote"] = quote
    return quote


def render_sidebar():
    with st.sidebar:
        st.markdown(f"**BRIDGEQUOTE v{__version__}**")
        st.markdown("**Investor Tiers**")
        for note in TIER_NOTES:
            st.caption(note)
        st.markdown("**Rate Sheet (%)**")
        st.dataframe(rate_sheet())
        st.caption(DISCLAIMER)


def main():
    setup_logging()
    st.set_page_config(page_title="Real Estate Loan Application", layout="wide")
    st.title("Real Estate Loan Application")
    render_sidebar()
    borrower_tab, property_tab, details_tab, program_tab, quote_tab = st.tabs(
        ["Borrower Info", "Property Info", "Property Details", "Loan Program", "Quote"]
    )
    with borrower_tab:
        render_borrower_form()
    with property_tab:
        render_property_form()
        render_area_lookup()
    with details_tab:
        render_financial_form()
    with program_tab:
        render_program_form()
        if st.button("Generate Quote", type="primary"):
            generate_quote()
    with quote_tab:
        render_quote_panel()


if __name__ == "__main__":
    main()
