import streamlit as st

from bridgequote.calculators import round_half_up
from bridgequote.presets import DISCLAIMER, ORIGINATION_POINTS, QUOTE_NOTES


def fmt_money(amount) -> str:
    return f"${float(amount):,.0f}"


def fmt_cents(amount) -> str:
    return f"${round_half_up(amount):,.2f}"


def render_quote_panel():
    """Show validation errors, or the quote breakdown once one exists."""
    errors = st.session_state.get("quote_errors", [])
    q = st.session_state.get("quote")
    if errors:
        st.subheader("Application Errors")
        for err in errors:
            st.error(err)
        return None
    if q is None:
        st.info("Complete the form to generate your loan quote")
        return None

    st.subheader(f"Loan Quote Breakdown ({q.investor_tier.value} Tier)")
    left, right = st.columns(2)
    with left:
        st.caption(f"Loan Program: {q.program_kind.label}")
        st.caption(f"Purchase Price: {fmt_money(q.purchase_price)}")
        st.caption(f"Rehab Budget: {fmt_money(q.rehab_budget)}")
        if q.financed_rehab_budget != q.rehab_budget:
            st.caption(f"Financed Rehab: {fmt_money(q.financed_rehab_budget)}")
        st.caption(f"After Repair Value (ARV): {fmt_money(q.arv)}")
        st.caption(f"ARV Cap: {fmt_money(q.arv_cap)}")
        st.caption(f"Initial Advance: {fmt_money(q.initial_advance)}")
    with right:
        st.caption(f"Loan Amount Offered: {fmt_money(q.loan_amount)}")
        st.caption(f"Credit Score: {q.credit_score}")
        st.caption(f"Interest Rate: {q.interest_rate:.2f}% Fixed")
        st.caption(f"Loan Term: {q.term_months} Months ({q.repayment_type})")
        st.caption(f"Monthly Payment: {fmt_money(q.monthly_payment)}")
        st.caption(f"Draw Schedule: {q.draw_schedule_kind.value}")

    st.markdown("**Fees and Closing Costs**")
    fees = q.fees
    points = ORIGINATION_POINTS * 100
    st.table(
        {
            "Fee": [
                f"Origination Fee ({points:.0f} points)",
                "Underwriting",
                "Doc Prep",
                "Title Estimate",
                "Tax Estimate",
                "Insurance Estimate",
                "Closing Fee (waived)",
                "Total Closing Costs",
            ],
            "Amount": [
                fmt_money(v)
                for v in (
                    fees.origination_fee,
                    fees.underwriting_fee,
                    fees.doc_prep_fee,
                    fees.title_estimate,
                    fees.tax_estimate,
                    fees.insurance_estimate,
                    fees.closing_fee,
                    fees.total_closing_costs,
                )
            ],
        }
    )

    st.markdown("**Borrower Requirements**")
    st.caption(f"Down Payment: {fmt_money(q.down_payment)}")
    st.caption(f"Earnest Money Deposit: {fmt_money(q.earnest_money_deposit)}")
    st.caption(f"Payment Holdback: {fmt_money(q.payment_holdback)}")
    st.caption(f"Monthly Escrow: {fmt_cents(q.monthly_escrow)}")
    st.caption(f"Total from Borrower: {fmt_money(q.total_cash_from_borrower)}")
    st.caption(f"Liquidity Check Required: {fmt_money(q.liquidity_required)}")

    for note in QUOTE_NOTES:
        st.markdown(f"- {note}")
    st.caption(DISCLAIMER)
    return q
