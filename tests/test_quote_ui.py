from decimal import Decimal

from streamlit.testing.v1 import AppTest

from factories import make_lookup

VALID_FORM = {
    "borrower": {"properties_owned": 3, "properties_sold": 2, "fico_score": 720},
    "property": {
        "number_of_units": 1,
        "purchase_price": 200000.0,
        "rehab_budget": 50000.0,
        "after_repair_value": 300000.0,
        "earnest_money_deposit": 5000.0,
        "city": "Austin",
        "zip_code": "78701",
    },
    "financial": {
        "liquid_cash_available": 100000.0,
        "annual_property_taxes": 3000.0,
        "annual_insurance": 1200.0,
    },
    "program": {"program_kind": "purchaseWithRehab", "term_months": 12},
}


def quote_flow_app():
    import app

    app.generate_quote()
    app.render_quote_panel()


def quote_panel_app():
    from ui.quote import render_quote_panel

    render_quote_panel()


def program_app():
    from ui.forms import render_program_form

    render_program_form()


def area_app():
    from ui.forms import render_area_lookup

    render_area_lookup()


def _flow(form):
    at = AppTest.from_function(quote_flow_app)
    for section, values in form.items():
        at.session_state[section] = dict(values)
    at.run()
    return at


def test_valid_form_renders_quote():
    at = _flow(VALID_FORM)
    q = at.session_state["quote"]
    assert q.loan_amount == Decimal("225000")
    captions = [c.value for c in at.caption]
    assert "Loan Amount Offered: $225,000" in captions
    assert "Interest Rate: 11.90% Fixed" in captions
    assert "Total from Borrower: $40,745" in captions
    assert not at.error


def test_invalid_form_lists_every_error():
    form = dict(VALID_FORM)
    form["borrower"] = {"properties_owned": 0, "fico_score": 640}
    form["property"] = dict(VALID_FORM["property"], city="")
    at = _flow(form)
    assert at.session_state["quote"] is None
    assert [e.value for e in at.error] == [
        "Minimum credit score of 660 required",
        "City is required",
    ]


def test_missing_program_asks_for_selection():
    form = dict(VALID_FORM, program={})
    at = _flow(form)
    assert [e.value for e in at.error] == ["Please select a loan program"]


def test_empty_panel_prompts_for_form():
    at = AppTest.from_function(quote_panel_app)
    at.run()
    assert at.info[0].value == "Complete the form to generate your loan quote"


def test_rehab_program_limits_term_choices():
    at = AppTest.from_function(program_app)
    at.session_state["program"] = {"program_kind": "refinanceWithRehab", "term_months": 360}
    at.run()
    assert at.session_state["program"]["term_months"] == 12


def test_rental_program_keeps_long_term():
    at = AppTest.from_function(program_app)
    at.session_state["program"] = {"program_kind": "purchaseWithoutRehab", "term_months": 360}
    at.run()
    assert at.session_state["program"]["term_months"] == 360


def test_area_lookup_badge_reuses_cached_result():
    calls = []
    at = AppTest.from_function(area_app)
    at.session_state["property"] = {"zip_code": "10001"}
    at.session_state["area_lookup"] = make_lookup(calls)
    at.run()
    assert not at.caption

    at.button[0].click().run()
    assert [c.value for c in at.caption] == ["Area: Urban"]
    at.button[0].click().run()
    assert [c.value for c in at.caption] == ["Area: Urban"]
    assert len(calls) == 1


def test_area_lookup_button_disabled_for_bad_zip():
    at = AppTest.from_function(area_app)
    at.session_state["property"] = {"zip_code": "123"}
    at.run()
    assert at.button[0].disabled


def test_default_area_lookup_is_shared():
    from ui.forms import shared_area_lookup

    assert shared_area_lookup() is shared_area_lookup()
