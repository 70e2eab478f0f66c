from decimal import Decimal

DISCLAIMER = (
    "This quote is for informational purposes only and does not constitute a loan commitment. "
    "Please provide 60 days of current statements to verify the liquidity shown. "
    "A discount is applied to retirement accounts, stocks and other liquid assets "
    "when calculating total liquidity."
)

QUOTE_NOTES = [
    "Interest charged only on drawn funds (Dutch-style)",
    "100% rehab coverage available",
    "Fast closing: 5 days with full documentation",
    "No tax returns, W-2s, or DTI required",
]

# Minimum total experience (properties owned + sold) for each tier, highest first.
TIER_THRESHOLDS = [(10, "Platinum"), (5, "Gold"), (2, "Silver")]

BASE_RATES = {
    "Bronze": Decimal("14.0"),
    "Silver": Decimal("13.0"),
    "Gold": Decimal("12.0"),
    "Platinum": Decimal("11.0"),
}

# (minimum FICO, rate adjustment in percentage points), highest first.
CREDIT_ADJUSTMENTS = [
    (750, Decimal("-0.25")),
    (700, Decimal("-0.10")),
    (680, Decimal("0")),
]
SUBPRIME_ADJUSTMENT = Decimal("0.50")

# Bands shown on the rate sheet: label -> representative score.
CREDIT_BANDS = {"750+": 750, "700-749": 700, "680-699": 680, "<680": 679}

# (maximum units, LTV); anything above the last band goes to manual underwriting.
LTV_BANDS = [(4, Decimal("0.90")), (11, Decimal("0.70"))]

ARV_ADVANCE_PCT = Decimal("0.75")
ORIGINATION_POINTS = Decimal("0.03")
UNDERWRITING_FEE = Decimal("1000")
DOC_PREP_FEE = Decimal("1995")
CLOSING_FEE = Decimal("0")
TITLE_RATE = Decimal("0.004")
TITLE_BASE_FEE = Decimal("1000")
TAX_ESTIMATE_RATE = Decimal("0.015")
DEFAULT_INSURANCE_ESTIMATE = Decimal("1140")

PROGRAM_LABELS = {
    "purchaseWithRehab": "Purchase With Rehab",
    "purchaseWithoutRehab": "Purchase Without Rehab",
    "refinanceWithRehab": "Refinance With Rehab",
    "refinanceWithoutRehab": "Refinance Without Rehab",
}

PROGRAM_TERMS = {
    "purchaseWithRehab": (12,),
    "purchaseWithoutRehab": (12, 24, 360),
    "refinanceWithRehab": (12,),
    "refinanceWithoutRehab": (12, 24, 360),
}

TERM_SELECTIONS = {
    "shortTerm": 12,
    "shortTerm12": 12,
    "shortTerm24": 24,
    "longTerm": 360,
}

TERM_LABELS = {
    12: "Short Term Bridge (12 months)",
    24: "Short Term Bridge (24 months)",
    360: "Long Term Rental (30yr Fixed DSCR)",
}

# Terms at or below this are interest-only with no amortizing payment.
INTEREST_ONLY_MAX_TERM = 24

CONSTRUCTION_REHAB_RATIO = Decimal("0.5")
CONSTRUCTION_TERM_MONTHS = 24
CONSTRUCTION_MIN_FICO = 680
CONSTRUCTION_TIERS = ("Gold", "Platinum")
ADVANCED_DRAW_TIERS = ("Gold", "Platinum")

MIN_FICO = 660
MIN_PURCHASE_PRICE = Decimal("100000")
MAX_PURCHASE_PRICE = Decimal("3000000")
MANUAL_UNDERWRITING_UNITS = 12
