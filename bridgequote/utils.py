"""Normalization of raw form input into engine models."""

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel

from bridgequote.models import (
    BorrowerProfile,
    FinancialProfile,
    LoanApplication,
    ProgramKind,
    ProgramSelection,
    PropertyProfile,
)
from bridgequote.presets import TERM_SELECTIONS

M = TypeVar("M", bound=BaseModel)

# Magnitudes outside this range are not amounts a form can mean, and
# arithmetic on them overflows the decimal context.
MAX_ADJUSTED_EXPONENT = 15
MIN_ADJUSTED_EXPONENT = -15


def to_number(x, default=Decimal(0)) -> Decimal:
    """Return ``x`` as a ``Decimal`` or a fallback value.

    Form fields arrive as strings or numbers and are frequently blank.  Empty
    strings, ``None``, text that does not parse, non-finite values and values
    of absurd magnitude (``1e1000000``) collapse to ``default`` so pricing
    never sees an ambiguous type or overflows.  Floats
    are converted through ``str`` so ``0.1`` stays ``0.1``.
    """

    if x is None:
        return default
    if isinstance(x, float) and not math.isfinite(x):
        return default
    if isinstance(x, Decimal):
        value = x
    else:
        try:
            value = Decimal(str(x).strip())
        except (InvalidOperation, ValueError):
            return default
    if not value.is_finite():
        return default
    if value and not MIN_ADJUSTED_EXPONENT <= value.adjusted() <= MAX_ADJUSTED_EXPONENT:
        return default
    return value


def to_int(x, default: int = 0) -> int:
    """Whole-number variant of :func:`to_number`, truncating toward zero."""
    return int(to_number(x, Decimal(default)))


def term_months_for(selection) -> int:
    """Map a form term key (``longTerm``) or a month count to months."""
    if isinstance(selection, str) and selection.strip() in TERM_SELECTIONS:
        return TERM_SELECTIONS[selection.strip()]
    return to_int(selection)


def _lookup(raw: Mapping[str, Any], name: str, alias: Optional[str]) -> Any:
    if name in raw:
        return raw[name]
    if alias and alias in raw:
        return raw[alias]
    return None


def _normalize(model: Type[M], raw: Optional[Mapping[str, Any]]) -> M:
    raw = raw or {}
    values = {}
    for name, field in model.model_fields.items():
        value = _lookup(raw, name, field.alias)
        if value is None:
            continue
        if field.annotation is Decimal:
            value = to_number(value)
        elif field.annotation is int:
            value = to_int(value)
        elif field.annotation is str:
            value = str(value)
        values[name] = value
    return model.model_validate(values)


def normalize_borrower(raw: Optional[Mapping[str, Any]]) -> BorrowerProfile:
    return _normalize(BorrowerProfile, raw)


def normalize_property(raw: Optional[Mapping[str, Any]]) -> PropertyProfile:
    return _normalize(PropertyProfile, raw)


def normalize_financial(raw: Optional[Mapping[str, Any]]) -> FinancialProfile:
    return _normalize(FinancialProfile, raw)


def normalize_program(raw: Mapping[str, Any]) -> ProgramSelection:
    """Build the program selection; the program kind itself is required."""
    kind = _lookup(raw, "program_kind", "programKind")
    term = _lookup(raw, "term_months", "termMonths")
    if term is None:
        term = _lookup(raw, "term", None)
    return ProgramSelection(
        program_kind=ProgramKind(kind),
        term_months=term_months_for(term) if term is not None else 12,
    )


def normalize_application(raw: Mapping[str, Any]) -> LoanApplication:
    """Normalize a full wizard submission with one section per form step."""
    return LoanApplication(
        borrower=normalize_borrower(raw.get("borrower")),
        property=normalize_property(raw.get("property")),
        financial=normalize_financial(raw.get("financial")),
        program=normalize_program(raw.get("program") or {}),
    )
