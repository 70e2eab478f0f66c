"""Loan pricing and eligibility engine for investor bridge and rental loans.

This module also exposes the package version for runtime display."""

from importlib import metadata

from bridgequote.engine import price_application, quote
from bridgequote.rules import ValidationResult, validate
from bridgequote.utils import normalize_application

try:
    __version__ = metadata.version("bridgequote")
except metadata.PackageNotFoundError:  # pragma: no cover - during local dev
    __version__ = "0.1.0"

__all__ = [
    "__version__",
    "ValidationResult",
    "normalize_application",
    "price_application",
    "quote",
    "validate",
]
