"""Shared utilities for Regime Analyzer."""

from regime_analyzer.shared.formatters import (
    format_currency,
    format_percentage,
    format_rate,
)
from regime_analyzer.shared.validators import (
    UFS,
    normalize_uf,
    parse_brazilian_decimal,
    validate_uf,
)

__all__ = [
    # Formatters
    "format_currency",
    "format_percentage",
    "format_rate",
    # Validators
    "UFS",
    "normalize_uf",
    "parse_brazilian_decimal",
    "validate_uf",
]
