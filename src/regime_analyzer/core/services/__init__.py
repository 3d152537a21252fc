"""Calculation services for regime comparison."""

from regime_analyzer.core.services.tax_calculator import (
    TaxCalculator,
    calculate_detailed_taxes,
)

__all__ = [
    "TaxCalculator",
    "calculate_detailed_taxes",
]
