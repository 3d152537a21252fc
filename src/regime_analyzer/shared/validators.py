"""Data validators for Regime Analyzer."""

import re
from decimal import Decimal, InvalidOperation

# Unidades federativas
UFS = (
    "AC", "AL", "AP", "AM", "BA", "CE", "DF", "ES", "GO", "MA",
    "MT", "MS", "MG", "PA", "PB", "PR", "PE", "PI", "RJ", "RN",
    "RS", "RO", "RR", "SC", "SP", "SE", "TO",
)


def normalize_uf(uf: str) -> str:
    """
    Normalize a state code for lookups.

    Args:
        uf: State code (any case, may contain surrounding spaces)

    Returns:
        Upper-cased, stripped code like "SP"
    """
    return uf.strip().upper()


def validate_uf(uf: str) -> bool:
    """
    Check whether a string is a known Brazilian state code.

    Args:
        uf: State code (any case)

    Returns:
        True if it is one of the 27 UFs, False otherwise
    """
    return normalize_uf(uf) in UFS


def parse_brazilian_decimal(text: str) -> Decimal:
    """
    Parse a number written in Brazilian or plain notation.

    Accepts "2450000", "2450000.50", "2.450.000,50" and "R$ 2.450.000,50".

    Raises:
        ValueError: If the text is not a number
    """
    clean = re.sub(r"[^\d,.\-]", "", text.strip())
    if not clean:
        raise ValueError(f"Valor numérico inválido: {text!r}")

    if "," in clean:
        # Brazilian notation: dots group thousands, comma marks decimals
        clean = clean.replace(".", "").replace(",", ".")
    elif clean.count(".") > 1:
        clean = clean.replace(".", "")

    try:
        return Decimal(clean)
    except InvalidOperation as e:
        raise ValueError(f"Valor numérico inválido: {text!r}") from e
