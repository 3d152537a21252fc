"""Enumerations for regime comparison domain models."""

from enum import Enum


class Setor(str, Enum):
    """Business sector (defines presumption rate and Simples annex)."""

    COMERCIO = "comercio"
    INDUSTRIA = "industria"
    SERVICOS = "servicos"

    @property
    def label(self) -> str:
        """Display name."""
        return _SETOR_LABELS[self]


class Regime(str, Enum):
    """Tax regimes, in tie-break priority order."""

    LUCRO_REAL = "lucroReal"
    LUCRO_PRESUMIDO = "lucroPresumido"
    SIMPLES_NACIONAL = "simplesNacional"

    @property
    def label(self) -> str:
        """Display name."""
        return _REGIME_LABELS[self]


_SETOR_LABELS = {
    Setor.COMERCIO: "Comércio",
    Setor.INDUSTRIA: "Indústria",
    Setor.SERVICOS: "Serviços",
}

_REGIME_LABELS = {
    Regime.LUCRO_REAL: "Lucro Real",
    Regime.LUCRO_PRESUMIDO: "Lucro Presumido",
    Regime.SIMPLES_NACIONAL: "Simples Nacional",
}
