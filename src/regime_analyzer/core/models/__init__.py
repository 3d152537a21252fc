"""Domain models for regime comparison."""

from regime_analyzer.core.models.company import CompanyData, parse_company_data
from regime_analyzer.core.models.config import (
    ConfigLucroPresumido,
    ConfigLucroReal,
    ConfigSimplesNacional,
    ContribuicaoPrevidenciaria,
    FaixaSimples,
    TaxConfig,
)
from regime_analyzer.core.models.enums import Regime, Setor
from regime_analyzer.core.models.recommendation import Recommendation
from regime_analyzer.core.models.results import (
    DetailedTaxResults,
    ResultadoLucroPresumido,
    ResultadoLucroReal,
    ResultadoSimplesNacional,
)

__all__ = [
    "CompanyData",
    "parse_company_data",
    "ConfigLucroPresumido",
    "ConfigLucroReal",
    "ConfigSimplesNacional",
    "ContribuicaoPrevidenciaria",
    "FaixaSimples",
    "TaxConfig",
    "Regime",
    "Setor",
    "Recommendation",
    "DetailedTaxResults",
    "ResultadoLucroPresumido",
    "ResultadoLucroReal",
    "ResultadoSimplesNacional",
]
