"""Business rules and default rates for regime comparison."""

from regime_analyzer.core.rules.tax_constants import (
    ANEXO_I,
    ANEXO_II,
    ANEXO_III,
    CONTRIBUICAO_PREVIDENCIARIA,
    ECONOMIA_MINIMA_SUGESTAO,
    FATOR_R_MINIMO,
    ICMS_ESTADUAL,
    LIMITE_ADICIONAL_IRPJ_ANUAL,
    LUCRO_PRESUMIDO,
    LUCRO_REAL,
    PROXIMIDADE_LIMITE_SIMPLES,
    percentual,
)

__all__ = [
    "ANEXO_I",
    "ANEXO_II",
    "ANEXO_III",
    "CONTRIBUICAO_PREVIDENCIARIA",
    "ECONOMIA_MINIMA_SUGESTAO",
    "FATOR_R_MINIMO",
    "ICMS_ESTADUAL",
    "LIMITE_ADICIONAL_IRPJ_ANUAL",
    "LUCRO_PRESUMIDO",
    "LUCRO_REAL",
    "PROXIMIDADE_LIMITE_SIMPLES",
    "percentual",
]
