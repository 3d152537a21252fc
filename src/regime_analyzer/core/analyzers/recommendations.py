"""Recommendation providers for regime comparison results."""

from decimal import Decimal
from typing import Optional, Protocol

from regime_analyzer.core.models.company import CompanyData
from regime_analyzer.core.models.config import TaxConfig
from regime_analyzer.core.models.enums import Regime, Setor
from regime_analyzer.core.models.recommendation import Recommendation
from regime_analyzer.core.models.results import DetailedTaxResults
from regime_analyzer.core.rules.tax_constants import (
    ECONOMIA_MINIMA_SUGESTAO,
    FATOR_R_MINIMO,
    PROXIMIDADE_LIMITE_SIMPLES,
)
from regime_analyzer.shared.formatters import format_currency, format_percentage


class RecommendationProvider(Protocol):
    """Anything that turns a comparison into recommendations."""

    def suggest(
        self, company: CompanyData, results: DetailedTaxResults
    ) -> list[Recommendation]:
        ...


class RuleBasedRecommendationProvider:
    """Deterministic recommendations from the computed comparison.

    Checks for:
    - Cheapest eligible regime and its savings
    - Simples Nacional eligibility and proximity to the ceiling
    - Fiscal loss under Lucro Real
    - IRPJ surtax under Lucro Real
    - Fator R for service companies
    """

    def __init__(self, config: TaxConfig | None = None):
        self.config = config if config is not None else TaxConfig()

    def suggest(
        self, company: CompanyData, results: DetailedTaxResults
    ) -> list[Recommendation]:
        """Run all checks and return recommendations sorted by priority."""
        checks = (
            self._check_best_regime,
            self._check_simples_eligibility,
            self._check_fiscal_loss,
            self._check_irpj_surtax,
            self._check_fator_r,
        )

        recommendations = []
        for check in checks:
            recommendation = check(company, results)
            if recommendation is not None:
                recommendations.append(recommendation)

        return sorted(recommendations, key=lambda r: r.prioridade)

    def _teto_simples(self, setor: Setor) -> Decimal:
        _, faixas = self.config.anexo_para(setor)
        return max(faixa.limite for faixa in faixas.values())

    def _check_best_regime(
        self, company: CompanyData, results: DetailedTaxResults
    ) -> Optional[Recommendation]:
        """Recommend the cheapest regime the company can actually opt for.

        Simples Nacional is left out when revenue is above its ceiling.
        """
        ordenados = sorted(results.totais_elegiveis().items(), key=lambda item: item[1])
        melhor, total_melhor = ordenados[0]
        segundo, total_segundo = ordenados[1]
        pior_total = ordenados[-1][1]

        economia = pior_total - total_melhor
        if economia < ECONOMIA_MINIMA_SUGESTAO:
            return None

        aliquota = results.aliquota_efetiva(melhor, company.receita)
        return Recommendation(
            titulo=f"Regime mais vantajoso: {melhor.label}",
            descricao=(
                f"Carga total estimada de {format_currency(total_melhor)} "
                f"({format_percentage(aliquota)} da receita). "
                f"Economia de {format_currency(total_segundo - total_melhor)} "
                f"em relação ao {segundo.label} e de {format_currency(economia)} "
                f"em relação ao regime mais caro."
            ),
            economia_potencial=economia,
            prioridade=1,
            regime=melhor,
        )

    def _check_simples_eligibility(
        self, company: CompanyData, results: DetailedTaxResults
    ) -> Optional[Recommendation]:
        """Warn when revenue is above or close to the Simples Nacional ceiling."""
        teto = self._teto_simples(company.setor)
        receita = company.receita

        if results.simples_nacional.acima_do_limite:
            return Recommendation(
                titulo="Empresa fora do limite do Simples Nacional",
                descricao=(
                    f"Receita de {format_currency(receita)} excede o teto de "
                    f"{format_currency(teto)}. O valor calculado para o Simples "
                    f"Nacional usa a última faixa apenas como referência."
                ),
                prioridade=1,
                regime=Regime.SIMPLES_NACIONAL,
            )
        if receita >= teto * PROXIMIDADE_LIMITE_SIMPLES:
            return Recommendation(
                titulo="Receita próxima do teto do Simples Nacional",
                descricao=(
                    f"Receita de {format_currency(receita)} corresponde a "
                    f"{format_percentage(receita / teto * 100)} do teto de "
                    f"{format_currency(teto)}. Planeje a transição de regime "
                    f"caso o crescimento continue."
                ),
                prioridade=2,
                regime=Regime.SIMPLES_NACIONAL,
            )
        return None

    def _check_fiscal_loss(
        self, company: CompanyData, results: DetailedTaxResults
    ) -> Optional[Recommendation]:
        """Explain negative IRPJ/CSLL when costs exceed revenue."""
        lucro = company.lucro
        if lucro >= 0:
            return None

        return Recommendation(
            titulo="Prejuízo fiscal no Lucro Real",
            descricao=(
                f"Custos superam a receita em {format_currency(-lucro)}. "
                f"IRPJ e CSLL aparecem negativos no cálculo; na prática não são "
                f"devidos e o prejuízo pode ser compensado em exercícios futuros "
                f"(limite de 30% do lucro de cada período)."
            ),
            prioridade=2,
            regime=Regime.LUCRO_REAL,
        )

    def _check_irpj_surtax(
        self, company: CompanyData, results: DetailedTaxResults
    ) -> Optional[Recommendation]:
        """Point out the IRPJ surtax under Lucro Real."""
        adicional = results.lucro_real.irpj_adicional
        if adicional <= 0:
            return None

        return Recommendation(
            titulo="Adicional de IRPJ no Lucro Real",
            descricao=(
                f"Lucro acima de R$ 240.000 gera {format_currency(adicional)} "
                f"de adicional de IRPJ. Antecipar despesas dedutíveis reduz "
                f"a base sujeita ao adicional."
            ),
            prioridade=3,
            regime=Regime.LUCRO_REAL,
        )

    def _check_fator_r(
        self, company: CompanyData, results: DetailedTaxResults
    ) -> Optional[Recommendation]:
        """Mention Fator R for service companies with a relevant payroll."""
        if company.setor != Setor.SERVICOS or company.receita <= 0:
            return None

        fator_r = company.folha / company.receita
        if fator_r < FATOR_R_MINIMO:
            return None

        return Recommendation(
            titulo="Fator R favorável",
            descricao=(
                f"Folha representa {format_percentage(fator_r * 100)} da receita "
                f"(mínimo de {format_percentage(FATOR_R_MINIMO * 100)}). "
                f"Atividades sujeitas ao Fator R permanecem no Anexo III do "
                f"Simples Nacional, com alíquotas menores que as do Anexo V."
            ),
            prioridade=3,
            regime=Regime.SIMPLES_NACIONAL,
        )


def generate_recommendations(
    company: CompanyData,
    results: DetailedTaxResults,
    provider: Optional[RecommendationProvider] = None,
    config: Optional[TaxConfig] = None,
) -> list[Recommendation]:
    """Convenience function to produce recommendations.

    Args:
        company: Company profile used in the comparison
        results: Comparison results
        provider: Recommendation source (defaults to the rule-based one)
        config: Rates the comparison was computed with, used by the default
            provider for the Simples Nacional ceiling (defaults to TaxConfig())

    Returns:
        List of recommendations sorted by priority
    """
    if provider is None:
        provider = RuleBasedRecommendationProvider(config)
    return provider.suggest(company, results)
