"""Tax calculation engine comparing Lucro Real, Lucro Presumido and Simples Nacional."""

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from regime_analyzer.core.models.company import CompanyData
from regime_analyzer.core.models.config import TaxConfig
from regime_analyzer.core.models.enums import Regime, Setor
from regime_analyzer.core.models.results import (
    DetailedTaxResults,
    ResultadoLucroPresumido,
    ResultadoLucroReal,
    ResultadoSimplesNacional,
)
from regime_analyzer.core.rules.tax_constants import LIMITE_ADICIONAL_IRPJ_ANUAL, percentual
from regime_analyzer.shared.formatters import format_currency, format_rate

if TYPE_CHECKING:
    from regime_analyzer.infrastructure.storage import LocalStorage

logger = logging.getLogger(__name__)


def _rotulo(chave: str, prefixo: str) -> str:
    """Turn a config key like 'faixa5' into 'Faixa 5'."""
    if chave.lower().startswith(prefixo):
        return f"{prefixo.capitalize()} {chave[len(prefixo):]}"
    return chave


class TaxCalculator:
    """Computes annual tax liability under the three regimes.

    The configuration is fixed at construction; ``calculate_detailed_taxes``
    is a pure function of it and the company profile, so one calculator can
    serve any number of calculations.
    """

    def __init__(self, config: TaxConfig | None = None):
        self.config = config if config is not None else TaxConfig()

    @classmethod
    def from_storage(cls, storage: "LocalStorage") -> "TaxCalculator":
        """Build a calculator from the persisted configuration (or defaults)."""
        from regime_analyzer.infrastructure.storage import load_tax_config

        return cls(load_tax_config(storage))

    def calculate_detailed_taxes(self, company: CompanyData) -> DetailedTaxResults:
        """Compare the three regimes for a company.

        The best option is the lowest total across all three regimes, even
        when Simples Nacional is above its ceiling. Ties go to the regime
        listed first in Regime, so Lucro Real beats Lucro Presumido, which
        beats Simples Nacional.

        Args:
            company: Validated company profile

        Returns:
            Breakdown per regime, cheapest regime and the saving over the
            most expensive one
        """
        if not self.config.tem_icms_estadual(company.uf):
            logger.warning(
                "UF %s sem alíquota de ICMS configurada, usando alíquota geral de %s%%",
                company.uf,
                self.config.lucro_real.icms_geral,
            )
        aliquota_icms = self.config.aliquota_icms(company.uf)

        lucro_real = self._calcular_lucro_real(
            company.receita, company.lucro, company.folha, aliquota_icms
        )
        lucro_presumido = self._calcular_lucro_presumido(
            company.receita, company.setor, company.folha, aliquota_icms
        )
        simples_nacional = self._calcular_simples_nacional(
            company.receita, company.setor, company.folha
        )

        totais = {
            Regime.LUCRO_REAL: lucro_real.total,
            Regime.LUCRO_PRESUMIDO: lucro_presumido.total,
            Regime.SIMPLES_NACIONAL: simples_nacional.total,
        }
        # min() keeps the first regime on ties, so Lucro Real wins a tie
        melhor = min(Regime, key=totais.__getitem__)
        economia = max(totais.values()) - min(totais.values())

        logger.debug(
            "Totais: real=%s presumido=%s simples=%s -> %s",
            lucro_real.total,
            lucro_presumido.total,
            simples_nacional.total,
            melhor.value,
        )

        return DetailedTaxResults(
            lucro_real=lucro_real,
            lucro_presumido=lucro_presumido,
            simples_nacional=simples_nacional,
            best_option=melhor,
            economy=economia,
        )

    def _inss(self, folha: Decimal) -> Decimal:
        return percentual(folha, self.config.contribuicao_previdenciaria.patronal)

    def _linha_inss(self) -> str:
        patronal = self.config.contribuicao_previdenciaria.patronal
        return f"INSS Patronal: {format_rate(patronal)} sobre folha"

    def _calcular_lucro_real(
        self, receita: Decimal, lucro: Decimal, folha: Decimal, aliquota_icms: Decimal
    ) -> ResultadoLucroReal:
        """Lucro Real: IRPJ/CSLL on actual profit, non-cumulative PIS/COFINS.

        The IRPJ surtax applies only to profit above R$ 240.000/year. Negative
        profit is not clamped.
        """
        cfg = self.config.lucro_real

        irpj = percentual(lucro, cfg.irpj)
        excedente = max(Decimal("0"), lucro - LIMITE_ADICIONAL_IRPJ_ANUAL)
        irpj_adicional = percentual(excedente, cfg.irpj_adicional)
        csll = percentual(lucro, cfg.csll)
        pis = percentual(receita, cfg.pis_nao_cumulativo)
        cofins = percentual(receita, cfg.cofins_nao_cumulativo)
        icms = percentual(receita, aliquota_icms)
        inss = self._inss(folha)

        detalhes = [f"IRPJ: {format_rate(cfg.irpj)} sobre lucro de {format_currency(lucro)}"]
        if irpj_adicional > 0:
            detalhes.append(
                f"IRPJ Adicional: {format_rate(cfg.irpj_adicional)} sobre excesso de "
                f"{format_currency(LIMITE_ADICIONAL_IRPJ_ANUAL)}"
            )
        detalhes.extend([
            f"CSLL: {format_rate(cfg.csll)} sobre lucro",
            f"PIS: {format_rate(cfg.pis_nao_cumulativo)} sobre receita (não cumulativo)",
            f"COFINS: {format_rate(cfg.cofins_nao_cumulativo)} sobre receita (não cumulativo)",
            f"ICMS: {format_rate(aliquota_icms)} sobre receita",
            self._linha_inss(),
        ])

        return ResultadoLucroReal(
            irpj=irpj,
            irpj_adicional=irpj_adicional,
            csll=csll,
            pis=pis,
            cofins=cofins,
            icms=icms,
            inss=inss,
            total=irpj + irpj_adicional + csll + pis + cofins + icms + inss,
            detalhes=detalhes,
        )

    def _calcular_lucro_presumido(
        self, receita: Decimal, setor: Setor, folha: Decimal, aliquota_icms: Decimal
    ) -> ResultadoLucroPresumido:
        """Lucro Presumido: IRPJ/CSLL on a sector percentage of revenue."""
        cfg = self.config.lucro_presumido

        presuncao = self.config.presuncao_para(setor)
        lucro_presumido = percentual(receita, presuncao)
        irpj = percentual(lucro_presumido, cfg.irpj)
        csll = percentual(lucro_presumido, cfg.csll)
        pis = percentual(receita, cfg.pis_cumulativo)
        cofins = percentual(receita, cfg.cofins_cumulativo)
        icms = percentual(receita, aliquota_icms)
        inss = self._inss(folha)

        detalhes = [
            f"Presunção de lucro: {format_rate(presuncao)} para {setor.label.lower()}",
            f"IRPJ: {format_rate(cfg.irpj)} sobre lucro presumido de "
            f"{format_currency(lucro_presumido)}",
            f"CSLL: {format_rate(cfg.csll)} sobre lucro presumido",
            f"PIS: {format_rate(cfg.pis_cumulativo)} sobre receita (cumulativo)",
            f"COFINS: {format_rate(cfg.cofins_cumulativo)} sobre receita (cumulativo)",
            f"ICMS: {format_rate(aliquota_icms)} sobre receita",
            self._linha_inss(),
        ]

        return ResultadoLucroPresumido(
            presuncao=presuncao,
            lucro_presumido=lucro_presumido,
            irpj=irpj,
            csll=csll,
            pis=pis,
            cofins=cofins,
            icms=icms,
            inss=inss,
            total=irpj + csll + pis + cofins + icms + inss,
            detalhes=detalhes,
        )

    def _calcular_simples_nacional(
        self, receita: Decimal, setor: Setor, folha: Decimal
    ) -> ResultadoSimplesNacional:
        """Simples Nacional: one bracket rate applied to the whole revenue.

        The first bracket whose ceiling is >= revenue applies. Revenue above
        every ceiling is clamped to the top bracket and flagged.
        """
        nome_anexo, faixas = self.config.anexo_para(setor)

        acima_do_limite = False
        for nome_faixa, faixa in faixas.items():
            if receita <= faixa.limite:
                break
        else:
            # nome_faixa/faixa still hold the top bracket
            acima_do_limite = True
            logger.warning(
                "Receita %s acima do teto do %s (%s), aplicando a última faixa",
                receita,
                nome_anexo,
                faixa.limite,
            )

        rotulo_anexo = _rotulo(nome_anexo, "anexo")
        rotulo_faixa = _rotulo(nome_faixa, "faixa")
        das = percentual(receita, faixa.aliquota)
        inss = self._inss(folha)

        detalhes = [
            f"{rotulo_anexo} - {setor.label.lower()}",
            f"{rotulo_faixa}: {format_rate(faixa.aliquota)} sobre receita",
        ]
        if acima_do_limite:
            detalhes.append(
                f"Receita acima do teto de {format_currency(faixa.limite)}: "
                "empresa não enquadrável no Simples Nacional"
            )
        detalhes.extend([
            f"DAS: {format_currency(das)}",
            self._linha_inss(),
        ])

        return ResultadoSimplesNacional(
            das=das,
            inss=inss,
            total=das + inss,
            anexo=rotulo_anexo,
            faixa=rotulo_faixa,
            aliquota=faixa.aliquota,
            acima_do_limite=acima_do_limite,
            detalhes=detalhes,
        )


def calculate_detailed_taxes(
    company: CompanyData, config: TaxConfig | None = None
) -> DetailedTaxResults:
    """Convenience function to compare regimes.

    Args:
        company: Validated company profile
        config: Rate table (defaults to the built-in one)

    Returns:
        DetailedTaxResults for the company
    """
    return TaxCalculator(config).calculate_detailed_taxes(company)
