"""Regime comparison result models."""

from decimal import Decimal

from pydantic import BaseModel, Field

from regime_analyzer.core.models.enums import Regime


class ResultadoLucroReal(BaseModel):
    """Lucro Real breakdown."""

    irpj: Decimal = Field(default=Decimal("0"))
    irpj_adicional: Decimal = Field(default=Decimal("0"), alias="irpjAdicional")
    csll: Decimal = Field(default=Decimal("0"))
    pis: Decimal = Field(default=Decimal("0"))
    cofins: Decimal = Field(default=Decimal("0"))
    icms: Decimal = Field(default=Decimal("0"))
    inss: Decimal = Field(default=Decimal("0"))
    total: Decimal = Field(default=Decimal("0"))
    detalhes: list[str] = Field(default_factory=list, description="Calculation notes")

    model_config = {"populate_by_name": True}

    def tributos(self) -> list[tuple[str, Decimal]]:
        """Tax lines as (label, value), in display order."""
        return [
            ("IRPJ", self.irpj),
            ("IRPJ Adicional", self.irpj_adicional),
            ("CSLL", self.csll),
            ("PIS", self.pis),
            ("COFINS", self.cofins),
            ("ICMS", self.icms),
            ("INSS Patronal", self.inss),
        ]


class ResultadoLucroPresumido(BaseModel):
    """Lucro Presumido breakdown."""

    presuncao: Decimal = Field(default=Decimal("0"), description="Presumption rate used")
    lucro_presumido: Decimal = Field(default=Decimal("0"), alias="lucroPresumido")
    irpj: Decimal = Field(default=Decimal("0"))
    csll: Decimal = Field(default=Decimal("0"))
    pis: Decimal = Field(default=Decimal("0"))
    cofins: Decimal = Field(default=Decimal("0"))
    icms: Decimal = Field(default=Decimal("0"))
    inss: Decimal = Field(default=Decimal("0"))
    total: Decimal = Field(default=Decimal("0"))
    detalhes: list[str] = Field(default_factory=list, description="Calculation notes")

    model_config = {"populate_by_name": True}

    def tributos(self) -> list[tuple[str, Decimal]]:
        """Tax lines as (label, value), in display order."""
        return [
            ("IRPJ", self.irpj),
            ("CSLL", self.csll),
            ("PIS", self.pis),
            ("COFINS", self.cofins),
            ("ICMS", self.icms),
            ("INSS Patronal", self.inss),
        ]


class ResultadoSimplesNacional(BaseModel):
    """Simples Nacional breakdown."""

    das: Decimal = Field(default=Decimal("0"))
    inss: Decimal = Field(default=Decimal("0"))
    total: Decimal = Field(default=Decimal("0"))
    anexo: str = Field(default="", description="Annex label, e.g. 'Anexo 1'")
    faixa: str = Field(default="", description="Matched bracket label, e.g. 'Faixa 5'")
    aliquota: Decimal = Field(default=Decimal("0"), description="Matched bracket rate")
    acima_do_limite: bool = Field(
        default=False,
        alias="acimaDoLimite",
        description="Revenue exceeds the top bracket ceiling (top bracket applied)",
    )
    detalhes: list[str] = Field(default_factory=list, description="Calculation notes")

    model_config = {"populate_by_name": True}

    def tributos(self) -> list[tuple[str, Decimal]]:
        """Tax lines as (label, value), in display order."""
        return [("DAS", self.das), ("INSS Patronal", self.inss)]


class DetailedTaxResults(BaseModel):
    """Comparison of the three regimes for one company profile."""

    lucro_real: ResultadoLucroReal = Field(..., alias="lucroReal")
    lucro_presumido: ResultadoLucroPresumido = Field(..., alias="lucroPresumido")
    simples_nacional: ResultadoSimplesNacional = Field(..., alias="simplesNacional")
    best_option: Regime = Field(..., alias="bestOption")
    economy: Decimal = Field(..., description="Max total minus min total")

    model_config = {"populate_by_name": True}

    def resultado(
        self, regime: Regime
    ) -> ResultadoLucroReal | ResultadoLucroPresumido | ResultadoSimplesNacional:
        """Breakdown for a regime."""
        return {
            Regime.LUCRO_REAL: self.lucro_real,
            Regime.LUCRO_PRESUMIDO: self.lucro_presumido,
            Regime.SIMPLES_NACIONAL: self.simples_nacional,
        }[regime]

    def total_por_regime(self) -> dict[Regime, Decimal]:
        """Totals keyed by regime, in priority order."""
        return {regime: self.resultado(regime).total for regime in Regime}

    @property
    def melhor_resultado(
        self,
    ) -> ResultadoLucroReal | ResultadoLucroPresumido | ResultadoSimplesNacional:
        """Breakdown of the cheapest regime."""
        return self.resultado(self.best_option)

    def totais_elegiveis(self) -> dict[Regime, Decimal]:
        """Totals of the regimes the company can opt for.

        Simples Nacional is left out when revenue is above its ceiling.
        """
        totais = self.total_por_regime()
        if self.simples_nacional.acima_do_limite:
            del totais[Regime.SIMPLES_NACIONAL]
        return totais

    @property
    def melhor_opcao_elegivel(self) -> Regime:
        """Cheapest regime among the eligible ones (first regime wins a tie)."""
        totais = self.totais_elegiveis()
        return min(totais, key=totais.__getitem__)

    @property
    def economia_elegivel(self) -> Decimal:
        """Most expensive eligible total minus the cheapest eligible total."""
        totais = self.totais_elegiveis().values()
        return max(totais) - min(totais)

    def aliquota_efetiva(self, regime: Regime, receita: Decimal) -> Decimal:
        """Total burden as a percentage of revenue (0 when revenue is 0)."""
        if receita == 0:
            return Decimal("0")
        return self.resultado(regime).total / receita * 100
