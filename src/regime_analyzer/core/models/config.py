"""Tax rate configuration models.

The configuration is persisted as a single JSON blob using the camelCase keys
below (``lucroReal``, ``irpjAdicional``...). Models accept both the aliases and
the snake_case field names, and dump by alias so a saved blob loads back
unchanged. Rates are percentages.
"""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, Field, PlainSerializer, field_validator

from regime_analyzer.core.models.enums import Setor
from regime_analyzer.core.rules.tax_constants import (
    ANEXO_I,
    ANEXO_II,
    ANEXO_III,
    CONTRIBUICAO_PREVIDENCIARIA,
    ICMS_ESTADUAL,
    LUCRO_PRESUMIDO,
    LUCRO_REAL,
)
from regime_analyzer.shared.validators import normalize_uf

# Decimal that is written to JSON as a plain number
JsonDecimal = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json")
]


class ConfigLucroReal(BaseModel):
    """Lucro Real rates."""

    irpj: JsonDecimal = Field(default=LUCRO_REAL["irpj"], ge=0)
    irpj_adicional: JsonDecimal = Field(
        default=LUCRO_REAL["irpjAdicional"], ge=0, alias="irpjAdicional"
    )
    csll: JsonDecimal = Field(default=LUCRO_REAL["csll"], ge=0)
    pis_nao_cumulativo: JsonDecimal = Field(
        default=LUCRO_REAL["pisNaoCumulativo"], ge=0, alias="pisNaoCumulativo"
    )
    cofins_nao_cumulativo: JsonDecimal = Field(
        default=LUCRO_REAL["cofinsNaoCumulativo"], ge=0, alias="cofinsNaoCumulativo"
    )
    icms_geral: JsonDecimal = Field(
        default=LUCRO_REAL["icmsGeral"], ge=0, alias="icmsGeral"
    )

    model_config = {"frozen": True, "populate_by_name": True}


class ConfigLucroPresumido(BaseModel):
    """Lucro Presumido presumption percentages and rates."""

    presumido_comercio: JsonDecimal = Field(
        default=LUCRO_PRESUMIDO["presumidoComercio"], ge=0, alias="presumidoComercio"
    )
    presumido_industria: JsonDecimal = Field(
        default=LUCRO_PRESUMIDO["presumidoIndustria"], ge=0, alias="presumidoIndustria"
    )
    presumido_servicos: JsonDecimal = Field(
        default=LUCRO_PRESUMIDO["presumidoServicos"], ge=0, alias="presumidoServicos"
    )
    irpj: JsonDecimal = Field(default=LUCRO_PRESUMIDO["irpj"], ge=0)
    csll: JsonDecimal = Field(default=LUCRO_PRESUMIDO["csll"], ge=0)
    pis_cumulativo: JsonDecimal = Field(
        default=LUCRO_PRESUMIDO["pisCumulativo"], ge=0, alias="pisCumulativo"
    )
    cofins_cumulativo: JsonDecimal = Field(
        default=LUCRO_PRESUMIDO["cofinsCumulativo"], ge=0, alias="cofinsCumulativo"
    )
    icms_geral: JsonDecimal = Field(
        default=LUCRO_PRESUMIDO["icmsGeral"], ge=0, alias="icmsGeral"
    )

    model_config = {"frozen": True, "populate_by_name": True}


class FaixaSimples(BaseModel):
    """A Simples Nacional revenue bracket."""

    limite: JsonDecimal = Field(..., gt=0, description="Bracket ceiling (annual revenue)")
    aliquota: JsonDecimal = Field(..., ge=0, description="Flat rate for the bracket")

    model_config = {"frozen": True}


Anexo = dict[str, FaixaSimples]


def _faixas(tabela: dict[str, tuple[Decimal, Decimal]]) -> Anexo:
    return {
        nome: FaixaSimples(limite=limite, aliquota=aliquota)
        for nome, (limite, aliquota) in tabela.items()
    }


class ConfigSimplesNacional(BaseModel):
    """Simples Nacional annexes (one per sector).

    Each annex maps bracket names to brackets. Brackets are evaluated in
    declaration order, so ceilings must be strictly increasing.
    """

    anexo1: Anexo = Field(default_factory=lambda: _faixas(ANEXO_I))
    anexo2: Anexo = Field(default_factory=lambda: _faixas(ANEXO_II))
    anexo3: Anexo = Field(default_factory=lambda: _faixas(ANEXO_III))

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("anexo1", "anexo2", "anexo3")
    @classmethod
    def validate_faixas_crescentes(cls, v: Anexo) -> Anexo:
        """Require at least one bracket and strictly increasing ceilings."""
        if not v:
            raise ValueError("Anexo deve ter ao menos uma faixa")
        limites = [faixa.limite for faixa in v.values()]
        for anterior, atual in zip(limites, limites[1:]):
            if atual <= anterior:
                raise ValueError(
                    "Limites das faixas devem ser estritamente crescentes "
                    f"({anterior} seguido de {atual})"
                )
        return v


class ContribuicaoPrevidenciaria(BaseModel):
    """Payroll contribution rates. Only ``patronal`` enters the comparison."""

    patronal: JsonDecimal = Field(default=CONTRIBUICAO_PREVIDENCIARIA["patronal"], ge=0)
    terceiros: JsonDecimal = Field(default=CONTRIBUICAO_PREVIDENCIARIA["terceiros"], ge=0)
    rat: JsonDecimal = Field(default=CONTRIBUICAO_PREVIDENCIARIA["rat"], ge=0)
    salario_educacao: JsonDecimal = Field(
        default=CONTRIBUICAO_PREVIDENCIARIA["salarioEducacao"], ge=0, alias="salarioEducacao"
    )
    incra: JsonDecimal = Field(default=CONTRIBUICAO_PREVIDENCIARIA["incra"], ge=0)
    sebrae: JsonDecimal = Field(default=CONTRIBUICAO_PREVIDENCIARIA["sebrae"], ge=0)
    senai: JsonDecimal = Field(default=CONTRIBUICAO_PREVIDENCIARIA["senai"], ge=0)
    sesi: JsonDecimal = Field(default=CONTRIBUICAO_PREVIDENCIARIA["sesi"], ge=0)
    senac: JsonDecimal = Field(default=CONTRIBUICAO_PREVIDENCIARIA["senac"], ge=0)
    sesc: JsonDecimal = Field(default=CONTRIBUICAO_PREVIDENCIARIA["sesc"], ge=0)

    model_config = {"frozen": True, "populate_by_name": True}


class TaxConfig(BaseModel):
    """Complete rate table. ``TaxConfig()`` is the built-in default."""

    lucro_real: ConfigLucroReal = Field(
        default_factory=ConfigLucroReal, alias="lucroReal"
    )
    lucro_presumido: ConfigLucroPresumido = Field(
        default_factory=ConfigLucroPresumido, alias="lucroPresumido"
    )
    simples_nacional: ConfigSimplesNacional = Field(
        default_factory=ConfigSimplesNacional, alias="simplesNacional"
    )
    icms_estadual: dict[str, JsonDecimal] = Field(
        default_factory=lambda: dict(ICMS_ESTADUAL), alias="icmsEstadual"
    )
    contribuicao_previdenciaria: ContribuicaoPrevidenciaria = Field(
        default_factory=ContribuicaoPrevidenciaria, alias="contribuicaoPrevidenciaria"
    )

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("icms_estadual", mode="before")
    @classmethod
    def normalize_ufs(cls, v):
        """Upper-case state codes so lookups are case-insensitive."""
        if isinstance(v, dict):
            return {normalize_uf(str(uf)): aliquota for uf, aliquota in v.items()}
        return v

    @field_validator("icms_estadual")
    @classmethod
    def validate_icms_rates(cls, v: dict[str, Decimal]) -> dict[str, Decimal]:
        """Reject negative ICMS rates."""
        for uf, aliquota in v.items():
            if aliquota < 0:
                raise ValueError(f"Alíquota de ICMS negativa para {uf}")
        return v

    def aliquota_icms(self, uf: str) -> Decimal:
        """ICMS rate for a state, falling back to the generic rate."""
        aliquota = self.icms_estadual.get(normalize_uf(uf))
        if aliquota is None:
            return self.lucro_real.icms_geral
        return aliquota

    def tem_icms_estadual(self, uf: str) -> bool:
        """Whether the state has its own ICMS rate."""
        return normalize_uf(uf) in self.icms_estadual

    def presuncao_para(self, setor: Setor) -> Decimal:
        """Lucro Presumido presumption percentage for a sector."""
        presumido = self.lucro_presumido
        return {
            Setor.COMERCIO: presumido.presumido_comercio,
            Setor.INDUSTRIA: presumido.presumido_industria,
            Setor.SERVICOS: presumido.presumido_servicos,
        }[setor]

    def anexo_para(self, setor: Setor) -> tuple[str, Anexo]:
        """Simples Nacional annex name and brackets for a sector."""
        simples = self.simples_nacional
        return {
            Setor.COMERCIO: ("anexo1", simples.anexo1),
            Setor.INDUSTRIA: ("anexo2", simples.anexo2),
            Setor.SERVICOS: ("anexo3", simples.anexo3),
        }[setor]
