"""Company profile model."""

import re
import unicodedata
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, ValidationError, computed_field, field_validator

from regime_analyzer.core.models.enums import Setor
from regime_analyzer.shared.exceptions import InvalidInputError
from regime_analyzer.shared.validators import normalize_uf

# Accepted spellings for each sector
_SETOR_ALIASES = {
    "comercio": Setor.COMERCIO,
    "commerce": Setor.COMERCIO,
    "industria": Setor.INDUSTRIA,
    "industry": Setor.INDUSTRIA,
    "servicos": Setor.SERVICOS,
    "servico": Setor.SERVICOS,
    "services": Setor.SERVICOS,
}


def _sem_acentos(texto: str) -> str:
    normalizado = unicodedata.normalize("NFKD", texto)
    return "".join(c for c in normalizado if not unicodedata.combining(c))


class CompanyData(BaseModel):
    """Annual financial profile of a company."""

    receita: Decimal = Field(..., ge=0, alias="revenue", description="Gross annual revenue")
    custos: Decimal = Field(
        default=Decimal("0"), ge=0, alias="costs", description="Annual costs and expenses"
    )
    folha: Decimal = Field(
        default=Decimal("0"), ge=0, alias="payroll", description="Annual payroll"
    )
    setor: Setor = Field(..., alias="sector", description="Business sector")
    uf: str = Field(..., alias="state", description="State code (e.g., SP)")

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("setor", mode="before")
    @classmethod
    def parse_setor(cls, v: Any) -> Any:
        """Accept Portuguese/English names, with or without accents."""
        if isinstance(v, str):
            chave = _sem_acentos(v).strip().lower()
            if chave in _SETOR_ALIASES:
                return _SETOR_ALIASES[chave]
        return v

    @field_validator("uf")
    @classmethod
    def validate_uf_format(cls, v: str) -> str:
        """Normalize UF to two upper-case letters.

        Unknown codes are accepted; the calculator falls back to the generic
        ICMS rate for them.
        """
        uf = normalize_uf(v)
        if not re.fullmatch(r"[A-Z]{2}", uf):
            raise ValueError("UF deve ter duas letras")
        return uf

    @computed_field
    @property
    def lucro(self) -> Decimal:
        """Accounting profit (may be negative)."""
        return self.receita - self.custos


def parse_company_data(data: dict[str, Any]) -> CompanyData:
    """Validate raw company data.

    Args:
        data: Mapping with English (revenue, costs...) or Portuguese
            (receita, custos...) keys

    Returns:
        Validated CompanyData

    Raises:
        InvalidInputError: If any value is missing or invalid
    """
    try:
        return CompanyData.model_validate(data)
    except ValidationError as error:
        mensagens = [
            f"{'.'.join(str(p) for p in e['loc']) or 'dados'}: {e['msg']}"
            for e in error.errors()
        ]
        raise InvalidInputError(
            "Dados da empresa inválidos: " + "; ".join(mensagens)
        ) from error
