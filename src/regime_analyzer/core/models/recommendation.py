"""Recommendation model."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from regime_analyzer.core.models.enums import Regime


class Recommendation(BaseModel):
    """A tax planning recommendation."""

    titulo: str = Field(..., description="Recommendation title")
    descricao: str = Field(..., description="Detailed description")
    economia_potencial: Optional[Decimal] = Field(
        default=None, description="Potential annual savings"
    )
    prioridade: int = Field(default=1, ge=1, le=5, description="Priority 1-5")
    regime: Optional[Regime] = Field(default=None, description="Related regime")
