"""Report types and the renderer interface."""

from datetime import datetime
from enum import Enum
from typing import Protocol

from pydantic import BaseModel, Field

from regime_analyzer.core.models.company import CompanyData
from regime_analyzer.core.models.recommendation import Recommendation
from regime_analyzer.core.models.results import DetailedTaxResults


class ReportType(str, Enum):
    """Available reports."""

    COMPARACAO = "comparison"
    EXECUTIVO = "executive"

    @property
    def label(self) -> str:
        """Display name."""
        return _REPORT_LABELS[self]


_REPORT_LABELS = {
    ReportType.COMPARACAO: "Comparação de Regimes",
    ReportType.EXECUTIVO: "Relatório Executivo",
}


class ReportData(BaseModel):
    """Everything a report needs."""

    company: CompanyData
    results: DetailedTaxResults
    recommendations: list[Recommendation] = Field(default_factory=list)
    periodo: str = Field(default="", description="Reference period, e.g. '2024'")
    generated_at: datetime = Field(default_factory=datetime.now)


class ReportRenderer(Protocol):
    """Renders a report to bytes."""

    def render(self, report_type: ReportType, data: ReportData) -> bytes:
        ...


def report_filename(report_type: ReportType, periodo: str, extension: str = "pdf") -> str:
    """Build the download name, e.g. 'Comparação de Regimes_2024.pdf'."""
    return f"{report_type.label}_{periodo}.{extension}"
