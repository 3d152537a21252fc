"""Tests for PDF report generation."""

from decimal import Decimal

import pytest
from reportlab.platypus import Paragraph, Table

from regime_analyzer.core.analyzers import generate_recommendations
from regime_analyzer.core.models import CompanyData, Setor
from regime_analyzer.infrastructure.reports import (
    PDFReportRenderer,
    ReportData,
    ReportType,
    generate_pdf_report,
    report_filename,
)


@pytest.fixture
def report_data(calculator, empresa_comercio) -> ReportData:
    """Report data for the reference commerce company."""
    results = calculator.calculate_detailed_taxes(empresa_comercio)
    return ReportData(
        company=empresa_comercio,
        results=results,
        recommendations=generate_recommendations(empresa_comercio, results),
        periodo="2024",
    )


class TestReportFilename:
    """Tests for report file names."""

    def test_comparison(self):
        """Test the comparison report name."""
        assert report_filename(ReportType.COMPARACAO, "2024") == "Comparação de Regimes_2024.pdf"

    def test_executive(self):
        """Test the executive report name."""
        assert report_filename(ReportType.EXECUTIVO, "2025") == "Relatório Executivo_2025.pdf"


class TestPDFReportRenderer:
    """Tests for PDFReportRenderer."""

    @pytest.mark.parametrize("report_type", list(ReportType))
    def test_renders_pdf(self, report_data, report_type):
        """Test that both report types produce a PDF document."""
        content = PDFReportRenderer().render(report_type, report_data)

        assert content.startswith(b"%PDF")
        assert len(content) > 1000

    def test_renders_loss_scenario(self, calculator):
        """Test a company with negative taxes and no recommendations list."""
        empresa = CompanyData(
            receita=Decimal("1000000"),
            custos=Decimal("2000000"),
            setor=Setor.COMERCIO,
            uf="XX",
        )
        data = ReportData(
            company=empresa, results=calculator.calculate_detailed_taxes(empresa)
        )

        content = PDFReportRenderer().render(ReportType.COMPARACAO, data)

        assert content.startswith(b"%PDF")

    def test_generate_pdf_report_writes_file(self, report_data, tmp_path):
        """Test writing the report to disk."""
        output = tmp_path / "relatorios" / report_filename(ReportType.COMPARACAO, "2024")

        path = generate_pdf_report(report_data, output)

        assert path == output
        assert output.read_bytes().startswith(b"%PDF")


class TestTotalsSection:
    """Tests for the regime totals section."""

    @pytest.fixture
    def acima_do_teto(self, calculator) -> ReportData:
        """Commerce company with R$ 5M revenue, above the Simples Nacional ceiling."""
        empresa = CompanyData(
            receita=Decimal("5000000"),
            custos=Decimal("4000000"),
            setor=Setor.COMERCIO,
            uf="SP",
        )
        results = calculator.calculate_detailed_taxes(empresa)
        return ReportData(
            company=empresa,
            results=results,
            recommendations=generate_recommendations(empresa, results),
        )

    @staticmethod
    def _textos(elements) -> list[str]:
        return [e.getPlainText() for e in elements if isinstance(e, Paragraph)]

    def test_economy_names_eligible_regime(self, acima_do_teto):
        """Test that the economy line names the cheapest eligible regime."""
        elements = PDFReportRenderer()._build_totals(acima_do_teto)

        economia = self._textos(elements)[-1]
        assert "não é elegível" in economia
        assert "Melhor opção elegível: Lucro Presumido" in economia
        assert "R$ 500.000,00" in economia

    def test_simples_row_shows_both_flags(self, acima_do_teto):
        """Test that the Simples Nacional row is flagged as best and above the ceiling."""
        elements = PDFReportRenderer()._build_totals(acima_do_teto)
        table = next(e for e in elements if isinstance(e, Table))

        situacao = table._cellvalues[3][3].getPlainText()
        assert "Melhor opção" in situacao
        assert "Acima do teto" in situacao
        assert "Melhor opção elegível" in table._cellvalues[2][3].getPlainText()

    def test_economy_within_ceiling(self, report_data):
        """Test the usual economy line when the best option is eligible."""
        elements = PDFReportRenderer()._build_totals(report_data)

        economia = self._textos(elements)[-1]
        assert "Economia potencial: R$ 514.275,00" in economia
        assert "optando pelo Simples Nacional" in economia
        assert "elegível" not in economia

    def test_renders_above_ceiling(self, acima_do_teto):
        """Test that the full report renders for a company above the ceiling."""
        content = PDFReportRenderer().render(ReportType.COMPARACAO, acima_do_teto)

        assert content.startswith(b"%PDF")
