"""PDF report generator for regime comparisons."""

import io
import logging
from pathlib import Path

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import (
    KeepTogether,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from regime_analyzer import __version__
from regime_analyzer.core.models.enums import Regime
from regime_analyzer.infrastructure.reports.base import ReportData, ReportType
from regime_analyzer.shared.exceptions import ReportGenerationError
from regime_analyzer.shared.formatters import format_currency, format_percentage

logger = logging.getLogger(__name__)


class PDFReportRenderer:
    """Renders comparison and executive reports as PDF."""

    def __init__(self):
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()

    def _setup_custom_styles(self) -> None:
        """Setup custom paragraph styles."""
        self.styles.add(
            ParagraphStyle(
                name="ReportTitle",
                parent=self.styles["Heading1"],
                fontSize=20,
                spaceAfter=20,
                textColor=colors.HexColor("#1a365d"),
                alignment=1,  # Center
            )
        )
        self.styles.add(
            ParagraphStyle(
                name="SectionHeader",
                parent=self.styles["Heading2"],
                fontSize=13,
                spaceBefore=20,
                spaceAfter=10,
                textColor=colors.HexColor("#2c5282"),
            )
        )
        self.styles.add(
            ParagraphStyle(
                name="TableCell",
                parent=self.styles["Normal"],
                fontSize=8,
                leading=11,
            )
        )
        self.styles.add(
            ParagraphStyle(
                name="TableHeader",
                parent=self.styles["Normal"],
                fontSize=8,
                leading=11,
                fontName="Helvetica-Bold",
                textColor=colors.white,
            )
        )
        self.styles.add(
            ParagraphStyle(
                name="SmallText",
                parent=self.styles["Normal"],
                fontSize=8,
                textColor=colors.gray,
                alignment=1,
            )
        )
        self.styles.add(
            ParagraphStyle(
                name="BulletText",
                parent=self.styles["Normal"],
                fontSize=8,
                leading=12,
                leftIndent=15,
                bulletIndent=5,
            )
        )

    def render(self, report_type: ReportType, data: ReportData) -> bytes:
        """Render a report and return the PDF bytes.

        Raises:
            ReportGenerationError: If ReportLab fails to build the document
        """
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=1.5 * cm,
            leftMargin=1.5 * cm,
            topMargin=1.5 * cm,
            bottomMargin=1.5 * cm,
            title=report_type.label,
        )

        elements = []
        elements.extend(self._build_header(report_type, data))
        elements.extend(self._build_company_info(data))
        elements.extend(self._build_totals(data))

        if report_type == ReportType.COMPARACAO:
            for regime in Regime:
                elements.extend(self._build_regime_breakdown(regime, data))

        if data.recommendations:
            elements.extend(self._build_recommendations(data))

        elements.extend(self._build_footer(data))

        try:
            doc.build(elements)
        except Exception as e:
            raise ReportGenerationError(f"Falha ao gerar PDF: {e}") from e

        logger.debug("Relatório %s gerado (%d bytes)", report_type.value, buffer.tell())
        return buffer.getvalue()

    def _build_header(self, report_type: ReportType, data: ReportData) -> list:
        """Build report header."""
        subtitulo = report_type.label
        if data.periodo:
            subtitulo = f"{subtitulo} - {data.periodo}"

        return [
            Paragraph("Regime Analyzer", self.styles["ReportTitle"]),
            Paragraph(
                subtitulo,
                ParagraphStyle(
                    "Subtitle",
                    parent=self.styles["Normal"],
                    fontSize=12,
                    textColor=colors.HexColor("#4a5568"),
                    alignment=1,
                    spaceAfter=15,
                ),
            ),
        ]

    def _build_company_info(self, data: ReportData) -> list:
        """Build company profile section."""
        company = data.company
        cell = self.styles["TableCell"]

        rows = [
            [
                Paragraph("<b>Receita Bruta:</b>", cell),
                Paragraph(format_currency(company.receita), cell),
                Paragraph("<b>Setor:</b>", cell),
                Paragraph(company.setor.label, cell),
            ],
            [
                Paragraph("<b>Custos e Despesas:</b>", cell),
                Paragraph(format_currency(company.custos), cell),
                Paragraph("<b>UF:</b>", cell),
                Paragraph(company.uf, cell),
            ],
            [
                Paragraph("<b>Folha de Pagamento:</b>", cell),
                Paragraph(format_currency(company.folha), cell),
                Paragraph("<b>Lucro Contábil:</b>", cell),
                Paragraph(format_currency(company.lucro), cell),
            ],
        ]

        table = Table(rows, colWidths=[3.5 * cm, 5.5 * cm, 3.5 * cm, 5.5 * cm])
        table.setStyle(
            TableStyle([
                ("BACKGROUND", (0, 0), (-1, -1), colors.HexColor("#f7fafc")),
                ("BOX", (0, 0), (-1, -1), 1, colors.HexColor("#e2e8f0")),
                ("LINEBELOW", (0, 0), (-1, -2), 0.5, colors.HexColor("#e2e8f0")),
                ("TOPPADDING", (0, 0), (-1, -1), 6),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                ("LEFTPADDING", (0, 0), (-1, -1), 8),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ])
        )
        return [
            Paragraph("Dados da Empresa", self.styles["SectionHeader"]),
            table,
        ]

    def _build_totals(self, data: ReportData) -> list:
        """Build regime totals table with the best option highlighted."""
        results = data.results
        receita = data.company.receita
        cell = self.styles["TableCell"]
        header = self.styles["TableHeader"]

        rows = [[
            Paragraph("Regime", header),
            Paragraph("Total Anual", header),
            Paragraph("Carga Efetiva", header),
            Paragraph("Situação", header),
        ]]

        elegivel = results.melhor_opcao_elegivel
        melhor_linha = 1
        for i, (regime, total) in enumerate(results.total_por_regime().items(), start=1):
            situacao = []
            if regime == results.best_option:
                situacao.append("<b>Melhor opção</b>")
                melhor_linha = i
            elif regime == elegivel:
                situacao.append("<b>Melhor opção elegível</b>")
            if regime == Regime.SIMPLES_NACIONAL and results.simples_nacional.acima_do_limite:
                situacao.append("Acima do teto")

            rows.append([
                Paragraph(regime.label, cell),
                Paragraph(format_currency(total), cell),
                Paragraph(format_percentage(results.aliquota_efetiva(regime, receita)), cell),
                Paragraph("<br/>".join(situacao), cell),
            ])

        table = Table(rows, colWidths=[5 * cm, 5 * cm, 4 * cm, 4 * cm])
        table.setStyle(
            TableStyle([
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#2c5282")),
                ("BACKGROUND", (0, melhor_linha), (-1, melhor_linha), colors.HexColor("#c6f6d5")),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#cbd5e0")),
                ("TOPPADDING", (0, 0), (-1, -1), 5),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
                ("ALIGN", (1, 0), (2, -1), "RIGHT"),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ])
        )

        texto = (
            f"<b>Economia potencial:</b> {format_currency(results.economy)} por ano "
            f"optando pelo {results.best_option.label}."
        )
        if elegivel != results.best_option:
            texto = (
                f"{results.best_option.label} tem a menor carga, mas não é elegível "
                f"(receita acima do teto). <b>Melhor opção elegível:</b> {elegivel.label}, "
                f"com economia de {format_currency(results.economia_elegivel)} por ano."
            )
        economia = Paragraph(
            texto,
            ParagraphStyle("Economy", parent=self.styles["Normal"], fontSize=9, spaceBefore=8),
        )

        return [
            Paragraph("Comparativo de Regimes", self.styles["SectionHeader"]),
            table,
            economia,
        ]

    def _build_regime_breakdown(self, regime: Regime, data: ReportData) -> list:
        """Build one regime's tax lines and calculation notes."""
        resultado = data.results.resultado(regime)
        cell = self.styles["TableCell"]
        header = self.styles["TableHeader"]

        rows = [[Paragraph("Tributo", header), Paragraph("Valor", header)]]
        for rotulo, valor in resultado.tributos():
            rows.append([Paragraph(rotulo, cell), Paragraph(format_currency(valor), cell)])
        rows.append([
            Paragraph("<b>Total</b>", cell),
            Paragraph(f"<b>{format_currency(resultado.total)}</b>", cell),
        ])

        table = Table(rows, colWidths=[9 * cm, 9 * cm])
        table.setStyle(
            TableStyle([
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#4a5568")),
                ("BACKGROUND", (0, -1), (-1, -1), colors.HexColor("#edf2f7")),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#e2e8f0")),
                ("TOPPADDING", (0, 0), (-1, -1), 4),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                ("ALIGN", (1, 0), (1, -1), "RIGHT"),
            ])
        )

        notas = [
            Paragraph(detalhe, self.styles["BulletText"], bulletText="•")
            for detalhe in resultado.detalhes
        ]

        return [
            Paragraph(regime.label, self.styles["SectionHeader"]),
            KeepTogether([table, Spacer(1, 0.2 * cm), *notas]),
        ]

    def _build_recommendations(self, data: ReportData) -> list:
        """Build recommendations section."""
        elements = [Paragraph("Recomendações", self.styles["SectionHeader"])]

        for rec in sorted(data.recommendations, key=lambda r: r.prioridade):
            economia = format_currency(rec.economia_potencial) if rec.economia_potencial else ""

            title_table = Table(
                [[
                    Paragraph(f"<b>{rec.titulo}</b>", self.styles["TableCell"]),
                    Paragraph(
                        f"<font color='#22543d'><b>{economia}</b></font>",
                        ParagraphStyle("EconStyle", alignment=2, fontSize=9),
                    ),
                ]],
                colWidths=[13 * cm, 5 * cm],
            )
            title_table.setStyle(
                TableStyle([
                    ("BACKGROUND", (0, 0), (-1, -1), colors.HexColor("#c6f6d5")),
                    ("TOPPADDING", (0, 0), (-1, -1), 6),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                    ("LEFTPADDING", (0, 0), (-1, -1), 8),
                    ("RIGHTPADDING", (0, 0), (-1, -1), 8),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ])
            )

            desc_table = Table(
                [[Paragraph(rec.descricao, self.styles["TableCell"])]],
                colWidths=[18 * cm],
            )
            desc_table.setStyle(
                TableStyle([
                    ("BACKGROUND", (0, 0), (-1, -1), colors.HexColor("#f0fff4")),
                    ("TOPPADDING", (0, 0), (-1, -1), 6),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                    ("LEFTPADDING", (0, 0), (-1, -1), 8),
                    ("BOX", (0, 0), (-1, -1), 1, colors.HexColor("#9ae6b4")),
                ])
            )

            elements.append(KeepTogether([title_table, desc_table]))
            elements.append(Spacer(1, 0.2 * cm))

        return elements

    def _build_footer(self, data: ReportData) -> list:
        """Build report footer."""
        return [
            Spacer(1, 1 * cm),
            Paragraph(
                f"Relatório gerado em {data.generated_at.strftime('%d/%m/%Y às %H:%M')} "
                f"pelo Regime Analyzer v{__version__}",
                self.styles["SmallText"],
            ),
            Spacer(1, 0.1 * cm),
            Paragraph(
                "Simulação simplificada para fins informativos. "
                "Consulte um contador para decisões fiscais.",
                self.styles["SmallText"],
            ),
        ]


def generate_pdf_report(
    data: ReportData,
    output_path: Path,
    report_type: ReportType = ReportType.COMPARACAO,
) -> Path:
    """Render a PDF report and write it to output_path."""
    content = PDFReportRenderer().render(report_type, data)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(content)
    return output_path
