"""Report generators for Regime Analyzer."""

from regime_analyzer.infrastructure.reports.base import (
    ReportData,
    ReportRenderer,
    ReportType,
    report_filename,
)
from regime_analyzer.infrastructure.reports.pdf_generator import (
    PDFReportRenderer,
    generate_pdf_report,
)

__all__ = [
    "ReportData",
    "ReportRenderer",
    "ReportType",
    "report_filename",
    "PDFReportRenderer",
    "generate_pdf_report",
]
