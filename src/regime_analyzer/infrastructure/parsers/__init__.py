"""File parsers for company data."""

from regime_analyzer.infrastructure.parsers.company_parser import (
    company_template_csv,
    normalize_company_record,
    parse_company_file,
    read_company_record,
)
from regime_analyzer.infrastructure.parsers.detector import FileType, detect_file_type

__all__ = [
    "company_template_csv",
    "normalize_company_record",
    "parse_company_file",
    "read_company_record",
    "FileType",
    "detect_file_type",
]
