"""Custom exceptions for Regime Analyzer."""


class RegimeAnalyzerError(Exception):
    """Base exception for all Regime Analyzer errors."""

    pass


class ValidationError(RegimeAnalyzerError):
    """Data validation error."""

    pass


class InvalidInputError(ValidationError):
    """Company data is invalid (negative values, unknown sector, bad UF)."""

    pass


class ConfigError(RegimeAnalyzerError):
    """Tax configuration is missing, unreadable or invalid."""

    pass


class ParseError(RegimeAnalyzerError):
    """Error parsing company data file."""

    pass


class UnsupportedFileError(ParseError):
    """File format not supported."""

    pass


class ReportGenerationError(RegimeAnalyzerError):
    """Error generating report."""

    pass
