"""File format detector for company data files."""

from enum import Enum
from pathlib import Path

from regime_analyzer.shared.exceptions import UnsupportedFileError


class FileType(str, Enum):
    """Supported file types."""

    JSON = "JSON"
    CSV = "CSV (Planilha)"


def detect_file_type(file_path: Path) -> FileType:
    """
    Detect the type of a company data file.

    Args:
        file_path: Path to the file

    Returns:
        FileType enum value

    Raises:
        UnsupportedFileError: If file type is not supported
    """
    suffix = file_path.suffix.lower()

    if suffix == ".json":
        return FileType.JSON
    elif suffix == ".csv":
        return FileType.CSV
    else:
        raise UnsupportedFileError(
            f"Formato de arquivo não suportado: {suffix or '(sem extensão)'}. "
            "Use arquivos .json ou .csv."
        )
