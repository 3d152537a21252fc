"""Parser for company profile files (JSON or CSV spreadsheet export)."""

import csv
import io
import json
import logging
from pathlib import Path
from typing import Any

from regime_analyzer.core.models.company import CompanyData, parse_company_data
from regime_analyzer.infrastructure.parsers.detector import FileType, detect_file_type
from regime_analyzer.shared.exceptions import InvalidInputError, ParseError
from regime_analyzer.shared.validators import parse_brazilian_decimal

logger = logging.getLogger(__name__)

# Column/key spellings accepted for each CompanyData field
_CAMPOS = {
    "revenue": ("revenue", "receita", "receita_bruta", "receita_bruta_anual", "faturamento"),
    "costs": ("costs", "custos", "custos_despesas", "custos_e_despesas", "despesas"),
    "payroll": ("payroll", "folha", "folha_pagamento", "folha_de_pagamento"),
    "sector": ("sector", "setor", "atividade"),
    "state": ("state", "estado", "uf"),
}

_COLUNA_PARA_CAMPO = {
    alias: campo for campo, aliases in _CAMPOS.items() for alias in aliases
}

_CAMPOS_NUMERICOS = ("revenue", "costs", "payroll")

TEMPLATE_CSV_HEADER = ("receita", "custos", "folha", "setor", "uf")
TEMPLATE_CSV_EXEMPLO = ("2450000", "1800000", "300000", "comercio", "SP")


def _normalizar_coluna(nome: str) -> str:
    return nome.strip().lower().replace(" ", "_").replace("-", "_")


def normalize_company_record(raw: dict[str, Any]) -> dict[str, Any]:
    """Map known keys to CompanyData fields and parse numeric text.

    Unknown keys are dropped. Numeric values given as text may use Brazilian
    notation ("2.450.000,00").

    Raises:
        InvalidInputError: If a numeric field is not a number
    """
    registro: dict[str, Any] = {}
    for chave, valor in raw.items():
        campo = _COLUNA_PARA_CAMPO.get(_normalizar_coluna(str(chave)))
        if campo is None or valor is None:
            continue
        if isinstance(valor, str):
            valor = valor.strip()
            if not valor:
                continue
            if campo in _CAMPOS_NUMERICOS:
                try:
                    valor = parse_brazilian_decimal(valor)
                except ValueError as e:
                    raise InvalidInputError(f"{campo}: {e}") from e
        registro[campo] = valor
    return registro


def read_company_record(file_path: Path) -> dict[str, Any]:
    """Read the raw company record from a JSON or CSV file.

    Returns:
        Normalized mapping ready for ``parse_company_data``

    Raises:
        UnsupportedFileError: If file format is not supported
        ParseError: If the file cannot be read
        InvalidInputError: If a numeric value is malformed
    """
    file_type = detect_file_type(file_path)

    try:
        content = file_path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(f"Não foi possível ler {file_path.name}: {e}") from e

    if not content.strip():
        raise ParseError(f"Arquivo vazio: {file_path.name}")

    if file_type == FileType.JSON:
        raw = _read_json(content, file_path)
    else:
        raw = _read_csv(content, file_path)

    logger.debug("Registro lido de %s: %s", file_path.name, raw)
    return normalize_company_record(raw)


def _read_json(content: str, file_path: Path) -> dict[str, Any]:
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ParseError(f"JSON inválido em {file_path.name}: {e}") from e

    if not isinstance(data, dict):
        raise ParseError(f"{file_path.name} deve conter um objeto JSON")
    return data


def _read_csv(content: str, file_path: Path) -> dict[str, Any]:
    # Spreadsheets exported with Brazilian locale use ";" as separator
    cabecalho = content.splitlines()[0]
    delimitador = ";" if cabecalho.count(";") > cabecalho.count(",") else ","

    reader = csv.DictReader(io.StringIO(content), delimiter=delimitador)
    linhas = [
        linha for linha in reader
        if any(isinstance(v, str) and v.strip() for v in linha.values())
    ]
    if not linhas:
        raise ParseError(f"Planilha sem linha de dados: {file_path.name}")
    if len(linhas) > 1:
        logger.warning(
            "%s tem %d linhas de dados; usando apenas a primeira",
            file_path.name,
            len(linhas),
        )
    return {chave: valor for chave, valor in linhas[0].items() if chave is not None}


def parse_company_file(file_path: Path) -> CompanyData:
    """Parse a company profile file.

    Args:
        file_path: Path to a .json or .csv file

    Returns:
        Validated CompanyData

    Raises:
        UnsupportedFileError: If file format is not supported
        ParseError: If the file cannot be parsed
        InvalidInputError: If values are invalid
    """
    return parse_company_data(read_company_record(file_path))


def company_template_csv() -> str:
    """Return a CSV template (header + example row) for company data."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(TEMPLATE_CSV_HEADER)
    writer.writerow(TEMPLATE_CSV_EXEMPLO)
    return buffer.getvalue()
