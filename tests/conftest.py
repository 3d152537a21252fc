"""Pytest configuration and fixtures."""

from decimal import Decimal
from pathlib import Path

import pytest

from regime_analyzer.core.models import CompanyData, Setor, TaxConfig
from regime_analyzer.core.services import TaxCalculator
from regime_analyzer.infrastructure.storage import LocalStorage


@pytest.fixture
def default_config() -> TaxConfig:
    """Return the built-in rate table."""
    return TaxConfig()


@pytest.fixture
def calculator(default_config: TaxConfig) -> TaxCalculator:
    """Return a calculator using the built-in rates."""
    return TaxCalculator(default_config)


@pytest.fixture
def empresa_comercio() -> CompanyData:
    """Commerce company in SP with R$ 2.45M revenue."""
    return CompanyData(
        receita=Decimal("2450000"),
        custos=Decimal("1800000"),
        folha=Decimal("300000"),
        setor=Setor.COMERCIO,
        uf="SP",
    )


@pytest.fixture
def empresa_servicos() -> CompanyData:
    """Service company in SP with thin margins."""
    return CompanyData(
        receita=Decimal("1000000"),
        custos=Decimal("900000"),
        folha=Decimal("100000"),
        setor=Setor.SERVICOS,
        uf="SP",
    )


@pytest.fixture
def storage_path(tmp_path: Path) -> Path:
    """Return a storage file path inside a temp directory."""
    return tmp_path / "storage.json"


@pytest.fixture
def storage(storage_path: Path) -> LocalStorage:
    """Return a LocalStorage backed by a temp file."""
    return LocalStorage(storage_path)
