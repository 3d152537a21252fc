"""Tests for local storage and the persisted tax configuration."""

import json
from decimal import Decimal

import pytest

from regime_analyzer.core.models import ConfigLucroReal, TaxConfig
from regime_analyzer.infrastructure.storage import (
    HOME_ENV_VAR,
    TAX_CONFIG_KEY,
    LocalStorage,
    default_storage_path,
    load_tax_config,
    reset_tax_config,
    save_tax_config,
    update_tax_config,
)
from regime_analyzer.shared.exceptions import ConfigError


class TestLocalStorage:
    """Tests for the key-value file store."""

    def test_missing_file_is_empty(self, storage):
        """Test that a missing file behaves as an empty store."""
        assert storage.get_item("qualquer") is None
        assert storage.keys() == []

    def test_set_and_get(self, storage, storage_path):
        """Test that values are written to disk."""
        storage.set_item("chave", "valor")

        assert storage.get_item("chave") == "valor"
        assert json.loads(storage_path.read_text(encoding="utf-8")) == {"chave": "valor"}

    def test_keeps_other_keys(self, storage):
        """Test that writing one key does not drop others."""
        storage.set_item("a", "1")
        storage.set_item("b", "2")

        assert sorted(storage.keys()) == ["a", "b"]

    def test_remove_item(self, storage):
        """Test removal, including of a missing key."""
        storage.set_item("a", "1")
        storage.remove_item("a")
        storage.remove_item("inexistente")

        assert storage.get_item("a") is None

    def test_creates_parent_directories(self, tmp_path):
        """Test that nested storage paths are created."""
        storage = LocalStorage(tmp_path / "novo" / "dir" / "storage.json")
        storage.set_item("a", "1")

        assert storage.path.exists()

    def test_corrupt_file_raises_config_error(self, storage, storage_path):
        """Test that unreadable JSON raises ConfigError."""
        storage_path.write_text("{nao json", encoding="utf-8")

        with pytest.raises(ConfigError, match="corrompido"):
            storage.get_item("a")

    def test_non_object_file_raises_config_error(self, storage, storage_path):
        """Test that a JSON list is rejected."""
        storage_path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(ConfigError):
            storage.get_item("a")

    def test_default_path_honors_env_var(self, tmp_path, monkeypatch):
        """Test that the home directory can be overridden."""
        monkeypatch.setenv(HOME_ENV_VAR, str(tmp_path))

        assert default_storage_path().parent == tmp_path
        assert LocalStorage().path == default_storage_path()


class TestTaxConfigStore:
    """Tests for load/save/reset of the tax configuration."""

    def test_load_defaults_when_nothing_saved(self, storage):
        """Test that an empty store yields the default table."""
        assert load_tax_config(storage) == TaxConfig()

    def test_save_stores_camel_case_blob(self, storage):
        """Test the persisted layout under the taxConfig key."""
        save_tax_config(storage, TaxConfig())

        blob = json.loads(storage.get_item(TAX_CONFIG_KEY))
        assert blob["lucroReal"]["irpj"] == 15
        assert blob["lucroReal"]["irpjAdicional"] == 10
        assert blob["icmsEstadual"]["SP"] == 18

    def test_save_then_load(self, storage_path):
        """Test that a saved config loads back with the same values."""
        config = TaxConfig(
            lucro_real=ConfigLucroReal(irpj=Decimal("20"), icms_geral=Decimal("12")),
            icms_estadual={"SP": Decimal("19"), "RJ": Decimal("20")},
        )
        save_tax_config(LocalStorage(storage_path), config)

        loaded = load_tax_config(LocalStorage(storage_path))

        assert loaded.lucro_real.irpj == Decimal("20")
        assert loaded.lucro_real.icms_geral == Decimal("12")
        assert loaded.icms_estadual == {"SP": Decimal("19"), "RJ": Decimal("20")}
        assert loaded.model_dump(mode="json") == config.model_dump(mode="json")

    def test_partial_blob_fills_defaults(self, storage):
        """Test that a blob with only some groups is completed with defaults."""
        storage.set_item(TAX_CONFIG_KEY, json.dumps({"lucroReal": {"irpj": 25}}))

        config = load_tax_config(storage)

        assert config.lucro_real.irpj == Decimal("25")
        assert config.lucro_presumido == TaxConfig().lucro_presumido

    def test_invalid_blob_raises_config_error(self, storage):
        """Test that an invalid saved config raises ConfigError."""
        storage.set_item(TAX_CONFIG_KEY, json.dumps({"lucroReal": {"irpj": "abc"}}))

        with pytest.raises(ConfigError, match="inválida"):
            load_tax_config(storage)

    def test_reset_removes_saved_config(self, storage):
        """Test that reset goes back to defaults."""
        save_tax_config(storage, TaxConfig(lucro_real=ConfigLucroReal(irpj=Decimal("30"))))

        config = reset_tax_config(storage)

        assert config == TaxConfig()
        assert storage.get_item(TAX_CONFIG_KEY) is None
        assert load_tax_config(storage) == TaxConfig()

    def test_reset_keeps_other_keys(self, storage):
        """Test that reset only touches the taxConfig key."""
        storage.set_item("outra", "x")
        save_tax_config(storage, TaxConfig())

        reset_tax_config(storage)

        assert storage.get_item("outra") == "x"


class TestUpdateTaxConfig:
    """Tests for dotted-path updates."""

    def test_update_rate(self, default_config):
        """Test replacing a Lucro Real rate."""
        config = update_tax_config(default_config, "lucroReal.irpj", "20")

        assert config.lucro_real.irpj == Decimal("20")
        assert default_config.lucro_real.irpj == Decimal("15")

    def test_update_bracket(self, default_config):
        """Test replacing a Simples bracket rate."""
        config = update_tax_config(
            default_config, "simplesNacional.anexo1.faixa2.aliquota", "7.5"
        )

        assert config.simples_nacional.anexo1["faixa2"].aliquota == Decimal("7.5")

    def test_add_state(self):
        """Test adding a new state rate."""
        config = update_tax_config(TaxConfig(icms_estadual={}), "icmsEstadual.sp", "17")

        assert config.icms_estadual == {"SP": Decimal("17")}

    def test_unknown_path(self, default_config):
        """Test that unknown keys raise ConfigError."""
        with pytest.raises(ConfigError, match="desconhecido"):
            update_tax_config(default_config, "lucroReal.inexistente", "1")

    def test_path_to_group(self, default_config):
        """Test that a path must point at a value, not a group."""
        with pytest.raises(ConfigError):
            update_tax_config(default_config, "simplesNacional.anexo1", "1")

    def test_empty_path(self, default_config):
        """Test that an empty path raises ConfigError."""
        with pytest.raises(ConfigError):
            update_tax_config(default_config, "", "1")

    def test_invalid_value(self, default_config):
        """Test that a non-numeric value raises ConfigError."""
        with pytest.raises(ConfigError, match="Valor inválido"):
            update_tax_config(default_config, "lucroReal.csll", "nove")

    def test_update_that_breaks_bracket_order(self, default_config):
        """Test that bracket ceilings are revalidated."""
        with pytest.raises(ConfigError):
            update_tax_config(default_config, "simplesNacional.anexo1.faixa2.limite", "100")
