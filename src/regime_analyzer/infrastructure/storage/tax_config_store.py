"""Load, save and edit the persisted tax configuration."""

import logging
from typing import Any

from pydantic import ValidationError

from regime_analyzer.core.models.config import TaxConfig
from regime_analyzer.infrastructure.storage.local_storage import LocalStorage
from regime_analyzer.shared.exceptions import ConfigError

logger = logging.getLogger(__name__)

TAX_CONFIG_KEY = "taxConfig"


def load_tax_config(storage: LocalStorage) -> TaxConfig:
    """Load the saved configuration, or the defaults when none is saved.

    Raises:
        ConfigError: If the saved blob is not a valid configuration
    """
    raw = storage.get_item(TAX_CONFIG_KEY)
    if raw is None:
        logger.debug("Nenhuma configuração salva, usando padrão")
        return TaxConfig()

    if not isinstance(raw, str):
        raise ConfigError("Configuração tributária salva em formato inválido")

    try:
        return TaxConfig.model_validate_json(raw)
    except ValidationError as error:
        raise ConfigError(f"Configuração tributária inválida: {error}") from error


def save_tax_config(storage: LocalStorage, config: TaxConfig) -> None:
    """Persist the configuration as a JSON blob with camelCase keys."""
    storage.set_item(TAX_CONFIG_KEY, config.model_dump_json(by_alias=True))
    logger.info("Configuração tributária salva em %s", storage.path)


def reset_tax_config(storage: LocalStorage) -> TaxConfig:
    """Drop the saved configuration and return the defaults."""
    storage.remove_item(TAX_CONFIG_KEY)
    logger.info("Configuração tributária restaurada para o padrão")
    return TaxConfig()


def update_tax_config(config: TaxConfig, caminho: str, valor: Any) -> TaxConfig:
    """Return a copy of config with one value replaced.

    Args:
        config: Current configuration
        caminho: Dotted path using the persisted keys, e.g. ``lucroReal.irpj``,
            ``icmsEstadual.SP`` or ``simplesNacional.anexo1.faixa2.aliquota``
        valor: New value (strings are parsed by the model)

    Returns:
        New validated TaxConfig

    Raises:
        ConfigError: If the path does not exist or the value is invalid
    """
    data = config.model_dump(mode="json", by_alias=True)
    partes = [p for p in caminho.split(".") if p]
    if not partes:
        raise ConfigError("Caminho de configuração vazio")

    node: Any = data
    for parte in partes[:-1]:
        if not isinstance(node, dict) or parte not in node:
            raise ConfigError(f"Caminho de configuração desconhecido: {caminho}")
        node = node[parte]

    chave = partes[-1]
    # icmsEstadual is the only open mapping: new states may be added
    aceita_nova_chave = partes[0] == "icmsEstadual" and len(partes) == 2
    if not isinstance(node, dict) or (chave not in node and not aceita_nova_chave):
        raise ConfigError(f"Caminho de configuração desconhecido: {caminho}")
    if isinstance(node.get(chave), dict):
        raise ConfigError(f"Caminho não aponta para um valor: {caminho}")

    node[chave] = valor
    try:
        return TaxConfig.model_validate(data)
    except ValidationError as error:
        raise ConfigError(f"Valor inválido para {caminho}: {error}") from error
