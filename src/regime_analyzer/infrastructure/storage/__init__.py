"""Persisted settings storage."""

from regime_analyzer.infrastructure.storage.local_storage import (
    HOME_ENV_VAR,
    LocalStorage,
    default_storage_path,
)
from regime_analyzer.infrastructure.storage.tax_config_store import (
    TAX_CONFIG_KEY,
    load_tax_config,
    reset_tax_config,
    save_tax_config,
    update_tax_config,
)

__all__ = [
    "HOME_ENV_VAR",
    "LocalStorage",
    "default_storage_path",
    "TAX_CONFIG_KEY",
    "load_tax_config",
    "reset_tax_config",
    "save_tax_config",
    "update_tax_config",
]
