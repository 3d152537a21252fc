"""File-backed key-value storage for persisted settings."""

import json
import logging
import os
from pathlib import Path

from regime_analyzer.shared.exceptions import ConfigError

logger = logging.getLogger(__name__)

# Overrides the directory holding storage.json
HOME_ENV_VAR = "REGIME_ANALYZER_HOME"
STORAGE_FILENAME = "storage.json"


def default_storage_path() -> Path:
    """Return the storage file location.

    Uses ``$REGIME_ANALYZER_HOME/storage.json`` when set, otherwise
    ``~/.regime-analyzer/storage.json``.
    """
    home = os.environ.get(HOME_ENV_VAR)
    base = Path(home) if home else Path.home() / ".regime-analyzer"
    return base / STORAGE_FILENAME


class LocalStorage:
    """Key-value store of string values kept in a single JSON file.

    The file holds a flat JSON object. A missing file is an empty store.
    """

    def __init__(self, path: Path | None = None):
        self.path = Path(path) if path is not None else default_storage_path()

    def get_item(self, key: str) -> str | None:
        """Return the value stored under key, or None."""
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        """Store a string value under key."""
        data = self._read()
        data[key] = value
        self._write(data)
        logger.debug("Chave %s gravada em %s", key, self.path)

    def remove_item(self, key: str) -> None:
        """Remove key if present."""
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)
            logger.debug("Chave %s removida de %s", key, self.path)

    def keys(self) -> list[str]:
        """Return stored keys."""
        return list(self._read())

    def _read(self) -> dict:
        if not self.path.exists():
            return {}

        try:
            content = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Não foi possível ler {self.path}: {e}") from e

        if not content.strip():
            return {}

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Arquivo de armazenamento corrompido: {self.path}") from e

        if not isinstance(data, dict):
            raise ConfigError(
                f"Arquivo de armazenamento deve conter um objeto JSON: {self.path}"
            )
        return data

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Write to a sibling file first so a crash never leaves a partial file
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(
            json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8"
        )
        tmp_path.replace(self.path)
