"""Key/value configuration files: ``KEY=VALUE`` lines, ``#`` comments."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

ERROR_OPEN_CONFIG = "Error de apertura del archivo config: "
FILE_OPENED = "Apertura de archivo: "
CONFIG_VALUE = "Config: "
KEY_NOT_FOUND = "No existe en archivo de configuracion la clave: "


class ConfigError(Exception):
    """Raised when a configuration file or one of its keys is unusable."""


@dataclass
class Config:
    """Parsed configuration values."""

    values: dict[str, str] = field(default_factory=dict)
    path: str | None = None

    @classmethod
    def parse(cls, text: str) -> "Config":
        """Parse configuration text."""
        values: dict[str, str] = {}
        for line in text.splitlines():
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            values[key.strip()] = value.strip()
        return cls(values)

    @classmethod
    def load(cls, path: str | Path) -> "Config":
        """Read and parse the file at ``path``."""
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"{ERROR_OPEN_CONFIG}{path}") from exc
        config = cls.parse(text)
        config.path = str(path)
        return config

    def has(self, key: str) -> bool:
        return key in self.values

    def get_string(self, key: str) -> str:
        try:
            return self.values[key]
        except KeyError:
            raise ConfigError(f"{KEY_NOT_FOUND}{key}") from None

    def get_int(self, key: str) -> int:
        value = self.get_string(key)
        try:
            return int(value)
        except ValueError:
            raise ConfigError(f"{key} is not an integer: {value!r}") from None


def load_config(path: str | Path, log: logging.Logger) -> Config:
    """Load a configuration file, logging the outcome."""
    try:
        config = Config.load(path)
    except ConfigError:
        log.error("%s%s", ERROR_OPEN_CONFIG, path)
        raise
    log.info("%s%s", FILE_OPENED, path)
    return config


def read_value(config: Config, key: str, log: logging.Logger) -> str:
    """Return the value of ``key``, logging it; log and raise if it is missing."""
    if not config.has(key):
        log.error("%s%s", KEY_NOT_FOUND, key)
        raise ConfigError(f"{KEY_NOT_FOUND}{key}")
    value = config.get_string(key)
    log.info("%s%s = %s", CONFIG_VALUE, key, value)
    return value