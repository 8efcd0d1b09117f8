"""Configuration for the URL signer.

Settings are read from `config.yaml` in the config directory and may be
overridden by environment variables. The file is only ever read.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Self

import yaml
from mashumaro.mixins.dict import DataClassDictMixin

from .exceptions import ConfigError
from .signer import UrlSigner

_LOGGER = logging.getLogger(__name__)

CONFIG_FILE = "config.yaml"
DEFAULT_CONFIG_DIR = "config"

ENV_CONFIG_DIR = "URLSIGNER_CONFIG_DIR"
ENV_KEY = "URLSIGNER_KEY"


@dataclass
class SignerConfig(DataClassDictMixin):
    """URL signer settings."""

    key: str | None = None
    """Base64url encoded signing key."""

    @classmethod
    def load(cls, config_dir: str | Path | None = None) -> Self:
        """Load configuration from the config directory and environment."""
        if config_dir is None:
            config_dir = os.getenv(ENV_CONFIG_DIR, DEFAULT_CONFIG_DIR)
        config_file = Path(config_dir) / CONFIG_FILE

        config = cls()
        if config_file.exists():
            _LOGGER.debug("Loading config from %s", config_file)
            try:
                with open(config_file) as f:
                    data = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as err:
                raise ConfigError(f"Failed reading {config_file}: {err}") from err
            if data is not None:
                if not isinstance(data, dict):
                    raise ConfigError(f"Expected a mapping in {config_file}")
                try:
                    config = cls.from_dict(data)
                except ValueError as err:
                    raise ConfigError(f"Invalid config in {config_file}: {err}") from err
        else:
            _LOGGER.debug("No config file at %s, using defaults", config_file)

        if key := os.getenv(ENV_KEY):
            config.key = key

        return config

    def signer(self) -> UrlSigner:
        """Return a signer for the configured key."""
        if not self.key:
            raise ConfigError(
                f"No signing key configured; set {ENV_KEY} or 'key' in {CONFIG_FILE}"
            )
        return UrlSigner(self.key)
