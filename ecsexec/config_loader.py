import json
import logging
import os

import jsonschema

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "ECSEXEC_CONFIG"
DEFAULT_CONFIG_PATH = os.path.join("~", ".config", "ecsexec", "config.json")


class ConfigLoader:
    DEFAULTS = {
        "vault_executable": "aws-vault",
        "aws_executable": "aws",
        "command": "/usr/bin/env bash",
        "region": None,
        "log_level": "WARNING",
        "default_profile": None,
    }

    SCHEMA = {
        "type": "object",
        "properties": {
            "vault_executable": {"type": "string", "minLength": 1},
            "aws_executable": {"type": "string", "minLength": 1},
            "command": {"type": "string", "minLength": 1},
            "region": {"type": ["string", "null"]},
            "log_level": {
                "type": "string",
                "enum": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            },
            "default_profile": {"type": ["string", "null"]},
        },
        "additionalProperties": False,
    }

    def __init__(self, config_path=None):
        self.config_path = config_path

    def resolve_path(self):
        """Pick the config file: explicit path, then $ECSEXEC_CONFIG, then the default location."""
        path = self.config_path or os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH
        return os.path.expanduser(path)

    def validate_schema(self, config):
        try:
            jsonschema.validate(instance=config, schema=self.SCHEMA)
        except jsonschema.exceptions.ValidationError as e:
            raise ConfigError(f"Configuration validation failed: {e.message}")

    def load_config(self):
        """Return the settings dict, with defaults filled in for anything the file leaves out."""
        path = self.resolve_path()
        config = dict(self.DEFAULTS)

        if not os.path.exists(path):
            if self.config_path:
                raise ConfigError(f"Configuration file not found: {path}")
            logger.debug("No configuration file at %s, using defaults", path)
            return config

        with open(path, "r") as f:
            try:
                loaded = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigError(f"Failed to parse JSON config: {e}")

        self.validate_schema(loaded)
        config.update(loaded)
        logger.debug("Loaded configuration from %s", path)
        return config
