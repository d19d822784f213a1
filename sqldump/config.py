"""
Configuration loading and validation for SQL Dumper.
"""

import os
import re
from typing import Any

import yaml

from .models import LiteralMode, OutputSettings


class ConfigLoader:
    """Loads and validates configuration from YAML file."""

    ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')
    DEFAULT_INSTANCE = 'primary'

    def __init__(self, config_path: str):
        self.config_path = config_path
        self.config = self._load_config()

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from YAML file."""
        with open(self.config_path, 'r') as f:
            config = yaml.safe_load(f) or {}

        if not isinstance(config, dict):
            raise ValueError(f"Configuration file '{self.config_path}' must contain a mapping")

        return self._resolve_env_vars(config)

    def _resolve_env_vars(self, obj: Any) -> Any:
        """Recursively replace ${VAR} placeholders with environment values."""
        if isinstance(obj, str):
            return self.ENV_VAR_PATTERN.sub(lambda m: os.environ.get(m.group(1), ''), obj)
        elif isinstance(obj, dict):
            return {k: self._resolve_env_vars(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [self._resolve_env_vars(item) for item in obj]
        return obj

    def get_instance(self, instance_name: str) -> dict[str, Any]:
        """Get connection settings for a database instance."""
        instances = self.config.get('instances') or {}
        if instance_name not in instances:
            raise ValueError(f"Instance '{instance_name}' not found in configuration")
        return instances[instance_name]

    def get_databases(self) -> list[dict[str, Any]]:
        """Get list of databases to dump, with the instance filled in."""
        databases = []
        for db in self.config.get('databases') or []:
            if isinstance(db, str):
                db = {'name': db}
            if not db.get('name'):
                raise ValueError("Every database entry needs a 'name'")
            databases.append({'instance': self.DEFAULT_INSTANCE, **db})
        return databases

    def get_output_settings(self) -> OutputSettings:
        """Get output settings."""
        output = self.config.get('output') or {}
        defaults = OutputSettings()

        mode = output.get('literal_mode', defaults.literal_mode.value)
        try:
            literal_mode = LiteralMode(mode)
        except ValueError:
            raise ValueError(
                f"Unknown literal_mode '{mode}', expected one of: "
                f"{', '.join(m.value for m in LiteralMode)}"
            ) from None

        return OutputSettings(
            directory=str(output.get('directory', defaults.directory)),
            filename_format=output.get('filename_format', defaults.filename_format),
            literal_mode=literal_mode
        )

    def get_logging_settings(self) -> dict[str, Any]:
        """Get logging settings."""
        return dict(self.config.get('logging') or {})
