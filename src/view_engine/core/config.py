"""Configuration file loading for the view engine."""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from .exceptions import ConfigError
from .models import EngineConfig

CONFIG_SECTION = "view_engine"


def _read_structured(file_path: Path) -> Any:
    """Read a YAML or JSON file, chosen by extension."""
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    content = file_path.read_text(encoding='utf-8')
    if file_path.suffix.lower() == '.json':
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {file_path}: {e}")

    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {file_path}: {e}")


class ConfigManager:
    """Loads engine configuration and render data files."""

    def __init__(self, base_dir: Optional[Path] = None):
        """Initialize config manager.

        Args:
            base_dir: Directory relative paths in config files are resolved
                against. Defaults to the current directory.
        """
        self.base_dir = base_dir or Path.cwd()

    def parse_config(self, data: Any) -> EngineConfig:
        """Build an EngineConfig from parsed file content.

        The settings may sit at the top level or under a ``view_engine`` key.
        """
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Engine configuration must be a mapping")
        if isinstance(data.get(CONFIG_SECTION), dict):
            data = data[CONFIG_SECTION]

        try:
            config = EngineConfig(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid engine configuration: {e}")

        if not config.views_path.is_absolute():
            config = config.model_copy(update={'views_path': self.base_dir / config.views_path})
        return config

    def load_engine_config(self, config_path: Path) -> EngineConfig:
        """Load an EngineConfig from a YAML or JSON file."""
        manager = ConfigManager(config_path.parent)
        return manager.parse_config(_read_structured(config_path))

    def load_data(self, data_path: Path) -> Dict[str, Any]:
        """Load a render context from a YAML or JSON file."""
        data = _read_structured(data_path)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Render data in {data_path} must be a mapping")
        return data

    def validate_config(self, config_path: Path) -> bool:
        """Check whether a configuration file loads cleanly."""
        try:
            self.load_engine_config(config_path)
            return True
        except (FileNotFoundError, ConfigError):
            return False
