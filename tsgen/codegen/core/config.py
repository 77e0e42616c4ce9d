"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import dataclasses
import json
import re
from pathlib import Path
from typing import Dict, Any, List, Optional, Union
from dataclasses import dataclass, field

from ...logging_config import get_logger
from .errors import ConfigError

logger = get_logger(__name__)

_AFFIX_RE = re.compile(r"[A-Za-z0-9_$]*")

DEFAULT_HEADER = "/* Do not change, this code is generated from Python classes */"


@dataclass
class GeneratorConfig:
    """Configuration for the TypeScript generator."""

    # Naming affixes added to every generated entity name
    prefix: str = ""
    suffix: str = ""

    # Code style settings
    indent: str = "    "

    # Output shape
    create_interface: bool = False
    export: bool = True
    create_from_method: bool = True
    create_constructor: bool = True

    # File output
    backup_dir: str = "."  # Empty disables backups
    header: str = DEFAULT_HEADER

    # Extra import lines placed at the top of the output
    imports: List[str] = field(default_factory=list)


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._defaults: Dict[str, Any] = dataclasses.asdict(GeneratorConfig())

    def get_config(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        base_config = dict(self._defaults)
        base_config["imports"] = list(base_config["imports"])

        if config_file:
            file_config = self._load_config_file(config_file)
            base_config.update(file_config)

        if custom_config:
            base_config.update(custom_config)

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {str(e)}")
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {str(e)}")

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Loaded configuration from %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in dataclasses.fields(GeneratorConfig)}

        unknown = sorted(set(config_dict) - known_fields)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        return GeneratorConfig(**config_dict)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(dataclasses.asdict(config), f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {str(e)}")

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if config.indent.strip():
            warnings.append(f"Indent contains non-whitespace characters: {config.indent!r}")

        for label, affix in (("prefix", config.prefix), ("suffix", config.suffix)):
            if not _AFFIX_RE.fullmatch(affix):
                warnings.append(f"Invalid {label} for TypeScript identifiers: {affix!r}")

        if config.create_interface and (
            config.create_from_method or config.create_constructor
        ):
            warnings.append("Constructors are not generated in interface mode")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    manager = get_config_manager()
    return manager.get_config(custom_config, config_file)


EXAMPLE_CONFIG = {
    "prefix": "Api",
    "indent": "  ",
    "create_interface": False,
    "backup_dir": "",
    "imports": ["import Decimal from 'decimal.js';"],
}
