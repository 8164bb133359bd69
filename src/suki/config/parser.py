"""
YAML configuration parser for suki.

This module provides functionality to load, parse, and validate YAML configuration files
for suki. It handles configuration file discovery, parsing, validation, and provides
helpful error messages for configuration issues.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List, Union
import logging
from dataclasses import dataclass

from ..errors import ConfigurationError
from ..models.config import SukiConfig, validate_config_dict


logger = logging.getLogger(__name__)


@dataclass
class ConfigParseResult:
    """
    Result of configuration parsing operation.

    Attributes:
        config: The parsed and validated configuration
        warnings: List of non-fatal warnings
        config_path: Path to the configuration file used
        is_default: Whether default configuration was used
    """
    config: SukiConfig
    warnings: List[str]
    config_path: Optional[Path]
    is_default: bool


class ConfigParser:
    """
    YAML configuration parser with validation and error handling.

    This class handles loading YAML configuration files, validating their contents,
    and converting them to SukiConfig objects.
    """

    DEFAULT_CONFIG_NAMES = [
        '.suki.yaml',
        '.suki.yml'
    ]

    def __init__(self, search_paths: Optional[List[Union[str, Path]]] = None,
                 user_config_path: Optional[Union[str, Path]] = None):
        """
        Initialize the configuration parser.

        Args:
            search_paths: Directories searched for one of DEFAULT_CONFIG_NAMES.
                Defaults to the current directory.
            user_config_path: Per-user configuration file tried after the search paths.
                Defaults to ~/.config/suki/config.yaml.
        """
        if search_paths is None:
            self.search_paths = [Path.cwd()]
        else:
            self.search_paths = [Path(p) for p in search_paths]
        if user_config_path is None:
            self.user_config_path = Path.home() / '.config' / 'suki' / 'config.yaml'
        else:
            self.user_config_path = Path(user_config_path)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def load_config(self, config_path: Optional[Union[str, Path]] = None) -> ConfigParseResult:
        """
        Load and parse configuration from file or use defaults.

        Args:
            config_path: Path to configuration file. If None, searches for default files.

        Returns:
            ConfigParseResult containing parsed configuration and metadata

        Raises:
            ConfigurationError: If configuration is invalid or file cannot be read
        """
        if config_path:
            config_path = Path(config_path)
            if not config_path.exists():
                raise ConfigurationError(f"Configuration file not found: {config_path}")
            config_data = self._load_yaml_file(config_path)
            is_default = False
        else:
            config_path, config_data = self._find_and_load_config()
            is_default = config_data is None
            if is_default:
                config_data = {}

        config = self._validate_config_data(config_data)
        warnings = self._get_parser_warnings(config, is_default)

        self.logger.info(f"Configuration loaded from {config_path or 'defaults'}")

        return ConfigParseResult(
            config=config,
            warnings=warnings,
            config_path=config_path,
            is_default=is_default
        )

    def _find_and_load_config(self) -> tuple[Optional[Path], Optional[Dict[str, Any]]]:
        """
        Find and load configuration file from default locations.

        Returns:
            Tuple of (config_path, config_data) or (None, None) if not found
        """
        candidates = [
            search_path / name
            for search_path in self.search_paths
            for name in self.DEFAULT_CONFIG_NAMES
        ]
        # Only the per-user location uses the generic config.yaml name
        candidates.append(self.user_config_path)

        for config_file in candidates:
            if config_file.exists() and config_file.is_file():
                self.logger.info(f"Found configuration file: {config_file}")
                return config_file, self._load_yaml_file(config_file)

        self.logger.info("No configuration file found, using defaults")
        return None, None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Load and parse YAML file.

        Args:
            file_path: Path to YAML file

        Returns:
            Parsed YAML data as dictionary

        Raises:
            ConfigurationError: If file cannot be read or parsed
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                content = f.read()

            if not content.strip():
                self.logger.warning(f"Configuration file is empty: {file_path}")
                return {}

            data = yaml.safe_load(content)

            # Comments-only files load as None
            if data is None:
                return {}

            if not isinstance(data, dict):
                raise ConfigurationError(f"Configuration file must contain a YAML object, got {type(data).__name__}")

            return data

        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {file_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file {file_path}: {e}") from e

    def _validate_config_data(self, config_data: Dict[str, Any]) -> SukiConfig:
        """
        Validate configuration data and build the config object.

        Args:
            config_data: Raw configuration data from YAML

        Returns:
            Validated SukiConfig

        Raises:
            ConfigurationError: If configuration is invalid
        """
        errors = validate_config_dict(config_data)
        if errors:
            raise ConfigurationError(f"Configuration validation failed: {'; '.join(errors)}")
        return SukiConfig.from_dict(config_data)

    def _get_parser_warnings(self, config: SukiConfig, is_default: bool) -> List[str]:
        """Get parser-specific warnings."""
        warnings = []

        if is_default:
            warnings.append("No configuration file found, using default settings")

        if not config.atomic_write:
            warnings.append("Atomic writes disabled - an interrupted save can leave a truncated database")

        if config.database_name != '.suki':
            warnings.append(f"Non-standard database name {config.database_name!r} - other suki installs will not find it")

        return warnings

    def save_config(self, config: SukiConfig, output_path: Union[str, Path]) -> None:
        """
        Save configuration to YAML file.

        Args:
            config: Configuration to save
            output_path: Path where to save the configuration

        Raises:
            ConfigurationError: If file cannot be written
        """
        output_path = Path(output_path)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            yaml_content = self._generate_yaml_with_comments(config.to_dict())
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(yaml_content)
        except OSError as e:
            raise ConfigurationError(f"Cannot write configuration file {output_path}: {e}") from e

        self.logger.info(f"Configuration saved to {output_path}")

    def _generate_yaml_with_comments(self, config_dict: Dict[str, Any]) -> str:
        """
        Generate YAML content with helpful comments.

        Args:
            config_dict: Configuration dictionary

        Returns:
            YAML content with comments
        """
        lines = [
            "# suki configuration",
            "",
        ]

        sections = [
            ("database_name", "Name of the tag database file inside each directory"),
            ("encoding", "Text encoding of the tag database"),
            ("atomic_write", "Write to a temporary file and rename it over the database"),
            ("dedupe_on_add", "Do not list the same file twice under one tag"),
            ("log_level", "Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
        ]

        for key, comment in sections:
            if key in config_dict:
                lines.append(f"# {comment}")
                lines.append(yaml.dump({key: config_dict[key]}, default_flow_style=False, sort_keys=False).rstrip())
                lines.append("")

        return "\n".join(lines)

    def validate_config_file(self, config_path: Union[str, Path]) -> List[str]:
        """
        Validate a configuration file without loading it into a SukiConfig.

        Args:
            config_path: Path to configuration file

        Returns:
            List of validation errors (empty if valid)
        """
        config_path = Path(config_path)
        if not config_path.exists():
            return [f"Configuration file not found: {config_path}"]

        try:
            config_data = self._load_yaml_file(config_path)
        except ConfigurationError as e:
            return [str(e)]

        return validate_config_dict(config_data)

    def get_config_template(self) -> str:
        """Get a template configuration file with all options and comments."""
        return self._generate_yaml_with_comments(SukiConfig().to_dict())


def load_config(config_path: Optional[Union[str, Path]] = None) -> ConfigParseResult:
    """
    Convenience function to load configuration.

    Args:
        config_path: Path to configuration file (optional)

    Returns:
        ConfigParseResult containing parsed configuration

    Raises:
        ConfigurationError: If configuration is invalid
    """
    return ConfigParser().load_config(config_path)


def validate_config_file(config_path: Union[str, Path]) -> List[str]:
    """Convenience function to validate a configuration file."""
    return ConfigParser().validate_config_file(config_path)


def create_config_template(output_path: Union[str, Path]) -> None:
    """
    Create a template configuration file.

    Args:
        output_path: Where to save the template

    Raises:
        ConfigurationError: If template cannot be created
    """
    ConfigParser().save_config(SukiConfig(), output_path)
