"""
Unit tests for configuration parser.

Tests the YAML configuration parsing, validation, and error handling
functionality of the ConfigParser class.
"""

import pytest
import tempfile
import os
import shutil
import yaml
from pathlib import Path
from unittest.mock import patch

from suki.config.parser import (
    ConfigParser,
    ConfigParseResult,
    load_config,
    validate_config_file,
    create_config_template
)
from suki.errors import ConfigurationError
from suki.models import SukiConfig


class TestConfigParser:
    """Test cases for ConfigParser class."""

    def setup_method(self):
        """Set up an isolated search directory."""
        self.temp_dir = tempfile.mkdtemp()
        self.search_dir = Path(self.temp_dir)
        self.user_config = self.search_dir / 'user' / 'config.yaml'
        self.parser = ConfigParser(search_paths=[self.search_dir], user_config_path=self.user_config)

    def teardown_method(self):
        """Clean up test fixtures."""
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def _write(self, name: str, content: str) -> Path:
        path = self.search_dir / name
        path.write_text(content, encoding='utf-8')
        return path

    def test_init_default_search_paths(self):
        """Test default search locations."""
        parser = ConfigParser()
        assert parser.search_paths == [Path.cwd()]
        assert parser.user_config_path == Path.home() / '.config' / 'suki' / 'config.yaml'
        assert parser.DEFAULT_CONFIG_NAMES == ['.suki.yaml', '.suki.yml']

    def test_load_config_with_valid_file(self):
        """Test loading configuration from valid YAML file."""
        path = self._write('custom.yaml', yaml.dump({'dedupe_on_add': True, 'log_level': 'info'}))

        result = self.parser.load_config(path)

        assert isinstance(result, ConfigParseResult)
        assert isinstance(result.config, SukiConfig)
        assert result.config.dedupe_on_add is True
        assert result.config.log_level == 'INFO'
        assert result.config_path == path
        assert result.is_default is False

    def test_load_config_file_not_found(self):
        """Test loading configuration from non-existent file."""
        with pytest.raises(ConfigurationError, match="Configuration file not found"):
            self.parser.load_config(self.search_dir / 'missing.yaml')

    def test_load_config_invalid_yaml(self):
        """Test loading configuration with invalid YAML syntax."""
        path = self._write('bad.yaml', "log_level: [\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML syntax"):
            self.parser.load_config(path)

    def test_load_config_empty_file(self):
        """Test loading configuration from empty file yields defaults."""
        path = self._write('empty.yaml', "")

        result = self.parser.load_config(path)

        assert result.config == SukiConfig()
        assert result.config_path == path
        assert result.is_default is False

    def test_load_config_comments_only(self):
        """Test that a YAML file with only comments yields defaults."""
        path = self._write('comments.yaml', "# nothing here\n")
        assert self.parser.load_config(path).config == SukiConfig()

    def test_load_config_non_dict_yaml(self):
        """Test loading configuration with non-dictionary YAML."""
        path = self._write('list.yaml', "- item1\n- item2")

        with pytest.raises(ConfigurationError, match="must contain a YAML object"):
            self.parser.load_config(path)

    def test_load_config_unknown_key(self):
        """Test that unknown keys fail validation."""
        path = self._write('unknown.yaml', "roots:\n  - .\n")

        with pytest.raises(ConfigurationError, match="Unknown configuration key: roots"):
            self.parser.load_config(path)

    def test_load_config_invalid_value(self):
        """Test that invalid values fail validation."""
        path = self._write('invalid.yaml', "encoding: klingon\n")

        with pytest.raises(ConfigurationError, match="Configuration validation failed"):
            self.parser.load_config(path)

    def test_load_config_discovers_default_file(self):
        """Test that .suki.yaml in a search path is found."""
        path = self._write('.suki.yaml', "atomic_write: false\n")

        result = self.parser.load_config()

        assert result.config_path == path
        assert result.is_default is False
        assert result.config.atomic_write is False
        assert any("Atomic writes disabled" in w for w in result.warnings)

    def test_load_config_discovers_user_config(self):
        """Test that the per-user config.yaml is found."""
        self.user_config.parent.mkdir()
        self.user_config.write_text("dedupe_on_add: true\n", encoding='utf-8')

        result = self.parser.load_config()

        assert result.config_path == self.user_config
        assert result.config.dedupe_on_add is True

    def test_project_config_wins_over_user_config(self):
        """Test that .suki.yaml in the directory is preferred to the per-user file."""
        self.user_config.parent.mkdir()
        self.user_config.write_text("dedupe_on_add: true\n", encoding='utf-8')
        path = self._write('.suki.yaml', "log_level: info\n")

        result = self.parser.load_config()

        assert result.config_path == path
        assert result.config.dedupe_on_add is False

    def test_unrelated_config_yaml_is_ignored(self):
        """Test that a foreign config.yaml in the working directory is not loaded."""
        self._write('config.yaml', "server:\n  port: 8080\n")

        result = self.parser.load_config()

        assert result.config == SukiConfig()
        assert result.config_path is None
        assert result.is_default is True

    def test_load_config_no_file_uses_defaults(self):
        """Test that defaults are used when nothing is found."""
        result = self.parser.load_config()

        assert result.config == SukiConfig()
        assert result.config_path is None
        assert result.is_default is True
        assert "No configuration file found, using default settings" in result.warnings

    def test_load_config_read_error(self):
        """Test that unreadable files raise ConfigurationError."""
        path = self._write('config.yaml', "log_level: info\n")

        with patch('builtins.open', side_effect=PermissionError("denied")):
            with pytest.raises(ConfigurationError, match="Cannot read configuration file"):
                self.parser.load_config(path)

    def test_non_standard_database_name_warning(self):
        """Test the warning for a renamed database file."""
        path = self._write('config.yaml', "database_name: .tags\n")

        result = self.parser.load_config(path)

        assert result.config.database_name == '.tags'
        assert any("Non-standard database name" in w for w in result.warnings)

    def test_save_config_round_trip(self):
        """Test that a saved configuration loads back unchanged."""
        config = SukiConfig(encoding='latin-1', dedupe_on_add=True, log_level='DEBUG')
        output = self.search_dir / 'nested' / 'suki.yaml'

        self.parser.save_config(config, output)

        content = output.read_text(encoding='utf-8')
        assert content.startswith("# suki configuration")
        assert "# Text encoding of the tag database" in content
        assert self.parser.load_config(output).config == config

    def test_save_config_write_error(self):
        """Test that write failures raise ConfigurationError."""
        with patch('builtins.open', side_effect=OSError("read-only")):
            with pytest.raises(ConfigurationError, match="Cannot write configuration file"):
                self.parser.save_config(SukiConfig(), self.search_dir / 'out.yaml')

    def test_validate_config_file(self):
        """Test validating files without loading them."""
        good = self._write('good.yaml', "log_level: error\n")
        bad = self._write('bad.yaml', "log_level: loud\n")

        assert self.parser.validate_config_file(good) == []
        assert len(self.parser.validate_config_file(bad)) == 1
        assert self.parser.validate_config_file(self.search_dir / 'nope.yaml') == [
            f"Configuration file not found: {self.search_dir / 'nope.yaml'}"
        ]

    def test_get_config_template(self):
        """Test that the template documents every setting."""
        template = self.parser.get_config_template()
        data = yaml.safe_load(template)

        assert set(data) == set(SukiConfig.model_fields)
        assert data['database_name'] == '.suki'


class TestConvenienceFunctions:
    """Test cases for module-level helpers."""

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()

    def teardown_method(self):
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def test_create_config_template_and_load(self):
        """Test creating a template and loading it back."""
        path = Path(self.temp_dir) / 'suki.yaml'

        create_config_template(path)

        assert path.exists()
        assert validate_config_file(path) == []
        result = load_config(path)
        assert result.config == SukiConfig()
        assert result.is_default is False
