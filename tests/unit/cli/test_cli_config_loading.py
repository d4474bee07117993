"""Unit tests for md2delta CLI configuration discovery and loading."""

import argparse
import json

import pytest

from md2delta.cli.config import (
    discover_config_file,
    find_config_in_parents,
    load_config_file,
    load_config_with_priority,
    validate_config,
)


@pytest.mark.unit
@pytest.mark.cli
class TestConfigLoading:
    """Tests for reading each supported config format."""

    def test_toml(self, tmp_path):
        """Dedicated TOML files are read whole."""
        path = tmp_path / ".md2delta.toml"
        path.write_text("merge_line_breaks = false\nindent = 4\n")

        assert load_config_file(path) == {"merge_line_breaks": False, "indent": 4}

    def test_yaml(self, tmp_path):
        """YAML files are read with safe_load."""
        path = tmp_path / ".md2delta.yaml"
        path.write_text("parse_tables: false\n")

        assert load_config_file(path) == {"parse_tables": False}

    def test_empty_yaml(self, tmp_path):
        """An empty YAML file is an empty configuration."""
        path = tmp_path / ".md2delta.yml"
        path.write_text("")

        assert load_config_file(path) == {}

    def test_json(self, tmp_path):
        """JSON files must hold an object."""
        path = tmp_path / ".md2delta.json"
        path.write_text(json.dumps({"parse_frontmatter": True}))

        assert load_config_file(path) == {"parse_frontmatter": True}

    def test_json_array_rejected(self, tmp_path):
        """A JSON array is not a configuration."""
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")

        with pytest.raises(argparse.ArgumentTypeError):
            load_config_file(path)

    def test_pyproject_section(self, tmp_path):
        """pyproject.toml contributes only its tool section."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.md2delta]\nparse_footnotes = false\n')

        assert load_config_file(path) == {"parse_footnotes": False}

    def test_invalid_toml(self, tmp_path):
        """Malformed TOML is reported as an argument error."""
        path = tmp_path / "bad.toml"
        path.write_text("indent = = 2")

        with pytest.raises(argparse.ArgumentTypeError, match="Invalid TOML"):
            load_config_file(path)

    def test_missing_file(self, tmp_path):
        """A missing file is reported as an argument error."""
        with pytest.raises(argparse.ArgumentTypeError, match="does not exist"):
            load_config_file(tmp_path / "absent.toml")

    def test_unsupported_extension(self, tmp_path):
        """Only TOML, YAML and JSON are supported."""
        path = tmp_path / "config.ini"
        path.write_text("[x]")

        with pytest.raises(argparse.ArgumentTypeError, match="Unsupported"):
            load_config_file(path)


@pytest.mark.unit
@pytest.mark.cli
class TestConfigValidation:
    """Tests for validate_config."""

    def test_unknown_keys_dropped_with_warning(self, caplog):
        """Unknown keys are logged and ignored."""
        with caplog.at_level("WARNING", logger="md2delta.cli.config"):
            config = validate_config({"indent": 2, "colour": "blue"}, "test.toml")

        assert config == {"indent": 2}
        assert "colour" in caplog.text

    def test_wrong_type(self):
        """Known keys must have the right type."""
        with pytest.raises(argparse.ArgumentTypeError, match="merge_line_breaks"):
            validate_config({"merge_line_breaks": "no"})

    def test_bool_is_not_an_indent(self):
        """A boolean is not accepted where an integer is expected."""
        with pytest.raises(argparse.ArgumentTypeError, match="indent"):
            validate_config({"indent": True})

    def test_negative_indent(self):
        """Indent must not be negative."""
        with pytest.raises(argparse.ArgumentTypeError, match="negative"):
            validate_config({"indent": -1})


@pytest.mark.unit
@pytest.mark.cli
class TestConfigDiscovery:
    """Tests for config discovery and priority."""

    def test_found_in_parent_directory(self, tmp_path):
        """Discovery walks up from the start directory."""
        (tmp_path / ".md2delta.toml").write_text("indent = 1\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config_in_parents(nested) == (tmp_path / ".md2delta.toml").resolve()

    def test_pyproject_without_section_is_skipped(self, isolated_cwd):
        """A pyproject.toml without a tool section is not a config file."""
        (isolated_cwd / "pyproject.toml").write_text('[project]\nname = "x"\n')

        assert find_config_in_parents(isolated_cwd) != isolated_cwd / "pyproject.toml"

    def test_dedicated_file_beats_pyproject(self, isolated_cwd):
        """Dedicated config files are checked before pyproject.toml."""
        (isolated_cwd / "pyproject.toml").write_text("[tool.md2delta]\nindent = 3\n")
        (isolated_cwd / ".md2delta.json").write_text('{"indent": 5}')

        assert discover_config_file().name == ".md2delta.json"

    def test_home_directory_fallback(self, isolated_cwd, monkeypatch, tmp_path):
        """The home directory is searched last."""
        home_config = tmp_path / "home" / ".md2delta.yaml"
        home_config.write_text("indent: 0\n")
        monkeypatch.setattr("md2delta.cli.config.find_config_in_parents", lambda start_dir=None: None)

        assert discover_config_file() == home_config

    def test_explicit_path_beats_env_and_discovery(self, isolated_cwd, tmp_path):
        """--config wins over MD2DELTA_CONFIG and discovered files."""
        (isolated_cwd / ".md2delta.toml").write_text("indent = 1\n")
        env_file = tmp_path / "env.toml"
        env_file.write_text("indent = 2\n")
        explicit_file = tmp_path / "explicit.toml"
        explicit_file.write_text("indent = 3\n")

        assert load_config_with_priority(str(explicit_file), str(env_file)) == {"indent": 3}
        assert load_config_with_priority(None, str(env_file)) == {"indent": 2}
        assert load_config_with_priority() == {"indent": 1}

    def test_no_config(self, isolated_cwd, monkeypatch):
        """Without any config file the result is empty."""
        monkeypatch.setattr("md2delta.cli.config.find_config_in_parents", lambda start_dir=None: None)
        assert load_config_with_priority() == {}
