"""
Unit tests for configuration validation and the configuration manager.
"""

import tomllib

import pytest

from fpmmonitor.config import (
    clear_config_cache,
    get_config,
    get_config_info,
    is_config_loaded,
    merge_overrides,
    set_config_overrides,
    set_config_path,
    validate_agent_config,
)
from fpmmonitor.config import manager
from fpmmonitor.models.config import AgentConfig
from fpmmonitor.validation import ValidationError


@pytest.mark.unit
class TestValidateAgentConfig:
    """Test cases for building AgentConfig from TOML data."""

    def test_empty_document_gives_defaults(self):
        config = validate_agent_config({})

        assert config == AgentConfig()
        assert config.interval_seconds == 10
        assert config.namespace == "PhpFpm"
        assert config.metric_name == "ListenQueue"
        assert config.marker == "php-fpm"
        assert config.socket_path == "/var/run/php-fpm/www.socket"
        assert config.dry_run is False
        assert config.region is None

    def test_full_document(self, sample_config_data):
        config = validate_agent_config(sample_config_data)

        assert config.interval_seconds == 5
        assert config.dry_run is True
        assert config.namespace == "TestFpm"
        assert config.dimensions == ["env=test", "role=web"]
        assert config.region == "eu-west-1"
        assert config.command_timeout == 2.0
        assert config.max_workers == 4
        assert config.sudo_command == ""

    @pytest.mark.parametrize("interval", [0, -5, 3601, "soon", True])
    def test_invalid_interval(self, interval):
        with pytest.raises(ValidationError) as exc_info:
            validate_agent_config({"agent": {"interval_seconds": interval}})
        assert exc_info.value.field_name == "agent.interval_seconds"

    def test_dry_run_must_be_boolean(self):
        with pytest.raises(ValidationError, match="agent.dry_run"):
            validate_agent_config({"agent": {"dry_run": "yes"}})

    @pytest.mark.parametrize("section,key", [
        ("metrics", "namespace"),
        ("metrics", "metric_name"),
        ("sampling", "marker"),
        ("sampling", "socket_path"),
        ("sampling", "docker_binary"),
    ])
    def test_blank_strings_rejected(self, section, key):
        with pytest.raises(ValidationError, match=f"{section}.{key}"):
            validate_agent_config({section: {key: "   "}})

    def test_single_dimension_string_is_accepted(self):
        config = validate_agent_config({"metrics": {"dimensions": "env=prod"}})
        assert config.dimensions == ["env=prod"]

    def test_malformed_dimension_is_not_a_config_error(self):
        config = validate_agent_config({"metrics": {"dimensions": ["malformed"]}})
        assert config.dimensions == ["malformed"]

    def test_dimensions_must_be_strings(self):
        with pytest.raises(ValidationError):
            validate_agent_config({"metrics": {"dimensions": ["env=prod", 3]}})

    @pytest.mark.parametrize("timeout", [0, 0.05, 301, "fast"])
    def test_invalid_command_timeout(self, timeout):
        with pytest.raises(ValidationError):
            validate_agent_config({"sampling": {"command_timeout": timeout}})

    @pytest.mark.parametrize("workers", [0, 257])
    def test_invalid_max_workers(self, workers):
        with pytest.raises(ValidationError):
            validate_agent_config({"sampling": {"max_workers": workers}})

    def test_sudo_command_must_be_string(self):
        with pytest.raises(ValidationError, match="sudo_command"):
            validate_agent_config({"sampling": {"sudo_command": ["sudo"]}})

    def test_timeout_not_shorter_than_interval_warns(self, caplog):
        with caplog.at_level("WARNING"):
            validate_agent_config({
                "agent": {"interval_seconds": 5},
                "sampling": {"command_timeout": 5.0},
            })
        assert "not shorter than" in caplog.text


@pytest.mark.unit
class TestMergeOverrides:

    def test_overrides_replace_keys_per_section(self):
        data = {"agent": {"interval_seconds": 10, "dry_run": False}}

        merged = merge_overrides(data, {"agent": {"interval_seconds": 30}, "metrics": {"region": "x"}})

        assert merged == {"agent": {"interval_seconds": 30, "dry_run": False}, "metrics": {"region": "x"}}
        assert data["agent"]["interval_seconds"] == 10

    def test_empty_sections_are_skipped(self):
        assert merge_overrides({}, {"agent": {}}) == {}


@pytest.mark.unit
class TestConfigManager:
    """Test cases for the configuration singleton."""

    def test_loads_explicit_file(self, config_file):
        set_config_path(config_file)

        config = get_config()

        assert config.namespace == "TestFpm"
        assert is_config_loaded()
        assert get_config() is config

    def test_missing_explicit_file_is_an_error(self, tmp_path):
        set_config_path(tmp_path / "absent.toml")

        with pytest.raises(FileNotFoundError):
            get_config()

    def test_missing_default_file_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.setattr(manager, "_CONFIG_FILE_PATH", tmp_path / "absent.toml")

        assert get_config() == AgentConfig()

    def test_malformed_toml(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[agent\ninterval_seconds = ")
        set_config_path(path)

        with pytest.raises(tomllib.TOMLDecodeError):
            get_config()

    def test_invalid_value_in_file(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[agent]\ninterval_seconds = 0\n")
        set_config_path(path)

        with pytest.raises(ValidationError):
            get_config()

    def test_overrides_win_over_file(self, config_file):
        set_config_path(config_file)
        set_config_overrides({
            "agent": {"interval_seconds": 60, "dry_run": None},
            "metrics": {"namespace": "Override", "region": None},
        })

        config = get_config()

        assert config.interval_seconds == 60
        assert config.dry_run is True
        assert config.namespace == "Override"
        assert config.region == "eu-west-1"

    def test_setting_overrides_clears_cache(self, config_file):
        set_config_path(config_file)
        get_config()

        set_config_overrides({"agent": {"interval_seconds": 42}})

        assert not is_config_loaded()
        assert get_config().interval_seconds == 42

    def test_config_info(self, config_file):
        set_config_path(config_file)
        set_config_overrides({"metrics": {"namespace": "X"}})

        info = get_config_info()

        assert info["config_path"] == str(config_file)
        assert info["config_path_explicit"] is True
        assert info["override_sections"] == ["metrics"]
        assert info["config_loaded"] is False

    def test_clear_config_cache_reloads_file(self, config_file):
        set_config_path(config_file)
        first = get_config()

        clear_config_cache()

        assert not is_config_loaded()
        assert get_config() is not first
