"""Tests for configuration loading."""

import pytest

from gato.config import (
    DEFAULT_RETRIES,
    ConfigError,
    GatoConfig,
    MessageLimits,
    RunMode,
    config_from_dict,
    config_from_env,
    get_config_file_path,
    load_config,
    load_config_file,
)
from gato.git.diff import DEFAULT_DIFF_EXCLUDE_PATTERNS, DEFAULT_MAX_PATCH_LINES


class TestDefaults:
    """Tests for built-in defaults."""

    def test_defaults(self):
        config = GatoConfig()

        assert config.mode is RunMode.PREVIEW
        assert config.confirm is True
        assert config.max_patch_lines == DEFAULT_MAX_PATCH_LINES == 2500
        assert config.retries == DEFAULT_RETRIES == 2
        assert config.retry_delay == 1.0
        assert config.model_hint == ""
        assert config.model_command == "qwen"
        assert config.limits == MessageLimits(72, 72, 10)
        assert config.exclude_patterns == tuple(DEFAULT_DIFF_EXCLUDE_PATTERNS)

    def test_config_is_immutable(self):
        config = GatoConfig()
        with pytest.raises(AttributeError):
            config.retries = 5

    def test_config_file_path(self):
        path = get_config_file_path()
        assert path.name == "config.yaml"
        assert path.parent.name == ".gato"


class TestConfigFromEnv:
    """Tests for environment variables."""

    def test_empty_environment(self):
        assert config_from_env({}) == GatoConfig()

    def test_all_variables(self):
        config = config_from_env({
            "GITGPT_MAX_PATCH_LINES": "400",
            "GITGPT_RETRIES": "0",
            "GITGPT_MODEL": " qwen3-coder ",
        })

        assert config.max_patch_lines == 400
        assert config.retries == 0
        assert config.model_hint == "qwen3-coder"

    def test_blank_values_use_defaults(self):
        config = config_from_env({"GITGPT_MAX_PATCH_LINES": "", "GITGPT_RETRIES": "  "})

        assert config.max_patch_lines == 2500
        assert config.retries == 2

    @pytest.mark.parametrize("value", ["abc", "1.5", "-1"])
    def test_invalid_retries(self, value):
        with pytest.raises(ConfigError) as exc_info:
            config_from_env({"GITGPT_RETRIES": value})
        assert "GITGPT_RETRIES" in str(exc_info.value)

    @pytest.mark.parametrize("value", ["zero", "0"])
    def test_invalid_max_patch_lines(self, value):
        with pytest.raises(ConfigError) as exc_info:
            config_from_env({"GITGPT_MAX_PATCH_LINES": value})
        assert "GITGPT_MAX_PATCH_LINES" in str(exc_info.value)

    def test_base_is_kept(self):
        base = GatoConfig(retries=5, model_hint="from-file")
        config = config_from_env({"GITGPT_MAX_PATCH_LINES": "10"}, base=base)

        assert config.retries == 5
        assert config.model_hint == "from-file"
        assert config.max_patch_lines == 10


class TestConfigFile:
    """Tests for config.yaml loading."""

    def test_missing_file(self, temp_dir):
        assert load_config_file(temp_dir / "config.yaml") == {}

    def test_empty_file(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("")
        assert load_config_file(path) == {}

    def test_reads_mapping(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("retries: 4\nmodel_hint: qwen3\n")
        assert load_config_file(path) == {"retries": 4, "model_hint": "qwen3"}

    def test_invalid_yaml(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("retries: [1, 2\n")
        with pytest.raises(ConfigError):
            load_config_file(path)

    def test_not_a_mapping(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError) as exc_info:
            load_config_file(path)
        assert "must contain a mapping" in str(exc_info.value)


class TestConfigFromDict:
    """Tests for applying file values."""

    def test_all_keys(self):
        config = config_from_dict({
            "max_patch_lines": 100,
            "retries": 1,
            "retry_delay": 0.5,
            "model_hint": "qwen3",
            "model_command": "qwen-dev",
            "subject_max": 50,
            "line_max": 80,
            "max_bullets": 5,
        })

        assert config.max_patch_lines == 100
        assert config.retries == 1
        assert config.retry_delay == 0.5
        assert config.model_hint == "qwen3"
        assert config.model_command == "qwen-dev"
        assert config.limits == MessageLimits(subject_max=50, line_max=80, max_bullets=5)

    def test_ignore_patterns_are_merged(self):
        config = config_from_dict({"ignore": ["*.snap", "*.lock", "dist/*"]})

        assert config.exclude_patterns[:len(DEFAULT_DIFF_EXCLUDE_PATTERNS)] == tuple(DEFAULT_DIFF_EXCLUDE_PATTERNS)
        assert config.exclude_patterns[-2:] == ("*.snap", "dist/*")
        assert config.exclude_patterns.count("*.lock") == 1

    def test_ignore_must_be_list(self):
        with pytest.raises(ConfigError):
            config_from_dict({"ignore": "*.snap"})

    @pytest.mark.parametrize("data", [
        {"retries": "many"},
        {"retries": True},
        {"max_patch_lines": 0},
        {"retry_delay": -1},
        {"retry_delay": "soon"},
        {"line_max": 2},
        {"model_command": ""},
    ])
    def test_invalid_values(self, data):
        with pytest.raises(ConfigError):
            config_from_dict(data)


class TestLoadConfig:
    """Tests for the combined loader."""

    def test_env_overrides_file(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("retries: 4\nmax_patch_lines: 100\n")

        config = load_config(config_file=path, environ={"GITGPT_RETRIES": "1"})

        assert config.retries == 1
        assert config.max_patch_lines == 100

    def test_flags_applied(self, temp_dir):
        config = load_config(
            mode=RunMode.PUSH,
            confirm=False,
            analyze_only=True,
            config_file=temp_dir / "missing.yaml",
            environ={},
        )

        assert config.mode is RunMode.PUSH
        assert config.confirm is False
        assert config.analyze_only is True

    def test_dotenv_loaded_only_for_process_environment(self, mocker, temp_dir):
        mock_dotenv = mocker.patch("gato.config.load_dotenv")

        load_config(config_file=temp_dir / "missing.yaml", environ={})
        mock_dotenv.assert_not_called()

        mocker.patch.dict("os.environ", {}, clear=True)
        load_config(config_file=temp_dir / "missing.yaml")
        mock_dotenv.assert_called_once()
