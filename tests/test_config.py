"""
Test: configuration loading from defaults, YAML and environment
"""

import pytest
import yaml

from callshape import (
    CallShapeConfig,
    ConfigurationError,
    LogLevel,
    LoggingConfig,
    ShapeConfig,
    get_config,
    load_config,
    set_config,
)


class TestDefaults:

    def test_defaults(self):
        config = CallShapeConfig()
        assert config.logging.level is LogLevel.WARNING
        assert config.shape.validate_dimensions is True
        assert config.device.default_device == "cpu"
        assert config.debug_mode is False

    def test_global_instance(self):
        assert get_config() is get_config()
        custom = CallShapeConfig(debug_mode=True)
        set_config(custom)
        assert get_config() is custom


class TestYaml:

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "callshape.yaml"
        path.write_text(yaml.safe_dump({
            'logging': {'level': 'debug'},
            'shape': {'validate_dimensions': False},
            'device': {'default_device': 'meta'},
            'debug_mode': True,
        }))
        config = load_config(str(path))
        assert config.logging.level is LogLevel.DEBUG
        assert config.shape.validate_dimensions is False
        assert config.device.default_device == "meta"
        assert config.debug_mode is True
        assert config.config_file == str(path)

    def test_save_round_trip(self, tmp_path):
        path = tmp_path / "saved.yaml"
        config = CallShapeConfig(logging=LoggingConfig(level=LogLevel.ERROR))
        config.save(str(path))
        loaded = load_config(str(path))
        assert loaded.logging.level is LogLevel.ERROR
        assert loaded.to_dict() == config.to_dict()

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        config = load_config(str(path))
        assert config.to_dict() == CallShapeConfig().to_dict()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config(str(tmp_path / "missing.yaml"))

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.safe_dump({'shape': {'strict': True}}))
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(str(path))
        assert exc_info.value.context['keys'] == ['strict']

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigurationError):
            load_config(str(path))

    @pytest.mark.parametrize("raw,expected", [
        ("'no'", False), ("'false'", False), ("'off'", False),
        ("'yes'", True), ("'1'", True), ("false", False), ("true", True),
    ])
    def test_boolean_strings(self, tmp_path, raw, expected):
        path = tmp_path / "flags.yaml"
        path.write_text(
            f"shape:\n  validate_dimensions: {raw}\ndebug_mode: {raw}\n"
        )
        config = load_config(str(path))
        assert config.shape.validate_dimensions is expected
        assert config.debug_mode is expected

    def test_invalid_boolean_flag(self, tmp_path):
        path = tmp_path / "flags.yaml"
        path.write_text("shape:\n  validate_dimensions: maybe\n")
        with pytest.raises(ConfigurationError):
            load_config(str(path))

    def test_invalid_debug_mode(self, tmp_path):
        path = tmp_path / "flags.yaml"
        path.write_text("debug_mode: sometimes\n")
        with pytest.raises(ConfigurationError):
            load_config(str(path))

    def test_flag_parsed_on_direct_construction(self):
        assert ShapeConfig(validate_dimensions='no').validate_dimensions is False
        with pytest.raises(ConfigurationError):
            ShapeConfig(validate_dimensions='maybe')

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("logging: [unclosed\n")
        with pytest.raises(ConfigurationError):
            load_config(str(path))


class TestEnvironment:

    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        path = tmp_path / "callshape.yaml"
        path.write_text(yaml.safe_dump({'logging': {'level': 'debug'}}))
        monkeypatch.setenv("CALLSHAPE_LOG_LEVEL", "error")
        config = load_config(str(path))
        assert config.logging.level is LogLevel.ERROR

    def test_unset_env_keeps_yaml(self, tmp_path):
        path = tmp_path / "callshape.yaml"
        path.write_text(yaml.safe_dump({'shape': {'validate_dimensions': False}}))
        config = load_config(str(path))
        assert config.shape.validate_dimensions is False

    @pytest.mark.parametrize("raw,expected", [
        ("true", True), ("1", True), ("YES", True),
        ("false", False), ("0", False), ("off", False),
    ])
    def test_boolean_parsing(self, monkeypatch, raw, expected):
        monkeypatch.setenv("CALLSHAPE_VALIDATE_DIMENSIONS", raw)
        assert load_config().shape.validate_dimensions is expected

    def test_invalid_boolean(self, monkeypatch):
        monkeypatch.setenv("CALLSHAPE_DEBUG", "maybe")
        with pytest.raises(ConfigurationError):
            load_config()

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("CALLSHAPE_LOG_LEVEL", "verbose")
        with pytest.raises(ConfigurationError):
            load_config()

    def test_log_level_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("CALLSHAPE_LOG_LEVEL", "INFO")
        assert load_config().logging.level is LogLevel.INFO
