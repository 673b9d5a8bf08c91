"""
Tests for the map-returning ConfigLoader and Config accessors.
"""

from pathlib import Path

import pytest

from dotenvconfig.config.config_loader import Config, ConfigLoader, LoaderOptions, load_config
from dotenvconfig.config.exceptions import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigReadError,
    ConversionError,
    FatalConfigError,
    MissingKeyError,
    ParseError,
    StoreUnavailableError,
)
from dotenvconfig.config.stores import DirectoryFileStore, MemoryEnvironment, MemoryFileStore, OsEnvironment

CONFIG_DIR = Path(__file__).resolve().parent / "testconfig"
TEST_KEY = "TEST_KEY"
BAD_INT_KEY = "BAD_KEY"


def make_loader(fallback="", env=None, **options):
    return ConfigLoader(
        DirectoryFileStore(CONFIG_DIR),
        LoaderOptions(fallback=fallback, **options),
        env=env if env is not None else MemoryEnvironment(),
    )


def test_load_default_environment():
    config = make_loader().load()

    assert config.file_name == "default.env"
    assert config.profile == "default"
    assert dict(config.values) == {"TEST_KEY": "123", "TEST_KEY2": "456"}


def test_load_custom_environment():
    config = make_loader("custom").load()

    assert config.file_name == "custom.env"
    assert dict(config.values) == {TEST_KEY: "789"}


def test_with_environment_returns_new_loader():
    loader = make_loader()
    custom = loader.with_environment("custom")

    assert loader.options.fallback == ""
    assert custom.load().get(TEST_KEY) == "789"


def test_selector_variable_beats_fallback():
    env = MemoryEnvironment({"APP_ENV": "custom"})
    config = make_loader("other", env=env, selector_key="APP_ENV").load()

    assert config.file_name == "custom.env"


def test_load_without_file_store():
    loader = ConfigLoader(None, env=MemoryEnvironment())
    with pytest.raises(StoreUnavailableError):
        loader.load()


def test_load_missing_file(tmp_path):
    loader = ConfigLoader(DirectoryFileStore(tmp_path), env=MemoryEnvironment())
    with pytest.raises(ConfigFileNotFoundError) as exc_info:
        loader.load()

    assert exc_info.value.file_name == "default.env"
    assert "default.env" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, FileNotFoundError)


def test_load_unreadable_file(tmp_path):
    (tmp_path / "default.env").mkdir()
    loader = ConfigLoader(DirectoryFileStore(tmp_path), env=MemoryEnvironment())

    with pytest.raises(ConfigReadError):
        loader.load()


def test_load_invalid_file():
    with pytest.raises(ParseError) as exc_info:
        make_loader("invalid").load()

    assert exc_info.value.file_name == "invalid.env"
    assert "invalid.env" in str(exc_info.value)
    assert "TEST_KEY,123" in str(exc_info.value)


def test_load_is_idempotent():
    loader = make_loader()
    first, second = loader.load(), loader.load()

    assert first == second
    assert first.as_dict() == second.as_dict()


def test_loaded_values_are_read_only():
    config = make_loader().load()
    with pytest.raises(TypeError):
        config.values["NEW"] = "x"


def test_worked_example_from_memory_store():
    store = MemoryFileStore({"default.env": "TEST_KEY=123\n\n# comment\nTEST_KEY2=456\n"})
    config = ConfigLoader(store, env=MemoryEnvironment()).load()

    assert dict(config.values) == {"TEST_KEY": "123", "TEST_KEY2": "456"}
    assert config.get_as_int(TEST_KEY) == 123
    with pytest.raises(MissingKeyError):
        config.get_as_int("MISSING")


# ----------------------------------------------------------------------
# Accessors

def test_get_key_from_config():
    config = Config(values={TEST_KEY: "123"}, env=MemoryEnvironment())
    assert config.get(TEST_KEY) == "123"


def test_get_key_uses_environment_override(monkeypatch):
    monkeypatch.setenv(TEST_KEY, "NEW_VALUE")
    config = Config(values={TEST_KEY: "123"}, env=OsEnvironment())

    assert config.get(TEST_KEY) == "NEW_VALUE"
    assert config.as_dict() == {TEST_KEY: "NEW_VALUE"}


def test_empty_environment_value_falls_back_to_file():
    config = Config(values={TEST_KEY: "123"}, env=MemoryEnvironment({TEST_KEY: ""}))
    assert config.get(TEST_KEY) == "123"


def test_environment_only_key():
    config = Config(values={}, env=MemoryEnvironment({"ONLY_ENV": "x"}))
    assert config.get("ONLY_ENV") == "x"
    assert "ONLY_ENV" in config


def test_get_missing_key():
    config = Config(values={TEST_KEY: "123"}, env=MemoryEnvironment())

    with pytest.raises(MissingKeyError) as exc_info:
        config.get("MISSING_KEY")

    assert str(exc_info.value) == "missing value in config: MISSING_KEY"
    assert isinstance(exc_info.value, KeyError)
    assert "MISSING_KEY" not in config


def test_get_key_as_int():
    config = Config(values={TEST_KEY: "123", BAD_INT_KEY: "ABC"}, env=MemoryEnvironment())

    assert config.get_as_int(TEST_KEY) == 123
    with pytest.raises(MissingKeyError):
        config.get_as_int("MISSING_KEY")
    with pytest.raises(ConversionError) as exc_info:
        config.get_as_int(BAD_INT_KEY)
    assert exc_info.value.value == "ABC"


def test_get_as_int_rejects_non_ascii_digit_forms():
    config = Config(values={"UNDERSCORE": "1_000", "SPACED": " 42", "ARABIC": "\u0661\u0662"}, env=MemoryEnvironment())

    for key in ("UNDERSCORE", "SPACED", "ARABIC"):
        with pytest.raises(ConversionError):
            config.get_as_int(key)


def test_get_as_int_rejects_padded_environment_value():
    config = Config(values={TEST_KEY: "123"}, env=MemoryEnvironment({TEST_KEY: " 42\n"}))

    with pytest.raises(ConversionError) as exc_info:
        config.get_as_int(TEST_KEY)
    assert exc_info.value.value == " 42\n"


def test_get_as_int_uses_environment_override():
    config = Config(values={TEST_KEY: "123"}, env=MemoryEnvironment({TEST_KEY: "-7"}))
    assert config.get_as_int(TEST_KEY) == -7


def test_must_get_aborts():
    config = Config(values={TEST_KEY: "123", BAD_INT_KEY: "ABC"}, env=MemoryEnvironment())

    assert config.must_get(TEST_KEY) == "123"
    assert config.must_get_as_int(TEST_KEY) == 123

    with pytest.raises(FatalConfigError) as exc_info:
        config.must_get("MISSING_KEY")
    assert isinstance(exc_info.value.cause, MissingKeyError)

    with pytest.raises(SystemExit):
        config.must_get_as_int(BAD_INT_KEY)


def test_must_abort_is_not_caught_by_exception_handlers():
    config = Config(values={}, env=MemoryEnvironment())

    with pytest.raises(FatalConfigError):
        try:
            config.must_get("MISSING_KEY")
        except Exception:
            pytest.fail("must_get should not raise an Exception subclass")


def test_must_option_applies_to_plain_accessors():
    config = make_loader(must=True).load()

    assert config.get(TEST_KEY) == "123"
    with pytest.raises(FatalConfigError):
        config.get("MISSING_KEY")
    with pytest.raises(FatalConfigError):
        config.get_as_int("MISSING_KEY")


def test_errors_share_base_class():
    for error in (StoreUnavailableError(), MissingKeyError("K"), ConversionError("K", "v")):
        assert isinstance(error, ConfigError)


# ----------------------------------------------------------------------
# Options

def test_options_from_mapping():
    options = LoaderOptions.from_mapping({"selector_key": "APP_ENV", "fallback": "custom", "must": True})
    assert options == LoaderOptions(selector_key="APP_ENV", fallback="custom", must=True)


def test_options_reject_unknown_keys():
    with pytest.raises(ValueError, match="unknown_option"):
        LoaderOptions.from_mapping({"unknown_option": 1})


def test_options_reject_bad_log_format():
    with pytest.raises(ValueError):
        LoaderOptions(log_format="xml")


def test_load_config_helper():
    config = load_config(CONFIG_DIR, "custom", env=MemoryEnvironment())
    assert config.get(TEST_KEY) == "789"


def test_logging_enabled_loader_reports_file(caplog):
    import logging

    loader = make_loader(logging_enabled=True)
    with caplog.at_level(logging.INFO, logger=loader.logger.name):
        loader.load()

    assert "loading config from: default.env" in caplog.text
