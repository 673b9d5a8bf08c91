"""
Tests for attaching a Config to a contextvars.Context.
"""

import contextvars

import pytest

from dotenvconfig.config import context as config_context
from dotenvconfig.config.config_loader import Config
from dotenvconfig.config.context import current_config, from_context, push_config, reset_config, to_context
from dotenvconfig.config.exceptions import ContextError
from dotenvconfig.config.stores import MemoryEnvironment


@pytest.fixture
def config():
    return Config(values={"TEST_KEY": "123"}, env=MemoryEnvironment(), file_name="default.env")


def test_round_trip_through_context(config):
    ctx = to_context(contextvars.copy_context(), config)
    assert from_context(ctx) is config


def test_to_context_leaves_original_untouched(config):
    original = contextvars.copy_context()
    to_context(original, config)

    with pytest.raises(ContextError, match="no value found"):
        from_context(original)


def test_custom_context_key(config):
    ctx = to_context(contextvars.copy_context(), config, key="app_config")

    assert from_context(ctx, key="app_config") is config
    with pytest.raises(ContextError):
        from_context(ctx)


def test_nil_context():
    with pytest.raises(ContextError, match="nil context"):
        to_context(None, Config(values={}, env=MemoryEnvironment()))
    with pytest.raises(ContextError, match="nil context"):
        from_context(None)


def test_wrong_type_in_context():
    ctx = contextvars.copy_context()
    ctx.run(config_context._var("wrong_type").set, {"TEST_KEY": "123"})

    with pytest.raises(ContextError, match="not of type Config"):
        from_context(ctx, key="wrong_type")


def test_unknown_key_is_not_registered():
    with pytest.raises(ContextError, match="no value found in context for key: never_stored"):
        from_context(contextvars.copy_context(), key="never_stored")
    with pytest.raises(ContextError):
        current_config(key="never_stored")

    assert "never_stored" not in config_context._VARS


def test_push_and_reset_running_context(config):
    token = push_config(config, key="pushed")
    try:
        assert current_config(key="pushed") is config
    finally:
        reset_config(token)

    with pytest.raises(ContextError):
        current_config(key="pushed")


def test_loader_context_key_option():
    from dotenvconfig.config.config_loader import ConfigLoader, LoaderOptions
    from dotenvconfig.config.stores import MemoryFileStore

    loader = ConfigLoader(
        MemoryFileStore({"default.env": "A=1"}),
        LoaderOptions(context_key="request_config"),
        env=MemoryEnvironment(),
    )
    loaded = loader.load()
    ctx = to_context(contextvars.copy_context(), loaded)

    assert from_context(ctx, key="request_config").get("A") == "1"
    with pytest.raises(ContextError):
        from_context(ctx)
