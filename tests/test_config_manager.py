"""Tests for configuration manager."""

import json

import pytest

from shiptivity.config import (
    ConfigManager,
    ConfigValidationError,
    LocalFileConfigProvider,
    Settings,
    create_config_manager,
)
from shiptivity.config.schema import deep_merge

# =============================================================================
# Tests for deep_merge
# =============================================================================


def test_deep_merge_basic():
    """Test basic deep merge behavior."""
    base = {"a": 1, "b": {"c": 2, "d": 3}}
    updates = {"b": {"c": 10, "e": 5}}

    result = deep_merge(base, updates)

    assert result["a"] == 1
    assert result["b"]["c"] == 10
    assert result["b"]["d"] == 3
    assert result["b"]["e"] == 5


def test_deep_merge_none_preserves_value():
    """Test that None in updates preserves base value (skip behavior)."""
    base = {"server_port": 3001, "db_path": "./clients.db"}

    result = deep_merge(base, {"server_port": None})

    assert result["server_port"] == 3001
    assert result["db_path"] == "./clients.db"


def test_deep_merge_does_not_mutate_inputs():
    base = {"a": {"b": 1}}
    updates = {"a": {"b": 2}}

    deep_merge(base, updates)

    assert base == {"a": {"b": 1}}
    assert updates == {"a": {"b": 2}}


# =============================================================================
# Tests for LocalFileConfigProvider
# =============================================================================


@pytest.mark.asyncio
async def test_provider_missing_file_returns_defaults(tmp_path):
    provider = LocalFileConfigProvider(
        tmp_path / "config.json", defaults={"server_port": 3001}
    )

    config = await provider.load()

    assert config == {"server_port": 3001}
    assert not (tmp_path / "config.json").exists()


@pytest.mark.asyncio
async def test_provider_loads_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"server_port": 4000, "db_path": "/tmp/x.db"}))

    config = await LocalFileConfigProvider(path).load()

    assert config["server_port"] == 4000
    assert config["db_path"] == "/tmp/x.db"
    assert config["log_format"] is None


@pytest.mark.asyncio
async def test_provider_invalid_json_uses_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{ not json")

    config = await LocalFileConfigProvider(path, defaults={"server_port": 3001}).load()

    assert config == {"server_port": 3001}


@pytest.mark.asyncio
async def test_provider_invalid_structure_raises(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"server_port": "not-a-port", "log_format": "xml"}))

    with pytest.raises(ConfigValidationError) as exc_info:
        await LocalFileConfigProvider(path).load()

    assert "Expected integer at 'server_port'" in exc_info.value.errors
    assert any(err.startswith("log_format") for err in exc_info.value.errors)


@pytest.mark.asyncio
async def test_provider_rejects_non_object(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]")

    with pytest.raises(ValueError):
        await LocalFileConfigProvider(path).load()


# =============================================================================
# Tests for ConfigManager
# =============================================================================


@pytest.mark.asyncio
async def test_create_config_manager_loads_file_once(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"db_path": "/data/clients.db", "server_port": 8080}))
    manager = create_config_manager(path, defaults={"server_host": "127.0.0.1"})
    assert manager.loaded is False

    await manager.initialize()
    path.write_text(json.dumps({"server_port": 9090}))

    assert manager.loaded is True
    assert manager.get_int("server_port") == 8080
    assert manager.get_str("db_path") == "/data/clients.db"
    assert manager.get_str("server_host") == "127.0.0.1"
    assert not path.with_suffix(".tmp").exists()


@pytest.mark.asyncio
async def test_manager_typed_getter_falls_back_on_mismatch(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"server_host": "0.0.0.0"}))
    manager = ConfigManager(LocalFileConfigProvider(path))
    await manager.initialize()

    assert manager.get_int("server_host", 3001) == 3001
    assert manager.get_bool("log_colors", True) is True


# =============================================================================
# Tests for Settings precedence
# =============================================================================


@pytest.fixture
def clean_env(monkeypatch):
    for key in (
        "SHIPTIVITY_DB_PATH",
        "SERVER_HOST",
        "SERVER_PORT",
        "LOG_FORMAT",
        "LOG_COLORS",
    ):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_settings_defaults(clean_env):
    settings = Settings()

    assert settings.server_port == 3001
    assert settings.server_host == "localhost"
    assert settings.db_path == "./clients.db"


def test_settings_env_overrides_defaults(clean_env):
    clean_env.setenv("SERVER_PORT", "4100")
    clean_env.setenv("LOG_COLORS", "false")

    settings = Settings()

    assert settings.server_port == 4100
    assert settings.log_colors is False


@pytest.mark.asyncio
async def test_settings_precedence(tmp_path, clean_env):
    clean_env.setenv("SERVER_PORT", "4100")
    clean_env.setenv("SERVER_HOST", "10.0.0.1")
    clean_env.setenv("SHIPTIVITY_DB_PATH", "/env/clients.db")
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"server_port": 4200, "db_path": "/file/clients.db"}))
    manager = ConfigManager(LocalFileConfigProvider(path))
    await manager.initialize()

    settings = Settings(manager)
    settings.apply_overrides(db_path="/cli/clients.db", server_port=None)

    assert settings.db_path == "/cli/clients.db"  # command line
    assert settings.server_port == 4200  # config file
    assert settings.server_host == "10.0.0.1"  # environment
    assert settings.log_format == "pretty"  # default


def test_settings_validation_status_reports_bad_port(clean_env):
    settings = Settings()
    settings.apply_overrides(server_port=70000, db_path=" ")

    ok, errors = settings.validation_status()

    assert ok is False
    assert errors == [
        "db_path must not be empty",
        "server_port must be an integer between 1 and 65535, got 70000",
    ]


def test_settings_validation_status_ok(clean_env):
    ok, errors = Settings().validation_status()

    assert ok is True
    assert errors == []
