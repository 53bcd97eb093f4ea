import os

import pytest
import yaml
from pathlib import Path
from bulkbridge.config import (
    BulkbridgeConfig,
    ConfigError,
    get_bulkbridge_home,
    load_config,
)


def test_get_bulkbridge_home_default(monkeypatch):
    monkeypatch.delenv("BULKBRIDGE_HOME", raising=False)
    home = get_bulkbridge_home()
    assert home == Path("~/.config/bulkbridge").expanduser()


def test_get_bulkbridge_home_env_var(monkeypatch, tmp_path):
    custom_home = tmp_path / "custom_home"
    monkeypatch.setenv("BULKBRIDGE_HOME", str(custom_home))
    assert get_bulkbridge_home() == custom_home


def test_load_config_missing_file(monkeypatch, tmp_path):
    monkeypatch.setenv("BULKBRIDGE_HOME", str(tmp_path))
    with pytest.raises(FileNotFoundError, match="bulkbridge config.yaml not found"):
        load_config()


def test_load_config_valid(monkeypatch, tmp_path):
    monkeypatch.setenv("BULKBRIDGE_HOME", str(tmp_path))
    config_path = tmp_path / "config.yaml"

    config_data = {
        "sqlite_path": "~/test.db",
        "user": "alice@example.com",
        "log_sheet": "Audit",
        "loaders": {"Campaign": "bulkbridge_loaders.cm:build_campaign_loader"},
    }
    config_path.write_text(yaml.dump(config_data))

    cfg = load_config()
    assert isinstance(cfg, BulkbridgeConfig)
    assert cfg.user == "alice@example.com"
    assert cfg.log_sheet == "Audit"
    assert cfg.store_sheet == "Store"
    assert cfg.loaders == {"Campaign": "bulkbridge_loaders.cm:build_campaign_loader"}
    assert cfg.allowed_loader_modules == ["bulkbridge_loaders"]


def test_load_config_explicit_path(tmp_path):
    config_path = tmp_path / "other.yaml"
    config_path.write_text(yaml.dump({"user": "bob"}))
    assert load_config(config_path).user == "bob"


def test_null_values_fall_back_to_defaults(monkeypatch, tmp_path):
    monkeypatch.setenv("BULKBRIDGE_HOME", str(tmp_path))
    (tmp_path / "config.yaml").write_text(yaml.dump({"user": "bob", "log_sheet": None}))
    assert load_config().log_sheet == "Log"


def test_empty_config_uses_defaults(monkeypatch, tmp_path):
    monkeypatch.setenv("BULKBRIDGE_HOME", str(tmp_path))
    (tmp_path / "config.yaml").write_text("")
    cfg = load_config()
    assert cfg.log_sheet == "Log"
    assert cfg.loaders == {}


def test_unknown_key_rejected(monkeypatch, tmp_path):
    monkeypatch.setenv("BULKBRIDGE_HOME", str(tmp_path))
    (tmp_path / "config.yaml").write_text(yaml.dump({"sqlite": "x"}))
    with pytest.raises(ConfigError, match="Unknown config key"):
        load_config()


def test_invalid_yaml(monkeypatch, tmp_path):
    monkeypatch.setenv("BULKBRIDGE_HOME", str(tmp_path))
    (tmp_path / "config.yaml").write_text("user: [unclosed")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config()


def test_same_log_and_store_sheet_rejected(monkeypatch, tmp_path):
    monkeypatch.setenv("BULKBRIDGE_HOME", str(tmp_path))
    (tmp_path / "config.yaml").write_text(yaml.dump({"log_sheet": "Data", "store_sheet": "Data"}))
    with pytest.raises(ConfigError, match="must differ"):
        load_config()


def test_load_config_with_env_file(monkeypatch, tmp_path):
    monkeypatch.setenv("BULKBRIDGE_HOME", str(tmp_path))
    env_file = tmp_path / ".env.test"
    env_file.write_text("BULKBRIDGE_TEST_VAR=loaded_from_env")
    (tmp_path / "config.yaml").write_text(yaml.dump({"env_file": str(env_file)}))

    monkeypatch.delenv("BULKBRIDGE_TEST_VAR", raising=False)

    load_config()
    assert os.environ.get("BULKBRIDGE_TEST_VAR") == "loaded_from_env"
    monkeypatch.delenv("BULKBRIDGE_TEST_VAR")
