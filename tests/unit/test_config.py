"""Unit tests for config.py"""

import pytest

from sitepub.config import load_config


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Run from an empty directory with no SITEPUB_* variables set."""
    monkeypatch.chdir(tmp_path)
    for name in ("DB_URL", "OUTPUT_DIR", "STRICT_ALIASES", "EVENT_LIMIT", "USE_CMS_ALIASES", "LOG_LEVEL"):
        monkeypatch.delenv(f"SITEPUB_{name}", raising=False)


def test_load_config_defaults():
    settings = load_config()
    assert settings.db_url == "sqlite:///sitepub.db"
    assert settings.output_dir == "public"
    assert settings.alias_file == "aliases.yaml"
    assert settings.strict_aliases is False


def test_load_config_reads_config_yaml(tmp_path):
    (tmp_path / "config.yaml").write_text("output_dir: site\nevent_limit: 6\n")
    settings = load_config()
    assert settings.output_dir == "site"
    assert settings.event_limit == 6


def test_load_config_env_overrides_config_yaml(tmp_path, monkeypatch):
    (tmp_path / "config.yaml").write_text("db_url: 'sqlite:///project.db'\n")
    monkeypatch.setenv("SITEPUB_DB_URL", "sqlite:///override.db")
    assert load_config().db_url == "sqlite:///override.db"


def test_load_config_env_bool(monkeypatch):
    """SITEPUB_STRICT_ALIASES is coerced to bool."""
    monkeypatch.setenv("SITEPUB_STRICT_ALIASES", "true")
    assert load_config().strict_aliases is True


def test_load_config_cli_overrides_env(monkeypatch):
    monkeypatch.setenv("SITEPUB_OUTPUT_DIR", "env-out")
    settings = load_config(overrides={"output_dir": "cli-out", "strict_aliases": None})
    assert settings.output_dir == "cli-out"
    assert settings.strict_aliases is False


def test_load_config_invalid_yaml(tmp_path):
    (tmp_path / "config.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid config.yaml"):
        load_config()


def test_load_config_rejects_bad_values(monkeypatch):
    monkeypatch.setenv("SITEPUB_LOG_LEVEL", "chatty")
    with pytest.raises(ValueError):
        load_config()
