"""Unit tests for ConfigService."""

import os

import pytest

from confeti.services.config_svc import ConfigService


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Run without host config files or CONFETI_* variables."""
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("CONFETI_"):
            monkeypatch.delenv(key)


class TestConfigService:
    """Test configuration composition."""

    @pytest.mark.unit
    def test_defaults(self):
        service = ConfigService()

        assert service.get("arango.hosts") == "http://localhost:8529"
        assert service.make_stats_config().unknown_language_label is None
        assert service.make_api_config().port == 8080
        assert service.make_stats_config().group_buffer == 64

    @pytest.mark.unit
    def test_dotted_get_default(self):
        assert ConfigService().get("stats.missing.deeper", 7) == 7

    @pytest.mark.unit
    def test_yaml_from_env_path(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.yaml"
        path.write_text("arango:\n  db_name: talks\n  batch_size: 50\n", encoding="utf-8")
        monkeypatch.setenv("CONFETI_CONFIG_PATH", str(path))

        cfg = ConfigService().make_arango_config()

        assert cfg.db_name == "talks"
        assert cfg.batch_size == 50
        assert cfg.username == "confeti"

    @pytest.mark.unit
    def test_repo_local_yaml(self, tmp_path):
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "config.yaml").write_text("api:\n  port: 9100\n", encoding="utf-8")

        assert ConfigService().make_api_config().port == 9100

    @pytest.mark.unit
    def test_env_overrides_win(self, monkeypatch):
        monkeypatch.setenv("CONFETI_API_PORT", "9000")
        monkeypatch.setenv("CONFETI_STATS_UNKNOWN_LANGUAGE_LABEL", "unknown")

        service = ConfigService(overrides={"api": {"port": 1234}})

        assert service.make_api_config().port == 9000
        assert service.make_stats_config().unknown_language_label == "unknown"

    @pytest.mark.unit
    def test_group_buffer_from_env(self, monkeypatch):
        monkeypatch.setenv("CONFETI_STATS_GROUP_BUFFER", "16")

        assert ConfigService().make_stats_config().group_buffer == 16

    @pytest.mark.unit
    def test_non_positive_group_buffer_is_rejected(self):
        service = ConfigService(overrides={"stats": {"group_buffer": 0}})

        with pytest.raises(ValueError, match="group_buffer must be positive"):
            service.make_stats_config()

    @pytest.mark.unit
    def test_unknown_env_section_is_ignored(self, monkeypatch):
        monkeypatch.setenv("CONFETI_NOPE_VALUE", "1")

        assert "nope" not in ConfigService().get_config()

    @pytest.mark.unit
    def test_non_mapping_yaml_is_rejected(self, tmp_path, monkeypatch):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        monkeypatch.setenv("CONFETI_CONFIG_PATH", str(path))

        with pytest.raises(ValueError, match="must contain a mapping"):
            ConfigService().get_config()

    @pytest.mark.unit
    def test_reload_picks_up_changes(self, monkeypatch):
        service = ConfigService()
        assert service.make_api_config().log_level == "INFO"

        monkeypatch.setenv("CONFETI_API_LOG_LEVEL", "DEBUG")

        assert service.make_api_config().log_level == "INFO"
        service.reload()
        assert service.make_api_config().log_level == "DEBUG"
