"""Tests for the typed configuration system."""

import pytest
from pydantic import ValidationError

from hostlog.config import DEFAULT_TEMPLATE, Settings, get_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Ensure each test starts with a fresh Settings instance."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestDefaults:
    def test_loads_without_env_overrides(self):
        s = Settings()
        assert s.logging.level == "INFO"
        assert s.logging.format == "json"
        assert s.host.name == "Host"
        assert s.host.version is None
        assert s.enrich.enabled == ["path", "version", "version_name", "bitness"]
        assert s.enrich.include_bitness is True
        assert s.display.order == "newest_first"
        assert s.display.max_entries == 1000
        assert s.display.template == DEFAULT_TEMPLATE
        assert s.addin.name == "hostlog-sample"


class TestEnvOverrides:
    def test_host_version(self, monkeypatch):
        monkeypatch.setenv("HOSTLOG_HOST__VERSION", "16.0")
        assert Settings().host.version == 16.0

    def test_logging_level_uppercase_normalisation(self, monkeypatch):
        monkeypatch.setenv("HOSTLOG_LOGGING__LEVEL", "debug")
        assert Settings().logging.level == "DEBUG"

    def test_include_bitness(self, monkeypatch):
        monkeypatch.setenv("HOSTLOG_ENRICH__INCLUDE_BITNESS", "false")
        assert Settings().enrich.include_bitness is False

    def test_enabled_list_from_json(self, monkeypatch):
        monkeypatch.setenv("HOSTLOG_ENRICH__ENABLED", '["bitness"]')
        assert Settings().enrich.enabled == ["bitness"]

    def test_host_path(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOSTLOG_HOST__PATH", str(tmp_path))
        assert Settings().host.path == tmp_path


class TestConfigFile:
    def test_explicit_config_file(self, monkeypatch, tmp_path):
        cfg = tmp_path / "settings.toml"
        cfg.write_text('[host]\nname = "Excel"\nversion = 15.0\n')
        monkeypatch.setenv("HOSTLOG_CONFIG_FILE", str(cfg))
        s = Settings()
        assert s.host.name == "Excel"
        assert s.host.version == 15.0

    def test_env_beats_config_file(self, monkeypatch, tmp_path):
        cfg = tmp_path / "settings.toml"
        cfg.write_text("[host]\nversion = 15.0\n")
        monkeypatch.setenv("HOSTLOG_CONFIG_FILE", str(cfg))
        monkeypatch.setenv("HOSTLOG_HOST__VERSION", "17.0")
        assert Settings().host.version == 17.0

    def test_missing_config_file_raises(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOSTLOG_CONFIG_FILE", str(tmp_path / "absent.toml"))
        with pytest.raises(FileNotFoundError, match="HOSTLOG_CONFIG_FILE"):
            Settings()


class TestValidation:
    def test_invalid_log_level_raises(self):
        with pytest.raises(ValidationError, match="level must be one of"):
            Settings(logging={"level": "NONSENSE"})

    def test_invalid_log_format_raises(self):
        with pytest.raises(ValidationError):
            Settings(logging={"format": "xml"})

    def test_unknown_enricher_name_raises(self):
        with pytest.raises(ValidationError):
            Settings(enrich={"enabled": ["colour"]})

    def test_duplicate_enricher_names_raise(self):
        with pytest.raises(ValidationError, match="unique"):
            Settings(enrich={"enabled": ["path", "path"]})

    def test_invalid_forced_bitness_raises(self):
        with pytest.raises(ValidationError):
            Settings(host={"force_bitness": "16-bit"})

    @pytest.mark.parametrize("version", ["nan", "inf", "-inf", 0, -16.0])
    def test_non_finite_or_non_positive_host_version_raises(self, version):
        with pytest.raises(ValidationError):
            Settings(host={"version": version})

    def test_non_positive_display_size_raises(self):
        with pytest.raises(ValidationError):
            Settings(display={"max_entries": 0})


class TestCaching:
    def test_get_settings_returns_same_instance(self):
        s1 = get_settings()
        s2 = get_settings()
        assert s1 is s2

    def test_cache_clear_returns_new_instance(self):
        s1 = get_settings()
        get_settings.cache_clear()
        s2 = get_settings()
        # Different instances after cache clear.
        assert s1 is not s2
