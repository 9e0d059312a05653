"""
Tests for core.config.load_config.
"""

import pytest

from core.config import DEFAULT_TIMEOUT_SECONDS, load_config
from core.errors import ConfigurationError

FULL_ENV = {
    "GRAYLOG_BASE_URL": "https://graylog.example.com",
    "GRAYLOG_USERNAME": "admin",
    "GRAYLOG_PASSWORD": "secret",
}


class TestLoadConfig:
    def test_appends_trailing_slash(self):
        config = load_config(FULL_ENV)
        assert config.base_url == "https://graylog.example.com/"
        assert config.username == "admin"
        assert config.password == "secret"

    def test_keeps_existing_trailing_slash(self):
        config = load_config({**FULL_ENV, "GRAYLOG_BASE_URL": "https://graylog.example.com/graylog/"})
        assert config.base_url == "https://graylog.example.com/graylog/"

    def test_defaults_for_optional_settings(self):
        config = load_config(FULL_ENV)
        assert config.timeout == DEFAULT_TIMEOUT_SECONDS
        assert config.verify_ssl is True

    @pytest.mark.parametrize("missing", ["GRAYLOG_BASE_URL", "GRAYLOG_USERNAME", "GRAYLOG_PASSWORD"])
    def test_missing_variable_is_named(self, missing):
        env = {k: v for k, v in FULL_ENV.items() if k != missing}
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(env)
        assert f"Missing Graylog configuration: {missing}." in str(exc_info.value)

    def test_empty_value_counts_as_missing(self):
        with pytest.raises(ConfigurationError, match="GRAYLOG_PASSWORD"):
            load_config({**FULL_ENV, "GRAYLOG_PASSWORD": ""})

    def test_all_missing_variables_are_listed(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config({"GRAYLOG_BASE_URL": "http://x"})
        assert "GRAYLOG_USERNAME, GRAYLOG_PASSWORD" in str(exc_info.value)

    def test_reads_os_environ_by_default(self, monkeypatch):
        for key, value in FULL_ENV.items():
            monkeypatch.setenv(key, value)
        assert load_config().base_url == "https://graylog.example.com/"

    def test_reads_environment_fresh_on_each_call(self, monkeypatch):
        for key, value in FULL_ENV.items():
            monkeypatch.setenv(key, value)
        first = load_config()
        monkeypatch.setenv("GRAYLOG_BASE_URL", "https://other.example.com")
        second = load_config()
        assert first.base_url != second.base_url

    def test_missing_from_os_environ(self, monkeypatch):
        for key in FULL_ENV:
            monkeypatch.delenv(key, raising=False)
        with pytest.raises(ConfigurationError, match="GRAYLOG_BASE_URL, GRAYLOG_USERNAME, GRAYLOG_PASSWORD"):
            load_config()

    def test_password_not_in_repr(self):
        assert "secret" not in repr(load_config(FULL_ENV))

    def test_timeout_parsed(self):
        assert load_config({**FULL_ENV, "GRAYLOG_TIMEOUT": "7.5"}).timeout == 7.5

    @pytest.mark.parametrize("raw", ["soon", "0", "-3"])
    def test_bad_timeout_rejected(self, raw):
        with pytest.raises(ConfigurationError, match="GRAYLOG_TIMEOUT"):
            load_config({**FULL_ENV, "GRAYLOG_TIMEOUT": raw})

    @pytest.mark.parametrize("raw,expected", [("false", False), ("0", False), ("YES", True), ("on", True)])
    def test_verify_ssl_parsed(self, raw, expected):
        assert load_config({**FULL_ENV, "GRAYLOG_VERIFY_SSL": raw}).verify_ssl is expected

    def test_bad_verify_ssl_rejected(self):
        with pytest.raises(ConfigurationError, match="GRAYLOG_VERIFY_SSL"):
            load_config({**FULL_ENV, "GRAYLOG_VERIFY_SSL": "maybe"})
