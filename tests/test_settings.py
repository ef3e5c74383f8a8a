"""Unit tests for environment-backed configuration."""

from __future__ import annotations

import pytest

from mibot.config.settings import Config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ["SLACK_BOT_TOKEN", "SLACK_TOKEN", "SLACK_APP_TOKEN", "KUBE_REQUEST_TIMEOUT", "LOG_LEVEL", "SLACK_DEBUG"]:
        monkeypatch.delenv(name, raising=False)


class TestConfig:
    def test_validate_reports_missing_fields(self) -> None:
        """Every missing required variable is named."""
        with pytest.raises(ValueError, match="SLACK_BOT_TOKEN, SLACK_APP_TOKEN"):
            Config.validate()

    def test_legacy_token_name(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """SLACK_TOKEN is accepted when SLACK_BOT_TOKEN is unset."""
        monkeypatch.setenv("SLACK_TOKEN", "xoxb-legacy")
        monkeypatch.setenv("SLACK_APP_TOKEN", "xapp-test")
        Config.validate()
        assert Config.SLACK_BOT_TOKEN == "xoxb-legacy"

    def test_defaults(self) -> None:
        assert Config.LOG_LEVEL == "INFO"
        assert Config.SLACK_DEBUG is False
        assert Config.KUBE_REQUEST_TIMEOUT is None
        assert Config.BOT_NAME == "mibot"

    def test_values_read_at_access_time(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBE_REQUEST_TIMEOUT", "7.5")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("SLACK_DEBUG", "TRUE")
        assert Config.KUBE_REQUEST_TIMEOUT == 7.5
        assert Config.LOG_LEVEL == "DEBUG"
        assert Config.SLACK_DEBUG is True
