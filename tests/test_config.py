"""Tests for environment-driven configuration."""

import pytest

from errorkit.core.config import Config


class TestConfig:
    def test_allowed_origins_are_deduplicated(self, monkeypatch):
        monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "http://a.test, http://b.test,http://a.test,")

        assert Config.allowed_origins(["http://b.test", "http://c.test"]) == [
            "http://a.test",
            "http://b.test",
            "http://c.test",
        ]

    def test_renderer_name_defaults_to_ansi(self):
        assert Config.renderer_name() == "ansi"

    def test_validate_rejects_unknown_renderer(self, monkeypatch):
        monkeypatch.setenv("COLOR_RENDERER", "neon")

        with pytest.raises(ValueError, match="COLOR_RENDERER"):
            Config.validate()

    def test_validate_rejects_missing_responses_file(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ERRORKIT_RESPONSES_FILE", str(tmp_path / "absent.json"))

        with pytest.raises(ValueError, match="ERRORKIT_RESPONSES_FILE"):
            Config.validate()

    def test_validate_accepts_defaults(self):
        Config.validate()

    def test_settings_are_read_at_call_time(self, monkeypatch):
        monkeypatch.setenv("COLOR_RENDERER", " CSS ")
        monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "http://x.test")

        assert Config.renderer_name() == "css"
        assert Config.allowed_origins() == ["http://x.test"]
