"""Tests for config module."""

from backend.config import Settings


class TestSettings:
    def test_default_values(self, monkeypatch):
        for name in ["BROS_CONTENT_SOURCE", "BROS_BASE_URL", "BROS_DEBOUNCE_MS"]:
            monkeypatch.delenv(name, raising=False)

        config = Settings(_env_file=None)
        assert config.content_source == "content.json"
        assert config.base_url == "/bros-unblocked/"
        assert config.build_version == ""
        assert config.results_per_page == 10
        assert config.preview_limit == 5
        assert config.debounce_ms == 300
        assert config.debounce_seconds == 0.3
        assert config.fetch_timeout == 15.0

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("BROS_CONTENT_SOURCE", "https://example.com/content.json")
        monkeypatch.setenv("BROS_RESULTS_PER_PAGE", "20")
        monkeypatch.setenv("BROS_BUILD_VERSION", "abc123")

        config = Settings(_env_file=None)
        assert config.content_source == "https://example.com/content.json"
        assert config.results_per_page == 20
        assert config.build_version == "abc123"

    def test_debounce_from_env(self, monkeypatch):
        monkeypatch.setenv("BROS_DEBOUNCE_MS", "150")
        config = Settings(_env_file=None)
        assert config.debounce_seconds == 0.15
