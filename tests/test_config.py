"""Tests for Settings configuration model."""

from ghhook.config import Settings


class TestGetHandlerModules:
    def test_parses_comma_separated(self):
        s = Settings(handler_modules="app.hooks,app.more_hooks")
        assert s.get_handler_modules() == ["app.hooks", "app.more_hooks"]

    def test_handles_spaces(self):
        s = Settings(handler_modules=" app.hooks , app.more_hooks ")
        assert s.get_handler_modules() == ["app.hooks", "app.more_hooks"]

    def test_empty_string_returns_empty_list(self):
        s = Settings(handler_modules="")
        assert s.get_handler_modules() == []

    def test_skips_empty_entries(self):
        s = Settings(handler_modules="app.hooks,,")
        assert s.get_handler_modules() == ["app.hooks"]


class TestDefaults:
    def test_event_header(self):
        assert Settings().github_event_header == "X-GitHub-Event"

    def test_server(self):
        s = Settings()
        assert s.webhook_host == "0.0.0.0"
        assert s.webhook_port == 8080
        assert s.webhook_path == "/webhooks/github"

    def test_log_level(self):
        assert Settings().log_level == "INFO"

    def test_ignores_environment_under_pytest(self, monkeypatch):
        monkeypatch.setenv("WEBHOOK_PORT", "9000")
        assert Settings().webhook_port == 8080
