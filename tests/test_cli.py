"""Tests for the command-line interface."""
import pytest
from conftest import FakeRecommendationClient
from typer.testing import CliRunner

from foodfinder.cli import app as cli_app
from foodfinder.cli import providers
from foodfinder.recommend import ApiError, GeminiRecommendationClient
from foodfinder.settings.sqlite import SQLiteSettingsStore

runner = CliRunner()


@pytest.fixture
def memory_settings(monkeypatch):
    """Use the in-memory settings backend."""
    monkeypatch.setenv("FOODFINDER_SETTINGS", "memory")


class TestProviders:
    """Tests for environment-driven construction."""

    async def test_client_from_env(self, monkeypatch):
        """Test that Gemini settings are read from the environment."""
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        monkeypatch.setenv("GEMINI_MODEL", "gemini-test")
        monkeypatch.setenv("FOODFINDER_TIMEOUT", "12")

        client = providers.get_client()
        try:
            assert isinstance(client, GeminiRecommendationClient)
            assert client.model == "gemini-test"
        finally:
            await client.close()

    def test_sqlite_path_from_env(self, monkeypatch, tmp_path):
        """Test that the settings file location can be overridden."""
        monkeypatch.setenv("FOODFINDER_SETTINGS", "sqlite")
        monkeypatch.setenv("FOODFINDER_SETTINGS_PATH", str(tmp_path / "x.db"))

        store = providers.get_settings_store()

        assert isinstance(store, SQLiteSettingsStore)
        assert store.db_path == tmp_path / "x.db"

    def test_probe_interval_from_env(self, monkeypatch):
        """Test the probe interval override."""
        monkeypatch.setenv("FOODFINDER_PROBE_INTERVAL", "2.5")

        assert providers.get_probe_interval() == 2.5


class TestCommands:
    """Tests for CLI commands."""

    def test_missing_api_key(self, monkeypatch, memory_settings):
        """Test that ask exits with an error when no key is configured."""
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)

        result = runner.invoke(cli_app.app, ["ask", "pasta", "600", "--yes"])

        assert result.exit_code == 1
        assert "GEMINI_API_KEY not set" in result.output

    def test_ask_prints_recommendation(self, monkeypatch, memory_settings):
        """Test a one-shot request with a fake client."""
        client = FakeRecommendationClient()
        monkeypatch.setattr(cli_app, "get_client", lambda console=None: client)

        result = runner.invoke(cli_app.app, ["ask", "pasta", "600", "--yes"])

        assert result.exit_code == 0
        assert "Pasta Primavera" in result.output
        assert "approximately 600 calories" in client.prompts[0]
        assert client.closed is True

    def test_ask_reports_failure(self, monkeypatch, memory_settings):
        """Test that a failed request exits non-zero with the chat text."""
        client = FakeRecommendationClient(ApiError(code=429, message="quota"))
        monkeypatch.setattr(cli_app, "get_client", lambda console=None: client)

        result = runner.invoke(cli_app.app, ["ask", "pasta", "600", "--yes"])

        assert result.exit_code == 1
        assert "API Error (429): quota" in result.output

    def test_ask_declined_consent(self, monkeypatch, memory_settings):
        """Test that declining the disclosure sends nothing."""
        client = FakeRecommendationClient()
        monkeypatch.setattr(cli_app, "get_client", lambda console=None: client)

        result = runner.invoke(cli_app.app, ["ask", "pasta", "600"], input="n\n")

        assert result.exit_code == 0
        assert "Internet Access Required" in result.output
        assert client.prompts == []

    def test_consent_grant_and_reset(self, monkeypatch, tmp_path):
        """Test recording and clearing the acknowledgement in a settings file."""
        monkeypatch.setenv("FOODFINDER_SETTINGS", "sqlite")
        monkeypatch.setenv("FOODFINDER_SETTINGS_PATH", str(tmp_path / "settings.db"))

        status = runner.invoke(cli_app.app, ["consent"])
        assert status.exit_code == 0
        assert "no" in status.output

        granted = runner.invoke(cli_app.app, ["consent", "--grant"])
        assert "Acknowledgement recorded." in granted.output
        assert "yes" in granted.output

        reset = runner.invoke(cli_app.app, ["consent", "--reset"])
        assert "Acknowledgement cleared." in reset.output
        assert "no" in reset.output
