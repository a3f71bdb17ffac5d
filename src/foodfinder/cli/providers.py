"""Provider factory functions for CLI.

Centralizes creation of the recommendation client, settings store and
reachability probe from environment variables.
Hides configuration details from command implementations.
"""

import os
from pathlib import Path

import typer
from rich.console import Console

from ..chat import ChatSession, ConsentGate, ReachabilityProbe, TcpReachabilityProbe
from ..chat.connectivity import DEFAULT_PROBE_HOST, DEFAULT_PROBE_PORT
from ..recommend import RecommendationClient, create_recommendation_client
from ..recommend.gemini import DEFAULT_API_VERSION, DEFAULT_BASE_URL, DEFAULT_MODEL, DEFAULT_TIMEOUT
from ..settings import SettingsStore, create_settings_store
from ..ui.config import PROBE_INTERVAL_SECONDS

# Default console for output
_console = Console()


def get_client(console: Console | None = None) -> RecommendationClient:
    """Create the recommendation client from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        Gemini recommendation client

    Raises:
        SystemExit: If GEMINI_API_KEY is not set

    Environment variables:
        GEMINI_API_KEY: Gemini API key (required)
        GEMINI_MODEL: Model id (default: gemini-1.5-pro-latest)
        GEMINI_BASE_URL: Provider host (default: https://generativelanguage.googleapis.com)
        GEMINI_API_VERSION: Path version (default: v1beta)
        FOODFINDER_TIMEOUT: HTTP timeout in seconds (default: 60)
    """
    con = console or _console
    api_key = os.getenv("GEMINI_API_KEY")
    if not api_key:
        con.print("[red]Error: GEMINI_API_KEY not set in environment[/red]")
        raise typer.Exit(code=1)

    return create_recommendation_client(
        "gemini",
        api_key=api_key,
        model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
        base_url=os.getenv("GEMINI_BASE_URL", DEFAULT_BASE_URL),
        api_version=os.getenv("GEMINI_API_VERSION", DEFAULT_API_VERSION),
        timeout=float(os.getenv("FOODFINDER_TIMEOUT", str(DEFAULT_TIMEOUT))),
    )


def get_settings_store() -> SettingsStore:
    """Create the settings store that remembers the consent acknowledgement.

    Environment variables:
        FOODFINDER_SETTINGS: Backend type, memory or sqlite (default: sqlite)
        FOODFINDER_SETTINGS_PATH: SQLite file (default: ~/.foodfinder/settings.db)
    """
    backend = os.getenv("FOODFINDER_SETTINGS", "sqlite").lower()
    if backend == "sqlite":
        path = os.getenv("FOODFINDER_SETTINGS_PATH")
        if path:
            return create_settings_store("sqlite", path=Path(path).expanduser())
    return create_settings_store(backend)


def get_probe() -> ReachabilityProbe:
    """Create the reachability probe.

    Environment variables:
        FOODFINDER_PROBE_HOST: Host to connect to (default: the provider host)
    """
    host = os.getenv("FOODFINDER_PROBE_HOST", DEFAULT_PROBE_HOST)
    return TcpReachabilityProbe(host=host, port=DEFAULT_PROBE_PORT)


def get_probe_interval() -> float:
    """Seconds between reachability probes (FOODFINDER_PROBE_INTERVAL, default 5)."""
    return float(os.getenv("FOODFINDER_PROBE_INTERVAL", str(PROBE_INTERVAL_SECONDS)))


def build_session(
    client: RecommendationClient,
    store: SettingsStore,
    welcome: bool = True,
) -> ChatSession:
    """Wire a chat session around an already created client and store."""
    return ChatSession(client=client, gate=ConsentGate(store), welcome=welcome)
