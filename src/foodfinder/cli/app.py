"""Main CLI application using Typer."""
import asyncio
import logging

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from ..chat import ChatSession, ConsentGate, LogChange, LogChangeKind, SubmitStatus
from ..chat.notices import CONSENT_DISCLOSURE, CONSENT_TITLE, LOADING_PLACEHOLDER, WELCOME
from ..ui.config import LogLevel
from .providers import build_session, get_client, get_probe, get_probe_interval, get_settings_store

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="foodfinder",
    help="Chat assistant that suggests recipes for a topic within a calorie budget",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

LOG_LEVEL_HELP = "Log level: debug, info, warning, or error"


def _configure_logging(log_level: str | None) -> None:
    """Send package log records to the console through Rich."""
    if log_level is None:
        return
    handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
    package_logger = logging.getLogger("foodfinder")
    package_logger.addHandler(handler)
    package_logger.setLevel(LogLevel.from_string(log_level))


def _print_system(content: str) -> None:
    if content == LOADING_PLACEHOLDER:
        console.print("[dim]...[/dim]")
        return
    console.print("[bold green]Food Finder:[/bold green]")
    console.print(Markdown(content))
    console.print()


def _echo_log(change: LogChange) -> None:
    if change.kind is LogChangeKind.APPENDED and not change.message.is_user:
        _print_system(change.message.content)


def _ask_consent() -> bool:
    console.print(Panel(CONSENT_DISCLOSURE, title=CONSENT_TITLE, border_style="yellow"))
    return typer.confirm("Continue?", default=True)


async def _resolve_consent(session: ChatSession) -> None:
    """Show the disclosure for a held message, then send or drop it."""
    accepted = await asyncio.to_thread(_ask_consent)
    if accepted:
        await session.grant_consent()
        await session.flush_pending()
    else:
        session.cancel_pending()
        console.print("[dim]Message not sent.[/dim]")


@app.command(name="tui")
def tui_command(
    probe: bool = typer.Option(
        True,
        "--probe/--no-probe",
        help="Poll network reachability in the background"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch interactive TUI chat interface."""
    async def _tui():
        from ..ui import run_textual_tui

        client = get_client(console)
        store = get_settings_store()

        try:
            session = build_session(client, store)
            await run_textual_tui(
                session,
                probe=get_probe() if probe else None,
                probe_interval=get_probe_interval(),
                log_level=log_level,
            )
        finally:
            await store.disconnect()
            await client.close()
            console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass


@app.command()
def chat(
    probe: bool = typer.Option(
        True,
        "--probe/--no-probe",
        help="Poll network reachability in the background"
    ),
    log_level: str | None = typer.Option(None, "--log-level", "-l", help=LOG_LEVEL_HELP),
):
    """Interactive chat mode in the terminal."""
    _configure_logging(log_level)

    async def _chat():
        client = get_client(console)
        store = get_settings_store()
        session = build_session(client, store, welcome=False)
        unsubscribe = session.log.subscribe(_echo_log)
        monitor_task = None

        try:
            await session.start()
            if probe:
                monitor_task = asyncio.create_task(
                    session.monitor.run(get_probe(), get_probe_interval())
                )

            console.print("[bold cyan]Food Finder Interactive Chat[/bold cyan]")
            console.print("[dim]Type 'exit', 'quit', or 'q' to leave[/dim]\n")
            session.log.append_system(WELCOME)

            while True:
                try:
                    user_input = await asyncio.to_thread(
                        console.input, "[bold yellow]You:[/bold yellow] "
                    )

                    if not user_input.strip():
                        continue

                    if user_input.strip().lower() in ('exit', 'quit', 'q'):
                        console.print("[dim]Goodbye![/dim]")
                        break

                    result = await session.submit_text(user_input)
                    if result.status is SubmitStatus.NEEDS_CONSENT:
                        await _resolve_consent(session)

                except KeyboardInterrupt:
                    console.print("\n[dim]Goodbye![/dim]")
                    break
                except EOFError:
                    console.print("\n[dim]Goodbye![/dim]")
                    break

        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            if monitor_task is not None:
                monitor_task.cancel()
            unsubscribe()
            session.close()
            await store.disconnect()
            await client.close()

    asyncio.run(_chat())


@app.command()
def ask(
    topic: str = typer.Argument(..., help="Dish, cuisine or ingredient to cook"),
    calories: str = typer.Argument(..., help="Calorie budget, e.g. 600"),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Acknowledge outbound network use without prompting"
    ),
    log_level: str | None = typer.Option(None, "--log-level", "-l", help=LOG_LEVEL_HELP),
):
    """Ask once for recommendations and print them."""
    _configure_logging(log_level)

    async def _ask():
        client = get_client(console)
        store = get_settings_store()
        session = build_session(client, store, welcome=False)

        try:
            await session.start()

            if not session.gate.acknowledged:
                if not yes and not _ask_consent():
                    console.print("[dim]Aborted.[/dim]")
                    return
                await session.grant_consent()

            await session.submit_text(topic)
            console.print(f"[dim]Searching for {topic} recipes under {calories} calories...[/dim]")
            result = await session.submit_text(calories)

            if result.outcome is None:
                console.print(f"[red]Error: request not sent ({result.status.value})[/red]")
                raise typer.Exit(code=1)

            if result.outcome.ok:
                console.print(Markdown(result.outcome.chat_text))
            else:
                console.print(f"[red]{result.outcome.chat_text}[/red]")
                raise typer.Exit(code=1)

        finally:
            session.close()
            await store.disconnect()
            await client.close()

    asyncio.run(_ask())


@app.command()
def consent(
    reset: bool = typer.Option(
        False,
        "--reset",
        help="Forget the acknowledgement so the disclosure is shown again"
    ),
    grant: bool = typer.Option(
        False,
        "--grant",
        help="Record the acknowledgement without chatting"
    ),
):
    """Show or change the stored acknowledgement of outbound network use."""
    async def _consent():
        store = get_settings_store()
        gate = ConsentGate(store)

        try:
            if reset:
                await gate.reset()
                console.print("[green]Acknowledgement cleared.[/green]")
            elif grant:
                await gate.grant_consent()
                console.print("[green]Acknowledgement recorded.[/green]")

            acknowledged = await gate.load()

            table = Table(show_header=False, box=None)
            table.add_column("Setting", style="bold cyan", width=15)
            table.add_column("Value")
            table.add_row("Backend", store.backend_type)
            table.add_row("Acknowledged", "yes" if acknowledged else "no")
            console.print(table)

        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await store.disconnect()

    asyncio.run(_consent())


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
