"""Main CLI application using Typer."""
import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.table import Table

from ..errors import ChottoError
from ..llm.models import Attachment, ModelCategory, Provider
from ..llm.registry import DEFAULT_MODEL_ID, list_models
from ..log import configure_logging
from ..session import ChatMessage, ChatSession
from .providers import get_credential_store, get_dispatcher, get_settings

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="chotto",
    help="Chat with OpenAI, Gemini and Claude models from one prompt",
    no_args_is_help=True,
    add_completion=True,
)
keys_app = typer.Typer(help="Manage provider API keys", no_args_is_help=True)
app.add_typer(keys_app, name="keys")

# Console for rich output
console = Console()


@app.callback()
def main_callback(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Log level: DEBUG, INFO, WARNING, ERROR (default: CHOTTO_LOG_LEVEL or WARNING)"
    )
):
    """Configure logging before any command runs."""
    try:
        settings = get_settings()
    except ValidationError as e:
        console.print(f"[red]Invalid CHOTTO_* configuration:[/red]\n{escape(str(e))}")
        raise typer.Exit(code=1)

    configure_logging(log_level or settings.log_level)


def _mask(secret: str) -> str:
    if len(secret) <= 8:
        return "*" * len(secret)
    return f"{secret[:3]}...{secret[-4:]}"


def _print_reply(message: ChatMessage) -> None:
    if message.is_error:
        console.print(f"[red]{message.content}[/red]")
        return
    console.print(Markdown(message.content))
    if message.image_url:
        console.print(f"[cyan]Image:[/cyan] {message.image_url}")


@app.command()
def models(
    category: ModelCategory | None = typer.Option(
        None,
        "--category",
        "-c",
        help="Only show text or image models"
    )
):
    """List the models that can be selected."""
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Model", style="cyan")
    table.add_column("Label")
    table.add_column("Provider", style="yellow")
    table.add_column("Category", style="green")

    for model in list_models(category):
        table.add_row(model.id, model.label, model.provider.value, model.category.value)

    console.print(table)


@keys_app.command("set")
def keys_set(
    provider: Provider = typer.Argument(..., help="Provider the key belongs to"),
    secret: str = typer.Option(
        ...,
        "--secret",
        prompt=True,
        hide_input=True,
        help="API key (leave blank to remove)"
    )
):
    """Store or remove the API key for a provider."""
    store = get_credential_store(get_settings())
    store.set(provider, secret)

    if store.has(provider):
        console.print(f"[green]Saved API key for {provider.value}[/green]")
    else:
        console.print(f"[yellow]Removed API key for {provider.value}[/yellow]")


@keys_app.command("show")
def keys_show():
    """Show which providers have an API key configured."""
    store = get_credential_store(get_settings())

    table = Table(show_header=False, box=None)
    table.add_column("Provider", style="bold cyan", width=12)
    table.add_column("Key")

    for provider in Provider:
        secret = store.get(provider)
        table.add_row(provider.value, _mask(secret) if secret else "[yellow]NOT SET[/yellow]")

    console.print(table)


@app.command()
def ask(
    prompt: str = typer.Argument(..., help="Message to send"),
    model: str = typer.Option(
        DEFAULT_MODEL_ID,
        "--model",
        "-m",
        help="Model id (see 'chotto models')"
    ),
    attach: list[Path] = typer.Option(
        [],
        "--attach",
        "-a",
        exists=True,
        dir_okay=False,
        help="Image (JPEG/PNG) or PDF to attach; may be repeated"
    )
):
    """Send a single message and print the answer."""
    async def _ask():
        try:
            attachments = [Attachment.from_path(path) for path in attach]
        except ValueError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)

        async with get_dispatcher(get_settings()) as dispatcher:
            try:
                session = ChatSession(dispatcher, model=model)
            except ChottoError as e:
                console.print(f"[red]Error: {e}[/red]")
                raise typer.Exit(code=1)

            reply = await session.send(prompt, attachments)

        _print_reply(reply)
        if reply.is_error:
            raise typer.Exit(code=1)

    asyncio.run(_ask())


@app.command()
def chat(
    model: str = typer.Option(
        DEFAULT_MODEL_ID,
        "--model",
        "-m",
        help="Initial model id (switch with /model <id>)"
    )
):
    """Interactive chat session kept in memory."""
    async def _chat():
        async with get_dispatcher(get_settings()) as dispatcher:
            try:
                session = ChatSession(dispatcher, model=model)
            except ChottoError as e:
                console.print(f"[red]Error: {e}[/red]")
                raise typer.Exit(code=1)

            console.print("[bold cyan]Chotto Chat[/bold cyan]")
            console.print("[dim]Commands: /model <id>, /clear, /exit[/dim]\n")

            while True:
                try:
                    user_input = console.input(f"[bold yellow]You ({session.model}):[/bold yellow] ").strip()
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                if not user_input:
                    continue

                if user_input in ("/exit", "/quit"):
                    console.print("[dim]Goodbye![/dim]")
                    break

                if user_input == "/clear":
                    session.clear()
                    console.print("[dim]History cleared.[/dim]")
                    continue

                if user_input.startswith("/model"):
                    try:
                        session.select_model(user_input.removeprefix("/model").strip())
                        console.print(f"[dim]Using {session.model}[/dim]")
                    except ChottoError as e:
                        console.print(f"[red]Error: {e}[/red]")
                    continue

                with console.status("[dim]Thinking...[/dim]"):
                    reply = await session.send(user_input)
                _print_reply(reply)
                console.print()

    asyncio.run(_chat())


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
