"""CLI entry point for prompt-architect."""

import asyncio
import logging

import click
import uvicorn

from .agent import HttpAgentClient
from .core import CodeUnit
from .library import CATEGORIES, PromptLibrary
from .render import render_message
from .session import ConversationSession
from .storage import FileByteStore


@click.group()
def main():
    """Craft agent prompts with a remote prompt-generation agent."""
    pass


@main.command()
@click.option("--port", default=8080, help="Port to serve on.")
@click.option("--host", default="127.0.0.1", help="Host to bind to.")
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Logging verbosity.",
)
def serve(port: int, host: str, log_level: str):
    """Start the web interface."""
    logging.basicConfig(level=log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    click.echo(f"Starting prompt-architect on http://{host}:{port}")
    uvicorn.run("prompt_architect.server:app", host=host, port=port, reload=False, log_level=log_level)


@main.command()
@click.option("--search", default="", help="Case-insensitive text to match in title or content.")
@click.option("--category", default="all", type=click.Choice(CATEGORIES), help="Category filter.")
def prompts(search: str, category: str):
    """List prompts in the library."""
    library = PromptLibrary(FileByteStore())
    library.load()

    matches = library.search(search, category)
    if not matches:
        click.echo("No prompts found")
        return

    for prompt in matches:
        click.echo(f"[{prompt.id}] {prompt.title} ({prompt.category}) {prompt.date.strftime('%Y-%m-%d')}")
        click.echo(f"    {prompt.content}")


@main.command()
@click.argument("text")
def ask(text: str):
    """Send one message to the agent and print the reply."""
    session = ConversationSession(HttpAgentClient())
    reply = asyncio.run(session.send(text))
    if reply is None:
        raise click.UsageError("Nothing to send")

    for unit in render_message(reply):
        if isinstance(unit, CodeUnit):
            click.echo(f"```{unit.language}\n{unit.code}\n```")
        else:
            click.echo(unit.text)
        click.echo()
