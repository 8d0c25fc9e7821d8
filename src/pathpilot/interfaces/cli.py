"""CLI: Typer app wired to the decide use case."""

from __future__ import annotations

import asyncio
import json
import logging
import sys

import typer
from rich import print as rprint
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pathpilot.application.decide import decide
from pathpilot.config import load_config
from pathpilot.domain import (
    AssistantConfigError,
    ProviderError,
    RunFailedError,
    RunTimeoutError,
    UnexpectedRunStatusError,
    build_decision_request,
)
from pathpilot.infrastructure.assistants import ConfigAssistantRegistry
from pathpilot.infrastructure.openai import build_provider

app = typer.Typer(help="pathpilot: plan decisions and habits with hosted AI assistants.")


@app.command("decide")
def decide_command(
    prompt: str = typer.Argument(..., help="What you want help deciding."),
    assistant: str = typer.Option("", "--assistant", "-a", help="Assistant role (e.g. path-planner). Empty for the default."),
    thread_id: str = typer.Option("", "--thread-id", "-t", help="Continue an existing conversation."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw {response, isComplete, threadId} JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose (DEBUG) logging to stderr."),
) -> None:
    """Send one prompt to an assistant and print its reply."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    if not prompt.strip():
        rprint("[red]Prompt must not be empty.[/red]")
        sys.exit(2)

    config = load_config()
    provider = build_provider(config.provider)
    registry = ConfigAssistantRegistry(config)
    request = build_decision_request(prompt, thread_id, assistant)

    try:
        result = asyncio.run(decide(request, provider=provider, registry=registry, config=config))
    except AssistantConfigError as e:
        rprint(f"[red]{e}[/red]\n  Available: {', '.join(registry.list_ids())}")
        sys.exit(1)
    except RunTimeoutError as e:
        rprint(
            f"[yellow]The assistant is still working.[/yellow]\n  {e}\n"
            f"  Try again later with --thread-id {e.thread_id}."
        )
        sys.exit(1)
    except (RunFailedError, UnexpectedRunStatusError) as e:
        rprint(f"[red]{e}[/red]")
        sys.exit(1)
    except ProviderError as e:
        rprint(f"[red]Assistant provider error.[/red]\n  Status: {e.status_code}\n  {e.message}")
        if e.is_thread_not_found:
            rprint("  The conversation no longer exists; run again without --thread-id.")
        sys.exit(1)

    if as_json:
        print(json.dumps(result.to_dict(), ensure_ascii=False))
        return

    print(result.response)
    rprint(
        Panel.fit(
            f"[bold]Thread:[/bold] {result.thread_id}\n"
            f"[bold]Plan complete:[/bold] {'yes' if result.is_complete else 'no'}"
        )
    )


@app.command("assistants")
def assistants_command() -> None:
    """List the configured assistant roles."""
    config = load_config()
    table = Table(title="Assistants", show_header=True, header_style="bold")
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Name", style="green")
    table.add_column("Description", overflow="fold")
    for entry in ConfigAssistantRegistry(config).describe():
        marker = " (default)" if entry["id"] == config.default_assistant else ""
        table.add_row(entry["id"] + marker, entry["name"], entry["description"])
    Console().print(table)


@app.command()
def serve(host: str = "127.0.0.1", port: int = 5001) -> None:
    """Run the HTTP API (FastAPI + uvicorn)."""
    import uvicorn
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    uvicorn.run("pathpilot.interfaces.http_api:app", host=host, port=port, reload=False)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
