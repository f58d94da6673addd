#!/usr/bin/env python3
"""Command line entry point for running the example networks."""

import argparse
import asyncio
import sys
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from agent_network.errors import AgentNetworkError
from agent_network.examples import collaborative, form_builder
from agent_network.utils.config import get_settings
from agent_network.utils.logging import get_logger, setup_logging

console = Console()
logger = get_logger(__name__)


def _write_fragment(fragment: str) -> None:
    console.print(fragment, end="", markup=False, highlight=False)


def _render_results(results: dict[str, Any]) -> None:
    if not results:
        console.print("[yellow]No results.[/yellow]")
        return

    table = Table(title="Agent Results")
    table.add_column("Agent", style="cyan")
    table.add_column("Output")
    table.add_column("Tools", style="dim")
    table.add_column("Tokens", justify="right")

    for name, result in results.items():
        output = getattr(result, "text", None)
        if output is None:
            output = str(getattr(result, "object", result))
        tools = ", ".join(c.name for c in getattr(result, "tool_calls", [])) or "-"
        usage = getattr(result, "usage", None)
        table.add_row(name, output or "-", tools, str(usage.total_tokens) if usage else "-")

    console.print(table)


async def cmd_collaborative(city: str) -> None:
    """Run the fetch / analyze / summarize chain for a city."""
    network = collaborative.build_network()
    with console.status(f"[bold blue]Researching {city}...", spinner="dots"):
        summary = await collaborative.run(network, city)
    console.print(Panel(summary or "(no tool results)", title=f"Travel summary: {city}"))


async def cmd_form(prompt: str) -> None:
    """Stream a generated form to the terminal."""
    network = form_builder.build_network()
    await form_builder.run(network, prompt, _write_fragment)
    console.print()


async def cmd_run(prompt: str, multiple: bool, stream: bool) -> None:
    """Run an arbitrary prompt against the collaborative agents."""
    network = collaborative.build_network()
    console.print(f"[dim]Available agents: {', '.join(network.agent_names)}[/dim]\n")

    if stream:
        await network.execute(
            prompt, multiple_agents=multiple, stream=True, stream_callback=_write_fragment
        )
        console.print()
        return

    with console.status("[bold blue]Thinking...", spinner="dots"):
        results = await network.execute(prompt, multiple_agents=multiple)
    _render_results(results)


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Agent Network - run prompts through model-selected agents"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    collab_parser = subparsers.add_parser(
        "collaborative", help="Fetch, analyze and summarize travel conditions"
    )
    collab_parser.add_argument("--city", default="London", help="City to research")

    form_parser = subparsers.add_parser("form", help="Stream a generated form")
    form_parser.add_argument(
        "--prompt", default="Build a form for a PHQ-9 survey.", help="Form request"
    )

    run_parser = subparsers.add_parser("run", help="Run a prompt through the example agents")
    run_parser.add_argument("prompt", help="Prompt to dispatch")
    run_parser.add_argument(
        "--multiple", action="store_true", help="Allow several agents to run concurrently"
    )
    run_parser.add_argument("--stream", action="store_true", help="Stream output as it arrives")

    args = parser.parse_args()

    log_level = "DEBUG" if args.verbose else None
    setup_logging(log_level)

    if args.command is None:
        parser.print_help()
        return

    if not get_settings().anthropic_api_key:
        console.print(
            "[red]Error: ANTHROPIC_API_KEY not configured.[/red]\n"
            "Set it in your .env file or environment."
        )
        sys.exit(1)

    try:
        if args.command == "collaborative":
            asyncio.run(cmd_collaborative(args.city))
        elif args.command == "form":
            asyncio.run(cmd_form(args.prompt))
        elif args.command == "run":
            asyncio.run(cmd_run(args.prompt, args.multiple, args.stream))
        else:
            parser.print_help()
    except AgentNetworkError as e:
        logger.debug("Network run failed", exc_info=True)
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
