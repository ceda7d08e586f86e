"""Entry point for the board service-health monitor."""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
import sys

import uvicorn
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from src.config import settings
from src.monitor import ConfigurationError, Manager, build_manager, load_config
from src.probe import Status

console = Console()
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)

_STATUS_STYLE = {
    Status.OK: "green",
    Status.WARNING: "yellow",
    Status.ERROR: "bold red",
    Status.UNKNOWN: "dim",
}


def load_manager(config_file: str) -> Manager:
    """Build the manager, or print the configuration error and exit."""
    try:
        return build_manager(load_config(config_file))
    except ConfigurationError as e:
        console.print(f"[bold red]Configuration error:[/bold red] {e}")
        sys.exit(1)


def render(manager: Manager) -> Table:
    table = Table(title="Services")
    table.add_column("Category")
    table.add_column("Service")
    table.add_column("Target", style="dim")
    table.add_column("Status")
    table.add_column("Message")

    for category, services in manager.services.items():
        for service in services:
            state = service.state
            table.add_row(
                category,
                service.name,
                service.target,
                f"[{_STATUS_STYLE[state.status]}]{state.status.value or 'UNKNOWN'}[/]",
                state.message,
            )
    return table


def run_server(config_file: str) -> None:
    """Start the API server with the probe loop in the background."""
    from src.api.server import create_app

    manager = load_manager(config_file)
    console.print(Panel(
        f"Starting board on {settings.api_host}:{settings.api_port} "
        f"({sum(1 for _ in manager.iter_services())} services)",
        style="bold green",
    ))
    uvicorn.run(
        create_app(manager),
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


async def _watch(manager: Manager, interval: float) -> None:
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except NotImplementedError:  # Windows
            pass
    try:
        await manager.run_loop(interval, stop)
    finally:
        await manager.close()


def run_watch(config_file: str, interval: float) -> None:
    """Run the probe loop in the foreground, alerting on transitions."""
    manager = load_manager(config_file)
    console.print(Panel(f"Watching services every {interval:.0f}s", title="board", style="bold blue"))
    asyncio.run(_watch(manager, interval))


async def _check_once(manager: Manager) -> None:
    try:
        await manager.probe_all()
    finally:
        await manager.close()


def run_check(config_file: str) -> None:
    """Probe every service once and print a table. Exit 2 if any is in ERROR."""
    manager = load_manager(config_file)
    with console.status("[bold green]Probing services..."):
        asyncio.run(_check_once(manager))
    console.print(render(manager))
    if manager.status_counts()["ERROR"]:
        sys.exit(2)


def run_validate(config_file: str) -> None:
    """Build the manager from config without probing."""
    manager = load_manager(config_file)
    console.print(
        f"[green]OK[/green] {sum(1 for _ in manager.iter_services())} services in "
        f"{len(manager.services)} categories, {len(manager.alerters)} alerters"
    )
    asyncio.run(manager.close())


def main() -> None:
    parser = argparse.ArgumentParser(description="Board service-health monitor")
    parser.add_argument(
        "-c", "--config", default=settings.board_config_file,
        help="Probe/alert declarations file (YAML)",
    )
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("serve", help="Start the API server and probe loop")

    watch_parser = sub.add_parser("watch", help="Run the probe loop without the API")
    watch_parser.add_argument(
        "-i", "--interval", type=float, default=settings.probe_interval_seconds,
        help="Seconds between probing rounds",
    )

    sub.add_parser("check", help="Probe every service once and print the result")
    sub.add_parser("validate", help="Validate the configuration file")

    args = parser.parse_args()

    if args.command == "serve":
        run_server(args.config)
    elif args.command == "watch":
        run_watch(args.config, args.interval)
    elif args.command == "check":
        run_check(args.config)
    elif args.command == "validate":
        run_validate(args.config)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
