"""CLI: expertline compare"""

import asyncio
import json
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from expertline.errors import BridgeError
from expertline.host import HostBridge, RequestExecutor
from expertline.transport import MemoryChannel
from expertline.ui import CompareAPI, CompareResponse, RequestClient, SelectionState

console = Console()


def _load_config():
    from expertline.cli.main import _load_config
    return _load_config()


def _run(coro):
    from expertline.cli.main import _run
    return _run(coro)


def _render(result: CompareResponse) -> None:
    if result.message:
        console.print(f"[cyan]Note:[/cyan] {result.message}")
    if not result.comparisons:
        console.print("[yellow]No alternatives found.[/yellow]")
        return
    table = Table(title=f"Findings ({result.mode} mode)")
    table.add_column("Name", style="bold")
    table.add_column("Summary")
    table.add_column("Complexity")
    table.add_column("Reference")
    for c in result.comparisons:
        name = c.get("name", "")
        if c.get("isBaseline"):
            name += " [dim](baseline)[/dim]"
        table.add_row(name, c.get("summary", ""), c.get("complexity", ""), c.get("referenceLink", ""))
    console.print(table)


async def _compare_local(cfg, code: str, mode: str, details: str) -> CompareResponse:
    """Host and UI in this process, joined by an in-memory channel."""
    channel = MemoryChannel()
    bridge = HostBridge(
        executor=RequestExecutor(timeout=cfg.request_timeout),
        push_offsets=cfg.push_offsets,
    )
    bridge.resolve_view(channel.host)
    selection = SelectionState()
    selection.bind(channel.ui)
    client = RequestClient(channel.ui, timeout=cfg.request_timeout)
    try:
        bridge.post_selection(code)
        await asyncio.sleep(0)
        api = CompareAPI(client, cfg.api_url, cfg.max_alternatives)
        return await api.compare(selection.text, mode, details)
    finally:
        client.close()
        await bridge.dispose()


async def _compare_remote(cfg, url: str, code: str, mode: str, details: str) -> CompareResponse:
    """UI side only; the host runs under `expertline serve`."""
    from expertline.transport.socketio import SocketIOClientEndpoint

    endpoint = SocketIOClientEndpoint(url)
    await endpoint.connect()
    client = RequestClient(endpoint, timeout=cfg.request_timeout)
    try:
        api = CompareAPI(client, cfg.api_url, cfg.max_alternatives)
        return await api.compare(code, mode, details)
    finally:
        client.close()
        await endpoint.disconnect()


@click.command("compare")
@click.argument("code", required=False)
@click.option("-f", "--file", "file_path", type=click.Path(exists=True, dir_okay=False), default=None)
@click.option("--mode", type=click.Choice(["expert", "ai"]), default=None)
@click.option("-d", "--details", default="", help="Additional context for the search.")
@click.option("--remote", default=None, help="socket.io URL of a running `expertline serve`.")
@click.option("--json-output", "--json", is_flag=True)
def compare_cmd(
    code: Optional[str], file_path: Optional[str], mode: Optional[str],
    details: str, remote: Optional[str], json_output: bool,
):
    """Find alternatives for CODE (or the contents of --file)."""
    cfg = _load_config()
    if file_path:
        code = Path(file_path).read_text()
    if not code:
        raise click.UsageError("Provide CODE or --file.")
    mode = mode or cfg.mode

    try:
        if remote:
            result = _run(_compare_remote(cfg, remote, code, mode, details))
        else:
            with console.status("Searching..."):
                result = _run(_compare_local(cfg, code, mode, details))
    except BridgeError as e:
        if json_output:
            click.echo(json.dumps({"error": e.code, "message": e.message}))
        else:
            console.print(f"[red]{e.message}[/red]")
        raise SystemExit(1)

    if json_output:
        click.echo(json.dumps(result.model_dump(), indent=2))
    else:
        _render(result)
