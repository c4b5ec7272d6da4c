"""CLI: expertline serve"""

from typing import Optional

import click
from rich.console import Console

from expertline.host import HostBridge, RequestExecutor

console = Console()


def _load_config():
    from expertline.cli.main import _load_config
    return _load_config()


@click.command("serve")
@click.option("--host", default=None)
@click.option("--port", default=None, type=int)
@click.option("-s", "--selection", default=None, help="Text pushed to every UI that connects.")
def serve_cmd(host: Optional[str], port: Optional[int], selection: Optional[str]):
    """Run the host side of the bridge over socket.io."""
    import uvicorn

    from expertline.transport.socketio import SOCKETIO_PATH, SocketIOServerEndpoint

    cfg = _load_config()
    bridge = HostBridge(
        executor=RequestExecutor(timeout=cfg.request_timeout),
        push_offsets=cfg.push_offsets,
    )

    def on_attach(sid: str) -> None:
        console.print(f"[dim]UI connected: {sid}[/dim]")
        if selection is not None:
            bridge.post_selection(selection)

    endpoint = SocketIOServerEndpoint(on_attach=on_attach)
    bridge.resolve_view(endpoint)

    host = host or cfg.host
    port = port or cfg.port
    console.print(f"[cyan]Bridge host on http://{host}:{port}/{SOCKETIO_PATH}[/cyan]")
    uvicorn.run(endpoint.asgi_app(on_shutdown=bridge.dispose), host=host, port=port, log_level="info")
