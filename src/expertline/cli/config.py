"""CLI: expertline config show|set"""

import json

import click
from pydantic import ValidationError
from rich.console import Console

from expertline.config import CONFIG_FILE, BridgeConfig, save_config

console = Console()


def _load_config():
    from expertline.cli.main import _load_config
    return _load_config()


@click.group()
def config():
    """Show or change settings."""


@config.command("show")
def show_cmd():
    """Print the effective configuration."""
    console.print(f"[dim]{CONFIG_FILE}[/dim]")
    click.echo(json.dumps(_load_config().model_dump(), indent=2))


@config.command("set")
@click.argument("key")
@click.argument("value")
def set_cmd(key: str, value: str):
    """Set KEY to VALUE (JSON literals are parsed, e.g. `push_offsets '[0, 0.2]'`)."""
    if key not in BridgeConfig.model_fields:
        raise click.BadParameter(f"unknown key {key!r}", param_hint="KEY")
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        parsed = value
    data = _load_config().model_dump()
    data[key] = parsed
    try:
        cfg = BridgeConfig.model_validate(data)
    except ValidationError as e:
        raise click.BadParameter(str(e), param_hint="VALUE")
    save_config(cfg)
    console.print(f"[green]{key} = {getattr(cfg, key)!r}[/green]")
