"""
Expertline CLI — `expertline` command.

Commands:
  expertline compare <code>     Compare code through the bridge
  expertline serve              Run the host side over socket.io
  expertline config <cmd>       Show or change settings
"""

import asyncio
import logging

try:
    import click
    from rich.console import Console
    from rich.logging import RichHandler
except ImportError:
    raise SystemExit("CLI requires extras: pip install expertline-bridge[cli]")

from expertline import __version__
from expertline.config import BridgeConfig, load_config

console = Console()


def _load_config() -> BridgeConfig:
    return load_config()


def _run(coro):
    return asyncio.run(coro)


@click.group()
@click.version_option(__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log bridge traffic.")
def main(verbose: bool):
    """Expertline — find expert alternatives for the code you select."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


# Register subcommands from separate modules
from expertline.cli.compare import compare_cmd
from expertline.cli.config import config
from expertline.cli.serve import serve_cmd

main.add_command(compare_cmd)
main.add_command(serve_cmd)
main.add_command(config)


if __name__ == "__main__":
    main()
