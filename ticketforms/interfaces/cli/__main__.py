"""Entry point for running the ticketforms CLI.

This module defines a top-level Click group that aggregates the ticket form
commands. Executing ``python -m ticketforms.interfaces.cli`` will invoke this
group and present the available commands.
"""

import click

from ticketforms.infrastructure.observability import configure_logging

from .context import build_cli_context
from .forms import create, declare, delete, import_cmd, list_forms, read, show, update


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=str),
    default=None,
    help="Path to a JSON config file (defaults to ticketforms.json).",
)
@click.option("--url", default=None, help="Zendesk account URL.")
@click.option("--email", default=None, help="Agent email used with the API token.")
@click.option("--token", "api_token", default=None, help="Zendesk API token.")
@click.option("--timeout", type=float, default=None, help="Request timeout in seconds.")
@click.option(
    "--verbose/--quiet",
    default=False,
    show_default=True,
    help="Enable debug logging.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: str | None,
    url: str | None,
    email: str | None,
    api_token: str | None,
    timeout: float | None,
    verbose: bool,
) -> None:
    """Reconcile declared Zendesk ticket forms with the remote account."""
    configure_logging(verbose=verbose)
    ctx.ensure_object(dict)
    if "cli_context" not in ctx.obj:
        ctx.obj["cli_context"] = build_cli_context(
            config_path=config_path,
            url=url,
            email=email,
            api_token=api_token,
            timeout=timeout,
        )


cli.add_command(declare)
cli.add_command(create)
cli.add_command(read)
cli.add_command(update)
cli.add_command(delete)
cli.add_command(import_cmd, name="import")
cli.add_command(show)
cli.add_command(list_forms, name="list")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
