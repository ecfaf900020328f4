"""Ticket form lifecycle commands.

Each command works on a single JSON state file holding the declared form and,
once created or imported, its remote identifier.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, NoReturn

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ticketforms.domain.models import TicketForm
from ticketforms.domain.schema import TICKET_FORM_SCHEMA, FieldKind
from ticketforms.infrastructure.state import (
    ResourceData,
    StateWriteError,
    load_state,
    remove_state,
    save_state,
)
from ticketforms.services import (
    EncodingError,
    TicketFormError,
    TicketFormService,
    TicketFormViewDTO,
    diagnostics_from_error,
)

from .context import DEFAULT_STATE_FILE, CLIContext

console = Console()

state_option = click.option(
    "--state",
    "state_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_STATE_FILE,
    show_default=True,
    help="Path to the JSON state file of the ticket form.",
)


def _fail(ctx: click.Context, operation: str, exc: BaseException) -> NoReturn:
    for diagnostic in diagnostics_from_error(exc, operation):
        console.print(f"[red]Error: {escape(diagnostic.summary)}[/red]")
        if diagnostic.detail:
            console.print(f"[red]  {escape(diagnostic.detail)}[/red]")
    ctx.exit(1)


def _load(ctx: click.Context, state_path: Path) -> ResourceData:
    try:
        return load_state(state_path)
    except (StateWriteError, ValueError) as exc:
        console.print(
            f"[red]Invalid state file {state_path}: {escape(str(exc))}[/red]"
        )
        ctx.exit(1)


def _service(ctx: click.Context) -> TicketFormService:
    cli_context: CLIContext = ctx.obj["cli_context"]
    try:
        return cli_context.service
    except ValueError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        ctx.exit(1)


def _run_and_save(
    ctx: click.Context,
    operation: str,
    state_path: Path,
    fn: Callable[[TicketFormService, ResourceData], TicketForm],
) -> TicketForm:
    data = _load(ctx, state_path)
    service = _service(ctx)
    try:
        form = fn(service, data)
    except EncodingError as exc:
        # The remote call succeeded; keep the bound id and the fields written.
        save_state(data, state_path)
        _fail(ctx, operation, exc)
    except TicketFormError as exc:
        _fail(ctx, operation, exc)
    save_state(data, state_path)
    return form


def _render_state(data: ResourceData, title: str) -> Table:
    table = Table(title=title)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("id", data.id or "(not created)")
    for name, spec in TICKET_FORM_SCHEMA.items():
        value = data.get(name)
        if spec.kind is FieldKind.INT_SET:
            value = sorted(value)
        text = escape(str(value))
        if not data.is_declared(name):
            text = f"[dim]{text}[/dim]"
        table.add_row(name, text)
    return table


@click.command("declare")
@state_option
@click.option("--name", default=None, help="Name of the form.")
@click.option("--display-name", default=None, help="Name shown to end users.")
@click.option("--position", type=int, default=None, help="Position among forms.")
@click.option("--active/--inactive", default=None, help="Whether the form is active.")
@click.option(
    "--end-user-visible/--agent-only",
    default=None,
    help="Whether end users can see the form.",
)
@click.option(
    "--default/--not-default",
    "is_default",
    default=None,
    help="Whether this is the account's default form.",
)
@click.option(
    "--ticket-field-id",
    "ticket_field_ids",
    type=int,
    multiple=True,
    help="Ticket field id, repeat in display order.",
)
@click.option(
    "--in-all-brands/--restricted",
    default=None,
    help="Whether the form is available in all brands.",
)
@click.option(
    "--brand-id",
    "brand_ids",
    type=int,
    multiple=True,
    help="Brand id the form is restricted to (repeatable).",
)
@click.pass_context
def declare(
    ctx: click.Context,
    state_path: Path,
    name: str | None,
    display_name: str | None,
    position: int | None,
    active: bool | None,
    end_user_visible: bool | None,
    is_default: bool | None,
    ticket_field_ids: tuple[int, ...],
    in_all_brands: bool | None,
    brand_ids: tuple[int, ...],
) -> None:
    """Set declared fields in the state file."""

    data = _load(ctx, state_path)
    values = {
        "name": name,
        "display_name": display_name,
        "position": position,
        "active": active,
        "end_user_visible": end_user_visible,
        "default": is_default,
        "ticket_field_ids": list(ticket_field_ids) or None,
        "in_all_brands": in_all_brands,
        "restricted_brand_ids": set(brand_ids) or None,
    }
    changed = [key for key, value in values.items() if value is not None]
    for key in changed:
        data.set(key, values[key])
    save_state(data, state_path)
    if changed:
        console.print(f"[green]Declared {', '.join(changed)} in {state_path}[/green]")
    else:
        console.print("[yellow]Nothing to declare.[/yellow]")


@click.command("create")
@state_option
@click.pass_context
def create(ctx: click.Context, state_path: Path) -> None:
    """Create the declared ticket form in Zendesk."""

    data = _load(ctx, state_path)
    if data.id:
        console.print(
            f"[yellow]State already bound to ticket form {escape(data.id)}; "
            "use update instead.[/yellow]"
        )
        ctx.exit(1)
    form = _run_and_save(
        ctx, "create", state_path, lambda service, state: service.create(state)
    )
    console.print(f"[green]Created ticket form [bold]{form.id}[/bold][/green]")


@click.command("read")
@state_option
@click.pass_context
def read(ctx: click.Context, state_path: Path) -> None:
    """Refresh the state file from Zendesk."""

    form = _run_and_save(
        ctx, "read", state_path, lambda service, state: service.read(state)
    )
    console.print(f"[green]Refreshed ticket form [bold]{form.id}[/bold][/green]")


@click.command("update")
@state_option
@click.pass_context
def update(ctx: click.Context, state_path: Path) -> None:
    """Push the declared form to Zendesk, replacing the remote form."""

    form = _run_and_save(
        ctx, "update", state_path, lambda service, state: service.update(state)
    )
    console.print(f"[green]Updated ticket form [bold]{form.id}[/bold][/green]")


@click.command("delete")
@state_option
@click.pass_context
def delete(ctx: click.Context, state_path: Path) -> None:
    """Delete the ticket form in Zendesk and remove the state file."""

    data = _load(ctx, state_path)
    service = _service(ctx)
    try:
        service.delete(data)
    except TicketFormError as exc:
        _fail(ctx, "delete", exc)
    remove_state(state_path)
    console.print(f"[green]Deleted ticket form [bold]{escape(data.id)}[/bold][/green]")


@click.command("import")
@click.argument("identifier")
@state_option
@click.pass_context
def import_cmd(ctx: click.Context, identifier: str, state_path: Path) -> None:
    """Bind the existing ticket form IDENTIFIER to the state file."""

    form = _run_and_save(
        ctx,
        "import",
        state_path,
        lambda service, state: service.import_(identifier, state),
    )
    console.print(f"[green]Imported ticket form [bold]{form.id}[/bold][/green]")


@click.command("show")
@state_option
@click.pass_context
def show(ctx: click.Context, state_path: Path) -> None:
    """Show the declared state of the ticket form."""

    data = _load(ctx, state_path)
    console.print(_render_state(data, f"Ticket form state ({state_path})"))


@click.command("list")
@click.option("--json", "as_json", is_flag=True, help="Print the forms as JSON.")
@click.pass_context
def list_forms(ctx: click.Context, as_json: bool) -> None:
    """List the ticket forms in the Zendesk account."""

    service = _service(ctx)
    lister = getattr(service.api, "list_ticket_forms", None)
    if lister is None:
        console.print("[red]The configured API does not support listing.[/red]")
        ctx.exit(1)
    try:
        views = [TicketFormViewDTO.from_domain(form) for form in lister()]
    except TicketFormError as exc:
        _fail(ctx, "list", exc)

    if as_json:
        click.echo(json.dumps([view.model_dump() for view in views], indent=2))
        return

    if not views:
        console.print("[yellow]No ticket forms found.[/yellow]")
        return

    table = Table(title="Ticket forms")
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("Position")
    table.add_column("Active")
    table.add_column("Default")
    table.add_column("Fields")
    for view in views:
        table.add_row(
            str(view.id),
            escape(view.name),
            str(view.position),
            "yes" if view.active else "no",
            "yes" if view.default else "no",
            ", ".join(str(field_id) for field_id in view.ticket_field_ids),
        )
    console.print(table)


__all__ = [
    "create",
    "declare",
    "delete",
    "import_cmd",
    "list_forms",
    "read",
    "show",
]
