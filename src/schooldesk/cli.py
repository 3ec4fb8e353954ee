"""Command-line interface for the user lookup and edit workflow."""

from __future__ import annotations

from pathlib import Path

import click
from pydantic import ValidationError
from safir.asyncio import run_with_asyncio
from safir.click import display_help

from .config import Config
from .constants import CONFIG_PATH
from .exceptions import WorkflowError
from .factory import Factory
from .models.enums import LOOKUP_ROLES, LookupStatus, UserRole
from .models.user import UserRecord
from .services.consult import ConsultWorkflow
from .util import format_identifier

__all__ = [
    "edit",
    "help",
    "lookup",
    "main",
    "roster",
    "show",
]

_config_path_option = click.option(
    "--config-path",
    envvar="SCHOOLDESK_CONFIG_PATH",
    type=click.Path(path_type=Path),
    default=None,
    help="Application configuration file.",
)

_SUMMARY_FIELD_COUNT = 5
"""Number of leading detail fields shown by the lookup result panel."""

_role_option = click.option(
    "--role",
    type=click.Choice([r.value for r in LOOKUP_ROLES], case_sensitive=False),
    default=LOOKUP_ROLES[0].value,
    show_default=True,
    help="Role of the user.",
)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(message="%(version)s")
def main() -> None:
    """Look up and edit users of the school directory."""


@main.command()
@click.argument("topic", default=None, required=False, nargs=1)
@click.pass_context
def help(ctx: click.Context, topic: str | None) -> None:
    """Show help for any command."""
    display_help(main, ctx, topic)


@main.command()
@click.argument("identifier")
@_role_option
@_config_path_option
@run_with_asyncio
async def lookup(identifier: str, role: str, config_path: Path | None) -> None:
    """Look up a user by CPF."""
    config = _load_config(config_path)
    async with Factory.standalone(config) as factory:
        workflow = factory.create_consult_workflow()
        record = await _lookup(workflow, role, identifier)
    for label, value in record.detail_fields()[:_SUMMARY_FIELD_COUNT]:
        click.echo(f"{label}: {value}")


@main.command()
@_role_option
@click.option(
    "--filter", "query", default="", help="Only show names containing this."
)
@_config_path_option
@run_with_asyncio
async def roster(role: str, query: str, config_path: Path | None) -> None:
    """List the users of a role."""
    config = _load_config(config_path)
    async with Factory.standalone(config) as factory:
        workflow = factory.create_consult_workflow()
        await workflow.mount()
        if not workflow.roster.loaded:
            raise click.ClickException("Unable to load the user list")
        workflow.select_role(UserRole(role.upper()))
        workflow.set_filter(query)
        entries = workflow.roster_entries
    for record in entries:
        identifier = format_identifier(record.identifier)
        marker = _active_marker(record)
        click.echo(f"{record.display_name}\t{identifier}\t{marker}")


@main.command()
@click.argument("identifier")
@_role_option
@_config_path_option
@run_with_asyncio
async def show(identifier: str, role: str, config_path: Path | None) -> None:
    """Show every detail of a user."""
    config = _load_config(config_path)
    async with Factory.standalone(config) as factory:
        workflow = factory.create_consult_workflow()
        record = await _lookup(workflow, role, identifier)
        workflow.view(record)
        fields = workflow.detail.fields()
        workflow.detail.close()
    for label, value in fields:
        click.echo(f"{label}: {value}")


@main.command()
@click.argument("identifier")
@_role_option
@click.option(
    "--set",
    "settings",
    multiple=True,
    required=True,
    metavar="FIELD=VALUE",
    help="Field to change, may be given multiple times.",
)
@_config_path_option
@run_with_asyncio
async def edit(
    identifier: str,
    role: str,
    settings: tuple[str, ...],
    config_path: Path | None,
) -> None:
    """Change fields of a user."""
    changes = {}
    for setting in settings:
        field, sep, value = setting.partition("=")
        if not sep or not field:
            raise click.BadParameter(f"Invalid setting {setting}")
        changes[field.strip()] = value
    config = _load_config(config_path)
    async with Factory.standalone(config) as factory:
        workflow = factory.create_consult_workflow()
        record = await _lookup(workflow, role, identifier)
        workflow.edit(record)
        try:
            workflow.editor.update_draft(**changes)
        except (ValidationError, WorkflowError) as e:
            raise click.ClickException(str(e)) from e
        user = await workflow.editor.submit()
        if not user:
            raise click.ClickException(workflow.editor.error or "")
    click.echo(f"Updated {user.display_name}")


def _active_marker(record: UserRecord) -> str:
    return "ativo" if record.is_active else "inativo"


def _load_config(config_path: Path | None) -> Config:
    """Load the configuration and configure logging.

    The default configuration file is optional, in which case all settings
    must come from the environment.
    """
    path = config_path or Path(CONFIG_PATH)
    try:
        if config_path or path.exists():
            config = Config.from_file(path)
        else:
            config = Config()
    except (OSError, ValidationError) as e:
        raise click.UsageError(f"Invalid configuration: {e!s}") from e
    config.configure_logging()
    return config


async def _lookup(
    workflow: ConsultWorkflow, role: str, identifier: str
) -> UserRecord:
    workflow.select_role(UserRole(role.upper()))
    workflow.set_identifier(identifier)
    if not workflow.can_submit:
        raise click.BadParameter(f"Invalid identifier {identifier}")
    result = await workflow.submit_lookup()
    if result.status != LookupStatus.found or not result.record:
        raise click.ClickException(result.message or "User not found")
    return result.record
