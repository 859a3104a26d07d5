"""CLI entry point: `passpolicy check`, `passpolicy serve`, etc."""

from __future__ import annotations

import json
import logging
import sys

import click
from rich.console import Console
from rich.table import Table

from passpolicy import __version__
from passpolicy.config import Settings
from passpolicy.core.messages import describe_policy, error_key, message_for
from passpolicy.core.models import PolicyConfig
from passpolicy.core.settings import load_common_passwords, load_policy, load_policy_file
from passpolicy.core.validator import PolicyValidator
from passpolicy.errors import InvalidConfig
from passpolicy.utils.log import configure

console = Console()
logger = logging.getLogger(__name__)


def _resolve_policy(settings: Settings, policy_file: str | None, overrides: dict) -> PolicyConfig:
    try:
        if policy_file:
            policy = load_policy_file(policy_file)
        else:
            policy = settings.load_policy()
    except InvalidConfig as exc:
        raise click.BadParameter(str(exc), param_hint="--policy") from exc
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if overrides:
        # same coercion and clamping as stored settings
        try:
            policy = load_policy({**policy.model_dump(), **overrides})
        except InvalidConfig as exc:
            raise click.BadParameter(str(exc)) from exc
    return policy


@click.group()
@click.version_option(version=__version__)
@click.pass_context
def main(ctx: click.Context):
    """passpolicy: check passwords against an account password policy."""
    try:
        settings = Settings.from_env()
    except InvalidConfig as exc:
        raise click.UsageError(str(exc)) from exc
    configure(level=settings.log_level, structured_json=settings.log_json)
    ctx.obj = settings


@main.command()
@click.argument("password", required=False)
@click.option("--policy", "policy_file", type=click.Path(exists=True, dir_okay=False), help="JSON policy file")
@click.option("--min-length", type=click.IntRange(min=0), default=None, help="Minimum character length")
@click.option("--max-repeats", type=click.IntRange(min=0), default=None, help="Max consecutive identical characters")
@click.option("--max-sequence", type=click.IntRange(min=0), default=None, help="Max run from a known sequence")
@click.option("--disallow-common/--allow-common", default=None, help="Reject common passwords")
@click.option("--require-number/--no-require-number", default=None, help="Require a digit")
@click.option("--require-symbol/--no-require-symbol", default=None, help="Require a symbol")
@click.option("--common-passwords", "common_file", type=click.Path(exists=True, dir_okay=False), help="Extra common-password list")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_obj
def check(
    settings: Settings,
    password: str | None,
    policy_file: str | None,
    min_length: int | None,
    max_repeats: int | None,
    max_sequence: int | None,
    disallow_common: bool | None,
    require_number: bool | None,
    require_symbol: bool | None,
    common_file: str | None,
    as_json: bool,
):
    """Check PASSWORD against the policy. Prompts when PASSWORD is omitted."""
    policy = _resolve_policy(
        settings,
        policy_file,
        {
            "minimum_character_length": min_length,
            "max_repeats": max_repeats,
            "max_sequence": max_sequence,
            "disallow_common_passwords": disallow_common,
            "require_number_characters": require_number,
            "require_symbol_characters": require_symbol,
        },
    )
    try:
        if common_file:
            validator = PolicyValidator(extra_common_passwords=load_common_passwords(common_file))
        else:
            validator = settings.build_validator()
    except InvalidConfig as exc:
        raise click.BadParameter(str(exc), param_hint="--common-passwords") from exc

    if password is None:
        password = click.prompt("Password", hide_input=True)

    result = validator.check(policy, password)
    logger.debug("checked candidate", extra={"passed": result.passed})

    if as_json:
        click.echo(
            json.dumps(
                {
                    "passed": result.passed,
                    "violations": [code.value for code in result.violations],
                }
            )
        )
    elif result.passed:
        console.print("[green]✓[/green] Password satisfies the policy")
    else:
        table = Table(title="Policy violations")
        table.add_column("Code", style="red")
        table.add_column("Key", style="cyan")
        table.add_column("Message")
        for code in result.violations:
            table.add_row(code.value, error_key(code), message_for(code, policy))
        console.print(table)

    if not result.passed:
        sys.exit(1)


@main.command()
@click.option("--policy", "policy_file", type=click.Path(exists=True, dir_okay=False), help="JSON policy file")
@click.pass_obj
def policy(settings: Settings, policy_file: str | None):
    """Show the active policy and its rule checklist."""
    config = _resolve_policy(settings, policy_file, {})

    table = Table(title="Password policy")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for name, value in config.model_dump().items():
        table.add_row(name, "-" if value is None else str(value))
    table.add_row("maximum_character_length", str(config.maximum_character_length))
    console.print(table)

    for line in describe_policy(config):
        console.print(f"  • {line}")


@main.command()
@click.option("--port", type=int, default=None, help="Server port")
@click.option("--host", default=None, help="Server host")
@click.pass_obj
def serve(settings: Settings, port: int | None, host: str | None):
    """Serve the policy check API."""
    import uvicorn

    from passpolicy.server import create_app

    try:
        app = create_app(settings.load_policy(), settings.build_validator())
    except InvalidConfig as exc:
        raise click.UsageError(str(exc)) from exc
    host = host or settings.host
    port = port or settings.port
    logger.info("starting server", extra={"host": host, "port": port})
    click.echo(f"Starting passpolicy on http://{host}:{port}")
    uvicorn.run(app, host=host, port=port)


@main.command()
def version():
    """Show passpolicy version."""
    click.echo(f"passpolicy {__version__}")


if __name__ == "__main__":
    main()
