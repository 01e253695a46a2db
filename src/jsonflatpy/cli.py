"""CLI interface for flattening JSON documents."""
import sys

import click

from jsonflatpy import __version__
from jsonflatpy.config.loader import FlattenSettings
from jsonflatpy.core.renderer import JsonRenderer
from jsonflatpy.core.unflattener import unflatten_json
from jsonflatpy.escaping import StringEscapePolicy
from jsonflatpy.exceptions import JsonFlatPyException, handle_and_reraise
from jsonflatpy.flattener import JsonFlattener
from jsonflatpy.logging_config import configure_logging, get_flatten_logger
from jsonflatpy.modes import FlattenMode, PrintMode

logger = get_flatten_logger(__name__)

POLICY_DESCRIPTIONS = {
    StringEscapePolicy.DEFAULT: "Escape quotes, backslashes and control characters",
    StringEscapePolicy.ALL_BUT_UNICODE: "DEFAULT plus forward slashes",
    StringEscapePolicy.ALL_BUT_SLASH: "DEFAULT plus every non-ASCII character as \\uXXXX",
    StringEscapePolicy.ALL: "Escape everything above",
}


def _load_settings(config: str | None) -> FlattenSettings:
    if config:
        return FlattenSettings.from_file(config)
    return FlattenSettings()


def _build_options(
    settings: FlattenSettings,
    separator: str | None,
    brackets: str | None,
    keep_arrays: bool | None,
    escape_policy: str | None,
    print_mode: str | None,
):
    left_bracket = right_bracket = None
    if brackets is not None:
        if len(brackets) != 2:
            raise click.BadParameter("must be exactly two characters, e.g. '[]'", param_hint="--brackets")
        left_bracket, right_bracket = brackets[0], brackets[1]

    flatten_mode = None
    if keep_arrays is not None:
        flatten_mode = FlattenMode.KEEP_ARRAYS if keep_arrays else FlattenMode.NORMAL

    return settings.to_options(
        flatten_mode=flatten_mode,
        escape_policy=StringEscapePolicy(escape_policy) if escape_policy else None,
        separator=separator,
        left_bracket=left_bracket,
        right_bracket=right_bracket,
        print_mode=PrintMode(print_mode) if print_mode else None,
    )


def _fail(error: JsonFlatPyException) -> None:
    logger.debug("Command failed", error_type=type(error).__name__)
    click.echo(f"Error: {error.get_user_message()}", err=True)
    sys.exit(1)


def shared_options(func):
    """Options shared by the flatten and unflatten commands."""
    decorators = [
        click.argument("input_file", type=click.File("r", encoding="utf-8"), default="-"),
        click.option("--config", "-c", type=click.Path(exists=True), help="Settings file (JSON or YAML)"),
        click.option("--separator", "-s", help="Separator between named key segments (default: '.')"),
        click.option("--brackets", "-b", help="Left and right bracket characters (default: '[]')"),
        click.option(
            "--escape-policy",
            type=click.Choice([policy.value for policy in StringEscapePolicy]),
            help="String escape policy",
        ),
        click.option(
            "--print-mode",
            "-p",
            type=click.Choice([mode.value for mode in PrintMode]),
            help="Output layout",
        ),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Log level (default: from settings, WARNING)",
)
@click.option("--log-json/--no-log-json", default=None, help="Emit logs as JSON lines")
@click.option("--log-file", type=click.Path(dir_okay=False), help="Also write debug logs to this file")
def cli(log_level: str | None, log_json: bool | None, log_file: str | None):
    """Flatten nested JSON into single-level key/value documents."""
    logging_settings = FlattenSettings().logging
    configure_logging(
        level=log_level or logging_settings.level,
        json_format=logging_settings.json_format if log_json is None else log_json,
        log_file=log_file or logging_settings.log_file,
    )


@cli.command()
@shared_options
@click.option(
    "--keep-arrays/--no-keep-arrays",
    default=None,
    help="Keep non-empty arrays whole instead of splitting them into indexed keys",
)
def flatten(
    input_file,
    config: str | None,
    separator: str | None,
    brackets: str | None,
    escape_policy: str | None,
    print_mode: str | None,
    keep_arrays: bool | None,
):
    """Flatten a JSON document read from INPUT_FILE (default: stdin)."""
    try:
        settings = _load_settings(config)
        options = _build_options(settings, separator, brackets, keep_arrays, escape_policy, print_mode)
        try:
            output = JsonFlattener(input_file, options).flatten()
        except (OSError, ValueError) as e:
            handle_and_reraise(e, f"flattening {input_file.name}")
    except JsonFlatPyException as e:
        _fail(e)

    click.echo(output)


@cli.command()
@shared_options
def unflatten(
    input_file,
    config: str | None,
    separator: str | None,
    brackets: str | None,
    escape_policy: str | None,
    print_mode: str | None,
):
    """Rebuild a nested JSON document from a flattened one."""
    try:
        settings = _load_settings(config)
        options = _build_options(settings, separator, brackets, None, escape_policy, print_mode)
        nested = unflatten_json(input_file, options)
    except JsonFlatPyException as e:
        _fail(e)

    renderer = JsonRenderer(options.translator, options.print_mode, escape_keys=True)
    click.echo(renderer.render(nested))


@cli.command()
@click.option("--config", "-c", type=click.Path(exists=True), required=True, help="Settings file to validate")
def validate(config: str):
    """Validate a settings file."""
    try:
        settings = FlattenSettings.from_file(config)
        settings.to_options()
    except JsonFlatPyException as e:
        click.echo(f"✗ Settings file is invalid: {e.get_user_message()}", err=True)
        sys.exit(1)

    click.echo(f"✓ Settings file is valid: {config}")
    click.echo(f"  flatten mode: {settings.flatten_mode.value}")
    click.echo(f"  separator: {settings.separator!r}")
    click.echo(f"  brackets: {settings.left_bracket!r} {settings.right_bracket!r}")


@cli.command()
def list_policies():
    """List available string escape policies."""
    click.echo("Available escape policies:")
    for policy, description in POLICY_DESCRIPTIONS.items():
        click.echo(f"  - {policy.value}: {description}")


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
