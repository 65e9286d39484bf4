"""CLI entrypoint for fieldrules."""

import logging
import sys
from pathlib import Path

import click

from . import __version__
from .store.config import STORES_ENV_VAR


def _configure_logging(verbose: bool) -> None:
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


@click.group()
@click.version_option(__version__, prog_name="fieldrules")
@click.option(
    "--stores",
    "-s",
    type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path),
    default=None,
    envvar=STORES_ENV_VAR,
    help=f"TOML file declaring store connection groups (or set {STORES_ENV_VAR})",
)
@click.option("--verbose", is_flag=True, help="Log rule evaluation and store queries")
@click.pass_context
def cli(ctx: click.Context, stores: Path | None, verbose: bool) -> None:
    """fieldrules - Field validation predicates.

    Run single predicates or whole rulesets against submitted data.
    """
    ctx.ensure_object(dict)
    _configure_logging(verbose)
    ctx.obj["stores"] = stores


@cli.command("list")
def list_predicates() -> None:
    """List the available predicates."""
    from .commands.check import run_list

    sys.exit(run_list())


@cli.command("check")
@click.argument("predicate")
@click.argument("value", required=False)
@click.option("--param", "-p", type=str, default=None, help="Rule parameter string (e.g. '5,8,12' or 'users.email,id,5')")
@click.option(
    "--data",
    "data_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON object with the rest of the submission",
)
@click.option("--null", "null_value", is_flag=True, help="Check an absent value instead of VALUE")
@click.pass_context
def check_cmd(
    ctx: click.Context,
    predicate: str,
    value: str | None,
    param: str | None,
    data_path: Path | None,
    null_value: bool,
) -> None:
    """Run one PREDICATE against VALUE.

    Examples:

        fieldrules check in_list b --param " a , b ,c"

        fieldrules check required_with --null --param password --data form.json

        fieldrules --stores stores.toml check is_unique a@b.com -p users.email,id,5
    """
    from .commands.check import run_check

    if null_value:
        value = None
    elif value is None:
        raise click.UsageError("VALUE is required unless --null is given")

    sys.exit(run_check(predicate, value, param, data_path, ctx.obj["stores"]))


@cli.command()
@click.argument("data_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--rules",
    "rules_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="TOML ruleset",
)
@click.option("--json", "output_json", is_flag=True, help="Output results as JSON")
@click.option("--bail/--no-bail", default=None, help="Stop checking a field after its first failure (default: ruleset setting)")
@click.pass_context
def validate(ctx: click.Context, data_path: Path, rules_path: Path, output_json: bool, bail: bool | None) -> None:
    """Validate a JSON submission against a ruleset."""
    from .commands.check import run_validate

    sys.exit(run_validate(data_path, rules_path, ctx.obj["stores"], output_json, bail))


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
