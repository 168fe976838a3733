"""Typer application entrypoint."""

import logging
from typing import Optional

import typer

from jiractl.cli.commands.auth import app as auth_app
from jiractl.cli.commands.issues import app as issues_app
from jiractl.version import __version__

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="jiractl: Jira Cloud CLI for agents. Use --json on data commands for agent-friendly output.",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"jiractl {__version__}")
        raise typer.Exit()


@app.callback()
def _global_options(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging."
    ),
    version: Optional[bool] = typer.Option(  # noqa: ARG001
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Global options for jiractl."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s", force=True)


@app.command("version")
def version_command() -> None:
    """Print version."""
    typer.echo(f"jiractl {__version__}")


app.add_typer(auth_app, name="auth")
app.add_typer(issues_app, name="issues")


def main() -> None:
    """Run the CLI app."""
    app()


if __name__ == "__main__":
    main()
