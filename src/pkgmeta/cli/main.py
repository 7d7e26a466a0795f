"""Command line entry point: ``pkgmeta info`` and ``pkgmeta formats``."""

import typer

from pkgmeta import __version__
from pkgmeta.cli import info

app = typer.Typer(
    name="pkgmeta",
    help="Read name, version and icon metadata from .apk, .xapk and .ipa files.",
    no_args_is_help=True,
)

app.command("info", help="Show the metadata record of one package.")(info.show_info)
app.command("formats", help="List the package extensions that can be read.")(
    info.list_formats
)


def _print_version(value: bool) -> None:
    if not value:
        return
    typer.echo(f"pkgmeta {__version__}")
    raise typer.Exit()


@app.callback()
def cli(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_print_version,
        is_eager=True,
        help="Print the pkgmeta version and exit.",
    ),
) -> None:
    """Mobile package metadata extraction."""
