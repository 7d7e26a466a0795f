"""CLI commands for package metadata."""

import json
from pathlib import Path

import typer
from rich.markup import escape
from rich.table import Table

from pkgmeta.core.inspector import PackageInspector
from pkgmeta.exceptions import PkgmetaError
from pkgmeta.models.metadata import PackageFormat
from pkgmeta.utils.output import console

# Data URIs are long; the table only shows their head.
ICON_PREVIEW_CHARS = 48


def show_info(
    package_path: Path = typer.Argument(
        ...,
        help="Path to an .apk, .xapk or .ipa file.",
        dir_okay=False,
    ),
    aapt: Path = typer.Option(
        None,
        "--aapt",
        help="Path to the aapt executable (used for .apk files).",
        dir_okay=False,
    ),
    timeout: float = typer.Option(
        None,
        "--timeout",
        "-t",
        min=0.1,
        help="Seconds to wait for aapt before failing.",
    ),
    no_icon: bool = typer.Option(
        False,
        "--no-icon",
        help="Leave the icon data URI out of the output.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Output as JSON.",
    ),
) -> None:
    """Show metadata of a mobile application package.

    Reads .apk files through aapt badging, .xapk files through their
    manifest.json and .ipa files through the bundle Info.plist.
    """
    console.set_json_mode(json_output)

    try:
        metadata = PackageInspector(aapt_path=aapt, timeout=timeout).extract(
            package_path
        )
    except PkgmetaError as e:
        console.print_error(str(e))
        raise typer.Exit(1) from None

    exclude = {"icon"} if no_icon else None

    if json_output:
        output = metadata.model_dump(mode="json", by_alias=True, exclude=exclude)
        typer.echo(json.dumps(output, indent=2))
        return

    table = Table(title=escape(package_path.name), show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    rows = [
        ("Name", metadata.name),
        ("Identifier", metadata.unique_identifier),
        ("Version", metadata.version),
        ("Build", metadata.build_number),
        ("Minimum OS", metadata.minimum_os_version),
        ("Platform", metadata.platform.value),
    ]
    if metadata.device_family:
        rows.append(("Device family", ", ".join(metadata.device_family)))
    for field, value in rows:
        table.add_row(field, escape(value))
    if not no_icon:
        preview = metadata.icon[:ICON_PREVIEW_CHARS]
        table.add_row("Icon", f"{preview}… ({len(metadata.icon)} chars)")

    console.print(table)


def list_formats(
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Output as JSON.",
    ),
) -> None:
    """List supported package formats."""
    console.set_json_mode(json_output)

    if json_output:
        output = [
            {"extension": fmt.extension, "platform": fmt.platform.value}
            for fmt in PackageFormat
        ]
        typer.echo(json.dumps(output, indent=2))
        return

    table = Table(title="Supported Formats")
    table.add_column("Extension", style="cyan")
    table.add_column("Platform", style="green")
    for fmt in PackageFormat:
        table.add_row(fmt.extension, fmt.platform.value)

    console.print(table)
