"""
    Main entry point for the SQL Server host administration toolkit
"""
import logging
import sys

import click
from rich.logging import RichHandler

from collectors.windows import get_operating_system
from core.errors import UrnFormatError
from core.models import Credential
from core.report import write_json_report
from reports.formatter import console, print_inventory
from shared.sqlname import decode_sql_name, encode_sql_name
from shared.urn import convert_urn_to_path


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """Administrative helpers for SQL Server hosts."""
    setup_logging(verbose)


@cli.command("os-info")
@click.option("-c", "--computer", "computers", multiple=True, default=["."], show_default=True,
              help="Target computer (repeatable)")
@click.option("-u", "--username", envvar="SQLADMIN_USERNAME", help="Account for remote WMI")
@click.option("-p", "--password", envvar="SQLADMIN_PASSWORD", help="Password for --username")
@click.option("-o", "--output", "output_file", help="Write the inventory to a JSON file")
@click.option("--enable-exception", is_flag=True, help="Stop on the first failing target")
def os_info(computers, username, password, output_file, enable_exception):
    """Operating system, time zone and power plan details for each target."""
    if password and not username:
        raise click.UsageError("--password requires --username")
    credential = Credential(username, password or "") if username else None

    inventory = get_operating_system(computers, credential, enable_exception=enable_exception)
    print_inventory(inventory)

    if output_file:
        path = write_json_report(inventory, output_file)
        console.print(f"\nInventory written to {path}")

    if inventory.failed:
        sys.exit(2)


@cli.command("encode-name")
@click.argument("names", nargs=-1, required=True)
def encode_name(names):
    """Escape SQL Server identifiers for use in provider paths."""
    for name in names:
        click.echo(encode_sql_name(name))


@cli.command("decode-name")
@click.argument("names", nargs=-1, required=True)
def decode_name(names):
    """Reverse encode-name."""
    for name in names:
        click.echo(decode_sql_name(name))


@cli.command("urn-to-path")
@click.argument("urns", nargs=-1, required=True)
def urn_to_path(urns):
    """Convert SMO URNs into SQLSERVER: provider paths."""
    for urn in urns:
        try:
            click.echo(convert_urn_to_path(urn))
        except UrnFormatError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)


if __name__ == "__main__":
    cli()
