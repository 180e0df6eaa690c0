import click
import importlib.metadata
from ..cli_logger import logger

@click.command()
def version():
    """Print the version of the DriverBuilder tool."""
    try:
        click.echo(f"driverbuilder {importlib.metadata.version('driverbuilder')}")
    except importlib.metadata.PackageNotFoundError:
        logger.error("Error: Could not determine the version of DriverBuilder. Is it installed correctly?")
