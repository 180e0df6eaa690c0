import click
from .. import builder

@click.command(name="targets")
@click.option("--verbose", "-v", is_flag=True, help="Also show how many kernel packages each target needs.")
def targets(verbose):
    """List the supported build targets."""
    for name in builder.targets():
        if verbose:
            click.echo(f"{name}\t(min. {builder.BUILDERS[name].minimum_artifacts} kernel packages)")
        else:
            click.echo(name)
