import click
from .commands import build, config, log, targets, version


@click.group()
@click.option("--path", "-p", default=".", help="Path to the project directory holding driverbuilder.toml.")
@click.pass_context
def cli(ctx, path):
    """DriverBuilder CLI tool."""
    ctx.obj = {"path": path}

cli.add_command(build)
cli.add_command(targets)
cli.add_command(config)
cli.add_command(version)
cli.add_command(log)

if __name__ == '__main__':
    cli()
