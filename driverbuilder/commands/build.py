import click
import os
from .. import config as config_module
from .. import builder
from ..build_config import build_config_from_dict
from ..cli_logger import logger
from ..decorators import handle_exceptions
from ..kernelrelease import parse_kernel_release
from ..utils import DEFAULT_TIMEOUT

@click.command()
@click.pass_context
@click.argument("target", required=False)
@click.option("--kernelrelease", "-k", default=None, help="Target kernel release, as printed by 'uname -r'.")
@click.option("--arch", default=None, help="Target architecture (amd64, arm64).")
@click.option("--driver-version", default=None, help="Driver version (name of the source archive, without .tar.gz).")
@click.option("--driver-name", default=None, help="Name of the kernel module.")
@click.option("--module-output", default=None, help="Path the kernel module is written to.")
@click.option("--probe-output", default=None, help="Path of the eBPF probe to build.")
@click.option("--kernel-url", "kernel_urls", multiple=True, help="Kernel package URL, skips the lookup. Repeatable.")
@click.option("--download-base-url", default=None, help="Base URL of the driver source archives.")
@click.option("--timeout", type=float, default=None, help="Timeout in seconds of each repository request.")
@click.option("--output", "-o", default="-", help="File to write the build script to ('-' for stdout).")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@handle_exceptions
def build(ctx, target, kernelrelease, arch, driver_version, driver_name, module_output, probe_output,
          kernel_urls, download_base_url, timeout, output, verbose):
    """Generate the script that builds the driver for a kernel.

    TARGET: The distribution family of the kernel (e.g., debian, redhat, opensuse).
    """
    logger.verbose = verbose
    conf = config_module.load_config(path=ctx.obj["path"])
    build_conf = dict(config_module.get_section(conf, "build"))
    resolver_conf = config_module.get_section(conf, "resolver")

    # Override config values with command-line arguments if provided
    if target: build_conf["target"] = target
    if kernelrelease: build_conf["kernelrelease"] = kernelrelease
    if arch: build_conf["architecture"] = arch
    if driver_version: build_conf["driverversion"] = driver_version
    if driver_name: build_conf["drivername"] = driver_name
    if module_output: build_conf["moduleoutput"] = module_output
    if probe_output: build_conf["probeoutput"] = probe_output
    if kernel_urls: build_conf["kernelurls"] = list(kernel_urls)
    if download_base_url: build_conf["downloadbaseurl"] = download_base_url
    if timeout is None:
        timeout = resolver_conf.get("timeout", DEFAULT_TIMEOUT)
        try:
            timeout = float(timeout)
        except (TypeError, ValueError):
            raise click.UsageError(
                f"Invalid 'timeout' in the [resolver] section of {config_module.CONFIG_FILE}: {timeout!r} is not a number."
            ) from None

    for key, option in (("target", "TARGET"), ("kernelrelease", "--kernelrelease"), ("driverversion", "--driver-version")):
        if not build_conf.get(key):
            raise click.UsageError(f"Missing {option} (or '{key}' in the [build] section of {config_module.CONFIG_FILE}).")

    kernel_release = parse_kernel_release(build_conf["kernelrelease"], build_conf.get("architecture", "amd64"))
    build_config = build_config_from_dict(build_conf)
    if not build_config.build_module and not build_config.build_probe:
        logger.warning("Neither --module-output nor --probe-output is set: the script will only fetch the sources.")

    logger.info(f"Generating {build_conf['target']} build script for {kernel_release}...")
    script = builder.build_script(build_conf["target"], build_config, kernel_release, timeout=timeout)

    if output == "-":
        click.echo(script, nl=False)
    else:
        with open(output, "w") as f:
            f.write(script)
        os.chmod(output, 0o755)
        logger.success(f"Build script written to {output}")
    return True
