"""
Builders by target.

The table is built once at import time and never modified afterwards, so
lookups need no locking.
"""

from types import MappingProxyType

from ..cli_logger import logger
from ..errors import UnsupportedDistroError
from ..utils import DEFAULT_TIMEOUT
from . import debian, opensuse, redhat
from .base import DRIVER_DIRECTORY, KERNEL_DIRECTORY, PROBE_FULL_PATH, Builder, render_script
from .resolver import ArtifactRole, ResolvedArtifact, ResolvedArtifactSet, resolve_artifacts

BUILDERS = MappingProxyType({
    b.target: b for b in (debian.BUILDER, opensuse.BUILDER, redhat.BUILDER)
})


def targets():
    return sorted(BUILDERS)


def get_builder(target: str) -> Builder:
    try:
        return BUILDERS[target]
    except KeyError:
        raise UnsupportedDistroError(target, targets()) from None


def build_script(target: str, config, kernel_release, timeout=DEFAULT_TIMEOUT) -> str:
    """Resolve the kernel artifacts for ``kernel_release`` and render the build script."""
    builder = get_builder(target)
    artifacts = builder.resolve(kernel_release, config.kernel_urls, timeout=timeout)
    logger.info(f"Resolved {len(artifacts)} kernel artifact(s) for {kernel_release}")
    return builder.synthesize(config, kernel_release, artifacts)


__all__ = [
    "ArtifactRole",
    "BUILDERS",
    "Builder",
    "DRIVER_DIRECTORY",
    "KERNEL_DIRECTORY",
    "PROBE_FULL_PATH",
    "ResolvedArtifact",
    "ResolvedArtifactSet",
    "build_script",
    "get_builder",
    "render_script",
    "resolve_artifacts",
    "targets",
]
