"""Generate driver build scripts for specific kernel releases."""

from .build_config import BuildConfig
from .builder import build_script, get_builder, targets
from .errors import (
    ArtifactNotFoundError,
    BuildError,
    InsufficientArtifactsError,
    ParseError,
    ResolutionError,
    SynthesisError,
    UnsupportedDistroError,
)
from .kernelrelease import Architecture, KernelRelease, parse_kernel_release
