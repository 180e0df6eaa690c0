"""
Kernel release parsing.

A kernel release is the ``uname -r`` string of the target kernel (for example
``5.10.0-8-amd64`` or ``3.10.0-957.el7.x86_64``) plus the CPU architecture the
driver has to be built for. Only the leading dotted triple is interpreted;
everything after it is kept verbatim as the full extraversion, since every
distribution encodes its own build tags there.
"""

import re
from dataclasses import dataclass
from enum import Enum

from .errors import ParseError

KERNEL_RELEASE_REGEX = re.compile(
    r"^(?P<version>\d+)\.(?P<patchlevel>\d+)\.(?P<sublevel>\d+)(?P<fullextraversion>[-.+~_][\w.+~-]*)?$"
)
EXTRAVERSION_REGEX = re.compile(r"^[-.+~_](?P<extraversion>\d+)")


class Architecture(Enum):
    AMD64 = "amd64"
    ARM64 = "arm64"

    def __str__(self):
        return self.value

    def to_rpm(self):
        """Architecture name as used by RPM based distributions."""
        return RPM_ARCHITECTURES[self]


ARCHITECTURE_ALIASES = {
    "amd64": Architecture.AMD64,
    "x86_64": Architecture.AMD64,
    "arm64": Architecture.ARM64,
    "aarch64": Architecture.ARM64,
}

RPM_ARCHITECTURES = {
    Architecture.AMD64: "x86_64",
    Architecture.ARM64: "aarch64",
}


def parse_architecture(token) -> Architecture:
    if isinstance(token, Architecture):
        return token
    arch = ARCHITECTURE_ALIASES.get(str(token).strip().lower())
    if arch is None:
        raise ParseError(
            f"Unrecognized architecture '{token}'.",
            hint=f"Supported architectures: {', '.join(a.value for a in Architecture)}.",
        )
    return arch


@dataclass(frozen=True)
class KernelRelease:
    version: int
    patchlevel: int
    sublevel: int
    full_extraversion: str
    architecture: Architecture

    @property
    def fullversion(self) -> str:
        return f"{self.version}.{self.patchlevel}.{self.sublevel}"

    @property
    def extraversion(self) -> str:
        """Leading build counter of the extraversion, e.g. ``8`` for ``-8-amd64``."""
        match = EXTRAVERSION_REGEX.match(self.full_extraversion)
        return match.group("extraversion") if match else ""

    @property
    def kernel_release(self) -> str:
        return self.fullversion + self.full_extraversion

    def __str__(self):
        return f"{self.kernel_release} ({self.architecture})"


def parse_kernel_release(release: str, architecture="amd64") -> KernelRelease:
    """Parse a kernel release string into a :class:`KernelRelease`.

    Raises:
        ParseError: if the string does not start with a ``V.P.S`` triple or the
            architecture is unknown.
    """
    arch = parse_architecture(architecture)
    match = KERNEL_RELEASE_REGEX.match((release or "").strip())
    if match is None:
        raise ParseError(
            f"Cannot parse kernel release '{release}'.",
            hint="Expected a release such as 5.10.0-8-amd64 (as printed by 'uname -r').",
        )
    return KernelRelease(
        version=int(match.group("version")),
        patchlevel=int(match.group("patchlevel")),
        sublevel=int(match.group("sublevel")),
        full_extraversion=match.group("fullextraversion") or "",
        architecture=arch,
    )
