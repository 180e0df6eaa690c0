"""
Debian target.

Debian splits the kernel headers in three packages that all have to be
fetched: the arch-specific headers, the arch-independent "common" headers and
the kbuild tools of the same major.minor series.
"""

import re
from dataclasses import dataclass

from ..cli_logger import logger
from ..utils import DEFAULT_TIMEOUT, NamingScheme
from .base import Builder, TemplateData, common_template_fields, render_script
from .resolver import ArtifactRole, resolve_artifacts

TARGET = "debian"
TEMPLATE = "debian.sh.j2"

# kernel headers, common kernel headers, kbuild
MINIMUM_ARTIFACTS = 3

HEADERS_MIRRORS = (
    "http://security-cdn.debian.org/pool/main/l/linux/",
    "http://security-cdn.debian.org/pool/updates/main/l/linux/",
    "https://mirrors.edge.kernel.org/debian/pool/main/l/linux/",
)
KBUILD_MIRROR = "http://mirrors.kernel.org/debian/pool/main/l/linux/"
# 3.x kbuild packages were built from the linux-tools source package
LEGACY_KBUILD_MIRROR = "http://mirrors.kernel.org/debian/pool/main/l/linux-tools/"
LEGACY_KERNEL_VERSION = 3

COMMON_GROUP = "common"


@dataclass(frozen=True, kw_only=True)
class DebianTemplateData(TemplateData):
    architecture: str
    llvm_version: str


def llvm_version(kr) -> str:
    if kr.version == 5:
        return "12"
    return "7"


def headers_match_parts(kr):
    """Return the extraversion fragment and header group used in package names.

    ``4.19.0-6-cloud-amd64`` gives ``("-6", "cloud-amd64")``.
    """
    arch = str(kr.architecture)
    fragment = kr.full_extraversion
    if fragment.endswith("-" + arch):
        fragment = fragment[:-len(arch) - 1]
    group = arch
    if "-cloud" in kr.full_extraversion:
        if fragment.endswith("-cloud"):
            fragment = fragment[:-len("-cloud")]
        group = "cloud-" + group
    return fragment, group


def headers_schemes(kr, group: str, fragment: str):
    arch = re.escape(str(kr.architecture))
    group = re.escape(group)
    fragment = re.escape(fragment)
    version = rf"{kr.version}\.{kr.patchlevel}\.{kr.sublevel}"
    return (
        # linux-headers-5.10.0-8-amd64_5.10.46-4_amd64.deb for 5.10.0-8-amd64
        NamingScheme("older", re.compile(
            rf"linux-headers-{version}{fragment}-({group})_.*_({arch}|all)\.deb")),
        # linux-headers-5.10.0-12-amd64_5.10.103-1_amd64.deb for 5.10.103-1
        NamingScheme("newer", re.compile(
            rf"linux-headers-[0-9]+\.[0-9]+\.[0-9]+-[0-9]+-({group})_{version}{fragment}_({arch}|all)\.deb")),
    )


def kbuild_role(kr) -> ArtifactRole:
    mirror = LEGACY_KBUILD_MIRROR if kr.version == LEGACY_KERNEL_VERSION else KBUILD_MIRROR
    arch = re.escape(str(kr.architecture))
    scheme = NamingScheme("kbuild", re.compile(rf"linux-kbuild-{kr.version}\.{kr.patchlevel}_.*_{arch}\.deb"))
    return ArtifactRole("kbuild", (mirror,), (scheme,))


def artifact_roles(kr):
    fragment, group = headers_match_parts(kr)
    return (
        ArtifactRole("headers", HEADERS_MIRRORS, headers_schemes(kr, group, fragment)),
        ArtifactRole("headers-common", HEADERS_MIRRORS, headers_schemes(kr, COMMON_GROUP, fragment)),
        kbuild_role(kr),
    )


def resolve(kr, override_urls=None, *, timeout=DEFAULT_TIMEOUT):
    logger.info(f"Resolving Debian kernel packages for {kr}...")
    return resolve_artifacts(
        artifact_roles(kr),
        minimum=MINIMUM_ARTIFACTS,
        override_urls=override_urls,
        kernel_release=kr.kernel_release,
        timeout=timeout,
    )


def synthesize(config, kr, artifacts) -> str:
    data = DebianTemplateData(
        **common_template_fields(config, kr, artifacts),
        architecture=str(kr.architecture),
        llvm_version=llvm_version(kr),
    )
    return render_script(TEMPLATE, data)


BUILDER = Builder(TARGET, resolve, synthesize, MINIMUM_ARTIFACTS)
