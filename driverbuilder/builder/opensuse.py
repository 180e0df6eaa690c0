"""
openSUSE target.

Two RPMs are needed: kernel-default-devel (arch specific build objects) and
kernel-devel (the noarch sources they point to). Both are looked up on the
Leap distribution and update repositories, then on Tumbleweed.
"""

import re
from dataclasses import dataclass

from ..cli_logger import logger
from ..utils import DEFAULT_TIMEOUT, NamingScheme
from .base import Builder, TemplateData, common_template_fields, render_script
from .resolver import ArtifactRole, resolve_artifacts

TARGET = "opensuse"
TEMPLATE = "opensuse.sh.j2"

# kernel-default-devel, kernel-devel
MINIMUM_ARTIFACTS = 2

BASE_URL = "https://download.opensuse.org/"
LEAP_RELEASES = ("15.2", "15.3", "15.4", "15.5", "15.6")
FLAVOR = "default"


@dataclass(frozen=True, kw_only=True)
class OpensuseTemplateData(TemplateData):
    gcc_version: str


def gcc_version(kr) -> str:
    if kr.version <= 3:
        return "5"
    if kr.version == 4:
        return "8"
    if kr.version == 5:
        return "10"
    return "12"


def repository_dirs(directory: str):
    """Index URLs for an architecture directory (``x86_64``, ``noarch``...), in lookup order."""
    dirs = []
    for release in LEAP_RELEASES:
        dirs.append(f"{BASE_URL}distribution/leap/{release}/repo/oss/{directory}/")
        dirs.append(f"{BASE_URL}update/leap/{release}/oss/{directory}/")
    dirs.append(f"{BASE_URL}tumbleweed/repo/oss/{directory}/")
    return tuple(dirs)


def package_fragment(kr) -> str:
    """``-lp152.19-default`` -> ``-lp152.19``."""
    fragment = kr.full_extraversion
    if fragment.endswith("-" + FLAVOR):
        fragment = fragment[:-len(FLAVOR) - 1]
    return fragment


def package_schemes(kr, package: str, rpm_arch: str):
    version = rf"{kr.version}\.{kr.patchlevel}\.{kr.sublevel}{re.escape(package_fragment(kr))}"
    package = re.escape(package)
    rpm_arch = re.escape(rpm_arch)
    return (
        # kernel-devel-4.12.14-lp151.27.noarch.rpm
        NamingScheme("older", re.compile(rf"{package}-{version}\.{rpm_arch}\.rpm")),
        # kernel-devel-5.3.18-lp152.19.2.noarch.rpm, rebuild counter appended
        NamingScheme("newer", re.compile(rf"{package}-{version}\.[0-9]+\.{rpm_arch}\.rpm")),
    )


def artifact_roles(kr):
    rpm_arch = kr.architecture.to_rpm()
    return (
        ArtifactRole("kernel-default-devel", repository_dirs(rpm_arch),
                     package_schemes(kr, "kernel-default-devel", rpm_arch)),
        ArtifactRole("kernel-devel", repository_dirs("noarch"),
                     package_schemes(kr, "kernel-devel", "noarch")),
    )


def resolve(kr, override_urls=None, *, timeout=DEFAULT_TIMEOUT):
    logger.info(f"Resolving openSUSE kernel packages for {kr}...")
    return resolve_artifacts(
        artifact_roles(kr),
        minimum=MINIMUM_ARTIFACTS,
        override_urls=override_urls,
        kernel_release=kr.kernel_release,
        timeout=timeout,
    )


def synthesize(config, kr, artifacts) -> str:
    data = OpensuseTemplateData(
        **common_template_fields(config, kr, artifacts),
        gcc_version=gcc_version(kr),
    )
    return render_script(TEMPLATE, data)


BUILDER = Builder(TARGET, resolve, synthesize, MINIMUM_ARTIFACTS)
