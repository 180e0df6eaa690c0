"""
Red Hat target.

kernel-devel is installed with ``yum --downloadonly`` inside the build
container, so nothing has to be resolved up front. User supplied kernel URLs
replace the yum download.
"""

from dataclasses import dataclass

from ..cli_logger import logger
from ..utils import DEFAULT_TIMEOUT
from .base import Builder, TemplateData, common_template_fields, render_script
from .resolver import ResolvedArtifactSet, resolve_artifacts

TARGET = "redhat"
TEMPLATE = "redhat.sh.j2"

MINIMUM_ARTIFACTS = 0
MINIMUM_OVERRIDE_ARTIFACTS = 1


@dataclass(frozen=True, kw_only=True)
class RedhatTemplateData(TemplateData):
    kernel_package: str


def resolve(kr, override_urls=None, *, timeout=DEFAULT_TIMEOUT):
    if not override_urls:
        logger.info(f"kernel-devel-{kr.kernel_release} will be downloaded with yum")
        return ResolvedArtifactSet()
    return resolve_artifacts(
        (),
        minimum=MINIMUM_OVERRIDE_ARTIFACTS,
        override_urls=override_urls,
        kernel_release=kr.kernel_release,
        timeout=timeout,
    )


def synthesize(config, kr, artifacts) -> str:
    data = RedhatTemplateData(
        **common_template_fields(config, kr, artifacts),
        kernel_package=kr.kernel_release,
    )
    return render_script(TEMPLATE, data)


BUILDER = Builder(TARGET, resolve, synthesize, MINIMUM_ARTIFACTS)
