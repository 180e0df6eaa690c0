"""Builder value type and script rendering shared by every target."""

import shlex
from dataclasses import asdict, dataclass, field
from typing import Callable, Optional

import jinja2

from ..errors import SynthesisError

DRIVER_DIRECTORY = "/tmp/driver"
KERNEL_DIRECTORY = "/tmp/kernel"
PROBE_FULL_PATH = f"{DRIVER_DIRECTORY}/bpf/probe.o"

_environment = jinja2.Environment(
    loader=jinja2.PackageLoader("driverbuilder", "builder/templates"),
    undefined=jinja2.StrictUndefined,
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)
_environment.filters["quote"] = shlex.quote


@dataclass(frozen=True)
class Builder:
    """Artifact resolution and script synthesis for one distribution family.

    ``resolve(kernel_release, override_urls=None, *, timeout)`` returns a
    ResolvedArtifactSet; ``synthesize(config, kernel_release, artifacts)``
    returns the script text.
    """

    target: str
    resolve: Callable
    synthesize: Callable
    minimum_artifacts: int = 0


@dataclass(frozen=True, kw_only=True)
class TemplateData:
    driver_build_dir: str = DRIVER_DIRECTORY
    kernel_dir: str = KERNEL_DIRECTORY
    module_download_url: str
    kernel_download_urls: tuple = field(default_factory=tuple)
    kernel_release: str
    module_driver_name: str
    # unset paths drop the matching section from the script
    module_full_path: Optional[str] = None
    probe_full_path: Optional[str] = None


def common_template_fields(config, kr, artifacts) -> dict:
    return {
        "kernel_release": kr.kernel_release,
        "module_download_url": config.module_download_url,
        "kernel_download_urls": tuple(artifacts.urls),
        "module_driver_name": config.driver_name,
        "module_full_path": config.module_file_path or None,
        "probe_full_path": PROBE_FULL_PATH if config.build_probe else None,
    }


def render_script(template_name: str, template_data: TemplateData) -> str:
    try:
        template = _environment.get_template(template_name)
        return template.render(asdict(template_data))
    except jinja2.TemplateError as e:
        raise SynthesisError(
            f"Cannot render template '{template_name}': {e}",
            context={"template": template_name, "data": type(template_data).__name__},
        ) from e
