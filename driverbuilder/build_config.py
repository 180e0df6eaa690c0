from dataclasses import dataclass
from typing import Optional

DEFAULT_DRIVER_NAME = "falco"
DEFAULT_DOWNLOAD_BASE_URL = "https://github.com/falcosecurity/libs/archive"


@dataclass(frozen=True)
class BuildConfig:
    """What to build: the driver sources to fetch and the artifacts to produce."""

    driver_version: str
    driver_name: str = DEFAULT_DRIVER_NAME
    module_file_path: Optional[str] = None
    probe_file_path: Optional[str] = None
    kernel_urls: Optional[tuple] = None
    download_base_url: str = DEFAULT_DOWNLOAD_BASE_URL

    @property
    def module_download_url(self) -> str:
        return f"{self.download_base_url.rstrip('/')}/{self.driver_version}.tar.gz"

    @property
    def build_module(self) -> bool:
        return bool(self.module_file_path)

    @property
    def build_probe(self) -> bool:
        return bool(self.probe_file_path)


def build_config_from_dict(values: dict) -> BuildConfig:
    """Create a BuildConfig from the ``[build]`` table of driverbuilder.toml."""
    kernel_urls = values.get("kernelurls") or None
    # 'config set' stores a single comma separated string
    if isinstance(kernel_urls, str):
        kernel_urls = [url.strip() for url in kernel_urls.split(",") if url.strip()]
    return BuildConfig(
        driver_version=str(values.get("driverversion", "")),
        driver_name=values.get("drivername") or DEFAULT_DRIVER_NAME,
        module_file_path=values.get("moduleoutput") or None,
        probe_file_path=values.get("probeoutput") or None,
        kernel_urls=tuple(kernel_urls) if kernel_urls else None,
        download_base_url=values.get("downloadbaseurl") or DEFAULT_DOWNLOAD_BASE_URL,
    )
