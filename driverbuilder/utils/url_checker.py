import requests

from ..cli_logger import logger
from .package_index import DEFAULT_TIMEOUT


def is_resolving(url: str, timeout=DEFAULT_TIMEOUT) -> bool:
    """Whether ``url`` answers a HEAD request (redirects followed) with a success status."""
    try:
        response = requests.head(url, allow_redirects=True, timeout=timeout)
        response.raise_for_status()
        return True
    except requests.exceptions.RequestException as e:
        logger.warning(f"Skipping unreachable URL {url}: {type(e).__name__}: {e}")
        return False


def get_resolving_urls(urls, timeout=DEFAULT_TIMEOUT) -> list:
    """Return the reachable subset of ``urls``, in their original order."""
    resolving = []
    for url in urls:
        if is_resolving(url, timeout=timeout):
            logger.debug(f"Resolved {url}")
            resolving.append(url)
    return resolving
