"""
Artifact resolution shared by every target.

A target describes the packages it needs as a list of :class:`ArtifactRole`.
Each role is searched over its mirrors in priority order, and for every mirror
over its naming schemes (older convention first). The first mirror that yields
a match satisfies the role; the remaining mirrors are never contacted for it.
"""

from dataclasses import dataclass
from typing import Optional

from ..cli_logger import logger
from ..errors import ArtifactNotFoundError, InsufficientArtifactsError
from ..utils import DEFAULT_TIMEOUT, PackageIndexMatcher, fetch_index, get_resolving_urls

OVERRIDE_ROLE = "override"


@dataclass(frozen=True)
class ArtifactRole:
    name: str
    mirrors: tuple
    schemes: tuple


@dataclass(frozen=True)
class ResolvedArtifact:
    role: str
    url: str


@dataclass(frozen=True)
class ResolvedArtifactSet:
    artifacts: tuple = ()

    @property
    def urls(self) -> list:
        return [a.url for a in self.artifacts]

    def __len__(self):
        return len(self.artifacts)

    def __iter__(self):
        return iter(self.artifacts)


class IndexCache:
    """Index pages fetched during one resolution, failures included."""

    def __init__(self, timeout=DEFAULT_TIMEOUT):
        self.timeout = timeout
        self._pages = {}

    def get(self, url: str) -> Optional[str]:
        if url not in self._pages:
            self._pages[url] = fetch_index(url, timeout=self.timeout)
        return self._pages[url]


def resolve_role(role: ArtifactRole, cache: IndexCache) -> Optional[ResolvedArtifact]:
    matcher = PackageIndexMatcher(role.schemes)
    for mirror in role.mirrors:
        body = cache.get(mirror)
        if body is None:
            continue
        match = matcher.match(body)
        if match is None:
            logger.debug(f"No '{role.name}' package on {mirror}")
            continue
        url = mirror + match.first
        logger.info(f"  - Found '{role.name}' ({match.scheme.name} naming): {url}")
        return ResolvedArtifact(role.name, url)
    return None


def _check_cardinality(artifacts, minimum: int, timeout) -> ResolvedArtifactSet:
    resolving = set(get_resolving_urls([a.url for a in artifacts], timeout=timeout))
    kept = tuple(a for a in artifacts if a.url in resolving)
    if len(kept) < minimum:
        raise InsufficientArtifactsError(len(kept), minimum, urls=tuple(a.url for a in artifacts))
    return ResolvedArtifactSet(kept)


def resolve_artifacts(roles, *, minimum: int, override_urls=None, kernel_release: str = "",
                      timeout=DEFAULT_TIMEOUT) -> ResolvedArtifactSet:
    """Resolve the download URLs for ``roles``.

    Caller supplied ``override_urls`` bypass the index search and are only
    checked for reachability.

    Raises:
        ArtifactNotFoundError: a role has no match on any mirror with any scheme.
        InsufficientArtifactsError: fewer than ``minimum`` reachable URLs remain.
    """
    if override_urls:
        logger.info(f"Using {len(override_urls)} user supplied kernel URL(s)")
        artifacts = [ResolvedArtifact(OVERRIDE_ROLE, url) for url in override_urls]
        return _check_cardinality(artifacts, minimum, timeout)

    cache = IndexCache(timeout=timeout)
    artifacts = []
    seen = set()
    for role in roles:
        artifact = resolve_role(role, cache)
        if artifact is None:
            raise ArtifactNotFoundError(role.name, kernel_release=kernel_release, mirrors=role.mirrors)
        if artifact.url not in seen:
            seen.add(artifact.url)
            artifacts.append(artifact)
    return _check_cardinality(artifacts, minimum, timeout)
