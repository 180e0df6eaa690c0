import os
import re
from dataclasses import dataclass
from html.parser import HTMLParser
from typing import Optional
from urllib.parse import unquote, urlparse

import requests

from ..cli_logger import logger

DEFAULT_TIMEOUT = 30


@dataclass(frozen=True)
class NamingScheme:
    """A package naming convention, as a regex matched against whole filenames."""

    name: str
    pattern: re.Pattern

    def matches(self, filename: str) -> bool:
        return self.pattern.fullmatch(filename) is not None


@dataclass(frozen=True)
class IndexMatch:
    scheme: NamingScheme
    filenames: tuple

    @property
    def first(self) -> str:
        return self.filenames[0]


class PackageLinkFinder(HTMLParser):
    def __init__(self):
        super().__init__()
        self.filenames = []

    def handle_starttag(self, tag, attrs):
        if tag == "a":
            for attr, value in attrs:
                if attr == "href" and value:
                    filename = os.path.basename(unquote(urlparse(value).path))
                    if filename:
                        self.filenames.append(filename)


class PackageIndexMatcher:
    """Extract package filenames from a repository index page.

    Naming schemes are tried in the given order; the first one matching at
    least one filename wins. Filenames keep the order they have on the page.
    """

    def __init__(self, schemes):
        self.schemes = tuple(schemes)

    @staticmethod
    def filenames(body) -> list:
        if isinstance(body, bytes):
            body = body.decode("utf-8", errors="replace")
        parser = PackageLinkFinder()
        parser.feed(body)
        parser.close()
        return parser.filenames

    def match(self, body) -> Optional[IndexMatch]:
        filenames = self.filenames(body)
        for scheme in self.schemes:
            found = tuple(f for f in filenames if scheme.matches(f))
            if found:
                logger.debug(f"Naming scheme '{scheme.name}' matched {len(found)} file(s): {', '.join(found)}")
                return IndexMatch(scheme, found)
        return None


def fetch_index(url: str, timeout=DEFAULT_TIMEOUT) -> Optional[str]:
    """Download a repository index page, returning None if it can't be fetched."""
    logger.debug(f"Fetching index {url}")
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        return response.text
    except requests.exceptions.RequestException as e:
        logger.warning(f"Could not fetch index {url}: {type(e).__name__}: {e}")
        return None
