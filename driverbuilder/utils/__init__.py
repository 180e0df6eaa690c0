from .package_index import (
    DEFAULT_TIMEOUT,
    IndexMatch,
    NamingScheme,
    PackageIndexMatcher,
    fetch_index,
)
from .url_checker import get_resolving_urls, is_resolving
