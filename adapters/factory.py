"""
Resolve a site name or a job-board URL to its adapter.

URLs are recognised by an `http://` or `https://` prefix and matched on host
by domain substring, first match in declared site order. Anything else is
treated as a literal site key, compared case-insensitively.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from urllib.parse import urlsplit

from adapters import ADAPTER_REGISTRY, JobSiteAdapter
from utils.errors import InvalidInputError, UnknownSiteError
from utils.schema import SITE_DOMAINS, SUPPORTED_SITES


def resolve_site(name_or_url: Any) -> str:
    """
    Return the site key for a URL or site name.

    Args:
        name_or_url: A job-board URL (with scheme) or a site key such as
            'LinkedIn'.

    Returns:
        One of `SUPPORTED_SITES`.

    Raises:
        InvalidInputError: If the input is not a non-empty string, or is a
            URL without a host.
        UnknownSiteError: If the host or key matches no supported site. The
            error's `value` is the host for URLs and the raw input otherwise.
    """
    if not name_or_url or not isinstance(name_or_url, str):
        raise InvalidInputError(name_or_url, "Site name or URL is required")

    lower = name_or_url.lower()
    if lower.startswith(("http://", "https://")):
        try:
            host = (urlsplit(name_or_url).hostname or "").lower()
        except ValueError as e:
            raise InvalidInputError(name_or_url, f"Invalid URL: {name_or_url}") from e
        if not host:
            raise InvalidInputError(name_or_url, f"Invalid URL: {name_or_url}")
        for site in SUPPORTED_SITES:
            if SITE_DOMAINS[site] in host:
                return site
        raise UnknownSiteError(host, f"Unknown job site: {host}")

    if lower in ADAPTER_REGISTRY:
        return lower
    raise UnknownSiteError(name_or_url, f"Unknown site name: {name_or_url}")


def create_adapter(
    name_or_url: Any, config: Optional[Dict[str, Any]] = None
) -> JobSiteAdapter:
    site = resolve_site(name_or_url)
    return ADAPTER_REGISTRY[site](config)


def get_supported_sites() -> List[str]:
    return list(SUPPORTED_SITES)


def is_site_supported(name_or_url: Any) -> bool:
    try:
        return resolve_site(name_or_url) in SUPPORTED_SITES
    except Exception:
        return False
