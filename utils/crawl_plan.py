from __future__ import annotations

import logging

from typing import TYPE_CHECKING, List

from adapters.factory import (
    create_adapter,
    get_supported_sites,
    is_site_supported,
    resolve_site,
)
from utils.job_age import JobAgeFilter
from utils.log import log_event
from utils.platform_filter import PlatformFilter
from utils.search_mode import apply_search_mode

if TYPE_CHECKING:
    from utils.run_config import RunConfig

logger = logging.getLogger(__name__)


def _is_http(url: object) -> bool:
    return isinstance(url, str) and url.lower().startswith(("http://", "https://"))


def build_start_urls(cfg: "RunConfig") -> List[str]:
    """
    Listing URLs to hand to the crawler.

    Explicit start URLs come first, then one search URL per query and enabled
    site. Every URL must be on an enabled site, judged by its host;
    the age filter is then applied for that site. Repeated URLs are kept once.

    Raises:
        ValueError: If no URL survives (no start URLs and no queries, or
            every URL was filtered out).
    """
    platform_filter = PlatformFilter(cfg.platforms)
    age_filter = JobAgeFilter(cfg.job_age)

    urls = list(cfg.start_urls)
    for query in cfg.search_queries:
        for site in get_supported_sites():
            if not platform_filter.is_enabled(site):
                continue
            adapter = create_adapter(site)
            url = adapter.build_search_url(query, cfg.location)
            urls.append(apply_search_mode(url, query, cfg.search_mode, site))

    out: List[str] = []
    dropped = 0
    for url in urls:
        # site by host; a domain mentioned in the query does not count
        if not _is_http(url) or not is_site_supported(url):
            dropped += 1
            continue
        site = resolve_site(url)
        if not platform_filter.is_enabled(site):
            dropped += 1
            continue
        url = age_filter.apply_to_url(url, site)
        if url not in out:
            out.append(url)
    if dropped:
        log_event(logger, "plan:filtered", dropped=dropped)

    if not out:
        raise ValueError("No URLs provided. Add startUrls or searchQueries.")
    log_event(logger, "plan:start_urls", n=len(out))
    return out


def page_urls(url: str, max_pages: int) -> List[str]:
    """The start URL followed by pages 1..max_pages-1 of the same listing."""
    adapter = create_adapter(url)
    return [url] + [adapter.build_page_url(url, n) for n in range(1, max_pages)]
