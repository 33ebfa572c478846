from __future__ import annotations

from typing import Any, Iterable, List, Optional

from utils.schema import SITE_DOMAINS, SUPPORTED_SITES


class PlatformFilter:
    """
    Allow-list of job boards to crawl.

    URLs on domains that belong to none of the supported sites are always
    dropped, whatever the allow-list says.
    """

    def __init__(self, platforms: Optional[Iterable[str]] = None) -> None:
        if platforms is None:
            platforms = SUPPORTED_SITES
        self._enabled: List[str] = [str(p).lower() for p in platforms]

    def is_enabled(self, platform: Any) -> bool:
        if not isinstance(platform, str):
            return False
        return platform.lower() in self._enabled

    def detect_platform(self, url: Any) -> Optional[str]:
        if not isinstance(url, str):
            return None
        lower = url.lower()
        for site in SUPPORTED_SITES:
            if SITE_DOMAINS[site] in lower:
                return site
        return None

    def filter_urls(self, urls: Iterable[str]) -> List[str]:
        out = []
        for url in urls:
            platform = self.detect_platform(url)
            if platform and self.is_enabled(platform):
                out.append(url)
        return out

    def get_enabled_platforms(self) -> List[str]:
        return list(self._enabled)
