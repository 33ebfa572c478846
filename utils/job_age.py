"""
Recency filter tokens and their per-site URL parameters.

'any' | '24h' | '7d' | '14d' | '30d' map to a day threshold (None for 'any'
and for unknown tokens). Each site expresses recency differently:
  - linkedin: f_TPR=r<seconds> (a fixed set of ranges)
  - indeed:   fromage=<days>
  - glassdoor: fromAge=<days>
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from utils.transforms import set_query_param

AGE_FILTER_DAYS: Dict[str, Optional[int]] = {
    "any": None,
    "24h": 1,
    "7d": 7,
    "14d": 14,
    "30d": 30,
}

LINKEDIN_TPR: Dict[int, str] = {
    1: "r86400",
    7: "r604800",
    14: "r1209600",
    30: "r2592000",
}


def parse_age_filter(token: Any) -> Optional[int]:
    if not isinstance(token, str):
        return None
    return AGE_FILTER_DAYS.get(token)


class JobAgeFilter:
    def __init__(self, age_filter: str = "any") -> None:
        self.age_filter = age_filter
        self.age_days = parse_age_filter(age_filter)

    def apply_to_url(self, url: str, platform: Any) -> str:
        """
        Set the site's recency parameter on `url`.

        Returns the URL unchanged when the filter is 'any' (or unknown) or the
        platform is not a supported site. Existing values are overwritten, so
        applying twice gives the same URL.
        """
        if self.age_days is None or not isinstance(platform, str):
            return url
        handlers: Dict[str, Callable[[str], str]] = {
            "linkedin": self.apply_linkedin,
            "indeed": self.apply_indeed,
            "glassdoor": self.apply_glassdoor,
        }
        handler = handlers.get(platform.lower())
        if handler is None:
            return url
        return handler(url)

    def apply_linkedin(self, url: str) -> str:
        tpr = LINKEDIN_TPR.get(self.age_days)
        if tpr is None:
            return url
        return set_query_param(url, "f_TPR", tpr)

    def apply_indeed(self, url: str) -> str:
        if self.age_days is None:
            return url
        return set_query_param(url, "fromage", self.age_days)

    def apply_glassdoor(self, url: str) -> str:
        if self.age_days is None:
            return url
        return set_query_param(url, "fromAge", self.age_days)
