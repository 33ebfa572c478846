"""
Base site adapter and shared normalization.

`JobSiteAdapter` defines the per-site contract: URL recognition, search and
pagination URL construction, and raw → unified-schema normalization. It does
not drive a browser or fetch pages; the crawl collaborator hands it the raw
dicts it extracted. Subclasses set the site constants and implement
`search_params`, `page_value`, `id_from_url`, `url_for_id` and `parse_salary`.

Typical usage:
    adapter = LinkedInAdapter()
    url = adapter.build_search_url("data engineer", "Berlin")
    job = adapter.normalize_data({"url": ..., "title": ..., "company": ...})
"""

from __future__ import annotations

import logging
import re

from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

from utils.errors import InvalidInputError
from utils.log import log_event
from utils.schema import empty_salary
from utils.transforms import (
    normalize_experience_level,
    normalize_job_type,
    parse_first_int,
    parse_float,
    sanitize_description,
    set_query_param,
    url_digest,
    utc_now_iso,
)


def _clean(v: Any) -> Any:
    return v.strip() if isinstance(v, str) else v


def _as_list(v: Any) -> List[Any]:
    if not v:
        return []
    if isinstance(v, str):
        return [v.strip()]
    return list(v)


class JobSiteAdapter:
    """
    Abstract base class for all job-board adapters.

    Attributes:
        site_name: Site key used as `source` and `_site` on normalized jobs.
        domain: Domain substring identifying the site's URLs.
        search_base: Listing URL that search parameters are appended to.
        page_param: Query parameter that carries pagination.
        config: Caller-supplied settings echoed by `get_site_config`.
        logger: LoggerAdapter that injects a `site` field for uniform logs.
    """

    site_name: str = "base"
    domain: str = ""
    search_base: str = ""
    page_param: str = "page"

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        self.config = dict(config or {})
        self.site_pattern = re.compile(re.escape(self.domain), re.I)
        self.logger = logging.LoggerAdapter(
            logging.getLogger(self.__class__.__name__), {"site": self.site_name}
        )

    def log(self, event: str, level: str = "info", **kv: Any) -> None:
        log_event(self.logger, event, level, **kv)

    # -----------------------------
    # Methods to override in subclasses
    # -----------------------------
    def search_params(self, query: str, location: str, page: int) -> Dict[str, Any]:
        """
        Query parameters for a search listing, in the site's order.

        Raises:
            NotImplementedError: Subclasses must implement this method.
        """
        raise NotImplementedError

    def page_value(self, page: int) -> int:
        """
        Convert a zero-based page index into the site's pagination unit
        (result offset or one-based page number).
        """
        raise NotImplementedError

    def id_from_url(self, url: str) -> Optional[str]:
        raise NotImplementedError

    def url_for_id(self, job_id: str) -> str:
        raise NotImplementedError

    def parse_salary(self, salary_text: Any) -> Dict[str, Any]:
        """
        Parse a free-text salary into `{min, max, currency, period}`.

        Returns all-None values when the text is missing or has no number.
        """
        raise NotImplementedError

    # -----------------------------
    # Contract
    # -----------------------------
    def is_valid_url(self, url: Any) -> bool:
        return isinstance(url, str) and bool(self.site_pattern.search(url))

    def build_search_url(
        self, query: str, location: Optional[str] = None, page: int = 0
    ) -> str:
        params = self.search_params(query, location or "", page)
        return f"{self.search_base}?{urlencode(params)}"

    def build_page_url(self, base_url: str, page: int) -> str:
        """
        Point an existing listing URL at another page.

        Only the pagination parameter is rewritten; all other query
        parameters keep their position and encoding.
        """
        return set_query_param(base_url, self.page_param, self.page_value(page))

    def normalize_data(self, raw: Dict[str, Any]) -> Dict[str, Any]:
        """
        Convert one raw extracted record into the unified job schema.

        Args:
            raw: Site-specific dict produced by the extraction collaborator.
                Recognized keys: id, url, title, company, location, salary,
                description, requirements, benefits, jobType, experienceLevel,
                postedDate, applicantCount, companyLogo, companyRating.

        Returns:
            A new dict with every schema field present; unknown optionals are
            None and list fields are possibly empty lists.

        Raises:
            InvalidInputError: If the record carries neither a URL nor an id.
                A non-string `url` counts as missing.
        """
        url = raw.get("url")
        url = (url.strip() if isinstance(url, str) else "") or None
        raw_id = _clean(raw.get("id"))
        if not url and not raw_id:
            raise InvalidInputError(raw, "raw record has neither url nor id")

        job_id = str(raw_id) if raw_id else self._derive_id(url)
        scraped_at = utc_now_iso()

        return {
            "id": job_id,
            "url": url or self.url_for_id(job_id),
            "source": self.site_name,
            "title": _clean(raw.get("title")),
            "company": _clean(raw.get("company")),
            "location": _clean(raw.get("location")) or "Not specified",
            "salary": self.parse_salary(raw.get("salary")),
            "description": sanitize_description(raw.get("description")),
            "requirements": _as_list(raw.get("requirements")),
            "benefits": _as_list(raw.get("benefits")),
            "jobType": normalize_job_type(raw.get("jobType")),
            "experienceLevel": normalize_experience_level(raw.get("experienceLevel")),
            "postedDate": raw.get("postedDate") or scraped_at,
            "applicantCount": parse_first_int(raw.get("applicantCount")),
            "companyLogo": _clean(raw.get("companyLogo")) or None,
            "companyRating": parse_float(raw.get("companyRating")),
            "_scrapedAt": scraped_at,
            "_site": self.site_name,
        }

    def get_site_config(self) -> Dict[str, Any]:
        return {"name": self.site_name, **self.config}

    # -----------------------------
    # Shared helpers
    # -----------------------------
    def _derive_id(self, url: str) -> str:
        found = None
        try:
            found = self.id_from_url(url)
        except ValueError:
            found = None
        if found:
            return found
        # deterministic per URL
        fallback = f"{self.site_name}-{url_digest(url)}"
        self.log("normalize:id_fallback", level="debug", url=url, id=fallback)
        return fallback

    @staticmethod
    def _salary(
        lo: Optional[float], hi: Optional[float], period: str
    ) -> Dict[str, Any]:
        if lo is None:
            return empty_salary()
        return {"min": lo, "max": hi, "currency": "USD", "period": period}

    @staticmethod
    def _num(s: Optional[str], cast=int) -> Optional[float]:
        if not s:
            return None
        try:
            return cast(s.replace(",", ""))
        except ValueError:
            return None
