"""
LinkedIn adapter.

Search listings live under /jobs/search/ and paginate by result offset in
steps of 25 (`start`). Job ids are the numeric segment of /jobs/view/<id>.
"""

from __future__ import annotations

import re

from typing import Any, Dict, Optional
from urllib.parse import urlsplit

from adapters.base import JobSiteAdapter
from utils.schema import SalaryPeriod, empty_salary

_VIEW_ID_RE = re.compile(r"/jobs/view/(?:[^/?#]*-)?(\d+)")
_SALARY_RE = re.compile(r"\$?(\d[\d,]*)(?:\s*-\s*\$?(\d[\d,]*))?")


class LinkedInAdapter(JobSiteAdapter):
    site_name = "linkedin"
    domain = "linkedin.com"
    search_base = "https://www.linkedin.com/jobs/search/"
    page_param = "start"
    page_size = 25

    def search_params(self, query: str, location: str, page: int) -> Dict[str, Any]:
        return {
            "keywords": query,
            "location": location,
            "start": self.page_value(page),
        }

    def page_value(self, page: int) -> int:
        return int(page) * self.page_size

    def id_from_url(self, url: str) -> Optional[str]:
        m = _VIEW_ID_RE.search(url)
        if m:
            return m.group(1)
        segments = [s for s in urlsplit(url).path.split("/") if s]
        return segments[-1] if segments else None

    def url_for_id(self, job_id: str) -> str:
        return f"https://www.linkedin.com/jobs/view/{job_id}/"

    def parse_salary(self, salary_text: Any) -> Dict[str, Any]:
        if not salary_text or not isinstance(salary_text, str):
            return empty_salary()
        m = _SALARY_RE.search(salary_text)
        if not m:
            return empty_salary()
        period = (
            SalaryPeriod.Hour if "hour" in salary_text.lower() else SalaryPeriod.Year
        )
        return self._salary(self._num(m.group(1)), self._num(m.group(2)), period.value)
