from __future__ import annotations

import re

from typing import Any, Dict, Optional

from adapters.base import JobSiteAdapter
from utils.schema import SalaryPeriod, empty_salary
from utils.transforms import query_value

_SALARY_RE = re.compile(
    r"\$?(\d[\d,]*(?:\.\d+)?)(?:\s*-\s*\$?(\d[\d,]*(?:\.\d+)?))?"
)


class IndeedAdapter(JobSiteAdapter):
    """
    Indeed adapter.

    Listings paginate by result offset in steps of 10 (`start`); a posting is
    addressed by its `jk` job key. Salary snippets are often hourly or
    monthly ("$25 - $30 an hour"), so the period is read from the text.
    """

    site_name = "indeed"
    domain = "indeed.com"
    search_base = "https://www.indeed.com/jobs"
    page_param = "start"
    page_size = 10

    def search_params(self, query: str, location: str, page: int) -> Dict[str, Any]:
        return {"q": query, "l": location, "start": self.page_value(page)}

    def page_value(self, page: int) -> int:
        return int(page) * self.page_size

    def id_from_url(self, url: str) -> Optional[str]:
        return query_value(url, "jk")

    def url_for_id(self, job_id: str) -> str:
        return f"https://www.indeed.com/viewjob?jk={job_id}"

    def parse_salary(self, salary_text: Any) -> Dict[str, Any]:
        if not salary_text or not isinstance(salary_text, str):
            return empty_salary()
        m = _SALARY_RE.search(salary_text)
        if not m:
            return empty_salary()

        t = salary_text.lower()
        period = SalaryPeriod.Year
        if "hour" in t:
            period = SalaryPeriod.Hour
        if "month" in t:
            period = SalaryPeriod.Month

        return self._salary(
            self._num(m.group(1), float), self._num(m.group(2), float), period.value
        )
