from __future__ import annotations

import re

from typing import Any, Dict, Optional

from adapters.base import JobSiteAdapter
from utils.schema import SalaryPeriod, empty_salary
from utils.transforms import query_value

# "$80K - $120K (Employer est.)"
_SALARY_RE = re.compile(r"\$?(\d[\d,]*)K?\s*-\s*\$?(\d[\d,]*)K?")


class GlassdoorAdapter(JobSiteAdapter):
    site_name = "glassdoor"
    domain = "glassdoor.com"
    search_base = "https://www.glassdoor.com/Job/jobs.htm"
    page_param = "page"

    def search_params(self, query: str, location: str, page: int) -> Dict[str, Any]:
        return {"keyword": query, "location": location, "page": self.page_value(page)}

    def page_value(self, page: int) -> int:
        # one-based
        return int(page) + 1

    def id_from_url(self, url: str) -> Optional[str]:
        return query_value(url, "jobListingId")

    def url_for_id(self, job_id: str) -> str:
        return f"https://www.glassdoor.com/job-listing/{job_id}"

    def parse_salary(self, salary_text: Any) -> Dict[str, Any]:
        """Glassdoor only shows annual ranges; a single figure is not parsed."""
        if not salary_text or not isinstance(salary_text, str):
            return empty_salary()
        m = _SALARY_RE.search(salary_text)
        if not m:
            return empty_salary()
        mult = 1000 if "K" in salary_text else 1
        lo = self._num(m.group(1))
        hi = self._num(m.group(2))
        return self._salary(
            lo * mult if lo is not None else None,
            hi * mult if hi is not None else None,
            SalaryPeriod.Year.value,
        )
