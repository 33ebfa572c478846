from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List


class JobType(str, Enum):
    FullTime = "full-time"
    PartTime = "part-time"
    Contract = "contract"
    Internship = "internship"


class ExperienceLevel(str, Enum):
    Entry = "entry"
    Mid = "mid"
    Senior = "senior"
    Executive = "executive"


class SalaryPeriod(str, Enum):
    Year = "year"
    Month = "month"
    Hour = "hour"


#: Site keys in declared order. Domain matching walks this order.
SUPPORTED_SITES = ["linkedin", "indeed", "glassdoor"]

SITE_DOMAINS = {
    "linkedin": "linkedin.com",
    "indeed": "indeed.com",
    "glassdoor": "glassdoor.com",
}

JOB_FIELDS = [
    "id",
    "url",
    "source",
    "title",
    "company",
    "location",
    "salary",
    "description",
    "requirements",
    "benefits",
    "jobType",
    "experienceLevel",
    "postedDate",
    "applicantCount",
    "companyLogo",
    "companyRating",
    "_scrapedAt",
    "_site",
]

METADATA_FIELDS = [
    "_fingerprint",
    "_isDuplicate",
    "_duplicateOf",
    "sources",
    "_isExpired",
    "_ageInDays",
]

REQUIRED_FIELDS = ["id", "url", "source", "title", "company"]


def empty_salary() -> Dict[str, Any]:
    return {"min": None, "max": None, "currency": None, "period": None}


def validate_job(row: Dict[str, Any]) -> List[str]:
    errors = []
    for k in REQUIRED_FIELDS:
        if not row.get(k):
            errors.append(f"missing_required:{k}")
    v = row.get("url")
    if v and not str(v).lower().startswith(("http://", "https://")):
        errors.append("bad_url")
    return errors
