"""
Posting age and expiration.

Age is whole days since `postedDate`. A job whose age is unknown (missing,
unparseable or future date) is never expired and passes every age filter.
"""

from __future__ import annotations

import logging

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional

from utils.log import log_event
from utils.transforms import parse_timestamp

logger = logging.getLogger(__name__)

DEFAULT_EXPIRATION_DAYS = 30
_MS = timedelta(milliseconds=1)
_DAY_MS = 24 * 60 * 60 * 1000


def calculate_age(posted_date: Any, now: Optional[datetime] = None) -> Optional[int]:
    """
    Whole days between `posted_date` and `now` (default: current UTC time).

    Returns:
        A non-negative int, or None for missing, unparseable or future dates.
    """
    if not posted_date:
        return None
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    posted = parse_timestamp(posted_date, anchor_dt=now)
    if posted is None:
        return None
    elapsed_ms = (now - posted) // _MS
    if elapsed_ms < 0:
        return None
    return elapsed_ms // _DAY_MS


def is_expired(
    job: Dict[str, Any],
    threshold_days: int = DEFAULT_EXPIRATION_DAYS,
    now: Optional[datetime] = None,
) -> bool:
    age = calculate_age(job.get("postedDate"), now=now)
    if age is None:
        return False
    return age > threshold_days


def mark_expiration(
    jobs: Iterable[Dict[str, Any]],
    threshold_days: int = DEFAULT_EXPIRATION_DAYS,
    now: Optional[datetime] = None,
) -> List[Dict[str, Any]]:
    """
    Return new dicts carrying `_ageInDays` and `_isExpired`.

    All ages in one call are measured against the same `now`.
    """
    now = now or datetime.now(timezone.utc)
    out: List[Dict[str, Any]] = []
    expired = unknown = 0
    for job in jobs:
        age = calculate_age(job.get("postedDate"), now=now)
        flag = age is not None and age > threshold_days
        expired += flag
        unknown += age is None
        out.append({**job, "_ageInDays": age, "_isExpired": flag})
    log_event(
        logger,
        "expiration:marked",
        total=len(out),
        expired=expired,
        unknown_age=unknown,
        threshold=threshold_days,
    )
    return out


def filter_expired(jobs: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [j for j in jobs if not j.get("_isExpired")]


def filter_by_age(
    jobs: Iterable[Dict[str, Any]], max_age_days: int
) -> List[Dict[str, Any]]:
    return [
        j
        for j in jobs
        if j.get("_ageInDays") is None or j["_ageInDays"] <= max_age_days
    ]
