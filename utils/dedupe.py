"""
Cross-source duplicate detection.

Two postings are the same job when their normalized (title, company,
location) triples are equal; the SHA-256 fingerprint of that triple is the
only equality criterion. Within a batch the first record of each fingerprint
is canonical and collects the `sources` of every later copy. Input order
decides which record is canonical.
"""

from __future__ import annotations

import hashlib
import logging
import re

from typing import Any, Dict, Iterable, List

from utils.log import log_event

logger = logging.getLogger(__name__)

# ASCII word characters, any whitespace
_PUNCT_RE = re.compile(r"[^A-Za-z0-9_\s]")
_WS_RE = re.compile(r"\s+")
_WORK_MODE_RE = re.compile(r"\b(remote|hybrid|onsite)\b", re.I)

COMPANY_SUFFIXES = ["inc", "llc", "ltd", "corp", "corporation", "company", "co"]
_SUFFIX_RES = [re.compile(rf"\b{s}\b$", re.I) for s in COMPANY_SUFFIXES]


def _basic(text: Any) -> str:
    if not text:
        return ""
    s = str(text).lower().strip()
    s = _PUNCT_RE.sub("", s)
    return _WS_RE.sub(" ", s)


def normalize_title(title: Any) -> str:
    return _basic(title)


def normalize_company(company: Any) -> str:
    """
    Normalize a company name and drop legal-entity suffixes.

    Each suffix is tried once, in `COMPANY_SUFFIXES` order, and removed only
    when it is the final whole word: 'Google Inc.' -> 'google'.
    """
    s = _basic(company)
    for rx in _SUFFIX_RES:
        s = rx.sub("", s).strip()
    return s


def normalize_location(location: Any) -> str:
    # no re-collapse after keyword removal: 'SF, Remote' -> 'sf '
    return _WORK_MODE_RE.sub("", _basic(location))


def generate_fingerprint(job: Dict[str, Any]) -> str:
    key = "|".join(
        (
            normalize_title(job.get("title")),
            normalize_company(job.get("company")),
            normalize_location(job.get("location")),
        )
    )
    return hashlib.sha256(key.encode("utf-8")).hexdigest()


def _group_by_fingerprint(
    jobs: List[Dict[str, Any]],
) -> tuple[List[str], Dict[str, List[int]]]:
    fingerprints = [generate_fingerprint(j) for j in jobs]
    groups: Dict[str, List[int]] = {}
    for i, fp in enumerate(fingerprints):
        groups.setdefault(fp, []).append(i)
    return fingerprints, groups


def detect_duplicates(jobs: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Attach duplicate metadata to every job, preserving input order.

    Args:
        jobs: Normalized jobs in scrape order.

    Returns:
        New dicts carrying `_fingerprint`, `_isDuplicate`, `_duplicateOf` and
        `sources`. The canonical (first-seen) record lists the distinct
        sources of its whole group in first-seen order; each duplicate lists
        only its own source and points at the canonical id.
    """
    jobs = list(jobs)
    fingerprints, groups = _group_by_fingerprint(jobs)

    out: List[Dict[str, Any]] = []
    dupes = 0
    for i, (job, fp) in enumerate(zip(jobs, fingerprints)):
        members = groups[fp]
        first = members[0]
        if i == first:
            sources: List[Any] = []
            for m in members:
                src = jobs[m].get("source")
                if src not in sources:
                    sources.append(src)
            out.append(
                {
                    **job,
                    "_fingerprint": fp,
                    "_isDuplicate": False,
                    "_duplicateOf": None,
                    "sources": sources,
                }
            )
        else:
            dupes += 1
            out.append(
                {
                    **job,
                    "_fingerprint": fp,
                    "_isDuplicate": True,
                    "_duplicateOf": jobs[first].get("id"),
                    "sources": [job.get("source")],
                }
            )

    log_event(logger, "dedupe:done", total=len(out), groups=len(groups), duplicates=dupes)
    return out


def duplicate_groups(jobs: Iterable[Dict[str, Any]]) -> Dict[str, List[Any]]:
    """Fingerprint -> member ids, both in first-seen order."""
    jobs = list(jobs)
    _, groups = _group_by_fingerprint(jobs)
    return {fp: [jobs[i].get("id") for i in idx] for fp, idx in groups.items()}


def remove_duplicates(jobs: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [j for j in jobs if not j.get("_isDuplicate")]
