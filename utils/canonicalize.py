from __future__ import annotations

import logging

from typing import Any, Dict, Iterable, List, Optional, Tuple

from adapters import JobSiteAdapter
from adapters.factory import create_adapter, resolve_site
from utils.log import log_event
from utils.schema import validate_job

logger = logging.getLogger(__name__)


def canonicalize_record(
    raw: Dict[str, Any],
    site: Optional[str] = None,
    config: Optional[Dict[str, Any]] = None,
    _cache: Optional[Dict[str, JobSiteAdapter]] = None,
) -> Dict[str, Any]:
    """
    Normalize one raw record with the adapter for its site.

    The site comes from `site` or, failing that, from the record's `site` hint
    or its `url`. Factory errors (unknown site, no identifier) propagate.
    """
    key = resolve_site(site or raw.get("site") or raw.get("url"))
    if _cache is None:
        return create_adapter(key, config).normalize_data(raw)
    adapter = _cache.get(key)
    if adapter is None:
        adapter = _cache[key] = create_adapter(key, config)
    return adapter.normalize_data(raw)


def canonicalize_batch(
    raw_records: Iterable[Dict[str, Any]],
    config: Optional[Dict[str, Any]] = None,
    max_items: Optional[int] = None,
) -> Tuple[List[Dict[str, Any]], List[Tuple[int, List[str]]]]:
    """
    Normalize a scrape batch, skipping records that cannot enter the pipeline.

    Args:
        raw_records: Raw dicts from the extraction collaborator.
        config: Adapter config passed to every adapter.
        max_items: Stop once this many jobs were accepted.

    Returns:
        (jobs, problems): accepted normalized jobs in input order, and
        `(index, reasons)` for every skipped record.
    """
    jobs: List[Dict[str, Any]] = []
    problems: List[Tuple[int, List[str]]] = []
    adapters: Dict[str, JobSiteAdapter] = {}

    for i, raw in enumerate(raw_records):
        if max_items is not None and len(jobs) >= max_items:
            log_event(logger, "normalize:limit", limit=max_items)
            break
        try:
            job = canonicalize_record(raw, config=config, _cache=adapters)
        except Exception as e:
            logger.exception("normalize:error idx=%s", i)
            problems.append((i, [f"normalize_failed:{type(e).__name__}"]))
            continue
        errs = validate_job(job)
        if errs:
            log_event(logger, "normalize:skip", "warning", idx=i, reasons=",".join(errs))
            problems.append((i, errs))
            continue
        jobs.append(job)

    log_event(logger, "normalize:done", accepted=len(jobs), skipped=len(problems))
    return jobs, problems
