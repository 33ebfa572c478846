"""
Batch cleaning pipeline run once a scrape has been fully collected.

Order is fixed:
  1) detect_duplicates   (always; attaches duplicate metadata)
  2) mark_expiration     (always; attaches age/expiration metadata)
  3) remove_duplicates   (if options.remove_duplicates)
  4) filter_expired      (if options.exclude_expired)
  5) filter_by_age       (if options.job_age is not 'any')
  6) push survivors to the sink, one record at a time, in order

Steps 1-2 run regardless of the removal flags so retained records always
carry the metadata.
"""

from __future__ import annotations

import logging

from dataclasses import dataclass
from datetime import datetime
from time import time
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

from utils.dedupe import detect_duplicates, remove_duplicates
from utils.expiration import (
    DEFAULT_EXPIRATION_DAYS,
    filter_by_age,
    filter_expired,
    mark_expiration,
)
from utils.job_age import parse_age_filter
from utils.log import log_event
from utils.metrics import Metrics

if TYPE_CHECKING:
    from utils.sinks import Sink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineOptions:
    remove_duplicates: bool = False
    exclude_expired: bool = False
    expiration_days: int = DEFAULT_EXPIRATION_DAYS
    job_age: str = "any"


def clean_batch(
    jobs: Iterable[Dict[str, Any]],
    options: Optional[PipelineOptions] = None,
    now: Optional[datetime] = None,
    metrics: Optional[Metrics] = None,
) -> List[Dict[str, Any]]:
    """
    Run steps 1-5 over a finalized batch and return the survivors.

    Args:
        jobs: Normalized jobs in scrape order; the caller must not append to
            the batch while this runs.
        options: Removal/filter switches; defaults keep every record.
        now: Reference time for ages (default: current UTC time).
        metrics: Optional sink for per-step counters.

    Returns:
        New records with duplicate and expiration metadata, input order kept.
    """
    options = options or PipelineOptions()
    metrics = metrics or Metrics()

    out = detect_duplicates(jobs)
    metrics.set_gauge("input.jobs", len(out))
    metrics.inc("dedupe.duplicates", sum(1 for j in out if j["_isDuplicate"]))

    out = mark_expiration(out, options.expiration_days, now=now)
    metrics.inc("expiration.expired", sum(1 for j in out if j["_isExpired"]))

    if options.remove_duplicates:
        before = len(out)
        out = remove_duplicates(out)
        log_event(logger, "filter:duplicates", removed=before - len(out), kept=len(out))

    if options.exclude_expired:
        before = len(out)
        out = filter_expired(out)
        log_event(logger, "filter:expired", removed=before - len(out), kept=len(out))

    max_age = parse_age_filter(options.job_age)
    if options.job_age != "any" and max_age is not None:
        before = len(out)
        out = filter_by_age(out, max_age)
        log_event(
            logger,
            "filter:age",
            job_age=options.job_age,
            removed=before - len(out),
            kept=len(out),
        )
        metrics.inc("filter.age_removed", before - len(out))

    metrics.set_gauge("output.jobs", len(out))
    return out


def run_pipeline(
    jobs: Iterable[Dict[str, Any]],
    options: Optional[PipelineOptions] = None,
    sink: Optional["Sink"] = None,
    now: Optional[datetime] = None,
    metrics: Optional[Metrics] = None,
) -> List[Dict[str, Any]]:
    """
    Clean a batch and deliver the survivors to `sink` in order.

    Returns:
        The delivered records. Sink errors propagate.
    """
    start = time()
    metrics = metrics or Metrics()
    log_event(logger, "pipeline:start")

    with metrics.time("clean.seconds"):
        survivors = clean_batch(jobs, options, now=now, metrics=metrics)

    if sink is not None:
        for rec in survivors:
            sink.push(rec)
        metrics.inc("sink.pushed", len(survivors))

    log_event(
        logger,
        "pipeline:done",
        delivered=len(survivors),
        seconds=round(time() - start, 3),
    )
    return survivors
