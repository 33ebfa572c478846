"""
Command-line entrypoint for the job aggregator.

This module wires up:
- Argument parsing (`plan` to list crawl URLs, `run` to clean a scraped batch).
- Logging configuration with a 'site' attribute on each record.
- The batch lifecycle: load raw records → normalize → clean → deliver to a sink.

Crawling itself happens elsewhere; `run` consumes the raw records the crawler
extracted, as a JSON list (each item optionally carrying a `site` hint).
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from utils.canonicalize import canonicalize_batch
from utils.crawl_plan import build_start_urls, page_urls
from utils.metrics import Metrics
from utils.pipeline import run_pipeline
from utils.run_config import load_run_config
from utils.errors import AggregatorError
from utils.sinks import open_sink


class SiteField(logging.Filter):
    """
    Logging filter that guarantees a 'site' attribute on log records.

    This lets the formatter include '%(site)s' safely even for log messages
    emitted outside site adapters (pipeline steps, third-party libs).
    """

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if not hasattr(record, "site"):
            record.site = "-"
        return True


def configure_logging(logfile: Optional[str], suppress_console: bool) -> None:
    """
    Configure root logging with optional file/console handlers and a uniform format.

    Args:
        logfile: Path to a log file. If provided, logs are written here.
        suppress_console: If True, do not attach a console (stderr) handler.

    Raises:
        OSError: If the logfile cannot be opened/created by the FileHandler.
    """
    handlers: list[logging.Handler] = []
    if logfile:
        handlers.append(logging.FileHandler(logfile))
    if not suppress_console:
        handlers.append(logging.StreamHandler())
    if not handlers:
        handlers.append(logging.NullHandler())

    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(site)s %(message)s")

    root = logging.getLogger()
    root.handlers = []
    root.setLevel(logging.INFO)

    filt = SiteField()
    for h in handlers:
        h.setFormatter(formatter)
        h.addFilter(filt)
        root.addHandler(h)

    logging.getLogger("urllib3").setLevel(logging.WARNING)


def load_raw_records(path: str | Path) -> List[Dict[str, Any]]:
    """
    Read the crawler's raw output.

    Accepts a JSON list of records, or an object with an `items` list.

    Raises:
        ValueError: If the document holds no list of records.
    """
    doc = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(doc, dict):
        doc = doc.get("items")
    if not isinstance(doc, list):
        raise ValueError(f"{path}: expected a JSON list of raw records")
    return [r for r in doc if isinstance(r, dict)]


def cmd_plan(args: argparse.Namespace) -> int:
    cfg = load_run_config(args.input)
    plan = {url: page_urls(url, cfg.max_pages) for url in build_start_urls(cfg)}
    print(json.dumps(plan, indent=2))
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    cfg = load_run_config(args.input)
    raw = load_raw_records(args.raw)

    jobs, problems = canonicalize_batch(raw, max_items=cfg.max_items)

    metrics = Metrics("run")
    sink = open_sink(args.output, token=args.token or os.getenv("DATASET_TOKEN"))
    try:
        delivered = run_pipeline(
            jobs, cfg.pipeline_options(), sink=sink, metrics=metrics
        )
    finally:
        sink.close()
    logging.getLogger(__name__).info("run:metrics %s", metrics.to_json())

    print(
        json.dumps(
            {
                "raw": len(raw),
                "normalized": len(jobs),
                "skipped": len(problems),
                "delivered": len(delivered),
                "metrics": metrics.snapshot(),
            },
            indent=2,
        )
    )
    return 0


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Args:
        argv: Optional sequence of raw CLI tokens. If None, uses sys.argv.

    Returns:
        Parsed arguments namespace; `func` holds the subcommand handler.
    """
    parser = argparse.ArgumentParser(
        description="Normalize and clean job postings scraped from several job boards."
    )
    parser.add_argument(
        "--logfile",
        type=str,
        default=None,
        help="Path to log file (default: console only).",
    )
    parser.add_argument(
        "--suppress",
        action="store_true",
        help="Suppress console logging.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_plan = sub.add_parser("plan", help="Print start and page URLs for a run input.")
    p_plan.add_argument("--input", required=True, help="Run input JSON file.")
    p_plan.set_defaults(func=cmd_plan)

    p_run = sub.add_parser("run", help="Normalize and clean a scraped batch.")
    p_run.add_argument("--input", required=True, help="Run input JSON file.")
    p_run.add_argument("--raw", required=True, help="Raw records JSON file.")
    p_run.add_argument(
        "--output",
        default="scraped_data/jobs.jsonl",
        help="Sink target: .jsonl/.json path, .csv path, or http(s) dataset URL.",
    )
    p_run.add_argument(
        "--token",
        default=None,
        help="Bearer token for an http(s) sink (default: $DATASET_TOKEN).",
    )
    p_run.set_defaults(func=cmd_run)

    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.logfile, args.suppress)
    try:
        return args.func(args)
    except (ValueError, AggregatorError) as e:
        logging.getLogger(__name__).error("run:invalid %s", e)
        print(str(e), file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
