from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

from jsonschema import Draft202012Validator

from utils.expiration import DEFAULT_EXPIRATION_DAYS
from utils.pipeline import PipelineOptions
from utils.schema import SUPPORTED_SITES

SCHEMA_PATH = Path(__file__).with_name("run_input.schema.json")


@dataclass
class RunConfig:
    start_urls: List[str] = field(default_factory=list)
    search_queries: List[str] = field(default_factory=list)
    location: str = ""
    max_items: int = 100
    max_pages: int = 5

    platforms: List[str] = field(default_factory=lambda: list(SUPPORTED_SITES))
    search_mode: str = "similar"
    job_age: str = "any"

    remove_duplicates: bool = False
    exclude_expired: bool = False
    expiration_days: int = DEFAULT_EXPIRATION_DAYS

    def pipeline_options(self) -> PipelineOptions:
        return PipelineOptions(
            remove_duplicates=self.remove_duplicates,
            exclude_expired=self.exclude_expired,
            expiration_days=self.expiration_days,
            job_age=self.job_age,
        )


def _load_json(path: str | Path) -> Dict[str, Any]:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def _load_schema(path: str | Path = SCHEMA_PATH) -> Draft202012Validator:
    return Draft202012Validator(_load_json(path))


def load_run_config(
    source: Union[str, Path, Mapping[str, Any]],
    schema_path: str | Path = SCHEMA_PATH,
) -> RunConfig:
    """
    Build a RunConfig from an actor-style input document.

    Args:
        source: Path to a JSON file, or the already-parsed mapping, using the
            camelCase keys (startUrls, searchQueries, jobAge, ...).
        schema_path: JSON schema the document must satisfy.

    Returns:
        The typed config with defaults filled in.

    Raises:
        ValueError: If the document violates the schema; every violation is
            listed in the message.
        OSError: If `source` is a path that cannot be read.
    """
    doc = dict(source) if isinstance(source, Mapping) else _load_json(source)
    if isinstance(doc.get("platforms"), list):
        doc["platforms"] = [
            p.lower() if isinstance(p, str) else p for p in doc["platforms"]
        ]

    validator = _load_schema(schema_path)
    errors = sorted(validator.iter_errors(doc), key=lambda e: list(e.path))
    if errors:
        msg = ["Run input schema validation failed:"]
        for e in errors[:50]:
            loc = ".".join(str(p) for p in e.path) or "<root>"
            msg.append(f" - {loc}: {e.message}")
        raise ValueError("\n".join(msg))

    start_urls = [
        u["url"] if isinstance(u, dict) else u for u in doc.get("startUrls") or []
    ]
    defaults = RunConfig()
    return RunConfig(
        start_urls=start_urls,
        search_queries=list(doc.get("searchQueries") or []),
        location=doc.get("location", defaults.location),
        max_items=doc.get("maxItems", defaults.max_items),
        max_pages=doc.get("maxPages", defaults.max_pages),
        platforms=list(doc.get("platforms") or defaults.platforms),
        search_mode=doc.get("searchMode", defaults.search_mode),
        job_age=doc.get("jobAge", defaults.job_age),
        remove_duplicates=doc.get("removeDuplicates", defaults.remove_duplicates),
        exclude_expired=doc.get("excludeExpired", defaults.exclude_expired),
        expiration_days=doc.get("expirationDays", defaults.expiration_days),
    )
