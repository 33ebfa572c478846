"""
Append-only destinations for finished job records.

Every sink takes one record at a time through `push()` and is finished with
`close()`. The pipeline owns no output format; these are the ones the CLI
offers:
  - ListSink: in memory (tests, library use)
  - JsonLinesSink: one JSON object per line
  - CsvSink: flattened table written with pandas on close
  - HttpDatasetSink: POST each record to a dataset-items endpoint
"""

from __future__ import annotations

import json
import logging

from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

import pandas as pd
import requests

from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from utils.log import log_event

logger = logging.getLogger(__name__)


class Sink(Protocol):
    def push(self, record: Dict[str, Any]) -> None: ...

    def close(self) -> None: ...


class ListSink:
    def __init__(self) -> None:
        self.records: List[Dict[str, Any]] = []

    def push(self, record: Dict[str, Any]) -> None:
        self.records.append(record)

    def close(self) -> None:
        pass


class JsonLinesSink:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = self.path.open("a", encoding="utf-8")
        self.count = 0

    def push(self, record: Dict[str, Any]) -> None:
        self._fh.write(json.dumps(record, ensure_ascii=False, default=str) + "\n")
        self.count += 1

    def close(self) -> None:
        if not self._fh.closed:
            self._fh.close()
            log_event(logger, "export:jsonl", path=self.path, n=self.count)


def _flat_row(record: Dict[str, Any]) -> Dict[str, Any]:
    return {
        k: "; ".join(str(x) for x in v) if isinstance(v, (list, tuple)) else v
        for k, v in record.items()
    }


class CsvSink:
    """
    Buffer records and write them as CSV on `close()`.

    Nested `salary` is flattened to `salary.min`, `salary.max`, ...; list
    fields (sources, requirements, benefits) are joined with '; '.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._rows: List[Dict[str, Any]] = []

    def push(self, record: Dict[str, Any]) -> None:
        self._rows.append(_flat_row(record))

    def close(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        df = pd.json_normalize(self._rows) if self._rows else pd.DataFrame()
        df.to_csv(self.path, index=False)
        log_event(logger, "export:csv", path=self.path, n=len(self._rows))


def build_session_with_retries(
    total: int = 3,
    backoff_factor: float = 0.5,
    status_forcelist: tuple[int, ...] = (429, 500, 502, 503, 504),
) -> requests.Session:
    """
    Create a `requests.Session` that retries transient failures with
    exponential backoff, honouring `Retry-After`.
    """
    s = requests.Session()
    retry = Retry(
        total=total,
        connect=total,
        read=total,
        status=total,
        backoff_factor=backoff_factor,
        status_forcelist=status_forcelist,
        allowed_methods=frozenset({"POST"}),
        raise_on_status=False,
        respect_retry_after_header=True,
    )
    adapter = HTTPAdapter(max_retries=retry)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    return s


class HttpDatasetSink:
    """
    POST each record as JSON to a dataset-items URL.

    Raises:
        requests.HTTPError: On a non-2xx response after retries.
        requests.RequestException: On connection failures.
    """

    def __init__(
        self,
        url: str,
        token: Optional[str] = None,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.session = session or build_session_with_retries()
        self.session.headers.update({"Content-Type": "application/json"})
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"
        self.count = 0

    def push(self, record: Dict[str, Any]) -> None:
        resp = self.session.post(
            self.url,
            data=json.dumps(record, ensure_ascii=False, default=str).encode("utf-8"),
            timeout=self.timeout,
        )
        resp.raise_for_status()
        self.count += 1

    def close(self) -> None:
        log_event(logger, "export:http", url=self.url, n=self.count)
        self.session.close()


def open_sink(target: str, token: Optional[str] = None) -> Sink:
    if target.lower().startswith(("http://", "https://")):
        return HttpDatasetSink(target, token=token)
    if target.lower().endswith(".csv"):
        return CsvSink(target)
    return JsonLinesSink(target)
