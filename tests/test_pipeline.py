import json

import pandas as pd
import pytest
import requests

from utils.canonicalize import canonicalize_batch
from utils.metrics import Metrics
from utils.pipeline import PipelineOptions, clean_batch, run_pipeline
from utils.schema import METADATA_FIELDS
from utils.sinks import CsvSink, HttpDatasetSink, JsonLinesSink, ListSink, open_sink


@pytest.fixture
def jobs(fx):
    out, _ = canonicalize_batch(fx.json("raw_jobs.json"))
    return out


def test_defaults_keep_every_record_with_metadata(jobs, now):
    out = clean_batch(jobs, now=now)

    assert [j["id"] for j in out] == [j["id"] for j in jobs]
    assert all(set(METADATA_FIELDS) <= set(j) for j in out)
    assert out[0]["sources"] == ["linkedin", "indeed"]
    assert out[1]["_duplicateOf"] == "3912345678"
    assert [j["_ageInDays"] for j in out] == [7, 61, 1, 3]
    assert [j["_isExpired"] for j in out] == [False, True, False, False]


def test_all_filters(jobs, now):
    opts = PipelineOptions(remove_duplicates=True, exclude_expired=True, job_age="7d")
    metrics = Metrics()
    out = clean_batch(jobs, opts, now=now, metrics=metrics)

    assert [j["id"] for j in out] == ["3912345678", "1009876543", "xyz789"]
    assert metrics.counter("dedupe.duplicates") == 1
    assert metrics.counter("expiration.expired") == 1
    assert metrics.snapshot()["gauges"]["output.jobs"] == 3


def test_age_filter_alone(jobs, now):
    out = clean_batch(jobs, PipelineOptions(job_age="24h"), now=now)
    assert [j["id"] for j in out] == ["1009876543"]


def test_run_pipeline_delivers_survivors_in_order(jobs, now):
    opts = PipelineOptions(remove_duplicates=True)
    sink = ListSink()
    delivered = run_pipeline(jobs, opts, sink=sink, now=now)

    assert sink.records == delivered == clean_batch(jobs, opts, now=now)


def test_jsonlines_sink(jobs, now, tmp_path):
    path = tmp_path / "out" / "jobs.jsonl"
    sink = JsonLinesSink(path)
    run_pipeline(jobs, sink=sink, now=now)
    sink.close()

    rows = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
    assert [r["id"] for r in rows] == [j["id"] for j in jobs]
    assert rows[0]["salary"]["max"] == 150000


def test_csv_sink(jobs, now, tmp_path):
    path = tmp_path / "jobs.csv"
    sink = CsvSink(path)
    run_pipeline(jobs, sink=sink, now=now)
    sink.close()

    df = pd.read_csv(path)
    assert len(df) == 4
    assert "salary.min" in df.columns
    assert df.loc[0, "sources"] == "linkedin; indeed"
    assert df.loc[0, "requirements"] == "Python; SQL"


def test_csv_sink_empty(tmp_path):
    path = tmp_path / "empty.csv"
    sink = CsvSink(path)
    sink.close()
    assert path.exists()


class _FakeResponse:
    def __init__(self, status_code):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")


class _FakeSession:
    def __init__(self, status_code=201):
        self.headers = {}
        self.posts = []
        self.status_code = status_code
        self.closed = False

    def post(self, url, data=None, timeout=None):
        self.posts.append((url, json.loads(data.decode("utf-8"))))
        return _FakeResponse(self.status_code)

    def close(self):
        self.closed = True


def test_http_sink_posts_each_record(jobs, now):
    session = _FakeSession()
    sink = HttpDatasetSink("https://api.example.com/datasets/1/items", token="t0k", session=session)
    delivered = run_pipeline(jobs, PipelineOptions(remove_duplicates=True), sink=sink, now=now)
    sink.close()

    assert session.headers["Authorization"] == "Bearer t0k"
    assert [p[1]["id"] for p in session.posts] == [j["id"] for j in delivered]
    assert session.closed


def test_http_sink_errors_propagate(jobs, now):
    sink = HttpDatasetSink("https://api.example.com/items", session=_FakeSession(503))
    with pytest.raises(requests.HTTPError):
        run_pipeline(jobs, sink=sink, now=now)


def test_open_sink_by_target(tmp_path):
    assert isinstance(open_sink("https://api.example.com/items"), HttpDatasetSink)
    assert isinstance(open_sink(str(tmp_path / "a.CSV")), CsvSink)
    s = open_sink(str(tmp_path / "a.jsonl"))
    assert isinstance(s, JsonLinesSink)
    s.close()
