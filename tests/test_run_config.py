import pytest

from utils.pipeline import PipelineOptions
from utils.run_config import RunConfig, load_run_config


def test_load_from_file(fx):
    cfg = load_run_config(fx.path("run_input.json"))
    assert cfg.search_queries == ["data engineer"]
    assert cfg.location == "Berlin"
    assert cfg.platforms == ["indeed"]
    assert cfg.job_age == "7d"
    assert cfg.max_pages == 3
    assert cfg.max_items == 50
    assert cfg.remove_duplicates is True
    assert cfg.exclude_expired is False


def test_defaults():
    cfg = load_run_config({})
    assert cfg == RunConfig()
    assert cfg.platforms == ["linkedin", "indeed", "glassdoor"]
    assert cfg.search_mode == "similar"
    assert cfg.expiration_days == 30


def test_start_urls_accept_objects():
    cfg = load_run_config(
        {
            "startUrls": [
                "https://www.indeed.com/jobs?q=a",
                {"url": "https://www.linkedin.com/jobs/search/?keywords=b"},
            ]
        }
    )
    assert cfg.start_urls == [
        "https://www.indeed.com/jobs?q=a",
        "https://www.linkedin.com/jobs/search/?keywords=b",
    ]


def test_rejects_unknown_search_mode():
    with pytest.raises(ValueError) as ei:
        load_run_config({"searchMode": "fuzzy"})
    assert "searchMode" in str(ei.value)


def test_lists_every_violation():
    with pytest.raises(ValueError) as ei:
        load_run_config({"maxItems": 0, "jobAge": "1y", "platforms": ["monster"]})
    msg = str(ei.value)
    assert msg.startswith("Run input schema validation failed:")
    assert "maxItems" in msg and "jobAge" in msg and "platforms.0" in msg


def test_pipeline_options():
    cfg = RunConfig(remove_duplicates=True, exclude_expired=True, expiration_days=14, job_age="24h")
    assert cfg.pipeline_options() == PipelineOptions(
        remove_duplicates=True, exclude_expired=True, expiration_days=14, job_age="24h"
    )
