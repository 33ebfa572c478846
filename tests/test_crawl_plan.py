import pytest

from utils.crawl_plan import build_start_urls, page_urls
from utils.run_config import RunConfig, load_run_config


def test_only_enabled_platform_with_age_filter(fx):
    cfg = load_run_config(fx.path("run_input.json"))
    urls = build_start_urls(cfg)
    assert urls == [
        "https://www.indeed.com/jobs?q=data+engineer&l=Berlin&start=0&fromage=7"
    ]


def test_queries_fan_out_in_site_order():
    cfg = RunConfig(search_queries=["python"], search_mode="exact", job_age="24h")
    urls = build_start_urls(cfg)
    assert urls == [
        "https://www.linkedin.com/jobs/search/"
        "?keywords=%22python%22&location=&start=0&exactMatch=true&f_TPR=r86400",
        "https://www.indeed.com/jobs?q=python&l=&start=0&exactphrase=python&fromage=1",
        "https://www.glassdoor.com/Job/jobs.htm"
        "?keyword=%22python%22&location=&page=1&exactMatch=true&fromAge=1",
    ]


def test_start_urls_filtered_and_collapsed():
    li = "https://www.linkedin.com/jobs/search/?keywords=go"
    cfg = RunConfig(start_urls=[li, "https://www.monster.com/jobs?q=go", li])
    assert build_start_urls(cfg) == [li]


def test_nothing_to_crawl():
    with pytest.raises(ValueError, match="No URLs provided"):
        build_start_urls(RunConfig())
    with pytest.raises(ValueError):
        build_start_urls(
            RunConfig(start_urls=["https://www.indeed.com/jobs?q=x"], platforms=["linkedin"])
        )


def test_page_urls():
    url = "https://www.indeed.com/jobs?q=data+engineer&l=Berlin&start=0&fromage=7"
    assert page_urls(url, 3) == [
        url,
        "https://www.indeed.com/jobs?q=data+engineer&l=Berlin&start=10&fromage=7",
        "https://www.indeed.com/jobs?q=data+engineer&l=Berlin&start=20&fromage=7",
    ]
    assert page_urls(url, 1) == [url]


def test_site_comes_from_host_not_query():
    url = "https://www.indeed.com/jobs?q=linkedin.com+recruiter"
    cfg = RunConfig(start_urls=[url], job_age="7d")
    assert build_start_urls(cfg) == [url + "&fromage=7"]

    cfg = RunConfig(
        start_urls=[url, "https://www.indeed.com/jobs?q=x"], platforms=["indeed"]
    )
    assert build_start_urls(cfg) == [url, "https://www.indeed.com/jobs?q=x"]


def test_unsupported_host_dropped_even_if_query_names_a_site():
    cfg = RunConfig(
        start_urls=[
            "https://example.com/?ref=linkedin.com",
            "https://www.glassdoor.com/Job/jobs.htm?keyword=go",
        ]
    )
    assert build_start_urls(cfg) == ["https://www.glassdoor.com/Job/jobs.htm?keyword=go"]
