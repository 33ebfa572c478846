from datetime import datetime, timezone

from utils.transforms import (
    normalize_experience_level,
    normalize_job_type,
    parse_first_int,
    parse_float,
    parse_timestamp,
    query_value,
    sanitize_description,
    set_query_param,
)


def test_set_query_param_preserves_other_segments():
    url = "https://x.com/p?a=1%2C2&b=&c=3#frag"
    assert set_query_param(url, "b", 9) == "https://x.com/p?a=1%2C2&b=9&c=3#frag"


def test_set_query_param_drops_repeats_and_appends():
    assert set_query_param("https://x.com/?k=1&x=2&k=3", "k", 5) == "https://x.com/?k=5&x=2"
    assert set_query_param("https://x.com/p", "k", "a b") == "https://x.com/p?k=a+b"


def test_query_value():
    assert query_value("https://www.indeed.com/viewjob?jk=abc&from=serp", "jk") == "abc"
    assert query_value("https://www.indeed.com/viewjob", "jk") is None
    assert query_value(None, "jk") is None


def test_parse_timestamp():
    assert parse_timestamp("2025-01-02T03:04:05Z") == datetime(
        2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc
    )
    assert parse_timestamp("2025/1/2") == datetime(2025, 1, 2, tzinfo=timezone.utc)
    assert parse_timestamp("2025/13/40") is None
    assert parse_timestamp(True) is None
    assert parse_timestamp({"when": "now"}) is None
    anchor = datetime(2025, 6, 1, tzinfo=timezone.utc)
    assert parse_timestamp("2 days ago", anchor_dt=anchor) == datetime(
        2025, 5, 30, tzinfo=timezone.utc
    )


def test_numbers():
    assert parse_first_int("1,234 applicants") == 1234
    assert parse_first_int("Be among the first") is None
    assert parse_first_int(12) == 12
    assert parse_float("4.5 stars") == 4.5
    assert parse_float(None) is None


def test_job_type_and_level():
    assert normalize_job_type("Full-time") == "full-time"
    assert normalize_job_type("Part time") == "part-time"
    assert normalize_job_type("Internship") == "internship"
    assert normalize_job_type("Temporary") is None
    assert normalize_experience_level("Mid-Senior level") == "senior"
    assert normalize_experience_level("Associate") == "mid"
    assert normalize_experience_level("Director") == "executive"
    assert normalize_experience_level("Entry level") == "entry"
    assert normalize_experience_level("") is None


def test_sanitize_description():
    html = "<div>Hello<br/>World<script>x()</script><ul><li>One</li><li>Two</li></ul></div>"
    out = sanitize_description(html)
    assert out.splitlines() == ["Hello", "World", "One", "Two"]
    assert sanitize_description("  plain text  ") == "plain text"
    assert sanitize_description(None) == ""
