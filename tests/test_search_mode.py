import pytest

from utils.errors import ErrorKind, UnsupportedPlatformError
from utils.search_mode import adapt_for_platform, apply_search_mode, build_search_query


def test_build_search_query():
    assert build_search_query("data engineer", "exact") == '"data engineer"'
    assert build_search_query("data engineer", "similar") == "data engineer"
    assert build_search_query("data engineer") == "data engineer"


def test_adapt_for_platform():
    assert adapt_for_platform("go", "exact", "LinkedIn") == {
        "keywords": '"go"',
        "exactMatch": True,
    }
    assert adapt_for_platform("go", "similar", "linkedin") == {
        "keywords": "go",
        "exactMatch": False,
    }
    assert adapt_for_platform("go", "exact", "indeed") == {"q": "go", "exactphrase": "go"}
    assert adapt_for_platform("go", "similar", "indeed") == {"q": "go"}
    assert adapt_for_platform("go", "exact", "glassdoor") == {
        "keyword": '"go"',
        "exactMatch": True,
    }


def test_unsupported_platform():
    with pytest.raises(UnsupportedPlatformError) as ei:
        adapt_for_platform("go", "exact", "monster")
    assert ei.value.kind is ErrorKind.UNSUPPORTED_PLATFORM
    assert ei.value.value == "monster"


def test_apply_search_mode_on_url():
    url = "https://www.linkedin.com/jobs/search/?keywords=python&location=&start=0"
    out = apply_search_mode(url, "python", "exact", "linkedin")
    assert out == (
        "https://www.linkedin.com/jobs/search/"
        "?keywords=%22python%22&location=&start=0&exactMatch=true"
    )
    assert apply_search_mode(out, "python", "exact", "linkedin") == out
