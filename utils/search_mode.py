from __future__ import annotations

from typing import Any, Dict

from utils.errors import UnsupportedPlatformError
from utils.transforms import set_query_param

EXACT = "exact"
SIMILAR = "similar"
SEARCH_MODES = [EXACT, SIMILAR]


def _quoted(keywords: str) -> str:
    return f'"{keywords}"'


def build_search_query(keywords: str, mode: str = SIMILAR) -> str:
    if mode == EXACT:
        return _quoted(keywords)
    return keywords


def _linkedin(keywords: str, mode: str) -> Dict[str, Any]:
    if mode == EXACT:
        return {"keywords": _quoted(keywords), "exactMatch": True}
    return {"keywords": keywords, "exactMatch": False}


def _indeed(keywords: str, mode: str) -> Dict[str, Any]:
    if mode == EXACT:
        return {"q": keywords, "exactphrase": keywords}
    return {"q": keywords}


def _glassdoor(keywords: str, mode: str) -> Dict[str, Any]:
    if mode == EXACT:
        return {"keyword": _quoted(keywords), "exactMatch": True}
    return {"keyword": keywords, "exactMatch": False}


_HANDLERS = {
    "linkedin": _linkedin,
    "indeed": _indeed,
    "glassdoor": _glassdoor,
}


def adapt_for_platform(keywords: str, mode: str, platform: Any) -> Dict[str, Any]:
    """
    Query parameters expressing `keywords` in `mode` for one site.

    Raises:
        UnsupportedPlatformError: If `platform` is not a supported site key
            (compared case-insensitively).
    """
    handler = _HANDLERS.get(platform.lower()) if isinstance(platform, str) else None
    if handler is None:
        raise UnsupportedPlatformError(platform, f"Unsupported platform: {platform}")
    return handler(keywords, mode)


def apply_search_mode(url: str, keywords: str, mode: str, platform: Any) -> str:
    """Set the adapted keyword parameters on an existing search URL."""
    for key, value in adapt_for_platform(keywords, mode, platform).items():
        if isinstance(value, bool):
            value = "true" if value else "false"
        url = set_query_param(url, key, value)
    return url
