from __future__ import annotations

import hashlib
import re

from bs4 import BeautifulSoup as BS
from typing import Any, Optional
from urllib.parse import parse_qs, quote_plus, unquote_plus, urlsplit, urlunsplit
from datetime import date, datetime, timedelta, timezone

from utils.schema import ExperienceLevel, JobType


# -----------------------------
# URLs
# -----------------------------
def set_query_param(url: str, key: str, value: Any) -> str:
    """
    Set `key=value` on a URL's query string without touching anything else.

    The first existing `key` segment is replaced in place and any later
    repeats are dropped; if the key is absent it is appended. Every other
    segment, the path and the fragment are kept byte-for-byte, so applying
    the same call twice yields the same string.
    """
    parts = urlsplit(url)
    encoded = f"{quote_plus(key)}={quote_plus(str(value))}"
    out = []
    replaced = False
    for seg in parts.query.split("&") if parts.query else []:
        name = unquote_plus(seg.split("=", 1)[0])
        if name == key:
            if not replaced:
                out.append(encoded)
                replaced = True
            continue
        out.append(seg)
    if not replaced:
        out.append(encoded)
    return urlunsplit(parts._replace(query="&".join(out)))


def query_value(url: Optional[str], key: str) -> Optional[str]:
    if not url:
        return None
    try:
        vals = parse_qs(urlsplit(url).query).get(key)
    except ValueError:
        return None
    return vals[0] if vals else None


def url_digest(url: str, n: int = 12) -> str:
    return hashlib.sha1(url.encode("utf-8")).hexdigest()[:n]


# -----------------------------
# Dates
# -----------------------------
def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_timestamp(
    value: Any, anchor_dt: Optional[datetime] = None
) -> Optional[datetime]:
    """
    Best-effort conversion of a posted-date value to an aware UTC datetime.

    Accepts datetime/date objects, epoch milliseconds, ISO-8601 strings
    (trailing 'Z' or offsets; naive values are taken as UTC), loose
    'YYYY/MM/DD' dates and the relative forms 'N days ago', 'yesterday' and
    'today'. Returns None for anything else instead of raising.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(value, str):
        return None

    s = value.strip()
    if not s:
        return None
    try:
        iso = s[:-1] + "+00:00" if s.endswith(("Z", "z")) else s
        return _as_utc(datetime.fromisoformat(iso))
    except ValueError:
        pass
    m = re.match(r"^(\d{4})[-/](\d{1,2})[-/](\d{1,2})$", s)
    if m:
        y, mo, da = m.groups()
        try:
            return datetime(int(y), int(mo), int(da), tzinfo=timezone.utc)
        except ValueError:
            return None

    anchor = _as_utc(anchor_dt) if anchor_dt else datetime.now(timezone.utc)
    m = re.match(r"^(\d+)\s*(day|days|d)\s*ago$", s, re.I)
    if m:
        return anchor - timedelta(days=int(m.group(1)))
    if s.lower() == "yesterday":
        return anchor - timedelta(days=1)
    if s.lower() == "today":
        return anchor
    return None


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


# -----------------------------
# Free-text fields
# -----------------------------
def parse_first_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    m = re.search(r"\d+", str(value).replace(",", ""))
    return int(m.group(0)) if m else None


def parse_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    m = re.search(r"\d+(?:\.\d+)?", str(value))
    return float(m.group(0)) if m else None


def normalize_job_type(raw: Any) -> Optional[str]:
    if not raw:
        return None
    t = str(raw).lower()
    if "full" in t:
        return JobType.FullTime.value
    if "part" in t:
        return JobType.PartTime.value
    if "contract" in t:
        return JobType.Contract.value
    if "intern" in t:
        return JobType.Internship.value
    return None


def normalize_experience_level(raw: Any) -> Optional[str]:
    if not raw:
        return None
    t = str(raw).lower()
    if any(k in t for k in ("director", "executive", "vp", "vice president")):
        return ExperienceLevel.Executive.value
    # checked before 'mid' so LinkedIn's 'Mid-Senior level' lands here
    if any(k in t for k in ("senior", "lead", "principal")):
        return ExperienceLevel.Senior.value
    if any(k in t for k in ("associate", "mid")):
        return ExperienceLevel.Mid.value
    if any(k in t for k in ("intern", "entry", "junior")):
        return ExperienceLevel.Entry.value
    return None


def sanitize_description(raw: Optional[str]) -> str:
    if not raw:
        return ""
    s = str(raw)
    if "<" not in s:
        return s.strip()
    # normalize common line-break variants early
    s = (
        s.replace("</br>", "<br>")
        .replace("<br/>", "<br>")
        .replace("<BR/>", "<br>")
        .replace("<BR>", "<br>")
    )
    soup = BS(s, "html.parser")
    for tag in soup.find_all(["script", "style"]):
        tag.decompose()
    for br in soup.find_all("br"):
        br.replace_with("\n")
    for li in soup.find_all("li"):
        text = li.get_text(" ", strip=True)
        li.clear()
        li.append(text + "\n")
    txt = soup.get_text("\n", strip=True)
    txt = re.sub(r"[ \t]+", " ", txt)
    txt = re.sub(r"\n{3,}", "\n\n", txt)
    txt = txt.replace("\xa0", " ").strip()
    return txt
