from __future__ import annotations

import logging
from typing import Any, Union

LoggerLike = Union[logging.Logger, logging.LoggerAdapter]


def fmt_pairs(**kv: Any) -> str:
    """' k1=v1 k2=v2' in insertion order, or '' when there is nothing to add."""
    if not kv:
        return ""
    return " " + " ".join(f"{k}={v}" for k, v in kv.items())


def log_event(logger: LoggerLike, event: str, level: str = "info", **kv: Any) -> None:
    """
    Write one `event key=value ...` line.

    Args:
        logger: Module logger or an adapter's LoggerAdapter (keeps `site`).
        event: Token such as 'dedupe:done' or 'normalize:skip'.
        level: Name of the logger method to call ('debug', 'warning', ...).
        **kv: Context rendered by `fmt_pairs`.
    """
    getattr(logger, level)(f"{event}{fmt_pairs(**kv)}")
