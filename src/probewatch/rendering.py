from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Result

LINE_FORMAT = "%7s %8s %8s   %-8s %s"


def render_header() -> str:
    return LINE_FORMAT % ("status", "header", "body", "value", "extract")


def format_result(result: Result) -> str:
    if result.error is not None or result.response is None:
        return LINE_FORMAT % ("error", "", "", result.label, result.error)

    resp = result.response
    return LINE_FORMAT % (
        resp.status_code,
        resp.header_bytes,
        resp.body_bytes,
        result.label,
        ", ".join(resp.extract),
    )
