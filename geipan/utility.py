import math
import re
from typing import Optional

FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


def node_text(sel):
    # full text content of one node, like DOM textContent
    return sel.xpath("string()").get() or ""


def first_text(selection) -> Optional[str]:
    if not selection:
        return None
    return node_text(selection[0]).strip()


def all_texts(selection):
    return [node_text(s).strip() for s in selection]


def last_segment(url: Optional[str]):
    if url is None:
        return None
    return url.split("/")[-1]


def parse_float_or_zero(raw: Optional[str]):
    if not raw:
        return 0
    m = FLOAT_PREFIX.match(raw)
    if not m:
        return 0
    return float(m.group(1))


def parse_int_or_nan(raw: Optional[str]):
    if not raw:
        return math.nan
    m = INT_PREFIX.match(raw)
    if not m:
        return math.nan
    return int(m.group(1))


def contains(value: Optional[str], needle: str):
    return value is not None and needle in value


def json_safe(obj):
    if isinstance(obj, float) and not math.isfinite(obj):
        return None
    if isinstance(obj, dict):
        return {k: json_safe(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [json_safe(v) for v in obj]
    return obj
