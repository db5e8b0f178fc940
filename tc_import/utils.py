"""Field extraction helpers for loosely structured Travel Compositor records.

TC encodes the same value under different names depending on the endpoint
(``checkIn`` / ``startDate`` / ``dateFrom``) and often wraps plain strings in
``{"code": ..., "name": ...}`` objects. Every alias chain and coercion used
by the builders lives here.
"""

from datetime import date
import json
import re
from typing import Any, Mapping, Optional

HTML_TAG_RE = re.compile(r"<[^>]*>")
WHITESPACE_RE = re.compile(r"\s+")
ISO_DATE_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})")

HTML_ENTITIES = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&nbsp;", " "),
)


def safe_str(value: Any) -> str:
    """Coerce a TC value to a plain string.

    ``{code, name}`` objects resolve to their name, then description, then
    code; anything else that is not a scalar is dumped as JSON.
    """

    if value is None or value is False or value == "":
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true"
    if isinstance(value, (int, float)):
        return "" if value == 0 else str(value)
    if isinstance(value, Mapping):
        resolved = value.get("name") or value.get("description") or value.get("code")
        if resolved:
            return resolved if isinstance(resolved, str) else str(resolved)
        return json.dumps(value)
    if isinstance(value, (list, tuple)):
        return json.dumps(value)
    return str(value)


def first_of(*candidates: Any) -> Any:
    """Return the first non-empty candidate, or ``None``."""

    for candidate in candidates:
        if candidate:
            return candidate
    return None


def as_dict(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def as_list(value: Any) -> list:
    return list(value) if isinstance(value, (list, tuple)) else []


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def extract_price(record: Mapping[str, Any]) -> float:
    if _is_number(record.get("price")):
        return record["price"]
    total = as_dict(as_dict(record.get("priceBreakdown")).get("totalPrice"))
    microsite_amount = as_dict(total.get("microsite")).get("amount")
    if microsite_amount and _is_number(microsite_amount):
        return microsite_amount
    if total.get("amount") and _is_number(total["amount"]):
        return total["amount"]
    if _is_number(record.get("totalPrice")):
        return record["totalPrice"]
    return 0


def _strip_once(text: str) -> str:
    text = HTML_TAG_RE.sub("", text)
    for entity, char in HTML_ENTITIES:
        text = text.replace(entity, char)
    return WHITESPACE_RE.sub(" ", text).strip()


def strip_html(html: Any) -> str:
    """Reduce an HTML fragment to a single line of plain text.

    The pass is repeated until the text stops changing, so entity-encoded
    markup (``&lt;b&gt;``) is removed as well and the result is stable.
    """

    if not html or not isinstance(html, str):
        return ""
    text = html
    while True:
        cleaned = _strip_once(text)
        if cleaned == text:
            return cleaned
        text = cleaned


def parse_stars(category: Any) -> float:
    """Star rating from a numeric category or a label like ``4-star-superior``."""

    if not category:
        return 0
    if _is_number(category):
        return category
    match = re.search(r"(\d)", str(category))
    return int(match.group(1)) if match else 0


def parse_date(value: Any) -> Optional[date]:
    """Parse the date part of an ISO date or datetime string."""

    if not value or not isinstance(value, str):
        return None
    match = ISO_DATE_RE.match(value.strip())
    if not match:
        return None
    try:
        return date.fromisoformat(match.group(1))
    except ValueError:
        return None


def format_date(value: date) -> str:
    return value.isoformat()
