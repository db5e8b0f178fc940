"""Fuzzy matching of accommodation locations to trip destinations.

Location strings from TC vary in granularity ("Key West, FL" against a
destination called "Key West"), so matching degrades through two passes:
a two-way substring test, then the first word of the location. This is a
heuristic. Destinations sharing a common name fragment (two different
"Springfield"s) can produce false positives; the first match wins.
"""

import re
from typing import Sequence

TOKEN_SPLIT_RE = re.compile(r"[\s,]+")
MIN_TOKEN_LENGTH = 3


def normalize_name(value: str) -> str:
    return (value or "").lower().strip()


def match_destination(location: str, destination_names: Sequence[str]) -> int:
    """Return the index of the destination matching ``location``, or -1."""

    loc = normalize_name(location)
    if not loc:
        return -1
    names = [normalize_name(name) for name in destination_names]

    for index, name in enumerate(names):
        if name and (loc in name or name in loc):
            return index

    first_word = TOKEN_SPLIT_RE.split(loc)[0]
    if len(first_word) >= MIN_TOKEN_LENGTH:
        for index, name in enumerate(names):
            if name and first_word in name:
                return index
    return -1
