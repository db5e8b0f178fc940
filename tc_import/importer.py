"""Map Travel Compositor travels onto offerte import results."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from .builders import build_items, extract_image_urls
from .dates import propagate_dates
from .models import Destination, ImportResult
from .services.travel_compositor import TcImportError, fetch_tc_travel
from .timeline import assemble
from .utils import as_dict, as_list, first_of, safe_str, strip_html


logger = logging.getLogger(__name__)

DEFAULT_TRAVELERS = 2
DEFAULT_CURRENCY = "EUR"

TravelFetcher = Callable[[str, Optional[str]], Dict[str, Any]]


def _number(value: Any) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return 0


def _count(value: Any) -> int:
    try:
        return int(_number(value))
    except (OverflowError, ValueError):
        return 0


def build_destinations(payload: Mapping[str, Any]) -> List[Destination]:
    destinations: List[Destination] = []
    for index, raw in enumerate(as_list(payload.get("destinations"))):
        d = as_dict(raw)
        geolocation = as_dict(d.get("geolocation"))
        destinations.append(
            Destination(
                name=safe_str(d.get("name")) or f"Bestemming {index + 1}",
                country=safe_str(d.get("country")),
                description=strip_html(d.get("description")),
                highlights=[safe_str(h) for h in as_list(d.get("highlights")) if h],
                images=[img for img in as_list(first_of(d.get("images"), d.get("imageUrls"))) if img],
                lat=_number(geolocation.get("latitude")),
                lng=_number(geolocation.get("longitude")),
                order=index,
            )
        )
    return destinations


def destination_match_names(payload: Mapping[str, Any]) -> List[str]:
    """Destination names as sent, without the display placeholders."""

    return [safe_str(as_dict(d).get("name")) for d in as_list(payload.get("destinations"))]


def build_subtitle(payload: Mapping[str, Any]) -> str:
    """Subtitle like ``14 dagen · 12 nachten · Italië, Frankrijk``."""

    days = payload.get("numberOfDays")
    nights = payload.get("numberOfNights")
    countries = ", ".join(filter(None, (safe_str(c) for c in as_list(payload.get("countries")))))
    parts = [
        f"{days} dagen" if days else "",
        f"{nights} nachten" if nights else "",
        countries,
    ]
    return " · ".join(part for part in parts if part)


def map_tc_data_to_offerte(payload: Mapping[str, Any]) -> ImportResult:
    """Turn a fetched TC travel into an ordered, dated offerte."""

    if not isinstance(payload, Mapping):
        raise TypeError(f"Expected a TC travel mapping, got {type(payload).__name__}")

    destinations = build_destinations(payload)
    logger.info("Destinations: %s", " -> ".join(d.name for d in destinations) or "(none)")

    items = assemble(build_items(payload), destinations, destination_match_names(payload))
    propagate_dates(items, payload)

    item_total = sum(item.price or 0 for item in items)
    declared_price = (
        _number(payload.get("pricePerPerson"))
        or _number(as_dict(payload.get("priceBreakdown")).get("hotels"))
        or 0
    )
    images = extract_image_urls(payload.get("images"))

    return ImportResult(
        title=safe_str(payload.get("title")) or f"Reis {safe_str(payload.get('id'))}".strip(),
        subtitle=build_subtitle(payload),
        intro_text=strip_html(first_of(payload.get("introText"), payload.get("description"))),
        hero_image=safe_str(first_of(payload.get("heroImage"), images[0] if images else None)),
        destinations=destinations,
        items=items,
        total_price=item_total or declared_price,
        number_of_travelers=_count(as_dict(payload.get("travelers")).get("adults")) or DEFAULT_TRAVELERS,
        currency=safe_str(payload.get("currency")) or DEFAULT_CURRENCY,
    )


def import_tc_travel(
    travel_id: str,
    microsite_id: Optional[str] = None,
    fetch: TravelFetcher = fetch_tc_travel,
) -> ImportResult:
    """Fetch a travel from Travel Compositor and map it to an offerte."""

    if not travel_id or not travel_id.strip():
        raise ValueError("Voer een Travel Compositor ID in")

    data = fetch(travel_id.strip(), microsite_id)
    if not data or data.get("error"):
        data = data or {}
        raise TcImportError(str(data.get("error") or data.get("message") or "Reis niet gevonden"))
    if not data.get("title"):
        raise TcImportError(
            f"Reis {travel_id.strip()} gevonden maar bevat geen titel. Controleer het ID en de microsite."
        )
    return map_tc_data_to_offerte(data)
