"""Chronological ordering of offerte items.

The destination sequence is the backbone: hotels and cruises are placed at
the stop they match, flights are split into an outbound and a return half
around everything else.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple

from .matching import match_destination
from .models import Destination, OfferteItem

logger = logging.getLogger(__name__)

ITEM_TYPES = ("flight", "hotel", "cruise", "car_rental", "transfer", "activity")


def partition_items(items: Sequence[OfferteItem]) -> Dict[str, List[OfferteItem]]:
    buckets: Dict[str, List[OfferteItem]] = {item_type: [] for item_type in ITEM_TYPES}
    for item in items:
        buckets.setdefault(item.type, []).append(item)
    return buckets


def _match_all(
    items: Sequence[OfferteItem], destination_names: Sequence[str]
) -> List[Tuple[OfferteItem, int]]:
    matched = []
    for item in items:
        location = getattr(item, "location", "")
        index = match_destination(location if isinstance(location, str) else "", destination_names)
        logger.debug(
            "%s %r location=%r -> destination %s",
            item.type,
            item.title,
            location,
            f"{index} ({destination_names[index]})" if index >= 0 else index,
        )
        matched.append((item, index))
    return matched


def order_accommodations(
    hotels: Sequence[OfferteItem],
    cruises: Sequence[OfferteItem],
    destinations: Sequence[Destination],
    match_names: Optional[Sequence[str]] = None,
) -> List[OfferteItem]:
    """Order hotels and cruises by the destination they belong to.

    At each stop hotels come before cruises. Items that match no stop are
    appended in their original order. ``match_names`` are the names as TC
    sent them, indexed by destination order; an empty name matches nothing.
    """

    if match_names is None:
        match_names = [d.name for d in sorted(destinations, key=lambda d: d.order)]
    names = list(match_names)
    hotel_matches = _match_all(hotels, names)
    cruise_matches = _match_all(cruises, names)

    ordered: List[OfferteItem] = []
    used = set()
    for dest_index in range(len(names)):
        for matches in (hotel_matches, cruise_matches):
            for item, item_dest in matches:
                if item_dest == dest_index and item.id not in used:
                    ordered.append(item)
                    used.add(item.id)

    for matches in (hotel_matches, cruise_matches):
        for item, _ in matches:
            if item.id not in used:
                ordered.append(item)
                used.add(item.id)
    return ordered


def split_flights(flights: Sequence[OfferteItem]) -> Tuple[List[OfferteItem], List[OfferteItem]]:
    """Split flights at the midpoint into outbound and return legs.

    Assumes a round trip; multi-city and open-jaw itineraries are not
    detected.
    """

    midpoint = math.ceil(len(flights) / 2)
    return list(flights[:midpoint]), list(flights[midpoint:])


def assemble(
    items: Sequence[OfferteItem],
    destinations: Sequence[Destination],
    match_names: Optional[Sequence[str]] = None,
) -> List[OfferteItem]:
    buckets = partition_items(items)
    accommodations = order_accommodations(buckets["hotel"], buckets["cruise"], destinations, match_names)
    outbound, inbound = split_flights(buckets["flight"])

    timeline: List[OfferteItem] = [
        *outbound,
        *accommodations,
        *buckets["car_rental"],
        *buckets["transfer"],
        *buckets["activity"],
        *inbound,
    ]
    known = set(ITEM_TYPES)
    timeline.extend(item for item in items if item.type not in known)

    for index, item in enumerate(timeline):
        item.sort_order = index

    logger.info(
        "Accommodation order: %s",
        " -> ".join(f"{a.type}:{a.title}" for a in accommodations) or "(none)",
    )
    return timeline
