"""Date propagation over an assembled offerte timeline."""

from __future__ import annotations

from datetime import date, timedelta
from functools import reduce
import logging
from typing import Any, List, Mapping, Optional, Sequence

from .models import OfferteItem
from .utils import as_dict, as_list, format_date, parse_date

logger = logging.getLogger(__name__)


def find_trip_start_date(items: Sequence[OfferteItem], payload: Mapping[str, Any]) -> Optional[date]:
    """Resolve the first day of the trip.

    Checked in order: the first flight carrying a date, the raw TC
    transports, the payload's ``departureDate``, then any dated item.
    """

    first_flight = next((i for i in items if i.type == "flight" and i.date_start), None)
    if first_flight is not None:
        parsed = parse_date(first_flight.date_start)
        if parsed:
            logger.info("Trip start from first flight: %s", first_flight.date_start)
            return parsed

    raw_transports = as_list(as_dict(payload.get("rawTcData")).get("transports")) or as_list(
        payload.get("transports")
    )
    for transport in raw_transports:
        departure = as_dict(transport).get("departureDate")
        parsed = parse_date(departure)
        if parsed:
            logger.info("Trip start from raw transport: %s", departure)
            return parsed

    parsed = parse_date(payload.get("departureDate"))
    if parsed:
        logger.info("Trip start from departureDate: %s", payload.get("departureDate"))
        return parsed

    for item in items:
        parsed = parse_date(item.date_start)
        if parsed:
            logger.info("Trip start from %s %r: %s", item.type, item.title, item.date_start)
            return parsed
    return None


def _stay(current: date, item: OfferteItem) -> date:
    nights = getattr(item, "nights", 0) or 0
    if nights <= 0:
        nights = 1
    try:
        check_out = current + timedelta(days=nights)
    except (OverflowError, ValueError):
        logger.warning("%s %r has an unusable night count %r; scheduling 1 night", item.type, item.title, nights)
        nights = 1
        check_out = current + timedelta(days=nights)
    item.date_start = format_date(current)
    item.date_end = format_date(check_out)
    logger.debug("%s %r -> %s to %s (%sn)", item.type, item.title, item.date_start, item.date_end, nights)
    return check_out


def schedule_stays(accommodations: Sequence[OfferteItem], start: date) -> date:
    """Give each stay consecutive dates from ``start``; return the date after the last one."""

    return reduce(_stay, accommodations, start)


def _car_rental_span(accommodations: List[OfferteItem], trip_start: date, current: date) -> tuple[str, str]:
    cruise_positions = [i for i, a in enumerate(accommodations) if a.type == "cruise"]
    last_cruise_index = cruise_positions[-1] if cruise_positions else -1
    last_cruise = accommodations[last_cruise_index] if cruise_positions else None
    after_cruise = accommodations[last_cruise_index + 1] if last_cruise_index + 1 < len(accommodations) else None

    start = (
        (last_cruise.date_end if last_cruise else "")
        or (after_cruise.date_start if after_cruise else "")
        or format_date(trip_start)
    )
    end = (accommodations[-1].date_end if accommodations else "") or format_date(current)
    return start, end


def propagate_dates(items: List[OfferteItem], payload: Mapping[str, Any]) -> List[OfferteItem]:
    """Fill in stay dates and inferred car rental dates, in place.

    Without a resolvable trip start the builder dates are left untouched.
    """

    trip_start = find_trip_start_date(items, payload)
    if trip_start is None:
        logger.warning("Could not determine trip start date; keeping imported dates")
        return items

    accommodations = [item for item in items if item.is_accommodation]
    current = schedule_stays(accommodations, trip_start)

    for car in (item for item in items if item.type == "car_rental"):
        if car.date_start:
            continue
        car.date_start, car.date_end = _car_rental_span(accommodations, trip_start, current)
        logger.debug("car_rental %r -> %s to %s", car.title, car.date_start, car.date_end)
    return items
