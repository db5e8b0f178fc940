"""Builders that map Travel Compositor records onto offerte items.

Every builder is a pure function over a list of records. Items leave here
with ``sort_order`` 0; the timeline assembler decides the final position.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List, Mapping

from .models import (
    ActivityItem,
    CarRentalItem,
    CruiseItem,
    FlightItem,
    HotelItem,
    OfferteItem,
    TransferItem,
)
from .utils import as_dict, as_list, extract_price, first_of, parse_stars, safe_str, strip_html

logger = logging.getLogger(__name__)

MAX_HOTEL_IMAGES = 10
DEBUG_SNIPPET_CHARS = 500


def _records(value: Any) -> List[Mapping[str, Any]]:
    return [r if isinstance(r, Mapping) else {} for r in as_list(value)]


def _as_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError, OverflowError):
        return 0


def _log_first_record(label: str, records: List[Mapping[str, Any]]) -> None:
    if not records or not logger.isEnabledFor(logging.DEBUG):
        return
    logger.debug("%s keys: %s", label, sorted(records[0].keys()))
    logger.debug("%s[0]: %s", label, json.dumps(records[0], default=str)[:DEBUG_SNIPPET_CHARS])


def build_flight_title(flight: Mapping[str, Any]) -> str:
    origin = safe_str(first_of(flight.get("departureCity"), flight.get("departure")))
    destination = safe_str(first_of(flight.get("arrivalCity"), flight.get("arrival")))
    if origin and destination:
        return f"{origin} → {destination}"
    airline = safe_str(flight.get("company"))
    return f"Vlucht {airline}" if airline else "Vlucht"


def build_transfer_title(transfer: Mapping[str, Any]) -> str:
    origin = safe_str(first_of(transfer.get("departureCity"), transfer.get("departure")))
    destination = safe_str(first_of(transfer.get("arrivalCity"), transfer.get("arrival")))
    kind = safe_str(transfer.get("transportType")) or "Transfer"
    if origin and destination:
        return f"{kind}: {origin} → {destination}"
    return kind


def build_flights(flights: Iterable[Mapping[str, Any]]) -> List[FlightItem]:
    items: List[FlightItem] = []
    for f in flights:
        airline = safe_str(f.get("company"))
        flight_number = safe_str(f.get("transportNumber"))
        items.append(
            FlightItem(
                title=build_flight_title(f),
                subtitle=" ".join(part for part in (airline, flight_number) if part),
                departure_airport=safe_str(
                    first_of(f.get("departureCity"), f.get("departure"), f.get("originCode"))
                ),
                arrival_airport=safe_str(
                    first_of(f.get("arrivalCity"), f.get("arrival"), f.get("targetCode"))
                ),
                departure_time=safe_str(f.get("departureTime")),
                arrival_time=safe_str(f.get("arrivalTime")),
                airline=airline,
                flight_number=flight_number,
                date_start=safe_str(f.get("departureDate")),
                date_end=safe_str(f.get("arrivalDate")),
                price=extract_price(f),
            )
        )
    return items


def extract_image_urls(images: Any) -> List[str]:
    urls: List[str] = []
    for image in as_list(images):
        url = image if isinstance(image, str) else as_dict(image).get("url", "")
        if url and isinstance(url, str):
            urls.append(url)
    return urls


def _facility_names(values: Iterable[Any]) -> List[str]:
    names = []
    for value in values:
        name = value if isinstance(value, str) else as_dict(value).get("name", "")
        if name:
            names.append(name)
    return names


def extract_facilities(facilities: Any) -> List[str]:
    """Flatten either facility shape TC uses into a unique list of names.

    TC sends either a list (strings or ``{name}`` objects) or an object whose
    values are boolean flags, nested lists or plain strings.
    """

    collected: List[str] = []
    if isinstance(facilities, (list, tuple)):
        collected = _facility_names(facilities)
    elif isinstance(facilities, Mapping):
        for key, value in facilities.items():
            if isinstance(value, (list, tuple)):
                collected.extend(_facility_names(value))
            elif value is True or value == "true":
                collected.append(key)
            elif isinstance(value, str) and value:
                collected.append(value)

    unique: List[str] = []
    seen = set()
    for name in collected:
        normalized = name.strip()
        if not normalized or normalized in seen:
            continue
        seen.add(normalized)
        unique.append(normalized)
    return unique


def build_hotel(hotel: Mapping[str, Any], raw: Mapping[str, Any]) -> HotelItem:
    """Build one hotel, preferring formatted fields over the raw TC record."""

    hotel_data = as_dict(hotel.get("hotelData")) or hotel
    raw_hd = as_dict(raw.get("hotelData"))

    name = safe_str(first_of(hotel_data.get("name"), hotel.get("name"), raw_hd.get("name"))) or "Hotel"
    nights = _as_int(first_of(hotel.get("nights"), hotel_data.get("nights"), raw.get("nights")))
    stars = parse_stars(
        first_of(hotel_data.get("category"), hotel.get("category"), raw_hd.get("category"))
    )
    image_urls = extract_image_urls(
        first_of(hotel_data.get("images"), hotel.get("images"), raw_hd.get("images"))
    )
    facilities = extract_facilities(
        first_of(hotel_data.get("facilities"), hotel.get("facilities"), raw_hd.get("facilities"))
    )
    location = safe_str(
        first_of(
            hotel.get("city"),
            hotel_data.get("city"),
            hotel.get("destination"),
            hotel_data.get("destination"),
            hotel_data.get("address"),
            hotel.get("address"),
            raw_hd.get("city"),
            raw.get("destination"),
            raw_hd.get("destination"),
            raw_hd.get("address"),
            raw.get("city"),
        )
    )
    date_start = safe_str(
        first_of(
            hotel.get("checkIn"),
            hotel_data.get("checkIn"),
            hotel.get("startDate"),
            hotel.get("dateFrom"),
            raw.get("checkIn"),
            raw.get("startDate"),
            raw.get("dateFrom"),
            raw.get("checkinDate"),
            raw.get("check_in"),
        )
    )
    date_end = safe_str(
        first_of(
            hotel.get("checkOut"),
            hotel_data.get("checkOut"),
            hotel.get("endDate"),
            hotel.get("dateTo"),
            raw.get("checkOut"),
            raw.get("endDate"),
            raw.get("dateTo"),
            raw.get("checkoutDate"),
            raw.get("check_out"),
        )
    )
    room_type = safe_str(
        first_of(
            hotel.get("roomType"),
            hotel_data.get("roomType"),
            hotel.get("roomDescription"),
            hotel.get("room"),
            raw.get("roomDescription"),
            raw.get("roomType"),
            raw.get("room"),
            raw.get("selectedRoom"),
            raw.get("roomName"),
            raw_hd.get("roomType"),
        )
    )
    board_type = safe_str(
        first_of(
            hotel.get("mealPlan"),
            hotel_data.get("mealPlan"),
            hotel.get("mealPlanDescription"),
            raw.get("mealPlan"),
            raw.get("mealPlanDescription"),
            raw.get("board"),
            raw_hd.get("mealPlan"),
        )
    )
    description = strip_html(
        first_of(
            hotel_data.get("shortDescription"),
            hotel_data.get("description"),
            hotel.get("description"),
            raw_hd.get("shortDescription"),
            raw_hd.get("description"),
        )
    )

    return HotelItem(
        title=name,
        hotel_name=name,
        description=description,
        image_url=image_urls[0] if image_urls else "",
        images=image_urls[:MAX_HOTEL_IMAGES],
        facilities=facilities or None,
        location=location,
        nights=nights,
        star_rating=stars,
        board_type=board_type,
        room_type=room_type,
        price=extract_price(hotel),
        date_start=date_start,
        date_end=date_end,
    )


def build_hotels(
    hotels: Iterable[Mapping[str, Any]], raw_hotels: List[Mapping[str, Any]] | None = None
) -> List[HotelItem]:
    """Raw TC hotels are paired with formatted hotels by position."""

    raw_hotels = raw_hotels or []
    items: List[HotelItem] = []
    for index, hotel in enumerate(hotels):
        raw = raw_hotels[index] if index < len(raw_hotels) else {}
        items.append(build_hotel(hotel, as_dict(raw)))
    return items


def build_transfers(transfers: Iterable[Mapping[str, Any]]) -> List[TransferItem]:
    items: List[TransferItem] = []
    for t in transfers:
        items.append(
            TransferItem(
                title=build_transfer_title(t),
                transfer_type=safe_str(first_of(t.get("transportType"), t.get("type"))) or "transfer",
                pickup_location=safe_str(
                    first_of(t.get("departureCity"), t.get("departure"), t.get("origin"))
                ),
                dropoff_location=safe_str(
                    first_of(t.get("arrivalCity"), t.get("arrival"), t.get("target"))
                ),
                date_start=safe_str(first_of(t.get("departureDate"), t.get("startDate"))),
                departure_time=safe_str(t.get("departureTime")),
                arrival_time=safe_str(t.get("arrivalTime")),
                price=extract_price(t),
            )
        )
    return items


def build_car_rentals(cars: Iterable[Mapping[str, Any]]) -> List[CarRentalItem]:
    items: List[CarRentalItem] = []
    for c in cars:
        supplier = safe_str(first_of(c.get("company"), c.get("supplier"), c.get("rentalCompany")))
        items.append(
            CarRentalItem(
                title=safe_str(
                    first_of(c.get("name"), c.get("carType"), c.get("vehicleType"), c.get("category"))
                )
                or "Huurauto",
                subtitle=supplier,
                supplier=supplier,
                date_start=safe_str(
                    first_of(c.get("pickupDate"), c.get("startDate"), c.get("dateFrom"), c.get("checkIn"))
                ),
                date_end=safe_str(
                    first_of(c.get("dropoffDate"), c.get("endDate"), c.get("dateTo"), c.get("checkOut"))
                ),
                pickup_location=safe_str(
                    first_of(
                        c.get("pickupLocation"),
                        c.get("pickupOffice"),
                        c.get("pickup"),
                        c.get("departureCity"),
                    )
                ),
                dropoff_location=safe_str(
                    first_of(
                        c.get("dropoffLocation"),
                        c.get("dropoffOffice"),
                        c.get("dropoff"),
                        c.get("arrivalCity"),
                    )
                ),
                price=extract_price(c),
            )
        )
    return items


def build_cruises(cruises: Iterable[Mapping[str, Any]]) -> List[CruiseItem]:
    items: List[CruiseItem] = []
    for cr in cruises:
        cruise_line = safe_str(first_of(cr.get("cruiseLine"), cr.get("company")))
        items.append(
            CruiseItem(
                title=safe_str(first_of(cr.get("name"), cr.get("shipName"))) or "Cruise",
                subtitle=cruise_line,
                supplier=cruise_line,
                nights=_as_int(first_of(cr.get("nights"), cr.get("duration"))),
                date_start=safe_str(
                    first_of(cr.get("departureDate"), cr.get("startDate"), cr.get("dateFrom"), cr.get("checkIn"))
                ),
                date_end=safe_str(
                    first_of(cr.get("arrivalDate"), cr.get("endDate"), cr.get("dateTo"), cr.get("checkOut"))
                ),
                location=safe_str(
                    first_of(cr.get("departurePort"), cr.get("embarkation"), cr.get("departure"))
                ),
                description=strip_html(first_of(cr.get("description"), cr.get("itinerary"))),
                price=extract_price(cr),
            )
        )
    return items


def build_activities(activities: Iterable[Mapping[str, Any]]) -> List[ActivityItem]:
    items: List[ActivityItem] = []
    for a in activities:
        items.append(
            ActivityItem(
                title=safe_str(first_of(a.get("name"), a.get("title"))) or "Activiteit",
                description=strip_html(a.get("description")),
                location=safe_str(first_of(a.get("destination"), a.get("location"))),
                date_start=safe_str(first_of(a.get("date"), a.get("startDate"))),
                activity_duration=safe_str(a.get("duration")),
                price=extract_price(a),
            )
        )
    return items


def build_items(payload: Mapping[str, Any]) -> List[OfferteItem]:
    """Run every category builder over a TC payload, in category order."""

    raw_tc = as_dict(payload.get("rawTcData"))
    raw_hotels = _records(raw_tc.get("hotels"))
    raw_by_label: Dict[str, List[Mapping[str, Any]]] = {
        "Raw TC hotel": raw_hotels,
        "Raw TC car": _records(raw_tc.get("cars")),
        "Raw TC cruise": _records(raw_tc.get("cruises")),
        "Raw TC transport": _records(raw_tc.get("transports")),
    }
    hotels = _records(payload.get("hotels"))
    _log_first_record("Formatted hotel", hotels)
    for label, records in raw_by_label.items():
        _log_first_record(label, records)

    items: List[OfferteItem] = []
    items.extend(build_flights(_records(payload.get("flights"))))
    items.extend(build_hotels(hotels, raw_hotels))
    items.extend(build_transfers(_records(payload.get("transfers"))))
    items.extend(build_car_rentals(_records(payload.get("carRentals"))))
    items.extend(build_cruises(_records(payload.get("cruises"))))
    items.extend(build_activities(_records(payload.get("activities"))))
    logger.info(
        "Built %s item(s) from %s flight(s), %s hotel(s), %s cruise(s)",
        len(items),
        len(as_list(payload.get("flights"))),
        len(hotels),
        len(as_list(payload.get("cruises"))),
    )
    return items
