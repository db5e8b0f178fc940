"""Core data models for imported offertes."""

from dataclasses import dataclass, field, asdict
from typing import List, Optional, Dict, Any
from uuid import uuid4


ACCOMMODATION_TYPES = ("hotel", "cruise")


def _new_id() -> str:
    return str(uuid4())


@dataclass
class Destination:
    name: str
    country: str = ""
    description: str = ""
    highlights: List[str] = field(default_factory=list)
    images: List[str] = field(default_factory=list)
    lat: float = 0
    lng: float = 0
    order: int = 0


@dataclass
class OfferteItem:
    """Fields shared by every item on the offerte timeline."""

    id: str = field(default_factory=_new_id)
    type: str = ""
    title: str = ""
    price: float = 0
    sort_order: int = 0
    date_start: str = ""
    date_end: str = ""

    @property
    def is_accommodation(self) -> bool:
        return self.type in ACCOMMODATION_TYPES


@dataclass
class FlightItem(OfferteItem):
    type: str = "flight"
    subtitle: str = ""
    departure_airport: str = ""
    arrival_airport: str = ""
    departure_time: str = ""
    arrival_time: str = ""
    airline: str = ""
    flight_number: str = ""


@dataclass
class HotelItem(OfferteItem):
    type: str = "hotel"
    hotel_name: str = ""
    description: str = ""
    image_url: str = ""
    images: List[str] = field(default_factory=list)
    facilities: Optional[List[str]] = None
    location: str = ""
    nights: int = 0
    star_rating: float = 0
    board_type: str = ""
    room_type: str = ""


@dataclass
class TransferItem(OfferteItem):
    type: str = "transfer"
    transfer_type: str = ""
    pickup_location: str = ""
    dropoff_location: str = ""
    departure_time: str = ""
    arrival_time: str = ""


@dataclass
class CarRentalItem(OfferteItem):
    type: str = "car_rental"
    subtitle: str = ""
    supplier: str = ""
    pickup_location: str = ""
    dropoff_location: str = ""


@dataclass
class CruiseItem(OfferteItem):
    type: str = "cruise"
    subtitle: str = ""
    supplier: str = ""
    nights: int = 0
    location: str = ""
    description: str = ""


@dataclass
class ActivityItem(OfferteItem):
    type: str = "activity"
    description: str = ""
    location: str = ""
    activity_duration: str = ""


@dataclass
class ImportResult:
    title: str
    subtitle: str = ""
    intro_text: str = ""
    hero_image: str = ""
    destinations: List[Destination] = field(default_factory=list)
    items: List[OfferteItem] = field(default_factory=list)
    total_price: float = 0
    number_of_travelers: int = 2
    currency: str = "EUR"


def result_to_dict(result: ImportResult) -> Dict[str, Any]:
    """Serialize an import result using the offerte editor's field names."""

    return {
        "title": result.title,
        "subtitle": result.subtitle,
        "introText": result.intro_text,
        "heroImage": result.hero_image,
        "destinations": [asdict(d) for d in result.destinations],
        "items": [asdict(item) for item in result.items],
        "totalPrice": result.total_price,
        "numberOfTravelers": result.number_of_travelers,
        "currency": result.currency,
    }
