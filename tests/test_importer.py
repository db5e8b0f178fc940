"""Tests for the end-to-end TC travel mapping."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from tc_import.importer import build_subtitle, import_tc_travel, map_tc_data_to_offerte
from tc_import.models import result_to_dict
from tc_import.services.travel_compositor import TcImportError


def _sample_travel(**overrides):
    data = dict(
        id=4711,
        title="Florida & Bahama's",
        numberOfDays=12,
        numberOfNights=11,
        countries=["Verenigde Staten", {"code": "BS", "name": "Bahama's"}],
        travelers={"adults": 3},
        currency="USD",
        pricePerPerson=2499,
        introText="<p>Zon, zee &amp; Keys</p>",
        images=["https://img.example.com/hero.jpg"],
        destinations=[
            {"name": "Miami", "country": "US", "geolocation": {"latitude": 25.77, "longitude": -80.19}},
            {"name": "Key West", "country": "US", "highlights": ["Duval Street"]},
            {"country": "US"},
        ],
        flights=[
            {"departureCity": "Amsterdam", "arrivalCity": "Miami", "departureDate": "2026-06-01", "price": 700},
            {"departureCity": "Miami", "arrivalCity": "Amsterdam", "departureDate": "2026-06-12", "price": 700},
        ],
        hotels=[
            {"hotelData": {"name": "Casa Marina"}, "city": "Key West, FL", "nights": 3, "price": 900},
            {"hotelData": {"name": "Faena"}, "city": "Miami Beach", "nights": 2, "price": 600},
            {"hotelData": {"name": "Mystery Lodge"}, "nights": 2},
        ],
        cruises=[{"name": "Bahamas Getaway", "departurePort": "Port of Miami", "nights": 4, "price": 1200}],
        carRentals=[{"vehicleType": "Cabrio", "price": 300}],
        transfers=[{"transportType": "Shuttle", "departureCity": "Airport", "arrivalCity": "Hotel"}],
        activities=[{"name": "Everglades", "price": 80}],
    )
    data.update(overrides)
    return data


def test_full_travel_is_ordered_and_dated():
    result = map_tc_data_to_offerte(_sample_travel())

    assert [i.title for i in result.items] == [
        "Amsterdam → Miami",
        "Faena",
        "Bahamas Getaway",
        "Casa Marina",
        "Mystery Lodge",
        "Cabrio",
        "Shuttle: Airport → Hotel",
        "Everglades",
        "Miami → Amsterdam",
    ]
    assert [i.sort_order for i in result.items] == list(range(9))

    stays = [i for i in result.items if i.type in ("hotel", "cruise")]
    assert [(s.date_start, s.date_end) for s in stays] == [
        ("2026-06-01", "2026-06-03"),
        ("2026-06-03", "2026-06-07"),
        ("2026-06-07", "2026-06-10"),
        ("2026-06-10", "2026-06-12"),
    ]
    car = next(i for i in result.items if i.type == "car_rental")
    assert (car.date_start, car.date_end) == ("2026-06-07", "2026-06-12")


def test_no_item_is_lost():
    travel = _sample_travel()
    result = map_tc_data_to_offerte(travel)
    categories = ("flights", "hotels", "cruises", "carRentals", "transfers", "activities")
    assert len(result.items) == sum(len(travel[c]) for c in categories)


def test_metadata_and_destinations():
    result = map_tc_data_to_offerte(_sample_travel())
    assert result.title == "Florida & Bahama's"
    assert result.subtitle == "12 dagen · 11 nachten · Verenigde Staten, Bahama's"
    assert result.intro_text == "Zon, zee & Keys"
    assert result.hero_image == "https://img.example.com/hero.jpg"
    assert result.number_of_travelers == 3
    assert result.currency == "USD"
    assert [d.name for d in result.destinations] == ["Miami", "Key West", "Bestemming 3"]
    assert [d.order for d in result.destinations] == [0, 1, 2]
    assert result.destinations[0].lat == 25.77
    assert result.destinations[1].highlights == ["Duval Street"]


def test_total_price_is_sum_of_items():
    result = map_tc_data_to_offerte(_sample_travel())
    assert result.total_price == 700 + 700 + 900 + 600 + 1200 + 300 + 80


def test_total_price_falls_back_to_declared_price_when_items_are_free():
    travel = {"title": "Gratis?", "pricePerPerson": 1500, "hotels": [{"price": 0}], "flights": [{}]}
    assert map_tc_data_to_offerte(travel).total_price == 1500


def test_paris_rome_scenario():
    travel = {
        "title": "Parijs en Rome",
        "departureDate": "2026-06-01",
        "destinations": [{"name": "Paris"}, {"name": "Rome"}],
        "hotels": [{"city": "Paris, France", "nights": 3}],
    }
    (hotel,) = map_tc_data_to_offerte(travel).items
    assert (hotel.date_start, hotel.date_end) == ("2026-06-01", "2026-06-04")


def test_sparse_travel_uses_defaults():
    result = map_tc_data_to_offerte({"id": 12})
    assert result.title == "Reis 12"
    assert result.subtitle == ""
    assert result.items == []
    assert result.total_price == 0
    assert result.number_of_travelers == 2
    assert result.currency == "EUR"


def test_missing_payload_is_a_contract_violation():
    with pytest.raises(TypeError):
        map_tc_data_to_offerte(None)


def test_build_subtitle_skips_empty_parts():
    assert build_subtitle({"numberOfNights": 7}) == "7 nachten"
    assert build_subtitle({"countries": ["Italië", "Frankrijk"]}) == "Italië, Frankrijk"


def test_result_to_dict_uses_offerte_keys():
    data = result_to_dict(map_tc_data_to_offerte(_sample_travel()))
    assert set(data) == {
        "title",
        "subtitle",
        "introText",
        "heroImage",
        "destinations",
        "items",
        "totalPrice",
        "numberOfTravelers",
        "currency",
    }
    assert data["items"][0]["type"] == "flight"
    assert data["items"][1]["hotel_name"] == "Faena"


def test_import_tc_travel_maps_fetched_travel():
    fetch = Mock(return_value=_sample_travel())
    result = import_tc_travel(" 4711 ", "symphonytravel", fetch=fetch)
    fetch.assert_called_once_with("4711", "symphonytravel")
    assert result.title == "Florida & Bahama's"


def test_import_tc_travel_rejects_blank_id():
    fetch = Mock()
    with pytest.raises(ValueError):
        import_tc_travel("   ", fetch=fetch)
    fetch.assert_not_called()


@pytest.mark.parametrize(
    "response, message",
    [
        ({}, "Reis niet gevonden"),
        ({"error": "Travel not found"}, "Travel not found"),
        ({"id": 1, "hotels": []}, "Reis 4711 gevonden maar bevat geen titel"),
    ],
)
def test_import_tc_travel_rejects_unusable_responses(response, message):
    with pytest.raises(TcImportError, match=message):
        import_tc_travel("4711", fetch=Mock(return_value=response))


def test_oversized_night_counts_do_not_abort_the_import():
    travel = {
        "title": "x",
        "departureDate": "2026-06-01",
        "travelers": {"adults": float("inf")},
        "hotels": [{"city": "Paris", "nights": 10_000_000}, {"city": "Rome", "nights": float("inf")}],
    }
    result = map_tc_data_to_offerte(travel)
    assert [(h.date_start, h.date_end) for h in result.items] == [
        ("2026-06-01", "2026-06-02"),
        ("2026-06-02", "2026-06-03"),
    ]
    assert result.number_of_travelers == 2


def test_nameless_destination_does_not_capture_hotels():
    travel = {
        "title": "Rome",
        "destinations": [{"country": "US"}, {"name": "Rome"}],
        "hotels": [{"city": "Rome"}, {"address": "Best Western Plaza"}],
    }
    result = map_tc_data_to_offerte(travel)
    assert [h.location for h in result.items] == ["Rome", "Best Western Plaza"]
    assert result.destinations[0].name == "Bestemming 1"


def test_hero_image_from_image_objects():
    travel = {"title": "x", "images": [{"url": ""}, {"url": "https://img.example.com/hero.jpg"}]}
    assert map_tc_data_to_offerte(travel).hero_image == "https://img.example.com/hero.jpg"
    assert map_tc_data_to_offerte({"title": "x", "images": [{"id": 3}]}).hero_image == ""


CATEGORIES = ("flights", "hotels", "cruises", "carRentals", "transfers", "activities")


@pytest.mark.parametrize(
    "travel",
    [
        _sample_travel(),
        _sample_travel(flights=[]),
        _sample_travel(flights=[{"departureDate": "2026-06-01"}, {}, {}]),
        _sample_travel(destinations=[], hotels=[{"city": "Nergens"}, {}], cruises=[{"departurePort": "Elders"}]),
        _sample_travel(hotels=[None, "hotel", 7], flights=["x"], activities=[[], {}]),
        {"title": "leeg"},
    ],
    ids=["full", "no-flights", "odd-flights", "only-unmatched", "non-dict-entries", "empty"],
)
def test_every_item_is_kept_with_contiguous_sort_order(travel):
    items = map_tc_data_to_offerte(travel).items
    assert len(items) == sum(len(travel.get(c, [])) for c in CATEGORIES)
    assert sorted(i.sort_order for i in items) == list(range(len(items)))
    assert [i.sort_order for i in items] == list(range(len(items)))
