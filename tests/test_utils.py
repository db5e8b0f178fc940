"""Unit tests for tc_import.utils."""

from datetime import date

import pytest

from tc_import.utils import extract_price, first_of, parse_date, parse_stars, safe_str, strip_html


def test_safe_str_resolves_code_name_objects():
    assert safe_str({"code": "AMS", "name": "Amsterdam"}) == "Amsterdam"
    assert safe_str({"code": "AMS", "description": "Schiphol"}) == "Schiphol"
    assert safe_str({"code": "AMS"}) == "AMS"
    assert safe_str({"id": 7}) == '{"id": 7}'


def test_safe_str_scalars_and_empty():
    assert safe_str(None) == ""
    assert safe_str("") == ""
    assert safe_str("KL1234") == "KL1234"
    assert safe_str(1234) == "1234"


def test_first_of_skips_empty_values():
    assert first_of(None, "", [], "checkIn", "startDate") == "checkIn"
    assert first_of(None, "") is None


def test_extract_price_checks_fields_in_order():
    assert extract_price({"price": 120, "totalPrice": 999}) == 120
    assert extract_price({"priceBreakdown": {"totalPrice": {"microsite": {"amount": 80}, "amount": 70}}}) == 80
    assert extract_price({"priceBreakdown": {"totalPrice": {"amount": 70}}}) == 70
    assert extract_price({"totalPrice": 55.5}) == 55.5
    assert extract_price({"price": "n/a"}) == 0
    assert extract_price({}) == 0


def test_strip_html_removes_tags_and_entities():
    html = "<p>Hotel&nbsp;aan&nbsp;zee</p>\n<ul><li>Zwembad &amp; spa</li></ul>"
    assert strip_html(html) == "Hotel aan zee Zwembad & spa"
    assert strip_html("Rock &#39;n&#39; roll &quot;live&quot;") == "Rock 'n' roll \"live\""
    assert strip_html(None) == ""


@pytest.mark.parametrize(
    "text",
    [
        "&amp;lt;b&amp;gt;bold&amp;lt;/b&amp;gt;",
        "x &lt; y &gt; z",
        "  <div>\t spaced \n</div>  ",
        "5 &lt; 6",
        "&amp;amp;",
    ],
)
def test_strip_html_is_idempotent(text):
    once = strip_html(text)
    assert strip_html(once) == once


def test_parse_stars_from_number_and_label():
    assert parse_stars(5) == 5
    assert parse_stars("4-star-superior") == 4
    assert parse_stars("Boutique") == 0
    assert parse_stars(None) == 0


def test_parse_date_accepts_dates_and_datetimes():
    assert parse_date("2026-06-01") == date(2026, 6, 1)
    assert parse_date("2026-06-01T10:35:00Z") == date(2026, 6, 1)
    assert parse_date("2026-13-01") is None
    assert parse_date("morgen") is None
    assert parse_date(None) is None
