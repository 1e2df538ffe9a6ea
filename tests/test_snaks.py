import json
import unittest
from decimal import Decimal

from helpers import fake_response

from wbdecode import (
    CalendarValue,
    Claim,
    GlobeCoordinate,
    Item,
    Precision,
    Property,
    Quantity,
    UnsupportedPrecision,
    UnsupportedSnakType,
    ValueKind,
    decode_snak,
)
from wbdecode.errors import MalformedSnak


def parse_snak(name):
    return decode_snak(json.loads(fake_response(f"snaks/{name}")))


class SnakDecodingTests(unittest.TestCase):
    def test_returns_a_claim_for_the_snak_property(self) -> None:
        claim = parse_snak("math")
        self.assertIsInstance(claim, Claim)
        self.assertIsInstance(claim.property, Property)
        self.assertEqual(claim.property.id, "P2534")

    def test_wikibase_item(self) -> None:
        claim = parse_snak("wikibase_item")
        self.assertIs(claim.value_type, ValueKind.ENTITY)
        self.assertIsInstance(claim.value, Item)
        self.assertEqual(claim.value.id, "Q7823779")
        self.assertIsNone(claim.value.label)

    def test_wikibase_property_from_numeric_id(self) -> None:
        claim = parse_snak("wikibase_property")
        self.assertIsInstance(claim.value, Property)
        self.assertEqual(claim.value.id, "P276")

    def test_external_id(self) -> None:
        claim = parse_snak("external_id")
        self.assertEqual(claim.value, "Zorg")
        self.assertIs(claim.value_type, ValueKind.EXTERNAL_ID)

    def test_commons_media(self) -> None:
        claim = parse_snak("commons_media")
        self.assertEqual(claim.value, "https://commons.wikimedia.org/wiki/File:Test.svg")
        self.assertIs(claim.value_type, ValueKind.MEDIA)

    def test_monolingual_text_drops_language(self) -> None:
        claim = parse_snak("monolingual_text")
        self.assertEqual(claim.value, "Бастиа Фредерик")
        self.assertIs(claim.value_type, ValueKind.TEXT)

    def test_plain_string(self) -> None:
        claim = parse_snak("string")
        self.assertEqual(claim.value, "Hello")
        self.assertIs(claim.value_type, ValueKind.TEXT)

    def test_url(self) -> None:
        claim = parse_snak("url")
        self.assertEqual(claim.value, "https://github.com/bradleymarques/gimme_wikidata")
        self.assertIs(claim.value_type, ValueKind.URL)

    def test_math(self) -> None:
        claim = parse_snak("math")
        self.assertEqual(claim.value, "test")
        self.assertIs(claim.value_type, ValueKind.MATH)

    def test_globe_coordinate(self) -> None:
        claim = parse_snak("globe_coordinate")
        self.assertIsInstance(claim.value, GlobeCoordinate)
        self.assertEqual(claim.value.latitude, 40.748433)
        self.assertEqual(claim.value.longitude, -73.985656)
        self.assertIs(claim.value_type, ValueKind.GPS_COORDINATES)

    def test_quantity(self) -> None:
        claim = parse_snak("quantity")
        self.assertIsInstance(claim.value, Quantity)
        self.assertEqual(claim.value.amount, 100)
        self.assertEqual(claim.value.upper_bound, 101)
        self.assertEqual(claim.value.lower_bound, 99)
        self.assertEqual(claim.value.unit, 1)
        self.assertIs(claim.value_type, ValueKind.QUANTITY)

    def test_unitless_quantity_without_bounds(self) -> None:
        claim = parse_snak("quantity_unitless")
        self.assertEqual(claim.value.amount, Decimal("4761865"))
        self.assertIsNone(claim.value.upper_bound)
        self.assertIsNone(claim.value.lower_bound)
        self.assertEqual(claim.value.unit, 1)

    def test_statement_wrapper_is_unwrapped(self) -> None:
        claim = parse_snak("statement")
        self.assertEqual(claim.value, "Hello")
        self.assertEqual(claim.property.id, "P1545")

    def test_value_less_snak_is_unknown(self) -> None:
        claim = parse_snak("novalue")
        self.assertIsNone(claim.value)
        self.assertIs(claim.value_type, ValueKind.UNKNOWN)

    def test_unsupported_type(self) -> None:
        with self.assertRaises(UnsupportedSnakType) as ctx:
            parse_snak("unsupported")
        self.assertEqual(ctx.exception.details["type"], "wikibase-form")

    def test_entity_reference_to_lexeme_is_unsupported(self) -> None:
        snak = {
            "snaktype": "value",
            "property": "P5191",
            "datavalue": {"value": {"entity-type": "lexeme", "id": "L1"}, "type": "wikibase-entityid"},
            "datatype": "wikibase-lexeme",
        }
        with self.assertRaises(UnsupportedSnakType):
            decode_snak(snak)

    def test_property_id_can_come_from_caller(self) -> None:
        snak = {"snaktype": "value", "datavalue": {"value": "Hello", "type": "string"}, "datatype": "string"}
        self.assertEqual(decode_snak(snak, property_id="P1545").property.id, "P1545")

    def test_missing_property_is_malformed(self) -> None:
        snak = {"snaktype": "value", "datavalue": {"value": "Hello", "type": "string"}}
        with self.assertRaises(MalformedSnak):
            decode_snak(snak)

    def test_value_snak_without_datavalue_is_malformed(self) -> None:
        with self.assertRaises(MalformedSnak):
            decode_snak({"snaktype": "value", "property": "P1"})

    def test_wrong_value_shape_is_malformed(self) -> None:
        snak = {
            "snaktype": "value",
            "property": "P1082",
            "datavalue": {"value": {"amount": "lots", "unit": "1"}, "type": "quantity"},
        }
        with self.assertRaises(MalformedSnak):
            decode_snak(snak)
        snak["datavalue"] = {"value": "not a coordinate", "type": "globecoordinate"}
        with self.assertRaises(MalformedSnak):
            decode_snak(snak)

    def test_non_string_monolingual_text_is_malformed(self) -> None:
        for text in (None, 42):
            snak = {
                "snaktype": "value",
                "property": "P1559",
                "datavalue": {"value": {"text": text, "language": "ru"}, "type": "monolingualtext"},
            }
            with self.assertRaises(MalformedSnak) as ctx:
                decode_snak(snak)
            self.assertEqual(ctx.exception.code, "MALFORMED_SNAK")


class TimeSnakTests(unittest.TestCase):
    def assertTimeSnak(self, name, expected) -> None:
        claim = parse_snak(f"time/{name}")
        self.assertIs(claim.value_type, ValueKind.CARBON_DATE)
        self.assertIsInstance(claim.value, CalendarValue)
        self.assertIs(claim.value.precision, expected.precision)
        self.assertEqual(claim.value, expected)

    def test_geological_precisions(self) -> None:
        self.assertTimeSnak("billion_years", CalendarValue(-4540000000, precision=Precision.BILLION_YEARS))
        self.assertTimeSnak("hundred_million_years", CalendarValue(-4540000000, precision=Precision.HUNDRED_MILLION_YEARS))
        self.assertTimeSnak("ten_million_years", CalendarValue(-4540000000, precision=Precision.TEN_MILLION_YEARS))
        self.assertTimeSnak("million_years", CalendarValue(-4540000000, precision=Precision.MILLION_YEARS))
        self.assertTimeSnak("hundred_thousand_years", CalendarValue(-4540000, precision=Precision.HUNDRED_THOUSAND_YEARS))
        self.assertTimeSnak("ten_thousand_years", CalendarValue(-10001, precision=Precision.TEN_THOUSAND_YEARS))

    def test_historical_precisions(self) -> None:
        self.assertTimeSnak("millennium", CalendarValue(2000, precision=Precision.MILLENNIUM))
        self.assertTimeSnak("century", CalendarValue(1405, precision=Precision.CENTURY))
        self.assertTimeSnak("decade", CalendarValue(1972, precision=Precision.DECADE))

    def test_calendar_precisions(self) -> None:
        self.assertTimeSnak("year", CalendarValue(1972, precision=Precision.YEAR))
        self.assertTimeSnak("month", CalendarValue(1972, 5, precision=Precision.MONTH))
        self.assertTimeSnak("day", CalendarValue(1940, 10, 10, precision=Precision.DAY))
        self.assertTimeSnak("hour", CalendarValue(1972, 5, 1, 15, precision=Precision.HOUR))
        self.assertTimeSnak("minute", CalendarValue(1972, 5, 1, 15, 43, precision=Precision.MINUTE))
        self.assertTimeSnak("second", CalendarValue(1972, 5, 1, 15, 43, 4, precision=Precision.SECOND))

    def test_day_differs_on_other_day(self) -> None:
        claim = parse_snak("time/day")
        self.assertNotEqual(claim.value, CalendarValue(1940, 10, 11, precision=Precision.DAY))

    def test_unsupported_precision(self) -> None:
        with self.assertRaises(UnsupportedPrecision):
            parse_snak("time/bad_precision")
