"""Unit tests for fare calculation."""

import pytest

from metrofare.exceptions import FareParseError, NotFoundError, TransportError
from metrofare.models import FareLineItem
from metrofare.services.fare_calculator import (
    FareCalculatorInterface,
    StationPairFareCalculator,
    parse_fare_amount,
)
from metrofare.services.fare_lookup import FareLookupService

from conftest import FakeResolver, make_record


def line_item(origin, destination, round_trip=False, trips=0):
    return FareLineItem(
        origin_name=origin,
        destination_name=destination,
        round_trip=round_trip,
        repeat_count=trips,
    )


class TestModels:
    """Test line item validation."""

    def test_line_item_from_wire_names(self):
        item = FareLineItem.model_validate({
            "startStationName": "台北車站",
            "endStationName": "西門",
            "isRoundTrip": True,
            "Trips": 3,
        })
        assert item.origin_name == "台北車站"
        assert item.round_trip is True
        assert item.repeat_count == 3

    def test_line_item_defaults(self):
        item = FareLineItem.model_validate({"startStationName": "台北車站", "endStationName": "西門"})
        assert item.round_trip is False
        assert item.repeat_count == 0
        assert item.effective_repeat_count == 1

    def test_negative_trips_rejected(self):
        with pytest.raises(ValueError):
            line_item("台北車站", "西門", trips=-1)


class TestParseFareAmount:
    """Test fare amount parsing."""

    def test_numeric(self):
        assert parse_fare_amount(make_record("051", "042", "25")) == 25

    def test_signed(self):
        assert parse_fare_amount(make_record("051", "042", "+30")) == 30

    @pytest.mark.parametrize("amount", ["", "abc", "12.5", "1_000", " 30 ", "３０"])
    def test_non_numeric(self, amount):
        with pytest.raises(FareParseError):
            parse_fare_amount(make_record("051", "042", amount))


class TestFareCalculator:
    """Test fare calculation logic."""

    @pytest.fixture(autouse=True)
    def setup_calculator(self, directory, lookup, resolver):
        self.calculator = StationPairFareCalculator(directory, lookup)
        self.resolver = resolver

    def test_single_one_way_trip(self):
        total = self.calculator.calculate_total([line_item("台北車站", "中正紀念堂", trips=1)])
        assert total == 20

    def test_round_trip_with_repeats(self):
        self.resolver.fares[("010", "088")] = "30"
        total = self.calculator.calculate_total([
            line_item("忠孝復興", "忠孝新生", round_trip=True, trips=3)
        ])
        assert total == 30 * 2 * 3

    def test_zero_trips_counts_once(self):
        zero = self.calculator.calculate_single_fare(line_item("西門", "忠孝復興", trips=0))
        one = self.calculator.calculate_single_fare(line_item("西門", "忠孝復興", trips=1))
        assert zero == one == 25

    def test_multiple_line_items(self):
        line_items = [
            line_item("台北車站", "中正紀念堂"),                            # 20
            line_item("台北車站", "西門", round_trip=True),                 # 40
            line_item("西門", "忠孝復興", trips=2),                         # 50
            line_item("忠孝復興", "忠孝新生", round_trip=True, trips=2),    # 120
        ]
        assert self.calculator.calculate_total(line_items) == 230

    def test_empty_batch(self):
        assert self.calculator.calculate_total([]) == 0

    def test_repeated_pair_uses_cache(self):
        self.calculator.calculate_total([
            line_item("台北車站", "中正紀念堂"),
            line_item("台北車站", "中正紀念堂", trips=4),
        ])
        assert self.resolver.calls == [("051", "042")]

    def test_unknown_station_aborts_batch(self):
        with pytest.raises(NotFoundError):
            self.calculator.calculate_total([
                line_item("台北車站", "中正紀念堂"),
                line_item("台北車站", "不存在"),
                line_item("西門", "忠孝復興"),
            ])
        assert self.resolver.calls == [("051", "042")]

    def test_non_numeric_fare_aborts_batch(self):
        self.resolver.fares[("051", "086")] = "N/A"
        with pytest.raises(FareParseError):
            self.calculator.calculate_total([
                line_item("台北車站", "中正紀念堂"),
                line_item("台北車站", "西門"),
            ])

    def test_calculators_implement_protocol(self):
        """Test that the calculator implements the FareCalculatorInterface protocol."""
        assert isinstance(self.calculator, FareCalculatorInterface), \
            f"{self.calculator.__class__.__name__} does not implement FareCalculatorInterface"

        fare = self.calculator.calculate_single_fare(line_item("台北車站", "西門"))
        assert isinstance(fare, int)


def test_remote_failure_aborts_batch(directory, cache):
    lookup = FareLookupService(cache, FakeResolver(error=TransportError("timeout")))
    calculator = StationPairFareCalculator(directory, lookup)
    with pytest.raises(TransportError):
        calculator.calculate_total([line_item("台北車站", "西門")])
    assert cache.entries() == []
