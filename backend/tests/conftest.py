"""Shared fixtures for the metro fare tests."""

import json

import pytest

from metrofare.cache import FareCache
from metrofare.models import FareRecord
from metrofare.services.fare_lookup import FareLookupService
from metrofare.stations import StationDirectory

STATIONS = [
    {"StationSID": "051", "StationName": "台北車站"},
    {"StationSID": "042", "StationName": "中正紀念堂"},
    {"StationSID": "086", "StationName": "西門"},
    {"StationSID": "010", "StationName": "忠孝復興"},
    {"StationSID": "088", "StationName": "忠孝新生"},
]

FARES = {
    ("051", "042"): "20",
    ("051", "086"): "20",
    ("086", "010"): "25",
    ("010", "088"): "30",
}


def make_record(origin_id, destination_id, fare_amount="20"):
    return FareRecord(
        origin_id=origin_id,
        destination_id=destination_id,
        origin_name=f"station {origin_id}",
        destination_name=f"station {destination_id}",
        fare_amount=fare_amount,
        discount_rate_60="12",
        discount_rate_40="8",
        language="tw",
    )


class FakeResolver:
    """Remote resolver stand-in that records every call."""

    def __init__(self, fares=None, error=None):
        self.fares = dict(FARES if fares is None else fares)
        self.error = error
        self.calls = []

    def resolve(self, origin_id, destination_id):
        self.calls.append((origin_id, destination_id))
        if self.error is not None:
            raise self.error
        return make_record(origin_id, destination_id, self.fares[(origin_id, destination_id)])


@pytest.fixture
def stations_file(tmp_path):
    path = tmp_path / "mrt.json"
    path.write_text(json.dumps(STATIONS, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def directory(stations_file):
    return StationDirectory.load(stations_file)


@pytest.fixture
def cache_path(tmp_path):
    return tmp_path / "cache.json"


@pytest.fixture
def cache(cache_path):
    return FareCache(cache_path)


@pytest.fixture
def resolver():
    return FakeResolver()


@pytest.fixture
def lookup(cache, resolver):
    return FareLookupService(cache, resolver)
