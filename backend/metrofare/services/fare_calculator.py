"""Fare calculation service implementing business logic."""

import logging
import re
from typing import List, Optional, Protocol, runtime_checkable
from abc import ABC, abstractmethod

from metrofare.exceptions import FareParseError
from metrofare.models import FareLineItem, FareRecord
from metrofare.services.fare_lookup import FareLookupService, get_fare_lookup
from metrofare.stations import StationDirectory, get_station_directory

logger = logging.getLogger(__name__)

# ASCII digits with an optional sign; no whitespace, underscores or other scripts.
FARE_AMOUNT_PATTERN = re.compile(r"[+-]?[0-9]+")


@runtime_checkable
class FareCalculatorInterface(Protocol):
    """
    Interface for fare calculation.
    This protocol defines the contract that all fare calculators must follow.
    """

    def calculate_single_fare(self, line_item: FareLineItem) -> int:
        """Calculate the fare for a single line item."""
        ...

    def calculate_total(self, line_items: List[FareLineItem]) -> int:
        """Calculate the total fare for a batch of line items."""
        ...


def parse_fare_amount(record: FareRecord) -> int:
    """
    Parse the fare amount of a record.

    Raises:
        FareParseError: If the amount is not an integer.
    """
    if not FARE_AMOUNT_PATTERN.fullmatch(record.fare_amount):
        raise FareParseError(record.fare_amount)
    return int(record.fare_amount)


class BaseFareCalculator(ABC):
    """Abstract base class for fare calculators."""

    @abstractmethod
    def calculate_single_fare(self, line_item: FareLineItem) -> int:
        """
        Calculate the effective fare for one line item.
        Must be implemented by subclasses.
        """
        pass

    def calculate_total(self, line_items: List[FareLineItem]) -> int:
        """
        Sum the effective fares of all line items, in order.

        The first failing item aborts the whole batch; no partial total is
        ever returned.
        """
        total_fare = 0
        for idx, line_item in enumerate(line_items, 1):
            logger.info(
                f"Processing request {idx}: {line_item.origin_name} -> "
                f"{line_item.destination_name}, RoundTrip: {line_item.round_trip}, "
                f"Trips: {line_item.repeat_count}"
            )
            fare = self.calculate_single_fare(line_item)
            total_fare += fare
            logger.info(f"Request {idx} fare: {fare}, Total so far: {total_fare}")
        return total_fare


class StationPairFareCalculator(BaseFareCalculator):
    """
    Prices line items by looking up the fare between two named stations.
    Round trips cost double; the result is multiplied by the trip count.
    """

    def __init__(self, directory: StationDirectory, fare_lookup: FareLookupService):
        self.directory = directory
        self.fare_lookup = fare_lookup

    def calculate_single_fare(self, line_item: FareLineItem) -> int:
        """
        Calculate the effective fare for one line item.

        Raises:
            NotFoundError: If either station name is unknown.
            FareParseError: If the looked-up fare is not numeric.
        """
        origin_id = self.directory.resolve_identifier(line_item.origin_name)
        destination_id = self.directory.resolve_identifier(line_item.destination_name)
        logger.debug(f"Station SIDs: {origin_id} -> {destination_id}")

        record = self.fare_lookup.resolve_fare(origin_id, destination_id)
        fare = parse_fare_amount(record)

        if line_item.round_trip:
            fare *= 2
        return fare * line_item.effective_repeat_count


# Singleton instance for default calculator
_default_calculator: Optional[FareCalculatorInterface] = None


def get_fare_calculator() -> FareCalculatorInterface:
    """
    Get the default fare calculator instance (Singleton pattern).

    Returns:
        Fare calculator instance implementing FareCalculatorInterface
    """
    global _default_calculator
    if _default_calculator is None:
        _default_calculator = StationPairFareCalculator(
            get_station_directory(), get_fare_lookup()
        )
    return _default_calculator
