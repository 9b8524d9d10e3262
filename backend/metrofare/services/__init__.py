"""Services package for the metro fare service."""

from .fare_lookup import (
    get_fare_lookup,
    FareLookupService,
)
from .fare_calculator import (
    get_fare_calculator,
    FareCalculatorInterface,
    StationPairFareCalculator
)

__all__ = [
    'get_fare_lookup',
    'FareLookupService',
    'get_fare_calculator',
    'FareCalculatorInterface',
    'StationPairFareCalculator'
]
