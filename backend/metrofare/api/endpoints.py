"""API endpoints for station lookup and fare calculation."""

import logging
from fastapi import APIRouter, Depends, Query
from typing import List

from metrofare.config import settings
from metrofare.models import ErrorResponse, FareLineItem, FareRecord, FareTotalResponse, Station
from metrofare.services import get_fare_calculator, get_fare_lookup
from metrofare.services.fare_calculator import FareCalculatorInterface
from metrofare.services.fare_lookup import FareLookupService
from metrofare.stations import StationDirectory, get_station_directory

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Metro Fares"])

ERROR_RESPONSES = {
    404: {"model": ErrorResponse, "description": "Unknown station name"},
    500: {"model": ErrorResponse, "description": "Fare cache failure"},
    502: {"model": ErrorResponse, "description": "Remote fare API failure"},
}


def get_directory() -> StationDirectory:
    return get_station_directory()


def get_lookup() -> FareLookupService:
    return get_fare_lookup()


def get_calculator() -> FareCalculatorInterface:
    """
    Dependency injection for fare calculator.
    Returns any implementation of FareCalculatorInterface.
    """
    return get_fare_calculator()


@router.get("/")
def root():
    """Root endpoint."""
    return {"message": settings.API_TITLE, "version": settings.API_VERSION}


@router.get("/health")
def health_check(directory: StationDirectory = Depends(get_directory)):
    """Health check endpoint including station data status."""
    return {
        "status": "healthy",
        "service": settings.API_TITLE,
        "stations_loaded": len(directory),
    }


@router.get("/metrodata", response_model=FareRecord, responses=ERROR_RESPONSES)
def get_metro_data(
    start_name: str = Query("", alias="startName", description="Origin station name"),
    end_name: str = Query("", alias="endName", description="Destination station name"),
    directory: StationDirectory = Depends(get_directory),
    lookup: FareLookupService = Depends(get_lookup),
):
    """
    Get the fare record between two stations, from cache or the remote API.
    """
    origin_id = directory.resolve_identifier(start_name)
    destination_id = directory.resolve_identifier(end_name)
    return lookup.resolve_fare(origin_id, destination_id)


@router.get("/searchstations", response_model=List[Station])
def search_stations(
    query: str = Query("", description="Substring of the station name"),
    directory: StationDirectory = Depends(get_directory),
):
    """Find stations whose name contains the query."""
    return directory.search(query)


@router.post("/calculatefare", response_model=FareTotalResponse, responses=ERROR_RESPONSES)
def calculate_fare(
    line_items: List[FareLineItem],
    calculator: FareCalculatorInterface = Depends(get_calculator),
) -> FareTotalResponse:
    """
    Calculate the total fare for a list of planned trips.

    Round trips count double and each item is multiplied by its trip count.
    Any failing item fails the whole request.
    """
    logger.info(f"Processing {len(line_items)} fare requests")
    total_fare = calculator.calculate_total(line_items)
    logger.info(f"Successfully calculated total fare: {total_fare}")
    return FareTotalResponse(total_fare=total_fare)
