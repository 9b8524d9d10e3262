"""Station directory loaded from the static station list."""

import json
import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from pydantic import ValidationError

from metrofare.config import settings
from metrofare.exceptions import LoadError, NotFoundError
from metrofare.models import Station

logger = logging.getLogger(__name__)


class StationDirectory:
    """
    Read-only list of stations.

    Stations keep the order of the source file; lookups that can match more
    than one station return the first one.
    """

    def __init__(self, stations: Iterable[Station]):
        self._stations: Tuple[Station, ...] = tuple(stations)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "StationDirectory":
        """
        Load stations from a JSON array of ``{StationSID, StationName}`` objects.

        Raises:
            LoadError: If the file is unreadable or malformed.
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Error loading station list {path}: {e}")
            raise LoadError(f"cannot load station list {path}: {e}") from e

        if not isinstance(raw, list):
            raise LoadError(f"station list {path} must be a JSON array")

        try:
            stations = [Station.model_validate(entry) for entry in raw]
        except ValidationError as e:
            logger.error(f"Invalid station entry in {path}: {e}")
            raise LoadError(f"invalid station entry in {path}: {e}") from e

        logger.info(f"Loaded {len(stations)} stations from {path}")
        return cls(stations)

    def resolve_identifier(self, name: str) -> str:
        """
        Return the identifier of the first station named exactly ``name``.

        Raises:
            NotFoundError: If no station has that name.
        """
        for station in self._stations:
            if station.name == name:
                return station.identifier
        raise NotFoundError(name)

    def search(self, query: str) -> List[Station]:
        """Return every station whose name contains ``query``."""
        return [station for station in self._stations if query in station.name]

    def __iter__(self) -> Iterator[Station]:
        return iter(self._stations)

    def __len__(self) -> int:
        return len(self._stations)


# Singleton instance
_station_directory: Optional[StationDirectory] = None


def get_station_directory() -> StationDirectory:
    """Get singleton station directory, loading it on first access."""
    global _station_directory
    if _station_directory is None:
        _station_directory = StationDirectory.load(settings.STATIONS_PATH)
    return _station_directory
