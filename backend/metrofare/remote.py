"""Client for the remote metro ticket-information API."""

import logging
from typing import Optional

import requests
from pydantic import ValidationError

from metrofare.config import settings
from metrofare.exceptions import (
    DecodeError,
    RemoteStatusError,
    TransportError,
    UnexpectedContentTypeError,
)
from metrofare.models import FareRecord

logger = logging.getLogger(__name__)


class RemoteFareResolver:
    """
    Fetches fare records from the ticket-information endpoint.

    One POST per call, no retries. Certificate verification stays on unless
    ``verify_tls`` is explicitly set to False.
    """

    def __init__(
        self,
        url: str,
        language: str = "tw",
        verify_tls: bool = True,
        timeout: Optional[float] = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.language = language
        self.verify_tls = verify_tls
        self.timeout = timeout
        self.session = session or requests.Session()
        if not verify_tls:
            logger.warning(f"TLS certificate verification disabled for {url}")

    def resolve(self, origin_id: str, destination_id: str) -> FareRecord:
        """
        Fetch the fare record for a station pair.

        Raises:
            TransportError: The request could not be sent or got no response.
            RemoteStatusError: The API answered with a non-200 status.
            UnexpectedContentTypeError: The API did not answer with JSON.
            DecodeError: The JSON body is not a valid fare record.
        """
        payload = {
            "StartSID": origin_id,
            "EndSID": destination_id,
            "Lang": self.language,
        }
        logger.info(f"Making API request to: {self.url} ({origin_id} -> {destination_id})")
        try:
            response = self.session.post(
                self.url,
                json=payload,
                headers={"Content-Type": "application/json"},
                verify=self.verify_tls,
                timeout=self.timeout,
            )
            body = response.text
        except requests.exceptions.RequestException as e:
            logger.error(f"Error making HTTP request: {e}")
            raise TransportError(f"request to {self.url} failed: {e}") from e

        logger.info(f"API response status: {response.status_code}")

        if response.status_code != 200:
            raise RemoteStatusError(response.status_code, body)

        content_type = response.headers.get("Content-Type", "")
        if "application/json" not in content_type:
            raise UnexpectedContentTypeError(content_type, body)

        try:
            record = FareRecord.model_validate_json(body)
        except ValidationError as e:
            logger.warning(f"Failed to parse JSON response: {e}")
            raise DecodeError(str(e), body) from e

        logger.info(
            f"Successfully parsed metro data: StartSID={record.origin_id}, "
            f"EndSID={record.destination_id}, Fare={record.fare_amount}"
        )
        return record


# Singleton instance
_fare_resolver: Optional[RemoteFareResolver] = None


def get_fare_resolver() -> RemoteFareResolver:
    """Get singleton remote fare resolver."""
    global _fare_resolver
    if _fare_resolver is None:
        _fare_resolver = RemoteFareResolver(
            url=settings.FARE_API_URL,
            language=settings.FARE_API_LANG,
            verify_tls=settings.FARE_API_VERIFY_TLS,
            timeout=settings.FARE_API_TIMEOUT,
        )
    return _fare_resolver
