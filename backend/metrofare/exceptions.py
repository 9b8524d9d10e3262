"""Errors raised by the metro fare service.

Every error carries a stable ``code`` and the HTTP status the API answers
with, so clients can tell bad input (4xx) from upstream failures (502) and
local storage failures (500).
"""

from typing import Optional

BODY_PREVIEW_LENGTH = 200


def body_preview(body: str, limit: int = BODY_PREVIEW_LENGTH) -> str:
    """Return the first ``limit`` characters of a response body."""
    if len(body) > limit:
        return body[:limit] + "..."
    return body


class MetroFareError(Exception):
    """Base class for all service errors."""

    code = "internal_error"
    status_code = 500


class LoadError(MetroFareError):
    """Station data could not be read or parsed."""

    code = "station_data_unavailable"


class NotFoundError(MetroFareError):
    """No station has the requested name."""

    code = "station_not_found"
    status_code = 404

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"station not found: {name}")


class CacheReadError(MetroFareError):
    """The persisted fare cache holds malformed content."""

    code = "cache_read_failed"


class CacheWriteError(MetroFareError):
    """The fare cache could not be written."""

    code = "cache_write_failed"


class UpstreamError(MetroFareError):
    """Base class for failures of the remote fare API."""

    code = "upstream_error"
    status_code = 502

    def __init__(self, message: str, preview: Optional[str] = None):
        self.preview = preview
        super().__init__(message)


class TransportError(UpstreamError):
    """The request could not be sent or no response arrived."""

    code = "upstream_unreachable"


class RemoteStatusError(UpstreamError):
    code = "upstream_bad_status"

    def __init__(self, status: int, body: str):
        self.status = status
        preview = body_preview(body)
        super().__init__(f"API request failed with status {status}: {preview}", preview)


class UnexpectedContentTypeError(UpstreamError):
    code = "upstream_bad_content_type"

    def __init__(self, content_type: str, body: str):
        self.content_type = content_type
        preview = body_preview(body)
        super().__init__(
            f"API returned non-JSON response (Content-Type: {content_type}). "
            f"Response preview: {preview}",
            preview,
        )


class DecodeError(UpstreamError):
    code = "upstream_bad_payload"

    def __init__(self, reason: str, body: str):
        preview = body_preview(body)
        super().__init__(
            f"failed to parse JSON response: {reason}. Response preview: {preview}",
            preview,
        )


class FareParseError(MetroFareError):
    """A fare record carries a non-numeric fare amount."""

    code = "fare_not_numeric"
    status_code = 502

    def __init__(self, fare_amount: str):
        self.fare_amount = fare_amount
        super().__init__(f"fare amount is not numeric: {fare_amount!r}")
