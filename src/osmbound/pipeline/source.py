"""
OverpassSource - Remote Fetch and Response Decoding

Issues a single blocking GET against the Overpass interpreter and decodes the
JSON body into the typed element model. No retries: the interactive layer lets
the user try again.
"""

import logging
from typing import Optional

import requests
from pydantic import ValidationError

from .. import __version__
from ..config.settings import OverpassConfig
from ..domain.models import OverpassResponse
from ..types import DecodeError, ResponseReadError, TransportError, UpstreamStatusError
from .query import build_query, build_request_url

logger = logging.getLogger(__name__)


def decode_response(data: bytes) -> OverpassResponse:
    """
    Decode an interpreter response body.

    Args:
        data: Raw response bytes

    Returns:
        Decoded OverpassResponse

    Raises:
        DecodeError: Malformed JSON or a payload that does not match the element model
    """
    try:
        response = OverpassResponse.model_validate_json(data)
    except ValidationError as e:
        raise DecodeError(f"Invalid Overpass response: {e}") from e

    if response.remark:
        logger.warning(f"Overpass remark: {response.remark}")

    return response


class OverpassSource:
    """
    Overpass interpreter client.

    One instance can serve several fetches; nothing is kept between them.
    """

    def __init__(self, config: Optional[OverpassConfig] = None):
        """
        Initialize the source.

        Args:
            config: Interpreter endpoint and timeouts (defaults if omitted)
        """
        self.config = config or OverpassConfig()
        self.headers = {"User-Agent": f"osmbound/{__version__}"}

    def build_query(self, country_code: str, admin_level: int) -> str:
        return build_query(country_code, admin_level, timeout=self.config.query_timeout)

    def fetch(self, query: str) -> bytes:
        """
        Execute the query and return the raw response body.

        Args:
            query: Overpass QL query (unencoded)

        Returns:
            Response body bytes

        Raises:
            TransportError: Network or connection failure
            UpstreamStatusError: Status other than 200
            ResponseReadError: Failure while reading the body
        """
        url = build_request_url(self.config.url, query)
        logger.debug(f"GET {self.config.url} ({len(url)} chars)")

        try:
            response = requests.get(
                url,
                headers=self.headers,
                stream=True,
                timeout=self.config.http_timeout,
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(self.config.url, str(e)) from e

        with response:
            if response.status_code != 200:
                raise UpstreamStatusError(response.status_code, response.reason)

            try:
                data = response.content
            except (requests.exceptions.RequestException, OSError) as e:
                raise ResponseReadError(f"Failed to read response body: {e}") from e

        logger.debug(f"Received {len(data):,} bytes")
        return data
