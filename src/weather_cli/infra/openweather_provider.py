"""OpenWeather backed implementation of :class:`~weather_cli.core.protocols.ForecastProvider`.

This module is the **only** place in the codebase that imports ``httpx``.
All transport and HTTP errors are caught here and re-raised as typed
:class:`~weather_cli.exceptions.ProviderError` subclasses, so nothing raw
escapes the infrastructure boundary.

One request per call; there is no retry.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from weather_cli.exceptions import (
    ProviderBadResponseError,
    ProviderTimeoutError,
    ProviderUnavailableError,
)
from weather_cli.settings import DEFAULT_API_URL, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


class OpenWeatherProvider:
    """Concrete :class:`ForecastProvider` for the OpenWeather 5-day / 3-hour API.

    Usage::

        provider = OpenWeatherProvider()
        payload = provider.fetch_forecast(35.6895, 139.6917, api_key="...")

    Parameters
    ----------
    base_url:
        Forecast endpoint.
    timeout:
        Seconds to wait for the whole request.
    client:
        Optional pre-built :class:`httpx.Client` (tests inject one with a
        mock transport).  When omitted a client is created per call.
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
    ) -> None:
        self.base_url: str = base_url
        self.timeout: float = timeout
        self._client: httpx.Client | None = client

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def fetch_forecast(
        self,
        latitude: float,
        longitude: float,
        api_key: str,
    ) -> dict[str, Any]:
        """Fetch the raw forecast payload for a coordinate pair.

        Raises
        ------
        ProviderTimeoutError
            When the request exceeds :attr:`timeout`.
        ProviderUnavailableError
            On transport failures and non-200 responses.
        ProviderBadResponseError
            When the body is not a JSON object.
        """
        params = {
            "lat": latitude,
            "lon": longitude,
            "appid": api_key,
            "units": "metric",
        }
        logger.debug("Requesting forecast for (%s, %s) from %s", latitude, longitude, self.base_url)

        try:
            response = self._get(params)
        except httpx.TimeoutException as exc:
            raise ProviderTimeoutError(
                f"Forecast request timed out after {self.timeout:g} seconds.",
                hint="Check your network connection and try again.",
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderUnavailableError(
                f"Error making request to the forecast API: {exc}",
                hint="Check your network connection and try again.",
            ) from exc

        logger.debug("Forecast API answered %s", response.status_code)
        if response.status_code != httpx.codes.OK:
            raise self._status_error(response, api_key)

        try:
            payload: Any = response.json()
        except ValueError as exc:
            raise ProviderBadResponseError(
                f"Forecast API returned a body that is not JSON: {exc}",
            ) from exc

        if not isinstance(payload, dict):
            raise ProviderBadResponseError(
                "Forecast API returned an unexpected data structure.",
            )
        return payload

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _get(self, params: dict[str, Any]) -> httpx.Response:
        if self._client is not None:
            return self._client.get(self.base_url, params=params, timeout=self.timeout)
        with httpx.Client(timeout=self.timeout) as client:
            return client.get(self.base_url, params=params)

    @staticmethod
    def _status_error(response: httpx.Response, api_key: str) -> ProviderUnavailableError:
        """Translate a non-200 response into a domain exception."""
        status = f"{response.status_code} {response.reason_phrase}".strip()
        hint: str | None = None
        if response.status_code == httpx.codes.UNAUTHORIZED:
            hint = (
                "No API key is set. Set one with: weather --set-api-key <key>"
                if not api_key
                else "The API key was rejected. Set a valid one with: weather --set-api-key <key>"
            )
        return ProviderUnavailableError(
            f"Forecast API returned non-OK status: {status}",
            hint=hint,
        )
