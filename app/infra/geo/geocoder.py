"""
OpenCage geocoding client.
"""

from collections import OrderedDict
from typing import Optional

import httpx

from app.application.ports import GeocoderPort
from app.domain_core.value_objects.coordinates import Coordinates
from app.infra.config.settings import Settings
from app.infra.config.logging_config import get_logger


class OpenCageGeocoder(GeocoderPort):
    """Resolves free text to coordinates; unknown coordinates on any failure."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        base_url: str = "https://api.opencagedata.com",
        timeout: float = 5.0,
        cache_size: int = 0,
    ):
        self.client = client
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.cache_size = cache_size
        self._cache: "OrderedDict[str, Coordinates]" = OrderedDict()
        self._log = get_logger("geo.geocoder")

    @classmethod
    def from_settings(cls, settings: Settings, client: httpx.AsyncClient) -> "OpenCageGeocoder":
        return cls(
            client=client,
            api_key=settings.opencage_api_key,
            base_url=settings.opencage_base_url,
            timeout=settings.http_timeout_seconds,
            cache_size=settings.geocode_cache_size,
        )

    async def geocode(self, location_text: str) -> Coordinates:
        if not self.api_key:
            self._log.error("geocode.failed", reason="missing_api_key")
            return Coordinates.unknown()

        key = _normalize(location_text)
        cached = self._cache_get(key)
        if cached is not None:
            self._log.info("geocode.cache_hit", location=location_text)
            return cached

        coords = await self._lookup(location_text)
        if coords.is_known:
            self._cache_put(key, coords)
        return coords

    async def _lookup(self, location_text: str) -> Coordinates:
        try:
            response = await self.client.get(
                f"{self.base_url}/geocode/v1/json",
                params={"q": location_text, "key": self.api_key},
                timeout=self.timeout,
            )
            data = response.json()
        except httpx.HTTPError as e:
            self._log.error("geocode.failed", reason="transport", error=str(e))
            return Coordinates.unknown()
        except ValueError as e:
            self._log.error("geocode.failed", reason="invalid_body", error=str(e))
            return Coordinates.unknown()

        if not isinstance(data, dict):
            self._log.error("geocode.failed", reason="invalid_body")
            return Coordinates.unknown()

        status = data.get("status") or {}
        if (
            response.status_code != 200
            or not isinstance(status, dict)
            or (status and status.get("code") != 200)
        ):
            self._log.error(
                "geocode.failed",
                reason="provider_status",
                http_status=response.status_code,
                provider_status=status,
            )
            return Coordinates.unknown()

        results = data.get("results") or []
        if not results:
            self._log.warning("geocode.no_results", location=location_text)
            return Coordinates.unknown()

        try:
            geometry = results[0]["geometry"]
            coords = Coordinates(float(geometry["lat"]), float(geometry["lng"]))
        except (KeyError, TypeError, ValueError) as e:
            self._log.error("geocode.failed", reason="malformed_result", error=str(e))
            return Coordinates.unknown()

        self._log.info(
            "geocode.ok", location=location_text, lat=coords.lat, lon=coords.lon
        )
        return coords

    def _cache_get(self, key: str) -> Optional[Coordinates]:
        if self.cache_size <= 0 or key not in self._cache:
            return None
        self._cache.move_to_end(key)
        return self._cache[key]

    def _cache_put(self, key: str, coords: Coordinates) -> None:
        if self.cache_size <= 0:
            return
        self._cache[key] = coords
        self._cache.move_to_end(key)
        while len(self._cache) > self.cache_size:
            self._cache.popitem(last=False)


def _normalize(text: str) -> str:
    return " ".join(text.split()).casefold()
