"""
Google Distance Matrix client.
"""

import httpx

from app.application.ports import RoadDistancePort
from app.domain_core.value_objects.coordinates import RoadDistance
from app.infra.config.settings import Settings
from app.infra.config.logging_config import get_logger


class GoogleDistanceMatrixClient(RoadDistancePort):
    """Road distance for a single origin/destination pair."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        base_url: str = "https://maps.googleapis.com",
        timeout: float = 5.0,
    ):
        self.client = client
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._log = get_logger("geo.distance_matrix")

    @classmethod
    def from_settings(
        cls, settings: Settings, client: httpx.AsyncClient
    ) -> "GoogleDistanceMatrixClient":
        return cls(
            client=client,
            api_key=settings.google_maps_api_key,
            base_url=settings.google_maps_base_url,
            timeout=settings.http_timeout_seconds,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def road_distance(
        self, origin_lat: float, origin_lon: float, dest_lat: float, dest_lon: float
    ) -> RoadDistance:
        if not self.is_configured:
            self._log.error("road_distance.failed", reason="missing_api_key")
            return RoadDistance.unknown()

        try:
            response = await self.client.get(
                f"{self.base_url}/maps/api/distancematrix/json",
                params={
                    "origins": f"{origin_lat},{origin_lon}",
                    "destinations": f"{dest_lat},{dest_lon}",
                    "key": self.api_key,
                },
                timeout=self.timeout,
            )
            data = response.json()
        except httpx.HTTPError as e:
            self._log.error("road_distance.failed", reason="transport", error=str(e))
            return RoadDistance.unknown()
        except ValueError as e:
            self._log.error("road_distance.failed", reason="invalid_body", error=str(e))
            return RoadDistance.unknown()

        if not isinstance(data, dict) or data.get("status") != "OK":
            self._log.error(
                "road_distance.failed",
                reason="provider_status",
                provider_status=data.get("status") if isinstance(data, dict) else None,
            )
            return RoadDistance.unknown()

        try:
            element = data["rows"][0]["elements"][0]
            if not isinstance(element, dict):
                raise TypeError(f"unexpected element {element!r}")
            if element.get("status") != "OK":
                self._log.warning(
                    "road_distance.no_route", element_status=element.get("status")
                )
                return RoadDistance.unknown()
            distance_km = round(element["distance"]["value"] / 1000, 1)
            duration_text = element["duration"]["text"]
        except (KeyError, IndexError, TypeError) as e:
            self._log.error("road_distance.failed", reason="malformed_result", error=str(e))
            return RoadDistance.unknown()

        self._log.info(
            "road_distance.ok", distance_km=distance_km, duration=duration_text
        )
        return RoadDistance(distance_km=distance_km, duration_text=duration_text)
