import logging
from typing import List, Optional

import requests

from grahmeen_health.application.ports import HospitalSearchPort
from grahmeen_health.domain.models import HospitalResult
from grahmeen_health.infrastructure.config import Settings


logger = logging.getLogger(__name__)


TEXT_SEARCH_URL = "https://maps.googleapis.com/maps/api/place/textsearch/json"
DETAILS_URL = "https://maps.googleapis.com/maps/api/place/details/json"


class GooglePlacesHospitalSearchAdapter(HospitalSearchPort):
    def __init__(self, settings: Settings | None = None, session: requests.Session | None = None):
        self.settings = settings or Settings()
        self.api_key = self.settings.google_places_api_key
        self.session = session or requests.Session()

    def search_hospitals(self, location_query: str, limit: int = 5) -> List[HospitalResult]:
        if not self.api_key:
            logger.warning("Google Places API key missing; hospital search disabled.")
            return []

        params = {
            "query": f"hospital near {location_query}",
            "type": "hospital",
            "key": self.api_key,
        }
        try:
            resp = self.session.get(TEXT_SEARCH_URL, params=params, timeout=15)
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            logger.exception("Places TextSearch failed: %s", e)
            return []

        hospitals: List[HospitalResult] = []
        for r in data.get("results", [])[:limit]:
            place_id = r.get("place_id")
            hospitals.append(
                HospitalResult(
                    name=r.get("name") or "Hospital",
                    rating=r.get("rating"),
                    address=r.get("formatted_address"),
                    phone=self._lookup_phone(place_id) if place_id else None,
                    maps_url=f"https://www.google.com/maps/place/?q=place_id:{place_id}" if place_id else None,
                )
            )
        return hospitals

    def _lookup_phone(self, place_id: str) -> Optional[str]:
        params = {
            "place_id": place_id,
            "fields": "formatted_phone_number",
            "key": self.api_key,
        }
        try:
            resp = self.session.get(DETAILS_URL, params=params, timeout=10)
            resp.raise_for_status()
            return resp.json().get("result", {}).get("formatted_phone_number")
        except requests.RequestException as e:
            logger.warning("Places Details failed for %s: %s", place_id, e)
            return None
