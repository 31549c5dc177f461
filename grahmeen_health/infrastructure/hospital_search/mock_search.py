from typing import List

from grahmeen_health.application.ports import HospitalSearchPort
from grahmeen_health.domain.models import HospitalResult


class MockHospitalSearchAdapter(HospitalSearchPort):
    def search_hospitals(self, location_query: str, limit: int = 5) -> List[HospitalResult]:
        return [
            HospitalResult(
                name=f"{location_query.title() or 'City'} General Hospital {i+1}",
                rating=4.0 + (i % 3) * 0.3,
                address=f"{10 + i} Hospital Road, {location_query}",
                phone="(000) 000-0000",
                maps_url="https://maps.google.com",
            )
            for i in range(limit)
        ]
