from datetime import datetime
from typing import List, Optional, Protocol

from grahmeen_health.application.schemas import AssessmentRequest, ListQuery, Page
from grahmeen_health.domain.models import AssessmentRecord, HospitalResult, RiskLevel, TriageOutcome


class TriageStrategy(Protocol):
    name: str

    def evaluate(self, request: AssessmentRequest) -> TriageOutcome:
        ...


class AssessmentStorePort(Protocol):
    def create(self, record: AssessmentRecord) -> AssessmentRecord:
        ...

    def update(self, record: AssessmentRecord) -> AssessmentRecord:
        ...

    def get(self, record_id: str) -> Optional[AssessmentRecord]:
        ...

    def delete(self, record_id: str) -> bool:
        ...

    def find(
        self,
        user_id: Optional[str] = None,
        risk_level: Optional[RiskLevel] = None,
        severity: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[AssessmentRecord]:
        """
        Returns matching records, newest first.
        """
        ...

    def list_page(self, query: ListQuery) -> Page:
        ...


class HospitalSearchPort(Protocol):
    def search_hospitals(self, location_query: str, limit: int = 5) -> List[HospitalResult]:
        ...
