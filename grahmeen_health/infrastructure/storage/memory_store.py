import threading
from datetime import datetime
from typing import Dict, List, Optional

from grahmeen_health.application.schemas import ListQuery, Page
from grahmeen_health.domain.models import AssessmentRecord, RiskLevel
from grahmeen_health.infrastructure.storage.query import filter_records, paginate


class InMemoryAssessmentStore:
    """Process-local store. Records are copied in and out so callers never share instances."""

    def __init__(self):
        self._records: Dict[str, AssessmentRecord] = {}
        self._lock = threading.Lock()

    def create(self, record: AssessmentRecord) -> AssessmentRecord:
        with self._lock:
            if record.id in self._records:
                raise KeyError(f"Assessment {record.id} already exists")
            self._records[record.id] = record.model_copy(deep=True)
        return record.model_copy(deep=True)

    def update(self, record: AssessmentRecord) -> AssessmentRecord:
        with self._lock:
            if record.id not in self._records:
                raise KeyError(f"Assessment {record.id} does not exist")
            self._records[record.id] = record.model_copy(deep=True)
        return record.model_copy(deep=True)

    def get(self, record_id: str) -> Optional[AssessmentRecord]:
        with self._lock:
            record = self._records.get(record_id)
            return record.model_copy(deep=True) if record else None

    def delete(self, record_id: str) -> bool:
        with self._lock:
            return self._records.pop(record_id, None) is not None

    def find(
        self,
        user_id: Optional[str] = None,
        risk_level: Optional[RiskLevel] = None,
        severity: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[AssessmentRecord]:
        with self._lock:
            snapshot = [r.model_copy(deep=True) for r in self._records.values()]
        return filter_records(snapshot, user_id, risk_level, severity, start, end)

    def list_page(self, query: ListQuery) -> Page:
        with self._lock:
            snapshot = [r.model_copy(deep=True) for r in self._records.values()]
        return paginate(snapshot, query)
