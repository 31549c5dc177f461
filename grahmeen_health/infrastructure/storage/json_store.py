"""Assessment storage in a single JSON file."""
import json
import logging
import os
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from grahmeen_health.application.schemas import ListQuery, Page
from grahmeen_health.domain.models import AssessmentRecord, RiskLevel
from grahmeen_health.infrastructure.storage.query import filter_records, paginate


logger = logging.getLogger(__name__)


class JsonAssessmentStore:
    """Keeps every assessment in one JSON file keyed by record id."""

    def __init__(self, storage_path: Optional[str] = None):
        """
        Initialize JsonAssessmentStore.

        Args:
            storage_path: Path to JSON file for assessment storage.
                         Defaults to .streamlit/assessments.json
        """
        if storage_path is None:
            project_root = Path(__file__).parent.parent.parent.parent
            storage_path = str(project_root / ".streamlit" / "assessments.json")

        self.storage_path = storage_path
        self._lock = threading.Lock()
        self._ensure_storage_exists()

    def _ensure_storage_exists(self) -> None:
        """Create storage directory and file if they don't exist."""
        storage_dir = os.path.dirname(self.storage_path)
        if storage_dir and not os.path.exists(storage_dir):
            os.makedirs(storage_dir, exist_ok=True)

        if not os.path.exists(self.storage_path) or os.path.getsize(self.storage_path) == 0:
            self._save_raw({})

    def _load_raw(self) -> Dict[str, Any]:
        try:
            with open(self.storage_path, 'r') as f:
                return json.load(f)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError:
            logger.error("Assessment store %s is corrupt; refusing to overwrite it", self.storage_path)
            raise

    def _save_raw(self, data: Dict[str, Any]) -> None:
        with open(self.storage_path, 'w') as f:
            json.dump(data, f, indent=2)

    def _load_records(self) -> List[AssessmentRecord]:
        return [AssessmentRecord(**item) for item in self._load_raw().values()]

    def create(self, record: AssessmentRecord) -> AssessmentRecord:
        with self._lock:
            data = self._load_raw()
            if record.id in data:
                raise KeyError(f"Assessment {record.id} already exists")
            data[record.id] = record.model_dump(mode="json")
            self._save_raw(data)
        return record.model_copy(deep=True)

    def update(self, record: AssessmentRecord) -> AssessmentRecord:
        with self._lock:
            data = self._load_raw()
            if record.id not in data:
                raise KeyError(f"Assessment {record.id} does not exist")
            data[record.id] = record.model_dump(mode="json")
            self._save_raw(data)
        return record.model_copy(deep=True)

    def get(self, record_id: str) -> Optional[AssessmentRecord]:
        with self._lock:
            item = self._load_raw().get(record_id)
        return AssessmentRecord(**item) if item else None

    def delete(self, record_id: str) -> bool:
        with self._lock:
            data = self._load_raw()
            if record_id not in data:
                return False
            del data[record_id]
            self._save_raw(data)
        return True

    def find(
        self,
        user_id: Optional[str] = None,
        risk_level: Optional[RiskLevel] = None,
        severity: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[AssessmentRecord]:
        with self._lock:
            records = self._load_records()
        return filter_records(records, user_id, risk_level, severity, start, end)

    def list_page(self, query: ListQuery) -> Page:
        with self._lock:
            records = self._load_records()
        return paginate(records, query)
