import logging

from grahmeen_health.application.ports import AssessmentStorePort
from grahmeen_health.infrastructure.config import Settings
from grahmeen_health.infrastructure.storage.json_store import JsonAssessmentStore
from grahmeen_health.infrastructure.storage.memory_store import InMemoryAssessmentStore


logger = logging.getLogger(__name__)


def build_assessment_store(settings: Settings | None = None) -> AssessmentStorePort:
    settings = settings or Settings()
    kind = settings.assessment_store
    if kind == "memory":
        return InMemoryAssessmentStore()
    if kind != "json":
        logger.warning("Unknown ASSESSMENT_STORE %r; falling back to json", kind)
    return JsonAssessmentStore(storage_path=settings.assessments_path)
