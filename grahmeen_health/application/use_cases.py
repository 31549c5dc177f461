import logging
from datetime import date, datetime, time
from typing import Callable, Iterable, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from grahmeen_health.application.errors import (
    GrahmeenHealthError,
    InternalError,
    NotFoundError,
    UnauthenticatedError,
    ValidationError,
)
from grahmeen_health.application.ports import AssessmentStorePort, TriageStrategy
from grahmeen_health.application.schemas import AssessmentRequest, ListQuery, MedicationScreening, Page
from grahmeen_health.application.strategies import DEFAULT_STRATEGY, get_strategy
from grahmeen_health.domain.adr import (
    calculate_adr_severity,
    check_drug_interactions,
    check_for_adverse_reactions,
    detect_adverse_reactions,
)
from grahmeen_health.domain.models import AssessmentRecord, RiskLevel, Symptom, SymptomSeverity


logger = logging.getLogger(__name__)


DateLike = Union[str, date, datetime]


def parse_request(data: Union[AssessmentRequest, dict]) -> AssessmentRequest:
    if isinstance(data, AssessmentRequest):
        return data
    try:
        return AssessmentRequest(**data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid assessment request: {e.errors()[0]['msg']}") from e


def _parse_date(value: DateLike, field: str) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime.combine(value, time.min)
    else:
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except (AttributeError, ValueError):
            raise ValidationError(
                f"Invalid {field} format. Please use ISO 8601 format (YYYY-MM-DD)"
            ) from None
    # Stored timestamps are naive local time.
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _is_date_only(value: DateLike) -> bool:
    if isinstance(value, datetime):
        return False
    if isinstance(value, date):
        return True
    return "T" not in value and " " not in value.strip()


class EarlyDetectionUseCase:
    """Submits early-detection assessments and queries a user's history.

    The store and the triage strategy are injected; nothing here reaches for
    process-wide state.
    """

    def __init__(
        self,
        store: AssessmentStorePort,
        strategy: Optional[TriageStrategy] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.store = store
        self.strategy = strategy or get_strategy(DEFAULT_STRATEGY)
        self.clock = clock

    def submit(
        self,
        user_id: Optional[str],
        request: Union[AssessmentRequest, dict],
        strategy: Optional[TriageStrategy] = None,
    ) -> AssessmentRecord:
        self._require_user(user_id)
        request = parse_request(request)
        self._validate_request(request)
        strategy = strategy or self.strategy

        now = self.clock()
        record = AssessmentRecord(
            user_id=user_id,
            symptoms=request.symptoms,
            severity=request.severity,
            age=request.age,
            gender=request.gender,
            medical_history=request.medical_history,
            family_history=request.family_history,
            lifestyle=request.lifestyle,
            created_at=now,
            updated_at=now,
        )
        record = self._store_call("create", lambda: self.store.create(record))

        try:
            outcome = strategy.evaluate(request)
        except Exception as e:
            logger.exception("Triage strategy %s failed for assessment %s", strategy.name, record.id)
            self._store_call("delete", lambda: self.store.delete(record.id))
            if isinstance(e, GrahmeenHealthError):
                raise
            raise InternalError("Internal server error") from e
        record.apply_outcome(outcome, self.clock())
        record = self._store_call("update", lambda: self.store.update(record))

        logger.info(
            "Assessment %s completed for user %s: risk=%s strategy=%s",
            record.id, user_id, record.risk_level.value, outcome.strategy,
        )
        return record

    def reassess(
        self,
        user_id: Optional[str],
        record_id: str,
        request: Union[AssessmentRequest, dict],
        strategy: Optional[TriageStrategy] = None,
    ) -> AssessmentRecord:
        record = self.get(user_id, record_id)
        request = parse_request(request)
        self._validate_request(request)

        record.symptoms = request.symptoms
        record.severity = request.severity
        record.age = request.age
        record.gender = request.gender
        record.medical_history = request.medical_history
        record.family_history = request.family_history
        record.lifestyle = request.lifestyle

        outcome = (strategy or self.strategy).evaluate(request)
        record.apply_outcome(outcome, self.clock())
        return self._store_call("update", lambda: self.store.update(record))

    def get(self, user_id: Optional[str], record_id: str) -> AssessmentRecord:
        self._require_user(user_id)
        if not record_id:
            raise ValidationError("Analysis ID is required")
        record = self._store_call("get", lambda: self.store.get(record_id))
        # Someone else's record is reported as missing
        if record is None or record.user_id != user_id:
            raise NotFoundError("Analysis not found")
        return record

    def delete(self, user_id: Optional[str], record_id: str) -> None:
        self.get(user_id, record_id)
        self._store_call("delete", lambda: self.store.delete(record_id))
        logger.info("Assessment %s deleted by user %s", record_id, user_id)

    def history(self, user_id: Optional[str]) -> List[AssessmentRecord]:
        self._require_user(user_id)
        return self._store_call("find", lambda: self.store.find(user_id=user_id))

    def by_risk_level(self, user_id: Optional[str], risk_level: str) -> List[AssessmentRecord]:
        self._require_user(user_id)
        if not risk_level:
            raise ValidationError("Risk level is required")
        try:
            level = RiskLevel(risk_level.strip().lower())
        except ValueError:
            raise ValidationError("Invalid risk level. Must be low, medium, or high") from None
        return self._store_call("find", lambda: self.store.find(user_id=user_id, risk_level=level))

    def by_severity(self, user_id: Optional[str], severity: str) -> List[AssessmentRecord]:
        self._require_user(user_id)
        if not severity:
            raise ValidationError("Severity level is required")
        try:
            level = SymptomSeverity(severity.strip().lower())
        except ValueError:
            raise ValidationError("Invalid severity level. Must be mild, moderate, or severe") from None
        return self._store_call("find", lambda: self.store.find(user_id=user_id, severity=level.value))

    def by_date_range(self, user_id: Optional[str], start: DateLike, end: DateLike) -> List[AssessmentRecord]:
        self._require_user(user_id)
        if not start or not end:
            raise ValidationError("Start date and end date are required")

        start_dt = _parse_date(start, "start date")
        end_dt = _parse_date(end, "end date")
        if end_dt < start_dt:
            raise ValidationError("End date must be after start date")
        if _is_date_only(end):
            end_dt = datetime.combine(end_dt.date(), time.max)

        return self._store_call(
            "find", lambda: self.store.find(user_id=user_id, start=start_dt, end=end_dt)
        )

    def list(self, query: Optional[Union[ListQuery, dict]] = None) -> Page:
        if query is None:
            query = ListQuery()
        elif isinstance(query, dict):
            try:
                query = ListQuery(**query)
            except PydanticValidationError as e:
                raise ValidationError(f"Invalid list query: {e.errors()[0]['msg']}") from e
        return self._store_call("list_page", lambda: self.store.list_page(query))

    @staticmethod
    def _require_user(user_id: Optional[str]) -> None:
        if not user_id:
            raise UnauthenticatedError("Unauthorized")

    @staticmethod
    def _validate_request(request: AssessmentRequest) -> None:
        if not request.symptoms:
            raise ValidationError("At least one symptom is required")
        if not request.severity:
            raise ValidationError("Severity is required")

    @staticmethod
    def _store_call(operation: str, call):
        try:
            return call()
        except GrahmeenHealthError:
            raise
        except Exception as e:
            logger.exception("Assessment store %s failed: %s", operation, e)
            raise InternalError("Internal server error") from e


class MedicationSafetyUseCase:
    def screen(self, medications: Iterable[str], symptoms: Iterable[Symptom]) -> MedicationScreening:
        medications = [m.strip() for m in medications if m and m.strip()]
        symptoms = list(symptoms)
        names = [s.name for s in symptoms]

        detected = []
        for medication in medications:
            detected.extend(detect_adverse_reactions(medication, names))
        detected.sort(key=lambda r: r.confidence, reverse=True)

        screening = MedicationScreening(
            interactions=check_drug_interactions(medications),
            adverse_reactions=check_for_adverse_reactions(medications, symptoms),
            detected_patterns=detected,
            overall_severity=calculate_adr_severity(detected),
        )
        if screening.interactions or screening.adverse_reactions:
            logger.info(
                "Medication screening flagged %d interaction(s) and %d reaction(s)",
                len(screening.interactions), len(screening.adverse_reactions),
            )
        return screening
