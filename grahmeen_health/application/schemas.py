import math
from typing import Any, List, Optional

from pydantic import BaseModel, Field, validator

from grahmeen_health.domain.adr import DetectedReaction
from grahmeen_health.domain.models import AssessmentRecord, Symptom


SORTABLE_FIELDS = {"created_at", "updated_at", "severity", "risk_level", "age", "gender", "status"}


class AssessmentRequest(BaseModel):
    """Incoming early-detection submission.

    ``symptoms`` may be a list of symptom objects, a list of plain names or a
    single comma-separated string. Plain names inherit the request severity.
    """

    # Declared before symptoms so plain symptom names can inherit it.
    severity: str = ""
    symptoms: List[Symptom] = []
    age: Optional[int] = Field(None, ge=0, le=120)
    gender: Optional[str] = None
    medical_history: Optional[str] = None
    family_history: Optional[str] = None
    lifestyle: Optional[str] = None
    emergency_rating: Optional[int] = Field(None, ge=1, le=10)

    @validator("severity", pre=True)
    def normalize_severity(cls, v):
        if v is None:
            return ""
        return str(v).strip().lower()

    @validator("symptoms", pre=True)
    def normalize_symptoms(cls, v, values):
        if v is None:
            return []
        if isinstance(v, str):
            v = [part for part in v.split(",")]
        severity = values.get("severity", "")
        normalized: List[Any] = []
        for item in v:
            if isinstance(item, str):
                if not item.strip():
                    continue
                normalized.append({"name": item, "severity": severity, "duration": ""})
            else:
                normalized.append(item)
        return normalized

    @validator("age", pre=True)
    def parse_age(cls, v):
        if v is None or v == "":
            return None
        if isinstance(v, str):
            v = v.strip()
            if not v.isdigit():
                raise ValueError("age must be a whole number")
            return int(v)
        return v

    @validator("gender", "medical_history", "family_history", "lifestyle")
    def blank_to_none(cls, v: Optional[str]):
        if v is not None:
            v = v.strip()
            if len(v) == 0:
                return None
        return v

    def symptom_names(self) -> List[str]:
        return [s.name for s in self.symptoms]


class ListQuery(BaseModel):
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)
    sort_by: str = "created_at"
    sort_order: str = "desc"
    search: str = ""

    @validator("sort_by")
    def validate_sort_by(cls, v: str):
        if v not in SORTABLE_FIELDS:
            raise ValueError(f"cannot sort by {v!r}")
        return v

    @validator("sort_order")
    def validate_sort_order(cls, v: str):
        v = v.lower()
        if v not in {"asc", "desc"}:
            raise ValueError("sort_order must be 'asc' or 'desc'")
        return v

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class Page(BaseModel):
    items: List[AssessmentRecord]
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def build(cls, items: List[AssessmentRecord], total: int, query: ListQuery) -> "Page":
        return cls(
            items=items,
            total=total,
            page=query.page,
            limit=query.limit,
            total_pages=math.ceil(total / query.limit),
        )


class MedicationScreening(BaseModel):
    interactions: List[str] = []
    adverse_reactions: List[str] = []
    detected_patterns: List[DetectedReaction] = []
    overall_severity: str = "none"
