from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, validator


class SymptomSeverity(str, Enum):
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


class AdrSeverity(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AssessmentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class Symptom(BaseModel):
    name: str
    # Free text on purpose: unknown values fall back to the lowest weight.
    severity: str = ""
    duration: str = ""

    @validator("name")
    def validate_name(cls, v: str):
        v = v.strip()
        if not v:
            raise ValueError("symptom name must not be empty")
        return v

    @validator("severity", "duration", pre=True)
    def normalize_text(cls, v):
        if v is None:
            return ""
        return str(v).strip().lower()

    @property
    def key(self) -> str:
        return self.name.lower()


class ConditionCandidate(BaseModel):
    name: str
    probability: float = Field(..., ge=0.0, le=1.0)


class AdverseReactionFlag(BaseModel):
    drug: str
    reaction: str
    severity: AdrSeverity


class ImpactFactors(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    urgency: float = Field(..., ge=0.0, le=10.0)
    complexity: float = Field(..., ge=0.0, le=10.0)
    chronicity_risk: float = Field(..., ge=0.0, le=10.0, alias="chronicityRisk")


class Insight(BaseModel):
    """Result of the multi-factor scorer. Aliases follow the JSON wire names."""

    model_config = ConfigDict(populate_by_name=True)

    predicted_diseases: List[ConditionCandidate] = Field(default_factory=list, alias="predictedDiseases")
    possible_adrs: List[AdverseReactionFlag] = Field(default_factory=list, alias="possibleADRs")
    estimated_consultation_time: int = Field(..., ge=0, alias="estimatedConsultationTime")
    severity_score: float = Field(..., ge=0.0, le=10.0, alias="severityScore")
    impact_factors: ImpactFactors = Field(..., alias="impactFactors")


class TriageOutcome(BaseModel):
    strategy: str
    risk_level: RiskLevel
    potential_conditions: List[str] = []
    recommendations: List[str] = []
    emergency_rating: Optional[int] = Field(None, ge=1, le=10)
    appointment_minutes: Optional[int] = Field(None, ge=15)
    insight: Optional[Insight] = None


class AssessmentRecord(BaseModel):
    id: str = Field(default_factory=lambda: uuid4().hex)
    user_id: str
    symptoms: List[Symptom] = []
    severity: str
    age: Optional[int] = Field(None, ge=0, le=120)
    gender: Optional[str] = None
    medical_history: Optional[str] = None
    family_history: Optional[str] = None
    lifestyle: Optional[str] = None
    status: AssessmentStatus = AssessmentStatus.PENDING
    strategy: Optional[str] = None
    risk_level: Optional[RiskLevel] = None
    potential_conditions: List[str] = []
    recommendations: List[str] = []
    emergency_rating: Optional[int] = None
    appointment_minutes: Optional[int] = None
    insight: Optional[Insight] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    def symptom_names(self) -> List[str]:
        return [s.name for s in self.symptoms]

    def apply_outcome(self, outcome: TriageOutcome, when: datetime) -> None:
        """Move a pending record to completed with the computed risk fields."""
        self.status = AssessmentStatus.COMPLETED
        self.strategy = outcome.strategy
        self.risk_level = outcome.risk_level
        self.potential_conditions = list(outcome.potential_conditions)
        self.recommendations = list(outcome.recommendations)
        self.emergency_rating = outcome.emergency_rating
        self.appointment_minutes = outcome.appointment_minutes
        self.insight = outcome.insight
        self.updated_at = when


class HospitalResult(BaseModel):
    name: str
    rating: Optional[float] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    maps_url: Optional[str] = None
