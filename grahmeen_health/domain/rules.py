from typing import Iterable, List, Optional

from .models import RiskLevel
from .tables import (
    APPOINTMENT_SEVERITY_MINUTES,
    CONDITION_ADVICE,
    DEFAULT_EMERGENCY_RATING,
    EMERGENCY_RATING_BASE,
    SIMPLE_CONDITION_TABLE,
    SYMPTOM_CARE_ADVICE,
)


IMMEDIATE_CARE_RATING = 8
SAME_DAY_RATING = 5


def _unique(items: Iterable[str]) -> List[str]:
    seen = set()
    result: List[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def calculate_emergency_rating(symptom_names: List[str], severity: str, age: Optional[int] = None) -> int:
    rating = EMERGENCY_RATING_BASE.get((severity or "").strip().lower(), DEFAULT_EMERGENCY_RATING)

    # Children and the elderly get bumped one level
    if age is not None and (age < 12 or age > 65):
        rating += 1

    if len(symptom_names) > 5:
        rating += 1

    return min(max(rating, 1), 10)


def predict_possible_conditions(symptom_names: Iterable[str]) -> List[str]:
    conditions: List[str] = []
    for name in symptom_names:
        conditions.extend(SIMPLE_CONDITION_TABLE.get(name.strip().lower(), ()))
    return _unique(conditions)


def generate_recommendations(conditions: Iterable[str], emergency_rating: int) -> List[str]:
    recommendations: List[str] = []

    if emergency_rating >= IMMEDIATE_CARE_RATING:
        recommendations.append("Seek immediate medical attention")
        recommendations.append("Call emergency services if symptoms worsen")
    elif emergency_rating >= SAME_DAY_RATING:
        recommendations.append("Schedule a same-day appointment with your doctor")
        recommendations.append("Monitor symptoms closely")
    else:
        recommendations.append("Monitor your symptoms at home")
        recommendations.append("Schedule a routine check-up if symptoms persist")

    for condition in conditions:
        recommendations.extend(CONDITION_ADVICE.get(condition.lower(), ()))

    return _unique(recommendations)


def symptom_care_advice(symptom_names: Iterable[str]) -> List[str]:
    advice: List[str] = []
    for name in symptom_names:
        advice.extend(SYMPTOM_CARE_ADVICE.get(name.strip().lower(), ()))
    return _unique(advice)


def risk_level_for_rating(rating: float) -> RiskLevel:
    if rating > 7:
        return RiskLevel.HIGH
    if rating > 4:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def estimate_appointment_duration(symptom_names: List[str], severity: str, conditions: List[str]) -> int:
    """Rough appointment length in minutes, never below 15."""
    duration = 15
    duration += APPOINTMENT_SEVERITY_MINUTES.get((severity or "").strip().lower(), 0)
    duration += len(symptom_names) * 5
    duration += len(conditions) * 10
    return max(duration, 15)
