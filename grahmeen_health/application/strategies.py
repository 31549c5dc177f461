"""Named triage strategies selectable per submission."""
import logging
import math
import random
from typing import Dict, Optional

from grahmeen_health.application.errors import ValidationError
from grahmeen_health.application.ports import TriageStrategy
from grahmeen_health.application.schemas import AssessmentRequest
from grahmeen_health.domain.models import TriageOutcome
from grahmeen_health.domain.rules import (
    calculate_emergency_rating,
    estimate_appointment_duration,
    generate_recommendations,
    predict_possible_conditions,
    risk_level_for_rating,
    symptom_care_advice,
)
from grahmeen_health.domain.scoring import TriageScorer


logger = logging.getLogger(__name__)


class MultiFactorTriageStrategy:
    """Severity, duration and symptom-count scoring with predicted conditions and ADR flags."""

    name = "multi_factor"

    def __init__(self, rng: Optional[random.Random] = None):
        self.scorer = TriageScorer(rng)

    def evaluate(self, request: AssessmentRequest) -> TriageOutcome:
        insight = self.scorer.score(request.symptoms)
        urgency = insight.impact_factors.urgency
        conditions = [d.name for d in insight.predicted_diseases]

        recommendations = generate_recommendations(conditions, math.ceil(urgency))
        for advice in symptom_care_advice(request.symptom_names()):
            if advice not in recommendations:
                recommendations.append(advice)

        return TriageOutcome(
            strategy=self.name,
            risk_level=risk_level_for_rating(urgency),
            potential_conditions=conditions,
            recommendations=recommendations,
            insight=insight,
        )


class EmergencyRatingTriageStrategy:
    """Maps an emergency rating (1-10) straight to advice, using the small condition table."""

    name = "emergency_rating"

    def evaluate(self, request: AssessmentRequest) -> TriageOutcome:
        names = request.symptom_names()
        rating = request.emergency_rating
        if rating is None:
            rating = calculate_emergency_rating(names, request.severity, request.age)

        conditions = predict_possible_conditions(names)
        return TriageOutcome(
            strategy=self.name,
            risk_level=risk_level_for_rating(rating),
            potential_conditions=conditions,
            recommendations=generate_recommendations(conditions, rating),
            emergency_rating=rating,
            appointment_minutes=estimate_appointment_duration(names, request.severity, conditions),
        )


STRATEGIES: Dict[str, type] = {
    MultiFactorTriageStrategy.name: MultiFactorTriageStrategy,
    EmergencyRatingTriageStrategy.name: EmergencyRatingTriageStrategy,
}

DEFAULT_STRATEGY = MultiFactorTriageStrategy.name


def get_strategy(name: str) -> TriageStrategy:
    try:
        strategy_cls = STRATEGIES[name]
    except KeyError:
        raise ValidationError(
            f"Unknown triage strategy '{name}'. Must be one of: {', '.join(sorted(STRATEGIES))}"
        ) from None
    logger.debug("Using triage strategy %s", name)
    return strategy_cls()
