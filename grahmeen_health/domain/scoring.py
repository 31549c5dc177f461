import logging
import math
import random
from typing import Dict, List, Optional, Sequence

from .models import (
    AdrSeverity,
    AdverseReactionFlag,
    ConditionCandidate,
    ImpactFactors,
    Insight,
    Symptom,
)
from .tables import (
    ADR_TABLE,
    CHRONICITY_WEIGHTS,
    DEFAULT_CHRONICITY_WEIGHT,
    DEFAULT_DURATION_WEIGHT,
    DEFAULT_SEVERITY_WEIGHT,
    DISEASE_TABLE,
    DURATION_WEIGHTS,
    SEVERITY_WEIGHTS,
)


logger = logging.getLogger(__name__)


MAX_SCORE = 10.0
BASE_CONSULTATION_MINUTES = 15
MAX_COMPLEXITY_FACTOR = 2.0
TOP_CONDITIONS = 3

SEED_PROBABILITY = 0.5
SEED_JITTER = 0.3
REPEAT_MATCH_BOOST = 0.2

# P(high) = 0.3, then P(moderate | not high) = 3/7, leaving low at 0.4.
ADR_HIGH_CUTOFF = 0.3
ADR_MODERATE_CUTOFF = 3 / 7


def _clamp(value: float, upper: float = MAX_SCORE) -> float:
    return max(0.0, min(upper, value))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def severity_weight(symptom: Symptom) -> int:
    return SEVERITY_WEIGHTS.get(symptom.severity, DEFAULT_SEVERITY_WEIGHT)


def duration_weight(symptom: Symptom) -> float:
    for token, weight in DURATION_WEIGHTS:
        if token in symptom.duration:
            return weight
    return DEFAULT_DURATION_WEIGHT


def chronicity_weight(symptom: Symptom) -> int:
    for token, weight in CHRONICITY_WEIGHTS:
        if token in symptom.duration:
            return weight
    return DEFAULT_CHRONICITY_WEIGHT


class TriageScorer:
    """Multi-factor symptom scorer.

    Pure apart from the random draws used for disease-probability jitter and
    ADR severity. Pass a seeded ``random.Random`` to make those reproducible.
    Each scorer owns its generator, so separate instances never share state.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def score(self, symptoms: Sequence[Symptom]) -> Insight:
        if symptoms is None:
            raise TypeError("symptoms must be a sequence, got None")

        severity_score = self.severity_score(symptoms)
        count = len(symptoms)

        return Insight(
            predicted_diseases=self.predict_diseases(symptoms),
            possible_adrs=self.possible_adrs(symptoms),
            estimated_consultation_time=self.consultation_time(count, severity_score),
            severity_score=severity_score,
            impact_factors=self.impact_factors(symptoms, severity_score),
        )

    def severity_score(self, symptoms: Sequence[Symptom]) -> float:
        total = sum(severity_weight(s) * duration_weight(s) for s in symptoms)
        return _clamp(total)

    def predict_diseases(self, symptoms: Sequence[Symptom]) -> List[ConditionCandidate]:
        # One jitter per call: ranking depends on repeat matches only, ties keep first-seen order.
        seed = SEED_PROBABILITY + self.rng.uniform(0, SEED_JITTER)
        probabilities: Dict[str, float] = {}
        for symptom in symptoms:
            diseases = DISEASE_TABLE.get(symptom.key)
            if not diseases:
                logger.debug("No disease mapping for symptom: %s", symptom.name)
                continue
            for disease in diseases:
                if disease in probabilities:
                    probabilities[disease] = min(1.0, probabilities[disease] + REPEAT_MATCH_BOOST)
                else:
                    probabilities[disease] = seed

        ranked = sorted(probabilities.items(), key=lambda item: item[1], reverse=True)
        return [ConditionCandidate(name=name, probability=p) for name, p in ranked[:TOP_CONDITIONS]]

    def possible_adrs(self, symptoms: Sequence[Symptom]) -> List[AdverseReactionFlag]:
        flags: List[AdverseReactionFlag] = []
        for symptom in symptoms:
            for drug, reaction in ADR_TABLE.get(symptom.key, ()):
                flags.append(AdverseReactionFlag(drug=drug, reaction=reaction, severity=self._draw_adr_severity()))
        return flags

    def _draw_adr_severity(self) -> AdrSeverity:
        if self.rng.random() < ADR_HIGH_CUTOFF:
            return AdrSeverity.HIGH
        if self.rng.random() < ADR_MODERATE_CUTOFF:
            return AdrSeverity.MODERATE
        return AdrSeverity.LOW

    @staticmethod
    def consultation_time(symptom_count: int, severity_score: float) -> int:
        complexity_factor = min(MAX_COMPLEXITY_FACTOR, 1 + 0.2 * symptom_count)
        severity_factor = 1 + 0.1 * severity_score
        return _round_half_up(BASE_CONSULTATION_MINUTES * complexity_factor * severity_factor)

    @staticmethod
    def impact_factors(symptoms: Sequence[Symptom], severity_score: float) -> ImpactFactors:
        count = len(symptoms)
        return ImpactFactors(
            urgency=_clamp(severity_score * 1.2),
            complexity=_clamp(2 * count + 0.5 * severity_score),
            chronicity_risk=_clamp(sum(chronicity_weight(s) for s in symptoms)),
        )


def generate_insights(symptoms: Sequence[Symptom], rng: Optional[random.Random] = None) -> Insight:
    return TriageScorer(rng).score(symptoms)
