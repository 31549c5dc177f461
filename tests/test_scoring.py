"""Unit tests for the multi-factor triage scorer."""
import random
from unittest.mock import Mock

import pytest

from grahmeen_health.domain.models import AdrSeverity, Symptom
from grahmeen_health.domain.scoring import TriageScorer, generate_insights


def fixed_rng(jitter=0.1, draws=None):
    """Random stand-in: constant jitter, and scripted draws for ADR severity."""
    rng = Mock()
    rng.uniform.return_value = jitter
    if draws is None:
        rng.random.return_value = 0.9
    else:
        rng.random.side_effect = draws
    return rng


class TestSeverityScore:
    """Test the additive severity score."""

    def test_empty_symptoms(self):
        """Test an empty list scores zero and uses base consultation time."""
        insight = TriageScorer(fixed_rng()).score([])

        assert insight.severity_score == 0
        assert insight.predicted_diseases == []
        assert insight.possible_adrs == []
        assert insight.estimated_consultation_time == 15
        assert insight.impact_factors.urgency == 0
        assert insight.impact_factors.complexity == 0
        assert insight.impact_factors.chronicity_risk == 0

    def test_single_severe_long_symptom(self):
        """Test severe fever lasting months: 3 x 2 = 6."""
        symptoms = [Symptom(name="fever", severity="severe", duration="2 months")]
        insight = TriageScorer(fixed_rng()).score(symptoms)

        assert insight.severity_score == 6
        assert insight.estimated_consultation_time == 29
        assert insight.impact_factors.urgency == pytest.approx(7.2)
        assert insight.impact_factors.complexity == pytest.approx(5.0)
        assert insight.impact_factors.chronicity_risk == 3

    def test_week_duration_weight(self):
        """Test a moderate symptom lasting weeks scores 2 x 1.5."""
        symptoms = [Symptom(name="cough", severity="moderate", duration="3 weeks")]
        insight = TriageScorer(fixed_rng()).score(symptoms)

        assert insight.severity_score == pytest.approx(3.0)
        assert insight.impact_factors.chronicity_risk == 2

    def test_unrecognized_values_fall_back_to_lowest_weight(self):
        """Test unknown severity and duration text count as 1 x 1."""
        symptoms = [Symptom(name="itching", severity="terrible", duration="since yesterday")]
        insight = TriageScorer(fixed_rng()).score(symptoms)

        assert insight.severity_score == 1
        assert insight.impact_factors.chronicity_risk == 1

    def test_severity_case_insensitive(self):
        """Test severity text is matched regardless of case."""
        symptoms = [Symptom(name="fever", severity="SEVERE", duration="2 Months")]
        insight = TriageScorer(fixed_rng()).score(symptoms)

        assert insight.severity_score == 6

    def test_scores_are_clamped(self):
        """Test every derived score stays within 0-10."""
        symptoms = [
            Symptom(name=name, severity="severe", duration="6 months")
            for name in ["fever", "cough", "headache", "fatigue", "joint pain"]
        ]
        insight = TriageScorer(fixed_rng()).score(symptoms)

        assert insight.severity_score == 10
        assert insight.impact_factors.urgency == 10
        assert insight.impact_factors.complexity == 10
        assert insight.impact_factors.chronicity_risk == 10
        # 15 x min(2, 2.0) x (1 + 1.0)
        assert insight.estimated_consultation_time == 60

    def test_none_input_fails_fast(self):
        """Test None is a contract violation, not a silent empty result."""
        with pytest.raises(TypeError):
            TriageScorer(fixed_rng()).score(None)


class TestPredictedDiseases:
    """Test condition prediction from the symptom table."""

    def test_unknown_symptom_contributes_nothing(self):
        """Test symptoms outside the table yield no diseases."""
        insight = TriageScorer(fixed_rng()).score([Symptom(name="hiccups", severity="mild")])
        assert insight.predicted_diseases == []

    def test_seed_probability_uses_jitter(self):
        """Test first matches are seeded at 0.5 plus the random jitter."""
        insight = TriageScorer(fixed_rng(jitter=0.25)).score([Symptom(name="headache")])

        assert [d.name for d in insight.predicted_diseases] == ["Tension Headache", "Migraine", "Sinusitis"]
        for disease in insight.predicted_diseases:
            assert disease.probability == pytest.approx(0.75)

    def test_repeat_match_boosts_probability(self):
        """Test a disease implicated twice is listed once with a higher probability."""
        single = TriageScorer(fixed_rng()).score([Symptom(name="fever")])
        double = TriageScorer(fixed_rng()).score([Symptom(name="fever"), Symptom(name="cough")])

        single_flu = [d for d in single.predicted_diseases if d.name == "Flu"]
        double_flu = [d for d in double.predicted_diseases if d.name == "Flu"]

        assert len(single_flu) == 1
        assert len(double_flu) == 1
        assert double_flu[0].probability == pytest.approx(single_flu[0].probability + 0.2)
        assert double.predicted_diseases[0].name == "Flu"

    def test_name_lookup_is_case_insensitive(self):
        """Test symptom names are matched in lowercase."""
        insight = TriageScorer(fixed_rng()).score([Symptom(name="  Chest Pain ")])
        assert insight.predicted_diseases[0].name == "Muscle Strain"

    def test_probability_never_exceeds_one(self):
        """Test repeated boosts are capped at 1.0."""
        symptoms = [Symptom(name="fever") for _ in range(5)]
        insight = TriageScorer(fixed_rng(jitter=0.3)).score(symptoms)

        assert all(d.probability <= 1.0 for d in insight.predicted_diseases)
        assert insight.predicted_diseases[0].probability == 1.0

    def test_top_three_sorted_for_random_inputs(self):
        """Test the list is at most three long and sorted descending."""
        rng = random.Random(7)
        names = ["fever", "cough", "headache", "chest pain", "fatigue",
                 "shortness of breath", "joint pain", "stomach pain", "hiccups"]
        scorer = TriageScorer(rng)

        for _ in range(50):
            picked = rng.sample(names, rng.randint(0, len(names)))
            insight = scorer.score([Symptom(name=n, severity="moderate", duration="1 week") for n in picked])
            probabilities = [d.probability for d in insight.predicted_diseases]

            assert len(probabilities) <= 3
            assert probabilities == sorted(probabilities, reverse=True)
            assert 0 <= insight.severity_score <= 10


class TestPossibleAdrs:
    """Test adverse drug reaction flags."""

    def test_headache_flags_three_drugs(self):
        """Test headache maps to its three drug reactions."""
        insight = TriageScorer(fixed_rng()).score([Symptom(name="headache")])
        assert [a.drug for a in insight.possible_adrs] == ["Aspirin", "Ibuprofen", "Paracetamol"]

    def test_symptoms_without_adr_entries(self):
        """Test symptoms outside the ADR table produce no flags."""
        insight = TriageScorer(fixed_rng()).score([Symptom(name="fever")])
        assert insight.possible_adrs == []

    def test_no_dedup_across_symptoms(self):
        """Test repeated symptoms repeat their flags."""
        insight = TriageScorer(fixed_rng()).score([Symptom(name="Dizziness"), Symptom(name="dizziness")])
        assert len(insight.possible_adrs) == 6

    def test_severity_draws(self):
        """Test the chained draws map to high, moderate and low."""
        rng = fixed_rng(draws=[0.1, 0.5, 0.2, 0.5, 0.9])
        insight = TriageScorer(rng).score([Symptom(name="headache")])

        assert [a.severity for a in insight.possible_adrs] == [
            AdrSeverity.HIGH,
            AdrSeverity.MODERATE,
            AdrSeverity.LOW,
        ]


class TestDeterminism:
    """Test which parts of the insight are reproducible."""

    SYMPTOMS = [
        Symptom(name="fever", severity="moderate", duration="4 days"),
        Symptom(name="cough", severity="severe", duration="2 weeks"),
        Symptom(name="headache", severity="mild", duration="1 month"),
    ]

    def test_deterministic_fields_repeat_without_seed(self):
        """Test score, time and impact factors repeat across calls."""
        first = generate_insights(self.SYMPTOMS)
        second = generate_insights(self.SYMPTOMS)

        assert first.severity_score == second.severity_score
        assert first.estimated_consultation_time == second.estimated_consultation_time
        assert first.impact_factors == second.impact_factors
        assert len(first.possible_adrs) == len(second.possible_adrs)

    @pytest.mark.parametrize("names", [
        ["headache"],
        ["fever", "fatigue"],
        ["fever", "cough", "shortness of breath"],
    ])
    def test_predicted_disease_order_repeats_without_seed(self, names):
        """Test predicted names and their order repeat; only probabilities vary."""
        symptoms = [Symptom(name=n) for n in names]
        orders = {
            tuple(d.name for d in generate_insights(symptoms).predicted_diseases)
            for _ in range(30)
        }

        assert len(orders) == 1

    def test_ties_keep_first_seen_order(self):
        """Test equally matched diseases are listed in table order."""
        insight = generate_insights([Symptom(name="fever"), Symptom(name="fatigue")])

        assert [d.name for d in insight.predicted_diseases] == ["Viral Infection", "Flu", "COVID-19"]

    def test_seeded_generators_repeat_everything(self):
        """Test two scorers with the same seed agree on the full insight."""
        first = TriageScorer(random.Random(42)).score(self.SYMPTOMS)
        second = TriageScorer(random.Random(42)).score(self.SYMPTOMS)

        assert first == second

    def test_wire_names(self):
        """Test the insight serializes with camelCase keys."""
        data = TriageScorer(fixed_rng()).score(self.SYMPTOMS).model_dump(by_alias=True)

        assert set(data) == {
            "predictedDiseases", "possibleADRs", "estimatedConsultationTime",
            "severityScore", "impactFactors",
        }
        assert "chronicityRisk" in data["impactFactors"]
