"""Unit tests for the emergency-rating rules."""
import pytest

from grahmeen_health.domain.models import RiskLevel
from grahmeen_health.domain.rules import (
    calculate_emergency_rating,
    estimate_appointment_duration,
    generate_recommendations,
    predict_possible_conditions,
    risk_level_for_rating,
    symptom_care_advice,
)


class TestEmergencyRating:
    """Test the severity, age and symptom-count rating."""

    @pytest.mark.parametrize("severity,expected", [
        ("critical", 9),
        ("severe", 7),
        ("Moderate", 5),
        ("mild", 3),
        ("unknown", 1),
        ("", 1),
    ])
    def test_base_rating(self, severity, expected):
        assert calculate_emergency_rating(["fever"], severity, 30) == expected

    def test_age_bump(self):
        """Test children and the elderly get one extra point."""
        assert calculate_emergency_rating(["fever"], "severe", 8) == 8
        assert calculate_emergency_rating(["fever"], "severe", 70) == 8
        assert calculate_emergency_rating(["fever"], "severe", 65) == 7
        assert calculate_emergency_rating(["fever"], "severe", None) == 7

    def test_many_symptoms_bump(self):
        """Test more than five symptoms adds a point."""
        symptoms = ["fever", "cough", "headache", "fatigue", "nausea", "dizziness"]
        assert calculate_emergency_rating(symptoms, "moderate", 30) == 6

    def test_rating_capped_at_ten(self):
        symptoms = ["a", "b", "c", "d", "e", "f"]
        assert calculate_emergency_rating(symptoms, "critical", 80) == 10


class TestPossibleConditions:
    """Test the small condition table."""

    def test_known_symptoms(self):
        conditions = predict_possible_conditions(["Chest Pain"])
        assert conditions == ["Heart Attack", "Angina", "GERD"]

    def test_conditions_deduplicated_in_order(self):
        conditions = predict_possible_conditions(["fever", "cough"])
        assert conditions == ["Flu", "COVID-19", "Common Cold", "Bronchitis"]

    def test_unknown_symptoms(self):
        assert predict_possible_conditions(["hiccups"]) == []


class TestRecommendations:
    """Test rating-to-advice mapping."""

    def test_immediate_care_first(self):
        """Test a rating of 9 leads with immediate care."""
        recommendations = generate_recommendations(predict_possible_conditions(["headache"]), 9)
        assert recommendations[0] == "Seek immediate medical attention"

    def test_same_day_band(self):
        recommendations = generate_recommendations([], 5)
        assert recommendations[0] == "Schedule a same-day appointment with your doctor"

    def test_monitor_band(self):
        recommendations = generate_recommendations([], 4)
        assert recommendations[0] == "Monitor your symptoms at home"

    def test_condition_specific_advice(self):
        """Test COVID-19, Flu and Heart Attack add extra advice."""
        recommendations = generate_recommendations(["COVID-19", "Flu", "Heart Attack", "Migraine"], 3)

        assert "Get tested for COVID-19" in recommendations
        assert "Stay home to prevent spread" in recommendations
        assert any("chest pain" in r for r in recommendations)

    def test_no_duplicates(self):
        recommendations = generate_recommendations(["Flu", "flu"], 3)
        assert len(recommendations) == len(set(recommendations))

    def test_symptom_care_advice(self):
        advice = symptom_care_advice(["fever", "cough"])
        assert advice.count("Stay hydrated") == 1
        assert "Use a humidifier" in advice


class TestRiskLevel:
    @pytest.mark.parametrize("rating,expected", [
        (10, RiskLevel.HIGH),
        (7.2, RiskLevel.HIGH),
        (7, RiskLevel.MEDIUM),
        (5, RiskLevel.MEDIUM),
        (4, RiskLevel.LOW),
        (0, RiskLevel.LOW),
    ])
    def test_thresholds(self, rating, expected):
        assert risk_level_for_rating(rating) == expected


class TestAppointmentDuration:
    def test_duration_adds_up(self):
        assert estimate_appointment_duration(["fever", "cough"], "severe", ["Flu"]) == 55

    def test_minimum_duration(self):
        assert estimate_appointment_duration([], "", []) == 15
