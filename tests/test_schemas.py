"""Unit tests for request normalization."""
import pytest
from pydantic import ValidationError

from grahmeen_health.application.schemas import AssessmentRequest, ListQuery, Page


class TestAssessmentRequest:
    def test_symptom_objects(self):
        request = AssessmentRequest(
            severity="moderate",
            symptoms=[{"name": "Fever", "severity": "Severe", "duration": "2 Weeks"}],
        )
        symptom = request.symptoms[0]
        assert symptom.name == "Fever"
        assert symptom.severity == "severe"
        assert symptom.duration == "2 weeks"

    def test_plain_names_inherit_severity(self):
        request = AssessmentRequest(severity="Severe", symptoms=["fever", " cough ", ""])

        assert request.symptom_names() == ["fever", "cough"]
        assert all(s.severity == "severe" for s in request.symptoms)
        assert all(s.duration == "" for s in request.symptoms)

    def test_comma_separated_string(self):
        request = AssessmentRequest(severity="mild", symptoms="headache, fatigue")
        assert request.symptom_names() == ["headache", "fatigue"]

    def test_age_from_string(self):
        assert AssessmentRequest(age="42").age == 42
        assert AssessmentRequest(age="").age is None

    def test_invalid_age(self):
        with pytest.raises(ValidationError):
            AssessmentRequest(age="forty")
        with pytest.raises(ValidationError):
            AssessmentRequest(age=150)

    def test_blank_history_becomes_none(self):
        request = AssessmentRequest(medical_history="   ", lifestyle=" smoker ")
        assert request.medical_history is None
        assert request.lifestyle == "smoker"


class TestListQuery:
    def test_defaults(self):
        query = ListQuery()
        assert query.page == 1
        assert query.limit == 10
        assert query.offset == 0

    def test_offset(self):
        assert ListQuery(page=3, limit=20).offset == 40

    def test_invalid_sort_key(self):
        with pytest.raises(ValidationError):
            ListQuery(sort_by="password")

    def test_invalid_sort_order(self):
        with pytest.raises(ValidationError):
            ListQuery(sort_order="sideways")

    def test_limit_bounds(self):
        with pytest.raises(ValidationError):
            ListQuery(limit=0)

    def test_page_total_pages(self):
        page = Page.build([], 21, ListQuery(limit=10))
        assert page.total_pages == 3
