import logging
from typing import List

import streamlit as st

from grahmeen_health.application.errors import GrahmeenHealthError
from grahmeen_health.application.strategies import DEFAULT_STRATEGY, STRATEGIES, get_strategy
from grahmeen_health.application.use_cases import EarlyDetectionUseCase, MedicationSafetyUseCase
from grahmeen_health.domain.models import AssessmentRecord, HospitalResult, RiskLevel, Symptom
from grahmeen_health.infrastructure.config import Settings
from grahmeen_health.infrastructure.hospital_search.google_places import GooglePlacesHospitalSearchAdapter
from grahmeen_health.infrastructure.hospital_search.mock_search import MockHospitalSearchAdapter
from grahmeen_health.infrastructure.storage.factory import build_assessment_store
from grahmeen_health.presentation.auth_screens import logout, show_auth_screen


logger = logging.getLogger(__name__)


DISCLAIMER = (
    "⚕️ **DISCLAIMER:** This early-detection check is NOT a diagnosis. "
    "It uses simple, fixed rules to help you decide how quickly to see a doctor. "
    "If you experience emergency symptoms, call your local emergency number."
)

SEVERITY_OPTIONS = ["mild", "moderate", "severe"]
DURATION_OPTIONS = ["1-2 days", "3-6 days", "1-3 weeks", "1-2 months", "more than 3 months"]
RISK_ICONS = {RiskLevel.LOW: "🟢", RiskLevel.MEDIUM: "🟡", RiskLevel.HIGH: "🔴"}


@st.cache_resource
def _store():
    return build_assessment_store(Settings())


def _use_case(settings: Settings) -> EarlyDetectionUseCase:
    name = settings.triage_strategy if settings.triage_strategy in STRATEGIES else DEFAULT_STRATEGY
    return EarlyDetectionUseCase(store=_store(), strategy=get_strategy(name))


def _current_user_id():
    user = st.session_state.get("user_data") or {}
    return user.get("id")


def _render_sidebar(settings: Settings) -> str:
    user = st.session_state.get("user_data") or {}
    st.sidebar.title("🏥 GrahmeenHealth")
    st.sidebar.caption(f"Signed in as **{user.get('firstname', '')}** ({user.get('role', 'patient')})")

    page = st.sidebar.radio("Go to", ["Early Detection", "History", "Medication Safety"])

    st.sidebar.markdown("### Nearby Hospitals")
    st.session_state["location_query"] = st.sidebar.text_input("Your city/area", placeholder="e.g., Dhaka")
    if settings.google_places_api_key:
        st.sidebar.success("✓ Google Places API configured")
    else:
        st.sidebar.warning("⚠️ Using mock hospital results")

    st.sidebar.divider()
    if st.sidebar.button("🚪 Logout", use_container_width=True):
        logout()
    return page


def _symptom_rows(count: int) -> List[Symptom]:
    symptoms = []
    for i in range(count):
        cols = st.columns([2, 1, 1])
        name = cols[0].text_input("Symptom", key=f"symptom_name_{i}", placeholder="e.g., fever")
        severity = cols[1].selectbox("Severity", SEVERITY_OPTIONS, key=f"symptom_severity_{i}")
        duration = cols[2].selectbox("Duration", DURATION_OPTIONS, key=f"symptom_duration_{i}")
        if name.strip():
            symptoms.append(Symptom(name=name, severity=severity, duration=duration))
    return symptoms


def _render_early_detection(settings: Settings):
    st.markdown("# 🩺 Early Detection")
    st.info(DISCLAIMER)

    count = st.number_input("How many symptoms?", min_value=1, max_value=8, value=2)
    with st.form("early_detection_form"):
        symptoms = _symptom_rows(int(count))
        col1, col2, col3 = st.columns(3)
        severity = col1.selectbox("Overall severity", SEVERITY_OPTIONS)
        age = col2.text_input("Age", placeholder="e.g., 34")
        gender = col3.selectbox("Gender", ["female", "male", "other", "prefer not to say"])
        medical_history = st.text_area("Medical history", placeholder="e.g., asthma, diabetes")
        family_history = st.text_area("Family history")
        lifestyle = st.text_input("Lifestyle", placeholder="e.g., smoker, sedentary")
        options = sorted(STRATEGIES)
        default = options.index(settings.triage_strategy) if settings.triage_strategy in options else 0
        strategy_name = st.selectbox("Triage method", options, index=default)
        submitted = st.form_submit_button("Analyze", use_container_width=True)

    if submitted:
        request = {
            "symptoms": [s.model_dump() for s in symptoms],
            "severity": severity,
            "age": age,
            "gender": gender,
            "medical_history": medical_history,
            "family_history": family_history,
            "lifestyle": lifestyle,
        }
        try:
            with st.spinner("🔬 Analyzing your symptoms..."):
                record = _use_case(settings).submit(
                    _current_user_id(), request, strategy=get_strategy(strategy_name)
                )
            st.session_state.early_detection_result = record
            st.session_state.hospitals = (
                _search_hospitals(settings, st.session_state.get("location_query", ""))
                if record.risk_level == RiskLevel.HIGH else []
            )
        except GrahmeenHealthError as e:
            st.error(f"❌ {e.message}")

    record = st.session_state.get("early_detection_result")
    if record is not None:
        st.markdown(format_record_for_display(record, st.session_state.get("hospitals") or []))


def _render_history(settings: Settings):
    st.markdown("# 📚 Assessment History")
    risk = st.selectbox("Filter by risk level", ["all", "low", "medium", "high"], key="history_filter")
    use_case = _use_case(settings)
    try:
        if risk == "all":
            records = use_case.history(_current_user_id())
        else:
            records = use_case.by_risk_level(_current_user_id(), risk)
    except GrahmeenHealthError as e:
        st.error(f"❌ {e.message}")
        return

    if not records:
        st.caption("No assessments yet.")
        return

    for record in records:
        icon = RISK_ICONS.get(record.risk_level, "⚪")
        label = f"{icon} {record.created_at:%Y-%m-%d %H:%M} · {', '.join(record.symptom_names())}"
        with st.expander(label):
            st.markdown(format_record_for_display(record))
            if st.button("Delete", key=f"delete_{record.id}") and _delete_record(use_case, record.id):
                st.rerun()


def _delete_record(use_case: EarlyDetectionUseCase, record_id: str) -> bool:
    try:
        use_case.delete(_current_user_id(), record_id)
    except GrahmeenHealthError as e:
        st.error(f"❌ {e.message}")
        return False
    return True


def _render_medication_safety():
    st.markdown("# 💊 Medication Safety")
    with st.form("medication_form"):
        medications = st.text_input("Current medications (comma separated)", placeholder="aspirin, warfarin")
        symptoms = st.text_input("Symptoms you noticed (comma separated)", placeholder="nausea, stomach pain")
        severity = st.selectbox("How severe are they?", SEVERITY_OPTIONS)
        submitted = st.form_submit_button("Check", use_container_width=True)

    if submitted:
        symptom_list = [
            Symptom(name=name, severity=severity) for name in symptoms.split(",") if name.strip()
        ]
        screening = MedicationSafetyUseCase().screen(medications.split(","), symptom_list)
        st.session_state.medication_screening = screening

    screening = st.session_state.get("medication_screening")
    if screening is None:
        return
    st.markdown(f"**Overall reaction severity:** {screening.overall_severity}")
    for warning in screening.interactions + screening.adverse_reactions:
        st.warning(warning)
    for reaction in screening.detected_patterns:
        st.write(f"- {reaction.type} ({reaction.severity}, confidence {reaction.confidence:.0%})")
    if not (screening.interactions or screening.adverse_reactions or screening.detected_patterns):
        st.success("No known interactions or reactions found.")


def main():
    settings = Settings()
    logging.basicConfig(level=settings.log_level)

    st.set_page_config(
        page_title="GrahmeenHealth",
        page_icon="🏥",
        layout="centered",
        initial_sidebar_state="expanded",
    )

    if not show_auth_screen():
        st.stop()

    page = _render_sidebar(settings)
    if page == "History":
        _render_history(settings)
    elif page == "Medication Safety":
        _render_medication_safety()
    else:
        _render_early_detection(settings)


def format_record_for_display(record: AssessmentRecord, hospitals: List[HospitalResult] = None) -> str:
    """Markdown summary of a completed assessment."""
    risk = record.risk_level or RiskLevel.LOW
    lines = [f"## {RISK_ICONS[risk]} Risk level: {risk.value.upper()}\n"]

    if record.emergency_rating is not None:
        lines.append(f"**Emergency rating:** {record.emergency_rating}/10")
    if record.appointment_minutes is not None:
        lines.append(f"**Estimated appointment:** {record.appointment_minutes} minutes")

    insight = record.insight
    if insight is not None:
        factors = insight.impact_factors
        lines.append(f"**Severity score:** {insight.severity_score:.1f}/10")
        lines.append(f"**Estimated consultation:** {insight.estimated_consultation_time} minutes")
        lines.append(
            f"**Urgency:** {factors.urgency:.1f} · **Complexity:** {factors.complexity:.1f} · "
            f"**Chronicity risk:** {factors.chronicity_risk:.1f}"
        )
    lines.append("")

    lines.append("### 🏥 Possible Conditions (NOT a diagnosis)")
    if insight is not None and insight.predicted_diseases:
        for disease in insight.predicted_diseases:
            lines.append(f"- **{disease.name}** ({disease.probability * 100:.0f}%)")
    elif record.potential_conditions:
        for condition in record.potential_conditions:
            lines.append(f"- **{condition}**")
    else:
        lines.append("- No matching conditions in our rule set")
    lines.append("")

    if insight is not None and insight.possible_adrs:
        lines.append("### 💊 Possible Medication Reactions")
        for adr in insight.possible_adrs:
            lines.append(f"- {adr.drug}: {adr.reaction} ({adr.severity.value})")
        lines.append("")

    lines.append("### 📝 Recommendations")
    for i, step in enumerate(record.recommendations, 1):
        lines.append(f"{i}. {step}")
    lines.append("")

    if hospitals:
        lines.append("### 🚑 Nearby Hospitals\n")
        for hospital in hospitals:
            lines.append(f"**{hospital.name}**")
            if hospital.rating:
                lines.append(f"- ⭐ Rating: {hospital.rating:.1f}/5")
            if hospital.address:
                lines.append(f"- 📍 Address: {hospital.address}")
            if hospital.phone:
                lines.append(f"- 📞 Phone: {hospital.phone}")
            if hospital.maps_url:
                lines.append(f"- [View on Maps]({hospital.maps_url})")
            lines.append("")

    lines.append("---")
    lines.append("⚠️ **Reminder:** Always consult a licensed healthcare professional.")
    return "\n".join(lines)


def _search_hospitals(settings: Settings, location: str) -> List[HospitalResult]:
    if not location:
        return []
    if settings.google_places_api_key:
        adapter = GooglePlacesHospitalSearchAdapter(settings=settings)
    else:
        adapter = MockHospitalSearchAdapter()
    return adapter.search_hospitals(location)


if __name__ == "__main__":
    main()
