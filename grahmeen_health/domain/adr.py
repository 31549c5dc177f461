"""Medication safety screening: drug interactions and adverse-reaction patterns."""
from types import MappingProxyType
from typing import Iterable, List

from pydantic import BaseModel, Field

from .models import Symptom


DRUG_INTERACTIONS = MappingProxyType({
    "aspirin": ("warfarin", "heparin", "clopidogrel", "ibuprofen", "naproxen"),
    "ibuprofen": ("aspirin", "warfarin", "lisinopril", "hydrochlorothiazide"),
    "warfarin": ("aspirin", "ibuprofen", "amiodarone", "fluconazole", "ciprofloxacin"),
    "fluoxetine": ("monoamine oxidase inhibitors", "tramadol", "triptans"),
    "lisinopril": ("potassium supplements", "spironolactone", "losartan"),
    "atorvastatin": ("cyclosporine", "erythromycin", "clarithromycin", "gemfibrozil"),
    "levothyroxine": ("calcium supplements", "iron supplements", "antacids"),
    "amoxicillin": ("probenecid", "allopurinol", "oral contraceptives"),
    "metformin": ("furosemide", "nifedipine", "cimetidine"),
    "insulin": ("beta-blockers", "alcohol", "sulfonylureas"),
})

# medication -> (symptom, severity of the known effect)
ADVERSE_EFFECTS = MappingProxyType({
    "aspirin": (("stomach pain", "moderate"), ("heartburn", "mild"), ("nausea", "mild"), ("ringing in ears", "moderate")),
    "ibuprofen": (("stomach pain", "moderate"), ("headache", "mild"), ("dizziness", "mild")),
    "lisinopril": (("dry cough", "moderate"), ("dizziness", "moderate"), ("headache", "mild")),
    "metformin": (("nausea", "moderate"), ("diarrhea", "moderate"), ("stomach pain", "mild")),
    "atorvastatin": (("muscle pain", "moderate"), ("joint pain", "moderate"), ("weakness", "mild")),
    "levothyroxine": (("rapid heartbeat", "moderate"), ("anxiety", "moderate"), ("insomnia", "mild")),
    "warfarin": (("unusual bleeding", "severe"), ("bruising", "moderate")),
    "fluoxetine": (("insomnia", "moderate"), ("nausea", "mild"), ("headache", "mild"), ("anxiety", "moderate")),
})

ADR_PATTERNS = MappingProxyType({
    "allergic reaction": (("rash", "itching", "swelling", "difficulty breathing"), "severe"),
    "gastrointestinal": (("nausea", "vomiting", "diarrhea", "stomach pain"), "moderate"),
    "neurological": (("dizziness", "headache", "confusion", "seizures"), "severe"),
    "cardiovascular": (("chest pain", "irregular heartbeat", "high blood pressure"), "critical"),
    "respiratory": (("cough", "shortness of breath", "wheezing"), "moderate"),
    "skin reactions": (("rash", "hives", "itching", "redness"), "moderate"),
})

MEDICATION_CLASS_PATTERNS = MappingProxyType({
    "antibiotics": ("allergic reaction", "gastrointestinal", "skin reactions"),
    "painkillers": ("gastrointestinal", "neurological", "allergic reaction"),
    "antidepressants": ("neurological", "cardiovascular"),
    "blood pressure": ("cardiovascular", "respiratory"),
    "antihistamines": ("neurological", "skin reactions"),
    "steroids": ("gastrointestinal", "skin reactions", "cardiovascular"),
})

SEVERITY_RANK = MappingProxyType({"mild": 1, "moderate": 2, "severe": 3})
PATTERN_SEVERITY_WEIGHTS = MappingProxyType({"critical": 4, "severe": 3, "moderate": 2, "mild": 1})

CONFIDENCE_THRESHOLD = 0.3


class DetectedReaction(BaseModel):
    type: str
    severity: str
    confidence: float = Field(..., ge=0.0, le=1.0)


def check_drug_interactions(medications: Iterable[str]) -> List[str]:
    names = [m.strip().lower() for m in medications]
    warnings: List[str] = []
    for i, current in enumerate(names):
        interacting = DRUG_INTERACTIONS.get(current, ())
        for j, other in enumerate(names):
            if i != j and other in interacting:
                warnings.append(f"Potential interaction between {current} and {other}")
    return warnings


def check_for_adverse_reactions(medications: Iterable[str], symptoms: Iterable[Symptom]) -> List[str]:
    """Flag symptoms that match a known side effect at least as severe as the effect itself."""
    by_name = {s.key: s for s in symptoms}
    warnings: List[str] = []
    for medication in medications:
        for effect, effect_severity in ADVERSE_EFFECTS.get(medication.strip().lower(), ()):
            symptom = by_name.get(effect)
            if symptom is None:
                continue
            if SEVERITY_RANK.get(symptom.severity, 1) >= SEVERITY_RANK[effect_severity]:
                warnings.append(f"{symptom.name} may be an adverse reaction to {medication.strip()}")
    return warnings


def detect_adverse_reactions(medication: str, symptom_names: Iterable[str]) -> List[DetectedReaction]:
    medication = medication.lower()
    reported = [s.lower() for s in symptom_names]

    patterns: List[str] = []
    for med_class, class_patterns in MEDICATION_CLASS_PATTERNS.items():
        if med_class in medication:
            patterns.extend(class_patterns)

    detected: List[DetectedReaction] = []
    for pattern in patterns:
        pattern_symptoms, severity = ADR_PATTERNS[pattern]
        matching = [p for p in pattern_symptoms if any(p in s for s in reported)]
        confidence = len(matching) / len(pattern_symptoms)
        if confidence > CONFIDENCE_THRESHOLD:
            detected.append(DetectedReaction(type=pattern, severity=severity, confidence=round(confidence, 2)))

    return sorted(detected, key=lambda r: r.confidence, reverse=True)


def calculate_adr_severity(reactions: List[DetectedReaction]) -> str:
    if not reactions:
        return "none"

    total = sum(PATTERN_SEVERITY_WEIGHTS[r.severity] * r.confidence for r in reactions)
    average = total / len(reactions)

    if average >= 3.5:
        return "critical"
    if average >= 2.5:
        return "severe"
    if average >= 1.5:
        return "moderate"
    return "mild"
