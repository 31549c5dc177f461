"""Static rule tables used by the triage rules.

Everything here is read-only data. Rules look symptoms up by their
lowercase name.
"""
from types import MappingProxyType


SEVERITY_WEIGHTS = MappingProxyType({
    "severe": 3,
    "moderate": 2,
    "mild": 1,
})
DEFAULT_SEVERITY_WEIGHT = 1

# Checked in order; the first token found in the duration text wins.
DURATION_WEIGHTS = (
    ("month", 2.0),
    ("week", 1.5),
)
DEFAULT_DURATION_WEIGHT = 1.0

CHRONICITY_WEIGHTS = (
    ("month", 3),
    ("week", 2),
)
DEFAULT_CHRONICITY_WEIGHT = 1

DISEASE_TABLE = MappingProxyType({
    "fever": ("Viral Infection", "Flu", "COVID-19", "Malaria"),
    "cough": ("Common Cold", "Flu", "Bronchitis", "COVID-19"),
    "headache": ("Tension Headache", "Migraine", "Sinusitis"),
    "chest pain": ("Muscle Strain", "Anxiety", "Angina", "Heart Disease"),
    "fatigue": ("Anemia", "Depression", "Thyroid Issues", "Chronic Fatigue Syndrome"),
    "shortness of breath": ("Anxiety", "Asthma", "COVID-19", "Heart Failure"),
    "joint pain": ("Rheumatoid Arthritis", "Osteoarthritis", "Gout", "Lupus"),
    "stomach pain": ("Gastritis", "Gastroenteritis", "Food Poisoning", "Peptic Ulcer"),
})

ADR_TABLE = MappingProxyType({
    "headache": (
        ("Aspirin", "Stomach irritation"),
        ("Ibuprofen", "Gastrointestinal issues"),
        ("Paracetamol", "Liver stress"),
    ),
    "dizziness": (
        ("Antidepressants", "Blood pressure changes"),
        ("Beta blockers", "Fatigue"),
        ("Antihistamines", "Drowsiness"),
    ),
})

# Smaller table used by the emergency-rating path.
SIMPLE_CONDITION_TABLE = MappingProxyType({
    "fever": ("Flu", "COVID-19", "Common Cold"),
    "cough": ("Common Cold", "Flu", "COVID-19", "Bronchitis"),
    "headache": ("Migraine", "Tension Headache", "Sinusitis"),
    "fatigue": ("Anemia", "Hypothyroidism", "Depression"),
    "chest pain": ("Heart Attack", "Angina", "GERD"),
    "shortness of breath": ("Asthma", "COVID-19", "Pneumonia"),
})

EMERGENCY_RATING_BASE = MappingProxyType({
    "critical": 9,
    "severe": 7,
    "moderate": 5,
    "mild": 3,
})
DEFAULT_EMERGENCY_RATING = 1

APPOINTMENT_SEVERITY_MINUTES = MappingProxyType({
    "critical": 30,
    "severe": 20,
    "moderate": 15,
    "mild": 10,
})

CONDITION_ADVICE = MappingProxyType({
    "covid-19": (
        "Get tested for COVID-19",
        "Self-isolate until test results are available",
    ),
    "flu": (
        "Take antiviral medication if prescribed",
        "Stay home to prevent spread",
    ),
    "heart attack": (
        "Call emergency services immediately if chest pain spreads to the arm, jaw or back",
        "Chew an aspirin only if advised by a medical professional",
    ),
})

SYMPTOM_CARE_ADVICE = MappingProxyType({
    "fever": ("Monitor temperature regularly", "Stay hydrated", "Rest and avoid strenuous activity"),
    "cough": ("Use a humidifier", "Avoid irritants like smoke", "Stay hydrated"),
    "headache": ("Rest in a quiet, dark room", "Stay hydrated", "Avoid bright lights and loud noises"),
    "nausea": (
        "Stay hydrated with small sips of water",
        "Avoid solid foods until symptoms improve",
        "Rest in a comfortable position",
    ),
    "vomiting": (
        "Stay hydrated with small sips of water",
        "Avoid solid foods until symptoms improve",
        "Rest in a comfortable position",
    ),
    "diarrhea": (
        "Stay hydrated with electrolyte solutions",
        "Avoid dairy and fatty foods",
        "Eat bland foods like rice, bananas, and toast",
    ),
    "dizziness": ("Sit or lie down when feeling dizzy", "Avoid sudden movements", "Stay hydrated"),
    "fatigue": (
        "Get plenty of rest",
        "Maintain a regular sleep schedule",
        "Stay hydrated and eat nutritious meals",
    ),
    "muscle pain": ("Apply ice or heat as needed", "Rest the affected area", "Stay hydrated"),
})
