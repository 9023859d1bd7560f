from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Set
import math
import re

__all__ = [
    "AnswerRecord",
    "ACTIVITY_LEVELS",
    "SMOKE_OPTIONS",
    "GENDER_OPTIONS",
    "HISTORY_OPTIONS",
    "SYMPTOM_OPTIONS",
    "DEFAULT_AGE",
    "DEFAULT_BMI",
    "DEFAULT_BP",
    "parse_int",
    "parse_float",
    "normalize_tags",
]

DEFAULT_AGE = 30
DEFAULT_BMI = 22.0
DEFAULT_BP = 120

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

ACTIVITY_LEVELS = ("sedentary", "moderate", "active")
SMOKE_OPTIONS = ("yes", "no")
GENDER_OPTIONS = ("female", "male", "other")

# tag -> display label
HISTORY_OPTIONS = {
    "diabetes": "Diabetes",
    "heart_disease": "Heart Disease",
    "hypertension": "Hypertension",
    "high_cholesterol": "High Cholesterol",
}
SYMPTOM_OPTIONS = {
    "chest_pain": "Chest Pain",
    "shortness_of_breath": "Shortness of Breath",
    "dizziness": "Dizziness",
    "fatigue": "Fatigue",
    "thirst": "Excessive Thirst",
    "urination": "Frequent Urination",
}


def parse_int(value: Any) -> Optional[int]:
    """Integer from the leading digits: '45.7' -> 45, '150abc' -> 150, '1e3' -> 1, garbage -> None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value) if math.isfinite(value) else None
    m = _LEADING_INT.match(str(value))
    return int(m.group(1)) if m else None


def parse_float(value: Any) -> Optional[float]:
    """Float from the leading decimal literal; NaN and infinities -> None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        x = float(value)
    else:
        m = _LEADING_FLOAT.match(str(value))
        if not m:
            return None
        x = float(m.group(1))
    return x if math.isfinite(x) else None


def normalize_tags(values: Optional[Iterable[Any]]) -> Set[str]:
    if not values:
        return set()
    if isinstance(values, str):
        values = [values]
    tags = set()
    for v in values:
        t = str(v).strip().lower().replace(" ", "_")
        if t:
            tags.add(t)
    return tags


@dataclass
class AnswerRecord:
    """Answers collected by the wizard. Numeric fields stay None when not parseable."""
    age: Optional[int] = None
    gender: Optional[str] = None
    bmi: Optional[float] = None
    bp: Optional[int] = None
    activity: str = "moderate"
    smoke: str = "no"
    history: Set[str] = field(default_factory=set)
    symptoms: Set[str] = field(default_factory=set)

    def __post_init__(self):
        self.history = normalize_tags(self.history)
        self.symptoms = normalize_tags(self.symptoms)

    @classmethod
    def from_form(cls, form: Dict[str, Any]) -> "AnswerRecord":
        form = form or {}
        activity = str(form.get("activity") or "moderate").strip().lower()
        smoke = str(form.get("smoke") or "no").strip().lower()
        gender = form.get("gender")
        return cls(
            age=parse_int(form.get("age")),
            gender=str(gender).strip() if gender not in (None, "") else None,
            bmi=parse_float(form.get("bmi")),
            bp=parse_int(form.get("bp")),
            activity=activity if activity in ACTIVITY_LEVELS else "moderate",
            smoke=smoke if smoke in SMOKE_OPTIONS else "no",
            history=normalize_tags(form.get("history")),
            symptoms=normalize_tags(form.get("symptoms")),
        )

    # A zero reading is treated like a missing one.
    @property
    def effective_age(self) -> int:
        return self.age or DEFAULT_AGE

    @property
    def effective_bmi(self) -> float:
        return self.bmi or DEFAULT_BMI

    @property
    def effective_bp(self) -> int:
        return self.bp or DEFAULT_BP

    def is_empty(self) -> bool:
        return self == AnswerRecord()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "age": self.age,
            "gender": self.gender,
            "bmi": self.bmi,
            "bp": self.bp,
            "activity": self.activity,
            "smoke": self.smoke,
            "history": sorted(self.history),
            "symptoms": sorted(self.symptoms),
        }
