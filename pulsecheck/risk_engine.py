from __future__ import annotations
from typing import Dict, Tuple, Any, Optional, List
from dataclasses import dataclass
import logging

from pulsecheck.answers import AnswerRecord
from pulsecheck.scoring_config import ScoringConfig

__all__ = [
    "ActionItem",
    "RiskTier",
    "RiskResult",
    "ACTION_KINDS",
    "CARDIAC_SYMPTOMS",
    "DIABETIC_SYMPTOMS",
    "classify_risk",
    "evaluate",
    "clamp",
]

_log = logging.getLogger(__name__)

ACTION_KINDS = ("urgent", "regular", "longterm")

CARDIAC_SYMPTOMS = frozenset({"chest_pain", "shortness_of_breath", "dizziness", "fatigue"})
DIABETIC_SYMPTOMS = frozenset({"thirst", "urination", "fatigue"})

DEFAULT_RECOMMENDATION = "Maintain your current healthy habits."
DEFAULT_ACTION_TEXT = "Routine annual checkup."


# ============================================================================
# Result containers
# ============================================================================

@dataclass(frozen=True)
class ActionItem:
    """A next step for the action plan; `kind` only drives ordering and icons."""
    kind: str
    text: str

    def __post_init__(self):
        if self.kind not in ACTION_KINDS:
            raise ValueError(f"Unknown action kind '{self.kind}'; expected one of {ACTION_KINDS}")

    @property
    def is_urgent(self) -> bool:
        return self.kind == "urgent"

    def to_dict(self) -> Dict[str, str]:
        return {"type": self.kind, "text": self.text}


@dataclass(frozen=True)
class RiskTier:
    label: str
    color: str
    description: str


LOW_RISK = RiskTier("Low Risk", "success", "Great job! Your health metrics are stable.")
MODERATE_RISK = RiskTier("Moderate Risk", "warning", "Attention needed. See action plan.")
HIGH_RISK = RiskTier("High Risk", "danger", "Immediate action required.")


@dataclass(frozen=True)
class RiskResult:
    """
    Immutable outcome of one evaluation.

    Sub-scores and the action plan are only populated by variants that
    produce them; otherwise they are None / empty.
    """
    score: int
    tier: RiskTier
    recommendations: Tuple[str, ...]
    positives: Tuple[str, ...]
    action_plan: Tuple[ActionItem, ...] = ()
    cardiac_score: Optional[int] = None
    metabolic_score: Optional[int] = None
    variant: str = "detailed"

    @property
    def has_subscores(self) -> bool:
        return self.cardiac_score is not None and self.metabolic_score is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "level": self.tier.label,
            "color": self.tier.color,
            "description": self.tier.description,
            "cardiac_score": self.cardiac_score,
            "metabolic_score": self.metabolic_score,
            "recommendations": list(self.recommendations),
            "positives": list(self.positives),
            "action_plan": [a.to_dict() for a in self.action_plan],
            "variant": self.variant,
        }


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def classify_risk(score: float, config: Optional[ScoringConfig] = None) -> RiskTier:
    """Convert a clamped score to its tier (thresholds 40 / 75 by default)."""
    cfg = config or ScoringConfig()
    if score >= cfg.high_risk_threshold:
        return HIGH_RISK
    if score >= cfg.moderate_risk_threshold:
        return MODERATE_RISK
    return LOW_RISK


def _dedupe_keep_order(items: List[str]) -> List[str]:
    seen = set()
    out = []
    for x in items:
        if x not in seen:
            seen.add(x)
            out.append(x)
    return out


# ============================================================================
# Evaluation
# ============================================================================

def evaluate(record: AnswerRecord, config: Optional[ScoringConfig] = None) -> RiskResult:
    """
    Score a completed AnswerRecord with the heuristic rule set.

    Starting from the base score, each rule that fires adds its configured
    points and may contribute a recommendation, a positive marker or an
    action item. Missing numeric answers use their defaults (age 30, BMI 22,
    BP 120). Same record + same config always gives the same result.

    Returns a RiskResult with the score clamped to [0, score_cap] and
    sub-scores to [0, subscore_cap].
    """
    cfg = config or ScoringConfig()
    score = cfg.base_score
    cardiac = cfg.base_cardiac
    metabolic = cfg.base_metabolic
    recommendations: List[str] = []
    positives: List[str] = []
    actions: List[ActionItem] = []

    def apply(rule: str) -> None:
        nonlocal score, cardiac, metabolic
        w = cfg.weight(rule)
        score += w.score
        cardiac += w.cardiac
        metabolic += w.metabolic

    age = record.effective_age
    bmi = record.effective_bmi
    bp = record.effective_bp
    history = record.history or set()
    symptoms = record.symptoms or set()

    # --- Vitals ---
    if age < cfg.young_age:
        positives.append("Young Age Group")

    if bmi > cfg.bmi_obese:
        apply("obesity")
        recommendations.append("BMI indicates obesity range.")
        actions.append(ActionItem("urgent", "Start a calorie-deficit diet plan."))
        actions.append(ActionItem("longterm", "Target 5-10% weight loss in 6 months."))
    elif cfg.bmi_healthy_min <= bmi <= cfg.bmi_healthy_max:
        positives.append("Healthy BMI")

    if bp > cfg.bp_high:
        apply("high_bp")
        recommendations.append("High Blood Pressure detected.")
        actions.append(ActionItem("urgent", "Monitor BP twice daily for a week."))
    else:
        positives.append("Normal Blood Pressure")

    # --- Medical history ---
    if "diabetes" in history:
        apply("diabetes_history")
        actions.append(ActionItem("regular", "Quarterly HbA1c tests."))
    if "heart_disease" in history:
        apply("heart_disease_history")

    # --- Symptom correlation ---
    if len(symptoms & CARDIAC_SYMPTOMS) >= cfg.symptom_min_count:
        apply("cardiac_symptoms")
        recommendations.insert(0, "⚠️ Multiple cardiac symptoms reported. Consult a cardiologist.")
        actions.insert(0, ActionItem("urgent", "Consult a Cardiologist IMMEDIATELY."))

    if len(symptoms & DIABETIC_SYMPTOMS) >= cfg.symptom_min_count and "diabetes" not in history:
        apply("diabetic_symptoms")
        recommendations.append("Symptoms suggest potential diabetes.")
        actions.append(ActionItem("urgent", "Schedule a Fasting Blood Sugar test."))

    # --- Lifestyle ---
    if record.smoke == "yes":
        apply("smoking")
        actions.append(ActionItem("urgent", "Begin smoking cessation program."))
    else:
        positives.append("Non-Smoker")

    if record.activity == "sedentary":
        apply("sedentary")
        actions.append(ActionItem("regular", "Walk 30 mins daily."))
    elif record.activity == "active":
        positives.append("Active Lifestyle")

    # Fill gaps if empty
    if not recommendations:
        recommendations.append(DEFAULT_RECOMMENDATION)
    if not actions:
        actions.append(ActionItem("regular", DEFAULT_ACTION_TEXT))

    final_score = int(clamp(score, 0, cfg.score_cap))
    tier = classify_risk(final_score, cfg)
    result = RiskResult(
        score=final_score,
        tier=tier,
        recommendations=tuple(_dedupe_keep_order(recommendations)[: cfg.max_recommendations]),
        positives=tuple(positives[: cfg.max_positives]),
        action_plan=tuple(actions[: cfg.max_actions]) if cfg.include_action_plan else (),
        cardiac_score=int(clamp(cardiac, 0, cfg.subscore_cap)) if cfg.include_subscores else None,
        metabolic_score=int(clamp(metabolic, 0, cfg.subscore_cap)) if cfg.include_subscores else None,
        variant=cfg.name,
    )
    _log.info(f"Risk evaluation ({cfg.name}) -> score={result.score} level={tier.label}")
    return result
