"""
Scoring Config - named rule-set variants for the risk evaluator

Two variants ship in config/scoring.yaml:
  - detailed: overall score plus cardiac/metabolic sub-scores and an action plan
  - compact:  overall score, recommendations and positives only

Every field has a built-in default equal to the detailed variant, so a variant
entry in YAML only needs to list what it changes.
"""

from __future__ import annotations
import yaml
from pathlib import Path
from typing import Dict, Optional
from dataclasses import dataclass, field, replace
import logging

_log = logging.getLogger(__name__)

DEFAULT_VARIANT = "detailed"


@dataclass(frozen=True)
class RuleWeight:
    """Points a single rule adds to the overall score and each sub-score."""
    score: int = 0
    cardiac: int = 0
    metabolic: int = 0


DEFAULT_WEIGHTS: Dict[str, RuleWeight] = {
    "obesity": RuleWeight(score=20, metabolic=30),
    "high_bp": RuleWeight(score=25, cardiac=30),
    "diabetes_history": RuleWeight(score=20, metabolic=40),
    "heart_disease_history": RuleWeight(score=25, cardiac=30),
    "cardiac_symptoms": RuleWeight(score=40, cardiac=50),
    "diabetic_symptoms": RuleWeight(score=25, metabolic=30),
    "smoking": RuleWeight(score=20, cardiac=20),
    "sedentary": RuleWeight(score=10, metabolic=10),
}


@dataclass(frozen=True)
class ScoringConfig:
    """Configuration for a single scoring variant."""
    name: str = DEFAULT_VARIANT
    label: str = "Detailed (sub-scores + action plan)"
    base_score: int = 10
    base_cardiac: int = 15
    base_metabolic: int = 15
    include_subscores: bool = True
    include_action_plan: bool = True
    max_recommendations: int = 4
    max_positives: int = 4
    max_actions: int = 4
    score_cap: int = 99
    subscore_cap: int = 100
    young_age: int = 40
    bmi_obese: float = 30.0
    bmi_healthy_min: float = 18.5
    bmi_healthy_max: float = 24.9
    bp_high: int = 140
    symptom_min_count: int = 2
    high_risk_threshold: int = 75
    moderate_risk_threshold: int = 40
    weights: Dict[str, RuleWeight] = field(default_factory=lambda: dict(DEFAULT_WEIGHTS))

    def weight(self, rule: str) -> RuleWeight:
        return self.weights.get(rule, RuleWeight())


def get_scoring_path() -> Path:
    """Get path to scoring.yaml config file."""
    candidates = [
        Path(__file__).parent.parent / "config" / "scoring.yaml",
        Path("config") / "scoring.yaml",
    ]
    for p in candidates:
        if p.exists():
            return p

    raise FileNotFoundError(
        "scoring.yaml not found. Searched: " + ", ".join(str(c) for c in candidates)
    )


def _variant_from_dict(name: str, data: dict) -> ScoringConfig:
    thresholds = data.get("thresholds", {}) or {}
    tiers = data.get("tiers", {}) or {}
    weights = dict(DEFAULT_WEIGHTS)
    for rule, w in (data.get("weights", {}) or {}).items():
        weights[rule] = RuleWeight(
            score=int(w.get("score", 0)),
            cardiac=int(w.get("cardiac", 0)),
            metabolic=int(w.get("metabolic", 0)),
        )

    base = ScoringConfig()
    return replace(
        base,
        name=name,
        label=data.get("label", name),
        base_score=int(data.get("base_score", base.base_score)),
        base_cardiac=int(data.get("base_cardiac", base.base_cardiac)),
        base_metabolic=int(data.get("base_metabolic", base.base_metabolic)),
        include_subscores=bool(data.get("include_subscores", base.include_subscores)),
        include_action_plan=bool(data.get("include_action_plan", base.include_action_plan)),
        max_recommendations=int(data.get("max_recommendations", base.max_recommendations)),
        max_positives=int(data.get("max_positives", base.max_positives)),
        max_actions=int(data.get("max_actions", base.max_actions)),
        score_cap=int(data.get("score_cap", base.score_cap)),
        subscore_cap=int(data.get("subscore_cap", base.subscore_cap)),
        young_age=int(thresholds.get("young_age", base.young_age)),
        bmi_obese=float(thresholds.get("bmi_obese", base.bmi_obese)),
        bmi_healthy_min=float(thresholds.get("bmi_healthy_min", base.bmi_healthy_min)),
        bmi_healthy_max=float(thresholds.get("bmi_healthy_max", base.bmi_healthy_max)),
        bp_high=int(thresholds.get("bp_high", base.bp_high)),
        symptom_min_count=int(thresholds.get("symptom_min_count", base.symptom_min_count)),
        high_risk_threshold=int(tiers.get("high", base.high_risk_threshold)),
        moderate_risk_threshold=int(tiers.get("moderate", base.moderate_risk_threshold)),
        weights=weights,
    )


def load_scoring_variants(config_path: Optional[Path] = None) -> Dict[str, ScoringConfig]:
    """
    Load all scoring variants.

    Returns:
        Dict mapping variant name -> ScoringConfig. Falls back to the built-in
        detailed variant when no scoring.yaml can be found.
    """
    try:
        path = Path(config_path) if config_path else get_scoring_path()
    except FileNotFoundError:
        _log.warning("scoring.yaml not found; using built-in detailed variant")
        return {DEFAULT_VARIANT: ScoringConfig()}

    if not path.exists():
        raise FileNotFoundError(f"scoring config not found: {path}")

    with open(path, "r") as f:
        config = yaml.safe_load(f) or {}

    variants = {}
    for name, data in (config.get("variants", {}) or {}).items():
        variants[name] = _variant_from_dict(name, data or {})
    if not variants:
        variants[DEFAULT_VARIANT] = ScoringConfig()
    return variants


def get_scoring_config(variant: Optional[str] = None, config_path: Optional[Path] = None) -> ScoringConfig:
    """Return the named variant (default: detailed). Unknown names raise ValueError."""
    name = variant or DEFAULT_VARIANT
    variants = load_scoring_variants(config_path)
    if name not in variants:
        raise ValueError(
            f"Unknown scoring variant '{name}'. Available: {', '.join(sorted(variants))}"
        )
    _log.debug(f"Using scoring variant {name}")
    return variants[name]
