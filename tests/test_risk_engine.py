from __future__ import annotations
import itertools

import pytest

from pulsecheck.answers import AnswerRecord, SYMPTOM_OPTIONS, HISTORY_OPTIONS
from pulsecheck.risk_engine import (
    ActionItem,
    RiskResult,
    classify_risk,
    evaluate,
)
from pulsecheck.scoring_config import RuleWeight, ScoringConfig


def test_obese_hypertensive_is_moderate():
    result = evaluate(AnswerRecord(age=45, bmi=32, bp=150))
    # 10 base + 20 obesity + 25 high BP
    assert result.score == 55
    assert result.tier.label == "Moderate Risk"
    assert result.recommendations == ("BMI indicates obesity range.", "High Blood Pressure detected.")
    assert result.positives == ("Non-Smoker",)
    assert result.cardiac_score == 45
    assert result.metabolic_score == 45
    assert [a.kind for a in result.action_plan] == ["urgent", "longterm", "urgent"]


def test_cardiac_symptoms_prepend_urgent_advice():
    result = evaluate(AnswerRecord(symptoms={"chest_pain", "dizziness"}))
    assert result.score == 50
    assert result.recommendations[0].startswith("⚠️")
    assert "cardiologist" in result.recommendations[0].lower()
    assert result.action_plan[0] == ActionItem("urgent", "Consult a Cardiologist IMMEDIATELY.")
    assert result.cardiac_score == 65


def test_healthy_profile_stays_low():
    result = evaluate(AnswerRecord(bmi=22, bp=120, smoke="no", activity="active"))
    assert result.score == 10
    assert result.tier.label == "Low Risk"
    assert result.tier.color == "success"
    assert "Healthy BMI" in result.positives
    assert "Non-Smoker" in result.positives
    # five markers fire, capped at four
    assert result.positives == ("Young Age Group", "Healthy BMI", "Normal Blood Pressure", "Non-Smoker")
    assert result.recommendations == ("Maintain your current healthy habits.",)
    assert result.action_plan == (ActionItem("regular", "Routine annual checkup."),)


def test_everything_firing_is_clamped():
    record = AnswerRecord(
        age=70, bmi=38, bp=170, activity="sedentary", smoke="yes",
        history={"diabetes", "heart_disease"},
        symptoms=set(SYMPTOM_OPTIONS),
    )
    result = evaluate(record)
    assert result.score == 99
    assert result.cardiac_score == 100
    # 15 + 30 obesity + 40 diabetes + 10 sedentary; symptom rule suppressed by history
    assert result.metabolic_score == 95
    assert result.tier.label == "High Risk"
    assert len(result.action_plan) == 4


def test_fatigue_counts_toward_diabetic_symptoms():
    result = evaluate(AnswerRecord(symptoms={"fatigue", "thirst"}))
    assert result.score == 35
    assert result.recommendations == ("Symptoms suggest potential diabetes.",)
    assert result.action_plan[0].text == "Schedule a Fasting Blood Sugar test."


def test_known_diabetes_suppresses_symptom_rule():
    result = evaluate(AnswerRecord(history={"diabetes"}, symptoms={"thirst", "urination"}))
    assert result.score == 30
    assert result.recommendations == ("Maintain your current healthy habits.",)
    assert result.action_plan == (ActionItem("regular", "Quarterly HbA1c tests."),)


@pytest.mark.parametrize("symptoms", [
    ["chest_pain", "dizziness"],
    ("chest_pain", "dizziness"),
    {"chest_pain", "dizziness"},
])
def test_tag_collection_type_does_not_matter(symptoms):
    result = evaluate(AnswerRecord(history=["heart_disease"], symptoms=symptoms))
    assert result.score == 75
    assert result.recommendations[0].startswith("⚠️")
    assert result == evaluate(AnswerRecord(history={"heart_disease"}, symptoms={"chest_pain", "dizziness"}))


def test_zero_and_missing_vitals_use_defaults():
    assert evaluate(AnswerRecord(age=0, bmi=0, bp=0)) == evaluate(AnswerRecord())


def test_evaluate_is_deterministic():
    record = AnswerRecord(age=61, bmi=29.5, bp=141, smoke="yes", symptoms={"fatigue", "dizziness"})
    assert evaluate(record) == evaluate(record)


def test_caps_and_uniqueness_hold_across_combinations():
    symptom_sets = [set(c) for n in range(0, 4) for c in itertools.combinations(SYMPTOM_OPTIONS, n)]
    for symptoms, history, smoke in itertools.product(
        symptom_sets, [set(), {"diabetes"}, set(HISTORY_OPTIONS)], ["yes", "no"]
    ):
        result = evaluate(AnswerRecord(bmi=35, bp=160, smoke=smoke, history=history, symptoms=symptoms))
        assert 0 <= result.score <= 99
        assert len(result.recommendations) <= 4
        assert len(set(result.recommendations)) == len(result.recommendations)
        assert len(result.positives) <= 4
        assert len(result.action_plan) <= 4


def test_compact_variant_drops_subscores_and_plan():
    cfg = ScoringConfig(name="compact", include_subscores=False, include_action_plan=False,
                        max_recommendations=5, max_positives=5, max_actions=5)
    result = evaluate(AnswerRecord(bmi=22, bp=120, activity="active"), cfg)
    assert result.cardiac_score is None and result.metabolic_score is None
    assert not result.has_subscores
    assert result.action_plan == ()
    assert len(result.positives) == 5
    assert result.variant == "compact"


def test_negative_weights_clamp_at_zero():
    cfg = ScoringConfig(weights={"smoking": RuleWeight(score=-50, cardiac=-80)})
    result = evaluate(AnswerRecord(smoke="yes"), cfg)
    assert result.score == 0
    assert result.cardiac_score == 0


@pytest.mark.parametrize("score,label", [(0, "Low Risk"), (39, "Low Risk"), (40, "Moderate Risk"),
                                         (74, "Moderate Risk"), (75, "High Risk"), (99, "High Risk")])
def test_classify_risk_thresholds(score, label):
    assert classify_risk(score).label == label


def test_action_item_rejects_unknown_kind():
    with pytest.raises(ValueError):
        ActionItem("someday", "Maybe later")


def test_to_dict_shape():
    result = evaluate(AnswerRecord(bp=150))
    assert isinstance(result, RiskResult)
    d = result.to_dict()
    assert d["score"] == 35
    assert d["level"] == "Low Risk"
    assert d["action_plan"][0] == {"type": "urgent", "text": "Monitor BP twice daily for a week."}
    assert d["variant"] == "detailed"
