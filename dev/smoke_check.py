#!/usr/bin/env python
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from pulsecheck.scoring_config import load_scoring_variants
from pulsecheck.wizard import WizardController


def main():
    # Walk the wizard end to end with every configured variant
    steps = [
        {"age": "52", "gender": "male"},
        {"bmi": "31.5", "bp": "145"},
        {"history": ["heart_disease"]},
        {"symptoms": ["chest_pain", "fatigue"]},
    ]
    final = {"activity": "sedentary", "smoke": "yes"}

    for name, cfg in load_scoring_variants().items():
        ctrl = WizardController()
        assert not ctrl.advance({}), "Empty first step must be rejected"
        for values in steps:
            assert ctrl.advance(values), f"Step {ctrl.state.current_step} rejected"
        result = ctrl.submit(final, cfg)
        assert result is not None, "Final submission rejected"

        print(f"\n[{name}] score={result.score} level={result.tier.label}")
        print("Sub-scores:", result.cardiac_score, result.metabolic_score)
        print("Recommendations:", list(result.recommendations))
        print("Actions:", [a.text for a in result.action_plan])

        assert 0 <= result.score <= cfg.score_cap
        assert len(result.recommendations) == len(set(result.recommendations))

        ctrl.reset()
        assert ctrl.state.current_step == 1 and ctrl.record.is_empty()


if __name__ == "__main__":
    main()
    print("\nAll checks passed!")
