import random
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "dev") not in sys.path:
    sys.path.insert(0, str(ROOT / "dev"))

from pulsecheck.tips import DAILY_TIPS, daily_tip


def test_daily_tip_is_from_the_list():
    assert daily_tip() in DAILY_TIPS
    assert daily_tip(random.Random(7)) == daily_tip(random.Random(7))


def test_scenario_runner_writes_outputs(tmp_path):
    import run_scenarios

    df = run_scenarios.main(["--out", str(tmp_path), "--stem", "smoke"])
    assert (tmp_path / "smoke.json").exists()
    assert (tmp_path / "smoke.csv").exists()

    by_profile = df.set_index("profile")
    assert by_profile.loc["worst_case", "score"] == 99
    assert by_profile.loc["worst_case", "level"] == "High Risk"
    assert by_profile.loc["hypertensive_obese", "score"] == 55
    assert by_profile.loc["healthy_active", "level"] == "Low Risk"
    assert by_profile.loc["blank_form", "score"] == 10
    assert by_profile.loc["cardiac_symptoms", "top_recommendation"].startswith("⚠️")


def test_scenario_runner_compact_variant(tmp_path):
    import run_scenarios

    df = run_scenarios.main(["--variant", "compact", "--out", str(tmp_path)])
    assert df["cardiac"].isna().all()
    assert (df["n_actions"] == 0).all()
