#!/usr/bin/env python3
"""
Risk Scenario Runner - CLI tool for batch-evaluating sample answer sets.

USAGE EXAMPLES:

Evaluate the bundled sample profiles with the default (detailed) rules:
    python3 dev/run_scenarios.py

Compare against the compact variant and write to a custom directory:
    python3 dev/run_scenarios.py --variant compact --out data/outputs/compact

Custom profile file:
    python3 dev/run_scenarios.py --scenarios my_profiles.yaml --stem my_run

OUTPUT:
- <stem>.json: full RiskResult for every profile
- <stem>.csv:  one row per profile (score, level, sub-scores, counts)
- Console: summary table sorted by score
"""

import sys
from pathlib import Path

# Add repo root to path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

import argparse
import json
from typing import Dict, List

import pandas as pd
import yaml

from pulsecheck.answers import AnswerRecord
from pulsecheck.risk_engine import evaluate
from pulsecheck.scoring_config import get_scoring_config
from pulsecheck.utils import get_logger

log = get_logger("pulsecheck.dev.run_scenarios")

DEFAULT_SCENARIOS = ROOT / "dev" / "scenarios" / "sample_profiles.yaml"


def load_profiles(path: Path) -> Dict[str, dict]:
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}
    profiles = data.get("profiles", {}) or {}
    if not profiles:
        raise ValueError(f"No profiles found in {path}")
    return {str(name): (answers or {}) for name, answers in profiles.items()}


def run(profiles: Dict[str, dict], variant: str) -> List[dict]:
    cfg = get_scoring_config(variant)
    rows = []
    for name, answers in profiles.items():
        record = AnswerRecord.from_form(answers)
        result = evaluate(record, cfg)
        rows.append({"profile": name, "answers": record.to_dict(), "result": result.to_dict()})
    return rows


def to_frame(rows: List[dict]) -> pd.DataFrame:
    flat = []
    for r in rows:
        res = r["result"]
        flat.append({
            "profile": r["profile"],
            "score": res["score"],
            "level": res["level"],
            "cardiac": res["cardiac_score"],
            "metabolic": res["metabolic_score"],
            "n_recommendations": len(res["recommendations"]),
            "n_positives": len(res["positives"]),
            "n_actions": len(res["action_plan"]),
            "top_recommendation": res["recommendations"][0] if res["recommendations"] else "",
        })
    return pd.DataFrame(flat).sort_values("score", ascending=False).reset_index(drop=True)


def main(argv=None):
    p = argparse.ArgumentParser(description="Batch-evaluate health risk scenarios")
    p.add_argument("--scenarios", default=str(DEFAULT_SCENARIOS), help="YAML file with a 'profiles' mapping")
    p.add_argument("--variant", default="detailed", help="Scoring variant from config/scoring.yaml")
    p.add_argument("--out", default=str(ROOT / "data" / "outputs"), help="Output directory")
    p.add_argument("--stem", default="scenarios", help="Output file stem")
    args = p.parse_args(argv)

    profiles = load_profiles(Path(args.scenarios))
    rows = run(profiles, args.variant)
    df = to_frame(rows)

    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)
    json_path = out_dir / f"{args.stem}.json"
    csv_path = out_dir / f"{args.stem}.csv"
    with open(json_path, "w") as f:
        json.dump({"variant": args.variant, "results": rows}, f, indent=2)
    df.to_csv(csv_path, index=False)

    log.info(f"Evaluated {len(rows)} profiles with variant '{args.variant}'")
    print(df[["profile", "score", "level", "cardiac", "metabolic"]].to_string(index=False))
    print(f"\nWrote {json_path} and {csv_path}")
    return df


if __name__ == "__main__":
    main()
