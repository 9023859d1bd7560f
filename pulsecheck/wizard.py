"""Multi-step assessment wizard.

A WizardController owns one WizardState and one AnswerRecord. The UI feeds it
the raw widget values of the visible step; the controller validates required
fields, rebuilds the record from everything entered so far and moves between
steps. The record is handed to the risk evaluator only on final submission.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import logging

from pulsecheck.answers import (
    AnswerRecord,
    ACTIVITY_LEVELS,
    GENDER_OPTIONS,
    HISTORY_OPTIONS,
    SMOKE_OPTIONS,
    SYMPTOM_OPTIONS,
)
from pulsecheck.risk_engine import RiskResult, evaluate
from pulsecheck.scoring_config import ScoringConfig

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldSpec:
    name: str
    label: str
    kind: str  # number | select | radio | multiselect
    required: bool = False
    options: Tuple[str, ...] = ()
    help: str = ""


@dataclass(frozen=True)
class WizardStep:
    number: int
    title: str
    fields: Tuple[FieldSpec, ...]

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    @property
    def required_fields(self) -> List[str]:
        return [f.name for f in self.fields if f.required]


STEPS: Tuple[WizardStep, ...] = (
    WizardStep(1, "Basic Info", (
        FieldSpec("age", "Age", "number", required=True),
        FieldSpec("gender", "Gender", "select", required=True, options=GENDER_OPTIONS),
    )),
    WizardStep(2, "Vitals", (
        FieldSpec("bmi", "BMI", "number", required=True, help="Body mass index, e.g. 22.5"),
        FieldSpec("bp", "Systolic Blood Pressure", "number", required=True, help="Top number, in mmHg"),
    )),
    WizardStep(3, "Medical History", (
        FieldSpec("history", "Diagnosed conditions", "multiselect", options=tuple(HISTORY_OPTIONS)),
    )),
    WizardStep(4, "Symptoms", (
        FieldSpec("symptoms", "Current symptoms", "multiselect", options=tuple(SYMPTOM_OPTIONS)),
    )),
    WizardStep(5, "Lifestyle", (
        FieldSpec("activity", "Activity level", "radio", options=ACTIVITY_LEVELS),
        FieldSpec("smoke", "Do you smoke?", "radio", options=SMOKE_OPTIONS),
    )),
)

TOTAL_STEPS = len(STEPS)


def is_empty_value(value: Any) -> bool:
    """Presence check only: None, blank strings and empty collections are empty; 0 is not."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        return len(value) == 0
    return False


@dataclass
class WizardState:
    current_step: int = 1
    total_steps: int = TOTAL_STEPS

    @property
    def progress(self) -> float:
        """Percent complete for the progress bar."""
        if self.total_steps <= 1:
            return 100.0
        return (self.current_step - 1) / (self.total_steps - 1) * 100.0

    @property
    def is_first(self) -> bool:
        return self.current_step == 1

    @property
    def is_final(self) -> bool:
        return self.current_step == self.total_steps

    @property
    def step_indicator(self) -> str:
        return f"Step {self.current_step} of {self.total_steps}"


@dataclass
class WizardController:
    steps: Tuple[WizardStep, ...] = STEPS
    state: WizardState = field(init=False)
    record: AnswerRecord = field(default_factory=AnswerRecord, init=False)
    invalid: Dict[str, bool] = field(default_factory=dict, init=False)
    _form: Dict[str, Any] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self):
        if not self.steps:
            raise ValueError("WizardController needs at least one step")
        self.state = WizardState(total_steps=len(self.steps))

    @property
    def current(self) -> WizardStep:
        return self.steps[self.state.current_step - 1]

    def step_values(self, step: Optional[int] = None) -> Dict[str, Any]:
        """Raw values last entered for a step (defaults to the current one)."""
        number = self.state.current_step if step is None else step
        if not 1 <= number <= len(self.steps):
            raise ValueError(f"Step {number} out of range 1..{len(self.steps)}")
        s = self.steps[number - 1]
        return {name: self._form.get(name) for name in s.field_names}

    def is_invalid(self, name: str) -> bool:
        return bool(self.invalid.get(name, False))

    def validate(self, values: Optional[Dict[str, Any]] = None) -> bool:
        """Flag every required field of the current step that is empty."""
        merged = {**self.step_values(), **(values or {})}
        ok = True
        for name in self.current.required_fields:
            bad = is_empty_value(merged.get(name))
            self.invalid[name] = bad
            ok = ok and not bad
        if not ok:
            missing = [n for n in self.current.required_fields if self.invalid.get(n)]
            _log.info(f"Step {self.state.current_step} blocked; missing: {missing}")
        return ok

    def _persist(self, values: Optional[Dict[str, Any]]) -> None:
        allowed = set(self.current.field_names)
        for name, value in (values or {}).items():
            if name in allowed:
                self._form[name] = value
        self.record = AnswerRecord.from_form(self._form)

    def advance(self, values: Optional[Dict[str, Any]] = None) -> bool:
        if not self.validate(values):
            return False
        self._persist(values)
        self.state.current_step = min(self.state.current_step + 1, self.state.total_steps)
        _log.debug(f"Advanced to {self.state.step_indicator}")
        return True

    def retreat(self, values: Optional[Dict[str, Any]] = None) -> bool:
        """Go back one step without validating. Returns False on the first step."""
        self._persist(values)
        if self.state.is_first:
            return False
        self.state.current_step -= 1
        _log.debug(f"Retreated to {self.state.step_indicator}")
        return True

    def submit(self, values: Optional[Dict[str, Any]] = None,
               config: Optional[ScoringConfig] = None) -> Optional[RiskResult]:
        """Validate and persist the final step, then evaluate the full record."""
        if not self.state.is_final:
            raise ValueError(
                f"submit() is only allowed on the final step (at {self.state.step_indicator})"
            )
        if not self.validate(values):
            return None
        self._persist(values)
        return evaluate(self.record, config)

    def reset(self) -> None:
        self.state = WizardState(total_steps=len(self.steps))
        self.record = AnswerRecord()
        self.invalid = {}
        self._form = {}
