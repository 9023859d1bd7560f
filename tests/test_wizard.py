"""Unit tests for the assessment wizard state machine."""

import unittest

from pulsecheck.risk_engine import RiskResult
from pulsecheck.wizard import TOTAL_STEPS, WizardController, is_empty_value

BASIC = {"age": "45", "gender": "male"}
VITALS = {"bmi": "32", "bp": "150"}


class TestWizardController(unittest.TestCase):
    """Navigation, validation and submission."""

    def setUp(self):
        self.ctrl = WizardController()

    def _walk_to_final(self):
        self.assertTrue(self.ctrl.advance(BASIC))
        self.assertTrue(self.ctrl.advance(VITALS))
        self.assertTrue(self.ctrl.advance({"history": []}))
        self.assertTrue(self.ctrl.advance({"symptoms": []}))

    def test_initial_state(self):
        self.assertEqual(self.ctrl.state.current_step, 1)
        self.assertEqual(self.ctrl.state.total_steps, TOTAL_STEPS)
        self.assertEqual(self.ctrl.state.progress, 0.0)
        self.assertEqual(self.ctrl.state.step_indicator, "Step 1 of 5")
        self.assertTrue(self.ctrl.record.is_empty())

    def test_advance_blocked_on_missing_required(self):
        self.assertFalse(self.ctrl.advance({"age": "45", "gender": ""}))
        self.assertEqual(self.ctrl.state.current_step, 1)
        self.assertTrue(self.ctrl.is_invalid("gender"))
        self.assertFalse(self.ctrl.is_invalid("age"))
        self.assertTrue(self.ctrl.record.is_empty())

    def test_whitespace_counts_as_empty(self):
        self.assertFalse(self.ctrl.advance({"age": "   ", "gender": "female"}))
        self.assertTrue(self.ctrl.is_invalid("age"))

    def test_zero_counts_as_present(self):
        self.assertTrue(self.ctrl.advance({"age": 0, "gender": "female"}))
        self.assertEqual(self.ctrl.state.current_step, 2)

    def test_advance_persists_and_moves(self):
        self.assertTrue(self.ctrl.advance(BASIC))
        self.assertEqual(self.ctrl.state.current_step, 2)
        self.assertEqual(self.ctrl.state.progress, 25.0)
        self.assertEqual(self.ctrl.record.age, 45)
        self.assertEqual(self.ctrl.record.gender, "male")

    def test_invalid_flag_clears_after_fix(self):
        self.ctrl.advance({"age": "", "gender": "male"})
        self.assertTrue(self.ctrl.is_invalid("age"))
        self.ctrl.advance(BASIC)
        self.assertFalse(self.ctrl.is_invalid("age"))

    def test_values_for_other_steps_ignored(self):
        self.ctrl.advance({**BASIC, "bmi": "50"})
        self.assertIsNone(self.ctrl.record.bmi)

    def test_retreat_without_validation(self):
        self.ctrl.advance(BASIC)
        self.assertTrue(self.ctrl.retreat({"bmi": "30", "bp": ""}))
        self.assertEqual(self.ctrl.state.current_step, 1)
        self.assertEqual(self.ctrl.record.bmi, 30.0)
        self.assertEqual(self.ctrl.step_values(2), {"bmi": "30", "bp": ""})

    def test_step_values_rejects_out_of_range(self):
        for bad in (0, -1, TOTAL_STEPS + 1):
            with self.assertRaises(ValueError):
                self.ctrl.step_values(bad)
        self.assertEqual(self.ctrl.step_values(1), {"age": None, "gender": None})

    def test_retreat_stops_at_first_step(self):
        self.assertFalse(self.ctrl.retreat())
        self.assertEqual(self.ctrl.state.current_step, 1)

    def test_step_values_survive_going_back(self):
        self.ctrl.advance(BASIC)
        self.ctrl.retreat()
        self.assertEqual(self.ctrl.step_values(), BASIC)
        # resubmitting the stored values passes validation
        self.assertTrue(self.ctrl.advance())

    def test_advance_never_passes_final_step(self):
        self._walk_to_final()
        self.assertTrue(self.ctrl.state.is_final)
        self.assertEqual(self.ctrl.state.progress, 100.0)
        self.ctrl.advance({"activity": "active"})
        self.assertEqual(self.ctrl.state.current_step, TOTAL_STEPS)

    def test_submit_before_final_raises(self):
        with self.assertRaises(ValueError):
            self.ctrl.submit(BASIC)

    def test_submit_evaluates_full_record(self):
        self._walk_to_final()
        result = self.ctrl.submit({"activity": "moderate", "smoke": "no"})
        self.assertIsInstance(result, RiskResult)
        self.assertEqual(result.score, 55)
        self.assertEqual(result.tier.label, "Moderate Risk")

    def test_reset(self):
        self.ctrl.advance({"age": ""})
        self._walk_to_final()
        self.assertNotEqual(self.ctrl.invalid, {})
        self.ctrl.reset()
        self.assertEqual(self.ctrl.state.current_step, 1)
        self.assertTrue(self.ctrl.record.is_empty())
        self.assertEqual(self.ctrl.record.history, set())
        self.assertEqual(self.ctrl.record.symptoms, set())
        self.assertEqual(self.ctrl.invalid, {})
        self.assertEqual(self.ctrl.step_values(), {"age": None, "gender": None})


def test_is_empty_value():
    assert is_empty_value(None)
    assert is_empty_value("")
    assert is_empty_value([])
    assert not is_empty_value(0)
    assert not is_empty_value("0")
    assert not is_empty_value(["fatigue"])
