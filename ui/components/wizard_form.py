"""
Wizard Form Components

Renders one WizardStep as Streamlit widgets and wires the Previous / Next /
Submit buttons to the WizardController.
"""

from typing import Any, Dict, Optional

import streamlit as st

from pulsecheck.answers import HISTORY_OPTIONS, SYMPTOM_OPTIONS
from pulsecheck.risk_engine import RiskResult
from pulsecheck.scoring_config import ScoringConfig
from pulsecheck.wizard import FieldSpec, WizardController

_OPTION_LABELS = {**HISTORY_OPTIONS, **SYMPTOM_OPTIONS}


def _label(option: str) -> str:
    return _OPTION_LABELS.get(option, str(option).replace("_", " ").title())


def _widget_key(ctrl: WizardController, fld: FieldSpec) -> str:
    # step number in the key so a revisited step re-reads stored values
    return f"wiz_{ctrl.state.current_step}_{fld.name}"


def _render_field(ctrl: WizardController, fld: FieldSpec, current: Any) -> Any:
    label = f"{fld.label} *" if fld.required else fld.label
    key = _widget_key(ctrl, fld)
    help_text = fld.help or None

    if fld.kind == "number":
        value = st.text_input(label, value="" if current is None else str(current), key=key, help=help_text)
    elif fld.kind == "select":
        options = list(fld.options)
        index = options.index(current) if current in options else None
        value = st.selectbox(label, options, index=index, key=key, format_func=_label,
                             placeholder="Select...", help=help_text)
    elif fld.kind == "radio":
        options = list(fld.options)
        index = options.index(current) if current in options else None
        value = st.radio(label, options, index=index, key=key, format_func=_label,
                         horizontal=True, help=help_text)
    elif fld.kind == "multiselect":
        value = st.multiselect(label, list(fld.options), default=list(current or []),
                               key=key, format_func=_label, help=help_text)
    else:
        raise ValueError(f"Unsupported field kind '{fld.kind}'")

    if ctrl.is_invalid(fld.name):
        st.markdown(f"<span class='field-invalid'>{fld.label} is required.</span>",
                    unsafe_allow_html=True)
    return value


def display_progress(ctrl: WizardController) -> None:
    st.progress(int(round(ctrl.state.progress)), text=ctrl.state.step_indicator)


def display_step(ctrl: WizardController, config: Optional[ScoringConfig] = None) -> Optional[RiskResult]:
    """
    Draw the current step and handle its buttons.

    Returns the RiskResult when the final step is submitted successfully,
    otherwise None. Navigation buttons trigger a rerun.
    """
    step = ctrl.current
    display_progress(ctrl)
    st.subheader(step.title)

    stored = ctrl.step_values()
    values: Dict[str, Any] = {}
    for fld in step.fields:
        values[fld.name] = _render_field(ctrl, fld, stored.get(fld.name))

    col_prev, _, col_next = st.columns([1, 3, 1])
    with col_prev:
        if not ctrl.state.is_first and st.button("← Previous", key=f"prev_{step.number}"):
            ctrl.retreat(values)
            st.rerun()
    with col_next:
        if ctrl.state.is_final:
            if st.button("Get Results", type="primary", key="submit_assessment"):
                result = ctrl.submit(values, config)
                if result is None:
                    st.rerun()
                return result
        elif st.button("Next →", type="primary", key=f"next_{step.number}"):
            ctrl.advance(values)
            st.rerun()
    return None
