"""
Results Display Components

Renders a RiskResult: the animated score gauge, tier banner, cardiac /
metabolic insight bars, recommendations, positive markers and the action
plan timeline.
"""

import math

import altair as alt
import pandas as pd
import plotly.graph_objects as go
import streamlit as st
from typing import Optional

from pulsecheck.animation import ProcessingSequence, ScoreCounter, ring_offset
from pulsecheck.risk_engine import ActionItem, RiskResult
from ui.components.theme import color_for

SPECIALIST_SEARCH_URL = "https://www.google.com/search?q=cardiologist+near+me"

RING_RADIUS = 52

ACTION_ICONS = {"urgent": "🚨", "regular": "📅", "longterm": "🎯"}


def action_icon(item: ActionItem) -> str:
    return ACTION_ICONS.get(item.kind, "📅")


def action_subtitle(item: ActionItem) -> str:
    return "Do this immediately" if item.is_urgent else "Maintain consistency"


def score_gauge(score: int, color: str) -> go.Figure:
    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=score,
        number={"suffix": "", "font": {"size": 48}},
        gauge={
            "axis": {"range": [0, 100], "visible": False},
            "bar": {"color": color, "thickness": 0.3},
            "bgcolor": "rgba(0,0,0,0)",
            "borderwidth": 0,
        },
    ))
    fig.update_layout(height=240, margin=dict(l=10, r=10, t=10, b=10),
                      paper_bgcolor="rgba(0,0,0,0)")
    return fig


def subscore_frame(result: RiskResult) -> pd.DataFrame:
    if not result.has_subscores:
        return pd.DataFrame(columns=["Area", "Risk"])
    return pd.DataFrame({
        "Area": ["Cardiac", "Metabolic"],
        "Risk": [result.cardiac_score, result.metabolic_score],
    })


def score_ring_svg(value: int, color: str, radius: int = RING_RADIUS) -> str:
    circumference = 2 * math.pi * radius
    size = 2 * radius + 16
    c = size // 2
    return (
        f"<svg width='{size}' height='{size}' style='display:block;margin:auto'>"
        f"<circle cx='{c}' cy='{c}' r='{radius}' fill='none' stroke='#8884' stroke-width='8'/>"
        f"<circle cx='{c}' cy='{c}' r='{radius}' fill='none' stroke='{color}' stroke-width='8' "
        f"stroke-dasharray='{circumference:.2f}' stroke-dashoffset='{ring_offset(value, radius):.2f}' "
        f"transform='rotate(-90 {c} {c})'/>"
        f"<text x='50%' y='55%' text-anchor='middle' font-size='32' fill='{color}'>{value}</text>"
        f"</svg>"
    )


def run_processing(sequence: ProcessingSequence) -> bool:
    """Show the staged status messages; True once the delay completes uncancelled."""
    status = st.empty()
    done = {"ok": False}

    def _complete():
        done["ok"] = True

    sequence.run(status.info, _complete)
    status.empty()
    return done["ok"]


def display_score(result: RiskResult, theme: str, counter: Optional[ScoreCounter] = None) -> None:
    color = color_for(result.tier.color, theme)
    slot = st.empty()
    if counter is not None:
        counter.run(result.score, lambda v: slot.markdown(score_ring_svg(v, color), unsafe_allow_html=True))
    slot.plotly_chart(score_gauge(result.score, color), use_container_width=True)
    st.markdown(
        f"<h3 style='text-align:center;color:{color};margin:0'>{result.tier.label}</h3>"
        f"<p style='text-align:center'>{result.tier.description}</p>",
        unsafe_allow_html=True,
    )


def display_insights(result: RiskResult, theme: str) -> None:
    if not result.has_subscores:
        return
    st.subheader("🔬 Risk Insights")
    df = subscore_frame(result)
    chart = (
        alt.Chart(df)
        .mark_bar(cornerRadiusEnd=4)
        .encode(
            x=alt.X("Risk:Q", scale=alt.Scale(domain=[0, 100]), title="Risk (%)"),
            y=alt.Y("Area:N", title=None),
            color=alt.value(color_for("warning", theme)),
            tooltip=["Area", "Risk"],
        )
        .properties(height=120)
    )
    st.altair_chart(chart, use_container_width=True)


def display_recommendations(result: RiskResult) -> None:
    st.subheader("💡 Recommendations")
    st.markdown("\n".join(f"- {rec}" for rec in result.recommendations))


def display_positive_markers(result: RiskResult) -> None:
    st.subheader("✅ Positive Markers")
    if not result.positives:
        st.caption("No specific strengths detected.")
        return
    pills = "".join(f"<span class='marker-pill'>✓ {p}</span>" for p in result.positives)
    st.markdown(pills, unsafe_allow_html=True)


def display_action_plan(result: RiskResult) -> None:
    if not result.action_plan:
        return
    st.subheader("🗓️ Action Plan")
    for item in result.action_plan:
        col_text, col_btn = st.columns([4, 1])
        with col_text:
            st.markdown(
                f"<div class='timeline-item'><h4>{action_icon(item)} {item.text}</h4>"
                f"<p>{action_subtitle(item)}</p></div>",
                unsafe_allow_html=True,
            )
        with col_btn:
            if item.is_urgent:
                st.link_button("Find Specialist", SPECIALIST_SEARCH_URL)


def display_result(result: RiskResult, theme: str, counter: Optional[ScoreCounter] = None) -> None:
    col_score, col_insights = st.columns([1, 1])
    with col_score:
        display_score(result, theme, counter)
    with col_insights:
        display_insights(result, theme)
        display_positive_markers(result)
    display_recommendations(result)
    display_action_plan(result)
