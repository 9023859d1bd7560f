import streamlit as st

# Color tokens used by RiskTier.color
PALETTE = {
    "dark": {
        "bg": "#080c18", "surface": "#111827", "border": "#2f3648", "text": "#f5f5f5",
        "muted": "#9ca3af", "success": "#22c55e", "warning": "#f59e0b", "danger": "#ef4444",
    },
    "light": {
        "bg": "#f8fafc", "surface": "#ffffff", "border": "#d1d5db", "text": "#111827",
        "muted": "#6b7280", "success": "#16a34a", "warning": "#d97706", "danger": "#dc2626",
    },
}


def color_for(token: str, theme: str = "dark") -> str:
    pal = PALETTE.get(theme, PALETTE["dark"])
    return pal.get(token, pal["text"])


def theme_icon(theme: str) -> str:
    return "☀️" if theme == "dark" else "🌙"


def apply_theme(theme: str) -> None:
    p = PALETTE.get(theme, PALETTE["dark"])
    st.markdown(
        f"""
        <style>
        .stApp {{background-color:{p['bg']}; color:{p['text']};}}
        .stMarkdown, .stText, .stCaption, .stMetric {{color:{p['text']} !important;}}
        .stButton>button, .stRadio>div>label, .stCheckbox>label {{
            background-color:{p['surface']};
            color:{p['text']};
            border-radius:8px;
            border:1px solid {p['border']};
        }}
        .stMetric {{background-color:{p['surface']}; border-radius:10px; padding:0.75rem; border:1px solid {p['border']};}}
        .marker-pill {{
            display:inline-block; margin:0.2rem 0.3rem; padding:0.25rem 0.75rem;
            border-radius:999px; border:1px solid {p['success']}; color:{p['success']};
        }}
        .field-invalid {{color:{p['danger']}; font-size:0.85rem;}}
        .timeline-item {{
            border-left:3px solid {p['border']}; padding:0.25rem 0 0.5rem 0.75rem; margin-bottom:0.5rem;
        }}
        .timeline-item p {{color:{p['muted']}; margin:0;}}
        </style>
        """,
        unsafe_allow_html=True,
    )
