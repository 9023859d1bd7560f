import sys
from pathlib import Path

# Add repo root to path before importing project modules
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import streamlit as st

from pulsecheck.utils import get_logger
from pulsecheck.utils.env_tools import load_env_once, load_config, ensure_dirs, env_flag, is_production_env

st.set_page_config(
    page_title="PulseCheck - Health Risk Assessment",
    page_icon="🩺",
    layout="wide",
    initial_sidebar_state="expanded"
)

from pulsecheck.scoring_config import get_scoring_config
from pulsecheck.tips import daily_tip
from ui import state
from ui.components.theme import apply_theme, theme_icon
from ui.components.wizard_form import display_step
from ui.components.results_display import display_result, run_processing

log = get_logger("ui.streamlit_app")

load_env_once(str(ROOT / ".env"))
CFG = load_config()
ensure_dirs(CFG)
IS_PROD = is_production_env()
SHOW_DIAGNOSTICS = not IS_PROD or env_flag("PULSECHECK_DEBUG")

state.ensure_session(CFG)
store = state.get_store()
controller = state.get_controller()

try:
    SCORING = get_scoring_config(CFG["scoring"]["variant"])
except (ValueError, FileNotFoundError) as _e:
    st.error(f"Scoring configuration problem: {_e}. Falling back to the default rule set.")
    SCORING = get_scoring_config()

theme = store.get_theme()
apply_theme(theme)

# Sidebar
st.sidebar.title("🩺 PulseCheck")

user = store.get_current_user()
if user:
    st.sidebar.markdown(f"**{user.greeting}**")
    if st.sidebar.button("Log out", key="logout_btn"):
        store.sign_out()
        st.rerun()
elif st.sidebar.button("Login", key="login_nav_btn"):
    state.go_to("Login")
    st.rerun()

if st.sidebar.button(f"{theme_icon(theme)} Toggle theme", key="theme_btn"):
    store.toggle_theme()
    st.rerun()

nav_pages = ["Home", "Assessment", "Results"]
current_page = st.session_state[state.KEY_PAGE]
nav_selection = st.sidebar.radio(
    "Navigation",
    nav_pages,
    index=nav_pages.index(current_page) if current_page in nav_pages else 0,
)
if current_page in nav_pages and nav_selection != current_page:
    state.go_to(nav_selection)
    st.rerun()

if st.sidebar.button("Restart assessment", key="restart_btn"):
    state.restart_assessment()
    st.rerun()

# Sidebar debug expander for wizard internals (dev only)
if SHOW_DIAGNOSTICS:
    with st.sidebar.expander("⚙️ Diagnostics", expanded=False):
        st.write(f"Scoring variant: {SCORING.name}")
        st.write(controller.state.step_indicator)
        st.json(controller.record.to_dict())

# HOME
if current_page == "Home":
    st.title("Know your heart & metabolic risk in 2 minutes")
    st.markdown(
        "Answer five short steps about your vitals, history, symptoms and lifestyle. "
        "You get a risk score, what is going well and a concrete action plan."
    )
    st.info(f"💡 Daily tip: {daily_tip()}")
    st.caption("This is a heuristic screening aid, not a medical diagnosis.")
    if st.button("Start Assessment", type="primary", key="start_btn"):
        state.go_to("Assessment")
        st.rerun()

# LOGIN
elif current_page == "Login":
    sign_up = st.toggle("I don't have an account yet", key="auth_mode_signup")
    st.header("Create Account" if sign_up else "Welcome Back")
    with st.form("login_form"):
        name = st.text_input("Full name", key="auth_name") if sign_up else ""
        email = st.text_input("Email", key="auth_email")
        password = st.text_input("Password", type="password", key="auth_password")
        submitted = st.form_submit_button("Sign Up" if sign_up else "Sign In")
    if submitted:
        try:
            if sign_up:
                store.sign_up(name, email, password)
            else:
                store.sign_in(email, password)
        except ValueError as e:
            st.error(str(e))
        else:
            state.go_to("Home")
            st.rerun()
    if st.button("← Back", key="auth_back_btn"):
        state.go_to("Home")
        st.rerun()

# ASSESSMENT
elif current_page == "Assessment":
    st.header("Health Assessment")
    try:
        result = display_step(controller, SCORING)
    except ValueError as e:
        log.exception("Assessment step failed")
        st.error(f"Could not process this step: {e}")
        result = None
    if result is not None:
        state.set_result(result)
        state.go_to("Results")
        st.rerun()

# RESULTS
elif current_page == "Results":
    st.header("Your Results")
    result = state.get_result()
    if result is None:
        st.warning("⚠️ Please complete the assessment first")
        if st.button("Go to Assessment", key="results_go_assessment"):
            state.go_to("Assessment")
            st.rerun()
        st.stop()

    counter = None
    if st.session_state.get(state.KEY_PENDING):
        if not run_processing(st.session_state[state.KEY_PROCESSING]):
            st.stop()
        st.session_state[state.KEY_PENDING] = False
        counter = st.session_state[state.KEY_COUNTER]

    display_result(result, theme, counter)

    st.divider()
    if st.button("🔄 Start Over", key="start_over_btn"):
        state.restart_assessment()
        st.rerun()
