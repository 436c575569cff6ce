"""
Gobind Coach — Production Dashboard

Run with:  streamlit run app.py
"""

import atexit
import logging
import sys
from pathlib import Path

import streamlit as st

sys.path.insert(0, str(Path(__file__).resolve().parent))

from coach_dashboard.auth import AuthClient
from coach_dashboard.config import (
    DASHBOARD_TITLE,
    LOG_FORMAT,
    LOG_LEVEL,
    POLL_INTERVAL_SEC,
)
from coach_dashboard.dashboard import build_chart_figure, configured_sources, get_dashboard_view
from coach_dashboard.errors import AuthError
from coach_dashboard.models import ViewMode, ViewState
from coach_dashboard.poller import PollScheduler, build_refresh_jobs, release_worker
from coach_dashboard.preferences import PreferenceStore
from coach_dashboard.state import DashboardState
from coach_dashboard.views import next_page, previous_page

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, datefmt="%H:%M:%S")
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title=DASHBOARD_TITLE,
    page_icon="🚌",
    layout="wide",
    initial_sidebar_state="expanded",
)

VIEW_LABELS = {
    ViewMode.NORMAL: "Normal Order",
    ViewMode.ASCENDING: "Ascending (Low → High)",
    ViewMode.DESCENDING: "Descending (High → Low)",
}


# ---------------------------------------------------------------------------
# Shared refresh worker (one per server process)
# ---------------------------------------------------------------------------
@st.cache_resource(on_release=release_worker)
def start_polling() -> tuple[DashboardState, PollScheduler]:
    state = DashboardState()
    bus_source, summary_source = configured_sources()
    scheduler = PollScheduler(build_refresh_jobs(state, bus_source, summary_source))
    scheduler.start()
    # on_release covers cache clears; it is not called at shutdown
    atexit.register(scheduler.stop, 5.0)
    return state, scheduler


@st.cache_resource
def get_auth_client() -> AuthClient:
    return AuthClient()


if "user" not in st.session_state:
    st.session_state.user = None
if "view_mode" not in st.session_state:
    st.session_state.view_mode = ViewMode.NORMAL
if "page" not in st.session_state:
    st.session_state.page = 0


# ---------------------------------------------------------------------------
# Callbacks
# ---------------------------------------------------------------------------
def on_view_change():
    mode = st.session_state.view_select
    st.session_state.view_mode = mode
    st.session_state.page = 0
    PreferenceStore.for_user(st.session_state.user).save(mode)


def go_previous():
    st.session_state.page = previous_page(st.session_state.page)


def go_next(total: int):
    st.session_state.page = next_page(st.session_state.page, total)


def logout():
    st.session_state.user = None
    st.session_state.view_mode = ViewMode.NORMAL
    st.session_state.page = 0
    st.session_state.pop("view_select", None)


# ---------------------------------------------------------------------------
# Auth screens
# ---------------------------------------------------------------------------
def login_screen():
    st.title("Login")
    with st.form("login"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Login", width="stretch")

    if submitted:
        try:
            result = get_auth_client().login(email, password)
        except AuthError as e:
            st.error(e.message)
        else:
            st.session_state.user = result.email
            st.session_state.view_mode = PreferenceStore.for_user(result.email).load()
            st.session_state.page = 0
            st.rerun()


def signup_screen():
    st.title("Create Account")
    with st.form("signup"):
        name = st.text_input("Full Name")
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign Up", width="stretch")

    if submitted:
        try:
            get_auth_client().signup(name, email, password)
        except AuthError as e:
            st.error(e.message)
        else:
            st.success("Account created. You can log in now.")


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------
@st.fragment(run_every=POLL_INTERVAL_SEC)
def live_panel(state: DashboardState):
    view = get_dashboard_view(
        state.snapshot(),
        ViewState(mode=st.session_state.view_mode, page=st.session_state.page),
    )
    st.session_state.page = view["page"]
    counts = view["counts"]
    summary = view["summary"]

    col1, col2, col3, col4 = st.columns([1, 1, 1, 2])
    with col1:
        st.metric("Total Buses in Production", counts["total"])
    with col2:
        st.metric("Working (Yes)", counts["active"])
    with col3:
        st.metric("Not Working (No)", counts["inactive"])
    with col4:
        st.markdown(
            f"""
            <div style="background:#111; color:#fff; border-radius:12px; padding:12px 18px; font-weight:600;">
                <div>Date: {summary['date']}</div>
                <div>Manpower Present: {summary['manpower_present']}</div>
                <div>Drivers Present: {summary['drivers_present']}</div>
                <div>Supervisors Present: {summary['supervisors_present']}</div>
            </div>
            """,
            unsafe_allow_html=True,
        )

    chart_df = view["chart"]
    if chart_df.empty:
        st.warning("No production data available yet.")
    else:
        st.plotly_chart(build_chart_figure(chart_df), width="stretch")

    left, middle, right = st.columns([1, 2, 1])
    with left:
        st.button(
            "Previous",
            disabled=not view["has_previous"],
            on_click=go_previous,
            width="stretch",
        )
    with middle:
        if view["page_count"]:
            st.caption(f"Page {view['page'] + 1} of {view['page_count']}")
    with right:
        st.button(
            "Next",
            disabled=not view["has_next"],
            on_click=go_next,
            args=(counts["total"],),
            width="stretch",
        )

    if view["last_updated"] is not None:
        st.caption(f"Last refreshed {view['last_updated']:%H:%M:%S}")


def dashboard_screen():
    state, _ = start_polling()

    st.title(DASHBOARD_TITLE)
    modes = list(VIEW_LABELS)
    st.selectbox(
        "Select View",
        modes,
        index=modes.index(st.session_state.view_mode),
        format_func=VIEW_LABELS.get,
        key="view_select",
        on_change=on_view_change,
    )
    live_panel(state)


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------
st.sidebar.title("Gobind Coach")
st.sidebar.markdown("Production Dashboard")
st.sidebar.divider()

if st.session_state.user is None:
    screen = st.sidebar.radio("Account", ["Login", "Sign Up"])
    if screen == "Login":
        login_screen()
    else:
        signup_screen()
else:
    st.sidebar.caption(f"Signed in as {st.session_state.user}")
    st.sidebar.button("Logout", on_click=logout)
    dashboard_screen()
