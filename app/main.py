from __future__ import annotations

import logging
import sys
from pathlib import Path

import pydeck as pdk
import streamlit as st

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app.helpers import (
    MAP_LAYER_ID,
    deadline_text,
    map_points_frame,
    notes_text,
    selected_marker_id,
    status_badge,
    status_filter_options,
    status_from_filter_label,
)
from scholartrack.api.client import ScholarTrackApi
from scholartrack.config import Settings
from scholartrack.domain.avatar import avatar_data_uri
from scholartrack.domain.models import AppStatus, ScholarshipApplication
from scholartrack.geo.geocoding import NominatimGeocoder
from scholartrack.state.auth import AuthState
from scholartrack.state.session import AppSession
from scholartrack.state.tracker import dashboard_counts, filter_by_status

APP_TITLE = "BrightPath"
NAV_ITEMS = ("Home", "Tracker", "Map", "Profile")
AVATAR_UPLOAD_TYPES = ["png", "jpg", "jpeg", "gif", "webp"]


@st.cache_resource(show_spinner=False)
def _settings() -> Settings:
    return Settings.from_env()


@st.cache_resource(show_spinner=False)
def _geocoder() -> NominatimGeocoder:
    return NominatimGeocoder.from_settings(_settings())


def _ensure_session_state() -> AppSession:
    if "app_session" not in st.session_state:
        st.session_state.app_session = AppSession(ScholarTrackApi.from_settings(_settings()))
    st.session_state.setdefault("screen", "login")
    st.session_state.setdefault("nav", NAV_ITEMS[0])
    return st.session_state.app_session


def _go_to(screen: str) -> None:
    st.session_state.screen = screen


def _finish_auth(session: AppSession) -> None:
    if session.auth.auth_state is AuthState.AUTHENTICATED and session.complete_login() is not None:
        st.session_state.nav = NAV_ITEMS[0]
        _go_to("main")
        st.rerun()


def _render_login(session: AppSession) -> None:
    st.title(APP_TITLE)
    with st.form("login_form"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Login", type="primary", use_container_width=True)
    if submitted:
        with st.spinner("Signing in..."):
            session.auth.login(email, password)
        _finish_auth(session)
    if session.auth.error_message:
        st.error(session.auth.error_message)
    if st.button("Don't have an account? Sign up"):
        session.auth.reset_state()
        _go_to("signup")
        st.rerun()


def _render_signup(session: AppSession) -> None:
    st.title("Create Account")
    with st.form("signup_form"):
        first_name = st.text_input("First Name")
        last_name = st.text_input("Last Name")
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign Up", type="primary", use_container_width=True)
    if submitted:
        with st.spinner("Creating your account..."):
            session.auth.signup(first_name, last_name, email, password)
        _finish_auth(session)
    if session.auth.error_message:
        st.error(session.auth.error_message)
    if st.button("Already have an account? Login"):
        session.auth.reset_state()
        _go_to("login")
        st.rerun()


def _render_app_list(session: AppSession, apps: list[ScholarshipApplication], *, key_prefix: str) -> None:
    if not apps:
        st.caption("No applications to show.")
        return
    for app in apps:
        name_col, status_col, open_col = st.columns([6, 2, 1])
        name_col.markdown(f"**{app.name}**  \n{app.provider}")
        status_col.markdown(status_badge(app.status))
        if open_col.button("Open", key=f"{key_prefix}_{app.id}"):
            session.select(app)
            st.rerun()


def _render_dashboard(session: AppSession) -> None:
    applicant = session.applicant
    apps = session.scholarships.scholarships
    counts = dashboard_counts(apps)

    avatar_col, name_col, refresh_col = st.columns([1, 6, 1])
    avatar_col.markdown(f"## {applicant.initial}")
    name_col.caption("Welcome back,")
    name_col.subheader(applicant.username)
    if refresh_col.button("Refresh", help="Refresh Data"):
        with st.spinner("Refreshing..."):
            session.refresh()
        st.rerun()

    pending_col, approved_col = st.columns(2)
    pending_col.metric("Pending", counts["pending"])
    approved_col.metric("Approved", counts["approved"])

    st.subheader("Recent Activity")
    _render_app_list(session, apps, key_prefix="dashboard")


def _render_tracker(session: AppSession) -> None:
    st.header("My Applications")
    label = st.radio(
        "Status",
        status_filter_options(),
        horizontal=True,
        key="tracker_status_filter",
        label_visibility="collapsed",
    )
    filtered = filter_by_status(session.scholarships.scholarships, status_from_filter_label(label))
    _render_app_list(session, filtered, key_prefix="tracker")


def _render_map(session: AppSession) -> None:
    st.header("Map")
    with st.form("location_search", clear_on_submit=False):
        query = st.text_input("Search location...", label_visibility="collapsed", placeholder="Search location...")
        searched = st.form_submit_button("Search")
    if searched:
        point = session.map.search(query, _geocoder())
        if point is None and session.map.search_error is None and query.strip():
            st.info(f"No results for '{query.strip()}'.")
    if session.map.search_error:
        st.warning(session.map.search_error)

    markers = session.map.markers(session.scholarships.scholarships)
    points = map_points_frame(markers)
    camera = session.map.camera
    layer = pdk.Layer(
        "ScatterplotLayer",
        id=MAP_LAYER_ID,
        data=points,
        get_position="[longitude, latitude]",
        get_fill_color="rgba",
        get_radius=250,
        radius_min_pixels=6,
        pickable=True,
    )
    deck = pdk.Deck(
        layers=[layer],
        initial_view_state=pdk.ViewState(
            latitude=camera.center.latitude,
            longitude=camera.center.longitude,
            zoom=camera.zoom,
        ),
        tooltip={"text": "{name}\n{provider}"},
    )
    event = st.pydeck_chart(deck, on_select="rerun", selection_mode="single-object", key="applications_map")

    if not markers:
        st.caption("No applications with a location yet.")
        return
    st.caption("Click a marker to see its details.")

    # The chart keeps its selection across reruns; only act when it changes.
    marker_id = selected_marker_id(getattr(event, "selection", None))
    if marker_id != st.session_state.get("map_clicked_marker"):
        st.session_state.map_clicked_marker = marker_id
        app = session.scholarships.find(marker_id) if marker_id else None
        if app is not None and app.has_location:
            session.select_marker(app)
            st.rerun()


def _render_profile(session: AppSession) -> None:
    applicant = session.applicant
    if applicant.avatar_uri:
        st.markdown(
            f'<img src="{applicant.avatar_uri}" alt="Profile Picture" '
            'style="width:110px;height:110px;border-radius:50%;object-fit:cover;" />',
            unsafe_allow_html=True,
        )
    else:
        st.markdown(f"## {applicant.initial}")
    uploaded = st.file_uploader("Change photo", type=AVATAR_UPLOAD_TYPES)
    if uploaded is not None and st.button("Save photo"):
        try:
            session.update_avatar(avatar_data_uri(uploaded.getvalue(), uploaded.type))
        except ValueError as exc:
            st.error(str(exc))
        else:
            st.rerun()

    st.subheader(applicant.username)
    st.caption("Verified Applicant")
    st.text_input("Email", value=applicant.email, disabled=True)

    if st.button("Sign Out"):
        session.logout()
        st.session_state.pop("map_clicked_marker", None)
        _go_to("login")
        st.rerun()


def _render_detail(session: AppSession) -> None:
    app = session.selected
    if app is None:
        return
    with st.container(border=True):
        st.subheader(app.name)
        st.markdown(f"**{app.provider}**")
        st.caption(deadline_text(app))
        st.markdown(status_badge(app.status))
        st.divider()
        st.markdown("**Notes**")
        st.write(notes_text(app))

        labels = [status.label for status in AppStatus]
        new_label = st.selectbox(
            "Status (local only)",
            labels,
            index=labels.index(app.status.label),
            key=f"detail_status_{app.id}",
        )
        if new_label != app.status.label:
            session.select(session.scholarships.override_status(app.id, AppStatus.parse(new_label)))
            st.rerun()
        if st.button("Close", type="primary"):
            session.dismiss_selection()
            st.rerun()


def _render_main(session: AppSession) -> None:
    if session.applicant is None:
        _go_to("login")
        st.rerun()

    with st.sidebar:
        st.header(APP_TITLE)
        st.radio("Navigate", NAV_ITEMS, key="nav")

    if session.scholarships.error_message:
        error_col, retry_col = st.columns([5, 1])
        error_col.error(session.scholarships.error_message)
        if retry_col.button("Retry"):
            session.refresh()
            st.rerun()

    _render_detail(session)

    renderers = {
        "Home": _render_dashboard,
        "Tracker": _render_tracker,
        "Map": _render_map,
        "Profile": _render_profile,
    }
    renderers[st.session_state.nav](session)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    st.set_page_config(page_title=APP_TITLE, layout="centered")
    session = _ensure_session_state()

    screen = st.session_state.screen
    if screen == "signup":
        _render_signup(session)
    elif screen == "main":
        _render_main(session)
    else:
        _render_login(session)


if __name__ == "__main__":
    main()
