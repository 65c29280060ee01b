"""Terroir — Streamlit interactive quiz map."""

from __future__ import annotations

import asyncio

import streamlit as st

from dashboard.geo import MapConfig, build_figure, resolve_click
from terroir.state.camera import VIEWPORTS
from terroir.state.errors import LoadFailure
from terroir.state.models import LoadStatus
from terroir.state.session import QuizSession
from terroir.state.store import JoinedDataStore

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

MAP_CONFIG = MapConfig()

st.set_page_config(
    page_title="La bouffe en France",
    page_icon="🥖",
    layout="wide",
    initial_sidebar_state="expanded",
)


@st.cache_resource
def get_store() -> JoinedDataStore:
    """Load the regions and specialties once per server process."""
    store = JoinedDataStore()
    try:
        asyncio.run(store.load())
    except LoadFailure:
        pass  # surfaced through store.status below
    return store


def get_session(store: JoinedDataStore) -> QuizSession:
    if st.session_state.get("quiz") is None or st.session_state.quiz.store is not store:
        st.session_state.quiz = QuizSession(store)
        st.session_state.last_click = None
    return st.session_state.quiz


# ---------------------------------------------------------------------------
# Load states
# ---------------------------------------------------------------------------

st.title("La bouffe en France")

with st.spinner("Chargement des departements et des specialites ..."):
    store = get_store()

if store.status is LoadStatus.ERROR:
    st.error(f"Impossible de charger les donnees : {store.error}")
    if st.button("Recharger"):
        get_store.clear()
        st.rerun()
    st.stop()

quiz = get_session(store)

# ---------------------------------------------------------------------------
# Sidebar: viewports and progress
# ---------------------------------------------------------------------------

keys = list(VIEWPORTS)
choice = st.sidebar.radio(
    "Navigation",
    keys,
    index=keys.index(quiz.camera.state.key),
    format_func=lambda k: VIEWPORTS[k].label,
)
if choice != quiz.camera.state.key:
    quiz.navigate_to(choice)

st.sidebar.markdown("---")
st.sidebar.metric("Departements visites", f"{len(quiz.visited)} / {len(store.regions)}")
st.sidebar.caption("Cliquez un departement pour deviner sa specialite culinaire.")

# ---------------------------------------------------------------------------
# Map
# ---------------------------------------------------------------------------

regions = store.regions
camera = quiz.camera.state
fig = build_figure(
    regions,
    styles={r.code: quiz.style_for(r.code) for r in regions},
    labels=store.labels.compute_all(regions),
    center=camera.viewport.center,
    zoom=camera.viewport.zoom,
    revision=camera.generation,
    config=MAP_CONFIG,
)

col_map, col_card = st.columns([3, 1])
with col_map:
    event = st.plotly_chart(
        fig,
        use_container_width=True,
        on_select="rerun",
        selection_mode="points",
        key="map",
    )

points = event.selection.points if event else []
clicked, st.session_state.last_click = resolve_click(points, st.session_state.last_click)
if clicked:
    quiz.dispatch("click", clicked)
    st.rerun()

# ---------------------------------------------------------------------------
# Specialty card
# ---------------------------------------------------------------------------

with col_card:
    current = quiz.current
    if current is None:
        st.info("Aucun departement selectionne.")
    else:
        st.subheader(current.name)
        st.caption(f"Code {current.code}")
        st.markdown("**Specialite culinaire**")
        if quiz.revealed:
            st.success(current.fact)
        elif st.button("Voir la reponse", use_container_width=True):
            quiz.reveal()
            st.rerun()
