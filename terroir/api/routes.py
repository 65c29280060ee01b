"""FastAPI REST endpoints for Terroir."""

from __future__ import annotations

import time
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

from terroir.api.schemas import (
    CameraOut,
    HealthOut,
    NavigateIn,
    RegionListOut,
    RegionOut,
    SelectIn,
    SelectionOut,
    SessionOut,
    StyleOut,
    ViewportOut,
)
from terroir.state.camera import VIEWPORTS
from terroir.state.session import QuizSession
from terroir.state.store import JoinedDataStore
from terroir.storage.sessions import SessionRegistry, get_registry, get_store

router = APIRouter(prefix="/api/v1", tags=["Terroir API"])

_start_time = time.time()


def _session_out(session_id: str, session: QuizSession) -> SessionOut:
    current = session.current
    camera = session.camera.state
    lat, lon = camera.viewport.center
    return SessionOut(
        id=session_id,
        status=session.status.value,
        selection=SelectionOut(
            code=current.code,
            name=current.name,
            fact=session.visible_fact(),
        ) if current else None,
        revealed=session.revealed,
        visited=sorted(session.visited.codes()),
        camera=CameraOut(
            viewport=camera.key,
            label=camera.viewport.label,
            lat=lat,
            lon=lon,
            zoom=camera.viewport.zoom,
            generation=camera.generation,
        ),
    )


def _get_session(session_id: str, registry: SessionRegistry) -> QuizSession:
    session = registry.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Unknown session")
    return session


# ---------------------------------------------------------------------------
# Catalogs
# ---------------------------------------------------------------------------


@router.get("/viewports", summary="Named viewports", response_model=list[ViewportOut])
def list_viewports() -> list[ViewportOut]:
    return [
        ViewportOut(key=key, label=vp.label, lat=vp.center[0], lon=vp.center[1], zoom=vp.zoom)
        for key, vp in VIEWPORTS.items()
    ]


@router.get("/regions", summary="Regions with caption labels", response_model=RegionListOut)
def list_regions(store: JoinedDataStore = Depends(get_store)) -> RegionListOut:
    if not store.ready:
        raise HTTPException(status_code=503, detail=f"Data is {store.status.value}")
    regions = store.regions
    labels = store.labels.compute_all(regions)
    data = []
    for region in regions:
        label = labels.get(region.code)
        data.append(RegionOut(
            code=region.code,
            name=region.name,
            label=label.text if label else None,
            anchor_lat=label.anchor[0] if label else None,
            anchor_lon=label.anchor[1] if label else None,
            overseas=region.is_overseas,
        ))
    return RegionListOut(total=len(data), data=data)


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


@router.post("/sessions", summary="Open a quiz session", response_model=SessionOut, status_code=201)
def open_session(
    store: JoinedDataStore = Depends(get_store),
    registry: SessionRegistry = Depends(get_registry),
) -> SessionOut:
    session_id, session = registry.create(store)
    return _session_out(session_id, session)


@router.get("/sessions/{session_id}", summary="Session state", response_model=SessionOut)
def get_session(session_id: str, registry: SessionRegistry = Depends(get_registry)) -> SessionOut:
    return _session_out(session_id, _get_session(session_id, registry))


@router.delete("/sessions/{session_id}", summary="Close a session", status_code=204)
def close_session(session_id: str, registry: SessionRegistry = Depends(get_registry)) -> None:
    if not registry.drop(session_id):
        raise HTTPException(status_code=404, detail="Unknown session")


@router.post("/sessions/{session_id}/select", summary="Click a region", response_model=SessionOut)
def select_region(
    session_id: str,
    body: SelectIn,
    registry: SessionRegistry = Depends(get_registry),
) -> SessionOut:
    session = _get_session(session_id, registry)
    if session.store.ready and not session.store.contains(body.code):
        raise HTTPException(status_code=404, detail=f"Unknown region {body.code}")
    session.dispatch("click", body.code)
    return _session_out(session_id, session)


@router.post("/sessions/{session_id}/reveal", summary="Reveal the specialty", response_model=SessionOut)
def reveal(session_id: str, registry: SessionRegistry = Depends(get_registry)) -> SessionOut:
    session = _get_session(session_id, registry)
    session.reveal()
    return _session_out(session_id, session)


@router.post("/sessions/{session_id}/dismiss", summary="Dismiss the selection", response_model=SessionOut)
def dismiss(session_id: str, registry: SessionRegistry = Depends(get_registry)) -> SessionOut:
    session = _get_session(session_id, registry)
    session.dismiss()
    return _session_out(session_id, session)


@router.post("/sessions/{session_id}/navigate", summary="Move the camera", response_model=SessionOut)
def navigate(
    session_id: str,
    body: NavigateIn,
    registry: SessionRegistry = Depends(get_registry),
) -> SessionOut:
    session = _get_session(session_id, registry)
    session.navigate_to(body.viewport.value)
    return _session_out(session_id, session)


@router.get("/sessions/{session_id}/styles", summary="Region styles", response_model=list[StyleOut])
def region_styles(session_id: str, registry: SessionRegistry = Depends(get_registry)) -> list[StyleOut]:
    session = _get_session(session_id, registry)
    out = []
    for region in session.store.regions:
        style = session.style_for(region.code)
        out.append(StyleOut(code=region.code, **asdict(style)))
    return out


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@router.get("/health", summary="Health check", response_model=HealthOut)
def health(store: JoinedDataStore = Depends(get_store)) -> HealthOut:
    return HealthOut(
        status="ok",
        data=store.status.value,
        error=store.error,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
