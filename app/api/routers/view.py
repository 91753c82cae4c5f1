"""Single-session view state: what the renderer should currently display.

Sync endpoints run in FastAPI's threadpool; every access to the session
state holds _lock.
"""
import threading
from fastapi import APIRouter, HTTPException
from app.db.datasets import DatasetsNotReady, get_store
from app.models.network import CategoryRequest, LayoutUpdate, ModeRequest, SelectRequest
from app.services.network import (
    SelectionState,
    build_view,
    find_record,
    find_record_by_reference,
)

router = APIRouter(tags=["view"])

_state = SelectionState()
_lock = threading.Lock()


def get_selection_state() -> SelectionState:
    return _state


def reset_selection_state() -> None:
    global _state
    with _lock:
        _state = SelectionState()


def _store():
    try:
        return get_store()
    except DatasetsNotReady as exc:
        raise HTTPException(status_code=503, detail=str(exc))


@router.get("/view")
def api_get_view():
    store = _store()
    with _lock:
        return build_view(get_selection_state(), store)


@router.post("/view/select")
def api_select(body: SelectRequest):
    """Select a character from the sidebar (character_id) or a clicked node (node_id)."""
    store = _store()
    if body.character_id:
        record = find_record_by_reference(body.character_id, store.records)
    elif body.node_id:
        record = find_record(body.node_id, store.records)
    else:
        raise HTTPException(status_code=400, detail="character_id or node_id is required")
    if record is None:
        raise HTTPException(status_code=404, detail="Character not found")
    with _lock:
        state = get_selection_state()
        state.select(record)
        return build_view(state, store)


@router.post("/view/mode")
def api_set_mode(body: ModeRequest):
    """Switch view mode; asking for the individual view without a selection changes nothing."""
    store = _store()
    with _lock:
        state = get_selection_state()
        changed = state.set_mode(body.mode)
        view = build_view(state, store)
    return {"changed": changed, "view": view}


@router.post("/view/category")
def api_select_category(body: CategoryRequest):
    store = _store()
    try:
        with _lock:
            chars = get_selection_state().select_category(body.category, store.records)
    except ValueError as ve:
        raise HTTPException(status_code=404, detail=str(ve))
    return {"category": body.category.strip().lower(), "count": len(chars), "characters": chars}


@router.put("/view/layout/{node_id}")
def api_put_layout(node_id: str, body: LayoutUpdate):
    """Record a renderer position for a node currently on screen."""
    store = _store()
    with _lock:
        state = get_selection_state()
        view = build_view(state, store)
        if node_id not in {n.id for n in view.nodes}:
            raise HTTPException(status_code=404, detail="Node is not in the current view")
        if body.pinned:
            pos = state.layout.pin(node_id, body.x, body.y)
        else:
            pos = state.layout.move(node_id, body.x, body.y)
    return {"node_id": node_id, "position": pos}


@router.delete("/view/layout/{node_id}")
def api_release_layout(node_id: str):
    _store()
    with _lock:
        released = get_selection_state().layout.release(node_id)
    if not released:
        raise HTTPException(status_code=404, detail="No layout entry for node")
    return {"node_id": node_id, "released": True}
