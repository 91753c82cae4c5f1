from fastapi import APIRouter, HTTPException
from app.db.datasets import DatasetsNotReady, get_store
from app.services.network import expand_neighborhood, find_record_by_reference

router = APIRouter(tags=["network"])


@router.get("/network")
def api_get_full_network():
    """Return the whole relationship graph."""
    try:
        store = get_store()
    except DatasetsNotReady as exc:
        raise HTTPException(status_code=503, detail=str(exc))
    return store.full_graph()


@router.get("/network/{ref}")
def api_get_person_network(ref: str):
    """Return the two-hop network around a character (record reference or node id)."""
    try:
        store = get_store()
    except DatasetsNotReady as exc:
        raise HTTPException(status_code=503, detail=str(exc))
    record = find_record_by_reference(ref, store.records)
    if record is None and store.get_node(ref) is None:
        raise HTTPException(status_code=404, detail="Character not found")
    try:
        graph = expand_neighborhood(record or store.get_node(ref), store.nodes, store.links)
    except Exception as exc:
        raise HTTPException(status_code=500, detail=f"Failed to build character network: {exc}")
    return {"seed": graph.nodes[0].id, "nodes": graph.nodes, "links": graph.links}
