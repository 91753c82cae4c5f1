from fastapi import APIRouter, HTTPException
from app.db.datasets import DatasetsNotReady, get_store
from app.services.network import (
    CATEGORY_LABELS,
    biography_panel,
    characters_for_category,
    find_record_by_reference,
    list_categories,
)

router = APIRouter(tags=["characters"])


def _store():
    try:
        return get_store()
    except DatasetsNotReady as exc:
        raise HTTPException(status_code=503, detail=str(exc))


@router.get("/categories")
def api_list_categories():
    return {"categories": list_categories(_store().records)}


@router.get("/categories/{key}/characters")
def api_get_category_characters(key: str):
    """Characters of a category. An empty list means "no characters found"."""
    store = _store()
    try:
        chars = characters_for_category(key, store.records)
    except ValueError as ve:
        raise HTTPException(status_code=404, detail=str(ve))
    k = key.strip().lower()
    return {"category": k, "label": CATEGORY_LABELS[k], "count": len(chars), "characters": chars}


@router.get("/characters/{ref}")
def api_get_character(ref: str):
    record = find_record_by_reference(ref, _store().records)
    if record is None:
        raise HTTPException(status_code=404, detail="Character not found")
    return {"character": record, "panel": biography_panel(record)}
