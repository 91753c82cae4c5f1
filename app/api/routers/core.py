from fastapi import APIRouter
from app.db.datasets import get_status
from app.services.network import get_legend

router = APIRouter(tags=["core"])


@router.get("/status")
def read_status():
    """Loading state of the graph and biography datasets."""
    return get_status()


@router.get("/legend")
def read_legend():
    return get_legend()
