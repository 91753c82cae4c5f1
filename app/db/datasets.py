"""Read-only dataset loading and the process-wide store.

Both resources are fetched once, concurrently. The store is only published
when both have been fetched and normalized; until then callers get
DatasetsNotReady and the status stays "loading" (also after a failure:
there is no retry and no partial store).
"""
import asyncio
import json
import logging
import os
from typing import Any, Dict, List, Optional, Tuple

import httpx

from app.services.network.store import NetworkStore, build_store

logger = logging.getLogger(__name__)

_store: Optional[NetworkStore] = None
_errors: List[str] = []


class DatasetsNotReady(RuntimeError):
    """Raised while the graph or biography resource has not finished loading."""


def get_store() -> NetworkStore:
    if _store is None:
        raise DatasetsNotReady("Datasets are still loading")
    return _store


def set_store(store: Optional[NetworkStore]) -> None:
    """Publish (or clear, with None) the in-memory store."""
    global _store
    _store = store
    if store is None:
        _errors.clear()


def get_status() -> Dict[str, Any]:
    if _store is None:
        return {"status": "loading", "errors": list(_errors), "counts": None}
    return {"status": "ready", "errors": [], "counts": _store.counts()}


def _load_env_from_file():
    """Load environment variables from a .env file at the project root if present.

    Only sets variables that aren't already present in the process environment.
    """
    try:
        root_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
        env_path = os.path.join(root_dir, ".env")
        if not os.path.isfile(env_path):
            return
        with open(env_path, "r", encoding="utf-8") as f:
            for line in f:
                s = line.strip()
                if not s or s.startswith("#") or "=" not in s:
                    continue
                key, val = s.split("=", 1)
                key = key.strip()
                val = val.strip().strip('"').strip("'")
                if key and (key not in os.environ or not os.environ[key]):
                    os.environ[key] = val
    except OSError as exc:
        logger.warning("Could not read .env file: %s", exc)


def _get_dataset_config() -> Tuple[str, str, float]:
    """Return (graph source, character source, fetch timeout).

    Sources are file paths or http(s) URLs.
    """
    _load_env_from_file()
    graph_src = os.getenv("NETWORK_DATA_PATH") or os.path.join("data", "character_network.json")
    chars_src = os.getenv("CHARACTER_DATA_PATH") or os.path.join("data", "character_database.json")
    try:
        timeout = float(os.getenv("DATASET_FETCH_TIMEOUT") or 10)
    except ValueError:
        timeout = 10.0
    return graph_src, chars_src, timeout


def _read_json_file(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


async def fetch_resource(source: str, *, client: Optional[httpx.AsyncClient] = None, timeout: float = 10.0) -> Any:
    """Fetch and decode one JSON resource from a URL or a local file."""
    if source.startswith(("http://", "https://")):
        if client is not None:
            resp = await client.get(source)
            resp.raise_for_status()
            return resp.json()
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as c:
            resp = await c.get(source)
            resp.raise_for_status()
            return resp.json()
    return await asyncio.to_thread(_read_json_file, source)


async def load_datasets(
    graph_source: Optional[str] = None,
    character_source: Optional[str] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> Optional[NetworkStore]:
    """Fetch both resources concurrently and publish the store.

    Returns the store, or None when either resource failed (failures are
    logged and kept for get_status()).
    """
    cfg_graph, cfg_chars, timeout = _get_dataset_config()
    graph_source = graph_source or cfg_graph
    character_source = character_source or cfg_chars

    results = await asyncio.gather(
        fetch_resource(graph_source, client=client, timeout=timeout),
        fetch_resource(character_source, client=client, timeout=timeout),
        return_exceptions=True,
    )
    failed = False
    for source, res in zip((graph_source, character_source), results):
        if isinstance(res, Exception):
            failed = True
            logger.error("Failed to load %s: %s", source, res)
            _errors.append(f"{source}: {type(res).__name__}: {res}")
    if failed:
        return None

    raw_graph, raw_chars = results
    try:
        store = build_store(raw_graph, raw_chars)
    except Exception as exc:
        logger.exception("Malformed dataset")
        _errors.append(f"malformed dataset: {exc}")
        return None

    set_store(store)
    logger.info("Datasets loaded: %s", store.counts())
    return store
