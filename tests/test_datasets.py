import asyncio
import json

import httpx
import pytest

from app.db import datasets
from app.db.datasets import DatasetsNotReady, get_status, get_store, load_datasets, set_store

GRAPH = {"nodes": [{"id": "A"}, {"id": "B"}], "links": [{"source": "A", "target": "B", "relationship": "ally"}]}
CHARS = {"categories": {"mob": {"characters": [{"id": "A", "name": "A"}]}}}


@pytest.fixture(autouse=True)
def _clean_store():
    set_store(None)
    yield
    set_store(None)


def _write(tmp_path, name, payload):
    p = tmp_path / name
    p.write_text(payload if isinstance(payload, str) else json.dumps(payload), encoding="utf-8")
    return str(p)


def test_store_not_ready_before_load():
    with pytest.raises(DatasetsNotReady):
        get_store()
    assert get_status()["status"] == "loading"


def test_load_from_files(tmp_path):
    g = _write(tmp_path, "graph.json", GRAPH)
    c = _write(tmp_path, "chars.json", CHARS)
    store = asyncio.run(load_datasets(g, c))
    assert store is get_store()
    status = get_status()
    assert status["status"] == "ready"
    assert status["counts"] == {"nodes": 2, "links": 1, "characters": 1}


def test_one_failed_resource_keeps_loading(tmp_path):
    g = _write(tmp_path, "graph.json", GRAPH)
    missing = str(tmp_path / "missing.json")
    assert asyncio.run(load_datasets(g, missing)) is None
    status = get_status()
    assert status["status"] == "loading"
    assert any("missing.json" in e for e in status["errors"])
    with pytest.raises(DatasetsNotReady):
        get_store()


def test_malformed_json_keeps_loading(tmp_path):
    g = _write(tmp_path, "graph.json", "{not json")
    c = _write(tmp_path, "chars.json", CHARS)
    assert asyncio.run(load_datasets(g, c)) is None
    assert get_status()["status"] == "loading"


def test_malformed_shape_keeps_loading(tmp_path):
    g = _write(tmp_path, "graph.json", {"nodes": "oops"})
    c = _write(tmp_path, "chars.json", CHARS)
    assert asyncio.run(load_datasets(g, c)) is None
    assert any("malformed" in e for e in get_status()["errors"])


def test_load_from_urls_with_mock_transport():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/graph.json":
            return httpx.Response(200, json=GRAPH)
        if request.url.path == "/chars.json":
            return httpx.Response(200, json=CHARS)
        return httpx.Response(404)

    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await load_datasets("http://data.test/graph.json", "http://data.test/chars.json", client=client)

    store = asyncio.run(run())
    assert store is not None
    assert [n.id for n in store.nodes] == ["A", "B"]


def test_http_error_keeps_loading():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500)

    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await load_datasets("http://data.test/graph.json", "http://data.test/chars.json", client=client)

    assert asyncio.run(run()) is None
    assert len(get_status()["errors"]) == 2


def test_config_defaults_and_env(monkeypatch):
    monkeypatch.setattr(datasets, "_load_env_from_file", lambda: None)
    monkeypatch.delenv("NETWORK_DATA_PATH", raising=False)
    monkeypatch.setenv("CHARACTER_DATA_PATH", "https://example.org/chars.json")
    monkeypatch.setenv("DATASET_FETCH_TIMEOUT", "bogus")
    graph_src, chars_src, timeout = datasets._get_dataset_config()
    assert graph_src.endswith("character_network.json")
    assert chars_src == "https://example.org/chars.json"
    assert timeout == 10.0


def test_malformed_connections_still_load(tmp_path):
    g = _write(tmp_path, "graph.json", GRAPH)
    c = _write(tmp_path, "chars.json", [{"id": "A", "name": "A", "connections": {"outgoing": 5}}])
    store = asyncio.run(load_datasets(g, c))
    assert store is not None
    assert get_status()["status"] == "ready"


def test_unexpected_build_error_is_recorded(tmp_path, monkeypatch):
    def broken_build_store(raw_graph, raw_chars):
        raise TypeError("'int' object is not iterable")

    monkeypatch.setattr(datasets, "build_store", broken_build_store)
    g = _write(tmp_path, "graph.json", GRAPH)
    c = _write(tmp_path, "chars.json", CHARS)
    assert asyncio.run(load_datasets(g, c)) is None
    status = get_status()
    assert status["status"] == "loading"
    assert any("not iterable" in e for e in status["errors"])
