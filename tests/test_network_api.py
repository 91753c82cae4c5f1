import os

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.db.datasets import set_store
from app.services.network import build_store
from app.api.routers.view import reset_selection_state

GRAPH = {
    "nodes": [
        {"id": "Meyer Lansky", "type": "organized_crime", "organization": "Jewish Mob"},
        {"id": "Lucky Luciano", "type": "organized_crime"},
        {"id": "Frank Costello", "type": "organized_crime"},
        {"id": "Vito Genovese", "type": "organized_crime"},
    ],
    "links": [
        {"source": "Meyer Lansky", "target": "Lucky Luciano", "relationship": "business_partner"},
        {"source": "Lucky Luciano", "target": "Meyer Lansky", "relationship": "business_partner"},
        {"source": "Lucky Luciano", "target": "Frank Costello", "relationship": "successor"},
        {"source": "Frank Costello", "target": "Vito Genovese", "relationship": "hunted"},
    ],
}
CHARS = {"categories": {
    "mob": {"characters": [
        {"id": "Meyer Lansky", "name": "Meyer Lansky", "organization": "Jewish Mob"},
        {"id": "charles_luciano", "name": "Charles Luciano", "nickname": "Lucky Luciano"},
    ]},
    "intelligence": {"characters": [
        {"id": "anslinger", "name": "Harry Anslinger", "organization": "FBI", "role": "Commissioner"},
    ]},
}}


@pytest.fixture()
def client():
    set_store(build_store(GRAPH, CHARS))
    reset_selection_state()
    yield TestClient(app)
    set_store(None)
    reset_selection_state()


def test_endpoints_report_loading_until_ready():
    set_store(None)
    c = TestClient(app)
    assert c.get("/status").json()["status"] == "loading"
    assert c.get("/network").status_code == 503
    assert c.get("/view").status_code == 503
    assert c.get("/categories").status_code == 503


def test_status_and_legend(client):
    data = client.get("/status").json()
    assert data["status"] == "ready"
    assert data["counts"]["nodes"] == 4
    legend = client.get("/legend").json()
    assert {t["type"] for t in legend["node_types"]} == {"crime", "intelligence", "political", "other"}


def test_full_network(client):
    data = client.get("/network").json()
    assert len(data["nodes"]) == 4
    assert len(data["links"]) == 4


def test_person_network_two_hops(client):
    resp = client.get("/network/Meyer Lansky")
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["seed"] == "Meyer Lansky"
    assert {n["id"] for n in data["nodes"]} == {"Meyer Lansky", "Lucky Luciano", "Frank Costello"}
    # the reverse business_partner link collapses into one
    assert len([l for l in data["links"] if l["relationship"] == "business_partner"]) == 1


def test_person_network_by_record_id_and_synthetic(client):
    data = client.get("/network/charles_luciano").json()
    assert data["seed"] == "Lucky Luciano"
    data = client.get("/network/anslinger").json()
    assert data["seed"] == "Harry Anslinger"
    assert data["nodes"][0]["type"] == "intelligence"
    assert data["links"] == []


def test_person_network_unknown(client):
    assert client.get("/network/Nobody").status_code == 404


def test_categories_and_empty_category(client):
    cats = {c["key"]: c["count"] for c in client.get("/categories").json()["categories"]}
    assert cats == {"all": 3, "mob": 2, "intelligence": 1, "politics": 0, "other": 0}
    resp = client.get("/categories/politics/characters")
    assert resp.status_code == 200
    assert resp.json()["characters"] == []
    assert client.get("/categories/wizards/characters").status_code == 404


def test_character_panel(client):
    data = client.get("/characters/Lucky Luciano").json()
    assert data["character"]["id"] == "charles_luciano"
    assert data["panel"] == {"name": "Charles Luciano", "nickname": "Lucky Luciano"}
    assert client.get("/characters/Nobody").status_code == 404


def test_sample_data_files_load():
    import asyncio
    from app.db.datasets import load_datasets, get_store

    g = os.path.join("data", "character_network.json")
    c = os.path.join("data", "character_database.json")
    assert os.path.isfile(g) and os.path.isfile(c)
    try:
        store = asyncio.run(load_datasets(g, c))
        assert store is get_store()
        assert store.counts()["characters"] >= 10
    finally:
        set_store(None)
