import pytest
from pydantic import ValidationError

from app.models.network import Link, Node, NodeType, PersonRecord


def test_node_type_aliases_fold():
    assert Node(id="A", type="organized_crime").type == NodeType.CRIME
    assert Node(id="B", type="politics").type == NodeType.POLITICAL
    assert Node(id="C", type="Intelligence").type == NodeType.INTELLIGENCE
    assert Node(id="D", type="something else").type == NodeType.OTHER
    assert Node(id="E").type == NodeType.OTHER


def test_node_is_immutable():
    n = Node(id="A", type="crime")
    with pytest.raises(ValidationError):
        n.id = "B"


def test_link_and_record_defaults():
    l = Link(source="A", target="B")
    assert l.relationship == ""
    assert l.description is None
    r = PersonRecord(id="p1", name="Someone")
    assert r.category == "other"
    assert r.nickname is None
