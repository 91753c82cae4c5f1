"""Identity resolution between biography records and graph nodes.

Node ids in the graph are hand-entered and do not always equal record ids or
names. Matching therefore tries every known identifier of a person:

    candidate keys = id, name, birth_name, nickname   (empty/duplicates dropped)

Resolution strategy:
- Exact pass: first node (graph order) whose id equals a candidate key.
- Fuzzy pass: first node whose id contains a key or is contained in one.
- Neither: a synthetic node built from the record's own fields.

NOTE: the fuzzy pass is "first match wins". A short id such as "Lee" also
matches "Lee Harvey Oswald"; the graph order decides which node is used.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Union

from app.models.network import Node, NodeType, PersonRecord

logger = logging.getLogger(__name__)

# Exact organization names first, then case-insensitive keywords
_ORG_EXACT = {
    "Jewish Mob": NodeType.CRIME,
    "Russian Mafia": NodeType.CRIME,
    "Genovese Crime Family": NodeType.CRIME,
    "FBI": NodeType.INTELLIGENCE,
    "OSS": NodeType.INTELLIGENCE,
    "US Senate": NodeType.POLITICAL,
}

_ORG_KEYWORDS = (
    (("mob", "mafia", "crime family", "cosa nostra", "outfit", "syndicate", "murder, inc"), NodeType.CRIME),
    (("fbi", "oss", "cia", "kgb", "nsa", "intelligence", "bureau", "police", "secret service"), NodeType.INTELLIGENCE),
    (("senate", "congress", "house of representatives", "white house", "parliament", "governor", "mayor"),
     NodeType.POLITICAL),
)


def classify_organization(organization: Optional[str]) -> NodeType:
    """Map an organization name to a node type for synthetic nodes."""
    org = (organization or "").strip()
    if not org:
        return NodeType.OTHER
    if org in _ORG_EXACT:
        return _ORG_EXACT[org]
    low = org.lower()
    # short acronyms match whole words only, longer keywords anywhere
    tokens = set(low.replace(",", " ").replace(".", " ").replace("/", " ").split())
    for words, node_type in _ORG_KEYWORDS:
        for w in words:
            if (len(w) <= 4 and w in tokens) or (len(w) > 4 and w in low):
                return node_type
    return NodeType.OTHER


def candidate_keys(person: Union[PersonRecord, Node, str]) -> List[str]:
    if isinstance(person, str):
        raw: Sequence[Optional[str]] = (person,)
    elif isinstance(person, Node):
        raw = (person.id,)
    else:
        raw = (person.id, person.name, person.birth_name, person.nickname)
    keys: List[str] = []
    for k in raw:
        k = (k or "").strip()
        if k and k not in keys:
            keys.append(k)
    return keys


def is_exact_match(value: str, keys: Iterable[str]) -> bool:
    return bool(value) and value in keys


def is_fuzzy_match(value: str, keys: Iterable[str]) -> bool:
    if not value:
        return False
    return any(value in k or k in value for k in keys)


def endpoint_matches(value: str, keys: Sequence[str]) -> bool:
    """A link endpoint refers to the person if it matches exactly or by substring."""
    return is_exact_match(value, keys) or is_fuzzy_match(value, keys)


def match_node(keys: Sequence[str], nodes: Iterable[Node]) -> Optional[Node]:
    """Return the first node matching the keys, exact pass before fuzzy pass."""
    nodes = list(nodes)
    if not keys:
        return None
    for n in nodes:
        if is_exact_match(n.id, keys):
            return n
    for n in nodes:
        if is_fuzzy_match(n.id, keys):
            return n
    return None


def synthetic_node(record: PersonRecord) -> Node:
    return Node(
        id=record.name or record.id,
        type=classify_organization(record.organization),
        role=record.role,
        organization=record.organization,
        era=record.era,
    )


def resolve_node(person: Union[PersonRecord, Node, str], nodes: Iterable[Node]) -> Node:
    """Resolve a person reference to a graph node, never failing.

    A Node passes through untouched. A bare string that matches nothing
    becomes an untyped stand-in.
    """
    if isinstance(person, Node):
        return person
    found = match_node(candidate_keys(person), nodes)
    if found is not None:
        return found
    if isinstance(person, PersonRecord):
        logger.info("No graph node for %r; using synthetic node", person.id)
        return synthetic_node(person)
    return Node(id=person)


def find_record(search_id: str, records: Iterable[PersonRecord]) -> Optional[PersonRecord]:
    """Find the biography record behind a graph node id (exact, then partial)."""
    q = (search_id or "").strip()
    if not q:
        return None
    records = list(records)
    for r in records:
        if r.id == q or r.name == q:
            return r
    for r in records:
        if q in r.name or r.name in q or q in r.id or r.id in q:
            return r
    return None


def find_record_by_reference(ref: str, records: Iterable[PersonRecord]) -> Optional[PersonRecord]:
    """Look a record up by any of its candidate keys, exact only."""
    q = (ref or "").strip()
    if not q:
        return None
    for r in records:
        if q in candidate_keys(r):
            return r
    return None
