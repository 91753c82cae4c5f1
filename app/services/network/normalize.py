"""Normalize raw dataset payloads into canonical models.

Graph resource:  {"nodes": [...], "links": [...]}
Biography resource, any of:
  - {"categories": {"mob": {"characters": [...]}, ...}}
  - {"<id>": {...record...}, ...}            (flat mapping, category label per record)
  - [{...record...}, ...]

The Resolver and Expander only ever see the canonical shapes produced here.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pydantic import ValidationError

from app.models.network import Link, Node, PersonRecord

logger = logging.getLogger(__name__)

CATEGORY_KEYS = ("mob", "intelligence", "politics", "other")

# Display labels used by the flat legacy export, plus key aliases
_CATEGORY_ALIASES = {
    "mob": "mob",
    "organized crime": "mob",
    "organized_crime": "mob",
    "crime": "mob",
    "intelligence": "intelligence",
    "intelligence & law enforcement": "intelligence",
    "law enforcement": "intelligence",
    "politics": "politics",
    "political": "politics",
    "political figures": "politics",
    "other": "other",
    "other figures": "other",
}

_RECORD_FIELDS = (
    "birth_name",
    "nickname",
    "role",
    "organization",
    "era",
    "photo_path",
    "wikipedia_summary",
)


class DatasetFormatError(ValueError):
    """Raised when a resource does not have any accepted shape."""


def canonical_category(value: Optional[str]) -> str:
    key = (value or "").strip().lower()
    return _CATEGORY_ALIASES.get(key, "other")


def _clean(v: Any) -> Optional[str]:
    if v is None:
        return None
    s = str(v).strip()
    return s or None


def _endpoint(v: Any) -> Optional[str]:
    # Renderer exports sometimes replace endpoint ids with the node objects
    if isinstance(v, dict):
        v = v.get("id")
    return _clean(v)


def normalize_graph(raw: Any) -> Tuple[List[Node], List[Link]]:
    if not isinstance(raw, dict):
        raise DatasetFormatError("graph resource must be an object with 'nodes' and 'links'")
    raw_nodes = raw.get("nodes")
    raw_links = raw.get("links")
    if not isinstance(raw_nodes, list) or not isinstance(raw_links, list):
        raise DatasetFormatError("graph resource must contain 'nodes' and 'links' lists")

    nodes: List[Node] = []
    seen = set()
    for i, n in enumerate(raw_nodes):
        if not isinstance(n, dict) or not _clean(n.get("id")):
            raise DatasetFormatError(f"node #{i} has no id")
        nid = _clean(n["id"])
        if nid in seen:
            # first occurrence wins
            logger.warning("Duplicate node id %r ignored", nid)
            continue
        seen.add(nid)
        nodes.append(
            Node(
                id=nid,
                type=n.get("type"),
                role=_clean(n.get("role")),
                organization=_clean(n.get("organization")),
                era=_clean(n.get("era")),
            )
        )

    links: List[Link] = []
    for i, l in enumerate(raw_links):
        if not isinstance(l, dict):
            raise DatasetFormatError(f"link #{i} is not an object")
        src, tgt = _endpoint(l.get("source")), _endpoint(l.get("target"))
        if not src or not tgt:
            raise DatasetFormatError(f"link #{i} is missing source or target")
        links.append(
            Link(
                source=src,
                target=tgt,
                relationship=_clean(l.get("relationship")) or "",
                description=_clean(l.get("description")),
            )
        )
    return nodes, links


def _iter_raw_records(raw: Any) -> Iterable[Tuple[Dict[str, Any], str]]:
    if isinstance(raw, dict) and isinstance(raw.get("categories"), dict):
        for key, bucket in raw["categories"].items():
            chars = bucket.get("characters") if isinstance(bucket, dict) else None
            if not isinstance(chars, list):
                continue
            cat = canonical_category(key)
            for rec in chars:
                yield rec, cat
    elif isinstance(raw, dict):
        for key, rec in raw.items():
            if isinstance(rec, dict):
                rec = {"id": key, **rec}
            yield rec, canonical_category(rec.get("category") if isinstance(rec, dict) else None)
    elif isinstance(raw, list):
        for rec in raw:
            yield rec, canonical_category(rec.get("category") if isinstance(rec, dict) else None)
    else:
        raise DatasetFormatError("biography resource must be an object or a list")


def normalize_records(raw: Any) -> List[PersonRecord]:
    """Flatten any accepted biography shape into a list of records.

    Records missing both id and name are skipped; absent optional fields stay None.
    """
    records: List[PersonRecord] = []
    for rec, cat in _iter_raw_records(raw):
        if not isinstance(rec, dict):
            logger.warning("Skipping non-object character record: %r", rec)
            continue
        rid = _clean(rec.get("id"))
        name = _clean(rec.get("name"))
        if not rid and not name:
            logger.warning("Skipping character record without id or name")
            continue
        data = {f: _clean(rec.get(f)) for f in _RECORD_FIELDS}
        try:
            records.append(PersonRecord(id=rid or name, name=name or rid, category=cat, **data))
        except ValidationError as exc:
            logger.warning("Skipping malformed character record %r: %s", rid or name, exc)
    return records


def embedded_links(raw: Any) -> List[Link]:
    """Links carried inside records as connections.outgoing / connections.incoming."""
    out: List[Link] = []
    for rec, _cat in _iter_raw_records(raw):
        if not isinstance(rec, dict):
            continue
        conns = rec.get("connections")
        rid = _clean(rec.get("id")) or _clean(rec.get("name"))
        if not isinstance(conns, dict) or not rid:
            continue
        outgoing, incoming = conns.get("outgoing") or [], conns.get("incoming") or []
        if not isinstance(outgoing, list) or not isinstance(incoming, list):
            logger.warning("Skipping malformed connections of character record %r", rid)
            continue
        for c in outgoing:
            tgt = _endpoint(c.get("target")) if isinstance(c, dict) else None
            if tgt:
                out.append(Link(source=rid, target=tgt, relationship=_clean(c.get("relationship")) or "",
                                description=_clean(c.get("description"))))
        for c in incoming:
            src = _endpoint(c.get("source")) if isinstance(c, dict) else None
            if src:
                out.append(Link(source=src, target=rid, relationship=_clean(c.get("relationship")) or "",
                                description=_clean(c.get("description"))))
    return out


def merge_links(links: List[Link], extra: List[Link]) -> List[Link]:
    """Append extra links not already present as (source, target, relationship)."""
    seen = {(l.source, l.target, l.relationship) for l in links}
    merged = list(links)
    for l in extra:
        k = (l.source, l.target, l.relationship)
        if k not in seen:
            seen.add(k)
            merged.append(l)
    return merged
