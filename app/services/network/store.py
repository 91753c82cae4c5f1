from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from app.models.network import Link, Node, PersonRecord, Subgraph
from app.services.network.normalize import (
    embedded_links,
    merge_links,
    normalize_graph,
    normalize_records,
)


@dataclass
class NetworkStore:
    """Read-only in-memory index over the graph and the biography store."""

    nodes: List[Node]
    links: List[Link]
    records: List[PersonRecord]
    node_index: Dict[str, Node] = field(init=False)

    def __post_init__(self):
        self.node_index = {n.id: n for n in self.nodes}

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.node_index.get(node_id)

    def full_graph(self) -> Subgraph:
        # Dataset links may name ids with no node; the renderer cannot draw those
        links = [l for l in self.links if l.source in self.node_index and l.target in self.node_index]
        return Subgraph(nodes=list(self.nodes), links=links)

    def counts(self) -> Dict[str, int]:
        return {"nodes": len(self.nodes), "links": len(self.links), "characters": len(self.records)}


def build_store(raw_graph: Any, raw_characters: Any) -> NetworkStore:
    """Normalize both raw resources and index them. Raises DatasetFormatError."""
    nodes, links = normalize_graph(raw_graph)
    records = normalize_records(raw_characters)
    links = merge_links(links, embedded_links(raw_characters))
    return NetworkStore(nodes=nodes, links=links, records=records)
