from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Set, Tuple, Union

from app.models.network import Link, Node, PersonRecord, Subgraph
from app.services.network.identity import candidate_keys, endpoint_matches, resolve_node

logger = logging.getLogger(__name__)


def link_identity(link: Link) -> Tuple[str, str, str]:
    """Unordered endpoint pair plus relationship; A->B and B->A collapse."""
    a, b = sorted((link.source, link.target))
    return a, b, link.relationship


def expand_neighborhood(
    person: Union[PersonRecord, Node, str],
    nodes: Sequence[Node],
    links: Sequence[Link],
) -> Subgraph:
    """Build the two-hop subgraph around a person.

    Steps:
    - Seed with the resolved node (or its synthetic stand-in).
    - Order 1: every link with an endpoint matching any candidate key of the
      person. Links stay as they are in the graph; only a matching endpoint
      with no node of its own is re-pointed at the seed.
    - Order 2: links touching an order-1 node where neither endpoint is the
      seed. Expansion stops here.

    Links whose far endpoint has no node in the graph are dropped, so every
    returned link has both endpoints in the returned node set.
    """
    node_index: Dict[str, Node] = {n.id: n for n in nodes}
    seed = resolve_node(person, nodes)
    keys = candidate_keys(person)
    if seed.id not in keys:
        keys.append(seed.id)

    out_nodes: List[Node] = [seed]
    present: Set[str] = {seed.id}
    out_links: List[Link] = []
    seen_links: Set[Tuple[str, str, str]] = set()

    def add_link(link: Link) -> None:
        k = link_identity(link)
        if k not in seen_links:
            seen_links.add(k)
            out_links.append(link)

    def add_node(node_id: str) -> Optional[Node]:
        if node_id in present:
            return node_index.get(node_id) or seed
        node = node_index.get(node_id)
        if node is None:
            return None
        present.add(node_id)
        out_nodes.append(node)
        return node

    # Order 1
    first_order: List[str] = []
    for link in links:
        hits = (endpoint_matches(link.source, keys), endpoint_matches(link.target, keys))
        if not any(hits):
            continue
        ends: List[Optional[str]] = []
        for end, hit in zip((link.source, link.target), hits):
            if end == seed.id or end in node_index:
                ends.append(end)
            elif hit:
                # alias text with no node of its own stands for the seed
                ends.append(seed.id)
            else:
                ends.append(None)
        if None in ends:
            logger.debug("Dropping link %s -> %s: endpoint has no node", link.source, link.target)
            continue
        for end, hit in zip(ends, hits):
            add_node(end)
            if not hit and end != seed.id and end not in first_order:
                first_order.append(end)
        if ends == [link.source, link.target]:
            add_link(link)
        else:
            add_link(link.model_copy(update={"source": ends[0], "target": ends[1]}))

    # Order 2
    for node_id in first_order:
        for link in links:
            if link.source != node_id and link.target != node_id:
                continue
            # links touching the seed were taken in order 1
            if endpoint_matches(link.source, keys) or endpoint_matches(link.target, keys):
                continue
            other = link.target if link.source == node_id else link.source
            if add_node(other) is None:
                logger.debug("Dropping link %s -> %s: no node %r", link.source, link.target, other)
                continue
            add_link(link)

    return Subgraph(nodes=out_nodes, links=out_links)
