"""Character network domain package.

Identity resolution, two-hop neighborhood expansion and view selection over
the read-only graph and biography datasets.
"""
from .normalize import (
    DatasetFormatError,
    canonical_category,
    normalize_graph,
    normalize_records,
)
from .store import NetworkStore, build_store
from .identity import (
    candidate_keys,
    classify_organization,
    find_record,
    find_record_by_reference,
    match_node,
    resolve_node,
    synthetic_node,
)
from .expansion import expand_neighborhood, link_identity
from .categories import CATEGORY_LABELS, characters_for_category, list_categories
from .biography import biography_panel
from .layout import LayoutState
from .legend import get_legend
from .selection import SelectionState, build_view

__all__ = [
    # normalize
    'DatasetFormatError', 'canonical_category', 'normalize_graph', 'normalize_records',
    # store
    'NetworkStore', 'build_store',
    # identity
    'candidate_keys', 'classify_organization', 'find_record', 'find_record_by_reference',
    'match_node', 'resolve_node', 'synthetic_node',
    # expansion
    'expand_neighborhood', 'link_identity',
    # categories
    'CATEGORY_LABELS', 'characters_for_category', 'list_categories',
    # panel, layout, legend
    'biography_panel', 'LayoutState', 'get_legend',
    # selection
    'SelectionState', 'build_view',
]
