"""View-mode state machine.

States:
    full        whole graph, no selection (initial)
    individual  two-hop neighborhood of the selected record

Transitions:
    select(record)          full|individual -> individual (selection replaced)
    set_mode(FULL)          individual -> full, selection cleared
    set_mode(INDIVIDUAL)    only when a selection exists; otherwise a no-op
"""
from __future__ import annotations

from typing import List, Optional

from app.models.network import PersonRecord, ViewMode, ViewPayload
from app.services.network.biography import biography_panel
from app.services.network.categories import characters_for_category
from app.services.network.expansion import expand_neighborhood
from app.services.network.layout import LayoutState
from app.services.network.store import NetworkStore


class SelectionState:
    def __init__(self):
        self.mode: ViewMode = ViewMode.FULL
        self.selected: Optional[PersonRecord] = None
        self.category: Optional[str] = None
        self.layout = LayoutState()

    @property
    def is_individual(self) -> bool:
        return self.mode == ViewMode.INDIVIDUAL and self.selected is not None

    def select(self, record: PersonRecord) -> None:
        if self.selected is None or self.selected.id != record.id:
            self.layout.reset()
        self.selected = record
        self.mode = ViewMode.INDIVIDUAL

    def set_mode(self, mode: ViewMode) -> bool:
        """Switch view mode. Returns False when the switch is not allowed."""
        if mode == ViewMode.FULL:
            if self.mode != ViewMode.FULL:
                self.layout.reset()
            self.mode = ViewMode.FULL
            self.selected = None
            return True
        if self.selected is None:
            return False
        self.mode = ViewMode.INDIVIDUAL
        return True

    def select_category(self, category: str, records: List[PersonRecord]) -> List[PersonRecord]:
        """Remember the sidebar category and return its records (may be empty)."""
        chars = characters_for_category(category, records)
        self.category = category.strip().lower()
        return chars


def build_view(state: SelectionState, store: NetworkStore) -> ViewPayload:
    if state.is_individual:
        graph = expand_neighborhood(state.selected, store.nodes, store.links)
        title = f"{state.selected.name} Network"
        panel = biography_panel(state.selected)
    else:
        graph = store.full_graph()
        title = "Complete Network"
        panel = None
    shown = {n.id for n in graph.nodes}
    layout = {nid: pos for nid, pos in state.layout.snapshot().items() if nid in shown}
    return ViewPayload(
        mode=state.mode,
        is_individual=state.is_individual,
        title=title,
        selected=state.selected,
        panel=panel,
        nodes=graph.nodes,
        links=graph.links,
        layout=layout,
    )
