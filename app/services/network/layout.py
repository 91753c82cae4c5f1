from __future__ import annotations

from typing import Dict

from app.models.network import LayoutPosition


class LayoutState:
    """Renderer positions keyed by node id, kept apart from the Node models.

    fx/fy set means the node is pinned (being dragged or dropped in place).
    """

    def __init__(self):
        self._positions: Dict[str, LayoutPosition] = {}

    def move(self, node_id: str, x: float, y: float) -> LayoutPosition:
        pos = self._positions.get(node_id) or LayoutPosition()
        pos = pos.model_copy(update={"x": x, "y": y})
        self._positions[node_id] = pos
        return pos

    def pin(self, node_id: str, x: float, y: float) -> LayoutPosition:
        pos = LayoutPosition(x=x, y=y, fx=x, fy=y)
        self._positions[node_id] = pos
        return pos

    def release(self, node_id: str) -> bool:
        pos = self._positions.get(node_id)
        if pos is None:
            return False
        self._positions[node_id] = pos.model_copy(update={"fx": None, "fy": None})
        return True

    def reset(self) -> None:
        self._positions.clear()

    def snapshot(self) -> Dict[str, LayoutPosition]:
        return dict(self._positions)
