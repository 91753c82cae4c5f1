from typing import Any, Dict

from app.models.network import NodeType

NODE_TYPE_LEGEND = [
    {"type": NodeType.CRIME.value, "label": "Organized Crime", "color": "#ef4444"},
    {"type": NodeType.INTELLIGENCE.value, "label": "Intelligence", "color": "#3b82f6"},
    {"type": NodeType.POLITICAL.value, "label": "Political", "color": "#22c55e"},
    {"type": NodeType.OTHER.value, "label": "Other", "color": "#6b7280"},
]

RELATIONSHIP_COLORS = {
    "business_partner": "#f97316",
    "mentor": "#8b5cf6",
    "underboss": "#dc2626",
    "boss": "#991b1b",
    "killed": "#7f1d1d",
    "successor": "#059669",
    "close_associate": "#06b6d4",
    "family": "#ec4899",
    "social": "#10b981",
    "investigated": "#3b82f6",
    "hunted": "#6366f1",
}

DEFAULT_RELATIONSHIP_COLOR = "#999999"


def get_legend() -> Dict[str, Any]:
    return {
        "node_types": NODE_TYPE_LEGEND,
        "relationships": [{"relationship": k, "color": v} for k, v in RELATIONSHIP_COLORS.items()],
        "default_relationship_color": DEFAULT_RELATIONSHIP_COLOR,
    }
