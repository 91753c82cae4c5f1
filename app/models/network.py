from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NodeType(str, Enum):
    CRIME = "crime"
    INTELLIGENCE = "intelligence"
    POLITICAL = "political"
    OTHER = "other"


# Raw type labels seen across dataset exports
NODE_TYPE_ALIASES = {
    "crime": NodeType.CRIME,
    "organized_crime": NodeType.CRIME,
    "mob": NodeType.CRIME,
    "intelligence": NodeType.INTELLIGENCE,
    "political": NodeType.POLITICAL,
    "politics": NodeType.POLITICAL,
    "other": NodeType.OTHER,
}


class Node(BaseModel):
    """A person in the relationship graph. Immutable once loaded."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique node id (usually the display name)")
    type: NodeType = Field(NodeType.OTHER, description="crime|intelligence|political|other")
    role: Optional[str] = None
    organization: Optional[str] = None
    era: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def _fold_type(cls, v: Any) -> NodeType:
        if isinstance(v, NodeType):
            return v
        key = str(v or "").strip().lower().replace(" ", "_")
        return NODE_TYPE_ALIASES.get(key, NodeType.OTHER)


class Link(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str
    target: str
    relationship: str = ""
    description: Optional[str] = None


class PersonRecord(BaseModel):
    """Biography store entry. Correlated to a Node by identity matching only."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    birth_name: Optional[str] = None
    nickname: Optional[str] = None
    role: Optional[str] = None
    organization: Optional[str] = None
    era: Optional[str] = None
    photo_path: Optional[str] = None
    wikipedia_summary: Optional[str] = None
    category: str = "other"


class Subgraph(BaseModel):
    nodes: List[Node] = Field(default_factory=list)
    links: List[Link] = Field(default_factory=list)


class ViewMode(str, Enum):
    FULL = "full"
    INDIVIDUAL = "individual"


class LayoutPosition(BaseModel):
    x: Optional[float] = None
    y: Optional[float] = None
    fx: Optional[float] = None
    fy: Optional[float] = None


class ViewPayload(BaseModel):
    """What the renderer draws for the current selection."""

    mode: ViewMode
    is_individual: bool
    title: str
    selected: Optional[PersonRecord] = None
    panel: Optional[Dict[str, Any]] = None
    nodes: List[Node] = Field(default_factory=list)
    links: List[Link] = Field(default_factory=list)
    layout: Dict[str, LayoutPosition] = Field(default_factory=dict)


class SelectRequest(BaseModel):
    """Select by biography record reference or by clicked graph node id."""

    character_id: Optional[str] = Field(None, description="Record id, name, birth name or nickname")
    node_id: Optional[str] = Field(None, description="Id of a clicked graph node")


class ModeRequest(BaseModel):
    mode: ViewMode


class CategoryRequest(BaseModel):
    category: str = Field(..., description="all|mob|intelligence|politics|other")


class LayoutUpdate(BaseModel):
    x: float
    y: float
    pinned: bool = Field(True, description="Keep the node fixed at (x, y)")
