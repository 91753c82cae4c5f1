from typing import Any, Dict, List

from app.models.network import PersonRecord
from app.services.network.normalize import CATEGORY_KEYS

ALL = "all"

CATEGORY_LABELS = {
    ALL: "All Characters",
    "mob": "Organized Crime",
    "intelligence": "Intelligence & Law Enforcement",
    "politics": "Political Figures",
    "other": "Other Figures",
}


def characters_for_category(category: str, records: List[PersonRecord]) -> List[PersonRecord]:
    """Records for a sidebar category. An empty list is a valid answer.

    Raises ValueError for keys outside CATEGORY_LABELS.
    """
    key = (category or "").strip().lower()
    if key not in CATEGORY_LABELS:
        raise ValueError(f"Unknown category: {category}")
    if key == ALL:
        return list(records)
    return [r for r in records if r.category == key]


def list_categories(records: List[PersonRecord]) -> List[Dict[str, Any]]:
    out = [{"key": ALL, "label": CATEGORY_LABELS[ALL], "count": len(records)}]
    for key in CATEGORY_KEYS:
        out.append({
            "key": key,
            "label": CATEGORY_LABELS[key],
            "count": sum(1 for r in records if r.category == key),
        })
    return out
