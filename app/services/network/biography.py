from typing import Any, Dict

from app.models.network import PersonRecord


def biography_panel(record: PersonRecord) -> Dict[str, Any]:
    """Fields for the biography panel; absent fields are left out entirely.

    birth_name is only shown when it differs from the display name.
    """
    panel: Dict[str, Any] = {"name": record.name}
    if record.birth_name and record.birth_name != record.name:
        panel["birth_name"] = record.birth_name
    for f in ("role", "organization", "era", "nickname"):
        v = getattr(record, f)
        if v:
            panel[f] = v
    if record.photo_path:
        panel["photo"] = record.photo_path
    if record.wikipedia_summary:
        panel["summary"] = record.wikipedia_summary
    return panel
