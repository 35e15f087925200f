"""Raw OpenRadar JSON -> Radar.

Every field has a fallback, so an unexpected or evolving upstream payload
still produces a displayable Radar instead of an error.
"""

from typing import Any

from sonar.models import Classification, Product, Radar, Reproducibility
from sonar.sections import extract_sections


def _string(raw: dict[str, Any], key: str) -> str:
    value = raw.get(key)
    return value if isinstance(value, str) else ""


def map_radar_fields(raw: dict[str, Any]) -> Radar:
    """Build a Radar from the ``result`` object of an OpenRadar response.

    The returned radar has no id and no attachments.
    """
    description = _string(raw, "description")
    sections = extract_sections(description)

    # Without a Notes section the whole description is kept as notes
    notes = sections["notes"]
    if notes is None:
        notes = description
    if not notes:
        notes = " "

    return Radar(
        classification=Classification.from_name(_string(raw, "classification")),
        product=Product.from_name(_string(raw, "product")),
        reproducibility=Reproducibility.from_name(_string(raw, "reproducible")),
        title=_string(raw, "title"),
        description=sections["description"] or "",
        steps=sections["steps"] or "",
        expected=sections["expected"] or "",
        actual=sections["actual"] or "",
        configuration=sections["configuration"] or "",
        version=_string(raw, "product_version"),
        notes=notes,
    )
