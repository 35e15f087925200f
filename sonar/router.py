"""Request builders for the OpenRadar API.

Routes:
    read(radar_id)   GET  /api/radar?number=<id>
    create(radar)    POST /api/radars/add
"""

from dataclasses import dataclass, field
from typing import Any

from sonar.models import Radar
from sonar.sections import compose_description


@dataclass(frozen=True)
class Route:
    method: str
    path: str
    params: dict[str, Any] = field(default_factory=dict)
    data: dict[str, Any] = field(default_factory=dict)


def read(radar_id: int) -> Route:
    return Route("GET", "/api/radar", params={"number": radar_id})


def create(radar: Radar) -> Route:
    """Form payload for a radar that already carries its id."""
    return Route(
        "POST",
        "/api/radars/add",
        data={
            "number":          radar.id,
            "title":           radar.title,
            "product":         radar.product.value,
            "product_version": radar.version,
            "classification":  radar.classification.value,
            "reproducible":    radar.reproducibility.value,
            "status":          "Open",
            "description":     compose_description(radar),
        },
    )
