# talent_engine/grid.py
from typing import Dict, Optional, Tuple

from talent_core.schemas import Assessment, LEVEL_RANK

LEVELS = ("low", "medium", "high")

# Cell copy shown on the board; keys are box_key values ("performance-potential")
BOX_METADATA: Dict[str, Dict[str, str]] = {
    "3-3": {"title": "Stars", "subtitle": "High performance • High potential"},
    "3-2": {"title": "Performance Leaders", "subtitle": "High performance • Medium potential"},
    "3-1": {"title": "Master Craft", "subtitle": "High performance • Developing potential"},
    "2-3": {"title": "Emerging Leaders", "subtitle": "Solid performance • High potential"},
    "2-2": {"title": "Steady Core", "subtitle": "Consistent contributors"},
    "2-1": {"title": "Core Specialists", "subtitle": "Reliable with targeted potential"},
    "1-3": {"title": "Rising Talent", "subtitle": "High potential • Needs results"},
    "1-2": {"title": "Evaluate Further", "subtitle": "Needs clarity & coaching"},
    "1-1": {"title": "Realign & Redirect", "subtitle": "High support required now"},
    "unassigned": {"title": "Needs Placement", "subtitle": "Awaiting calibration call"},
}

BOX_RENDER_ORDER = ["3-3", "3-2", "3-1", "2-3", "2-2", "2-1", "1-3", "1-2", "1-1", "unassigned"]


class InvalidCoordinate(ValueError):
    """Grid coordinates (or a box key) outside the 3x3 board."""


def to_box_key(performance: str, potential: str) -> str:
    return f"{LEVEL_RANK[performance]}-{LEVEL_RANK[potential]}"


def grid_position(performance: str, potential: str) -> Tuple[int, int]:
    return LEVEL_RANK[performance], LEVEL_RANK[potential]


def from_grid_coordinates(x: int, y: int) -> Tuple[str, str]:
    """Map 1-based (x, y) board coordinates back to (performance, potential)."""
    for v in (x, y):
        if isinstance(v, bool) or not isinstance(v, int) or v not in (1, 2, 3):
            raise InvalidCoordinate(f"grid coordinates must be in 1..3, got ({x!r}, {y!r})")
    return LEVELS[x - 1], LEVELS[y - 1]


def from_box_key(box_key: str) -> Tuple[str, str]:
    try:
        x, y = (int(part) for part in (box_key or "").split("-"))
    except ValueError:
        raise InvalidCoordinate(f"malformed box key: {box_key!r}")
    return from_grid_coordinates(x, y)


def build_assessment(performance: Optional[str], potential: Optional[str]) -> Assessment:
    return Assessment(performance=performance, potential=potential)


def box_metadata(box_key: Optional[str]) -> Dict[str, str]:
    return BOX_METADATA.get(box_key or "unassigned", BOX_METADATA["unassigned"])
