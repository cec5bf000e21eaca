"""Geometry constants for ladder layout."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LayoutConfig:
    """Fixed distances used by :func:`ladderview.layout.engine.layout_rung`.

    Attributes:
        left_rail_x: X of the left power rail.
        start_x: X where the first element begins.
        rail_y: Y of the main rail.
        rail_inset: Gap between the diagram edge and the ends of the power rails.
        contact_cell: Horizontal cell for contacts and coils.
        box_cell: Horizontal cell for data boxes (MOV, TON, ...).
        generic_cell: Horizontal cell for labeled generic boxes.
        leg_spacing: Vertical distance between sibling branch legs.
        fan_width: Horizontal run between a branch's main-rail end and its legs.
        right_margin: Space after the last element, including the right rail.
        bottom_margin: Space below the lowest drawn extent.
        min_height: Lower bound for the diagram height.
    """

    left_rail_x: float = 20
    start_x: float = 40
    rail_y: float = 45
    rail_inset: float = 10
    contact_cell: float = 100
    box_cell: float = 140
    generic_cell: float = 100
    leg_spacing: float = 60
    fan_width: float = 20
    right_margin: float = 50
    bottom_margin: float = 30
    min_height: float = 80

    def __post_init__(self) -> None:
        for name in ("contact_cell", "box_cell", "generic_cell", "leg_spacing", "fan_width"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be > 0")


DEFAULT_CONFIG = LayoutConfig()
