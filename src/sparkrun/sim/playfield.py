"""Playfield geometry derived from the display surface."""

import math
from dataclasses import dataclass


@dataclass
class Playfield:
    """Surface size plus the layout fractions of the active profile.

    Everything that depends on the surface size (floor line, actor anchor,
    flying band) is computed from here so a resize only has to update
    width, height and scale.
    """

    width: float
    height: float
    scale: float = 1.0
    floor_line: float = 0.865
    anchor_x: float = 0.22
    anchor_y: float = 0.5
    air_band: tuple[float, float] = (0.48, 0.66)

    @property
    def floor_y(self) -> float:
        return math.floor(self.height * self.floor_line)

    @property
    def actor_x(self) -> float:
        return math.floor(self.width * self.anchor_x)

    @property
    def actor_cy(self) -> float:
        return self.height * self.anchor_y

    @property
    def band(self) -> tuple[int, int]:
        return (
            math.floor(self.height * self.air_band[0]),
            math.floor(self.height * self.air_band[1]),
        )

    def resize(self, width: float, height: float, scale: float = 1.0) -> bool:
        """Apply a new surface size. Degenerate sizes are ignored."""
        if not (width > 0 and height > 0 and scale > 0):
            return False
        self.width = width
        self.height = height
        self.scale = scale
        return True

    @classmethod
    def for_profile(cls, profile, width: float, height: float, scale: float = 1.0) -> "Playfield":
        return cls(
            width=width,
            height=height,
            scale=scale,
            floor_line=profile.floor_line,
            anchor_x=profile.anchor_x,
            anchor_y=profile.anchor_y,
            air_band=profile.air_band,
        )
