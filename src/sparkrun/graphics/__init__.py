"""Frame-buffer drawing for SPARKRUN snapshots."""

from .primitives import Buffer, Color, new_buffer, fill, draw_rect, draw_circle, draw_hline
from .renderer import Palette, SnapshotRenderer
from .effects import ParticleEffects

__all__ = [
    "Buffer",
    "Color",
    "new_buffer",
    "fill",
    "draw_rect",
    "draw_circle",
    "draw_hline",
    "Palette",
    "SnapshotRenderer",
    "ParticleEffects",
]
