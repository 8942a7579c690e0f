"""Desktop simulator for SPARKRUN sessions."""

from .window import SimulatorWindow, WindowConfig

__all__ = ["SimulatorWindow", "WindowConfig"]
