"""Terminal output for dith.

Public API:
    RenderLoop -- Frame pipeline -> converter -> terminal
    get_terminal_size -- Current terminal size in cells
"""

from dith.display.loop import FrameTiming, RenderLoop
from dith.display.terminal import CLEAR_SCREEN, TermSize, get_terminal_size

__all__ = [
    "CLEAR_SCREEN",
    "FrameTiming",
    "RenderLoop",
    "TermSize",
    "get_terminal_size",
]
