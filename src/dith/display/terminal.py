"""Terminal helpers: size detection and ANSI control sequences."""

from __future__ import annotations

import shutil

from pydantic import BaseModel, ConfigDict, Field

CLEAR_SCREEN: bytes = b"\x1b[2J\x1b[H"

FALLBACK_SIZE: tuple[int, int] = (80, 24)


class TermSize(BaseModel):
    """Terminal dimensions in character cells."""

    model_config = ConfigDict(frozen=True)

    cols: int = Field(ge=1)
    rows: int = Field(ge=1)


def get_terminal_size() -> TermSize:
    """Current size of the terminal attached to stdout.

    Falls back to 80x24 when stdout is not a terminal.
    """
    size = shutil.get_terminal_size(fallback=FALLBACK_SIZE)
    return TermSize(cols=max(size.columns, 1), rows=max(size.lines, 1))
