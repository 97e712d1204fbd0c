from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pxref.core import config
from pxref.editor.palette_store import Color, PaletteStore
from pxref.editor.reference_state import Reference, ReferenceFrame


@dataclass(frozen=True)
class ResolvedCell:
    color: Optional[Color] = None
    label: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.color is None


def reference_label(ref: Reference) -> str:
    """1-based palette slot number, counted row by row."""
    return str(ref[1] * config.GRID_SIZE + ref[0] + 1)


def resolve_reference(ref: Optional[Reference], palette: PaletteStore) -> Optional[Color]:
    if ref is None:
        return None
    return palette.get(ref[0], ref[1])


def resolve(frame: ReferenceFrame, x: int, y: int, palette: PaletteStore) -> Optional[Color]:
    """Follow the reference at ``frame[x][y]`` into the palette.

    A dangling reference (pointing at an empty palette slot) resolves to
    ``None`` just like an empty cell.
    """
    return resolve_reference(frame.get(x, y), palette)


def resolve_cell(frame: ReferenceFrame, x: int, y: int, palette: PaletteStore) -> ResolvedCell:
    ref = frame.get(x, y)
    color = resolve_reference(ref, palette)
    if color is None:
        return ResolvedCell()
    return ResolvedCell(color=color, label=reference_label(ref))


def checkerboard_color(x: int, y: int) -> tuple[int, int, int]:
    if (x + y) % 2 == 0:
        return config.CHECKER_COLOR_1
    return config.CHECKER_COLOR_2
