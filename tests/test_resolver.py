import pytest

from pxref.editor.palette_store import PaletteStore
from pxref.editor.reference_state import ReferenceFrame
from pxref.editor.resolver import (
    ResolvedCell,
    checkerboard_color,
    reference_label,
    resolve,
    resolve_cell,
)
from pxref.core import config

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


@pytest.fixture
def palette():
    rows = [[(0, 0, 0, 0)] * 16 for _ in range(16)]
    rows[0][0] = RED
    rows[2][5] = BLUE  # x=5, y=2
    return PaletteStore.from_rows(rows)


def test_empty_cells_resolve_to_none_for_any_palette(palette):
    frame = ReferenceFrame()
    for x in range(16):
        for y in range(16):
            assert resolve(frame, x, y, palette) is None
            assert resolve(frame, x, y, PaletteStore()) is None


def test_assigned_reference_resolves_with_label(palette):
    frame = ReferenceFrame()
    frame.set(3, 3, (0, 0))

    assert resolve(frame, 3, 3, palette) == RED
    assert resolve_cell(frame, 3, 3, palette) == ResolvedCell(color=RED, label="1")


def test_label_counts_rows_of_sixteen(palette):
    frame = ReferenceFrame()
    frame.set(0, 0, (5, 2))

    assert resolve_cell(frame, 0, 0, palette).label == "38"
    assert reference_label((15, 15)) == "256"


def test_dangling_reference_renders_empty(palette):
    frame = ReferenceFrame()
    frame.set(1, 1, (9, 9))

    resolved = resolve_cell(frame, 1, 1, palette)
    assert resolved.is_empty
    assert resolved.label is None


def test_out_of_range_lookup_is_empty(palette):
    frame = ReferenceFrame()
    assert resolve(frame, 16, 0, palette) is None
    assert resolve(frame, -1, 3, palette) is None


def test_checkerboard_alternates():
    assert checkerboard_color(0, 0) == config.CHECKER_COLOR_1
    assert checkerboard_color(1, 0) == config.CHECKER_COLOR_2
    assert checkerboard_color(1, 1) == config.CHECKER_COLOR_1
