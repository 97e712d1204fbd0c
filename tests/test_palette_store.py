import struct
import zlib

import pygame
import pytest

from pxref.core.errors import DecodeError
from pxref.editor.palette_store import PaletteStore, transpose

RED = (255, 0, 0, 255)
CLEAR = (0, 0, 0, 0)


def _surface(size, pixels):
    surface = pygame.Surface(size, pygame.SRCALPHA)
    surface.fill(CLEAR)
    for pos, color in pixels.items():
        surface.set_at(pos, color)
    return surface


def test_two_by_two_palette_keeps_only_opaque_pixel():
    palette = PaletteStore.from_surface(_surface((2, 2), {(0, 0): RED}))

    assert palette.get(0, 0) == RED
    assert palette.get(0, 1) is None
    assert palette.get(1, 0) is None
    assert palette.get(1, 1) is None
    # Cells beyond the source image stay empty.
    assert palette.get(15, 15) is None


def test_rows_are_transposed_into_column_addressing():
    a, b, c = (1, 1, 1, 255), (2, 2, 2, 255), (3, 3, 3, 255)
    d, e, f = (4, 4, 4, 255), (5, 5, 5, 255), (6, 6, 6, 255)
    palette = PaletteStore.from_rows([[a, b, c], [d, e, f]])

    assert palette.grid[2][0] == c
    assert palette.grid[0][1] == d
    assert palette.get(1, 1) == e
    assert palette.get(2, 1) == f


def test_partial_alpha_becomes_opaque_and_zero_alpha_is_empty():
    palette = PaletteStore.from_rows([[(10, 20, 30, 128), (40, 50, 60, 0), (7, 8, 9)]])

    assert palette.get(0, 0) == (10, 20, 30, 255)
    assert palette.get(1, 0) is None
    assert palette.get(2, 0) == (7, 8, 9, 255)


def test_oversized_image_is_cropped_to_grid():
    rows = [[(x, y, 0, 255) for x in range(20)] for y in range(18)]
    palette = PaletteStore.from_rows(rows)

    assert palette.get(15, 15) == (15, 15, 0, 255)
    assert len(palette.grid) == 16
    assert all(len(column) == 16 for column in palette.grid)


def test_get_out_of_range_returns_none():
    palette = PaletteStore.from_rows([[RED]])

    assert palette.get(-1, 0) is None
    assert palette.get(0, 16) is None
    assert palette.get(16, 0) is None


def test_zero_dimension_image_is_a_decode_error():
    with pytest.raises(DecodeError):
        PaletteStore.from_surface(pygame.Surface((0, 0), pygame.SRCALPHA))
    with pytest.raises(DecodeError):
        PaletteStore.from_rows([])


def test_load_round_trips_through_png(tmp_path):
    path = tmp_path / "palette.png"
    pygame.image.save(_surface((3, 2), {(2, 1): (0, 128, 255, 255)}), str(path))

    palette = PaletteStore.load(str(path))

    assert palette.get(2, 1) == (0, 128, 255, 255)
    assert palette.get(1, 2) is None
    assert [(x, y) for x, y, _ in palette.colors()] == [(2, 1)]


def test_load_rejects_unreadable_files(tmp_path):
    garbage = tmp_path / "broken.png"
    garbage.write_bytes(b"definitely not a png")

    with pytest.raises(DecodeError):
        PaletteStore.load(str(garbage))
    with pytest.raises(DecodeError):
        PaletteStore.load(str(tmp_path / "missing.png"))


def test_empty_palette_reports_empty():
    assert PaletteStore().is_empty
    assert not PaletteStore.from_rows([[RED]]).is_empty


def test_transpose_handles_empty_input():
    assert transpose([]) == []
    assert transpose([[]]) == []
    assert transpose([[1, 2], [3, 4], [5, 6]]) == [[1, 3, 5], [2, 4, 6]]


def _png_chunk(kind, data):
    body = kind + data
    return struct.pack(">I", len(data)) + body + struct.pack(">I", zlib.crc32(body) & 0xFFFFFFFF)


def _indexed_png(width, height, palette, transparent, indices):
    """Palette-mode PNG; entries listed in ``transparent`` get a tRNS alpha of 0."""
    header = struct.pack(">IIBBBBB", width, height, 8, 3, 0, 0, 0)
    plte = b"".join(bytes(color) for color in palette)
    trns = bytes(0 if i in transparent else 255 for i in range(len(palette)))
    raw = b"".join(b"\x00" + bytes(row) for row in indices)
    return (
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", header)
        + _png_chunk(b"PLTE", plte)
        + _png_chunk(b"tRNS", trns)
        + _png_chunk(b"IDAT", zlib.compress(raw))
        + _png_chunk(b"IEND", b"")
    )


def test_colorkey_pixels_become_empty_slots():
    surface = pygame.Surface((2, 2))
    surface.fill((0, 0, 0))
    surface.set_at((0, 0), RED)
    surface.set_colorkey((0, 0, 0))

    palette = PaletteStore.from_surface(surface)

    assert palette.get(0, 0) == RED
    assert palette.get(1, 0) is None
    assert palette.get(1, 1) is None


def test_indexed_png_transparent_entry_is_empty(tmp_path):
    path = tmp_path / "indexed.png"
    path.write_bytes(
        _indexed_png(2, 2, [(0, 0, 0), (255, 0, 0)], {0}, [[1, 0], [0, 0]])
    )

    palette = PaletteStore.load(str(path))

    assert palette.get(0, 0) == RED
    assert palette.get(1, 0) is None
    assert palette.get(0, 1) is None
    assert palette.get(1, 1) is None
