from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence

import pygame

from pxref.core import config
from pxref.core.errors import DecodeError

Color = tuple[int, int, int, int]
PaletteGrid = list[list[Optional[Color]]]


def empty_palette_grid() -> PaletteGrid:
    return [[None for _ in range(config.GRID_SIZE)] for _ in range(config.GRID_SIZE)]


def transpose(matrix: Sequence[Sequence]) -> list[list]:
    """Swap rows and columns; an empty or ragged-empty matrix gives []."""
    if not matrix or not matrix[0]:
        return []
    return [[row[col] for row in matrix] for col in range(len(matrix[0]))]


def _to_palette_color(pixel: Sequence[int]) -> Optional[Color]:
    r, g, b = (int(channel) for channel in pixel[:3])
    alpha = int(pixel[3]) if len(pixel) > 3 else 255
    if alpha == 0:
        return None
    # Partial transparency is not kept; every visible swatch is opaque.
    return (r, g, b, 255)


def _with_per_pixel_alpha(surface: pygame.Surface) -> pygame.Surface:
    """Bake a colorkey (indexed PNG tRNS) into alpha so keyed pixels read as alpha 0."""
    if surface.get_colorkey() is None:
        return surface
    rgba = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    rgba.fill((0, 0, 0, 0))
    rgba.blit(surface, (0, 0))
    return rgba


@dataclass
class PaletteStore:
    """Fixed 16x16 grid of optional colors, addressed ``[x][y]``."""

    grid: PaletteGrid = field(default_factory=empty_palette_grid)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Sequence[int]]]) -> "PaletteStore":
        """Build from row-major pixels (``rows[y][x]`` = RGBA).

        The source is transposed so columns become the first index; every
        reference in a frame assumes that addressing.
        """
        if not rows or not rows[0]:
            raise DecodeError("Palette image has zero dimensions.")
        columns = transpose([[_to_palette_color(pixel) for pixel in row] for row in rows])
        grid = empty_palette_grid()
        for x, column in enumerate(columns[: config.GRID_SIZE]):
            for y, color in enumerate(column[: config.GRID_SIZE]):
                grid[x][y] = color
        return cls(grid=grid)

    @classmethod
    def from_surface(cls, surface: pygame.Surface) -> "PaletteStore":
        width, height = surface.get_size()
        if width == 0 or height == 0:
            raise DecodeError("Palette image has zero dimensions.")
        surface = _with_per_pixel_alpha(surface)
        rows = [
            [tuple(surface.get_at((x, y))) for x in range(width)]
            for y in range(height)
        ]
        return cls.from_rows(rows)

    @classmethod
    def load(cls, path: str) -> "PaletteStore":
        try:
            surface = pygame.image.load(path)
        except (pygame.error, FileNotFoundError, OSError) as e:
            raise DecodeError(f"Failed to decode {path}: {e}") from e
        return cls.from_surface(surface)

    def get(self, x: int, y: int) -> Optional[Color]:
        if not (0 <= x < config.GRID_SIZE and 0 <= y < config.GRID_SIZE):
            return None
        return self.grid[x][y]

    def colors(self) -> Iterator[tuple[int, int, Color]]:
        for x, column in enumerate(self.grid):
            for y, color in enumerate(column):
                if color is not None:
                    yield x, y, color

    @property
    def is_empty(self) -> bool:
        return next(self.colors(), None) is None
