from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Sequence

from pxref.core import config

Reference = tuple[int, int]
ReferenceGrid = list[list[Optional[Reference]]]


def empty_reference_grid() -> ReferenceGrid:
    return [[None for _ in range(config.GRID_SIZE)] for _ in range(config.GRID_SIZE)]


def in_grid(x: int, y: int) -> bool:
    return 0 <= x < config.GRID_SIZE and 0 <= y < config.GRID_SIZE


def _as_reference(value: Any) -> Optional[Reference]:
    if value is None:
        return None
    x, y = value
    return (int(x), int(y))


@dataclass
class ReferenceFrame:
    """One 16x16 grid of palette references, addressed ``[x][y]``."""

    cells: ReferenceGrid = field(default_factory=empty_reference_grid)

    @classmethod
    def from_grid(cls, grid: Sequence[Sequence[Any]]) -> "ReferenceFrame":
        frame = cls()
        for x, column in enumerate(grid[: config.GRID_SIZE]):
            for y, value in enumerate(column[: config.GRID_SIZE]):
                frame.cells[x][y] = _as_reference(value)
        return frame

    def to_grid(self) -> ReferenceGrid:
        return [list(column) for column in self.cells]

    def get(self, x: int, y: int) -> Optional[Reference]:
        if not in_grid(x, y):
            return None
        return self.cells[x][y]

    def set(self, x: int, y: int, ref: Optional[Reference]) -> bool:
        if not in_grid(x, y):
            return False
        self.cells[x][y] = _as_reference(ref)
        return True

    def clear_cell(self, x: int, y: int) -> bool:
        return self.set(x, y, None)

    def references(self) -> Iterator[tuple[int, int, Reference]]:
        for x, column in enumerate(self.cells):
            for y, ref in enumerate(column):
                if ref is not None:
                    yield x, y, ref

    @property
    def is_empty(self) -> bool:
        return next(self.references(), None) is None

    def clone(self) -> "ReferenceFrame":
        return ReferenceFrame(cells=self.to_grid())


@dataclass
class ReferenceDocument:
    """Palette path plus the ordered, never-empty frame sequence."""

    palette_path: Optional[str] = None
    frames: list[ReferenceFrame] = field(default_factory=lambda: [ReferenceFrame()])

    @classmethod
    def from_grids(
        cls, palette_path: Optional[str], grids: Sequence[Sequence[Sequence[Any]]]
    ) -> "ReferenceDocument":
        document = cls(palette_path=palette_path, frames=[ReferenceFrame.from_grid(grid) for grid in grids])
        document.ensure_frames()
        return document

    def to_grids(self) -> list[ReferenceGrid]:
        return [frame.to_grid() for frame in self.frames]

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    def ensure_frames(self) -> None:
        if not self.frames:
            self.frames = [ReferenceFrame()]

    def _normalize_frame_index(self, frame_index: int) -> int:
        self.ensure_frames()
        return max(0, min(int(frame_index), len(self.frames) - 1))

    def append_frame(self) -> int:
        self.frames.append(ReferenceFrame())
        return len(self.frames) - 1

    def duplicate_frame(self, frame_index: int) -> int:
        frame_index = self._normalize_frame_index(frame_index)
        insert_at = frame_index + 1
        self.frames.insert(insert_at, self.frames[frame_index].clone())
        return insert_at

    def delete_frame(self, frame_index: int) -> bool:
        self.ensure_frames()
        if len(self.frames) <= 1:
            return False
        if not 0 <= frame_index < len(self.frames):
            return False
        self.frames.pop(frame_index)
        return True

    def clear_frame(self, frame_index: int) -> None:
        frame_index = self._normalize_frame_index(frame_index)
        self.frames[frame_index] = ReferenceFrame()

    def clone(self) -> "ReferenceDocument":
        return ReferenceDocument(
            palette_path=self.palette_path,
            frames=[frame.clone() for frame in self.frames],
        )
