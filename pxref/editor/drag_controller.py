"""Pointer drag interpretation for the frame and palette grids.

Geometry and modifier classification are plain functions; ``DragController``
is the only place that mutates the current frame.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import pygame

from pxref.core import config
from pxref.editor.editor_state import EditorState
from pxref.editor.palette_store import Color
from pxref.editor.reference_state import Reference, in_grid
from pxref.editor.resolver import resolve_reference

Pos = tuple[int, int]
Cell = tuple[int, int]


class DragSide(Enum):
    FRAME = "frame"
    PALETTE = "palette"
    NONE = "none"


class DragAction(Enum):
    ASSIGN = "assign"
    MOVE = "move"
    DELETE = "delete"
    COPY = "copy"
    NONE = "none"


@dataclass(frozen=True)
class Modifiers:
    shift: bool = False
    ctrl: bool = False
    command: bool = False

    @classmethod
    def from_pygame(cls, mods: int) -> "Modifiers":
        return cls(
            shift=bool(mods & pygame.KMOD_SHIFT),
            ctrl=bool(mods & pygame.KMOD_CTRL),
            command=bool(mods & pygame.KMOD_META),
        )

    @property
    def move_held(self) -> bool:
        return self.ctrl or self.command


def classify_side(pos: Pos) -> DragSide:
    if pos[0] > config.PALETTE_SIDE_THRESHOLD:
        return DragSide.PALETTE
    return DragSide.FRAME


def _cell_at(pos: Pos, origin: Pos) -> Cell:
    return (
        (int(pos[0]) - origin[0]) // config.CELL_SIZE,
        (int(pos[1]) - origin[1]) // config.CELL_SIZE,
    )


def frame_cell_at(pos: Pos) -> Cell:
    """Frame grid cell under ``pos``; may lie outside the grid."""
    return _cell_at(pos, config.FRAME_ORIGIN)


def palette_cell_at(pos: Pos) -> Cell:
    """Palette grid cell under ``pos``; may lie outside the grid."""
    return _cell_at(pos, config.PALETTE_ORIGIN)


def cell_in_grid(cell: Optional[Cell]) -> bool:
    return cell is not None and in_grid(cell[0], cell[1])


def classify_action(side: DragSide, modifiers: Modifiers) -> DragAction:
    if side is DragSide.PALETTE:
        return DragAction.ASSIGN
    if side is not DragSide.FRAME:
        return DragAction.NONE
    if modifiers.shift:
        return DragAction.DELETE
    if modifiers.move_held:
        return DragAction.MOVE
    return DragAction.COPY


@dataclass
class DragSession:
    start_pos: Optional[Pos] = None
    latest_pos: Optional[Pos] = None
    active: bool = False
    side: DragSide = DragSide.NONE
    start_cell: Optional[Cell] = None
    frame_index: int = 0
    carried_ref: Optional[Reference] = None
    carried_color: Optional[Color] = None

    @property
    def moved(self) -> bool:
        return self.active and self.latest_pos != self.start_pos

    def reset(self) -> None:
        self.start_pos = None
        self.latest_pos = None
        self.active = False
        self.side = DragSide.NONE
        self.start_cell = None
        self.frame_index = 0
        self.carried_ref = None
        self.carried_color = None


@dataclass(frozen=True)
class DragOutcome:
    action: DragAction = DragAction.NONE
    cell: Optional[Cell] = None
    committed: bool = False


@dataclass(frozen=True)
class DragPreview:
    pos: Pos
    color: Color
    hidden_cell: Optional[Cell] = None


NO_OUTCOME = DragOutcome()


class DragController:
    def __init__(self, state: EditorState) -> None:
        self.state = state
        self.session = DragSession()

    @property
    def dragging(self) -> bool:
        return self.session.active

    def press(self, pos: Pos, modifiers: Modifiers) -> DragOutcome:
        """Start a drag session at ``pos``.

        The side is fixed here for the whole drag, even if the pointer later
        crosses into the other grid.

        Playback pauses so every edit lands on the frame the drag started on.
        """
        session = self.session
        session.reset()
        session.active = True
        session.start_pos = pos
        session.latest_pos = pos
        session.side = classify_side(pos)
        session.frame_index = self.state.current_frame
        self.state.playing = False

        if session.side is DragSide.PALETTE:
            cell = palette_cell_at(pos)
            session.start_cell = cell
            if cell_in_grid(cell):
                session.carried_ref = cell
                session.carried_color = self.state.palette.get(*cell)
            return NO_OUTCOME

        cell = frame_cell_at(pos)
        session.start_cell = cell
        if cell_in_grid(cell):
            session.carried_ref = self.state.frame.get(*cell)
            session.carried_color = resolve_reference(session.carried_ref, self.state.palette)
            # Shift-click erases without needing a drag.
            if modifiers.shift:
                self.state.frame.clear_cell(*cell)
                return DragOutcome(DragAction.DELETE, cell, True)
        return NO_OUTCOME

    def motion(self, pos: Pos, modifiers: Modifiers) -> DragOutcome:
        session = self.session
        if not session.active:
            return NO_OUTCOME
        if self._frame_changed():
            session.reset()
            return NO_OUTCOME
        session.latest_pos = pos
        if session.side is DragSide.FRAME and modifiers.shift:
            return self._delete_at(frame_cell_at(pos))
        return NO_OUTCOME

    def release(self, pos: Pos, modifiers: Modifiers) -> DragOutcome:
        session = self.session
        if not session.active:
            return NO_OUTCOME
        if self._frame_changed():
            session.reset()
            return NO_OUTCOME
        session.latest_pos = pos
        action = classify_action(session.side, modifiers)
        end_cell = frame_cell_at(pos)
        try:
            if action is DragAction.ASSIGN:
                return self._assign(end_cell)
            if action is DragAction.DELETE:
                return self._delete_at(end_cell)
            if action is DragAction.MOVE:
                return self._move(session.start_cell, end_cell)
            # Copy drags stay disabled until undo exists.
            return DragOutcome(action, end_cell, False)
        finally:
            session.reset()

    def cancel(self) -> None:
        self.session.reset()

    def _frame_changed(self) -> bool:
        return self.session.frame_index != self.state.current_frame

    def preview(self, modifiers: Modifiers) -> Optional[DragPreview]:
        session = self.session
        if not session.moved or session.carried_color is None or session.latest_pos is None:
            return None
        if session.side is DragSide.PALETTE:
            return DragPreview(session.latest_pos, session.carried_color)
        if session.side is DragSide.FRAME and modifiers.move_held and not modifiers.shift:
            return DragPreview(session.latest_pos, session.carried_color, hidden_cell=session.start_cell)
        return None

    def _assign(self, end_cell: Cell) -> DragOutcome:
        ref = self.session.carried_ref
        if ref is None or not cell_in_grid(end_cell):
            return DragOutcome(DragAction.ASSIGN, end_cell, False)
        self.state.frame.set(end_cell[0], end_cell[1], ref)
        return DragOutcome(DragAction.ASSIGN, end_cell, True)

    def _delete_at(self, cell: Cell) -> DragOutcome:
        if not cell_in_grid(cell):
            return DragOutcome(DragAction.DELETE, cell, False)
        self.state.frame.clear_cell(*cell)
        return DragOutcome(DragAction.DELETE, cell, True)

    def _move(self, start_cell: Optional[Cell], end_cell: Cell) -> DragOutcome:
        frame = self.state.frame
        if not (cell_in_grid(start_cell) and cell_in_grid(end_cell)) or start_cell == end_cell:
            return DragOutcome(DragAction.MOVE, end_cell, False)
        ref = frame.get(*start_cell)
        if ref is None:
            return DragOutcome(DragAction.MOVE, end_cell, False)
        frame.set(end_cell[0], end_cell[1], ref)
        frame.clear_cell(*start_cell)
        return DragOutcome(DragAction.MOVE, end_cell, True)
