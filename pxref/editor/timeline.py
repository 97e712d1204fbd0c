from __future__ import annotations

from pxref.core import config
from pxref.core.errors import InvariantViolation
from pxref.editor.editor_state import EditorState


class FrameTimeline:
    """Frame selection, insertion, removal and playback over an EditorState."""

    def __init__(self, state: EditorState, *, frame_ms: int = config.PLAYBACK_FRAME_MS) -> None:
        self.state = state
        self.frame_ms = max(1, int(frame_ms))

    @property
    def frame_count(self) -> int:
        return self.state.document.frame_count

    def select_frame(self, index: int) -> None:
        if not 0 <= index < self.frame_count:
            raise IndexError(f"Frame {index} out of range (0..{self.frame_count - 1}).")
        self.state.current_frame = index

    def add_frame(self) -> int:
        new_index = self.state.document.append_frame()
        self.state.current_frame = new_index
        return new_index

    def duplicate_current_frame(self) -> int:
        new_index = self.state.document.duplicate_frame(self.state.current_frame)
        self.state.current_frame = new_index
        return new_index

    def remove_frame(self, index: int) -> None:
        if self.frame_count <= 1:
            raise InvariantViolation("Can not remove the only frame")
        if not 0 <= index < self.frame_count:
            raise IndexError(f"Frame {index} out of range (0..{self.frame_count - 1}).")
        self.state.document.delete_frame(index)
        if index <= self.state.current_frame:
            self.state.current_frame = max(0, self.state.current_frame - 1)

    def clear_current_frame(self) -> None:
        self.state.document.clear_frame(self.state.current_frame)

    def step(self, delta: int) -> int:
        self.state.current_frame = max(0, min(self.state.current_frame + delta, self.frame_count - 1))
        self.state.playing = False
        self.state.playback_elapsed_ms = 0
        return self.state.current_frame

    def toggle_playback(self) -> bool:
        self.state.playing = not self.state.playing
        self.state.playback_elapsed_ms = 0
        return self.state.playing

    def tick(self, dt_ms: int) -> None:
        state = self.state
        if not state.playing:
            return
        state.playback_elapsed_ms += dt_ms
        while state.playback_elapsed_ms >= self.frame_ms:
            state.playback_elapsed_ms -= self.frame_ms
            state.current_frame = (state.current_frame + 1) % self.frame_count
