from dataclasses import dataclass, field
from typing import Optional

from pxref.editor.palette_store import PaletteStore
from pxref.editor.reference_state import ReferenceDocument, ReferenceFrame


@dataclass
class EditorState:
    """Container for everything the editor mutates during interaction."""

    palette: PaletteStore = field(default_factory=PaletteStore)
    document: ReferenceDocument = field(default_factory=ReferenceDocument)
    current_frame: int = 0

    # Playback state
    playing: bool = False
    playback_elapsed_ms: int = 0

    # Status line
    status_text: str = ""
    status_expires: int = 0

    @property
    def frame(self) -> ReferenceFrame:
        return self.document.frames[self.current_frame]

    @property
    def palette_path(self) -> Optional[str]:
        return self.document.palette_path

    def set_palette(self, palette: PaletteStore, path: Optional[str]) -> None:
        self.palette = palette
        self.document.palette_path = path

    def replace_document(self, document: ReferenceDocument, palette: PaletteStore) -> None:
        document.ensure_frames()
        self.document = document
        self.palette = palette
        self.current_frame = 0
        self.playing = False
        self.playback_elapsed_ms = 0

    def set_status(self, text: str, now_ms: int, ttl_ms: int) -> None:
        self.status_text = text
        self.status_expires = now_ms + max(0, int(ttl_ms))

    def visible_status(self, now_ms: int) -> str:
        if self.status_text and now_ms <= self.status_expires:
            return self.status_text
        return ""
