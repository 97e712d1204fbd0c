from __future__ import annotations

import json
import os
from typing import Optional, Sequence

import pygame

from pxref.core import config
from pxref.core.errors import DecodeError, FileIOError, FormatError
from pxref.core.ref_schema import parse_reference_bytes
from pxref.editor.palette_store import PaletteStore
from pxref.editor.reference_state import ReferenceDocument, ReferenceFrame
from pxref.editor.resolver import resolve

TRANSPARENT = (0, 0, 0, 0)


def _has_extension(path: str, extension: str) -> bool:
    return path.lower().endswith(extension)


def _with_extension(path: str, extension: str) -> str:
    if _has_extension(path, extension):
        return path
    return f"{path}{extension}"


def _ensure_parent_dir(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def serialize(palette_path: Optional[str], frames: Sequence[ReferenceFrame]) -> bytes:
    payload = {
        "palette_image_path": palette_path,
        "frames": [frame.to_grid() for frame in frames],
    }
    return json.dumps(payload, indent=2).encode("utf-8")


def deserialize(data: bytes, *, source: str = "reference file") -> tuple[Optional[str], list[ReferenceFrame]]:
    palette_path, grids = parse_reference_bytes(data, source=source)
    frames = [ReferenceFrame.from_grid(grid) for grid in grids] or [ReferenceFrame()]
    return palette_path, frames


def save_reference_file(path: str, document: ReferenceDocument) -> str:
    """Write ``document`` as JSON, appending ``.pxref`` when missing."""
    target = _with_extension(path, config.REFERENCE_EXTENSION)
    data = serialize(document.palette_path, document.frames)
    try:
        with open(target, "wb") as handle:
            handle.write(data)
    except OSError as e:
        raise FileIOError(target, str(e), title="Failed to Save Ref") from e
    return target


def load_reference_file(path: str) -> ReferenceDocument:
    if not _has_extension(path, config.REFERENCE_EXTENSION):
        raise FormatError(path, f"Please pick a {config.REFERENCE_EXTENSION} file")
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError as e:
        raise FileIOError(path, str(e), title="Unable to open Ref") from e
    palette_path, frames = deserialize(data, source=path)
    return ReferenceDocument(palette_path=palette_path, frames=frames)


def load_palette_file(path: str) -> PaletteStore:
    if not _has_extension(path, config.PALETTE_EXTENSION):
        raise DecodeError(f"Please pick a {config.PALETTE_EXTENSION} file", title="Invalid File")
    return PaletteStore.load(path)


def render_strip(frames: Sequence[ReferenceFrame], palette: PaletteStore) -> pygame.Surface:
    """Lay frames out left to right, one 16x16 block each.

    Unresolved cells stay fully transparent; the checkerboard is an editor
    affordance and never reaches the exported image.
    """
    size = config.GRID_SIZE
    surface = pygame.Surface((size * max(1, len(frames)), size), pygame.SRCALPHA)
    surface.fill(TRANSPARENT)
    for k, frame in enumerate(frames):
        for x in range(size):
            for y in range(size):
                color = resolve(frame, x, y, palette)
                if color is not None:
                    surface.set_at((x + size * k, y), color)
    return surface


def export_strip(path: str, frames: Sequence[ReferenceFrame], palette: PaletteStore) -> str:
    target = _with_extension(path, config.EXPORT_EXTENSION)
    surface = render_strip(frames, palette)
    try:
        pygame.image.save(surface, target)
    except (pygame.error, OSError) as e:
        raise FileIOError(target, str(e), title="Failed to Render Image") from e
    return target


class SessionStore:
    """Remembers the palette path between runs."""

    def __init__(self, path: str = config.SESSION_FILE) -> None:
        self.path = path

    def save(self, palette_path: Optional[str]) -> bool:
        try:
            _ensure_parent_dir(self.path)
            with open(self.path, "w", encoding="utf-8") as handle:
                json.dump({"palette_image_path": palette_path}, handle, indent=2)
        except OSError as e:
            print(f"Failed to save session {self.path}: {e}")
            return False
        return True

    def load_palette_path(self) -> Optional[str]:
        if not os.path.exists(self.path):
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, json.JSONDecodeError) as e:
            print(f"Ignoring unreadable session {self.path}: {e}")
            return None
        if not isinstance(data, dict):
            return None
        palette_path = data.get("palette_image_path")
        return palette_path if isinstance(palette_path, str) and palette_path else None
