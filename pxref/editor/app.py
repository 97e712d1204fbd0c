from __future__ import annotations

import argparse
import os
from typing import Optional

import pygame

from pxref.core import config
from pxref.core.errors import InvariantViolation, PxRefError
from pxref.editor.canvas_ui import (
    draw_drag_preview,
    draw_frame_grid,
    draw_menu_bar,
    draw_palette_grid,
    draw_play_button,
    draw_status_bar,
    draw_timeline,
)
from pxref.editor.dialogs import DialogService
from pxref.editor.drag_controller import DragController, Modifiers
from pxref.editor.editor_state import EditorState
from pxref.editor.palette_store import PaletteStore
from pxref.editor.reference_io import (
    SessionStore,
    export_strip,
    load_palette_file,
    load_reference_file,
    save_reference_file,
)
from pxref.editor.timeline import FrameTimeline

MENU_ITEMS = [
    {"id": "load_png", "label": "Load PNG"},
    {"id": "load_ref", "label": "Load Ref"},
    {"id": "save_image", "label": "Save Image"},
    {"id": "save_ref", "label": "Save Ref"},
    {"id": "clear", "label": "Clear Canvas"},
    {"id": "quit", "label": "Quit"},
]


class PxRefEditor:
    def __init__(
        self,
        *,
        palette_path: Optional[str] = None,
        ref_path: Optional[str] = None,
        dialogs: Optional[DialogService] = None,
        session: Optional[SessionStore] = None,
    ) -> None:
        self.state = EditorState()
        self.timeline = FrameTimeline(self.state)
        self.drag = DragController(self.state)
        self.dialogs = dialogs or DialogService()
        self.session = session or SessionStore()
        self.running = True

        self.menu_rects: dict[str, pygame.Rect] = {}
        self.frame_rects: list[pygame.Rect] = []
        self.add_frame_rect = pygame.Rect(0, 0, 0, 0)
        self.play_rect = pygame.Rect(0, 0, 0, 0)

        pygame.init()
        self.screen = pygame.display.set_mode((config.EDITOR_WIDTH, config.EDITOR_HEIGHT))
        pygame.display.set_caption(config.WINDOW_TITLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(config.DEFAULT_FONT, config.MENU_FONT_SIZE)
        self.label_font = pygame.font.Font(config.DEFAULT_FONT, config.LABEL_FONT_SIZE)
        self.tab_font = pygame.font.Font(config.DEFAULT_FONT, config.TAB_FONT_SIZE)
        self.status_font = pygame.font.Font(config.DEFAULT_FONT, config.STATUS_FONT_SIZE)

        self._restore(palette_path=palette_path, ref_path=ref_path)

    def _restore(self, *, palette_path: Optional[str], ref_path: Optional[str]) -> None:
        if ref_path:
            self._run_action(lambda: self._open_reference(ref_path))
            return
        if palette_path:
            self._run_action(lambda: self._open_palette(palette_path))
            return
        session_path = self.session.load_palette_path()
        if not session_path:
            return
        try:
            self.state.set_palette(load_palette_file(session_path), session_path)
            print(f"Restored palette {session_path}")
        except PxRefError as e:
            print(f"Error loading palette {session_path}: {e}")

    # --- Status / errors ---

    def _set_status(self, text: str, ttl_ms: int = config.STATUS_TTL_MS) -> None:
        print(text)
        self.state.set_status(text, pygame.time.get_ticks(), ttl_ms)

    def _run_action(self, action) -> bool:
        """Run a menu action; failures become dialogs and leave state untouched."""
        try:
            action()
        except InvariantViolation as e:
            self.dialogs.show_info(e.title, e.message)
            return False
        except PxRefError as e:
            self.dialogs.show_error(e.title, e.message)
            return False
        return True

    # --- Menu actions ---

    def _open_palette(self, path: str) -> None:
        palette = load_palette_file(path)
        self.state.set_palette(palette, path)
        self._set_status(f"Loaded palette {os.path.basename(path)}")

    def _open_reference(self, path: str) -> None:
        document = load_reference_file(path)
        palette = PaletteStore()
        if document.palette_path:
            palette = load_palette_file(document.palette_path)
        self.drag.cancel()
        self.state.replace_document(document, palette)
        self._set_status(f"Loaded {os.path.basename(path)} ({document.frame_count} frame(s))")

    def load_png(self) -> None:
        path = self.dialogs.ask_open_path("Open", config.PALETTE_EXTENSION)
        if path:
            self._run_action(lambda: self._open_palette(path))

    def load_ref(self) -> None:
        path = self.dialogs.ask_open_path("Open", config.REFERENCE_EXTENSION)
        if path:
            self._run_action(lambda: self._open_reference(path))

    def save_image(self) -> None:
        path = self.dialogs.ask_save_path("Render as", config.EXPORT_EXTENSION)
        if not path:
            return

        def _export() -> None:
            saved = export_strip(path, self.state.document.frames, self.state.palette)
            self._set_status(f"Rendered {os.path.basename(saved)}")

        self._run_action(_export)

    def save_ref(self) -> None:
        if not self.state.palette_path:
            self.dialogs.show_error("Failed to Save Ref", "Load a palette PNG before saving references.")
            return
        path = self.dialogs.ask_save_path("Save as", config.REFERENCE_EXTENSION)
        if not path:
            return

        def _save() -> None:
            saved = save_reference_file(path, self.state.document)
            self._set_status(f"Saved {os.path.basename(saved)}")

        self._run_action(_save)

    def clear_canvas(self) -> None:
        if self.dialogs.confirm("Clear Canvas", "Are you sure?"):
            self.timeline.clear_current_frame()
            self._set_status(f"Cleared frame {self.state.current_frame + 1}")

    def add_frame(self) -> None:
        index = self.timeline.add_frame()
        self._set_status(f"Added frame {index + 1}")

    def duplicate_frame(self) -> None:
        index = self.timeline.duplicate_current_frame()
        self._set_status(f"Duplicated into frame {index + 1}")

    def remove_frame(self, index: int) -> None:
        if self.timeline.frame_count <= 1:
            self._run_action(lambda: self.timeline.remove_frame(index))
            return
        if not self.dialogs.confirm("Do you want to remove the frame", "This action can not be undone"):
            return
        if self._run_action(lambda: self.timeline.remove_frame(index)):
            self._set_status(f"Removed frame {index + 1}")

    def toggle_playback(self) -> None:
        playing = self.timeline.toggle_playback()
        self._set_status("Playback running." if playing else "Playback paused.")

    def quit(self) -> None:
        self.running = False

    def _handle_menu(self, item_id: str) -> None:
        handlers = {
            "load_png": self.load_png,
            "load_ref": self.load_ref,
            "save_image": self.save_image,
            "save_ref": self.save_ref,
            "clear": self.clear_canvas,
            "quit": self.quit,
        }
        handler = handlers.get(item_id)
        if handler is not None:
            handler()

    # --- Event handling ---

    def _handle_mouse_down(self, event: pygame.event.Event, modifiers: Modifiers) -> None:
        if event.button != 1:
            return
        pos = event.pos
        for item_id, rect in self.menu_rects.items():
            if rect.collidepoint(pos):
                self._handle_menu(item_id)
                return
        for index, rect in enumerate(self.frame_rects):
            if rect.collidepoint(pos):
                self.timeline.select_frame(index)
                if modifiers.shift:
                    self.remove_frame(index)
                return
        if self.add_frame_rect.collidepoint(pos):
            self.add_frame()
            return
        if self.play_rect.collidepoint(pos):
            self.toggle_playback()
            return
        self.drag.press(pos, modifiers)

    def _handle_key_down(self, event: pygame.event.Event, modifiers: Modifiers) -> bool:
        if modifiers.move_held:
            shortcuts = {
                pygame.K_o: self.load_ref,
                pygame.K_s: self.save_ref,
                pygame.K_p: self.load_png,
                pygame.K_e: self.save_image,
            }
            handler = shortcuts.get(event.key)
            if handler is None:
                return False
            handler()
            return True

        if event.key == pygame.K_SPACE:
            self.toggle_playback()
            return True
        if event.key == pygame.K_n:
            self.add_frame()
            return True
        if event.key == pygame.K_d:
            self.duplicate_frame()
            return True
        if event.key == pygame.K_COMMA:
            self.timeline.step(-1)
            return True
        if event.key == pygame.K_PERIOD:
            self.timeline.step(1)
            return True
        if event.key == pygame.K_DELETE:
            self.remove_frame(self.state.current_frame)
            return True
        if event.key == pygame.K_ESCAPE:
            self.drag.cancel()
            self.state.playing = False
            return True
        return False

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.QUIT:
            self.quit()
            return True
        modifiers = Modifiers.from_pygame(pygame.key.get_mods())
        if event.type == pygame.MOUSEBUTTONDOWN:
            self._handle_mouse_down(event, modifiers)
            return True
        if event.type == pygame.MOUSEMOTION:
            self.drag.motion(event.pos, modifiers)
            return True
        if event.type == pygame.MOUSEBUTTONUP:
            if event.button == 1:
                self.drag.release(event.pos, modifiers)
            return True
        if event.type == pygame.WINDOWFOCUSLOST:
            self.drag.cancel()
            return True
        if event.type == pygame.KEYDOWN:
            return self._handle_key_down(event, modifiers)
        return False

    # --- Drawing / loop ---

    def _draw(self) -> None:
        mouse_pos = pygame.mouse.get_pos()
        modifiers = Modifiers.from_pygame(pygame.key.get_mods())
        preview = self.drag.preview(modifiers)

        self.screen.fill(config.EDITOR_BG_COLOR)
        draw_frame_grid(
            self.screen,
            self.label_font,
            self.state.frame,
            self.state.palette,
            hidden_cell=preview.hidden_cell if preview else None,
        )
        draw_palette_grid(self.screen, self.state.palette)
        self.frame_rects, self.add_frame_rect = draw_timeline(
            self.screen,
            self.tab_font,
            frame_count=self.timeline.frame_count,
            current_frame=self.state.current_frame,
            mouse_pos=mouse_pos,
            shift_held=modifiers.shift,
        )
        self.play_rect = draw_play_button(self.screen, playing=self.state.playing, mouse_pos=mouse_pos)
        self.menu_rects = draw_menu_bar(self.screen, self.font, MENU_ITEMS, mouse_pos)
        draw_drag_preview(self.screen, preview)

        palette_name = os.path.basename(self.state.palette_path) if self.state.palette_path else "no palette"
        status = f"Frame {self.state.current_frame + 1}/{self.timeline.frame_count} | {palette_name}"
        message = self.state.visible_status(pygame.time.get_ticks())
        if message:
            status = f"{message} | {status}"
        draw_status_bar(self.screen, self.status_font, status)

    def run(self) -> None:
        while self.running:
            dt_ms = self.clock.tick(config.FPS)
            for event in pygame.event.get():
                self.handle_event(event)
            self.timeline.tick(dt_ms)
            self._draw()
            pygame.display.flip()
        self.session.save(self.state.palette_path)
        self.dialogs.close()
        pygame.quit()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Reference-based pixel sprite editor.")
    parser.add_argument("--palette", help="Palette PNG to load on startup.")
    parser.add_argument("--ref", help="Reference file (.pxref) to open on startup.")
    args = parser.parse_args(argv)

    editor = PxRefEditor(palette_path=args.palette, ref_path=args.ref)
    editor.run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
