import os
import unittest

import pygame

from pxref.core import config
from pxref.editor.canvas_ui import (
    cell_rect,
    draw_drag_preview,
    draw_frame_grid,
    draw_palette_grid,
    draw_timeline,
)
from pxref.editor.drag_controller import DragPreview
from pxref.editor.palette_store import PaletteStore
from pxref.editor.reference_state import ReferenceFrame
from pxref.editor.resolver import checkerboard_color

RED = (255, 0, 0, 255)


class TestCanvasDrawing(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
        pygame.display.init()
        pygame.font.init()

    @classmethod
    def tearDownClass(cls):
        pygame.font.quit()
        pygame.display.quit()

    def setUp(self):
        self.surface = pygame.Surface((config.EDITOR_WIDTH, config.EDITOR_HEIGHT))
        self.font = pygame.font.Font(config.DEFAULT_FONT, config.LABEL_FONT_SIZE)
        self.palette = PaletteStore.from_rows([[RED]])

    def _pixel(self, rect):
        # Bottom-right corner stays clear of the slot label.
        return tuple(self.surface.get_at((rect.right - 1, rect.bottom - 1)))[:3]

    def test_frame_grid_draws_resolved_and_placeholder_cells(self):
        frame = ReferenceFrame()
        frame.set(2, 3, (0, 0))
        frame.set(4, 4, (5, 5))

        draw_frame_grid(self.surface, self.font, frame, self.palette)

        self.assertEqual(self._pixel(cell_rect(config.FRAME_ORIGIN, 2, 3)), RED[:3])
        self.assertEqual(self._pixel(cell_rect(config.FRAME_ORIGIN, 4, 4)), checkerboard_color(4, 4))
        self.assertEqual(self._pixel(cell_rect(config.FRAME_ORIGIN, 0, 1)), checkerboard_color(0, 1))

    def test_hidden_cell_renders_as_placeholder(self):
        frame = ReferenceFrame()
        frame.set(2, 3, (0, 0))

        draw_frame_grid(self.surface, self.font, frame, self.palette, hidden_cell=(2, 3))

        self.assertEqual(self._pixel(cell_rect(config.FRAME_ORIGIN, 2, 3)), checkerboard_color(2, 3))

    def test_palette_grid_draws_colors(self):
        draw_palette_grid(self.surface, self.palette)

        self.assertEqual(self._pixel(cell_rect(config.PALETTE_ORIGIN, 0, 0)), RED[:3])
        self.assertEqual(self._pixel(cell_rect(config.PALETTE_ORIGIN, 1, 0)), checkerboard_color(1, 0))

    def test_timeline_returns_tab_and_add_rects(self):
        frame_rects, add_rect = draw_timeline(
            self.surface,
            self.font,
            frame_count=3,
            current_frame=1,
            mouse_pos=(0, 0),
            shift_held=False,
        )

        self.assertEqual(len(frame_rects), 3)
        self.assertEqual(frame_rects[0].topleft, config.TIMELINE_ORIGIN)
        self.assertEqual(add_rect.x - frame_rects[2].x, config.TIMELINE_TAB_SPACING)
        self.assertEqual(tuple(self.surface.get_at((frame_rects[1].x + 1, frame_rects[1].y + 1)))[:3], config.TAB_ACTIVE_COLOR)

    def test_shift_hover_marks_tab_for_removal(self):
        frame_rects, _ = draw_timeline(
            self.surface,
            self.font,
            frame_count=2,
            current_frame=0,
            mouse_pos=(config.TIMELINE_ORIGIN[0] + config.TIMELINE_TAB_SPACING + 2, config.TIMELINE_ORIGIN[1] + 2),
            shift_held=True,
        )

        rect = frame_rects[1]
        self.assertEqual(tuple(self.surface.get_at((rect.x + 1, rect.y + 1)))[:3], config.TAB_REMOVE_COLOR)

    def test_drag_preview_centers_swatch_on_pointer(self):
        draw_drag_preview(self.surface, DragPreview(pos=(100, 100), color=RED))

        self.assertEqual(tuple(self.surface.get_at((100, 100)))[:3], RED[:3])
        draw_drag_preview(self.surface, None)


if __name__ == "__main__":
    unittest.main()
