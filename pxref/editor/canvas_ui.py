from __future__ import annotations

from typing import Any, Optional

import pygame

from pxref.core import config
from pxref.editor.drag_controller import Cell, DragPreview
from pxref.editor.palette_store import PaletteStore
from pxref.editor.reference_state import ReferenceFrame
from pxref.editor.resolver import checkerboard_color, resolve_cell


def cell_rect(origin: tuple[int, int], x: int, y: int) -> pygame.Rect:
    return pygame.Rect(
        origin[0] + x * config.CELL_SIZE,
        origin[1] + y * config.CELL_SIZE,
        config.CELL_SIZE,
        config.CELL_SIZE,
    )


def draw_menu_bar(
    surface: pygame.Surface,
    font: pygame.font.Font,
    items: list[dict[str, Any]],
    mouse_pos: tuple[int, int],
) -> dict[str, pygame.Rect]:
    bar_rect = pygame.Rect(0, 0, surface.get_width(), config.MENU_BAR_HEIGHT)
    pygame.draw.rect(surface, config.MENU_BG_COLOR, bar_rect)
    item_rects: dict[str, pygame.Rect] = {}
    cursor_x = 4
    for item in items:
        label = str(item.get("label", "Item"))
        item_id = str(item.get("id", label))
        width = font.size(label)[0] + 14
        item_rect = pygame.Rect(cursor_x, 2, width, config.MENU_BAR_HEIGHT - 4)
        if item_rect.collidepoint(mouse_pos):
            pygame.draw.rect(surface, config.MENU_HOVER_COLOR, item_rect, border_radius=3)
        text_surf = font.render(label, True, config.MENU_TEXT_COLOR)
        surface.blit(text_surf, text_surf.get_rect(center=item_rect.center))
        item_rects[item_id] = item_rect
        cursor_x += width + 2
    return item_rects


def draw_frame_grid(
    surface: pygame.Surface,
    font: pygame.font.Font,
    frame: ReferenceFrame,
    palette: PaletteStore,
    *,
    hidden_cell: Optional[Cell] = None,
) -> None:
    for x in range(config.GRID_SIZE):
        for y in range(config.GRID_SIZE):
            rect = cell_rect(config.FRAME_ORIGIN, x, y)
            resolved = resolve_cell(frame, x, y, palette)
            if resolved.is_empty or (x, y) == hidden_cell:
                pygame.draw.rect(surface, checkerboard_color(x, y), rect)
                continue
            pygame.draw.rect(surface, resolved.color, rect)
            label_color = config.GRAY_MEDIUM if resolved.color[:3] == config.WHITE else config.WHITE
            label = font.render(resolved.label, True, label_color)
            surface.blit(label, rect.topleft)


def draw_palette_grid(surface: pygame.Surface, palette: PaletteStore) -> None:
    for x in range(config.GRID_SIZE):
        for y in range(config.GRID_SIZE):
            color = palette.get(x, y)
            pygame.draw.rect(
                surface,
                color if color is not None else checkerboard_color(x, y),
                cell_rect(config.PALETTE_ORIGIN, x, y),
            )


def timeline_tab_rect(index: int) -> pygame.Rect:
    return pygame.Rect(
        config.TIMELINE_ORIGIN[0] + index * config.TIMELINE_TAB_SPACING,
        config.TIMELINE_ORIGIN[1],
        config.TIMELINE_TAB_SIZE,
        config.TIMELINE_TAB_SIZE,
    )


def draw_timeline(
    surface: pygame.Surface,
    font: pygame.font.Font,
    *,
    frame_count: int,
    current_frame: int,
    mouse_pos: tuple[int, int],
    shift_held: bool,
) -> tuple[list[pygame.Rect], pygame.Rect]:
    """Draw one numbered tab per frame plus the trailing "+" tab."""
    frame_rects: list[pygame.Rect] = []
    for index in range(frame_count):
        rect = timeline_tab_rect(index)
        hovered = rect.collidepoint(mouse_pos)
        if hovered and shift_held:
            fill = config.TAB_REMOVE_COLOR
        elif index == current_frame:
            fill = config.TAB_ACTIVE_COLOR
        elif hovered:
            fill = config.TAB_HOVER_COLOR
        else:
            fill = config.TAB_COLOR
        pygame.draw.rect(surface, fill, rect)
        text = font.render(str(index + 1), True, config.WHITE)
        surface.blit(text, text.get_rect(center=rect.center))
        frame_rects.append(rect)

    add_rect = timeline_tab_rect(frame_count)
    fill = config.TAB_HOVER_COLOR if add_rect.collidepoint(mouse_pos) else config.TAB_COLOR
    pygame.draw.rect(surface, fill, add_rect)
    plus = font.render("+", True, config.WHITE)
    surface.blit(plus, plus.get_rect(center=add_rect.center))
    return frame_rects, add_rect


def draw_play_button(surface: pygame.Surface, *, playing: bool, mouse_pos: tuple[int, int]) -> pygame.Rect:
    rect = pygame.Rect(config.PLAY_BUTTON_POS, (config.PLAY_BUTTON_SIZE, config.PLAY_BUTTON_SIZE))
    fill = config.TAB_HOVER_COLOR if rect.collidepoint(mouse_pos) else config.TAB_COLOR
    pygame.draw.rect(surface, fill, rect, border_radius=4)
    icon = rect.inflate(-14, -14)
    if playing:
        bar_w = icon.width // 3
        pygame.draw.rect(surface, config.WHITE, (icon.x, icon.y, bar_w, icon.height))
        pygame.draw.rect(surface, config.WHITE, (icon.right - bar_w, icon.y, bar_w, icon.height))
    else:
        pygame.draw.polygon(surface, config.WHITE, [icon.topleft, icon.bottomleft, (icon.right, icon.centery)])
    return rect


def draw_drag_preview(surface: pygame.Surface, preview: Optional[DragPreview]) -> None:
    if preview is None:
        return
    half = config.CELL_SIZE // 2
    rect = pygame.Rect(preview.pos[0] - half, preview.pos[1] - half, config.CELL_SIZE, config.CELL_SIZE)
    pygame.draw.rect(surface, preview.color, rect)


def draw_status_bar(surface: pygame.Surface, font: pygame.font.Font, text: str) -> None:
    rect = pygame.Rect(
        0,
        surface.get_height() - config.STATUS_BAR_HEIGHT,
        surface.get_width(),
        config.STATUS_BAR_HEIGHT,
    )
    pygame.draw.rect(surface, config.MENU_BG_COLOR, rect)
    text_surf = font.render(text, True, config.STATUS_TEXT_COLOR)
    surface.blit(text_surf, (rect.x + 6, rect.centery - text_surf.get_height() // 2))
