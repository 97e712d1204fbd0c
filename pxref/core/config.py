# config.py
import os

# General
FPS = 60
WINDOW_TITLE = "PxRef"

# Grid Configuration
# Frames and the palette share one fixed resolution
GRID_SIZE = 16
CELL_SIZE = 16
GRID_PX = GRID_SIZE * CELL_SIZE

# Layout (absolute window coordinates)
MENU_BAR_HEIGHT = 24
FRAME_ORIGIN = (16, 32)
# Gap between the frame grid and the palette grid
SIDE_GAP = 16
PALETTE_ORIGIN = (FRAME_ORIGIN[0] + GRID_PX + SIDE_GAP, FRAME_ORIGIN[1])
# Presses right of this x belong to the palette side
PALETTE_SIDE_THRESHOLD = PALETTE_ORIGIN[0]

# Timeline tabs sit under the grids
TIMELINE_ORIGIN = (FRAME_ORIGIN[0], FRAME_ORIGIN[1] + GRID_PX + 16)
TIMELINE_TAB_SIZE = 32
TIMELINE_TAB_SPACING = 48
PLAY_BUTTON_POS = (PALETTE_ORIGIN[0] + GRID_PX + 16, FRAME_ORIGIN[1])
PLAY_BUTTON_SIZE = 32

STATUS_BAR_HEIGHT = 22
EDITOR_WIDTH = PLAY_BUTTON_POS[0] + PLAY_BUTTON_SIZE + 16
EDITOR_HEIGHT = TIMELINE_ORIGIN[1] + TIMELINE_TAB_SIZE + 16 + STATUS_BAR_HEIGHT

# Timing
PLAYBACK_FRAME_MS = 100
STATUS_TTL_MS = 2500

# Fonts (None uses the default pygame font)
DEFAULT_FONT = None
MENU_FONT_SIZE = 16
LABEL_FONT_SIZE = 10
TAB_FONT_SIZE = 24
STATUS_FONT_SIZE = 16

# Colors
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
RED = (255, 0, 0)
GRAY_LIGHT = (200, 200, 200)
GRAY_MEDIUM = (160, 160, 160)
GRAY_DARK = (96, 96, 96)

EDITOR_BG_COLOR = (27, 27, 27)
MENU_BG_COLOR = (40, 40, 40)
MENU_TEXT_COLOR = (220, 220, 220)
MENU_HOVER_COLOR = (70, 70, 70)
CHECKER_COLOR_1 = GRAY_LIGHT
CHECKER_COLOR_2 = GRAY_MEDIUM
TAB_COLOR = GRAY_LIGHT
TAB_HOVER_COLOR = GRAY_MEDIUM
TAB_ACTIVE_COLOR = GRAY_DARK
TAB_REMOVE_COLOR = RED
STATUS_TEXT_COLOR = (190, 190, 190)

# File types
PALETTE_EXTENSION = ".png"
REFERENCE_EXTENSION = ".pxref"
EXPORT_EXTENSION = ".png"

# User data directory; override with PXREF_DATA_DIR.
DATA_DIR = os.environ.get("PXREF_DATA_DIR") or os.path.join(os.path.expanduser("~"), ".pxref")
SESSION_FILE = os.path.join(DATA_DIR, "session.json")
