"""Application-wide constants for GridPaint."""

import os
import tempfile

APP_NAME = "GridPaint"

# ---------------------------------------------------------------------------
# Canvas
# ---------------------------------------------------------------------------
CANVAS_WIDTH = 640
CANVAS_HEIGHT = 480
UNDO_CAPACITY = 10

# Extensions the save path keeps as-is; anything else gets ".png" appended.
SAVE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".bmp", ".tga")
DEFAULT_SAVE_EXTENSION = ".png"
DEFAULT_DIR = os.path.expanduser("~/Pictures")

# ---------------------------------------------------------------------------
# Widgets
# ---------------------------------------------------------------------------
UI_SCALE = 1.0

PALETTE_COLORS = [
    "#000000", "#808080", "#800000", "#808000",
    "#008000", "#008080", "#000080", "#800080",
    "#808040", "#004040", "#0080FF", "#004080",
    "#4000FF", "#804000",
    "#FFFFFF", "#C0C0C0", "#FF0000", "#FFFF00",
    "#00FF00", "#00FFFF", "#0000FF", "#FF00FF",
    "#FFFF80", "#00FF80", "#80FFFF", "#0080FF",
    "#FF0080", "#FF8040",
]
PALETTE_ROW_LENGTH = 14
PALETTE_CELL_SIZE = 16
PALETTE_GAP = 2

TOOLBOX_CELL_SIZE = 28
TOOLBOX_GAP = 2
TOOLBOX_COLUMN_LENGTH = 8
SIZE_SELECTOR_CELL_HEIGHT = 14

RIBBON_HEIGHT = 22
RIBBON_GAP = 2
RIBBON_TEXT_PADDING = 8
RIBBON_FONT_FAMILY = "Sans Serif"
RIBBON_FONT_SIZE = 9

# (label, action) pairs, left to right
RIBBON_BUTTONS = [
    ("New", "new"),
    ("Open", "open"),
    ("Save", "save"),
    ("Undo", "undo"),
    ("Clear", "clear"),
]

THEME = {
    "bg": "#808080",
    "panel": "#D4D0C8",
    "cell_border": "#808080",
    "highlight": "#0A84FF",
    "pressed": "#A0A0A0",
    "text": "#000000",
}

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_PATH = os.path.join(tempfile.gettempdir(), "gridpaint-debug.log")
