"""Application state and pointer routing.

``PaintSession`` owns the widgets, the canvas, the undo history and the tool
state machine.  The window feeds it pointer coordinates in window space and
repaints whatever regions the returned set names.
"""

import logging
import math

from PyQt5.QtCore import Qt
from PyQt5.QtGui import QColor

from . import config
from .canvas import PixelCanvas
from .geometry import Rect, Vec2
from .palette import Palette
from .ribbon import Ribbon
from .toolbox import ToolBox
from .tools import ToolStateMachine
from .undo import UndoStack

log = logging.getLogger("gridpaint")


class PaintSession:
    def __init__(self, canvas=None, scale=config.UI_SCALE, measure_text=None,
                 undo_capacity=config.UNDO_CAPACITY, palette_colors=None):
        self.canvas = canvas if canvas is not None else PixelCanvas()
        self.undo_stack = UndoStack(undo_capacity)
        self.tools = ToolStateMachine(self.canvas)
        self.palette = Palette(palette_colors, scale=scale)
        self.toolbox = ToolBox(self.tools.tools(), scale=scale)
        self.toolbox.select_tool(self.tools.active)
        self.ribbon = Ribbon(measure_text=measure_text, scale=scale)
        self.canvas_origin = Vec2()
        self.file_path = None
        self.modified = False
        # Ribbon action -> handler; the window adds "open" and "save"
        self.actions = {
            "new": self.new_canvas,
            "undo": self.undo,
            "clear": self.clear_canvas,
        }
        self._gesture_button = None
        self._gesture_pushed = False
        self._size = (0, 0)

    @property
    def colors(self):
        return (self.palette.primary, self.palette.secondary)

    @property
    def size(self):
        return self._size

    # --- Layout / rendering ---
    def layout(self):
        """Place every widget contiguously and return the window size.

        Ribbon on top, tool box on the left, canvas to its right, palette
        under the canvas.
        """
        self.ribbon.layout(Vec2(0, 0))
        top = self.ribbon.outer_bounds().bottom
        self.toolbox.layout(Vec2(0, top))
        left = self.toolbox.outer_bounds().right
        self.canvas_origin = Vec2(left, top)
        self.palette.layout(Vec2(left, top + self.canvas.height))
        content_w = left + max(self.canvas.width, self.palette.outer_bounds().width)
        self.ribbon.min_width = content_w
        self.ribbon.layout(Vec2(0, 0))
        width = max(self.ribbon.outer_bounds().width, content_w)
        height = max(self.toolbox.outer_bounds().bottom, self.palette.outer_bounds().bottom)
        self._size = (int(math.ceil(width)), int(math.ceil(height)))
        return self._size

    def canvas_bounds(self):
        return Rect(self.canvas_origin.x, self.canvas_origin.y, self.canvas.width, self.canvas.height)

    def region(self, name):
        """Screen rect to repaint for a dirty-region name."""
        w, h = self._size
        if name == "ribbon":
            return self.ribbon.outer_bounds()
        if name == "toolbox":
            # Full-height strip so the size selector appearing/disappearing repaints
            tb = self.toolbox.outer_bounds()
            return Rect(tb.x, tb.y, tb.width, h - tb.y)
        if name == "palette":
            return self.palette.outer_bounds()
        if name == "canvas":
            return self.canvas_bounds()
        return Rect(0, 0, w, h)

    def render(self, painter):
        w, h = self.layout()
        painter.fillRect(0, 0, w, h, QColor(config.THEME["bg"]))
        self.ribbon.draw(painter)
        self.toolbox.draw(painter)
        painter.drawImage(self.canvas_origin.to_qpointf(), self.canvas.image)
        self.palette.draw(painter)

    # --- Pointer routing ---
    def press(self, x, y, button):
        """Route a press to the first widget that claims it.

        Order: palette, tool grid, size selector, ribbon, then canvas.
        """
        self.layout()
        color = self.palette.hit_test(x, y)
        if color is not None:
            if button == Qt.RightButton:
                self.palette.secondary = QColor(color)
            else:
                self.palette.primary = QColor(color)
            return {"palette"}
        tool = self.toolbox.hit_test(x, y)
        if tool is not None:
            self.select_tool(tool.kind)
            return {"toolbox"}
        size = self.toolbox.selector_hit_test(x, y)
        if size is not None:
            self.tools.set_active_size(size)
            return {"toolbox"}
        ribbon_button = self.ribbon.hit_test(x, y)
        if ribbon_button is not None:
            self.ribbon.press(self.ribbon.selected_ref())
            return {"ribbon"} | self.run_action(ribbon_button.action)
        if self._over_canvas(x, y):
            if self._gesture_button is not None:
                # One gesture at a time; extra buttons are ignored until release
                return set()
            self._gesture_button = button
            self._gesture_pushed = False
            return self._stroke_sample(x, y)
        return set()

    def move(self, x, y, buttons=None):
        if self._gesture_button is None:
            return set()
        if buttons is not None and not int(buttons & self._gesture_button):
            return self.release(x, y, self._gesture_button)
        if not self._over_canvas(x, y):
            # Re-entering the canvas starts a fresh segment
            self.tools.active.reset()
            return set()
        return self._stroke_sample(x, y)

    def release(self, x, y, button):
        dirty = set()
        if self.ribbon.release():
            dirty.add("ribbon")
        if self._gesture_button is None or button != self._gesture_button:
            return dirty
        tool = self.tools.active
        self.tools.complete_stroke(Vec2(x, y) - self.canvas_origin, self.colors, button)
        if not tool.mutates_canvas and tool.picked_color is not None:
            if button == Qt.RightButton:
                self.palette.secondary = QColor(tool.picked_color)
            else:
                self.palette.primary = QColor(tool.picked_color)
            self.palette.preview_color = None
            dirty.add("palette")
        self._gesture_button = None
        self._gesture_pushed = False
        return dirty

    @property
    def stroke_active(self):
        return self._gesture_button is not None

    def _over_canvas(self, x, y):
        local = Vec2(x, y) - self.canvas_origin
        return self.canvas.contains(local.x, local.y)

    def _stroke_sample(self, x, y):
        local = Vec2(x, y) - self.canvas_origin
        tool = self.tools.active
        if tool.mutates_canvas and not self._gesture_pushed:
            self.undo_stack.push(self.canvas.snapshot())
            self._gesture_pushed = True
        self.tools.begin_or_continue_stroke(local, self.colors, self._gesture_button)
        if tool.mutates_canvas:
            self.modified = True
            return {"canvas"}
        self.palette.preview_color = tool.picked_color
        return {"palette"}

    # --- Commands ---
    def run_action(self, action):
        handler = self.actions.get(action)
        if handler is None:
            log.warning(f"[action] no handler for {action!r}")
            return set()
        log.info(f"[action] {action}")
        handler()
        return {"canvas"}

    def select_tool(self, kind):
        tool = self.tools.activate(kind)
        self.toolbox.select_tool(tool)
        return tool

    def step_size(self, delta):
        self.tools.step_active_size(delta)
        return {"toolbox"}

    def undo(self):
        if self.undo_stack.undo(self.canvas):
            self.modified = True
            return True
        return False

    def new_canvas(self):
        self.canvas.clear()
        self.undo_stack.clear()
        self.file_path = None
        self.modified = False

    def clear_canvas(self):
        self.undo_stack.push(self.canvas.snapshot())
        self.canvas.clear(self.palette.secondary)
        self.modified = True

    def open_file(self, path):
        if not self.canvas.load_image_from_path(path):
            return False
        self.undo_stack.clear()
        self.file_path = path
        self.modified = False
        return True

    def save_file(self, path):
        written = self.canvas.save_image_to_path(path)
        if written is None:
            return None
        self.file_path = written
        self.modified = False
        return written

    def title(self):
        name = self.file_path if self.file_path else "Untitled"
        mod = "*" if self.modified else ""
        return f"{name}{mod} - {config.APP_NAME}"
