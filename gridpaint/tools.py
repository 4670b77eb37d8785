"""Drawing tools and the state machine that routes strokes to them.

Tools are one class parameterised by a ``ToolKind``.  What a kind does on a
stroke sample, on stroke completion and when its size changes is looked up
in the dispatch tables at the bottom of this module, so adding a kind means
adding table entries (or passing handlers to ``Tool``) rather than
subclassing.
"""

import logging
from enum import Enum, IntEnum, auto

from PyQt5.QtCore import QPoint, QPointF, Qt
from PyQt5.QtGui import QBrush, QColor, QImage, QPainter, QPainterPath, QPen

log = logging.getLogger("gridpaint")


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class ToolSize(IntEnum):
    SMALL = 1
    MEDIUM = 2
    LARGE = 3
    XLARGE = 4


class ToolKind(Enum):
    PENCIL = auto()
    MARKER = auto()
    ERASER = auto()
    PICKER = auto()


TOOL_NAMES = {
    ToolKind.PENCIL: "Pencil",
    ToolKind.MARKER: "Marker",
    ToolKind.ERASER: "Eraser",
    ToolKind.PICKER: "Color Picker",
}

# Stroke width in canvas pixels for ToolSize.SMALL; scales linearly with size
BASE_WIDTHS = {
    ToolKind.PENCIL: 1,
    ToolKind.MARKER: 4,
    ToolKind.ERASER: 4,
}

TOOL_ORDER = [ToolKind.PENCIL, ToolKind.MARKER, ToolKind.ERASER, ToolKind.PICKER]


# ---------------------------------------------------------------------------
# Icons / cursors
# ---------------------------------------------------------------------------
def make_tool_icon(kind, size=24):
    """Draw a simple icon for each tool programmatically."""
    img = QImage(size, size, QImage.Format_ARGB32_Premultiplied)
    img.fill(Qt.transparent)
    p = QPainter(img)
    p.setRenderHint(QPainter.Antialiasing)
    p.setPen(QPen(QColor(40, 40, 40), 1.5))
    m = 3  # margin
    s = size

    if kind == ToolKind.PENCIL:
        p.drawLine(m, s - m, s - m, m)
        p.drawLine(s - m, m, s - m - 3, m + 1)

    elif kind == ToolKind.MARKER:
        path = QPainterPath()
        path.moveTo(m, s - m)
        path.cubicTo(s * 0.3, s * 0.3, s * 0.6, s * 0.5, s - m, m)
        p.setPen(QPen(QColor(40, 40, 40), 4, Qt.SolidLine, Qt.RoundCap))
        p.drawPath(path)

    elif kind == ToolKind.ERASER:
        p.setBrush(QBrush(QColor(255, 200, 200)))
        p.drawRect(m, m + 4, s - 2 * m, s - 2 * m - 4)

    elif kind == ToolKind.PICKER:
        tip = QPainterPath()
        tip.moveTo(s * 0.10, s * 0.90)
        tip.lineTo(s * 0.22, s * 0.70)
        tip.lineTo(s * 0.30, s * 0.78)
        tip.closeSubpath()
        p.setBrush(QBrush(QColor(60, 60, 60)))
        p.drawPath(tip)
        shaft = QPainterPath()
        shaft.moveTo(s * 0.22, s * 0.70)
        shaft.lineTo(s * 0.55, s * 0.37)
        shaft.lineTo(s * 0.63, s * 0.45)
        shaft.lineTo(s * 0.30, s * 0.78)
        shaft.closeSubpath()
        p.setBrush(QBrush(QColor(200, 200, 200)))
        p.drawPath(shaft)
        p.setBrush(QBrush(QColor(180, 80, 80)))
        p.drawEllipse(QPointF(s * 0.70, s * 0.30), s * 0.12, s * 0.10)

    p.end()
    return img


def make_eraser_cursor(width, size):
    """Square ring the size of the eraser footprint.

    Black outer ring, white inner ring, transparent middle.  Rings get
    thicker from ``ToolSize.LARGE`` up.
    """
    side = width + 2
    ring = 1 if size < ToolSize.LARGE else 2
    img = QImage(side, side, QImage.Format_ARGB32)
    img.fill(Qt.transparent)
    p = QPainter(img)
    p.fillRect(0, 0, side, side, Qt.black)
    p.fillRect(ring, ring, side - 2 * ring, side - 2 * ring, Qt.white)
    p.setCompositionMode(QPainter.CompositionMode_Clear)
    p.fillRect(2 * ring, 2 * ring, side - 4 * ring, side - 4 * ring, Qt.transparent)
    p.end()
    return img


# ---------------------------------------------------------------------------
# Tool
# ---------------------------------------------------------------------------
class Tool:
    """A drawing tool bound to a canvas.

    ``sizeable`` and ``mutates_canvas`` are capability flags; the session
    only pushes undo history for tools that mutate the canvas.
    """

    def __init__(self, kind, canvas, name=None, sizeable=True, mutates_canvas=True,
                 size=ToolSize.SMALL, stroke=None, complete=None, cursor_builder=None,
                 base_width=None):
        self.kind = kind
        self.canvas = canvas
        self.name = name or TOOL_NAMES.get(kind, kind.name.title())
        self.sizeable = sizeable
        self.mutates_canvas = mutates_canvas
        self.icon = make_tool_icon(kind)
        self.picked_color = None
        self._size = ToolSize(size)
        self._base_width = base_width if base_width is not None else BASE_WIDTHS.get(kind, 1)
        self._stroke = stroke or STROKE_HANDLERS.get(kind, _no_stroke)
        self._complete = complete or COMPLETE_HANDLERS.get(kind, _end_segment)
        self._cursor_builder = cursor_builder or CURSOR_BUILDERS.get(kind)
        self._cursor = Qt.CrossCursor
        self._last = None
        self._rebuild_cursor()

    def __repr__(self):
        return f"Tool({self.kind.name}, size={self._size.name})"

    def is_sizeable(self):
        return self.sizeable

    def current_size(self):
        return self._size

    def stroke_width(self):
        return self._base_width * int(self._size)

    def set_size(self, size):
        if not self.sizeable:
            return
        self._size = ToolSize(size)
        self._rebuild_cursor()

    def cursor_affordance(self):
        """Qt.CursorShape, or a QImage bitmap for tools with a drawn cursor."""
        return self._cursor

    def _rebuild_cursor(self):
        if self._cursor_builder is not None:
            self._cursor = self._cursor_builder(self.stroke_width(), self._size)

    def begin_or_continue_stroke(self, point, colors, button):
        self._stroke(self, point, colors, button)

    def complete_stroke(self, point, colors, button):
        self._complete(self, point, colors, button)

    def reset(self):
        """Forget any in-progress stroke."""
        self._last = None


# ---------------------------------------------------------------------------
# Stroke handlers
# ---------------------------------------------------------------------------
def _stroke_color(colors, button):
    primary, secondary = colors
    return secondary if button == Qt.RightButton else primary


def _draw_segment(tool, point, colors, button, color=None, cap=Qt.SquareCap, antialias=False):
    if color is None:
        color = _stroke_color(colors, button)
    p = tool.canvas.make_painter(antialias=antialias)
    p.setPen(QPen(color, tool.stroke_width(), Qt.SolidLine, cap, Qt.RoundJoin))
    cur = QPoint(int(point.x), int(point.y))
    if tool._last is None:
        p.drawPoint(cur)
    else:
        p.drawLine(QPoint(int(tool._last.x), int(tool._last.y)), cur)
    p.end()
    tool._last = point


def _pencil_stroke(tool, point, colors, button):
    _draw_segment(tool, point, colors, button)


def _marker_stroke(tool, point, colors, button):
    _draw_segment(tool, point, colors, button, cap=Qt.RoundCap, antialias=True)


def _eraser_stroke(tool, point, colors, button):
    # Always paints with the secondary (background) colour
    _draw_segment(tool, point, colors, button, color=colors[1])


def _picker_stroke(tool, point, colors, button):
    color = tool.canvas.pixel_color(int(point.x), int(point.y))
    if color is not None:
        tool.picked_color = color


def _no_stroke(tool, point, colors, button):
    pass


def _end_segment(tool, point, colors, button):
    tool._last = None


STROKE_HANDLERS = {
    ToolKind.PENCIL: _pencil_stroke,
    ToolKind.MARKER: _marker_stroke,
    ToolKind.ERASER: _eraser_stroke,
    ToolKind.PICKER: _picker_stroke,
}

COMPLETE_HANDLERS = {
    ToolKind.PENCIL: _end_segment,
    ToolKind.MARKER: _end_segment,
    ToolKind.ERASER: _end_segment,
}

CURSOR_BUILDERS = {
    ToolKind.ERASER: make_eraser_cursor,
}


def default_tools(canvas):
    return [
        Tool(ToolKind.PENCIL, canvas),
        Tool(ToolKind.MARKER, canvas),
        Tool(ToolKind.ERASER, canvas),
        Tool(ToolKind.PICKER, canvas, sizeable=False, mutates_canvas=False),
    ]


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------
class ToolStateMachine:
    """Registry of tools with exactly one active tool.

    The active tool only changes through ``activate``; nothing here switches
    tools on its own.
    """

    def __init__(self, canvas, tools=None):
        self.canvas = canvas
        self._tools = {}
        for tool in (default_tools(canvas) if tools is None else tools):
            self.register(tool)
        if not self._tools:
            raise ValueError("ToolStateMachine needs at least one tool")
        self._active = next(iter(self._tools.values()))

    def register(self, tool):
        self._tools[tool.kind] = tool
        return tool

    def tools(self):
        return list(self._tools.values())

    def get(self, kind):
        return self._tools[kind]

    @property
    def active(self):
        return self._active

    def activate(self, kind):
        tool = self._tools[kind]
        if tool is not self._active:
            self._active.reset()
            log.info(f"[tool] {self._active.name} -> {tool.name}")
            self._active = tool
        return tool

    def set_active_size(self, size):
        self._active.set_size(size)

    def step_active_size(self, delta):
        """Move the active tool's size up or down the enumeration, clamped."""
        if not self._active.is_sizeable():
            return
        sizes = list(ToolSize)
        i = sizes.index(self._active.current_size()) + delta
        self._active.set_size(sizes[max(0, min(len(sizes) - 1, i))])

    def begin_or_continue_stroke(self, point, colors, button):
        self._active.begin_or_continue_stroke(point, colors, button)

    def complete_stroke(self, point, colors, button):
        self._active.complete_stroke(point, colors, button)
