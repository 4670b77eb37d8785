"""Tool selector grid with a size strip underneath."""

import logging

from PyQt5.QtCore import QPointF, Qt
from PyQt5.QtGui import QColor, QPen

from . import config
from .geometry import Rect, Vec2
from .grid import GridWidget, cell_rect, cell_step
from .tools import ToolSize

log = logging.getLogger("gridpaint")


class ToolBox(GridWidget):
    """Tools laid out column-major: tool ``i`` sits at row ``i % L``,
    column ``i // L`` where ``L`` is ``max_column_length``.

    Adding a tool to a full column opens a new column to the right.  The
    size strip below the grid is only shown, and only hit-testable, while the
    selected tool is sizeable.
    """

    name = "toolbox"

    def __init__(self, tools=(), max_column_length=config.TOOLBOX_COLUMN_LENGTH,
                 cell_size=config.TOOLBOX_CELL_SIZE, gap=config.TOOLBOX_GAP,
                 scale=config.UI_SCALE, selector_cell_height=config.SIZE_SELECTOR_CELL_HEIGHT):
        super().__init__(cell_size, gap, scale)
        self.max_column_length = max_column_length
        self.selector_cell_height = selector_cell_height
        self._columns = []
        self._selector_bounds = None
        self._selector_visible = False
        for tool in tools:
            self.add_tool(tool)

    # --- Cells ---
    @property
    def column_count(self):
        return len(self._columns)

    @property
    def tool_count(self):
        return sum(len(c) for c in self._columns)

    def add_tool(self, tool):
        """Append a tool and return its ``(row, col)``."""
        if not self._columns or len(self._columns[-1]) >= self.max_column_length:
            self._columns.append([])
            if len(self._columns) > 1:
                log.debug(f"[toolbox] grew to {len(self._columns)} columns")
        column = self._columns[-1]
        column.append(tool)
        self.invalidate()
        return (len(column) - 1, len(self._columns) - 1)

    def position_of(self, tool):
        for col, column in enumerate(self._columns):
            for row, t in enumerate(column):
                if t is tool:
                    return (row, col)
        return None

    def select_tool(self, tool):
        ref = self.position_of(tool)
        if ref is None:
            raise IndexError(f"{tool!r} is not in the toolbox")
        self.select(ref)

    def cell(self, ref):
        row, col = ref
        return self._columns[col][row]

    def _check_ref(self, ref):
        row, col = ref
        if not (0 <= col < len(self._columns) and 0 <= row < len(self._columns[col])):
            raise IndexError(f"toolbox cell {ref} out of range")

    # --- Layout ---
    def _compute_layout(self, origin):
        pad = self.padding
        step = cell_step(self.cell_size, self.gap, self.scale)
        rows = max((len(c) for c in self._columns), default=0)
        grid_origin = Vec2(origin.x + pad, origin.y + pad)
        bounds = [
            [cell_rect(grid_origin, row, col, self.cell_size, self.cell_size, self.gap, self.scale)
             if row < len(column) else None
             for col, column in enumerate(self._columns)]
            for row in range(rows)
        ]
        outer = Rect(origin.x, origin.y, pad + len(self._columns) * step, pad + rows * step)
        return bounds, outer

    def layout(self, origin):
        super().layout(origin)
        selected = self.last_selected()
        self._selector_visible = selected is not None and selected.is_sizeable()
        if not self._selector_visible:
            # Stale selector bounds are kept; the flag alone gates hit-testing
            return
        grid = self._outer
        pad = self.padding
        width = max(grid.width - 2 * pad, self.cell_size * self.scale)
        height = self.selector_cell_height * self.scale
        top = grid.bottom
        self._selector_bounds = [
            Rect(grid.x + pad, top + i * (height + pad), width, height)
            for i in range(len(ToolSize))
        ]
        strip_h = len(ToolSize) * (height + pad)
        self._outer = Rect(grid.x, grid.y, max(grid.width, width + 2 * pad), grid.height + strip_h)

    @property
    def selector_visible(self):
        return self._selector_visible

    def selector_bounds(self):
        return list(self._selector_bounds or ())

    def selector_hit_test(self, x, y):
        """Return the ``ToolSize`` under ``(x, y)``; always None while hidden."""
        if not self._selector_visible or self._selector_bounds is None:
            return None
        selected = self.last_selected()
        if selected is None or not selected.is_sizeable():
            return None
        for size, rect in zip(ToolSize, self._selector_bounds):
            if rect.contains(x, y):
                return size
        return None

    # --- Drawing ---
    def _draw_cells(self, painter):
        selected = self.selected_ref()
        for ref, rect in self.iter_bounds():
            tool = self.cell(ref)
            if ref == selected:
                painter.fillRect(rect.to_qrectf(), QColor(config.THEME["pressed"]))
            painter.setPen(QPen(QColor(config.THEME["cell_border"]), 1))
            painter.setBrush(Qt.NoBrush)
            painter.drawRect(rect.to_qrectf())
            inset = 2 * self.scale
            icon_rect = Rect(rect.x + inset, rect.y + inset,
                             rect.width - 2 * inset, rect.height - 2 * inset)
            painter.drawImage(icon_rect.to_qrectf(), tool.icon)
        if selected is not None:
            self._draw_highlight(painter, self.cell_bounds(selected))
        if self._selector_visible:
            self._draw_selector(painter, self.last_selected())

    def _draw_selector(self, painter, tool):
        current = tool.current_size()
        for size, rect in zip(ToolSize, self._selector_bounds):
            if size == current:
                painter.fillRect(rect.to_qrectf(), QColor(config.THEME["highlight"]))
            # Line thickness previews the size
            thickness = max(1.0, int(size) * 2 * self.scale)
            painter.setPen(QPen(QColor(config.THEME["text"]), thickness, Qt.SolidLine, Qt.FlatCap))
            y = rect.y + rect.height / 2
            painter.drawLine(QPointF(rect.x + 3 * self.scale, y), QPointF(rect.right - 3 * self.scale, y))
