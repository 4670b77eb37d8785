"""Colour palette grid with a primary/secondary preview cell."""

from PyQt5.QtCore import Qt
from PyQt5.QtGui import QBrush, QColor, QPen

from . import config
from .geometry import Rect, Vec2
from .grid import GridWidget, cell_step, layout_rows, wrap


class Palette(GridWidget):
    """28-colour palette in 2 rows of 14 by default.

    The preview square on the left shows the primary colour (top-left) over
    the secondary colour (bottom-right).  While the colour picker samples,
    ``preview_color`` temporarily replaces the primary square.
    """

    name = "palette"

    def __init__(self, colors=None, row_length=config.PALETTE_ROW_LENGTH,
                 cell_size=config.PALETTE_CELL_SIZE, gap=config.PALETTE_GAP,
                 scale=config.UI_SCALE):
        super().__init__(cell_size, gap, scale)
        if colors is None:
            colors = config.PALETTE_COLORS
        self.row_length = row_length
        self._rows = wrap([QColor(c) for c in colors], row_length)
        self.primary = QColor(Qt.black)
        self.secondary = QColor(Qt.white)
        self.preview_color = None
        self._preview = Rect()

    @property
    def rows(self):
        return len(self._rows)

    @property
    def columns(self):
        return max((len(r) for r in self._rows), default=0)

    def cell(self, ref):
        row, col = ref
        return self._rows[row][col]

    def _check_ref(self, ref):
        row, col = ref
        if not (0 <= row < len(self._rows) and 0 <= col < len(self._rows[row])):
            raise IndexError(f"palette cell {ref} out of range")

    def preview_bounds(self):
        return self._preview

    def _compute_layout(self, origin):
        pad = self.padding
        step = cell_step(self.cell_size, self.gap, self.scale)
        side = max(0.0, self.rows * step - pad)
        self._preview = Rect(origin.x + pad, origin.y + pad, side, side)
        grid_origin = Vec2(self._preview.right + pad, origin.y + pad)
        bounds = layout_rows(grid_origin, [len(r) for r in self._rows],
                             self.cell_size, self.gap, self.scale)
        outer = Rect(origin.x, origin.y,
                     pad + side + pad + self.columns * step,
                     pad + self.rows * step)
        return bounds, outer

    def _draw_cells(self, painter):
        border = QPen(QColor(config.THEME["cell_border"]), 1)
        self._draw_preview(painter, border)
        for ref, rect in self.iter_bounds():
            painter.setPen(border)
            painter.setBrush(QBrush(self.cell(ref)))
            painter.drawRect(rect.to_qrectf())
        ref = self.selected_ref()
        if ref is not None:
            self._draw_highlight(painter, self.cell_bounds(ref))

    def _draw_preview(self, painter, border):
        pv = self._preview
        if pv.width <= 0:
            return
        # Two overlapping squares, each 2/3 of the preview
        s = pv.width * 2 / 3
        painter.setPen(border)
        painter.setBrush(QBrush(self.secondary))
        painter.drawRect(Rect(pv.right - s, pv.bottom - s, s, s).to_qrectf())
        front = self.preview_color if self.preview_color is not None else self.primary
        painter.setBrush(QBrush(front))
        painter.drawRect(Rect(pv.x, pv.y, s, s).to_qrectf())
