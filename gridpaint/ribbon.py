"""Single-row command ribbon."""

from collections import namedtuple

from PyQt5.QtCore import Qt
from PyQt5.QtGui import QColor, QFont, QFontMetrics, QPen

from . import config
from .geometry import Rect
from .grid import GridWidget

RibbonButton = namedtuple("RibbonButton", "label action")


def ribbon_font(scale=1.0):
    font = QFont(config.RIBBON_FONT_FAMILY)
    font.setPixelSize(max(1, round(config.RIBBON_FONT_SIZE * 4 / 3 * scale)))
    return font


class Ribbon(GridWidget):
    """A 1xN row of text buttons whose widths follow their labels.

    Cell references are plain indices.  ``measure_text`` returns the
    unscaled width of a label; it defaults to the ribbon font's metrics.
    The ribbon grows to fit every button and is never narrower than
    ``min_width``.
    """

    name = "ribbon"

    def __init__(self, buttons=None, measure_text=None, height=config.RIBBON_HEIGHT,
                 gap=config.RIBBON_GAP, scale=config.UI_SCALE,
                 text_padding=config.RIBBON_TEXT_PADDING, min_width=0):
        super().__init__(height, gap, scale)
        if buttons is None:
            buttons = config.RIBBON_BUTTONS
        self.buttons = [b if isinstance(b, RibbonButton) else RibbonButton(*b) for b in buttons]
        self.measure_text = measure_text
        self.text_padding = text_padding
        self.min_width = min_width
        self._held = None

    def _measure(self, label):
        if self.measure_text is None:
            self.measure_text = QFontMetrics(ribbon_font()).horizontalAdvance
        return self.measure_text(label)

    # --- Cells ---
    def cell(self, ref):
        return self.buttons[ref]

    def _check_ref(self, ref):
        if not 0 <= ref < len(self.buttons):
            raise IndexError(f"ribbon button {ref} out of range")

    def _to_ref(self, row, col):
        return col

    def _to_grid(self, ref):
        return (0, ref)

    def index_of(self, action):
        for i, button in enumerate(self.buttons):
            if button.action == action:
                return i
        return None

    # --- Hold state ---
    @property
    def held(self):
        return self._held

    def press(self, ref):
        self._check_ref(ref)
        self._held = ref

    def release(self):
        was_held = self._held is not None
        self._held = None
        return was_held

    # --- Layout / drawing ---
    def _compute_layout(self, origin):
        pad = self.padding
        height = self.cell_size * self.scale
        x = origin.x + pad
        row = []
        for button in self.buttons:
            width = (self._measure(button.label) + 2 * self.text_padding) * self.scale
            row.append(Rect(x, origin.y + pad, width, height))
            x += width + pad
        outer = Rect(origin.x, origin.y, max(x - origin.x, self.min_width), pad + height + pad)
        return [row], outer

    def _draw_cells(self, painter):
        painter.setFont(ribbon_font(self.scale))
        for ref, rect in self.iter_bounds():
            if ref == self._held:
                painter.fillRect(rect.to_qrectf(), QColor(config.THEME["pressed"]))
            painter.setPen(QPen(QColor(config.THEME["cell_border"]), 1))
            painter.setBrush(Qt.NoBrush)
            painter.drawRect(rect.to_qrectf())
            painter.setPen(QColor(config.THEME["text"]))
            painter.drawText(rect.to_qrectf(), Qt.AlignCenter, self.buttons[ref].label)
