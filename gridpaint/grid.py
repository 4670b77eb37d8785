"""Shared layout, hit-testing and selection for the grid widgets.

Every widget (palette, tool box, ribbon) is a grid of cells.  Layout is a
pure step that turns the cell arrangement, cell size, gap and scale into
screen rectangles; drawing only consumes those cached rectangles.  Pointer
coordinates are mapped back to cells by scanning the cache row-major.
"""

from PyQt5.QtCore import Qt
from PyQt5.QtGui import QColor, QPen

from . import config
from .geometry import Rect, Vec2


class LayoutNotReadyError(RuntimeError):
    """A widget was hit-tested before it was laid out."""


class Selection:
    """Single-selection register.

    ``None`` means nothing has been selected yet.  Once a reference is
    selected, ``last()`` keeps returning the most recent one; a pointer that
    misses every cell does not clear it.
    """

    def __init__(self):
        self._ref = None

    def select(self, ref):
        self._ref = ref

    def last(self):
        return self._ref

    @property
    def is_empty(self):
        return self._ref is None


# ---------------------------------------------------------------------------
# Layout helpers
# ---------------------------------------------------------------------------
def cell_step(cell_size, gap, scale):
    """Distance from one cell's origin to the next along an axis."""
    return cell_size * scale + gap * scale


def cell_rect(origin, row, col, cell_w, cell_h, gap, scale):
    x = origin.x + col * cell_step(cell_w, gap, scale)
    y = origin.y + row * cell_step(cell_h, gap, scale)
    return Rect(x, y, cell_w * scale, cell_h * scale)


def layout_rows(origin, row_lengths, cell_size, gap, scale):
    """Rectangles for a row-major grid of square cells.

    ``row_lengths[r]`` is the number of cells in row ``r``.
    """
    return [
        [cell_rect(origin, row, col, cell_size, cell_size, gap, scale) for col in range(length)]
        for row, length in enumerate(row_lengths)
    ]


def wrap(items, row_length):
    """Split a flat list into rows: item ``i`` lands at ``(i // L, i % L)``."""
    items = list(items)
    if row_length <= 0:
        return [items] if items else []
    return [items[i:i + row_length] for i in range(0, len(items), row_length)]


# ---------------------------------------------------------------------------
# Base widget
# ---------------------------------------------------------------------------
class GridWidget:
    """Base for widgets made of a grid of selectable cells.

    Subclasses provide ``_compute_layout``, ``cell``, ``_check_ref`` and
    ``_draw_cells``.  Cell references are ``(row, col)`` tuples unless a
    subclass overrides ``_to_ref`` / ``_to_grid``.
    """

    name = "grid"

    def __init__(self, cell_size, gap, scale=config.UI_SCALE):
        self.cell_size = cell_size
        self.gap = gap
        self.scale = scale
        self.selection = Selection()
        self._bounds = None
        self._origin = None
        self._outer = Rect()

    # --- Hooks ---
    def _compute_layout(self, origin):
        """Return ``(bounds, outer)`` for a layout at ``origin``."""
        raise NotImplementedError

    def _draw_cells(self, painter):
        raise NotImplementedError

    def cell(self, ref):
        raise NotImplementedError

    def _check_ref(self, ref):
        raise NotImplementedError

    def _to_ref(self, row, col):
        return (row, col)

    def _to_grid(self, ref):
        return ref

    # --- Layout / drawing ---
    @property
    def padding(self):
        return self.gap * self.scale

    @property
    def origin(self):
        return self._origin

    def invalidate(self):
        """Drop cached bounds; the next hit-test needs a fresh layout."""
        self._bounds = None

    def layout(self, origin):
        if not isinstance(origin, Vec2):
            origin = Vec2(*origin)
        self._bounds, self._outer = self._compute_layout(origin)
        self._origin = origin

    def draw(self, painter):
        if self._bounds is None:
            raise LayoutNotReadyError(f"{self.name} drawn before layout")
        painter.fillRect(self._outer.to_qrectf(), QColor(config.THEME["panel"]))
        self._draw_cells(painter)

    def render(self, painter, origin):
        self.layout(origin)
        self.draw(painter)

    def outer_bounds(self):
        return self._outer

    def cell_bounds(self, ref):
        if self._bounds is None:
            raise LayoutNotReadyError(f"{self.name} has no cached bounds")
        row, col = self._to_grid(ref)
        return self._bounds[row][col]

    def iter_bounds(self):
        """Yield ``(ref, rect)`` for every laid-out cell in row-major order."""
        for row, line in enumerate(self._bounds or ()):
            for col, rect in enumerate(line):
                if rect is not None:
                    yield self._to_ref(row, col), rect

    # --- Hit-testing / selection ---
    def hit_test(self, x, y):
        """Return the payload of the first cell containing ``(x, y)``, or None."""
        if self._bounds is None:
            raise LayoutNotReadyError(f"{self.name} hit-tested before layout")
        for ref, rect in self.iter_bounds():
            if rect.contains(x, y):
                self.selection.select(ref)
                return self.cell(ref)
        return None

    def select(self, ref):
        self._check_ref(ref)
        self.selection.select(ref)

    def selected_ref(self):
        return self.selection.last()

    def last_selected(self):
        ref = self.selection.last()
        if ref is None:
            return None
        return self.cell(ref)

    def _draw_highlight(self, painter, rect):
        painter.save()
        painter.setPen(QPen(QColor(config.THEME["highlight"]), max(1.0, 2 * self.scale)))
        painter.setBrush(Qt.NoBrush)
        painter.drawRect(rect.to_qrectf())
        painter.restore()
