import pytest
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QImage, QPainter

from gridpaint.geometry import Vec2
from gridpaint.grid import LayoutNotReadyError
from gridpaint.ribbon import Ribbon, RibbonButton


def _measure(text):
    return len(text) * 6


BUTTONS = [("New", "new"), ("Open", "open"), ("Clear", "clear")]


def test_buttons_are_laid_out_in_one_row_with_label_widths():
    ribbon = Ribbon(BUTTONS, measure_text=_measure, height=20, gap=2, text_padding=8)
    ribbon.layout(Vec2(0, 0))
    rects = [ribbon.cell_bounds(i) for i in range(3)]
    assert [r.width for r in rects] == [3 * 6 + 16, 4 * 6 + 16, 5 * 6 + 16]
    assert len({r.y for r in rects}) == 1
    for left, right in zip(rects, rects[1:]):
        assert right.x == left.right + 2
    assert ribbon.outer_bounds().width == rects[-1].right + 2
    assert ribbon.outer_bounds().height == 24


def test_scale_multiplies_widths_and_height():
    plain = Ribbon(BUTTONS, measure_text=_measure)
    double = Ribbon(BUTTONS, measure_text=_measure, scale=2.0)
    plain.layout(Vec2(0, 0))
    double.layout(Vec2(0, 0))
    assert double.outer_bounds().width == 2 * plain.outer_bounds().width
    assert double.outer_bounds().height == 2 * plain.outer_bounds().height


def test_min_width_stretches_outer_bounds():
    ribbon = Ribbon(BUTTONS, measure_text=_measure, min_width=500)
    ribbon.layout(Vec2(0, 0))
    assert ribbon.outer_bounds().width == 500


def test_hit_returns_button_and_flat_index():
    ribbon = Ribbon(BUTTONS, measure_text=_measure)
    ribbon.layout(Vec2(0, 0))
    rect = ribbon.cell_bounds(1)
    hit = ribbon.hit_test(rect.center.x, rect.center.y)
    assert hit == RibbonButton("Open", "open")
    assert ribbon.selected_ref() == 1
    assert ribbon.last_selected().action == "open"


def test_hit_before_layout_is_rejected():
    with pytest.raises(LayoutNotReadyError):
        Ribbon(BUTTONS, measure_text=_measure).hit_test(0, 0)


def test_select_out_of_range_raises():
    ribbon = Ribbon(BUTTONS, measure_text=_measure)
    with pytest.raises(IndexError):
        ribbon.select(3)


def test_hold_state_is_per_ribbon():
    a = Ribbon(BUTTONS, measure_text=_measure)
    b = Ribbon(BUTTONS, measure_text=_measure)
    a.press(2)
    assert a.held == 2
    assert b.held is None
    assert a.release()
    assert a.held is None
    assert not a.release()


def test_index_of_action():
    ribbon = Ribbon(BUTTONS, measure_text=_measure)
    assert ribbon.index_of("clear") == 2
    assert ribbon.index_of("missing") is None


def test_default_measure_uses_font_metrics():
    ribbon = Ribbon()
    ribbon.layout(Vec2(0, 0))
    assert ribbon.outer_bounds().width > 0
    img = QImage(int(ribbon.outer_bounds().width) + 1, 40, QImage.Format_ARGB32)
    img.fill(Qt.white)
    p = QPainter(img)
    ribbon.draw(p)
    p.end()
