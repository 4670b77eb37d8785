import pytest
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QColor, QImage

from gridpaint.canvas import PixelCanvas
from gridpaint.geometry import Vec2
from gridpaint.tools import Tool, ToolKind, ToolSize, ToolStateMachine

RED = QColor(Qt.red)
BLUE = QColor(Qt.blue)


@pytest.fixture
def canvas():
    return PixelCanvas(32, 32)


@pytest.fixture
def machine(canvas):
    return ToolStateMachine(canvas)


def test_default_registry_and_active_tool(machine):
    assert [t.kind for t in machine.tools()] == [
        ToolKind.PENCIL, ToolKind.MARKER, ToolKind.ERASER, ToolKind.PICKER]
    assert machine.active.kind == ToolKind.PENCIL


def test_activate_switches_only_on_request(machine, canvas):
    machine.begin_or_continue_stroke(Vec2(1, 1), (RED, BLUE), Qt.LeftButton)
    assert machine.active.kind == ToolKind.PENCIL
    tool = machine.activate(ToolKind.ERASER)
    assert machine.active is tool
    assert machine.get(ToolKind.ERASER) is tool


def test_picker_is_not_sizeable_and_ignores_set_size(machine):
    picker = machine.get(ToolKind.PICKER)
    assert not picker.is_sizeable()
    before = picker.current_size()
    picker.set_size(ToolSize.XLARGE)
    assert picker.current_size() == before


def test_eraser_cursor_regenerated_inside_set_size(machine):
    eraser = machine.get(ToolKind.ERASER)
    eraser.set_size(ToolSize.SMALL)
    small = eraser.cursor_affordance()
    assert isinstance(small, QImage)
    assert small.width() == eraser.stroke_width() + 2

    eraser.set_size(ToolSize.XLARGE)
    large = eraser.cursor_affordance()
    assert large is not small
    assert large.width() == 4 * 4 + 2
    # Outer ring opaque black, thicker ring at large sizes, clear middle
    assert large.pixelColor(0, 0) == QColor(Qt.black)
    assert large.pixelColor(1, 1) == QColor(Qt.black)
    assert large.pixelColor(2, 2) == QColor(Qt.white)
    mid = large.width() // 2
    assert large.pixelColor(mid, mid).alpha() == 0


def test_non_eraser_cursor_is_a_shape(machine):
    assert machine.get(ToolKind.PENCIL).cursor_affordance() == Qt.CrossCursor


def test_pencil_draws_with_button_color(machine, canvas):
    machine.begin_or_continue_stroke(Vec2(5, 5), (RED, BLUE), Qt.LeftButton)
    machine.begin_or_continue_stroke(Vec2(12, 5), (RED, BLUE), Qt.LeftButton)
    machine.complete_stroke(Vec2(12, 5), (RED, BLUE), Qt.LeftButton)
    assert canvas.pixel_color(5, 5) == RED
    assert canvas.pixel_color(9, 5) == RED
    assert canvas.pixel_color(9, 9) == QColor(Qt.white)

    machine.begin_or_continue_stroke(Vec2(20, 20), (RED, BLUE), Qt.RightButton)
    assert canvas.pixel_color(20, 20) == BLUE


def test_complete_stroke_ends_segment(machine, canvas):
    pencil = machine.active
    machine.begin_or_continue_stroke(Vec2(2, 2), (RED, BLUE), Qt.LeftButton)
    machine.complete_stroke(Vec2(2, 2), (RED, BLUE), Qt.LeftButton)
    machine.begin_or_continue_stroke(Vec2(2, 20), (RED, BLUE), Qt.LeftButton)
    # No line joined the two strokes
    assert canvas.pixel_color(2, 11) == QColor(Qt.white)
    assert pencil.current_size() == ToolSize.SMALL


def test_eraser_paints_secondary_color(machine, canvas):
    canvas.clear(Qt.black)
    machine.activate(ToolKind.ERASER)
    machine.begin_or_continue_stroke(Vec2(10, 10), (RED, BLUE), Qt.LeftButton)
    assert canvas.pixel_color(10, 10) == BLUE


def test_picker_updates_picked_color_every_sample(machine, canvas):
    canvas.image.setPixelColor(3, 3, QColor(Qt.green))
    picker = machine.activate(ToolKind.PICKER)
    machine.begin_or_continue_stroke(Vec2(3, 3), (RED, BLUE), Qt.LeftButton)
    assert picker.picked_color == QColor(Qt.green)
    machine.begin_or_continue_stroke(Vec2(10, 10), (RED, BLUE), Qt.LeftButton)
    assert picker.picked_color == QColor(Qt.white)
    # Outside the canvas leaves the last sample
    machine.begin_or_continue_stroke(Vec2(100, 100), (RED, BLUE), Qt.LeftButton)
    assert picker.picked_color == QColor(Qt.white)


def test_step_active_size_clamps(machine):
    machine.step_active_size(+1)
    assert machine.active.current_size() == ToolSize.MEDIUM
    for _ in range(10):
        machine.step_active_size(+1)
    assert machine.active.current_size() == ToolSize.XLARGE
    for _ in range(10):
        machine.step_active_size(-1)
    assert machine.active.current_size() == ToolSize.SMALL


def test_stroke_width_scales_with_size(machine):
    marker = machine.get(ToolKind.MARKER)
    marker.set_size(ToolSize.LARGE)
    assert marker.stroke_width() == 12


def test_register_tool_with_custom_handlers(canvas):
    calls = []
    custom = Tool(ToolKind.MARKER, canvas, name="Stamp",
                  stroke=lambda tool, point, colors, button: calls.append(("stroke", point)),
                  complete=lambda tool, point, colors, button: calls.append(("done", point)))
    machine = ToolStateMachine(canvas, tools=[custom])
    machine.begin_or_continue_stroke(Vec2(1, 2), (RED, BLUE), Qt.LeftButton)
    machine.complete_stroke(Vec2(3, 4), (RED, BLUE), Qt.LeftButton)
    assert calls == [("stroke", Vec2(1, 2)), ("done", Vec2(3, 4))]


def test_empty_registry_rejected(canvas):
    with pytest.raises(ValueError):
        ToolStateMachine(canvas, tools=[])
