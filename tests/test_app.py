from PyQt5.QtCore import QPoint, Qt
from PyQt5.QtGui import QColor
from PyQt5.QtTest import QTest

from gridpaint import config
from gridpaint.app import PaintWindow
from gridpaint.canvas import PixelCanvas
from gridpaint.session import PaintSession
from gridpaint.tools import ToolKind


def _window():
    session = PaintSession(canvas=PixelCanvas(80, 60), measure_text=lambda text: len(text) * 6)
    return PaintWindow(session)


def test_window_is_sized_from_layout():
    window = _window()
    assert (window.width(), window.height()) == window.session.size
    assert window.windowTitle() == f"Untitled - {config.APP_NAME}"


def test_tool_shortcuts():
    window = _window()
    QTest.keyClick(window, Qt.Key_E)
    assert window.session.tools.active.kind == ToolKind.ERASER
    QTest.keyClick(window, Qt.Key_I)
    assert window.session.tools.active.kind == ToolKind.PICKER
    assert window.session.toolbox.last_selected().kind == ToolKind.PICKER


def test_mouse_click_on_palette():
    window = _window()
    c = window.session.palette.cell_bounds((0, 2)).center
    QTest.mouseClick(window, Qt.LeftButton, Qt.NoModifier, QPoint(int(c.x), int(c.y)))
    assert window.session.palette.primary == QColor(config.PALETTE_COLORS[2])


def test_draw_and_ctrl_z():
    window = _window()
    origin = window.session.canvas_origin
    pos = QPoint(int(origin.x) + 10, int(origin.y) + 10)
    QTest.mouseClick(window, Qt.LeftButton, Qt.NoModifier, pos)
    assert window.session.canvas.pixel_color(10, 10) == QColor(Qt.black)
    assert window.windowTitle().startswith("Untitled*")
    QTest.keyClick(window, Qt.Key_Z, Qt.ControlModifier)
    assert window.session.canvas.pixel_color(10, 10) == QColor(Qt.white)


def test_failing_action_is_logged_not_raised():
    window = _window()

    def boom():
        raise RuntimeError("boom")

    window.session.actions["clear"] = window._logged("clear", boom)
    assert window.session.run_action("clear") == {"canvas"}


def test_grab_renders_without_error():
    window = _window()
    image = window.grab().toImage()
    assert image.width() == window.width()
