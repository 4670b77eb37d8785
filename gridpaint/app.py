"""Qt window and entry point."""

import logging
import os
import sys

from PyQt5.QtCore import Qt
from PyQt5.QtGui import QCursor, QFontMetrics, QImage, QPainter, QPixmap
from PyQt5.QtWidgets import QApplication, QFileDialog, QMessageBox, QWidget

from . import config
from .ribbon import ribbon_font
from .session import PaintSession
from .tools import ToolKind

log = logging.getLogger("gridpaint")

TOOL_SHORTCUTS = {
    Qt.Key_P: ToolKind.PENCIL,
    Qt.Key_M: ToolKind.MARKER,
    Qt.Key_E: ToolKind.ERASER,
    Qt.Key_I: ToolKind.PICKER,
}


class PaintWindow(QWidget):
    """Fixed-size window that paints a ``PaintSession`` and feeds it input."""

    def __init__(self, session=None, parent=None):
        super().__init__(parent)
        if session is None:
            session = PaintSession(measure_text=QFontMetrics(ribbon_font()).horizontalAdvance)
        self.session = session
        self.session.actions["open"] = self._file_open
        self.session.actions["save"] = self._file_save
        for name, handler in list(self.session.actions.items()):
            self.session.actions[name] = self._logged(name, handler)
        self._cursor_cache = (None, None)

        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.StrongFocus)
        self.setFixedSize(*self.session.layout())
        self._update_title()

    def _logged(self, name, handler):
        def _handler():
            try:
                handler()
            except Exception as e:
                log.error(f"[action ERROR] {name}: {e}", exc_info=True)
        return _handler

    # --- Painting ---
    def paintEvent(self, event):
        painter = QPainter(self)
        self.session.render(painter)
        painter.end()

    def _refresh(self, dirty):
        """Repaint only the named regions, or everything if the layout grew."""
        new = self.session.layout()
        if new != (self.width(), self.height()):
            self.setFixedSize(*new)
            self.update()
        else:
            for name in dirty:
                self.update(self.session.region(name).to_qrect())
        self._update_title()

    def _update_title(self):
        self.setWindowTitle(self.session.title())

    # --- Cursor ---
    def _update_cursor(self, pos):
        if not self.session.canvas_bounds().contains(pos.x(), pos.y()):
            self.setCursor(Qt.ArrowCursor)
            return
        affordance = self.session.tools.active.cursor_affordance()
        if isinstance(affordance, QImage):
            key, cursor = self._cursor_cache
            if key is not affordance:
                pm = QPixmap.fromImage(affordance)
                cursor = QCursor(pm, pm.width() // 2, pm.height() // 2)
                self._cursor_cache = (affordance, cursor)
            self.setCursor(cursor)
        else:
            self.setCursor(affordance)

    # --- Mouse events ---
    def mousePressEvent(self, event):
        self.setFocus()
        self._refresh(self.session.press(event.x(), event.y(), event.button()))
        self._update_cursor(event.pos())

    def mouseMoveEvent(self, event):
        self._refresh(self.session.move(event.x(), event.y(), event.buttons()))
        self._update_cursor(event.pos())

    def mouseReleaseEvent(self, event):
        self._refresh(self.session.release(event.x(), event.y(), event.button()))
        self._update_cursor(event.pos())

    def wheelEvent(self, event):
        if not event.modifiers() & Qt.ShiftModifier:
            super().wheelEvent(event)
            return
        delta = event.angleDelta().y() or event.angleDelta().x()
        if delta:
            self._refresh(self.session.step_size(1 if delta > 0 else -1))
            self._update_cursor(event.pos())
        event.accept()

    def leaveEvent(self, event):
        self.setCursor(Qt.ArrowCursor)

    # --- Keyboard ---
    def keyPressEvent(self, event):
        log.info(f"[key] {event.key()} mods={int(event.modifiers())}")
        key = event.key()
        ctrl = event.modifiers() & Qt.ControlModifier
        if ctrl and key == Qt.Key_Z:
            self._refresh(self.session.run_action("undo"))
        elif ctrl and key == Qt.Key_N:
            self._refresh(self.session.run_action("new"))
        elif ctrl and key == Qt.Key_O:
            self._refresh(self.session.run_action("open"))
        elif ctrl and key == Qt.Key_S:
            self._refresh(self.session.run_action("save"))
        elif not ctrl and key in TOOL_SHORTCUTS:
            self.session.select_tool(TOOL_SHORTCUTS[key])
            self._refresh({"toolbox"})
        else:
            super().keyPressEvent(event)

    # --- File actions ---
    def _start_dir(self):
        if self.session.file_path:
            return os.path.dirname(self.session.file_path)
        return config.DEFAULT_DIR

    def _file_open(self):
        path, _ = QFileDialog.getOpenFileName(
            self, "Open Image", self._start_dir(),
            "Images (*.png *.jpg *.jpeg *.bmp *.tga);;All Files (*)")
        log.info(f"[open] Dialog returned: {path!r}")
        if path:
            self.open_file(path)

    def open_file(self, path):
        """Load an image file into the canvas."""
        log.info(f"[open] Loading: {path}")
        if not self.session.open_file(path):
            QMessageBox.warning(self, config.APP_NAME, f"Could not open {path}")
        self.update()
        self._update_title()

    def _file_save(self):
        path = self.session.file_path
        if not path:
            path, _ = QFileDialog.getSaveFileName(
                self, "Save Image", self._start_dir(),
                "PNG (*.png);;JPEG (*.jpg *.jpeg);;BMP (*.bmp);;TGA (*.tga);;All Files (*)")
            if not path:
                return
        if self.session.save_file(path) is None:
            QMessageBox.warning(self, config.APP_NAME, f"Could not save to {path}")
        self._update_title()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def main():
    logging.basicConfig(filename=config.LOG_PATH, level=logging.DEBUG,
                        format="%(asctime)s %(message)s", force=True)
    import traceback

    def _excepthook(t, v, tb):
        log.error("".join(traceback.format_exception(t, v, tb)))
        sys.__excepthook__(t, v, tb)
    sys.excepthook = _excepthook
    log.info("Starting")
    app = QApplication(sys.argv)
    app.setApplicationName(config.APP_NAME)
    window = PaintWindow()
    window.show()
    # Load file from command line: gridpaint image.png
    if len(sys.argv) > 1:
        window.open_file(sys.argv[1])
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
