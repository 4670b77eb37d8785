"""Fixed-size pixel buffer the tools draw on."""

import logging
import os

from PyQt5.QtCore import QRect, Qt
from PyQt5.QtGui import QColor, QImage, QPainter

from . import config

log = logging.getLogger("gridpaint")


def resolve_save_path(path):
    """Append the default extension unless ``path`` has a recognised one."""
    _, ext = os.path.splitext(path)
    if ext.lower() not in config.SAVE_EXTENSIONS:
        path += config.DEFAULT_SAVE_EXTENSION
    return path


class PixelCanvas:
    """ARGB32 image of a fixed size.

    Loading an image draws it into the existing area (cropped to fit), so
    undo snapshots always cover the same region.
    """

    def __init__(self, width=config.CANVAS_WIDTH, height=config.CANVAS_HEIGHT,
                 background=Qt.white):
        self.image = QImage(width, height, QImage.Format_ARGB32)
        self.background = QColor(background)
        self.image.fill(self.background)

    @property
    def width(self):
        return self.image.width()

    @property
    def height(self):
        return self.image.height()

    def contains(self, x, y):
        return 0 <= x < self.width and 0 <= y < self.height

    def pixel_color(self, x, y):
        if not self.contains(x, y):
            return None
        return QColor(self.image.pixelColor(x, y))

    def make_painter(self, antialias=False):
        p = QPainter(self.image)
        p.setRenderHint(QPainter.Antialiasing, antialias)
        return p

    # --- Regions ---
    def read_region(self, x, y, w, h):
        return self.image.copy(QRect(x, y, w, h))

    def write_region(self, snapshot, x, y):
        p = QPainter(self.image)
        p.setCompositionMode(QPainter.CompositionMode_Source)
        p.drawImage(x, y, snapshot)
        p.end()

    def snapshot(self):
        return self.read_region(0, 0, self.width, self.height)

    def clear(self, color=None):
        self.image.fill(QColor(color) if color is not None else self.background)

    # --- Files ---
    def load_image_from_path(self, path):
        img = QImage(path)
        if img.isNull():
            log.error(f"[open] could not decode {path}")
            return False
        self.clear()
        p = QPainter(self.image)
        p.drawImage(0, 0, img)
        p.end()
        log.info(f"[open] {path}: {img.width()}x{img.height()} into {self.width}x{self.height}")
        return True

    def save_image_to_path(self, path):
        """Write the canvas; returns the path actually written or None."""
        path = resolve_save_path(path)
        if self.image.save(path):
            log.info(f"[save] OK {path}")
            return path
        log.error(f"[save] FAILED: {path}")
        return None
