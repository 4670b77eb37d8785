"""Immutable point and rectangle values used by widget layout."""

from dataclasses import dataclass

from PyQt5.QtCore import QPointF, QRect, QRectF


@dataclass(frozen=True)
class Vec2:
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other):
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        return Vec2(self.x - other.x, self.y - other.y)

    def to_qpointf(self):
        return QPointF(self.x, self.y)


@dataclass(frozen=True)
class Rect:
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def origin(self):
        return Vec2(self.x, self.y)

    @property
    def right(self):
        return self.x + self.width

    @property
    def bottom(self):
        return self.y + self.height

    @property
    def center(self):
        return Vec2(self.x + self.width / 2, self.y + self.height / 2)

    def contains(self, x, y):
        """Inclusive on all four edges."""
        return self.x <= x <= self.right and self.y <= y <= self.bottom

    def to_qrectf(self):
        return QRectF(self.x, self.y, self.width, self.height)

    def to_qrect(self):
        """Integer rect covering this one, for repaint regions."""
        left, top = int(self.x), int(self.y)
        return QRect(left, top, int(self.right + 1) - left, int(self.bottom + 1) - top)
