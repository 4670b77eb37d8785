"""GridPaint: a small raster paint program built from grid widgets."""

__version__ = "0.1.0"
