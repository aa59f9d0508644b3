"""Raster pixel editor engine: pixel grid, drawing tools, history and touch input mapping."""

__version__ = "0.1.0"
