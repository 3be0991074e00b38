"""Maze file format: validation, loading and saving of wall grids."""

__version__ = "1.0.0"
