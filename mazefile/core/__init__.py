# Core module
from .direction import Direction, DIRECTIONS
from .tile import Tile, Grid, grid_width, grid_height, is_rectangular
from .maze_file import (
    MazeFileError,
    MazeValidationError,
    MazeFileChangedError,
    ValidatedMazeFile,
    validate_maze_file,
    is_valid_maze_file,
    load_maze,
    save_maze,
    validate_maze_text,
    parse_maze_text,
    maze_to_text,
    format_tile_line,
    load_all_mazes,
)

__all__ = [
    "Direction",
    "DIRECTIONS",
    "Tile",
    "Grid",
    "grid_width",
    "grid_height",
    "is_rectangular",
    "MazeFileError",
    "MazeValidationError",
    "MazeFileChangedError",
    "ValidatedMazeFile",
    "validate_maze_file",
    "is_valid_maze_file",
    "load_maze",
    "save_maze",
    "validate_maze_text",
    "parse_maze_text",
    "maze_to_text",
    "format_tile_line",
    "load_all_mazes",
]
