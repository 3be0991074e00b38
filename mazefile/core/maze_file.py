"""
Maze file validation, loading and saving.

Maze Format (one line per tile, column by column):
    <X> <Y> <wallNorth> <wallEast> <wallSouth> <wallWest>

    - X and Y are base 10 integers, wall values are 0 or 1
    - The first line is (0, 0)
    - Within a column Y starts at 0 and grows by exactly 1 per line
    - The next column starts at X + 1 with Y = 0
    - Columns may have different heights

Validation is a single forward pass that only tracks the next legal
(X, Y) pair. Loading requires a ValidatedMazeFile, which can only be
obtained from validate_maze_file().
"""

import io
import logging
import os
import re
from pathlib import Path
from typing import Iterable, Optional

from .direction import DIRECTIONS
from .tile import Grid, Tile

logger = logging.getLogger(__name__)

TOKENS_PER_LINE = 6
WALL_TOKEN_OFFSET = 2
WALL_VALUES = {0, 1}
DEFAULT_SUFFIX = ".maz"

# Unsigned only: coordinates are non-negative and walls are 0 or 1
_INT_PATTERN = re.compile(r"[0-9]+")
_TOKEN_KEY = object()


class MazeFileError(Exception):
    """Base exception for maze file errors."""

    pass


class MazeValidationError(MazeFileError):
    """Exception raised when maze text breaks a format rule."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        super().__init__(message)
        self.line_number = line_number


class MazeFileChangedError(MazeFileError):
    """Exception raised when a validated maze file changed before loading."""

    pass


class ValidatedMazeFile:
    """Proof that a maze file passed validation.

    Only validate_maze_file() creates these. The file's size and
    modification time are recorded so load_maze() can detect edits made
    after validation.
    """

    __slots__ = ("path", "size", "mtime_ns")

    def __init__(self, path: Path, size: int, mtime_ns: int, *, _key: object = None):
        if _key is not _TOKEN_KEY:
            raise TypeError(
                "ValidatedMazeFile instances are only created by validate_maze_file()"
            )
        self.path = path
        self.size = size
        self.mtime_ns = mtime_ns

    def is_current(self) -> bool:
        """Check that the file still matches what was validated."""
        try:
            stat = self.path.stat()
        except OSError:
            return False
        return (stat.st_size, stat.st_mtime_ns) == (self.size, self.mtime_ns)

    def __repr__(self) -> str:
        return f"<ValidatedMazeFile {self.path}>"


class _MazeCursor:
    """Next legal (X, Y) pair during a validation pass."""

    def __init__(self) -> None:
        self.expected_x = 0
        self.expected_y = 0
        self.started = False

    def advance(self, x: int, y: int, line_number: int) -> None:
        if not self.started:
            if (x, y) != (0, 0):
                raise MazeValidationError(
                    f"Line {line_number} starts the maze at ({x}, {y}), "
                    f"the first tile must be (0, 0)",
                    line_number,
                )
            self.started = True
            self.expected_y = 1
            return

        if x == self.expected_x and y == self.expected_y:
            self.expected_y += 1
        elif x == self.expected_x + 1 and y == 0:
            self.expected_x += 1
            self.expected_y = 1
        else:
            raise MazeValidationError(
                f"Line {line_number} has unexpected x and y values of {x} and {y}, "
                f"expected ({self.expected_x}, {self.expected_y}) "
                f"or ({self.expected_x + 1}, 0)",
                line_number,
            )


def _check_line(line: str, line_number: int, cursor: _MazeCursor) -> None:
    """Apply every format rule to one line, in order."""
    tokens = line.split()

    if len(tokens) != TOKENS_PER_LINE:
        raise MazeValidationError(
            f"Line {line_number} contains {len(tokens)} entries, "
            f"expected {TOKENS_PER_LINE}",
            line_number,
        )

    values = []
    for position, token in enumerate(tokens, start=1):
        if not _INT_PATTERN.fullmatch(token):
            raise MazeValidationError(
                f"Entry '{token}' on line {line_number} in position {position} "
                f"is not an integer",
                line_number,
            )
        try:
            values.append(int(token))
        except ValueError as e:
            # Digit strings past the interpreter's conversion limit
            raise MazeValidationError(
                f"Entry on line {line_number} in position {position} "
                f"is not a usable integer ({len(token)} digits)",
                line_number,
            ) from e

    for position, value in enumerate(values[WALL_TOKEN_OFFSET:], start=WALL_TOKEN_OFFSET + 1):
        if value not in WALL_VALUES:
            raise MazeValidationError(
                f"Invalid wall value {value} on line {line_number} in position {position}. "
                f"Wall values must be either 0 or 1",
                line_number,
            )

    cursor.advance(values[0], values[1], line_number)


def _check_lines(lines: Iterable[str]) -> None:
    """Validate a stream of maze lines in a single pass.

    Raises:
        MazeValidationError: On the first rule violation, or if there are no lines.
    """
    cursor = _MazeCursor()
    line_number = 0

    for line_number, line in enumerate(lines, start=1):
        _check_line(line, line_number, cursor)

    if line_number == 0:
        raise MazeValidationError("Maze is empty")


def _build_grid(lines: Iterable[str]) -> Grid:
    """Build the grid from lines that are known to be valid."""
    maze: Grid = []
    column: list[Tile] = []

    for line in lines:
        tokens = line.split()
        tile = Tile(tuple(
            int(tokens[WALL_TOKEN_OFFSET + direction.index]) == 1
            for direction in DIRECTIONS
        ))

        # A larger X means the current column is complete
        if len(maze) < int(tokens[0]):
            maze.append(column)
            column = []

        column.append(tile)

    # The last column has no following line to close it
    maze.append(column)

    return maze


def validate_maze_file(file_path: Path | str) -> Optional[ValidatedMazeFile]:
    """
    Validate a maze file, logging the reason for any rejection.

    Args:
        file_path: Path to the maze file.

    Returns:
        ValidatedMazeFile to pass to load_maze(), or None if the file
        is missing, unreadable, empty or malformed.
    """
    file_path = Path(file_path)

    # os.path.isfile() reports every stat failure as False
    if not os.path.isfile(file_path):
        logger.warning(f'"{file_path}" is not a file')
        return None

    try:
        with file_path.open("r", encoding="utf-8") as f:
            stat = os.fstat(f.fileno())
            _check_lines(f)
    except MazeValidationError as e:
        logger.warning(f'"{file_path}" is not a valid maze file: {e}')
        return None
    except UnicodeDecodeError as e:
        logger.warning(f'"{file_path}" is not a text file: {e}')
        return None
    except OSError as e:
        logger.warning(f'Could not read "{file_path}" for maze validation: {e}')
        return None

    return ValidatedMazeFile(file_path, stat.st_size, stat.st_mtime_ns, _key=_TOKEN_KEY)


def is_valid_maze_file(file_path: Path | str) -> bool:
    """Check whether a file is a valid maze file."""
    return validate_maze_file(file_path) is not None


def load_maze(validated: ValidatedMazeFile) -> Grid:
    """
    Load a maze that has already passed validation.

    The lines are not checked again. The only runtime check is a stat
    of the file, compared with the one taken during validation.

    Args:
        validated: Result of a successful validate_maze_file() call.

    Returns:
        Grid of tiles, indexed [x][y].

    Raises:
        TypeError: If not given a ValidatedMazeFile.
        MazeFileChangedError: If the file changed since it was validated.
    """
    if not isinstance(validated, ValidatedMazeFile):
        raise TypeError(
            f"load_maze() needs a ValidatedMazeFile, got {type(validated).__name__}"
        )

    if not validated.is_current():
        raise MazeFileChangedError(
            f'"{validated.path}" changed after it was validated'
        )

    with validated.path.open("r", encoding="utf-8") as f:
        return _build_grid(f)


def validate_maze_text(maze_text: str) -> tuple[bool, Optional[str]]:
    """
    Validate maze text without raising exceptions.

    Args:
        maze_text: Contents of a maze file.

    Returns:
        Tuple of (is_valid, error_message).
        error_message is None if valid.
    """
    try:
        _check_lines(io.StringIO(maze_text, newline=None))
        return True, None
    except MazeValidationError as e:
        return False, str(e)


def parse_maze_text(maze_text: str) -> Grid:
    """
    Validate and parse maze text.

    Raises:
        MazeValidationError: If the text breaks a format rule.
    """
    _check_lines(io.StringIO(maze_text, newline=None))
    return _build_grid(io.StringIO(maze_text, newline=None))


def format_tile_line(x: int, y: int, tile: Tile) -> str:
    """Format one tile as a maze file line, including the newline."""
    fields = [x, y, *tile.wall_flags()]
    return " ".join(str(field) for field in fields) + "\n"


def _iter_lines(grid: Grid) -> Iterable[str]:
    for x, column in enumerate(grid):
        for y, tile in enumerate(column):
            yield format_tile_line(x, y, tile)


def _find_empty_column(grid: Grid) -> Optional[int]:
    for x, column in enumerate(grid):
        if not column:
            return x
    return None


def maze_to_text(grid: Grid) -> str:
    """Serialize a grid to maze file text."""
    return "".join(_iter_lines(grid))


def save_maze(grid: Grid, file_path: Path | str) -> None:
    """
    Write a grid to a maze file, replacing any existing file.

    The lines go to a temporary file next to the target, which then
    replaces it, so a failed write leaves any existing file untouched.
    Failures are logged and the function returns without raising.

    Args:
        grid: Grid of tiles, indexed [x][y].
        file_path: Destination path.
    """
    file_path = Path(file_path)

    empty_column = _find_empty_column(grid)
    if empty_column is not None:
        logger.warning(
            f'Unable to save maze to "{file_path}": column {empty_column} has no tiles'
        )
        return

    temp_path = file_path.with_name(f".{file_path.name}.tmp")
    try:
        with temp_path.open("w", encoding="utf-8", newline="\n") as f:
            f.writelines(_iter_lines(grid))
        os.replace(temp_path, file_path)
    except OSError as e:
        logger.warning(f'Unable to save maze to "{file_path}": {e}')
        try:
            temp_path.unlink(missing_ok=True)
        except OSError as cleanup_error:
            logger.warning(f'Could not remove "{temp_path}": {cleanup_error}')
        return

    logger.debug(f'Saved {len(grid)} columns to "{file_path}"')


def load_all_mazes(
    mazes_dir: Path | str,
    suffix: str = DEFAULT_SUFFIX,
) -> dict[str, Grid]:
    """
    Load all valid maze files from a directory.

    Invalid files are logged and skipped.

    Args:
        mazes_dir: Path to the directory containing maze files.
        suffix: File suffix of maze files.

    Returns:
        Dict mapping file stem to grid, in file name order.

    Raises:
        FileNotFoundError: If the directory doesn't exist.
        NotADirectoryError: If the path is not a directory.
    """
    mazes_dir = Path(mazes_dir)

    if not mazes_dir.exists():
        raise FileNotFoundError(f"Mazes directory not found: {mazes_dir}")

    if not mazes_dir.is_dir():
        raise NotADirectoryError(f"Path is not a directory: {mazes_dir}")

    mazes = {}
    for maze_file in sorted(mazes_dir.glob(f"*{suffix}")):
        validated = validate_maze_file(maze_file)
        if validated is None:
            logger.warning(f"Skipping {maze_file.name}")
            continue
        mazes[maze_file.stem] = load_maze(validated)

    return mazes
