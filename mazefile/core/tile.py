"""Tile model and grid helpers."""

from dataclasses import dataclass
from typing import Mapping

from .direction import DIRECTIONS, Direction


@dataclass(frozen=True)
class Tile:
    """Wall state of a single maze cell.

    Walls are stored in ``Direction.index`` order, one bool per side.
    """
    walls: tuple[bool, bool, bool, bool]

    def __post_init__(self) -> None:
        if not isinstance(self.walls, tuple) or len(self.walls) != len(DIRECTIONS):
            raise ValueError(
                f"Tile needs exactly {len(DIRECTIONS)} wall values, got {self.walls!r}"
            )
        if not all(isinstance(wall, bool) for wall in self.walls):
            raise ValueError(f"Wall values must be bools, got {self.walls!r}")

    @classmethod
    def from_mapping(cls, walls: Mapping[Direction, bool]) -> "Tile":
        """Build a tile from a direction -> wall mapping.

        Raises:
            ValueError: If a direction is missing or an unknown key is present.
        """
        unknown = [key for key in walls if not isinstance(key, Direction)]
        if unknown:
            raise ValueError(f"Unknown directions in tile walls: {unknown!r}")

        missing = [d.value for d in DIRECTIONS if d not in walls]
        if missing:
            raise ValueError(f"Missing walls for: {', '.join(missing)}")

        return cls(tuple(bool(walls[d]) for d in DIRECTIONS))

    @classmethod
    def open(cls) -> "Tile":
        """Tile with no walls."""
        return cls((False, False, False, False))

    @classmethod
    def closed(cls) -> "Tile":
        """Tile with all four walls."""
        return cls((True, True, True, True))

    def has_wall(self, direction: Direction) -> bool:
        return self.walls[direction.index]

    def wall_flags(self) -> list[int]:
        """Wall values as 0/1 in file order."""
        return [1 if wall else 0 for wall in self.walls]

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {d.value: self.walls[d.index] for d in DIRECTIONS}


# Outer index is X (column), inner index is Y. Columns may differ in height.
Grid = list[list[Tile]]


def grid_width(grid: Grid) -> int:
    """Number of columns in the grid."""
    return len(grid)


def grid_height(grid: Grid) -> int:
    """Height of the tallest column, 0 for an empty grid."""
    return max((len(column) for column in grid), default=0)


def is_rectangular(grid: Grid) -> bool:
    """Check whether every column has the same height."""
    return len({len(column) for column in grid}) <= 1
