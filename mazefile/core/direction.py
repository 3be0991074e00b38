"""
Cardinal directions for maze tiles.

The index of each direction is part of the maze file format: the wall flag
for a direction lives in token ``3 + index`` (1-based) of every line. The
indices are declared explicitly so that reordering the members below can
never change the on-disk layout.

    NORTH = 0, EAST = 1, SOUTH = 2, WEST = 3
"""

from enum import Enum


class Direction(Enum):
    """The four sides of a maze tile."""
    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"

    @property
    def index(self) -> int:
        """Stable position of this direction's wall flag in a maze file line."""
        return _INDICES[self]

    @classmethod
    def from_index(cls, index: int) -> "Direction":
        """Get the direction stored at the given wall flag position."""
        if not 0 <= index < len(DIRECTIONS):
            raise ValueError(f"Invalid direction index: {index}")
        return DIRECTIONS[index]

    @property
    def delta(self) -> tuple[int, int]:
        """Get (dx, dy) for this direction. Y grows northward."""
        deltas = {
            Direction.NORTH: (0, 1),
            Direction.EAST: (1, 0),
            Direction.SOUTH: (0, -1),
            Direction.WEST: (-1, 0),
        }
        return deltas[self]

    @property
    def opposite(self) -> "Direction":
        """Get the direction facing the other way."""
        return DIRECTIONS[(self.index + 2) % len(DIRECTIONS)]


_INDICES = {
    Direction.NORTH: 0,
    Direction.EAST: 1,
    Direction.SOUTH: 2,
    Direction.WEST: 3,
}

# Wall flag order used by the parser and the serializer
DIRECTIONS: tuple[Direction, ...] = tuple(sorted(_INDICES, key=_INDICES.__getitem__))
