"""Maze schemas for request/response validation."""

from typing import Annotated, Optional

from pydantic import BaseModel, Field

from mazefile.core import Direction, Grid, Tile, grid_height, grid_width, is_rectangular


class TileSchema(BaseModel):
    """Walls of a single tile."""

    north: bool
    east: bool
    south: bool
    west: bool

    @classmethod
    def from_tile(cls, tile: Tile) -> "TileSchema":
        return cls(**tile.to_dict())

    def to_tile(self) -> Tile:
        return Tile.from_mapping({
            Direction.NORTH: self.north,
            Direction.EAST: self.east,
            Direction.SOUTH: self.south,
            Direction.WEST: self.west,
        })


class MazeBase(BaseModel):
    """Base maze schema with common fields."""

    name: str
    width: int = Field(..., ge=0)
    height: int = Field(..., ge=0)
    is_rectangular: bool


class MazeListItem(MazeBase):
    """Schema for maze list item (without tiles)."""

    pass


class MazeDetail(MazeBase):
    """Schema for detailed maze response with tiles, indexed [x][y]."""

    columns: list[list[TileSchema]]

    @classmethod
    def from_grid(cls, name: str, grid: Grid) -> "MazeDetail":
        return cls(
            name=name,
            width=grid_width(grid),
            height=grid_height(grid),
            is_rectangular=is_rectangular(grid),
            columns=[[TileSchema.from_tile(tile) for tile in column] for column in grid],
        )


class MazeListResponse(BaseModel):
    """Schema for maze list response."""

    mazes: list[MazeListItem]
    total: int


class MazeSaveRequest(BaseModel):
    """Schema for saving a maze. Every column needs at least one tile."""

    columns: list[Annotated[list[TileSchema], Field(min_length=1)]] = Field(..., min_length=1)

    def to_grid(self) -> Grid:
        return [[tile.to_tile() for tile in column] for column in self.columns]


class MazeValidateRequest(BaseModel):
    """Schema for validating raw maze file text."""

    maze_text: str


class MazeValidateResponse(BaseModel):
    """Schema for validation result."""

    valid: bool
    error: Optional[str] = None
