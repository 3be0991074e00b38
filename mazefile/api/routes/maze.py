"""Maze routes for listing, retrieving, saving and validating maze files."""

import logging

from fastapi import APIRouter, HTTPException, status

from mazefile.api.deps import AppSettings, MazeDir, MazePath
from mazefile.core import (
    MazeFileChangedError,
    load_all_mazes,
    load_maze,
    save_maze,
    validate_maze_file,
    validate_maze_text,
)
from mazefile.schemas.maze import (
    MazeDetail,
    MazeListItem,
    MazeListResponse,
    MazeSaveRequest,
    MazeValidateRequest,
    MazeValidateResponse,
)

router = APIRouter(prefix="/maze", tags=["Mazes"])

logger = logging.getLogger(__name__)


@router.get(
    "",
    response_model=MazeListResponse,
)
def list_mazes(settings: AppSettings, maze_dir: MazeDir) -> MazeListResponse:
    """List all valid maze files.

    Invalid files in the maze directory are skipped.
    Tiles are not included - use GET /v1/maze/{name} for full details.
    """
    try:
        mazes = load_all_mazes(maze_dir, suffix=settings.maze_file_suffix)
    except (FileNotFoundError, NotADirectoryError) as e:
        logger.warning(f"Maze directory unavailable: {e}")
        mazes = {}

    maze_items = []
    for name, grid in mazes.items():
        detail = MazeDetail.from_grid(name, grid)
        maze_items.append(MazeListItem(**detail.model_dump(exclude={"columns"})))

    return MazeListResponse(
        mazes=maze_items,
        total=len(maze_items),
    )


@router.post(
    "/validate",
    response_model=MazeValidateResponse,
)
def validate_maze(request: MazeValidateRequest) -> MazeValidateResponse:
    """Validate maze file text without storing it."""
    is_valid, error = validate_maze_text(request.maze_text)
    return MazeValidateResponse(valid=is_valid, error=error)


@router.get(
    "/{name}",
    response_model=MazeDetail,
)
def get_maze(name: str, maze_path: MazePath) -> MazeDetail:
    """Get the tiles of a maze, indexed [x][y]."""
    if not maze_path.is_file():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Maze not found: {name}",
        )

    validated = validate_maze_file(maze_path)
    if validated is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Maze file is not valid: {name}",
        )

    try:
        grid = load_maze(validated)
    except MazeFileChangedError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        ) from e

    return MazeDetail.from_grid(name, grid)


@router.put(
    "/{name}",
    response_model=MazeDetail,
    status_code=status.HTTP_201_CREATED,
)
def put_maze(
    name: str,
    request: MazeSaveRequest,
    maze_dir: MazeDir,
    maze_path: MazePath,
) -> MazeDetail:
    """Save a maze, replacing any existing file with the same name."""
    maze_dir.mkdir(parents=True, exist_ok=True)

    grid = request.to_grid()
    save_maze(grid, maze_path)

    # save_maze only logs failures, and an older file may still be there
    validated = validate_maze_file(maze_path)
    try:
        saved = validated is not None and load_maze(validated) == grid
    except MazeFileChangedError:
        saved = False

    if not saved:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to save maze: {name}",
        )

    logger.info(f"Saved maze {name} ({len(grid)} columns)")
    return MazeDetail.from_grid(name, grid)
