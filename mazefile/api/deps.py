"""API dependencies for dependency injection."""

import re
from pathlib import Path
from typing import Annotated

from fastapi import Depends, HTTPException, status

from mazefile.config import Settings, get_settings

_MAZE_NAME_PATTERN = re.compile(r"[A-Za-z0-9][A-Za-z0-9_\-]{0,99}")


def get_maze_dir(settings: Annotated[Settings, Depends(get_settings)]) -> Path:
    """Get the directory maze files are served from."""
    return Path(settings.maze_dir)


def get_maze_path(
    name: str,
    settings: Annotated[Settings, Depends(get_settings)],
    maze_dir: Annotated[Path, Depends(get_maze_dir)],
) -> Path:
    """Resolve a maze name to a file inside the maze directory."""
    if not _MAZE_NAME_PATTERN.fullmatch(name):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid maze name: {name}",
        )
    return maze_dir / f"{name}{settings.maze_file_suffix}"


AppSettings = Annotated[Settings, Depends(get_settings)]
MazeDir = Annotated[Path, Depends(get_maze_dir)]
MazePath = Annotated[Path, Depends(get_maze_path)]
