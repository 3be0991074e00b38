"""Pytest configuration and fixtures."""

from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from mazefile.config import Settings, get_settings
from mazefile.main import app

# Column 0 has one tile, column 1 has two
RAGGED_MAZE = """0 0 1 0 1 1
1 0 0 1 1 0
1 1 1 1 0 0
"""

SQUARE_MAZE = """0 0 0 0 1 1
0 1 1 0 0 1
1 0 0 1 1 0
1 1 1 1 0 0
"""


@pytest.fixture
def maze_dir(tmp_path: Path) -> Path:
    """Create a maze directory with two valid files and one invalid file."""
    directory = tmp_path / "mazes"
    directory.mkdir()
    (directory / "ragged.maz").write_text(RAGGED_MAZE)
    (directory / "square.maz").write_text(SQUARE_MAZE)
    (directory / "broken.maz").write_text("0 0 1 1 1\n")
    (directory / "notes.txt").write_text("not a maze")
    return directory


@pytest.fixture
def test_settings(maze_dir: Path) -> Settings:
    """Settings pointing at the temporary maze directory."""
    return Settings(maze_dir=maze_dir, maze_file_suffix=".maz", _env_file=None)


@pytest_asyncio.fixture(scope="function")
async def client(test_settings: Settings) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""

    app.dependency_overrides[get_settings] = lambda: test_settings

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
