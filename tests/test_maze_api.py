"""Tests for maze endpoints."""

import pytest
from httpx import AsyncClient

from mazefile.api.routes import maze as maze_routes
from mazefile.core import is_valid_maze_file

from .conftest import RAGGED_MAZE, SQUARE_MAZE


def tile_json(north=False, east=False, south=False, west=False) -> dict:
    return {"north": north, "east": east, "south": south, "west": west}


class TestListMazes:
    """Tests for GET /v1/maze."""

    @pytest.mark.asyncio
    async def test_list_mazes(self, client: AsyncClient):
        """Only valid files with the configured suffix are listed."""
        response = await client.get("/v1/maze")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert [maze["name"] for maze in data["mazes"]] == ["ragged", "square"]

        ragged = data["mazes"][0]
        assert ragged["width"] == 2
        assert ragged["height"] == 2
        assert ragged["is_rectangular"] is False
        assert "columns" not in ragged
        assert data["mazes"][1]["is_rectangular"] is True

    @pytest.mark.asyncio
    async def test_list_mazes_missing_directory(self, client: AsyncClient, test_settings, tmp_path):
        test_settings.maze_dir = tmp_path / "nowhere"
        response = await client.get("/v1/maze")
        assert response.status_code == 200
        assert response.json() == {"mazes": [], "total": 0}


class TestGetMaze:
    """Tests for GET /v1/maze/{name}."""

    @pytest.mark.asyncio
    async def test_get_maze(self, client: AsyncClient):
        response = await client.get("/v1/maze/ragged")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "ragged"
        assert len(data["columns"]) == 2
        assert data["columns"][0] == [tile_json(north=True, south=True, west=True)]
        assert data["columns"][1][1] == tile_json(north=True, east=True)

    @pytest.mark.asyncio
    async def test_get_maze_not_found(self, client: AsyncClient):
        response = await client.get("/v1/maze/missing")
        assert response.status_code == 404
        assert "Maze not found" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_get_invalid_maze(self, client: AsyncClient):
        response = await client.get("/v1/maze/broken")
        assert response.status_code == 422
        assert "not valid" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_get_maze_bad_name(self, client: AsyncClient):
        response = await client.get("/v1/maze/.hidden")
        assert response.status_code == 400


class TestPutMaze:
    """Tests for PUT /v1/maze/{name}."""

    @pytest.mark.asyncio
    async def test_put_maze(self, client: AsyncClient, maze_dir):
        body = {
            "columns": [
                [tile_json(north=True, south=True, west=True)],
                [tile_json(east=True, south=True), tile_json(north=True, east=True)],
            ]
        }
        response = await client.put("/v1/maze/copy", json=body)
        assert response.status_code == 201
        data = response.json()
        assert data["width"] == 2
        assert data["columns"] == body["columns"]

        path = maze_dir / "copy.maz"
        assert is_valid_maze_file(path)
        assert path.read_text() == RAGGED_MAZE

        response = await client.get("/v1/maze/copy")
        assert response.json()["columns"] == body["columns"]

    @pytest.mark.asyncio
    async def test_put_maze_replaces_file(self, client: AsyncClient, maze_dir):
        body = {"columns": [[tile_json()]]}
        response = await client.put("/v1/maze/square", json=body)
        assert response.status_code == 201
        assert (maze_dir / "square.maz").read_text() == "0 0 0 0 0 0\n"

    @pytest.mark.asyncio
    async def test_put_maze_reports_failed_save(self, client: AsyncClient, maze_dir, monkeypatch):
        """An older valid file left in place is not reported as saved."""
        monkeypatch.setattr(maze_routes, "save_maze", lambda grid, path: None)

        response = await client.put("/v1/maze/square", json={"columns": [[tile_json()]]})
        assert response.status_code == 500
        assert "Failed to save maze" in response.json()["detail"]
        assert (maze_dir / "square.maz").read_text() == SQUARE_MAZE

    @pytest.mark.asyncio
    async def test_put_maze_creates_directory(self, client: AsyncClient, test_settings, tmp_path):
        test_settings.maze_dir = tmp_path / "new" / "mazes"
        response = await client.put("/v1/maze/first", json={"columns": [[tile_json()]]})
        assert response.status_code == 201
        assert (tmp_path / "new" / "mazes" / "first.maz").is_file()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("columns", [[], [[]], [[tile_json()], []]])
    async def test_put_maze_rejects_empty_columns(self, client: AsyncClient, columns):
        response = await client.put("/v1/maze/empty", json={"columns": columns})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_put_maze_rejects_missing_wall(self, client: AsyncClient):
        body = {"columns": [[{"north": True, "east": True, "south": True}]]}
        response = await client.put("/v1/maze/partial", json=body)
        assert response.status_code == 422


class TestValidateMaze:
    """Tests for POST /v1/maze/validate."""

    @pytest.mark.asyncio
    async def test_validate_valid_text(self, client: AsyncClient):
        response = await client.post("/v1/maze/validate", json={"maze_text": RAGGED_MAZE})
        assert response.status_code == 200
        assert response.json() == {"valid": True, "error": None}

    @pytest.mark.asyncio
    async def test_validate_invalid_text(self, client: AsyncClient):
        response = await client.post(
            "/v1/maze/validate",
            json={"maze_text": "0 0 0 0 0 0\n0 2 0 0 0 0\n"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is False
        assert "Line 2" in data["error"]
