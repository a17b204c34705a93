"""Map loading, tile access and validation for the maze game."""

from __future__ import annotations

from dataclasses import dataclass, field

WALL = "1"
FLOOR = "0"
COLLECTABLE = "C"
EXIT = "E"
PLAYER = "P"
ENEMY = "X"

MAP_EXTENSION = ".ber"

_BASE_TILES = frozenset({FLOOR, WALL, COLLECTABLE, EXIT, PLAYER})
_BONUS_TILES = _BASE_TILES | {ENEMY}


class MapError(Exception):
    """Raised when a map file cannot be read or is not a playable map."""


@dataclass(frozen=True)
class Point:
    """A grid position given by column and row."""

    column: int
    row: int


@dataclass
class GameMap:
    """A parsed map grid together with the tile counts found while reading it."""

    grid: list[list[str]] = field(default_factory=list)
    name: str = ""
    bonus: bool = False
    columns: int = 0
    rows: int = 0
    collectable_count: int = 0
    player_count: int = 0
    exit_count: int = 0
    enemy_count: int = 0

    def _at(self, grid: list[list[str]], row: int, column: int) -> str:
        if 0 <= row < len(grid) and 0 <= column < len(grid[row]):
            return grid[row][column]
        return ""

    def tile(self, point: Point) -> str:
        """Return the tile at ``point``, or an empty string outside the grid."""
        return self._at(self.grid, point.row, point.column)

    def set_tile(self, point: Point, value: str) -> None:
        """Replace the tile at ``point`` with ``value``."""
        self.grid[point.row][point.column] = value

    def clone_grid(self) -> list[list[str]]:
        """Return an independent copy of the grid."""
        return [list(row) for row in self.grid]

    def find(self, tile: str, start: Point | None = None) -> Point | None:
        """Return the first position holding ``tile``, scanning row by row from ``start``."""
        start = start or Point(0, 0)
        column = start.column
        for row in range(start.row, self.rows):
            for col in range(column, self.columns):
                if self._at(self.grid, row, col) == tile:
                    return Point(col, row)
            column = 0
        return None


def check_extension(path: str) -> None:
    """Raise MapError unless ``path`` names a file with the map extension."""
    path = str(path)
    dot = path.rfind(".")
    if dot == -1 or path[dot:] != MAP_EXTENSION or dot == 0 or path[dot - 1] == "/":
        raise MapError("Wrong extension")


def _split_lines(text: str) -> list[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def parse_map_text(text: str, name: str = "", bonus: bool = False) -> GameMap:
    """Build a GameMap from the text of a map file without validating it."""
    game_map = GameMap(name=name, bonus=bonus)
    for line in _split_lines(text):
        line = line.split("\0", 1)[0]
        game_map.grid.append(list(line))
        game_map.columns = max(game_map.columns, len(line))
        game_map.collectable_count += line.count(COLLECTABLE)
        game_map.exit_count += line.count(EXIT)
        game_map.player_count += line.count(PLAYER)
        if bonus:
            game_map.enemy_count += line.count(ENEMY)
    game_map.rows = len(game_map.grid)
    return game_map


def read_map(path, bonus: bool = False) -> GameMap:
    """Check the extension of ``path``, read the file and parse it."""
    check_extension(str(path))
    try:
        with open(path, encoding="latin-1", newline="") as handle:
            text = handle.read()
    except OSError as exc:
        raise MapError("Failed to open map file") from exc
    return parse_map_text(text, str(path), bonus)


def is_enclosed_by_walls(game_map: GameMap) -> bool:
    """Return True if every border tile is a wall."""
    last_row = game_map.rows - 1
    last_column = game_map.columns - 1
    grid = game_map.grid
    for column in range(game_map.columns):
        if game_map._at(grid, 0, column) != WALL or game_map._at(grid, last_row, column) != WALL:
            return False
    for row in range(game_map.rows):
        if game_map._at(grid, row, 0) != WALL or game_map._at(grid, row, last_column) != WALL:
            return False
    return True


def has_equal_rows(game_map: GameMap) -> bool:
    """Return True if all rows (after the leading empty ones) share one length."""
    row_size = 0
    for row in game_map.grid:
        if row_size == 0:
            row_size = len(row)
        elif row_size != len(row):
            return False
    return True


def has_invalid_tiles(game_map: GameMap) -> bool:
    """Return True if any tile is outside the allowed set."""
    allowed = _BONUS_TILES if game_map.bonus else _BASE_TILES
    return any(
        game_map._at(game_map.grid, row, column) not in allowed
        for row in range(game_map.rows)
        for column in range(game_map.columns)
    )


def flood_fill(game_map: GameMap, grid: list[list[str]], start: Point) -> None:
    """Mark every tile reachable from the player at ``start`` as a wall in ``grid``.

    Exits are marked but not passed through; the last row and column are never entered.
    """
    if game_map._at(grid, start.row, start.column) != PLAYER:
        return
    stack = [(start.row, start.column)]
    while stack:
        row, column = stack.pop()
        if (
            row < 0
            or column < 0
            or column == game_map.columns - 1
            or row == game_map.rows - 1
        ):
            continue
        tile = game_map._at(grid, row, column)
        if tile in (WALL, ""):
            continue
        grid[row][column] = WALL
        if tile == EXIT:
            continue
        stack.extend(
            [(row, column - 1), (row, column + 1), (row - 1, column), (row + 1, column)]
        )


def player_location(game_map: GameMap) -> Point:
    """Return the player's position, or the origin if there is none."""
    return game_map.find(PLAYER) or Point(0, 0)


def has_valid_path(game_map: GameMap) -> bool:
    """Return True if the player can reach every collectable and the exit."""
    grid = game_map.clone_grid()
    flood_fill(game_map, grid, player_location(game_map))
    return not any(
        game_map._at(grid, row, column) in (EXIT, COLLECTABLE)
        for row in range(game_map.rows)
        for column in range(game_map.columns)
    )


def validate_map(game_map: GameMap) -> None:
    """Raise MapError describing the first rule the map breaks."""
    if game_map.rows == 0:
        raise MapError("Map is empty")
    if game_map.exit_count > 1:
        raise MapError("Map has more than 1 exit")
    if game_map.exit_count == 0:
        raise MapError("Map has no exit")
    if game_map.player_count > 1:
        raise MapError("Map has more than 1 player")
    if game_map.player_count == 0:
        raise MapError("Map has no player")
    if game_map.collectable_count < 1:
        raise MapError("Map has no collectables")
    if not has_equal_rows(game_map):
        raise MapError("Map is not rectangular")
    if not is_enclosed_by_walls(game_map):
        raise MapError("Map is not enclosed by walls")
    if not has_valid_path(game_map):
        raise MapError("Map has no valid path")
    if has_invalid_tiles(game_map):
        raise MapError("Map is not valid")