"""Work out which sprite goes where on screen for a game in progress.

Every function returns plain ``Sprite`` records naming an asset and a pixel
position. Drawing them is left to whatever display layer holds the images.
"""

from __future__ import annotations

from dataclasses import dataclass

from .game import FRAMES, MAX_LIVES, DoorState, Game, GameState
from .gamemap import COLLECTABLE, EXIT, FLOOR, WALL, GameMap, Point

TILE_WIDTH = 64
TILE_HEIGHT = 64
MENU_HEIGHT = 64

FLOORS = 3
WALLS = 2
NUMBERS = 10

_BASE_LETTERS = "YOUWIN"
_BONUS_LETTERS = "EILNOSUWY"

WIN_MESSAGE = "YOU WIN"
LOSE_MESSAGE = "YOU LOSE"


@dataclass(frozen=True)
class Sprite:
    """One image to draw: the asset's name and the top-left pixel position."""

    asset: str
    x: int
    y: int


def floor_index(column: int, row: int) -> int:
    """Pick one of the floor variants from a fixed hash of the position."""
    hashed = (column * 13 + row * 31) % 100
    if hashed < 5:
        return 2
    if hashed < 20:
        return 1
    return 0


def _is_wall(game_map: GameMap, row: int, column: int) -> bool:
    return game_map.tile(Point(column, row)) == WALL


def wall_variant(game_map: GameMap, row: int, column: int) -> int:
    """Return which wall image suits the wall tile at ``row``, ``column``.

    Border walls facing open ground use the decorated variant on every third
    tile; all other walls use the plain one.
    """
    last_row = game_map.rows - 1
    last_column = game_map.columns - 1
    if (row == 0 and not _is_wall(game_map, row + 1, column)) or (
        row == last_row and not _is_wall(game_map, row - 1, column)
    ):
        return 1 if column != 0 and column % 3 == 0 else 0
    if (column == 0 and not _is_wall(game_map, row, column + 1)) or (
        column == last_column and not _is_wall(game_map, row, column - 1)
    ):
        return 1 if row not in (0, last_row) and row % 3 == 0 else 0
    return 0


def letter_index(ch: str, bonus: bool = False) -> int | None:
    """Return the position of ``ch`` among the loaded letter images, or None."""
    letters = _BONUS_LETTERS if bonus else _BASE_LETTERS
    index = letters.find(ch) if ch else -1
    return None if index == -1 else index


def window_size(game_map: GameMap, bonus: bool = False) -> tuple[int, int]:
    """Return the window's width and height in pixels for ``game_map``."""
    width = game_map.columns * TILE_WIDTH
    height = game_map.rows * TILE_HEIGHT
    if bonus:
        height += MENU_HEIGHT
    return width, height


def _tiles(game_map: GameMap):
    for row in range(game_map.rows):
        for column in range(game_map.columns):
            yield row, column, game_map.tile(Point(column, row))


def background_sprites(game: Game) -> list[Sprite]:
    """Floors and the exit door, as drawn on every redraw."""
    door = "door_open" if game.door_state == DoorState.OPEN else "door_closed"
    sprites = []
    for row, column, tile in _tiles(game.game_map):
        x, y = column * TILE_WIDTH, row * TILE_HEIGHT
        if tile == EXIT:
            sprites.append(Sprite(door, x, y))
        elif tile == FLOOR:
            sprites.append(Sprite(f"floor_{floor_index(column, row)}", x, y))
    return sprites


def wall_sprites(game: Game) -> list[Sprite]:
    """Every wall tile with its chosen variant."""
    game_map = game.game_map
    return [
        Sprite(
            f"wall_{wall_variant(game_map, row, column)}",
            column * TILE_WIDTH,
            row * TILE_HEIGHT,
        )
        for row, column, tile in _tiles(game_map)
        if tile == WALL
    ]


def player_sprite(game: Game) -> Sprite:
    """The player, shown as hit once right after losing a life.

    Showing the hit image clears the player's hit flag.
    """
    player = game.player
    x = player.location.column * TILE_WIDTH
    y = player.location.row * TILE_HEIGHT
    if player.hit:
        player.hit = False
        return Sprite("hit", x, y)
    return Sprite("player", x, y)


def _animation_frame(game: Game, index: int) -> int:
    return (game.frames.real_frame // 10 * (index + 1)) % FRAMES


def enemy_sprites(game: Game) -> list[Sprite]:
    """Living enemies, each with its own animation pace."""
    return [
        Sprite(
            f"enemy_{_animation_frame(game, index)}",
            enemy.location.column * TILE_WIDTH,
            enemy.location.row * TILE_HEIGHT,
        )
        for index, enemy in enumerate(game.enemies)
        if enemy.alive
    ]


def torch_sprites(game: Game) -> list[Sprite]:
    """A torch in each corner of the map."""
    game_map = game.game_map
    sprites = []
    for index in range(4):
        x = (game_map.columns - 1) * TILE_WIDTH if index % 2 == 1 else 0
        y = (game_map.rows - 1) * TILE_HEIGHT if index >= 2 else 0
        frame = _animation_frame(game, index) if game.bonus else 0
        sprites.append(Sprite(f"torch_{frame}", x, y))
    return sprites


def collectable_sprites(game: Game) -> list[Sprite]:
    """Every collectable still on the map."""
    frame = (game.frames.real_frame // 10) % FRAMES if game.bonus else 0
    return [
        Sprite(f"collectable_{frame}", column * TILE_WIDTH, row * TILE_HEIGHT)
        for row, column, tile in _tiles(game.game_map)
        if tile == COLLECTABLE
    ]


def hearts_sprites(game: Game) -> list[Sprite]:
    """The lives bar in the menu strip below the map (bonus play only)."""
    if not game.bonus:
        return []
    y = game.game_map.rows * TILE_HEIGHT
    return [
        Sprite(
            "heart_filled" if index < game.player.lives else "heart_empty",
            index * TILE_WIDTH,
            y,
        )
        for index in range(MAX_LIVES)
    ]


def moves_sprites(game: Game) -> list[Sprite]:
    """The move counter, right-aligned in the menu strip (bonus play only)."""
    if not game.bonus:
        return []
    y = game.game_map.rows * TILE_HEIGHT
    digits = str(max(game.player.move_count, 0))
    return [
        Sprite(
            f"number_{digit}",
            (game.game_map.columns - (position + 1)) * TILE_WIDTH,
            y,
        )
        for position, digit in enumerate(reversed(digits))
    ]


def end_screen_sprites(game: Game) -> list[Sprite]:
    """The centred end message and its emblem, drawn on a cleared window."""
    lost = game.state == GameState.LOSE
    message = LOSE_MESSAGE if lost else WIN_MESSAGE
    width, height = window_size(game.game_map, game.bonus)
    x = width // 2 - (TILE_WIDTH * len(message)) // 2
    y = height // 2 - TILE_HEIGHT // 2
    sprites = []
    for ch in message:
        if letter_index(ch, game.bonus) is not None:
            sprites.append(Sprite(f"letter_{ch.lower()}", x, y))
        x += TILE_WIDTH
    emblem_x = width // 2 - (TILE_WIDTH * 2) // 2
    sprites.append(Sprite("skull" if lost else "crown", emblem_x, y + TILE_HEIGHT))
    return sprites