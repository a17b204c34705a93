import io

import pytest

from solong.game import DoorState, Game, GameState
from solong.gamemap import parse_map_text
from solong import render
from solong.render import (
    LOSE_MESSAGE,
    TILE_HEIGHT,
    TILE_WIDTH,
    WIN_MESSAGE,
    Sprite,
    background_sprites,
    collectable_sprites,
    end_screen_sprites,
    enemy_sprites,
    floor_index,
    hearts_sprites,
    letter_index,
    moves_sprites,
    player_sprite,
    torch_sprites,
    wall_sprites,
    wall_variant,
    window_size,
)

BONUS_MAP = "1111111\n1P0C0X1\n1000001\n10000E1\n1111111\n"
BASE_MAP = "1111111\n1P0C001\n1000001\n10000E1\n1111111\n"


def make_game(text=BONUS_MAP, bonus=True):
    return Game(parse_map_text(text, "test.ber", bonus), output=io.StringIO())


def test_floor_index_origin_is_rare_variant():
    assert floor_index(0, 0) == 2


def test_floor_index_always_a_known_variant():
    values = {floor_index(c, r) for c in range(40) for r in range(40)}
    assert values <= set(range(render.FLOORS))


def test_letter_index_follows_letter_sets():
    assert letter_index("Y", True) == 8
    assert letter_index("Y", False) == 0
    assert letter_index("E", True) == 0
    assert letter_index("L", False) is None
    assert letter_index(" ", True) is None


def test_window_size_adds_menu_only_in_bonus():
    game_map = parse_map_text(BONUS_MAP, "m.ber", True)
    width, height = window_size(game_map, False)
    assert width == game_map.columns * TILE_WIDTH
    assert height == game_map.rows * TILE_HEIGHT
    assert window_size(game_map, True) == (width, height + render.MENU_HEIGHT)


def test_background_covers_floors_and_exit():
    game = make_game()
    sprites = background_sprites(game)
    expected = sum(row.count("0") + row.count("E") for row in game.game_map.grid)
    assert len(sprites) == expected
    doors = [s for s in sprites if s.asset.startswith("door")]
    assert doors == [Sprite("door_closed", 5 * TILE_WIDTH, 3 * TILE_HEIGHT)]


def test_background_door_opens():
    game = make_game()
    game.door_state = DoorState.OPEN
    assert any(s.asset == "door_open" for s in background_sprites(game))


def test_wall_sprites_match_wall_tiles():
    game = make_game()
    sprites = wall_sprites(game)
    walls = sum(row.count("1") for row in game.game_map.grid)
    assert len(sprites) == walls
    assert all(s.asset in ("wall_0", "wall_1") for s in sprites)


def test_wall_variant_corner_is_plain():
    game_map = parse_map_text(BONUS_MAP, "m.ber", True)
    assert wall_variant(game_map, 0, 0) == 0
    assert wall_variant(game_map, 0, 3) == 1


def test_player_sprite_shows_hit_once():
    game = make_game()
    game.player.hit = True
    first = player_sprite(game)
    second = player_sprite(game)
    assert first.asset == "hit"
    assert second.asset == "player"
    assert (second.x, second.y) == (TILE_WIDTH, TILE_HEIGHT)


def test_enemy_sprites_only_living():
    game = make_game()
    sprites = enemy_sprites(game)
    assert sprites == [Sprite("enemy_0", 5 * TILE_WIDTH, 1 * TILE_HEIGHT)]
    game.enemies[0].alive = False
    assert enemy_sprites(game) == []


def test_torches_sit_in_corners():
    game = make_game()
    positions = {(s.x, s.y) for s in torch_sprites(game)}
    right = (game.game_map.columns - 1) * TILE_WIDTH
    bottom = (game.game_map.rows - 1) * TILE_HEIGHT
    assert positions == {(0, 0), (right, 0), (0, bottom), (right, bottom)}


def test_collectable_sprites_follow_map():
    game = make_game()
    assert collectable_sprites(game) == [
        Sprite("collectable_0", 3 * TILE_WIDTH, 1 * TILE_HEIGHT)
    ]
    game.move_right()
    game.move_right()
    assert collectable_sprites(game) == []


def test_hearts_reflect_lives():
    game = make_game()
    assert [s.asset for s in hearts_sprites(game)] == ["heart_filled"]
    game.player.lives = 0
    assert [s.asset for s in hearts_sprites(game)] == ["heart_empty"]
    assert hearts_sprites(make_game(BASE_MAP, False)) == []


def test_moves_digits_right_aligned():
    game = make_game()
    game.player.move_count = 123
    sprites = moves_sprites(game)
    columns = game.game_map.columns
    y = game.game_map.rows * TILE_HEIGHT
    assert sprites == [
        Sprite("number_3", (columns - 1) * TILE_WIDTH, y),
        Sprite("number_2", (columns - 2) * TILE_WIDTH, y),
        Sprite("number_1", (columns - 3) * TILE_WIDTH, y),
    ]


@pytest.mark.parametrize(
    "state, message, emblem",
    [(GameState.WIN, WIN_MESSAGE, "crown"), (GameState.LOSE, LOSE_MESSAGE, "skull")],
)
def test_end_screen(state, message, emblem):
    game = make_game()
    game.state = state
    sprites = end_screen_sprites(game)
    letters = [s.asset for s in sprites[:-1]]
    assert letters == [f"letter_{c.lower()}" for c in message if c != " "]
    assert sprites[-1].asset == emblem
    assert sprites[-1].y == sprites[0].y + TILE_HEIGHT


def test_end_screen_base_win():
    game = make_game(BASE_MAP, False)
    game.state = GameState.WIN
    sprites = end_screen_sprites(game)
    assert sprites[-1].asset == "crown"
    assert len(sprites) == len(WIN_MESSAGE.replace(" ", "")) + 1