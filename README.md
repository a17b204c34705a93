# solong

A small tile-based game. You walk a player around a walled map, pick up
every collectable, and once the door opens you leave through the exit.
Every move is counted.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Playing

```
solong path/to/level.ber
solong --bonus path/to/level.ber
```

The map file must end in `.ber`. The window is sized to the map, with each
tile 64 pixels square. The game loads its images from a `textures/` directory
relative to the current working directory, so start it from the directory
that holds `textures/`. If an image cannot be loaded, the game prints
`Error` and exits with status 1.

Controls:

| Key        | Action      |
|------------|-------------|
| W          | move up     |
| A          | move left   |
| S          | move down   |
| D          | move right  |
| Escape     | quit        |

Closing the window prints `Closing game...` and ends the game. Without
`--bonus`, each move prints `Move count: N` to standard output.

## Map format

A map is a plain text file, one line per row. Tiles:

| Tile | Meaning                          |
|------|----------------------------------|
| `1`  | wall                             |
| `0`  | floor                            |
| `P`  | player start                     |
| `C`  | collectable                      |
| `E`  | exit                             |
| `X`  | enemy (only with `--bonus`)      |

Example:

```
1111111111
1P0C00C001
1000110001
10C00000E1
1111111111
```

A map is rejected, with `Error` followed by the reason, when it:

- is empty;
- has no exit, or more than one;
- has no player, or more than one;
- has no collectables;
- is not rectangular;
- is not closed in by walls on every side;
- has a collectable or the exit that the player cannot reach;
- contains any other character.

The exit stays closed until every collectable has been picked up.

## Bonus rules

With `--bonus`, enemies (`X`) patrol the map, changing direction each time
they try to step. Walking into an enemy, or being walked into by one, costs
a life; the player has one life, so that ends the game with `YOU LOSE`.
Collectables, enemies and the corner torches are animated, and a strip under
the map shows the hearts and the move counter.

## Using it as a library

The map, rules and drawing decisions are plain Python and can be driven
without a window:

- `solong.gamemap` — `read_map(path, bonus)` and
  `parse_map_text(text, name, bonus)` build a `GameMap`; `validate_map`
  raises `MapError` with the same messages the game prints.
- `solong.game` — `Game(game_map, output)` holds a round; `move`,
  `move_up`, `move_down`, `move_left` and `move_right` move the player,
  `move_enemies` steps the enemies, and `tick` advances the frame clock
  (returning `True` when the animation frame changes). `state` is a
  `GameState`.
- `solong.render` — functions such as `background_sprites`, `wall_sprites`,
  `enemy_sprites` and `end_screen_sprites` return lists of `Sprite`
  records (asset name and pixel position) for a frame.
- `solong.app` — `asset_paths`, `AssetStore` and `App` tie everything to a
  pygame window; `App.step` runs one frame and returns what it drew; `main`
  is what the `solong` command runs.

## What it does not include

The package ships no texture images and no level files. You need to supply
a `textures/` directory with the expected image files and your own `.ber`
maps.