"""Window, assets and event handling that put a game on screen."""

from __future__ import annotations

import sys
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, TextIO

import pygame

from .game import Direction, Game, GameState
from .gamemap import GameMap, MapError, read_map, validate_map
from .render import (
    Sprite,
    background_sprites,
    collectable_sprites,
    end_screen_sprites,
    enemy_sprites,
    hearts_sprites,
    moves_sprites,
    player_sprite,
    torch_sprites,
    wall_sprites,
    window_size,
)

TITLE = "So_long"
BONUS_TITLE = "So_long Bonus"

_KEY_DIRECTIONS = {
    pygame.K_w: Direction.UP,
    ord("W"): Direction.UP,
    pygame.K_a: Direction.LEFT,
    ord("A"): Direction.LEFT,
    pygame.K_s: Direction.DOWN,
    ord("S"): Direction.DOWN,
    pygame.K_d: Direction.RIGHT,
    ord("D"): Direction.RIGHT,
}

_BASE_LETTERS = "younwi"
_BONUS_LETTERS = "eilnosuwy"
_FRAMES = 5


class AssetError(Exception):
    """Raised when an image cannot be loaded or was never loaded."""


def asset_paths(bonus: bool = False) -> dict[str, str]:
    """Return the image file for every asset name the renderer uses."""
    paths = {
        "crown": "./textures/crown.xpm",
        "player": "./textures/player.xpm",
        "wall_0": "./textures/wall.xpm",
        "wall_1": "./textures/wall_2.xpm",
        "floor_0": "./textures/floor_1.xpm",
        "floor_1": "./textures/floor_2.xpm",
        "floor_2": "./textures/floor_3.xpm",
        "door_open": "./textures/door_opened.xpm",
        "door_closed": "./textures/door_closed.xpm",
    }
    letters = _BONUS_LETTERS if bonus else _BASE_LETTERS
    paths.update({f"letter_{ch}": f"./textures/letters/{ch}.xpm" for ch in letters})
    if not bonus:
        paths["collectable_0"] = "./textures/collect_frame_1.xpm"
        paths["torch_0"] = "./textures/torch/torch_frame_1.xpm"
        return paths
    paths.update(
        {
            "skull": "./textures/skull.xpm",
            "hit": "./textures/hit.xpm",
            "heart_empty": "./textures/empty_heart.xpm",
            "heart_filled": "./textures/filled_heart.xpm",
        }
    )
    paths.update({f"number_{n}": f"./textures/numbers/{n}.xpm" for n in range(10)})
    for frame in range(_FRAMES):
        number = frame + 1
        paths[f"collectable_{frame}"] = f"./textures/collect_frame_{number}.xpm"
        paths[f"enemy_{frame}"] = f"./textures/enemies/enemy_frame_{number}.xpm"
        paths[f"torch_{frame}"] = f"./textures/torch/torch_frame_{number}.xpm"
    return paths


class AssetStore:
    """Named images loaded from files relative to a root directory."""

    def __init__(
        self,
        paths: Mapping[str, str],
        root: str | Path = ".",
        loader: Callable[[str], Any] | None = None,
    ) -> None:
        self.paths = dict(paths)
        self.root = Path(root)
        self._loader = loader or pygame.image.load
        self._images: dict[str, Any] = {}

    def load(self) -> None:
        """Load every image, raising AssetError on the first that fails."""
        images = {}
        for name, path in self.paths.items():
            full_path = str(self.root / path)
            try:
                images[name] = self._loader(full_path)
            except (pygame.error, OSError, ValueError) as exc:
                raise AssetError(f"Failed to load image {full_path}") from exc
        self._images = images

    def get(self, name: str) -> Any:
        """Return the loaded image called ``name``."""
        try:
            return self._images[name]
        except KeyError:
            raise AssetError(f"Asset not loaded: {name}") from None


class App:
    """Drives a game: reacts to keys and decides what to draw each frame."""

    def __init__(
        self,
        game_map: GameMap,
        assets: AssetStore | None = None,
        output: TextIO | None = None,
    ) -> None:
        self.game = Game(game_map, output)
        self.assets = assets
        self.output = output
        self.surface: Any = None
        self.running = True

    @property
    def bonus(self) -> bool:
        """True when playing with the bonus features."""
        return self.game.bonus

    def on_key(self, key: int) -> bool:
        """Handle a key press; return False once the game should close."""
        if key == pygame.K_ESCAPE:
            self.running = False
            return False
        direction = _KEY_DIRECTIONS.get(key)
        if direction is not None and self.game.state == GameState.RUNNING:
            self.game.move(direction)
        return True

    def _draw(self, sprites: list[Sprite], clear: bool = False) -> None:
        if self.surface is None or self.assets is None:
            return
        if clear:
            self.surface.fill((0, 0, 0))
        for sprite in sprites:
            self.surface.blit(self.assets.get(sprite.asset), (sprite.x, sprite.y))

    def _redraw_sprites(self) -> list[Sprite]:
        game = self.game
        sprites = background_sprites(game) + [player_sprite(game)]
        if self.bonus:
            sprites += hearts_sprites(game) + moves_sprites(game)
        else:
            sprites += torch_sprites(game) + collectable_sprites(game)
        game.redraw = False
        return sprites

    def step(self) -> list[Sprite]:
        """Run one frame of the game loop and return the sprites drawn."""
        game = self.game
        if game.state != GameState.RUNNING:
            sprites = end_screen_sprites(game)
            self._draw(sprites, clear=True)
            return sprites
        sprites: list[Sprite] = []
        if game.tick():
            sprites += enemy_sprites(game) + torch_sprites(game) + collectable_sprites(game)
        if game.redraw:
            sprites += self._redraw_sprites()
        self._draw(sprites)
        return sprites

    def run(self) -> None:
        """Open the window, load the images and play until the window closes."""
        pygame.init()
        try:
            self.surface = pygame.display.set_mode(window_size(self.game.game_map, self.bonus))
            pygame.display.set_caption(BONUS_TITLE if self.bonus else TITLE)
            if self.assets is None:
                self.assets = AssetStore(asset_paths(self.bonus))
            self.assets.load()
            self._draw(wall_sprites(self.game))
            pygame.display.flip()
            while self.running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        print("Closing game...", file=self.output or sys.stdout)
                        self.running = False
                    elif event.type == pygame.KEYDOWN:
                        self.on_key(event.key)
                if self.running and self.step():
                    pygame.display.flip()
        finally:
            self.surface = None
            pygame.quit()


def _error(message: str) -> None:
    print(f"Error\n{message}")


def main(argv: list[str] | None = None) -> int:
    """Start the game on the map named on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    bonus = "--bonus" in args
    args = [arg for arg in args if arg != "--bonus"]
    if len(args) != 1:
        command = "so_long_bonus" if bonus else "so_long"
        _error(f"Usage: {command} [--bonus] path/to/map")
        return 1 if bonus else 0
    try:
        game_map = read_map(args[0], bonus)
        validate_map(game_map)
    except MapError as exc:
        _error(str(exc))
        return 1
    try:
        App(game_map).run()
    except AssetError:
        _error("mlx_xpm_file_to_image failed")
        return 1
    except pygame.error as exc:
        _error(str(exc))
        return 1
    return 0