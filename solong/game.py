"""Game state: the player, the patrolling enemies and the frame clock."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import TextIO

from .gamemap import (
    COLLECTABLE,
    ENEMY,
    EXIT,
    FLOOR,
    PLAYER,
    WALL,
    GameMap,
    Point,
    player_location,
)

MAX_LIVES = 1
MAX_FRAME = 4294967290
FRAMES = 5
ANIMATION_SPEED = 1000
MOVEMENT_SPEED = 100000

_ENEMY_BLOCKERS = frozenset({EXIT, WALL, COLLECTABLE, ""})


class GameState(Enum):
    """Whether the game is still being played or how it ended."""

    RUNNING = 0
    WIN = 1
    LOSE = 2


class Direction(IntEnum):
    """The four directions of movement, in the order enemies cycle through them."""

    UP = 0
    LEFT = 1
    DOWN = 2
    RIGHT = 3


class DoorState(IntEnum):
    """State of the exit door."""

    OPEN = 0
    CLOSED = 1


def direction_offset(direction: Direction) -> Point:
    """Return the column and row step for one move in ``direction``."""
    if direction == Direction.UP:
        return Point(0, -1)
    if direction == Direction.DOWN:
        return Point(0, 1)
    if direction == Direction.LEFT:
        return Point(-1, 0)
    return Point(1, 0)


@dataclass
class Player:
    """The player's position, lives and counters."""

    location: Point = Point(0, 0)
    lives: int = MAX_LIVES
    collectables: int = 0
    move_count: int = 0
    hit: bool = False


@dataclass
class Enemy:
    """A patrolling enemy."""

    location: Point
    alive: bool = True
    next_direction: Direction = Direction.UP

    def turn(self) -> None:
        """Advance to the next direction in the patrol cycle."""
        self.next_direction = Direction((self.next_direction + 1) % len(Direction))


@dataclass
class Frames:
    """The frame counter that drives animation and enemy movement."""

    frame_count: int = 0
    real_frame: int = 0
    last_frame: int = 0


def init_enemies(game_map: GameMap) -> list[Enemy]:
    """Create one enemy per enemy tile, in reading order, with staggered directions."""
    enemies: list[Enemy] = []
    start = Point(0, 0)
    for index in range(game_map.enemy_count):
        location = game_map.find(ENEMY, start) or Point(0, 0)
        enemies.append(Enemy(location, True, Direction(index % len(Direction))))
        start = Point(location.column + 1, location.row)
    return enemies


@dataclass
class Game:
    """A game in progress on a validated map."""

    game_map: GameMap
    output: TextIO | None = None
    player: Player = field(init=False)
    enemies: list[Enemy] = field(init=False)
    frames: Frames = field(init=False)
    state: GameState = field(init=False, default=GameState.RUNNING)
    door_state: DoorState = field(init=False, default=DoorState.CLOSED)
    redraw: bool = field(init=False, default=True)

    def __post_init__(self) -> None:
        self.player = Player(location=player_location(self.game_map))
        self.enemies = init_enemies(self.game_map) if self.bonus else []
        self.frames = Frames()

    @property
    def bonus(self) -> bool:
        """True when the map is played with enemies, lives and animation."""
        return self.game_map.bonus

    def _report_moves(self) -> None:
        if not self.bonus:
            print(f"Move count: {self.player.move_count}", file=self.output or sys.stdout)

    def move(self, direction: Direction) -> None:
        """Try to move the player one tile in ``direction``."""
        if self.state != GameState.RUNNING:
            return
        offset = direction_offset(direction)
        previous = self.player.location
        target = Point(previous.column + offset.column, previous.row + offset.row)
        if self.game_map.tile(target) in (WALL, ""):
            return
        self._handle_player_movement(target, previous)

    def move_up(self) -> None:
        """Move the player up."""
        self.move(Direction.UP)

    def move_down(self) -> None:
        """Move the player down."""
        self.move(Direction.DOWN)

    def move_left(self) -> None:
        """Move the player left."""
        self.move(Direction.LEFT)

    def move_right(self) -> None:
        """Move the player right."""
        self.move(Direction.RIGHT)

    def _handle_player_movement(self, target: Point, previous: Point) -> None:
        tile = self.game_map.tile(target)
        if tile == EXIT:
            if self.door_state == DoorState.CLOSED:
                return
            self.player.move_count += 1
            self._report_moves()
            self.state = GameState.WIN
            return
        if tile == ENEMY:
            self._player_hits_enemy(target)
        if tile == COLLECTABLE:
            self._collect()
        self.game_map.set_tile(previous, FLOOR)
        self.game_map.set_tile(target, PLAYER)
        self.player.location = target
        self.player.move_count += 1
        self._report_moves()
        self.redraw = True

    def _collect(self) -> None:
        self.player.collectables += 1
        if self.player.collectables == self.game_map.collectable_count:
            self.door_state = DoorState.OPEN

    def _lose_life(self) -> None:
        if self.player.lives > 0:
            self.player.lives -= 1
            self.player.hit = True

    def _player_hits_enemy(self, location: Point) -> None:
        enemy = self.find_enemy(location)
        if enemy is None:
            return
        enemy.alive = False
        self._lose_life()
        if self.player.lives == 0:
            self.state = GameState.LOSE

    def find_enemy(self, location: Point) -> Enemy | None:
        """Return the first enemy recorded at ``location``, if any."""
        return next((enemy for enemy in self.enemies if enemy.location == location), None)

    def _move_enemy(self, enemy: Enemy) -> None:
        # Enemies step with the row and column offsets swapped, so "up" patrols left.
        offset = direction_offset(enemy.next_direction)
        target = Point(enemy.location.column + offset.row, enemy.location.row + offset.column)
        tile = self.game_map.tile(target)
        if tile not in _ENEMY_BLOCKERS:
            self.game_map.set_tile(enemy.location, FLOOR)
            if tile == PLAYER:
                self._lose_life()
                enemy.alive = False
                if self.player.lives == 0:
                    self.state = GameState.LOSE
                    return
            else:
                self.game_map.set_tile(target, ENEMY)
                enemy.location = target
            self.redraw = True
        enemy.turn()

    def move_enemies(self) -> None:
        """Move every living enemy one step along its patrol."""
        for enemy in self.enemies:
            if enemy.alive:
                self._move_enemy(enemy)

    def tick(self) -> bool:
        """Advance the frame clock by one frame.

        Returns True when the animation frame changed. Enemies move every
        MOVEMENT_SPEED frames. Nothing happens once the game has ended or
        when the map is played without the bonus features.
        """
        if self.state != GameState.RUNNING or not self.bonus:
            return False
        frames = self.frames
        frames.frame_count += 1
        if frames.frame_count >= MAX_FRAME:
            frames.frame_count = 0
        frames.real_frame = frames.frame_count // ANIMATION_SPEED
        changed = frames.real_frame != frames.last_frame
        if changed:
            frames.last_frame = frames.real_frame
        if frames.frame_count % MOVEMENT_SPEED == 0:
            self.move_enemies()
        return changed