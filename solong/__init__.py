"""A tile-based game: collect every item, then reach the exit.

Holds the map loader and validator, the game rules, the sprite layout
and a pygame front end.
"""

__version__ = "1.0.0"

__all__ = ["app", "game", "gamemap", "render"]