"""A small multiplayer top-down game: shared UDP protocol, game server and pygame client."""

__version__ = "0.1.0"