"""Player input snapshot and client-side game state."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, fields


@dataclass
class PlayingInputs:
    """Which controls are held during the current frame."""

    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False
    shoot: bool = False
    confirm: bool = False
    weapon_1: bool = False
    weapon_2: bool = False
    weapon_3: bool = False
    weapon_4: bool = False

    @classmethod
    def from_pressed(cls, pressed: Iterable[str]) -> PlayingInputs:
        """Build inputs from the names of the held controls."""
        names = set(pressed)
        known = {f.name for f in fields(cls)}
        unknown = names - known
        if unknown:
            raise ValueError(f"unknown inputs: {', '.join(sorted(unknown))}")
        return cls(**{name: True for name in names})


@dataclass
class ClientState:
    running: bool = True
    time_since_last_update: float = 0.0
    players: list[int] = field(default_factory=list)
    playing_inputs: PlayingInputs = field(default_factory=PlayingInputs)