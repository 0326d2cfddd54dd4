"""Plain game objects shared by client and server."""

from __future__ import annotations

from dataclasses import dataclass, field

from .wire import Reader, pack_f32, pack_u32


@dataclass(frozen=True)
class Vec2:
    """Two-dimensional vector, encoded as two f32 values."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x + other.x, self.y + other.y)

    def __truediv__(self, scalar: float) -> Vec2:
        return Vec2(self.x / scalar, self.y / scalar)

    def encode(self) -> bytes:
        return pack_f32(self.x) + pack_f32(self.y)

    @classmethod
    def decode(cls, reader: Reader) -> Vec2:
        x = reader.f32()
        y = reader.f32()
        return cls(x, y)


@dataclass
class Player:
    """A player entity as tracked by the server."""

    owner_client_id: int
    entity_id: int
    pos: Vec2 = field(default_factory=Vec2)
    vel: Vec2 = field(default_factory=Vec2)

    def step(self) -> None:
        """Advance the position by one tick of velocity."""
        self.pos = self.pos + self.vel

    def encode(self) -> bytes:
        return (
            pack_u32(self.owner_client_id)
            + pack_u32(self.entity_id)
            + self.pos.encode()
            + self.vel.encode()
        )

    @classmethod
    def decode(cls, reader: Reader) -> Player:
        owner_client_id = reader.u32()
        entity_id = reader.u32()
        pos = Vec2.decode(reader)
        vel = Vec2.decode(reader)
        return cls(owner_client_id, entity_id, pos, vel)