"""Messages sent from a client to the server."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .game_objects import Player, Vec2
from .settings import utc_now_millis
from .wire import DecodeError, Reader, pack_i64, pack_string, pack_u32, pack_u64


@dataclass(frozen=True)
class Connect:
    """A client has appeared."""


@dataclass(frozen=True)
class Disconnect:
    """A client has gone away."""


@dataclass(frozen=True)
class ChatMessage:
    message: str


@dataclass(frozen=True)
class RequestToSpawnPlayer:
    """Ask the server to spawn a player owned by the sender."""


@dataclass(frozen=True)
class RequestAllEntities:
    from_client_id: int


@dataclass(frozen=True)
class EntityPosition:
    entity_id: int
    pos: Vec2


@dataclass(frozen=True)
class AllTheEntitiesFor:
    client_id: int
    entities: tuple[Player, ...] = ()


ClientToServerData = Union[
    Connect,
    Disconnect,
    ChatMessage,
    RequestToSpawnPlayer,
    RequestAllEntities,
    EntityPosition,
    AllTheEntitiesFor,
]


def encode_data(data: ClientToServerData) -> bytes:
    """Encode a message body, tag first."""
    match data:
        case Connect():
            return pack_u32(0)
        case Disconnect():
            return pack_u32(1)
        case ChatMessage(message=message):
            return pack_u32(2) + pack_string(message)
        case RequestToSpawnPlayer():
            return pack_u32(3)
        case RequestAllEntities(from_client_id=from_client_id):
            return pack_u32(4) + pack_u32(from_client_id)
        case EntityPosition(entity_id=entity_id, pos=pos):
            return pack_u32(5) + pack_u32(entity_id) + pos.encode()
        case AllTheEntitiesFor(client_id=client_id, entities=entities):
            return (
                pack_u32(6)
                + pack_u32(client_id)
                + pack_u64(len(entities))
                + b"".join(entity.encode() for entity in entities)
            )
    raise TypeError(f"not a client-to-server message: {data!r}")


def decode_data(reader: Reader) -> ClientToServerData:
    """Decode a message body from the reader."""
    tag = reader.u32()
    match tag:
        case 0:
            return Connect()
        case 1:
            return Disconnect()
        case 2:
            return ChatMessage(reader.string())
        case 3:
            return RequestToSpawnPlayer()
        case 4:
            return RequestAllEntities(reader.u32())
        case 5:
            entity_id = reader.u32()
            return EntityPosition(entity_id, Vec2.decode(reader))
        case 6:
            client_id = reader.u32()
            count = reader.u64()
            entities = tuple(Player.decode(reader) for _ in range(count))
            return AllTheEntitiesFor(client_id, entities)
    raise DecodeError(f"unknown client-to-server message tag {tag}")


@dataclass(frozen=True)
class ClientToServerMessage:
    """A message body stamped with the client's send time in milliseconds."""

    send_time: int
    data: ClientToServerData

    @classmethod
    def create(cls, data: ClientToServerData) -> ClientToServerMessage:
        return cls(utc_now_millis(), data)

    def encode(self) -> bytes:
        return pack_i64(self.send_time) + encode_data(self.data)

    @classmethod
    def decode(cls, payload: bytes) -> ClientToServerMessage:
        reader = Reader(payload)
        send_time = reader.i64()
        return cls(send_time, decode_data(reader))


@dataclass(frozen=True)
class ClientToServerMessageBundle:
    """A received message together with its sender and timing metadata."""

    client_id: int
    send_time: int
    received_time: int
    message: ClientToServerData

    @classmethod
    def from_message(
        cls, client_id: int, message: ClientToServerMessage
    ) -> ClientToServerMessageBundle:
        return cls(client_id, message.send_time, utc_now_millis(), message.data)