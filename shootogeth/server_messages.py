"""Messages sent from the server to a client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .game_objects import Player, Vec2
from .wire import DecodeError, Reader, pack_string, pack_u32, pack_u64


@dataclass(frozen=True)
class ClientIdAssignment:
    new_client_id: int


@dataclass(frozen=True)
class Welcome:
    server_message: str


@dataclass(frozen=True)
class ClientJoined:
    id: int


@dataclass(frozen=True)
class ClientLeft:
    id: int


@dataclass(frozen=True)
class ChatMessage:
    from_id: int
    message: str


@dataclass(frozen=True)
class SpawnPlayer:
    owner_client_id: int
    entity_id: int


@dataclass(frozen=True)
class EntityPosition:
    entity_id: int
    pos: Vec2


@dataclass(frozen=True)
class AllPlayers:
    players: tuple[Player, ...] = ()


@dataclass(frozen=True)
class RequestAllEntitiesFor:
    for_client_id: int


ServerToClientMessage = Union[
    ClientIdAssignment,
    Welcome,
    ClientJoined,
    ClientLeft,
    ChatMessage,
    SpawnPlayer,
    EntityPosition,
    AllPlayers,
    RequestAllEntitiesFor,
]


def encode_message(message: ServerToClientMessage) -> bytes:
    """Encode a server-to-client message, tag first."""
    match message:
        case ClientIdAssignment(new_client_id=new_client_id):
            return pack_u32(0) + pack_u32(new_client_id)
        case Welcome(server_message=server_message):
            return pack_u32(1) + pack_string(server_message)
        case ClientJoined(id=client_id):
            return pack_u32(2) + pack_u32(client_id)
        case ClientLeft(id=client_id):
            return pack_u32(3) + pack_u32(client_id)
        case ChatMessage(from_id=from_id, message=text):
            return pack_u32(4) + pack_u32(from_id) + pack_string(text)
        case SpawnPlayer(owner_client_id=owner, entity_id=entity_id):
            return pack_u32(5) + pack_u32(owner) + pack_u32(entity_id)
        case EntityPosition(entity_id=entity_id, pos=pos):
            return pack_u32(6) + pack_u32(entity_id) + pos.encode()
        case AllPlayers(players=players):
            return (
                pack_u32(7)
                + pack_u64(len(players))
                + b"".join(player.encode() for player in players)
            )
        case RequestAllEntitiesFor(for_client_id=for_client_id):
            return pack_u32(8) + pack_u32(for_client_id)
    raise TypeError(f"not a server-to-client message: {message!r}")


def decode_message(payload: bytes) -> ServerToClientMessage:
    """Decode a server-to-client message from a datagram payload."""
    reader = Reader(payload)
    tag = reader.u32()
    match tag:
        case 0:
            return ClientIdAssignment(reader.u32())
        case 1:
            return Welcome(reader.string())
        case 2:
            return ClientJoined(reader.u32())
        case 3:
            return ClientLeft(reader.u32())
        case 4:
            from_id = reader.u32()
            return ChatMessage(from_id, reader.string())
        case 5:
            owner = reader.u32()
            return SpawnPlayer(owner, reader.u32())
        case 6:
            entity_id = reader.u32()
            return EntityPosition(entity_id, Vec2.decode(reader))
        case 7:
            count = reader.u64()
            return AllPlayers(tuple(Player.decode(reader) for _ in range(count)))
        case 8:
            return RequestAllEntitiesFor(reader.u32())
    raise DecodeError(f"unknown server-to-client message tag {tag}")