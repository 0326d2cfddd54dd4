"""Server game state and handling of messages received from clients."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .. import client_messages as c2s
from .. import server_messages as s2c
from ..game_objects import Player
from .registry import ClientRegistry

WELCOME_TEXT = "welcome to the server"

logger = logging.getLogger(__name__)


@dataclass
class ServerState:
    """Authoritative simulation state held by the server."""

    time_since_last_update: float = 0.0
    next_id: int = 0
    next_eid: int = 0
    players: dict[int, Player] = field(default_factory=dict)


def process_message_queue(state: ServerState, registry: ClientRegistry) -> None:
    """Handle every queued client message, updating state and queueing replies."""
    for bundle in registry.incoming.drain():
        client_id = bundle.client_id
        match bundle.message:
            case c2s.Connect():
                logger.info("Client %d connected", client_id)
                registry.send_to_one_client(
                    client_id, s2c.Welcome(server_message=WELCOME_TEXT)
                )
                registry.broadcast_to_all_except(
                    client_id, s2c.ClientJoined(id=client_id)
                )
            case c2s.Disconnect():
                logger.info("Client %d disconnected", client_id)
                registry.broadcast_to_all_except(
                    client_id, s2c.ClientLeft(id=client_id)
                )
            case c2s.ChatMessage(message=text):
                logger.info("%d says: %s", client_id, text)
                registry.broadcast_to_all_except(
                    client_id, s2c.ChatMessage(from_id=client_id, message=text)
                )
            case c2s.RequestToSpawnPlayer():
                logger.info("%d requested to spawn a player", client_id)
                eid = state.next_eid
                state.next_eid += 1
                state.players[eid] = Player(client_id, eid)
                logger.info("spawned player %d", eid)
                registry.broadcast_to_all(
                    s2c.SpawnPlayer(owner_client_id=client_id, entity_id=eid)
                )
            case c2s.EntityPosition(entity_id=entity_id, pos=pos):
                player = state.players.get(entity_id)
                if player is not None:
                    player.pos = pos
                registry.broadcast_to_all_except(
                    client_id, s2c.EntityPosition(entity_id=entity_id, pos=pos)
                )
            case c2s.RequestAllEntities():
                logger.info("%d requested full ecs state", client_id)
                chosen = next(
                    (other for other in registry.client_ids() if other != client_id),
                    None,
                )
                if chosen is not None:
                    registry.send_to_one_client(
                        chosen, s2c.RequestAllEntitiesFor(for_client_id=client_id)
                    )
            case c2s.AllTheEntitiesFor():
                pass