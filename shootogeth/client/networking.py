"""Client UDP connection and handling of messages from the server."""

from __future__ import annotations

import asyncio
import logging
import queue
from typing import Any

from .. import server_messages as s2c
from ..client_messages import ClientToServerData, ClientToServerMessage
from ..mailbox import BoundedQueue
from ..settings import SERVER_HOST_ADDR, split_address
from ..wire import DecodeError
from .ecs import World
from .inputs import ClientState
from .systems import spawn_player

QUEUE_CAPACITY = 64
MAX_DATAGRAM_SIZE = 1024

logger = logging.getLogger(__name__)


class ClientConnection(asyncio.DatagramProtocol):
    """Queues decoded server messages and holds messages waiting to be sent."""

    def __init__(self) -> None:
        self.incoming: BoundedQueue[s2c.ServerToClientMessage] = BoundedQueue(
            QUEUE_CAPACITY
        )
        self.outbound: BoundedQueue[ClientToServerMessage] = BoundedQueue(
            QUEUE_CAPACITY
        )
        self.client_id = 0
        self.transport: asyncio.DatagramTransport | None = None

    def send(self, data: ClientToServerData) -> bool:
        """Stamp and queue a message body; return False if it was dropped."""
        try:
            self.outbound.push(ClientToServerMessage.create(data))
        except queue.Full:
            logger.warning("Outbound message queue full: dropping message")
            return False
        return True

    def connection_made(self, transport: asyncio.BaseTransport) -> None:
        self.transport = transport  # type: ignore[assignment]

    def datagram_received(self, data: bytes, addr: Any) -> None:
        try:
            message = s2c.decode_message(data[:MAX_DATAGRAM_SIZE])
        except DecodeError as exc:
            logger.warning("Error parsing server data: %s", exc)
            return
        try:
            self.incoming.push(message)
        except queue.Full:
            logger.warning("Inbound message queue full: dropping message")

    def flush(self) -> int:
        """Send every queued outbound message; return how many were sent."""
        if self.transport is None:
            raise RuntimeError("not connected")
        sent = 0
        for message in self.outbound.drain():
            logger.debug("Sending message: %r", message)
            try:
                payload = message.encode()
            except (TypeError, ValueError) as exc:
                logger.warning("Error serializing message: %s", exc)
                continue
            self.transport.sendto(payload)
            sent += 1
        return sent


async def connect(address: str = SERVER_HOST_ADDR) -> ClientConnection:
    """Open a UDP socket connected to the server at ``address``."""
    host, port = split_address(address)
    loop = asyncio.get_running_loop()
    logger.info("connecting")
    _, connection = await loop.create_datagram_endpoint(
        ClientConnection, remote_addr=(host, port)
    )
    logger.info("connected")
    return connection


def process_message_queue(
    world: World, state: ClientState, connection: ClientConnection
) -> int:
    """Apply every queued server message; return how many were handled."""
    handled = 0
    for message in connection.incoming.drain():
        handled += 1
        match message:
            case s2c.ClientIdAssignment(new_client_id=new_id):
                connection.client_id = new_id
                logger.info("new id assigned: %d", new_id)
            case s2c.Welcome(server_message=text):
                logger.info("Server says: %s", text)
            case s2c.ClientJoined(id=client_id):
                logger.info("Client %d joined", client_id)
            case s2c.ClientLeft(id=client_id):
                logger.info("Client %d left", client_id)
            case s2c.ChatMessage(from_id=from_id, message=text):
                logger.info("%d says: %s", from_id, text)
            case s2c.SpawnPlayer(owner_client_id=owner, entity_id=entity_id):
                spawn_player(world, state, owner, connection.client_id)
                logger.info("player spawned %d", entity_id)
            case s2c.EntityPosition() | s2c.AllPlayers() | s2c.RequestAllEntitiesFor():
                pass
    return handled