"""UDP transport for the server and the server entry point."""

from __future__ import annotations

import argparse
import asyncio
import logging
import queue
from collections.abc import Hashable

from ..client_messages import ClientToServerMessage, ClientToServerMessageBundle
from ..mailbox import BoundedQueue
from ..server_messages import encode_message
from ..settings import CLIENT_CONNECT_TO_ADDR, split_address
from ..wire import DecodeError
from .game import main_loop
from .message_processing import ServerState
from .registry import ClientRegistry

INCOMING_QUEUE_CAPACITY = 32
MAX_DATAGRAM_SIZE = 1024
MAX_MESSAGES_PER_CLIENT_FRAME = 128

_IDLE_SLEEP = 0.001

logger = logging.getLogger(__name__)


class ServerProtocol(asyncio.DatagramProtocol):
    """Registers senders as clients and queues their decoded messages."""

    def __init__(self, registry: ClientRegistry) -> None:
        self.registry = registry
        self.transport: asyncio.DatagramTransport | None = None
        self.sender: asyncio.Task[None] | None = None

    def connection_made(self, transport: asyncio.BaseTransport) -> None:
        self.transport = transport  # type: ignore[assignment]

    def connection_lost(self, exc: Exception | None) -> None:
        if self.sender is not None:
            self.sender.cancel()

    def datagram_received(self, data: bytes, addr: Hashable) -> None:
        data = data[:MAX_DATAGRAM_SIZE]
        client_id = self.registry.client_id_for(addr)
        if client_id is None:
            client_id = self.registry.add_client(addr)
        try:
            message = ClientToServerMessage.decode(data)
        except DecodeError as exc:
            logger.warning("Error parsing client data: %s", exc)
            return
        bundle = ClientToServerMessageBundle.from_message(client_id, message)
        try:
            self.registry.incoming.push(bundle)
        except queue.Full:
            logger.warning(
                "Inbound message queue full: dropping message from %d", client_id
            )


def transmit_outbound_messages(
    registry: ClientRegistry, transport: asyncio.DatagramTransport
) -> int:
    """Send queued messages to every addressable client; return how many went out."""
    sent = 0
    for client_id, mailbox in registry.mailboxes():
        address = registry.address_of(client_id)
        if address is None:
            logger.warning("Failed to find socket address for client %d", client_id)
            continue
        for _ in range(MAX_MESSAGES_PER_CLIENT_FRAME):
            message = mailbox.pop()
            if message is None:
                break
            try:
                payload = encode_message(message)
            except (TypeError, ValueError) as exc:
                logger.warning("Error serializing message: %s", exc)
                continue
            transport.sendto(payload, address)
            sent += 1
    return sent


async def _transmit_forever(
    registry: ClientRegistry, transport: asyncio.DatagramTransport
) -> None:
    while not transport.is_closing():
        transmit_outbound_messages(registry, transport)
        await asyncio.sleep(_IDLE_SLEEP)


async def start_server(
    registry: ClientRegistry, address: str = CLIENT_CONNECT_TO_ADDR
) -> asyncio.DatagramTransport:
    """Bind the UDP socket and start sending queued messages in the background."""
    host, port = split_address(address)
    loop = asyncio.get_running_loop()
    logger.info("Initializing socket...")
    transport, protocol = await loop.create_datagram_endpoint(
        lambda: ServerProtocol(registry), local_addr=(host, port)
    )
    logger.info("Socket Initialized!")
    protocol.sender = loop.create_task(_transmit_forever(registry, transport))
    return transport


async def _serve(address: str) -> None:
    registry = ClientRegistry(BoundedQueue(INCOMING_QUEUE_CAPACITY))
    transport = await start_server(registry, address)
    try:
        await main_loop(ServerState(), registry)
    finally:
        transport.close()


def main(argv: list[str] | None = None) -> int:
    """Run the game server until interrupted."""
    parser = argparse.ArgumentParser(description="Run the game server.")
    parser.add_argument(
        "--address",
        default=CLIENT_CONNECT_TO_ADDR,
        help="host:port to listen on (default: %(default)s)",
    )
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    try:
        asyncio.run(_serve(args.address))
    except KeyboardInterrupt:
        pass
    return 0