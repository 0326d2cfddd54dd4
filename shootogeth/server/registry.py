"""Server-side client bookkeeping and outbound mailboxes."""

from __future__ import annotations

import itertools
import logging
import queue
from collections.abc import Hashable

from ..client_messages import (
    ClientToServerMessage,
    ClientToServerMessageBundle,
    Connect,
)
from ..mailbox import BoundedQueue
from ..server_messages import ClientIdAssignment, ServerToClientMessage

MAILBOX_CAPACITY = 100

logger = logging.getLogger(__name__)


class ClientRegistry:
    """Tracks connected clients, their addresses and their outbound mailboxes.

    ``incoming`` is the queue into which connection announcements are pushed,
    alongside the messages the network layer receives.
    """

    def __init__(self, incoming: BoundedQueue[ClientToServerMessageBundle]) -> None:
        self.incoming = incoming
        self._ids = itertools.count()
        self._mailboxes: dict[int, BoundedQueue[ServerToClientMessage]] = {}
        self._disconnected: dict[int, bool] = {}
        self._address_by_id: dict[int, Hashable] = {}
        self._id_by_address: dict[Hashable, int] = {}

    def add_client(self, address: Hashable) -> int:
        """Register a new client at ``address`` and return its assigned id."""
        client_id = next(self._ids)
        mailbox: BoundedQueue[ServerToClientMessage] = BoundedQueue(MAILBOX_CAPACITY)
        self._mailboxes[client_id] = mailbox
        self._disconnected[client_id] = False
        self._address_by_id[client_id] = address
        self._id_by_address[address] = client_id

        announcement = ClientToServerMessageBundle.from_message(
            client_id, ClientToServerMessage.create(Connect())
        )
        try:
            self.incoming.push(announcement)
        except queue.Full:
            logger.warning(
                "Inbound message queue full: dropping connect message from %d",
                client_id,
            )

        try:
            mailbox.push(ClientIdAssignment(new_client_id=client_id))
        except queue.Full:
            logger.warning("Mailbox full: dropping id assignment for %d", client_id)

        logger.info("New Connected %s. Assigned ID: %d", address, client_id)
        return client_id

    def remove_client(self, client_id: int) -> bool:
        """Release a client's bookkeeping; return False if its address was unknown."""
        self._mailboxes.pop(client_id, None)
        self._disconnected.pop(client_id, None)

        address = self._address_by_id.get(client_id)
        if address is None:
            logger.warning("Failed to find socket address for client %d", client_id)
            return False
        self._id_by_address.pop(address, None)
        del self._address_by_id[client_id]

        logger.info("Client %d network resources cleaned up.", client_id)
        return True

    def client_id_for(self, address: Hashable) -> int | None:
        """Return the id registered for ``address``, if any."""
        return self._id_by_address.get(address)

    def address_of(self, client_id: int) -> Hashable | None:
        """Return the address registered for ``client_id``, if any."""
        return self._address_by_id.get(client_id)

    def client_ids(self) -> list[int]:
        """Ids of all clients with a known address, in registration order."""
        return list(self._address_by_id)

    def mailboxes(self) -> list[tuple[int, BoundedQueue[ServerToClientMessage]]]:
        """Snapshot of (client id, mailbox) pairs."""
        return list(self._mailboxes.items())

    def send_to_one_client(self, client_id: int, message: ServerToClientMessage) -> bool:
        """Queue ``message`` for one client; return whether it was queued."""
        mailbox = self._mailboxes.get(client_id)
        if mailbox is None:
            logger.warning("Failed to find client %d", client_id)
            return False
        try:
            mailbox.push(message)
        except queue.Full:
            logger.warning("Failed to enqueue message for client %d", client_id)
            return False
        return True

    def broadcast_to_all_except(
        self, sender_id: int, message: ServerToClientMessage
    ) -> int:
        """Queue ``message`` for every client but ``sender_id``; return how many got it."""
        delivered = 0
        for client_id, mailbox in self.mailboxes():
            if client_id == sender_id:
                continue
            try:
                mailbox.push(message)
            except queue.Full:
                logger.warning("Failed to enqueue message for client %d", client_id)
            else:
                delivered += 1
        return delivered

    def broadcast_to_all(self, message: ServerToClientMessage) -> int:
        """Queue ``message`` for every client; return how many got it."""
        delivered = 0
        for client_id, mailbox in self.mailboxes():
            try:
                mailbox.push(message)
            except queue.Full:
                logger.warning("Failed to enqueue message for client %d", client_id)
            else:
                delivered += 1
        return delivered