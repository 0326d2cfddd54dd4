import asyncio

import pytest

from shootogeth.client_messages import ChatMessage, ClientToServerMessage, Connect
from shootogeth.mailbox import BoundedQueue
from shootogeth.server.networking import (
    MAX_MESSAGES_PER_CLIENT_FRAME,
    ServerProtocol,
    main,
    start_server,
    transmit_outbound_messages,
)
from shootogeth.server.registry import ClientRegistry
from shootogeth.server_messages import (
    ClientIdAssignment,
    ClientJoined,
    decode_message,
)

ADDR_A = ("127.0.0.1", 8100)
ADDR_B = ("127.0.0.1", 8101)


class FakeTransport:
    def __init__(self):
        self.sent = []

    def sendto(self, data, addr):
        self.sent.append((data, addr))

    def is_closing(self):
        return False


def make_registry():
    return ClientRegistry(BoundedQueue(32))


def test_datagram_from_new_address_registers_client():
    registry = make_registry()
    protocol = ServerProtocol(registry)
    protocol.connection_made(FakeTransport())
    payload = ClientToServerMessage(5, ChatMessage("hi")).encode()
    protocol.datagram_received(payload, ADDR_A)
    client_id = registry.client_id_for(ADDR_A)
    bundles = list(registry.incoming.drain())
    assert [b.message for b in bundles] == [Connect(), ChatMessage("hi")]
    assert all(b.client_id == client_id for b in bundles)
    assert bundles[1].send_time == 5


def test_known_address_keeps_its_id():
    registry = make_registry()
    protocol = ServerProtocol(registry)
    payload = ClientToServerMessage(0, ChatMessage("a")).encode()
    protocol.datagram_received(payload, ADDR_A)
    protocol.datagram_received(payload, ADDR_A)
    assert registry.client_ids() == [registry.client_id_for(ADDR_A)]
    assert len(list(registry.incoming.drain())) == 3


def test_undecodable_datagram_is_dropped_but_sender_registered():
    registry = make_registry()
    protocol = ServerProtocol(registry)
    protocol.datagram_received(b"\x01", ADDR_B)
    assert registry.client_id_for(ADDR_B) is not None
    assert [b.message for b in registry.incoming.drain()] == [Connect()]


def test_transmit_sends_encoded_messages_to_addresses():
    registry = make_registry()
    first = registry.add_client(ADDR_A)
    second = registry.add_client(ADDR_B)
    registry.send_to_one_client(first, ClientJoined(id=second))
    transport = FakeTransport()
    assert transmit_outbound_messages(registry, transport) == 3
    received = [(decode_message(data), addr) for data, addr in transport.sent]
    assert received == [
        (ClientIdAssignment(new_client_id=first), ADDR_A),
        (ClientJoined(id=second), ADDR_A),
        (ClientIdAssignment(new_client_id=second), ADDR_B),
    ]
    assert transmit_outbound_messages(registry, transport) == 0


def test_transmit_limits_messages_per_client():
    registry = make_registry()
    client_id = registry.add_client(ADDR_A)
    mailbox = dict(registry.mailboxes())[client_id]
    while len(mailbox) < mailbox.capacity:
        registry.send_to_one_client(client_id, ClientJoined(id=client_id))
    transport = FakeTransport()
    first_pass = transmit_outbound_messages(registry, transport)
    assert first_pass == min(mailbox.capacity, MAX_MESSAGES_PER_CLIENT_FRAME)
    assert first_pass + len(mailbox) == mailbox.capacity


class _Receiver(asyncio.DatagramProtocol):
    def __init__(self):
        self.received = asyncio.Queue()

    def datagram_received(self, data, addr):
        self.received.put_nowait(data)


@pytest.mark.asyncio
async def test_server_round_trip_over_udp():
    registry = make_registry()
    server = await start_server(registry, "127.0.0.1:0")
    host, port = server.get_extra_info("sockname")[:2]
    loop = asyncio.get_running_loop()
    client, receiver = await loop.create_datagram_endpoint(
        _Receiver, remote_addr=(host, port)
    )
    try:
        client.sendto(ClientToServerMessage.create(ChatMessage("hello")).encode())
        reply = await asyncio.wait_for(receiver.received.get(), timeout=5)
        assert decode_message(reply) == ClientIdAssignment(new_client_id=0)
        assert [b.message for b in registry.incoming.drain()] == [
            Connect(),
            ChatMessage("hello"),
        ]
    finally:
        client.close()
        server.close()
        await asyncio.sleep(0.01)


def test_main_rejects_unknown_arguments():
    with pytest.raises(SystemExit) as excinfo:
        main(["--no-such-option"])
    assert excinfo.value.code == 2