# shootogeth

A small multiplayer top-down game. One process runs a UDP game server; any
number of pygame clients send datagrams to it, each asks for a player to be
spawned, and every client draws the players it has been told about.

## Installing

    pip install .

This also installs `pygame`, which the client uses for its window.

## Running

Start the server first:

    shootogeth-server

It listens on `127.0.0.1:8080` (change it with `--address host:port`). The
first datagram from a new address registers that address as a client: the
server assigns it an id, sends it a `ClientIdAssignment` and a `Welcome`, and
tells the other clients it joined. Chat messages and entity positions are
relayed to the other clients; a spawn request creates a player on the server
and announces it to every client. The server advances its players at a fixed
60 steps per second and logs what it does at INFO level.

Then start one or more clients:

    shootogeth-client

It connects to `127.0.0.1:8080` by default (`--address host:port` to change
it), asks the server to spawn a player and to forward a request for the full
entity list, and opens a 480×320 window showing a 240×160 play field. For each
`SpawnPlayer` message it receives, the client places a player in the middle of
the field; the player owned by the client's own id follows the keyboard.

## Controls

| Key / button   | Effect                              |
|----------------|-------------------------------------|
| W A S D        | move your player                    |
| Escape / close | quit                                |

The left mouse button (shoot), Space (confirm) and 1–4 (weapons) are read into
`PlayingInputs` each frame, but nothing acts on them yet.

## What it does not do

- Clients never send their own player's position, and they ignore the
  `EntityPosition`, `AllPlayers` and `RequestAllEntitiesFor` messages, so a
  player moved on one client stays still on every other client.
- The server ignores `AllTheEntitiesFor` replies, so the full-entity-list
  request reaches another client but is never answered.
- There is no shooting, health loss, scoring or collision.
- A client that goes away is not noticed: the server has no timeout and no
  disconnect message is ever sent over UDP.

## Layout

- `shootogeth.wire` – little-endian primitive encoding (`Reader`, `pack_u32`,
  `pack_string`, …) and `DecodeError`
- `shootogeth.client_messages` – client-to-server messages,
  `ClientToServerMessage` and `ClientToServerMessageBundle`
- `shootogeth.server_messages` – server-to-client messages with
  `encode_message` and `decode_message`
- `shootogeth.game_objects` – `Vec2` and the server-side `Player`
- `shootogeth.mailbox` – `BoundedQueue`, the thread-safe bounded FIFO that
  carries messages
- `shootogeth.settings` – default addresses, `split_address` and
  `utc_now_millis`
- `shootogeth.server` – `ClientRegistry`, `ServerState` and
  `process_message_queue`, the fixed-step `main_loop`, and the UDP
  `ServerProtocol` with `start_server` and `main`
- `shootogeth.client` – the `World` entity store and its components,
  `PlayingInputs` and `ClientState`, the `control_player`/`step_physics`
  systems and `spawn_player`, the `ClientConnection` UDP protocol with
  `connect`, and the pygame window in `shootogeth.client.app`

## Tests

    pip install .[test]
    pytest