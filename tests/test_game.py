import asyncio

import pytest

from shootogeth.client_messages import ClientToServerMessageBundle, RequestToSpawnPlayer
from shootogeth.game_objects import Player, Vec2
from shootogeth.mailbox import BoundedQueue
from shootogeth.server.game import FRAMES_PER_SECOND, TIMESTEP, advance, main_loop, step
from shootogeth.server.message_processing import ServerState
from shootogeth.server.registry import ClientRegistry


def state_with_player(pos, vel):
    state = ServerState()
    state.players[0] = Player(0, 0, pos, vel)
    return state


def test_advance_one_second_runs_about_one_frame_rate_of_steps():
    state = state_with_player(Vec2(), Vec2(1.0, 0.0))
    steps = advance(state, 1.0)
    assert FRAMES_PER_SECOND - 1 <= steps <= FRAMES_PER_SECOND
    assert state.players[0].pos.x == pytest.approx(float(steps))
    assert 0.0 <= state.time_since_last_update <= TIMESTEP + 1e-9


def test_step_moves_players_by_velocity():
    start, vel = Vec2(1.0, 2.0), Vec2(0.5, 0.25)
    state = state_with_player(start, vel)
    step(state)
    assert state.players[0].pos == start + vel


def test_advance_with_no_time_does_nothing():
    start = Vec2(3.0, 4.0)
    state = state_with_player(start, Vec2(1.0, 1.0))
    assert advance(state, 0.0) == 0
    assert state.players[0].pos == start


def test_advance_runs_whole_steps_and_keeps_remainder():
    start, vel = Vec2(0.0, 0.0), Vec2(1.0, 0.0)
    state = state_with_player(start, vel)
    assert advance(state, 2.5 * TIMESTEP) == 2
    assert state.players[0].pos == start + vel + vel
    assert state.time_since_last_update == pytest.approx(0.5 * TIMESTEP)


def test_advance_needs_strictly_more_than_a_timestep():
    state = state_with_player(Vec2(), Vec2(1.0, 1.0))
    assert advance(state, TIMESTEP / 2) == 0
    assert advance(state, TIMESTEP / 2) == 0
    assert advance(state, TIMESTEP / 2) == 1


@pytest.mark.asyncio
async def test_main_loop_processes_messages():
    registry = ClientRegistry(BoundedQueue(32))
    client_id = registry.add_client(("127.0.0.1", 7000))
    registry.incoming.push(
        ClientToServerMessageBundle(client_id, 0, 0, RequestToSpawnPlayer())
    )
    state = ServerState()
    task = asyncio.create_task(main_loop(state, registry))
    for _ in range(200):
        if state.players:
            break
        await asyncio.sleep(0.01)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert [player.owner_client_id for player in state.players.values()] == [client_id]
    assert len(registry.incoming) == 0