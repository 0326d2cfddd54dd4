"""Fixed-timestep server simulation loop."""

from __future__ import annotations

import asyncio
import time

from .message_processing import ServerState, process_message_queue
from .registry import ClientRegistry

FRAMES_PER_SECOND = 60
TIMESTEP = 1.0 / FRAMES_PER_SECOND

_IDLE_SLEEP = 0.001


def step(state: ServerState) -> None:
    """Advance every player by one tick."""
    for player in state.players.values():
        player.step()


def advance(state: ServerState, dt: float) -> int:
    """Accumulate ``dt`` seconds and run whole timesteps; return how many ran."""
    state.time_since_last_update += dt
    steps = 0
    while state.time_since_last_update > TIMESTEP:
        state.time_since_last_update -= TIMESTEP
        step(state)
        steps += 1
    return steps


async def main_loop(state: ServerState, registry: ClientRegistry) -> None:
    """Process messages and advance the simulation until cancelled."""
    previous = time.monotonic()
    while True:
        process_message_queue(state, registry)
        now = time.monotonic()
        advance(state, now - previous)
        previous = now
        await asyncio.sleep(_IDLE_SLEEP)