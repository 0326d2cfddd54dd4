"""Client simulation systems and entity archetypes."""

from __future__ import annotations

from ..game_objects import Vec2
from .ecs import (
    Health,
    InputControlled,
    OwnedByClient,
    Physics,
    Player,
    Shape,
    Transform,
    World,
)
from .inputs import ClientState

PLAYER_SPEED = 2.0
DIMS = (240, 160)
PLAYER_SHAPE = Vec2(16.0, 16.0)
PLAYER_HP = 100


def control_player(world: World, state: ClientState) -> None:
    """Set the velocity of input-controlled entities from the held inputs."""
    inputs = state.playing_inputs
    if inputs.up:
        vy = -PLAYER_SPEED
    elif inputs.down:
        vy = PLAYER_SPEED
    else:
        vy = 0.0
    if inputs.left:
        vx = -PLAYER_SPEED
    elif inputs.right:
        vx = PLAYER_SPEED
    else:
        vx = 0.0
    for _, (physics, _marker) in world.query(Physics, InputControlled):
        physics.vel = Vec2(vx, vy)


def step_physics(world: World, state: ClientState) -> None:
    """Move every entity with physics by its velocity."""
    for _, (transform, physics) in world.query(Transform, Physics):
        transform.pos = transform.pos + physics.vel


def step(world: World, state: ClientState) -> None:
    """Run one fixed simulation tick."""
    control_player(world, state)
    step_physics(world, state)


def spawn_player(
    world: World, state: ClientState, owner_client_id: int, local_client_id: int
) -> int:
    """Spawn a player in the middle of the field; the local one takes input."""
    entity = world.spawn(
        Player(),
        Transform(pos=Vec2(float(DIMS[0]), float(DIMS[1])) / 2.0),
        Physics(vel=Vec2()),
        Shape(dims=PLAYER_SHAPE),
        Health(hp=PLAYER_HP),
        OwnedByClient(client_id=owner_client_id),
    )
    if owner_client_id == local_client_id:
        world.insert_one(entity, InputControlled())
    return entity