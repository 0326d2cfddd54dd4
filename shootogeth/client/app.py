"""Client window, drawing and the client entry point."""

from __future__ import annotations

import argparse
import asyncio
import functools
import logging
import os
from collections.abc import Sequence
from typing import Any

import pygame

from ..client_messages import RequestAllEntities, RequestToSpawnPlayer
from ..settings import SERVER_HOST_ADDR
from .ecs import Shape, Transform, World
from .inputs import ClientState, PlayingInputs
from .networking import ClientConnection, connect, process_message_queue
from .systems import DIMS, step

WINDOW_DIMS = (480, 320)
FULLSCREEN = False
FRAMES_PER_SECOND = 60
TIMESTEP = 1.0 / FRAMES_PER_SECOND
TARGET_FPS = 144
TITLE = "shootogethorthings"

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
GREEN = (0, 228, 48)
BLUE = (0, 121, 241)

_KEY_BINDINGS = {
    pygame.K_w: "up",
    pygame.K_a: "left",
    pygame.K_s: "down",
    pygame.K_d: "right",
    pygame.K_SPACE: "confirm",
    pygame.K_1: "weapon_1",
    pygame.K_2: "weapon_2",
    pygame.K_3: "weapon_3",
    pygame.K_4: "weapon_4",
}

logger = logging.getLogger(__name__)


def mouse_scale() -> tuple[float, float]:
    """Factor from window coordinates to render-texture coordinates."""
    return DIMS[0] / WINDOW_DIMS[0], DIMS[1] / WINDOW_DIMS[1]


def window_position(screen_width: int, screen_height: int) -> tuple[int, int]:
    """Top-left window position that centres the window on the screen."""
    return (
        int(screen_width / 2) - int(WINDOW_DIMS[0] / 2),
        int(screen_height / 2) - int(WINDOW_DIMS[1] / 2),
    )


@functools.lru_cache(maxsize=1)
def _font() -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    return pygame.font.Font(None, 12)


def draw(
    world: World,
    state: ClientState,
    surface: pygame.Surface,
    mouse_pos: tuple[float, float],
) -> None:
    """Draw the title, the mouse cursor and every shaped entity onto ``surface``."""
    surface.blit(_font().render("Multiplayer!", False, WHITE), (12, 12))
    pygame.draw.circle(surface, GREEN, (int(mouse_pos[0]), int(mouse_pos[1])), 6)
    for _, (transform, shape) in world.query(Transform, Shape):
        pygame.draw.circle(
            surface,
            BLUE,
            (int(transform.pos.x), int(transform.pos.y)),
            shape.dims.x,
        )


def pressed_inputs(keys: Any, mouse_buttons: Sequence[bool]) -> frozenset[str]:
    """Names of the held controls, from key and mouse-button states."""
    names = {name for key, name in _KEY_BINDINGS.items() if keys[key]}
    if mouse_buttons and mouse_buttons[0]:
        names.add("shoot")
    return frozenset(names)


def _init_window() -> tuple[pygame.Surface, pygame.Surface]:
    pygame.init()
    info = pygame.display.Info()
    x, y = window_position(info.current_w, info.current_h)
    os.environ["SDL_VIDEO_WINDOW_POS"] = f"{x},{y}"
    flags = pygame.FULLSCREEN if FULLSCREEN else 0
    size = (0, 0) if FULLSCREEN else WINDOW_DIMS
    window = pygame.display.set_mode(size, flags)
    pygame.display.set_caption(TITLE)
    return window, pygame.Surface(DIMS)


async def _run(address: str) -> int:
    try:
        connection: ClientConnection = await connect(address)
    except OSError as exc:
        logger.error("Error connecting to server: %s", exc)
        return 1

    connection.send(RequestToSpawnPlayer())
    connection.send(RequestAllEntities(from_client_id=connection.client_id))

    window, canvas = _init_window()
    clock = pygame.time.Clock()
    world = World()
    state = ClientState()
    scale_x, scale_y = mouse_scale()
    try:
        while state.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT or (
                    event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE
                ):
                    state.running = False
            state.playing_inputs = PlayingInputs.from_pressed(
                pressed_inputs(pygame.key.get_pressed(), pygame.mouse.get_pressed())
            )
            process_message_queue(world, state, connection)

            dt = clock.tick(TARGET_FPS) / 1000.0
            state.time_since_last_update += dt
            while state.time_since_last_update > TIMESTEP:
                state.time_since_last_update -= TIMESTEP
                step(world, state)

            mx, my = pygame.mouse.get_pos()
            canvas.fill(BLACK)
            draw(world, state, canvas, (mx * scale_x, my * scale_y))
            window.blit(pygame.transform.scale(canvas, window.get_size()), (0, 0))
            pygame.display.flip()

            connection.flush()
            await asyncio.sleep(0)
    finally:
        if connection.transport is not None:
            connection.transport.close()
        pygame.quit()
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the game client until the window is closed."""
    parser = argparse.ArgumentParser(description="Run the game client.")
    parser.add_argument(
        "--address",
        default=SERVER_HOST_ADDR,
        help="server host:port (default: %(default)s)",
    )
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    try:
        return asyncio.run(_run(args.address))
    except KeyboardInterrupt:
        return 0