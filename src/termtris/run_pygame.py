"""Simple pygame front-end for the Tetris engine.

This module provides a playable version of the game using the engine
implemented in the surrounding modules.  It only reads the board for
rendering and maps keys onto :class:`GameState` actions.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Optional

import pygame

from .board import Board
from .game_state import TICK_MS, GameState


LOGGER = logging.getLogger(__name__)

# Size of a single board cell in pixels
CELL_SIZE = 30
# Frames per second to run the game loop at
FPS = 60

BACKGROUND = (0, 0, 0)
GRID_LINE = (50, 50, 50)


def draw_board(screen: pygame.Surface, board: Board) -> None:
    """Render the board grid, active piece included."""

    for y in range(board.height()):
        for x in range(board.width()):
            color = board.get(x, y) or BACKGROUND
            rect = pygame.Rect(x * CELL_SIZE, y * CELL_SIZE, CELL_SIZE, CELL_SIZE)
            pygame.draw.rect(screen, color, rect)
            pygame.draw.rect(screen, GRID_LINE, rect, 1)


def handle_key(event: pygame.event.Event, state: GameState) -> bool:
    """Process a key press.

    Returns ``False`` when the player asked to quit.
    """

    if event.key == pygame.K_q:
        return False
    if event.key == pygame.K_LEFT:
        state.move_left()
    elif event.key == pygame.K_RIGHT:
        state.move_right()
    elif event.key == pygame.K_UP:
        state.rotate()
    elif event.key == pygame.K_DOWN:
        state.hard_drop()
    return True


class GameRunner:
    """Manage the game loop with start/pause/resume/stop controls."""

    def __init__(self, state: Optional[GameState] = None, tick_ms: int = TICK_MS) -> None:
        self._running = False
        self._paused = False
        self._screen: Optional[pygame.Surface] = None
        self._state = state or GameState()
        self._clock: Optional[pygame.time.Clock] = None
        self._tick_ms = tick_ms
        self._drop_timer = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def state(self) -> GameState:
        return self._state

    def step(self, dt: int) -> None:
        """Advance the gravity timer by ``dt`` milliseconds."""

        if self._paused:
            return
        self._drop_timer += dt
        if self._drop_timer >= self._tick_ms:
            self._drop_timer = 0
            self._state.tick()
        if self._state.over:
            self._running = False

    def _process_events(self) -> None:
        # Even when paused, process events so the window remains responsive
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.stop()
            elif event.type == pygame.KEYDOWN and not self._paused:
                if not handle_key(event, self._state):
                    self.stop()

    def _draw(self) -> None:
        if self._screen is None:
            return
        self._screen.fill(BACKGROUND)
        draw_board(self._screen, self._state.board)
        pygame.display.set_caption(
            f"Tetris - {'Paused - ' if self._paused else ''}Score: {self._state.score}"
        )
        pygame.display.flip()

    async def _run_loop(self) -> None:
        os.environ.setdefault("SDL_VIDEO_CENTERED", "1")
        pygame.init()
        board = self._state.board
        self._screen = pygame.display.set_mode(
            (board.width() * CELL_SIZE, board.height() * CELL_SIZE)
        )
        pygame.display.set_caption("Tetris")
        self._clock = pygame.time.Clock()

        if self._state.active is None:
            self._state.reset_game()
        self._drop_timer = 0
        self._running = True
        while self._running:
            dt = self._clock.tick(FPS)
            self._process_events()
            if self._running:
                self.step(dt)
            self._draw()
            # Yield to the event loop to keep other tasks responsive
            await asyncio.sleep(0)

        pygame.quit()
        LOGGER.info("Game stopped. Score: %d", self._state.score)

    def start(self) -> None:
        """Run the game until the player quits or the game ends."""

        if self._running:
            LOGGER.warning("Game already running")
            return
        self._paused = False
        asyncio.run(self._run_loop())

    def pause(self) -> None:
        if not self._running:
            LOGGER.info("Pause ignored: game not running")
            return
        self._paused = True
        LOGGER.info("Paused")

    def resume(self) -> None:
        if not self._running:
            LOGGER.info("Resume ignored: game not running")
            return
        self._paused = False
        LOGGER.info("Resumed")

    def stop(self) -> None:
        if not self._running:
            LOGGER.info("Stop ignored: game not running")
            return
        # The loop exits after the current frame
        self._running = False


def main(state: Optional[GameState] = None, tick_ms: int = TICK_MS) -> None:
    """Open a window and play until quit or game over."""

    GameRunner(state, tick_ms=tick_ms).start()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
