"""
Maze Chase
==========
Front-end pygame do labirinto por turnos.

Controles
---------
- Clique numa casa a até 3 passos para andar até ela (a rota aparece ao
  passar o mouse).
- Setas andam uma casa.
- Backspace desfaz o último passo.
- Espaço começa uma partida nova depois de vencer ou perder.

O jogo em si (rotas, perseguição, turnos) mora em maze_env; este arquivo só
desenha o estado e repassa cliques e teclas para o TurnEngine.

    python main.py
"""

import logging
import sys

import pygame

from maze_env.config import CELL_PX, FPS, HEIGHT, WIDTH
from maze_env.grid import DOWN, LEFT, RIGHT, UP, Cell, MazeLayoutError, Position
from maze_env.logger_config import configure_logging
from maze_env.maze_gamestate import GameState
from maze_env.turns import TurnEngine, TurnEvent

logger = logging.getLogger(__name__)

CELL_COLORS = {
    Cell.EMPTY:  "white",
    Cell.WALL:   "dark slate gray",
    Cell.CHEST:  "gold",
    Cell.CLOCK:  "deep sky blue",
    Cell.FINISH: "lime green",
}
KEY_DIRECTIONS = {pygame.K_RIGHT: RIGHT, pygame.K_LEFT: LEFT, pygame.K_UP: UP, pygame.K_DOWN: DOWN}
EVENT_MESSAGES = {
    TurnEvent.LIFE_LOST: ("orange", "You were caught! Back to the start."),
    TurnEvent.GAME_WON:  ("green",  "Victory! Space bar to restart!"),
    TurnEvent.GAME_OVER: ("red",    "Game over! Space bar to restart!"),
}


def pixel_to_grid(px: float, py: float) -> Position:
    """Converte a posição do mouse (pixels) para (linha, coluna)."""
    return Position(int(py // CELL_PX), int(px // CELL_PX))


# ======================================================================
#  LOOP DO JOGO
# ======================================================================
class MazeGameLoop:
    def __init__(self):
        pygame.init()
        self.screen = pygame.display.set_mode([WIDTH, HEIGHT])
        pygame.display.set_caption("Maze Chase")
        self.timer = pygame.time.Clock()
        self.font = pygame.font.Font("freesansbold.ttf", 20)
        self._new_session()

    def _new_session(self):
        self.game = GameState()
        self.engine = TurnEngine(self.game)
        self.highlight = []
        self.event = TurnEvent.NONE

    def run(self):
        running = True
        while running:
            self.timer.tick(FPS)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.MOUSEMOTION:
                    self._handle_hover(*event.pos)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self._after_command(self.engine.move_player_to(pixel_to_grid(*event.pos)))
                elif event.type == pygame.KEYDOWN:
                    self._handle_keydown(event.key)

            self.screen.fill("black")
            self._draw_board()
            self._draw_misc()
            pygame.display.flip()

        pygame.quit()

    # ── Entrada ──────────────────────────────────────────────────────────────
    def _handle_hover(self, px, py):
        target = pixel_to_grid(px, py)
        self.highlight = self.engine.calculate_route(target) if self.engine.is_valid_move_target(target) else []

    def _handle_keydown(self, key):
        if key in KEY_DIRECTIONS:
            self._after_command(self.engine.step_player(KEY_DIRECTIONS[key]))
        elif key == pygame.K_BACKSPACE:
            self.engine.undo_last_step()
            self.highlight = []
        elif key == pygame.K_SPACE and self.game.game_ended:
            self._new_session()

    def _after_command(self, moved: bool):
        if not moved:
            return
        self.highlight = []
        self.event = self.engine.last_event
        # Mantém a flag em dia para quem ainda consulta por polling
        self.game.consume_life_lost_flag()

    # ── Desenho ──────────────────────────────────────────────────────────────
    def _draw_board(self):
        for i, row in enumerate(self.game.grid_snapshot()):
            for j, cell in enumerate(row):
                rect = [j * CELL_PX, i * CELL_PX, CELL_PX - 1, CELL_PX - 1]
                pygame.draw.rect(self.screen, CELL_COLORS[cell], rect)
        for r, c in self.highlight:
            pygame.draw.rect(self.screen, "light green", [c * CELL_PX, r * CELL_PX, CELL_PX - 1, CELL_PX - 1], 3)

        half = CELL_PX // 2
        for (r, c), color in [(self.game.player_position(), "blue"), (self.game.enemy_position(), "red")]:
            pygame.draw.circle(self.screen, color, (c * CELL_PX + half, r * CELL_PX + half), half - 4)

    def _draw_misc(self):
        y = self.game.grid.size * CELL_PX + 10
        self.screen.blit(self.font.render(f"Score: {self.game.current_score()}", True, "white"), (10, y))
        self.screen.blit(self.font.render(f"Lives: {self.game.lives_remaining()}", True, "white"), (160, y))
        if self.game.is_enemy_slowed():
            self.screen.blit(self.font.render(f"Slowed: {self.game.slowed_turns_left()}", True, "deep sky blue"), (300, y))
        if self.event in EVENT_MESSAGES:
            color, text = EVENT_MESSAGES[self.event]
            self.screen.blit(self.font.render(text, True, color), (10, y + 25))


if __name__ == "__main__":
    configure_logging()
    print("=" * 50)
    print(" Maze Chase")
    print("=" * 50)
    try:
        loop = MazeGameLoop()
    except MazeLayoutError as exc:
        logger.error("Invalid maze layout: %s", exc)
        sys.exit(1)
    loop.run()
