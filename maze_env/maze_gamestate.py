"""
Estado de uma partida do labirinto.

GameState é a raiz agregada da sessão: grid, posições do jogador e do
inimigo, vidas, pontuação, efeito do relógio, flags de fim de jogo e a pilha
de histórico usada pelo desfazer. Quem muda esse estado é o TurnEngine
(maze_env/turns.py); a camada de apresentação só usa os acessores abaixo.

Uma instância vale por uma sessão. Nova partida = novo GameState.
"""

import logging
import random
from typing import Optional

from maze_env.board import boards
from maze_env.config import DEFAULT_CONFIG, GameConfig
from maze_env.grid import GridModel, Position

logger = logging.getLogger(__name__)


class GameState:
    def __init__(self, layout=None, config: GameConfig = DEFAULT_CONFIG, rng: Optional[random.Random] = None):
        self.config = config
        # MazeLayoutError sobe daqui direto para quem abriu a sessão
        self.grid = GridModel(boards if layout is None else layout, config, rng)

        self.player_pos = self.grid.player_start
        self.enemy_pos = self.grid.enemy_start
        # Âncoras para onde cada um volta depois de uma colisão
        self.player_reset_pos = self.grid.first_walkable()
        self.enemy_reset_pos = self.grid.last_walkable()

        self.lives = config.starting_lives
        self.score = 0
        self.enemy_slowed = False
        self.slowed_turns_remaining = 0
        self.game_won = False
        self.game_ended = False
        self.life_lost = False
        self.move_history = []   # Pilha (LIFO) de posições anteriores, uma por casa andada

    # ── Transições usadas pelo TurnEngine ───────────────────────────────────
    def check_game_end(self) -> bool:
        # Uma vez encerrado, continua encerrado
        if self.game_won or self.lives == 0:
            if not self.game_ended:
                logger.info("Game ended: %s (score %d)", "won" if self.game_won else "lost", self.score)
            self.game_ended = True
        return self.game_ended

    def reset_positions(self):
        self.player_pos = self.player_reset_pos
        self.enemy_pos = self.enemy_reset_pos

    # ── Acessores para a apresentação ────────────────────────────────────────
    def grid_snapshot(self) -> tuple:
        return self.grid.snapshot()

    def player_position(self) -> Position:
        return self.player_pos

    def enemy_position(self) -> Position:
        return self.enemy_pos

    def lives_remaining(self) -> int:
        return self.lives

    def current_score(self) -> int:
        return self.score

    def is_game_over(self) -> bool:
        return self.lives <= 0

    def is_game_won(self) -> bool:
        return self.game_won

    def consume_life_lost_flag(self) -> bool:
        """Devolve a flag de vida perdida e já a limpa (dispara uma vez só)."""
        lost, self.life_lost = self.life_lost, False
        return lost

    def is_enemy_slowed(self) -> bool:
        return self.enemy_slowed

    def slowed_turns_left(self) -> int:
        return self.slowed_turns_remaining

    def remaining_chests(self) -> frozenset:
        return frozenset(self.grid.chests)

    def remaining_clocks(self) -> frozenset:
        return frozenset(self.grid.clocks)

    def history_length(self) -> int:
        return len(self.move_history)
