"""
Sequência de turnos.

Um turno = o jogador anda (até MAX_STEPS casas por uma rota válida) e o
inimigo responde com um ou dois passos de perseguição A*. Tudo roda de forma
síncrona; o motor não é reentrante.

    AWAITING_INPUT -> PLAYER_MOVING -> ENEMY_MOVING -> AWAITING_INPUT
                           |               |
                           +----> ENDED <--+
"""

import logging
from enum import Enum

from maze_agents.pursuit_agent import EnemyPursuitAgent
from maze_env.grid import Cell, Position
from maze_env.maze_gamestate import GameState
from maze_problems.maze_problem import find_route, manhattan_distance

logger = logging.getLogger(__name__)


class TurnPhase(Enum):
    AWAITING_INPUT = "awaiting_input"
    PLAYER_MOVING = "player_moving"
    ENEMY_MOVING = "enemy_moving"
    ENDED = "ended"


class TurnEvent(Enum):
    """O que aconteceu de relevante no último comando."""
    NONE = "none"
    LIFE_LOST = "life_lost"
    GAME_WON = "game_won"
    GAME_OVER = "game_over"


class TurnEngine:
    def __init__(self, state: GameState):
        self.state = state
        self.agent = EnemyPursuitAgent(state)
        self.phase = TurnPhase.ENDED if state.game_ended else TurnPhase.AWAITING_INPUT
        self.last_event = TurnEvent.NONE

    # ══════════════════════════════════════════════════════════════════════
    #  Consultas (somente leitura)
    # ══════════════════════════════════════════════════════════════════════
    def is_valid_move_target(self, target) -> bool:
        """Alvo andável e dentro do alcance em linha reta; não garante rota."""
        state = self.state
        return (state.grid.is_walkable(target)
                and manhattan_distance(state.player_pos, target) <= state.config.max_steps)

    def calculate_route(self, target) -> list:
        state = self.state
        return find_route(state.grid, state.player_pos, target, state.config.max_steps)

    # ══════════════════════════════════════════════════════════════════════
    #  Comandos
    # ══════════════════════════════════════════════════════════════════════
    def move_player_to(self, target) -> bool:
        """
        Anda o jogador pela rota até target e em seguida move o inimigo.

        Devolve False sem mudar nada se o jogo acabou ou se não há rota. O
        evento do turno fica em self.last_event.
        """
        state = self.state
        if state.game_ended:
            return False
        self._require_idle()

        route = self.calculate_route(target)
        if not route:
            logger.debug("Movimento para %s rejeitado (jogador em %s)", tuple(target), state.player_pos)
            return False

        self.phase = TurnPhase.PLAYER_MOVING
        for step in route:
            state.move_history.append(state.player_pos)
            state.player_pos = step
            self._apply_cell_effect(step)
        state.check_game_end()

        self.last_event = self.advance_enemy_turn()
        return True

    def step_player(self, direction) -> bool:
        """Anda uma casa na direção dada (setas do teclado)."""
        return self.move_player_to(self.state.player_pos.moved(direction))

    def undo_last_step(self) -> bool:
        """
        Volta o jogador uma casa no histórico.

        Só a posição volta: itens consumidos, pontos e o relógio continuam
        como estão.
        """
        state = self.state
        if not state.move_history:
            return False
        state.player_pos = state.move_history.pop()
        self.last_event = TurnEvent.NONE
        return True

    def advance_enemy_turn(self) -> TurnEvent:
        state = self.state
        if state.game_ended:
            self.phase = TurnPhase.ENDED
            return self._terminal_event()
        if state.enemy_pos == state.player_pos:
            self.phase = TurnPhase.AWAITING_INPUT
            return TurnEvent.NONE

        self.phase = TurnPhase.ENEMY_MOVING
        config = state.config
        moves = config.enemy_slowed_speed if state.enemy_slowed else config.enemy_speed
        for _ in range(moves):
            step = self.agent.get_action()
            if step is None:
                break
            state.enemy_pos = step

        if state.enemy_slowed:
            state.slowed_turns_remaining -= 1
            if state.slowed_turns_remaining <= 0:
                state.slowed_turns_remaining = 0
                state.enemy_slowed = False

        collided = self._check_collision()
        state.check_game_end()
        self.phase = TurnPhase.ENDED if state.game_ended else TurnPhase.AWAITING_INPUT

        if state.game_ended:
            return self._terminal_event()
        return TurnEvent.LIFE_LOST if collided else TurnEvent.NONE

    # ── Internos ─────────────────────────────────────────────────────────────
    def _require_idle(self):
        if self.phase in (TurnPhase.PLAYER_MOVING, TurnPhase.ENEMY_MOVING):
            raise RuntimeError(f"Turn already in progress ({self.phase.value})")

    def _apply_cell_effect(self, pos: Position):
        state = self.state
        picked = state.grid.apply_pickup(pos)
        if picked == Cell.CHEST:
            state.score += state.config.chest_score
        elif picked == Cell.CLOCK:
            # Relógio novo reinicia a contagem
            state.enemy_slowed = True
            state.slowed_turns_remaining = state.config.slow_turns
        elif state.grid.is_finish(pos):
            # A rota continua mesmo depois de passar pela chegada
            state.game_won = True

    def _check_collision(self) -> bool:
        state = self.state
        if state.enemy_pos != state.player_pos:
            return False
        state.lives = max(0, state.lives - 1)
        state.life_lost = True
        state.reset_positions()
        logger.info("Life lost, %d remaining", state.lives)
        return True

    def _terminal_event(self) -> TurnEvent:
        if self.state.game_won:
            return TurnEvent.GAME_WON
        if self.state.lives <= 0:
            return TurnEvent.GAME_OVER
        return TurnEvent.NONE
