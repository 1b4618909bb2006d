from typing import Optional

from maze_env.grid import Position
from maze_problems.maze_problem import next_pursuit_step


# ======================================================================
#  AGENTE A* ONLINE (inimigo)
# ======================================================================
class EnemyPursuitAgent:
    """
    Persegue o jogador um passo por vez.
    Cada chamada de get_action() faz uma busca A* nova a partir da posição
    atual do inimigo; nada da busca anterior é reaproveitado.
    """
    def __init__(self, game):
        self.game = game

    def get_action(self) -> Optional[Position]:
        # 1. Percebe a própria posição e a do jogador
        start = self.game.enemy_pos
        goal = self.game.player_pos
        if start == goal:
            return None

        # 2. Executa a busca A* e devolve só o primeiro passo
        return next_pursuit_step(self.game.grid, start, goal)
