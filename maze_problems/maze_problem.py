import logging
from typing import Optional

from maze_env.grid import Position
from maze_problems.grid_search import GridProblem, astar_search, bounded_breadth_first_search

logger = logging.getLogger(__name__)


def manhattan_distance(a, b) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


# ======================================================================
#  PROBLEMA DO JOGADOR (rota com no máximo K passos)
# ======================================================================
class MazeRouteProblem(GridProblem):
    """
    Rota do jogador até a casa clicada.
    Só vale caminho com até max_steps passos; paredes e bordas bloqueiam.
    """
    def __init__(self, initial, goal, grid, max_steps):
        super().__init__(Position(*initial), Position(*goal), grid)
        self.max_steps = max_steps

    def is_trivially_unreachable(self):
        # Se nem em linha reta dá, nenhuma rota de 4 direções dá
        if not self.grid.is_walkable(self.goal):
            return True
        return manhattan_distance(self.initial, self.goal) > self.max_steps


# ======================================================================
#  PROBLEMA DO INIMIGO (perseguição sem limite de passos)
# ======================================================================
class MazePursuitProblem(GridProblem):
    """Inimigo até o jogador. A* com heurística de Manhattan."""
    def __init__(self, initial, goal, grid):
        super().__init__(Position(*initial), Position(*goal), grid)


def find_route(grid, start, target, max_steps) -> list:
    """
    Caminho mais curto de start até target com no máximo max_steps passos.

    Devolve as posições depois de start (target incluso) ou [] se o alvo é
    parede, está fora do grid, longe demais ou é o próprio start.
    """
    problem = MazeRouteProblem(start, target, grid, max_steps)
    if problem.is_trivially_unreachable():
        logger.debug("Alvo %s descartado antes da busca (origem %s)", problem.goal, problem.initial)
        return []
    node = bounded_breadth_first_search(problem, max_steps)
    if node is None:
        return []
    return node.states()


def next_pursuit_step(grid, start, goal) -> Optional[Position]:
    """Próxima casa no caminho ótimo de start até goal (None se não há caminho)."""
    problem = MazePursuitProblem(start, goal, grid)
    if problem.initial == problem.goal:
        return None
    node = astar_search(problem, problem.h)
    if node is None:
        return None
    return node.path()[1].state
