"""
Busca em grafo sobre o grid do labirinto.

Segue o formato clássico Problem / Node: o problema diz quais ações existem
em cada estado (actions), para onde cada ação leva (result), quanto custa
(path_cost) e quando parar (goal_test). As buscas só conhecem essa interface.

- bounded_breadth_first_search: BFS com limite de profundidade, marca um
  estado como visitado na hora em que ele entra na fila.
- astar_search: A* com f(n) = g(n) + h(n); empates em f saem na ordem de
  inserção (contador no heap), então o resultado é reprodutível.
"""

import heapq
import itertools
import logging
from collections import deque

from maze_env.grid import SEARCH_ORDER

logger = logging.getLogger(__name__)


class Node:
    """Nó da árvore de busca: um estado mais o caminho que levou até ele."""

    __slots__ = ("state", "parent", "action", "path_cost", "depth")

    def __init__(self, state, parent=None, action=None, path_cost=0):
        self.state = state
        self.parent = parent
        self.action = action
        self.path_cost = path_cost
        self.depth = parent.depth + 1 if parent else 0

    def __repr__(self):
        return f"<Node {self.state}>"

    def expand(self, problem):
        return [self.child_node(problem, action) for action in problem.actions(self.state)]

    def child_node(self, problem, action):
        next_state = problem.result(self.state, action)
        return Node(next_state, self, action,
                    problem.path_cost(self.path_cost, self.state, action, next_state))

    def path(self):
        node, back = self, []
        while node:
            back.append(node)
            node = node.parent
        return list(reversed(back))

    def solution(self):
        """Ações da raiz até este nó."""
        return [node.action for node in self.path()[1:]]

    def states(self):
        """Estados visitados da raiz até este nó, sem incluir a raiz."""
        return [node.state for node in self.path()[1:]]


class GridProblem:
    """
    Problema de caminho num grid 4-conectado.

    `grid` só precisa responder is_walkable(pos). Estados são Position.
    """

    def __init__(self, initial, goal, grid):
        self.initial = initial
        self.goal = goal
        self.grid = grid

    def actions(self, state):
        # Ordem fixa: direita, baixo, esquerda, cima
        return [d for d in SEARCH_ORDER if self.grid.is_walkable(state.moved(d))]

    def result(self, state, action):
        return state.moved(action)

    def goal_test(self, state):
        return state == self.goal

    def path_cost(self, c, state1, action, state2):
        return c + 1

    def h(self, node):
        # Distância de Manhattan: admissível e consistente com custo 1
        r1, c1 = node.state
        r2, c2 = self.goal
        return abs(r1 - r2) + abs(c1 - c2)


def bounded_breadth_first_search(problem, limit):
    """
    BFS que só expande nós com profundidade < limit.

    Devolve o primeiro nó objetivo retirado da fila (caminho mais curto com no
    máximo `limit` passos) ou None.
    """
    frontier = deque([Node(problem.initial)])
    visited = {problem.initial}
    while frontier:
        node = frontier.popleft()
        if problem.goal_test(node.state):
            return node
        if node.depth >= limit:
            continue
        for child in node.expand(problem):
            if child.state not in visited:
                visited.add(child.state)
                frontier.append(child)
    return None


def astar_search(problem, h=None):
    """A* em grafo. Devolve o nó objetivo (com o caminho ótimo) ou None."""
    h = h or problem.h
    counter = itertools.count()
    start = Node(problem.initial)
    frontier = [(h(start), next(counter), start)]
    best_g = {start.state: 0}
    explored = set()

    while frontier:
        _, _, node = heapq.heappop(frontier)
        if problem.goal_test(node.state):
            return node
        if node.state in explored:
            continue
        explored.add(node.state)
        for child in node.expand(problem):
            if child.state in explored:
                continue
            if child.state not in best_g or child.path_cost < best_g[child.state]:
                best_g[child.state] = child.path_cost
                heapq.heappush(frontier, (child.path_cost + h(child), next(counter), child))

    logger.debug("A* esgotou a fronteira: %s inalcançável a partir de %s", problem.goal, problem.initial)
    return None
