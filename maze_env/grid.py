"""
Grid do labirinto.

GridModel guarda a topologia fixa (paredes) e o conteúdo mutável das casas
(baús, relógios, chegada). As buscas em maze_problems só enxergam o grid
através de is_walkable().
"""

import logging
import random
from enum import Enum
from typing import NamedTuple, Optional

from maze_env.config import DEFAULT_CONFIG, GameConfig

logger = logging.getLogger(__name__)

RIGHT, LEFT, UP, DOWN = 0, 1, 2, 3

# (linha, coluna) somados a uma posição para cada direção
DELTAS = {
    RIGHT: (0, 1),
    DOWN:  (1, 0),
    LEFT:  (0, -1),
    UP:    (-1, 0),
}

# Ordem fixa de expansão das buscas: direita, baixo, esquerda, cima
SEARCH_ORDER = (RIGHT, DOWN, LEFT, UP)

WALL_CHAR, EMPTY_CHAR = "#", "_"
PLAYER_CHAR, ENEMY_CHAR, FINISH_CHAR = "P", "E", "F"
LAYOUT_ALPHABET = {WALL_CHAR, EMPTY_CHAR, PLAYER_CHAR, ENEMY_CHAR, FINISH_CHAR}


class MazeLayoutError(ValueError):
    """Layout de labirinto malformado; a sessão não pode começar."""


class Cell(Enum):
    EMPTY = "empty"
    WALL = "wall"
    CHEST = "chest"
    CLOCK = "clock"
    FINISH = "finish"


class Position(NamedTuple):
    row: int
    col: int

    def moved(self, direction: int) -> "Position":
        dr, dc = DELTAS[direction]
        return Position(self.row + dr, self.col + dc)


class GridModel:
    """
    Labirinto quadrado N x N construído a partir de um layout de caracteres.

    O layout usa o alfabeto '#', '_', 'P', 'E', 'F'. As marcações P e E viram
    casas vazias (só servem para achar as posições iniciais); F vira a casa de
    chegada, que nunca é consumida.
    """

    def __init__(self, layout, config: GameConfig = DEFAULT_CONFIG, rng: Optional[random.Random] = None):
        self.config = config
        self.size = len(layout)
        self.chests = set()
        self.clocks = set()
        self.player_start, self.enemy_start, self.finish = None, None, None
        self._cells = self._parse(layout)
        logger.debug("Labirinto %dx%d carregado (jogador %s, inimigo %s, chegada %s)",
                     self.size, self.size, self.player_start, self.enemy_start, self.finish)

        self._rng = rng if rng is not None else random.Random(config.seed)
        self.place_items()

    # ── Construção ───────────────────────────────────────────────────────────
    def _parse(self, layout) -> list:
        if self.size == 0:
            raise MazeLayoutError("Maze layout is empty")

        markers = {PLAYER_CHAR: [], ENEMY_CHAR: [], FINISH_CHAR: []}
        cells = []
        for i, row in enumerate(layout):
            if len(row) != self.size:
                raise MazeLayoutError(f"Row {i} is {len(row)} characters long, expected {self.size}")
            line = []
            for j, ch in enumerate(row):
                if ch not in LAYOUT_ALPHABET:
                    raise MazeLayoutError(f"Unknown character {ch!r} at row {i}, column {j}")
                if ch in markers:
                    markers[ch].append(Position(i, j))
                if ch == WALL_CHAR:
                    line.append(Cell.WALL)
                elif ch == FINISH_CHAR:
                    line.append(Cell.FINISH)
                else:
                    line.append(Cell.EMPTY)
            cells.append(line)

        for ch, found in markers.items():
            if not found:
                raise MazeLayoutError(f"Marker {ch!r} is missing from the maze layout")
            if len(found) > 1:
                raise MazeLayoutError(f"Marker {ch!r} appears {len(found)} times, expected exactly once")

        self.player_start = markers[PLAYER_CHAR][0]
        self.enemy_start = markers[ENEMY_CHAR][0]
        self.finish = markers[FINISH_CHAR][0]
        return cells

    def place_items(self):
        """
        Espalha baús e relógios em casas vazias livres.

        Cada item tem config.placement_attempts sorteios; se nenhum cair numa
        casa livre o item simplesmente não é colocado. O número final de itens
        pode ser menor que o pedido em labirintos muito cheios.
        """
        for _ in range(self.config.chest_count):
            self._place_item(Cell.CHEST)
        for _ in range(self.config.clock_count):
            self._place_item(Cell.CLOCK)

    def _place_item(self, item: Cell) -> bool:
        for _ in range(self.config.placement_attempts):
            pos = Position(self._rng.randrange(self.size), self._rng.randrange(self.size))
            if self.is_free(pos):
                self.put_item(pos, item)
                return True
        logger.warning("Could not place %s after %d attempts, continuing without it",
                       item.value, self.config.placement_attempts)
        return False

    def _registry(self, item: Cell) -> set:
        return self.chests if item == Cell.CHEST else self.clocks

    # ── Consultas ────────────────────────────────────────────────────────────
    def in_bounds(self, pos) -> bool:
        r, c = pos
        return 0 <= r < self.size and 0 <= c < self.size

    def is_walkable(self, pos) -> bool:
        return self.in_bounds(pos) and self._cells[pos[0]][pos[1]] != Cell.WALL

    def cell_at(self, pos) -> Cell:
        if not self.in_bounds(pos):
            raise IndexError(f"Position {tuple(pos)} is outside the {self.size}x{self.size} grid")
        return self._cells[pos[0]][pos[1]]

    def is_finish(self, pos) -> bool:
        return self.in_bounds(pos) and self._cells[pos[0]][pos[1]] == Cell.FINISH

    def snapshot(self) -> tuple:
        """Cópia somente leitura do grid (tupla de tuplas de Cell)."""
        return tuple(tuple(row) for row in self._cells)

    def first_walkable(self) -> Position:
        """Primeira casa andável varrendo de cima para baixo, da esquerda para a direita."""
        for i in range(self.size):
            for j in range(self.size):
                if self._cells[i][j] != Cell.WALL:
                    return Position(i, j)
        raise MazeLayoutError("Maze has no walkable cell")

    def last_walkable(self) -> Position:
        for i in reversed(range(self.size)):
            for j in reversed(range(self.size)):
                if self._cells[i][j] != Cell.WALL:
                    return Position(i, j)
        raise MazeLayoutError("Maze has no walkable cell")

    def is_free(self, pos) -> bool:
        """Casa vazia que não é início do jogador, do inimigo nem a chegada."""
        return (self.in_bounds(pos)
                and self._cells[pos[0]][pos[1]] == Cell.EMPTY
                and Position(*pos) not in (self.player_start, self.enemy_start, self.finish))

    # ── Mutação ──────────────────────────────────────────────────────────────
    def put_item(self, pos, item: Cell):
        if item not in (Cell.CHEST, Cell.CLOCK):
            raise ValueError(f"{item} is not an item")
        if not self.is_free(pos):
            raise ValueError(f"Position {tuple(pos)} is not a free cell")
        self._cells[pos[0]][pos[1]] = item
        self._registry(item).add(Position(*pos))

    def apply_pickup(self, pos) -> Optional[Cell]:
        """Consome o baú/relógio em pos e devolve o tipo consumido (ou None)."""
        cell = self.cell_at(pos)
        if cell not in (Cell.CHEST, Cell.CLOCK):
            return None
        self._cells[pos[0]][pos[1]] = Cell.EMPTY
        self._registry(cell).discard(Position(*pos))
        return cell
