import pytest

from maze_env.config import NO_ITEMS
from maze_env.maze_gamestate import GameState
from maze_env.turns import TurnEngine


@pytest.fixture
def mini_board():
    """
    Labirinto 5x5 com borda de paredes.
    Caminho livre em volta de uma parede central em (2,2).
    """
    return [
        "#####",
        "#P__#",
        "#_#_#",
        "#E_F#",
        "#####",
    ]


@pytest.fixture
def corridor_board():
    """
    20x20 todo de parede, menos um corredor de (0,0) até (0,3).
    Inimigo e chegada ficam isolados no canto de baixo.
    """
    rows = ["P___" + "#" * 16] + ["#" * 20 for _ in range(18)]
    rows.append("#" * 17 + "F#E")
    return rows


@pytest.fixture
def make_engine():
    def _make(layout, config=NO_ITEMS):
        return TurnEngine(GameState(layout, config))
    return _make
