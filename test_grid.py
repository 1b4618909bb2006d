import logging
import random

import pytest

from maze_env.board import boards
from maze_env.config import NO_ITEMS, GameConfig
from maze_env.grid import Cell, GridModel, MazeLayoutError, Position

# ======================================================================
# CONSTRUÇÃO
# ======================================================================

def test_labirinto_de_referencia():
    grid = GridModel(boards, NO_ITEMS)
    assert grid.size == 20
    assert grid.player_start == (0, 0)
    assert grid.enemy_start == (19, 19)
    assert grid.finish == (9, 19)
    assert grid.cell_at((0, 1)) == Cell.WALL
    assert grid.cell_at((0, 0)) == Cell.EMPTY
    assert grid.cell_at((9, 19)) == Cell.FINISH
    assert grid.first_walkable() == (0, 0)
    assert grid.last_walkable() == (19, 19)


@pytest.mark.parametrize("layout, trecho", [
    (["P_F", "__", "__E"], "Row 1"),
    (["P_F_", "____", "___E"], "Row 0"),
    (["__F", "___", "__E"], "'P'"),
    (["P_F", "___", "___"], "'E'"),
    (["P__", "___", "__E"], "'F'"),
    (["P_F", "_E_", "__E"], "'E' appears 2 times"),
    (["PPF", "___", "__E"], "'P' appears 2 times"),
    (["P_F", "_x_", "__E"], "Unknown character"),
    ([], "empty"),
])
def test_layout_malformado_falha(layout, trecho):
    with pytest.raises(MazeLayoutError, match=trecho):
        GridModel(layout, NO_ITEMS)


def test_tamanho_vem_do_layout(mini_board):
    """O lado do grid é o número de linhas do layout; não há tamanho na config."""
    assert GridModel(mini_board, NO_ITEMS).size == 5
    assert GridModel(boards, NO_ITEMS).size == 20
    with pytest.raises(TypeError):
        GameConfig(size=10)


def test_config_sem_itens(mini_board):
    grid = GridModel(mini_board, NO_ITEMS)
    assert NO_ITEMS.chest_count == 0 and NO_ITEMS.clock_count == 0
    assert grid.chests == set() and grid.clocks == set()


def test_fora_do_grid_levanta_index_error(mini_board):
    grid = GridModel(mini_board, NO_ITEMS)
    with pytest.raises(IndexError):
        grid.cell_at((5, 0))
    with pytest.raises(IndexError):
        grid.cell_at((0, -1))


def test_casas_andaveis(mini_board):
    grid = GridModel(mini_board, NO_ITEMS)
    assert grid.is_walkable((1, 1))
    assert grid.is_walkable((3, 3))     # chegada também é andável
    assert not grid.is_walkable((2, 2))
    assert not grid.is_walkable((-1, 0))
    assert not grid.is_walkable((1, 5))
    assert grid.is_finish((3, 3))
    assert not grid.is_finish((1, 1))


def test_snapshot_e_somente_leitura(mini_board):
    grid = GridModel(mini_board, NO_ITEMS)
    snap = grid.snapshot()
    assert isinstance(snap, tuple) and isinstance(snap[0], tuple)
    assert snap[2][2] == Cell.WALL
    with pytest.raises(TypeError):
        snap[1][1] = Cell.WALL

# ======================================================================
# ITENS
# ======================================================================

def test_itens_sorteados_em_casas_livres():
    grid = GridModel(boards, GameConfig(seed=7))
    assert len(grid.chests) == 5
    assert len(grid.clocks) == 3
    reservadas = {grid.player_start, grid.enemy_start, grid.finish}
    for pos in grid.chests:
        assert grid.cell_at(pos) == Cell.CHEST
        assert pos not in reservadas
    for pos in grid.clocks:
        assert grid.cell_at(pos) == Cell.CLOCK
        assert pos not in reservadas
    assert not grid.chests & grid.clocks


def test_mesma_semente_mesmo_tabuleiro():
    a = GridModel(boards, GameConfig(seed=42))
    b = GridModel(boards, rng=random.Random(42))
    assert a.snapshot() == b.snapshot()


def test_sem_espaco_itens_ficam_de_fora(caplog):
    """Só P, E e F são andáveis: nenhum item cabe e a sessão segue."""
    cheio = ["P#F", "###", "##E"]
    with caplog.at_level(logging.WARNING, logger="maze_env.grid"):
        grid = GridModel(cheio, GameConfig(chest_count=2, clock_count=1, placement_attempts=10))
    assert grid.chests == set()
    assert grid.clocks == set()
    assert sum("Could not place" in r.message for r in caplog.records) == 3


def test_pegar_bau_limpa_a_casa(mini_board):
    grid = GridModel(mini_board, NO_ITEMS)
    grid.put_item((1, 2), Cell.CHEST)
    assert grid.chests == {Position(1, 2)}
    assert grid.apply_pickup((1, 2)) == Cell.CHEST
    assert grid.cell_at((1, 2)) == Cell.EMPTY
    assert grid.chests == set()
    assert grid.apply_pickup((1, 2)) is None


def test_pegar_relogio(mini_board):
    grid = GridModel(mini_board, NO_ITEMS)
    grid.put_item((2, 1), Cell.CLOCK)
    assert grid.apply_pickup((2, 1)) == Cell.CLOCK
    assert grid.clocks == set()


def test_chegada_nunca_e_consumida(mini_board):
    grid = GridModel(mini_board, NO_ITEMS)
    assert grid.apply_pickup((3, 3)) is None
    assert grid.cell_at((3, 3)) == Cell.FINISH


@pytest.mark.parametrize("pos, item", [
    ((2, 2), Cell.CHEST),   # parede
    ((1, 1), Cell.CHEST),   # início do jogador
    ((3, 3), Cell.CLOCK),   # chegada
    ((1, 2), Cell.WALL),    # não é item
])
def test_put_item_recusa_casas_ocupadas(mini_board, pos, item):
    grid = GridModel(mini_board, NO_ITEMS)
    with pytest.raises(ValueError):
        grid.put_item(pos, item)
