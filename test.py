import pytest

from maze_env.config import NO_ITEMS
from maze_env.grid import DOWN, LEFT, RIGHT, UP, GridModel, Position
from maze_problems.grid_search import Node, astar_search, bounded_breadth_first_search
from maze_problems.maze_problem import (
    MazePursuitProblem, MazeRouteProblem, find_route, manhattan_distance, next_pursuit_step,
)
# ======================================================================
# FIXTURES (Ambiente Simulado para os Testes)
# ======================================================================

@pytest.fixture
def mini_grid(mini_board):
    return GridModel(mini_board, NO_ITEMS)


@pytest.fixture
def open_grid():
    """6x6 sem nenhuma parede."""
    return GridModel([
        "P_____",
        "______",
        "______",
        "______",
        "______",
        "F____E",
    ], NO_ITEMS)


@pytest.fixture
def problema_base(mini_grid):
    """Problema de rota com estado inicial em (1,1) e objetivo em (3,3)."""
    return MazeRouteProblem(initial=(1, 1), goal=(3, 3), grid=mini_grid, max_steps=3)

# ======================================================================
# PROBLEMA FORMAL
# ======================================================================

def test_acoes_respeitam_paredes(problema_base):
    """
    Em (1,1) há parede em CIMA (0,1) e na ESQUERDA (1,0).
    Só sobram DIREITA e BAIXO, nessa ordem.
    """
    assert problema_base.actions(Position(1, 1)) == [RIGHT, DOWN]


def test_modelo_de_transicao(problema_base):
    assert problema_base.result(Position(1, 1), RIGHT) == (1, 2)
    assert problema_base.result(Position(1, 1), DOWN) == (2, 1)
    assert problema_base.result(Position(1, 1), UP) == (0, 1)
    assert problema_base.result(Position(1, 1), LEFT) == (1, 0)


def test_heuristica_manhattan(problema_base):
    """|1 - 3| + |1 - 3| = 4"""
    assert problema_base.h(Node(state=Position(1, 1))) == 4
    assert manhattan_distance((1, 1), (3, 3)) == 4


def test_no_guarda_caminho_e_acoes():
    raiz = Node(Position(0, 0))
    filho = Node(Position(0, 1), raiz, RIGHT, 1)
    neto = Node(Position(1, 1), filho, DOWN, 2)
    assert neto.depth == 2
    assert neto.solution() == [RIGHT, DOWN]
    assert neto.states() == [(0, 1), (1, 1)]
    assert [n.state for n in neto.path()] == [(0, 0), (0, 1), (1, 1)]

# ======================================================================
# ROTA LIMITADA (BFS)
# ======================================================================

def test_rota_contorna_parede(mini_grid):
    assert find_route(mini_grid, (1, 1), (2, 3), 3) == [(1, 2), (1, 3), (2, 3)]


def test_rota_alem_do_alcance_em_linha_reta_e_vazia(mini_grid):
    """(1,1) -> (3,3) tem caminho de 4 passos, mas Manhattan 4 > 3."""
    assert find_route(mini_grid, (1, 1), (3, 3), 3) == []
    assert find_route(mini_grid, (1, 1), (3, 3), 4) == [(1, 2), (1, 3), (2, 3), (3, 3)]


def test_rota_com_desvio_maior_que_o_limite_e_vazia(mini_grid):
    """Manhattan 2, mas a parede em (2,2) força um desvio de 4 passos."""
    assert find_route(mini_grid, (2, 1), (2, 3), 3) == []


@pytest.mark.parametrize("alvo", [(0, 1), (2, 2), (-1, 1), (1, 5), (1, 1)])
def test_alvos_invalidos(mini_grid, alvo):
    """Parede, fora do grid ou a própria casa de origem."""
    assert find_route(mini_grid, (1, 1), alvo, 3) == []


def test_desempate_prefere_direita(open_grid):
    """Dois caminhos de 2 passos até (1,1); a direita é expandida primeiro."""
    assert find_route(open_grid, (0, 0), (1, 1), 3) == [(0, 1), (1, 1)]
    assert find_route(open_grid, (2, 2), (1, 1), 3) == [(2, 1), (1, 1)]


def test_rota_no_corredor(corridor_board):
    grid = GridModel(corridor_board, NO_ITEMS)
    assert find_route(grid, (0, 0), (0, 3), 3) == [(0, 1), (0, 2), (0, 3)]


def test_busca_limitada_respeita_profundidade(open_grid):
    problem = MazeRouteProblem((0, 0), (0, 4), open_grid, 4)
    assert bounded_breadth_first_search(problem, 3) is None
    assert bounded_breadth_first_search(problem, 4).depth == 4

# ======================================================================
# PERSEGUIÇÃO (A*)
# ======================================================================

def test_perseguicao_empate_deterministico(mini_grid):
    """
    De (3,1) até (1,3) há dois caminhos de 4 passos.
    Com empates em f saindo por ordem de inserção, vence o da direita.
    """
    assert next_pursuit_step(mini_grid, (3, 1), (1, 3)) == (3, 2)


def test_perseguicao_sempre_aproxima(open_grid):
    inimigo, jogador = Position(5, 5), Position(0, 0)
    distancia = manhattan_distance(inimigo, jogador)
    while inimigo != jogador:
        inimigo = next_pursuit_step(open_grid, inimigo, jogador)
        assert manhattan_distance(inimigo, jogador) == distancia - 1
        distancia -= 1


def test_perseguicao_bloqueada_devolve_none():
    grid = GridModel([
        "P#___",
        "##___",
        "_____",
        "____E",
        "F____",
    ], NO_ITEMS)
    assert next_pursuit_step(grid, (3, 4), (0, 0)) is None
    assert astar_search(MazePursuitProblem((3, 4), (0, 0), grid)) is None


def test_perseguicao_no_mesmo_lugar_devolve_none(open_grid):
    assert next_pursuit_step(open_grid, (2, 2), (2, 2)) is None


def test_astar_acha_caminho_otimo(mini_grid):
    node = astar_search(MazePursuitProblem((1, 1), (3, 3), mini_grid))
    assert node.path_cost == 4
    assert node.states()[-1] == (3, 3)

# ======================================================================
# EMPACOTAMENTO
# ======================================================================

def test_metadados_do_pacote():
    """O pacote instala só as três pastas do jogo e não usa documentos internos como readme."""
    tomllib = pytest.importorskip("tomllib")
    from pathlib import Path
    with open(Path(__file__).parent / "pyproject.toml", "rb") as fh:
        meta = tomllib.load(fh)
    assert "readme" not in meta["project"]
    assert meta["tool"]["setuptools"]["packages"]["find"]["include"] == ["maze_env", "maze_problems", "maze_agents"]
