"""
Constantes do jogo.

Os valores padrão reproduzem o labirinto de referência (20x20, 3 vidas,
alcance de 3 casas por turno). GameConfig junta tudo que um teste ou uma
sessão pode querer trocar sem mexer nas constantes globais.
"""

from dataclasses import dataclass
from typing import Optional

SIZE = 20               # Lado do grid quadrado
MAX_STEPS = 3           # Casas que o jogador anda por turno
STARTING_LIVES = 3
CHEST_SCORE = 10
SLOW_TURNS = 3          # Turnos de inimigo lento depois de pegar um relógio
CHEST_COUNT = 5
CLOCK_COUNT = 3
PLACEMENT_ATTEMPTS = 100
ENEMY_SPEED = 2         # Passos do inimigo por turno
ENEMY_SLOWED_SPEED = 1

# Janela do front-end (pygame)
CELL_PX = 32
HUD_PX = 60
WIDTH, HEIGHT = SIZE * CELL_PX, SIZE * CELL_PX + HUD_PX
FPS = 30


@dataclass(frozen=True)
class GameConfig:
    max_steps: int = MAX_STEPS
    starting_lives: int = STARTING_LIVES
    chest_score: int = CHEST_SCORE
    slow_turns: int = SLOW_TURNS
    chest_count: int = CHEST_COUNT
    clock_count: int = CLOCK_COUNT
    placement_attempts: int = PLACEMENT_ATTEMPTS
    enemy_speed: int = ENEMY_SPEED
    enemy_slowed_speed: int = ENEMY_SLOWED_SPEED
    seed: Optional[int] = None  # None = aleatório de verdade


DEFAULT_CONFIG = GameConfig()
# Sem itens sorteados: quem usa coloca os seus com grid.put_item()
NO_ITEMS = GameConfig(chest_count=0, clock_count=0)
