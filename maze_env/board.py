# Labirinto de referência (20x20).
# '#' = parede, '_' = caminho, 'P' = jogador, 'E' = inimigo, 'F' = chegada
boards = [
    "P#_#_###_###_##_##_#",
    "___#___#___#_#_____#",
    "#_##_#_#_#___#_###_#",
    "_____#___#_#_____#__",
    "##_####_##_#_###_#_#",
    "___#_______________#",
    "#_##_##_#_#_###_####",
    "#____#____#___#_#___",
    "###_##_####_#_#_##_#",
    "_______#____#______F",
    "##_###_#_##_#_####__",
    "_________________###",
    "#_##_###_###_###_#__",
    "#_#____#_#___#_____#",
    "#___##___#_#___#_###",
    "__###___##___###_#__",
    "#_____#____#___#___#",
    "___##_#__###_#_###_#",
    "#__#_____#___#_____#",
    "##___###___#_##_##_E",
]
