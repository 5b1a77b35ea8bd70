"""
Level table for the XP system.

Level ``n`` is reached once the user's experience points reach
``LEVELS[n - 1].min_xp``. The stored ``users.level`` always follows this table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from pydantic import BaseModel


@dataclass(frozen=True)
class Level:
    level: int
    title: str
    min_xp: int


_THRESHOLDS: Tuple[Tuple[str, int], ...] = (
    ("Iniciante", 0),
    ("Curioso", 100),
    ("Aprendiz", 250),
    ("Estudante", 450),
    ("Dedicado", 700),
    ("Persistente", 1000),
    ("Focado", 1350),
    ("Constante", 1750),
    ("Comprometido", 2200),
    ("Leitor Bronze", 2700),
    ("Explorador", 3250),
    ("Buscador", 3850),
    ("Investigador", 4500),
    ("Estudioso", 5200),
    ("Aplicado", 5950),
    ("Devoto", 6750),
    ("Fiel", 7600),
    ("Zeloso", 8500),
    ("Diligente", 9450),
    ("Leitor Prata", 10450),
    ("Conhecedor", 11500),
    ("Sábio Iniciante", 12600),
    ("Pensador", 13750),
    ("Reflexivo", 14950),
    ("Contemplativo", 16200),
    ("Instruído", 17500),
    ("Esclarecido", 18850),
    ("Iluminado", 20250),
    ("Inspirado", 21700),
    ("Leitor Ouro", 23200),
    ("Discípulo", 24750),
    ("Seguidor Fiel", 26350),
    ("Guardião", 28000),
    ("Protetor", 29700),
    ("Defensor", 31450),
    ("Guerreiro", 33250),
    ("Vencedor", 35100),
    ("Campeão", 37000),
    ("Herói da Fé", 38950),
    ("Leitor Platina", 40950),
    ("Mestre Iniciante", 43000),
    ("Mestre Aprendiz", 45100),
    ("Mestre Estudioso", 47250),
    ("Mestre Sábio", 49450),
    ("Mestre Iluminado", 51700),
    ("Doutor da Palavra", 54000),
    ("Teólogo Avançado", 56350),
    ("Erudito Bíblico", 58750),
    ("Grão-Mestre", 61200),
    ("Mestre Teólogo", 63700),
)

LEVELS: Tuple[Level, ...] = tuple(Level(i + 1, title, min_xp) for i, (title, min_xp) in enumerate(_THRESHOLDS))
MAX_LEVEL = len(LEVELS)


class LevelProgress(BaseModel):
    """Where a user stands between two levels."""

    current_level: int
    current_title: str
    next_level: Optional[int]
    next_level_xp: Optional[int]
    progress_percent: float
    xp_needed: int


def level_for_xp(xp: int) -> int:
    """Highest level whose threshold is at most ``xp``."""
    for entry in reversed(LEVELS):
        if xp >= entry.min_xp:
            return entry.level
    return 1


def level_info(level: int) -> Level:
    return LEVELS[min(max(level, 1), MAX_LEVEL) - 1]


def progress_to_next_level(xp: int) -> LevelProgress:
    current = level_info(level_for_xp(xp))
    if current.level >= MAX_LEVEL:
        return LevelProgress(
            current_level=current.level,
            current_title=current.title,
            next_level=None,
            next_level_xp=None,
            progress_percent=100.0,
            xp_needed=0,
        )
    upcoming = LEVELS[current.level]
    span = upcoming.min_xp - current.min_xp
    percent = min(100.0, (xp - current.min_xp) / span * 100)
    return LevelProgress(
        current_level=current.level,
        current_title=current.title,
        next_level=upcoming.level,
        next_level_xp=upcoming.min_xp,
        progress_percent=round(percent, 2),
        xp_needed=upcoming.min_xp - xp,
    )
