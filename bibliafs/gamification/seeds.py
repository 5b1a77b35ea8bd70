"""
Built-in achievements and reading plan templates.

Both tables are seeded lazily when first read while empty. Achievements are
also seeded before a reading reward is granted.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from bibliafs.core.database.entities.gamification import Achievement
from bibliafs.core.database.entities.reading_plans import ReadingPlanTemplate
from bibliafs.core.database.repositories.gamification import AchievementRepository
from bibliafs.core.database.repositories.reading_plans import ReadingPlanTemplateRepository

logger = logging.getLogger(__name__)


def _day(day: int, *readings: Dict[str, Any]) -> Dict[str, Any]:
    return {"day": day, "readings": list(readings)}


def _reading(book: str, chapter: int, verses: str = "") -> Dict[str, Any]:
    return {"book": book, "chapter": chapter, "verses": verses}


ACHIEVEMENT_SEEDS: List[Dict[str, Any]] = [
    {
        "name": "Primeira Leitura",
        "description": "Marque seu primeiro capítulo como lido",
        "icon": "book-open",
        "category": "reading",
        "requirement": {"type": "chapters_read", "value": 1},
        "xp_reward": 10,
    },
    {
        "name": "Leitor Assíduo",
        "description": "Leia 50 capítulos",
        "icon": "library",
        "category": "reading",
        "requirement": {"type": "chapters_read", "value": 50},
        "xp_reward": 100,
    },
    {
        "name": "Três Dias Seguidos",
        "description": "Mantenha uma sequência de 3 dias de leitura",
        "icon": "flame",
        "category": "streak",
        "requirement": {"type": "streak_days", "value": 3},
        "xp_reward": 30,
    },
    {
        "name": "Uma Semana Fiel",
        "description": "Mantenha uma sequência de 7 dias de leitura",
        "icon": "calendar-check",
        "category": "streak",
        "requirement": {"type": "streak_days", "value": 7},
        "xp_reward": 70,
    },
    {
        "name": "Mês de Dedicação",
        "description": "Mantenha uma sequência de 30 dias de leitura",
        "icon": "award",
        "category": "streak",
        "requirement": {"type": "streak_days", "value": 30},
        "xp_reward": 300,
    },
    {
        "name": "Primeira Oração",
        "description": "Registre sua primeira oração",
        "icon": "heart",
        "category": "social",
        "requirement": {"type": "prayers_created", "value": 1},
        "xp_reward": 10,
    },
    {
        "name": "Voz da Comunidade",
        "description": "Compartilhe um versículo na comunidade",
        "icon": "users",
        "category": "social",
        "requirement": {"type": "posts_created", "value": 1},
        "xp_reward": 15,
    },
    {
        "name": "Plano Concluído",
        "description": "Conclua um plano de leitura",
        "icon": "trophy",
        "category": "special",
        "requirement": {"type": "plans_completed", "value": 1},
        "xp_reward": 150,
    },
]


PLAN_TEMPLATE_SEEDS: List[Dict[str, Any]] = [
    {
        "name": "Plano de 30 Dias - Novo Testamento",
        "description": "Leia o Novo Testamento em 30 dias com leituras diárias equilibradas",
        "duration": 30,
        "category": "novo-testamento",
        "difficulty": "intermediário",
        "schedule": [_day(i + 1, _reading("Mateus", i + 1)) for i in range(28)]
        + [_day(29, _reading("Marcos", 1)), _day(30, _reading("Marcos", 2))],
    },
    {
        "name": "Plano de 7 Dias - Salmos de Louvor",
        "description": "Uma semana focada nos salmos de louvor e adoração",
        "duration": 7,
        "category": "devocional",
        "difficulty": "iniciante",
        "schedule": [
            _day(i + 1, _reading("Salmos", chapter)) for i, chapter in enumerate((23, 100, 103, 145, 146, 147, 150))
        ],
    },
    {
        "name": "Plano de 14 Dias - Evangelho de João",
        "description": "Explore o Evangelho de João em duas semanas",
        "duration": 14,
        "category": "evangelhos",
        "difficulty": "iniciante",
        "schedule": [_day(i + 1, _reading("João", 2 * i + 1), _reading("João", 2 * i + 2)) for i in range(9)]
        + [
            _day(10, _reading("João", 19)),
            _day(11, _reading("João", 20)),
            _day(12, _reading("João", 21)),
            _day(13, _reading("João", 1, "1-18")),
            _day(14, _reading("João", 3, "16-21")),
        ],
    },
    {
        "name": "Plano de 21 Dias - Provérbios",
        "description": "Um capítulo de Provérbios por dia para sabedoria diária",
        "duration": 21,
        "category": "sabedoria",
        "difficulty": "iniciante",
        "schedule": [_day(i + 1, _reading("Provérbios", i + 1)) for i in range(21)],
    },
    {
        "name": "Plano de 50 Dias - Gênesis",
        "description": "Um capítulo por dia pelo livro das origens",
        "duration": 50,
        "category": "antigo-testamento",
        "difficulty": "intermediário",
        "schedule": [_day(i + 1, _reading("Gênesis", i + 1)) for i in range(50)],
    },
]


async def ensure_achievements(repo: AchievementRepository) -> List[Achievement]:
    """List achievements, inserting the built-in ones into an empty table first."""
    if await repo.count() == 0:
        logger.info(f"Seeding {len(ACHIEVEMENT_SEEDS)} built-in achievements")
        await repo.create_many([Achievement(**seed) for seed in ACHIEVEMENT_SEEDS])
    return await repo.list()


async def ensure_plan_templates(repo: ReadingPlanTemplateRepository) -> List[ReadingPlanTemplate]:
    """List plan templates, inserting the built-in ones into an empty table first."""
    if await repo.count() == 0:
        logger.info(f"Seeding {len(PLAN_TEMPLATE_SEEDS)} built-in reading plan templates")
        await repo.create_many([ReadingPlanTemplate(**seed) for seed in PLAN_TEMPLATE_SEEDS])
    return await repo.list()
