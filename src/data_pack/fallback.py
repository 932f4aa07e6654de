"""Built-in data pack used when the JSON files cannot be loaded."""

import logging
import random
from typing import Dict, List, Optional

from src.data_pack.config import (
    FALLBACK_AGE_RANGE,
    FALLBACK_LEAGUE_RULES,
    FALLBACK_OVERALL_RANGE,
    FALLBACK_SEASON,
    FALLBACK_SQUAD_POSITIONS,
    FALLBACK_TEAMS,
)

logger = logging.getLogger(__name__)


def build_fallback_data(rng: Optional[random.Random] = None) -> Dict[str, List]:
    """Generate a minimal pack: 8 clubs with 18 fictional players each.

    Args:
        rng: Random source for positions, overall and age. Seed it for a
            reproducible pack.

    Returns:
        Dict with keys ``clubs``, ``players``, ``competitions``, ``seasons``
        and ``rules``, shaped like the JSON files.
    """
    rng = rng if rng is not None else random.Random()

    clubs = [
        {
            "id": team_id,
            "name": name,
            "league": "Serie A",
            "logo": f"{team_id}.png",
            "country": "Brazil",
        }
        for team_id, name in FALLBACK_TEAMS
    ]

    players = []
    next_id = 1
    for team_id, _ in FALLBACK_TEAMS:
        positions = list(FALLBACK_SQUAD_POSITIONS)
        rng.shuffle(positions)
        for idx, position in enumerate(positions, start=1):
            players.append(
                {
                    "id": next_id,
                    "clubId": team_id,
                    "name": f"Jogador {team_id}-{idx}",
                    "position": position,
                    "overall": rng.randint(*FALLBACK_OVERALL_RANGE),
                    "age": rng.randint(*FALLBACK_AGE_RANGE),
                    "nationality": "Brazil",
                }
            )
            next_id += 1

    team_ids = [team_id for team_id, _ in FALLBACK_TEAMS]
    competitions = [
        {
            "id": "brasileirao",
            "name": "Campeonato Brasileiro",
            "type": "league",
            "teams": team_ids,
            "rounds": (len(team_ids) - 1) * 2,
            "rules": dict(FALLBACK_LEAGUE_RULES),
        },
        {
            "id": "copa_do_brasil",
            "name": "Copa do Brasil",
            "type": "cup",
            "teams": team_ids,
            "rounds": 3,
        },
    ]
    seasons = [
        {"year": FALLBACK_SEASON, "competitions": ["brasileirao", "copa_do_brasil"]}
    ]

    logger.info(
        "Built fallback data pack: %d clubs, %d players", len(clubs), len(players)
    )
    return {
        "clubs": clubs,
        "players": players,
        "competitions": competitions,
        "seasons": seasons,
        "rules": {"general": "Regras padrão"},
    }
