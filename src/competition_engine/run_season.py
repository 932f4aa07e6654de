"""Play a complete league season from the data pack.

Usage:
    python -m src.competition_engine.run_season [seed] [data_dir]

Examples:
    python -m src.competition_engine.run_season
    python -m src.competition_engine.run_season 42 /path/to/data
"""

import logging
import random
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from src.competition_engine.career import CareerInitializer, SaveRecord
from src.competition_engine.match_engine import MatchEngine
from src.competition_engine.round_controller import RoundController
from src.data_pack.ingestion import DataPackLoader
from src.data_pack.ratings import StrengthCalculator
from src.logging_config import setup_logging

logger = logging.getLogger(__name__)


def run_season(
    seed: Optional[int] = None,
    data_dir: Optional[Path] = None,
    persistence=None,
) -> Tuple[SaveRecord, List[str]]:
    """Create a career at the first league club and play every round.

    Args:
        seed: Seed for both the fallback pack and the match engine.
        data_dir: Data pack directory. Defaults to ``data/``.
        persistence: Optional save persistence; each round is saved to it.

    Returns:
        ``(save_record, table_lines)`` where *table_lines* is the final
        table formatted for printing.
    """
    rng = random.Random(seed)
    pack = DataPackLoader(data_dir, rng=rng).load()

    initializer = CareerInitializer(pack)
    save = initializer.create_career(slot=0, name="Treinador")

    league = pack.get_competition(initializer.league_id)
    if league is None or not league.get("teams"):
        raise ValueError(f"Data pack has no '{initializer.league_id}' league to play")
    initializer.select_club(save, league["teams"][0])

    competition = save.get_competition(initializer.league_id)
    lookup = StrengthCalculator().lookup_for_pack(pack, competition.participants)
    controller = RoundController(
        save, lookup, persistence=persistence, engine=MatchEngine(rng)
    )

    reports = controller.play_to_end()
    logger.info("Played %d rounds", len(reports))

    lines = [f"{'Pos':>3}  {'Clube':<20} {'Pts':>3} {'J':>3} {'V':>3} {'E':>3} {'D':>3} {'GP':>3} {'GC':>3} {'SG':>4}"]
    for pos, club_id, entry in controller.get_standings():
        club = pack.get_club(club_id)
        name = club["name"] if club else str(club_id)
        lines.append(
            f"{pos:>3}  {name:<20} {entry.points:>3} {entry.played:>3} "
            f"{entry.won:>3} {entry.drawn:>3} {entry.lost:>3} "
            f"{entry.goals_for:>3} {entry.goals_against:>3} {entry.goal_difference:>4}"
        )
    return save, lines


if __name__ == "__main__":
    setup_logging()

    seed = int(sys.argv[1]) if len(sys.argv) > 1 else None
    data_dir = Path(sys.argv[2]) if len(sys.argv) > 2 else None

    try:
        _, table = run_season(seed, data_dir)
        print("\n".join(table))
    except Exception:
        logger.exception("Season run failed")
        sys.exit(1)
