"""Round controller - orchestrates the advance-round workflow and state updates."""

import logging
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, Hashable, List, Optional, Tuple

from src.competition_engine.career import SaveRecord
from src.competition_engine.competition_state import CompetitionInstance, CompetitionStatus
from src.competition_engine.config import LEAGUE_COMPETITION_ID
from src.competition_engine.fixtures import Fixture
from src.competition_engine.match_engine import MatchEngine, MissingRatingData
from src.competition_engine.standings import StandingsEntry, rank_table

logger = logging.getLogger(__name__)


class BoundaryReached(Exception):
    """Raised when advancing a competition that is already complete."""

    pass


@dataclass
class RoundReport:
    """What happened during one advance-round call."""

    round: int
    resolved: List[Fixture] = field(default_factory=list)
    pending: List[Fixture] = field(default_factory=list)
    errors: List[MissingRatingData] = field(default_factory=list)
    advanced: bool = False
    status: CompetitionStatus = CompetitionStatus.SCHEDULED


def format_score(fixture: Fixture) -> str:
    """``"2 x 1"`` for played fixtures, ``"vs"`` while pending."""
    if fixture.result is None:
        return "vs"
    return f"{fixture.result.home_goals} x {fixture.result.away_goals}"


class RoundController:
    """Main controller for playing a competition round by round.

    Coordinates MatchEngine (results), StandingsTable (table updates) and
    the save persistence layer. Each advance is all-or-nothing: the work is
    done on a copy of the competition and only committed into the save
    record after persistence succeeds.
    """

    def __init__(
        self,
        save: SaveRecord,
        strength_lookup: Callable[[Hashable], float],
        persistence=None,
        engine: Optional[MatchEngine] = None,
        competition_id: str = LEAGUE_COMPETITION_ID,
    ):
        if competition_id not in save.competitions:
            raise ValueError(
                f"Save slot {save.slot} has no competition '{competition_id}'"
            )
        self.save = save
        self.strength_lookup = strength_lookup
        self.persistence = persistence
        self.engine = engine or MatchEngine()
        self.competition_id = competition_id

    @property
    def competition(self) -> CompetitionInstance:
        return self.save.competitions[self.competition_id]

    @property
    def is_complete(self) -> bool:
        """Whether every round has been played."""
        return self.competition.is_complete

    def advance_round(self) -> RoundReport:
        """Simulate the current round, update the table, advance and persist.

        Fixtures whose clubs have no rating stay pending and the cursor does
        not move; calling again retries only those fixtures.

        Returns:
            RoundReport for the round that was played.

        Raises:
            BoundaryReached: If the competition is already complete. Nothing
                is changed.
            Exception: Anything raised by the persistence layer propagates,
                and the save record is left exactly as it was.
        """
        current = self.competition
        if current.is_complete:
            logger.info(
                "Competition %s already complete (%d/%d rounds)",
                self.competition_id, current.current_round, current.total_rounds,
            )
            raise BoundaryReached(
                f"Competition '{self.competition_id}' is complete "
                f"({current.total_rounds} rounds played)"
            )

        working = current.copy()
        round_index = working.current_round

        simulation = self.engine.simulate_round(
            working.fixtures, round_index, self.strength_lookup
        )
        for fixture in simulation.resolved:
            working.table.apply_result(fixture.home, fixture.away, fixture.result)

        pending = working.pending_fixtures(round_index)
        advanced = not pending
        if advanced:
            working.advance_cursor()
        else:
            logger.warning(
                "Round %d has %d pending fixtures, not advancing",
                round_index, len(pending),
            )

        candidate = replace(
            self.save,
            competitions={**self.save.competitions, self.competition_id: working},
        )
        candidate.touch()
        if self.persistence is not None:
            self.persistence.save(candidate)

        self.save.competitions[self.competition_id] = working
        self.save.timestamp = candidate.timestamp

        logger.info(
            "Round %d of %s: %d played, %d pending, now %s (round %d/%d)",
            round_index, self.competition_id, len(simulation.resolved),
            len(pending), working.status.value, working.current_round,
            working.total_rounds,
        )

        return RoundReport(
            round=round_index,
            resolved=simulation.resolved,
            pending=pending,
            errors=simulation.errors,
            advanced=advanced,
            status=working.status,
        )

    def play_to_end(self) -> List[RoundReport]:
        """Advance until complete, stopping early if a round stays pending."""
        reports = []
        while not self.is_complete:
            report = self.advance_round()
            reports.append(report)
            if not report.advanced:
                break
        return reports

    def get_round_fixtures(self, round_index: Optional[int] = None) -> List[Dict]:
        """Display rows for a round (defaults to the current one)."""
        comp = self.competition
        if round_index is None:
            round_index = comp.current_round
        return [
            {
                "home": f.home,
                "away": f.away,
                "score": format_score(f),
                "played": f.is_played,
            }
            for f in comp.fixtures
            if f.round == round_index
        ]

    def get_standings(self) -> List[Tuple[int, Hashable, StandingsEntry]]:
        """Ranked table as ``(position, participant, entry)``, 1-based."""
        return [
            (pos, pid, entry)
            for pos, (pid, entry) in enumerate(rank_table(self.competition.table), start=1)
        ]
