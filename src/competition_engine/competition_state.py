"""Competition instance - schedule, table and round cursor for one season."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Hashable, List, Optional, Sequence

from src.competition_engine.fixtures import Fixture, build_schedule, fixtures_for_round
from src.competition_engine.standings import CompetitionRules, StandingsTable


class CompetitionStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


@dataclass
class CompetitionInstance:
    """Single source of truth for a league season inside a save record."""

    competition_id: str
    participants: List[Hashable]
    fixtures: List[Fixture]
    table: StandingsTable
    rules: CompetitionRules = field(default_factory=CompetitionRules)
    current_round: int = 0
    name: Optional[str] = None

    @classmethod
    def create_new(
        cls,
        competition_id: str,
        participants: Sequence[Hashable],
        rules: Optional[CompetitionRules] = None,
        name: Optional[str] = None,
    ) -> "CompetitionInstance":
        """Factory: generate the schedule and a zeroed table.

        Raises:
            InvalidInput: Fewer than two participants or duplicate ids.
        """
        rules = rules or CompetitionRules()
        fixtures = build_schedule(participants)
        return cls(
            competition_id=competition_id,
            participants=list(participants),
            fixtures=list(fixtures),
            table=StandingsTable.zeroed(participants, rules.scoring),
            rules=rules,
            current_round=0,
            name=name,
        )

    @property
    def total_rounds(self) -> int:
        """Number of rounds in the schedule."""
        if not self.fixtures:
            return 0
        return max(f.round for f in self.fixtures) + 1

    @property
    def status(self) -> CompetitionStatus:
        if self.current_round >= self.total_rounds:
            return CompetitionStatus.COMPLETE
        if self.current_round == 0:
            return CompetitionStatus.SCHEDULED
        return CompetitionStatus.IN_PROGRESS

    @property
    def is_complete(self) -> bool:
        return self.status is CompetitionStatus.COMPLETE

    def current_fixtures(self) -> List[Fixture]:
        """Fixtures of the round the cursor points at (empty when complete)."""
        return fixtures_for_round(self.fixtures, self.current_round)

    def pending_fixtures(self, round_index: Optional[int] = None) -> List[Fixture]:
        if round_index is None:
            round_index = self.current_round
        return [f for f in fixtures_for_round(self.fixtures, round_index) if not f.is_played]

    def advance_cursor(self):
        """Move to the next round. Never moves past the last round."""
        if self.is_complete:
            return
        self.current_round += 1

    def copy(self) -> "CompetitionInstance":
        """Independent copy; fixtures are immutable so a shallow list copy suffices."""
        return CompetitionInstance(
            competition_id=self.competition_id,
            participants=list(self.participants),
            fixtures=list(self.fixtures),
            table=self.table.copy(),
            rules=self.rules,
            current_round=self.current_round,
            name=self.name,
        )
