"""League table bookkeeping: entries, scoring rules, result folding and ranking."""

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Hashable, Iterable, Iterator, Optional, Tuple

from src.competition_engine.config import (
    DEFAULT_POINTS_DRAW,
    DEFAULT_POINTS_LOSS,
    DEFAULT_POINTS_WIN,
)
from src.competition_engine.fixtures import MatchResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoringRules:
    """Points awarded per outcome."""

    points_win: int = DEFAULT_POINTS_WIN
    points_draw: int = DEFAULT_POINTS_DRAW
    points_loss: int = DEFAULT_POINTS_LOSS


@dataclass(frozen=True)
class CompetitionRules:
    """Scoring plus the table zones recorded for the competition.

    Relegation and qualification counts are stored for display only; no
    promotion or continental logic acts on them.
    """

    scoring: ScoringRules = field(default_factory=ScoringRules)
    relegation: int = 0
    qualification: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> "CompetitionRules":
        """Build rules from a data-pack ``rules`` block. Missing keys use defaults."""
        data = data or {}
        scoring = ScoringRules(
            points_win=int(data.get("pointsWin", DEFAULT_POINTS_WIN)),
            points_draw=int(data.get("pointsDraw", DEFAULT_POINTS_DRAW)),
            points_loss=int(data.get("pointsLoss", DEFAULT_POINTS_LOSS)),
        )
        return cls(
            scoring=scoring,
            relegation=int(data.get("relegation", 0)),
            qualification=dict(data.get("qualification", {})),
        )

    def to_dict(self) -> Dict:
        return {
            "pointsWin": self.scoring.points_win,
            "pointsDraw": self.scoring.points_draw,
            "pointsLoss": self.scoring.points_loss,
            "relegation": self.relegation,
            "qualification": dict(self.qualification),
        }


@dataclass(frozen=True)
class StandingsEntry:
    """Accumulated record of one participant."""

    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    points: int = 0

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against

    def record(
        self, scored: int, conceded: int, rules: ScoringRules
    ) -> "StandingsEntry":
        """Return a new entry with one more match folded in."""
        if scored > conceded:
            won, drawn, lost, pts = 1, 0, 0, rules.points_win
        elif scored < conceded:
            won, drawn, lost, pts = 0, 0, 1, rules.points_loss
        else:
            won, drawn, lost, pts = 0, 1, 0, rules.points_draw

        return replace(
            self,
            played=self.played + 1,
            won=self.won + won,
            drawn=self.drawn + drawn,
            lost=self.lost + lost,
            goals_for=self.goals_for + scored,
            goals_against=self.goals_against + conceded,
            points=self.points + pts,
        )

    def to_dict(self) -> Dict[str, int]:
        """Serialize using the short keys of the save format."""
        return {
            "pts": self.points,
            "p": self.played,
            "w": self.won,
            "d": self.drawn,
            "l": self.lost,
            "gf": self.goals_for,
            "ga": self.goals_against,
            "sg": self.goal_difference,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, int]) -> "StandingsEntry":
        # "sg" is derived and deliberately ignored
        return cls(
            played=data.get("p", 0),
            won=data.get("w", 0),
            drawn=data.get("d", 0),
            lost=data.get("l", 0),
            goals_for=data.get("gf", 0),
            goals_against=data.get("ga", 0),
            points=data.get("pts", 0),
        )


class StandingsTable:
    """Mapping of participant id to :class:`StandingsEntry`.

    Entries are immutable; every update swaps in new values, so a copy of the
    table never shares mutable state with the original.
    """

    def __init__(
        self,
        entries: Dict[Hashable, StandingsEntry],
        rules: Optional[ScoringRules] = None,
    ):
        self._entries: Dict[Hashable, StandingsEntry] = dict(entries)
        self.rules = rules or ScoringRules()

    @classmethod
    def zeroed(
        cls, participants: Iterable[Hashable], rules: Optional[ScoringRules] = None
    ) -> "StandingsTable":
        """Fresh table with an empty entry per participant, in input order."""
        return cls({pid: StandingsEntry() for pid in participants}, rules)

    def __getitem__(self, participant: Hashable) -> StandingsEntry:
        return self._entries[participant]

    def __contains__(self, participant: Hashable) -> bool:
        return participant in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._entries)

    def items(self):
        return self._entries.items()

    def copy(self) -> "StandingsTable":
        return StandingsTable(self._entries, self.rules)

    def apply_result(
        self, home: Hashable, away: Hashable, result: MatchResult
    ) -> Tuple[StandingsEntry, StandingsEntry]:
        """Fold one match into both participants' entries.

        Both entries are computed before either is stored, so an unknown id
        leaves the table untouched.

        Raises:
            KeyError: If either participant is not in the table.
        """
        if home not in self._entries or away not in self._entries:
            missing = [p for p in (home, away) if p not in self._entries]
            raise KeyError(f"Participants not in table: {missing}")

        new_home = self._entries[home].record(
            result.home_goals, result.away_goals, self.rules
        )
        new_away = self._entries[away].record(
            result.away_goals, result.home_goals, self.rules
        )
        self._entries[home] = new_home
        self._entries[away] = new_away

        logger.debug(
            "Table updated: %s %d-%d %s (pts %d / %d)",
            home, result.home_goals, result.away_goals, away,
            new_home.points, new_away.points,
        )
        return new_home, new_away

    def to_dict(self) -> Dict[str, Dict[str, int]]:
        return {str(pid): entry.to_dict() for pid, entry in self._entries.items()}


def apply_result(
    table: StandingsTable, home: Hashable, away: Hashable, result: MatchResult
) -> Tuple[StandingsEntry, StandingsEntry]:
    """Module-level form of :meth:`StandingsTable.apply_result`."""
    return table.apply_result(home, away, result)


def _rank_key(item: Tuple[Hashable, StandingsEntry]):
    entry = item[1]
    return (-entry.points, -entry.goal_difference, -entry.goals_for)


def rank_table(table: StandingsTable) -> Iterator[Tuple[Hashable, StandingsEntry]]:
    """Yield ``(participant, entry)`` pairs in ranking order.

    Order: points, then goal difference, then goals scored, all descending.
    Remaining ties keep the table's insertion order (``sorted`` is stable).
    """
    yield from sorted(table.items(), key=_rank_key)
