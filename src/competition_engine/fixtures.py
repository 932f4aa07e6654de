"""Double round-robin fixture generation (circle method).

Given an ordered list of participant ids, builds the full season schedule:
every pair meets twice with home/away reversed, and no participant plays
more than once in a round. Odd-sized leagues get a synthetic bye slot whose
pairings are dropped, so each club rests once per leg.
"""

import logging
from dataclasses import dataclass, replace
from typing import Hashable, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

_BYE = object()


class InvalidInput(Exception):
    """Raised when a schedule cannot be built from the given participants."""

    pass


@dataclass(frozen=True)
class MatchResult:
    """Final score of a played fixture."""

    home_goals: int
    away_goals: int

    def __post_init__(self):
        if self.home_goals < 0 or self.away_goals < 0:
            raise ValueError(
                f"Goals cannot be negative ({self.home_goals}-{self.away_goals})"
            )

    @property
    def is_draw(self) -> bool:
        return self.home_goals == self.away_goals


@dataclass(frozen=True)
class Fixture:
    """A single scheduled match. A result can be attached exactly once."""

    round: int
    home: Hashable
    away: Hashable
    result: Optional[MatchResult] = None

    @property
    def is_played(self) -> bool:
        return self.result is not None

    def with_result(self, result: MatchResult) -> "Fixture":
        """Return a copy of this fixture carrying *result*."""
        if self.result is not None:
            raise ValueError(
                f"Fixture {self.home} vs {self.away} (round {self.round}) "
                "already has a result"
            )
        return replace(self, result=result)

    def involves(self, participant: Hashable) -> bool:
        return participant == self.home or participant == self.away


def _padded_size(n: int) -> int:
    return n if n % 2 == 0 else n + 1


def total_rounds(num_participants: int) -> int:
    """Number of rounds in a double round-robin for *num_participants* clubs."""
    if num_participants < 2:
        return 0
    return 2 * (_padded_size(num_participants) - 1)


def _validate(participants: Sequence[Hashable]):
    if len(participants) < 2:
        raise InvalidInput(
            f"Need at least 2 participants, got {len(participants)}"
        )

    seen = set()
    duplicates = []
    for pid in participants:
        if pid in seen:
            duplicates.append(pid)
        seen.add(pid)
    if duplicates:
        raise InvalidInput(f"Duplicate participant ids: {duplicates}")


def build_schedule(participants: Sequence[Hashable]) -> Tuple[Fixture, ...]:
    """Build a complete double round-robin schedule.

    Args:
        participants: Ordered, distinct participant ids (at least two).

    Returns:
        Tuple of fixtures ordered by round. First-leg rounds are
        ``0 .. N'-2`` and second-leg rounds ``N'-1 .. 2*(N'-1)-1``, where
        ``N'`` is the participant count rounded up to even.

    Raises:
        InvalidInput: Fewer than two participants or duplicate ids.
    """
    _validate(participants)

    rotation: List = list(participants)
    if len(rotation) % 2 == 1:
        rotation.append(_BYE)

    size = len(rotation)
    leg_rounds = size - 1

    first_leg: List[Fixture] = []
    for round_index in range(leg_rounds):
        for i in range(size // 2):
            home = rotation[i]
            away = rotation[size - 1 - i]
            if home is _BYE or away is _BYE:
                continue
            first_leg.append(Fixture(round=round_index, home=home, away=away))

        # Keep position 0 fixed, move the last slot to position 1
        rotation = [rotation[0], rotation[-1]] + rotation[1:-1]

    second_leg = [
        Fixture(round=f.round + leg_rounds, home=f.away, away=f.home)
        for f in first_leg
    ]

    schedule = tuple(first_leg + second_leg)
    logger.info(
        "Built schedule: %d participants, %d rounds, %d fixtures",
        len(participants),
        2 * leg_rounds,
        len(schedule),
    )
    return schedule


def fixtures_for_round(fixtures: Sequence[Fixture], round_index: int) -> List[Fixture]:
    """All fixtures scheduled for *round_index*, in schedule order."""
    return [f for f in fixtures if f.round == round_index]
