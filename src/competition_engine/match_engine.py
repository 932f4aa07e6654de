"""Round simulation: turns unplayed fixtures into results from club strength."""

import logging
import math
import random
from dataclasses import dataclass, field
from typing import Callable, Hashable, List, Mapping, Optional

from src.competition_engine.config import GOAL_RANDOM_SPAN, GOAL_STRENGTH_DIVISOR
from src.competition_engine.fixtures import Fixture, MatchResult

logger = logging.getLogger(__name__)


class MissingRatingData(Exception):
    """Raised when a participant's strength rating cannot be resolved."""

    def __init__(self, participant: Hashable):
        super().__init__(f"No strength rating for participant {participant!r}")
        self.participant = participant


class StrengthLookup:
    """Resolves participant ids to strength ratings.

    Wraps a plain mapping so that an unknown id raises
    :class:`MissingRatingData` instead of silently defaulting.
    """

    def __init__(self, ratings: Mapping[Hashable, float]):
        self._ratings = dict(ratings)

    def __call__(self, participant: Hashable) -> float:
        try:
            return self._ratings[participant]
        except KeyError:
            raise MissingRatingData(participant) from None

    def __contains__(self, participant: Hashable) -> bool:
        return participant in self._ratings


@dataclass
class RoundSimulation:
    """Outcome of one :meth:`MatchEngine.simulate_round` call."""

    round: int
    resolved: List[Fixture] = field(default_factory=list)
    unresolved: List[Fixture] = field(default_factory=list)
    errors: List[MissingRatingData] = field(default_factory=list)

    @property
    def has_pending(self) -> bool:
        return bool(self.unresolved)


def round_half_up(value: float) -> int:
    """Round .5 upwards (not to even)."""
    return int(math.floor(value + 0.5))


class MatchEngine:
    """Simulates fixtures using an injected random source.

    Pass a seeded ``random.Random`` for reproducible results; the default is
    an unseeded generator so replayed seasons differ.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        strength_divisor: float = GOAL_STRENGTH_DIVISOR,
        random_span: float = GOAL_RANDOM_SPAN,
    ):
        if strength_divisor <= 0:
            raise ValueError("strength_divisor must be positive")
        self.rng = rng if rng is not None else random.Random()
        self.strength_divisor = strength_divisor
        self.random_span = random_span

    def score_goals(self, strength: float) -> int:
        """Goals for one side: ``max(0, round(strength/divisor + U[0, span)))``."""
        noise = self.rng.random() * self.random_span
        return max(0, round_half_up(strength / self.strength_divisor + noise))

    def play(
        self, fixture: Fixture, strength_lookup: Callable[[Hashable], float]
    ) -> MatchResult:
        """Compute a result for a single fixture.

        Both ratings are resolved before any random draw, so a missing rating
        does not consume randomness.

        Raises:
            MissingRatingData: If either club has no resolvable rating.
        """
        home_strength = strength_lookup(fixture.home)
        away_strength = strength_lookup(fixture.away)
        return MatchResult(
            home_goals=self.score_goals(home_strength),
            away_goals=self.score_goals(away_strength),
        )

    def simulate_round(
        self,
        fixtures: List[Fixture],
        round_index: int,
        strength_lookup: Callable[[Hashable], float],
    ) -> RoundSimulation:
        """Attach results to every unplayed fixture of *round_index*.

        Fixtures are replaced in *fixtures* by copies carrying their result.
        Fixtures that already have a result are left alone, so repeating the
        call for the same round only touches what is still pending.

        Args:
            fixtures: The full schedule (mutable list, updated in place).
            round_index: Round to simulate.
            strength_lookup: Callable mapping participant id to rating.

        Returns:
            :class:`RoundSimulation` listing newly resolved fixtures and any
            left unresolved because of missing rating data.
        """
        outcome = RoundSimulation(round=round_index)

        for idx, fixture in enumerate(fixtures):
            if fixture.round != round_index or fixture.is_played:
                continue

            try:
                result = self.play(fixture, strength_lookup)
            except MissingRatingData as e:
                logger.warning(
                    "Round %d: %s vs %s left pending: %s",
                    round_index, fixture.home, fixture.away, e,
                )
                outcome.unresolved.append(fixture)
                outcome.errors.append(e)
                continue

            played = fixture.with_result(result)
            fixtures[idx] = played
            outcome.resolved.append(played)
            logger.debug(
                "Round %d: %s %d x %d %s",
                round_index, fixture.home, result.home_goals,
                result.away_goals, fixture.away,
            )

        logger.info(
            "Simulated round %d: %d resolved, %d pending",
            round_index, len(outcome.resolved), len(outcome.unresolved),
        )
        return outcome


def simulate_round(
    fixtures: List[Fixture],
    round_index: int,
    strength_lookup: Callable[[Hashable], float],
    rng: Optional[random.Random] = None,
) -> RoundSimulation:
    """Convenience wrapper around :meth:`MatchEngine.simulate_round`."""
    return MatchEngine(rng).simulate_round(fixtures, round_index, strength_lookup)
