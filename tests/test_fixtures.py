"""Tests for double round-robin fixture generation."""

from collections import Counter

import pytest

from src.competition_engine.fixtures import (
    Fixture,
    InvalidInput,
    MatchResult,
    build_schedule,
    fixtures_for_round,
    total_rounds,
)


# ── Helpers ──────────────────────────────────────────────────────────

def _clubs(n):
    return [f"club{i}" for i in range(n)]


def _rounds(schedule):
    by_round = {}
    for f in schedule:
        by_round.setdefault(f.round, []).append(f)
    return by_round


# ── Counts ───────────────────────────────────────────────────────────

class TestScheduleShape:
    def test_four_clubs_twelve_fixtures_six_rounds(self):
        schedule = build_schedule(["A", "B", "C", "D"])
        assert len(schedule) == 12
        assert sorted(_rounds(schedule)) == [0, 1, 2, 3, 4, 5]
        for fixtures in _rounds(schedule).values():
            assert len(fixtures) == 2

    def test_four_clubs_each_meets_three_opponents_home_and_away(self):
        schedule = build_schedule(["A", "B", "C", "D"])
        for club in "ABCD":
            home_opponents = sorted(f.away for f in schedule if f.home == club)
            away_opponents = sorted(f.home for f in schedule if f.away == club)
            others = sorted(c for c in "ABCD" if c != club)
            assert home_opponents == others
            assert away_opponents == others

    @pytest.mark.parametrize("n", [2, 4, 6, 8, 20])
    def test_even_fixture_count(self, n):
        assert len(build_schedule(_clubs(n))) == n * (n - 1)

    @pytest.mark.parametrize("n", [3, 5, 7, 19])
    def test_odd_fixture_count(self, n):
        assert len(build_schedule(_clubs(n))) == n * (n - 1)

    @pytest.mark.parametrize("n,expected", [(2, 2), (3, 6), (4, 6), (5, 10), (20, 38)])
    def test_total_rounds(self, n, expected):
        assert total_rounds(n) == expected
        rounds = {f.round for f in build_schedule(_clubs(n))}
        assert rounds == set(range(expected))

    def test_two_clubs(self):
        schedule = build_schedule(["X", "Y"])
        assert schedule == (
            Fixture(round=0, home="X", away="Y"),
            Fixture(round=1, home="Y", away="X"),
        )

    def test_all_fixtures_start_unplayed(self):
        assert all(f.result is None for f in build_schedule(_clubs(6)))


# ── Pair coverage ────────────────────────────────────────────────────

class TestPairCoverage:
    @pytest.mark.parametrize("n", [2, 3, 4, 5, 6, 7, 10])
    def test_each_ordered_pair_exactly_once(self, n):
        clubs = _clubs(n)
        pairs = Counter((f.home, f.away) for f in build_schedule(clubs))
        for home in clubs:
            for away in clubs:
                if home == away:
                    continue
                assert pairs[(home, away)] == 1
        assert sum(pairs.values()) == n * (n - 1)

    @pytest.mark.parametrize("n", [2, 3, 4, 5, 8, 9])
    def test_no_club_twice_in_a_round(self, n):
        for fixtures in _rounds(build_schedule(_clubs(n))).values():
            seen = [f.home for f in fixtures] + [f.away for f in fixtures]
            assert len(seen) == len(set(seen))

    def test_no_club_plays_itself(self):
        assert all(f.home != f.away for f in build_schedule(_clubs(7)))

    def test_second_leg_mirrors_first(self):
        n = 6
        schedule = build_schedule(_clubs(n))
        leg = n - 1
        first = [f for f in schedule if f.round < leg]
        second = [f for f in schedule if f.round >= leg]
        assert [(f.round + leg, f.away, f.home) for f in first] == [
            (f.round, f.home, f.away) for f in second
        ]


# ── Byes ─────────────────────────────────────────────────────────────

class TestOddParticipants:
    @pytest.mark.parametrize("n", [3, 5, 7])
    def test_one_bye_per_leg(self, n):
        clubs = _clubs(n)
        schedule = build_schedule(clubs)
        leg = n  # N' - 1 with N' = n + 1
        for club in clubs:
            rounds_played = {f.round for f in schedule if f.involves(club)}
            first_leg_rests = [r for r in range(leg) if r not in rounds_played]
            second_leg_rests = [r for r in range(leg, 2 * leg) if r not in rounds_played]
            assert len(first_leg_rests) == 1
            assert len(second_leg_rests) == 1

    def test_three_clubs_one_match_per_round(self):
        for fixtures in _rounds(build_schedule(["A", "B", "C"])).values():
            assert len(fixtures) == 1

    def test_none_is_a_valid_participant(self):
        """The bye marker is internal, so real ids like None survive."""
        schedule = build_schedule([None, "B", "C"])
        assert sum(1 for f in schedule if f.involves(None)) == 4


# ── Determinism ──────────────────────────────────────────────────────

class TestDeterminism:
    def test_same_input_same_output(self):
        clubs = _clubs(9)
        assert build_schedule(clubs) == build_schedule(clubs)

    def test_repr_identical(self):
        clubs = [3, 1, 4, 5, 9, 2]
        assert repr(build_schedule(clubs)) == repr(build_schedule(list(clubs)))

    def test_first_round_pairs_outside_in(self):
        schedule = build_schedule(["A", "B", "C", "D"])
        assert fixtures_for_round(schedule, 0) == [
            Fixture(round=0, home="A", away="D"),
            Fixture(round=0, home="B", away="C"),
        ]

    def test_input_not_mutated(self):
        clubs = _clubs(5)
        original = list(clubs)
        build_schedule(clubs)
        assert clubs == original


# ── Invalid input ────────────────────────────────────────────────────

class TestInvalidInput:
    def test_empty(self):
        with pytest.raises(InvalidInput, match="at least 2"):
            build_schedule([])

    def test_single(self):
        with pytest.raises(InvalidInput, match="at least 2"):
            build_schedule(["A"])

    def test_duplicates(self):
        with pytest.raises(InvalidInput, match="Duplicate"):
            build_schedule(["A", "B", "A"])

    def test_total_rounds_degenerate(self):
        assert total_rounds(1) == 0


# ── Fixture value ────────────────────────────────────────────────────

class TestFixtureValue:
    def test_with_result_returns_new_fixture(self):
        f = Fixture(round=0, home="A", away="B")
        played = f.with_result(MatchResult(2, 1))
        assert f.result is None
        assert played.result == MatchResult(2, 1)
        assert played.is_played

    def test_result_cannot_be_overwritten(self):
        played = Fixture(round=0, home="A", away="B").with_result(MatchResult(1, 1))
        with pytest.raises(ValueError, match="already has a result"):
            played.with_result(MatchResult(3, 0))

    def test_fixture_is_frozen(self):
        f = Fixture(round=0, home="A", away="B")
        with pytest.raises(AttributeError):
            f.home = "C"

    def test_negative_goals_rejected(self):
        with pytest.raises(ValueError):
            MatchResult(-1, 0)
