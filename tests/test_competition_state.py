"""Tests for the competition instance state machine."""

import pytest

from src.competition_engine.competition_state import CompetitionInstance, CompetitionStatus
from src.competition_engine.fixtures import InvalidInput, MatchResult
from src.competition_engine.standings import CompetitionRules


def _make_competition(clubs=("A", "B", "C", "D"), **kwargs):
    return CompetitionInstance.create_new("liga", list(clubs), **kwargs)


class TestCreateNew:
    def test_schedule_and_zeroed_table(self):
        comp = _make_competition()
        assert len(comp.fixtures) == 12
        assert comp.total_rounds == 6
        assert comp.current_round == 0
        assert list(comp.table) == ["A", "B", "C", "D"]
        assert all(comp.table[c].played == 0 for c in comp.participants)

    def test_rules_feed_table(self):
        rules = CompetitionRules.from_dict({"pointsWin": 2})
        comp = _make_competition(rules=rules)
        assert comp.table.rules.points_win == 2

    def test_odd_clubs_total_rounds(self):
        assert _make_competition(("A", "B", "C")).total_rounds == 6

    def test_invalid_participants(self):
        with pytest.raises(InvalidInput):
            _make_competition(("A",))


class TestStatus:
    def test_lifecycle(self):
        comp = _make_competition(("A", "B"))
        assert comp.status is CompetitionStatus.SCHEDULED

        comp.advance_cursor()
        assert comp.status is CompetitionStatus.IN_PROGRESS

        comp.advance_cursor()
        assert comp.status is CompetitionStatus.COMPLETE
        assert comp.is_complete

    def test_cursor_capped(self):
        comp = _make_competition(("A", "B"))
        for _ in range(5):
            comp.advance_cursor()
        assert comp.current_round == comp.total_rounds == 2

    def test_current_fixtures_empty_when_complete(self):
        comp = _make_competition(("A", "B"))
        comp.current_round = 2
        assert comp.current_fixtures() == []


class TestCopy:
    def test_copy_does_not_share_fixtures_or_table(self):
        comp = _make_competition()
        clone = comp.copy()
        clone.fixtures[0] = clone.fixtures[0].with_result(MatchResult(1, 0))
        clone.table.apply_result("A", "D", MatchResult(1, 0))
        clone.advance_cursor()

        assert comp.fixtures[0].result is None
        assert comp.table["A"].played == 0
        assert comp.current_round == 0

    def test_pending_fixtures(self):
        comp = _make_competition()
        comp.fixtures[0] = comp.fixtures[0].with_result(MatchResult(0, 0))
        assert len(comp.pending_fixtures()) == 1
