"""Tests for career creation and club selection."""

import pytest

from src.competition_engine.career import Career, CareerError, CareerInitializer
from src.competition_engine.competition_state import CompetitionStatus
from src.competition_engine.save_persistence import SavePersistence


class TestCreateCareer:
    def test_defaults(self, fallback_pack):
        save = CareerInitializer(fallback_pack).create_career(0, "  Dorival  ")
        career = save.career
        assert career.name == "Dorival"
        assert career.nationality == "Desconhecido"
        assert career.avatar == ""
        assert career.formation == "4-4-2"
        assert career.training_intensity == 0.5
        assert career.balance == 1_000_000
        assert career.club_id is None
        assert save.competitions == {}
        assert not save.has_club

    def test_blank_name_rejected(self, fallback_pack):
        with pytest.raises(CareerError, match="name is required"):
            CareerInitializer(fallback_pack).create_career(0, "   ")

    def test_negative_slot_rejected(self, fallback_pack):
        with pytest.raises(CareerError):
            CareerInitializer(fallback_pack).create_career(-1, "Coach")


class TestSelectClub:
    def test_schedules_league(self, fallback_pack):
        initializer = CareerInitializer(fallback_pack)
        save = initializer.create_career(1, "Coach", nationality="Brasil")
        initializer.select_club(save, 2)

        assert save.career.club_id == 2
        assert save.career.club_name == "Flamengo"
        comp = save.get_competition()
        assert comp.participants == [1, 2, 3, 4, 5, 6, 7, 8]
        assert len(comp.fixtures) == 56
        assert comp.total_rounds == 14
        assert comp.status is CompetitionStatus.SCHEDULED
        assert comp.rules.relegation == 2
        assert comp.rules.qualification == {"libertadores": 2, "sulamericana": 4}

    def test_unknown_club(self, fallback_pack):
        initializer = CareerInitializer(fallback_pack)
        save = initializer.create_career(0, "Coach")
        with pytest.raises(CareerError, match="not found"):
            initializer.select_club(save, 999)
        assert save.competitions == {}

    def test_club_picked_from_search_results_can_be_saved(self, fallback_pack, tmp_path):
        initializer = CareerInitializer(fallback_pack)
        save = initializer.create_career(0, "Coach")
        club_id = fallback_pack.search_clubs("flamengo")["id"].iloc[0]
        initializer.select_club(save, club_id)

        assert type(save.career.club_id) is int
        persistence = SavePersistence(storage_dir=tmp_path / "saves")
        persistence.save(save)
        loaded = persistence.load(0)
        assert loaded.career.club_id == 2
        assert loaded.career.club_name == "Flamengo"
        assert list(persistence.storage_dir.glob("*.tmp")) == []

    def test_get_club_returns_native_values(self, fallback_pack):
        club = fallback_pack.get_club(3)
        assert type(club["id"]) is int
        assert club == {
            "id": 3, "name": "Internacional", "league": "Serie A",
            "logo": "3.png", "country": "Brazil",
        }

    def test_missing_league_creates_no_schedule(self, fallback_pack):
        initializer = CareerInitializer(fallback_pack, league_id="serie_b")
        save = initializer.create_career(0, "Coach")
        initializer.select_club(save, 1)
        assert save.competitions == {}
        assert save.career.club_id == 1


class TestCareerSettings:
    def test_formation(self):
        career = Career(name="x")
        career.set_formation("4-3-3")
        assert career.formation == "4-3-3"
        with pytest.raises(CareerError):
            career.set_formation("2-3-5")

    def test_training_intensity(self):
        career = Career(name="x")
        career.set_training_intensity(0.8)
        assert career.training_intensity == 0.8
        with pytest.raises(CareerError):
            career.set_training_intensity(1.5)
