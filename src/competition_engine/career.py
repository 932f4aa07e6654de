"""Career and save-record models, plus creation of new careers."""

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, Hashable, Optional

from src.competition_engine.competition_state import CompetitionInstance
from src.competition_engine.config import (
    DEFAULT_DATA_PACKAGE,
    DEFAULT_FORMATION,
    DEFAULT_NATIONALITY,
    DEFAULT_TRAINING_INTENSITY,
    LEAGUE_COMPETITION_ID,
    STARTING_BALANCE,
    VALID_FORMATIONS,
)
from src.competition_engine.standings import CompetitionRules

logger = logging.getLogger(__name__)


class CareerError(Exception):
    """Raised when career input is invalid."""

    pass


@dataclass
class Career:
    """The coach's career inside one save slot."""

    name: str
    nationality: str = DEFAULT_NATIONALITY
    avatar: str = ""
    season: str = DEFAULT_DATA_PACKAGE
    club_id: Optional[Hashable] = None
    club_name: Optional[str] = None
    formation: str = DEFAULT_FORMATION
    training_intensity: float = DEFAULT_TRAINING_INTENSITY
    balance: int = STARTING_BALANCE

    def set_formation(self, formation: str):
        if formation not in VALID_FORMATIONS:
            raise CareerError(
                f"Invalid formation '{formation}'. Must be one of: {VALID_FORMATIONS}"
            )
        self.formation = formation

    def set_training_intensity(self, intensity: float):
        if not 0.0 <= intensity <= 1.0:
            raise CareerError(
                f"Training intensity must be between 0 and 1, got {intensity}"
            )
        self.training_intensity = float(intensity)


@dataclass
class SaveRecord:
    """Everything persisted for one save slot."""

    slot: int
    career: Career
    competitions: Dict[str, CompetitionInstance] = field(default_factory=dict)
    timestamp: int = field(default_factory=lambda: int(time.time() * 1000))

    @property
    def has_club(self) -> bool:
        return self.career.club_id is not None

    def get_competition(self, competition_id: str = LEAGUE_COMPETITION_ID) -> Optional[CompetitionInstance]:
        return self.competitions.get(competition_id)

    def touch(self):
        self.timestamp = int(time.time() * 1000)


class CareerInitializer:
    """Creates careers and schedules their competitions.

    Works from a data pack (see ``src.data_pack.ingestion.DataPack``); only
    ``get_club`` and ``get_competition`` are used.
    """

    def __init__(self, data_pack, league_id: str = LEAGUE_COMPETITION_ID):
        self.data_pack = data_pack
        self.league_id = league_id

    def create_career(
        self,
        slot: int,
        name: str,
        nationality: str = "",
        avatar: str = "",
        season: str = DEFAULT_DATA_PACKAGE,
    ) -> SaveRecord:
        """Start a save record for a new coach (no club yet).

        Raises:
            CareerError: If the coach name is blank or the slot is negative.
        """
        if slot < 0:
            raise CareerError(f"Slot must be non-negative, got {slot}")
        if not name or not name.strip():
            raise CareerError("Coach name is required")

        career = Career(
            name=name.strip(),
            nationality=nationality.strip() or DEFAULT_NATIONALITY,
            avatar=avatar.strip(),
            season=season,
        )
        return SaveRecord(slot=slot, career=career)

    def select_club(self, save: SaveRecord, club_id: Hashable) -> SaveRecord:
        """Assign the club and generate the league schedule and table.

        Raises:
            CareerError: If the club is not in the data pack.
            InvalidInput: If the league's team list cannot be scheduled.
        """
        club = self.data_pack.get_club(club_id)
        if club is None:
            raise CareerError(f"Club {club_id!r} not found in data pack")

        save.career.club_id = club["id"]
        save.career.club_name = club["name"]
        self.init_competitions(save)
        save.touch()

        logger.info(
            "Career '%s' (slot %d) takes charge of %s",
            save.career.name, save.slot, save.career.club_name,
        )
        return save

    def init_competitions(self, save: SaveRecord):
        """Schedule the league for *save*. Only the league competition is played."""
        league = self.data_pack.get_competition(self.league_id)
        if league is None:
            logger.warning("Competition '%s' not in data pack, no schedule created", self.league_id)
            return

        competition = CompetitionInstance.create_new(
            competition_id=self.league_id,
            participants=league["teams"],
            rules=CompetitionRules.from_dict(league.get("rules")),
            name=league.get("name"),
        )
        save.competitions[self.league_id] = competition

        logger.info(
            "Scheduled %s: %d clubs, %d rounds",
            competition.name or self.league_id,
            len(competition.participants),
            competition.total_rounds,
        )
