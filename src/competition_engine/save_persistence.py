"""Save persistence - store and load save slots as JSON files."""

import json
import logging
import os
from pathlib import Path
from typing import Dict, List, Optional

from src.competition_engine.career import Career, SaveRecord
from src.competition_engine.competition_state import CompetitionInstance
from src.competition_engine.config import (
    DEFAULT_DATA_PACKAGE,
    DEFAULT_FORMATION,
    DEFAULT_NATIONALITY,
    DEFAULT_SLOT_COUNT,
    DEFAULT_TRAINING_INTENSITY,
    SAVES_DIR,
    STARTING_BALANCE,
)
from src.competition_engine.fixtures import Fixture, MatchResult
from src.competition_engine.standings import (
    CompetitionRules,
    StandingsEntry,
    StandingsTable,
)

logger = logging.getLogger(__name__)


class SaveError(Exception):
    """Raised for invalid save slot operations."""

    pass


class SavePersistence:
    """Handles saving and loading save records, one JSON file per slot."""

    def __init__(self, storage_dir: Optional[Path] = None):
        self.storage_dir = storage_dir or SAVES_DIR
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    def _slot_path(self, slot: int) -> Path:
        if slot < 0:
            raise SaveError(f"Slot must be non-negative, got {slot}")
        return self.storage_dir / f"save_slot_{slot}.json"

    def save(self, record: SaveRecord) -> Path:
        """Write *record* to its slot file.

        The file is written to a temporary sibling and then renamed over the
        slot, so a failed write never leaves a truncated save behind.

        Returns:
            Path to the saved file.
        """
        filepath = self._slot_path(record.slot)
        tmp_path = filepath.with_suffix(".json.tmp")

        state_dict = self._save_to_dict(record)
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(state_dict, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, filepath)
        except Exception:
            tmp_path.unlink(missing_ok=True)
            raise

        logger.info(
            "Saved slot %d (%s, %s) to %s",
            record.slot, record.career.name, record.career.club_name, filepath,
        )
        return filepath

    def load(self, slot: int) -> Optional[SaveRecord]:
        """Load a slot.

        Returns:
            SaveRecord if the slot holds a readable save, None otherwise.
        """
        filepath = self._slot_path(slot)
        if not filepath.exists():
            return None

        try:
            with open(filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
            record = self._dict_to_save(data)
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.warning("Corrupt save file %s: %s", filepath, e)
            return None

        logger.info("Loaded slot %d from %s", slot, filepath)
        return record

    def list_slots(self, min_slots: int = DEFAULT_SLOT_COUNT) -> List[Optional[Dict]]:
        """Summaries for every slot, padded with None up to *min_slots*.

        Each summary has ``slot``, ``coach``, ``club`` and ``timestamp``.
        Empty or corrupt slots are None.
        """
        summaries: Dict[int, Dict] = {}
        for filepath in self.storage_dir.glob("save_slot_*.json"):
            try:
                slot = int(filepath.stem.rsplit("_", 1)[1])
                with open(filepath, "r", encoding="utf-8") as f:
                    data = json.load(f)
                summaries[slot] = {
                    "slot": slot,
                    "coach": data["career"]["name"],
                    "club": data["career"].get("clubName"),
                    "timestamp": data.get("timestamp"),
                }
            except (json.JSONDecodeError, OSError, KeyError, ValueError) as e:
                logger.warning("Skipping corrupt save file %s: %s", filepath, e)
                continue

        count = max([min_slots] + [s + 1 for s in summaries])
        return [summaries.get(i) for i in range(count)]

    def delete(self, slot: int) -> bool:
        """Delete a slot. Returns True if a file was removed."""
        filepath = self._slot_path(slot)
        if not filepath.exists():
            return False
        filepath.unlink()
        logger.info("Deleted slot %d", slot)
        return True

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------
    def _save_to_dict(self, record: SaveRecord) -> Dict:
        career = record.career
        return {
            "slot": record.slot,
            "career": {
                "name": career.name,
                "nationality": career.nationality,
                "avatar": career.avatar,
                "season": career.season,
                "clubId": career.club_id,
                "clubName": career.club_name,
                "formation": career.formation,
                "trainingIntensity": career.training_intensity,
                "finances": {"balance": career.balance},
            },
            "competitions": {
                comp_id: self._competition_to_dict(comp)
                for comp_id, comp in record.competitions.items()
            },
            "timestamp": record.timestamp,
        }

    @staticmethod
    def _competition_to_dict(comp: CompetitionInstance) -> Dict:
        return {
            "id": comp.competition_id,
            "name": comp.name,
            "participants": list(comp.participants),
            "fixtures": [
                {
                    "round": f.round,
                    "home": f.home,
                    "away": f.away,
                    "result": (
                        {
                            "homeGoals": f.result.home_goals,
                            "awayGoals": f.result.away_goals,
                        }
                        if f.result is not None
                        else None
                    ),
                }
                for f in comp.fixtures
            ],
            "table": comp.table.to_dict(),
            "currentRound": comp.current_round,
            "rules": comp.rules.to_dict(),
        }

    def _dict_to_save(self, data: Dict) -> SaveRecord:
        cd = data["career"]
        career = Career(
            name=cd["name"],
            nationality=cd.get("nationality", DEFAULT_NATIONALITY),
            avatar=cd.get("avatar", ""),
            season=cd.get("season", DEFAULT_DATA_PACKAGE),
            club_id=cd.get("clubId"),
            club_name=cd.get("clubName"),
            formation=cd.get("formation", DEFAULT_FORMATION),
            training_intensity=cd.get("trainingIntensity", DEFAULT_TRAINING_INTENSITY),
            balance=cd.get("finances", {}).get("balance", STARTING_BALANCE),
        )
        competitions = {
            comp_id: self._dict_to_competition(comp_id, cdata)
            for comp_id, cdata in data.get("competitions", {}).items()
        }
        return SaveRecord(
            slot=data["slot"],
            career=career,
            competitions=competitions,
            timestamp=data.get("timestamp", 0),
        )

    @staticmethod
    def _dict_to_competition(comp_id: str, data: Dict) -> CompetitionInstance:
        fixtures = [
            Fixture(
                round=fd["round"],
                home=fd["home"],
                away=fd["away"],
                result=(
                    MatchResult(
                        home_goals=fd["result"]["homeGoals"],
                        away_goals=fd["result"]["awayGoals"],
                    )
                    if fd.get("result") is not None
                    else None
                ),
            )
            for fd in data["fixtures"]
        ]

        rules = CompetitionRules.from_dict(data.get("rules"))
        participants = data.get("participants")
        if participants is None:
            # No participant list saved: take ids from fixtures in order of appearance
            participants = []
            for f in fixtures:
                for pid in (f.home, f.away):
                    if pid not in participants:
                        participants.append(pid)

        # JSON object keys are strings
        raw_table = data.get("table", {})
        entries = {
            pid: StandingsEntry.from_dict(raw_table.get(str(pid), {}))
            for pid in participants
        }

        return CompetitionInstance(
            competition_id=data.get("id", comp_id),
            participants=participants,
            fixtures=fixtures,
            table=StandingsTable(entries, rules.scoring),
            rules=rules,
            current_round=data.get("currentRound", 0),
            name=data.get("name"),
        )
