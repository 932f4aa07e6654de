"""JSON ingestion for data packs.

Handles the quirks of the pack files:
- Root may be a bare list or an object keyed by the file name
- Individual files may be missing or unreadable (skipped with a warning)
- Custom clubs added through the admin panel live in a separate file
- When no clubs load at all, a generated fallback pack is used instead
"""

import json
import logging
import os
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Hashable, List, Optional

import pandas as pd

from src.data_pack.config import (
    CUSTOM_CLUB_DEFAULTS,
    CUSTOM_CLUBS_FILE,
    DATA_DIR,
    DATA_FILES,
    REQUIRED_PLAYER_COLUMNS,
)
from src.data_pack.fallback import build_fallback_data

logger = logging.getLogger(__name__)


class IngestionError(Exception):
    """Raised when a data pack file is present but unusable."""


@dataclass
class DataPack:
    """Static game content: clubs, players, competitions, seasons, rules."""

    clubs: pd.DataFrame
    players: pd.DataFrame
    competitions: List[Dict] = field(default_factory=list)
    seasons: List[Dict] = field(default_factory=list)
    rules: Dict = field(default_factory=dict)
    is_fallback: bool = False

    def get_competition(self, competition_id: str) -> Optional[Dict]:
        for comp in self.competitions:
            if comp.get("id") == competition_id:
                return comp
        return None

    def get_club(self, club_id: Hashable) -> Optional[Dict]:
        match = self.clubs[self.clubs["id"] == club_id]
        if match.empty:
            return None
        # records orient yields native Python scalars rather than numpy ones
        return match.to_dict("records")[0]

    def search_clubs(self, text: str = "") -> pd.DataFrame:
        """Clubs whose name contains *text* (case-insensitive)."""
        if not text:
            return self.clubs
        mask = self.clubs["name"].str.lower().str.contains(text.lower(), regex=False)
        return self.clubs[mask]

    def club_players(self, club_id: Hashable) -> pd.DataFrame:
        return self.players[self.players["clubId"] == club_id]


def _unwrap(payload, key: str):
    """Return ``payload[key]`` for object roots, else the payload itself."""
    if isinstance(payload, dict) and key in payload:
        return payload[key]
    return payload


class DataPackLoader:
    """Reads a data pack directory into a :class:`DataPack`."""

    def __init__(self, data_dir: Optional[Path] = None, rng: Optional[random.Random] = None):
        self.data_dir = Path(data_dir) if data_dir is not None else DATA_DIR
        self.rng = rng

    def _read_json(self, filename: str):
        filepath = self.data_dir / filename
        if not filepath.exists():
            logger.warning("Data file not found: %s", filepath)
            return None
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not read %s: %s", filepath, e)
            return None

    def read_raw(self) -> Dict[str, object]:
        """Read every pack file; missing or corrupt files map to None."""
        raw = {}
        for name in DATA_FILES:
            payload = self._read_json(f"{name}.json")
            raw[name] = _unwrap(payload, name) if payload is not None else None
        return raw

    def read_custom_clubs(self) -> List[Dict]:
        # Optional file; absence is normal
        if not (self.data_dir / CUSTOM_CLUBS_FILE).exists():
            return []
        payload = self._read_json(CUSTOM_CLUBS_FILE)
        if not isinstance(payload, list):
            return []
        return payload

    def add_custom_club(self, pack: DataPack, name: str) -> Dict:
        """Create a club, add it to *pack* and store it in the custom clubs file.

        The new id is one more than the highest numeric id in the pack.

        Returns:
            The new club record.

        Raises:
            ValueError: If *name* is blank.
        """
        if not name or not name.strip():
            raise ValueError("Club name is required")

        numeric_ids = pd.to_numeric(pack.clubs["id"], errors="coerce").dropna()
        next_id = int(numeric_ids.max()) + 1 if not numeric_ids.empty else 1
        club = {"id": next_id, "name": name.strip(), **CUSTOM_CLUB_DEFAULTS}

        custom = self.read_custom_clubs()
        custom.append(club)
        self._write_custom_clubs(custom)

        pack.clubs = pd.concat(
            [pack.clubs, pd.DataFrame([club])], ignore_index=True
        )
        logger.info("Added custom club %s (id %d)", club["name"], next_id)
        return club

    def _write_custom_clubs(self, clubs: List[Dict]):
        self.data_dir.mkdir(parents=True, exist_ok=True)
        filepath = self.data_dir / CUSTOM_CLUBS_FILE
        tmp_path = filepath.with_suffix(".json.tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(clubs, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, filepath)
        except Exception:
            tmp_path.unlink(missing_ok=True)
            raise

    def load(self) -> DataPack:
        """Load the pack, falling back to generated content if no clubs exist.

        Raises:
            IngestionError: If players are present but malformed.
        """
        raw = self.read_raw()
        clubs = list(raw.get("clubs") or [])
        clubs.extend(self.read_custom_clubs())

        is_fallback = False
        if not clubs:
            logger.warning("No clubs could be loaded, using built-in fallback pack")
            raw = build_fallback_data(self.rng)
            clubs = raw["clubs"]
            is_fallback = True

        pack = DataPack(
            clubs=self._clubs_frame(clubs),
            players=self._players_frame(raw.get("players") or []),
            competitions=list(raw.get("competitions") or []),
            seasons=list(raw.get("seasons") or []),
            rules=dict(raw.get("rules") or {}),
            is_fallback=is_fallback,
        )
        logger.info(
            "Loaded data pack: %d clubs, %d players, %d competitions%s",
            len(pack.clubs), len(pack.players), len(pack.competitions),
            " (fallback)" if is_fallback else "",
        )
        return pack

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _clubs_frame(clubs: List[Dict]) -> pd.DataFrame:
        df = pd.DataFrame(clubs)
        if df.empty:
            return pd.DataFrame(columns=["id", "name"])
        if "id" not in df.columns or "name" not in df.columns:
            raise IngestionError("Club entries must have 'id' and 'name'")

        dupes = df["id"].duplicated()
        if dupes.any():
            logger.warning(
                "Dropping %d clubs with duplicate ids: %s",
                dupes.sum(), df.loc[dupes, "id"].tolist(),
            )
            df = df[~dupes]
        return df.reset_index(drop=True)

    @staticmethod
    def _players_frame(players: List[Dict]) -> pd.DataFrame:
        df = pd.DataFrame(players)
        if df.empty:
            return pd.DataFrame(columns=list(REQUIRED_PLAYER_COLUMNS) + ["name", "position"])

        missing = [c for c in REQUIRED_PLAYER_COLUMNS if c not in df.columns]
        if missing:
            raise IngestionError(f"Player data missing required columns: {missing}")

        df["overall"] = pd.to_numeric(df["overall"], errors="coerce")
        bad = df["overall"].isna()
        if bad.any():
            logger.warning(
                "Dropping %d players with non-numeric overall: %s",
                bad.sum(), df.loc[bad, "id"].tolist(),
            )
            df = df[~bad]
        return df.reset_index(drop=True)
