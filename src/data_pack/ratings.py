"""Squad strength ratings and naive best-XI selection.

A club's strength is the mean ``overall`` of every player assigned to it.
Clubs known to the pack but without players rate 0; clubs unknown to the pack
get no rating at all, so the match engine reports them as missing.
"""

import logging
from typing import Dict, Hashable, Iterable, Optional

import pandas as pd

from src.competition_engine.match_engine import StrengthLookup
from src.data_pack.config import FORMATION_LINES
from src.data_pack.ingestion import DataPack

logger = logging.getLogger(__name__)


class StrengthCalculator:
    """Derive per-club strength ratings from a players DataFrame."""

    def calculate_ratings(
        self,
        players: pd.DataFrame,
        club_ids: Iterable[Hashable],
    ) -> Dict[Hashable, float]:
        """Mean overall per club.

        Args:
            players: DataFrame with ``clubId`` and ``overall`` columns.
            club_ids: Clubs to rate. Clubs with no players rate 0.0.

        Returns:
            Dict mapping club id to rating, only for the requested clubs.
        """
        if players.empty:
            means = pd.Series(dtype=float)
        else:
            means = players.groupby("clubId")["overall"].mean()

        ratings: Dict[Hashable, float] = {}
        for club_id in club_ids:
            if club_id in means.index:
                ratings[club_id] = float(means.loc[club_id])
            else:
                logger.debug("Club %s has no players, rating 0", club_id)
                ratings[club_id] = 0.0

        logger.info("Calculated strength ratings for %d clubs", len(ratings))
        return ratings

    def lookup_for_pack(
        self,
        pack: DataPack,
        club_ids: Optional[Iterable[Hashable]] = None,
    ) -> StrengthLookup:
        """Build a :class:`StrengthLookup` covering the clubs in *pack*.

        Args:
            pack: Loaded data pack.
            club_ids: Restrict to these clubs; ids not present in the pack's
                clubs table are left out so they resolve as missing.
        """
        known = pack.clubs["id"].tolist()
        if club_ids is not None:
            known_set = set(known)
            wanted = list(club_ids)
            unknown = [c for c in wanted if c not in known_set]
            if unknown:
                logger.warning("Clubs not in data pack, no rating: %s", unknown)
            known = [c for c in wanted if c in known_set]
        return StrengthLookup(self.calculate_ratings(pack.players, known))


def select_best_xi(
    players: pd.DataFrame,
    club_id: Hashable,
    formation: str = "4-4-2",
) -> pd.DataFrame:
    """Pick a starting eleven by overall for *formation*.

    Each line (GK, DF, MF, FW) is filled with its highest-rated players.
    Lines that cannot be filled are topped up from the best remaining
    players of any position. Returns fewer than 11 rows only when the squad
    itself is smaller.

    Raises:
        ValueError: Unknown formation, or players have no ``position``.
    """
    if formation not in FORMATION_LINES:
        raise ValueError(
            f"Unknown formation {formation!r}. "
            f"Must be one of: {sorted(FORMATION_LINES)}"
        )
    if "position" not in players.columns:
        raise ValueError("Player data has no 'position' column, cannot pick a lineup")

    squad = players[players["clubId"] == club_id].sort_values(
        "overall", ascending=False, kind="mergesort"
    )

    chosen = []
    for position, count in FORMATION_LINES[formation].items():
        line = squad[squad["position"] == position].head(count)
        chosen.extend(line.index.tolist())

    needed = sum(FORMATION_LINES[formation].values()) - len(chosen)
    if needed > 0:
        extras = squad.drop(index=chosen).head(needed)
        if not extras.empty:
            logger.debug(
                "Club %s short for %s, filling %d slots out of position",
                club_id, formation, len(extras),
            )
        chosen.extend(extras.index.tolist())

    return squad.loc[chosen]
