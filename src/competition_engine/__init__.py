from src.competition_engine.career import Career, CareerError, CareerInitializer, SaveRecord
from src.competition_engine.competition_state import (
    CompetitionInstance,
    CompetitionStatus,
)
from src.competition_engine.fixtures import (
    Fixture,
    InvalidInput,
    MatchResult,
    build_schedule,
)
from src.competition_engine.match_engine import (
    MatchEngine,
    MissingRatingData,
    StrengthLookup,
    simulate_round,
)
from src.competition_engine.round_controller import (
    BoundaryReached,
    RoundController,
    RoundReport,
)
from src.competition_engine.save_persistence import SaveError, SavePersistence
from src.competition_engine.standings import (
    CompetitionRules,
    ScoringRules,
    StandingsEntry,
    StandingsTable,
    apply_result,
    rank_table,
)

__all__ = [
    "BoundaryReached",
    "Career",
    "CareerError",
    "CareerInitializer",
    "CompetitionInstance",
    "CompetitionRules",
    "CompetitionStatus",
    "Fixture",
    "InvalidInput",
    "MatchEngine",
    "MatchResult",
    "MissingRatingData",
    "RoundController",
    "RoundReport",
    "SaveError",
    "SavePersistence",
    "SaveRecord",
    "ScoringRules",
    "StandingsEntry",
    "StandingsTable",
    "StrengthLookup",
    "apply_result",
    "build_schedule",
    "rank_table",
    "simulate_round",
]
