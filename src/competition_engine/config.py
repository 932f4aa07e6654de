from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Save slot storage
SAVES_DIR = PROJECT_ROOT / "data" / "saves"
DEFAULT_SLOT_COUNT = 2

# Default scoring rules (overridden by competition rules from the data pack)
DEFAULT_POINTS_WIN = 3
DEFAULT_POINTS_DRAW = 1
DEFAULT_POINTS_LOSS = 0

# Goal formula: max(0, round(strength / GOAL_STRENGTH_DIVISOR + U)),
# U ~ uniform [0, GOAL_RANDOM_SPAN). Tunable heuristic.
GOAL_STRENGTH_DIVISOR = 20.0
GOAL_RANDOM_SPAN = 2.0

# Career defaults
DEFAULT_DATA_PACKAGE = "2025/2026"
DEFAULT_NATIONALITY = "Desconhecido"
DEFAULT_FORMATION = "4-4-2"
VALID_FORMATIONS = ("4-4-2", "4-3-3", "3-5-2", "4-2-3-1")
DEFAULT_TRAINING_INTENSITY = 0.5
STARTING_BALANCE = 1_000_000

# Only the national league is scheduled when a career starts
LEAGUE_COMPETITION_ID = "brasileirao"
