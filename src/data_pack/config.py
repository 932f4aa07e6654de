from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data pack location
DATA_DIR = PROJECT_ROOT / "data"

# Files making up a data pack (data/<name>.json)
DATA_FILES = ("clubs", "players", "competitions", "seasons", "rules")

# Clubs added through the admin panel, appended to the pack's clubs
CUSTOM_CLUBS_FILE = "custom_clubs.json"

# Fields given to clubs created through the admin panel
CUSTOM_CLUB_DEFAULTS = {"league": "Serie A", "logo": "1.png", "country": "Brazil"}

# Columns every player row must provide
REQUIRED_PLAYER_COLUMNS = ("id", "clubId", "overall")

# Fallback pack, used when no clubs can be loaded
FALLBACK_TEAMS = [
    (1, "Palmeiras"),
    (2, "Flamengo"),
    (3, "Internacional"),
    (4, "Grêmio"),
    (5, "Corinthians"),
    (6, "São Paulo"),
    (7, "Atlético Mineiro"),
    (8, "Santos"),
]

# 18 per club: 2 GK, 6 DF, 6 MF, 4 FW
FALLBACK_SQUAD_POSITIONS = ["GK"] * 2 + ["DF"] * 6 + ["MF"] * 6 + ["FW"] * 4
FALLBACK_OVERALL_RANGE = (60, 85)  # inclusive
FALLBACK_AGE_RANGE = (18, 35)  # inclusive
FALLBACK_SEASON = "2025/2026"

FALLBACK_LEAGUE_RULES = {
    "pointsWin": 3,
    "pointsDraw": 1,
    "pointsLoss": 0,
    "relegation": 2,
    "qualification": {"libertadores": 2, "sulamericana": 4},
}

# Outfield lines per formation (goalkeeper always 1)
FORMATION_LINES = {
    "4-4-2": {"GK": 1, "DF": 4, "MF": 4, "FW": 2},
    "4-3-3": {"GK": 1, "DF": 4, "MF": 3, "FW": 3},
    "3-5-2": {"GK": 1, "DF": 3, "MF": 5, "FW": 2},
    "4-2-3-1": {"GK": 1, "DF": 4, "MF": 5, "FW": 1},
}
