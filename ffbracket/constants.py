# constants.py
# Centralized constants. Do not change output-affecting values without bumping SCHEMA_VERSION.
import os

SCHEMA_VERSION = "2.0.0"

# Formatting
WIN_PCT_PLACES = 4
POINTS_PLACES = 2

# League setting defaults (used when a season's settings omit a key)
DEFAULT_PLAYOFF_WEEK_START = int(os.environ.get("FFBRACKET_PLAYOFF_WEEK_START", "15") or 15)
DEFAULT_PLAYOFF_TEAMS = 6
DEFAULT_TOTAL_PARTICIPANTS = 10

# Seed assigned to a participant missing from the seed map; sorts after every real seed
UNSEEDED = 99

# Bye policy keyed by playoff team count. Not derived from bracket math.
BYE_SEEDS: dict[int, tuple[int, ...]] = {
    6: (1, 2),
    8: (),
    4: (),
    2: (),
}
DEFAULT_BYE_SEEDS: tuple[int, ...] = (1, 2)

# Summary round labels
CHAMPIONSHIP_LABEL = "Championship"
THIRD_PLACE_LABEL = "3rd Place"
TOILET_BOWL_LAST_PLACE_LABELS = ("Last Place", "Toilet Bowl Final")
CONSOLATION_LAST_PLACE_LABELS = ("9th Place", "Consolation Final")
