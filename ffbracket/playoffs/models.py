from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Hashable, Mapping

from ffbracket.compute.stats import round_points
from ffbracket.constants import (
    DEFAULT_PLAYOFF_TEAMS,
    DEFAULT_PLAYOFF_WEEK_START,
    DEFAULT_TOTAL_PARTICIPANTS,
)
from ffbracket.errors import ConfigError


class RoundSpanMode(str, Enum):
    SINGLE_WEEK = "single-week"
    TWO_WEEK_CHAMPIONSHIP = "two-week-championship"
    TWO_WEEK_ALL_ROUNDS = "two-week-all-rounds"


class LowerBracketMode(str, Enum):
    TOILET_BOWL = "toilet-bowl"
    CONSOLATION = "consolation"


class BracketKind(str, Enum):
    UPPER = "upper"
    PLACEMENT = "placement"
    LOWER = "lower"


# Sleeper integer codes, by position
_ROUND_SPAN_CODES = (
    RoundSpanMode.SINGLE_WEEK,
    RoundSpanMode.TWO_WEEK_CHAMPIONSHIP,
    RoundSpanMode.TWO_WEEK_ALL_ROUNDS,
)
_LOWER_BRACKET_CODES = (LowerBracketMode.TOILET_BOWL, LowerBracketMode.CONSOLATION)


def _enum_setting(value: Any, codes: tuple, setting: str):
    enum_cls = type(codes[0])
    if value is None:
        return codes[0]
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str) and not value.strip().isdigit():
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            raise ConfigError(f"Unknown {setting}: {value!r}") from None
    try:
        code = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Unknown {setting}: {value!r}") from None
    if not 0 <= code < len(codes):
        raise ConfigError(f"Unknown {setting} code: {code}")
    return codes[code]


def _int_setting(settings: Mapping[str, Any], key: str, default: int) -> int:
    raw = settings.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ConfigError(f"Setting {key} must be an integer, got {raw!r}") from None


@dataclass(frozen=True, slots=True)
class PlayoffFormat:
    """Read-only playoff configuration for one season."""

    playoff_week_start: int = DEFAULT_PLAYOFF_WEEK_START
    playoff_team_count: int = DEFAULT_PLAYOFF_TEAMS
    total_participants: int = DEFAULT_TOTAL_PARTICIPANTS
    round_span_mode: RoundSpanMode = RoundSpanMode.SINGLE_WEEK
    reseed_each_round: bool = False
    lower_bracket_mode: LowerBracketMode = LowerBracketMode.TOILET_BOWL

    def __post_init__(self) -> None:
        if self.playoff_week_start < 1:
            raise ConfigError(f"playoff_week_start must be >= 1, got {self.playoff_week_start}")
        if self.total_participants < 2:
            raise ConfigError(f"total_participants must be >= 2, got {self.total_participants}")
        if not 0 <= self.playoff_team_count <= self.total_participants:
            raise ConfigError(
                f"playoff_team_count must be within 0..{self.total_participants}, "
                f"got {self.playoff_team_count}"
            )

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any] | None) -> PlayoffFormat:
        """Build a format from Sleeper-style league settings.

        Accepts ``playoff_week_start``, ``playoff_teams``, ``total_rosters``,
        ``playoff_round_type`` (0/1/2), ``playoff_seed_type`` (0/1) and
        ``loser_bracket_type`` (0/1). Enum names such as ``"consolation"`` are
        accepted in place of codes. Missing keys take league defaults.
        """
        s = settings or {}
        return cls(
            playoff_week_start=_int_setting(s, "playoff_week_start", DEFAULT_PLAYOFF_WEEK_START),
            playoff_team_count=_int_setting(s, "playoff_teams", DEFAULT_PLAYOFF_TEAMS),
            total_participants=_int_setting(s, "total_rosters", DEFAULT_TOTAL_PARTICIPANTS),
            round_span_mode=_enum_setting(
                s.get("playoff_round_type"), _ROUND_SPAN_CODES, "playoff_round_type"
            ),
            reseed_each_round=_int_setting(s, "playoff_seed_type", 0) == 1,
            lower_bracket_mode=_enum_setting(
                s.get("loser_bracket_type"), _LOWER_BRACKET_CODES, "loser_bracket_type"
            ),
        )

    @property
    def lower_bracket_team_count(self) -> int:
        return self.total_participants - self.playoff_team_count

    @property
    def total_rounds(self) -> int:
        teams = self.playoff_team_count
        if teams <= 2:
            return 1
        if teams <= 4:
            return 2
        if teams <= 8:
            return 3
        return 4

    def physical_round(self, week: int) -> int:
        return week - self.playoff_week_start + 1

    def round_number(self, week: int) -> int:
        """Logical round for a postseason week.

        A two-week championship keeps both final weeks on the last round; two
        weeks per round folds each pair of weeks into one round.
        """
        physical = self.physical_round(week)
        if self.round_span_mode is RoundSpanMode.TWO_WEEK_CHAMPIONSHIP:
            return min(physical, self.total_rounds)
        if self.round_span_mode is RoundSpanMode.TWO_WEEK_ALL_ROUNDS:
            return math.ceil(physical / 2)
        return physical

    def spans_two_weeks(self, week: int) -> bool:
        if self.round_span_mode is RoundSpanMode.TWO_WEEK_CHAMPIONSHIP:
            return self.physical_round(week) >= self.total_rounds
        return self.round_span_mode is RoundSpanMode.TWO_WEEK_ALL_ROUNDS

    def is_first_leg(self, week: int) -> bool:
        physical = self.physical_round(week)
        if self.round_span_mode is RoundSpanMode.TWO_WEEK_CHAMPIONSHIP:
            return physical == self.total_rounds
        if self.round_span_mode is RoundSpanMode.TWO_WEEK_ALL_ROUNDS:
            return physical % 2 == 1
        return False

    def describe(self) -> dict[str, Any]:
        return {
            "playoff_week_start": self.playoff_week_start,
            "playoff_teams": self.playoff_team_count,
            "total_participants": self.total_participants,
            "lower_bracket_teams": self.lower_bracket_team_count,
            "round_type": self.round_span_mode.value,
            "seed_type": "re-seed" if self.reseed_each_round else "fixed-bracket",
            "lower_bracket": self.lower_bracket_mode.value,
        }


@dataclass(slots=True)
class Seed:
    rank: int
    participant_id: Hashable
    combined_wins: int
    points_for: float
    bracket: BracketKind
    has_bye: bool
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "seed": self.rank,
            "participant_id": self.participant_id,
            "name": self.name,
            "combined_wins": self.combined_wins,
            "points_for": round_points(self.points_for),
            "bracket": self.bracket.value,
            "has_bye": self.has_bye,
        }


@dataclass(frozen=True, slots=True)
class PlayoffMatchup:
    """One postseason game as fetched; ``winner_id`` is None while undecided or tied."""

    week: int
    matchup_id: int
    team1_id: Hashable
    team2_id: Hashable
    team1_points: float
    team2_points: float
    winner_id: Hashable | None = None


@dataclass(slots=True)
class MatchupSide:
    participant_id: Hashable
    name: str
    seed: int
    points: float
    is_winner: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "participant_id": self.participant_id,
            "name": self.name,
            "seed": self.seed,
            "points": round_points(self.points),
            "is_winner": self.is_winner,
        }


@dataclass(slots=True)
class ClassifiedMatchup:
    week: int
    matchup_id: int
    bracket: BracketKind
    round_label: str
    round_number: int
    is_two_week_span: bool
    team1: MatchupSide
    team2: MatchupSide
    point_differential: float
    winner_seed: int
    aggregate_points: tuple[float, float] | None = None
    # Leg 1 of a two-week round; its leader is provisional until the second leg
    is_first_leg: bool = False

    @property
    def winner(self) -> MatchupSide | None:
        if self.team1.is_winner:
            return self.team1
        if self.team2.is_winner:
            return self.team2
        return None

    @property
    def loser(self) -> MatchupSide | None:
        if self.team1.is_winner:
            return self.team2
        if self.team2.is_winner:
            return self.team1
        return None

    def to_dict(self) -> dict[str, Any]:
        out = {
            "week": self.week,
            "matchup_id": self.matchup_id,
            "bracket": self.bracket.value,
            "round_label": self.round_label,
            "round_number": self.round_number,
            "is_two_week_span": self.is_two_week_span,
            "is_first_leg": self.is_first_leg,
            "team1": self.team1.to_dict(),
            "team2": self.team2.to_dict(),
            "point_differential": round_points(self.point_differential),
            "winner_seed": self.winner_seed,
        }
        if self.aggregate_points is not None:
            out["aggregate_points"] = {
                "team1": round_points(self.aggregate_points[0]),
                "team2": round_points(self.aggregate_points[1]),
            }
        return out


@dataclass(slots=True)
class Bye:
    seed: int
    participant_id: Hashable
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"seed": self.seed, "participant_id": self.participant_id, "name": self.name}


@dataclass(slots=True)
class BracketRound:
    round_label: str
    week: int
    matchups: list[ClassifiedMatchup] = field(default_factory=list)
    byes: list[Bye] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "name": self.round_label,
            "week": self.week,
            "matchups": [m.to_dict() for m in self.matchups],
        }
        if self.byes:
            out["byes"] = [b.to_dict() for b in self.byes]
        return out


@dataclass(frozen=True, slots=True)
class Finisher:
    participant_id: Hashable
    name: str
    seed: int

    def to_dict(self) -> dict[str, Any]:
        return {"participant_id": self.participant_id, "name": self.name, "seed": self.seed}


@dataclass(slots=True)
class Summary:
    champion: Finisher | None = None
    runner_up: Finisher | None = None
    third_place: Finisher | None = None
    toilet_bowl_loser: Finisher | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            key: (val.to_dict() if val is not None else None)
            for key, val in (
                ("champion", self.champion),
                ("runner_up", self.runner_up),
                ("third_place", self.third_place),
                ("toilet_bowl_loser", self.toilet_bowl_loser),
            )
        }


@dataclass(slots=True)
class PostseasonResult:
    season: int
    format: PlayoffFormat
    seedings: list[Seed]
    summary: Summary
    upper_bracket: list[BracketRound]
    placement_games: list[BracketRound]
    lower_bracket: list[BracketRound]

    def to_dict(self) -> dict[str, Any]:
        return {
            "season": self.season,
            "settings": self.format.describe(),
            "seedings": [s.to_dict() for s in self.seedings],
            "summary": self.summary.to_dict(),
            "upper_bracket": [r.to_dict() for r in self.upper_bracket],
            "placement_games": [r.to_dict() for r in self.placement_games],
            "lower_bracket": [r.to_dict() for r in self.lower_bracket],
        }
