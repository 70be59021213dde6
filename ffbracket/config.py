"""League document loading.

A league document is YAML (or JSON, which ``yaml.safe_load`` also reads):

    league_id: "1180276953741729792"
    names:
      1: Alice
      2: Bob
    seasons:
      2024:
        settings:
          playoff_week_start: 15
          playoff_teams: 6
          total_rosters: 10
          playoff_round_type: 0
          playoff_seed_type: 0
          loser_bracket_type: 0
        weeks:
          1:
            - {roster_id: 1, matchup_id: 1, points: 101.5}
            - {roster_id: 2, matchup_id: 1, points: 99.0}

Settings keys follow Sleeper's league ``settings`` object.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Hashable

import yaml

from ffbracket.compute.weekly import coerce_int, coerce_id
from ffbracket.errors import DataError
from ffbracket.playoffs.models import PlayoffFormat


@dataclass(slots=True)
class LeagueConfig:
    league_id: str
    names: dict[Hashable, str] = field(default_factory=dict)
    seasons: dict[int, PlayoffFormat] = field(default_factory=dict)
    weeks: dict[int, dict[int, list[dict]]] = field(default_factory=dict)

    def playoff_start_map(self) -> dict[int, int]:
        return {season: fmt.playoff_week_start for season, fmt in self.seasons.items()}

    def format_for(self, season: int) -> PlayoffFormat:
        try:
            return self.seasons[season]
        except KeyError:
            known = ", ".join(str(s) for s in sorted(self.seasons)) or "none"
            raise DataError(f"Season {season} not found in league document (have: {known})") from None

    def season_rows(self, season: int) -> dict[int, list[dict]]:
        return self.weeks.get(season, {})


def _parse_weeks(raw: Any, season: int) -> dict[int, list[dict]]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise DataError(f"Season {season}: 'weeks' must be a mapping of week -> rows")
    weeks: dict[int, list[dict]] = {}
    for wk_raw, rows in raw.items():
        wk = coerce_int(wk_raw, -1)
        if wk < 1:
            raise DataError(f"Season {season}: invalid week key {wk_raw!r}")
        if not isinstance(rows, list):
            raise DataError(f"Season {season} week {wk}: rows must be a list")
        weeks[wk] = [r for r in rows if isinstance(r, dict)]
    return weeks


def parse_league_document(doc: Any) -> LeagueConfig:
    if not isinstance(doc, dict):
        raise DataError("League document root must be a mapping")
    raw_seasons = doc.get("seasons") or {}
    if not isinstance(raw_seasons, dict):
        raise DataError("'seasons' must be a mapping of season -> settings/weeks")

    cfg = LeagueConfig(league_id=str(doc.get("league_id") or "-"))
    for pid, name in (doc.get("names") or {}).items():
        cfg.names[coerce_id(pid)] = str(name)
    for season_raw, body in raw_seasons.items():
        season = coerce_int(season_raw, -1)
        if season < 0:
            raise DataError(f"Invalid season key {season_raw!r}")
        body = body or {}
        if not isinstance(body, dict):
            raise DataError(f"Season {season} must be a mapping with settings/weeks")
        cfg.seasons[season] = PlayoffFormat.from_settings(body.get("settings"))
        cfg.weeks[season] = _parse_weeks(body.get("weeks"), season)
    return cfg


def load_league_config(path: str | Path) -> LeagueConfig:
    """Read and parse a league document; raises OSError or DataError/ConfigError."""
    text = Path(path).read_text(encoding="utf-8")
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise DataError(f"Could not parse league document {path}: {exc}") from exc
    return parse_league_document(doc)
