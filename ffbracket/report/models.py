from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Hashable

from ffbracket.compute.standings import RankedStanding
from ffbracket.playoffs.models import PostseasonResult


@dataclass(slots=True)
class PostseasonContext:
    league_id: str
    season: int
    include_playoffs: bool
    standings: list[RankedStanding]
    result: PostseasonResult
    names: dict[Hashable, str] = field(default_factory=dict)
    streak_rows: list[dict] = field(default_factory=list)
    h2h_rows: list[dict] = field(default_factory=list)

    def name_of(self, participant_id: Hashable) -> str:
        return self.names.get(participant_id, f"Roster {participant_id}")

    def meta_rows(self) -> list[list[Any]]:
        fmt = self.result.format
        return [
            ["league_id", self.league_id],
            ["season", self.season],
            ["include_playoffs", self.include_playoffs],
            ["num_teams", len(self.standings)],
            *([k, v] for k, v in fmt.describe().items()),
        ]

    def to_json_payload(self, schema_version: str) -> dict[str, Any]:
        result = self.result.to_dict()
        return {
            "schema_version": schema_version,
            "metadata": {k: v for k, v in self.meta_rows()},
            "standings": [
                {**s.to_dict(), "name": self.name_of(s.entry.participant_id)} for s in self.standings
            ],
            "streaks": self.streak_rows,
            "head_to_head": self.h2h_rows,
            "seedings": result["seedings"],
            "summary": result["summary"],
            "upper_bracket": result["upper_bracket"],
            "placement_games": result["placement_games"],
            "lower_bracket": result["lower_bracket"],
        }
