from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, Iterable, Literal, Mapping

from ffbracket.compute.stats import round_points, win_pct
from ffbracket.compute.weekly import WeekResult
from ffbracket.constants import DEFAULT_PLAYOFF_WEEK_START

GameFilter = Literal["all", "regular", "playoff"]
PairKey = tuple[Hashable, Hashable]


@dataclass(slots=True)
class H2HRecord:
    """One participant's record against one opponent, from the participant's side."""

    participant_id: Hashable
    opponent_id: Hashable
    games: int = 0
    wins: int = 0
    losses: int = 0
    points_for: float = 0.0
    points_against: float = 0.0

    @property
    def win_pct(self) -> float:
        return win_pct(self.wins, self.losses)

    @property
    def average_margin(self) -> float:
        if not self.games:
            return 0.0
        return (self.points_for - self.points_against) / self.games

    def to_dict(self) -> dict[str, Any]:
        return {
            "participant_id": self.participant_id,
            "opponent_id": self.opponent_id,
            "games": self.games,
            "wins": self.wins,
            "losses": self.losses,
            "win_pct": self.win_pct,
            "points_for": round_points(self.points_for),
            "points_against": round_points(self.points_against),
            "avg_margin": round_points(self.average_margin),
        }


def h2h_records(
    results: Iterable[WeekResult],
    games: GameFilter = "all",
    playoff_start_map: Mapping[int, int] | None = None,
    default_start: int = DEFAULT_PLAYOFF_WEEK_START,
) -> dict[PairKey, H2HRecord]:
    """Tally every ``(participant, opponent)`` pairing across seasons.

    ``games`` keeps all weeks, only weeks before each season's playoff start,
    or only postseason weeks. A tied game counts as a loss for both sides.
    """
    if games not in ("all", "regular", "playoff"):
        raise ValueError(f"Unsupported game filter: {games}")
    starts = playoff_start_map or {}
    records: dict[PairKey, H2HRecord] = {}
    for res in results:
        if games != "all":
            is_playoff = res.week >= starts.get(res.season, default_start)
            if is_playoff != (games == "playoff"):
                continue
        key = (res.participant_id, res.opponent_id)
        rec = records.get(key)
        if rec is None:
            rec = records[key] = H2HRecord(res.participant_id, res.opponent_id)
        rec.games += 1
        if res.head_to_head_win:
            rec.wins += 1
        else:
            rec.losses += 1
        rec.points_for += res.points_for
        rec.points_against += res.points_against
    return records


def rank_h2h(records: Iterable[H2HRecord]) -> list[H2HRecord]:
    # Win pct desc, then wins desc; remaining ties keep input order
    return sorted(records, key=lambda r: (-r.win_pct, -r.wins))
