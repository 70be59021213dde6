from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, Iterable, Mapping

from ffbracket.compute.stats import rank_positions, round_points, win_pct
from ffbracket.compute.weekly import WeekResult
from ffbracket.constants import DEFAULT_PLAYOFF_WEEK_START

StandingsKey = tuple[Hashable, int]


@dataclass(slots=True)
class StandingsEntry:
    """Cumulative dual-scoring record for one participant in one season."""

    participant_id: Hashable
    season: int
    h2h_wins: int = 0
    h2h_losses: int = 0
    median_wins: int = 0
    median_losses: int = 0
    all_play_wins: int = 0
    all_play_losses: int = 0
    points_for: float = 0.0
    points_against: float = 0.0
    weeks_played: int = 0

    @property
    def combined_wins(self) -> int:
        return self.h2h_wins + self.median_wins

    @property
    def combined_losses(self) -> int:
        return self.h2h_losses + self.median_losses

    @property
    def win_pct(self) -> float:
        return win_pct(self.combined_wins, self.combined_losses)

    @property
    def average_points(self) -> float:
        return self.points_for / self.weeks_played if self.weeks_played else 0.0

    def add(self, result: WeekResult) -> None:
        # Each week yields exactly two judgments: head-to-head and median
        if result.head_to_head_win:
            self.h2h_wins += 1
        else:
            self.h2h_losses += 1
        if result.median_win:
            self.median_wins += 1
        else:
            self.median_losses += 1
        self.all_play_wins += result.all_play_wins
        self.all_play_losses += result.all_play_losses
        self.points_for += result.points_for
        self.points_against += result.points_against
        self.weeks_played += 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "participant_id": self.participant_id,
            "season": self.season,
            "h2h": {"wins": self.h2h_wins, "losses": self.h2h_losses},
            "median": {"wins": self.median_wins, "losses": self.median_losses},
            "combined": {"wins": self.combined_wins, "losses": self.combined_losses},
            "all_play": {"wins": self.all_play_wins, "losses": self.all_play_losses},
            "win_pct": self.win_pct,
            "points_for": round_points(self.points_for),
            "points_against": round_points(self.points_against),
            "avg_per_week": round_points(self.average_points),
            "weeks_played": self.weeks_played,
        }


@dataclass(slots=True)
class RankedStanding:
    entry: StandingsEntry
    rank: int
    points_for_rank: int
    points_against_rank: int
    all_play_rank: int
    # Position within the entry's own season; equals rank for single-season input
    season_rank: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.entry.to_dict(),
            "rank": self.rank,
            "points_for_rank": self.points_for_rank,
            "points_against_rank": self.points_against_rank,
            "all_play_rank": self.all_play_rank,
            "season_rank": self.season_rank,
        }


def aggregate_standings(results: Iterable[WeekResult]) -> dict[StandingsKey, StandingsEntry]:
    records: dict[StandingsKey, StandingsEntry] = {}
    for res in results:
        key = (res.participant_id, res.season)
        rec = records.get(key)
        if rec is None:
            rec = records[key] = StandingsEntry(res.participant_id, res.season)
        rec.add(res)
    return records


def filter_regular_season(
    results: Iterable[WeekResult],
    playoff_start_map: Mapping[int, int] | None = None,
    default_start: int = DEFAULT_PLAYOFF_WEEK_START,
) -> list[WeekResult]:
    """Keep weeks strictly before each season's playoff start week."""
    starts = playoff_start_map or {}
    return [r for r in results if r.week < starts.get(r.season, default_start)]


def standings_sort_key(entry: StandingsEntry) -> tuple[int, float]:
    """Combined wins desc, then points-for desc; remaining ties keep input order."""
    return (-entry.combined_wins, -entry.points_for)


def rank_standings(entries: Iterable[StandingsEntry]) -> list[RankedStanding]:
    """Rank entries across the whole pool, plus a rank inside each season.

    The pool sort is stable, so each season's subsequence is already in
    ``standings_sort_key`` order and its running count is the season rank.
    """
    ordered = sorted(entries, key=standings_sort_key)
    season_counts: dict[int, int] = {}
    season_ranks: list[int] = []
    for e in ordered:
        season_counts[e.season] = season_counts.get(e.season, 0) + 1
        season_ranks.append(season_counts[e.season])
    pf_ranks = rank_positions(ordered, key=lambda e: e.points_for)
    pa_ranks = rank_positions(ordered, key=lambda e: e.points_against)
    ap_ranks = rank_positions(ordered, key=lambda e: e.all_play_wins)
    return [
        RankedStanding(
            entry=e,
            rank=i + 1,
            points_for_rank=pf_ranks[i],
            points_against_rank=pa_ranks[i],
            all_play_rank=ap_ranks[i],
            season_rank=season_ranks[i],
        )
        for i, e in enumerate(ordered)
    ]
