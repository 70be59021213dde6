from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Hashable, Iterable, Mapping, Sequence

from ffbracket.compute.stats import all_play, average, median, std_dev, weekly_rank

logger = logging.getLogger(__name__)

ParticipantId = Hashable

_ID_KEYS = ("participant_id", "roster_id", "manager_id")


def coerce_int(value: object, default: int = 0) -> int:
    """Best-effort int conversion (supports int, float, str of digits)."""
    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int | float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return default
    return default


def _coerce_float(value: object, default: float = 0.0) -> float:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return default
    return default


def coerce_id(value: object) -> ParticipantId:
    # Sleeper roster ids arrive as ints, manager ids as strings; keep digit strings numeric
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    return value


@dataclass(frozen=True, slots=True)
class RosterScore:
    """One roster's raw result for a single week, normalized at the boundary."""

    participant_id: ParticipantId
    matchup_id: int | None
    points: float


@dataclass(frozen=True, slots=True)
class ScoreRow:
    participant_id: ParticipantId
    season: int
    week: int
    points_for: float
    points_against: float
    opponent_id: ParticipantId
    matchup_id: int


@dataclass(frozen=True, slots=True)
class WeekResult(ScoreRow):
    head_to_head_win: bool
    median_win: bool
    weekly_rank: int
    all_play_wins: int
    all_play_losses: int


@dataclass(frozen=True, slots=True)
class WeekSummary:
    season: int
    week: int
    highest: float
    lowest: float
    median: float
    average: float
    std_dev: float
    top_scorer: str | None
    bottom_scorer: str | None
    teams_above_median: int
    teams_below_median: int


def parse_roster_scores(rows: Iterable[Mapping[str, Any]]) -> list[RosterScore]:
    """Convert raw per-roster dicts into ``RosterScore`` records.

    Rows without any participant id are dropped.
    """
    scores: list[RosterScore] = []
    for row in rows or []:
        pid = None
        for key in _ID_KEYS:
            if row.get(key) is not None:
                pid = coerce_id(row.get(key))
                break
        if pid is None:
            logger.debug(f"Dropping row without participant id: {row!r}")
            continue
        mid_raw = row.get("matchup_id")
        mid = None if mid_raw is None else coerce_int(mid_raw, -1)
        scores.append(RosterScore(pid, mid, _coerce_float(row.get("points"))))
    return scores


def group_rows(scores: Iterable[RosterScore]) -> dict[int, list[RosterScore]]:
    """Group a week's scores by matchup id, preserving input order.

    Rows without a matchup id (bye or idle rosters) are left out of every group.
    """
    groups: dict[int, list[RosterScore]] = {}
    for score in scores:
        if score.matchup_id is None:
            logger.debug(f"Roster {score.participant_id} has no matchup id; not paired")
            continue
        groups.setdefault(score.matchup_id, []).append(score)
    return groups


def _result(
    me: RosterScore, opp: RosterScore, season: int, week: int, slate: list[float], week_median: float
) -> WeekResult:
    ap_w, ap_l = all_play(me.points, slate)
    return WeekResult(
        participant_id=me.participant_id,
        season=season,
        week=week,
        points_for=me.points,
        points_against=opp.points,
        opponent_id=opp.participant_id,
        matchup_id=me.matchup_id,
        head_to_head_win=me.points > opp.points,
        median_win=me.points > week_median,
        weekly_rank=weekly_rank(me.points, slate),
        all_play_wins=ap_w,
        all_play_losses=ap_l,
    )


def process_week_matchups(
    scores: Sequence[RosterScore], *, season: int, week: int
) -> list[WeekResult]:
    """Pair a week's scores into head-to-head games and score both sides.

    Median, all-play and weekly rank use the whole week's slate, not just the
    opponent. A matchup group without exactly two rows is skipped with a warning.
    """
    if not scores:
        return []
    slate = [s.points for s in scores]
    week_median = median(slate)
    results: list[WeekResult] = []
    for mid, entries in group_rows(scores).items():
        if len(entries) != 2:
            logger.warning(
                f"Matchup {mid} in season {season} week {week} has {len(entries)} teams, expected 2; skipping"
            )
            continue
        a, b = entries
        results.append(_result(a, b, season, week, slate, week_median))
        results.append(_result(b, a, season, week, slate, week_median))
    return results


def process_season(
    weekly_rows: Mapping[int, Iterable[Mapping[str, Any]]], season: int
) -> list[WeekResult]:
    """Run the weekly processor over ``{week: raw rows}`` in ascending week order."""
    results: list[WeekResult] = []
    for wk in sorted(weekly_rows, key=coerce_int):
        scores = parse_roster_scores(weekly_rows[wk])
        results.extend(process_week_matchups(scores, season=season, week=coerce_int(wk)))
    return results


def summarize_week(
    results: Sequence[WeekResult], names: Mapping[ParticipantId, str] | None = None
) -> WeekSummary | None:
    """High/low/median snapshot of a single week's processed results."""
    if not results:
        return None
    names = names or {}
    first = results[0]
    points = [r.points_for for r in results]
    week_median = median(points)
    top = max(results, key=lambda r: r.points_for)
    bottom = min(results, key=lambda r: r.points_for)
    return WeekSummary(
        season=first.season,
        week=first.week,
        highest=max(points),
        lowest=min(points),
        median=week_median,
        average=average(points),
        std_dev=std_dev(points),
        top_scorer=names.get(top.participant_id, f"Roster {top.participant_id}"),
        bottom_scorer=names.get(bottom.participant_id, f"Roster {bottom.participant_id}"),
        teams_above_median=sum(1 for p in points if p > week_median),
        teams_below_median=sum(1 for p in points if p < week_median),
    )


def is_playoff_week(week: int, playoff_week_start: int) -> bool:
    return week >= playoff_week_start
