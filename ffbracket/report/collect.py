"""Assemble a postseason report context from a loaded league document."""

from __future__ import annotations

import logging
from typing import Hashable, Mapping

from ffbracket.compute import (
    aggregate_standings,
    current_streak,
    filter_regular_season,
    h2h_records,
    longest_streaks,
    process_season,
    rank_h2h,
    rank_standings,
    weekly_outcomes,
)
from ffbracket.compute.weekly import WeekResult
from ffbracket.config import LeagueConfig
from ffbracket.playoffs import resolve_postseason
from .models import PostseasonContext

logger = logging.getLogger(__name__)


def _streak_rows(
    results: list[WeekResult], through_week: int, names: Mapping[Hashable, str]
) -> list[dict]:
    rows: list[dict] = []
    for (pid, _season), seq in weekly_outcomes(results, "combined").items():
        ctype, clen, cstart, _ = current_streak(seq, through_week)
        win_best, loss_best = longest_streaks(seq, through_week)
        rows.append(
            {
                "participant_id": pid,
                "name": names.get(pid, f"Roster {pid}"),
                "current": f"{ctype}{clen}" if clen else "-",
                "current_start_week": cstart if clen else None,
                "longest_win": win_best[0],
                "longest_win_span": win_best[1],
                "longest_loss": loss_best[0],
                "longest_loss_span": loss_best[1],
            }
        )
    return rows


def _h2h_rows(results: list[WeekResult], names: Mapping[Hashable, str]) -> list[dict]:
    rows: list[dict] = []
    for rec in rank_h2h(h2h_records(results).values()):
        rows.append(
            {
                **rec.to_dict(),
                "name": names.get(rec.participant_id, f"Roster {rec.participant_id}"),
                "opponent": names.get(rec.opponent_id, f"Roster {rec.opponent_id}"),
            }
        )
    return rows


def build_postseason_context(
    cfg: LeagueConfig, season: int, include_playoffs: bool = False
) -> PostseasonContext:
    fmt = cfg.format_for(season)
    results = process_season(cfg.season_rows(season), season)
    regular = filter_regular_season(results, cfg.playoff_start_map(), fmt.playoff_week_start)
    logger.info(
        f"Season {season}: {len(results)} weekly results, {len(regular)} before week {fmt.playoff_week_start}"
    )

    standing_rows = results if include_playoffs else regular
    standings = rank_standings(aggregate_standings(standing_rows).values())
    result = resolve_postseason(results, fmt, season, cfg.names)

    last_regular = max((r.week for r in regular), default=0)
    return PostseasonContext(
        league_id=cfg.league_id,
        season=season,
        include_playoffs=include_playoffs,
        standings=standings,
        result=result,
        names=dict(cfg.names),
        streak_rows=_streak_rows(regular, last_regular, cfg.names),
        h2h_rows=_h2h_rows(standing_rows, cfg.names),
    )
