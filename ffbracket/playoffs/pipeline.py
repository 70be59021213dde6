from __future__ import annotations

from typing import Hashable, Iterable, Mapping

from ffbracket.compute.standings import aggregate_standings
from ffbracket.compute.weekly import WeekResult
from ffbracket.playoffs.bracket import determine_summary, group_by_bracket
from ffbracket.playoffs.classify import classify_matchups
from ffbracket.playoffs.models import PlayoffFormat, PlayoffMatchup, PostseasonResult
from ffbracket.playoffs.seeding import calculate_seedings, seed_map


def build_playoff_matchups(
    results: Iterable[WeekResult], playoff_week_start: int
) -> list[PlayoffMatchup]:
    """Re-pair processed postseason results into one record per game.

    A tied game has no winner.
    """
    games: dict[tuple[int, int], list[WeekResult]] = {}
    for res in results:
        if res.week < playoff_week_start:
            continue
        games.setdefault((res.week, res.matchup_id), []).append(res)

    matchups: list[PlayoffMatchup] = []
    for (week, mid), sides in sorted(games.items(), key=lambda kv: kv[0]):
        if len(sides) != 2:
            continue
        a, b = sides
        winner = None
        if a.head_to_head_win:
            winner = a.participant_id
        elif b.head_to_head_win:
            winner = b.participant_id
        matchups.append(
            PlayoffMatchup(
                week=week,
                matchup_id=mid,
                team1_id=a.participant_id,
                team2_id=b.participant_id,
                team1_points=a.points_for,
                team2_points=b.points_for,
                winner_id=winner,
            )
        )
    return matchups


def resolve_postseason(
    results: Iterable[WeekResult],
    fmt: PlayoffFormat,
    season: int,
    names: Mapping[Hashable, str] | None = None,
    matchups: Iterable[PlayoffMatchup] | None = None,
) -> PostseasonResult:
    """Seed, classify, group and summarize one season's postseason.

    Seeds come from weeks before ``fmt.playoff_week_start`` only. Postseason
    games are rebuilt from ``results`` unless ``matchups`` is given. Nothing is
    cached between calls.
    """
    season_results = [r for r in results if r.season == season]
    regular = [r for r in season_results if r.week < fmt.playoff_week_start]
    entries = aggregate_standings(regular).values()
    seedings = calculate_seedings(entries, fmt, names)

    if matchups is None:
        matchups = build_playoff_matchups(season_results, fmt.playoff_week_start)
    classified = classify_matchups(matchups, seed_map(seedings), fmt, names)
    upper, placement, lower = group_by_bracket(classified, fmt, seedings)

    return PostseasonResult(
        season=season,
        format=fmt,
        seedings=seedings,
        summary=determine_summary(classified, fmt),
        upper_bracket=upper,
        placement_games=placement,
        lower_bracket=lower,
    )
