import pytest

from ffbracket.compute.streaks import current_streak, longest_streaks, weekly_outcomes
from ffbracket.compute.weekly import RosterScore, process_week_matchups

ess = [
    (1, "W"),
    (2, "W"),
    (3, "L"),
    (4, "W"),
    (5, "W"),
    (6, "W"),
]


def test_current_streak_runs_back_to_last_break():
    typ, ln, st, en = current_streak(ess, 6)
    assert (typ, ln, st, en) == ("W", 3, 4, 6)


def test_current_streak_respects_through_week():
    assert current_streak(ess, 3) == ("L", 1, 3, 3)
    assert current_streak([], 5) == ("none", 0, 0, 5)


def test_longest_streaks_spans():
    win_best, loss_best = longest_streaks(ess, 6)
    assert win_best == (3, "w4-w6")
    assert loss_best == (1, "w3-w3")
    assert longest_streaks([], 6) == ((0, "-"), (0, "-"))


def test_weekly_outcomes_combined_emits_median_then_h2h():
    results = []
    for week, pts in ((1, (120, 100, 110, 90)), (2, (90, 100, 95, 130))):
        scores = [RosterScore(pid, 1 if pid < 3 else 2, p) for pid, p in zip((1, 2, 3, 4), pts)]
        results += process_week_matchups(scores, season=2024, week=week)
    out = weekly_outcomes(results, "combined")
    assert out[(1, 2024)] == [(1, "W"), (1, "W"), (2, "L"), (2, "L")]
    assert weekly_outcomes(results, "h2h")[(2, 2024)] == [(1, "L"), (2, "W")]
    assert weekly_outcomes(results, "median")[(4, 2024)] == [(1, "L"), (2, "W")]


def test_weekly_outcomes_rejects_unknown_kind():
    with pytest.raises(ValueError):
        weekly_outcomes([], "all-play")


def test_weekly_outcomes_keeps_seasons_apart():
    results = []
    for season, (p1, p2) in ((2023, (100, 90)), (2024, (80, 90))):
        scores = [RosterScore(1, 1, p1), RosterScore(2, 1, p2)]
        results += process_week_matchups(scores, season=season, week=1)
    out = weekly_outcomes(results, "h2h")
    assert out[(1, 2023)] == [(1, "W")]
    assert out[(1, 2024)] == [(1, "L")]
    assert current_streak(out[(1, 2024)], 1) == ("L", 1, 1, 1)
