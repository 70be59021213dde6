"""Score-set primitives shared by the weekly processor and standings views.

All functions are pure and never mutate their inputs.
"""

from __future__ import annotations

import statistics
from typing import Any, Callable, Sequence

from ffbracket.constants import POINTS_PLACES, WIN_PCT_PLACES


def median(scores: Sequence[float]) -> float:
    """Median of a score set; 0 for an empty set.

    Even-length sets average the two middle values, same as ``statistics.median``.
    """
    if not scores:
        return 0
    return statistics.median(scores)


def average(scores: Sequence[float]) -> float:
    """Arithmetic mean of a score set; 0 for an empty set."""
    if not scores:
        return 0
    return statistics.fmean(scores)


def std_dev(scores: Sequence[float]) -> float:
    """Population standard deviation (divides by N); 0 for fewer than two scores."""
    if len(scores) < 2:
        return 0
    return statistics.pstdev(scores)


def all_play(score: float, all_scores: Sequence[float]) -> tuple[int, int]:
    """Record for ``score`` had it played every other score of the week.

    One occurrence of ``score`` is treated as self and skipped. Any other equal
    score counts as a loss, so each participant's wins + losses always equals
    ``len(all_scores) - 1`` when ``score`` is part of the slate.
    """
    wins = 0
    losses = 0
    skipped_self = False
    for other in all_scores:
        if other == score and not skipped_self:
            skipped_self = True
            continue
        if score > other:
            wins += 1
        else:
            losses += 1
    return wins, losses


def weekly_rank(score: float, all_scores: Sequence[float]) -> int:
    """1-based position of ``score`` in the descending sort of ``all_scores``.

    Repeated scores resolve to the first matching position. Returns 0 when
    ``score`` is not in the set.
    """
    ordered = sorted(all_scores, reverse=True)
    try:
        return ordered.index(score) + 1
    except ValueError:
        return 0


def win_pct(wins: int, losses: int) -> float:
    games = wins + losses
    if not games:
        return 0.0
    return round(wins / games, WIN_PCT_PLACES)


def round_points(value: float) -> float:
    return round(value, POINTS_PLACES)


def rank_positions(
    items: Sequence[Any], key: Callable[[Any], float], ascending: bool = False
) -> dict[int, int]:
    """Map each item's index to its 1-based position when sorted by ``key``.

    The sort is stable, so equal keys keep input order.
    """
    order = sorted(range(len(items)), key=lambda i: key(items[i]), reverse=not ascending)
    return {idx: pos for pos, idx in enumerate(order, start=1)}
