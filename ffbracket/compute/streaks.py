from __future__ import annotations

from typing import Hashable, Iterable, Literal

from ffbracket.compute.weekly import WeekResult

StreakKind = Literal["h2h", "median", "combined"]
Outcome = tuple[int, str]
StreakKey = tuple[Hashable, int]


def weekly_outcomes(
    results: Iterable[WeekResult], kind: StreakKind = "combined"
) -> dict[StreakKey, list[Outcome]]:
    """``(week, "W"|"L")`` sequences in week order, keyed by ``(participant, season)``.

    Week numbers restart each season, so seasons are never merged into one run.

    ``combined`` emits two outcomes per week: the median result, then head-to-head.
    """
    if kind not in ("h2h", "median", "combined"):
        raise ValueError(f"Unsupported streak kind: {kind}")
    out: dict[StreakKey, list[Outcome]] = {}
    for res in sorted(results, key=lambda r: (r.season, r.week)):
        seq = out.setdefault((res.participant_id, res.season), [])
        if kind in ("median", "combined"):
            seq.append((res.week, "W" if res.median_win else "L"))
        if kind in ("h2h", "combined"):
            seq.append((res.week, "W" if res.head_to_head_win else "L"))
    return out


def current_streak(res_list: list[Outcome], through_week: int) -> tuple[str, int, int, int]:
    filtered = [t for t in res_list if t[0] <= through_week]
    if not filtered:
        return ("none", 0, 0, through_week)
    streak_type = filtered[-1][1]
    length = 0
    start_wk = through_week
    for week, res in reversed(filtered):
        if res != streak_type:
            break
        length += 1
        start_wk = week
    return (streak_type, length, start_wk, through_week)


def longest_streaks(
    res_list: list[Outcome], through_week: int
) -> tuple[tuple[int, str], tuple[int, str]]:
    """Longest win and loss runs as ``(length, "wA-wB")``; ``(0, "-")`` when absent."""
    best = {"W": (0, "-"), "L": (0, "-")}
    cur_type = None
    cur_len = 0
    cur_start = None
    cur_end = None
    for week, res in (t for t in res_list if t[0] <= through_week):
        if res == cur_type:
            cur_len += 1
        else:
            if cur_type and cur_len > best[cur_type][0]:
                best[cur_type] = (cur_len, f"w{cur_start}-w{cur_end}")
            cur_type, cur_len, cur_start = res, 1, week
        cur_end = week
    if cur_type and cur_len > best[cur_type][0]:
        best[cur_type] = (cur_len, f"w{cur_start}-w{cur_end}")
    return best["W"], best["L"]
