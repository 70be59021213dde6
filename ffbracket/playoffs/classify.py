"""Postseason bracket classification.

Walks postseason games in week order and assigns each to the upper bracket
(championship ladder), a placement game, or the lower bracket, along with a
round label. Elimination state carries from one round into the next, so the
walk is strictly sequential.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Hashable, Iterable, Mapping

from ffbracket.constants import UNSEEDED
from ffbracket.playoffs.models import (
    BracketKind,
    ClassifiedMatchup,
    LowerBracketMode,
    MatchupSide,
    PlayoffFormat,
    PlayoffMatchup,
    RoundSpanMode,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BracketState:
    # Knocked out of the championship ladder; eligible for placement games
    upper_bracket_losers: set[Hashable] = field(default_factory=set)
    # Toilet bowl: winners safe from the punishment game.
    # Consolation: losers eliminated from advancing.
    lower_bracket_safe: set[Hashable] = field(default_factory=set)


def round_name(round_number: int, total_rounds: int, playoff_team_count: int) -> str:
    rounds_from_end = total_rounds - round_number + 1
    if rounds_from_end == 1:
        return "Championship"
    if rounds_from_end == 2:
        return "Semifinal"
    if rounds_from_end == 3:
        return "Quarterfinal" if playoff_team_count >= 8 else "Wildcard"
    if rounds_from_end == 4:
        return "Wildcard"
    return f"Round {round_number}"


def upper_round_label(week: int, fmt: PlayoffFormat) -> str:
    physical = fmt.physical_round(week)
    total = fmt.total_rounds
    if fmt.round_span_mode is RoundSpanMode.TWO_WEEK_CHAMPIONSHIP and physical >= total:
        return "Championship"
    return round_name(fmt.round_number(week), total, fmt.playoff_team_count)


def lower_round_label(
    round_number: int,
    fmt: PlayoffFormat,
    team1_id: Hashable,
    team2_id: Hashable,
    safe: set[Hashable],
) -> str:
    consolation = fmt.lower_bracket_mode is LowerBracketMode.CONSOLATION
    bracket_name = "Consolation" if consolation else "Toilet Bowl"
    teams = fmt.lower_bracket_team_count

    if teams == 2:
        return f"{bracket_name} Final"
    if teams == 4:
        if round_number == 1:
            return f"{bracket_name} Round 1"
        # The set holds round-1 losers in consolation mode and round-1 winners in toilet mode
        if consolation:
            both_lost = team1_id in safe and team2_id in safe
            return "9th Place" if both_lost else "7th Place"
        both_lost = team1_id not in safe and team2_id not in safe
        # Toilet-bowl winners risk the cellar; losers meeting here decide last place
        return "Last Place" if both_lost else "8th Place"
    return f"{bracket_name} Round {round_number}"


def placement_label(round_number: int) -> str:
    # Fixed by round, not derived from bracket topology
    if round_number == 2:
        return "5th Place"
    if round_number == 3:
        return "3rd Place"
    return "Place Game"


def _winner_by_points(m: PlayoffMatchup, team1_total: float, team2_total: float) -> Hashable | None:
    if team1_total > team2_total:
        return m.team1_id
    if team2_total > team1_total:
        return m.team2_id
    return None


def classify_matchups(
    matchups: Iterable[PlayoffMatchup],
    seeds: Mapping[Hashable, int],
    fmt: PlayoffFormat,
    names: Mapping[Hashable, str] | None = None,
) -> list[ClassifiedMatchup]:
    names = names or {}
    state = BracketState()
    first_legs: dict[tuple[int, frozenset], PlayoffMatchup] = {}
    result: list[ClassifiedMatchup] = []

    # Stable sort keeps same-week games in input order
    for m in sorted(matchups, key=lambda x: x.week):
        seed1 = seeds.get(m.team1_id, UNSEEDED)
        seed2 = seeds.get(m.team2_id, UNSEEDED)
        for pid, seed in ((m.team1_id, seed1), (m.team2_id, seed2)):
            if seed == UNSEEDED:
                logger.debug(f"Participant {pid} has no seed; using {UNSEEDED}")

        round_number = fmt.round_number(m.week)
        two_week = fmt.spans_two_weeks(m.week)
        first_leg = two_week and fmt.is_first_leg(m.week)

        winner_id = m.winner_id
        aggregate = None
        pair_key = (round_number, frozenset((m.team1_id, m.team2_id)))
        if first_leg:
            first_legs[pair_key] = m
        elif two_week and pair_key in first_legs:
            prev = first_legs.pop(pair_key)
            prev_t1 = prev.team1_points if prev.team1_id == m.team1_id else prev.team2_points
            prev_t2 = prev.team2_points if prev.team2_id == m.team2_id else prev.team1_points
            aggregate = (prev_t1 + m.team1_points, prev_t2 + m.team2_points)
            winner_id = _winner_by_points(m, *aggregate)

        loser_id = None
        if winner_id is not None:
            loser_id = m.team2_id if winner_id == m.team1_id else m.team1_id
        settled = loser_id is not None and not first_leg

        is_lower = seed1 > fmt.playoff_team_count and seed2 > fmt.playoff_team_count
        is_placement = (
            not is_lower
            and m.team1_id in state.upper_bracket_losers
            and m.team2_id in state.upper_bracket_losers
        )

        if is_lower:
            bracket = BracketKind.LOWER
            label = lower_round_label(
                round_number, fmt, m.team1_id, m.team2_id, state.lower_bracket_safe
            )
            if settled:
                if fmt.lower_bracket_mode is LowerBracketMode.TOILET_BOWL:
                    state.lower_bracket_safe.add(winner_id)
                else:
                    state.lower_bracket_safe.add(loser_id)
        elif is_placement:
            bracket = BracketKind.PLACEMENT
            label = placement_label(round_number)
        else:
            bracket = BracketKind.UPPER
            label = upper_round_label(m.week, fmt)
            if settled:
                state.upper_bracket_losers.add(loser_id)

        winner_seed = 0
        if winner_id is not None:
            winner_seed = seed1 if winner_id == m.team1_id else seed2

        result.append(
            ClassifiedMatchup(
                week=m.week,
                matchup_id=m.matchup_id,
                bracket=bracket,
                round_label=label,
                round_number=round_number,
                is_two_week_span=two_week,
                team1=MatchupSide(
                    participant_id=m.team1_id,
                    name=names.get(m.team1_id, f"Roster {m.team1_id}"),
                    seed=seed1,
                    points=m.team1_points,
                    is_winner=winner_id is not None and winner_id == m.team1_id,
                ),
                team2=MatchupSide(
                    participant_id=m.team2_id,
                    name=names.get(m.team2_id, f"Roster {m.team2_id}"),
                    seed=seed2,
                    points=m.team2_points,
                    is_winner=winner_id is not None and winner_id == m.team2_id,
                ),
                point_differential=abs(m.team1_points - m.team2_points),
                winner_seed=winner_seed,
                aggregate_points=aggregate,
                is_first_leg=first_leg,
            )
        )
    return result
