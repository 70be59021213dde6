from __future__ import annotations

from typing import Hashable, Iterable, Mapping

from ffbracket.compute.standings import StandingsEntry, standings_sort_key
from ffbracket.constants import BYE_SEEDS, DEFAULT_BYE_SEEDS
from ffbracket.playoffs.models import BracketKind, PlayoffFormat, Seed


def bye_seeds(playoff_team_count: int) -> tuple[int, ...]:
    """Seeds that skip the first playoff round.

    Policy table, not bracket math: 6 teams -> (1, 2); 4, 8 or 2 teams -> none;
    any other count -> (1, 2).
    """
    return BYE_SEEDS.get(playoff_team_count, DEFAULT_BYE_SEEDS)


def calculate_seedings(
    entries: Iterable[StandingsEntry],
    fmt: PlayoffFormat,
    names: Mapping[Hashable, str] | None = None,
) -> list[Seed]:
    """Rank regular-season standings into seeds 1..N.

    ``entries`` must already be restricted to weeks before the playoff start.
    """
    names = names or {}
    byes = set(bye_seeds(fmt.playoff_team_count))
    seedings: list[Seed] = []
    for rank, entry in enumerate(sorted(entries, key=standings_sort_key), start=1):
        pid = entry.participant_id
        seedings.append(
            Seed(
                rank=rank,
                participant_id=pid,
                combined_wins=entry.combined_wins,
                points_for=entry.points_for,
                bracket=BracketKind.UPPER if rank <= fmt.playoff_team_count else BracketKind.LOWER,
                has_bye=rank in byes,
                name=names.get(pid, f"Roster {pid}"),
            )
        )
    return seedings


def seed_map(seedings: Iterable[Seed]) -> dict[Hashable, int]:
    return {s.participant_id: s.rank for s in seedings}
