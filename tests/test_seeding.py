import pytest

from ffbracket.compute.standings import StandingsEntry, standings_sort_key
from ffbracket.playoffs.models import BracketKind, PlayoffFormat
from ffbracket.playoffs.seeding import bye_seeds, calculate_seedings, seed_map


def _entries(n=10):
    # Participant i finishes i-th: fewer wins the higher the id
    return [
        StandingsEntry(pid, 2024, h2h_wins=n - pid, median_wins=n - pid, points_for=1000.0 - pid)
        for pid in range(1, n + 1)
    ]


@pytest.mark.parametrize(
    "teams,expected",
    [(6, {1, 2}), (4, set()), (8, set()), (2, set()), (5, {1, 2}), (10, {1, 2})],
)
def test_bye_seed_policy(teams, expected):
    assert set(bye_seeds(teams)) == expected


def test_seedings_are_dense_and_split_at_cutline():
    fmt = PlayoffFormat(playoff_team_count=6, total_participants=10)
    seeds = calculate_seedings(reversed(_entries()), fmt, {1: "Alice"})
    assert [s.rank for s in seeds] == list(range(1, 11))
    assert [s.participant_id for s in seeds] == list(range(1, 11))
    assert [s.bracket for s in seeds] == [BracketKind.UPPER] * 6 + [BracketKind.LOWER] * 4
    assert [s.rank for s in seeds if s.has_bye] == [1, 2]
    assert seeds[0].name == "Alice"
    assert seeds[1].name == "Roster 2"


def test_seedings_idempotent():
    fmt = PlayoffFormat(playoff_team_count=4, total_participants=10)
    first = calculate_seedings(_entries(), fmt)
    again = calculate_seedings(_entries(), fmt)
    assert [s.to_dict() for s in first] == [s.to_dict() for s in again]
    assert not any(s.has_bye for s in first)


def test_points_for_breaks_win_ties():
    fmt = PlayoffFormat(playoff_team_count=2, total_participants=4)
    entries = [
        StandingsEntry("x", 2024, h2h_wins=3, points_for=900.0),
        StandingsEntry("y", 2024, h2h_wins=3, points_for=950.0),
        StandingsEntry("z", 2024, h2h_wins=4, points_for=800.0),
    ]
    assert seed_map(calculate_seedings(entries, fmt)) == {"z": 1, "y": 2, "x": 3}


def test_seed_order_is_stable_under_resort():
    fmt = PlayoffFormat(playoff_team_count=4, total_participants=6)
    entries = [
        StandingsEntry("a", 2024, h2h_wins=5, points_for=900.0),
        StandingsEntry("b", 2024, h2h_wins=6, points_for=850.0),
        StandingsEntry("c", 2024, h2h_wins=5, points_for=900.0),
        StandingsEntry("d", 2024, h2h_wins=5, points_for=950.0),
        StandingsEntry("e", 2024, h2h_wins=2, points_for=990.0),
        StandingsEntry("f", 2024, h2h_wins=2, points_for=990.0),
    ]
    by_id = {e.participant_id: e for e in entries}
    seeds = calculate_seedings(entries, fmt)
    order = [s.participant_id for s in seeds]
    assert order == ["b", "d", "a", "c", "e", "f"]

    resorted = sorted((by_id[pid] for pid in order), key=standings_sort_key)
    assert [e.participant_id for e in resorted] == order
    again = calculate_seedings([by_id[pid] for pid in order], fmt)
    assert [(s.rank, s.participant_id) for s in again] == [(s.rank, s.participant_id) for s in seeds]
