import json

import pytest

from ffbracket.config import load_league_config, parse_league_document
from ffbracket.constants import DEFAULT_PLAYOFF_WEEK_START
from ffbracket.errors import ConfigError, DataError
from ffbracket.playoffs.models import LowerBracketMode, PlayoffFormat, RoundSpanMode

LEAGUE_YAML = """\
league_id: "1180276953741729792"
names:
  1: Alice
  "2": Bob
seasons:
  2024:
    settings:
      playoff_week_start: 15
      playoff_teams: 6
      total_rosters: 10
      playoff_round_type: 1
      loser_bracket_type: 1
    weeks:
      1:
        - {roster_id: 1, matchup_id: 1, points: 101.5}
        - {roster_id: 2, matchup_id: 1, points: 99.0}
"""


def test_from_settings_defaults():
    fmt = PlayoffFormat.from_settings(None)
    assert fmt.playoff_week_start == DEFAULT_PLAYOFF_WEEK_START
    assert fmt.playoff_team_count == 6
    assert fmt.total_participants == 10
    assert fmt.round_span_mode is RoundSpanMode.SINGLE_WEEK
    assert fmt.reseed_each_round is False
    assert fmt.lower_bracket_mode is LowerBracketMode.TOILET_BOWL
    assert fmt.lower_bracket_team_count == 4


def test_from_settings_codes_and_names():
    fmt = PlayoffFormat.from_settings(
        {"playoff_round_type": 2, "playoff_seed_type": 1, "loser_bracket_type": "1"}
    )
    assert fmt.round_span_mode is RoundSpanMode.TWO_WEEK_ALL_ROUNDS
    assert fmt.reseed_each_round is True
    assert fmt.lower_bracket_mode is LowerBracketMode.CONSOLATION

    named = PlayoffFormat.from_settings(
        {"playoff_round_type": "two-week-championship", "loser_bracket_type": "Toilet-Bowl"}
    )
    assert named.round_span_mode is RoundSpanMode.TWO_WEEK_CHAMPIONSHIP
    assert named.lower_bracket_mode is LowerBracketMode.TOILET_BOWL


@pytest.mark.parametrize(
    "settings",
    [
        {"playoff_round_type": 3},
        {"loser_bracket_type": "losers-bracket"},
        {"playoff_teams": "six"},
        {"playoff_teams": 12, "total_rosters": 10},
        {"playoff_week_start": 0},
        {"total_rosters": 1, "playoff_teams": 0},
    ],
)
def test_from_settings_rejects_bad_values(settings):
    with pytest.raises(ConfigError):
        PlayoffFormat.from_settings(settings)


def test_config_error_is_value_error():
    assert issubclass(ConfigError, ValueError)
    assert issubclass(DataError, ValueError)


def test_describe_reports_mode_values():
    d = PlayoffFormat.from_settings({"playoff_seed_type": 1}).describe()
    assert d["round_type"] == "single-week"
    assert d["seed_type"] == "re-seed"
    assert d["lower_bracket"] == "toilet-bowl"


def test_load_yaml_document(tmp_path):
    path = tmp_path / "league.yaml"
    path.write_text(LEAGUE_YAML, encoding="utf-8")
    cfg = load_league_config(path)
    assert cfg.league_id == "1180276953741729792"
    assert cfg.names == {1: "Alice", 2: "Bob"}
    fmt = cfg.format_for(2024)
    assert fmt.round_span_mode is RoundSpanMode.TWO_WEEK_CHAMPIONSHIP
    assert fmt.lower_bracket_mode is LowerBracketMode.CONSOLATION
    assert cfg.playoff_start_map() == {2024: 15}
    assert len(cfg.season_rows(2024)[1]) == 2
    assert cfg.season_rows(2023) == {}


def test_load_json_document(tmp_path):
    doc = {
        "league_id": "abc",
        "seasons": {"2023": {"settings": {"playoff_week_start": 14}, "weeks": {"3": []}}},
    }
    path = tmp_path / "league.json"
    path.write_text(json.dumps(doc), encoding="utf-8")
    cfg = load_league_config(path)
    assert cfg.format_for(2023).playoff_week_start == 14
    assert cfg.season_rows(2023) == {3: []}


def test_missing_season_raises_data_error():
    cfg = parse_league_document({"league_id": "x", "seasons": {2024: {}}})
    with pytest.raises(DataError, match="2022"):
        cfg.format_for(2022)


@pytest.mark.parametrize(
    "doc",
    [
        ["not", "a", "mapping"],
        {"seasons": ["2024"]},
        {"seasons": {"twenty": {}}},
        {"seasons": {2024: "body"}},
        {"seasons": {2024: {"weeks": [1, 2]}}},
        {"seasons": {2024: {"weeks": {0: []}}}},
        {"seasons": {2024: {"weeks": {1: {"roster_id": 1}}}}},
    ],
)
def test_malformed_documents_raise_data_error(doc):
    with pytest.raises(DataError):
        parse_league_document(doc)


def test_unparseable_yaml_raises_data_error(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("seasons: [unclosed\n", encoding="utf-8")
    with pytest.raises(DataError):
        load_league_config(path)


def test_missing_file_raises_os_error(tmp_path):
    with pytest.raises(OSError):
        load_league_config(tmp_path / "nope.yaml")
