import pytest
import yaml


def _week(*games):
    rows = []
    for mid, (a, pa, b, pb) in enumerate(games, start=1):
        rows.append({"roster_id": a, "matchup_id": mid, "points": pa})
        rows.append({"roster_id": b, "matchup_id": mid, "points": pb})
    return rows


@pytest.fixture
def league_doc():
    """Four-team league, two-team playoff starting week 3.

    Regular season seeds: 1 (Alice), 3 (Cara), 2 (Bob), 4 (Dev). Week 3 is the
    postseason: Cara beats Alice for the title and Bob loses the toilet bowl.
    """
    return {
        "league_id": "L1",
        "names": {1: "Alice", 2: "Bob", 3: "Cara", 4: "Dev"},
        "seasons": {
            2024: {
                "settings": {"playoff_week_start": 3, "playoff_teams": 2, "total_rosters": 4},
                "weeks": {
                    1: _week((1, 130, 2, 100), (3, 120, 4, 90)),
                    2: _week((1, 125, 4, 80), (3, 115, 2, 105)),
                    3: _week((1, 100, 3, 110), (2, 90, 4, 95)),
                },
            }
        },
    }


@pytest.fixture
def league_file(tmp_path, league_doc):
    path = tmp_path / "league.yaml"
    path.write_text(yaml.safe_dump(league_doc), encoding="utf-8")
    return path
