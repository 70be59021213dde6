import json

from ffbracket.config import parse_league_document
from ffbracket.constants import SCHEMA_VERSION
from ffbracket.report import build_postseason_context, format_json, format_markdown

EXPECTED_PAYLOAD_KEYS = {
    "schema_version", "metadata", "standings", "streaks", "head_to_head", "seedings", "summary",
    "upper_bracket", "placement_games", "lower_bracket",
}


def test_context_uses_regular_season_for_standings(league_doc):
    ctx = build_postseason_context(parse_league_document(league_doc), 2024)
    assert [s.entry.participant_id for s in ctx.standings] == [1, 3, 2, 4]
    assert all(s.entry.weeks_played == 2 for s in ctx.standings)
    assert [s.participant_id for s in ctx.result.seedings] == [1, 3, 2, 4]


def test_context_can_fold_in_playoff_weeks(league_doc):
    ctx = build_postseason_context(parse_league_document(league_doc), 2024, include_playoffs=True)
    assert ctx.standings[0].entry.participant_id == 3
    assert ctx.standings[0].entry.weeks_played == 3
    # Seeding ignores the flag
    assert ctx.result.seedings[0].participant_id == 1


def test_summary_and_streaks(league_doc):
    ctx = build_postseason_context(parse_league_document(league_doc), 2024)
    summary = ctx.result.summary
    assert summary.champion.name == "Cara"
    assert summary.runner_up.name == "Alice"
    assert summary.toilet_bowl_loser.name == "Bob"
    assert summary.third_place is None
    alice = next(r for r in ctx.streak_rows if r["participant_id"] == 1)
    assert alice["current"] == "W4"
    assert alice["longest_win_span"] == "w1-w2"


def test_markdown_sections(league_doc):
    ctx = build_postseason_context(parse_league_document(league_doc), 2024)
    lines = format_markdown(ctx).splitlines()
    assert lines[0] == "# Postseason Report 2024"
    for header in ("## Standings", "## Streaks", "## Head-to-Head", "## Seedings", "## Summary", "## Playoff Bracket", "## Toilet Bowl"):
        assert header in lines, f"Missing section: {header}"
    assert "## Placement Games" not in lines
    assert "### Championship (Week 3)" in lines
    assert "### Toilet Bowl Final (Week 3)" in lines
    assert "| champion | Cara (#2) |" in lines
    assert "| last_place | Bob (#3) |" in lines


def test_json_payload(league_doc):
    ctx = build_postseason_context(parse_league_document(league_doc), 2024)
    payload = json.loads(format_json(ctx, SCHEMA_VERSION))
    assert set(payload) == EXPECTED_PAYLOAD_KEYS
    assert payload["schema_version"] == SCHEMA_VERSION
    meta = payload["metadata"]
    assert meta["league_id"] == "L1"
    assert meta["num_teams"] == 4
    assert meta["playoff_teams"] == 2
    assert meta["lower_bracket"] == "toilet-bowl"
    assert payload["summary"]["champion"]["participant_id"] == 3
    assert payload["standings"][0]["name"] == "Alice"
    (final,) = payload["upper_bracket"][0]["matchups"]
    assert final["round_label"] == "Championship"
    assert final["winner_seed"] == 2
    assert "\n" not in format_json(ctx, SCHEMA_VERSION)
    assert "\n" in format_json(ctx, SCHEMA_VERSION, pretty=True)


def test_head_to_head_rows_follow_standings_weeks(league_doc):
    cfg = parse_league_document(league_doc)
    ctx = build_postseason_context(cfg, 2024)
    assert len(ctx.h2h_rows) == 8
    alice_bob = next(r for r in ctx.h2h_rows if (r["participant_id"], r["opponent_id"]) == (1, 2))
    assert (alice_bob["name"], alice_bob["opponent"]) == ("Alice", "Bob")
    assert (alice_bob["games"], alice_bob["wins"]) == (1, 1)
    # Week 3 adds the title game between Alice and Cara
    with_playoffs = build_postseason_context(cfg, 2024, include_playoffs=True)
    alice_cara = next(r for r in with_playoffs.h2h_rows if (r["participant_id"], r["opponent_id"]) == (1, 3))
    assert (alice_cara["games"], alice_cara["losses"]) == (1, 1)
