"""Output format helpers for postseason report contexts.

Markdown output is one section per concern (metadata, standings, streaks,
head-to-head, seedings, summary, then each bracket round by round). JSON
output is the context's structured payload with no presentation artifacts.
"""

from __future__ import annotations
import json

from ffbracket.playoffs.models import BracketRound, Finisher, LowerBracketMode
from .models import PostseasonContext
from .render import md_table


def _finisher_cell(f: Finisher | None) -> str:
    if f is None:
        return "-"
    return f"{f.name} (#{f.seed})"


def _round_lines(title: str, rounds: list[BracketRound]) -> list[str]:
    if not rounds:
        return []
    lines = [f"## {title}", ""]
    for rnd in rounds:
        lines.append(f"### {rnd.round_label} (Week {rnd.week})")
        lines.append("")
        rows = []
        for m in rnd.matchups:
            winner = m.winner
            rows.append(
                [
                    m.matchup_id,
                    m.round_label,
                    f"#{m.team1.seed} {m.team1.name}",
                    m.team1.points,
                    f"#{m.team2.seed} {m.team2.name}",
                    m.team2.points,
                    winner.name if winner else None,
                    m.is_two_week_span,
                ]
            )
        lines.extend(
            md_table(
                ["matchup_id", "round", "team1", "points1", "team2", "points2", "winner", "two_week"],
                rows,
                numeric=(3, 5),
            )
        )
        if rnd.byes:
            lines.append("")
            lines.append("Byes: " + ", ".join(f"#{b.seed} {b.name}" for b in rnd.byes))
        lines.append("")
    return lines


def format_markdown(ctx: PostseasonContext) -> str:
    res = ctx.result
    lines: list[str] = [f"# Postseason Report {ctx.season}", ""]
    lines.extend(md_table(["key", "value"], ctx.meta_rows()))
    lines.append("")

    lines.append("## Standings" + (" (incl. playoffs)" if ctx.include_playoffs else ""))
    lines.append("")
    lines.extend(
        md_table(
            ["rank", "participant", "combined", "h2h", "median", "all_play", "pf", "pa", "weeks"],
            [
                [
                    s.rank,
                    ctx.name_of(s.entry.participant_id),
                    f"{s.entry.combined_wins}-{s.entry.combined_losses}",
                    f"{s.entry.h2h_wins}-{s.entry.h2h_losses}",
                    f"{s.entry.median_wins}-{s.entry.median_losses}",
                    f"{s.entry.all_play_wins}-{s.entry.all_play_losses}",
                    s.entry.points_for,
                    s.entry.points_against,
                    s.entry.weeks_played,
                ]
                for s in ctx.standings
            ],
            numeric=(0, 6, 7, 8),
        )
    )
    lines.append("")

    if ctx.streak_rows:
        lines.append("## Streaks")
        lines.append("")
        lines.extend(
            md_table(
                ["participant", "current", "longest_win", "win_span", "longest_loss", "loss_span"],
                [
                    [
                        r["name"],
                        r["current"],
                        r["longest_win"],
                        r["longest_win_span"],
                        r["longest_loss"],
                        r["longest_loss_span"],
                    ]
                    for r in ctx.streak_rows
                ],
            )
        )
        lines.append("")

    if ctx.h2h_rows:
        lines.append("## Head-to-Head")
        lines.append("")
        lines.extend(
            md_table(
                ["participant", "opponent", "games", "record", "win_pct", "pf", "pa", "avg_margin"],
                [
                    [
                        r["name"],
                        r["opponent"],
                        r["games"],
                        f"{r['wins']}-{r['losses']}",
                        f"{r['win_pct']:.3f}",
                        r["points_for"],
                        r["points_against"],
                        r["avg_margin"],
                    ]
                    for r in ctx.h2h_rows
                ],
                numeric=(2, 4, 5, 6, 7),
            )
        )
        lines.append("")

    lines.append("## Seedings")
    lines.append("")
    lines.extend(
        md_table(
            ["seed", "participant", "combined_wins", "points_for", "bracket", "bye"],
            [
                [s.rank, s.name, s.combined_wins, s.points_for, s.bracket.value, s.has_bye]
                for s in res.seedings
            ],
            numeric=(0, 2, 3),
        )
    )
    lines.append("")

    lines.append("## Summary")
    lines.append("")
    lines.extend(
        md_table(
            ["placement", "participant"],
            [
                ["champion", _finisher_cell(res.summary.champion)],
                ["runner_up", _finisher_cell(res.summary.runner_up)],
                ["third_place", _finisher_cell(res.summary.third_place)],
                ["last_place", _finisher_cell(res.summary.toilet_bowl_loser)],
            ],
        )
    )
    lines.append("")

    lines.extend(_round_lines("Playoff Bracket", res.upper_bracket))
    lines.extend(_round_lines("Placement Games", res.placement_games))
    consolation = res.format.lower_bracket_mode is LowerBracketMode.CONSOLATION
    lower_title = "Consolation Bracket" if consolation else "Toilet Bowl"
    lines.extend(_round_lines(lower_title, res.lower_bracket))
    return "\n".join(lines).rstrip("\n") + "\n"


def format_json(ctx: PostseasonContext, schema_version: str, *, pretty: bool = False) -> str:
    """Render context to JSON.

    Args:
        schema_version: Stamped into the payload.
        pretty: Indent output.
    """
    payload = ctx.to_json_payload(schema_version)
    if pretty:
        return json.dumps(payload, indent=2)
    return json.dumps(payload, separators=(",", ":"))
