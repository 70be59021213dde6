from . import h2h, standings, stats, streaks, weekly

median = stats.median
average = stats.average
std_dev = stats.std_dev
all_play = stats.all_play
weekly_rank = stats.weekly_rank
win_pct = stats.win_pct

RosterScore = weekly.RosterScore
ScoreRow = weekly.ScoreRow
WeekResult = weekly.WeekResult
parse_roster_scores = weekly.parse_roster_scores
group_rows = weekly.group_rows
process_week_matchups = weekly.process_week_matchups
process_season = weekly.process_season
summarize_week = weekly.summarize_week

StandingsEntry = standings.StandingsEntry
aggregate_standings = standings.aggregate_standings
filter_regular_season = standings.filter_regular_season
rank_standings = standings.rank_standings

H2HRecord = h2h.H2HRecord
h2h_records = h2h.h2h_records
rank_h2h = h2h.rank_h2h

current_streak = streaks.current_streak
longest_streaks = streaks.longest_streaks
weekly_outcomes = streaks.weekly_outcomes

__all__ = [
    "median",
    "average",
    "std_dev",
    "all_play",
    "weekly_rank",
    "win_pct",
    "RosterScore",
    "ScoreRow",
    "WeekResult",
    "parse_roster_scores",
    "group_rows",
    "process_week_matchups",
    "process_season",
    "summarize_week",
    "StandingsEntry",
    "aggregate_standings",
    "filter_regular_season",
    "rank_standings",
    "H2HRecord",
    "h2h_records",
    "rank_h2h",
    "current_streak",
    "longest_streaks",
    "weekly_outcomes",
]
