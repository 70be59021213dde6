from . import bracket, classify, models, pipeline, seeding

PlayoffFormat = models.PlayoffFormat
RoundSpanMode = models.RoundSpanMode
LowerBracketMode = models.LowerBracketMode
BracketKind = models.BracketKind
PlayoffMatchup = models.PlayoffMatchup
ClassifiedMatchup = models.ClassifiedMatchup
PostseasonResult = models.PostseasonResult

bye_seeds = seeding.bye_seeds
calculate_seedings = seeding.calculate_seedings
classify_matchups = classify.classify_matchups
group_by_bracket = bracket.group_by_bracket
determine_summary = bracket.determine_summary
build_playoff_matchups = pipeline.build_playoff_matchups
resolve_postseason = pipeline.resolve_postseason

__all__ = [
    "PlayoffFormat",
    "RoundSpanMode",
    "LowerBracketMode",
    "BracketKind",
    "PlayoffMatchup",
    "ClassifiedMatchup",
    "PostseasonResult",
    "bye_seeds",
    "calculate_seedings",
    "classify_matchups",
    "group_by_bracket",
    "determine_summary",
    "build_playoff_matchups",
    "resolve_postseason",
]
