from __future__ import annotations

from typing import Iterable, Sequence

from ffbracket.constants import (
    CHAMPIONSHIP_LABEL,
    CONSOLATION_LAST_PLACE_LABELS,
    THIRD_PLACE_LABEL,
    TOILET_BOWL_LAST_PLACE_LABELS,
)
from ffbracket.playoffs.models import (
    BracketKind,
    BracketRound,
    Bye,
    ClassifiedMatchup,
    Finisher,
    LowerBracketMode,
    MatchupSide,
    PlayoffFormat,
    Seed,
    Summary,
)
from ffbracket.playoffs.seeding import bye_seeds


def _rounds(matchups: Iterable[ClassifiedMatchup]) -> list[BracketRound]:
    by_week: dict[int, BracketRound] = {}
    for m in matchups:
        rnd = by_week.get(m.week)
        if rnd is None:
            # A week's round takes the label of its first game
            rnd = by_week[m.week] = BracketRound(round_label=m.round_label, week=m.week)
        rnd.matchups.append(m)
    return [by_week[wk] for wk in sorted(by_week)]


def group_by_bracket(
    classified: Sequence[ClassifiedMatchup], fmt: PlayoffFormat, seedings: Sequence[Seed]
) -> tuple[list[BracketRound], list[BracketRound], list[BracketRound]]:
    """Split classified games into (upper, placement, lower) rounds keyed by week.

    Byes attach only to the upper round played in the first playoff week.
    """
    upper = _rounds(m for m in classified if m.bracket is BracketKind.UPPER)
    placement = _rounds(m for m in classified if m.bracket is BracketKind.PLACEMENT)
    lower = _rounds(m for m in classified if m.bracket is BracketKind.LOWER)

    byes = set(bye_seeds(fmt.playoff_team_count))
    if byes:
        for rnd in upper:
            if rnd.week == fmt.playoff_week_start:
                rnd.byes = [
                    Bye(seed=s.rank, participant_id=s.participant_id, name=s.name)
                    for s in seedings
                    if s.rank in byes
                ]
                break
    return upper, placement, lower


def _finisher(side: MatchupSide | None) -> Finisher | None:
    if side is None:
        return None
    return Finisher(participant_id=side.participant_id, name=side.name, seed=side.seed)


def _last_decided(
    classified: Sequence[ClassifiedMatchup], labels: Iterable[str]
) -> ClassifiedMatchup | None:
    wanted = set(labels)
    found = None
    for m in classified:
        if m.round_label in wanted and m.winner is not None and not m.is_first_leg:
            found = m
    return found


def determine_summary(classified: Sequence[ClassifiedMatchup], fmt: PlayoffFormat) -> Summary:
    """Champion, runner-up, third place and last place from terminal games.

    Any field whose deciding game is missing, undecided, or only a first leg
    stays None.
    """
    summary = Summary()

    final = _last_decided(classified, (CHAMPIONSHIP_LABEL,))
    if final is not None:
        summary.champion = _finisher(final.winner)
        summary.runner_up = _finisher(final.loser)

    third = _last_decided(classified, (THIRD_PLACE_LABEL,))
    if third is not None:
        summary.third_place = _finisher(third.winner)

    last_labels = (
        CONSOLATION_LAST_PLACE_LABELS
        if fmt.lower_bracket_mode is LowerBracketMode.CONSOLATION
        else TOILET_BOWL_LAST_PLACE_LABELS
    )
    cellar = _last_decided(
        [m for m in classified if m.bracket is BracketKind.LOWER], last_labels
    )
    if cellar is not None:
        # The loser of the punishment game finishes last
        summary.toilet_bowl_loser = _finisher(cellar.loser)
    return summary
