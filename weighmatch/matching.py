"""Fixpoint matching engine for competitor pairings."""

import logging

from weighmatch import Competitor, MatchRecord
from weighmatch.ordering import order_competitors
from weighmatch.scoring import (
    MAX_MATCHES_PER_COMPETITOR,
    classify_match,
    score_pair,
    weight_class,
)

log = logging.getLogger(__name__)


def find_best_opponent(
    index: int,
    ordered: list[Competitor],
    counts: dict[int, int],
) -> Competitor | None:
    """Find the lowest-scoring eligible opponent for ordered[index].

    Candidates are scanned in matching order. Only a strictly lower score
    replaces the current best, so the first candidate wins ties.

    Args:
        index: Position of the competitor looking for an opponent.
        ordered: All competitors in matching order.
        counts: Matches already created per competitor_id in this run.

    Returns:
        Best opponent, or None if no eligible opponent exists.
    """
    fighter = ordered[index]
    best: Competitor | None = None
    best_score: int | None = None

    for j, candidate in enumerate(ordered):
        if j == index:
            continue
        score = score_pair(fighter, candidate, counts)
        if score is None:
            continue
        if best_score is None or score < best_score:
            best = candidate
            best_score = score

    return best


def run_matching(competitors: list[Competitor]) -> list[MatchRecord]:
    """Pair competitors into fights.

    Sweeps over the ordered competitors until a full sweep creates no new
    fight. In every sweep each competitor below the match cap gets its best
    eligible opponent. Match counts are updated as soon as a fight is
    created, so later competitors in the same sweep already see them.

    The same two competitors may be paired again in a later sweep; only
    per-competitor counts are tracked, not pairing history.

    Args:
        competitors: Competitor snapshot. Not modified.

    Returns:
        MatchRecords in creation order, fight numbers starting at 1.
    """
    ordered = order_competitors(competitors)
    counts: dict[int, int] = {c.competitor_id: 0 for c in ordered}
    records: list[MatchRecord] = []
    fight_number = 1
    sweeps = 0

    created = True
    while created:
        created = False
        sweeps += 1

        for i, fighter in enumerate(ordered):
            if counts[fighter.competitor_id] >= MAX_MATCHES_PER_COMPETITOR:
                continue

            opponent = find_best_opponent(i, ordered, counts)
            if opponent is None:
                continue

            record = MatchRecord(
                fight_number=fight_number,
                competitor_a=fighter.competitor_id,
                competitor_b=opponent.competitor_id,
                weight_class=weight_class(fighter, opponent),
                match_type=classify_match(fighter, opponent),
            )
            records.append(record)
            log.debug(
                "Kampf %d: %s (%d) vs. %s (%d), %s",
                fight_number, fighter.name, fighter.weight,
                opponent.name, opponent.weight, record.match_type,
            )

            counts[fighter.competitor_id] += 1
            counts[opponent.competitor_id] += 1
            fight_number += 1
            created = True

    log.info(
        "Matching abgeschlossen: %d Kaempfe fuer %d Teilnehmer (%d Durchlaeufe)",
        len(records), len(ordered), sweeps,
    )
    return records
