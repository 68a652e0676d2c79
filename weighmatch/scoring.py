"""Eligibility and scoring for competitor pairs (lower score is better)."""

from weighmatch import Competitor

WEIGHT_TOLERANCE = 3
MAX_MATCHES_PER_COMPETITOR = 2

# Added per existing match of either competitor
MATCH_COUNT_PENALTY = 10

BONUSES: dict[str, int] = {
    'priority': 200,
    'priority_exact': 500,
    'exact': 100,
}


def weight_difference(c1: Competitor, c2: Competitor) -> int:
    """Absolute weight difference of two competitors."""
    return abs(c1.weight - c2.weight)


def is_eligible(c1: Competitor, c2: Competitor, counts: dict[int, int]) -> bool:
    """Check whether two competitors may be paired in the current state.

    Args:
        c1: First competitor.
        c2: Second competitor.
        counts: Matches already created per competitor_id in this run.

    Returns:
        False for the same competitor, the same team, a competitor at the
        match cap, or a weight difference above the tolerance.
    """
    if c1.competitor_id == c2.competitor_id:
        return False
    if c1.team == c2.team:
        return False
    if counts[c1.competitor_id] >= MAX_MATCHES_PER_COMPETITOR:
        return False
    if counts[c2.competitor_id] >= MAX_MATCHES_PER_COMPETITOR:
        return False
    return weight_difference(c1, c2) <= WEIGHT_TOLERANCE


def score_pair(
    c1: Competitor,
    c2: Competitor,
    counts: dict[int, int],
) -> int | None:
    """Score a pairing.

    The score starts at the weight difference, grows by
    MATCH_COUNT_PENALTY per match either competitor already has, and
    drops by the BONUSES for priority and exact-weight pairings. A
    priority exact pairing receives all three bonuses.

    Args:
        c1: First competitor.
        c2: Second competitor.
        counts: Matches already created per competitor_id in this run.

    Returns:
        Integer score, or None if the pair is not eligible.
    """
    if not is_eligible(c1, c2, counts):
        return None

    diff = weight_difference(c1, c2)
    score = diff
    score += (counts[c1.competitor_id] + counts[c2.competitor_id]) * MATCH_COUNT_PENALTY

    if c1.priority or c2.priority:
        score -= BONUSES['priority']
        if diff == 0:
            score -= BONUSES['priority_exact']

    if diff == 0:
        score -= BONUSES['exact']

    return score


def classify_match(c1: Competitor, c2: Competitor) -> str:
    """Return 'exact' for equal weights, 'tolerance' otherwise."""
    return 'exact' if c1.weight == c2.weight else 'tolerance'


def weight_class(c1: Competitor, c2: Competitor) -> int:
    """Return the weight class of a pairing (the heavier weight)."""
    return max(c1.weight, c2.weight)
