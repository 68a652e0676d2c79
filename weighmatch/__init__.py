"""Core module for weight-matcher."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Competitor:
    """Represents a registered competitor (one line of the entry list)."""

    competitor_id: int
    name: str
    team: str
    weight: int
    priority: bool = False


@dataclass(frozen=True)
class MatchRecord:
    """A single fight produced by the matching engine."""

    fight_number: int
    competitor_a: int     # competitor_id
    competitor_b: int     # competitor_id
    weight_class: int     # max of both weights
    match_type: str       # exact, tolerance


@dataclass
class Bout:
    """A MatchRecord joined with both competitors, for reports."""

    record: MatchRecord
    competitor_a: Competitor
    competitor_b: Competitor
