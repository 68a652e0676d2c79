"""In-memory store for competitors and fights."""

import logging

from weighmatch import Bout, Competitor, MatchRecord
from weighmatch.matching import run_matching

log = logging.getLogger(__name__)


class Roster:
    """Holds the registered competitors and the current fight list.

    Competitor ids are assigned from 1 in registration order and restart
    at 1 after clear_competitors().
    """

    def __init__(self) -> None:
        self._competitors: dict[int, Competitor] = {}
        self._matches: list[MatchRecord] = []
        self._next_id = 1

    def add_competitor(
        self,
        name: str,
        team: str,
        weight: int,
        priority: bool = False,
    ) -> Competitor:
        """Register a competitor under the next free id."""
        competitor = Competitor(
            competitor_id=self._next_id,
            name=name,
            team=team,
            weight=weight,
            priority=priority,
        )
        self._competitors[competitor.competitor_id] = competitor
        self._next_id += 1
        return competitor

    def delete_competitor(self, competitor_id: int) -> None:
        """Remove a competitor; unknown ids are ignored."""
        self._competitors.pop(competitor_id, None)

    def clear_competitors(self) -> None:
        """Remove all competitors and restart ids at 1."""
        self._competitors.clear()
        self._next_id = 1

    def list_competitors(self) -> list[Competitor]:
        """Return all competitors in registration order."""
        return list(self._competitors.values())

    def replace_matches(self, records: list[MatchRecord]) -> None:
        """Discard the stored fights and store records instead."""
        self._matches = list(records)

    def clear_matches(self) -> None:
        """Discard all stored fights."""
        self._matches = []

    def list_matches(self) -> list[MatchRecord]:
        """Return the stored fights in fight order."""
        return list(self._matches)

    def matches_with_competitors(self) -> list[Bout]:
        """Join stored fights with their competitors.

        Fights referring to a competitor that has since been deleted are
        left out.
        """
        bouts: list[Bout] = []
        for record in self._matches:
            a = self._competitors.get(record.competitor_a)
            b = self._competitors.get(record.competitor_b)
            if a is None or b is None:
                continue
            bouts.append(Bout(record=record, competitor_a=a, competitor_b=b))
        return bouts


def process_matches(roster: Roster) -> list[Bout]:
    """Compute a fresh fight list for all competitors in the roster.

    Previously stored fights are replaced.

    Args:
        roster: Roster to read competitors from and store fights into.

    Returns:
        The new fights joined with their competitors.
    """
    competitors = roster.list_competitors()
    records = run_matching(competitors)
    roster.replace_matches(records)

    if not records:
        log.info("Keine Kaempfe moeglich fuer %d Teilnehmer", len(competitors))
    return roster.matches_with_competitors()
